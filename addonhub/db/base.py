"""Declarative base and tenant_id mixin for AddonHub ORM models."""

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all AddonHub ORM models.

    Every table carries tenant_id (single-instance deployments use
    'default'). Exposes metadata for Alembic.
    """

    tenant_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="default",
        index=True,
        doc="Tenant identifier; single-instance default is 'default'.",
    )
