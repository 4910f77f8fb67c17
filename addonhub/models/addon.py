"""SQLAlchemy model for persisted add-on repository data."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, DateTime, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from addonhub.db import Base

SCREENSHOT_SEPARATOR = "/"


class AddonRecord(Base):
    """Regenerated metadata of one add-on repository at its verified release."""

    __tablename__ = "addon_records"
    __table_args__ = (
        UniqueConstraint("tenant_id", "repo_id", name="uq_addon_records_tenant_repo"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    repo_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    release_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    info_file: Mapped[str] = mapped_column(Text, nullable=False, default="")
    md5: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    screenshots: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def screenshot_names(self) -> list[str]:
        """Stored screenshot names in discovery order."""
        if not self.screenshots:
            return []
        return self.screenshots.split(SCREENSHOT_SEPARATOR)

    @screenshot_names.setter
    def screenshot_names(self, names: list[str]) -> None:
        self.screenshots = SCREENSHOT_SEPARATOR.join(names)
