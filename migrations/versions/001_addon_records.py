"""Add addon_records table.

Revision ID: 001_addon_records
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_addon_records"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "addon_records",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False, server_default="default"),
        sa.Column("repo_id", sa.BigInteger(), nullable=False),
        sa.Column("release_id", sa.BigInteger(), nullable=True),
        sa.Column("info_file", sa.Text(), nullable=False, server_default=""),
        sa.Column("md5", sa.String(32), nullable=False, server_default=""),
        sa.Column("screenshots", sa.Text(), nullable=False, server_default=""),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("tenant_id", "repo_id", name="uq_addon_records_tenant_repo"),
    )
    op.create_index(op.f("ix_addon_records_repo_id"), "addon_records", ["repo_id"])
    op.create_index(op.f("ix_addon_records_tenant_id"), "addon_records", ["tenant_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_addon_records_tenant_id"), table_name="addon_records")
    op.drop_index(op.f("ix_addon_records_repo_id"), table_name="addon_records")
    op.drop_table("addon_records")
