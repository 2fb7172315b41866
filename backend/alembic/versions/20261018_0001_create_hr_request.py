"""create hr_request

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "hr_request",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("form_type", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=50), server_default="PENDING", nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_hr_request_created_at", "hr_request", ["created_at"])
    op.create_index("ix_hr_request_employee_id", "hr_request", ["employee_id"])
    op.create_index("ix_hr_request_status", "hr_request", ["status"])
    op.create_index("ix_request_employee_form", "hr_request", ["employee_id", "form_type"])
    op.create_index("ix_request_status_created", "hr_request", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_request_status_created", table_name="hr_request")
    op.drop_index("ix_request_employee_form", table_name="hr_request")
    op.drop_index("ix_hr_request_status", table_name="hr_request")
    op.drop_index("ix_hr_request_employee_id", table_name="hr_request")
    op.drop_index("ix_hr_request_created_at", table_name="hr_request")
    op.drop_table("hr_request")
