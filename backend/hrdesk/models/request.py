# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from hrdesk.models.base import TimestampMixin, UUIDBase
from hrdesk.models.enums import RequestStatus


class HRRequest(UUIDBase, TimestampMixin, table=True):
    """An employee's HR request: shared envelope plus the per-form details blob."""

    __tablename__ = "hr_request"
    __table_args__ = (
        sa.Index("ix_request_employee_form", "employee_id", "form_type"),
        sa.Index("ix_request_status_created", "status", "created_at"),
    )

    employee_id: uuid.UUID = Field(index=True)
    form_type: str = Field(max_length=50)
    status: str = Field(
        default=RequestStatus.PENDING, max_length=50, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    data: dict[str, Any] = Field(default_factory=dict, sa_type=sa.JSON)
    updated_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    decided_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    decided_by: uuid.UUID | None = None
