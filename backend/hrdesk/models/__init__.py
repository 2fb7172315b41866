from sqlmodel import SQLModel

from hrdesk.models.base import TimestampMixin, UUIDBase
from hrdesk.models.enums import (
    AttendanceCategory,
    CivilStatus,
    DayType,
    DenialReason,
    EmploymentType,
    FormType,
    Gender,
    LeaveType,
    LetterType,
    RequestStatus,
    Role,
    ValidationRule,
)
from hrdesk.models.request import HRRequest

__all__ = [
    "AttendanceCategory",
    "CivilStatus",
    "DayType",
    "DenialReason",
    "EmploymentType",
    "FormType",
    "Gender",
    "HRRequest",
    "LeaveType",
    "LetterType",
    "RequestStatus",
    "Role",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
    "ValidationRule",
]
