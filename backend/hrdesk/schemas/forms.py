# ruff: noqa: TC003
"""Per-form request payloads.

Every request kind has two shapes:

* a *draft*, the caller's candidate input. All fields are optional so that a
  missing value is reported by the validator as a ``REQUIRED`` rule failure
  rather than as a schema error, and derived fields are not accepted at all.
* a *details* record, produced only by the validators, with every derived
  field filled in. This is what gets persisted in ``HRRequest.data``.

Both are closed unions discriminated by ``form_type``.
"""

from __future__ import annotations

import datetime as dt
from datetime import date, time
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from hrdesk.models.enums import AttendanceCategory, DayType, FormType, LeaveType, LetterType

_TEXT_MAX = 2000

# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


class LeaveDraft(BaseModel):
    """Candidate leave application."""

    form_type: Literal["LEAVE"] = "LEAVE"
    start_date: date | None = None
    end_date: date | None = None
    leave_type: LeaveType | None = None
    remarks: str | None = Field(default=None, max_length=_TEXT_MAX)
    has_attachment: bool = False


class BusinessTripDraft(BaseModel):
    """Candidate official business trip."""

    form_type: Literal["BUSINESS_TRIP"] = "BUSINESS_TRIP"
    destination: str | None = Field(default=None, max_length=255)
    departure_date: date | None = None
    return_date: date | None = None
    purpose: str | None = Field(default=None, max_length=_TEXT_MAX)


class OvertimeDraft(BaseModel):
    """Candidate overtime filing for a single work date."""

    form_type: Literal["OVERTIME"] = "OVERTIME"
    date: dt.date | None = None  # field name shadows the type
    time_in: time | None = None
    time_out: time | None = None
    day_type: DayType | None = None
    remarks: str | None = Field(default=None, max_length=_TEXT_MAX)


class AttendanceDraft(BaseModel):
    """Candidate attendance regularization."""

    form_type: Literal["ATTENDANCE"] = "ATTENDANCE"
    category: AttendanceCategory | None = None
    from_date: date | None = None
    end_date: date | None = None
    time_in: time | None = None
    time_out: time | None = None
    remarks: str | None = Field(default=None, max_length=_TEXT_MAX)


class LetterDraft(BaseModel):
    """Candidate letter request."""

    form_type: Literal["LETTER"] = "LETTER"
    letter_type: LetterType | None = None
    template_name: str | None = Field(default=None, max_length=255)
    date_needed: date | None = None
    remarks: str | None = Field(default=None, max_length=_TEXT_MAX)


AnyDraft = LeaveDraft | BusinessTripDraft | OvertimeDraft | AttendanceDraft | LetterDraft

RequestDraft = Annotated[AnyDraft, Field(discriminator="form_type")]

# ---------------------------------------------------------------------------
# Validated details
# ---------------------------------------------------------------------------


class LeaveDetails(BaseModel):
    """Accepted leave application with its day count."""

    form_type: Literal["LEAVE"] = "LEAVE"
    start_date: date
    end_date: date
    days: int = Field(ge=1)
    leave_type: LeaveType
    remarks: str | None = None
    has_attachment: bool = False


class BusinessTripDetails(BaseModel):
    form_type: Literal["BUSINESS_TRIP"] = "BUSINESS_TRIP"
    destination: str
    departure_date: date
    return_date: date
    purpose: str


class OvertimeDetails(BaseModel):
    """Accepted overtime filing. ``total_hours`` is duty beyond the 9-hour base shift."""

    form_type: Literal["OVERTIME"] = "OVERTIME"
    date: dt.date
    time_in: time
    time_out: time
    day_type: DayType
    duty_hours: float = Field(ge=0)
    total_hours: float = Field(ge=0)
    remarks: str


class AttendanceDetails(BaseModel):
    """Accepted attendance regularization. Late WFH arrivals carry a marker on ``remarks``."""

    form_type: Literal["ATTENDANCE"] = "ATTENDANCE"
    category: AttendanceCategory
    from_date: date
    end_date: date
    time_in: time | None = None
    time_out: time | None = None
    remarks: str | None = None
    is_late: bool = False


class LetterDetails(BaseModel):
    form_type: Literal["LETTER"] = "LETTER"
    letter_type: LetterType
    template_name: str | None = None
    date_needed: date
    remarks: str | None = None


RequestDetails = Annotated[
    LeaveDetails | BusinessTripDetails | OvertimeDetails | AttendanceDetails | LetterDetails,
    Field(discriminator="form_type"),
]

details_adapter: TypeAdapter[RequestDetails] = TypeAdapter(RequestDetails)

DETAILS_MODELS: dict[FormType, type[BaseModel]] = {
    FormType.LEAVE: LeaveDetails,
    FormType.BUSINESS_TRIP: BusinessTripDetails,
    FormType.OVERTIME: OvertimeDetails,
    FormType.ATTENDANCE: AttendanceDetails,
    FormType.LETTER: LetterDetails,
}
