# ruff: noqa: TC003
"""Field validators for the five request kinds.

Each validator is a pure function of the draft and a ``ValidationContext``
(the business-local date, the owner's profile and a snapshot of the owner's
requests). It either returns a fully derived details record or raises
``ValidationFailed`` for the first rule the draft breaks.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import TypeVar, assert_never

from hrdesk.exceptions import ValidationFailed
from hrdesk.models.enums import AttendanceCategory, LeaveType, LetterType, ValidationRule
from hrdesk.schemas.forms import (
    AttendanceDetails,
    AttendanceDraft,
    BusinessTripDetails,
    BusinessTripDraft,
    LeaveDetails,
    LeaveDraft,
    LetterDetails,
    LetterDraft,
    OvertimeDetails,
    OvertimeDraft,
    RequestDetails,
    RequestDraft,
)
from hrdesk.services.eligibility import available_leave_types, is_late_exempt
from hrdesk.services.employee import EmployeeProfile
from hrdesk.services.ledger import RequestRecord, is_balance_tracked, remaining_balance

LATE_MARKER = "[LATE RECORDED]"

# Overtime and attendance may be filed for today or up to this many days back.
FILING_WINDOW_DAYS = 7
# Letters need this many days of processing lead time.
LETTER_LEAD_DAYS = 3
# Sick leave of this many days or more needs a medical certificate.
SICK_ATTACHMENT_MIN_DAYS = 2

_MINUTES_PER_DAY = 24 * 60
_BASE_SHIFT_MINUTES = 9 * 60
_MIN_DUTY_MINUTES = 10 * 60
_WFH_LATE_AFTER = time(9, 30)

_T = TypeVar("_T")


@dataclass(frozen=True)
class ValidationContext:
    """Everything a validator may consult besides the draft itself."""

    today: date
    profile: EmployeeProfile
    existing: Sequence[RequestRecord] = ()
    exclude_request_id: uuid.UUID | None = None


# ---------------------------------------------------------------------------
# Derivations
# ---------------------------------------------------------------------------


def leave_days(start_date: date, end_date: date) -> int:
    """Inclusive calendar-day count between two dates."""
    return (end_date - start_date).days + 1


def _minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def duty_minutes(time_in: time, time_out: time) -> int:
    """Elapsed minutes from time-in to time-out, wrapping past midnight."""
    return (_minute_of_day(time_out) - _minute_of_day(time_in)) % _MINUTES_PER_DAY


def overtime_hours(time_in: time, time_out: time) -> tuple[float, float]:
    """Return ``(duty_hours, total_hours)``; overtime starts after the 9th hour of duty."""
    minutes = duty_minutes(time_in, time_out)
    duty_hours = round(minutes / 60, 2)
    total_hours = round(max(0, minutes - _BASE_SHIFT_MINUTES) / 60, 2)
    return duty_hours, total_hours


def is_late_arrival(category: AttendanceCategory, time_in: time | None, position: str | None) -> bool:
    """WFH time-ins after 09:30 are late unless the position is exempt."""
    if category != AttendanceCategory.WORK_FROM_HOME or time_in is None:
        return False
    if _minute_of_day(time_in) <= _minute_of_day(_WFH_LATE_AFTER):
        return False
    return not is_late_exempt(position)


def strip_late_marker(remarks: str | None) -> str | None:
    if remarks is None or not remarks.startswith(LATE_MARKER):
        return remarks
    return remarks[len(LATE_MARKER) :].lstrip(" ") or None


def tag_remarks(remarks: str | None, late: bool) -> str | None:
    """Prefix the late marker, keeping the employee's own remarks after it."""
    base = strip_late_marker(remarks)
    if not late:
        return base
    return f"{LATE_MARKER} {base}" if base else LATE_MARKER


# ---------------------------------------------------------------------------
# Rule helpers
# ---------------------------------------------------------------------------


def _require(value: _T | None, field: str) -> _T:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationFailed(field, ValidationRule.REQUIRED, f"{field} is required")
    return value


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_leave(draft: LeaveDraft, ctx: ValidationContext) -> LeaveDetails:
    start_date = _require(draft.start_date, "start_date")
    end_date = _require(draft.end_date, "end_date")
    leave_type = _require(draft.leave_type, "leave_type")

    if leave_type not in available_leave_types(ctx.profile):
        raise ValidationFailed(
            "leave_type",
            ValidationRule.LEAVE_TYPE_UNAVAILABLE,
            f"{leave_type.value} is not available for this employee",
        )
    if start_date > end_date:
        raise ValidationFailed("end_date", ValidationRule.DATE_ORDER, "Start date must not be later than end date")

    days = leave_days(start_date, end_date)
    if days < 1:
        raise ValidationFailed("days", ValidationRule.INVALID_DURATION, "Leave duration must be at least one day")

    if leave_type == LeaveType.SICK and days >= SICK_ATTACHMENT_MIN_DAYS and not draft.has_attachment:
        raise ValidationFailed(
            "has_attachment",
            ValidationRule.ATTACHMENT_REQUIRED,
            f"A medical certificate is required for sick leave of {SICK_ATTACHMENT_MIN_DAYS} or more days",
        )

    if is_balance_tracked(leave_type):
        remaining = remaining_balance(ctx.existing, ctx.profile.id, leave_type, ctx.exclude_request_id)
        if days > remaining:
            raise ValidationFailed(
                "days",
                ValidationRule.INSUFFICIENT_BALANCE,
                f"Insufficient {leave_type.value} balance: {days} requested, {remaining} available",
            )

    return LeaveDetails(
        start_date=start_date,
        end_date=end_date,
        days=days,
        leave_type=leave_type,
        remarks=_clean(draft.remarks),
        has_attachment=draft.has_attachment,
    )


def validate_business_trip(draft: BusinessTripDraft, ctx: ValidationContext) -> BusinessTripDetails:
    destination = _require(draft.destination, "destination")
    departure_date = _require(draft.departure_date, "departure_date")
    return_date = _require(draft.return_date, "return_date")
    purpose = _require(draft.purpose, "purpose")

    if departure_date > return_date:
        raise ValidationFailed(
            "return_date", ValidationRule.DATE_ORDER, "Departure date must not be later than return date"
        )

    return BusinessTripDetails(
        destination=destination.strip(),
        departure_date=departure_date,
        return_date=return_date,
        purpose=purpose.strip(),
    )


def validate_overtime(draft: OvertimeDraft, ctx: ValidationContext) -> OvertimeDetails:
    work_date = _require(draft.date, "date")
    time_in = _require(draft.time_in, "time_in")
    time_out = _require(draft.time_out, "time_out")
    day_type = _require(draft.day_type, "day_type")
    remarks = _require(draft.remarks, "remarks")

    if work_date > ctx.today:
        raise ValidationFailed("date", ValidationRule.FUTURE_DATE, "Overtime cannot be filed for a future date")
    if work_date < ctx.today - timedelta(days=FILING_WINDOW_DAYS):
        raise ValidationFailed(
            "date",
            ValidationRule.FILING_WINDOW,
            f"Overtime must be filed within {FILING_WINDOW_DAYS} days of the work date",
        )

    duty_hours, total_hours = overtime_hours(time_in, time_out)
    if duty_minutes(time_in, time_out) < _MIN_DUTY_MINUTES:
        raise ValidationFailed(
            "time_out",
            ValidationRule.MIN_DUTY_HOURS,
            f"Overtime needs at least 10 hours of duty; {duty_hours} recorded",
        )
    if total_hours <= 0:
        raise ValidationFailed("time_out", ValidationRule.NO_OVERTIME, "Total overtime hours must be more than 0")

    return OvertimeDetails(
        date=work_date,
        time_in=time_in,
        time_out=time_out,
        day_type=day_type,
        duty_hours=duty_hours,
        total_hours=total_hours,
        remarks=remarks.strip(),
    )


def validate_attendance(draft: AttendanceDraft, ctx: ValidationContext) -> AttendanceDetails:
    category = _require(draft.category, "category")
    from_date = _require(draft.from_date, "from_date")
    end_date = _require(draft.end_date, "end_date")

    if from_date > end_date:
        raise ValidationFailed("end_date", ValidationRule.DATE_ORDER, "From date cannot be later than end date")

    earliest = ctx.today - timedelta(days=FILING_WINDOW_DAYS)
    if from_date < earliest:
        raise ValidationFailed(
            "from_date",
            ValidationRule.FILING_WINDOW,
            f"Regularization cannot cover dates more than {FILING_WINDOW_DAYS} days before today",
        )
    if end_date > ctx.today:
        raise ValidationFailed("end_date", ValidationRule.FUTURE_DATE, "Regularization cannot be filed for future dates")

    if draft.time_in is not None and draft.time_out is not None and draft.time_out <= draft.time_in:
        raise ValidationFailed("time_out", ValidationRule.TIME_ORDER, "Time out must be later than time in")

    late = is_late_arrival(category, draft.time_in, ctx.profile.position)
    return AttendanceDetails(
        category=category,
        from_date=from_date,
        end_date=end_date,
        time_in=draft.time_in,
        time_out=draft.time_out,
        remarks=tag_remarks(_clean(draft.remarks), late),
        is_late=late,
    )


def validate_letter(draft: LetterDraft, ctx: ValidationContext) -> LetterDetails:
    letter_type = _require(draft.letter_type, "letter_type")
    date_needed = _require(draft.date_needed, "date_needed")

    if date_needed < ctx.today + timedelta(days=LETTER_LEAD_DAYS):
        raise ValidationFailed(
            "date_needed",
            ValidationRule.LEAD_TIME,
            f"Letters require at least {LETTER_LEAD_DAYS} days of lead time",
        )

    template_name = _clean(draft.template_name)
    if letter_type == LetterType.COE and template_name is None:
        raise ValidationFailed("template_name", ValidationRule.TEMPLATE_REQUIRED, "Template name is required for COE")

    return LetterDetails(
        letter_type=letter_type,
        template_name=template_name if letter_type == LetterType.COE else None,
        date_needed=date_needed,
        remarks=_clean(draft.remarks),
    )


def validate_draft(draft: RequestDraft, ctx: ValidationContext) -> RequestDetails:
    """Route a draft to the validator for its form type."""
    match draft:
        case LeaveDraft():
            return validate_leave(draft, ctx)
        case BusinessTripDraft():
            return validate_business_trip(draft, ctx)
        case OvertimeDraft():
            return validate_overtime(draft, ctx)
        case AttendanceDraft():
            return validate_attendance(draft, ctx)
        case LetterDraft():
            return validate_letter(draft, ctx)
        case _:
            assert_never(draft)
