"""Profile-driven eligibility rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hrdesk.models.enums import Gender, LeaveType

if TYPE_CHECKING:
    from hrdesk.services.employee import EmployeeProfile

# Leave types offered to every employee, in menu order.
_BASE_LEAVE_TYPES = (
    LeaveType.SICK,
    LeaveType.VACATION,
    LeaveType.BEREAVEMENT,
    LeaveType.LEAVE_WITHOUT_PAY,
)

# Positions allowed to clock in after the WFH cut-off without being marked late.
LATE_EXEMPT_POSITIONS = frozenset(
    {
        "Executive",
        "Manager",
        "Supervisor",
        "Team Leader",
        "Assistant Team Leader",
    }
)


def available_leave_types(profile: EmployeeProfile) -> list[LeaveType]:
    """Return the leave types this employee may file."""
    types = list(_BASE_LEAVE_TYPES)
    if profile.gender == Gender.MALE:
        types.append(LeaveType.PATERNITY)
    if profile.gender == Gender.FEMALE:
        types.append(LeaveType.MATERNITY)
    if profile.solo_parent:
        types.append(LeaveType.SOLO_PARENT)
    return types


def is_late_exempt(position: str | None) -> bool:
    return position is not None and position in LATE_EXEMPT_POSITIONS
