from __future__ import annotations

from hrdesk.models.enums import AttendanceCategory, DayType, FormType, LeaveType, LetterType
from hrdesk.schemas.catalog import FormCatalogResponse, FormOption

FORM_OPTIONS: tuple[FormOption, ...] = (
    FormOption(
        form_type=FormType.LEAVE,
        title="Leave Management Form",
        description="Request time off for vacation or sickness.",
    ),
    FormOption(
        form_type=FormType.BUSINESS_TRIP,
        title="Official Business Trip Form",
        description="Coordinate official travel and authorizations.",
    ),
    FormOption(
        form_type=FormType.OVERTIME,
        title="Overtime Form",
        description="Log extra hours worked beyond regular schedule.",
    ),
    FormOption(
        form_type=FormType.ATTENDANCE,
        title="Attendance Regularization Form",
        description="Adjust attendance logs for off-site duties.",
    ),
    FormOption(
        form_type=FormType.LETTER,
        title="Letter Request Form",
        description="Request a COE or BIR 2316.",
    ),
)

COE_TEMPLATES: tuple[str, ...] = (
    "Pag-Ibig Multipurpose Loan",
    "Bank Loan/Housing",
    "Credit Card Application",
    "Travel Order",
    "Employee Reference (with compensation)",
    "Employee Reference (without compensation)",
    "Visa Application",
)


def get_form_catalog() -> FormCatalogResponse:
    """Return the static option lists behind the five request forms."""
    return FormCatalogResponse(
        forms=list(FORM_OPTIONS),
        leave_types=list(LeaveType),
        day_types=list(DayType),
        attendance_categories=list(AttendanceCategory),
        letter_types=list(LetterType),
        coe_templates=list(COE_TEMPLATES),
    )
