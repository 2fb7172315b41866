from __future__ import annotations

from pydantic import BaseModel

from hrdesk.models.enums import AttendanceCategory, DayType, FormType, LeaveType, LetterType


class FormOption(BaseModel):
    form_type: FormType
    title: str
    description: str


class FormCatalogResponse(BaseModel):
    """Everything a client needs to render the five request forms."""

    forms: list[FormOption]
    leave_types: list[LeaveType]
    day_types: list[DayType]
    attendance_categories: list[AttendanceCategory]
    letter_types: list[LetterType]
    coe_templates: list[str]
