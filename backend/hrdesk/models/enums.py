from __future__ import annotations

import enum


class FormType(enum.StrEnum):
    """The five kinds of HR request an employee can file."""

    LEAVE = "LEAVE"
    BUSINESS_TRIP = "BUSINESS_TRIP"
    OVERTIME = "OVERTIME"
    ATTENDANCE = "ATTENDANCE"
    LETTER = "LETTER"


class RequestStatus(enum.StrEnum):
    """Review state of a request. APPROVED and REJECTED are terminal for the owner."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(enum.StrEnum):
    """Kind of leave being requested."""

    SICK = "SICK"
    VACATION = "VACATION"
    MATERNITY = "MATERNITY"
    PATERNITY = "PATERNITY"
    BEREAVEMENT = "BEREAVEMENT"
    LEAVE_WITHOUT_PAY = "LEAVE_WITHOUT_PAY"
    SOLO_PARENT = "SOLO_PARENT"


class DayType(enum.StrEnum):
    """Calendar classification of an overtime date."""

    REGULAR_WORKDAY = "REGULAR_WORKDAY"
    REST_DAY = "REST_DAY"
    SPECIAL_NON_WORKING_HOLIDAY = "SPECIAL_NON_WORKING_HOLIDAY"
    REGULAR_HOLIDAY = "REGULAR_HOLIDAY"


class AttendanceCategory(enum.StrEnum):
    """Off-site or remote duty being regularized."""

    BRANCH_VISIT = "BRANCH_VISIT"
    BUSINESS_MEETING = "BUSINESS_MEETING"
    FIELD_WORK = "FIELD_WORK"
    SCHOOL_VISIT = "SCHOOL_VISIT"
    SEMINAR = "SEMINAR"
    TRAINING = "TRAINING"
    TECHNICAL_ASSISTANCE = "TECHNICAL_ASSISTANCE"
    WORK_FROM_HOME = "WORK_FROM_HOME"


class LetterType(enum.StrEnum):
    """Document an employee can request from HR."""

    COE = "COE"
    BIR_2316 = "BIR_2316"


class Gender(enum.StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class CivilStatus(enum.StrEnum):
    SINGLE = "SINGLE"
    MARRIED = "MARRIED"
    WIDOWED = "WIDOWED"
    SEPARATED = "SEPARATED"
    ANNULLED = "ANNULLED"


class EmploymentType(enum.StrEnum):
    REGULAR = "REGULAR"
    PROBATIONARY = "PROBATIONARY"
    PART_TIME = "PART_TIME"


class Role(enum.StrEnum):
    """Role claim supplied by the identity provider."""

    USER = "user"
    ADMIN = "admin"


class DenialReason(enum.StrEnum):
    """Why an owner-side edit or delete was refused."""

    NOT_OWNER = "NOT_OWNER"
    NOT_PENDING = "NOT_PENDING"
    WINDOW_EXPIRED = "WINDOW_EXPIRED"


class ValidationRule(enum.StrEnum):
    """Identifier of the policy rule that rejected a draft."""

    REQUIRED = "REQUIRED"
    DATE_ORDER = "DATE_ORDER"
    INVALID_DURATION = "INVALID_DURATION"
    LEAVE_TYPE_UNAVAILABLE = "LEAVE_TYPE_UNAVAILABLE"
    ATTACHMENT_REQUIRED = "ATTACHMENT_REQUIRED"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    FUTURE_DATE = "FUTURE_DATE"
    FILING_WINDOW = "FILING_WINDOW"
    MIN_DUTY_HOURS = "MIN_DUTY_HOURS"
    NO_OVERTIME = "NO_OVERTIME"
    TIME_ORDER = "TIME_ORDER"
    LEAD_TIME = "LEAD_TIME"
    TEMPLATE_REQUIRED = "TEMPLATE_REQUIRED"
    FORM_TYPE_MISMATCH = "FORM_TYPE_MISMATCH"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    INVALID_VALUE = "INVALID_VALUE"
