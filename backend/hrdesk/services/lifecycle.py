# ruff: noqa: TC003
"""Request state machine rules.

States are PENDING, APPROVED and REJECTED; every request starts PENDING.
The owner may edit or delete only while the request is PENDING and less than
24 hours old. Admins act through a separate operation set that ignores both
restrictions.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Any, Protocol

from pydantic import ValidationError

from hrdesk.exceptions import TransitionDenied, ValidationFailed
from hrdesk.models.base import as_utc
from hrdesk.models.enums import DenialReason, FormType, RequestStatus, ValidationRule
from hrdesk.schemas.forms import DETAILS_MODELS, RequestDraft
from hrdesk.services.ledger import RequestRecord

EDIT_WINDOW = timedelta(hours=24)

# Statuses an admin may set directly.
ADMIN_DECISIONS = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


class EnvelopeRecord(RequestRecord, Protocol):
    created_at: datetime


def within_edit_window(created_at: datetime, now: datetime) -> bool:
    return as_utc(now) - as_utc(created_at) < EDIT_WINDOW


def owner_denial(request: EnvelopeRecord, user_id: uuid.UUID, now: datetime) -> DenialReason | None:
    """Return why the owner may not touch the request, or None if they may."""
    if request.employee_id != user_id:
        return DenialReason.NOT_OWNER
    if request.status != RequestStatus.PENDING:
        return DenialReason.NOT_PENDING
    if not within_edit_window(request.created_at, now):
        return DenialReason.WINDOW_EXPIRED
    return None


def ensure_owner_can_modify(request: EnvelopeRecord, user_id: uuid.UUID, now: datetime) -> None:
    """Raise TransitionDenied unless the owner may still edit or delete the request."""
    reason = owner_denial(request, user_id, now)
    if reason == DenialReason.NOT_OWNER:
        raise TransitionDenied(reason, "Only the employee who filed this request can change it")
    if reason == DenialReason.NOT_PENDING:
        raise TransitionDenied(reason, f"Request is {request.status} and can no longer be changed")
    if reason == DenialReason.WINDOW_EXPIRED:
        raise TransitionDenied(reason, "Requests can only be changed within 24 hours of submission")


def ensure_same_form_type(request: RequestRecord, draft: RequestDraft) -> None:
    if draft.form_type != request.form_type:
        raise ValidationFailed(
            "form_type",
            ValidationRule.FORM_TYPE_MISMATCH,
            f"A {request.form_type} request cannot be edited into a {draft.form_type} request",
        )


def apply_field_patch(form_type: FormType, details: dict[str, Any], field: str, value: Any) -> dict[str, Any]:
    """Overwrite one details field for an admin correction.

    The value is coerced to the field's type but no policy rule is applied:
    admin corrections are trusted as-is.
    """
    model = DETAILS_MODELS[form_type]
    if field == "form_type" or field not in model.model_fields:
        raise ValidationFailed(field, ValidationRule.UNKNOWN_FIELD, f"{form_type} requests have no field '{field}'")
    try:
        patched = model.model_validate({**details, field: value})
    except ValidationError as exc:
        raise ValidationFailed(field, ValidationRule.INVALID_VALUE, f"Invalid value for '{field}'") from exc
    return patched.model_dump(mode="json")
