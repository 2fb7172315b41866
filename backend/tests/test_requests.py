"""Integration tests for the owner workflow: file, list, edit, delete and balances."""

from __future__ import annotations

import asyncio
import gc
import uuid
from datetime import date
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from hrdesk.db import get_session
from hrdesk.exceptions import ValidationFailed
from hrdesk.main import app
from hrdesk.models import SQLModel
from hrdesk.models.enums import Gender, LeaveType, ValidationRule
from hrdesk.schemas.auth import AuthContext
from hrdesk.schemas.forms import LeaveDraft
from hrdesk.schemas.request import RequestResponse
from hrdesk.services import request as request_service
from hrdesk.services.employee import EmployeeProfile, InMemoryEmployeeService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from httpx import AsyncClient

    from tests.conftest import FrozenClock

EMPLOYEE_ID = uuid.uuid4()
COLLEAGUE_ID = uuid.uuid4()
ADMIN_ID = uuid.uuid4()

EMPLOYEE_HEADERS = {"X-User-Id": str(EMPLOYEE_ID)}
COLLEAGUE_HEADERS = {"X-User-Id": str(COLLEAGUE_ID)}
ADMIN_HEADERS = {"X-User-Id": str(ADMIN_ID), "X-Role": "admin"}
REQUESTS_URL = "/requests"


@pytest.fixture(autouse=True)
def _seed_directory(directory: InMemoryEmployeeService) -> None:
    directory.seed(
        EmployeeProfile(
            id=EMPLOYEE_ID,
            name="Ana Reyes",
            department="Operations",
            position="Associate",
            gender=Gender.FEMALE,
        )
    )
    directory.seed(
        EmployeeProfile(
            id=COLLEAGUE_ID,
            name="Ben Cruz",
            department="Operations",
            position="Manager",
            gender=Gender.MALE,
        )
    )


# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def _leave(start: str = "2026-03-16", end: str = "2026-03-18", leave_type: str = "VACATION", **extra: Any) -> dict:
    return {"form_type": "LEAVE", "start_date": start, "end_date": end, "leave_type": leave_type, **extra}


async def _file(client: AsyncClient, payload: dict, headers: dict[str, str] = EMPLOYEE_HEADERS) -> dict:
    response = await client.post(REQUESTS_URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# ---------------------------------------------------------------------------
# Filing
# ---------------------------------------------------------------------------


async def test_file_leave_request(async_client: AsyncClient) -> None:
    data = await _file(async_client, _leave())
    assert data["status"] == "PENDING"
    assert data["form_type"] == "LEAVE"
    assert data["employee_id"] == str(EMPLOYEE_ID)
    assert data["details"]["days"] == 3
    assert data["admin_comment"] is None
    assert data["created_at"].startswith("2026-03-10T02:00:00")


async def test_file_overtime_derives_hours(async_client: AsyncClient) -> None:
    payload = {
        "form_type": "OVERTIME",
        "date": "2026-03-09",
        "time_in": "07:00",
        "time_out": "17:00",
        "day_type": "REGULAR_WORKDAY",
        "remarks": "Quarter close",
        "total_hours": 8,
    }
    data = await _file(async_client, payload)
    assert data["details"]["duty_hours"] == 10
    assert data["details"]["total_hours"] == 1


async def test_file_attendance_flags_late_wfh(async_client: AsyncClient) -> None:
    payload = {
        "form_type": "ATTENDANCE",
        "category": "WORK_FROM_HOME",
        "from_date": "2026-03-09",
        "end_date": "2026-03-09",
        "time_in": "09:45",
        "time_out": "18:00",
        "remarks": "Power outage",
    }
    data = await _file(async_client, payload)
    assert data["details"]["is_late"] is True
    assert data["details"]["remarks"] == "[LATE RECORDED] Power outage"


async def test_file_letter_and_business_trip(async_client: AsyncClient) -> None:
    letter = await _file(
        async_client,
        {"form_type": "LETTER", "letter_type": "COE", "template_name": "Visa Application", "date_needed": "2026-03-13"},
    )
    assert letter["details"]["template_name"] == "Visa Application"

    trip = await _file(
        async_client,
        {
            "form_type": "BUSINESS_TRIP",
            "destination": "Iloilo",
            "departure_date": "2026-03-20",
            "return_date": "2026-03-22",
            "purpose": "Branch audit",
        },
    )
    assert trip["details"]["destination"] == "Iloilo"


async def test_validation_failure_reports_field_and_rule(async_client: AsyncClient) -> None:
    response = await async_client.post(
        REQUESTS_URL, json=_leave(start="2026-03-18", end="2026-03-16"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "ValidationFailed"
    assert body["context"] == {"field": "end_date", "rule": "DATE_ORDER"}


async def test_missing_field_reports_required_rule(async_client: AsyncClient) -> None:
    response = await async_client.post(REQUESTS_URL, json={"form_type": "LETTER"}, headers=EMPLOYEE_HEADERS)
    assert response.status_code == 400
    assert response.json()["context"] == {"field": "letter_type", "rule": "REQUIRED"}


async def test_unknown_form_type_is_a_schema_error(async_client: AsyncClient) -> None:
    response = await async_client.post(REQUESTS_URL, json={"form_type": "PAYSLIP"}, headers=EMPLOYEE_HEADERS)
    assert response.status_code == 422


async def test_filing_without_profile_is_not_found(async_client: AsyncClient) -> None:
    response = await async_client.post(REQUESTS_URL, json=_leave(), headers={"X-User-Id": str(uuid.uuid4())})
    assert response.status_code == 404


async def test_missing_identity_header_is_rejected(async_client: AsyncClient) -> None:
    response = await async_client.post(REQUESTS_URL, json=_leave())
    assert response.status_code == 422


async def test_gendered_leave_follows_profile(async_client: AsyncClient) -> None:
    response = await async_client.post(
        REQUESTS_URL, json=_leave(leave_type="PATERNITY"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 400
    assert response.json()["context"]["rule"] == "LEAVE_TYPE_UNAVAILABLE"


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------


async def test_balance_is_consumed_by_pending_requests(async_client: AsyncClient) -> None:
    await _file(async_client, _leave("2026-03-16", "2026-03-27"))  # 12 days

    response = await async_client.post(
        REQUESTS_URL, json=_leave("2026-04-06", "2026-04-09"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 400
    assert response.json()["context"] == {"field": "days", "rule": "INSUFFICIENT_BALANCE"}

    await _file(async_client, _leave("2026-04-06", "2026-04-08"))  # exactly the 3 left


async def test_rejection_restores_balance(async_client: AsyncClient) -> None:
    first = await _file(async_client, _leave("2026-03-16", "2026-03-30"))  # all 15 days
    response = await async_client.post(
        REQUESTS_URL, json=_leave("2026-04-06", "2026-04-06"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 400

    response = await async_client.post(
        f"/admin/requests/{first['id']}/status", json={"status": "REJECTED"}, headers=ADMIN_HEADERS
    )
    assert response.status_code == 200
    await _file(async_client, _leave("2026-04-06", "2026-04-06"))


async def test_balance_summary(async_client: AsyncClient) -> None:
    await _file(async_client, _leave(leave_type="SICK", start="2026-03-10", end="2026-03-10"))

    response = await async_client.get(f"{REQUESTS_URL}/balances", headers=EMPLOYEE_HEADERS)
    assert response.status_code == 200
    data = response.json()
    assert "MATERNITY" in data["available_leave_types"]
    assert "PATERNITY" not in data["available_leave_types"]
    balances = {b["leave_type"]: b for b in data["balances"]}
    assert balances["SICK"] == {"leave_type": "SICK", "entitlement": 15, "used": 1, "remaining": 14}
    assert balances["VACATION"]["remaining"] == 15
    assert "SOLO_PARENT" not in balances


async def test_balance_summary_can_exclude_request_being_edited(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    response = await async_client.get(
        f"{REQUESTS_URL}/balances", params={"exclude_request_id": created["id"]}, headers=EMPLOYEE_HEADERS
    )
    balances = {b["leave_type"]: b for b in response.json()["balances"]}
    assert balances["VACATION"]["remaining"] == 15


async def test_concurrent_leave_filings_cannot_overdraw(tmp_path: Path, clock: FrozenClock) -> None:
    """Two 10-day vacation filings racing for 15 days of credit: only one gets through."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'hrdesk.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    auth = AuthContext(user_id=EMPLOYEE_ID)
    draft = LeaveDraft(start_date=date(2026, 3, 16), end_date=date(2026, 3, 25), leave_type=LeaveType.VACATION)

    async def _submit() -> RequestResponse:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            return await request_service.create_request(session, auth, draft, clock.now)

    try:
        results = await asyncio.gather(_submit(), _submit(), return_exceptions=True)
    finally:
        await engine.dispose()

    accepted = [r for r in results if isinstance(r, RequestResponse)]
    refused = [r for r in results if isinstance(r, ValidationFailed)]
    assert len(accepted) == 1
    assert len(refused) == 1
    assert refused[0].rule == ValidationRule.INSUFFICIENT_BALANCE

    # The lock is dropped once nobody holds or waits on it; the refusal's traceback still references it.
    del results, refused
    gc.collect()
    assert (EMPLOYEE_ID, LeaveType.VACATION) not in request_service._balance_locks


# ---------------------------------------------------------------------------
# Listing and reading
# ---------------------------------------------------------------------------


async def test_list_own_requests_newest_first(async_client: AsyncClient, clock: FrozenClock) -> None:
    older = await _file(async_client, _leave())
    clock.advance(hours=1)
    newer = await _file(async_client, {"form_type": "LETTER", "letter_type": "BIR_2316", "date_needed": "2026-03-20"})
    await _file(async_client, _leave(), headers=COLLEAGUE_HEADERS)

    response = await async_client.get(REQUESTS_URL, headers=EMPLOYEE_HEADERS)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [item["id"] for item in data["items"]] == [newer["id"], older["id"]]


async def test_list_filters_by_form_type_and_status(async_client: AsyncClient) -> None:
    await _file(async_client, _leave())
    await _file(async_client, {"form_type": "LETTER", "letter_type": "BIR_2316", "date_needed": "2026-03-20"})

    response = await async_client.get(REQUESTS_URL, params={"form_type": "LETTER"}, headers=EMPLOYEE_HEADERS)
    assert [item["form_type"] for item in response.json()["items"]] == ["LETTER"]

    response = await async_client.get(REQUESTS_URL, params={"status": "APPROVED"}, headers=EMPLOYEE_HEADERS)
    assert response.json()["total"] == 0


async def test_editable_flag_tracks_window(async_client: AsyncClient, clock: FrozenClock) -> None:
    await _file(async_client, _leave())

    response = await async_client.get(REQUESTS_URL, headers=EMPLOYEE_HEADERS)
    assert response.json()["items"][0]["editable"] is True

    clock.advance(hours=24)
    response = await async_client.get(REQUESTS_URL, headers=EMPLOYEE_HEADERS)
    assert response.json()["items"][0]["editable"] is False


async def test_get_request_visibility(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    url = f"{REQUESTS_URL}/{created['id']}"

    assert (await async_client.get(url, headers=EMPLOYEE_HEADERS)).status_code == 200
    assert (await async_client.get(url, headers=ADMIN_HEADERS)).status_code == 200
    assert (await async_client.get(url, headers=COLLEAGUE_HEADERS)).status_code == 403


async def test_get_missing_request(async_client: AsyncClient) -> None:
    response = await async_client.get(f"{REQUESTS_URL}/{uuid.uuid4()}", headers=EMPLOYEE_HEADERS)
    assert response.status_code == 404
    assert response.json()["context"] == {"entity": "Request"}


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


async def test_edit_within_window(async_client: AsyncClient, clock: FrozenClock) -> None:
    created = await _file(async_client, _leave())
    clock.advance(hours=23)

    response = await async_client.put(
        f"{REQUESTS_URL}/{created['id']}", json=_leave(end="2026-03-20"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["id"] == created["id"]
    assert data["created_at"] == created["created_at"]
    assert data["status"] == "PENDING"
    assert data["details"]["days"] == 5
    assert data["updated_at"] is not None


async def test_edit_excludes_itself_from_balance(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave("2026-03-16", "2026-03-27"))  # 12 days
    response = await async_client.put(
        f"{REQUESTS_URL}/{created['id']}", json=_leave("2026-03-16", "2026-03-30"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 200
    assert response.json()["details"]["days"] == 15


async def test_edit_after_window_is_denied(async_client: AsyncClient, clock: FrozenClock) -> None:
    created = await _file(async_client, _leave())
    clock.advance(hours=25)

    response = await async_client.put(f"{REQUESTS_URL}/{created['id']}", json=_leave(), headers=EMPLOYEE_HEADERS)
    assert response.status_code == 409
    assert response.json()["context"] == {"reason": "WINDOW_EXPIRED"}


async def test_edit_of_decided_request_is_denied(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    await async_client.post(
        f"/admin/requests/{created['id']}/status", json={"status": "APPROVED"}, headers=ADMIN_HEADERS
    )

    response = await async_client.put(f"{REQUESTS_URL}/{created['id']}", json=_leave(), headers=EMPLOYEE_HEADERS)
    assert response.status_code == 409
    assert response.json()["context"] == {"reason": "NOT_PENDING"}


async def test_edit_by_another_employee_is_denied(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    response = await async_client.put(f"{REQUESTS_URL}/{created['id']}", json=_leave(), headers=COLLEAGUE_HEADERS)
    assert response.status_code == 403
    assert response.json()["context"] == {"reason": "NOT_OWNER"}


async def test_edit_cannot_change_form_type(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    response = await async_client.put(
        f"{REQUESTS_URL}/{created['id']}",
        json={"form_type": "LETTER", "letter_type": "BIR_2316", "date_needed": "2026-03-20"},
        headers=EMPLOYEE_HEADERS,
    )
    assert response.status_code == 400
    assert response.json()["context"]["rule"] == "FORM_TYPE_MISMATCH"


async def test_edit_keeps_admin_comment(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    await async_client.put(
        f"/admin/requests/{created['id']}/comment", json={"comment": "Please attach itinerary"}, headers=ADMIN_HEADERS
    )

    response = await async_client.put(
        f"{REQUESTS_URL}/{created['id']}", json=_leave(remarks="Itinerary sent"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 200
    assert response.json()["admin_comment"] == "Please attach itinerary"


async def test_edit_keeps_attachment_on_file(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave("2026-03-09", "2026-03-10", "SICK", has_attachment=True))

    response = await async_client.put(
        f"{REQUESTS_URL}/{created['id']}", json=_leave("2026-03-08", "2026-03-10", "SICK"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 200, response.text
    details = response.json()["details"]
    assert details["days"] == 3
    assert details["has_attachment"] is True


async def test_failed_edit_leaves_request_unchanged(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    response = await async_client.put(
        f"{REQUESTS_URL}/{created['id']}", json=_leave(start="2026-03-20", end="2026-03-16"), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 400

    response = await async_client.get(f"{REQUESTS_URL}/{created['id']}", headers=EMPLOYEE_HEADERS)
    assert response.json()["details"] == created["details"]


# ---------------------------------------------------------------------------
# Deleting
# ---------------------------------------------------------------------------


async def test_delete_requires_confirmation(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave())
    url = f"{REQUESTS_URL}/{created['id']}"

    response = await async_client.delete(url, headers=EMPLOYEE_HEADERS)
    assert response.status_code == 428

    response = await async_client.delete(url, params={"confirm": "true"}, headers=EMPLOYEE_HEADERS)
    assert response.status_code == 204
    assert (await async_client.get(url, headers=EMPLOYEE_HEADERS)).status_code == 404


async def test_delete_after_window_is_denied(async_client: AsyncClient, clock: FrozenClock) -> None:
    created = await _file(async_client, _leave())
    clock.advance(hours=24)

    response = await async_client.delete(
        f"{REQUESTS_URL}/{created['id']}", params={"confirm": "true"}, headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 409
    assert response.json()["context"] == {"reason": "WINDOW_EXPIRED"}


async def test_deleting_leave_restores_balance(async_client: AsyncClient) -> None:
    created = await _file(async_client, _leave("2026-03-16", "2026-03-30"))
    await async_client.delete(f"{REQUESTS_URL}/{created['id']}", params={"confirm": "true"}, headers=EMPLOYEE_HEADERS)

    response = await async_client.get(f"{REQUESTS_URL}/balances", headers=EMPLOYEE_HEADERS)
    balances = {b["leave_type"]: b for b in response.json()["balances"]}
    assert balances["VACATION"]["remaining"] == 15


# ---------------------------------------------------------------------------
# Record store failures
# ---------------------------------------------------------------------------


def _failing_session(**side_effects: Exception) -> AsyncMock:
    session = AsyncMock(spec=AsyncSession)
    for method, error in side_effects.items():
        getattr(session, method).side_effect = error
    return session


async def test_failed_commit_rolls_back_and_returns_503(async_client: AsyncClient) -> None:
    session = _failing_session(commit=OperationalError("COMMIT", None, Exception("database is locked")))

    async def _broken_session() -> AsyncIterator[AsyncSession]:
        yield session

    app.dependency_overrides[get_session] = _broken_session
    response = await async_client.post(
        REQUESTS_URL,
        json={"form_type": "LETTER", "letter_type": "BIR_2316", "date_needed": "2026-03-20"},
        headers=EMPLOYEE_HEADERS,
    )
    assert response.status_code == 503
    assert response.json()["error"] == "PersistenceFailed"
    session.commit.assert_awaited_once()
    session.rollback.assert_awaited_once()


async def test_failed_read_returns_503_without_retry(async_client: AsyncClient) -> None:
    session = _failing_session(execute=OperationalError("SELECT", None, Exception("connection refused")))

    async def _broken_session() -> AsyncIterator[AsyncSession]:
        yield session

    app.dependency_overrides[get_session] = _broken_session
    response = await async_client.get(f"{REQUESTS_URL}/{uuid.uuid4()}", headers=EMPLOYEE_HEADERS)
    assert response.status_code == 503
    assert response.json()["error"] == "PersistenceFailed"
    session.execute.assert_awaited_once()
    session.commit.assert_not_awaited()
