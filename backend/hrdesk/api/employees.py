# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter

from hrdesk.api.deps import AdminDep, AuthDep
from hrdesk.exceptions import AppError, NotFound
from hrdesk.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from hrdesk.services.employee import EmployeeProfile, get_employee_service

employees_router = APIRouter(prefix="/employees", tags=["employees"])


def _build_employee_response(employee: EmployeeProfile) -> EmployeeResponse:
    return EmployeeResponse(
        id=employee.id,
        name=employee.name,
        employment_type=employee.employment_type,
        department=employee.department,
        team=employee.team,
        position=employee.position,
        gender=employee.gender,
        civil_status=employee.civil_status,
        solo_parent=employee.solo_parent,
    )


@employees_router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def upsert_employee(
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: AdminDep,
) -> EmployeeResponse:
    """Create or update an employee profile (admin only)."""
    employee = EmployeeProfile(id=employee_id, **payload.model_dump())
    saved = await get_employee_service().upsert_employee(employee)
    return _build_employee_response(saved)


@employees_router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def get_employee(
    employee_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeResponse:
    """Get an employee profile. Employees may read their own; admins may read any."""
    if employee_id != auth.user_id and not auth.is_admin:
        raise AppError("Not authorized to view this profile", status_code=403)
    employee = await get_employee_service().get_employee(employee_id)
    if employee is None:
        raise NotFound("Employee profile")
    return _build_employee_response(employee)


@employees_router.get(
    "",
    response_model=EmployeeListResponse,
)
async def list_employees(
    auth: AdminDep,
) -> EmployeeListResponse:
    """List all employee profiles (admin only)."""
    employees = await get_employee_service().list_employees()
    items = [_build_employee_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))
