# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from hrdesk.models.enums import CivilStatus, EmploymentType, Gender


class EmployeeProfile(BaseModel):
    """Employee profile as held by the profile directory. Read-only to the request engine."""

    id: uuid.UUID
    name: str
    employment_type: EmploymentType = EmploymentType.REGULAR
    department: str
    team: str | None = None
    position: str
    gender: Gender
    civil_status: CivilStatus = CivilStatus.SINGLE
    solo_parent: bool = False


@runtime_checkable
class EmployeeService(Protocol):
    """Interface for the employee profile directory."""

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeProfile | None:
        """Fetch a profile. Returns None if not found."""
        ...

    async def list_employees(self) -> list[EmployeeProfile]:
        """List all profiles."""
        ...

    async def upsert_employee(self, profile: EmployeeProfile) -> EmployeeProfile:
        """Create or replace a profile."""
        ...


class InMemoryEmployeeService:
    """In-memory directory used in development and tests."""

    def __init__(self) -> None:
        self._employees: dict[uuid.UUID, EmployeeProfile] = {}

    def seed(self, employee: EmployeeProfile) -> None:
        """Seed a profile for testing."""
        self._employees[employee.id] = employee

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeProfile | None:
        """Fetch a profile. Returns None if not found."""
        return self._employees.get(employee_id)

    async def list_employees(self) -> list[EmployeeProfile]:
        """List all profiles ordered by name."""
        return sorted(self._employees.values(), key=lambda e: e.name)

    async def upsert_employee(self, profile: EmployeeProfile) -> EmployeeProfile:
        """Create or replace a profile."""
        self._employees[profile.id] = profile
        return profile


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    """FastAPI dependency for the employee directory."""
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Override the service (for testing or production wiring)."""
    global _employee_service
    _employee_service = service
