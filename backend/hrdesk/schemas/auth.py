# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

from hrdesk.models.enums import Role


class AuthContext(BaseModel):
    """Identity and role handed over by the identity provider."""

    user_id: uuid.UUID
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
