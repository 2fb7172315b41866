# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, Header, status

from hrdesk.exceptions import AppError
from hrdesk.models.enums import Role
from hrdesk.schemas.auth import AuthContext


async def get_auth_context(
    x_user_id: uuid.UUID = Header(),
    x_role: Role = Header(default=Role.USER),
) -> AuthContext:
    """Extract the identity-provider claims from request headers."""
    return AuthContext(user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(
    auth: AuthDep,
) -> AuthContext:
    """Require admin role for the request."""
    if not auth.is_admin:
        raise AppError("Admin access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]


async def get_now() -> datetime:
    """Current instant used by every time-dependent rule. Overridden in tests."""
    return datetime.now(UTC)


NowDep = Annotated[datetime, Depends(get_now)]
