from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hrdesk.models.enums import DenialReason, ValidationRule


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
    status_code: int
    context: dict[str, str] | None = None


class AppError(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        context: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.context = context
        super().__init__(self.message)


class ValidationFailed(AppError):
    """A single policy rule rejected a request draft."""

    def __init__(self, field: str, rule: ValidationRule, message: str) -> None:
        self.field = field
        self.rule = rule
        super().__init__(
            message,
            status_code=status.HTTP_400_BAD_REQUEST,
            context={"field": field, "rule": rule.value},
        )


class TransitionDenied(AppError):
    """An owner tried to edit or delete a request they may no longer touch."""

    def __init__(self, reason: DenialReason, message: str) -> None:
        self.reason = reason
        status_code = status.HTTP_403_FORBIDDEN if reason == DenialReason.NOT_OWNER else status.HTTP_409_CONFLICT
        super().__init__(message, status_code=status_code, context={"reason": reason.value})


class NotFound(AppError):
    """The referenced record does not exist."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(
            f"{entity} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            context={"entity": entity},
        )


class ConfirmationRequired(AppError):
    """A destructive operation was invoked without explicit confirmation."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Confirmation is required to {operation}",
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            context={"operation": operation},
        )


class PersistenceFailed(AppError):
    """The record store rejected a read or write."""

    def __init__(self, message: str = "The record store could not complete the operation") -> None:
        super().__init__(message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            context=exc.context,
        ).model_dump(),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
