from __future__ import annotations

from dataclasses import dataclass

from barbearia_sdk import ReminderError, SaleError, to_user_facing_error
from barbearia_sdk.error_mapper import NO_ROWS_CODE, RLS_VIOLATION_CODE, UNIQUE_VIOLATION_CODE
from barbearia_sdk.exceptions import ApiError

_KNOWN_CODES = {NO_ROWS_CODE, RLS_VIOLATION_CODE, UNIQUE_VIOLATION_CODE, "TRANSPORT_ERROR"}


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None
    code: str | None = None

    def __str__(self) -> str:
        return self.message


def normalize_error(exc: Exception, fallback_message: str) -> ServiceError:
    """Turn any failure into the message shown to the user.

    Backend failures keep their technical text in ``details``; local
    business-rule failures (stock, phone) already carry a user message.
    """
    if isinstance(exc, ServiceError):
        return exc
    if isinstance(exc, ApiError):
        user_facing = to_user_facing_error(exc)
        return ServiceError(
            message=fallback_message,
            details=f"{user_facing.message} [{user_facing.details}]",
            trace_id=user_facing.trace_id,
            code=exc.code if exc.code in _KNOWN_CODES else f"HTTP_{exc.status_code}",
        )
    if isinstance(exc, (SaleError, ReminderError)):
        return ServiceError(message=str(exc), details="CLIENT_VALIDATION", code="CLIENT_VALIDATION")
    return ServiceError(message=fallback_message, details=str(exc) or type(exc).__name__)
