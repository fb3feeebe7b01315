from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    ForbiddenError,
    RateLimitError,
    ServerError,
    ValidationError,
)

# PostgREST answers single-row reads with no match as 406 + PGRST116.
NO_ROWS_CODE = "PGRST116"
UNIQUE_VIOLATION_CODE = "23505"
RLS_VIOLATION_CODE = "42501"


def _first_text(payload: Mapping[str, object], *keys: str) -> str | None:
    for key in keys:
        value = payload.get(key)
        if value:
            return str(value)
    return None


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    # PostgREST uses code/message/details/hint, the auth API uses error/error_description/msg.
    code = _first_text(payload, "code", "error_code", "error") or f"HTTP_{status_code}"
    message = _first_text(payload, "message", "msg", "error_description") or "Request failed"
    details = payload.get("details") or payload.get("hint")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if code == NO_ROWS_CODE or status_code == 404:
        mapped = NotFoundError
    elif code == UNIQUE_VIOLATION_CODE or status_code == 409:
        mapped = ConflictError
    elif code == RLS_VIOLATION_CODE or status_code == 403:
        mapped = ForbiddenError
    elif status_code == 401:
        mapped = AuthError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None


def to_user_facing_error(exc: ApiError) -> UserFacingError:
    primary = exc.message.strip() or "Falha na comunicação com o servidor"
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=primary, details=details, trace_id=exc.trace_id)
