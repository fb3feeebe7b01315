from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from barbearia_sdk.error_mapper import NO_ROWS_CODE, RLS_VIOLATION_CODE, UNIQUE_VIOLATION_CODE

from barbearia_app.services.errors import ServiceError

_CODE_CATEGORIES = {
    "CLIENT_VALIDATION": "validation",
    "EMPTY_TEMPLATE": "validation",
    "SLOT_UNAVAILABLE": "conflict",
    UNIQUE_VIOLATION_CODE: "conflict",
    RLS_VIOLATION_CODE: "permission_denied",
    NO_ROWS_CODE: "not_found",
    "PRODUCT_NOT_FOUND": "not_found",
    "NOT_AUTHENTICATED": "permission_denied",
    "TRANSPORT_ERROR": "transport",
}

_HTTP_CATEGORIES = {
    "HTTP_400": "validation",
    "HTTP_401": "permission_denied",
    "HTTP_403": "permission_denied",
    "HTTP_404": "not_found",
    "HTTP_409": "conflict",
    "HTTP_422": "validation",
}


@dataclass(frozen=True)
class PresentedError:
    category: str
    message: str
    hint: str
    trace_id: str | None
    code: str

    def render(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "message": self.message,
            "hint": self.hint,
            "trace_id": self.trace_id,
            "code": self.code,
        }


class ErrorPresenter:
    """Groups service failures into the few kinds of notice a screen distinguishes."""

    _HINTS = {
        "validation": "Revise os campos destacados e tente novamente.",
        "permission_denied": "Você não tem permissão para esta ação.",
        "conflict": "O registro mudou ou já existe. Atualize a tela.",
        "not_found": "O registro não foi encontrado.",
        "transport": "Sem conexão com o servidor. Tente novamente.",
        "server": "O servidor está indisponível no momento.",
        "unknown": "Ocorreu um erro inesperado.",
    }

    def present(self, error: ServiceError) -> PresentedError:
        code = (error.code or "UNKNOWN").upper()
        category = self.categorize(code)
        return PresentedError(
            category=category,
            message=error.message,
            hint=self._HINTS[category],
            trace_id=error.trace_id,
            code=code,
        )

    @staticmethod
    def categorize(code: str) -> str:
        if code in _CODE_CATEGORIES:
            return _CODE_CATEGORIES[code]
        if code in _HTTP_CATEGORIES:
            return _HTTP_CATEGORIES[code]
        if code.startswith("HTTP_5"):
            return "server"
        return "unknown"
