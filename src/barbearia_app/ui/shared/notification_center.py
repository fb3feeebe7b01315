from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from barbearia_app.services.errors import ServiceError
from barbearia_app.ui.shared.error_presenter import ErrorPresenter


@dataclass
class NotificationCenter:
    """Collects the success/error notices a screen would show as toasts."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    presenter: ErrorPresenter = field(default_factory=ErrorPresenter)

    def push(
        self,
        *,
        level: str,
        message: str,
        title: str | None = None,
        trace_id: str | None = None,
        category: str | None = None,
        hint: str | None = None,
    ) -> dict[str, Any]:
        notice = {
            "level": level,
            "title": title,
            "message": message,
            "trace_id": trace_id,
            "category": category,
            "hint": hint,
        }
        self.messages.append(notice)
        return notice

    def success(self, message: str) -> dict[str, Any]:
        return self.push(level="success", message=message)

    def error(self, message: str, *, trace_id: str | None = None) -> dict[str, Any]:
        return self.push(level="error", message=message, trace_id=trace_id, category="validation")

    def failure(self, error: ServiceError) -> dict[str, Any]:
        presented = self.presenter.present(error)
        return self.push(
            level="error",
            message=presented.message,
            trace_id=presented.trace_id,
            category=presented.category,
            hint=presented.hint,
        )

    def last(self) -> dict[str, Any] | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self.messages), "messages": list(self.messages)}
