from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from barbearia_app.app.bootstrap import AppBootstrap, BootstrapResult
from barbearia_app.ui.shared.notification_center import NotificationCenter

LOGIN = "login"
SIGNUP = "signup"


@dataclass
class AuthView:
    bootstrap: AppBootstrap
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    mode: str = LOGIN
    field_errors: dict[str, str] = field(default_factory=dict)
    is_submitting: bool = False

    def switch_mode(self, mode: str) -> None:
        if mode not in (LOGIN, SIGNUP):
            raise ValueError(f"Unknown auth mode: {mode}")
        self.mode = mode
        self.field_errors = {}

    def submit_login(self, email: str, password: str) -> dict[str, Any]:
        return self._submit(lambda: self.bootstrap.sign_in(email, password))

    def submit_signup(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        phone: str | None = None,
    ) -> dict[str, Any]:
        outcome = self._submit(lambda: self.bootstrap.sign_up(name, email, password, confirm_password, phone))
        if outcome["ok"] and outcome["route"] == "/auth":
            self.mode = LOGIN
        return outcome

    def _submit(self, action) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Aguarde a conclusão da operação"}
        self.is_submitting = True
        try:
            result: BootstrapResult = action()
        finally:
            self.is_submitting = False
        self.field_errors = dict(result.field_errors)
        if result.field_errors or (result.error_message and not result.notice):
            message = result.error_message or "Verifique os dados informados"
            self.notifications.error(message)
            return {"ok": False, "error": message, "field_errors": self.field_errors}
        if result.notice:
            self.notifications.success(result.notice)
        return {"ok": True, "route": result.route.value, "status": result.status.value}

    def render(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "field_errors": dict(self.field_errors),
            "is_submitting": self.is_submitting,
            "notifications": self.notifications.render(),
        }
