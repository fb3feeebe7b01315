from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from barbearia_sdk.models import UserRole
from barbearia_sdk.reminders import DEFAULT_TEMPLATE

from barbearia_app.services.errors import ServiceError
from barbearia_app.services.reminder_service import ReminderService
from barbearia_app.ui.shared.notification_center import NotificationCenter

PLACEHOLDERS = ("{{nome}}", "{{data}}", "{{hora}}", "{{servico}}", "{{barbeiro}}")


@dataclass
class WhatsAppSettingsView:
    reminders: ReminderService
    role: UserRole | None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    template: str = ""
    setting_id: str | None = None
    is_loading: bool = False
    is_saving: bool = False

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def load(self) -> bool:
        if not self.can_view():
            return False
        self.is_loading = True
        try:
            stored = self.reminders.load_template()
        except ServiceError as exc:
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False
        self.template = stored.value
        self.setting_id = stored.setting_id
        return True

    def edit(self, value: str) -> None:
        self.template = value

    def save(self) -> dict[str, Any]:
        if not self.can_view():
            return {"ok": False, "error": "Acesso restrito ao gerente"}
        self.is_saving = True
        try:
            saved = self.reminders.save_template(self.template, self.setting_id)
        except ServiceError as exc:
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message}
        finally:
            self.is_saving = False
        self.setting_id = saved.setting_id
        self.notifications.success("Mensagem atualizada com sucesso!")
        return {"ok": True, "setting_id": saved.setting_id}

    def reset(self) -> None:
        """Put the default text back in the editor; it is stored only on save."""
        self.template = DEFAULT_TEMPLATE
        self.notifications.success("Mensagem restaurada para o padrão")

    def render(self) -> dict[str, Any]:
        return {
            "can_view": self.can_view(),
            "is_loading": self.is_loading,
            "is_saving": self.is_saving,
            "template": self.template,
            "placeholders": list(PLACEHOLDERS),
            "is_default": self.template == DEFAULT_TEMPLATE,
            "notifications": self.notifications.render(),
        }
