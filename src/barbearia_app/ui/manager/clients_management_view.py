from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from barbearia_sdk.catalog import status_label
from barbearia_sdk.models import UserRole

from barbearia_app.services.client_directory_service import ClientDirectoryService, ClientSummary, search_clients
from barbearia_app.services.errors import ServiceError
from barbearia_app.ui.shared.notification_center import NotificationCenter
from barbearia_app.ui.shared.view_state import resolve_state


@dataclass
class ClientsManagementView:
    directory: ClientDirectoryService
    role: UserRole | None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    summaries: list[ClientSummary] = field(default_factory=list)
    search_term: str = ""
    selected_id: str | None = None
    is_loading: bool = False
    error_message: str | None = None

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def load(self) -> bool:
        if not self.can_view():
            self.error_message = "Acesso restrito ao gerente"
            return False
        self.is_loading = True
        try:
            self.summaries = self.directory.load()
            self.error_message = None
            return True
        except ServiceError as exc:
            self.error_message = exc.message
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False

    def search(self, term: str) -> list[ClientSummary]:
        self.search_term = term
        return self.filtered()

    def filtered(self) -> list[ClientSummary]:
        return search_clients(self.summaries, self.search_term)

    def select(self, client_id: str | None) -> bool:
        if client_id is None:
            self.selected_id = None
            return True
        if not any(summary.profile.id == client_id for summary in self.summaries):
            return False
        self.selected_id = client_id
        return True

    def selected(self) -> ClientSummary | None:
        return next((summary for summary in self.summaries if summary.profile.id == self.selected_id), None)

    @staticmethod
    def _summary_row(summary: ClientSummary) -> dict[str, Any]:
        return {
            "id": summary.profile.id,
            "name": summary.profile.name,
            "email": summary.profile.email,
            "phone": summary.profile.phone,
            "total": summary.total,
            "completed": summary.completed,
            "canceled": summary.canceled,
            "pending": summary.pending,
        }

    def render(self) -> dict[str, Any]:
        filtered = self.filtered()
        state = resolve_state(
            row_count=len(filtered),
            is_loading=self.is_loading,
            error=self.error_message,
            can_view=self.can_view(),
            empty_message="Nenhum cliente encontrado",
        )
        selected = self.selected()
        detail = None
        if selected is not None:
            detail = {
                **self._summary_row(selected),
                "history": [
                    {
                        "id": appointment.id,
                        "service": appointment.service,
                        "barber": appointment.barber,
                        "date": appointment.scheduled_date.isoformat(),
                        "time": appointment.scheduled_time[:5],
                        "status": appointment.status,
                        "status_label": status_label(appointment.status),
                    }
                    for appointment in selected.appointments
                ],
            }
        return {
            "state": state.render(),
            "search_term": self.search_term,
            "clients": [self._summary_row(summary) for summary in filtered],
            "selected": detail,
            "notifications": self.notifications.render(),
        }
