from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from barbearia_sdk import BARBERS, SERVICES, ChangeFeed
from barbearia_sdk.catalog import status_label
from barbearia_sdk.models import Appointment, AppointmentStatus, AppointmentUpdate, Profile, UserRole
from barbearia_sdk.reminders import is_mobile_user_agent
from barbearia_sdk.validation import AppointmentForm, validate_form

from barbearia_app.infrastructure.logger import get_logger, log_action
from barbearia_app.services.appointment_service import AppointmentService, AppointmentStats
from barbearia_app.services.errors import ServiceError
from barbearia_app.services.profile_service import UNKNOWN_CLIENT_NAME, ProfileService
from barbearia_app.services.reminder_service import ReminderService
from barbearia_app.ui.shared.notification_center import NotificationCenter
from barbearia_app.ui.shared.view_state import resolve_state


@dataclass
class ManagerDashboardView:
    appointments: AppointmentService
    profiles: ProfileService
    reminders: ReminderService
    role: UserRole | None
    feed: ChangeFeed | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    rows: list[Appointment] = field(default_factory=list)
    clients: dict[str, Profile] = field(default_factory=dict)
    stats: AppointmentStats | None = None
    editing_id: str | None = None
    edit_form: dict[str, Any] = field(default_factory=dict)
    delete_confirm_id: str | None = None
    is_loading: bool = False
    error_message: str | None = None
    trace_id: str | None = None
    _unsubscribe: Callable[[], None] | None = None

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def load(self, today: date | None = None) -> bool:
        if not self.can_view():
            self.error_message = "Acesso restrito ao gerente"
            return False
        self.is_loading = True
        try:
            self.rows = self.appointments.list_all()
            self.clients = self.profiles.profiles_by_id(row.client_id for row in self.rows)
            self.error_message = None
        except ServiceError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False
        self.refresh_stats(today)
        return True

    def refresh_stats(self, today: date | None = None) -> None:
        try:
            self.stats = self.appointments.stats(today)
        except ServiceError:
            # Stats are secondary: keep the last numbers on screen.
            return

    def subscribe(self) -> None:
        if self.feed is not None and self._unsubscribe is None:
            self._unsubscribe = self.feed.subscribe("appointments", lambda table, event: self.load())

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def client_of(self, appointment: Appointment) -> Profile | None:
        return self.clients.get(appointment.client_id)

    def update_status(self, appointment_id: str, status: AppointmentStatus | str) -> dict[str, Any]:
        if not self.can_view():
            return {"ok": False, "error": "Acesso restrito ao gerente"}
        try:
            updated = self.appointments.set_status(appointment_id, status)
        except ServiceError as exc:
            self._audit("set_status", exc.trace_id, "failure")
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        self._audit("set_status", None, "success")
        self.notifications.success("Status atualizado com sucesso!")
        self.load()
        return {"ok": True, "status": updated.status}

    def complete(self, appointment_id: str) -> dict[str, Any]:
        return self.update_status(appointment_id, AppointmentStatus.COMPLETED)

    def cancel(self, appointment_id: str) -> dict[str, Any]:
        return self.update_status(appointment_id, AppointmentStatus.CANCELED)

    def start_edit(self, appointment_id: str) -> bool:
        target = next((row for row in self.rows if row.id == appointment_id), None)
        if target is None:
            return False
        self.editing_id = appointment_id
        self.edit_form = {
            "service": target.service,
            "barber": target.barber,
            "date": target.scheduled_date,
            "time": target.scheduled_time[:5],
            "notes": target.notes or "",
        }
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_form = {}

    def save_edit(self) -> dict[str, Any]:
        if self.editing_id is None:
            return {"ok": False, "error": "Nenhum agendamento em edição"}
        result = validate_form(AppointmentForm, self.edit_form)
        if not result.is_valid:
            self.notifications.error(result.first_error or "Dados inválidos")
            return {"ok": False, "error": result.first_error, "field_errors": result.field_errors}
        form: AppointmentForm = result.form  # type: ignore[assignment]
        fields = AppointmentUpdate(
            service=form.service,
            barber=form.barber,
            scheduled_date=form.date,
            scheduled_time=form.time,
            notes=form.notes,
        )
        try:
            self.appointments.update(self.editing_id, fields)
        except ServiceError as exc:
            self._audit("update", exc.trace_id, "failure")
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        self._audit("update", None, "success")
        self.notifications.success("Agendamento atualizado com sucesso!")
        self.cancel_edit()
        self.load()
        return {"ok": True}

    def request_delete(self, appointment_id: str) -> None:
        self.delete_confirm_id = appointment_id

    def confirm_delete(self) -> dict[str, Any]:
        appointment_id = self.delete_confirm_id
        if appointment_id is None:
            return {"ok": False, "error": "Nenhum agendamento selecionado"}
        try:
            self.appointments.delete(appointment_id)
        except ServiceError as exc:
            self._audit("delete", exc.trace_id, "failure")
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        self._audit("delete", None, "success")
        self.delete_confirm_id = None
        self.notifications.success("Agendamento excluído com sucesso!")
        self.load()
        return {"ok": True}

    def reminder_link(self, appointment_id: str, user_agent: str | None = None) -> dict[str, Any]:
        target = next((row for row in self.rows if row.id == appointment_id), None)
        if target is None:
            return {"ok": False, "error": "Agendamento não encontrado"}
        client = self.client_of(target)
        try:
            template = self.reminders.load_template()
            url = self.reminders.build_link(
                target,
                client.name if client else UNKNOWN_CLIENT_NAME,
                client.phone if client else None,
                mobile=is_mobile_user_agent(user_agent),
                template=template.value,
            )
        except ServiceError as exc:
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message}
        self.notifications.success("Abrindo WhatsApp...")
        return {"ok": True, "url": url}

    def _audit(self, action: str, trace_id: str | None, outcome: str) -> None:
        log_action(get_logger(), "appointments", action, self.role.value if self.role else None, trace_id, outcome)

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            row_count=len(self.rows),
            is_loading=self.is_loading,
            error=self.error_message,
            can_view=self.can_view(),
            trace_id=self.trace_id,
            empty_message="Nenhum agendamento encontrado",
        )
        rows = []
        for row in self.rows:
            client = self.client_of(row)
            rows.append(
                {
                    "id": row.id,
                    "client_name": client.name if client else UNKNOWN_CLIENT_NAME,
                    "client_email": client.email if client else "",
                    "client_phone": client.phone if client else None,
                    "service": row.service,
                    "barber": row.barber,
                    "date": row.scheduled_date.isoformat(),
                    "time": row.scheduled_time[:5],
                    "status": row.status,
                    "status_label": status_label(row.status),
                    "notes": row.notes,
                    "can_remind": bool(client and client.phone) and row.status == AppointmentStatus.SCHEDULED.value,
                }
            )
        return {
            "state": state.render(),
            "stats": (
                {"total": self.stats.total, "today": self.stats.today, "pending": self.stats.pending}
                if self.stats
                else {"total": 0, "today": 0, "pending": 0}
            ),
            "appointments": rows,
            "editing_id": self.editing_id,
            "edit_form": dict(self.edit_form),
            "delete_confirm_id": self.delete_confirm_id,
            "services": [service.name for service in SERVICES],
            "barbers": list(BARBERS),
            "notifications": self.notifications.render(),
        }
