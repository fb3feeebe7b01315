from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from barbearia_sdk import BARBERS, SERVICES, ChangeFeed, SlotGrid
from barbearia_sdk.catalog import format_service_display, status_label
from barbearia_sdk.models import Appointment, AppointmentStatus, Profile
from barbearia_sdk.validation import AppointmentForm, validate_form

from barbearia_app.services.appointment_service import AppointmentService
from barbearia_app.services.errors import ServiceError
from barbearia_app.services.profile_service import ProfileService
from barbearia_app.ui.shared.notification_center import NotificationCenter
from barbearia_app.ui.shared.view_state import resolve_state

WATCHED_TABLES = ("appointments", "barber_blocks")


def _empty_form() -> dict[str, Any]:
    return {"service": "", "barber": "", "date": None, "time": "", "notes": ""}


@dataclass
class ClientDashboardView:
    appointments: AppointmentService
    profiles: ProfileService
    user_id: str
    feed: ChangeFeed | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    profile: Profile | None = None
    rows: list[Appointment] = field(default_factory=list)
    form: dict[str, Any] = field(default_factory=_empty_form)
    grid: SlotGrid | None = None
    cancel_confirm_id: str | None = None
    is_loading: bool = False
    is_submitting: bool = False
    error_message: str | None = None
    _unsubscribers: list[Callable[[], None]] = field(default_factory=list)

    def load(self) -> bool:
        self.is_loading = True
        try:
            try:
                self.profile = self.profiles.load_profile(self.user_id)
            except ServiceError as exc:
                self.notifications.failure(exc)
            self.rows = self.appointments.list_for_client(self.user_id)
            self.error_message = None
            return True
        except ServiceError as exc:
            self.error_message = exc.message
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False

    def subscribe(self) -> None:
        if self.feed is None or self._unsubscribers:
            return
        for table in WATCHED_TABLES:
            self._unsubscribers.append(self.feed.subscribe(table, self._on_change))

    def close(self) -> None:
        while self._unsubscribers:
            self._unsubscribers.pop()()

    def _on_change(self, table: str, event: dict[str, Any]) -> None:
        if table == "appointments":
            self.load()
        self.refresh_slots()

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.form:
            raise KeyError(name)
        self.form[name] = value
        if name in ("barber", "date"):
            # A time picked for another barber or day is no longer valid.
            self.form["time"] = ""
            self.refresh_slots()

    def refresh_slots(self) -> None:
        barber = self.form.get("barber")
        selected = self.form.get("date")
        if not barber or not selected:
            self.grid = None
            return
        if isinstance(selected, str):
            try:
                selected = date.fromisoformat(selected)
            except ValueError:
                self.grid = None
                return
        try:
            self.grid = self.appointments.slot_grid(barber, selected)
        except ServiceError as exc:
            self.grid = None
            self.notifications.failure(exc)

    def create_appointment(self) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Agendamento já em andamento"}
        result = validate_form(AppointmentForm, self.form)
        if not result.is_valid:
            self.notifications.error(result.first_error or "Dados inválidos")
            return {"ok": False, "error": result.first_error, "field_errors": result.field_errors}
        self.is_submitting = True
        try:
            created = self.appointments.book(self.user_id, result.form)  # type: ignore[arg-type]
        except ServiceError as exc:
            self.notifications.failure(exc)
            if exc.code == "SLOT_UNAVAILABLE":
                self.refresh_slots()
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        finally:
            self.is_submitting = False
        self.notifications.success("Agendamento realizado com sucesso!")
        self.form = _empty_form()
        self.grid = None
        self.load()
        return {"ok": True, "appointment": created.model_dump(mode="json")}

    def request_cancel(self, appointment_id: str) -> None:
        self.cancel_confirm_id = appointment_id

    def dismiss_cancel(self) -> None:
        self.cancel_confirm_id = None

    def confirm_cancel(self) -> dict[str, Any]:
        appointment_id = self.cancel_confirm_id
        if appointment_id is None:
            return {"ok": False, "error": "Nenhum agendamento selecionado"}
        target = next((row for row in self.rows if row.id == appointment_id), None)
        if target is None or not self.can_cancel(target):
            self.cancel_confirm_id = None
            return {"ok": False, "error": "Este agendamento não pode ser cancelado"}
        try:
            self.appointments.cancel(appointment_id)
        except ServiceError as exc:
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        self.cancel_confirm_id = None
        self.notifications.success("Agendamento cancelado com sucesso!")
        self.load()
        return {"ok": True}

    def can_cancel(self, appointment: Appointment) -> bool:
        return appointment.client_id == self.user_id and appointment.status == AppointmentStatus.SCHEDULED.value

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            row_count=len(self.rows),
            is_loading=self.is_loading,
            error=self.error_message,
            empty_message="Você ainda não possui agendamentos",
        )
        return {
            "state": state.render(),
            "profile": {"name": self.profile.name, "email": self.profile.email} if self.profile else None,
            "appointments": [
                {
                    "id": row.id,
                    "service": row.service,
                    "barber": row.barber,
                    "date": row.scheduled_date.isoformat(),
                    "time": row.scheduled_time[:5],
                    "status": row.status,
                    "status_label": status_label(row.status, for_client=True),
                    "notes": row.notes,
                    "can_cancel": self.can_cancel(row),
                }
                for row in self.rows
            ],
            "services": [format_service_display(service) for service in SERVICES],
            "barbers": list(BARBERS),
            "form": dict(self.form),
            "slots": self.grid.render() if self.grid else [],
            "available_slots": self.grid.available if self.grid else [],
            "cancel_confirm_id": self.cancel_confirm_id,
            "notifications": self.notifications.render(),
        }
