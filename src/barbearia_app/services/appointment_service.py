from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

from barbearia_sdk import ApiSession, ChangeFeed, SlotGrid, build_slot_grid, normalize_time
from barbearia_sdk.models import Appointment, AppointmentCreate, AppointmentStatus, AppointmentUpdate
from barbearia_sdk.validation import AppointmentForm

from barbearia_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

TABLE = "appointments"


@dataclass(frozen=True)
class AppointmentStats:
    total: int
    today: int
    pending: int


class AppointmentService:
    def __init__(
        self,
        session: ApiSession,
        feed: ChangeFeed | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.session = session
        self.feed = feed
        self.clock = clock

    def list_for_client(self, client_id: str) -> list[Appointment]:
        try:
            return self.session.appointments_client().list(client_id=client_id)
        except Exception as exc:
            logger.exception("appointments_list_failure", extra={"client_id": client_id})
            raise normalize_error(exc, "Erro ao carregar agendamentos") from exc

    def list_all(self, *, newest_first: bool = False) -> list[Appointment]:
        try:
            return self.session.appointments_client().list(newest_first=newest_first)
        except Exception as exc:
            logger.exception("appointments_list_failure")
            raise normalize_error(exc, "Erro ao carregar agendamentos") from exc

    def slot_grid(self, barber: str, target_date: date) -> SlotGrid:
        try:
            appointments = self.session.appointments_client().list_for_slot_check(barber, target_date)
            blocks = self.session.blocks_client().list_for(barber, target_date)
        except Exception as exc:
            logger.exception("slot_grid_failure", extra={"barber": barber, "date": target_date.isoformat()})
            raise normalize_error(exc, "Erro ao carregar horários disponíveis") from exc
        return build_slot_grid(appointments, blocks, target_date=target_date, now=self.clock())

    def book(self, client_id: str, form: AppointmentForm) -> Appointment:
        logger.info("appointment_create_attempt", extra={"barber": form.barber, "date": form.date.isoformat(), "time": form.time})
        grid = self.slot_grid(form.barber, form.date)
        if not grid.is_available(form.time):
            logger.warning("appointment_slot_taken", extra={"barber": form.barber, "time": form.time})
            raise ServiceError(message="Horário indisponível", details="SLOT_UNAVAILABLE", code="SLOT_UNAVAILABLE")
        payload = AppointmentCreate(
            client_id=client_id,
            service=form.service,
            barber=form.barber,
            scheduled_date=form.date,
            scheduled_time=form.time,
            notes=form.notes,
        )
        try:
            created = self.session.appointments_client().create(payload)
        except Exception as exc:
            logger.exception("appointment_create_failure", extra={"barber": form.barber})
            raise normalize_error(exc, "Erro ao criar agendamento") from exc
        logger.info("appointment_create_success", extra={"appointment_id": created.id})
        self._publish("INSERT", created)
        return created

    def cancel(self, appointment_id: str) -> Appointment:
        return self._change_status(appointment_id, AppointmentStatus.CANCELED, "Erro ao cancelar agendamento")

    def set_status(self, appointment_id: str, status: AppointmentStatus | str) -> Appointment:
        return self._change_status(appointment_id, AppointmentStatus(status), "Erro ao atualizar status")

    def update(self, appointment_id: str, fields: AppointmentUpdate) -> Appointment:
        if fields.scheduled_time:
            fields = fields.model_copy(update={"scheduled_time": normalize_time(fields.scheduled_time)})
        try:
            updated = self.session.appointments_client().update(appointment_id, fields)
        except Exception as exc:
            logger.exception("appointment_update_failure", extra={"appointment_id": appointment_id})
            raise normalize_error(exc, "Erro ao atualizar agendamento") from exc
        logger.info("appointment_update_success", extra={"appointment_id": appointment_id})
        self._publish("UPDATE", updated)
        return updated

    def delete(self, appointment_id: str) -> None:
        try:
            self.session.appointments_client().delete(appointment_id)
        except Exception as exc:
            logger.exception("appointment_delete_failure", extra={"appointment_id": appointment_id})
            raise normalize_error(exc, "Erro ao excluir agendamento") from exc
        logger.info("appointment_delete_success", extra={"appointment_id": appointment_id})
        if self.feed:
            self.feed.publish(TABLE, "DELETE", {"id": appointment_id})

    def stats(self, today: date | None = None) -> AppointmentStats:
        day = today or self.clock().date()
        client = self.session.appointments_client()
        try:
            return AppointmentStats(
                total=client.count(),
                today=client.count(scheduled_date=day),
                pending=client.count(status=AppointmentStatus.SCHEDULED),
            )
        except Exception as exc:
            logger.exception("appointment_stats_failure")
            raise normalize_error(exc, "Erro ao carregar estatísticas") from exc

    def _change_status(self, appointment_id: str, status: AppointmentStatus, failure_message: str) -> Appointment:
        logger.info("appointment_status_attempt", extra={"appointment_id": appointment_id, "status": status.value})
        try:
            updated = self.session.appointments_client().set_status(appointment_id, status)
        except Exception as exc:
            logger.exception("appointment_status_failure", extra={"appointment_id": appointment_id})
            raise normalize_error(exc, failure_message) from exc
        logger.info("appointment_status_success", extra={"appointment_id": appointment_id, "status": status.value})
        self._publish("UPDATE", updated)
        return updated

    def _publish(self, event: str, appointment: Appointment) -> None:
        if self.feed:
            self.feed.publish(TABLE, event, appointment.model_dump(mode="json"))
