from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..models import Appointment, AppointmentCreate, AppointmentStatus, AppointmentUpdate
from ..query import TableQuery
from .base import TableClient


@dataclass
class AppointmentsClient(TableClient):
    table: str = "appointments"

    def list(self, client_id: str | None = None, *, newest_first: bool = False) -> list[Appointment]:
        query = TableQuery()
        if client_id:
            query.eq("client_id", client_id)
        query.order("scheduled_date", ascending=not newest_first)
        query.order("scheduled_time", ascending=not newest_first)
        return [Appointment.model_validate(row) for row in self._select(query, "list")]

    def list_for_slot_check(self, barber: str, scheduled_date: date) -> list[Appointment]:
        query = (
            TableQuery()
            .eq("barber", barber)
            .eq("scheduled_date", scheduled_date)
            .neq("status", AppointmentStatus.CANCELED)
        )
        return [Appointment.model_validate(row) for row in self._select(query, "list_for_slot_check")]

    def list_completed_between(self, start: date, end: date) -> list[Appointment]:
        query = (
            TableQuery()
            .eq("status", AppointmentStatus.COMPLETED)
            .gte("scheduled_date", start)
            .lte("scheduled_date", end)
        )
        return [Appointment.model_validate(row) for row in self._select(query, "list_completed_between")]

    def count(self, **filters: Any) -> int:
        query = TableQuery()
        for column, value in filters.items():
            query.eq(column, value)
        return self._count(query)

    def create(self, payload: AppointmentCreate) -> Appointment:
        row = self._insert(payload.model_dump(mode="json"), "create")
        return Appointment.model_validate(row)

    def update(self, appointment_id: str, fields: AppointmentUpdate) -> Appointment:
        changes = fields.model_dump(mode="json", exclude_unset=True)
        if not changes:
            raise ValueError("No appointment fields to update")
        row = self._update(appointment_id, changes)
        return Appointment.model_validate(row)

    def set_status(self, appointment_id: str, status: AppointmentStatus) -> Appointment:
        return self.update(appointment_id, AppointmentUpdate(status=status))

    def delete(self, appointment_id: str) -> None:
        self._delete(appointment_id)
