from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from barbearia_sdk import ApiSession
from barbearia_sdk.models import Appointment, AppointmentStatus, Profile

from barbearia_app.services.errors import normalize_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSummary:
    profile: Profile
    appointments: tuple[Appointment, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.appointments)

    @property
    def completed(self) -> int:
        return self._count(AppointmentStatus.COMPLETED)

    @property
    def canceled(self) -> int:
        return self._count(AppointmentStatus.CANCELED)

    @property
    def pending(self) -> int:
        return self._count(AppointmentStatus.SCHEDULED)

    def _count(self, status: AppointmentStatus) -> int:
        return sum(1 for appointment in self.appointments if appointment.status == status.value)

    def matches(self, term: str) -> bool:
        needle = term.strip().lower()
        if not needle:
            return True
        return needle in self.profile.name.lower() or needle in self.profile.email.lower()


def build_summaries(profiles: Iterable[Profile], appointments: Iterable[Appointment]) -> list[ClientSummary]:
    by_client: dict[str, list[Appointment]] = {}
    for appointment in appointments:
        by_client.setdefault(appointment.client_id, []).append(appointment)
    return [ClientSummary(profile=profile, appointments=tuple(by_client.get(profile.id, ()))) for profile in profiles]


def search_clients(summaries: Iterable[ClientSummary], term: str) -> list[ClientSummary]:
    return [summary for summary in summaries if summary.matches(term)]


class ClientDirectoryService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load(self) -> list[ClientSummary]:
        try:
            profiles = self.session.profiles_client().list(order_by_created_desc=True)
            appointments = self.session.appointments_client().list(newest_first=True)
        except Exception as exc:
            logger.exception("clients_load_failure")
            raise normalize_error(exc, "Erro ao carregar clientes") from exc
        summaries = build_summaries(profiles, appointments)
        logger.info("clients_loaded", extra={"count": len(summaries)})
        return summaries
