"""Fixed business catalog: barbers, bookable slots and services."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .models import AppointmentStatus

BARBERS: tuple[str, ...] = ("Lucas", "Luis Felipe")

OPENING_HOUR = 9
CLOSING_HOUR = 19


def generate_time_slots(opening_hour: int = OPENING_HOUR, closing_hour: int = CLOSING_HOUR) -> tuple[str, ...]:
    slots: list[str] = []
    for hour in range(opening_hour, closing_hour):
        slots.append(f"{hour:02d}:00")
        slots.append(f"{hour:02d}:30")
    return tuple(slots)


TIME_SLOTS = generate_time_slots()


@dataclass(frozen=True)
class Service:
    name: str
    duration: str
    price: Decimal


SERVICES: tuple[Service, ...] = (
    Service("Acabamento", "5min", Decimal("7.00")),
    Service("Acabamento+Barba", "30min", Decimal("32.00")),
    Service("Acabamento+Barba+Sobrancelha", "30min", Decimal("39.00")),
    Service("Barba", "25min", Decimal("25.00")),
    Service("Corte", "30min", Decimal("30.00")),
    Service("Cone Hidu", "25min", Decimal("15.00")),
    Service("Cone Hidu+Corte", "1hr", Decimal("45.00")),
    Service("Corte+Barba", "1hr", Decimal("55.00")),
    Service("Corte+Barba+Sobrancelha", "1hr", Decimal("62.00")),
    Service("Corte+Depilação Nasal", "1hr", Decimal("45.00")),
    Service("Corte+Sobrancelha", "30min", Decimal("37.00")),
)

_SERVICES_BY_NAME = {service.name: service for service in SERVICES}

STATUS_LABELS = {
    AppointmentStatus.SCHEDULED.value: "Agendado",
    AppointmentStatus.COMPLETED.value: "Concluído",
    AppointmentStatus.CANCELED.value: "Cancelado",
}

# The client screen phrases a pending booking from the customer's side.
CLIENT_STATUS_LABELS = {
    **STATUS_LABELS,
    AppointmentStatus.SCHEDULED.value: "Aguardando confirmação",
}


def find_service(name: str) -> Service | None:
    return _SERVICES_BY_NAME.get(name)


def service_price(name: str) -> Decimal:
    service = find_service(name)
    return service.price if service else Decimal("0.00")


def format_brl(value: Decimal | float | int | str) -> str:
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer_part, cents = f"{abs(amount):.2f}".split(".")
    grouped = f"{int(integer_part):,}".replace(",", ".")
    return f"{sign}R$ {grouped},{cents}"


def format_service_display(service: Service) -> str:
    return f"{service.name} - {service.duration} - {format_brl(service.price)}"


def status_label(status: str, *, for_client: bool = False) -> str:
    labels = CLIENT_STATUS_LABELS if for_client else STATUS_LABELS
    return labels.get(status, status)
