"""Free/busy computation for one barber on one day.

Existing bookings and manager blocks are merged over the fixed slot grid.
A booking occupies only its start slot; a partial block occupies every slot
between its start and end, both ends included.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from .catalog import TIME_SLOTS
from .models import Appointment, AppointmentStatus, BarberBlock


def normalize_time(value: str | None) -> str | None:
    """Trim backend ``HH:MM:SS`` times to the ``HH:MM`` used by the grid."""
    if not value:
        return None
    return value.strip()[:5]


def slots_taken_by_appointments(appointments: Iterable[Appointment]) -> set[str]:
    taken: set[str] = set()
    for appointment in appointments:
        if appointment.status == AppointmentStatus.CANCELED.value:
            continue
        slot = normalize_time(appointment.scheduled_time)
        if slot:
            taken.add(slot)
    return taken


def slots_taken_by_blocks(blocks: Iterable[BarberBlock], slots: Sequence[str] = TIME_SLOTS) -> set[str]:
    taken: set[str] = set()
    for block in blocks:
        if block.is_full_day:
            taken.update(slots)
            continue
        start = normalize_time(block.start_time)
        end = normalize_time(block.end_time)
        if not start or not end:
            continue
        taken.update(slot for slot in slots if start <= slot <= end)
    return taken


def occupied_slots(
    appointments: Iterable[Appointment],
    blocks: Iterable[BarberBlock],
    slots: Sequence[str] = TIME_SLOTS,
) -> set[str]:
    return slots_taken_by_appointments(appointments) | slots_taken_by_blocks(blocks, slots)


def available_slots(
    appointments: Iterable[Appointment],
    blocks: Iterable[BarberBlock],
    slots: Sequence[str] = TIME_SLOTS,
) -> list[str]:
    occupied = occupied_slots(appointments, blocks, slots)
    return [slot for slot in slots if slot not in occupied]


def elapsed_slots(target_date: date, now: datetime, slots: Sequence[str] = TIME_SLOTS) -> set[str]:
    """Slots that can no longer be booked because they are already in the past."""
    today = now.date()
    if target_date > today:
        return set()
    if target_date < today:
        return set(slots)
    current = now.strftime("%H:%M")
    return {slot for slot in slots if slot <= current}


@dataclass(frozen=True)
class SlotGrid:
    slots: tuple[str, ...]
    occupied: frozenset[str]
    elapsed: frozenset[str] = frozenset()

    @property
    def available(self) -> list[str]:
        return [slot for slot in self.slots if self.is_available(slot)]

    def is_available(self, slot: str) -> bool:
        normalized = normalize_time(slot)
        return (
            normalized in self.slots
            and normalized not in self.occupied
            and normalized not in self.elapsed
        )

    def render(self) -> list[dict[str, object]]:
        return [
            {
                "slot": slot,
                "available": self.is_available(slot),
                "occupied": slot in self.occupied,
                "elapsed": slot in self.elapsed,
            }
            for slot in self.slots
        ]


def build_slot_grid(
    appointments: Iterable[Appointment],
    blocks: Iterable[BarberBlock],
    *,
    target_date: date,
    now: datetime | None = None,
    slots: Sequence[str] = TIME_SLOTS,
) -> SlotGrid:
    grid_slots = tuple(slots)
    elapsed: set[str] = set()
    if now is not None:
        elapsed = elapsed_slots(target_date, now, grid_slots)
    return SlotGrid(
        slots=grid_slots,
        occupied=frozenset(occupied_slots(appointments, blocks, grid_slots)),
        elapsed=frozenset(elapsed),
    )
