from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from barbearia_sdk import BARBERS, TIME_SLOTS, ChangeFeed
from barbearia_sdk.models import BarberBlock, UserRole
from barbearia_sdk.validation import BlockForm, validate_form

from barbearia_app.infrastructure.logger import get_logger, log_action
from barbearia_app.services.block_service import TABLE, BlockService, group_by_barber
from barbearia_app.services.errors import ServiceError
from barbearia_app.ui.shared.notification_center import NotificationCenter
from barbearia_app.ui.shared.view_state import resolve_state


def _block_row(block: BarberBlock) -> dict[str, Any]:
    return {
        "id": block.id,
        "date": block.block_date.isoformat(),
        "is_full_day": block.is_full_day,
        "start_time": block.start_time[:5] if block.start_time else None,
        "end_time": block.end_time[:5] if block.end_time else None,
        "reason": block.reason,
        "label": "Dia inteiro" if block.is_full_day else f"{(block.start_time or '')[:5]} - {(block.end_time or '')[:5]}",
    }


@dataclass
class ScheduleBlocksView:
    blocks: BlockService
    role: UserRole | None
    feed: ChangeFeed | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    rows: list[BarberBlock] = field(default_factory=list)
    is_loading: bool = False
    is_submitting: bool = False
    error_message: str | None = None
    _unsubscribe: Callable[[], None] | None = None

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def load(self) -> bool:
        if not self.can_view():
            self.error_message = "Acesso restrito ao gerente"
            return False
        self.is_loading = True
        try:
            self.rows = self.blocks.list_blocks()
            self.error_message = None
            return True
        except ServiceError as exc:
            self.error_message = exc.message
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False

    def subscribe(self) -> None:
        if self.feed is not None and self._unsubscribe is None:
            self._unsubscribe = self.feed.subscribe(TABLE, lambda table, event: self.load())

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        if not self.can_view():
            return {"ok": False, "error": "Acesso restrito ao gerente"}
        result = validate_form(BlockForm, data)
        if not result.is_valid:
            self.notifications.error(result.first_error or "Dados inválidos")
            return {"ok": False, "error": result.first_error, "field_errors": result.field_errors}
        self.is_submitting = True
        try:
            created = self.blocks.create(result.form)  # type: ignore[arg-type]
        except ServiceError as exc:
            self._audit("create", exc.trace_id, "failure")
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        finally:
            self.is_submitting = False
        self._audit("create", None, "success")
        self.notifications.success("Bloqueio criado com sucesso!")
        self.load()
        return {"ok": True, "block": _block_row(created)}

    def delete(self, block_id: str) -> dict[str, Any]:
        if not self.can_view():
            return {"ok": False, "error": "Acesso restrito ao gerente"}
        try:
            self.blocks.delete(block_id)
        except ServiceError as exc:
            self._audit("delete", exc.trace_id, "failure")
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        self._audit("delete", None, "success")
        self.notifications.success("Bloqueio removido com sucesso!")
        self.load()
        return {"ok": True}

    def _audit(self, action: str, trace_id: str | None, outcome: str) -> None:
        log_action(get_logger(), "barber_blocks", action, self.role.value if self.role else None, trace_id, outcome)

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            row_count=len(self.rows),
            is_loading=self.is_loading,
            error=self.error_message,
            can_view=self.can_view(),
            empty_message="Nenhum bloqueio cadastrado",
        )
        grouped = group_by_barber(self.rows)
        return {
            "state": state.render(),
            "barbers": list(BARBERS),
            "time_slots": list(TIME_SLOTS),
            "blocks_by_barber": {barber: [_block_row(block) for block in blocks] for barber, blocks in grouped.items()},
            "is_submitting": self.is_submitting,
            "notifications": self.notifications.render(),
        }
