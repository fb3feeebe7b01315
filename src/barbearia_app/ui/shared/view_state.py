from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"
    STALE = "stale"
    ERROR = "error"
    NO_PERMISSION = "no_permission"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    trace_id: str | None = None

    @property
    def shows_rows(self) -> bool:
        return self.status in {ViewStateStatus.READY, ViewStateStatus.STALE}

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "trace_id": self.trace_id,
            "shows_rows": self.shows_rows,
        }


def resolve_state(
    *,
    row_count: int,
    is_loading: bool = False,
    error: str | None = None,
    can_view: bool = True,
    trace_id: str | None = None,
    empty_message: str = "Nenhum registro encontrado",
) -> ViewState:
    if not can_view:
        return ViewState(ViewStateStatus.NO_PERMISSION, "Acesso restrito ao gerente")
    if is_loading:
        return ViewState(ViewStateStatus.LOADING, "Carregando...")
    if error:
        # Rows from the previous load stay on screen next to the error.
        status = ViewStateStatus.STALE if row_count else ViewStateStatus.ERROR
        return ViewState(status, error, trace_id=trace_id)
    if row_count == 0:
        return ViewState(ViewStateStatus.EMPTY, empty_message)
    return ViewState(ViewStateStatus.READY)
