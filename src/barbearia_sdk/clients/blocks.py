from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..models import BarberBlock, BarberBlockCreate
from ..query import TableQuery
from .base import TableClient


@dataclass
class BlocksClient(TableClient):
    table: str = "barber_blocks"

    def list(self) -> list[BarberBlock]:
        query = TableQuery().order("block_date").order("start_time")
        return [BarberBlock.model_validate(row) for row in self._select(query, "list")]

    def list_for(self, barber: str, block_date: date) -> list[BarberBlock]:
        query = TableQuery().eq("barber", barber).eq("block_date", block_date)
        return [BarberBlock.model_validate(row) for row in self._select(query, "list_for")]

    def create(self, payload: BarberBlockCreate) -> BarberBlock:
        row = self._insert(payload.model_dump(mode="json"), "create")
        return BarberBlock.model_validate(row)

    def delete(self, block_id: str) -> None:
        self._delete(block_id)
