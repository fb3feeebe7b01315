from __future__ import annotations

from dataclasses import dataclass

from ..models import Setting
from ..query import TableQuery
from .base import TableClient


@dataclass
class SettingsClient(TableClient):
    table: str = "settings"

    def get(self, key: str) -> Setting | None:
        row = self._select_single(TableQuery().eq("key", key))
        return Setting.model_validate(row) if row else None

    def create(self, key: str, value: str, description: str | None = None) -> Setting:
        row = self._insert({"key": key, "value": value, "description": description}, "create")
        return Setting.model_validate(row)

    def update(self, setting_id: str, value: str) -> Setting:
        row = self._update(setting_id, {"value": value})
        return Setting.model_validate(row)
