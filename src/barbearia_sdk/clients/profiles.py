from __future__ import annotations

from dataclasses import dataclass

from ..models import Profile
from ..query import TableQuery
from .base import TableClient


@dataclass
class ProfilesClient(TableClient):
    table: str = "profiles"

    def get(self, profile_id: str) -> Profile | None:
        row = self._select_single(TableQuery().eq("id", profile_id))
        return Profile.model_validate(row) if row else None

    def list(self, order_by_created_desc: bool = True) -> list[Profile]:
        query = TableQuery().order("created_at", ascending=not order_by_created_desc)
        return [Profile.model_validate(row) for row in self._select(query, "list")]

    def list_by_ids(self, profile_ids: list[str]) -> list[Profile]:
        if not profile_ids:
            return []
        query = TableQuery(select="id,name,email,phone").in_("id", sorted(set(profile_ids)))
        return [Profile.model_validate(row) for row in self._select(query, "list_by_ids")]
