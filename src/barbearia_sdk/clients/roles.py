from __future__ import annotations

from dataclasses import dataclass

from ..models import UserRole
from ..query import TableQuery
from .base import TableClient


@dataclass
class RolesClient(TableClient):
    table: str = "user_roles"

    def get_role(self, user_id: str) -> UserRole | None:
        row = self._select_single(TableQuery(select="role").eq("user_id", user_id), "get_role")
        if not row or not row.get("role"):
            return None
        try:
            return UserRole(row["role"])
        except ValueError:
            return None
