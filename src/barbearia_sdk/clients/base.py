from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient
from ..query import TableQuery

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)


@dataclass
class TableClient(BaseClient):
    """Row access for one PostgREST table under ``/rest/v1``."""

    table: str = ""

    @property
    def _path(self) -> str:
        return f"/rest/v1/{self.table}"

    def _select(self, query: TableQuery, operation: str = "select") -> list[dict[str, Any]]:
        data = self._request("GET", self._path, params=query.to_params(), module=self.table, operation=operation)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Expected {self.table} rows to be a JSON array")
        return data

    def _select_single(self, query: TableQuery, operation: str = "get") -> dict[str, Any] | None:
        query.limit = 1
        rows = self._select(query, operation)
        return rows[0] if rows else None

    def _count(self, query: TableQuery, operation: str = "count") -> int:
        return self.http.count(
            self._path,
            headers=self._auth_headers(),
            params=query.to_params(),
            module=self.table,
            operation=operation,
        )

    def _insert(self, row: dict[str, Any], operation: str = "insert") -> dict[str, Any]:
        data = self._request(
            "POST",
            self._path,
            json_body=row,
            headers=RETURN_REPRESENTATION,
            module=self.table,
            operation=operation,
        )
        return self._single_row(data, operation)

    def _update(self, row_id: str, fields: dict[str, Any], operation: str = "update") -> dict[str, Any]:
        data = self._request(
            "PATCH",
            self._path,
            json_body=fields,
            params={"id": f"eq.{row_id}"},
            headers=RETURN_REPRESENTATION,
            module=self.table,
            operation=operation,
        )
        return self._single_row(data, operation)

    def _delete(self, row_id: str, operation: str = "delete") -> None:
        self._request(
            "DELETE",
            self._path,
            params={"id": f"eq.{row_id}"},
            module=self.table,
            operation=operation,
        )

    def _single_row(self, data: Any, operation: str) -> dict[str, Any]:
        if isinstance(data, list):
            if not data:
                raise ValueError(f"{self.table} {operation} returned no rows")
            data = data[0]
        if not isinstance(data, dict):
            raise ValueError(f"Expected {self.table} {operation} response to be a JSON object")
        return data
