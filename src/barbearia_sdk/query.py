from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    if value is None:
        return "null"
    return str(value)


@dataclass
class TableQuery:
    """PostgREST query parameters for one table read.

    Filters are stored as ``(column, operator, value)`` and rendered as
    ``column=operator.value``; repeated columns (``gte`` and ``lte`` on the
    same date) are joined with ``and=(...)``.
    """

    select: str = "*"
    filters: list[tuple[str, str, Any]] = field(default_factory=list)
    ordering: list[tuple[str, bool]] = field(default_factory=list)
    limit: int | None = None

    def _add(self, column: str, operator: str, value: Any) -> "TableQuery":
        self.filters.append((column, operator, value))
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        return self._add(column, "eq", value)

    def neq(self, column: str, value: Any) -> "TableQuery":
        return self._add(column, "neq", value)

    def gt(self, column: str, value: Any) -> "TableQuery":
        return self._add(column, "gt", value)

    def gte(self, column: str, value: Any) -> "TableQuery":
        return self._add(column, "gte", value)

    def lt(self, column: str, value: Any) -> "TableQuery":
        return self._add(column, "lt", value)

    def lte(self, column: str, value: Any) -> "TableQuery":
        return self._add(column, "lte", value)

    def in_(self, column: str, values: Iterable[Any]) -> "TableQuery":
        rendered = ",".join(_render(value) for value in values)
        return self._add(column, "in", f"({rendered})")

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self.ordering.append((column, ascending))
        return self

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {"select": self.select}
        by_column: dict[str, list[str]] = {}
        for column, operator, value in self.filters:
            by_column.setdefault(column, []).append(f"{operator}.{_render(value)}")
        combined: list[str] = []
        for column, expressions in by_column.items():
            if len(expressions) == 1:
                params[column] = expressions[0]
            else:
                combined.extend(f"{column}.{expression}" for expression in expressions)
        if combined:
            params["and"] = f"({','.join(combined)})"
        if self.ordering:
            params["order"] = ",".join(
                f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in self.ordering
            )
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params
