from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ..models import ProductSale, ProductSaleCreate
from ..query import TableQuery
from .base import TableClient


@dataclass
class ProductSalesClient(TableClient):
    table: str = "product_sales"

    def create(self, payload: ProductSaleCreate) -> ProductSale:
        row = self._insert(payload.model_dump(mode="json"), "create")
        return ProductSale.model_validate(row)

    def list_between(self, start: date, end: date) -> list[ProductSale]:
        # sold_at is a timestamp: include the whole last day.
        query = (
            TableQuery()
            .gte("sold_at", start)
            .lt("sold_at", end + timedelta(days=1))
            .order("sold_at", ascending=False)
        )
        return [ProductSale.model_validate(row) for row in self._select(query, "list_between")]
