from __future__ import annotations

from dataclasses import dataclass

from ..models import Product, ProductUpdate, ProductWrite
from ..query import TableQuery
from .base import TableClient


@dataclass
class ProductsClient(TableClient):
    table: str = "products"

    def list(self) -> list[Product]:
        query = TableQuery().order("name")
        return [Product.model_validate(row) for row in self._select(query, "list")]

    def list_sellable(self) -> list[Product]:
        query = TableQuery().eq("is_active", True).gt("stock_quantity", 0).order("name")
        return [Product.model_validate(row) for row in self._select(query, "list_sellable")]

    def get(self, product_id: str) -> Product | None:
        row = self._select_single(TableQuery().eq("id", product_id))
        return Product.model_validate(row) if row else None

    def create(self, payload: ProductWrite) -> Product:
        row = self._insert(payload.model_dump(mode="json"), "create")
        return Product.model_validate(row)

    def update(self, product_id: str, fields: ProductUpdate) -> Product:
        changes = fields.model_dump(mode="json", exclude_unset=True)
        if not changes:
            raise ValueError("No product fields to update")
        row = self._update(product_id, changes)
        return Product.model_validate(row)

    def delete(self, product_id: str) -> None:
        self._delete(product_id)
