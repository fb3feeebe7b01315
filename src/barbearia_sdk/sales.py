from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .models import Product, ProductSaleCreate


class SaleError(ValueError):
    pass


@dataclass(frozen=True)
class SaleTotals:
    quantity: int
    sale_price: Decimal
    cost_price: Decimal
    total_sale: Decimal
    total_cost: Decimal
    profit: Decimal

    def to_create(self, product_id: str, sold_by: str, notes: str | None = None) -> ProductSaleCreate:
        return ProductSaleCreate(
            product_id=product_id,
            quantity=self.quantity,
            sale_price=self.sale_price,
            cost_price=self.cost_price,
            total_sale=self.total_sale,
            total_cost=self.total_cost,
            profit=self.profit,
            sold_by=sold_by,
            notes=notes,
        )


def compute_sale(product: Product, quantity: int) -> SaleTotals:
    """Price a sale at the product's current prices, refusing to oversell stock."""
    if quantity < 1:
        raise SaleError("Quantidade mínima é 1")
    if quantity > product.stock_quantity:
        raise SaleError("Estoque insuficiente")
    total_sale = product.sale_price * quantity
    total_cost = product.cost_price * quantity
    return SaleTotals(
        quantity=quantity,
        sale_price=product.sale_price,
        cost_price=product.cost_price,
        total_sale=total_sale,
        total_cost=total_cost,
        profit=total_sale - total_cost,
    )
