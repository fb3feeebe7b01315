from __future__ import annotations

import logging
from dataclasses import dataclass

from barbearia_sdk import ApiSession, ChangeFeed, compute_sale
from barbearia_sdk.models import Product, ProductSale, ProductUpdate
from barbearia_sdk.validation import SaleForm

from barbearia_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaleOutcome:
    sale: ProductSale
    product: Product


class SaleService:
    def __init__(self, session: ApiSession, feed: ChangeFeed | None = None) -> None:
        self.session = session
        self.feed = feed

    def register_sale(self, form: SaleForm, product: Product | None, sold_by: str | None) -> SaleOutcome:
        """Record the sale row, then take the quantity out of stock.

        The two writes are not atomic: if the stock update fails the sale row
        is already stored and the failure is reported to the caller.
        """
        if not sold_by:
            raise ServiceError(message="Usuário não autenticado", code="NOT_AUTHENTICATED")
        if product is None or product.id != form.product_id:
            raise ServiceError(message="Produto não encontrado", code="PRODUCT_NOT_FOUND")
        try:
            totals = compute_sale(product, form.quantity)
        except Exception as exc:
            logger.warning("sale_rejected", extra={"product_id": product.id, "quantity": form.quantity})
            raise normalize_error(exc, "Erro ao registrar venda") from exc

        logger.info("sale_create_attempt", extra={"product_id": product.id, "quantity": form.quantity})
        try:
            sale = self.session.product_sales_client().create(totals.to_create(product.id, sold_by, form.notes))
            updated = self.session.products_client().update(
                product.id,
                ProductUpdate(stock_quantity=product.stock_quantity - totals.quantity),
            )
        except Exception as exc:
            logger.exception("sale_create_failure", extra={"product_id": product.id})
            raise normalize_error(exc, "Erro ao registrar venda") from exc
        logger.info("sale_create_success", extra={"sale_id": sale.id, "profit": str(sale.profit)})
        if self.feed:
            self.feed.publish("product_sales", "INSERT", sale.model_dump(mode="json"))
            self.feed.publish("products", "UPDATE", updated.model_dump(mode="json"))
        return SaleOutcome(sale=sale, product=updated)
