from __future__ import annotations

import logging

from barbearia_sdk import ApiSession, ChangeFeed
from barbearia_sdk.models import Product, ProductUpdate, ProductWrite
from barbearia_sdk.validation import ProductForm

from barbearia_app.services.errors import normalize_error

logger = logging.getLogger(__name__)

TABLE = "products"


class ProductService:
    def __init__(self, session: ApiSession, feed: ChangeFeed | None = None) -> None:
        self.session = session
        self.feed = feed

    def list_products(self) -> list[Product]:
        try:
            return self.session.products_client().list()
        except Exception as exc:
            logger.exception("products_list_failure")
            raise normalize_error(exc, "Erro ao carregar produtos") from exc

    def list_sellable(self) -> list[Product]:
        try:
            return self.session.products_client().list_sellable()
        except Exception as exc:
            logger.exception("products_sellable_failure")
            raise normalize_error(exc, "Erro ao carregar produtos") from exc

    def save(self, form: ProductForm, product_id: str | None = None) -> Product:
        """Insert a new product, or replace every editable field of an existing one."""
        fields = form.model_dump()
        operation = "update" if product_id else "create"
        logger.info("product_save_attempt", extra={"product_id": product_id, "operation": operation})
        try:
            client = self.session.products_client()
            if product_id:
                saved = client.update(product_id, ProductUpdate(**fields))
            else:
                saved = client.create(ProductWrite(**fields))
        except Exception as exc:
            logger.exception("product_save_failure", extra={"product_id": product_id, "operation": operation})
            raise normalize_error(exc, "Erro ao salvar produto") from exc
        logger.info("product_save_success", extra={"product_id": saved.id, "operation": operation})
        self._publish("UPDATE" if product_id else "INSERT", saved)
        return saved

    def set_active(self, product_id: str, is_active: bool) -> Product:
        try:
            saved = self.session.products_client().update(product_id, ProductUpdate(is_active=is_active))
        except Exception as exc:
            logger.exception("product_toggle_failure", extra={"product_id": product_id})
            raise normalize_error(exc, "Erro ao salvar produto") from exc
        self._publish("UPDATE", saved)
        return saved

    def delete(self, product_id: str) -> None:
        try:
            self.session.products_client().delete(product_id)
        except Exception as exc:
            logger.exception("product_delete_failure", extra={"product_id": product_id})
            raise normalize_error(exc, "Erro ao excluir produto") from exc
        logger.info("product_delete_success", extra={"product_id": product_id})
        if self.feed:
            self.feed.publish(TABLE, "DELETE", {"id": product_id})

    def _publish(self, event: str, product: Product) -> None:
        if self.feed:
            self.feed.publish(TABLE, event, product.model_dump(mode="json"))
