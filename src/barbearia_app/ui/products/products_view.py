from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from barbearia_sdk.catalog import format_brl
from barbearia_sdk.models import Product, UserRole
from barbearia_sdk.validation import ProductForm, validate_form

from barbearia_app.services.errors import ServiceError
from barbearia_app.services.product_service import ProductService
from barbearia_app.ui.shared.notification_center import NotificationCenter
from barbearia_app.ui.shared.view_state import resolve_state


def _empty_form() -> dict[str, Any]:
    return {
        "name": "",
        "description": "",
        "sale_price": "",
        "cost_price": "",
        "stock_quantity": "",
        "is_active": True,
        "image_url": "",
    }


@dataclass
class ProductsView:
    products: ProductService
    role: UserRole | None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    rows: list[Product] = field(default_factory=list)
    form: dict[str, Any] = field(default_factory=_empty_form)
    editing_id: str | None = None
    delete_confirm_id: str | None = None
    is_loading: bool = False
    error_message: str | None = None

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def load(self) -> bool:
        if not self.can_view():
            self.error_message = "Acesso restrito ao gerente"
            return False
        self.is_loading = True
        try:
            self.rows = self.products.list_products()
            self.error_message = None
            return True
        except ServiceError as exc:
            self.error_message = exc.message
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False

    def start_create(self) -> None:
        self.editing_id = None
        self.form = _empty_form()

    def start_edit(self, product_id: str) -> bool:
        product = self._find(product_id)
        if product is None:
            return False
        self.editing_id = product_id
        self.form = {
            "name": product.name,
            "description": product.description or "",
            "sale_price": str(product.sale_price),
            "cost_price": str(product.cost_price),
            "stock_quantity": str(product.stock_quantity),
            "is_active": product.is_active,
            "image_url": product.image_url or "",
        }
        return True

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.form:
            raise KeyError(name)
        self.form[name] = value

    def save(self) -> dict[str, Any]:
        if not self.can_view():
            return {"ok": False, "error": "Acesso restrito ao gerente"}
        result = validate_form(ProductForm, self.form)
        if not result.is_valid:
            self.notifications.error(result.first_error or "Dados inválidos")
            return {"ok": False, "error": result.first_error, "field_errors": result.field_errors}
        try:
            saved = self.products.save(result.form, self.editing_id)  # type: ignore[arg-type]
        except ServiceError as exc:
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        self.notifications.success(
            "Produto atualizado com sucesso!" if self.editing_id else "Produto cadastrado com sucesso!"
        )
        self.start_create()
        self.load()
        return {"ok": True, "product_id": saved.id}

    def toggle_active(self, product_id: str) -> dict[str, Any]:
        product = self._find(product_id)
        if product is None:
            return {"ok": False, "error": "Produto não encontrado"}
        try:
            saved = self.products.set_active(product_id, not product.is_active)
        except ServiceError as exc:
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message}
        self.notifications.success("Produto atualizado com sucesso!")
        self.load()
        return {"ok": True, "is_active": saved.is_active}

    def request_delete(self, product_id: str) -> None:
        self.delete_confirm_id = product_id

    def confirm_delete(self) -> dict[str, Any]:
        product_id = self.delete_confirm_id
        if product_id is None:
            return {"ok": False, "error": "Nenhum produto selecionado"}
        try:
            self.products.delete(product_id)
        except ServiceError as exc:
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message}
        self.delete_confirm_id = None
        self.notifications.success("Produto excluído com sucesso!")
        self.load()
        return {"ok": True}

    def _find(self, product_id: str) -> Product | None:
        return next((product for product in self.rows if product.id == product_id), None)

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            row_count=len(self.rows),
            is_loading=self.is_loading,
            error=self.error_message,
            can_view=self.can_view(),
            empty_message="Nenhum produto cadastrado",
        )
        return {
            "state": state.render(),
            "products": [
                {
                    "id": product.id,
                    "name": product.name,
                    "description": product.description,
                    "sale_price": format_brl(product.sale_price),
                    "cost_price": format_brl(product.cost_price),
                    "margin": format_brl(product.sale_price - product.cost_price),
                    "stock_quantity": product.stock_quantity,
                    "is_active": product.is_active,
                    "image_url": product.image_url,
                }
                for product in self.rows
            ],
            "form": dict(self.form),
            "editing_id": self.editing_id,
            "delete_confirm_id": self.delete_confirm_id,
            "notifications": self.notifications.render(),
        }
