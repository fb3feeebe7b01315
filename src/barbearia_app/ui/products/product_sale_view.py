from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from barbearia_sdk import SaleError, compute_sale
from barbearia_sdk.catalog import format_brl
from barbearia_sdk.models import Product, UserRole
from barbearia_sdk.validation import SaleForm, validate_form

from barbearia_app.infrastructure.logger import get_logger, log_action
from barbearia_app.services.errors import ServiceError
from barbearia_app.services.product_service import ProductService
from barbearia_app.services.sale_service import SaleService
from barbearia_app.ui.shared.notification_center import NotificationCenter


def _empty_form() -> dict[str, Any]:
    return {"product_id": "", "quantity": "1", "notes": ""}


@dataclass
class ProductSaleView:
    products: ProductService
    sales: SaleService
    user_id: str | None
    role: UserRole | None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    sellable: list[Product] = field(default_factory=list)
    form: dict[str, Any] = field(default_factory=_empty_form)
    is_open: bool = False
    is_submitting: bool = False

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def open(self) -> bool:
        if not self.can_view():
            return False
        self.is_open = True
        try:
            self.sellable = self.products.list_sellable()
        except ServiceError as exc:
            self.notifications.failure(exc)
            return False
        return True

    def close(self) -> None:
        self.is_open = False
        self.form = _empty_form()

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.form:
            raise KeyError(name)
        self.form[name] = value

    def selected_product(self) -> Product | None:
        return next((product for product in self.sellable if product.id == self.form.get("product_id")), None)

    def preview(self) -> dict[str, str] | None:
        product = self.selected_product()
        if product is None:
            return None
        try:
            totals = compute_sale(product, int(self.form.get("quantity") or 0))
        except (SaleError, ValueError):
            return None
        return {
            "total_sale": format_brl(totals.total_sale),
            "total_cost": format_brl(totals.total_cost),
            "profit": format_brl(totals.profit),
        }

    def register(self) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Venda já em andamento"}
        result = validate_form(SaleForm, self.form)
        if not result.is_valid:
            self.notifications.error(result.first_error or "Dados inválidos")
            return {"ok": False, "error": result.first_error, "field_errors": result.field_errors}
        self.is_submitting = True
        try:
            outcome = self.sales.register_sale(result.form, self.selected_product(), self.user_id)  # type: ignore[arg-type]
        except ServiceError as exc:
            log_action(get_logger(), "product_sales", "register", self._role_name(), exc.trace_id, "failure")
            self.notifications.failure(exc)
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        log_action(get_logger(), "product_sales", "register", self._role_name(), None, "success")
        self.notifications.success("Venda registrada com sucesso!")
        self.close()
        return {
            "ok": True,
            "sale_id": outcome.sale.id,
            "remaining_stock": outcome.product.stock_quantity,
        }

    def _role_name(self) -> str | None:
        return self.role.value if self.role else None

    def render(self) -> dict[str, Any]:
        return {
            "is_open": self.is_open,
            "products": [
                {
                    "id": product.id,
                    "label": f"{product.name} - {format_brl(product.sale_price)} (Estoque: {product.stock_quantity})",
                    "stock_quantity": product.stock_quantity,
                }
                for product in self.sellable
            ],
            "form": dict(self.form),
            "preview": self.preview(),
            "is_submitting": self.is_submitting,
            "notifications": self.notifications.render(),
        }
