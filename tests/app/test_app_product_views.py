from __future__ import annotations

from barbearia_sdk.exceptions import ServerError
from barbearia_sdk.models import UserRole

from barbearia_app.services.product_service import ProductService
from barbearia_app.services.sale_service import SaleService
from barbearia_app.ui.products.product_sale_view import ProductSaleView
from barbearia_app.ui.products.products_view import ProductsView

from factories import MANAGER_ID, PRODUCT_ID, product
from fakes import FakeSession, api_failure


def test_products_view_create_edit_toggle_delete() -> None:
    session = FakeSession()
    view = ProductsView(ProductService(session), UserRole.MANAGER)
    view.load()
    assert view.render()["state"]["message"] == "Nenhum produto cadastrado"

    view.start_create()
    invalid = view.save()
    assert invalid["error"] == "Nome é obrigatório"

    for name, value in {"name": "Óleo de Barba", "sale_price": "39,90", "cost_price": "15", "stock_quantity": "8"}.items():
        view.set_field(name, value)
    created = view.save()
    assert created["ok"] is True
    assert view.notifications.last()["message"] == "Produto cadastrado com sucesso!"
    assert view.render()["products"][0]["sale_price"] == "R$ 39,90"
    assert view.render()["products"][0]["margin"] == "R$ 24,90"

    product_id = created["product_id"]
    assert view.start_edit(product_id)
    assert view.form["sale_price"] == "39.90"
    view.set_field("stock_quantity", "2")
    assert view.save()["ok"] is True
    assert view.notifications.last()["message"] == "Produto atualizado com sucesso!"
    assert view.editing_id is None
    assert view.rows[0].stock_quantity == 2

    assert view.toggle_active(product_id) == {"ok": True, "is_active": False}
    assert view.toggle_active("missing")["ok"] is False

    view.request_delete(product_id)
    assert view.confirm_delete() == {"ok": True}
    assert view.rows == []
    assert view.notifications.last()["message"] == "Produto excluído com sucesso!"


def test_products_view_failure_and_permission() -> None:
    session = FakeSession()
    session.products.failure = api_failure(ServerError, 500)
    view = ProductsView(ProductService(session), UserRole.MANAGER)

    assert not view.load()
    assert view.render()["state"]["message"] == "Erro ao carregar produtos"

    denied = ProductsView(ProductService(session), UserRole.CLIENT)
    assert not denied.load()
    assert denied.save() == {"ok": False, "error": "Acesso restrito ao gerente"}


def _sale_view(session: FakeSession, user_id: str | None = MANAGER_ID) -> ProductSaleView:
    return ProductSaleView(ProductService(session), SaleService(session), user_id, UserRole.MANAGER)


def test_product_sale_view_registers_sale() -> None:
    session = FakeSession()
    session.products.rows = [product(stock_quantity=5), product(id="p-empty", name="Cera", stock_quantity=0)]
    view = _sale_view(session)

    assert view.open()
    rendered = view.render()
    assert [row["id"] for row in rendered["products"]] == [PRODUCT_ID]
    assert rendered["products"][0]["label"] == "Pomada Modeladora - R$ 45,00 (Estoque: 5)"

    view.set_field("product_id", PRODUCT_ID)
    view.set_field("quantity", "2")
    assert view.preview() == {"total_sale": "R$ 90,00", "total_cost": "R$ 40,00", "profit": "R$ 50,00"}

    outcome = view.register()

    assert outcome == {"ok": True, "sale_id": "sale-new-1", "remaining_stock": 3}
    assert view.is_open is False
    assert view.form["product_id"] == ""
    assert view.notifications.last()["message"] == "Venda registrada com sucesso!"


def test_product_sale_view_rejections() -> None:
    session = FakeSession()
    session.products.rows = [product(stock_quantity=1)]
    view = _sale_view(session)
    view.open()

    assert view.register()["field_errors"] == {"product_id": "Produto inválido"}

    view.set_field("product_id", PRODUCT_ID)
    view.set_field("quantity", "3")
    assert view.preview() is None
    assert view.register() == {"ok": False, "error": "Estoque insuficiente"}
    assert view.notifications.last()["category"] == "validation"
    assert session.product_sales.created == []

    anonymous = _sale_view(session, user_id=None)
    anonymous.open()
    anonymous.set_field("product_id", PRODUCT_ID)
    assert anonymous.register() == {"ok": False, "error": "Usuário não autenticado"}
