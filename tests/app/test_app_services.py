from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from barbearia_sdk import ChangeFeed
from barbearia_sdk.exceptions import ConflictError, ForbiddenError, ServerError, TransportError
from barbearia_sdk.models import AppointmentUpdate, UserRole
from barbearia_sdk.reminders import TEMPLATE_KEY, ReminderError
from barbearia_sdk.sales import SaleError
from barbearia_sdk.validation import AppointmentForm, BlockForm, ProductForm, SaleForm

from barbearia_app.services.appointment_service import AppointmentService
from barbearia_app.services.billing_service import BillingService
from barbearia_app.services.block_service import BlockService, group_by_barber
from barbearia_app.services.client_directory_service import ClientDirectoryService, search_clients
from barbearia_app.services.errors import ServiceError, normalize_error
from barbearia_app.services.product_service import ProductService
from barbearia_app.services.profile_service import ProfileService
from barbearia_app.services.reminder_service import ReminderService
from barbearia_app.services.sale_service import SaleService

from factories import CLIENT_ID, MANAGER_ID, PRODUCT_ID, appointment, block, product, profile, sale
from fakes import FakeSession, api_failure

NOW = datetime(2026, 10, 20, 9, 10)


def _booking(**overrides) -> AppointmentForm:
    data = {"service": "Corte", "barber": "Lucas", "date": date(2026, 10, 20), "time": "10:00"}
    data.update(overrides)
    return AppointmentForm(**data)


def _appointment_service(session: FakeSession, feed: ChangeFeed | None = None) -> AppointmentService:
    return AppointmentService(session, feed, clock=lambda: NOW)


def test_normalize_error_hides_backend_text() -> None:
    error = normalize_error(api_failure(ServerError, 500, message="relation does not exist"), "Erro ao carregar")

    assert error.message == "Erro ao carregar"
    assert "relation does not exist" in error.details
    assert error.code == "HTTP_500"
    assert error.trace_id == "trace-1"


def test_normalize_error_keeps_known_backend_codes() -> None:
    rls = normalize_error(api_failure(ForbiddenError, 403, code="42501"), "Erro")
    transport = normalize_error(api_failure(TransportError, 0, code="TRANSPORT_ERROR"), "Erro")

    assert rls.code == "42501"
    assert transport.code == "TRANSPORT_ERROR"


def test_normalize_error_passes_business_messages_through() -> None:
    assert normalize_error(SaleError("Estoque insuficiente"), "Erro").message == "Estoque insuficiente"
    assert normalize_error(ReminderError("Telefone inválido"), "Erro").code == "CLIENT_VALIDATION"
    assert normalize_error(RuntimeError(), "Erro").details == "RuntimeError"
    existing = ServiceError(message="Horário indisponível")
    assert normalize_error(existing, "Erro") is existing


def test_profile_service_role_and_lookup() -> None:
    session = FakeSession()
    session.roles.roles[MANAGER_ID] = UserRole.MANAGER
    session.profiles.rows.append(profile())
    service = ProfileService(session)

    assert service.load_role(MANAGER_ID) is UserRole.MANAGER
    assert service.load_role(CLIENT_ID) is UserRole.CLIENT
    assert list(service.profiles_by_id([CLIENT_ID, "", CLIENT_ID])) == [CLIENT_ID]
    assert service.profiles_by_id([]) == {}


def test_profile_service_wraps_failures() -> None:
    session = FakeSession()
    session.profiles.failure = api_failure(ServerError, 500)

    with pytest.raises(ServiceError, match="Erro ao carregar clientes"):
        ProfileService(session).list_profiles()


def test_slot_grid_merges_bookings_blocks_and_clock() -> None:
    session = FakeSession()
    session.appointments.rows = [
        appointment(id="a1", scheduled_time="10:00:00"),
        appointment(id="a2", scheduled_time="11:00:00", status="cancelado"),
        appointment(id="a3", scheduled_time="12:00:00", barber="Luis Felipe"),
    ]
    session.blocks.rows = [block(start_time="14:00:00", end_time="15:00:00")]

    grid = _appointment_service(session).slot_grid("Lucas", date(2026, 10, 20))

    assert not grid.is_available("09:00")
    assert grid.is_available("09:30")
    assert not grid.is_available("10:00")
    assert grid.is_available("11:00")
    assert grid.is_available("12:00")
    assert not grid.is_available("14:30")


def test_book_rechecks_slot_before_insert() -> None:
    session = FakeSession()
    session.appointments.rows = [appointment(scheduled_time="10:00:00")]

    with pytest.raises(ServiceError) as excinfo:
        _appointment_service(session).book(CLIENT_ID, _booking())

    assert excinfo.value.message == "Horário indisponível"
    assert excinfo.value.code == "SLOT_UNAVAILABLE"
    assert session.appointments.created == []


def test_book_rejects_blocked_and_past_slots() -> None:
    session = FakeSession()
    session.blocks.rows = [block(is_full_day=True, start_time=None, end_time=None, block_date="2026-10-21")]
    service = _appointment_service(session)

    with pytest.raises(ServiceError, match="Horário indisponível"):
        service.book(CLIENT_ID, _booking(date=date(2026, 10, 21)))
    with pytest.raises(ServiceError, match="Horário indisponível"):
        service.book(CLIENT_ID, _booking(time="09:00"))


def test_book_inserts_and_publishes() -> None:
    session = FakeSession()
    feed = ChangeFeed()
    events = []
    feed.subscribe("appointments", lambda table, event: events.append(event["event"]))

    created = _appointment_service(session, feed).book(CLIENT_ID, _booking(notes="Primeira vez"))

    assert created.status == "agendado"
    assert session.appointments.created[0].scheduled_time == "10:00"
    assert session.appointments.created[0].notes == "Primeira vez"
    assert events == ["INSERT"]


def test_book_insert_failure_uses_friendly_message() -> None:
    session = FakeSession()
    session.appointments.write_failure = api_failure(ConflictError, 409, code="23505")

    with pytest.raises(ServiceError) as excinfo:
        _appointment_service(session).book(CLIENT_ID, _booking())

    assert excinfo.value.message == "Erro ao criar agendamento"
    assert excinfo.value.code == "23505"


def test_status_update_edit_and_delete() -> None:
    session = FakeSession()
    session.appointments.rows = [appointment()]
    feed = ChangeFeed()
    events = []
    feed.subscribe("appointments", lambda table, event: events.append(event["event"]))
    service = _appointment_service(session, feed)

    assert service.set_status("apt-1", "concluido").status == "concluido"
    assert service.cancel("apt-1").status == "cancelado"
    edited = service.update("apt-1", AppointmentUpdate(barber="Luis Felipe", scheduled_time="15:30:00"))
    service.delete("apt-1")

    assert edited.barber == "Luis Felipe"
    assert session.appointments.updates[-1][1]["scheduled_time"] == "15:30"
    assert session.appointments.deleted == ["apt-1"]
    assert events == ["UPDATE", "UPDATE", "UPDATE", "DELETE"]


def test_status_failure_message_depends_on_action() -> None:
    session = FakeSession()
    session.appointments.rows = [appointment()]
    session.appointments.write_failure = api_failure(ForbiddenError, 403, code="42501")
    service = _appointment_service(session)

    with pytest.raises(ServiceError, match="Erro ao cancelar agendamento"):
        service.cancel("apt-1")
    with pytest.raises(ServiceError, match="Erro ao atualizar status"):
        service.set_status("apt-1", "concluido")
    with pytest.raises(ServiceError, match="Erro ao excluir agendamento"):
        service.delete("apt-1")


def test_stats_use_counts() -> None:
    session = FakeSession()
    session.appointments.counts = {"total": 12, "scheduled_date": 3, "status": 5}

    stats = _appointment_service(session).stats()

    assert (stats.total, stats.today, stats.pending) == (12, 3, 5)


def test_block_service_create_and_group() -> None:
    session = FakeSession()
    feed = ChangeFeed()
    events = []
    feed.subscribe("barber_blocks", lambda table, event: events.append(event["event"]))
    service = BlockService(session, feed)

    created = service.create(BlockForm(barber="Lucas", date="2026-10-22", start_time="09:00", end_time="10:00"))
    service.create(BlockForm(barber="Luis Felipe", date="2026-10-22", is_full_day=True, start_time="09:00"))
    service.delete(created.id)

    assert session.blocks.created[1].start_time is None
    assert events == ["INSERT", "INSERT", "DELETE"]
    grouped = group_by_barber(service.list_blocks())
    assert list(grouped) == ["Lucas", "Luis Felipe"]
    assert grouped["Lucas"] == []
    assert len(grouped["Luis Felipe"]) == 1


def test_block_service_failure() -> None:
    session = FakeSession()
    session.blocks.failure = api_failure(ServerError, 500)

    with pytest.raises(ServiceError, match="Erro ao carregar bloqueios"):
        BlockService(session).list_blocks()


def test_product_service_create_update_toggle_delete() -> None:
    session = FakeSession()
    service = ProductService(session)
    form = ProductForm(name="Pomada", sale_price="45", cost_price="20", stock_quantity=4)

    created = service.save(form)
    updated = service.save(form.model_copy(update={"stock_quantity": 9}), created.id)
    toggled = service.set_active(created.id, False)
    service.delete(created.id)

    assert created.name == "Pomada"
    assert updated.stock_quantity == 9
    assert toggled.is_active is False
    assert session.products.deleted == [created.id]


def test_product_service_sellable_and_failure() -> None:
    session = FakeSession()
    session.products.rows = [
        product(id="p1", name="B", stock_quantity=0),
        product(id="p2", name="A", stock_quantity=2),
        product(id="p3", name="C", is_active=False),
    ]
    service = ProductService(session)

    assert [row.id for row in service.list_sellable()] == ["p2"]

    session.products.update_failure = api_failure(ServerError, 500)
    with pytest.raises(ServiceError, match="Erro ao salvar produto"):
        service.set_active("p1", True)


def test_register_sale_writes_sale_then_stock() -> None:
    session = FakeSession()
    session.products.rows = [product(stock_quantity=5)]
    feed = ChangeFeed()
    tables = []
    feed.subscribe("product_sales", lambda table, event: tables.append(table))
    feed.subscribe("products", lambda table, event: tables.append(table))

    outcome = SaleService(session, feed).register_sale(
        SaleForm(product_id=PRODUCT_ID, quantity=2, notes="Balcão"),
        session.products.rows[0],
        MANAGER_ID,
    )

    assert outcome.sale.total_sale == Decimal("90.00")
    assert outcome.sale.profit == Decimal("50.00")
    assert outcome.sale.sold_by == MANAGER_ID
    assert outcome.product.stock_quantity == 3
    assert session.products.updates == [(PRODUCT_ID, {"stock_quantity": 3})]
    assert tables == ["product_sales", "products"]


@pytest.mark.parametrize(
    ("quantity", "sold_by", "selected", "message"),
    [
        (9, MANAGER_ID, True, "Estoque insuficiente"),
        (1, None, True, "Usuário não autenticado"),
        (1, MANAGER_ID, False, "Produto não encontrado"),
    ],
)
def test_register_sale_rejections(quantity, sold_by, selected, message) -> None:
    session = FakeSession()
    item = product(stock_quantity=5)

    with pytest.raises(ServiceError, match=message):
        SaleService(session).register_sale(
            SaleForm(product_id=PRODUCT_ID, quantity=quantity), item if selected else None, sold_by
        )

    assert session.product_sales.created == []


def test_register_sale_stock_failure_after_sale_insert() -> None:
    session = FakeSession()
    session.products.rows = [product(stock_quantity=5)]
    session.products.update_failure = api_failure(ServerError, 500)

    with pytest.raises(ServiceError, match="Erro ao registrar venda"):
        SaleService(session).register_sale(SaleForm(product_id=PRODUCT_ID, quantity=1), session.products.rows[0], MANAGER_ID)

    assert len(session.product_sales.created) == 1


def test_billing_report_for_last_month() -> None:
    session = FakeSession()
    session.appointments.rows = [
        appointment(id="a1", service="Corte", status="concluido", scheduled_date="2026-09-10"),
        appointment(id="a2", service="Barba", status="concluido", scheduled_date="2026-10-02"),
        appointment(id="a3", service="Barba", status="cancelado", scheduled_date="2026-09-11"),
    ]
    session.product_sales.rows = [sale(sold_at="2026-09-30T22:00:00+00:00"), sale(id="s2", sold_at="2026-10-01T10:00:00+00:00")]

    report = BillingService(session).report("last", today=date(2026, 10, 17))

    assert report.label == "setembro de 2026"
    assert (report.start, report.end) == (date(2026, 9, 1), date(2026, 9, 30))
    assert report.stats.services_revenue == Decimal("30.00")
    assert report.stats.products_revenue == Decimal("90.00")
    assert report.stats.total_revenue == Decimal("120.00")


def test_billing_report_failure() -> None:
    session = FakeSession()
    session.product_sales.failure = api_failure(ServerError, 500)

    with pytest.raises(ServiceError, match="Erro ao carregar relatório de faturamento"):
        BillingService(session).report("current", today=date(2026, 10, 17))


def test_client_directory_counts_and_search() -> None:
    session = FakeSession()
    session.profiles.rows = [profile(), profile(id="c2", name="Maria Souza", email="maria@example.com")]
    session.appointments.rows = [
        appointment(id="a1", status="concluido"),
        appointment(id="a2", status="cancelado"),
        appointment(id="a3", status="agendado"),
    ]

    summaries = ClientDirectoryService(session).load()

    joao = summaries[0]
    assert (joao.total, joao.completed, joao.canceled, joao.pending) == (3, 1, 1, 1)
    assert summaries[1].total == 0
    assert [summary.profile.id for summary in search_clients(summaries, "MARIA")] == ["c2"]
    assert [summary.profile.id for summary in search_clients(summaries, "joao@")] == [CLIENT_ID]
    assert len(search_clients(summaries, "  ")) == 2


def test_reminder_template_defaults_and_saves() -> None:
    session = FakeSession()
    service = ReminderService(session)

    template = service.load_template()
    assert template.is_default
    assert template.setting_id is None

    created = service.save_template("Olá {{nome}}")
    updated = service.save_template("Oi {{nome}}", created.setting_id)

    assert session.settings.writes == [("create", "Olá {{nome}}"), ("update", "Oi {{nome}}")]
    assert session.settings.rows[0].key == TEMPLATE_KEY
    assert service.load_template().value == updated.value == "Oi {{nome}}"


def test_reminder_template_rejects_blank() -> None:
    with pytest.raises(ServiceError) as excinfo:
        ReminderService(FakeSession()).save_template("   ")

    assert excinfo.value.message == "A mensagem não pode estar vazia"
    assert excinfo.value.code == "EMPTY_TEMPLATE"


def test_reminder_link_uses_template_and_phone() -> None:
    service = ReminderService(FakeSession())

    url = service.build_link(appointment(), "João", "(11) 98765-4321", mobile=True, template="Oi {{nome}}")

    assert url == "https://wa.me/5511987654321?text=Oi%20Jo%C3%A3o"
    with pytest.raises(ServiceError, match="Cliente não possui telefone cadastrado"):
        service.build_link(appointment(), "João", None)
