from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from barbearia_sdk.validation import (
    AppointmentForm,
    BlockForm,
    LoginForm,
    ProductForm,
    SaleForm,
    SignupForm,
    validate_form,
)

from factories import PRODUCT_ID


def test_login_form_normalizes_email() -> None:
    result = validate_form(LoginForm, {"email": "  Joao@Example.COM ", "password": "secret1"})

    assert result.is_valid
    assert result.form.email == "joao@example.com"


@pytest.mark.parametrize(
    ("data", "field", "message"),
    [
        ({"email": "joao", "password": "secret1"}, "email", "E-mail inválido"),
        ({"email": "joao@example.com", "password": "123"}, "password", "Senha deve ter no mínimo 6 caracteres"),
    ],
)
def test_login_form_errors(data, field, message) -> None:
    result = validate_form(LoginForm, data)

    assert not result.is_valid
    assert result.field_errors[field] == message


def test_signup_form_reports_mismatch_on_confirmation() -> None:
    result = validate_form(
        SignupForm,
        {"name": "João", "email": "joao@example.com", "password": "secret1", "confirm_password": "secret2"},
    )

    assert result.field_errors == {"confirm_password": "As senhas não coincidem"}
    assert result.first_invalid_field == "confirm_password"


def test_signup_form_short_name() -> None:
    result = validate_form(
        SignupForm,
        {"name": "J", "email": "joao@example.com", "password": "secret1", "confirm_password": "secret1"},
    )

    assert result.first_error == "Nome deve ter no mínimo 2 caracteres"


def test_appointment_form_valid() -> None:
    result = validate_form(
        AppointmentForm,
        {"service": "Corte", "barber": "Lucas", "date": "2026-10-20", "time": "10:00", "notes": "  "},
    )

    assert result.is_valid
    assert result.form.date == date(2026, 10, 20)
    assert result.form.notes is None


@pytest.mark.parametrize(
    ("overrides", "field", "message"),
    [
        ({"service": ""}, "service", "Selecione um serviço"),
        ({"service": "x" * 101}, "service", "Nome do serviço muito longo"),
        ({"barber": ""}, "barber", "Selecione um barbeiro"),
        ({"date": ""}, "date", "Selecione uma data"),
        ({"time": "25:00"}, "time", "Horário inválido"),
        ({"notes": "x" * 501}, "notes", "Observações devem ter no máximo 500 caracteres"),
    ],
)
def test_appointment_form_errors(overrides, field, message) -> None:
    data = {"service": "Corte", "barber": "Lucas", "date": "2026-10-20", "time": "10:00"}
    data.update(overrides)

    result = validate_form(AppointmentForm, data)

    assert result.field_errors[field] == message


def test_product_form_accepts_comma_decimals() -> None:
    result = validate_form(
        ProductForm,
        {"name": "Pomada", "sale_price": "45,90", "cost_price": "20", "stock_quantity": "3", "image_url": ""},
    )

    assert result.is_valid
    assert result.form.sale_price == Decimal("45.90")
    assert result.form.stock_quantity == 3
    assert result.form.image_url is None


@pytest.mark.parametrize(
    ("overrides", "field", "message"),
    [
        ({"name": ""}, "name", "Nome é obrigatório"),
        ({"sale_price": "abc"}, "sale_price", "Preço de venda inválido"),
        ({"sale_price": "-1"}, "sale_price", "Preço de venda deve ser positivo"),
        ({"cost_price": "-0.5"}, "cost_price", "Preço de custo deve ser positivo"),
        ({"stock_quantity": "-2"}, "stock_quantity", "Estoque deve ser positivo"),
        ({"stock_quantity": "1.5"}, "stock_quantity", "Estoque inválido"),
    ],
)
def test_product_form_errors(overrides, field, message) -> None:
    data = {"name": "Pomada", "sale_price": "45", "cost_price": "20", "stock_quantity": 3}
    data.update(overrides)

    assert validate_form(ProductForm, data).field_errors[field] == message


def test_sale_form_rules() -> None:
    assert validate_form(SaleForm, {"product_id": PRODUCT_ID, "quantity": "2"}).is_valid
    assert validate_form(SaleForm, {"product_id": "abc", "quantity": 1}).field_errors == {
        "product_id": "Produto inválido"
    }
    assert validate_form(SaleForm, {"product_id": PRODUCT_ID, "quantity": 0}).field_errors == {
        "quantity": "Quantidade mínima é 1"
    }


def test_block_form_full_day_drops_times() -> None:
    result = validate_form(
        BlockForm,
        {"barber": "Lucas", "date": "2026-10-20", "is_full_day": True, "start_time": "10:00", "end_time": "11:00"},
    )

    assert result.is_valid
    assert result.form.start_time is None
    assert result.form.end_time is None


@pytest.mark.parametrize(
    ("overrides", "field", "message"),
    [
        ({"barber": ""}, "barber", "Preencha todos os campos obrigatórios"),
        ({"date": None}, "date", "Preencha todos os campos obrigatórios"),
        ({"start_time": ""}, "start_time", "Preencha os horários de início e fim"),
        ({"end_time": None}, "end_time", "Preencha os horários de início e fim"),
        ({"start_time": "15:00", "end_time": "14:00"}, "end_time", "O horário de fim não pode ser anterior ao de início"),
    ],
)
def test_block_form_errors(overrides, field, message) -> None:
    data = {"barber": "Lucas", "date": "2026-10-20", "is_full_day": False, "start_time": "14:00", "end_time": "15:00"}
    data.update(overrides)

    assert validate_form(BlockForm, data).field_errors[field] == message


def test_block_form_same_start_and_end_is_allowed() -> None:
    data = {"barber": "Lucas", "date": "2026-10-20", "start_time": "14:00", "end_time": "14:00"}

    assert validate_form(BlockForm, data).is_valid


def test_block_form_partial_day_without_time_keys() -> None:
    result = validate_form(BlockForm, {"barber": "Lucas", "date": "2026-10-20"})

    assert not result.is_valid
    assert result.field_errors == {
        "start_time": "Preencha os horários de início e fim",
        "end_time": "Preencha os horários de início e fim",
    }


def test_block_form_full_day_without_time_keys() -> None:
    result = validate_form(BlockForm, {"barber": "Lucas", "date": "2026-10-20", "is_full_day": True})

    assert result.is_valid
    assert (result.form.start_time, result.form.end_time) == (None, None)


@pytest.mark.parametrize(
    ("schema", "data", "field", "message"),
    [
        (
            SignupForm,
            {"name": "João", "email": "joao@example.com", "password": "secret1"},
            "confirm_password",
            "As senhas não coincidem",
        ),
        (LoginForm, {"email": "joao@example.com"}, "password", "Senha deve ter no mínimo 6 caracteres"),
        (ProductForm, {"name": "Pomada", "sale_price": "45", "cost_price": "20"}, "stock_quantity", "Estoque inválido"),
        (ProductForm, {"name": "Pomada", "cost_price": "20", "stock_quantity": 3}, "sale_price", "Preço de venda inválido"),
        (AppointmentForm, {"service": "Corte", "barber": "Lucas", "time": "10:00"}, "date", "Selecione uma data"),
    ],
)
def test_absent_required_fields_use_form_messages(schema, data, field, message) -> None:
    result = validate_form(schema, data)

    assert result.field_errors[field] == message
    assert result.values == data
