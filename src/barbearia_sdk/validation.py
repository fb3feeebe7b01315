from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TIME_REGEX = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")

FormT = TypeVar("FormT", bound=BaseModel)


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("form_error", message)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any, max_length: int, message: str) -> str | None:
    text = _text(value)
    if len(text) > max_length:
        raise _fail(message)
    return text or None


def _email(value: Any) -> str:
    text = _text(value)
    if not EMAIL_REGEX.match(text):
        raise _fail("E-mail inválido")
    return text.lower()


def _password(value: Any) -> str:
    text = "" if value is None else str(value)
    if len(text) < 6:
        raise _fail("Senha deve ter no mínimo 6 caracteres")
    return text


def _decimal(value: Any, message: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        parsed = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        raise _fail(message) from None
    if not parsed.is_finite():
        raise _fail(message)
    return parsed


def _integer(value: Any, message: str) -> int:
    if isinstance(value, bool):
        raise _fail(message)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise _fail(message) from None


def _date(value: Any, message: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _text(value)
    if not text:
        raise _fail(message)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise _fail(message) from None


class LoginForm(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return _email(value)

    @field_validator("password", mode="before")
    @classmethod
    def _check_password(cls, value: Any) -> str:
        return _password(value)


class SignupForm(BaseModel):
    name: str
    email: str
    password: str
    confirm_password: str

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        text = _text(value)
        if len(text) < 2:
            raise _fail("Nome deve ter no mínimo 2 caracteres")
        return text

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return _email(value)

    @field_validator("password", mode="before")
    @classmethod
    def _check_password(cls, value: Any) -> str:
        return _password(value)

    @field_validator("confirm_password", mode="before")
    @classmethod
    def _check_confirmation(cls, value: Any, info: ValidationInfo) -> str:
        text = "" if value is None else str(value)
        password = info.data.get("password")
        if password is not None and text != password:
            raise _fail("As senhas não coincidem")
        return text


class AppointmentForm(BaseModel):
    service: str
    barber: str
    date: date
    time: str
    notes: str | None = None

    @field_validator("service", mode="before")
    @classmethod
    def _check_service(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise _fail("Selecione um serviço")
        if len(text) > 100:
            raise _fail("Nome do serviço muito longo")
        return text

    @field_validator("barber", mode="before")
    @classmethod
    def _check_barber(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise _fail("Selecione um barbeiro")
        return text

    @field_validator("date", mode="before")
    @classmethod
    def _check_date(cls, value: Any) -> date:
        return _date(value, "Selecione uma data")

    @field_validator("time", mode="before")
    @classmethod
    def _check_time(cls, value: Any) -> str:
        text = _text(value)
        if not TIME_REGEX.match(text):
            raise _fail("Horário inválido")
        return text

    @field_validator("notes", mode="before")
    @classmethod
    def _check_notes(cls, value: Any) -> str | None:
        return _optional_text(value, 500, "Observações devem ter no máximo 500 caracteres")


class ProductForm(BaseModel):
    name: str
    description: str | None = None
    sale_price: Decimal
    cost_price: Decimal
    stock_quantity: int
    is_active: bool = True
    image_url: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise _fail("Nome é obrigatório")
        if len(text) > 100:
            raise _fail("Nome muito longo")
        return text

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> str | None:
        return _optional_text(value, 500, "Descrição muito longa")

    @field_validator("sale_price", mode="before")
    @classmethod
    def _check_sale_price(cls, value: Any) -> Decimal:
        price = _decimal(value, "Preço de venda inválido")
        if price < 0:
            raise _fail("Preço de venda deve ser positivo")
        return price

    @field_validator("cost_price", mode="before")
    @classmethod
    def _check_cost_price(cls, value: Any) -> Decimal:
        price = _decimal(value, "Preço de custo inválido")
        if price < 0:
            raise _fail("Preço de custo deve ser positivo")
        return price

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def _check_stock(cls, value: Any) -> int:
        quantity = _integer(value, "Estoque inválido")
        if quantity < 0:
            raise _fail("Estoque deve ser positivo")
        return quantity

    @field_validator("image_url", mode="before")
    @classmethod
    def _check_image_url(cls, value: Any) -> str | None:
        return _text(value) or None


class SaleForm(BaseModel):
    product_id: str
    quantity: int
    notes: str | None = None

    @field_validator("product_id", mode="before")
    @classmethod
    def _check_product(cls, value: Any) -> str:
        text = _text(value)
        try:
            uuid.UUID(text)
        except ValueError:
            raise _fail("Produto inválido") from None
        return text

    @field_validator("quantity", mode="before")
    @classmethod
    def _check_quantity(cls, value: Any) -> int:
        quantity = _integer(value, "Quantidade inválida")
        if quantity < 1:
            raise _fail("Quantidade mínima é 1")
        return quantity

    @field_validator("notes", mode="before")
    @classmethod
    def _check_notes(cls, value: Any) -> str | None:
        return _optional_text(value, 500, "Observações muito longas")


class BlockForm(BaseModel):
    barber: str
    date: date
    is_full_day: bool = False
    # Validated even when absent: a partial block needs both times.
    start_time: str | None = Field(default=None, validate_default=True)
    end_time: str | None = Field(default=None, validate_default=True)
    reason: str | None = None

    @field_validator("barber", mode="before")
    @classmethod
    def _check_barber(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise _fail("Preencha todos os campos obrigatórios")
        return text

    @field_validator("date", mode="before")
    @classmethod
    def _check_date(cls, value: Any) -> date:
        return _date(value, "Preencha todos os campos obrigatórios")

    @field_validator("start_time", mode="before")
    @classmethod
    def _check_start(cls, value: Any, info: ValidationInfo) -> str | None:
        return _block_time(value, info)

    @field_validator("end_time", mode="before")
    @classmethod
    def _check_end(cls, value: Any, info: ValidationInfo) -> str | None:
        end = _block_time(value, info)
        start = info.data.get("start_time")
        if end and start and end < start:
            raise _fail("O horário de fim não pode ser anterior ao de início")
        return end

    @field_validator("reason", mode="before")
    @classmethod
    def _check_reason(cls, value: Any) -> str | None:
        return _optional_text(value, 500, "Motivo muito longo")


def _block_time(value: Any, info: ValidationInfo) -> str | None:
    if info.data.get("is_full_day"):
        return None
    text = _text(value)
    if not text:
        raise _fail("Preencha os horários de início e fim")
    if not TIME_REGEX.match(text[:5]):
        raise _fail("Horário inválido")
    return text[:5]


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str] = field(default_factory=dict)
    form: BaseModel | None = None

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def first_error(self) -> str | None:
        return next(iter(self.field_errors.values()), None)


def validate_form(schema: type[FormT], data: Mapping[str, Any]) -> FormResult:
    payload = dict(data)
    # Absent required fields go through their own validators as blanks.
    for name, info in schema.model_fields.items():
        if info.is_required():
            payload.setdefault(name, None)
    try:
        form = schema.model_validate(payload)
    except PydanticValidationError as exc:
        field_errors: dict[str, str] = {}
        for error in exc.errors():
            location = error.get("loc") or ("form",)
            name = str(location[0])
            if name not in field_errors:
                field_errors[name] = str(error.get("msg") or "Valor inválido")
        return FormResult(values=dict(data), field_errors=field_errors)
    return FormResult(values=form.model_dump(), form=form)
