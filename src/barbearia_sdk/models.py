from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    MANAGER = "gerente"
    CLIENT = "cliente"


class AppointmentStatus(str, Enum):
    SCHEDULED = "agendado"
    COMPLETED = "concluido"
    CANCELED = "cancelado"


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: str | None = None
    phone: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class AuthSession(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    user: AuthUser | None = None


class SessionData(BaseModel):
    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    user: AuthUser | None = None
    env_name: str | None = None


class RoleRow(BaseModel):
    model_config = ConfigDict(extra="allow")

    user_id: str
    role: UserRole


class Profile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    email: str
    phone: str | None = None
    created_at: datetime | None = None


class Appointment(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    client_id: str
    service: str
    barber: str
    scheduled_date: date
    scheduled_time: str
    status: str = AppointmentStatus.SCHEDULED.value
    notes: str | None = None
    created_at: datetime | None = None


class AppointmentCreate(BaseModel):
    client_id: str
    service: str
    barber: str
    scheduled_date: date
    scheduled_time: str
    notes: str | None = None


class AppointmentUpdate(BaseModel):
    service: str | None = None
    barber: str | None = None
    scheduled_date: date | None = None
    scheduled_time: str | None = None
    notes: str | None = None
    status: AppointmentStatus | None = None


class BarberBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    barber: str
    block_date: date
    start_time: str | None = None
    end_time: str | None = None
    is_full_day: bool = False
    reason: str | None = None
    created_at: datetime | None = None


class BarberBlockCreate(BaseModel):
    barber: str
    block_date: date
    is_full_day: bool = False
    start_time: str | None = None
    end_time: str | None = None
    reason: str | None = None


class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None
    sale_price: Decimal
    cost_price: Decimal
    stock_quantity: int = 0
    is_active: bool = True
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductWrite(BaseModel):
    name: str
    description: str | None = None
    sale_price: Decimal
    cost_price: Decimal
    stock_quantity: int = 0
    is_active: bool = True
    image_url: str | None = None


class ProductUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    sale_price: Decimal | None = None
    cost_price: Decimal | None = None
    stock_quantity: int | None = None
    is_active: bool | None = None
    image_url: str | None = None


class ProductSale(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    product_id: str
    quantity: int
    sale_price: Decimal
    cost_price: Decimal
    total_sale: Decimal
    total_cost: Decimal
    profit: Decimal
    sold_by: str | None = None
    notes: str | None = None
    sold_at: datetime | None = None


class ProductSaleCreate(BaseModel):
    product_id: str
    quantity: int
    sale_price: Decimal
    cost_price: Decimal
    total_sale: Decimal
    total_cost: Decimal
    profit: Decimal
    sold_by: str
    notes: str | None = None


class Setting(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    key: str
    value: str
    description: str | None = None
