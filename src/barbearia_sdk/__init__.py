from .auth_store import AuthStore
from .availability import SlotGrid, available_slots, build_slot_grid, normalize_time, occupied_slots
from .billing import BillingPeriod, BillingStats, period_bounds, period_label, summarize
from .catalog import BARBERS, SERVICES, TIME_SLOTS, Service, find_service, format_brl
from .changes import ChangeFeed
from .config import ClientConfig, ConfigError, load_config
from .error_mapper import UserFacingError, map_error, to_user_facing_error
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
    AuthSession,
    AuthUser,
    BarberBlock,
    BarberBlockCreate,
    Product,
    ProductSale,
    ProductSaleCreate,
    ProductUpdate,
    ProductWrite,
    Profile,
    SessionData,
    Setting,
    UserRole,
)
from .query import TableQuery
from .reminders import DEFAULT_TEMPLATE, ReminderError, build_whatsapp_link, normalize_phone, render_template
from .sales import SaleError, SaleTotals, compute_sale
from .session import ApiSession
from .tracing import TraceContext
from .validation import FormResult, validate_form

__all__ = [
    "ApiError",
    "ApiSession",
    "Appointment",
    "AppointmentCreate",
    "AppointmentStatus",
    "AppointmentUpdate",
    "AuthError",
    "AuthSession",
    "AuthStore",
    "AuthUser",
    "BARBERS",
    "BarberBlock",
    "BarberBlockCreate",
    "BillingPeriod",
    "BillingStats",
    "ChangeFeed",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "DEFAULT_TEMPLATE",
    "ForbiddenError",
    "FormResult",
    "HttpClient",
    "NotFoundError",
    "Product",
    "ProductSale",
    "ProductSaleCreate",
    "ProductUpdate",
    "ProductWrite",
    "Profile",
    "RateLimitError",
    "ReminderError",
    "SERVICES",
    "SaleError",
    "SaleTotals",
    "ServerError",
    "Service",
    "SessionData",
    "Setting",
    "SlotGrid",
    "TIME_SLOTS",
    "TableQuery",
    "TraceContext",
    "TransportError",
    "UserFacingError",
    "UserRole",
    "ValidationError",
    "available_slots",
    "build_slot_grid",
    "build_whatsapp_link",
    "compute_sale",
    "find_service",
    "format_brl",
    "load_config",
    "map_error",
    "normalize_phone",
    "normalize_time",
    "occupied_slots",
    "period_bounds",
    "period_label",
    "render_template",
    "summarize",
    "to_user_facing_error",
    "validate_form",
]
