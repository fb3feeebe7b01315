"""Revenue and profit aggregation for the billing report.

Services contribute revenue only (their catalog price per completed
appointment); profit is known for product sales alone.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable

from .catalog import service_price
from .models import Appointment, AppointmentStatus, ProductSale

ALL_TIME_START = date(2000, 1, 1)
ALL_TIME_END = date(2100, 12, 31)

MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

ZERO = Decimal("0.00")


class BillingPeriod(str, Enum):
    CURRENT = "current"
    LAST = "last"
    ALL = "all"


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _previous_month(today: date) -> tuple[int, int]:
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def period_bounds(period: BillingPeriod | str, today: date) -> tuple[date, date]:
    period = BillingPeriod(period)
    if period is BillingPeriod.CURRENT:
        return _month_bounds(today.year, today.month)
    if period is BillingPeriod.LAST:
        return _month_bounds(*_previous_month(today))
    return ALL_TIME_START, ALL_TIME_END


def period_label(period: BillingPeriod | str, today: date) -> str:
    period = BillingPeriod(period)
    if period is BillingPeriod.ALL:
        return "Todo o período"
    year, month = (today.year, today.month) if period is BillingPeriod.CURRENT else _previous_month(today)
    return f"{MONTH_NAMES[month - 1]} de {year}"


@dataclass(frozen=True)
class BillingStats:
    services_revenue: Decimal = ZERO
    services_count: int = 0
    products_revenue: Decimal = ZERO
    products_profit: Decimal = ZERO
    products_sales_count: int = 0

    @property
    def total_revenue(self) -> Decimal:
        return self.services_revenue + self.products_revenue

    @property
    def total_profit(self) -> Decimal:
        return self.products_profit

    def to_dict(self) -> dict[str, object]:
        return {
            "services_revenue": self.services_revenue,
            "services_count": self.services_count,
            "products_revenue": self.products_revenue,
            "products_profit": self.products_profit,
            "products_sales_count": self.products_sales_count,
            "total_revenue": self.total_revenue,
            "total_profit": self.total_profit,
        }


def summarize(completed_appointments: Iterable[Appointment], product_sales: Iterable[ProductSale]) -> BillingStats:
    completed = [
        appointment
        for appointment in completed_appointments
        if appointment.status == AppointmentStatus.COMPLETED.value
    ]
    sales = list(product_sales)
    return BillingStats(
        services_revenue=sum((service_price(appointment.service) for appointment in completed), ZERO),
        services_count=len(completed),
        products_revenue=sum((sale.total_sale for sale in sales), ZERO),
        products_profit=sum((sale.profit for sale in sales), ZERO),
        products_sales_count=len(sales),
    )
