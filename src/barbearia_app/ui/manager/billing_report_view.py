from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from barbearia_sdk import BillingPeriod
from barbearia_sdk.catalog import format_brl
from barbearia_sdk.models import UserRole

from barbearia_app.services.billing_service import BillingReport, BillingService
from barbearia_app.services.errors import ServiceError
from barbearia_app.ui.shared.notification_center import NotificationCenter

PERIOD_OPTIONS = (
    (BillingPeriod.CURRENT, "Mês atual"),
    (BillingPeriod.LAST, "Mês anterior"),
    (BillingPeriod.ALL, "Todo o período"),
)


@dataclass
class BillingReportView:
    billing: BillingService
    role: UserRole | None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    period: BillingPeriod = BillingPeriod.CURRENT
    report: BillingReport | None = None
    is_loading: bool = False

    def can_view(self) -> bool:
        return self.role is UserRole.MANAGER

    def load(self, today: date | None = None) -> bool:
        if not self.can_view():
            return False
        self.is_loading = True
        try:
            self.report = self.billing.report(self.period, today)
            return True
        except ServiceError as exc:
            self.notifications.failure(exc)
            return False
        finally:
            self.is_loading = False

    def select_period(self, period: BillingPeriod | str, today: date | None = None) -> bool:
        self.period = BillingPeriod(period)
        return self.load(today)

    def render(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "can_view": self.can_view(),
            "is_loading": self.is_loading,
            "period": self.period.value,
            "periods": [{"value": option.value, "label": label} for option, label in PERIOD_OPTIONS],
            "label": None,
            "stats": None,
            "notifications": self.notifications.render(),
        }
        if self.report is not None:
            stats = self.report.stats
            payload["label"] = self.report.label
            payload["stats"] = {
                "services_revenue": format_brl(stats.services_revenue),
                "services_count": stats.services_count,
                "products_revenue": format_brl(stats.products_revenue),
                "products_profit": format_brl(stats.products_profit),
                "products_sales_count": stats.products_sales_count,
                "total_revenue": format_brl(stats.total_revenue),
                "total_profit": format_brl(stats.total_profit),
            }
        return payload
