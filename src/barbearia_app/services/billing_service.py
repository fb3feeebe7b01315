from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from barbearia_sdk import ApiSession, BillingPeriod, BillingStats, period_bounds, period_label, summarize

from barbearia_app.services.errors import normalize_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillingReport:
    period: BillingPeriod
    label: str
    start: date
    end: date
    stats: BillingStats


class BillingService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def report(self, period: BillingPeriod | str, today: date | None = None) -> BillingReport:
        selected = BillingPeriod(period)
        reference = today or date.today()
        start, end = period_bounds(selected, reference)
        try:
            appointments = self.session.appointments_client().list_completed_between(start, end)
            sales = self.session.product_sales_client().list_between(start, end)
        except Exception as exc:
            logger.exception("billing_report_failure", extra={"period": selected.value})
            raise normalize_error(exc, "Erro ao carregar relatório de faturamento") from exc
        stats = summarize(appointments, sales)
        logger.info(
            "billing_report_loaded",
            extra={"period": selected.value, "services_count": stats.services_count, "sales_count": stats.products_sales_count},
        )
        return BillingReport(
            period=selected,
            label=period_label(selected, reference),
            start=start,
            end=end,
            stats=stats,
        )
