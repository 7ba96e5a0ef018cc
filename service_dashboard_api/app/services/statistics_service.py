"""
Service layer for dashboard statistics.

``StatisticsService.overview`` turns the fetched record lists into the
five counters shown on the dashboard.  Records come from an external
process and are not validated, so every numeric field goes through
``to_number``: anything that is not a usable number counts as 0
instead of failing the whole dashboard.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable

from service_dashboard_api.app.schemas.dashboard import DashboardSummary


def to_number(value: Any) -> float:
    """Coerce a loosely typed record value to a float.

    ``None``, ``False`` and ``""`` give 0, ``True`` gives 1, numbers are
    kept and numeric strings are parsed.  Anything else, and any value
    that would be NaN or infinite, gives 0.
    """
    if value is None or value is False or value == "":
        return 0.0
    if value is True:
        return 1.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return 0.0
        try:
            number = float(text) if text else 0.0
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def sum_field(records: Iterable[Dict[str, Any]], field: str) -> float:
    """Sum ``field`` over ``records`` using ``to_number`` coercion."""
    return sum((to_number(record.get(field)) for record in records), 0.0)


class StatisticsService:
    """Aggregated counters for the dashboard."""

    @classmethod
    def overview(
        cls,
        services: Iterable[Dict[str, Any]],
        transactions: Iterable[Dict[str, Any]],
        expenses: Iterable[Dict[str, Any]],
    ) -> DashboardSummary:
        """Return service counts, revenue, expenses and net income.

        Revenue is the sum of transaction ``price`` values, expenses the
        sum of expense ``amount`` values.  Net income may be negative.
        """
        services = list(services)
        total_revenue = sum_field(transactions, "price")
        total_expenses = sum_field(expenses, "amount")
        return DashboardSummary(
            total_services=len(services),
            available_services=sum(1 for s in services if s.get("available")),
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_income=total_revenue - total_expenses,
        )
