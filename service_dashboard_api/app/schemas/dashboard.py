"""
Pydantic models for the financial dashboard.

``DashboardSummary`` carries the five counters shown at the top of the
dashboard.  ``IncomeChart`` is the revenue chart for one granularity:
an ordered list of ``Bucket`` entries (in the order their labels were
first seen) together with their grand total.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class Granularity(str, Enum):
    """Period used to group transactions on the revenue chart."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Bucket(BaseModel):
    label: str = Field(..., examples=["1/1/2024"])
    revenue: float = Field(..., examples=[150])


class DashboardSummary(BaseModel):
    total_services: int = 0
    available_services: int = 0
    total_revenue: float = 0
    total_expenses: float = 0
    net_income: float = 0


class IncomeChart(BaseModel):
    range: Granularity = Granularity.DAILY
    buckets: List[Bucket] = Field(default_factory=list)
    filtered_income: float = 0
    label_format_version: int = 1


class DashboardRead(BaseModel):
    """Complete dashboard state as rendered by clients.

    ``range`` is the selected granularity.  It can differ from
    ``chart.range`` when the selection changed while no transactions
    were loaded, in which case the previous chart is kept.
    """

    range: Granularity
    summary: DashboardSummary
    chart: IncomeChart


class RangeUpdate(BaseModel):
    """Body for switching the chart granularity."""

    range: Granularity = Field(..., examples=["weekly"])
