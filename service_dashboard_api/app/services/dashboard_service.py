"""
Dashboard view state.

``DashboardView`` holds the only mutable state of the dashboard: the
last fetched snapshot, the counters derived from it, the selected
granularity and the last computed chart.  The counters and the chart
are always re-derived from the snapshot by the pure functions in
``statistics_service`` and ``period_service``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from service_dashboard_api.app.schemas.dashboard import (
    DashboardRead,
    DashboardSummary,
    Granularity,
    IncomeChart,
)
from service_dashboard_api.app.services.period_service import build_chart, dashboard_timezone
from service_dashboard_api.app.services.record_service import DashboardSnapshot, RecordService
from service_dashboard_api.app.services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)


class DashboardView:
    """Counters and revenue chart for one dashboard.

    The chart is recomputed when the granularity changes or a new
    snapshot replaces the transactions.  While the snapshot holds no
    transactions the previous chart is kept as is.

    ``clock`` supplies "now" for transactions without ``finishedAt``.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        granularity: Union[Granularity, str] = Granularity.DAILY,
    ) -> None:
        self._clock = clock or (lambda: datetime.now(dashboard_timezone()))
        self.granularity = Granularity(granularity)
        self.snapshot = DashboardSnapshot()
        self.summary = DashboardSummary()
        self.chart = IncomeChart(range=self.granularity)

    async def refresh(self) -> DashboardRead:
        """Fetch all collections and re-derive counters and chart.

        Fetch errors propagate and leave the current state untouched.
        """
        snapshot = await RecordService.fetch_snapshot()
        self.apply_snapshot(snapshot)
        return self.read()

    def apply_snapshot(self, snapshot: DashboardSnapshot) -> None:
        self.snapshot = snapshot
        self.summary = StatisticsService.overview(
            snapshot.services, snapshot.transactions, snapshot.expenses
        )
        self._rebucket()

    def select_range(self, granularity: Union[Granularity, str]) -> DashboardRead:
        """Switch the chart granularity.

        Raises ``ValueError`` for values other than daily, weekly and
        monthly.  Selecting the current granularity changes nothing.
        """
        granularity = Granularity(granularity)
        if granularity != self.granularity:
            self.granularity = granularity
            self._rebucket()
        return self.read()

    def _rebucket(self) -> None:
        if not self.snapshot.transactions:
            logger.debug("No transactions loaded; keeping the %s chart", self.chart.range.value)
            return
        self.chart = build_chart(self.snapshot.transactions, self.granularity, now=self._clock())
        logger.info(
            "Built %s chart: %d buckets, total %s",
            self.granularity.value,
            len(self.chart.buckets),
            self.chart.filtered_income,
        )

    def read(self) -> DashboardRead:
        return DashboardRead(range=self.granularity, summary=self.summary, chart=self.chart)
