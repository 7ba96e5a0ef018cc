"""
Dashboard endpoints for API v1.

``GET /dashboard/`` re-fetches every collection and returns the
counters together with the revenue chart for the selected range.
``PUT /dashboard/range`` switches the range without fetching again.
Both work on the ``DashboardView`` held by the application.

``/summary`` and ``/chart`` are stateless: they fetch and compute on
every call and do not touch the held view.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request

from service_dashboard_api.app.schemas.dashboard import (
    DashboardRead,
    DashboardSummary,
    Granularity,
    IncomeChart,
    RangeUpdate,
)
from service_dashboard_api.app.services.dashboard_service import DashboardView
from service_dashboard_api.app.services.period_service import build_chart, dashboard_timezone
from service_dashboard_api.app.services.record_service import RecordService
from service_dashboard_api.app.services.statistics_service import StatisticsService

router = APIRouter()


def get_dashboard_view(request: Request) -> DashboardView:
    return request.app.state.dashboard


@router.get("/", response_model=DashboardRead)
async def read_dashboard(
    range: Granularity | None = Query(None),
    view: DashboardView = Depends(get_dashboard_view),
) -> DashboardRead:
    """Refresh the dashboard, optionally switching the range first."""
    if range is not None:
        view.select_range(range)
    return await view.refresh()


@router.put("/range", response_model=DashboardRead)
async def select_range(
    body: RangeUpdate,
    view: DashboardView = Depends(get_dashboard_view),
) -> DashboardRead:
    """Change the chart range of the held dashboard."""
    return view.select_range(body.range)


@router.get("/summary", response_model=DashboardSummary)
async def read_summary() -> DashboardSummary:
    snapshot = await RecordService.fetch_snapshot()
    return StatisticsService.overview(snapshot.services, snapshot.transactions, snapshot.expenses)


@router.get("/chart", response_model=IncomeChart)
async def read_chart(range: Granularity = Query(Granularity.DAILY)) -> IncomeChart:
    """Revenue chart for ``range`` over all transactions.

    Unlike the held view this always reflects the current transactions,
    including an empty chart when there are none.
    """
    snapshot = await RecordService.fetch_snapshot()
    return build_chart(snapshot.transactions, range, now=datetime.now(dashboard_timezone()))
