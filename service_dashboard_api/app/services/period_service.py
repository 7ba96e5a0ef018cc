"""
Grouping of transactions into chart periods.

Transactions are placed into daily, weekly or monthly buckets keyed by
a display label, and each bucket accumulates the ``price`` of its
transactions.  Buckets are emitted in the order their labels are first
seen in the input, which is also the order the chart draws them.

Labels are produced by the functions below rather than by the process
locale, so the same transaction always lands in the same bucket on
every machine.  ``LABEL_FORMAT_VERSION`` must be bumped whenever a
label format changes, since clients may use labels as keys.

Week labels use an approximate week number (weeks start on Sunday and
the first partial week of the year is week 1; the time of day counts
towards the day offset).  It is not an ISO-8601 week number.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo

from service_dashboard_api.app.core.config import settings
from service_dashboard_api.app.schemas.dashboard import Bucket, Granularity, IncomeChart
from service_dashboard_api.app.services.statistics_service import to_number

LABEL_FORMAT_VERSION = 1

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def dashboard_timezone(name: Optional[str] = None) -> tzinfo:
    """Return the timezone buckets are computed in."""
    name = name or settings.dashboard_timezone
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Read a ``finishedAt`` value.

    Accepts datetimes, dates, ISO-8601 strings (a trailing ``Z`` is
    allowed), epoch seconds and exported Firestore timestamps
    (``{"seconds": ..., "nanoseconds": ...}``).  Returns ``None`` for
    missing or unreadable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        return parse_timestamp(to_number(seconds) + to_number(nanos) / 1e9)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def localize(moment: datetime, tz: tzinfo) -> datetime:
    """Move an aware datetime into ``tz``; naive datetimes are kept as is."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def day_label(moment: datetime) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def week_number(moment: datetime) -> int:
    one_jan = moment.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    if moment.tzinfo is None:
        days = (moment - one_jan).total_seconds() / 86400
    else:
        # elapsed time, so a DST shift since January moves the offset
        days = (moment.timestamp() - one_jan.timestamp()) / 86400
    # Sunday = 0
    jan1_weekday = (one_jan.weekday() + 1) % 7
    return math.ceil((days + jan1_weekday + 1) / 7)


def week_label(moment: datetime) -> str:
    return f"Week {week_number(moment)}"


def month_label(moment: datetime) -> str:
    return f"{MONTH_NAMES[moment.month - 1]} {moment.year}"


_LABELERS: Dict[Granularity, Callable[[datetime], str]] = {
    Granularity.DAILY: day_label,
    Granularity.WEEKLY: week_label,
    Granularity.MONTHLY: month_label,
}


def bucket_label(moment: datetime, granularity: Union[Granularity, str]) -> str:
    """Return the label of the bucket ``moment`` falls into.

    Raises ``ValueError`` for an unknown granularity.
    """
    return _LABELERS[Granularity(granularity)](moment)


def group_revenue(
    transactions: Iterable[Dict[str, Any]],
    granularity: Union[Granularity, str],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> List[Bucket]:
    """Sum transaction prices per period.

    Transactions without a readable ``finishedAt`` are counted in the
    bucket of ``now``.  Prices go through ``to_number``.  The result has
    one bucket per distinct label, in first-seen order.
    """
    granularity = Granularity(granularity)
    tz = tz or dashboard_timezone()
    now = localize(now, tz)
    totals: Dict[str, float] = {}
    for tx in transactions:
        finished_at = parse_timestamp(tx.get("finishedAt"))
        moment = localize(finished_at, tz) if finished_at else now
        label = bucket_label(moment, granularity)
        totals[label] = totals.get(label, 0.0) + to_number(tx.get("price"))
    return [Bucket(label=label, revenue=revenue) for label, revenue in totals.items()]


def build_chart(
    transactions: Iterable[Dict[str, Any]],
    granularity: Union[Granularity, str],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> IncomeChart:
    """Return the revenue chart for ``granularity`` with its grand total."""
    granularity = Granularity(granularity)
    buckets = group_revenue(transactions, granularity, now, tz)
    return IncomeChart(
        range=granularity,
        buckets=buckets,
        filtered_income=sum((b.revenue for b in buckets), 0.0),
        label_format_version=LABEL_FORMAT_VERSION,
    )
