"""Revenue bucketing tests."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from service_dashboard_api.app.schemas.dashboard import Granularity
from service_dashboard_api.app.services.period_service import (
    LABEL_FORMAT_VERSION,
    build_chart,
    bucket_label,
    group_revenue,
    parse_timestamp,
    week_number,
)
from service_dashboard_api.app.services.statistics_service import StatisticsService

NOW = datetime(2024, 3, 5, 9, 0)


def _pairs(buckets):
    return [(b.label, b.revenue) for b in buckets]


def test_daily_scenario():
    transactions = [
        {"price": 100, "finishedAt": datetime(2024, 1, 1, 10, 0)},
        {"price": 50, "finishedAt": datetime(2024, 1, 1, 15, 30)},
        {"price": 30, "finishedAt": datetime(2024, 1, 2, 8, 0)},
    ]

    chart = build_chart(transactions, "daily", now=NOW)

    assert _pairs(chart.buckets) == [("1/1/2024", 150), ("1/2/2024", 30)]
    assert chart.filtered_income == 180
    assert chart.range is Granularity.DAILY
    assert chart.label_format_version == LABEL_FORMAT_VERSION


def test_buckets_keep_first_seen_order():
    transactions = [
        {"price": 10, "finishedAt": "2024-03-01T12:00:00"},
        {"price": 20, "finishedAt": "2024-01-15T12:00:00"},
        {"price": 30, "finishedAt": "2024-03-01T18:00:00"},
        {"price": 40, "finishedAt": "2024-02-10T12:00:00"},
    ]

    daily = group_revenue(transactions, Granularity.DAILY, now=NOW)
    monthly = group_revenue(transactions, Granularity.MONTHLY, now=NOW)

    assert _pairs(daily) == [("3/1/2024", 40), ("1/15/2024", 20), ("2/10/2024", 40)]
    assert _pairs(monthly) == [("March 2024", 40), ("January 2024", 20), ("February 2024", 40)]


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2024, 1, 1), 1),
        (datetime(2024, 1, 5), 1),
        (datetime(2024, 1, 6), 1),
        # the time of day is part of the day offset
        (datetime(2024, 1, 6, 12, 0), 2),
        (datetime(2024, 1, 10), 2),
        (datetime(2024, 12, 31), 53),
        # 2023 starts on a Sunday
        (datetime(2023, 1, 1), 1),
        (datetime(2023, 1, 7), 1),
        (datetime(2023, 1, 7, 23, 0), 2),
        (datetime(2023, 1, 8), 2),
    ],
)
def test_week_number(moment, expected):
    assert week_number(moment) == expected


def test_weekly_labels():
    transactions = [
        {"price": 5, "finishedAt": "2024-01-10T00:00:00"},
        {"price": 7, "finishedAt": "2024-01-01T00:00:00"},
        {"price": 3, "finishedAt": "2024-01-09T00:00:00"},
    ]

    buckets = group_revenue(transactions, "weekly", now=NOW)

    assert _pairs(buckets) == [("Week 2", 8), ("Week 1", 7)]


def test_monthly_labels_are_locale_independent():
    assert bucket_label(datetime(2024, 9, 30), "monthly") == "September 2024"
    assert bucket_label(datetime(2025, 12, 1), Granularity.MONTHLY) == "December 2025"


def test_missing_timestamp_falls_into_now_bucket():
    transactions = [
        {"price": 100},
        {"price": 20, "finishedAt": None},
        {"price": 5, "finishedAt": "not a date"},
        {"price": 1, "finishedAt": "2024-01-01T00:00:00"},
    ]

    buckets = group_revenue(transactions, "daily", now=NOW)

    assert _pairs(buckets) == [("3/5/2024", 125), ("1/1/2024", 1)]


def test_aware_timestamps_are_converted_to_dashboard_timezone():
    manila = timezone(timedelta(hours=8))
    transactions = [{"price": 10, "finishedAt": "2024-01-01T20:00:00Z"}]

    assert _pairs(group_revenue(transactions, "daily", now=NOW, tz=timezone.utc)) == [("1/1/2024", 10)]
    assert _pairs(group_revenue(transactions, "daily", now=NOW, tz=manila)) == [("1/2/2024", 10)]


def test_week_number_uses_elapsed_time_across_dst():
    new_york = ZoneInfo("America/New_York")
    # clocks went forward on 2024-03-10, so one hour less has elapsed
    assert week_number(datetime(2024, 3, 16, 0, 30, tzinfo=new_york)) == 11
    assert week_number(datetime(2024, 3, 16, 0, 30)) == 12
    assert week_number(datetime(2024, 3, 16, 0, 30, tzinfo=timezone.utc)) == 12


def test_weekly_bucket_in_dst_timezone():
    new_york = ZoneInfo("America/New_York")
    transactions = [{"price": 10, "finishedAt": "2024-03-16T04:30:00Z"}]

    assert _pairs(group_revenue(transactions, "weekly", now=NOW, tz=new_york)) == [("Week 11", 10)]


def test_infinite_prices_keep_chart_finite():
    transactions = [
        {"price": "inf", "finishedAt": "2024-01-01T10:00:00"},
        {"price": 5, "finishedAt": "2024-01-01T11:00:00"},
    ]

    chart = build_chart(transactions, "daily", now=NOW)
    payload = json.loads(chart.model_dump_json())

    assert payload["buckets"] == [{"label": "1/1/2024", "revenue": 5}]
    assert payload["filtered_income"] == 5


def test_invalid_prices_contribute_zero():
    transactions = [
        {"price": "abc", "finishedAt": "2024-01-01T10:00:00"},
        {"finishedAt": "2024-01-01T11:00:00"},
        {"price": "25", "finishedAt": "2024-01-01T12:00:00"},
    ]

    chart = build_chart(transactions, "daily", now=NOW)

    assert _pairs(chart.buckets) == [("1/1/2024", 25)]
    assert chart.filtered_income == 25


@pytest.mark.parametrize("granularity", list(Granularity))
def test_bucket_total_matches_total_revenue(granularity):
    transactions = [
        {"price": 100, "finishedAt": "2023-12-31T23:00:00"},
        {"price": "40", "finishedAt": "2024-01-01T01:00:00"},
        {"price": 15},
        {"price": "abc", "finishedAt": "2024-02-14T12:00:00"},
        {"price": 60, "finishedAt": "2024-02-14T18:00:00"},
        {"price": 7, "finishedAt": {"seconds": 1704067200, "nanoseconds": 0}},
    ]

    chart = build_chart(transactions, granularity, now=NOW)
    summary = StatisticsService.overview([], transactions, [])

    assert chart.filtered_income == summary.total_revenue
    assert sum(b.revenue for b in chart.buckets) == summary.total_revenue
    labels = [b.label for b in chart.buckets]
    assert len(labels) == len(set(labels))


def test_grouping_is_idempotent():
    transactions = [
        {"price": 10, "finishedAt": "2024-05-01T10:00:00"},
        {"price": 20},
    ]

    first = build_chart(transactions, "weekly", now=NOW)
    second = build_chart(transactions, "weekly", now=NOW)

    assert first == second


def test_unknown_granularity_is_rejected():
    with pytest.raises(ValueError):
        group_revenue([{"price": 1}], "yearly", now=NOW)


def test_empty_input_gives_empty_chart():
    chart = build_chart([], "monthly", now=NOW)
    assert chart.buckets == []
    assert chart.filtered_income == 0


@pytest.mark.parametrize(
    "value, expected",
    [
        (datetime(2024, 1, 1, 8, 30), datetime(2024, 1, 1, 8, 30)),
        (date(2024, 1, 1), datetime(2024, 1, 1)),
        ("2024-01-01", datetime(2024, 1, 1)),
        ("2024-01-01 10:15:00", datetime(2024, 1, 1, 10, 15)),
        ("2024-01-01T00:00:00Z", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        (1704067200, datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ({"seconds": 1704067200, "nanoseconds": 0}, datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ({"_seconds": 1704067200}, datetime(2024, 1, 1, tzinfo=timezone.utc)),
        (None, None),
        (True, None),
        ("yesterday", None),
        ({"nanoseconds": 5}, None),
        ([2024, 1, 1], None),
    ],
)
def test_parse_timestamp(value, expected):
    assert parse_timestamp(value) == expected
