"""Network Metrics — tests for pure aggregations over table API rows."""

from datetime import date, datetime, timedelta, timezone

import pytest

from aurora_admin.core.domain_types import StockStatus
from aurora_admin.core.network_metrics import (
    KIT_PIECES,
    LOW_STOCK_THRESHOLD,
    commission_rate,
    daily_buckets,
    start_of_day,
    start_of_month,
    stock_status,
    stock_value,
    sum_field,
    sum_pieces,
    to_number,
)


def test_to_number_accepts_postgrest_numerics():
    assert to_number("150.50") == 150.5
    assert to_number(3) == 3.0
    assert to_number(None) == 0.0
    assert to_number("") == 0.0


def test_to_number_rejects_garbage():
    with pytest.raises(ValueError):
        to_number("abc")


def test_sum_field_mixed_types():
    rows = [{"valor_total": "10.25"}, {"valor_total": 4.75}, {"valor_total": None}, {}]
    assert sum_field(rows, "valor_total") == 15.0


def test_sum_field_empty():
    assert sum_field([], "valor") == 0


def test_stock_value_multiplies_quantity_by_price():
    items = [
        {"quantidade": 2, "produto": {"preco": "100.00"}},
        {"quantidade": 3, "produto": {"preco": 50}},
        {"quantidade": 5, "produto": None},
        {"quantidade": 1},
    ]
    assert stock_value(items) == 350.0


def test_stock_status_threshold():
    assert stock_status(LOW_STOCK_THRESHOLD - 0.01) == StockStatus.BAIXO
    assert stock_status(LOW_STOCK_THRESHOLD) == StockStatus.NORMAL
    assert stock_status(0) == StockStatus.BAIXO


def test_start_of_month_keeps_timezone():
    tz = timezone(timedelta(hours=-3))
    now = datetime(2026, 10, 19, 23, 59, 59, 999, tzinfo=tz)
    assert start_of_month(now) == datetime(2026, 10, 1, tzinfo=tz)


def test_start_of_day():
    now = datetime(2026, 10, 19, 15, 30, 12, tzinfo=timezone.utc)
    assert start_of_day(now) == datetime(2026, 10, 19, tzinfo=timezone.utc)


def test_sum_pieces_ignores_missing_quantities():
    assert sum_pieces([{"quantidade": 3}, {"quantidade": None}, {}, {"quantidade": 4}]) == 7
    assert sum_pieces([]) == 0


# ─── commission tiers (72-piece kit) ─────────────────────────────

@pytest.mark.parametrize(("pieces", "rate"), [
    (0, 0.30),
    (50, 0.30),   # 69.4%
    (51, 0.35),   # 70.8%
    (64, 0.35),   # 88.9%
    (65, 0.40),   # 90.3%
    (KIT_PIECES, 0.40),
    (90, 0.40),
])
def test_commission_rate_tiers(pieces, rate):
    assert commission_rate(pieces) == rate


def test_commission_rate_exact_thresholds():
    assert commission_rate(7, kit_pieces=10) == 0.35
    assert commission_rate(9, kit_pieces=10) == 0.40


# ─── daily buckets ───────────────────────────────────────────────

def test_daily_buckets_sums_per_day_and_labels_weekday():
    sales = [
        {"valor_total": "10.50", "created_at": "2026-10-17T09:00:00+00:00"},
        {"valor_total": 4.5, "created_at": "2026-10-17T18:00:00+00:00"},
        {"valor_total": "7", "created_at": "2026-10-19T08:00:00+00:00"},
        {"valor_total": "99", "created_at": "2026-10-12T08:00:00+00:00"},
        {"valor_total": "1", "created_at": None},
    ]
    buckets = daily_buckets(sales, date(2026, 10, 17), 3)
    assert buckets == [
        {"date": "2026-10-17", "label": "Sáb", "value": 15.0},
        {"date": "2026-10-18", "label": "Dom", "value": 0.0},
        {"date": "2026-10-19", "label": "Seg", "value": 7.0},
    ]


def test_daily_buckets_without_sales():
    buckets = daily_buckets([], date(2026, 10, 13), 7)
    assert len(buckets) == 7
    assert all(b["value"] == 0.0 for b in buckets)
