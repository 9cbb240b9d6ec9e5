"""Network Metrics — pure aggregations over rows fetched from the table API.

Invariants:
    - Numeric fields arrive as numbers, numeric strings or None; None counts as 0
    - Stock below LOW_STOCK_THRESHOLD is BAIXO, otherwise NORMAL
    - start_of_month / start_of_day keep the tzinfo of their input
    - commission_rate is monotonic in pieces sold: 0.30 → 0.35 (≥70% of kit) → 0.40 (≥90%)
    - daily_buckets returns exactly `days` buckets, oldest first, sales outside the
      window ignored

Design Decisions:
    - Sales are bucketed by the date prefix of created_at as stored (UTC timestamps),
      no timezone conversion
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Any

from aurora_admin.core.domain_types import StockStatus

LOW_STOCK_THRESHOLD = 2000.0

# ─── Commission ──────────────────────────────────────────────────

KIT_PIECES = 72
BASE_COMMISSION_RATE = 0.30
# (share of the kit sold in the cycle, rate), highest tier first
COMMISSION_TIERS = ((0.90, 0.40), (0.70, 0.35))

WEEKDAY_LABELS = ("Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom")


def to_number(value: Any) -> float:
    """Coerce a PostgREST numeric (numeric columns come back as strings) to float."""
    if value is None or value == "":
        return 0.0
    return float(value)


def sum_field(rows: Iterable[Mapping[str, Any]], field: str) -> float:
    return sum(to_number(row.get(field)) for row in rows)


def sum_pieces(items: Iterable[Mapping[str, Any]]) -> int:
    """Total `quantidade` over stock or sale item rows."""
    return sum(int(item.get("quantidade") or 0) for item in items)


def stock_value(items: Iterable[Mapping[str, Any]]) -> float:
    """Total value of stock items: quantidade × produto.preco."""
    total = 0.0
    for item in items:
        produto = item.get("produto") or {}
        total += to_number(item.get("quantidade")) * to_number(produto.get("preco"))
    return total


def stock_status(value: float) -> StockStatus:
    if value < LOW_STOCK_THRESHOLD:
        return StockStatus.BAIXO
    return StockStatus.NORMAL


def commission_rate(pieces_sold: int, kit_pieces: int = KIT_PIECES) -> float:
    """Partner commission for the cycle, by share of the consigned kit sold."""
    share = pieces_sold / kit_pieces
    for threshold, rate in COMMISSION_TIERS:
        if share >= threshold:
            return rate
    return BASE_COMMISSION_RATE


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def daily_buckets(
    sales: Iterable[Mapping[str, Any]], first_day: date, days: int,
) -> list[dict[str, Any]]:
    """Sum valor_total per day for `days` consecutive days starting at first_day."""
    buckets = []
    by_date = {}
    for offset in range(days):
        day = first_day + timedelta(days=offset)
        bucket = {
            "date": day.isoformat(),
            "label": WEEKDAY_LABELS[day.weekday()],
            "value": 0.0,
        }
        buckets.append(bucket)
        by_date[bucket["date"]] = bucket
    for sale in sales:
        bucket = by_date.get(str(sale.get("created_at") or "")[:10])
        if bucket is not None:
            bucket["value"] += to_number(sale.get("valor_total"))
    return buckets
