# src/domain/aggregation.py

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def percentage(part: int, total: int) -> int:
    """
    Whole-number share of total, halves rounded up. Zero when total is zero.
    """
    if total <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def month_label(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{_MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def total_revenue(bookings: Iterable) -> Decimal:
    return sum((Decimal(booking.amount) for booking in bookings), Decimal("0"))


def average_revenue(revenue: Decimal, approved_count: int) -> Decimal:
    if approved_count <= 0:
        return Decimal("0")
    return (Decimal(revenue) / approved_count).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )


def approval_rate(pending: int, approved: int, rejected: int) -> int:
    return percentage(approved, pending + approved + rejected)


def revenue_by_month(bookings: Iterable) -> list[dict]:
    """
    Sum booking amounts per "Mon YYYY" label, in first-seen order.
    Expects rows with `amount` and `created_at`.
    """
    buckets: dict[str, Decimal] = {}
    for booking in bookings:
        label = month_label(booking.created_at)
        buckets[label] = buckets.get(label, Decimal("0")) + Decimal(booking.amount)
    return [
        {"month": label, "revenue": float(revenue)}
        for label, revenue in buckets.items()
    ]


def category_distribution(bookings: Iterable) -> list[dict]:
    counts: dict[str, int] = {}
    for booking in bookings:
        for seat in booking.seats:
            if seat.category:
                counts[seat.category] = counts.get(seat.category, 0) + 1
    return [{"name": name, "value": value} for name, value in counts.items()]
