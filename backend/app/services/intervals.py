"""Interval arithmetic shared by the student view aggregators."""

from decimal import ROUND_HALF_UP, Decimal

SECONDS_PER_HOUR = 3600


def overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    """Return the seconds shared by two closed ranges, never less than zero."""
    return max(0, min(a_end, b_end) - max(a_start, b_start))


def seconds_to_hours(seconds: int) -> float:
    hours = Decimal(seconds) / Decimal(SECONDS_PER_HOUR)
    return float(hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def percent_of(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up; 0 when ``whole`` is not positive."""
    if whole <= 0:
        return 0
    ratio = Decimal(100) * Decimal(part) / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_epoch(value) -> int | None:
    """Read an upstream time bound; None for missing, zero, or non-numeric values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        epoch = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return epoch or None
