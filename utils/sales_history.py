"""
Sales history utilities.

Histories are daily unit counts ordered most-recent-first: index 0 is
yesterday, index 1 the day before, and so on.
"""

import math
from typing import Sequence


def normalize_sales_history(history: Sequence[float], window: int) -> list[float]:
    """
    Fit a sales history to exactly `window` days.

    Longer histories are truncated to the most recent `window` days.
    Shorter histories are left-padded with zeros. Never raises; an empty
    history yields all zeros and a non-positive window yields [].

    Examples:
        normalize_sales_history([5, 4, 3], 5) → [0, 0, 5, 4, 3]
        normalize_sales_history([5, 4, 3], 2) → [5, 4]
    """
    if window <= 0:
        return []

    recent = [float(units) for units in history[:window]]
    padding = [0.0] * (window - len(recent))
    return padding + recent


def sum_recent_days(history: Sequence[float], days: int) -> float:
    """Sum the first `days` entries (the most recent days)."""
    return float(sum(history[:days]))


def coefficient_of_variation(values: Sequence[float]) -> float:
    """
    Calculate the coefficient of variation (CV = std_dev / mean).

    Uses the population standard deviation. Returns 1.0 when the list is
    empty, the mean is 0 or the total overflows, so "no signal" reads as
    fully volatile.
    """
    if not values:
        return 1.0

    mean = sum(values) / len(values)
    if mean <= 0 or not math.isfinite(mean):
        return 1.0

    # Deviations relative to the mean stay small even for huge values
    relative_variance = sum((v / mean - 1) ** 2 for v in values) / len(values)
    return math.sqrt(relative_variance)


def clamp(value: float, lower: float, upper: float) -> float:
    """Bound value to [lower, upper]."""
    return max(lower, min(upper, value))
