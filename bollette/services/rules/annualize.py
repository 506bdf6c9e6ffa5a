"""Usage: derive annual figures from a period figure and its month count."""

from __future__ import annotations

from bollette.services.rules.numbers import round_half_up

CONSUMPTION_DIGITS = 0
MONEY_DIGITS = 2


def annualize(value: float | None, months: int | None, *, digits: int) -> float | None:
    """value * 12 / months, rounded half-up; None when either input is missing."""

    if value is None or not months or not 1 <= months <= 12:
        return None
    return round_half_up(value * 12 / months, digits)
