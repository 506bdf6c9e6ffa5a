from __future__ import annotations

import pytest

from bollette.services.rules.annualize import CONSUMPTION_DIGITS, MONEY_DIGITS, annualize


def test_annualize_scales_period_to_twelve_months() -> None:
    assert annualize(86, 2, digits=CONSUMPTION_DIGITS) == 516
    assert annualize(142.30, 3, digits=MONEY_DIGITS) == pytest.approx(569.20)
    assert annualize(39.10, 1, digits=MONEY_DIGITS) == pytest.approx(469.20)


def test_annualize_rounds_half_up() -> None:
    assert annualize(12.5, 5, digits=MONEY_DIGITS) == 30.0
    assert annualize(10.25, 8, digits=MONEY_DIGITS) == 15.38


@pytest.mark.parametrize(("value", "months"), [(None, 2), (86, None), (86, 0), (86, 13)])
def test_annualize_rejects_missing_inputs(value, months) -> None:
    assert annualize(value, months, digits=CONSUMPTION_DIGITS) is None


@pytest.mark.parametrize("months", [1, 2, 3, 4, 6, 12])
def test_annualize_round_trips_within_rounding(months: int) -> None:
    annual = annualize(78.52, months, digits=MONEY_DIGITS)

    assert annual is not None
    assert annual * months / 12 == pytest.approx(78.52, abs=0.01)
