"""Usage: per-field extraction cascades over normalized bill text."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime

from bollette.schemas.bill import CostBreakdown, EnergyType, FixedFee
from bollette.services.rules.annualize import CONSUMPTION_DIGITS, MONEY_DIGITS, annualize
from bollette.services.rules.numbers import round_half_up
from bollette.services.rules.rule_schema import RuleMatch, first_plausible
from bollette.services.rules.rule_tables import (
    ANNUAL_CONSUMPTION_RULES,
    ANNUAL_SPEND_RULES,
    CONSUMPTION_RULES,
    COST_BREAKDOWN_RULES,
    DATE_RANGE_RE,
    FIXED_FEE_MONTHS_RULES,
    FIXED_FEE_RANGE,
    FIXED_FEE_RATE_RULES,
    FIXED_FEE_RULES,
    MONTHS_DEFAULT,
    MONTHS_FEE_RULES,
    MONTHS_KEYWORD_RULES,
    MONTHS_PHRASE_RULES,
    MONTHS_RANGE,
    TOTAL_RULES,
)

logger = logging.getLogger(__name__)

_DATE_FORMATS = ("%d/%m/%Y", "%d/%m/%y")


def extract_consumption(text: str, energy_type: EnergyType) -> float | None:
    found = first_plausible(text, CONSUMPTION_RULES[energy_type], field="consumption")
    return found.value if found else None


def extract_total(text: str) -> float | None:
    found = first_plausible(text, TOTAL_RULES, field="total")
    return round_half_up(found.value, MONEY_DIGITS) if found else None


def estimate_months(text: str) -> int:
    """Months covered by the bill; falls back to bimonthly billing."""

    for rules in (MONTHS_PHRASE_RULES, MONTHS_FEE_RULES, MONTHS_KEYWORD_RULES):
        found = first_plausible(text, rules, field="months", accept=_is_whole)
        if found:
            return int(found.value)

    date_range = find_date_range(text)
    if date_range:
        start, end = date_range
        months = math.floor((end - start).days / 30 + 0.5)
        if MONTHS_RANGE[0] <= months <= MONTHS_RANGE[1]:
            logger.debug("Rule field extracted: months rule=date_range value=%s", months)
            return months
        logger.debug("Rule candidate rejected: months rule=date_range value=%s out_of_range", months)

    logger.debug("Rule field defaulted: months value=%s", MONTHS_DEFAULT)
    return MONTHS_DEFAULT


def find_date_range(text: str) -> tuple[date, date] | None:
    for match in DATE_RANGE_RE.finditer(text):
        start = _parse_date(match.group("start"))
        end = _parse_date(match.group("end"))
        if start and end and end > start:
            return start, end
    return None


def extract_period(text: str) -> str | None:
    date_range = find_date_range(text)
    if not date_range:
        return None
    start, end = date_range
    return f"{start:%d/%m/%Y} - {end:%d/%m/%Y}"


def extract_fixed_fee(text: str, months: int) -> FixedFee:
    found = first_plausible(text, FIXED_FEE_MONTHS_RULES, field="fixed_fee", accept=_has_valid_months)
    if found:
        periodic = round_half_up(found.value, MONEY_DIGITS)
        billed_months = int(found.match.group("months"))
        return FixedFee(periodic=periodic, annual=annualize(periodic, billed_months, digits=MONEY_DIGITS))

    found = first_plausible(text, FIXED_FEE_RULES, field="fixed_fee")
    if found:
        periodic = round_half_up(found.value, MONEY_DIGITS)
        return FixedFee(periodic=periodic, annual=annualize(periodic, months, digits=MONEY_DIGITS))

    low, high = FIXED_FEE_RANGE
    found = first_plausible(
        text,
        FIXED_FEE_RATE_RULES,
        field="fixed_fee",
        accept=lambda candidate: low < candidate.value * months < high,
    )
    if found:
        return FixedFee(
            periodic=round_half_up(found.value * months, MONEY_DIGITS),
            annual=round_half_up(found.value * 12, MONEY_DIGITS),
        )
    return FixedFee()


def extract_cost_breakdown(text: str, total: float | None) -> CostBreakdown:
    """Independent components, each strictly below the total when it is known."""

    values: dict[str, float | None] = {}
    for component, rules in COST_BREAKDOWN_RULES.items():
        found = first_plausible(text, rules, field=component, below=total)
        values[component] = round_half_up(found.value, MONEY_DIGITS) if found else None
    return CostBreakdown(**values)


def extract_annual_consumption(
    text: str,
    energy_type: EnergyType,
    consumption: float | None,
    months: int,
) -> float | None:
    found = first_plausible(text, ANNUAL_CONSUMPTION_RULES[energy_type], field="annual_consumption")
    if found:
        return found.value
    return annualize(consumption, months, digits=CONSUMPTION_DIGITS)


def extract_annual_spend(text: str, total: float | None, months: int) -> float | None:
    found = first_plausible(text, ANNUAL_SPEND_RULES, field="annual_spend")
    if found:
        return round_half_up(found.value, MONEY_DIGITS)
    return annualize(total, months, digits=MONEY_DIGITS)


def _is_whole(candidate: RuleMatch) -> bool:
    return float(candidate.value).is_integer()


def _has_valid_months(candidate: RuleMatch) -> bool:
    billed_months = int(candidate.match.group("months"))
    return MONTHS_RANGE[0] <= billed_months <= MONTHS_RANGE[1]


def _parse_date(value: str) -> date | None:
    cleaned = value.replace(".", "/").replace("-", "/")
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None
