"""Usage: ordered extraction rules per bill field, most specific phrasing first.

All patterns run on lowercased, whitespace-collapsed text.
"""

from __future__ import annotations

import re

from bollette.schemas.bill import DEFAULT_MONTHS, EnergyType
from bollette.services.rules.rule_schema import PatternRule, rule


def number(name: str = "value") -> str:
    return rf"(?<![\d.,])(?P<{name}>\d{{1,3}}(?:\.\d{{3}})+(?:,\d+)?|\d+(?:[.,]\d+)?)(?![\d])"


def money(name: str = "value") -> str:
    return rf"(?<![\d.,])(?P<{name}>\d{{1,3}}(?:\.\d{{3}})+,\d{{2}}|\d+[.,]\d{{2}})(?![\d])"


NUM = number()
MONEY = money()
GAP = r"[^0-9]{0,40}?"
SHORT_GAP = r"[^0-9]{0,25}?"
EURO = r"(?:€|\beuro\b|\beur\b)"
KWH = r"\s*kwh\b"
SMC = r"\s*(?:smc|sm3|mc)\b"
PER_MONTH = r"(?:/\s*mese|(?:al|per)\s+mese)\b"

CONSUMPTION_RANGES = {
    EnergyType.ELECTRICITY: (50, 99_999),
    EnergyType.GAS: (5, 99_999),
}
TOTAL_RANGE = (5, 99_999)
MONTHS_RANGE = (1, 12)
FIXED_FEE_RANGE = (0, 500)
ANNUAL_CONSUMPTION_MAX = 999_999
ANNUAL_SPEND_RANGE = (1, 999_999)
COMPONENT_MAX = 99_999

MONTHS_DEFAULT = DEFAULT_MONTHS

_ELE_MIN, _ELE_MAX = CONSUMPTION_RANGES[EnergyType.ELECTRICITY]
_GAS_MIN, _GAS_MAX = CONSUMPTION_RANGES[EnergyType.GAS]

CONSUMPTION_RULES: dict[EnergyType, tuple[PatternRule, ...]] = {
    EnergyType.ELECTRICITY: (
        rule(
            "billed_total",
            rf"(?:\btotale\s+)?\b(?:energia|consum[oi])\s+fatturat[aoi]\b{GAP}{NUM}{KWH}",
            _ELE_MIN,
            _ELE_MAX,
        ),
        rule(
            "total",
            rf"\b(?:totale\s+(?:energia|consum[oi])|(?:energia|consum[oi])\s+total[ei])\b{GAP}{NUM}{KWH}",
            _ELE_MIN,
            _ELE_MAX,
        ),
        rule("generic", rf"\bconsum[oi]\b(?!\s+annu){GAP}{NUM}{KWH}", _ELE_MIN, _ELE_MAX),
        rule("bare_kwh", rf"{NUM}{KWH}", _ELE_MIN, _ELE_MAX),
        rule("energy_last_resort", rf"\benergia\b{GAP}{NUM}", _ELE_MIN, _ELE_MAX),
    ),
    EnergyType.GAS: (
        rule(
            "gas_period",
            rf"\bconsum[oi]\s+(?:(?:di\s+)?gas\s+)?(?:total[ei]|fatturat[oi]|nel\s+periodo|del\s+periodo)\b{GAP}{NUM}{SMC}",
            _GAS_MIN,
            _GAS_MAX,
        ),
        rule("volume", rf"\bvolume\s+(?:convertito|fatturato)\b{GAP}{NUM}", _GAS_MIN, _GAS_MAX),
        rule("bare_smc", rf"{NUM}\s*(?:smc|sm3)\b", _GAS_MIN, _GAS_MAX),
    ),
}

TOTAL_RULES: tuple[PatternRule, ...] = (
    rule("to_pay", rf"\b(?:importo|totale|netto)\s+(?:da|a)\s+pagare\b{SHORT_GAP}{MONEY}", *TOTAL_RANGE),
    rule(
        "bill_total",
        rf"\btotale\s+(?:della\s+)?(?:bolletta|fattura|documento)\b{SHORT_GAP}{MONEY}",
        *TOTAL_RANGE,
    ),
    rule("labelled", rf"\b(?:totale|importo)\b[\s:]*{EURO}?\s*{MONEY}", *TOTAL_RANGE),
    rule("currency_before", rf"{EURO}\s*{MONEY}", *TOTAL_RANGE),
    rule("currency_after", rf"{MONEY}\s*{EURO}", *TOTAL_RANGE),
)

# "ultimi N mesi" and "annuo" phrasing belongs to the annual disclosure box
_PERIOD_GAP = r"(?:(?!ultim|annu)[^0-9]){0,40}?"

MONTHS_PHRASE_RULES: tuple[PatternRule, ...] = (
    rule(
        "period_months",
        rf"\b(?:periodo\s+di\s+(?:fornitura|fatturazione|riferimento)|fornitura|fatturazione)\b"
        rf"{_PERIOD_GAP}(?<!\d)(?P<value>\d{{1,2}})\s*mesi\b",
        *MONTHS_RANGE,
    ),
    rule(
        "consumption_period_months",
        rf"\bconsum[oi]\s+(?:fatturat[oi]\s+)?(?:nel|del)\s+periodo\b"
        rf"{_PERIOD_GAP}(?<!\d)(?P<value>\d{{1,2}})\s*mesi\b",
        *MONTHS_RANGE,
    ),
    rule(
        "months_of_period",
        r"(?<!ultimi )(?<!\d)(?P<value>\d{1,2})\s*mesi\s+di\s+(?:consumo|fornitura|fatturazione)\b",
        *MONTHS_RANGE,
    ),
)

MONTHS_FEE_RULES: tuple[PatternRule, ...] = (
    rule("months_times_amount", r"(?<!\d)(?P<value>\d{1,2})\s*mes[ei]\s*[x*]\s*(?:€\s*)?\d", *MONTHS_RANGE),
)

MONTHS_KEYWORD_RULES: tuple[PatternRule, ...] = (
    rule("bimestrale", r"\bbimestral[ei]\b", *MONTHS_RANGE, value=2),
    rule("trimestrale", r"\btrimestral[ei]\b", *MONTHS_RANGE, value=3),
    rule("quadrimestrale", r"\bquadrimestral[ei]\b", *MONTHS_RANGE, value=4),
    rule("semestrale", r"\bsemestral[ei]\b", *MONTHS_RANGE, value=6),
    rule("mensile", r"\bmensil[ei]\b", *MONTHS_RANGE, value=1),
)

_DATE = r"\d{1,2}[/.-]\d{1,2}[/.-](?:\d{4}|\d{2})"
DATE_RANGE_RE = re.compile(
    rf"(?<![\d/.-])(?P<start>{_DATE})\s*(?:-|al|a|fino\s+al)\s*(?P<end>{_DATE})(?![\d/])",
    re.IGNORECASE,
)

FIXED_FEE_MONTHS_RULES: tuple[PatternRule, ...] = (
    rule(
        "months_times_unit",
        rf"(?<!\d)(?P<months>\d{{1,2}})\s*mes[ei]\s*[x*]\s*(?:€\s*)?{money('unit')}\s*{EURO}?\s*(?:/\s*mese)?"
        rf"\s*=?\s*(?:€\s*)?{MONEY}",
        *FIXED_FEE_RANGE,
        exclusive_min=True,
        exclusive_max=True,
    ),
)

FIXED_FEE_RULES: tuple[PatternRule, ...] = (
    rule(
        "fixed_fee",
        rf"\b(?:quota\s+fissa|canone\s+fisso|corrispettivo\s+fisso|spesa\s+fissa)\b{GAP}{MONEY}"
        rf"(?!\s*{EURO}?\s*{PER_MONTH})",
        *FIXED_FEE_RANGE,
        exclusive_min=True,
        exclusive_max=True,
    ),
)

FIXED_FEE_RATE_RULES: tuple[PatternRule, ...] = (
    rule(
        "monthly_rate",
        rf"{MONEY}\s*{EURO}?\s*{PER_MONTH}",
        *FIXED_FEE_RANGE,
        exclusive_min=True,
        exclusive_max=True,
    ),
)


def _component(name: str, pattern: str) -> PatternRule:
    return rule(name, pattern, 0, COMPONENT_MAX, exclusive_min=True)


COST_BREAKDOWN_RULES: dict[str, tuple[PatternRule, ...]] = {
    "sale": (
        _component(
            "materia",
            rf"\bspesa\s+per\s+(?:la\s+)?materia\s+(?:prima\s+)?(?:energia|gas)\b{GAP}{MONEY}",
        ),
        _component(
            "vendita",
            rf"\bspesa\s+per\s+(?:la\s+)?vendita\s+(?:di\s+)?(?:energia|gas)\b{GAP}{MONEY}",
        ),
    ),
    "network": (
        _component(
            "trasporto_contatore",
            rf"\btrasporto\s+(?:e|ed)\s+(?:la\s+)?(?:gestione\s+del\s+contatore|distribuzione)\b{GAP}{MONEY}",
        ),
        _component("trasporto", rf"\bspesa\s+per\s+(?:il\s+)?trasporto\b{GAP}{MONEY}"),
    ),
    "system_charges": (
        _component(
            "oneri",
            rf"\boneri\s+(?:di\s+sistema|generali(?:\s+di\s+sistema)?)\b{GAP}{MONEY}",
        ),
    ),
    "taxes": (
        _component(
            "totale_imposte",
            rf"\btotale\s+(?:accise\s+e\s+iva|imposte(?:\s+e\s+iva)?)\b{GAP}{MONEY}",
        ),
        _component("imposte", rf"\bimposte(?:\s+e\s+iva)?\b{GAP}{MONEY}"),
    ),
}

_LAST_TWELVE_MONTHS = rf"\bconsum[oi]\s+(?:degli\s+|negli\s+)?ultimi\s+12\s+mesi\b{GAP}{NUM}"

ANNUAL_CONSUMPTION_RULES: dict[EnergyType, tuple[PatternRule, ...]] = {
    EnergyType.ELECTRICITY: (
        rule("disclosure", rf"\bconsumo\s+annu[oa]\w*{GAP}{NUM}", _ELE_MIN, ANNUAL_CONSUMPTION_MAX),
        rule("last_twelve_months", _LAST_TWELVE_MONTHS, _ELE_MIN, ANNUAL_CONSUMPTION_MAX),
    ),
    EnergyType.GAS: (
        rule("disclosure", rf"\bconsumo\s+annu[oa]\w*{GAP}{NUM}", _GAS_MIN, ANNUAL_CONSUMPTION_MAX),
        rule("last_twelve_months", _LAST_TWELVE_MONTHS, _GAS_MIN, ANNUAL_CONSUMPTION_MAX),
    ),
}

ANNUAL_SPEND_RULES: tuple[PatternRule, ...] = (
    rule("disclosure", rf"\bspesa\s+annu[ao]\w*[^0-9]{{0,60}}?{MONEY}", *ANNUAL_SPEND_RANGE),
)
