"""Usage: declarative pattern rules and the first-plausible-match cascade."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable

from bollette.services.rules.numbers import parse_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternRule:
    name: str
    pattern: re.Pattern[str]
    minimum: float
    maximum: float
    group: int | str = "value"
    exclusive_min: bool = False
    exclusive_max: bool = False
    # keyword rules yield a fixed value instead of a capture
    value: float | None = None

    def in_range(self, value: float) -> bool:
        if value < self.minimum or (self.exclusive_min and value == self.minimum):
            return False
        if value > self.maximum or (self.exclusive_max and value == self.maximum):
            return False
        return True

    def candidate(self, match: re.Match[str]) -> float | None:
        if self.value is not None:
            return self.value
        return parse_number(match.group(self.group))


@dataclass(frozen=True)
class RuleMatch:
    value: float
    rule: PatternRule
    match: re.Match[str]


def rule(
    name: str,
    pattern: str,
    minimum: float,
    maximum: float,
    *,
    group: int | str = "value",
    exclusive_min: bool = False,
    exclusive_max: bool = False,
    value: float | None = None,
) -> PatternRule:
    return PatternRule(
        name=name,
        pattern=re.compile(pattern, re.IGNORECASE),
        minimum=minimum,
        maximum=maximum,
        group=group,
        exclusive_min=exclusive_min,
        exclusive_max=exclusive_max,
        value=value,
    )


def first_plausible(
    text: str,
    rules: Iterable[PatternRule],
    *,
    field: str,
    below: float | None = None,
    accept: Callable[[RuleMatch], bool] | None = None,
) -> RuleMatch | None:
    """Return the first in-range candidate, trying rules in order.

    Within a rule, matches are scanned left to right. `below` is an exclusive
    upper bound applied on top of the rule range.
    """

    for entry in rules:
        for match in entry.pattern.finditer(text):
            value = entry.candidate(match)
            if value is None:
                continue
            if not entry.in_range(value):
                logger.debug("Rule candidate rejected: %s rule=%s value=%s out_of_range", field, entry.name, value)
                continue
            if below is not None and value >= below:
                logger.debug("Rule candidate rejected: %s rule=%s value=%s not_below=%s", field, entry.name, value, below)
                continue
            found = RuleMatch(value=value, rule=entry, match=match)
            if accept is not None and not accept(found):
                logger.debug("Rule candidate rejected: %s rule=%s value=%s", field, entry.name, value)
                continue
            logger.debug("Rule field extracted: %s rule=%s value=%s", field, entry.name, value)
            return found
    logger.debug("Rule field missing: %s", field)
    return None
