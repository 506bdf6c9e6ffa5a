"""Usage: resolve the operator (utility supplier) display name from bill text."""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from bollette.schemas.bill import DEFAULT_OPERATOR
from bollette.services.rules.rule_loader import load_operator_aliases
from bollette.services.rules.text_normalize import MATCH_CONFIG, ORIGINAL_CASE_CONFIG, normalize_text

logger = logging.getLogger(__name__)

_COMPANY_SUFFIX_RE = re.compile(
    r"\b(?P<name>[A-Z][\w&'.-]*(?:\s+[A-Z][\w&'.-]*){0,3})\s*,?\s+(?:S\.\s?p\.\s?A\.?|S\.\s?A\.|SpA)(?![\w])"
)


@lru_cache(maxsize=1)
def _alias_patterns() -> tuple[tuple[re.Pattern[str], str], ...]:
    return tuple(
        (re.compile(rf"(?<![\w.]){re.escape(alias)}(?![\w])"), name)
        for alias, name in load_operator_aliases()
    )


def identify_operator(text: str) -> str:
    """Alias table first, then a '<Name> S.p.A.' pattern, then the placeholder."""

    lowered = normalize_text(text, MATCH_CONFIG)
    for pattern, name in _alias_patterns():
        if pattern.search(lowered):
            logger.debug("Operator matched alias=%s name=%s", pattern.pattern, name)
            return name

    match = _COMPANY_SUFFIX_RE.search(normalize_text(text, ORIGINAL_CASE_CONFIG))
    if match:
        name = match.group("name").strip(" .,-")
        if name:
            logger.debug("Operator matched company suffix name=%s", name)
            return name

    logger.debug("Operator not found, using placeholder")
    return DEFAULT_OPERATOR
