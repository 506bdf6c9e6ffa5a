"""Usage: parse Italian/mixed-notation numeric tokens from bill text."""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal

from bollette.core.errors import AMBIGUOUS_NUMERIC_FORMAT

logger = logging.getLogger(__name__)

_STRIP_CHARS = str.maketrans({"\u20ac": "", " ": "", "\u00a0": "", "'": ""})
_GROUPED_THOUSANDS_RE = re.compile(r"^\d{1,3}(?:\.\d{3})+$")
_VALID_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$")


def parse_number(token: str | None) -> float | None:
    """Convert '1.234,56', '39,10' or '234.60' to a float.

    The right-most separator is the decimal one when both appear; a lone dot
    followed by groups of exactly three digits is a thousands separator.
    Malformed tokens return None.
    """

    if token is None:
        return None
    candidate = str(token).translate(_STRIP_CHARS).strip()
    if not candidate or not any(ch.isdigit() for ch in candidate):
        return _reject(token)

    last_comma = candidate.rfind(",")
    last_dot = candidate.rfind(".")
    if last_comma != -1 and last_dot != -1:
        if last_comma > last_dot:
            candidate = candidate.replace(".", "").replace(",", ".")
        else:
            candidate = candidate.replace(",", "")
    elif last_comma != -1:
        candidate = candidate.replace(",", ".")
    elif last_dot != -1 and _GROUPED_THOUSANDS_RE.match(candidate):
        candidate = candidate.replace(".", "")

    if not _VALID_RE.match(candidate):
        return _reject(token)
    return float(candidate)


def round_half_up(value: float, digits: int = 0) -> float:
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def _reject(token: str) -> None:
    logger.debug("Numeric token skipped: %s token=%r", AMBIGUOUS_NUMERIC_FORMAT, token)
    return None
