"""Usage: shared bill text normalization helpers."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizeConfig:
    lowercase: bool = False
    collapse_whitespace: bool = True
    unify_symbols: bool = True


MATCH_CONFIG = NormalizeConfig(lowercase=True)
ORIGINAL_CASE_CONFIG = NormalizeConfig(lowercase=False)

_SYMBOLS = str.maketrans(
    {
        "\u00d7": "x",
        "\u2013": "-",
        "\u2014": "-",
        "\u00a0": " ",
        "\ufffd": " ",
    }
)


def normalize_text(text: str, config: NormalizeConfig = MATCH_CONFIG) -> str:
    value = unicodedata.normalize("NFKC", text or "")
    if config.unify_symbols:
        value = value.translate(_SYMBOLS)
    if config.collapse_whitespace:
        value = " ".join(value.split())
    if config.lowercase:
        value = value.lower()
    return value


def preview(text: str, limit: int) -> str:
    """First `limit` characters of the raw text, never more."""

    return (text or "")[: max(limit, 0)]
