"""Usage: load the operator alias table from packaged JSON data."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any


RULE_DATA_DIR = Path(__file__).resolve().parents[2] / "rule_data"
OPERATORS_FILE = RULE_DATA_DIR / "operators.json"


@lru_cache(maxsize=4)
def load_operator_aliases(path: Path | None = None) -> tuple[tuple[str, str], ...]:
    """Return (alias, display name) pairs in priority order."""

    target = path or OPERATORS_FILE
    if not target.exists():
        return ()

    data = json.loads(target.read_text(encoding="utf-8"))
    entries = _validate_aliases(data, source=target)
    return tuple(entries)


def _validate_aliases(data: Any, *, source: Path) -> list[tuple[str, str]]:
    if not isinstance(data, list):
        raise ValueError(f"Operator table {source} must be a JSON list")

    entries: list[tuple[str, str]] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Operator table {source} entry {index} is not an object")
        for key in ("alias", "name"):
            if not str(item.get(key) or "").strip():
                raise ValueError(f"Operator table {source} entry {index} missing required key: {key}")
        alias = str(item["alias"]).strip().lower()
        for earlier, _name in entries:
            # a generic alias listed first would shadow the specific one
            if earlier in alias and earlier != alias:
                raise ValueError(
                    f"Operator table {source}: alias '{earlier}' shadows more specific alias '{alias}'"
                )
        entries.append((alias, str(item["name"]).strip()))
    return entries
