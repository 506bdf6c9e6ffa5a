from typing import Protocol, runtime_checkable

from bollette.core.errors import InputTooShortError
from bollette.schemas.bill import BillExtractionResult, EnergyType


@runtime_checkable
class BaseBillPipeline(Protocol):
    strategy: str

    async def run(self, text: str, energy_type: EnergyType | str | None = None) -> BillExtractionResult:
        """Extract bill data from already decoded text."""
        ...


def ensure_min_length(text: str, minimum: int) -> str:
    """Reject text shorter than `minimum` before any extraction runs."""

    stripped = (text or "").strip()
    if len(stripped) < minimum:
        raise InputTooShortError(len(stripped), minimum)
    return stripped
