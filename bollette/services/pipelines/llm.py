"""Usage: model-based strategy (text -> LLM JSON -> validation)."""

from __future__ import annotations

import logging
import time

from bollette.core.config import settings
from bollette.core.errors import MANDATORY_FIELDS_MISSING, field_code
from bollette.prompts import render_prompt
from bollette.schemas.bill import BillExtractionResult, EnergyType, ExtractionDiagnostics
from bollette.services.llm.base import BaseLLMClient
from bollette.services.llm.payload import LlmBillPayload
from bollette.services.pipelines.base import BaseBillPipeline, ensure_min_length
from bollette.services.rules.text_normalize import preview

logger = logging.getLogger(__name__)

LLM_STRATEGY = "llm"
PROMPT_NAME = "bill_extraction"


class LlmBillPipeline(BaseBillPipeline):
    """Same contract as the rule strategy; upstream errors propagate unmodified."""

    strategy = LLM_STRATEGY

    def __init__(
        self,
        llm_client: BaseLLMClient,
        *,
        min_text_length: int | None = None,
        max_text_chars: int | None = None,
        preview_chars: int | None = None,
    ) -> None:
        self.llm_client = llm_client
        self.min_text_length = settings.min_text_length if min_text_length is None else min_text_length
        self.max_text_chars = settings.llm_max_text_chars if max_text_chars is None else max_text_chars
        self.preview_chars = settings.preview_chars if preview_chars is None else preview_chars

    def build_prompt(self, text: str, energy_type: EnergyType) -> str:
        return render_prompt(
            PROMPT_NAME,
            energy_label=energy_type.label_it,
            unit=energy_type.unit,
            text=text[: self.max_text_chars],
        )

    async def run(self, text: str, energy_type: EnergyType | str | None = None) -> BillExtractionResult:
        ensure_min_length(text, self.min_text_length)
        energy = EnergyType.parse(energy_type)

        t0 = time.perf_counter()
        raw = await self.llm_client.generate_structured(self.build_prompt(text, energy))
        logger.info("LLM extraction finished. Duration: %.4fs", time.perf_counter() - t0)

        payload = LlmBillPayload.model_validate(raw)
        data = payload.to_bill_data(energy)
        missing = payload.missing_mandatory()
        if missing:
            logger.warning("LLM extraction failed: %s fields=%s", MANDATORY_FIELDS_MISSING, missing)
            return BillExtractionResult(
                complete=False,
                strategy=self.strategy,
                data=data,
                errors=[field_code(MANDATORY_FIELDS_MISSING, name) for name in missing],
                diagnostics=ExtractionDiagnostics(
                    raw_text_preview=preview(text, self.preview_chars),
                    consumption=data.consumption,
                    total=data.total,
                ),
            )
        return BillExtractionResult(complete=True, strategy=self.strategy, data=data)
