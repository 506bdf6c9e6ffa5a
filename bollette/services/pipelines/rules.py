"""Usage: pattern-based strategy (text -> rules)."""

from __future__ import annotations

import logging

from bollette.core.config import settings
from bollette.schemas.bill import BillExtractionResult, EnergyType
from bollette.services.pipelines.base import BaseBillPipeline, ensure_min_length
from bollette.services.rules.bill_rule_extractor import RULES_STRATEGY, BillRuleExtractor

logger = logging.getLogger(__name__)


class RuleBillPipeline(BaseBillPipeline):
    strategy = RULES_STRATEGY

    def __init__(
        self,
        *,
        rule_extractor: BillRuleExtractor | None = None,
        min_text_length: int | None = None,
    ) -> None:
        self.rule_extractor = rule_extractor or BillRuleExtractor()
        self.min_text_length = settings.min_text_length if min_text_length is None else min_text_length

    async def run(self, text: str, energy_type: EnergyType | str | None = None) -> BillExtractionResult:
        ensure_min_length(text, self.min_text_length)
        return self.rule_extractor.extract(text, energy_type)
