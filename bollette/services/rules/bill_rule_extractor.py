"""Usage: rule-based bill extraction from OCR / PDF text."""

from __future__ import annotations

import logging

from bollette.core.config import settings
from bollette.core.errors import MANDATORY_FIELDS_MISSING, NO_PLAUSIBLE_MATCH, field_code
from bollette.schemas.bill import BillData, BillExtractionResult, EnergyType, ExtractionDiagnostics
from bollette.services.rules.field_extractors import (
    estimate_months,
    extract_annual_consumption,
    extract_annual_spend,
    extract_consumption,
    extract_cost_breakdown,
    extract_fixed_fee,
    extract_period,
    extract_total,
)
from bollette.services.rules.operators import identify_operator
from bollette.services.rules.text_normalize import MATCH_CONFIG, normalize_text, preview

logger = logging.getLogger(__name__)

RULES_STRATEGY = "rules"


class BillRuleExtractor:
    """Pure text -> BillExtractionResult engine; holds no per-call state."""

    def __init__(self, *, preview_chars: int | None = None) -> None:
        self.preview_chars = settings.preview_chars if preview_chars is None else preview_chars

    def extract(self, text: str, energy_type: EnergyType | str | None = None) -> BillExtractionResult:
        energy = EnergyType.parse(energy_type)
        lowered = normalize_text(text, MATCH_CONFIG)

        consumption = extract_consumption(lowered, energy)
        total = extract_total(lowered)
        months = estimate_months(lowered)
        fixed_fee = extract_fixed_fee(lowered, months)
        cost_breakdown = extract_cost_breakdown(lowered, total)

        data = BillData(
            energy_type=energy,
            operator=identify_operator(text),
            period=extract_period(lowered),
            months=months,
            consumption=consumption,
            total=total,
            fixed_fee=fixed_fee,
            cost_breakdown=cost_breakdown,
            annual_consumption=extract_annual_consumption(lowered, energy, consumption, months),
            annual_spend=extract_annual_spend(lowered, total, months),
        )
        warnings = _optional_warnings(data)

        missing = [name for name, value in (("consumption", consumption), ("total", total)) if value is None]
        if missing:
            logger.warning(
                "Rule extraction failed: %s fields=%s energy_type=%s",
                MANDATORY_FIELDS_MISSING,
                missing,
                energy.value,
            )
            return BillExtractionResult(
                complete=False,
                strategy=RULES_STRATEGY,
                data=data,
                errors=[field_code(MANDATORY_FIELDS_MISSING, name) for name in missing],
                warnings=warnings,
                diagnostics=ExtractionDiagnostics(
                    raw_text_preview=preview(text, self.preview_chars),
                    consumption=consumption,
                    total=total,
                ),
            )

        logger.info(
            "Rule extraction complete: energy_type=%s operator=%s months=%d missing_optional=%d",
            energy.value,
            data.operator,
            months,
            len(warnings),
        )
        return BillExtractionResult(
            complete=True,
            strategy=RULES_STRATEGY,
            data=data,
            warnings=warnings,
        )


def parse_bill_text(text: str, energy_type: EnergyType | str | None = None) -> BillExtractionResult:
    return BillRuleExtractor().extract(text, energy_type)


def _optional_warnings(data: BillData) -> list[str]:
    optional = {
        "period": data.period,
        "fixed_fee": data.fixed_fee.periodic,
        "sale": data.cost_breakdown.sale,
        "network": data.cost_breakdown.network,
        "system_charges": data.cost_breakdown.system_charges,
        "taxes": data.cost_breakdown.taxes,
        "annual_consumption": data.annual_consumption,
        "annual_spend": data.annual_spend,
    }
    return [field_code(NO_PLAUSIBLE_MATCH, name) for name, value in optional.items() if value is None]
