from __future__ import annotations

import pytest

from bollette.schemas.bill import EnergyType
from bollette.services.llm.payload import LlmBillPayload


def test_payload_ignores_unknown_keys_and_non_numeric_values() -> None:
    payload = LlmBillPayload.model_validate(
        {
            "consumoPeriodo": "non disponibile",
            "spesaPeriodo": True,
            "consumoAnnuo": ["443"],
            "note": "extra",
        }
    )

    assert payload.consumption_period is None
    assert payload.spend_period is None
    assert payload.annual_consumption is None
    assert payload.missing_mandatory() == ["consumption", "total"]


@pytest.mark.parametrize(("raw", "expected"), [(2.5, 2), ("0", 2), (None, 2), ("6", 6), (12, 12)])
def test_payload_months_fall_back_to_default(raw, expected: int) -> None:
    assert LlmBillPayload.model_validate({"mesi": raw}).months == expected


def test_payload_converts_to_bill_data() -> None:
    payload = LlmBillPayload.model_validate(
        {"operatore": "Enel Energia", "consumoPeriodo": 310, "spesaPeriodo": "142,30", "quotaFissaAnnua": "96"}
    )

    data = payload.to_bill_data(EnergyType.GAS)

    assert data.operator == "Enel Energia"
    assert data.energy_type is EnergyType.GAS
    assert data.total == 142.30
    assert data.fixed_fee.annual == 96
    assert data.months == 2
