from __future__ import annotations

import pytest

from bill_samples import SCENARIO_A, SCENARIO_B, SCENARIO_C
from bollette.schemas.bill import DEFAULT_OPERATOR, EnergyType
from bollette.services.rules import BillRuleExtractor, parse_bill_text


def test_rule_extractor_reads_complete_electricity_bill() -> None:
    result = BillRuleExtractor().extract(SCENARIO_A, "luce")

    assert result.complete is True
    assert result.strategy == "rules"
    assert result.errors == []
    assert result.diagnostics is None

    data = result.data
    assert data.energy_type is EnergyType.ELECTRICITY
    assert data.operator == "IREN Mercato"
    assert data.period == "01/11/2024 - 31/12/2024"
    assert data.months == 2
    assert data.consumption == 86
    assert data.total == 78.52
    assert data.fixed_fee.periodic == 39.10
    assert data.fixed_fee.annual == 234.60
    assert data.annual_consumption == 443
    assert data.annual_spend == 471.12


def test_rule_extractor_warns_about_missing_optional_fields() -> None:
    result = BillRuleExtractor().extract(SCENARIO_A, EnergyType.ELECTRICITY)

    assert result.warnings == [
        "no_plausible_match:sale",
        "no_plausible_match:network",
        "no_plausible_match:system_charges",
        "no_plausible_match:taxes",
    ]


def test_rule_extractor_reads_quarterly_gas_bill() -> None:
    result = parse_bill_text(SCENARIO_B, "gas")

    assert result.complete is True
    data = result.data
    assert data.energy_type is EnergyType.GAS
    assert data.operator == DEFAULT_OPERATOR
    assert data.months == 3
    assert data.consumption == 310
    assert data.total == 142.30
    assert data.period is None
    assert data.annual_consumption == 1240
    assert data.annual_spend == pytest.approx(569.20)
    assert "no_plausible_match:period" in result.warnings
    assert "no_plausible_match:fixed_fee" in result.warnings


def test_rule_extractor_reports_missing_total_with_preview() -> None:
    result = BillRuleExtractor().extract(SCENARIO_C, "electricity")

    assert result.complete is False
    assert result.errors == ["mandatory_fields_missing:total"]
    assert result.data.consumption == 250
    assert result.data.total is None
    assert result.data.annual_spend is None
    assert result.diagnostics is not None
    assert result.diagnostics.consumption == 250
    assert result.diagnostics.total is None
    assert len(result.diagnostics.raw_text_preview) == 500
    assert SCENARIO_C.startswith(result.diagnostics.raw_text_preview)


def test_rule_extractor_preview_length_is_configurable() -> None:
    result = BillRuleExtractor(preview_chars=40).extract(SCENARIO_C)

    assert result.diagnostics is not None
    assert result.diagnostics.raw_text_preview == SCENARIO_C[:40]


def test_rule_extractor_unknown_energy_type_means_electricity() -> None:
    result = BillRuleExtractor().extract(SCENARIO_A, "teleriscaldamento")

    assert result.data.energy_type is EnergyType.ELECTRICITY
    assert result.data.consumption == 86


def test_rule_extractor_gas_rules_ignore_kwh_figures() -> None:
    result = BillRuleExtractor().extract(SCENARIO_A, "gas")

    assert result.complete is False
    assert result.errors == ["mandatory_fields_missing:consumption"]
    assert result.data.total == 78.52


def test_rule_extractor_last_twelve_months_box_does_not_set_months() -> None:
    text = SCENARIO_A.replace("Consumo annuo kWh 443\n", "Consumi degli ultimi 12 mesi 2.700 kWh\n")

    result = BillRuleExtractor().extract(text, "luce")

    assert result.complete is True
    assert result.data.months == 2
    assert result.data.consumption == 86
    assert result.data.annual_consumption == 2700
    assert result.data.annual_spend == 471.12
