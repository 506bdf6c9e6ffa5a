"""Usage: validate the JSON returned by the LLM into BillData."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bollette.schemas.bill import DEFAULT_MONTHS, DEFAULT_OPERATOR, BillData, EnergyType, FixedFee
from bollette.services.rules.numbers import parse_number


def _parse_float_like(value: Any) -> float | None:
    """Coerce numbers and Italian-formatted strings; anything else becomes None."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return parse_number(value.strip()) if value.strip() else None
    return None


class LlmBillPayload(BaseModel):
    """JSON shape requested from the model; Italian and English keys accepted."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    operator: str | None = Field(default=None, validation_alias=AliasChoices("operator", "operatore"))
    period: str | None = Field(default=None, validation_alias=AliasChoices("period", "periodo"))
    months: int = Field(default=DEFAULT_MONTHS, validation_alias=AliasChoices("months", "mesi"))
    consumption_period: float | None = Field(
        default=None,
        validation_alias=AliasChoices("consumptionPeriod", "consumoPeriodo", "consumption_period"),
    )
    spend_period: float | None = Field(
        default=None,
        validation_alias=AliasChoices("spendPeriod", "spesaPeriodo", "spend_period"),
    )
    annual_consumption: float | None = Field(
        default=None,
        validation_alias=AliasChoices("annualConsumption", "consumoAnnuo", "annual_consumption"),
    )
    annual_spend: float | None = Field(
        default=None,
        validation_alias=AliasChoices("annualSpend", "spesaAnnua", "annual_spend"),
    )
    annual_fixed_fee: float | None = Field(
        default=None,
        validation_alias=AliasChoices("annualFixedFee", "quotaFissaAnnua", "annual_fixed_fee"),
    )

    @field_validator("operator", "period", mode="before")
    @classmethod
    def _parse_optional_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("months", mode="before")
    @classmethod
    def _parse_months(cls, value: Any) -> int:
        parsed = _parse_float_like(value)
        if parsed is None or not parsed.is_integer() or not 1 <= parsed <= 12:
            return DEFAULT_MONTHS
        return int(parsed)

    @field_validator(
        "consumption_period",
        "spend_period",
        "annual_consumption",
        "annual_spend",
        "annual_fixed_fee",
        mode="before",
    )
    @classmethod
    def _parse_optional_numbers(cls, value: Any) -> float | None:
        return _parse_float_like(value)

    def missing_mandatory(self) -> list[str]:
        missing = []
        if self.consumption_period is None:
            missing.append("consumption")
        if self.spend_period is None:
            missing.append("total")
        return missing

    def to_bill_data(self, energy_type: EnergyType) -> BillData:
        return BillData(
            energy_type=energy_type,
            operator=self.operator or DEFAULT_OPERATOR,
            period=self.period,
            months=self.months,
            consumption=self.consumption_period,
            total=self.spend_period,
            fixed_fee=FixedFee(annual=self.annual_fixed_fee),
            annual_consumption=self.annual_consumption,
            annual_spend=self.annual_spend,
        )
