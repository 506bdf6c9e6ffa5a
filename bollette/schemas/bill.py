from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OPERATOR = "Operatore attuale"
DEFAULT_MONTHS = 2


class EnergyType(str, Enum):
    ELECTRICITY = "electricity"
    GAS = "gas"

    @property
    def unit(self) -> str:
        return "kWh" if self is EnergyType.ELECTRICITY else "Smc"

    @property
    def label_it(self) -> str:
        return "elettrica" if self is EnergyType.ELECTRICITY else "gas"

    @classmethod
    def parse(cls, value: str | EnergyType | None) -> EnergyType:
        """Case-insensitive tag parsing; unknown or missing tags mean electricity."""

        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower()
        return _ENERGY_ALIASES.get(key, cls.ELECTRICITY)


_ENERGY_ALIASES = {
    "electricity": EnergyType.ELECTRICITY,
    "luce": EnergyType.ELECTRICITY,
    "elettricita": EnergyType.ELECTRICITY,
    "elettricità": EnergyType.ELECTRICITY,
    "gas": EnergyType.GAS,
    "metano": EnergyType.GAS,
}


class FixedFee(BaseModel):
    """Flat charge independent of consumption (quota fissa)."""

    model_config = ConfigDict(frozen=True)

    periodic: float | None = Field(
        default=None,
        description="Fixed fee billed for the invoice period.",
    )
    annual: float | None = Field(
        default=None,
        description="Fixed fee annualized over 12 months.",
    )


class CostBreakdown(BaseModel):
    """Best-effort split of the total; components are not required to add up."""

    model_config = ConfigDict(frozen=True)

    sale: float | None = Field(default=None, description="Spesa per la materia energia/gas.")
    network: float | None = Field(default=None, description="Trasporto e gestione del contatore.")
    system_charges: float | None = Field(default=None, description="Oneri di sistema.")
    taxes: float | None = Field(default=None, description="Imposte e IVA.")


class BillData(BaseModel):
    """Structured bill payload; None means the field was not found."""

    model_config = ConfigDict(frozen=True)

    energy_type: EnergyType = Field(
        default=EnergyType.ELECTRICITY,
        description="Commodity billed by the invoice.",
    )
    operator: str = Field(
        default=DEFAULT_OPERATOR,
        description="Canonical operator display name.",
    )
    period: str | None = Field(
        default=None,
        description="Billing period as 'dd/mm/yyyy - dd/mm/yyyy'.",
    )
    months: int = Field(
        default=DEFAULT_MONTHS,
        ge=1,
        le=12,
        description="Months covered by the invoice.",
    )
    consumption: float | None = Field(
        default=None,
        description="Consumption billed in the period (kWh or Smc).",
    )
    total: float | None = Field(
        default=None,
        description="Total due for the current period, VAT included.",
    )
    fixed_fee: FixedFee = Field(default_factory=FixedFee)
    cost_breakdown: CostBreakdown = Field(default_factory=CostBreakdown)
    annual_consumption: float | None = Field(
        default=None,
        description="Annual consumption, disclosed or derived from the period.",
    )
    annual_spend: float | None = Field(
        default=None,
        description="Annual spend, disclosed or derived from the period.",
    )


class ExtractionDiagnostics(BaseModel):
    """Bounded triage payload attached to failed extractions."""

    model_config = ConfigDict(frozen=True)

    raw_text_preview: str
    consumption: float | None = None
    total: float | None = None


class BillExtractionResult(BaseModel):
    """Outcome shared by the rule-based and the model-based strategies."""

    model_config = ConfigDict(frozen=True)

    complete: bool
    strategy: str
    data: BillData
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    diagnostics: ExtractionDiagnostics | None = None


class TextExtractionRequest(BaseModel):
    text: str = Field(..., description="Text extracted from the bill (PDF text or OCR).")
    energy_type: str | None = Field(default=None, description="'electricity'/'luce' or 'gas'.")
    strategy: Literal["rules", "llm"] = Field(default="rules")


class ExtractionResponse(BaseModel):
    """Standard envelope for bill extraction results."""

    success: bool = Field(
        ...,
        description="Indicates whether consumption and total were both found.",
    )
    energy_type: EnergyType
    strategy: str
    data: BillData | None = Field(
        default=None,
        description="Structured bill fields payload.",
    )
    message: str = Field(
        ...,
        description="Human-readable status or error message.",
    )
    errors: list[str] = Field(default_factory=list)
    raw_text_preview: str | None = None

    @classmethod
    def from_result(cls, result: BillExtractionResult) -> ExtractionResponse:
        if result.complete:
            return cls(
                success=True,
                energy_type=result.data.energy_type,
                strategy=result.strategy,
                data=result.data,
                message="ok",
            )
        diagnostics = result.diagnostics
        return cls(
            success=False,
            energy_type=result.data.energy_type,
            strategy=result.strategy,
            data=result.data,
            message="Consumption/total not found in bill text.",
            errors=result.errors,
            raw_text_preview=diagnostics.raw_text_preview if diagnostics else None,
        )
