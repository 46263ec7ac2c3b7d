"""Data contracts for the annualized returns API."""

from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from annualized_returns.domain.returns import (
    DEFAULT_PERIOD_TYPE,
    DEFAULT_PERIODS,
    DEFAULT_TOTAL_RETURN,
    CalculationResult,
    ChartPoint,
    InputState,
    PeriodType,
)


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


class ReturnsRequest(BaseModel):
    """Inputs of one calculator pass."""

    model_config = ConfigDict(extra="forbid")

    totalReturnPercent: float = Field(
        DEFAULT_TOTAL_RETURN,
        description="Cumulative return since inception, in percent (15 for 15%).",
    )
    periods: float = Field(
        DEFAULT_PERIODS,
        description="Number of periods the total return was observed over.",
    )
    periodType: PeriodType = Field(
        DEFAULT_PERIOD_TYPE,
        description="Length of one period; sets how many periods make a year.",
    )

    def to_state(self) -> InputState:
        return InputState(
            total_return_percent=self.totalReturnPercent,
            periods=self.periods,
            period_type=self.periodType,
        )

    @classmethod
    def from_state(cls, state: InputState) -> "ReturnsRequest":
        return cls(
            totalReturnPercent=state.total_return_percent,
            periods=state.periods,
            periodType=state.period_type,
        )


class ReturnsResult(BaseModel):
    """Annualized figures as decimals; undefined figures serialize as null."""

    annualizedReturn: Optional[float]
    logReturn: Optional[float]
    annualizedLogReturn: Optional[float]
    isValidAnnualized: bool
    isValidLog: bool
    frequencyDescription: Optional[str] = None

    @field_serializer("annualizedReturn", "logReturn", "annualizedLogReturn")
    def _drop_non_finite(self, value: Optional[float]) -> Optional[float]:
        return _finite_or_none(value)

    @classmethod
    def from_result(cls, result: CalculationResult) -> "ReturnsResult":
        return cls(
            annualizedReturn=result.annualized_return,
            logReturn=result.log_return,
            annualizedLogReturn=result.annualized_log_return,
            isValidAnnualized=result.is_valid_annualized,
            isValidLog=result.is_valid_log,
            frequencyDescription=result.frequency_description,
        )


class ChartBar(BaseModel):
    label: str
    shortLabel: str
    valuePercent: float
    description: str

    @classmethod
    def from_point(cls, point: ChartPoint) -> "ChartBar":
        return cls(
            label=point.label,
            shortLabel=point.short_label,
            valuePercent=point.value_percent,
            description=point.description,
        )


class FormulaDetails(BaseModel):
    annualizedReturnFormula: str
    logReturnFormula: str
    annualizedLogReturnFormula: str


class ReturnsResponse(BaseModel):
    """Result of a successful calculator pass."""

    inputs: ReturnsRequest
    result: ReturnsResult
    chart: List[ChartBar]
    details: Optional[FormulaDetails] = None
