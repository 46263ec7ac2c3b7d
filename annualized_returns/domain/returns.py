from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional

PeriodType = Literal["daily", "weekly", "monthly", "yearly"]

PERIODS_PER_YEAR: Dict[str, int] = {
    "daily": 365,
    "weekly": 52,
    "monthly": 12,
    "yearly": 1,
}

DEFAULT_TOTAL_RETURN = 15.0
DEFAULT_PERIODS = 12.0
DEFAULT_PERIOD_TYPE: PeriodType = "monthly"


class InputRangeError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class InputState:
    total_return_percent: float = DEFAULT_TOTAL_RETURN
    periods: float = DEFAULT_PERIODS
    period_type: PeriodType = DEFAULT_PERIOD_TYPE

    @property
    def periods_per_year(self) -> int:
        return PERIODS_PER_YEAR[self.period_type]


@dataclass(frozen=True)
class CalculationResult:
    annualized_return: float
    log_return: float
    annualized_log_return: float
    is_valid_annualized: bool
    is_valid_log: bool
    frequency_description: Optional[str] = None


@dataclass(frozen=True)
class ChartPoint:
    label: str
    short_label: str
    value_percent: float
    description: str


@dataclass(frozen=True)
class Evaluation:
    """One recompute pass over an input state."""

    state: InputState
    errors: List[str]
    result: Optional[CalculationResult]
    chart: List[ChartPoint]

    @property
    def ok(self) -> bool:
        return not self.errors and self.result is not None
