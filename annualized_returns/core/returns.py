"""Annualized and log return calculations."""

from __future__ import annotations

import math
import re
from typing import List, Optional

from annualized_returns.domain.returns import (
    PERIODS_PER_YEAR,
    CalculationResult,
    ChartPoint,
    Evaluation,
    InputState,
    PeriodType,
)
from annualized_returns.logging_config import get_logger

logger = get_logger(__name__)

MIN_TOTAL_RETURN = -99.99
MAX_TOTAL_RETURN = 10000.0
MAX_PERIODS = 1000.0

TOTAL_RETURN_RANGE_MESSAGE = "Total Return must be between -99.99% and 10,000%"
PERIODS_RANGE_MESSAGE = "Number of periods must be between 1 and 1,000"
COMPLETE_LOSS_MESSAGE = "Total Return cannot be -100% or lower (complete loss)"

_LEADING_NUMBER = re.compile(
    r"\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)


def parse_number(raw: object, fallback: float = 0.0) -> float:
    """Read a numeric form entry the way a browser's parseFloat would.

    The longest numeric prefix wins ("12abc" -> 12.0). Entries that yield no
    number at all, or NaN, come back as ``fallback``.
    """
    if isinstance(raw, bool):
        return fallback
    if isinstance(raw, (int, float)):
        return fallback if math.isnan(raw) else float(raw)
    if raw is None:
        return fallback

    match = _LEADING_NUMBER.match(str(raw))
    if not match:
        return fallback
    token = match.group(1)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def validate(total_return_percent: float, periods: float) -> List[str]:
    """Return every range problem with the inputs, in check order."""
    errors: List[str] = []

    if not MIN_TOTAL_RETURN <= total_return_percent <= MAX_TOTAL_RETURN:
        errors.append(TOTAL_RETURN_RANGE_MESSAGE)
    if not 0 < periods <= MAX_PERIODS:
        errors.append(PERIODS_RANGE_MESSAGE)
    # overlaps the first check's lower bound; both messages can show together
    if not total_return_percent > -100:
        errors.append(COMPLETE_LOSS_MESSAGE)

    return errors


def _annualization_factor(periods_per_year: int, periods: float) -> float:
    if periods == 0:
        return math.inf
    return periods_per_year / periods


def _compound(growth: float, exponent: float) -> float:
    try:
        return growth**exponent
    except OverflowError:
        return math.inf


def _undefined() -> CalculationResult:
    return CalculationResult(
        annualized_return=math.nan,
        log_return=math.nan,
        annualized_log_return=math.nan,
        is_valid_annualized=False,
        is_valid_log=False,
    )


def calculate(
    total_return_percent: float,
    periods: float,
    period_type: PeriodType,
) -> CalculationResult:
    """Annualize a cumulative return observed over ``periods`` periods.

    annualized     = (1 + r) ** (freq / periods) - 1
    log            = ln(1 + r)
    annualized log = log * (freq / periods)

    A total return of -100% or lower has no growth factor to take a power or
    a logarithm of, so every figure comes back NaN and both flags are False.
    """
    return_decimal = total_return_percent / 100
    freq = PERIODS_PER_YEAR[period_type]
    growth = 1 + return_decimal

    if growth <= 0:
        return _undefined()

    factor = _annualization_factor(freq, periods)
    annualized_return = _compound(growth, factor) - 1
    log_return = math.log(growth)
    annualized_log_return = log_return * factor

    return CalculationResult(
        annualized_return=annualized_return,
        log_return=log_return,
        annualized_log_return=annualized_log_return,
        is_valid_annualized=math.isfinite(annualized_return) and math.isfinite(factor),
        is_valid_log=math.isfinite(log_return) and math.isfinite(annualized_log_return),
        frequency_description=f"{freq} periods per year",
    )


def chart_series(result: Optional[CalculationResult]) -> List[ChartPoint]:
    """Bars for the comparison chart, skipping figures that did not compute.

    A figure can be finite as a decimal yet overflow once scaled to percent;
    such bars are left out too.
    """
    if result is None:
        return []

    points: List[ChartPoint] = []
    if result.is_valid_annualized:
        points.append(
            ChartPoint(
                label="Annualized Return",
                short_label="Annualized",
                value_percent=result.annualized_return * 100,
                description="Compound annual growth rate equivalent",
            )
        )
    if result.is_valid_log:
        points.append(
            ChartPoint(
                label="Annualized Log Return",
                short_label="Log Return",
                value_percent=result.annualized_log_return * 100,
                description="Continuously compounded annual return",
            )
        )
    return [point for point in points if math.isfinite(point.value_percent)]


def evaluate(state: InputState) -> Evaluation:
    """Validate, then calculate only when the inputs are usable."""
    errors = validate(state.total_return_percent, state.periods)
    if errors:
        logger.info(
            "inputs rejected",
            extra={"extra": {"errors": errors, "inputs": _describe(state)}},
        )
        return Evaluation(state=state, errors=errors, result=None, chart=[])

    result = calculate(state.total_return_percent, state.periods, state.period_type)
    logger.debug(
        "returns calculated",
        extra={
            "extra": {
                "inputs": _describe(state),
                "valid_annualized": result.is_valid_annualized,
                "valid_log": result.is_valid_log,
            }
        },
    )
    return Evaluation(state=state, errors=[], result=result, chart=chart_series(result))


def _describe(state: InputState) -> dict:
    return {
        "totalReturnPercent": state.total_return_percent,
        "periods": state.periods,
        "periodType": state.period_type,
    }
