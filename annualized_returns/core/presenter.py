"""Display formatting for the calculator page. No figures are computed here."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from annualized_returns.domain.returns import (
    CalculationResult,
    ChartPoint,
    Evaluation,
    InputState,
)

INVALID_TEXT = "Invalid calculation"

POSITIVE_COLOR = "#000000"
NEGATIVE_COLOR = "#dc2626"

PERIOD_TYPE_OPTIONS = [
    ("daily", "Daily"),
    ("weekly", "Weekly"),
    ("monthly", "Monthly"),
    ("yearly", "Yearly"),
]

# svg canvas; margins leave room for the axis label and slanted bar names
CHART_WIDTH = 560
CHART_HEIGHT = 320
CHART_MARGIN_TOP = 40
CHART_MARGIN_RIGHT = 30
CHART_MARGIN_BOTTOM = 80
CHART_MARGIN_LEFT = 70
CHART_TICKS = 5


def format_number(value: float) -> str:
    """Echo an input back the way the user would have typed it (15, not 15.0)."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_percent(value: float, valid: bool = True) -> str:
    """Decimal rate as a 3 dp percentage, or the invalid fallback text."""
    percent = value * 100
    if not valid or not math.isfinite(percent):
        return INVALID_TEXT
    return f"{percent:.3f}%"


@dataclass
class FormulaLines:
    annualized_return: str
    log_return: str
    annualized_log_return: str


def formula_details(state: InputState, result: CalculationResult) -> Optional[FormulaLines]:
    """Restate the three formulas with the current inputs substituted in."""
    if not (result.is_valid_annualized and result.is_valid_log):
        return None

    total = format_number(state.total_return_percent)
    ratio = f"{state.periods_per_year}/{format_number(state.periods)}"
    log_return = f"{result.log_return:.4f}"

    return FormulaLines(
        annualized_return=f"(1 + {total}%)^({ratio}) - 1",
        log_return=f"ln(1 + {total}%) = {log_return}",
        annualized_log_return=f"{log_return} × ({ratio})",
    )


@dataclass
class ChartTick:
    y: float
    label: str


@dataclass
class ChartBarView:
    label: str
    short_label: str
    description: str
    value_text: str
    color: str
    x: float
    y: float
    width: float
    height: float
    label_x: float
    label_y: float


@dataclass
class ChartView:
    width: int
    height: int
    left: int
    right: int
    top: int
    bottom: int
    zero_y: float
    ticks: List[ChartTick]
    bars: List[ChartBarView]


def bar_color(value_percent: float) -> str:
    return POSITIVE_COLOR if value_percent >= 0 else NEGATIVE_COLOR


def chart_view(points: List[ChartPoint]) -> Optional[ChartView]:
    """Lay out the bar chart in svg coordinates. The zero line is always in range."""
    if not points:
        return None

    values = [point.value_percent for point in points]
    low = min(0.0, min(values))
    high = max(0.0, max(values))
    if high == low:
        high = low + 1.0

    top = CHART_MARGIN_TOP
    bottom = CHART_HEIGHT - CHART_MARGIN_BOTTOM
    left = CHART_MARGIN_LEFT
    right = CHART_WIDTH - CHART_MARGIN_RIGHT
    plot_height = bottom - top

    def to_y(value: float) -> float:
        return top + (high - value) / (high - low) * plot_height

    ticks = [
        ChartTick(y=to_y(tick), label=f"{tick:.1f}")
        for tick in (
            low + (high - low) * step / (CHART_TICKS - 1) for step in range(CHART_TICKS)
        )
    ]

    slot = (right - left) / len(points)
    bar_width = slot * 0.6
    zero_y = to_y(0.0)

    bars: List[ChartBarView] = []
    for index, point in enumerate(points):
        x = left + slot * index + (slot - bar_width) / 2
        y_top = to_y(max(point.value_percent, 0.0))
        y_bottom = to_y(min(point.value_percent, 0.0))
        bars.append(
            ChartBarView(
                label=point.label,
                short_label=point.short_label,
                description=point.description,
                value_text=f"{point.value_percent:.3f}%",
                color=bar_color(point.value_percent),
                x=round(x, 2),
                y=round(y_top, 2),
                width=round(bar_width, 2),
                height=round(y_bottom - y_top, 2),
                label_x=round(x + bar_width / 2, 2),
                label_y=bottom + 16,
            )
        )

    return ChartView(
        width=CHART_WIDTH,
        height=CHART_HEIGHT,
        left=left,
        right=right,
        top=top,
        bottom=bottom,
        zero_y=round(zero_y, 2),
        ticks=ticks,
        bars=bars,
    )


@dataclass
class CalculatorView:
    total_return: str
    periods: str
    period_type: str
    period_options: List[tuple] = field(default_factory=lambda: list(PERIOD_TYPE_OPTIONS))
    errors: List[str] = field(default_factory=list)
    has_result: bool = False
    annualized_text: str = ""
    annualized_log_text: str = ""
    basis: Optional[str] = None
    chart: Optional[ChartView] = None
    details: Optional[FormulaLines] = None


def build_view(evaluation: Evaluation) -> CalculatorView:
    """Everything the page template needs for one pass."""
    state = evaluation.state
    view = CalculatorView(
        total_return=format_number(state.total_return_percent),
        periods=format_number(state.periods),
        period_type=state.period_type,
        errors=list(evaluation.errors),
    )

    result = evaluation.result
    if evaluation.errors or result is None:
        return view

    view.has_result = True
    view.annualized_text = format_percent(result.annualized_return, result.is_valid_annualized)
    view.annualized_log_text = format_percent(result.annualized_log_return, result.is_valid_log)
    view.basis = result.frequency_description
    view.chart = chart_view(evaluation.chart)
    view.details = formula_details(state, result)
    return view
