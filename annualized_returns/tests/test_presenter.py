from __future__ import annotations

import math

import pytest

from annualized_returns.core.presenter import (
    INVALID_TEXT,
    NEGATIVE_COLOR,
    POSITIVE_COLOR,
    build_view,
    chart_view,
    format_number,
    format_percent,
    formula_details,
)
from annualized_returns.core.returns import calculate, chart_series, evaluate
from annualized_returns.domain.returns import ChartPoint, InputState


@pytest.mark.parametrize(
    "value, expected",
    [(15.0, "15"), (12.5, "12.5"), (-99.99, "-99.99"), (0.0, "0"), (math.inf, "Infinity")],
)
def test_inputs_echo_without_trailing_zero(value, expected):
    assert format_number(value) == expected


def test_percent_has_three_decimals():
    assert format_percent(0.15) == "15.000%"
    assert format_percent(-0.693147) == "-69.315%"


def test_invalid_percent_falls_back_to_text():
    assert format_percent(0.15, valid=False) == INVALID_TEXT
    assert format_percent(math.nan) == INVALID_TEXT
    assert format_percent(math.inf) == INVALID_TEXT


def test_formula_lines_substitute_inputs():
    state = InputState(total_return_percent=15, periods=12, period_type="monthly")
    lines = formula_details(state, calculate(15, 12, "monthly"))

    assert lines.annualized_return == "(1 + 15%)^(12/12) - 1"
    assert lines.log_return == "ln(1 + 15%) = 0.1398"
    assert lines.annualized_log_return == "0.1398 × (12/12)"


def test_formula_lines_hidden_when_a_result_is_invalid():
    state = InputState(total_return_percent=10000, periods=0.01, period_type="daily")

    assert formula_details(state, calculate(10000, 0.01, "daily")) is None


def test_chart_series_order_and_values():
    points = chart_series(calculate(50, 24, "monthly"))

    assert [point.label for point in points] == ["Annualized Return", "Annualized Log Return"]
    assert math.isclose(points[0].value_percent, (1.5**0.5 - 1) * 100, rel_tol=1e-12)
    assert math.isclose(points[1].value_percent, math.log(1.5) * 50, rel_tol=1e-12)
    assert points[0].description == "Compound annual growth rate equivalent"
    assert points[1].description == "Continuously compounded annual return"


def test_chart_series_skips_invalid_figures():
    assert chart_series(calculate(-100, 12, "monthly")) == []
    assert [p.short_label for p in chart_series(calculate(10000, 0.01, "daily"))] == ["Log Return"]
    assert chart_series(None) == []


def test_chart_view_colors_by_sign_and_keeps_zero_line_in_range():
    view = chart_view(
        [
            ChartPoint("Annualized Return", "Annualized", 10.0, "gain"),
            ChartPoint("Annualized Log Return", "Log Return", -5.0, "loss"),
        ]
    )

    assert [bar.color for bar in view.bars] == [POSITIVE_COLOR, NEGATIVE_COLOR]
    assert view.top < view.zero_y < view.bottom
    assert math.isclose(view.zero_y, 40 + 200 * 10 / 15, abs_tol=0.01)
    assert view.ticks[0].label == "-5.0"
    assert view.ticks[-1].label == "10.0"

    gain, loss = view.bars
    assert math.isclose(gain.y + gain.height, view.zero_y, abs_tol=0.02)
    assert math.isclose(loss.y, view.zero_y, abs_tol=0.02)
    assert gain.value_text == "10.000%"


def test_chart_view_handles_all_zero_values():
    view = chart_view([ChartPoint("Annualized Return", "Annualized", 0.0, "flat")])

    assert view.bars[0].height == 0
    assert view.bars[0].color == POSITIVE_COLOR


def test_chart_view_empty():
    assert chart_view([]) is None


def test_view_for_rejected_inputs_has_no_results():
    view = build_view(evaluate(InputState(total_return_percent=-100, periods=12)))

    assert view.has_result is False
    assert view.chart is None
    assert len(view.errors) == 2


def test_view_for_default_inputs():
    view = build_view(evaluate(InputState()))

    assert view.total_return == "15"
    assert view.periods == "12"
    assert view.period_type == "monthly"
    assert view.annualized_text == "15.000%"
    assert view.annualized_log_text == "13.976%"
    assert view.basis == "12 periods per year"
    assert len(view.chart.bars) == 2
    assert view.details is not None


def test_annualized_return_too_large_for_percent_is_invalid_text():
    """Finite as a decimal, but overflows once scaled by 100."""
    result = calculate(10000, 2.3825, "daily")
    assert math.isfinite(result.annualized_return)
    assert math.isinf(result.annualized_return * 100)

    assert format_percent(result.annualized_return, result.is_valid_annualized) == INVALID_TEXT


def test_chart_leaves_out_bars_that_overflow_as_percent():
    points = chart_series(calculate(10000, 2.3825, "daily"))

    assert [point.short_label for point in points] == ["Log Return"]
    assert all(math.isfinite(point.value_percent) for point in points)


def test_view_never_shows_infinite_figures():
    view = build_view(evaluate(InputState(total_return_percent=10000, periods=2.3825, period_type="daily")))

    assert view.annualized_text == INVALID_TEXT
    assert "inf" not in view.annualized_log_text
    assert [bar.short_label for bar in view.chart.bars] == ["Log Return"]
    assert math.isfinite(view.chart.zero_y)
    assert all(math.isfinite(tick.y) for tick in view.chart.ticks)
    assert all(math.isfinite(bar.y) and math.isfinite(bar.height) for bar in view.chart.bars)
