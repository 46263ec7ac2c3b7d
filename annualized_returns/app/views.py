"""Server-rendered calculator page."""

from typing import Any

from flask import Blueprint, render_template, request

from annualized_returns.core.presenter import build_view
from annualized_returns.core.returns import evaluate, parse_number
from annualized_returns.domain.returns import (
    DEFAULT_PERIOD_TYPE,
    DEFAULT_PERIODS,
    DEFAULT_TOTAL_RETURN,
    PERIODS_PER_YEAR,
    InputState,
)

pages_bp = Blueprint("pages", __name__, template_folder="templates")


def read_input_state(args) -> InputState:
    """Current inputs from the query string.

    Missing fields start at the session defaults; fields that were sent but
    are not numbers fall back to 0 (total return) and 1 (periods).
    """
    total_return = (
        parse_number(args["totalReturn"], fallback=0.0)
        if "totalReturn" in args
        else DEFAULT_TOTAL_RETURN
    )
    periods = (
        parse_number(args["periods"], fallback=1.0)
        if "periods" in args
        else DEFAULT_PERIODS
    )
    period_type = args.get("periodType", DEFAULT_PERIOD_TYPE)
    if period_type not in PERIODS_PER_YEAR:
        period_type = DEFAULT_PERIOD_TYPE

    return InputState(
        total_return_percent=total_return,
        periods=periods,
        period_type=period_type,
    )


@pages_bp.get("/")
def calculator() -> Any:
    """Render the calculator for whatever inputs are in the query string."""
    state = read_input_state(request.args)
    view = build_view(evaluate(state))
    return render_template("calculator.html", view=view)
