"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from annualized_returns.core.ping import get_ping_message
from annualized_returns.core.presenter import formula_details
from annualized_returns.core.returns import evaluate
from annualized_returns.domain.returns import InputRangeError
from annualized_returns.logging_config import get_logger
from annualized_returns.schemas.ping import PingResponse
from annualized_returns.schemas.returns import (
    ChartBar,
    FormulaDetails,
    ReturnsRequest,
    ReturnsResponse,
    ReturnsResult,
)

api_bp = Blueprint("api", __name__)
logger = get_logger(__name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning(
        "request schema rejected",
        extra={"path": request.path, "extra": {"error_count": exc.error_count()}},
    )
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(InputRangeError)
def _handle_input_range_error(exc: InputRangeError):
    """Out-of-range inputs come back as the list of user-facing messages."""
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


@api_bp.post("/calc/annualized")
def annualized() -> Any:
    """Annualized and log returns for one set of inputs."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ReturnsRequest.model_validate(raw_payload)
    state = payload.to_state()

    evaluation = evaluate(state)
    if not evaluation.ok:
        raise InputRangeError(evaluation.errors)

    lines = formula_details(state, evaluation.result)
    response = ReturnsResponse(
        inputs=payload,
        result=ReturnsResult.from_result(evaluation.result),
        chart=[ChartBar.from_point(point) for point in evaluation.chart],
        details=(
            FormulaDetails(
                annualizedReturnFormula=lines.annualized_return,
                logReturnFormula=lines.log_return,
                annualizedLogReturnFormula=lines.annualized_log_return,
            )
            if lines
            else None
        ),
    )
    return jsonify(response.model_dump())
