"""Heating simulation API routes."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException

from ...config import DEFAULT_MAX_STEPS
from ...core.integrator import (
    HeatingIntegrator,
    HeatingParameters,
    InvalidParameterError,
    estimate_steps,
)
from ...core.report import format_elapsed
from ..schemas import (
    EstimateResponse,
    HistoryPoint,
    ScenarioResponse,
    SimulationRequest,
    SimulationResponse,
)

if TYPE_CHECKING:
    from ..app import AppState

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_state() -> "AppState":
    """Get app state - injected at runtime."""
    from ..app import app_state
    return app_state


def _max_steps() -> int:
    state = get_app_state()
    if state.config is None:
        return DEFAULT_MAX_STEPS
    return state.config.max_steps


def _validated_parameters(request: SimulationRequest) -> HeatingParameters:
    """Build parameters the integrator accepts and JSON responses can carry.

    Raises:
        HTTPException: 400 for invalid parameters, or for collector power so
            large that the derived power or per-step increase overflows.
    """
    params = request.to_parameters()
    try:
        params.validate()
    except InvalidParameterError as e:
        logger.info("Rejected simulation request: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    for name, value in (
        ("total_power_w", params.total_power_w),
        ("temperature_increase_c", params.temperature_increase_c),
    ):
        if not math.isfinite(value):
            logger.info("Rejected simulation request: %s=%s", name, value)
            raise HTTPException(
                status_code=400,
                detail=f"Invalid collector power: {name} is {value!r}",
            )
    return params


@router.get("/defaults")
async def get_default_scenario():
    """Get the configured default heating scenario."""
    state = get_app_state()
    if state.config is None:
        raise HTTPException(status_code=503, detail="Configuration not loaded")

    return asdict(ScenarioResponse(**asdict(state.config.scenario)))


@router.post("/")
async def run_simulation(request: SimulationRequest):
    """Run a heating simulation and return the elapsed time."""
    params = _validated_parameters(request)

    # Runs on the event loop, so bound the work before stepping
    max_steps = _max_steps()
    steps = estimate_steps(params)
    if steps > max_steps:
        logger.info("Rejected simulation request: %d steps exceeds %d", steps, max_steps)
        raise HTTPException(
            status_code=400,
            detail=f"Run needs {steps} steps, more than the limit of {max_steps}; "
            "increase time_step_s or use /estimate",
        )

    result = HeatingIntegrator(params).run(record_history=request.include_history)
    report = format_elapsed(result.elapsed_seconds)

    history = None
    if result.history is not None:
        history = [HistoryPoint(elapsed, temp) for elapsed, temp in result.history]

    elapsed = {f"elapsed_{unit}": value for unit, value in report.to_dict().items()}
    return asdict(SimulationResponse(
        **elapsed,
        steps=result.steps,
        final_temp_c=result.final_temp_c,
        stop_reason=result.stop_reason.value,
        total_power_w=params.total_power_w,
        temperature_increase_per_step_c=params.temperature_increase_c,
        history=history,
    ))


@router.post("/estimate")
async def estimate_simulation(request: SimulationRequest):
    """Estimate step count without stepping through the run."""
    params = _validated_parameters(request)
    steps = estimate_steps(params)

    try:
        elapsed = steps * params.time_step_s
    except OverflowError:
        elapsed = math.inf
    if not math.isfinite(elapsed):
        raise HTTPException(
            status_code=400,
            detail=f"Run needs {steps} steps; elapsed time is not representable",
        )

    return asdict(EstimateResponse(
        steps=steps,
        elapsed_seconds=elapsed,
        temperature_increase_per_step_c=params.temperature_increase_c,
    ))
