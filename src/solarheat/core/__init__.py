"""Core heating computation."""

from .integrator import (
    DEFAULT_SPECIFIC_HEAT,
    DEFAULT_TIME_STEP,
    HeatingIntegrator,
    HeatingParameters,
    HeatingState,
    InvalidParameterError,
    SimulationResult,
    StopReason,
    estimate_steps,
    simulate,
)
from .report import ElapsedReport, format_elapsed

__all__ = [
    "DEFAULT_SPECIFIC_HEAT",
    "DEFAULT_TIME_STEP",
    "HeatingIntegrator",
    "HeatingParameters",
    "HeatingState",
    "InvalidParameterError",
    "SimulationResult",
    "StopReason",
    "estimate_steps",
    "simulate",
    "ElapsedReport",
    "format_elapsed",
]
