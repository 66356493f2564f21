"""Data classes for API request/response schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.integrator import DEFAULT_SPECIFIC_HEAT, DEFAULT_TIME_STEP, HeatingParameters


@dataclass
class SimulationRequest:
    """Parameters for a heating run."""

    mass_kg: float
    initial_temp_c: float
    target_temp_c: float
    num_collectors: int
    collector_power_kw: float
    specific_heat: float = DEFAULT_SPECIFIC_HEAT
    time_step_s: float = DEFAULT_TIME_STEP
    include_history: bool = False

    def to_parameters(self) -> HeatingParameters:
        return HeatingParameters(
            mass_kg=self.mass_kg,
            initial_temp_c=self.initial_temp_c,
            target_temp_c=self.target_temp_c,
            num_collectors=self.num_collectors,
            collector_power_kw=self.collector_power_kw,
            specific_heat=self.specific_heat,
            time_step_s=self.time_step_s,
        )


@dataclass
class HistoryPoint:
    """Temperature after a given elapsed time."""

    elapsed_seconds: float
    temperature_c: float


@dataclass
class SimulationResponse:
    """Result of a heating run."""

    elapsed_seconds: float
    elapsed_minutes: float
    elapsed_hours: float
    steps: int
    final_temp_c: float
    stop_reason: str
    total_power_w: float
    temperature_increase_per_step_c: float
    history: Optional[list[HistoryPoint]] = None


@dataclass
class EstimateResponse:
    """Closed-form step estimate."""

    steps: int
    elapsed_seconds: float
    temperature_increase_per_step_c: float


@dataclass
class ScenarioResponse:
    """Configured default scenario."""

    mass_kg: float
    specific_heat: float
    initial_temp_c: float
    target_temp_c: float
    num_collectors: int
    collector_power_kw: float
    time_step_s: float
