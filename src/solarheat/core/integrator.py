"""Fixed-step heating integrator for a solar-heated water store."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SPECIFIC_HEAT = 4186.0  # J/kg°C, water
DEFAULT_TIME_STEP = 60.0  # seconds
WATTS_PER_KILOWATT = 1000.0


class InvalidParameterError(ValueError):
    """Raised when a heating parameter makes the computation meaningless."""

    def __init__(self, name: str, value: float, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class StopReason(str, Enum):
    """Why a heating run stopped."""

    TARGET_REACHED = "target_reached"
    ALREADY_AT_TARGET = "already_at_target"
    STALLED = "stalled"


@dataclass(frozen=True)
class HeatingParameters:
    """Inputs for a single heating run.

    Temperatures are in degrees Celsius, power in kilowatts per collector,
    time in seconds.
    """

    mass_kg: float
    initial_temp_c: float
    target_temp_c: float
    num_collectors: int
    collector_power_kw: float
    specific_heat: float = DEFAULT_SPECIFIC_HEAT
    time_step_s: float = DEFAULT_TIME_STEP

    @property
    def total_power_w(self) -> float:
        """Combined collector output in watts."""
        return self.num_collectors * self.collector_power_kw * WATTS_PER_KILOWATT

    @property
    def energy_per_step_j(self) -> float:
        return self.total_power_w * self.time_step_s

    @property
    def temperature_increase_c(self) -> float:
        """Temperature rise per step (dT = q / (m * c))."""
        return self.energy_per_step_j / (self.mass_kg * self.specific_heat)

    def validate(self) -> None:
        """Check the parameters the integrator divides by or steps with.

        Raises:
            InvalidParameterError: If mass, specific heat or time step is not
                a positive finite number, their heat capacity over- or
                underflows, a temperature is not finite, the collector count
                is not a whole number, or the collector count or power is
                negative.
        """
        for name in ("mass_kg", "specific_heat", "time_step_s"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(name, value, "must be a positive number")
        heat_capacity = self.mass_kg * self.specific_heat
        if not math.isfinite(heat_capacity) or heat_capacity <= 0:
            raise InvalidParameterError(
                "mass_kg", self.mass_kg, "heat capacity (mass * specific heat) out of range"
            )
        for name in ("initial_temp_c", "target_temp_c"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidParameterError(name, value, "must be finite")
        if not self.num_collectors >= 0:
            raise InvalidParameterError(
                "num_collectors", self.num_collectors, "must not be negative"
            )
        count = self.num_collectors
        if not math.isfinite(count) or count != int(count):
            raise InvalidParameterError(
                "num_collectors", self.num_collectors, "must be a whole number"
            )
        if not self.collector_power_kw >= 0:
            raise InvalidParameterError(
                "collector_power_kw", self.collector_power_kw, "must not be negative"
            )


@dataclass
class HeatingState:
    """Mutable state of one heating run."""

    temperature_c: float
    elapsed_seconds: float = 0.0
    steps: int = 0


@dataclass
class SimulationResult:
    """Outcome of a completed heating run."""

    elapsed_seconds: float
    steps: int
    final_temp_c: float
    stop_reason: StopReason
    history: Optional[list[tuple[float, float]]] = field(default=None)


def _is_stall(increase: float) -> bool:
    # NaN compares false against everything, so check finiteness first
    return not math.isfinite(increase) or increase <= 0


class HeatingIntegrator:
    """Explicit Euler integration of constant-power water heating.

    Each step delivers ``P * dt`` joules to the water and raises its
    temperature by ``q / (m * c)``. The increase does not depend on the
    current temperature, so it is the same for every step of a run.

    The run stops once the temperature reaches the target, or after the
    first step whose increase is zero, non-finite, or too small to change
    the temperature. That stalled step is still counted in the elapsed
    time, but a non-finite increase is not applied to the temperature.
    """

    def __init__(self, params: HeatingParameters) -> None:
        """Initialize the integrator.

        Args:
            params: Heating parameters. Validated immediately.

        Raises:
            InvalidParameterError: If the parameters are not usable.
        """
        params.validate()
        self.params = params
        self.state = HeatingState(temperature_c=params.initial_temp_c)
        self._stalled = False

    @property
    def is_heating(self) -> bool:
        """True while the target has not been reached and the run has not stalled."""
        return not self._stalled and self.state.temperature_c < self.params.target_temp_c

    def step(self) -> float:
        """Advance the run by one time step.

        Returns:
            Temperature increase computed for this step.
        """
        increase = self.params.temperature_increase_c
        before = self.state.temperature_c

        if math.isfinite(increase):
            self.state.temperature_c += increase
        self.state.steps += 1
        self.state.elapsed_seconds = self.state.steps * self.params.time_step_s

        # An increase below float resolution at this temperature never accumulates
        if _is_stall(increase) or self.state.temperature_c == before:
            self._stalled = True
        return increase

    def run(self, record_history: bool = False) -> SimulationResult:
        """Step until the target is reached or the run stalls.

        Args:
            record_history: Keep an ``(elapsed_seconds, temperature_c)`` point
                for the start and for every step.

        Returns:
            Result of the run.
        """
        history = None
        if record_history:
            history = [(self.state.elapsed_seconds, self.state.temperature_c)]

        if not self.is_heating:
            logger.debug(
                "Initial temperature %.2f already at target %.2f",
                self.state.temperature_c,
                self.params.target_temp_c,
            )

        while self.is_heating:
            self.step()
            if history is not None:
                history.append((self.state.elapsed_seconds, self.state.temperature_c))

        if self._stalled:
            reason = StopReason.STALLED
            logger.warning(
                "Heating stalled after %d step(s): increase per step is %s",
                self.state.steps,
                self.params.temperature_increase_c,
            )
        elif self.state.steps == 0:
            reason = StopReason.ALREADY_AT_TARGET
        else:
            reason = StopReason.TARGET_REACHED

        logger.debug(
            "Heating run finished: %s after %d steps (%.0f s), final %.3f°C",
            reason.value,
            self.state.steps,
            self.state.elapsed_seconds,
            self.state.temperature_c,
        )
        return SimulationResult(
            elapsed_seconds=self.state.elapsed_seconds,
            steps=self.state.steps,
            final_temp_c=self.state.temperature_c,
            stop_reason=reason,
            history=history,
        )

    def reset(self) -> None:
        """Return to the initial temperature with no elapsed time."""
        self.state = HeatingState(temperature_c=self.params.initial_temp_c)
        self._stalled = False


def simulate(
    mass: float,
    initial_temperature: float,
    target_temperature: float,
    num_collectors: int,
    collector_power: float,
    *,
    specific_heat: float = DEFAULT_SPECIFIC_HEAT,
    time_step: float = DEFAULT_TIME_STEP,
) -> float:
    """Time needed to heat a water store to a target temperature.

    Args:
        mass: Water mass in kg.
        initial_temperature: Starting temperature in °C.
        target_temperature: Desired temperature in °C.
        num_collectors: Number of solar thermal collectors.
        collector_power: Output of one collector in kW.
        specific_heat: Specific heat capacity in J/kg°C.
        time_step: Simulation step in seconds.

    Returns:
        Elapsed time in seconds, a whole multiple of ``time_step``. Zero if
        the water already is at or above the target.

    Raises:
        InvalidParameterError: If mass, specific heat or time step is not
            positive, the collector count is not a whole number, or the
            collector count or power is negative.
    """
    params = HeatingParameters(
        mass_kg=mass,
        initial_temp_c=initial_temperature,
        target_temp_c=target_temperature,
        num_collectors=num_collectors,
        collector_power_kw=collector_power,
        specific_heat=specific_heat,
        time_step_s=time_step,
    )
    return HeatingIntegrator(params).run().elapsed_seconds


def estimate_steps(params: HeatingParameters) -> int:
    """Closed-form number of steps a run takes.

    Matches :meth:`HeatingIntegrator.run` except where accumulated floating
    point error lands exactly on the target, or where the increase is too
    small to change the temperature and the run stalls early.
    """
    params.validate()
    rise = params.target_temp_c - params.initial_temp_c
    if rise <= 0:
        return 0
    increase = params.temperature_increase_c
    if _is_stall(increase):
        return 1
    ratio = rise / increase
    if math.isfinite(ratio):
        return math.ceil(ratio)
    # Subnormal increases overflow the float ratio; the count is still exact
    return math.ceil(Fraction(rise) / Fraction(increase))
