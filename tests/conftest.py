"""Pytest fixtures for solarheat tests."""

import os
from pathlib import Path

import pytest

from solarheat.config import ScenarioConfig, SolarHeatConfig
from solarheat.core.integrator import HeatingIntegrator, HeatingParameters


@pytest.fixture
def default_params() -> HeatingParameters:
    """Reference scenario: 10,000 kg of water, 20°C to 60°C, 25 x 4 kW."""
    return HeatingParameters(
        mass_kg=10000.0,
        initial_temp_c=20.0,
        target_temp_c=60.0,
        num_collectors=25,
        collector_power_kw=4.0,
    )


@pytest.fixture
def integrator(default_params: HeatingParameters) -> HeatingIntegrator:
    """Integrator for the reference scenario."""
    return HeatingIntegrator(default_params)


@pytest.fixture
def small_tank_params() -> HeatingParameters:
    """Small tank that heats by exactly 0.03°C per step."""
    return HeatingParameters(
        mass_kg=1000.0,
        initial_temp_c=10.0,
        target_temp_c=11.0,
        num_collectors=1,
        collector_power_kw=2.0,
        specific_heat=4000.0,
    )


@pytest.fixture
def test_config() -> SolarHeatConfig:
    """Configuration with a small, fast scenario."""
    return SolarHeatConfig(
        scenario=ScenarioConfig(
            mass_kg=1000.0,
            specific_heat=4000.0,
            initial_temp_c=10.0,
            target_temp_c=11.0,
            num_collectors=1,
            collector_power_kw=2.0,
            time_step_s=60.0,
        )
    )


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty config directory with SOLARHEAT_* variables cleared."""
    for key in list(os.environ):
        if key.startswith("SOLARHEAT_"):
            monkeypatch.delenv(key)

    path = tmp_path / "config"
    path.mkdir()
    return path
