"""Configuration management for the solar heating calculator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.integrator import DEFAULT_SPECIFIC_HEAT, DEFAULT_TIME_STEP, HeatingParameters

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1_000_000


def _load_dotenv(env_path: Path) -> None:
    """Load environment variables from .env file."""
    if not env_path.exists():
        return

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                # Only set if not already in environment
                if key not in os.environ:
                    os.environ[key] = value


@dataclass
class ScenarioConfig:
    """Heating scenario used when no explicit parameters are given.

    Temperatures in Celsius, collector power in kW, time step in seconds.
    """

    mass_kg: float = 10000.0  # 10,000 liters of water
    specific_heat: float = DEFAULT_SPECIFIC_HEAT
    initial_temp_c: float = 20.0
    target_temp_c: float = 60.0
    num_collectors: int = 25
    collector_power_kw: float = 4.0
    time_step_s: float = DEFAULT_TIME_STEP

    def to_parameters(self) -> HeatingParameters:
        """Build integrator parameters from this scenario."""
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
class SolarHeatConfig:
    """Main configuration class."""

    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Longest run the API will step through, in steps
    max_steps: int = DEFAULT_MAX_STEPS

    # Logging
    log_level: str = "INFO"


def load_config(
    config_path: Path | None = None,
    env: str | None = None,
) -> SolarHeatConfig:
    """Load configuration from YAML files and environment variables.

    Configuration is loaded with the following priority (highest to lowest):
    1. Environment variables (SOLARHEAT_*)
    2. Environment-specific config (development.yaml, production.yaml)
    3. Default config (default.yaml)
    4. Hardcoded defaults

    Args:
        config_path: Path to config directory. Defaults to project config/.
        env: Environment name. Defaults to SOLARHEAT_ENV or "development".

    Returns:
        Loaded SolarHeatConfig instance.
    """
    config = SolarHeatConfig()

    # Determine config directory
    if config_path is None:
        # Try relative to this file, then fall back to cwd
        module_dir = Path(__file__).parent
        config_path = module_dir.parent.parent / "config"
        if not config_path.exists():
            config_path = Path.cwd() / "config"

    _load_dotenv(config_path.parent / ".env")

    default_path = config_path / "default.yaml"
    if default_path.exists():
        config = _merge_yaml(config, default_path)
        logger.debug("Loaded default config from %s", default_path)

    if env is None:
        env = os.environ.get("SOLARHEAT_ENV", "development")

    env_config_path = config_path / f"{env}.yaml"
    if env_config_path.exists():
        config = _merge_yaml(config, env_config_path)
        logger.debug("Loaded %s config from %s", env, env_config_path)

    # Override with environment variables (highest priority)
    config = _apply_env_overrides(config)

    logger.info("Configuration loaded for environment: %s", env)
    return config


def _merge_yaml(config: SolarHeatConfig, path: Path) -> SolarHeatConfig:
    """Merge YAML file into config."""
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return config

    if "scenario" in data:
        sc = data["scenario"]
        scenario = config.scenario
        scenario.mass_kg = sc.get("mass_kg", scenario.mass_kg)
        scenario.specific_heat = sc.get("specific_heat", scenario.specific_heat)
        scenario.initial_temp_c = sc.get("initial_temp_c", scenario.initial_temp_c)
        scenario.target_temp_c = sc.get("target_temp_c", scenario.target_temp_c)
        scenario.num_collectors = sc.get("num_collectors", scenario.num_collectors)
        scenario.collector_power_kw = sc.get(
            "collector_power_kw", scenario.collector_power_kw
        )
        scenario.time_step_s = sc.get("time_step_s", scenario.time_step_s)

    if "api" in data:
        api = data["api"]
        config.api_host = api.get("host", config.api_host)
        config.api_port = api.get("port", config.api_port)
        config.max_steps = api.get("max_steps", config.max_steps)

    config.log_level = data.get("log_level", config.log_level)

    return config


def _apply_env_overrides(config: SolarHeatConfig) -> SolarHeatConfig:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str | None, type[Any]]] = {
        "SOLARHEAT_MASS_KG": ("scenario", "mass_kg", float),
        "SOLARHEAT_SPECIFIC_HEAT": ("scenario", "specific_heat", float),
        "SOLARHEAT_INITIAL_TEMP": ("scenario", "initial_temp_c", float),
        "SOLARHEAT_TARGET_TEMP": ("scenario", "target_temp_c", float),
        "SOLARHEAT_NUM_COLLECTORS": ("scenario", "num_collectors", int),
        "SOLARHEAT_COLLECTOR_POWER": ("scenario", "collector_power_kw", float),
        "SOLARHEAT_TIME_STEP": ("scenario", "time_step_s", float),
        "SOLARHEAT_API_HOST": ("api_host", None, str),
        "SOLARHEAT_API_PORT": ("api_port", None, int),
        "SOLARHEAT_MAX_STEPS": ("max_steps", None, int),
        "SOLARHEAT_LOG_LEVEL": ("log_level", None, str),
    }

    for env_var, (attr, sub_attr, converter) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                converted = converter(value)
                if sub_attr:
                    setattr(getattr(config, attr), sub_attr, converted)
                else:
                    setattr(config, attr, converted)
                logger.debug("Applied env override: %s=%s", env_var, converted)
            except (ValueError, TypeError) as e:
                logger.warning("Invalid env var %s=%s: %s", env_var, value, e)

    return config
