"""Tests for configuration loading."""

import logging
from pathlib import Path

import pytest

from solarheat.config import ScenarioConfig, SolarHeatConfig, load_config


class TestDefaults:
    """Test hardcoded defaults."""

    def test_reference_scenario(self) -> None:
        """Default scenario is the 10,000 kg, 25 collector reference."""
        scenario = ScenarioConfig()

        assert scenario.mass_kg == 10000.0
        assert scenario.specific_heat == 4186.0
        assert scenario.initial_temp_c == 20.0
        assert scenario.target_temp_c == 60.0
        assert scenario.num_collectors == 25
        assert scenario.collector_power_kw == 4.0
        assert scenario.time_step_s == 60.0

    def test_to_parameters(self) -> None:
        """Scenario converts to integrator parameters field by field."""
        params = ScenarioConfig(num_collectors=10).to_parameters()

        assert params.num_collectors == 10
        assert params.total_power_w == 40000.0
        assert params.specific_heat == 4186.0

    def test_missing_config_dir_uses_defaults(self, config_dir: Path) -> None:
        """Without YAML files the hardcoded defaults are used."""
        config = load_config(config_dir, env="test")

        assert config == SolarHeatConfig()


class TestYamlLoading:
    """Test YAML merging."""

    def test_default_yaml_merged(self, config_dir: Path) -> None:
        """Values in default.yaml replace hardcoded defaults."""
        (config_dir / "default.yaml").write_text(
            "scenario:\n"
            "  mass_kg: 500\n"
            "  num_collectors: 3\n"
            "api:\n"
            "  port: 9000\n"
            "log_level: WARNING\n"
        )

        config = load_config(config_dir, env="test")

        assert config.scenario.mass_kg == 500
        assert config.scenario.num_collectors == 3
        assert config.scenario.target_temp_c == 60.0
        assert config.api_port == 9000
        assert config.api_host == "0.0.0.0"
        assert config.log_level == "WARNING"

    def test_env_yaml_overrides_default(self, config_dir: Path) -> None:
        """Environment file wins over default.yaml."""
        (config_dir / "default.yaml").write_text("scenario:\n  target_temp_c: 50\n")
        (config_dir / "production.yaml").write_text("scenario:\n  target_temp_c: 70\n")

        assert load_config(config_dir, env="production").scenario.target_temp_c == 70
        assert load_config(config_dir, env="staging").scenario.target_temp_c == 50

    def test_env_name_from_environment(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """SOLARHEAT_ENV selects the environment file."""
        (config_dir / "production.yaml").write_text("log_level: ERROR\n")
        monkeypatch.setenv("SOLARHEAT_ENV", "production")

        assert load_config(config_dir).log_level == "ERROR"

    def test_empty_yaml_ignored(self, config_dir: Path) -> None:
        """An empty YAML file changes nothing."""
        (config_dir / "default.yaml").write_text("")

        assert load_config(config_dir, env="test") == SolarHeatConfig()


class TestEnvOverrides:
    """Test SOLARHEAT_* environment variables."""

    def test_env_vars_win(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables override YAML values."""
        (config_dir / "default.yaml").write_text("scenario:\n  num_collectors: 3\n")
        monkeypatch.setenv("SOLARHEAT_NUM_COLLECTORS", "12")
        monkeypatch.setenv("SOLARHEAT_COLLECTOR_POWER", "2.5")
        monkeypatch.setenv("SOLARHEAT_API_PORT", "8123")

        config = load_config(config_dir, env="test")

        assert config.scenario.num_collectors == 12
        assert config.scenario.collector_power_kw == 2.5
        assert config.api_port == 8123

    def test_max_steps_from_yaml_and_env(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The API step limit is read from YAML and overridable by env."""
        (config_dir / "default.yaml").write_text("api:\n  max_steps: 500\n")
        assert load_config(config_dir, env="test").max_steps == 500

        monkeypatch.setenv("SOLARHEAT_MAX_STEPS", "42")
        assert load_config(config_dir, env="test").max_steps == 42

    def test_invalid_env_var_ignored(
        self,
        config_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Unparseable values are logged and skipped."""
        monkeypatch.setenv("SOLARHEAT_MASS_KG", "heavy")

        with caplog.at_level(logging.WARNING, logger="solarheat.config"):
            config = load_config(config_dir, env="test")

        assert config.scenario.mass_kg == 10000.0
        assert "SOLARHEAT_MASS_KG" in caplog.text

    def test_dotenv_loaded(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """.env beside the config directory feeds environment overrides."""
        (config_dir.parent / ".env").write_text(
            "# local overrides\nSOLARHEAT_TARGET_TEMP=45\n"
        )
        # Registered so monkeypatch removes the value .env sets
        monkeypatch.setenv("SOLARHEAT_TARGET_TEMP", "unset")
        monkeypatch.delenv("SOLARHEAT_TARGET_TEMP")

        config = load_config(config_dir, env="test")

        assert config.scenario.target_temp_c == 45.0

    def test_dotenv_does_not_override_environment(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Existing environment variables win over .env."""
        (config_dir.parent / ".env").write_text("SOLARHEAT_TARGET_TEMP=45\n")
        monkeypatch.setenv("SOLARHEAT_TARGET_TEMP", "55")

        assert load_config(config_dir, env="test").scenario.target_temp_c == 55.0
