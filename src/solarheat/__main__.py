"""Entry point for the solar heating calculator."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .config import load_config
from .core.integrator import HeatingIntegrator, InvalidParameterError
from .core.report import format_elapsed

logger = logging.getLogger(__name__)

# CLI flag destination -> HeatingParameters field
_PARAM_FLAGS = {
    "mass": "mass_kg",
    "specific_heat": "specific_heat",
    "initial_temp": "initial_temp_c",
    "target_temp": "target_temp_c",
    "collectors": "num_collectors",
    "collector_power": "collector_power_kw",
    "time_step": "time_step_s",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="solarheat",
        description="Time to heat a water store with solar thermal collectors",
    )
    scenario = parser.add_argument_group(
        "scenario", "Override the configured heating scenario"
    )
    scenario.add_argument("--mass", type=float, help="Water mass in kg")
    scenario.add_argument(
        "--specific-heat", type=float, help="Specific heat capacity in J/kg°C"
    )
    scenario.add_argument(
        "--initial-temp", type=float, help="Initial water temperature in °C"
    )
    scenario.add_argument(
        "--target-temp", type=float, help="Target water temperature in °C"
    )
    scenario.add_argument(
        "--collectors", type=int, help="Number of solar thermal collectors"
    )
    scenario.add_argument(
        "--collector-power", type=float, help="Power of one collector in kW"
    )
    scenario.add_argument("--time-step", type=float, help="Time step in seconds")
    parser.add_argument(
        "--history",
        action="store_true",
        help="Print the temperature after every step",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding default.yaml and <env>.yaml",
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Configuration environment (default: SOLARHEAT_ENV or 'development')",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from configuration)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the HTTP API instead of running one scenario",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind API server to (default: from configuration)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind API server to (default: from configuration)",
    )
    return parser


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=_level(log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # basicConfig does nothing once the root logger has handlers
    logging.getLogger().setLevel(_level(log_level))


def _serve(host: str, port: int, log_level: str) -> int:
    # Import uvicorn here so the calculator runs without the server extras
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is required. Install with: pip install uvicorn[standard]")
        return 1

    uvicorn.run("solarheat.api.app:app", host=host, port=port, log_level=log_level.lower())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Configure logging before loading config so its records are kept
    _configure_logging(args.log_level or "INFO")

    config = load_config(args.config_dir, args.env)
    log_level = args.log_level or config.log_level
    if args.log_level is None:
        logging.getLogger().setLevel(_level(log_level))

    if args.serve:
        return _serve(
            args.host or config.api_host,
            args.port or config.api_port,
            log_level,
        )

    overrides = {
        field_name: getattr(args, flag)
        for flag, field_name in _PARAM_FLAGS.items()
        if getattr(args, flag) is not None
    }
    params = replace(config.scenario.to_parameters(), **overrides)
    logger.debug("Running scenario: %s", params)

    try:
        integrator = HeatingIntegrator(params)
    except InvalidParameterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = integrator.run(record_history=args.history)

    if result.history is not None:
        for elapsed, temperature in result.history:
            print(f"{elapsed:10.0f} s  {temperature:8.3f} °C")

    for line in format_elapsed(result.elapsed_seconds).lines():
        print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
