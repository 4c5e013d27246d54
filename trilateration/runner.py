"""
Command-line runner for trilateration.

Reads three anchors from the command line or a YAML config file, solves for
the unknown point and prints it as JSON on stdout.

Usage:
    python -m trilateration.runner \\
        --point 0.0 9.998 0.2279422 \\
        --point 0.0 10.002 0.2279422 \\
        --point 0.002 10.0 0.2279422

    # Anchors and settings from a config file
    python -m trilateration.runner --config config/example.yaml

    # Distances in miles
    python -m trilateration.runner --miles --point ... --point ... --point ...
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from trilateration.core.solver import TrilaterationSolver
from trilateration.utils.config import (
    LOG_LEVELS,
    TrilaterationConfig,
    get_default_config,
    load_config,
)
from trilateration.utils.exceptions import ConfigurationError, TrilaterationError
from trilateration.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_READY = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``trilaterate`` command."""
    parser = argparse.ArgumentParser(
        prog='trilaterate',
        description='Locate a point from three anchors and their distances',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Three anchors, distances in kilometers
  trilaterate --point 0.0 9.998 0.2279 \\
              --point 0.0 10.002 0.2279 \\
              --point 0.002 10.0 0.2279

  # Anchors and settings from a YAML file
  trilaterate --config config/example.yaml --log-level DEBUG
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='YAML file with solver, logging and anchors sections'
    )

    parser.add_argument(
        '--point',
        nargs=3,
        type=float,
        action='append',
        metavar=('LAT', 'LNG', 'DISTANCE'),
        help='Anchor latitude, longitude and distance; give three times (overrides config anchors)'
    )

    parser.add_argument(
        '--miles',
        action='store_true',
        help='Distances are in miles (default: kilometers)'
    )

    parser.add_argument(
        '--earth-radius',
        type=float,
        default=None,
        help='Earth radius in kilometers (default: 6371)'
    )

    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        default=None,
        help='Log level (default: from config, else WARNING)'
    )

    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON log lines'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        help='Also write logs to this file'
    )

    return parser


def resolve_config(args: argparse.Namespace) -> TrilaterationConfig:
    """
    Merge the config file (if any) with command-line overrides.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigurationError: If the config file or overrides are invalid
    """
    config = load_config(args.config) if args.config else get_default_config()

    solver_updates = {}
    if args.miles:
        solver_updates['use_miles'] = True
    if args.earth_radius is not None:
        solver_updates['earth_radius_km'] = args.earth_radius

    logging_updates = {}
    if args.log_level:
        logging_updates['level'] = args.log_level
    if args.json_logs:
        logging_updates['json_output'] = True
    if args.log_file:
        logging_updates['log_file'] = args.log_file

    data = config.model_dump()
    data['solver'].update(solver_updates)
    data['logging'].update(logging_updates)
    if args.point:
        data['anchors'] = [
            {'latitude': lat, 'longitude': lng, 'distance': distance}
            for lat, lng, distance in args.point
        ]

    try:
        return TrilaterationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid command-line options: {e}") from e


def run(config: TrilaterationConfig) -> int:
    """
    Solve the configured problem and print the result.

    Returns:
        Process exit code
    """
    solver = TrilaterationSolver.from_config(config)
    result = solver.solve()

    if result is None:
        logger.warning("Not enough anchors to solve", anchors=len(config.anchors), required=3)
        print(json.dumps({'error': 'not_ready', 'anchors': len(config.anchors)}))
        return EXIT_NOT_READY

    logger.info(
        "Intersection computed",
        lat=result.latitude,
        lng=result.longitude,
        residuals_km=solver.residuals(result),
    )
    print(json.dumps(result.to_dict()))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Log bad configs before the config's own logging section is known
    configure_logging(
        log_level=args.log_level or "WARNING",
        log_file=args.log_file,
        json_output=args.json_logs,
    )

    try:
        config = resolve_config(args)
    except (FileNotFoundError, TrilaterationError) as e:
        logger.error("Configuration failed", error=str(e))
        return EXIT_ERROR

    configure_logging(
        log_level=config.logging.level,
        log_file=config.logging.log_file,
        json_output=config.logging.json_output,
    )

    try:
        return run(config)
    except TrilaterationError as e:
        logger.error("Trilateration failed", error=str(e), error_type=type(e).__name__,
                     exc_info=True)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
