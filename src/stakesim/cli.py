"""Command line entry point."""

import argparse
import logging
import sys

import yaml

from .config.loader import load_config
from .engine.errors import SimulationError
from .reporting.export import export_csv, export_json, format_row
from .simulation.runner import SimulationRunner
from .validation.sanity_checks import SanityChecker

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stakesim",
        description="Simulate validator balances under a simplified proof-of-stake incentive model",
    )
    ap.add_argument("--config", type=str, default=None, help="YAML config (defaults to bundled defaults)")
    # overrides
    ap.add_argument("--epochs", type=int, default=None)
    ap.add_argument("--stake", dest="total_at_stake_initial", type=int, default=None,
                    help="Initial total stake in base units")
    ap.add_argument("--probability-online", type=float, default=None)
    ap.add_argument("--probability-honest", type=float, default=None)
    ap.add_argument("--seed", dest="random_seed", type=int, default=None)
    # output
    ap.add_argument("--csv", type=str, default=None, help="Write report rows to this CSV file")
    ap.add_argument("--json", type=str, default=None, help="Write the full result to this JSON file")
    ap.add_argument("--quiet", action="store_true", help="Do not print per-epoch rows")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(
            args.config,
            epochs=args.epochs,
            total_at_stake_initial=args.total_at_stake_initial,
            probability_online=args.probability_online,
            probability_honest=args.probability_honest,
            random_seed=args.random_seed,
        )
    # pydantic's ValidationError is a ValueError
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    for warning in SanityChecker(config).check_config_inputs():
        logger.warning(f"[{warning.severity}] {warning.message}")

    try:
        result = SimulationRunner(config).run()
    except SimulationError as e:
        print(f"Simulation aborted: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        for row in result.rows:
            print(format_row(row))

    if args.csv:
        export_csv(result, args.csv)
    if args.json:
        export_json(result, args.json)

    return 0


if __name__ == "__main__":
    sys.exit(main())
