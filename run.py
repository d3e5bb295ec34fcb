"""
One-button runner for the Win/Place/Show estimator.

Usage:
    python run.py 10 1 1 1 1 1

    # With a config file and explicit salt:
    python run.py 7 7 5 5 3 3 --config wps_config.json --salt 42

Everything else comes from the config file (or the standard preset when the
file is missing).
"""

import sys
import argparse
import json
import logging
from pathlib import Path

from wps_odds.pipeline import estimate_from_config
from wps_odds.config import load_config_from_json, SIMULATION_PRESETS, DEFAULT_PRESET
from wps_odds.types import SimulationConfig
from wps_odds.diagnostics import format_probabilities_for_log, confidence_intervals

# Defaults - edit these if your file layout changes
DEFAULT_CONFIG = "wps_config.json"
DEFAULT_OUTPUT = "wps_results.json"


def main():
    parser = argparse.ArgumentParser(
        description="One-button Win/Place/Show probability estimator"
    )
    parser.add_argument("scores", nargs=6, type=int, help="Six lane scores (1-10)")
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG,
        help=f"Config path (default: {DEFAULT_CONFIG}; standard preset if missing)"
    )
    parser.add_argument(
        "--salt", type=int, default=None,
        help="Master seed (overrides config)"
    )
    parser.add_argument(
        "--output", "-o", default=DEFAULT_OUTPUT,
        help=f"Output JSON path (default: {DEFAULT_OUTPUT})"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if Path(args.config).exists():
        try:
            config = load_config_from_json(args.config)
        except (ValueError, KeyError) as e:
            print(f"\nERROR: {args.config}: {e}")
            sys.exit(1)
        print(f"Config: {args.config}")
    else:
        config = SIMULATION_PRESETS[DEFAULT_PRESET]
        print(f"Config: {DEFAULT_PRESET} preset")

    if args.salt is not None:
        config = SimulationConfig(
            samples=config.samples,
            salt=args.salt,
            max_ticks=config.max_ticks,
        )

    print(f"  Scores:  {args.scores}")
    print(f"  Samples: {config.samples}")
    print()

    try:
        result = estimate_from_config(args.scores, config)
    except ValueError as e:
        print(f"\nERROR: {e}")
        sys.exit(1)

    print(format_probabilities_for_log(result))
    print("\n95% intervals (bps):")
    print(confidence_intervals(result).to_string())

    output_data = result.to_dict()
    with open(args.output, 'w') as f:
        json.dump(output_data, f, indent=2)
    print(f"\n  Results: {args.output}")


if __name__ == '__main__':
    main()
