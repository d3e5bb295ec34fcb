"""
Command-line interface for the Win/Place/Show estimator.
"""

import click
import json
import logging

from .types import SimulationConfig
from .config import SIMULATION_PRESETS, DEFAULT_PRESET, load_config_from_json
from .pipeline import estimate_probabilities
from .diagnostics import format_probabilities_for_log, check_probability_sums


@click.command()
@click.argument('scores', nargs=6, type=int)
@click.option(
    '--samples', '-s',
    type=int,
    default=None,
    help='Number of races to simulate (default: from preset, 10000)'
)
@click.option(
    '--salt',
    type=int,
    default=None,
    help='Master seed for reproducibility (default: time-derived)'
)
@click.option(
    '--preset', '-p',
    type=click.Choice(list(SIMULATION_PRESETS.keys())),
    default=None,
    help=f'Use a preset simulation configuration (default: {DEFAULT_PRESET})'
)
@click.option(
    '--config', 'config_file',
    type=click.Path(exists=True),
    help='Simulation config JSON file'
)
@click.option(
    '--max-ticks',
    type=int,
    default=None,
    help='Tick cap per race (default: 500)'
)
@click.option(
    '--output', '-o',
    type=click.Path(),
    help='Output file for results JSON'
)
@click.option(
    '--verbose/--quiet', '-v/-q',
    default=True,
    help='Verbose output'
)
def main(scores, samples, salt, preset, config_file, max_ticks, output, verbose):
    """
    Estimate Win/Place/Show probabilities for a six-lane race.

    SCORES: six lane scores, 1-10 (out-of-range values are clamped)
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if samples is not None and samples <= 0:
        raise click.BadParameter("samples must be a positive integer", param_hint="'--samples'")
    if max_ticks is not None and max_ticks <= 0:
        raise click.BadParameter("max-ticks must be a positive integer", param_hint="'--max-ticks'")

    if config_file:
        try:
            base = load_config_from_json(config_file)
        except (ValueError, KeyError) as e:
            raise click.BadParameter(str(e), param_hint="'--config'")
    else:
        base = SIMULATION_PRESETS[preset or DEFAULT_PRESET]

    config = SimulationConfig(
        samples=samples if samples is not None else base.samples,
        salt=salt if salt is not None else base.salt,
        max_ticks=max_ticks if max_ticks is not None else base.max_ticks,
    )

    click.echo("Running simulation...")
    click.echo(f"  Scores: {list(scores)}")
    click.echo(f"  Samples: {config.samples}")
    click.echo(f"  Salt: {config.salt if config.salt is not None else 'time-derived'}")

    result = estimate_probabilities(
        list(scores),
        samples=config.samples,
        salt=config.salt,
        max_ticks=config.max_ticks,
    )

    click.echo(format_probabilities_for_log(result))
    click.echo(f"    Salt used: {result.salt}, elapsed: {result.elapsed_ms:.1f} ms")

    checks = check_probability_sums(result)
    if not all(c['ok'] for c in checks.values()):
        click.echo("WARNING: probability sums outside tolerance", err=True)

    if output:
        with open(output, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        click.echo(f"Results saved to {output}")


if __name__ == '__main__':
    main()
