"""
Aggregation pipeline: simulate, resolve, accumulate, normalise.

Wires the seed sequencer, race engine, finish-order resolver and credit
accumulator together into a single estimate.
"""

import time
from typing import Optional, Sequence, Tuple
import logging

import numpy as np

from .types import LANE_COUNT, MAX_TICKS, AggregateResult, CreditTally, SimulationConfig
from .simulation.engine import clamp_score, simulate_race
from .simulation.rng import MASK32, init_seed_sequencer
from .scoring.finish_order import resolve_finish_order
from .scoring.credits import accumulate_credits

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10000


def _validate_inputs(scores: Sequence, samples) -> Tuple[int, ...]:
    """Check argument shape and return the clamped scores."""
    try:
        n_scores = len(scores)
    except TypeError:
        raise ValueError(f"Expected a sequence of {LANE_COUNT} scores, got {type(scores).__name__}")
    if isinstance(scores, (str, bytes)) or n_scores != LANE_COUNT:
        raise ValueError(f"Expected {LANE_COUNT} scores, got {n_scores}")

    if isinstance(samples, bool) or not isinstance(samples, (int, np.integer)):
        raise ValueError(f"samples must be a positive integer, got {samples!r}")
    if samples <= 0:
        raise ValueError(f"samples must be > 0, got {samples}")

    return tuple(clamp_score(s) for s in scores)


def default_salt() -> int:
    """Time-derived master seed (milliseconds, truncated to 32 bits)."""
    return int(time.time() * 1000) & MASK32


def derive_race_seeds(
    scores: Sequence,
    samples: int,
    salt: int
) -> np.ndarray:
    """
    Produce the full per-race seed stream up front.

    The seeds are exactly those estimate_probabilities() consumes for the
    same (scores, samples, salt), so slices can be simulated independently
    and their tallies merged.

    Returns:
        seeds: [samples] uint32
    """
    clamped = _validate_inputs(scores, samples)
    sequencer = init_seed_sequencer(salt, clamped)
    return np.array([sequencer.next() for _ in range(samples)], dtype=np.uint32)


def run_races(
    seeds: Sequence[int],
    scores: Sequence[int],
    max_ticks: int = MAX_TICKS
) -> CreditTally:
    """
    Simulate one race per seed and accumulate credit.

    Args:
        seeds: Race seeds, consumed in order
        scores: Six clamped scores
        max_ticks: Tick cap per race

    Returns:
        CreditTally for these races only
    """
    tally = CreditTally()
    for seed in seeds:
        race = simulate_race(int(seed), scores, max_ticks=max_ticks)
        order = resolve_finish_order(race.finish_times, race.final_distances)
        accumulate_credits(tally, order)
    return tally


def estimate_probabilities(
    scores: Sequence,
    samples: int,
    salt: Optional[int] = None,
    max_ticks: int = MAX_TICKS
) -> AggregateResult:
    """
    Estimate Win/Place/Show probabilities for six lanes by Monte Carlo.

    Steps:
    1. Validate and clamp scores
    2. Initialise the seed sequencer from salt and scores
    3. For each sample: derive seed, simulate, resolve, accumulate
    4. Normalise credit into probabilities and basis points

    Args:
        scores: Six lane scores (clamped to [1, 10])
        samples: Number of races to simulate (> 0)
        salt: Master seed; None uses a time-derived value
        max_ticks: Tick cap per race

    Returns:
        AggregateResult

    Raises:
        ValueError: Wrong number of scores or non-positive sample count
    """
    clamped = _validate_inputs(scores, samples)
    if salt is None:
        salt = default_salt()
    salt = int(salt)

    logger.info(f"Estimating W/P/S: scores={list(clamped)}, samples={samples}, salt={salt}")

    sequencer = init_seed_sequencer(salt, clamped)
    tally = CreditTally()

    started = time.perf_counter()
    for i in range(samples):
        race = simulate_race(sequencer.next(), clamped, max_ticks=max_ticks)
        order = resolve_finish_order(race.finish_times, race.final_distances)
        accumulate_credits(tally, order)

        if (i + 1) % PROGRESS_EVERY == 0:
            logger.info(f"Race simulation: {i + 1}/{samples} races")

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    logger.info(f"Simulated {samples} races in {elapsed_ms:.1f} ms")

    return AggregateResult.from_tally(
        tally, scores=clamped, samples=samples, salt=salt, elapsed_ms=elapsed_ms
    )


def estimate_from_config(scores: Sequence, config: SimulationConfig) -> AggregateResult:
    """Run estimate_probabilities() with settings from a SimulationConfig."""
    return estimate_probabilities(
        scores,
        samples=config.samples,
        salt=config.salt,
        max_ticks=config.max_ticks,
    )
