"""
Tick-based race simulation for six lanes.

Each tick every lane draws a base step in [1, SPEED_RANGE], scales it by its
score bias with probabilistic rounding, and advances. A lane crossing
TRACK_LENGTH gets a finish time interpolated within the tick so same-tick
finishers are ordered by how much of the tick they needed.
"""

import math
import numbers
from typing import Sequence
import logging

from .rng import Xorshift128
from ..types import (
    LANE_COUNT,
    SPEED_RANGE,
    TRACK_LENGTH,
    FINISH_OVERSHOOT,
    MAX_TICKS,
    FINISH_TIME_PRECISION,
    UNFINISHED,
    BPS_SCALE,
    RaceResult,
)

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10

# Bias at score 1; score 10 runs at exactly 1.0x
MIN_BIAS_BPS = 9585
BIAS_RANGE_BPS = BPS_SCALE - MIN_BIAS_BPS


def clamp_score(score) -> int:
    """
    Coerce a score into [MIN_SCORE, MAX_SCORE].

    Numeric strings are accepted; anything non-numeric, non-finite or below
    MIN_SCORE becomes MIN_SCORE. Fractional scores are floored. Integers are
    compared exactly, so arbitrarily large ones clamp instead of overflowing.
    """
    if isinstance(score, numbers.Integral):
        return int(min(max(score, MIN_SCORE), MAX_SCORE))
    try:
        value = float(score)
    except (TypeError, ValueError, OverflowError):
        return MIN_SCORE
    if not math.isfinite(value):
        return MIN_SCORE
    x = math.floor(value)
    if x < MIN_SCORE:
        return MIN_SCORE
    if x > MAX_SCORE:
        return MAX_SCORE
    return x


def score_to_bps(score) -> int:
    """Speed bias in basis points: 9585 at score 1 up to 10000 at score 10."""
    r = clamp_score(score)
    return MIN_BIAS_BPS + ((r - 1) * BIAS_RANGE_BPS) // 9


def simulate_race(
    seed: int,
    scores: Sequence[int],
    max_ticks: int = MAX_TICKS
) -> RaceResult:
    """
    Simulate one race until every lane is past the finish plus overshoot.

    Draw order per tick is lane 0..5, and per lane: base step, then the
    rounding draw only when the scaled step has a fractional remainder.

    Args:
        seed: 32-bit seed for this race's Xorshift128
        scores: Six lane scores (clamped here if not already)
        max_ticks: Tick cap; lanes short of the line stay UNFINISHED

    Returns:
        RaceResult with finish times, final distances and ticks run
    """
    rng = Xorshift128(seed)
    bias = [score_to_bps(s) for s in scores]
    if len(bias) != LANE_COUNT:
        raise ValueError(f"Expected {LANE_COUNT} scores, got {len(bias)}")

    distances = [0] * LANE_COUNT
    finish_times = [UNFINISHED] * LANE_COUNT
    stop_distance = TRACK_LENGTH + FINISH_OVERSHOOT

    ticks = 0
    for tick in range(max_ticks):
        if all(d >= stop_distance for d in distances):
            break
        ticks = tick + 1

        for lane in range(LANE_COUNT):
            base_step = rng.roll(SPEED_RANGE) + 1

            raw = base_step * bias[lane]
            step = raw // BPS_SCALE
            rem = raw % BPS_SCALE
            if rem > 0 and rng.roll(BPS_SCALE) < rem:
                step += 1
            step = max(step, 1)

            prev = distances[lane]
            distances[lane] = prev + step

            if finish_times[lane] == UNFINISHED and prev < TRACK_LENGTH <= distances[lane]:
                fraction = ((TRACK_LENGTH - prev) * FINISH_TIME_PRECISION) // step
                finish_times[lane] = tick * FINISH_TIME_PRECISION + fraction

    if UNFINISHED in finish_times:
        logger.debug(f"Race seed={seed} hit max_ticks={max_ticks} with unfinished lanes")

    return RaceResult(
        finish_times=finish_times,
        final_distances=distances,
        ticks=ticks,
    )
