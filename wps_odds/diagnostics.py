"""
Result diagnostics.

Log-table formatting, probability sum checks, a per-lane pandas summary and
normal-approximation confidence intervals for the estimated probabilities.
"""

import numpy as np
import pandas as pd
from scipy import stats
from typing import Dict
import logging

from .types import AggregateResult, BPS_SCALE, WIN_SLOTS, PLACE_SLOTS, SHOW_SLOTS

logger = logging.getLogger(__name__)

# Per-lane rounding can move each tier's sum by up to half a bp per lane
DEFAULT_SUM_TOLERANCE_BPS = 6

TIERS = (
    ('win', WIN_SLOTS),
    ('place', PLACE_SLOTS),
    ('show', SHOW_SLOTS),
)


def _tier_arrays(result: AggregateResult, tier: str):
    return getattr(result, f'{tier}_bps'), getattr(result, f'{tier}_prob')


# =============================================================================
# Sum Checks
# =============================================================================

def check_probability_sums(
    result: AggregateResult,
    tolerance_bps: int = DEFAULT_SUM_TOLERANCE_BPS
) -> Dict:
    """
    Check that Win/Place/Show bps sum to 10000/20000/30000.

    Returns:
        Dict keyed by tier with 'sum', 'expected' and 'ok'
    """
    checks = {}
    for tier, slots in TIERS:
        bps, _ = _tier_arrays(result, tier)
        total = int(bps.sum())
        expected = slots * BPS_SCALE
        ok = abs(total - expected) <= tolerance_bps
        if not ok:
            logger.warning(
                f"{tier.capitalize()} bps sum {total} outside {expected} +/- {tolerance_bps}"
            )
        checks[tier] = {'sum': total, 'expected': expected, 'ok': ok}
    return checks


# =============================================================================
# Tabular Views
# =============================================================================

def probabilities_frame(result: AggregateResult) -> pd.DataFrame:
    """One row per lane with score, bps and raw probabilities."""
    return pd.DataFrame({
        'lane': np.arange(len(result.scores)),
        'score': list(result.scores),
        'win_bps': result.win_bps,
        'place_bps': result.place_bps,
        'show_bps': result.show_bps,
        'win_prob': result.win_prob,
        'place_prob': result.place_prob,
        'show_prob': result.show_prob,
    }).set_index('lane')


def confidence_intervals(result: AggregateResult, level: float = 0.95) -> pd.DataFrame:
    """
    Normal-approximation confidence intervals in bps for every lane and tier.

    Place and Show credit per race is bounded by 1 like Win, so the binomial
    standard error sqrt(p(1-p)/n) is used for all three tiers.
    """
    if not 0 < level < 1:
        raise ValueError(f"level must be in (0, 1), got {level}")

    z = stats.norm.ppf(0.5 + level / 2)
    columns = {}
    for tier, _ in TIERS:
        _, prob = _tier_arrays(result, tier)
        p = np.clip(prob, 0.0, 1.0)
        se = np.sqrt(p * (1.0 - p) / result.samples)
        columns[f'{tier}_lo_bps'] = np.clip(np.rint((p - z * se) * BPS_SCALE), 0, BPS_SCALE).astype(np.int64)
        columns[f'{tier}_hi_bps'] = np.clip(np.rint((p + z * se) * BPS_SCALE), 0, BPS_SCALE).astype(np.int64)

    frame = pd.DataFrame(columns)
    frame.index.name = 'lane'
    return frame


# =============================================================================
# Log Formatting
# =============================================================================

def _fmt_pct(p: float) -> str:
    return f"{p * 100:.2f}%"


def _fmt_cell(prob: float, bps: int) -> str:
    return f"{_fmt_pct(prob):>7} ({bps:>4} bps)"


def format_probabilities_for_log(result: AggregateResult) -> str:
    """Format a result as a box table with a sum-check footer."""
    lines = [
        "    ┌────────┬───────┬─────────────────┬─────────────────┬─────────────────┐",
        "    │  Lane  │ Score │    Win Prob     │   Place Prob    │   Show Prob     │",
        "    ├────────┼───────┼─────────────────┼─────────────────┼─────────────────┤",
    ]

    for lane, score in enumerate(result.scores):
        win = _fmt_cell(result.win_prob[lane], int(result.win_bps[lane]))
        place = _fmt_cell(result.place_prob[lane], int(result.place_bps[lane]))
        show = _fmt_cell(result.show_prob[lane], int(result.show_bps[lane]))
        lines.append(f"    │   {lane}    │  {score:>2}   │ {win} │ {place} │ {show} │")

    lines.append("    └────────┴───────┴─────────────────┴─────────────────┴─────────────────┘")

    win_sum = float(result.win_prob.sum())
    place_sum = float(result.place_prob.sum())
    show_sum = float(result.show_prob.sum())
    lines.append(
        f"    Sum checks: Win={win_sum:.4f} (~1.00), "
        f"Place={place_sum:.4f} (~2.00), Show={show_sum:.4f} (~3.00)"
    )

    return "\n".join(lines)
