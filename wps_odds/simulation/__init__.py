"""Deterministic race simulation."""

from .engine import simulate_race, clamp_score, score_to_bps
from .rng import Xorshift128, SplitMix32, init_seed_sequencer

__all__ = [
    "simulate_race",
    "clamp_score",
    "score_to_bps",
    "Xorshift128",
    "SplitMix32",
    "init_seed_sequencer",
]
