"""
Win/Place/Show credit accumulation under standard dead-heat rules.

A band that fits inside the remaining payout slots is paid in full; a band
that overflows them splits only the remaining slots among its lanes.
"""

from typing import Iterable
import numpy as np

from ..types import (
    WIN_SLOTS, PLACE_SLOTS, SHOW_SLOTS, Band, FinishOrder, CreditTally
)


def fill_slots(credits: np.ndarray, bands: Iterable[Band], slots: int) -> None:
    """
    Cascade `slots` payout slots through ordered bands, adding credit in place.

    Args:
        credits: [6] float64 per-lane credit for one tier (mutated)
        bands: Bands in finishing order; empty bands contribute nothing
        slots: Slots available for this tier (1=Win, 2=Place, 3=Show)
    """
    remaining = slots
    for band in bands:
        if remaining <= 0:
            break
        if band.count == 0:
            continue

        lanes = list(band.lanes)
        if band.count <= remaining:
            credits[lanes] += 1.0
            remaining -= band.count
        else:
            credits[lanes] += remaining / band.count
            remaining = 0


def accumulate_credits(tally: CreditTally, order: FinishOrder) -> None:
    """Add one race's Win, Place and Show credit to the tally."""
    bands = order.bands
    fill_slots(tally.win, bands, WIN_SLOTS)
    fill_slots(tally.place, bands, PLACE_SLOTS)
    fill_slots(tally.show, bands, SHOW_SLOTS)
    tally.races += 1
