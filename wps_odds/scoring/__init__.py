"""Finish-order resolution and dead-heat credit accounting."""

from .finish_order import resolve_finish_order, group_lanes
from .credits import accumulate_credits, fill_slots

__all__ = ["resolve_finish_order", "group_lanes", "accumulate_credits", "fill_slots"]
