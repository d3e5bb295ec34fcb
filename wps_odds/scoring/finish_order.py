"""
Finish-order resolution with dead-heat grouping.

Lanes are ranked by finish time; lanes with exactly equal finish times form
one band. Bands are assigned to first/second/third by running position, so a
tie that spans several positions occupies the earliest rank only.
"""

from typing import List, Sequence, Tuple

from ..types import LANE_COUNT, UNFINISHED, Band, FinishOrder


def _rank_key(finish_time: int, distance: int) -> Tuple[int, int]:
    """Group key: finished lanes by time, unfinished lanes after them by distance."""
    if finish_time == UNFINISHED:
        return (1, -distance)
    return (0, finish_time)


def group_lanes(
    finish_times: Sequence[int],
    distances: Sequence[int]
) -> List[Tuple[int, ...]]:
    """
    Sort lanes best-first and split them into dead-heat groups.

    Args:
        finish_times: [6] composite finish times (UNFINISHED sorts last)
        distances: [6] final distances, higher ranks better on equal time

    Returns:
        Ordered list of lane tuples, one per distinct finishing position
    """
    if len(finish_times) != LANE_COUNT or len(distances) != LANE_COUNT:
        raise ValueError(
            f"Expected {LANE_COUNT} finish times and distances, "
            f"got {len(finish_times)} and {len(distances)}"
        )

    keys = [_rank_key(finish_times[lane], distances[lane]) for lane in range(LANE_COUNT)]
    order = sorted(range(LANE_COUNT), key=lambda lane: (keys[lane], -distances[lane], lane))

    groups: List[List[int]] = []
    current_key = None
    for lane in order:
        if groups and keys[lane] == current_key:
            groups[-1].append(lane)
        else:
            groups.append([lane])
            current_key = keys[lane]

    return [tuple(g) for g in groups]


def resolve_finish_order(
    finish_times: Sequence[int],
    distances: Sequence[int]
) -> FinishOrder:
    """
    Resolve first, second and third place bands.

    The first group is always first place. Later groups land in second or
    third according to how many lanes are already ahead of them; once three
    lanes are placed the remaining bands stay empty.
    """
    bands = [Band(), Band(), Band()]
    position = 0
    for group in group_lanes(finish_times, distances):
        if position >= len(bands):
            break
        bands[position] = Band(lanes=group)
        position += len(group)

    return FinishOrder(first=bands[0], second=bands[1], third=bands[2])
