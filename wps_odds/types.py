"""
Core data structures for the Win/Place/Show probability estimator.

Race geometry constants, finish-order bands, credit tallies and the
aggregate result returned to callers.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import numpy as np


LANE_COUNT = 6
SPEED_RANGE = 10
TRACK_LENGTH = 1000
FINISH_OVERSHOOT = 10
MAX_TICKS = 500

# Finish time = tick * FINISH_TIME_PRECISION + fractional part of the tick
FINISH_TIME_PRECISION = 10000

# Finish time of a lane that never crossed the line
UNFINISHED = -1

BPS_SCALE = 10000

# Payout slots per tier: Win, Place, Show
WIN_SLOTS = 1
PLACE_SLOTS = 2
SHOW_SLOTS = 3


@dataclass(frozen=True)
class Band:
    """
    Lanes sharing one finishing rank.

    Attributes:
        lanes: Lane indices tied at this rank, in resolved order
    """
    lanes: Tuple[int, ...] = ()

    @property
    def count(self) -> int:
        return len(self.lanes)


@dataclass(frozen=True)
class FinishOrder:
    """First, second and third place bands for one race."""
    first: Band = field(default_factory=Band)
    second: Band = field(default_factory=Band)
    third: Band = field(default_factory=Band)

    @property
    def bands(self) -> Tuple[Band, Band, Band]:
        return (self.first, self.second, self.third)


@dataclass
class RaceResult:
    """
    Outcome of a single simulated race.

    Attributes:
        finish_times: Per-lane composite finish time, UNFINISHED if the lane
                      never reached TRACK_LENGTH
        final_distances: Per-lane distance when the race stopped
        ticks: Number of ticks actually run
    """
    finish_times: List[int]
    final_distances: List[int]
    ticks: int

    @property
    def all_finished(self) -> bool:
        return UNFINISHED not in self.finish_times


@dataclass
class CreditTally:
    """
    Win/Place/Show credit accumulated per lane across simulations.
    """
    win: np.ndarray = field(default_factory=lambda: np.zeros(LANE_COUNT, dtype=np.float64))
    place: np.ndarray = field(default_factory=lambda: np.zeros(LANE_COUNT, dtype=np.float64))
    show: np.ndarray = field(default_factory=lambda: np.zeros(LANE_COUNT, dtype=np.float64))
    races: int = 0

    def merge(self, other: 'CreditTally') -> 'CreditTally':
        """Return a new tally holding the element-wise sum of both."""
        return CreditTally(
            win=self.win + other.win,
            place=self.place + other.place,
            show=self.show + other.show,
            races=self.races + other.races,
        )


def _readonly(values: np.ndarray) -> np.ndarray:
    values = np.array(values)
    values.flags.writeable = False
    return values


@dataclass(frozen=True, eq=False)
class AggregateResult:
    """
    Estimated Win/Place/Show probabilities for one set of scores.

    Attributes:
        scores: Clamped scores actually simulated, one per lane
        samples: Number of races simulated
        salt: Master seed the seed sequencer was initialised from
        elapsed_ms: Wall time of the simulation loop (diagnostics only)
        win_bps / place_bps / show_bps: [6] int64 probabilities in basis points
        win_prob / place_prob / show_prob: [6] float64 raw probabilities
    """
    scores: Tuple[int, ...]
    samples: int
    salt: int
    elapsed_ms: float
    win_bps: np.ndarray
    place_bps: np.ndarray
    show_bps: np.ndarray
    win_prob: np.ndarray
    place_prob: np.ndarray
    show_prob: np.ndarray

    @classmethod
    def from_tally(
        cls,
        tally: CreditTally,
        scores: Tuple[int, ...],
        samples: int,
        salt: int,
        elapsed_ms: float
    ) -> 'AggregateResult':
        """Normalise credit tallies into probabilities (bps rounded half-to-even)."""
        win_prob = tally.win / samples
        place_prob = tally.place / samples
        show_prob = tally.show / samples

        return cls(
            scores=tuple(scores),
            samples=samples,
            salt=salt,
            elapsed_ms=elapsed_ms,
            win_bps=_readonly(probability_to_bps(win_prob)),
            place_bps=_readonly(probability_to_bps(place_prob)),
            show_bps=_readonly(probability_to_bps(show_prob)),
            win_prob=_readonly(win_prob),
            place_prob=_readonly(place_prob),
            show_prob=_readonly(show_prob),
        )

    def to_dict(self) -> Dict:
        """Convert to serializable dict."""
        lanes = [
            {
                'lane': lane,
                'score': self.scores[lane],
                'win_prob_bps': int(self.win_bps[lane]),
                'place_prob_bps': int(self.place_bps[lane]),
                'show_prob_bps': int(self.show_bps[lane]),
                'win_prob': float(self.win_prob[lane]),
                'place_prob': float(self.place_prob[lane]),
                'show_prob': float(self.show_prob[lane]),
            }
            for lane in range(len(self.scores))
        ]
        return {
            'scores': list(self.scores),
            'samples': self.samples,
            'salt': self.salt,
            'elapsed_ms': self.elapsed_ms,
            'win_prob_bps': [int(v) for v in self.win_bps],
            'place_prob_bps': [int(v) for v in self.place_bps],
            'show_prob_bps': [int(v) for v in self.show_bps],
            'lanes': lanes,
        }


@dataclass
class SimulationConfig:
    """
    Aggregation run settings.

    Attributes:
        samples: Number of races to simulate
        salt: Master seed; None derives one from the clock
        max_ticks: Tick cap per race before falling back to distance ranking
    """
    samples: int = 10000
    salt: Optional[int] = None
    max_ticks: int = MAX_TICKS

    def __post_init__(self) -> None:
        if self.samples <= 0:
            raise ValueError("SimulationConfig.samples must be positive.")
        if self.max_ticks <= 0:
            raise ValueError("SimulationConfig.max_ticks must be positive.")


def probability_to_bps(probabilities: np.ndarray) -> np.ndarray:
    """
    Convert probabilities to integer basis points.

    Halves round to even (numpy.rint), so 982.5 bps becomes 982. A
    round-half-up implementation would report 983 for the same credit.
    """
    return np.rint(np.asarray(probabilities, dtype=np.float64) * BPS_SCALE).astype(np.int64)
