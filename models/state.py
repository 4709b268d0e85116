"""
Mutable state objects held by the dashboard.
These are NOT shared: the tick loop owns every series and is their only writer.

A RollingMetricSeries turns a raw per-tick reading (current gold, creep score,
vision score) into a per-minute rate and keeps the last `capacity` rates as a
fixed-length, time-ordered window for charting.

Lifecycle:
    series = RollingMetricSeries("gold", initial_raw_value=500.0)
    series.initialize(capacity=300, sample_period_s=1.0, game_clock_s=clock)
    # every tick:
    series.record_cumulative(current_gold)
    series.advance(clock)
    series.x_axis_bounds()

initialize() may be called again at any time to re-seed the window (new game).
"""

from __future__ import annotations
import logging
import math
from collections import deque

log = logging.getLogger(__name__)


def _format_offset(seconds: float) -> str:
    sign = "-" if seconds < 0 else ""
    total = int(round(abs(seconds)))
    return f"{sign}{total // 60}:{total % 60:02d}"


class RollingMetricSeries:
    """
    Fixed-capacity FIFO window of (timestamp, rate) samples.

    Invariant once initialized: len(samples) == capacity, timestamps non-decreasing,
    and every advance() evicts exactly one sample for the one it appends.
    """

    __slots__ = (
        "name",
        "y_axis_bounds",
        "running_total",
        "last_raw_value",
        "rate",
        "_capacity",
        "_period_s",
        "_samples",
    )

    def __init__(
        self,
        name: str,
        y_axis_bounds: tuple[float, float] = (0.0, 1.0),
        initial_raw_value: float = 0.0,
    ) -> None:
        self.name = name
        self.y_axis_bounds = y_axis_bounds
        self.running_total: float = 0.0
        self.last_raw_value: float = initial_raw_value
        self.rate: float = 0.0
        self._capacity: int = 0
        self._period_s: float = 0.0
        self._samples: deque[tuple[float, float]] = deque()

    # ------------------------------------------------------------------
    # Window lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._capacity > 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def samples(self) -> list[tuple[float, float]]:
        """Copy of the window, oldest first."""
        return list(self._samples)

    def initialize(self, capacity: int, sample_period_s: float, game_clock_s: float) -> "RollingMetricSeries":
        """
        Back-fill every slot with a synthetic past timestamp and a zero rate.
        Slot i gets game_clock_s - sample_period_s * (capacity - 1 - i), so the
        newest slot sits exactly on the current clock.
        """
        if capacity < 1:
            raise ValueError(f"{self.name}: window capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._period_s = sample_period_s
        self._samples = deque(
            (game_clock_s - sample_period_s * (capacity - 1 - i), 0.0)
            for i in range(capacity)
        )
        log.debug("%s window seeded: capacity=%d clock=%.1f", self.name, capacity, game_clock_s)
        return self

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def record_cumulative(self, raw_value: float) -> None:
        """
        Accumulate only increases of a raw counter.
        A reading equal to or below the previous one adds nothing: spending gold,
        a restarted game, or a bad read never produce a negative delta.
        """
        if raw_value > self.last_raw_value:
            self.running_total += raw_value - self.last_raw_value
        self.last_raw_value = raw_value

    def record_rate_direct(self, raw_total: float) -> None:
        """For counters the client already reports as game totals (CS, vision score)."""
        self.running_total = float(raw_total)
        self.last_raw_value = float(raw_total)

    def compute_rate_per_minute(self, game_clock_s: float) -> float:
        total = math.floor(self.running_total)
        if game_clock_s < 1.0:
            # Clamp the first second to a whole-minute bucket
            minutes = math.ceil(game_clock_s / 60.0)
            if minutes <= 0:
                return 0.0
            return total / minutes
        return total / (game_clock_s / 60.0)

    # ------------------------------------------------------------------
    # Per tick
    # ------------------------------------------------------------------

    def advance(self, game_clock_s: float) -> None:
        """Evict the oldest sample and append the rate at game_clock_s."""
        if not self.is_initialized:
            raise RuntimeError(f"{self.name}: advance() called before initialize()")
        self.rate = self.compute_rate_per_minute(game_clock_s)
        self._samples.popleft()
        self._samples.append((game_clock_s, self.rate))

    def x_axis_bounds(self) -> tuple[float, float]:
        if not self._samples:
            return 0.0, 0.0
        return self._samples[0][0], self._samples[-1][0]

    def x_axis_labels(self) -> tuple[str, str, str]:
        span = self._capacity * self._period_s
        return _format_offset(-span), _format_offset(-span / 2), _format_offset(0)

    def rate_string(self) -> str:
        return f"{self.rate:.1f}"
