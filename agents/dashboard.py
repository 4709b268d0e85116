"""
Dashboard — the single aggregate the tick loop mutates.

Holds the three metric series, the current damage profile, the last burst
table and the panel state toggled from the keyboard. Nothing else holds a
reference to it, so no locking is needed.

Per snapshot (apply):
  1. new game?  (cycle wrapped to 0, or the game clock went backwards)
     -> fresh series seeded at the current clock, profile re-selected
  2. tracked player in roster?  no -> skip this tick, keep last table/charts
  3. gold: cumulative increases only; CS and vision: reported totals
  4. advance all three windows at the same clock
  5. rebuild the burst table
"""

from __future__ import annotations
import logging

from config.settings import Settings
from feeds.champion_db import ChampionDatabase
from models.snapshot import BurstRow, GameSnapshot
from models.state import RollingMetricSeries
from strategy.burst_table import build_burst_rows
from strategy.opponents import find_tracked, resolve_opponents
from strategy.profiles import DamageProfile, profile_for

log = logging.getLogger(__name__)

# Every game starts the player with this much gold; it was not earned
STARTING_GOLD = 500.0

GOLD_Y_BOUNDS = (0.0, 600.0)
CS_Y_BOUNDS = (0.0, 12.0)
VS_Y_BOUNDS = (0.0, 2.0)


class Dashboard:

    def __init__(self, settings: Settings, champions: ChampionDatabase) -> None:
        self._settings = settings
        self._champions = champions
        self.gold, self.cs, self.vs = self._new_series()
        self.burst_rows: list[BurstRow] = []
        self.profile: DamageProfile | None = None
        self.last_clock: float | None = None
        self.games_seen: int = 0
        # Log panel state
        self.draw_logger: bool = False
        self.logger_scroll_freeze: bool = False
        self.logger_offset: int = 0

    @staticmethod
    def _new_series() -> tuple[RollingMetricSeries, RollingMetricSeries, RollingMetricSeries]:
        return (
            RollingMetricSeries("gold", GOLD_Y_BOUNDS, initial_raw_value=STARTING_GOLD),
            RollingMetricSeries("cs", CS_Y_BOUNDS),
            RollingMetricSeries("vs", VS_Y_BOUNDS),
        )

    @property
    def series(self) -> tuple[RollingMetricSeries, RollingMetricSeries, RollingMetricSeries]:
        return self.gold, self.cs, self.vs

    def is_new_game(self, cycle: int, game_clock_s: float) -> bool:
        if self.last_clock is None or cycle == 0:
            return True
        return game_clock_s < self.last_clock

    def start_game(self, snapshot: GameSnapshot) -> None:
        clock = snapshot.game_clock_seconds
        self.gold, self.cs, self.vs = self._new_series()
        for s in self.series:
            s.initialize(self._settings.window_capacity, self._settings.sample_rate_s, clock)
        me = find_tracked(snapshot.tracked_player, snapshot.roster)
        self.profile = profile_for(me.champion_id if me else "")
        self.burst_rows = []
        self.games_seen += 1
        log.info("New game detected at clock=%.1f (game #%d)", clock, self.games_seen)

    def apply(self, snapshot: GameSnapshot, cycle: int) -> bool:
        """Fold one snapshot into the dashboard. False when the tick was skipped."""
        clock = snapshot.game_clock_seconds
        if self.is_new_game(cycle, clock):
            self.start_game(snapshot)

        tracked = snapshot.tracked_player
        me = find_tracked(tracked, snapshot.roster)
        if me is None:
            log.warning("Active player %r not found in roster of %d; skipping tick",
                        tracked.identity, len(snapshot.roster))
            return False
        if self.profile is None or self.profile.name != me.champion_id:
            self.profile = profile_for(me.champion_id)

        self.gold.record_cumulative(tracked.cumulative_gold)
        self.cs.record_rate_direct(me.creep_score)
        self.vs.record_rate_direct(me.vision_score)
        for s in self.series:
            s.advance(clock)
        self.last_clock = clock

        opponents = resolve_opponents(tracked, snapshot.roster, self._champions)
        self.burst_rows = build_burst_rows(self.profile, tracked, opponents, self._settings.rotation)
        log.debug(
            "tick clock=%.1f gold/min=%s cs/min=%s vs/min=%s opponents=%d",
            clock, self.gold.rate_string(), self.cs.rate_string(), self.vs.rate_string(), len(opponents),
        )
        return True
