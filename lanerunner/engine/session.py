"""
Game session: the countdown → running → game-over → restart state machine.

One GameSession owns a run. An external driver calls ``tick(now)`` once per
frame with a millisecond timestamp; everything else (tween, countdown,
spawn cadence, difficulty) is recomputed from absolute timestamps, so a
restart only has to overwrite state.
"""

from __future__ import annotations

import enum
import math
import random
from typing import Any

from lanerunner.config.defaults import default_settings
from lanerunner.config.schema import Settings
from lanerunner.core.contracts import HudSnapshot

from .collision import CollisionDetector
from .difficulty import DifficultyController
from .entities import Obstacle, Player
from .geometry import Vec3
from .lanes import LaneModel
from .scene import Scene, SceneGraph
from .scores import HighScore, KeyValueStore, MemoryStore, ScoreTracker
from .spawner import EntitySpawner
from .state import RunState
from .world import WorldScroller

CAMERA_HEIGHT = 5.5
CAMERA_TRAIL = 8.0


class Phase(enum.Enum):
    COUNTDOWN = "countdown"
    RUNNING = "running"
    GAME_OVER = "game_over"


def countdown_seconds(now: float, game_start_time: float, delay_ms: float) -> int:
    """Whole seconds left before the run starts (<= 0 once it has)."""
    return math.ceil((delay_ms - (now - game_start_time)) / 1000)


class GameSession:
    def __init__(self, settings: Settings | None = None, *, store: KeyValueStore | None = None,
                 scene: Scene | None = None, now: float = 0.0, seed: int | None = None):
        self.settings = settings or default_settings()
        self.scene = scene if scene is not None else SceneGraph()
        self.rng = random.Random(seed)
        self.state = RunState.initial(self.settings, now)

        lanes = self.settings.lanes
        self.player = Player(
            position=Vec3(lanes.positions[lanes.start_lane], self.settings.session.player_height, 0.0),
            current_lane=lanes.start_lane,
        )
        self.scene.add(self.player)

        self.lanes = LaneModel(lanes, self.player)
        self.world = WorldScroller(self.settings.road, lanes, self.scene, self.state, self.player)
        self.spawner = EntitySpawner(self.settings.spawn, self.lanes, self.scene, self.state, self.player, self.rng)
        self.difficulty = DifficultyController(self.settings.speed, self.settings.spawn, self.state)
        self.collisions = CollisionDetector(self.state, self.player, self.spawner, self._on_obstacle_hit)
        self.scores = ScoreTracker(store if store is not None else MemoryStore(),
                                   self.settings.session.high_score_key, self.state)
        self.countdown: int | None = None
        self._refresh_countdown(now)

    # ── State machine ──────────────────────

    @property
    def phase(self) -> Phase:
        if self.state.is_game_over:
            return Phase.GAME_OVER
        if self.state.is_game_started:
            return Phase.RUNNING
        return Phase.COUNTDOWN

    def tick(self, now: float) -> None:
        """Advance the whole core to ``now`` (ms)."""
        state = self.state
        elapsed = min(max(now - state.last_tick, 0.0), self.settings.session.max_tick_ms)
        state.last_tick = now

        self._refresh_countdown(now)
        if state.is_game_over:
            return

        self.lanes.update(now)
        self.difficulty.tick(now)

        # A long frame is integrated in frame-sized steps so nothing closes
        # on the player by more than a box depth between overlap tests.
        steps = max(1, math.ceil(elapsed * self.settings.session.fps / 1000 - 1e-9))
        distance = state.speed * elapsed / 1000 / steps
        for step in range(steps):
            self.world.advance(distance)
            self.player.position.z -= distance
            if not state.is_game_started:
                continue
            if step == 0:
                self.spawner.maybe_spawn_obstacle(now)
                self.spawner.maybe_spawn_coin(now)
            self.spawner.move_entities(distance, spin=step == 0)
            self.spawner.retire_passed()
            if self.collisions.check_obstacle_collisions():
                break
            self.collisions.check_coin_collisions()

    def _refresh_countdown(self, now: float) -> None:
        state = self.state
        if state.is_game_started:
            return
        left = countdown_seconds(now, state.game_start_time, self.settings.session.countdown_ms)
        if left > 0:
            self.countdown = left
        else:
            self.countdown = None
            state.is_game_started = True

    def _on_obstacle_hit(self, obstacle: Obstacle) -> None:
        self.state.is_game_over = True
        self.scores.update()

    def restart(self, now: float | None = None) -> None:
        """Checkpoint high scores, then reset the run and re-arm the countdown."""
        now = self.state.last_tick if now is None else now
        self.scores.update()
        self.state.reset(self.settings, now)
        self.lanes.reset()
        self.player.position.set(self.player.position.x, self.settings.session.player_height, 0.0)
        self.spawner.clear()
        self.world.reset()
        self.countdown = None
        self._refresh_countdown(now)

    # ── Input ──────────────────────────────

    def request_lane_change(self, direction: int, now: float | None = None) -> bool:
        if self.state.is_game_over:
            return False
        now = self.state.last_tick if now is None else now
        return self.lanes.request_lane_change(direction, now)

    # ── Presentation ───────────────────────

    def get_distance(self) -> int:
        return self.scores.distance

    def get_coin_count(self) -> int:
        return self.state.coin_count

    def get_high_score(self) -> HighScore:
        best = self.scores.high_score
        return HighScore(best.distance, best.coins)

    def get_countdown_seconds_remaining(self) -> int | None:
        """Countdown display value, or None once the banner is hidden."""
        return self.countdown

    def is_game_over(self) -> bool:
        return self.state.is_game_over

    def camera_position(self) -> tuple[float, float, float]:
        p = self.player.position
        return (p.x, CAMERA_HEIGHT, p.z + CAMERA_TRAIL)

    def snapshot(self) -> HudSnapshot:
        best = self.scores.high_score
        return HudSnapshot(
            distance=self.get_distance(),
            coins=self.state.coin_count,
            best_distance=best.distance,
            best_coins=best.coins,
            countdown=self.countdown,
            game_over=self.state.is_game_over,
            speed=self.state.speed,
            lane=self.player.current_lane,
        )

    def encode(self) -> dict[str, Any]:
        """Encode current state as a dict for replay / simulation frames."""
        pz = self.player.position.z
        return {
            "lane": self.player.current_lane,
            "x": self.player.position.x,
            "obs": [[o.lane, o.position.z - pz] for o in self.spawner.obstacles],
            "coins_live": [[c.lane, c.position.z - pz] for c in self.spawner.coins],
            "distance": self.get_distance(),
            "coins": self.state.coin_count,
            "speed": self.state.speed,
            "alive": not self.state.is_game_over,
            "phase": self.phase.value,
        }
