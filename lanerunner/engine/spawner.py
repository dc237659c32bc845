"""Obstacle and coin spawning, motion and retirement."""

from __future__ import annotations

import random

from lanerunner.config.schema import SpawnSettings

from .entities import Coin, Obstacle, Player
from .geometry import Vec3
from .lanes import LaneModel
from .scene import Scene
from .state import RunState


def lane_bit(lane: int) -> int:
    return 1 << lane


def lanes_in(mask: int, lane_count: int) -> list[int]:
    return [lane for lane in range(lane_count) if mask & lane_bit(lane)]


class EntitySpawner:
    """Owns the live obstacle and coin lists.

    Obstacle placement follows a lane-fairness rule: any lane holding an
    obstacle that is still inside the contention window is reserved, and an
    attempt that finds every lane reserved spawns nothing.
    """

    def __init__(self, settings: SpawnSettings, lanes: LaneModel, scene: Scene,
                 state: RunState, player: Player, rng: random.Random):
        self.settings = settings
        self.lanes = lanes
        self.scene = scene
        self.state = state
        self.player = player
        self.rng = rng
        self.obstacles: list[Obstacle] = []
        self.coins: list[Coin] = []
        self._all_lanes = (1 << lanes.settings.count) - 1

    # ── Gated attempts ─────────────────────

    def maybe_spawn_obstacle(self, now: float) -> Obstacle | None:
        if now - self.state.last_obstacle_spawn < self.state.obstacle_spawn_interval:
            return None
        # A skipped attempt still consumes the interval.
        self.state.last_obstacle_spawn = now
        return self.spawn_obstacle()

    def maybe_spawn_coin(self, now: float) -> list[Coin]:
        if now - self.state.last_coin_spawn < self.settings.coin_interval_ms:
            return []
        self.state.last_coin_spawn = now
        return self.spawn_coins()

    # ── Spawning ───────────────────────────

    def sweep_obstacles(self) -> int:
        """Sweep the obstacle list once: retire passed obstacles, return the free-lane mask."""
        available = self._all_lanes
        window_edge = self.player.position.z - self.settings.contention_distance
        kept = []
        for obstacle in self.obstacles:
            if self._is_behind(obstacle):
                self.scene.remove(obstacle)
                continue
            if obstacle.position.z < window_edge:
                available &= ~lane_bit(obstacle.lane)
            kept.append(obstacle)
        self.obstacles = kept
        return available

    def spawn_obstacle(self) -> Obstacle | None:
        lanes = lanes_in(self.sweep_obstacles(), self.lanes.settings.count)
        if not lanes:
            return None
        lane = self.rng.choice(lanes)
        return self.place_obstacle(lane, self.player.position.z - self.settings.distance)

    def spawn_coins(self) -> list[Coin]:
        count = 2 if self.rng.random() < self.settings.double_coin_chance else 1
        lanes = self.rng.sample(range(self.lanes.settings.count), count)
        coins = []
        for lane in lanes:
            jitter = self.rng.uniform(-self.settings.coin_z_jitter, self.settings.coin_z_jitter)
            coins.append(self.place_coin(lane, self.player.position.z - self.settings.distance + jitter))
        return coins

    def place_obstacle(self, lane: int, z: float) -> Obstacle:
        obstacle = Obstacle(
            position=Vec3(self.lanes.lane_to_x(lane), self.settings.obstacle_height, z),
            lane=lane,
        )
        self.scene.add(obstacle)
        self.obstacles.append(obstacle)
        return obstacle

    def place_coin(self, lane: int, z: float) -> Coin:
        coin = Coin(position=Vec3(self.lanes.lane_to_x(lane), self.settings.coin_height, z), lane=lane)
        self.scene.add(coin)
        self.coins.append(coin)
        return coin

    # ── Motion / retirement ────────────────

    def move_entities(self, delta_distance: float, spin: bool = True) -> None:
        """Scroll every live entity toward the player; coins also spin unless ``spin`` is off."""
        for obstacle in self.obstacles:
            obstacle.position.z += delta_distance
        for coin in self.coins:
            coin.position.z += delta_distance
            if spin:
                coin.rotation.z += self.settings.coin_spin_per_tick

    def _is_behind(self, entity) -> bool:
        return entity.position.z > self.player.position.z + self.settings.trailing_margin

    def retire_passed_coins(self) -> int:
        before = len(self.coins)
        kept = []
        for coin in self.coins:
            if self._is_behind(coin):
                self.scene.remove(coin)
            else:
                kept.append(coin)
        self.coins = kept
        return before - len(kept)

    def retire_passed(self) -> int:
        """Retire every obstacle and coin behind the trailing margin."""
        before = len(self.obstacles)
        self.sweep_obstacles()
        return (before - len(self.obstacles)) + self.retire_passed_coins()

    def collect(self, coin: Coin) -> None:
        self.scene.remove(coin)
        self.coins.remove(coin)

    def clear(self) -> None:
        for entity in [*self.obstacles, *self.coins]:
            self.scene.remove(entity)
        self.obstacles = []
        self.coins = []
