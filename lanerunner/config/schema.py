from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class LaneSettings:
    positions: tuple[float, ...]
    width: float
    start_lane: int
    change_ms: float

    @property
    def count(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class RoadSettings:
    segment_length: float
    segment_count: int
    width: float
    dash_length: float
    dash_gap: float


@dataclass(frozen=True)
class SpeedSettings:
    initial: float
    maximum: float
    increment: float
    increase_interval_ms: float


@dataclass(frozen=True)
class SpawnSettings:
    initial_obstacle_interval_ms: float
    min_obstacle_interval_ms: float
    obstacle_interval_step_ms: float
    coin_interval_ms: float
    distance: float
    contention_distance: float
    trailing_margin: float
    double_coin_chance: float
    coin_z_jitter: float
    obstacle_height: float
    coin_height: float
    coin_spin_per_tick: float


@dataclass(frozen=True)
class SessionSettings:
    countdown_ms: float
    player_height: float
    high_score_key: str
    fps: int
    max_tick_ms: float


@dataclass(frozen=True)
class Paths:
    project_dir: Path
    data_dir: Path
    high_scores: Path
    results: Path

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class Settings:
    lanes: LaneSettings
    road: RoadSettings
    speed: SpeedSettings
    spawn: SpawnSettings
    session: SessionSettings
    paths: Paths

    def __post_init__(self):
        lanes, road, speed, spawn = self.lanes, self.road, self.speed, self.spawn
        if lanes.count != 3:
            raise ValueError(f"expected 3 lane positions, got {lanes.count}")
        if not 0 <= lanes.start_lane < lanes.count:
            raise ValueError(f"start_lane {lanes.start_lane} outside [0, {lanes.count - 1}]")
        if road.segment_count < 2 or road.segment_length <= 0:
            raise ValueError("road needs at least 2 segments of positive length")
        if speed.initial <= 0 or speed.maximum < speed.initial:
            raise ValueError("speed.maximum must be >= speed.initial > 0")
        if spawn.min_obstacle_interval_ms > spawn.initial_obstacle_interval_ms:
            raise ValueError("min obstacle interval exceeds the initial interval")
        for name, value in (
            ("lanes.change_ms", lanes.change_ms),
            ("speed.increase_interval_ms", speed.increase_interval_ms),
            ("spawn.min_obstacle_interval_ms", spawn.min_obstacle_interval_ms),
            ("spawn.coin_interval_ms", spawn.coin_interval_ms),
            ("session.countdown_ms", self.session.countdown_ms),
            ("session.max_tick_ms", self.session.max_tick_ms),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if not 0.0 <= spawn.double_coin_chance <= 1.0:
            raise ValueError("spawn.double_coin_chance must be within [0, 1]")

    def with_overrides(self, **kwargs) -> "Settings":
        return replace(self, **kwargs)
