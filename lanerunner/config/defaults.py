from __future__ import annotations

"""Canonical game constants and the default Settings built from them."""

from pathlib import Path

from .schema import (
    LaneSettings,
    Paths,
    RoadSettings,
    SessionSettings,
    Settings,
    SpawnSettings,
    SpeedSettings,
)

# ─────────────────────────────────────────
# Lanes
# ─────────────────────────────────────────
LANE_COUNT = 3
LANE_WIDTH = 4.0
LANE_POSITIONS = (-4.0, 0.0, 4.0)  # 0: left, 1: center, 2: right
START_LANE = 1
LANE_CHANGE_MS = 100.0

# ─────────────────────────────────────────
# Road
# ─────────────────────────────────────────
ROAD_LENGTH = 1000.0
ROAD_SEGMENTS = 3
ROAD_WIDTH = 16.0
DASH_LENGTH = 3.0
DASH_GAP = 3.0

# ─────────────────────────────────────────
# Speed / difficulty
# ─────────────────────────────────────────
INITIAL_SPEED = 15.0
MAX_SPEED = 50.0
SPEED_INCREMENT = 2.0
SPEED_INCREASE_INTERVAL_MS = 7000.0

# ─────────────────────────────────────────
# Spawning
# ─────────────────────────────────────────
INITIAL_SPAWN_INTERVAL_MS = 3000.0
MIN_SPAWN_INTERVAL_MS = 1500.0
SPAWN_INTERVAL_STEP_MS = 100.0
COIN_SPAWN_INTERVAL_MS = 500.0
SPAWN_DISTANCE = 100.0
CONTENTION_DISTANCE = 100.0
TRAILING_MARGIN = 20.0
DOUBLE_COIN_CHANCE = 0.3
COIN_Z_JITTER = 5.0
OBSTACLE_HEIGHT = 1.5
COIN_HEIGHT = 1.0
COIN_SPIN_PER_TICK = 0.02

# ─────────────────────────────────────────
# Session
# ─────────────────────────────────────────
PLAYER_HEIGHT = 0.5
COUNTDOWN_MS = 5000.0
HIGH_SCORE_KEY = "highScores"
FPS = 60
MAX_TICK_MS = 100.0

HIGH_SCORE_FILENAME = "highscores.json"
RESULTS_FILENAME = "simulation_results.json"


def default_settings(project_dir: Path | None = None) -> Settings:
    project_dir = Path(project_dir) if project_dir is not None else Path(__file__).resolve().parents[2]
    data_dir = project_dir / "data"
    return Settings(
        lanes=LaneSettings(
            positions=LANE_POSITIONS,
            width=LANE_WIDTH,
            start_lane=START_LANE,
            change_ms=LANE_CHANGE_MS,
        ),
        road=RoadSettings(
            segment_length=ROAD_LENGTH,
            segment_count=ROAD_SEGMENTS,
            width=ROAD_WIDTH,
            dash_length=DASH_LENGTH,
            dash_gap=DASH_GAP,
        ),
        speed=SpeedSettings(
            initial=INITIAL_SPEED,
            maximum=MAX_SPEED,
            increment=SPEED_INCREMENT,
            increase_interval_ms=SPEED_INCREASE_INTERVAL_MS,
        ),
        spawn=SpawnSettings(
            initial_obstacle_interval_ms=INITIAL_SPAWN_INTERVAL_MS,
            min_obstacle_interval_ms=MIN_SPAWN_INTERVAL_MS,
            obstacle_interval_step_ms=SPAWN_INTERVAL_STEP_MS,
            coin_interval_ms=COIN_SPAWN_INTERVAL_MS,
            distance=SPAWN_DISTANCE,
            contention_distance=CONTENTION_DISTANCE,
            trailing_margin=TRAILING_MARGIN,
            double_coin_chance=DOUBLE_COIN_CHANCE,
            coin_z_jitter=COIN_Z_JITTER,
            obstacle_height=OBSTACLE_HEIGHT,
            coin_height=COIN_HEIGHT,
            coin_spin_per_tick=COIN_SPIN_PER_TICK,
        ),
        session=SessionSettings(
            countdown_ms=COUNTDOWN_MS,
            player_height=PLAYER_HEIGHT,
            high_score_key=HIGH_SCORE_KEY,
            fps=FPS,
            max_tick_ms=MAX_TICK_MS,
        ),
        paths=Paths(
            project_dir=project_dir,
            data_dir=data_dir,
            high_scores=data_dir / HIGH_SCORE_FILENAME,
            results=data_dir / RESULTS_FILENAME,
        ),
    )
