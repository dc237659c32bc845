from __future__ import annotations

from dataclasses import dataclass

from lanerunner.config.schema import Settings


@dataclass
class RunState:
    """Mutable per-run counters and timestamps (milliseconds)."""

    speed: float
    obstacle_spawn_interval: float
    total_distance: float = 0.0
    coin_count: int = 0
    last_speed_increase: float = 0.0
    last_obstacle_spawn: float = 0.0
    last_coin_spawn: float = 0.0
    game_start_time: float = 0.0
    last_tick: float = 0.0
    is_game_started: bool = False
    is_game_over: bool = False

    @classmethod
    def initial(cls, settings: Settings, now: float) -> "RunState":
        return cls(
            speed=settings.speed.initial,
            obstacle_spawn_interval=settings.spawn.initial_obstacle_interval_ms,
            last_speed_increase=now,
            last_obstacle_spawn=now,
            last_coin_spawn=now,
            game_start_time=now,
            last_tick=now,
        )

    def reset(self, settings: Settings, now: float) -> None:
        """Return every field to its initial value in place."""
        fresh = RunState.initial(settings, now)
        self.__dict__.update(fresh.__dict__)
