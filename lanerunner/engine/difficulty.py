from __future__ import annotations

from lanerunner.config.schema import SpawnSettings, SpeedSettings

from .state import RunState


class DifficultyController:
    """Steps speed up (and the obstacle interval down) on a fixed cadence."""

    def __init__(self, speed: SpeedSettings, spawn: SpawnSettings, state: RunState):
        self.speed = speed
        self.spawn = spawn
        self.state = state

    def tick(self, now: float) -> bool:
        """Returns True when this call raised the speed."""
        state = self.state
        if now - state.last_speed_increase < self.speed.increase_interval_ms:
            return False
        raised = False
        if state.speed < self.speed.maximum:
            state.speed = min(state.speed + self.speed.increment, self.speed.maximum)
            state.obstacle_spawn_interval = max(
                self.spawn.min_obstacle_interval_ms,
                state.obstacle_spawn_interval - self.spawn.obstacle_interval_step_ms,
            )
            raised = True
        # Cadence stays fixed after the cap is reached.
        state.last_speed_increase = now
        return raised
