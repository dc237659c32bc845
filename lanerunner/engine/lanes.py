"""Lane model: lane index ↔ world x, and the timed lane-change tween."""

from __future__ import annotations

from dataclasses import dataclass

from lanerunner.config.schema import LaneSettings

from .entities import Player


def ease_out(progress: float) -> float:
    """Quadratic ease-out on [0, 1]."""
    return progress * (2 - progress)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class LaneTween:
    start_time: float
    start_x: float
    target_x: float
    direction: int

    def progress(self, now: float, duration: float) -> float:
        return min(max((now - self.start_time) / duration, 0.0), 1.0)


class LaneModel:
    def __init__(self, settings: LaneSettings, player: Player):
        self.settings = settings
        self.player = player
        self.tween: LaneTween | None = None

    def lane_to_x(self, lane: int) -> float:
        if not 0 <= lane < self.settings.count:
            raise ValueError(f"lane {lane} outside [0, {self.settings.count - 1}]")
        return self.settings.positions[lane]

    def request_lane_change(self, direction: int, now: float) -> bool:
        """Start a tween one lane left (-1) or right (+1).

        Returns False (and does nothing) while another change is in flight
        or when the move would leave the road. Dropped requests are not queued.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        player = self.player
        new_lane = player.current_lane + direction
        if player.is_changing_lane or not 0 <= new_lane < self.settings.count:
            return False

        player.is_changing_lane = True
        self.tween = LaneTween(
            start_time=now,
            start_x=player.position.x,
            target_x=self.lane_to_x(new_lane),
            direction=direction,
        )
        return True

    def update(self, now: float) -> None:
        """Advance the active tween, if any, to ``now``."""
        tween = self.tween
        if tween is None:
            return
        progress = tween.progress(now, self.settings.change_ms)
        if progress >= 1:
            self.player.position.x = tween.target_x
            self.player.current_lane += tween.direction
            self.player.is_changing_lane = False
            self.tween = None
        else:
            self.player.position.x = lerp(tween.start_x, tween.target_x, ease_out(progress))

    def reset(self) -> None:
        """Drop any in-flight tween and put the player back on the start lane."""
        self.tween = None
        self.player.is_changing_lane = False
        self.player.current_lane = self.settings.start_lane
        self.player.position.x = self.lane_to_x(self.settings.start_lane)
