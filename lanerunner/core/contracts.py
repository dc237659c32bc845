from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HudSnapshot:
    distance: int
    coins: int
    best_distance: int
    best_coins: int
    countdown: int | None
    game_over: bool
    speed: float
    lane: int

    @property
    def countdown_visible(self) -> bool:
        return self.countdown is not None

    @property
    def game_over_panel_visible(self) -> bool:
        return self.game_over

    def lines(self) -> list[str]:
        return [
            f"Distance: {self.distance}m",
            f"Coins: {self.coins}",
            f"Best Distance: {self.best_distance}m",
            f"Most Coins: {self.best_coins}",
        ]

    def final_tally(self) -> list[str]:
        return [
            f"Distance: {self.distance}m",
            f"Coins Collected: {self.coins}",
            f"Best Distance: {self.best_distance}m",
            f"Most Coins: {self.best_coins}",
        ]


@dataclass(frozen=True)
class SimSummary:
    n_sims: int
    avg_distance: float
    std_distance: float
    min_distance: int
    max_distance: int
    avg_coins: float
    std_coins: float
    avg_ticks: float
    runs: list[dict[str, Any]] = field(default_factory=list)
