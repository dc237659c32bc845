from __future__ import annotations

from typing import Callable

from .entities import Obstacle, Player
from .spawner import EntitySpawner
from .state import RunState


class CollisionDetector:
    """AABB overlap tests of the player against live obstacles and coins."""

    def __init__(self, state: RunState, player: Player, spawner: EntitySpawner,
                 on_obstacle_hit: Callable[[Obstacle], None]):
        self.state = state
        self.player = player
        self.spawner = spawner
        self.on_obstacle_hit = on_obstacle_hit

    def check_obstacle_collisions(self) -> bool:
        if self.state.is_game_over:
            return False
        player_box = self.player.box()
        for obstacle in self.spawner.obstacles:
            if player_box.intersects(obstacle.box()):
                self.on_obstacle_hit(obstacle)
                return True
        return False

    def check_coin_collisions(self) -> int:
        """Collect every overlapping coin; returns how many were collected."""
        if self.state.is_game_over:
            return 0
        self.spawner.retire_passed_coins()
        player_box = self.player.box()
        hits = [coin for coin in self.spawner.coins if player_box.intersects(coin.box())]
        for coin in hits:
            self.spawner.collect(coin)
            self.state.coin_count += 1
        return len(hits)
