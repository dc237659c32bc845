"""Player, obstacle and coin handles with their collision volumes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .geometry import Box3, Vec3
from .scene import PlacedObject

# Half extents of each mesh's world bounding box.
# Player: 2x1x4 body plus wheels reaching 1.4 sideways and 0.8 below the origin.
PLAYER_HALF_EXTENTS = (1.4, 0.65, 2.0)
PLAYER_BOX_OFFSET = (0.0, -0.15, 0.0)
OBSTACLE_HALF_EXTENTS = (1.25, 1.5, 1.25)
COIN_HALF_EXTENTS = (0.5, 0.5, 0.05)


@dataclass(eq=False)
class Player(PlacedObject):
    kind: str = "player"
    current_lane: int = 1
    is_changing_lane: bool = False

    def box(self) -> Box3:
        return Box3.around(self.position, PLAYER_HALF_EXTENTS, PLAYER_BOX_OFFSET)


@dataclass(eq=False)
class Obstacle(PlacedObject):
    kind: str = "obstacle"
    lane: int = 0

    def box(self) -> Box3:
        return Box3.around(self.position, OBSTACLE_HALF_EXTENTS)


@dataclass(eq=False)
class Coin(PlacedObject):
    kind: str = "coin"
    lane: int = 0
    rotation: Vec3 = field(default_factory=lambda: Vec3(x=math.pi / 2))

    def box(self) -> Box3:
        return Box3.around(self.position, COIN_HALF_EXTENTS)
