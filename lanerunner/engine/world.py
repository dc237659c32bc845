"""Infinite road: a fixed ring of segments recycled ahead of the player."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from lanerunner.config.schema import LaneSettings, RoadSettings

from .entities import Player
from .geometry import Vec3
from .scene import PlacedObject, Scene
from .state import RunState

MARKING_Y = 0.01


@dataclass(eq=False)
class LaneMarking(PlacedObject):
    kind: str = "marking"
    length: float = 0.0
    dashed: bool = False


@dataclass(eq=False)
class RoadSegment(PlacedObject):
    kind: str = "road"
    markings: list[LaneMarking] = field(default_factory=list)

    def translate_z(self, delta: float) -> None:
        self.position.z += delta
        for marking in self.markings:
            marking.position.z += delta


def _flat_rotation() -> Vec3:
    return Vec3(x=-math.pi / 2)


class WorldScroller:
    def __init__(self, road: RoadSettings, lanes: LaneSettings, scene: Scene,
                 state: RunState, player: Player):
        self.road = road
        self.lanes = lanes
        self.scene = scene
        self.state = state
        self.player = player
        self.segments: list[RoadSegment] = []
        for i in range(road.segment_count):
            segment = RoadSegment(position=Vec3(0.0, 0.0, self._home_z(i)), rotation=_flat_rotation())
            segment.markings = self._build_markings(segment.position.z)
            scene.add(segment)
            for marking in segment.markings:
                scene.add(marking)
            self.segments.append(segment)

    def _home_z(self, index: int) -> float:
        return -(index * self.road.segment_length)

    def _build_markings(self, road_z: float) -> list[LaneMarking]:
        positions = self.lanes.positions
        half_lane = self.lanes.width / 2
        length = self.road.segment_length
        markings = [
            # Solid outer edges.
            LaneMarking(position=Vec3(positions[0] - half_lane, MARKING_Y, road_z),
                        rotation=_flat_rotation(), length=length),
            LaneMarking(position=Vec3(positions[-1] + half_lane, MARKING_Y, road_z),
                        rotation=_flat_rotation(), length=length),
        ]
        pitch = self.road.dash_length + self.road.dash_gap
        n_dashes = math.floor(length / pitch)
        for left, right in zip(positions, positions[1:]):
            x = (left + right) / 2
            for i in range(n_dashes):
                z = road_z + i * pitch - length / 2
                markings.append(LaneMarking(position=Vec3(x, MARKING_Y, z), rotation=_flat_rotation(),
                                            length=self.road.dash_length, dashed=True))
        return markings

    def advance(self, delta_distance: float) -> None:
        """Accumulate run distance and recycle segments left behind the player."""
        self.state.total_distance += delta_distance
        length = self.road.segment_length
        for segment in self.segments:
            if segment.position.z > self.player.position.z + length:
                front_z = min(s.position.z for s in self.segments)
                segment.translate_z((front_z - length) - segment.position.z)

    def coverage(self) -> tuple[float, float]:
        """(min_z, max_z) span of road currently laid down."""
        half = self.road.segment_length / 2
        zs = [s.position.z for s in self.segments]
        return min(zs) - half, max(zs) + half

    def reset(self) -> None:
        """Move every segment (and its markings) back to its starting slot."""
        for i, segment in enumerate(self.segments):
            segment.translate_z(self._home_z(i) - segment.position.z)
