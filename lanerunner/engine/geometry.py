"""Minimal 3D vector and axis-aligned bounding box math."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def set(self, x: float, y: float, z: float) -> "Vec3":
        self.x, self.y, self.z = float(x), float(y), float(z)
        return self

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Box3:
    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    @classmethod
    def around(cls, center: Vec3, half_extents: tuple[float, float, float],
               offset: tuple[float, float, float] = (0.0, 0.0, 0.0)) -> "Box3":
        """Box of the given half extents centred on ``center + offset``."""
        cx, cy, cz = center.x + offset[0], center.y + offset[1], center.z + offset[2]
        hx, hy, hz = half_extents
        return cls(cx - hx, cy - hy, cz - hz, cx + hx, cy + hy, cz + hz)

    def intersects(self, other: "Box3") -> bool:
        # Touching faces count as an overlap.
        return not (
            other.max_x < self.min_x or other.min_x > self.max_x
            or other.max_y < self.min_y or other.min_y > self.max_y
            or other.max_z < self.min_z or other.min_z > self.max_z
        )
