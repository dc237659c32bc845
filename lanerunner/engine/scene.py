"""Abstract placed-object handles shared with the rendering collaborator.

The engine only creates, moves and adds/removes these handles. A renderer
reads them; the engine never reads anything back except the player's own
position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Protocol

from .geometry import Vec3


@dataclass(eq=False)
class PlacedObject:
    kind: str
    position: Vec3 = field(default_factory=Vec3)
    rotation: Vec3 = field(default_factory=Vec3)


class Scene(Protocol):
    def add(self, obj: PlacedObject) -> None: ...
    def remove(self, obj: PlacedObject) -> None: ...


class SceneGraph:
    """In-memory scene: keeps the set of live handles in insertion order."""

    def __init__(self):
        self._objects: dict[int, PlacedObject] = {}

    def add(self, obj: PlacedObject) -> None:
        self._objects[id(obj)] = obj

    def remove(self, obj: PlacedObject) -> None:
        self._objects.pop(id(obj), None)

    def __contains__(self, obj: PlacedObject) -> bool:
        return id(obj) in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[PlacedObject]:
        return iter(list(self._objects.values()))

    def of_kind(self, kind: str) -> list[PlacedObject]:
        return [o for o in self._objects.values() if o.kind == kind]
