"""Run totals and best-ever scores persisted through a key-value store."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Protocol

from .state import RunState


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStore:
    """String values kept in one flat JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)


@dataclass
class HighScore:
    distance: int = 0
    coins: int = 0

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str | None) -> "HighScore":
        """Parse a stored record; anything missing or malformed reads as zero."""
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
            distance, coins = int(data["distance"]), int(data["coins"])
        except (ValueError, TypeError, KeyError, OverflowError):
            return cls()
        if distance < 0 or coins < 0:
            return cls()
        return cls(distance=distance, coins=coins)


class ScoreTracker:
    def __init__(self, store: KeyValueStore, key: str, state: RunState):
        self.store = store
        self.key = key
        self.state = state
        self.high_score = HighScore.from_json(store.get(key))

    @property
    def distance(self) -> int:
        return math.floor(self.state.total_distance)

    @property
    def coins(self) -> int:
        return self.state.coin_count

    def update(self) -> HighScore:
        """Fold the current run into the best-ever record and write it back."""
        best = self.high_score
        best.distance = max(best.distance, self.distance)
        best.coins = max(best.coins, self.coins)
        self.store.set(self.key, best.to_json())
        return HighScore(best.distance, best.coins)
