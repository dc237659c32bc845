from .session import GameSession, Phase, countdown_seconds
from .scene import PlacedObject, Scene, SceneGraph
from .scores import HighScore, JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    'GameSession', 'Phase', 'countdown_seconds',
    'PlacedObject', 'Scene', 'SceneGraph',
    'HighScore', 'JsonFileStore', 'KeyValueStore', 'MemoryStore',
]
