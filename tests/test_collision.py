"""Tests for lanerunner.engine.collision — obstacle and coin overlap passes."""

import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanerunner.config.defaults import default_settings
from lanerunner.engine.collision import CollisionDetector
from lanerunner.engine.entities import Player
from lanerunner.engine.geometry import Box3, Vec3
from lanerunner.engine.lanes import LaneModel
from lanerunner.engine.scene import SceneGraph
from lanerunner.engine.spawner import EntitySpawner
from lanerunner.engine.state import RunState


def make_detector():
    settings = default_settings()
    scene = SceneGraph()
    state = RunState.initial(settings, 0.0)
    player = Player(position=Vec3(0.0, 0.5, -40.0), current_lane=1)
    lanes = LaneModel(settings.lanes, player)
    spawner = EntitySpawner(settings.spawn, lanes, scene, state, player, random.Random(0))
    hits = []
    detector = CollisionDetector(state, player, spawner, hits.append)
    return detector, spawner, state, player, scene, hits


class TestBox3:
    def test_touching_counts(self):
        a = Box3(0, 0, 0, 1, 1, 1)
        assert a.intersects(Box3(1, 0, 0, 2, 1, 1))
        assert not a.intersects(Box3(1.01, 0, 0, 2, 1, 1))

    def test_around_with_offset(self):
        box = Box3.around(Vec3(1.0, 1.0, 1.0), (0.5, 0.5, 0.5), (0.0, -1.0, 0.0))
        assert (box.min_y, box.max_y) == (-0.5, 0.5)


class TestObstacleCollisions:
    def test_empty_list(self):
        detector, _, state, _, _, hits = make_detector()
        assert detector.check_obstacle_collisions() is False
        assert hits == []

    def test_overlap_triggers_once(self):
        """Only the first overlapping obstacle is acted upon."""
        detector, spawner, _, player, _, hits = make_detector()
        first = spawner.place_obstacle(1, player.position.z)
        spawner.place_obstacle(1, player.position.z - 1.0)
        assert detector.check_obstacle_collisions() is True
        assert hits == [first]

    def test_adjacent_lane_and_ahead_miss(self):
        detector, spawner, _, player, _, hits = make_detector()
        spawner.place_obstacle(0, player.position.z)
        spawner.place_obstacle(2, player.position.z)
        spawner.place_obstacle(1, player.position.z - 10.0)
        assert detector.check_obstacle_collisions() is False
        assert hits == []

    def test_no_op_when_over(self):
        detector, spawner, state, player, _, hits = make_detector()
        spawner.place_obstacle(1, player.position.z)
        state.is_game_over = True
        assert detector.check_obstacle_collisions() is False
        assert hits == []


class TestCoinCollisions:
    def test_empty_list(self):
        detector, _, state, _, _, _ = make_detector()
        assert detector.check_coin_collisions() == 0
        assert state.coin_count == 0

    def test_collects_all_overlapping(self):
        """Every overlapping coin is collected in the same pass."""
        detector, spawner, state, player, scene, _ = make_detector()
        a = spawner.place_coin(1, player.position.z)
        b = spawner.place_coin(1, player.position.z + 1.5)
        far = spawner.place_coin(1, player.position.z - 30.0)
        assert detector.check_coin_collisions() == 2
        assert state.coin_count == 2
        assert spawner.coins == [far]
        assert a not in scene and b not in scene

    def test_passed_coins_retired_uncounted(self):
        detector, spawner, state, player, _, _ = make_detector()
        spawner.place_coin(1, player.position.z + 25.0)
        assert detector.check_coin_collisions() == 0
        assert spawner.coins == []
        assert state.coin_count == 0

    def test_player_in_adjacent_lane_misses(self):
        detector, spawner, state, player, _, _ = make_detector()
        spawner.place_coin(0, player.position.z)
        assert detector.check_coin_collisions() == 0
        assert state.coin_count == 0
