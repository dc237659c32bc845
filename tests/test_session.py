"""Tests for lanerunner.engine.session — countdown, run loop, game over, restart."""

import json
import sys
from dataclasses import replace
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanerunner.config.defaults import HIGH_SCORE_KEY, MAX_SPEED, default_settings
from lanerunner.engine.scores import HighScore, MemoryStore
from lanerunner.engine.session import GameSession, Phase, countdown_seconds


def quiet_settings():
    """Defaults with spawning pushed out of reach, so tests place entities by hand."""
    settings = default_settings()
    spawn = replace(
        settings.spawn,
        initial_obstacle_interval_ms=1e9,
        min_obstacle_interval_ms=1e9,
        coin_interval_ms=1e9,
    )
    return settings.with_overrides(spawn=spawn)


def run_ticks(session, start, end, step=10):
    now = start
    while now <= end:
        session.tick(float(now))
        now += step
    return float(end)


class TestCountdown:
    def test_countdown_seconds(self):
        assert countdown_seconds(0, 0, 5000) == 5
        assert countdown_seconds(1, 0, 5000) == 5
        assert countdown_seconds(1000, 0, 5000) == 4
        assert countdown_seconds(4001, 0, 5000) == 1
        assert countdown_seconds(5000, 0, 5000) == 0

    def test_initial_state(self):
        session = GameSession(seed=0)
        assert session.phase is Phase.COUNTDOWN
        assert session.get_countdown_seconds_remaining() == 5
        assert session.get_distance() == 0
        assert session.get_coin_count() == 0
        assert session.is_game_over() is False

    def test_starts_after_delay(self):
        """After 5000ms of ticks the run starts and the countdown is hidden."""
        session = GameSession(seed=0)
        run_ticks(session, 10, 4990)
        assert session.get_countdown_seconds_remaining() == 1
        assert session.state.is_game_started is False
        session.tick(5000.0)
        assert session.state.is_game_started is True
        assert session.get_countdown_seconds_remaining() is None
        assert session.phase is Phase.RUNNING

    def test_car_rolls_during_countdown(self):
        """Forward motion runs during the countdown; spawning does not."""
        session = GameSession(seed=0)
        run_ticks(session, 10, 4000)
        assert session.state.total_distance == pytest.approx(15 * 4.0)
        assert session.player.position.z == pytest.approx(-60.0)
        assert session.spawner.obstacles == [] and session.spawner.coins == []


class TestTick:
    def test_dt_is_clamped(self):
        session = GameSession(seed=0)
        session.tick(1000.0)
        assert session.state.total_distance == pytest.approx(15 * 0.1)

    def test_lane_change_through_session(self):
        session = GameSession(seed=0)
        assert session.request_lane_change(1) is True
        session.tick(50.0)
        assert session.player.position.x == pytest.approx(3.0)
        session.tick(100.0)
        assert session.player.current_lane == 2
        assert session.player.position.x == 4.0

    def test_retired_next_tick(self):
        """Entities behind the trailing margin are gone after the next tick."""
        session = GameSession(quiet_settings(), seed=0)
        now = run_ticks(session, 10, 5000)
        pz = session.player.position.z
        session.spawner.place_obstacle(0, pz + 25.0)
        session.spawner.place_coin(2, pz + 21.0)
        session.tick(now + 10)
        assert session.spawner.obstacles == []
        assert session.spawner.coins == []

    def test_natural_run_invariants(self):
        """Free-running session keeps lanes, speed and retirement in bounds."""
        session = GameSession(seed=5)
        now, prev_speed = 0.0, session.state.speed
        while now < 60_000 and not session.is_game_over():
            now += 16.0
            if int(now) % 480 == 0:
                session.request_lane_change(1 if int(now) % 960 else -1)
            session.tick(now)
            pz = session.player.position.z
            assert session.player.current_lane in (0, 1, 2)
            assert prev_speed <= session.state.speed <= MAX_SPEED
            assert all(o.position.z <= pz + 20 for o in session.spawner.obstacles)
            assert all(c.position.z <= pz + 20 for c in session.spawner.coins)
            prev_speed = session.state.speed
        assert session.state.is_game_started


class TestScenario:
    def test_coin_then_obstacle(self):
        """A coin in the path is collected; an obstacle in the path ends the run."""
        store = MemoryStore()
        session = GameSession(quiet_settings(), store=store, seed=1)
        now = run_ticks(session, 10, 5000)
        assert session.state.is_game_started

        lane, pz = session.player.current_lane, session.player.position.z
        session.spawner.place_coin(lane, pz - 30.0)
        session.spawner.place_obstacle(lane, pz - 90.0)

        frozen = collected_at = ended_at = None
        while now < 12000:
            now += 10
            session.tick(now)
            if collected_at is None and session.get_coin_count() == 1:
                collected_at = now
            if ended_at is None and session.is_game_over():
                ended_at = now
                frozen = (session.state.total_distance, session.player.position.z)

        assert collected_at is not None and ended_at is not None
        assert collected_at < ended_at
        assert session.is_game_over() is True
        assert session.phase is Phase.GAME_OVER
        assert session.get_coin_count() == 1
        assert frozen == (session.state.total_distance, session.player.position.z)
        best = session.get_high_score()
        assert best == HighScore(session.get_distance(), 1)
        assert json.loads(store.get(HIGH_SCORE_KEY)) == {"distance": best.distance, "coins": 1}

    def test_game_over_freezes_world(self):
        session = GameSession(quiet_settings(), seed=2)
        now = run_ticks(session, 10, 5000)
        session.spawner.place_obstacle(session.player.current_lane, session.player.position.z)
        session.tick(now + 10)
        assert session.is_game_over()
        obstacle_z = [o.position.z for o in session.spawner.obstacles]
        speed = session.state.speed
        run_ticks(session, now + 20, now + 20_000, step=50)
        assert [o.position.z for o in session.spawner.obstacles] == obstacle_z
        assert session.state.speed == speed
        assert session.request_lane_change(1) is False

    def test_camera_follows_player(self):
        session = GameSession(seed=0)
        session.tick(100.0)
        x, y, z = session.camera_position()
        assert (x, y) == (0.0, 5.5)
        assert z == pytest.approx(session.player.position.z + 8)


class TestLongFrames:
    """A stalled frame is clamped and integrated in frame-sized steps."""

    def started_at_top_speed(self):
        session = GameSession(quiet_settings(), seed=4)
        now = run_ticks(session, 10, 5000)
        session.state.speed = MAX_SPEED
        return session, now

    def test_coin_not_skipped_by_slow_frame(self):
        session, now = self.started_at_top_speed()
        session.spawner.place_coin(session.player.current_lane, session.player.position.z - 6.0)
        session.tick(now + 100)
        assert session.get_coin_count() == 1
        assert session.spawner.coins == []

    def test_obstacle_not_skipped_by_slow_frame(self):
        session, now = self.started_at_top_speed()
        pz = session.player.position.z
        session.spawner.place_obstacle(session.player.current_lane, pz - 5.0)
        session.tick(now + 100)
        assert session.is_game_over()
        # Motion stops at the step that made contact.
        assert session.player.position.z == pytest.approx(pz - 2 * MAX_SPEED * 0.1 / 6)


class TestRestart:
    def test_restart_round_trip(self):
        """restart() resets the run but keeps the best-ever scores."""
        store = MemoryStore({HIGH_SCORE_KEY: '{"distance": 5000, "coins": 0}'})
        session = GameSession(quiet_settings(), store=store, seed=3)
        now = run_ticks(session, 10, 5000)
        lane = session.player.current_lane
        session.spawner.place_coin(lane, session.player.position.z)
        session.spawner.place_coin(lane, session.player.position.z - 200.0)
        session.tick(now + 10)
        session.spawner.place_obstacle(lane, session.player.position.z)
        session.request_lane_change(1)
        session.tick(now + 20)
        assert session.is_game_over()
        before = session.get_high_score()
        assert before == HighScore(5000, 1)

        session.restart(now + 1000)

        assert session.get_coin_count() == 0
        assert session.state.total_distance == 0
        assert session.state.speed == 15
        assert session.state.obstacle_spawn_interval == session.settings.spawn.initial_obstacle_interval_ms
        assert session.player.current_lane == 1
        assert session.player.is_changing_lane is False
        assert session.player.position.as_tuple() == (0.0, 0.5, 0.0)
        assert session.spawner.obstacles == [] and session.spawner.coins == []
        assert session.scene.of_kind("obstacle") == [] and session.scene.of_kind("coin") == []
        assert session.state.is_game_started is False
        assert session.is_game_over() is False
        assert session.get_countdown_seconds_remaining() == 5
        assert session.get_high_score() == before
        assert [s.position.z for s in session.world.segments] == [0.0, -1000.0, -2000.0]

    def test_restart_rearms_countdown(self):
        session = GameSession(seed=4)
        run_ticks(session, 10, 5000)
        session.restart(20_000.0)
        run_ticks(session, 20_010, 24_990)
        assert session.phase is Phase.COUNTDOWN
        session.tick(25_000.0)
        assert session.phase is Phase.RUNNING


class TestPresentation:
    def test_snapshot_lines(self):
        store = MemoryStore({HIGH_SCORE_KEY: '{"distance": 250, "coins": 9}'})
        session = GameSession(store=store, seed=0)
        snap = session.snapshot()
        assert snap.countdown_visible and not snap.game_over_panel_visible
        assert snap.lines() == [
            "Distance: 0m",
            "Coins: 0",
            "Best Distance: 250m",
            "Most Coins: 9",
        ]
        assert snap.final_tally()[1] == "Coins Collected: 0"

    def test_encode(self):
        """encode() returns a dict with the expected keys and types."""
        session = GameSession(seed=0)
        session.tick(16.0)
        encoded = session.encode()
        for key in ("lane", "x", "obs", "coins_live", "distance", "coins", "speed", "alive", "phase"):
            assert key in encoded
        assert isinstance(encoded["lane"], int)
        assert isinstance(encoded["obs"], list)
        assert encoded["alive"] is True
        assert encoded["phase"] == "countdown"
