#!/usr/bin/env python3
"""Headless session driver — plays one run with a lane policy, records frames."""

from __future__ import annotations

from typing import Any, Protocol

from lanerunner.config.schema import Settings
from lanerunner.engine.session import GameSession

# Safety limit: stop if a run exceeds this many ticks (~3 minutes at 60fps)
MAX_TICKS = 12_000

# Obstacles further ahead than this count as "clear" (distance 1.0).
LOOKAHEAD = 100.0


class LanePolicy(Protocol):
    def decide(self, session: GameSession) -> int: ...


def nearest_obstacles(session: GameSession, lookahead: float = LOOKAHEAD) -> list[float]:
    """Return normalized distance to the nearest obstacle ahead in each lane. 1.0 = clear."""
    distances = [1.0] * session.settings.lanes.count
    pz = session.player.position.z
    for o in session.spawner.obstacles:
        ahead = pz - o.position.z
        if 0 <= ahead < lookahead:
            norm = ahead / lookahead
            if norm < distances[o.lane]:
                distances[o.lane] = norm
    return distances


class StayPolicy:
    def decide(self, session: GameSession) -> int:
        return 0


class LaneAutopilot:
    """Steers toward the lane whose nearest obstacle is farthest away.

    A hold counter prevents jittery lane changes: a new direction has to be
    wanted ``min_hold`` decisions in a row, unless danger is imminent.
    """

    def __init__(self, min_hold=2, panic_distance=0.25):
        self.current_action = 0
        self.hold_counter = 0
        self.min_hold = min_hold
        self.panic_distance = panic_distance

    def _raw(self, session, nearest):
        lane = session.player.current_lane
        best = max(range(len(nearest)), key=lambda i: (nearest[i], i == lane))
        if best == lane:
            return 0
        return 1 if best > lane else -1

    def decide(self, session: GameSession) -> int:
        nearest = nearest_obstacles(session)
        raw = self._raw(session, nearest)

        # Emergency override: own lane about to be hit
        if nearest[session.player.current_lane] < self.panic_distance:
            self.current_action = raw
            self.hold_counter = 0
            return raw

        if raw != self.current_action:
            self.hold_counter += 1
            if self.hold_counter >= self.min_hold:
                self.current_action = raw
                self.hold_counter = 0
                return raw
            return 0
        self.hold_counter = 0
        return raw


def simulate(seed=0, policy: LanePolicy | None = None, settings: Settings | None = None,
             *, max_ticks=MAX_TICKS, decisions_per_second=8, record_every=2) -> dict[str, Any]:
    """
    Run one headless session from countdown to game over.

    Args:
        seed: random seed for deterministic replay
        policy: object with ``decide(session) -> -1 | 0 | 1``; stays put when None
        settings: game settings (defaults when None)

    Returns:
        dict: {
            'seed': int,
            'ticks': int (ticks simulated),
            'distance': int, 'coins': int,
            'game_over': bool,
            'frames': list of GameSession.encode() dicts plus 'decision'
        }
    """
    policy = policy or StayPolicy()
    session = GameSession(settings, seed=seed, now=0.0)
    fps = session.settings.session.fps
    frame_ms = 1000.0 / fps
    decision_interval = max(1, fps // decisions_per_second)

    frames = []
    tick = 0
    decision = 0
    while not session.is_game_over() and tick < max_ticks:
        now = tick * frame_ms
        if tick % decision_interval == 0:
            decision = policy.decide(session)
            if decision:
                session.request_lane_change(decision, now)
        session.tick(now)

        if tick % record_every == 0:
            frame = session.encode()
            frame["decision"] = decision
            frame["tick"] = tick
            frames.append(frame)
        tick += 1

    if frames and frames[-1]["tick"] != tick - 1:
        final = session.encode()
        final["decision"] = decision
        final["tick"] = tick - 1
        frames.append(final)

    return {
        "seed": seed,
        "ticks": tick,
        "distance": session.get_distance(),
        "coins": session.get_coin_count(),
        "game_over": session.is_game_over(),
        "frames": frames,
    }


if __name__ == "__main__":
    result = simulate(seed=42, policy=LaneAutopilot())
    print(f"Ticks: {result['ticks']} ({result['ticks'] / 60:.1f} sec)")
    print(f"Distance: {result['distance']}m, coins: {result['coins']}")
