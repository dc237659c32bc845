#!/usr/bin/env python3
from __future__ import annotations
"""
Lane Runner — pygame window that drives a GameSession once per frame.

Requirements:
    pip install pygame
"""

import sys

import pygame

from lanerunner.config.schema import Settings
from lanerunner.engine.scores import JsonFileStore
from lanerunner.engine.session import GameSession
from lanerunner.ui.play.render import HEIGHT, WIDTH, draw_hud, draw_world

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
RESTART_KEYS = (pygame.K_r, pygame.K_RETURN)


def key_to_direction(key) -> int:
    if key in LEFT_KEYS:
        return -1
    if key in RIGHT_KEYS:
        return 1
    return 0


def run(settings: Settings, seed: int | None = None) -> None:
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("LANE RUNNER")
    clock = pygame.time.Clock()

    try:
        fonts = (
            pygame.font.SysFont("Courier New", 18, bold=True),
            pygame.font.SysFont("Courier New", 52, bold=True),
            pygame.font.SysFont("Courier New", 17),
        )
    except Exception:
        fonts = (pygame.font.SysFont(None, 18), pygame.font.SysFont(None, 52), pygame.font.SysFont(None, 17))

    store = JsonFileStore(settings.paths.high_scores)
    session = GameSession(settings, store=store, now=float(pygame.time.get_ticks()), seed=seed)
    best = session.get_high_score()
    print(f"[play] Best so far: {best.distance}m / {best.coins} coins", flush=True)

    pygame.key.set_repeat(0, 0)
    was_over = False

    while True:
        clock.tick(settings.session.fps)
        now = float(pygame.time.get_ticks())

        # ── Events ──────────────────────
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    pygame.quit(); sys.exit()
                if session.is_game_over():
                    if event.key in RESTART_KEYS:
                        session.restart(now)
                        print("[play] Restart", flush=True)
                elif key_to_direction(event.key):
                    session.request_lane_change(key_to_direction(event.key), now)

        # ── Update ──────────────────────
        session.tick(now)
        if session.is_game_over() and not was_over:
            print(f"[play] Game over at {session.get_distance()}m with {session.get_coin_count()} coins",
                  flush=True)
        was_over = session.is_game_over()

        # ── Draw ────────────────────────
        draw_world(screen, session)
        draw_hud(screen, session, fonts)
        pygame.display.flip()


if __name__ == "__main__":
    from lanerunner.config.loader import load_settings

    run(load_settings())
