from __future__ import annotations

"""Top-down pygame rendering of the session's placed objects."""

import pygame

from lanerunner.engine.session import GameSession

WIDTH, HEIGHT = 480, 720

# World → screen scale (pixels per world unit)
X_SCALE = 22.0
Z_SCALE = 5.0
PLAYER_SCREEN_Y = HEIGHT - 120

C_BG = (10, 10, 16)
C_ROAD = (20, 20, 30)
C_KERB = (28, 28, 40)
C_STRIPE = (45, 45, 65)
C_EDGE = (55, 55, 80)
C_WHITE = (255, 255, 255)
C_DIM = (160, 160, 180)
C_PLAYER = (0, 215, 255)
C_OBS = (255, 65, 85)
C_COIN = (255, 215, 0)


def to_screen(session: GameSession, x: float, z: float) -> tuple[int, int]:
    """Project world (x, z) so the player sits at a fixed screen row."""
    sx = WIDTH / 2 + x * X_SCALE
    sy = PLAYER_SCREEN_Y + (z - session.player.position.z) * Z_SCALE
    return int(sx), int(sy)


def draw_box(surf, cx, cy, w, h, color, glow=True):
    rx, ry = cx - w // 2, cy - h // 2
    if glow:
        gs = 14
        halo = pygame.Surface((w + gs * 2, h + gs * 2), pygame.SRCALPHA)
        pygame.draw.rect(halo, (*color, 40), (gs, gs, w, h), border_radius=8)
        surf.blit(halo, (rx - gs, ry - gs))
    pygame.draw.rect(surf, color, (rx, ry, w, h), border_radius=6)


def draw_world(screen, session: GameSession) -> None:
    screen.fill(C_BG)
    road = session.settings.road
    half_w = int(road.width / 2 * X_SCALE)
    left, right = WIDTH // 2 - half_w, WIDTH // 2 + half_w
    pygame.draw.rect(screen, C_KERB, (0, 0, left, HEIGHT))
    pygame.draw.rect(screen, C_KERB, (right, 0, WIDTH - right, HEIGHT))

    for segment in session.world.segments:
        _, top = to_screen(session, 0.0, segment.position.z - road.segment_length / 2)
        _, bottom = to_screen(session, 0.0, segment.position.z + road.segment_length / 2)
        if bottom < 0 or top > HEIGHT:
            continue
        pygame.draw.rect(screen, C_ROAD, (left, max(top, 0), right - left, min(bottom, HEIGHT) - max(top, 0)))
        for marking in segment.markings:
            x, y = to_screen(session, marking.position.x, marking.position.z)
            half = int(marking.length / 2 * Z_SCALE)
            if y + half < 0 or y - half > HEIGHT:
                continue
            color = C_STRIPE if marking.dashed else C_EDGE
            pygame.draw.line(screen, color, (x, max(y - half, 0)), (x, min(y + half, HEIGHT)), 3)

    for coin in session.spawner.coins:
        x, y = to_screen(session, coin.position.x, coin.position.z)
        pygame.draw.circle(screen, C_COIN, (x, y), int(0.5 * X_SCALE))

    for obstacle in session.spawner.obstacles:
        x, y = to_screen(session, obstacle.position.x, obstacle.position.z)
        draw_box(screen, x, y, int(2.5 * X_SCALE), int(2.5 * Z_SCALE * 2), C_OBS)

    x, y = to_screen(session, session.player.position.x, session.player.position.z)
    draw_box(screen, x, y, int(2.8 * X_SCALE), int(4 * Z_SCALE * 2), C_PLAYER)


def draw_hud(screen, session: GameSession, fonts) -> None:
    font_hud, font_big, font_sub = fonts
    snap = session.snapshot()

    for i, line in enumerate(snap.lines()):
        txt = font_hud.render(line, True, C_WHITE)
        screen.blit(txt, (16, 14 + i * 22))

    if snap.countdown_visible:
        t = font_big.render(str(snap.countdown), True, C_WHITE)
        screen.blit(t, (WIDTH // 2 - t.get_width() // 2, HEIGHT // 2 - t.get_height() // 2))

    if snap.game_over_panel_visible:
        dim = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        dim.fill((0, 0, 0, 160))
        screen.blit(dim, (0, 0))
        t = font_big.render("GAME OVER", True, C_PLAYER)
        screen.blit(t, (WIDTH // 2 - t.get_width() // 2, HEIGHT // 2 - 130))
        for i, line in enumerate(snap.final_tally()):
            txt = font_hud.render(line, True, C_WHITE)
            screen.blit(txt, (WIDTH // 2 - txt.get_width() // 2, HEIGHT // 2 - 40 + i * 26))
        hint = font_sub.render("press R or Enter to restart", True, C_DIM)
        screen.blit(hint, (WIDTH // 2 - hint.get_width() // 2, HEIGHT // 2 + 80))
