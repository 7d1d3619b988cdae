# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Optional pygame window that hosts the match loop and draws each frame."""
from typing import Dict, Tuple

try:
    import pygame
except Exception:
    pygame = None

from matchday.engine.match_engine import MatchEngine
from matchday.engine.physics import Pitch, Vector2D
from matchday.models.team import Team

Rect = Tuple[int, int, int, int]

HUD_HEIGHT = 48
BUTTON_LABELS = ("Start", "Pause", "Reset")


def world_to_screen(pos: Vector2D, pitch: Pitch, pitch_rect: Rect) -> Tuple[int, int]:
    """Map a pitch position to screen pixels.

    Parameters
    ----------
    pos : Vector2D
        Position in pitch units (origin top-left).
    pitch : Pitch
        Pitch providing the world dimensions.
    pitch_rect : Rect
        ``(left, top, width, height)`` of the drawn pitch on screen.

    Returns
    -------
    Tuple[int, int]
        Screen coordinates.
    """
    left, top, width, height = pitch_rect
    return int(left + pos.x / pitch.width * width), int(top + pos.y / pitch.height * height)


def layout(screen_size: Tuple[int, int]) -> Dict[str, Rect]:
    """Compute the pitch area and button rectangles for a window size.

    Parameters
    ----------
    screen_size : Tuple[int, int]
        Window width and height in pixels.

    Returns
    -------
    Dict[str, Rect]
        ``"pitch"`` plus one entry per button label, each ``(left, top, width, height)``.
    """
    width, height = screen_size
    margin = 16
    rects: Dict[str, Rect] = {"pitch": (margin, HUD_HEIGHT, width - 2 * margin, height - HUD_HEIGHT - margin)}
    button_w, button_h = 84, 30
    x = width - margin - len(BUTTON_LABELS) * (button_w + 8)
    for label in BUTTON_LABELS:
        rects[label] = (x, 9, button_w, button_h)
        x += button_w + 8
    return rects


def _contains(rect: Rect, point: Tuple[int, int]) -> bool:
    """Return whether ``point`` lies inside ``rect``.

    Parameters
    ----------
    rect : Rect
        ``(left, top, width, height)``.
    point : Tuple[int, int]
        Screen coordinates.

    Returns
    -------
    bool
        ``True`` when the point is inside the rectangle.
    """
    left, top, width, height = rect
    return left <= point[0] < left + width and top <= point[1] < top + height


def handle_click(engine: MatchEngine, rects: Dict[str, Rect], point: Tuple[int, int]) -> None:
    """Apply a mouse click to the match controls.

    Parameters
    ----------
    engine : MatchEngine
        Engine receiving the command.
    rects : Dict[str, Rect]
        Layout returned by :func:`layout`.
    point : Tuple[int, int]
        Click position.
    """
    if _contains(rects["Start"], point):
        engine.start()
    elif _contains(rects["Pause"], point):
        engine.toggle_pause()
    elif _contains(rects["Reset"], point):
        engine.reset()


def start_visualizer(engine: MatchEngine, screen_size: Tuple[int, int] = (880, 580), fps: int = 60) -> bool:
    """Run a pygame window that drives ``engine`` until it is closed.

    Keys: space toggles pause, ``r`` resets, ``+``/``-`` change the number of
    players per team (which resets the match), ``q`` quits.

    Parameters
    ----------
    engine : MatchEngine
        Engine to host; ticked once per frame.
    screen_size : Tuple[int, int], default=(880, 580)
        Initial window size.
    fps : int, default=60
        Frame rate cap.

    Returns
    -------
    bool
        ``False`` when pygame is unavailable, ``True`` after the window closes.
    """
    if pygame is None:
        return False

    pygame.init()
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    pygame.display.set_caption(f"{Team.HOME.label} vs {Team.AWAY.label}")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 24)

    grass = (45, 106, 79)
    line = (255, 255, 255)
    colours = {Team.HOME: (230, 57, 70), Team.AWAY: (67, 97, 238)}
    text = (240, 240, 240)
    pitch = engine.pitch

    running = True
    while running:
        rects = layout(screen_size)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen_size = (event.w, event.h)
                screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                handle_click(engine, rects, event.pos)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_SPACE:
                    engine.toggle_pause()
                elif event.key == pygame.K_r:
                    engine.reset()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    engine.reset(engine.players_per_team + 1)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    engine.reset(engine.players_per_team - 1)

        engine.tick(pygame.time.get_ticks())

        pitch_rect = rects["pitch"]
        left, top, width, height = pitch_rect
        sx = width / pitch.width
        sy = height / pitch.height
        screen.fill((20, 20, 20))
        pygame.draw.rect(screen, grass, pitch_rect)
        pygame.draw.rect(screen, line, pitch_rect, 2)
        pygame.draw.line(screen, line, (left + width // 2, top), (left + width // 2, top + height), 2)
        pygame.draw.circle(screen, line, (left + width // 2, top + height // 2), int(80 * sx), 2)

        box_w, box_h = int(80 * sx), int((pitch.goal_width + 80) * sy)
        goal_w, goal_h = max(3, int(8 * sx)), int(pitch.goal_width * sy)
        box_top = top + (height - box_h) // 2
        goal_top = top + (height - goal_h) // 2
        pygame.draw.rect(screen, line, (left, box_top, box_w, box_h), 2)
        pygame.draw.rect(screen, line, (left + width - box_w, box_top, box_w, box_h), 2)
        pygame.draw.rect(screen, line, (left, goal_top, goal_w, goal_h), 3)
        pygame.draw.rect(screen, line, (left + width - goal_w, goal_top, goal_w, goal_h), 3)

        player_radius = max(3, int(pitch.player_radius * sx))
        in_possession = engine.possessor()
        for player in engine.players:
            pos = world_to_screen(player.position, pitch, pitch_rect)
            pygame.draw.circle(screen, colours[player.team], pos, player_radius)
            if player is in_possession:
                pygame.draw.circle(screen, (255, 221, 0), pos, player_radius + 3, 2)
            else:
                pygame.draw.circle(screen, (200, 200, 200), pos, player_radius, 1)

        ball_pos = world_to_screen(engine.ball.position, pitch, pitch_rect)
        pygame.draw.circle(screen, (255, 255, 255), ball_pos, max(2, int(pitch.ball_radius * sx)))

        home, away = engine.score
        hud = (
            f"{Team.HOME.label} {home} - {away} {Team.AWAY.label}   "
            f"{engine.clock_text}   ({engine.players_per_team} a side)"
        )
        screen.blit(font.render(hud, True, text), (16, 16))
        for label in BUTTON_LABELS:
            caption = "Resume" if label == "Pause" and not engine.is_running and engine.match_time > 0 else label
            pygame.draw.rect(screen, (70, 70, 70), rects[label], border_radius=6)
            surf = font.render(caption, True, text)
            bx, by, bw, bh = rects[label]
            screen.blit(surf, (bx + (bw - surf.get_width()) // 2, by + (bh - surf.get_height()) // 2))

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
    return True
