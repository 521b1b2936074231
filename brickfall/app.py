"""Pygame front end: window, input, drawing and the frame loop."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

import pygame

from brickfall.game import Game
from brickfall.physics import (
    BALL_DIAMETER,
    BRICK_SIZE,
    PADDLE_SIZE,
    PADDLE_Y,
    Vec2,
    WallLocation,
)
from brickfall.stepping import Key, Stepping, cursor_marks, handle_input, hint_text

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FIXED_TIMESTEP = 1.0 / 64.0

BACKGROUND_COLOR = (0.9, 0.9, 0.9)
PADDLE_COLOR = (0.3, 0.3, 0.7)
BALL_COLOR = (1.0, 0.5, 0.5)
BRICK_COLOR = (0.5, 0.5, 1.0)
WALL_COLOR = (0.8, 0.8, 0.8)
TEXT_COLOR = (0.5, 0.5, 1.0)
SCORE_COLOR = (1.0, 0.5, 0.5)
PROMPT_COLOR = (1.0, 0.0, 0.0)
STEPPING_FONT_COLOR = (0.2, 0.2, 0.2)
STEPPING_BACKGROUND = (1.0, 1.0, 1.0, 0.33)

SCOREBOARD_FONT_SIZE = 33
SCOREBOARD_TEXT_PADDING = 5
PROMPT_FONT_SIZE = 500
HINT_FONT_SIZE = 15
STEPPING_FONT_SIZE = 20
STEPPING_PADDING = 10
IMAGE_SIZE = 1000

FIXED_SCHEDULE = "FixedUpdate"
UPDATE_SCHEDULE = "Update"
FIXED_SYSTEMS = (
    "apply_velocity",
    "move_paddle",
    "check_for_collisions",
    "play_collision_sound",
)
UPDATE_SYSTEMS = (
    "update_scoreboard",
    "show_warning_text",
    "handle_hide_window",
    "add_and_overlay_images",
)

_STEPPING_KEYS = {
    pygame.K_SLASH: Key.SLASH,
    pygame.K_BACKQUOTE: Key.BACKQUOTE,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_s: Key.S,
}


def to_screen(x: float, y: float) -> tuple[int, int]:
    """Convert arena coordinates (origin at centre, y up) to window pixels."""
    return round(WINDOW_WIDTH / 2.0 + x), round(WINDOW_HEIGHT / 2.0 - y)


def color_to_rgb(color: Sequence[float]) -> tuple[int, ...]:
    """Convert channels in 0..1 to 0..255 integers, keeping an alpha channel if given."""
    channels = tuple(color)
    if len(channels) not in (3, 4):
        raise ValueError("a colour has three or four channels")
    if any(not 0.0 <= channel <= 1.0 for channel in channels):
        raise ValueError("colour channels must lie between 0 and 1")
    return tuple(round(channel * 255) for channel in channels)


def _rect(center: Vec2, size: Vec2) -> pygame.Rect:
    left, top = to_screen(center.x - size.x / 2.0, center.y + size.y / 2.0)
    return pygame.Rect(left, top, round(size.x), round(size.y))


def _load_sound(path: Path) -> pygame.mixer.Sound | None:
    if not pygame.mixer.get_init():
        return None
    try:
        return pygame.mixer.Sound(str(path))
    except (pygame.error, FileNotFoundError):
        logger.error("could not load sound %s", path)
        return None


def _load_image(path: Path) -> pygame.Surface | None:
    try:
        image = pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError):
        logger.error("could not load image %s", path)
        return None
    return pygame.transform.smoothscale(image.convert_alpha(), (IMAGE_SIZE, IMAGE_SIZE))


class _Frontend:
    """Owns the window and drives one game through frames."""

    def __init__(self, args: argparse.Namespace) -> None:
        self.display_size = (WINDOW_WIDTH, WINDOW_HEIGHT)
        self.display = pygame.display.set_mode(self.display_size)
        pygame.display.set_caption("Breakout")
        self.canvas = pygame.Surface(self.display_size)
        self.game = Game()
        self.stepping: Stepping | None = None
        if args.stepping:
            self.stepping = (
                Stepping()
                .add_schedule(FIXED_SCHEDULE, FIXED_SYSTEMS)
                .add_schedule(UPDATE_SCHEDULE, UPDATE_SYSTEMS)
            )
        self.hint = hint_text(args.stepping)
        logger.info("%s", self.hint)

        self.score_font = pygame.font.Font(None, SCOREBOARD_FONT_SIZE)
        self.prompt_font = pygame.font.Font(None, PROMPT_FONT_SIZE)
        self.hint_font = pygame.font.Font(None, HINT_FONT_SIZE)
        self.stepping_font = pygame.font.Font(None, STEPPING_FONT_SIZE)

        assets = Path(args.assets)
        self.sound = _load_sound(assets / "sounds" / "breakout_collision.ogg")
        image_path = (
            Path(args.image)
            if args.image
            else assets / "not_open_1" / "not_open" / "path.jpg"
        )
        self.image = _load_image(image_path)

        self.score_span = ""
        self.accumulator = 0.0
        self.pending_collision = False

    def _allowed(self, schedule: str, system: str) -> bool:
        return self.stepping is None or self.stepping.should_run(schedule, system)

    def _fixed_step(self, left: bool, right: bool) -> None:
        game = self.game
        if not game.running:
            return
        if self._allowed(FIXED_SCHEDULE, "apply_velocity"):
            game.apply_velocity(FIXED_TIMESTEP)
        if self._allowed(FIXED_SCHEDULE, "move_paddle"):
            game.move_paddle(FIXED_TIMESTEP, left, right)
        if self._allowed(FIXED_SCHEDULE, "check_for_collisions"):
            if game.check_for_collisions():
                self.pending_collision = True
        if self._allowed(FIXED_SCHEDULE, "play_collision_sound") and self.pending_collision:
            self.pending_collision = False
            if self.sound is not None:
                self.sound.play()

    def _update(self, dt: float) -> None:
        game = self.game
        if self._allowed(UPDATE_SCHEDULE, "update_scoreboard"):
            self.score_span = str(game.score)
        if (
            not game.running
            and not game.ended
            and self._allowed(UPDATE_SCHEDULE, "show_warning_text")
        ):
            game.show_warning_text(dt)
        if game.ended and self._allowed(UPDATE_SCHEDULE, "handle_hide_window"):
            game.handle_hide_window(dt)
            self._apply_window_size()
        if game.ended and self._allowed(UPDATE_SCHEDULE, "add_and_overlay_images"):
            game.show_image = True

    def _apply_window_size(self) -> None:
        width, height = self.game.window_size
        size = (max(1, round(width)), max(1, round(height)))
        if size != self.display_size:
            self.display = pygame.display.set_mode(size)
            self.display_size = size

    def frame(self, dt: float, pressed, just_pressed: set[Key]) -> None:
        """Advance the simulation and the stepping controls by one frame."""
        left = bool(pressed[pygame.K_LEFT])
        right = bool(pressed[pygame.K_RIGHT])
        self.accumulator += dt
        while self.accumulator >= FIXED_TIMESTEP:
            self.accumulator -= FIXED_TIMESTEP
            self._fixed_step(left, right)
        self._update(dt)
        if self.stepping is not None:
            self.stepping.advance()
            handle_input(self.stepping, just_pressed)

    def _draw_text(self, font, text: str, color, position: tuple[int, int]) -> pygame.Rect:
        surface = font.render(text, True, color_to_rgb(color))
        return self.canvas.blit(surface, position)

    def _draw_stepping_panel(self) -> None:
        if self.stepping is None or not self.stepping.enabled:
            return
        marks = cursor_marks(self.stepping)
        lines: list[str] = []
        for label in self.stepping.schedules:
            lines.append(label)
            lines.extend(
                f"{mark}{system}" for schedule, system, mark in marks if schedule == label
            )
        rendered = [
            self.stepping_font.render(line, True, color_to_rgb(STEPPING_FONT_COLOR))
            for line in lines
        ]
        width = max((surface.get_width() for surface in rendered), default=0)
        height = sum(surface.get_height() for surface in rendered)
        panel = pygame.Surface(
            (width + 2 * STEPPING_PADDING, height + 2 * STEPPING_PADDING), pygame.SRCALPHA
        )
        panel.fill(color_to_rgb(STEPPING_BACKGROUND))
        y = STEPPING_PADDING
        for surface in rendered:
            panel.blit(surface, (STEPPING_PADDING, y))
            y += surface.get_height()
        self.canvas.blit(panel, (round(WINDOW_WIDTH * 0.35), round(WINDOW_HEIGHT * 0.5)))

    def draw(self) -> None:
        """Render the current state to the window."""
        game = self.game
        canvas = self.canvas
        canvas.fill(color_to_rgb(BACKGROUND_COLOR))
        for wall in WallLocation:
            pygame.draw.rect(canvas, color_to_rgb(WALL_COLOR), _rect(wall.position(), wall.size()))
        for brick in game.bricks:
            pygame.draw.rect(canvas, color_to_rgb(BRICK_COLOR), _rect(brick.position, BRICK_SIZE))
        pygame.draw.rect(
            canvas, color_to_rgb(PADDLE_COLOR), _rect(Vec2(game.paddle_x, PADDLE_Y), PADDLE_SIZE)
        )
        pygame.draw.circle(
            canvas,
            color_to_rgb(BALL_COLOR),
            to_screen(game.ball_position.x, game.ball_position.y),
            round(BALL_DIAMETER / 2.0),
        )

        label = self._draw_text(
            self.score_font,
            "Score: ",
            TEXT_COLOR,
            (SCOREBOARD_TEXT_PADDING, SCOREBOARD_TEXT_PADDING),
        )
        self._draw_text(
            self.score_font, self.score_span, SCORE_COLOR, (label.right, SCOREBOARD_TEXT_PADDING)
        )

        hint = self.hint_font.render(self.hint, True, color_to_rgb(STEPPING_FONT_COLOR))
        canvas.blit(hint, (5, WINDOW_HEIGHT - 5 - hint.get_height()))

        if game.prompt_text is not None:
            self._draw_text(
                self.prompt_font,
                game.prompt_text,
                PROMPT_COLOR,
                (round(WINDOW_WIDTH * 0.15), round(WINDOW_HEIGHT * 0.10)),
            )

        if game.show_image and self.image is not None:
            canvas.blit(
                self.image,
                ((WINDOW_WIDTH - IMAGE_SIZE) // 2, (WINDOW_HEIGHT - IMAGE_SIZE) // 2),
            )

        self._draw_stepping_panel()

        if self.display_size == (WINDOW_WIDTH, WINDOW_HEIGHT):
            self.display.blit(canvas, (0, 0))
        else:
            self.display.blit(pygame.transform.scale(canvas, self.display_size), (0, 0))
        pygame.display.flip()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="brickfall", description="A small brick-breaking game.")
    parser.add_argument("--assets", default="assets", help="directory holding sounds and images")
    parser.add_argument("--image", help="image shown when the game ends")
    parser.add_argument(
        "--stepping", action="store_true", help="enable the system stepping controls"
    )
    parser.add_argument("--fps", type=int, default=60, help="frame rate limit")
    parser.add_argument("--frames", type=int, help="stop after this many frames")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    pygame.init()
    try:
        frontend = _Frontend(args)
        clock = pygame.time.Clock()
        frames = 0
        while True:
            just_pressed: set[Key] = set()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.KEYDOWN and event.key in _STEPPING_KEYS:
                    just_pressed.add(_STEPPING_KEYS[event.key])
            dt = clock.tick(args.fps) / 1000.0
            frontend.frame(dt, pygame.key.get_pressed(), just_pressed)
            frontend.draw()
            frames += 1
            if args.frames is not None and frames >= args.frames:
                return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())