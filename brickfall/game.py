"""Game state and the rules that advance it from frame to frame."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from brickfall.physics import (
    BALL_DIAMETER,
    BALL_SPEED,
    BALL_STARTING_POSITION,
    BRICK_SIZE,
    INITIAL_BALL_DIRECTION,
    PADDLE_SIZE,
    PADDLE_Y,
    Aabb2d,
    BoundingCircle,
    Vec2,
    WallLocation,
    ball_collision,
    brick_positions,
    move_paddle,
    reflect,
)

SCORE_LIMIT = 2
WARNING_TEXTS = ("RUN", "RUN", "RUN", "RUN", "!")
WARNING_INTERVAL = 1.0
HIDE_DURATION = 3.0
DEFAULT_WINDOW_SIZE = (1280.0, 720.0)
HIDDEN_WINDOW_SIZE = (0.1, 0.1)
SHOWN_WINDOW_SIZE = (1200.0, 800.0)


class TimerMode(Enum):
    """Whether a timer fires once or keeps firing."""

    ONCE = "once"
    REPEATING = "repeating"


class Timer:
    """Counts elapsed seconds and reports when its duration is reached."""

    def __init__(self, duration: float, mode: TimerMode = TimerMode.ONCE) -> None:
        if duration < 0.0:
            raise ValueError("timer duration must not be negative")
        self.duration = duration
        self.mode = mode
        self.elapsed = 0.0
        self._finished = False

    def __repr__(self) -> str:
        return (
            f"Timer(duration={self.duration}, mode={self.mode.name}, "
            f"elapsed={self.elapsed}, finished={self._finished})"
        )

    def tick(self, dt: float) -> None:
        """Advance the timer by ``dt`` seconds."""
        if dt < 0.0:
            raise ValueError("cannot tick a timer by a negative amount")
        if self.mode is TimerMode.ONCE:
            self.elapsed = min(self.elapsed + dt, self.duration)
            self._finished = self.elapsed >= self.duration
            return
        self.elapsed += dt
        if self.elapsed >= self.duration:
            self.elapsed = self.elapsed % self.duration if self.duration > 0.0 else 0.0
            self._finished = True
        else:
            self._finished = False

    def finished(self) -> bool:
        """For a one-shot timer: it has run out. For a repeating one: it fired on the last tick."""
        return self._finished


@dataclass(eq=False)
class Brick:
    """A brick still standing in the arena."""

    position: Vec2

    @property
    def box(self) -> Aabb2d:
        return Aabb2d(self.position, BRICK_SIZE / 2.0)


def _initial_velocity() -> Vec2:
    return INITIAL_BALL_DIRECTION.normalize() * BALL_SPEED


def _initial_bricks() -> list[Brick]:
    return [Brick(position) for position in brick_positions()]


@dataclass
class Game:
    """Everything that changes while the game is played."""

    paddle_x: float = 0.0
    ball_position: Vec2 = BALL_STARTING_POSITION
    ball_velocity: Vec2 = field(default_factory=_initial_velocity)
    bricks: list[Brick] = field(default_factory=_initial_bricks)
    score: int = 0
    running: bool = True
    ended: bool = False
    prompt_text: str | None = None
    warning_index: int = 0
    warning_timer: Timer = field(
        default_factory=lambda: Timer(WARNING_INTERVAL, TimerMode.REPEATING)
    )
    hide_timer: Timer = field(default_factory=lambda: Timer(HIDE_DURATION))
    window_size: tuple[float, float] = DEFAULT_WINDOW_SIZE
    show_image: bool = False

    def _colliders(self) -> Iterator[tuple[Aabb2d, Brick | None]]:
        yield Aabb2d(Vec2(self.paddle_x, PADDLE_Y), PADDLE_SIZE / 2.0), None
        for wall in WallLocation:
            yield Aabb2d(wall.position(), wall.size() / 2.0), None
        for brick in self.bricks:
            yield brick.box, brick

    def move_paddle(self, dt: float, left: bool, right: bool) -> None:
        """Move the paddle according to the held arrow keys."""
        direction = 0.0
        if left:
            direction -= 1.0
        if right:
            direction += 1.0
        self.paddle_x = move_paddle(self.paddle_x, direction, dt)

    def apply_velocity(self, dt: float) -> None:
        """Move the ball along its velocity for ``dt`` seconds."""
        self.ball_position = self.ball_position + self.ball_velocity * dt

    def check_for_collisions(self) -> int:
        """Bounce the ball off whatever it touches; return the number of collisions."""
        ball = BoundingCircle(self.ball_position, BALL_DIAMETER / 2.0)
        bricks_before = len(self.bricks)
        hit: set[int] = set()
        collisions = 0
        for box, brick in list(self._colliders()):
            side = ball_collision(ball, box)
            if side is None:
                continue
            collisions += 1
            if brick is not None:
                hit.add(id(brick))
                self.score += 1
            self.ball_velocity = reflect(self.ball_velocity, side)
        self.bricks = [brick for brick in self.bricks if id(brick) not in hit]
        # Removal takes effect after the check, so the count is the one from its start.
        if bricks_before == 0:
            self.running = False
        if self.score >= SCORE_LIMIT:
            self.running = False
        return collisions

    def fixed_update(self, dt: float, left: bool, right: bool) -> bool:
        """One simulation step; True when a collision sound should play."""
        if not self.running:
            return False
        self.apply_velocity(dt)
        self.move_paddle(dt, left, right)
        return self.check_for_collisions() > 0

    def show_warning_text(self, dt: float) -> None:
        """Flash the warning prompts, ending the game after the last one."""
        self.warning_timer.tick(dt)
        if not self.warning_timer.finished():
            return
        current = WARNING_TEXTS[self.warning_index]
        self.prompt_text = None
        if self.warning_index >= 4:
            self.ended = True
            return
        self.prompt_text = current
        self.warning_index = (self.warning_index + 1) % len(WARNING_TEXTS)

    def handle_hide_window(self, dt: float) -> None:
        """Keep the window tiny until the hide timer runs out, then enlarge it."""
        if not self.hide_timer.finished():
            self.hide_timer.tick(dt)
            self.window_size = HIDDEN_WINDOW_SIZE
        else:
            self.window_size = SHOWN_WINDOW_SIZE

    def update(self, dt: float) -> None:
        """Per-frame work that is not part of the fixed simulation step."""
        if not self.running and not self.ended:
            self.show_warning_text(dt)
        if self.ended:
            self.handle_hide_window(dt)
            self.show_image = True

    def scoreboard_text(self) -> str:
        return f"Score: {self.score}"