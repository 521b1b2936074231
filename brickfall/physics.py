"""Arena geometry, collision detection and ball/paddle motion."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        """Return the unit vector pointing the same way."""
        norm = self.length()
        if norm == 0.0 or not math.isfinite(norm):
            raise ValueError("cannot normalize a zero-length or non-finite vector")
        return Vec2(self.x / norm, self.y / norm)


# Arena units map 1:1 onto screen pixels, origin at the centre, y pointing up.
PADDLE_SIZE = Vec2(120.0, 20.0)
GAP_BETWEEN_PADDLE_AND_FLOOR = 60.0
PADDLE_SPEED = 500.0
PADDLE_PADDING = 10.0

BALL_STARTING_POSITION = Vec2(0.0, -50.0)
BALL_DIAMETER = 30.0
BALL_SPEED = 400.0
INITIAL_BALL_DIRECTION = Vec2(0.5, -0.5)

WALL_THICKNESS = 10.0
LEFT_WALL = -450.0
RIGHT_WALL = 450.0
BOTTOM_WALL = -300.0
TOP_WALL = 300.0

BRICK_SIZE = Vec2(100.0, 30.0)
GAP_BETWEEN_PADDLE_AND_BRICKS = 270.0
GAP_BETWEEN_BRICKS = 5.0
GAP_BETWEEN_BRICKS_AND_CEILING = 20.0
GAP_BETWEEN_BRICKS_AND_SIDES = 20.0

PADDLE_Y = BOTTOM_WALL + GAP_BETWEEN_PADDLE_AND_FLOOR


class Collision(Enum):
    """The side of a box that the ball struck."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclass(frozen=True)
class Aabb2d:
    """Axis-aligned box given by its centre and half extents."""

    center: Vec2
    half_size: Vec2

    @property
    def min(self) -> Vec2:
        return self.center - self.half_size

    @property
    def max(self) -> Vec2:
        return self.center + self.half_size

    def closest_point(self, point: Vec2) -> Vec2:
        """The point of the box nearest to ``point``."""
        lo, hi = self.min, self.max
        return Vec2(_clamp(point.x, lo.x, hi.x), _clamp(point.y, lo.y, hi.y))


@dataclass(frozen=True)
class BoundingCircle:
    """A circle given by centre and radius."""

    center: Vec2
    radius: float

    def intersects(self, box: Aabb2d) -> bool:
        """True when the circle touches or overlaps ``box``."""
        offset = self.center - box.closest_point(self.center)
        return offset.x**2 + offset.y**2 <= self.radius**2


def ball_collision(ball: BoundingCircle, box: Aabb2d) -> Collision | None:
    """Return the side of ``box`` hit by ``ball``, or None when they do not touch."""
    if not ball.intersects(box):
        return None
    offset = ball.center - box.closest_point(ball.center)
    if abs(offset.x) > abs(offset.y):
        return Collision.LEFT if offset.x < 0.0 else Collision.RIGHT
    return Collision.TOP if offset.y > 0.0 else Collision.BOTTOM


def reflect(velocity: Vec2, collision: Collision) -> Vec2:
    """Bounce ``velocity`` off a side, only if it moves into that side."""
    x, y = velocity.x, velocity.y
    if collision is Collision.LEFT and x > 0.0:
        x = -x
    elif collision is Collision.RIGHT and x < 0.0:
        x = -x
    elif collision is Collision.TOP and y < 0.0:
        y = -y
    elif collision is Collision.BOTTOM and y > 0.0:
        y = -y
    return Vec2(x, y)


class WallLocation(Enum):
    """Which side of the arena a wall sits on."""

    LEFT = "left"
    RIGHT = "right"
    BOTTOM = "bottom"
    TOP = "top"

    def position(self) -> Vec2:
        """Centre of the wall."""
        return {
            WallLocation.LEFT: Vec2(LEFT_WALL, 0.0),
            WallLocation.RIGHT: Vec2(RIGHT_WALL, 0.0),
            WallLocation.BOTTOM: Vec2(0.0, BOTTOM_WALL),
            WallLocation.TOP: Vec2(0.0, TOP_WALL),
        }[self]

    def size(self) -> Vec2:
        """Width and height of the wall."""
        arena_height = TOP_WALL - BOTTOM_WALL
        arena_width = RIGHT_WALL - LEFT_WALL
        if self in (WallLocation.LEFT, WallLocation.RIGHT):
            return Vec2(WALL_THICKNESS, arena_height + WALL_THICKNESS)
        return Vec2(arena_width + WALL_THICKNESS, WALL_THICKNESS)


def brick_positions() -> list[Vec2]:
    """Centres of all bricks, row by row from the bottom, left to right."""
    total_width = (RIGHT_WALL - LEFT_WALL) - 2.0 * GAP_BETWEEN_BRICKS_AND_SIDES
    bottom_edge = PADDLE_Y + GAP_BETWEEN_PADDLE_AND_BRICKS
    total_height = TOP_WALL - bottom_edge - GAP_BETWEEN_BRICKS_AND_CEILING

    n_columns = math.floor(total_width / (BRICK_SIZE.x + GAP_BETWEEN_BRICKS))
    n_rows = math.floor(total_height / (BRICK_SIZE.y + GAP_BETWEEN_BRICKS))
    n_vertical_gaps = n_columns - 1

    center = (LEFT_WALL + RIGHT_WALL) / 2.0
    left_edge = (
        center
        - n_columns / 2.0 * BRICK_SIZE.x
        - n_vertical_gaps / 2.0 * GAP_BETWEEN_BRICKS
    )
    offset_x = left_edge + BRICK_SIZE.x / 2.0
    offset_y = bottom_edge + BRICK_SIZE.y / 2.0

    return [
        Vec2(
            offset_x + column * (BRICK_SIZE.x + GAP_BETWEEN_BRICKS),
            offset_y + row * (BRICK_SIZE.y + GAP_BETWEEN_BRICKS),
        )
        for row in range(n_rows)
        for column in range(n_columns)
    ]


def paddle_bounds() -> tuple[float, float]:
    """Leftmost and rightmost x the paddle centre may reach."""
    left = LEFT_WALL + WALL_THICKNESS / 2.0 + PADDLE_SIZE.x / 2.0 + PADDLE_PADDING
    right = RIGHT_WALL - WALL_THICKNESS / 2.0 - PADDLE_SIZE.x / 2.0 - PADDLE_PADDING
    return left, right


def move_paddle(x: float, direction: float, dt: float) -> float:
    """New paddle x after moving in ``direction`` for ``dt`` seconds, kept in the arena."""
    left, right = paddle_bounds()
    return _clamp(x + direction * PADDLE_SPEED * dt, left, right)