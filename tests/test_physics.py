import pytest

from brickfall.physics import (
    BALL_SPEED,
    BOTTOM_WALL,
    BRICK_SIZE,
    GAP_BETWEEN_BRICKS,
    GAP_BETWEEN_BRICKS_AND_CEILING,
    GAP_BETWEEN_PADDLE_AND_BRICKS,
    GAP_BETWEEN_PADDLE_AND_FLOOR,
    INITIAL_BALL_DIRECTION,
    LEFT_WALL,
    RIGHT_WALL,
    TOP_WALL,
    WALL_THICKNESS,
    Aabb2d,
    BoundingCircle,
    Collision,
    Vec2,
    WallLocation,
    ball_collision,
    brick_positions,
    move_paddle,
    paddle_bounds,
    reflect,
)

BOX = Aabb2d(Vec2(0.0, 0.0), Vec2(10.0, 10.0))


def test_normalize_gives_unit_length():
    assert Vec2(3.0, 4.0).normalize().length() == pytest.approx(1.0)


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        Vec2(0.0, 0.0).normalize()


def test_initial_velocity_has_ball_speed():
    velocity = INITIAL_BALL_DIRECTION.normalize() * BALL_SPEED
    assert velocity.length() == pytest.approx(BALL_SPEED)
    assert velocity.x > 0 and velocity.y < 0


def test_vector_arithmetic_round_trips():
    a, b = Vec2(1.5, -2.0), Vec2(7.0, 3.25)
    assert a + b - b == a
    assert (a * 2.0) / 2.0 == a
    assert -(-a) == a
    assert 2.0 * a == a * 2.0


def test_closest_point_inside_box_is_point_itself():
    point = Vec2(3.0, -4.0)
    assert BOX.closest_point(point) == point


def test_closest_point_outside_is_clamped_to_corner():
    assert BOX.closest_point(Vec2(100.0, 100.0)) == BOX.max
    assert BOX.closest_point(Vec2(-100.0, -100.0)) == BOX.min


@pytest.mark.parametrize(
    "center, expected",
    [
        (Vec2(-20.0, 0.0), Collision.LEFT),
        (Vec2(20.0, 0.0), Collision.RIGHT),
        (Vec2(0.0, 20.0), Collision.TOP),
        (Vec2(0.0, -20.0), Collision.BOTTOM),
    ],
)
def test_ball_collision_side(center, expected):
    assert ball_collision(BoundingCircle(center, 15.0), BOX) is expected


def test_ball_far_away_does_not_collide():
    ball = BoundingCircle(Vec2(200.0, 200.0), 15.0)
    assert ball.intersects(BOX) is False
    assert ball_collision(ball, BOX) is None


def test_touching_exactly_counts_as_intersection():
    ball = BoundingCircle(Vec2(25.0, 0.0), 15.0)
    assert ball.intersects(BOX) is True


def test_ball_centre_inside_box_reports_bottom():
    assert ball_collision(BoundingCircle(Vec2(1.0, 1.0), 15.0), BOX) is Collision.BOTTOM


@pytest.mark.parametrize(
    "collision, velocity, flip_x, flip_y",
    [
        (Collision.LEFT, Vec2(3.0, 2.0), True, False),
        (Collision.RIGHT, Vec2(-3.0, 2.0), True, False),
        (Collision.TOP, Vec2(3.0, -2.0), False, True),
        (Collision.BOTTOM, Vec2(3.0, 2.0), False, True),
    ],
)
def test_reflect_when_moving_into_side(collision, velocity, flip_x, flip_y):
    result = reflect(velocity, collision)
    assert result.x == (-velocity.x if flip_x else velocity.x)
    assert result.y == (-velocity.y if flip_y else velocity.y)


@pytest.mark.parametrize(
    "collision, velocity",
    [
        (Collision.LEFT, Vec2(-3.0, 2.0)),
        (Collision.RIGHT, Vec2(3.0, 2.0)),
        (Collision.TOP, Vec2(3.0, 2.0)),
        (Collision.BOTTOM, Vec2(3.0, -2.0)),
    ],
)
def test_reflect_leaves_velocity_moving_away(collision, velocity):
    assert reflect(velocity, collision) == velocity


def test_wall_positions_match_arena_edges():
    assert WallLocation.LEFT.position() == Vec2(LEFT_WALL, 0.0)
    assert WallLocation.RIGHT.position() == Vec2(RIGHT_WALL, 0.0)
    assert WallLocation.BOTTOM.position() == Vec2(0.0, BOTTOM_WALL)
    assert WallLocation.TOP.position() == Vec2(0.0, TOP_WALL)


def test_wall_sizes_enclose_arena():
    for wall in (WallLocation.LEFT, WallLocation.RIGHT):
        assert wall.size().x == WALL_THICKNESS
        assert wall.size().y > TOP_WALL - BOTTOM_WALL
    for wall in (WallLocation.TOP, WallLocation.BOTTOM):
        assert wall.size().y == WALL_THICKNESS
        assert wall.size().x > RIGHT_WALL - LEFT_WALL


def test_brick_count():
    assert len(brick_positions()) == 56


def test_bricks_fit_inside_arena():
    for brick in brick_positions():
        assert LEFT_WALL < brick.x - BRICK_SIZE.x / 2
        assert brick.x + BRICK_SIZE.x / 2 < RIGHT_WALL
        assert brick.y + BRICK_SIZE.y / 2 <= TOP_WALL - GAP_BETWEEN_BRICKS_AND_CEILING


def test_bricks_are_centred_and_evenly_spaced():
    bricks = brick_positions()
    bottom_row = [b for b in bricks if b.y == bricks[0].y]
    assert sum(b.x for b in bottom_row) == pytest.approx(0.0)
    assert bricks[1].x - bricks[0].x == pytest.approx(BRICK_SIZE.x + GAP_BETWEEN_BRICKS)
    bottom_edge = bricks[0].y - BRICK_SIZE.y / 2
    assert bottom_edge == pytest.approx(
        BOTTOM_WALL + GAP_BETWEEN_PADDLE_AND_FLOOR + GAP_BETWEEN_PADDLE_AND_BRICKS
    )


def test_paddle_bounds_symmetric_and_inside_walls():
    left, right = paddle_bounds()
    assert left == -right
    assert LEFT_WALL < left < right < RIGHT_WALL


def test_move_paddle_clamps_to_bounds():
    left, right = paddle_bounds()
    assert move_paddle(0.0, 1.0, 100.0) == right
    assert move_paddle(0.0, -1.0, 100.0) == left


def test_move_paddle_without_direction_stays():
    assert move_paddle(12.5, 0.0, 0.5) == 12.5


def test_move_paddle_is_symmetric():
    right_step = move_paddle(0.0, 1.0, 0.01)
    assert right_step > 0.0
    assert move_paddle(0.0, -1.0, 0.01) == -right_step