import pytest

from brickfall import physics
from brickfall.app import (
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    color_to_rgb,
    main,
    to_screen,
)


def test_to_screen_origin_is_window_centre():
    assert to_screen(0.0, 0.0) == (WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2)


def test_to_screen_flips_y_axis():
    _, base = to_screen(0.0, 0.0)
    _, up = to_screen(0.0, 10.0)
    assert up == base - 10


def test_to_screen_preserves_arena_width():
    left, _ = to_screen(physics.LEFT_WALL, 0.0)
    right, _ = to_screen(physics.RIGHT_WALL, 0.0)
    assert right - left == round(physics.RIGHT_WALL - physics.LEFT_WALL)


def test_arena_fits_in_window():
    left, top = to_screen(physics.LEFT_WALL, physics.TOP_WALL)
    right, bottom = to_screen(physics.RIGHT_WALL, physics.BOTTOM_WALL)
    assert 0 <= left < right <= WINDOW_WIDTH
    assert 0 <= top < bottom <= WINDOW_HEIGHT


def test_color_to_rgb_extremes():
    assert color_to_rgb((1.0, 0.0, 0.0)) == (255, 0, 0)
    assert color_to_rgb((0.0, 0.0, 0.0)) == (0, 0, 0)


def test_color_to_rgb_keeps_alpha():
    assert color_to_rgb((1.0, 1.0, 1.0, 1.0)) == (255, 255, 255, 255)


@pytest.mark.parametrize("color", [(1.5, 0.0, 0.0), (-0.1, 0.0, 0.0), (0.5, 0.5)])
def test_color_to_rgb_rejects_bad_colours(color):
    with pytest.raises(ValueError):
        color_to_rgb(color)


@pytest.mark.parametrize("extra", [[], ["--stepping"]])
def test_main_runs_headless(monkeypatch, tmp_path, extra):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    argv = ["--assets", str(tmp_path), "--frames", "3", "--fps", "0", *extra]
    assert main(argv) == 0