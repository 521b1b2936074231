# brickfall

A small Breakout-style arcade game written with pygame. Steer the paddle,
bounce the ball off the walls and knock out bricks; each brick hit scores a
point.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
brickfall
```

Options:

- `--assets DIR`: directory holding the collision sound
  (`sounds/breakout_collision.ogg`) and the end-of-round image
  (`not_open_1/not_open/path.jpg`); defaults to `assets`
- `--image FILE`: use this image for the end of the round instead
- `--stepping`: turn on the system-stepping controls
- `--fps N`: frame-rate limit (default 60)
- `--frames N`: quit after this many frames

A missing sound or image is logged and the game runs on without it.

Controls:

- **Left / Right arrows**: move the paddle

With `--stepping`:

- **`** (backquote): turn stepping mode on or off; while it is on, a panel
  lists the stepped systems with an arrow at the next one to run
- **S**: run only the system under the cursor, then move the cursor on
- **Space**: run from the cursor to the end of the frame
- **/**: log the current stepping state

The simulation runs at a fixed 64 steps per second.

## How a round ends

The round stops as soon as the score reaches 2, or when no bricks are left.
"RUN" is then flashed four times, one second apart; after that the window is
shrunk to a single pixel for three seconds, then reopened at 1200×800 and the
end-of-round image is drawn over the arena.

## Using the pieces

The game logic does not need a display and can be driven directly:

```python
from brickfall.game import Game

game = Game()
game.fixed_update(1 / 64, left=False, right=True)
print(game.scoreboard_text())   # "Score: 0"
```

- `brickfall.physics`: `Vec2`, `BoundingCircle`, `Aabb2d`, `Collision`,
  `ball_collision`, `reflect`, `WallLocation`, `brick_positions`,
  `paddle_bounds` and `move_paddle`, plus the arena constants.
- `brickfall.game`: `Game` (paddle, ball, bricks, score and the end-of-round
  sequence), `Timer` and `Brick`.
- `brickfall.stepping`: the `Stepping` controller, `Key`, `handle_input`,
  `cursor_marks` and `hint_text`.
- `brickfall.app`: the pygame window and frame loop (`main`), with the helpers
  `to_screen` and `color_to_rgb`.

## What it does not do

There is no restart, no menu and no saved high score: once a round has ended
the window stays on the end-of-round screen until it is closed.