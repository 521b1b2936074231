"""A Breakout-style arcade game with a frame-stepping debug overlay."""

__version__ = "0.1.0"
__all__ = ["physics", "stepping", "game", "app"]