[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brickfall"
version = "0.1.0"
description = "A small Breakout-style arcade game with a frame-stepping debug overlay"
requires-python = ">=3.10"
keywords = ["breakout", "arcade", "game", "pygame", "bricks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
brickfall = "brickfall.app:main"

[tool.hatch.build.targets.wheel]
packages = ["brickfall"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
