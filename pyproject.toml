[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "frogjump"
version = "0.1.0"
description = "A tile-based 2D platformer with a wall-jumping frog, traps, enemies and collectable fruit."
requires-python = ">=3.10"
keywords = ["game", "platformer", "pygame", "tiled", "2d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
frogjump = "frogjump.core:main"

[tool.hatch.build.targets.wheel]
packages = ["frogjump"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
