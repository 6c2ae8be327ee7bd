"""A tile-based 2D platformer with a wall-jumping frog, built on pygame."""

__version__ = "0.1.0"