"""Scrolling tiled background."""

from __future__ import annotations

import math

import pygame

from .components import FRect, TextureComponent, draw_texture
from .config import WINDOW_HEIGHT, WINDOW_WIDTH, TextureID
from .entity import Drawable

_TILE_SIZE = 180.0
_SCROLL_SPEED = 50.0

_BACKGROUND_FILES = {
    TextureID.BG_BLUE: "assets/Background/Blue.png",
    TextureID.BG_BROWN: "assets/Background/Brown.png",
    TextureID.BG_GRAY: "assets/Background/Gray.png",
    TextureID.BG_GREEN: "assets/Background/Green.png",
    TextureID.BG_PINK: "assets/Background/Pink.png",
    TextureID.BG_PURPLE: "assets/Background/Purple.png",
    TextureID.BG_YELLOW: "assets/Background/Yellow.png",
}


class Background(Drawable):
    """A grid of tiles scrolling slowly downwards and wrapping around."""

    def __init__(self) -> None:
        super().__init__()
        self._texture = self.add_component(TextureComponent)
        for texture_id, path in _BACKGROUND_FILES.items():
            self._texture.load_texture_from_file(texture_id, path)
        self.reset(TextureID.BG_BROWN)

        rows = math.ceil(WINDOW_HEIGHT / _TILE_SIZE + 1)
        cols = math.ceil(WINDOW_WIDTH / _TILE_SIZE + 1)
        self.tiles = [
            FRect(j * _TILE_SIZE, i * _TILE_SIZE, _TILE_SIZE, _TILE_SIZE + 0.5)
            for i in range(rows)
            for j in range(cols)
        ]

    def update(self, dt: float) -> None:
        for tile in self.tiles:
            if tile.y >= WINDOW_HEIGHT:
                tile.y = -_TILE_SIZE
            tile.y += _SCROLL_SPEED * dt

    def render(self, surface: pygame.Surface) -> None:
        texture = self._texture.get_texture()
        for tile in self.tiles:
            draw_texture(surface, texture, tile)

    def reset(self, texture_id: TextureID) -> None:
        """Switch to another background colour."""
        self._texture.texture_id = texture_id