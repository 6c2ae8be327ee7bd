"""Texture loading and lookup shared by the whole game."""

from __future__ import annotations

import logging

import pygame

from .config import TextureID

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    """Raised when an asset cannot be loaded or is not known."""


class TextureStore:
    """Holds every loaded texture, keyed by its identifier."""

    def __init__(self) -> None:
        self._textures: dict[TextureID, pygame.Surface] = {}

    def __contains__(self, texture_id: object) -> bool:
        return texture_id in self._textures

    def load(self, texture_id: TextureID, path: str) -> None:
        """Load an image file once; later loads of the same id are ignored."""
        if texture_id in self._textures:
            logger.warning("texture %s has already been loaded", texture_id.name)
            return
        try:
            surface = pygame.image.load(path)
        except (pygame.error, OSError) as exc:
            raise ResourceError(f"cannot load texture {path!r}: {exc}") from exc
        self._textures[texture_id] = surface

    def add(self, texture_id: TextureID, surface: pygame.Surface) -> None:
        """Register an already built surface under an identifier."""
        self._textures[texture_id] = surface

    def get(self, texture_id: TextureID) -> pygame.Surface:
        """Return the texture for an identifier."""
        try:
            return self._textures[texture_id]
        except KeyError:
            raise ResourceError(f"texture {texture_id!r} is not loaded") from None

    def clear(self) -> None:
        """Forget every texture."""
        self._textures.clear()


_store: TextureStore | None = None


def get_texture_store() -> TextureStore:
    """Return the shared texture store, creating it on first use."""
    global _store
    if _store is None:
        _store = TextureStore()
    return _store