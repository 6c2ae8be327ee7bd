"""Entities built from components, and the drawable base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

import pygame

from .components import ColliderComponent, Component, TransformComponent, draw_outline
from .config import DEBUG_STATE

C = TypeVar("C", bound=Component)


class Entity(ABC):
    """Something in the game that owns components and updates each frame."""

    def __init__(self) -> None:
        self._components: list[Component] = []

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance the entity by dt seconds."""

    def add_component(self, cls: type[C]) -> C:
        """Create a component of the given class and attach it."""
        component = cls()
        self._components.append(component)
        return component

    def get_component(self, cls: type[C]) -> C | None:
        """Return the first attached component of the given class, if any."""
        return next((c for c in self._components if isinstance(c, cls)), None)

    def destroy_components(self) -> None:
        """Destroy and detach every component."""
        for component in self._components:
            component.destroy()
        self._components.clear()


class Drawable(Entity):
    """An entity that can draw itself."""

    @abstractmethod
    def render(self, surface: pygame.Surface) -> None:
        """Draw the entity onto a surface."""

    def debug_render(self, surface: pygame.Surface) -> None:
        """Outline the transform in green and the collider in red."""
        if not DEBUG_STATE:
            return
        transform = self.get_component(TransformComponent)
        if transform is not None:
            draw_outline(surface, (0, 255, 0), transform.rect)
        collider = self.get_component(ColliderComponent)
        if collider is not None:
            collider.debug_render(surface)