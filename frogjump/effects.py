"""Short-lived visual effects: fruit pickup puffs, dust and screen transitions."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field

import pygame

from .components import (
    AnimationProperties,
    AnimatorComponent,
    FRect,
    TextureComponent,
    TransformComponent,
    draw_texture,
)
from .config import TextureID, ease_in_out_sine
from .entity import Drawable


class Effect(Drawable):
    """A drawable that finishes on its own after a while."""

    @abstractmethod
    def ended(self) -> bool:
        """True once the effect has nothing left to show."""


class DisappearingEffect(Effect):
    """The puff played where a fruit has been collected."""

    def __init__(self, x: float, y: float) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(x, y, 32.0, 32.0)

        self._texture = self.add_component(TextureComponent)
        self._texture.load_texture_from_file(
            TextureID.DISAPPEARING_EFFECT, "assets/Items/Fruits/Collected.png"
        )
        self._texture.texture_id = TextureID.DISAPPEARING_EFFECT

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = 0
        self._animator.add_animation(
            0,
            AnimationProperties((32.0, 32.0), 6, 0.45, False, TextureID.DISAPPEARING_EFFECT),
        )

    def update(self, dt: float) -> None:
        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(surface, self._texture.get_texture(), self._transform.rect, self._texture.rect)

    def ended(self) -> bool:
        return self._animator.ended()


@dataclass
class Dust:
    """One dust particle drifting sideways while it shrinks."""

    rect: FRect
    scalar: float


class DustEmitter(Drawable):
    """Emits dust particles no more often than its rate allows."""

    rate = 0.15

    def __init__(self) -> None:
        super().__init__()
        self._texture = self.add_component(TextureComponent)
        self._texture.load_texture_from_file(TextureID.DUST_EFFECT, "assets/Other/Dust Particle.png")
        self._texture.texture_id = TextureID.DUST_EFFECT
        self.particles: list[Dust] = []
        self._elapsed_time = 0.25

    def update(self, dt: float) -> None:
        for particle in self.particles:
            particle.rect.w -= dt * 125.0
            particle.rect.h -= dt * 125.0
            particle.rect.x += dt * 90.0 * particle.scalar
            particle.rect.y -= dt * 20.0
        self.particles = [p for p in self.particles if p.rect.w > 0 and p.rect.h > 0]
        self._elapsed_time += dt

    def render(self, surface: pygame.Surface) -> None:
        texture = self._texture.get_texture()
        for particle in self.particles:
            draw_texture(surface, texture, particle.rect)

    def clear(self) -> None:
        """Remove every particle."""
        self.particles.clear()

    def emit(self, x: float, y: float, scalar: float) -> None:
        """Spawn a particle whose bottom sits at (x, y), if the rate allows."""
        if self._elapsed_time > self.rate:
            self.particles.append(Dust(FRect(x, y - 32.0, 32.0, 32.0), scalar))
            self._elapsed_time = 0.0


@dataclass
class Diamond:
    """One growing then shrinking diamond of the transition."""

    rect: FRect
    scalar: int = 1
    elapsed_time: float = 0.0


class TransitionEffect(Drawable):
    """A wave of diamonds covering then uncovering the screen."""

    MAX_SIZE = 550.0
    _ROWS = 3
    _COLUMNS = 6
    _SPACING = 244.0

    def __init__(self) -> None:
        super().__init__()
        self._texture = self.add_component(TextureComponent)
        self._texture.rect = FRect(0.0, 0.0, 44.0, 44.0)
        self._texture.texture_id = TextureID.TRANSITION_EFFECT
        self.diamonds: list[Diamond] = []

    def reset(self) -> None:
        """Start the transition by laying out a fresh grid of diamonds."""
        self._texture.load_texture_from_file(TextureID.TRANSITION_EFFECT, "assets/Other/Transition.png")
        offset = self.MAX_SIZE / 4
        self.diamonds.extend(
            Diamond(FRect(j * self._SPACING + offset, i * self._SPACING + offset, 1.0, 1.0))
            for i in range(self._ROWS)
            for j in range(self._COLUMNS)
        )

    def _update_diamond(self, dt: float, diamond: Diamond) -> None:
        rect = diamond.rect
        center_x = rect.x + rect.w / 2.0
        center_y = rect.y + rect.h / 2.0

        diamond.elapsed_time += dt * 2.0
        size = ease_in_out_sine(diamond.elapsed_time) * self.MAX_SIZE
        rect.w = size
        rect.h = size
        rect.x = center_x - size / 2.0
        rect.y = center_y - size / 2.0

    def update(self, dt: float) -> None:
        # Each diamond waits for its left neighbour to grow a little; a removed
        # diamond lets the next one skip this frame.
        i = 0
        while i < len(self.diamonds):
            if i % self._COLUMNS != 0:
                previous = self.diamonds[i - 1]
                if previous.rect.w <= 50.0 and previous.elapsed_time <= 1.0:
                    i += 1
                    continue
            diamond = self.diamonds[i]
            self._update_diamond(dt, diamond)
            if diamond.elapsed_time >= 2.0:
                del self.diamonds[i]
            i += 1

    def render(self, surface: pygame.Surface) -> None:
        if not self.diamonds:
            return
        texture = self._texture.get_texture()
        for diamond in self.diamonds:
            draw_texture(surface, texture, diamond.rect, self._texture.rect)

    def ended(self) -> bool:
        return not self.diamonds