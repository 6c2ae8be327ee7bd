"""Collectable items and fruits."""

from __future__ import annotations

from enum import Enum, auto

import pygame

from .components import (
    AnimationProperties,
    AnimatorComponent,
    ColliderComponent,
    FRect,
    TextureComponent,
    TransformComponent,
    draw_outline,
    draw_texture,
)
from .config import DEBUG_STATE, TextureID
from .entity import Drawable
from .sound import SoundID, get_sound_manager

_FRUIT_FILES = {
    TextureID.APPLE: "assets/Items/Fruits/Apple.png",
    TextureID.BANANA: "assets/Items/Fruits/Bananas.png",
    TextureID.KIWI: "assets/Items/Fruits/Kiwi.png",
    TextureID.CHERRY: "assets/Items/Fruits/Cherries.png",
    TextureID.ORANGE: "assets/Items/Fruits/Orange.png",
    TextureID.PINEAPPLE: "assets/Items/Fruits/Pineapple.png",
    TextureID.STRAWBERRY: "assets/Items/Fruits/Strawberry.png",
    TextureID.MELON: "assets/Items/Fruits/Melon.png",
}


class Item(Drawable):
    """Base of everything the player can collect."""


class FruitType(Enum):
    APPLE = auto()
    BANANAS = auto()
    CHERRIES = auto()
    KIWI = auto()
    MELON = auto()
    ORANGE = auto()
    PINEAPPLE = auto()
    STRAWBERRY = auto()


class Fruit(Item):
    """A spinning fruit that the player collects."""

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 64.0, 64.0)

        self._collider = self.add_component(ColliderComponent)

        self._texture = self.add_component(TextureComponent)
        self._texture.rect = FRect(0.0, 0.0, 32.0, 32.0)
        for texture_id, path in _FRUIT_FILES.items():
            self._texture.load_texture_from_file(texture_id, path)

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = 0
        self._animator.add_animation(
            0, AnimationProperties((32.0, 32.0), 17, 0.55, True, TextureID.NONE)
        )

        get_sound_manager().load_sound_from_file(SoundID.COLLECT_FRUIT, "assets/Sounds/coin.wav")

    def set_type(self, texture_type: TextureID) -> None:
        self._texture.texture_id = texture_type

    def update(self, dt: float) -> None:
        self._collider.inflate(self._transform, 0.5, 0.5)
        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(surface, self._texture.get_texture(), self._transform.rect, self._texture.rect)
        if DEBUG_STATE:
            draw_outline(surface, (0, 0, 255), self._transform.rect)
            self._collider.debug_render(surface)