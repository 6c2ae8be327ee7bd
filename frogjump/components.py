"""Components attached to entities: position, collision, texture, animation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

import pygame

from .config import TextureID
from .resources import get_texture_store


@dataclass
class FRect:
    """Axis-aligned rectangle with float coordinates."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def intersects(self, other: FRect) -> bool:
        """True when the rectangles overlap; touching edges count."""
        if self.w < 0 or self.h < 0 or other.w < 0 or other.h < 0:
            return False
        if max(self.x, other.x) > min(self.x + self.w, other.x + other.w):
            return False
        return max(self.y, other.y) <= min(self.y + self.h, other.y + other.h)

    def copy(self) -> FRect:
        return FRect(self.x, self.y, self.w, self.h)


class FlipMode(Enum):
    """How a texture is mirrored when drawn."""

    NONE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()


def draw_texture(
    target: pygame.Surface,
    texture: pygame.Surface,
    dst: FRect,
    src: FRect | None = None,
    angle: float = 0.0,
    flip: FlipMode = FlipMode.NONE,
) -> None:
    """Draw a region of a texture scaled into a destination rectangle.

    The angle is in degrees, clockwise, around the destination centre.
    """
    image = texture
    if src is not None:
        area = pygame.Rect(int(src.x), int(src.y), int(src.w), int(src.h))
        area = area.clip(texture.get_rect())
        if area.width <= 0 or area.height <= 0:
            return
        image = texture.subsurface(area)
    size = (round(dst.w), round(dst.h))
    if size[0] <= 0 or size[1] <= 0:
        return
    image = pygame.transform.scale(image, size)
    if flip is FlipMode.HORIZONTAL:
        image = pygame.transform.flip(image, True, False)
    elif flip is FlipMode.VERTICAL:
        image = pygame.transform.flip(image, False, True)
    if angle:
        image = pygame.transform.rotate(image, -angle)
        rect = image.get_rect(center=(dst.x + dst.w / 2, dst.y + dst.h / 2))
        target.blit(image, rect)
    else:
        target.blit(image, (round(dst.x), round(dst.y)))


def draw_outline(target: pygame.Surface, color: tuple[int, int, int], rect: FRect) -> None:
    """Draw a one-pixel rectangle outline."""
    outline = pygame.Rect(round(rect.x), round(rect.y), round(rect.w), round(rect.h))
    pygame.draw.rect(target, color, outline, width=1)


class Component:
    """Base of all components."""

    def destroy(self) -> None:
        """Release anything the component holds."""


@dataclass
class TransformComponent(Component):
    """Position, size and rotation of an entity."""

    rect: FRect = field(default_factory=FRect)
    rotation: float = 0.0

    def bottom(self) -> float:
        return self.rect.y + self.rect.h

    def right(self) -> float:
        return self.rect.x + self.rect.w

    def set_center(self, x: float, y: float) -> None:
        self.rect.x = x - self.rect.w / 2
        self.rect.y = y - self.rect.h / 2

    def center(self) -> tuple[float, float]:
        return (self.rect.x + self.rect.w / 2, self.rect.y + self.rect.h / 2)

    def move(self, x: float, y: float) -> None:
        self.rect.x += x
        self.rect.y += y


@dataclass
class ColliderComponent(Component):
    """Collision box of an entity."""

    rect: FRect = field(default_factory=FRect)

    def inflate(
        self,
        transform: TransformComponent,
        x: float,
        y: float,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
    ) -> None:
        """Size the box as a fraction of the transform, centred, then offset."""
        source = transform.rect
        self.rect.w = source.w * x
        self.rect.h = source.h * y
        self.rect.x = source.x + (source.w - self.rect.w) / 2 + offset_x
        self.rect.y = source.y + (source.h - self.rect.h) / 2 + offset_y

    def collide(self, other: ColliderComponent) -> bool:
        return self.rect.intersects(other.rect)

    def debug_render(self, surface: pygame.Surface) -> None:
        draw_outline(surface, (255, 0, 0), self.rect)


@dataclass
class TextureComponent(Component):
    """Which texture to draw, which part of it, and how it is mirrored."""

    texture_id: TextureID = TextureID.NONE
    rect: FRect = field(default_factory=FRect)
    flip: FlipMode = FlipMode.NONE

    def load_texture_from_file(self, texture_id: TextureID, path: str) -> None:
        get_texture_store().load(texture_id, path)

    def get_texture(self) -> pygame.Surface:
        return get_texture_store().get(self.texture_id)


@dataclass(frozen=True)
class AnimationProperties:
    """A horizontal strip of frames played over a duration."""

    frame_size: tuple[float, float]
    frame_count: int
    duration: float
    repeat: bool
    texture_id: TextureID = TextureID.NONE


class AnimatorComponent(Component):
    """Steps through the frames of the current animation."""

    def __init__(self) -> None:
        self.current_animation = 0
        self._animations: dict[int, AnimationProperties] = {}
        self._elapsed_time = 0.0
        self._previous_animation = 0
        self._current_frame = 0

    def _current(self) -> AnimationProperties:
        try:
            return self._animations[self.current_animation]
        except KeyError:
            raise KeyError(f"no animation {self.current_animation!r}") from None

    def add_animation(self, anim_id: int, anim: AnimationProperties) -> None:
        self._animations[anim_id] = anim

    def ended(self) -> bool:
        """True once a non-repeating animation shows its last frame."""
        anim = self._current()
        if anim.repeat:
            return False
        return self._current_frame >= anim.frame_count - 1

    def run(self, texture: TextureComponent, dt: float) -> None:
        """Advance time and point the texture at the current frame."""
        if self._previous_animation != self.current_animation:
            self.reset()
        self._elapsed_time += dt

        anim = self._current()
        if self._elapsed_time >= anim.duration / anim.frame_count:
            self._current_frame += 1
            if self._current_frame > anim.frame_count - 1:
                self._current_frame = 0 if anim.repeat else anim.frame_count - 1
            self._elapsed_time = 0.0

        width, height = anim.frame_size
        texture.rect = FRect(width * self._current_frame, 0.0, width, height)
        if anim.texture_id != TextureID.NONE:
            texture.texture_id = anim.texture_id
        self._previous_animation = self.current_animation

    def reset(self) -> None:
        self._current_frame = 0
        self._elapsed_time = 0.0