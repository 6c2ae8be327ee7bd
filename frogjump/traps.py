"""Traps: trampolines, fans, arrows, falling platforms and fire."""

from __future__ import annotations

from enum import Enum, IntEnum, auto

import pygame

from .components import (
    AnimationProperties,
    AnimatorComponent,
    ColliderComponent,
    FlipMode,
    FRect,
    TextureComponent,
    TransformComponent,
    draw_outline,
    draw_texture,
)
from .config import DEBUG_STATE, TextureID, ease_in_out_sine
from .entity import Drawable
from .sound import SoundID, get_sound_manager


class Trap(Drawable):
    """Base of every trap.

    A trap that has played out sets ``expired``; its owner then drops it.
    """

    def __init__(self) -> None:
        super().__init__()
        self.expired = False


class Trampoline(Trap):
    """Launches the player upwards."""

    _IDLE = 0
    _JUMP = 1

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 64.0, 64.0)

        self._texture = self.add_component(TextureComponent)
        self._texture.load_texture_from_file(
            TextureID.TRAMPOLINE, "assets/Traps/Trampoline/Jump (28x28).png"
        )
        self._texture.texture_id = TextureID.TRAMPOLINE

        self._animator = self.add_component(AnimatorComponent)
        self._animator.add_animation(
            self._JUMP, AnimationProperties((28.0, 28.0), 8, 1.0, False, TextureID.TRAMPOLINE)
        )
        self._animator.add_animation(
            self._IDLE, AnimationProperties((28.0, 28.0), 1, 1.0, False, TextureID.TRAMPOLINE)
        )
        self._animator.current_animation = self._IDLE

        self._collider = self.add_component(ColliderComponent)

    def on_jump(self) -> None:
        self._animator.current_animation = self._JUMP

    def update(self, dt: float) -> None:
        if self._animator.current_animation == self._JUMP and self._animator.ended():
            self._animator.current_animation = self._IDLE
        self._collider.inflate(self._transform, 1.0, 0.2, 0.0, 15.0)
        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(
            surface,
            self._texture.get_texture(),
            self._transform.rect,
            self._texture.rect,
            self._transform.rotation,
        )
        if DEBUG_STATE:
            draw_outline(surface, (0, 0, 255), self._transform.rect)
            self._collider.debug_render(surface)


class FanType(Enum):
    VERTICAL = auto()
    HORIZONTAL = auto()


class Fan(Trap):
    """Blows the player along its projection for a while, then rests."""

    _OFF = 0
    _ON = 1

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 48.0, 16.0)

        self._texture = self.add_component(TextureComponent)
        self._texture.load_texture_from_file(TextureID.FAN, "assets/Traps/Fan/On (24x8).png")
        self._texture.texture_id = TextureID.FAN

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = self._ON
        self._animator.add_animation(
            self._ON, AnimationProperties((24.0, 8.0), 4, 0.2, True, TextureID.FAN)
        )
        self._animator.add_animation(
            self._OFF, AnimationProperties((24.0, 8.0), 1, 1.0, False, TextureID.FAN)
        )

        self.projection = FRect()
        self._fan_type = FanType.VERTICAL
        self._duration = 4.0
        self._elapsed_time = 0.0
        self._reset_timer = 0.0

    @property
    def fan_type(self) -> FanType:
        return self._fan_type

    def overlap(self, collider: ColliderComponent) -> bool:
        """True when the collider is inside the blowing area while the fan is on."""
        return self.projection.intersects(collider.rect) and self._elapsed_time < 4.0

    def distance_from_fan(self, collider: ColliderComponent) -> float:
        """Blowing strength from 1 (at the fan) down to 0.5 (far away)."""
        if self._transform.rotation == 0.0:
            gap = abs(collider.rect.y - self._transform.rect.y)
            extent = self.projection.h
        else:
            gap = abs(collider.rect.x - self._transform.rect.x)
            extent = self.projection.w
        if extent == 0:
            return 0.5
        return 1.0 - min(0.5, gap / extent)

    def set_type(self, fan_type: FanType) -> None:
        self._fan_type = fan_type
        if fan_type is FanType.HORIZONTAL:
            self._transform.rotation = 90.0

    def update(self, dt: float) -> None:
        rect = self._transform.rect
        if self._fan_type is FanType.VERTICAL:
            self.projection.w = rect.w
            self.projection.h = rect.h * 20
            self.projection.x = rect.x
            self.projection.y = rect.y - self.projection.h
        else:
            self.projection.h = rect.w
            self.projection.w = rect.h * 25
            self.projection.x = rect.x
            self.projection.y = rect.y - self.projection.h / 2.5

        if self._elapsed_time < self._duration:
            self._elapsed_time += dt
            self._animator.current_animation = self._ON
        else:
            self._reset_timer += dt
            self._animator.current_animation = self._OFF

        if self._reset_timer >= 3.0:
            self._elapsed_time = 0.0
            self._reset_timer = 0.0

        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(
            surface,
            self._texture.get_texture(),
            self._transform.rect,
            self._texture.rect,
            self._transform.rotation,
        )
        self.debug_render(surface)
        draw_outline(surface, (0, 0, 255), self.projection)


class ArrowType(Enum):
    UP = auto()
    LEFT = auto()
    DOWN = auto()
    RIGHT = auto()


_ARROW_DIRECTIONS = {
    0.0: ArrowType.UP,
    90.0: ArrowType.RIGHT,
    180.0: ArrowType.DOWN,
    270.0: ArrowType.LEFT,
}


class Arrow(Trap):
    """A one-shot booster that pushes the player in its direction."""

    _HIT = 0
    _IDLE = 1

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 32.0, 32.0)

        self._texture = self.add_component(TextureComponent)
        self._texture.rect = FRect(0.0, 0.0, 18.0, 18.0)
        self._texture.texture_id = TextureID.ARROW
        self._texture.load_texture_from_file(TextureID.ARROW, "assets/Traps/Arrow/Idle (18x18).png")
        self._texture.load_texture_from_file(TextureID.ARROW_HIT, "assets/Traps/Arrow/Hit (18x18).png")

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = self._IDLE
        self._animator.add_animation(
            self._IDLE, AnimationProperties((18.0, 18.0), 4, 0.45, True, TextureID.ARROW)
        )
        self._animator.add_animation(
            self._HIT, AnimationProperties((18.0, 18.0), 4, 0.25, False, TextureID.ARROW_HIT)
        )

        self._arrow_type = ArrowType.UP
        self._used = False

    @property
    def arrow_type(self) -> ArrowType:
        return self._arrow_type

    @property
    def used(self) -> bool:
        return self._used

    def on_hit(self) -> None:
        self._animator.current_animation = self._HIT
        self._used = True
        get_sound_manager().play_sound(SoundID.COLLECT_FRUIT)

    def set_direction(self, rotation: float) -> None:
        """Point the arrow by its rotation in degrees; unknown angles mean up."""
        self._arrow_type = _ARROW_DIRECTIONS.get(rotation, ArrowType.UP)
        self._transform.rotation = rotation

    def update(self, dt: float) -> None:
        self._animator.run(self._texture, dt)
        if self._animator.ended():
            self.expired = True

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(
            surface,
            self._texture.get_texture(),
            self._transform.rect,
            self._texture.rect,
            self._transform.rotation,
            self._texture.flip,
        )
        self.debug_render(surface)


class PlatformState(Enum):
    ON = auto()
    OFF = auto()
    FALLING = auto()


class FallingPlatform(Trap):
    """Bobs gently until stepped on, then sags and falls away."""

    _ON = 0
    _OFF = 1

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)

        self._texture = self.add_component(TextureComponent)
        self._texture.load_texture_from_file(
            TextureID.FALLING_PLATFORM_ON, "assets/Traps/Falling Platforms/On (32x10).png"
        )
        self._texture.load_texture_from_file(
            TextureID.FALLING_PLATFORM_OFF, "assets/Traps/Falling Platforms/Off.png"
        )
        self._texture.texture_id = TextureID.FALLING_PLATFORM_ON

        self._animator = self.add_component(AnimatorComponent)
        self._animator.add_animation(
            self._OFF,
            AnimationProperties((32.0, 10.0), 1, 1.0, True, TextureID.FALLING_PLATFORM_OFF),
        )
        self._animator.add_animation(
            self._ON,
            AnimationProperties((32.0, 10.0), 4, 0.2, True, TextureID.FALLING_PLATFORM_ON),
        )
        self._animator.current_animation = self._ON

        self._time = 0.0
        self._scalar = 30.0
        self.state = PlatformState.ON

    def on_hit(self) -> None:
        if self.state is PlatformState.ON:
            self.state = PlatformState.OFF
            self._scalar = 300.0
            self._time = 0.5

    def update(self, dt: float) -> None:
        self._time += dt
        offset = (ease_in_out_sine(self._time) - 0.5) * 2.0

        if self.state is PlatformState.OFF:
            self._scalar = max(0.0, self._scalar - 520.0 * dt)
            if self._scalar == 0:
                self.state = PlatformState.FALLING

        if self.state is PlatformState.FALLING:
            self._animator.current_animation = self._OFF
            self._scalar = 580.0
            offset = 1.0

        self._transform.move(0.0, offset * dt * self._scalar)
        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(surface, self._texture.get_texture(), self._transform.rect, self._texture.rect)
        self.debug_render(surface)


class _FireAnimation(IntEnum):
    ON = 0
    OFF = 1
    HIT = 2


class Fire(Trap):
    """A fire block that ignites once stepped on and then burns whoever touches it."""

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)

        self._texture = self.add_component(TextureComponent)
        self._texture.texture_id = TextureID.FIRE_OFF
        self._texture.load_texture_from_file(TextureID.FIRE_OFF, "assets/Traps/Fire/Off.png")
        self._texture.load_texture_from_file(TextureID.FIRE_ON, "assets/Traps/Fire/On (16x32).png")
        self._texture.load_texture_from_file(TextureID.FIRE_HIT, "assets/Traps/Fire/Hit (16x32).png")

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = _FireAnimation.OFF
        self._animator.add_animation(
            _FireAnimation.OFF, AnimationProperties((16.0, 32.0), 1, 1.0, True, TextureID.FIRE_OFF)
        )
        self._animator.add_animation(
            _FireAnimation.ON, AnimationProperties((16.0, 32.0), 3, 0.45, True, TextureID.FIRE_ON)
        )
        self._animator.add_animation(
            _FireAnimation.HIT, AnimationProperties((16.0, 32.0), 4, 0.8, False, TextureID.FIRE_HIT)
        )

        self._collider = self.add_component(ColliderComponent)
        self.projection = FRect()

    def on_hit(self, activate: bool) -> None:
        """Start igniting when stepped on, unless already burning."""
        if activate and self._animator.current_animation != _FireAnimation.ON:
            self._animator.current_animation = _FireAnimation.HIT

    def overlap_fire(self, collider: ColliderComponent) -> bool:
        """True when the collider touches the flame area above the block."""
        return collider.rect.intersects(self.projection)

    def activated(self) -> bool:
        return self._animator.current_animation == _FireAnimation.ON

    def update(self, dt: float) -> None:
        self.projection = self._collider.rect.copy()
        self.projection.y = self._transform.rect.y

        if self._animator.ended() and self._animator.current_animation == _FireAnimation.HIT:
            self._animator.current_animation = _FireAnimation.ON

        self._collider.inflate(self._transform, 1.0, 0.5, 0.0, self._transform.rect.h / 4.0)
        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(
            surface,
            self._texture.get_texture(),
            self._transform.rect,
            self._texture.rect,
            self._transform.rotation,
            FlipMode.NONE,
        )
        self.debug_render(surface)
        draw_outline(surface, (0, 255, 0), self.projection)
        self._collider.debug_render(surface)