"""Enemies: the shared walking physics, slimes, angry pigs and turtles."""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum, IntEnum, auto
from typing import Protocol

import pygame

from .components import (
    AnimationProperties,
    AnimatorComponent,
    FlipMode,
    FRect,
    TextureComponent,
    TransformComponent,
    draw_texture,
)
from .config import WINDOW_HEIGHT, TextureID
from .entity import Drawable

_TILE_SIZE = 32.0


class TileGrid(Protocol):
    """Anything that reports the tile id at a column and row; above 0 is solid."""

    def get_tile_at(self, column: int, row: int) -> int: ...


def _tile_index(coord: float) -> int:
    return int(coord / _TILE_SIZE)


class Enemy(Drawable):
    """Base of every enemy: walks, falls onto tiles and turns at walls.

    ``tile_map`` is the level the enemy walks on; without one nothing is
    solid. An enemy that has played out sets ``expired``; its owner then
    drops it.
    """

    def __init__(self) -> None:
        super().__init__()
        self.tile_map: TileGrid | None = None
        self.expired = False
        self.velocity_x = 150.0
        self.velocity_y = 500.0
        self.acceleration_y = 1500.0
        self.direction = 1

    @abstractmethod
    def is_dying(self) -> bool:
        """True while the enemy plays its death."""

    def is_dead(self) -> bool:
        """True once the enemy has fallen below the screen."""
        transform = self.get_component(TransformComponent)
        if transform is None:
            return False
        return transform.rect.y > WINDOW_HEIGHT

    def apply_physics(self, dt: float) -> None:
        """Move the enemy by dt seconds; a dying enemy stays where it is."""
        if not self.is_dying():
            self._apply_alive_physics(dt)

    def set_horizontal_velocity(self, velocity: float) -> None:
        self.velocity_x = velocity
        if velocity > 0.0:
            texture = self.get_component(TextureComponent)
            if texture is not None:
                texture.flip = FlipMode.HORIZONTAL

    def _solid(self, column: int, row: int) -> bool:
        return self.tile_map is not None and self.tile_map.get_tile_at(column, row) > 0

    def _apply_alive_physics(self, dt: float) -> None:
        transform = self.get_component(TransformComponent)
        if transform is None:
            raise RuntimeError(f"{type(self).__name__} has no transform")
        rect = transform.rect

        self.velocity_y += self.acceleration_y * dt

        left_col = _tile_index(rect.x + 1.0)
        right_col = _tile_index(rect.x + rect.w - 1.0)
        foot_row = _tile_index(rect.y + rect.h)

        if self._solid(left_col, foot_row) or self._solid(right_col, foot_row):
            self.velocity_y = 0.0
            rect.y = foot_row * _TILE_SIZE - rect.h

        head_row = _tile_index(rect.y)
        center_row = _tile_index(rect.y + rect.h / 2.0)
        obstacle_ahead = any(
            self._solid(column, row)
            for row in (head_row, center_row)
            for column in (left_col, right_col)
        )

        if obstacle_ahead:
            texture = self.get_component(TextureComponent)
            if self.direction < 0:
                if texture is not None:
                    texture.flip = FlipMode.HORIZONTAL
                self.direction = 1
                rect.x = left_col * _TILE_SIZE + _TILE_SIZE
            else:
                if texture is not None:
                    texture.flip = FlipMode.NONE
                self.direction = -1
                rect.x = right_col * _TILE_SIZE - rect.w

        transform.move(self.velocity_x * dt * self.direction, self.velocity_y * dt)

    def _draw(self, surface: pygame.Surface, transform: TransformComponent,
              texture: TextureComponent) -> None:
        draw_texture(
            surface,
            texture.get_texture(),
            transform.rect,
            texture.rect,
            transform.rotation,
            texture.flip,
        )
        self.debug_render(surface)


class Slime(Enemy):
    """A slow slime that dies when jumped on."""

    _HIT = 0
    _IDLE = 1

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 44.0 * 1.6, 30.0 * 1.6)

        self._texture = self.add_component(TextureComponent)
        self._texture.load_texture_from_file(
            TextureID.SLIME_IDLE, "assets/Enemies/Slime/Idle-Run (44x30).png"
        )
        self._texture.load_texture_from_file(
            TextureID.SLIME_HIT, "assets/Enemies/Slime/Hit (44x30).png"
        )
        self._texture.texture_id = TextureID.SLIME_IDLE
        self._texture.rect = FRect(0.0, 0.0, 44.0, 30.0)

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = self._IDLE
        self._animator.add_animation(
            self._IDLE, AnimationProperties((44.0, 30.0), 10, 0.75, True, TextureID.SLIME_IDLE)
        )
        self._animator.add_animation(
            self._HIT, AnimationProperties((44.0, 30.0), 5, 0.65, False, TextureID.SLIME_HIT)
        )

        self.set_horizontal_velocity(60.0)
        self._time_since_death = 0.0
        self._death_timer = 0.35

    def on_jump(self) -> None:
        self._animator.current_animation = self._HIT
        self.set_horizontal_velocity(0.0)

    def update(self, dt: float) -> None:
        self._animator.run(self._texture, dt)
        self.apply_physics(dt)

        if self._animator.ended():
            self._time_since_death += dt
            if self._time_since_death >= self._death_timer:
                self.expired = True

    def render(self, surface: pygame.Surface) -> None:
        self._draw(surface, self._transform, self._texture)

    def is_dying(self) -> bool:
        return self._animator.ended()


class _PigAnimation(IntEnum):
    IDLE = 0
    WALKING = 1
    RUNNING = 2
    HIT1 = 3
    HIT2 = 4


class AngryPig(Enemy):
    """A pig that starts walking when jumped on, then charges, then dies."""

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 64.0, 64.0)

        self._texture = self.add_component(TextureComponent)
        self._texture.texture_id = TextureID.ANGRYPIG_IDLE
        for texture_id, path in (
            (TextureID.ANGRYPIG_IDLE, "assets/Enemies/AngryPig/Idle (36x30).png"),
            (TextureID.ANGRYPIG_WALK, "assets/Enemies/AngryPig/Walk (36x30).png"),
            (TextureID.ANGRYPIG_RUNNING, "assets/Enemies/AngryPig/Run (36x30).png"),
            (TextureID.ANGRYPIG_HIT1, "assets/Enemies/AngryPig/Hit 1 (36x30).png"),
            (TextureID.ANGRYPIG_HIT2, "assets/Enemies/AngryPig/Hit 2 (36x30).png"),
        ):
            self._texture.load_texture_from_file(texture_id, path)

        self._animator = self.add_component(AnimatorComponent)
        self._animator.current_animation = _PigAnimation.IDLE
        frame = (36.0, 30.0)
        self._animator.add_animation(
            _PigAnimation.IDLE, AnimationProperties(frame, 9, 0.9, True, TextureID.ANGRYPIG_IDLE)
        )
        self._animator.add_animation(
            _PigAnimation.WALKING,
            AnimationProperties(frame, 16, 0.65, True, TextureID.ANGRYPIG_WALK),
        )
        self._animator.add_animation(
            _PigAnimation.RUNNING,
            AnimationProperties(frame, 12, 0.45, True, TextureID.ANGRYPIG_RUNNING),
        )
        self._animator.add_animation(
            _PigAnimation.HIT1, AnimationProperties(frame, 5, 0.35, False, TextureID.ANGRYPIG_HIT1)
        )
        self._animator.add_animation(
            _PigAnimation.HIT2, AnimationProperties(frame, 5, 0.75, False, TextureID.ANGRYPIG_HIT2)
        )

        self.set_horizontal_velocity(0.0)

    def on_jump(self) -> None:
        self._animator.reset()
        current = self._animator.current_animation
        if current == _PigAnimation.IDLE:
            self._animator.current_animation = _PigAnimation.WALKING
            self.set_horizontal_velocity(100.0)
        elif current == _PigAnimation.WALKING:
            self._animator.current_animation = _PigAnimation.HIT1
            self.set_horizontal_velocity(0.0)
        elif current == _PigAnimation.RUNNING:
            self._animator.current_animation = _PigAnimation.HIT2
            self.set_horizontal_velocity(0.0)

    def update(self, dt: float) -> None:
        self.apply_physics(dt)
        self._animator.run(self._texture, dt)

        if self._animator.ended():
            if self._animator.current_animation == _PigAnimation.HIT1:
                self._animator.current_animation = _PigAnimation.RUNNING
                self.set_horizontal_velocity(450.0)
            elif self._animator.current_animation == _PigAnimation.HIT2:
                self.expired = True

    def render(self, surface: pygame.Surface) -> None:
        draw_texture(
            surface,
            self._texture.get_texture(),
            self._transform.rect,
            self._texture.rect,
            0.0,
            self._texture.flip,
        )
        self.debug_render(surface)

    def is_dying(self) -> bool:
        return self._animator.current_animation in (_PigAnimation.HIT1, _PigAnimation.HIT2)


class SpikesState(Enum):
    IN = auto()
    OUT = auto()


class _TurtleAnimation(IntEnum):
    IDLE1 = 0
    SPIKES_IN = 1
    IDLE2 = 2
    SPIKES_OUT = 3
    HIT = 4


class Turtle(Enemy):
    """A turtle that cycles its spikes out and in; only safe to stomp without them."""

    def __init__(self) -> None:
        super().__init__()
        self._transform = self.add_component(TransformComponent)

        self._texture = self.add_component(TextureComponent)
        for texture_id, path in (
            (TextureID.TURTLE_IDLE1, "assets/Enemies/Turtle/Idle 1 (44x26).png"),
            (TextureID.TURTLE_IDLE2, "assets/Enemies/Turtle/Idle 2 (44x26).png"),
            (TextureID.TURTLE_SPIKES_IN, "assets/Enemies/Turtle/Spikes in (44x26).png"),
            (TextureID.TURTLE_SPIKES_OUT, "assets/Enemies/Turtle/Spikes out (44x26).png"),
            (TextureID.TURTLE_HIT, "assets/Enemies/Turtle/Hit (44x26).png"),
        ):
            self._texture.load_texture_from_file(texture_id, path)
        self._texture.texture_id = TextureID.TURTLE_IDLE1

        self._animator = self.add_component(AnimatorComponent)
        frame = (44.0, 26.0)
        self._animator.add_animation(
            _TurtleAnimation.IDLE1,
            AnimationProperties(frame, 14, 0.8, True, TextureID.TURTLE_IDLE1),
        )
        self._animator.add_animation(
            _TurtleAnimation.IDLE2,
            AnimationProperties(frame, 14, 0.8, True, TextureID.TURTLE_IDLE2),
        )
        self._animator.add_animation(
            _TurtleAnimation.SPIKES_IN,
            AnimationProperties(frame, 8, 0.6, False, TextureID.TURTLE_SPIKES_IN),
        )
        self._animator.add_animation(
            _TurtleAnimation.SPIKES_OUT,
            AnimationProperties(frame, 8, 0.6, False, TextureID.TURTLE_SPIKES_OUT),
        )
        self._animator.add_animation(
            _TurtleAnimation.HIT, AnimationProperties(frame, 5, 0.6, False, TextureID.TURTLE_HIT)
        )
        self._animator.current_animation = _TurtleAnimation.IDLE1

        self._spikes_delay = 2.0
        self._elapsed_time = 0.0

    def _update_alive_state(self, dt: float) -> None:
        self._elapsed_time += dt
        if self._elapsed_time >= self._spikes_delay or self._animator.ended():
            nxt = (self._animator.current_animation + 1) % 4
            self._animator.current_animation = nxt
            if nxt == _TurtleAnimation.IDLE1:
                self._spikes_delay = 2.5
            elif nxt == _TurtleAnimation.IDLE2:
                self._spikes_delay = 1.25
            self._elapsed_time = 0.0
            self._animator.reset()

    def on_jump(self) -> None:
        self._animator.current_animation = _TurtleAnimation.HIT
        self._animator.reset()

    def update(self, dt: float) -> None:
        if not self.is_dying():
            self._update_alive_state(dt)
        elif self._animator.ended():
            self.expired = True
        self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        self._draw(surface, self._transform, self._texture)

    def spike_state(self) -> SpikesState:
        if self._animator.current_animation in (
            _TurtleAnimation.IDLE1,
            _TurtleAnimation.SPIKES_OUT,
            _TurtleAnimation.SPIKES_IN,
        ):
            return SpikesState.OUT
        return SpikesState.IN

    def is_dying(self) -> bool:
        return self._animator.current_animation == _TurtleAnimation.HIT