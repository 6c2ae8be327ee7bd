"""The player character: movement, animation and what it touches in the world."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Protocol

import pygame

from .components import (
    AnimationProperties,
    AnimatorComponent,
    ColliderComponent,
    FlipMode,
    FRect,
    TextureComponent,
    TransformComponent,
    draw_texture,
)
from .config import TextureID
from .enemies import AngryPig, Enemy, Slime, SpikesState, TileGrid, Turtle
from .entity import Drawable
from .fruit import Item
from .player_physics import Controls, JumpKind, PlayerBody, read_controls, tile_col, tile_row
from .sound import SoundID, get_sound_manager
from .tilemap import TILE_SIZE
from .traps import Arrow, ArrowType, FallingPlatform, Fan, FanType, Fire, Trampoline, Trap


class Anim(IntEnum):
    """Animations of the player."""

    IDLE = 1
    RUN = 2
    FALLING = 3
    JUMPING = 4
    HIT = 5
    DOUBLE_JUMP = 6
    APPEARING = 7
    SLIDE = 8


_TEXTURES = (
    (TextureID.NINJA_FROG_IDLE, "assets/Main_Characters/Ninja_Frog/Idle (32x32).png"),
    (TextureID.NINJA_FROG_RUN, "assets/Main_Characters/Ninja_Frog/Run (32x32).png"),
    (TextureID.NINJA_FROG_FALLING, "assets/Main_Characters/Ninja_Frog/Fall (32x32).png"),
    (TextureID.NINJA_FROG_JUMPING, "assets/Main_Characters/Ninja_Frog/Jump (32x32).png"),
    (TextureID.NINJA_FROG_HIT, "assets/Main_Characters/Ninja_Frog/Hit (32x32).png"),
    (TextureID.NINJA_FROG_DOUBLE_JUMP, "assets/Main_Characters/Ninja_Frog/Double Jump (32x32).png"),
    (TextureID.PLAYER_APPEARING, "assets/Main_Characters/Appearing (96x96).png"),
    (TextureID.NINJA_FROG_SLIDE, "assets/Main_Characters/Ninja_Frog/Wall Jump (32x32).png"),
)

_FRAME = (32.0, 32.0)
_ANIMATIONS = (
    (Anim.RUN, _FRAME, 12, 0.80, True, TextureID.NINJA_FROG_RUN),
    (Anim.IDLE, _FRAME, 11, 0.80, True, TextureID.NINJA_FROG_IDLE),
    (Anim.JUMPING, _FRAME, 1, 1.00, True, TextureID.NINJA_FROG_JUMPING),
    (Anim.FALLING, _FRAME, 1, 1.00, True, TextureID.NINJA_FROG_FALLING),
    (Anim.HIT, _FRAME, 7, 1.00, False, TextureID.NINJA_FROG_HIT),
    (Anim.DOUBLE_JUMP, _FRAME, 6, 0.35, False, TextureID.NINJA_FROG_DOUBLE_JUMP),
    (Anim.APPEARING, (96.0, 96.0), 7, 0.55, False, TextureID.PLAYER_APPEARING),
    (Anim.SLIDE, _FRAME, 4, 0.70, True, TextureID.NINJA_FROG_SLIDE),
)

_STOMP_MARGIN = 10.0
_COLLIDER_SCALE = (0.72, 1.0)


class WorldView(Protocol):
    """What the player needs from the world it lives in."""

    tile_map: TileGrid
    items: list[Item]
    traps: list[Trap]
    enemies: list[Enemy]

    def is_transitioning(self) -> bool: ...

    def destroy_item(self, item: Item, index: int) -> None: ...


class Player(Drawable):
    """The frog the user controls.

    Once its death animation has played, ``expired`` is set and the owner
    reloads the level. ``controls_source`` supplies the keys of each frame.
    """

    def __init__(self, world: WorldView | None = None) -> None:
        super().__init__()
        self.world = world

        self._transform = self.add_component(TransformComponent)
        self._transform.rect = FRect(0.0, 0.0, 64.0, 64.0)
        self._collider = self.add_component(ColliderComponent)
        self._texture = self.add_component(TextureComponent)
        self._texture.rect = FRect(0.0, 0.0, 32.0, 32.0)
        self._texture.texture_id = TextureID.NONE
        self._animator = self.add_component(AnimatorComponent)

        for texture_id, path in _TEXTURES:
            self._texture.load_texture_from_file(texture_id, path)
        get_sound_manager().load_sound_from_file(SoundID.JUMP, "assets/Sounds/Jump.wav")

        for anim, frame, count, duration, repeat, texture_id in _ANIMATIONS:
            self._animator.add_animation(
                anim, AnimationProperties(frame, count, duration, repeat, texture_id)
            )
        self._animator.current_animation = Anim.APPEARING

        self.body = PlayerBody(
            self._transform, self._collider, world.tile_map if world is not None else None
        )
        self.body.jump_listener = self._on_jump
        self.controls_source: Callable[[], Controls] = read_controls

        self.dead = False
        self.expired = False
        self.facing_right = True
        self.coord = (0, 0)

    @property
    def transform(self) -> TransformComponent:
        return self._transform

    @property
    def collider(self) -> ColliderComponent:
        return self._collider

    @property
    def animation(self) -> Anim:
        return Anim(self._animator.current_animation)

    def _is_transitioning(self) -> bool:
        return self.world is not None and self.world.is_transitioning()

    def _center(self) -> tuple[float, float]:
        r = self._transform.rect
        return r.x + r.w / 2.0, r.y + r.h / 2.0

    def _bottom(self) -> float:
        r = self._transform.rect
        return r.y + r.h

    def _on_jump(self, kind: JumpKind) -> None:
        self._animator.current_animation = (
            Anim.DOUBLE_JUMP if kind is JumpKind.DOUBLE else Anim.JUMPING
        )
        get_sound_manager().play_sound(SoundID.JUMP)

    def update(self, dt: float) -> None:
        if self._animator.current_animation == Anim.APPEARING:
            if not self._is_transitioning():
                self._animator.run(self._texture, dt)
            if self._animator.ended():
                self._animator.current_animation = Anim.FALLING
            return

        if self.dead:
            self._animator.current_animation = Anim.HIT
            if not self._is_transitioning():
                self._animator.run(self._texture, dt)
            if self._animator.ended():
                self.expired = True
            return

        cx, cy = self._center()
        self.coord = (int(cx / TILE_SIZE), int(cy / TILE_SIZE))
        self._collider.inflate(self._transform, *_COLLIDER_SCALE)

        body = self.body
        body.update_timers(dt)
        controls = self.controls_source()
        if not self._is_transitioning():
            body.step_input(dt, controls)
        body.detect_walls(dt, controls)
        body.apply_gravity(dt, controls)
        body.integrate_and_collide(dt)

        if self.world is not None:
            self.trap_interaction(dt)
            self.enemy_interaction(dt)
            self.collect_items()

        self.update_facing()
        self.update_animation()
        if not self._is_transitioning():
            self._animator.run(self._texture, dt)

    def render(self, surface: pygame.Surface) -> None:
        if self._texture.texture_id == TextureID.NONE:
            return
        body = self.body
        dst = self._transform.rect.copy()
        # Sliding: push the picture against the wall it clings to.
        if (body.on_wall or body.wall_stick_timer > 0.0) and body.velocity_y >= 0.0:
            inset = (self._transform.rect.w - self._collider.rect.w) * 0.8
            if body.wall_dir > 0:
                dst.x += inset
            elif body.wall_dir < 0:
                dst.x -= inset
        draw_texture(
            surface,
            self._texture.get_texture(),
            dst,
            self._texture.rect,
            self._transform.rotation,
            self._texture.flip,
        )
        self.debug_render(surface)

    def start_jump(self, velocity: float) -> None:
        """Jump upwards at the given speed."""
        self.body.start_jump(velocity)

    def die(self) -> None:
        """Start the death sequence; dying twice does nothing."""
        if self.dead:
            return
        self.dead = True
        get_sound_manager().play_sound(SoundID.HURT)

    def update_facing(self) -> None:
        """Face the wall while sliding, otherwise the direction of travel."""
        body = self.body
        if body.on_wall and body.velocity_y >= 0.0:
            self.facing_right = body.wall_dir > 0
        elif abs(body.velocity_x) > 1.0:
            self.facing_right = body.velocity_x >= 0.0
        self._texture.flip = FlipMode.NONE if self.facing_right else FlipMode.HORIZONTAL

    def update_animation(self) -> None:
        """Pick the animation that matches the movement state."""
        animator = self._animator
        if self.dead:
            animator.current_animation = Anim.HIT
            return
        if animator.current_animation == Anim.DOUBLE_JUMP and not animator.ended():
            return
        body = self.body
        if not body.on_ground:
            if body.on_wall and body.velocity_y >= 10.0:
                animator.current_animation = Anim.SLIDE
            else:
                animator.current_animation = (
                    Anim.FALLING if body.velocity_y > 50.0 else Anim.JUMPING
                )
            return
        animator.current_animation = Anim.RUN if abs(body.velocity_x) > 20.0 else Anim.IDLE

    def collect_items(self) -> None:
        """Pick up every item the player touches."""
        if self.world is None:
            return
        world = self.world
        for index in range(len(world.items) - 1, -1, -1):
            item = world.items[index]
            collider = item.get_component(ColliderComponent)
            if collider is not None and self._collider.collide(collider):
                world.destroy_item(item, index)

    def trap_interaction(self, dt: float) -> None:
        """React to every trap of the world."""
        if self.world is None:
            return
        for trap in list(self.world.traps):
            if isinstance(trap, Trampoline):
                self.handle_trampoline(trap)
            elif isinstance(trap, Fan):
                self.handle_fan(trap, dt)
            elif isinstance(trap, Arrow):
                self.handle_arrow(trap)
            elif isinstance(trap, FallingPlatform):
                self.handle_falling_platform(trap)
            elif isinstance(trap, Fire):
                self.handle_fire(trap)

    def enemy_interaction(self, dt: float) -> None:
        """React to every enemy of the world that is not already dying."""
        if self.world is None:
            return
        for enemy in list(self.world.enemies):
            if enemy.is_dying():
                continue
            if isinstance(enemy, Slime):
                self.handle_slime(enemy)
            elif isinstance(enemy, AngryPig):
                self.handle_angry_pig(enemy)
            elif isinstance(enemy, Turtle):
                self.handle_turtle(enemy)

    def handle_trampoline(self, trampoline: Trampoline) -> None:
        collider = trampoline.get_component(ColliderComponent)
        if collider is not None and self._collider.collide(collider):
            self.body.on_ground = False
            self.body.can_double_jump = True
            self.start_jump(1000.0)
            trampoline.on_jump()

    def handle_fan(self, fan: Fan, dt: float) -> None:
        if not fan.overlap(self._collider):
            return
        body = self.body
        if fan.fan_type is FanType.VERTICAL:
            body.on_ground = False
            body.velocity_y -= dt * body.GRAVITY * 4.0 * fan.distance_from_fan(self._collider)
        else:
            cx, cy = self._center()
            grid = body.tile_map
            tile = grid.get_tile_at(tile_col(cx + TILE_SIZE), tile_row(cy)) if grid else 0
            if tile == 0:
                body.velocity_x += 600.0 * dt * fan.distance_from_fan(self._collider)

    def handle_arrow(self, arrow: Arrow) -> None:
        if arrow.used:
            return
        transform = arrow.get_component(TransformComponent)
        if transform is None or not self._collider.rect.intersects(transform.rect):
            return
        arrow.on_hit()
        body = self.body
        body.can_double_jump = True
        kind = arrow.arrow_type
        if kind is ArrowType.UP:
            self.start_jump(700.0)
        elif kind is ArrowType.DOWN:
            body.velocity_y = 700.0
            body.on_ground = False
        elif kind is ArrowType.RIGHT:
            body.velocity_x = 600.0
        elif kind is ArrowType.LEFT:
            body.velocity_x = -600.0

    def handle_falling_platform(self, platform: FallingPlatform) -> None:
        transform = platform.get_component(TransformComponent)
        if transform is None or not self._collider.rect.intersects(transform.rect):
            return
        top = transform.rect.y
        if self._bottom() <= top + _STOMP_MARGIN:
            self.body.on_land(top)
            platform.on_hit()
            self._transform.rect.y = top - self._transform.rect.h + 1.0

    def handle_fire(self, fire: Fire) -> None:
        if fire.overlap_fire(self._collider) and fire.activated():
            self.die()
            return
        collider = fire.get_component(ColliderComponent)
        if collider is not None and self._collider.collide(collider):
            top = collider.rect.y
            if self._bottom() <= top + _STOMP_MARGIN:
                self.body.on_land(top)
                fire.on_hit(True)
                self._transform.rect.y = top - self._transform.rect.h + 1.0
        else:
            fire.on_hit(False)

    def _stomp(self, enemy: Slime | AngryPig) -> None:
        transform = enemy.get_component(TransformComponent)
        if transform is None or not self._collider.rect.intersects(transform.rect):
            return
        if self._bottom() <= transform.rect.y + _STOMP_MARGIN:
            self._transform.rect.y = transform.rect.y - self._transform.rect.h
            self.start_jump(750.0)
            enemy.on_jump()
        else:
            self.die()

    def handle_slime(self, slime: Slime) -> None:
        self._stomp(slime)

    def handle_angry_pig(self, pig: AngryPig) -> None:
        self._stomp(pig)

    def handle_turtle(self, turtle: Turtle) -> None:
        transform = turtle.get_component(TransformComponent)
        if transform is None or not self._collider.rect.intersects(transform.rect):
            return
        if turtle.spike_state() is SpikesState.OUT:
            self.die()
            return
        if self._bottom() <= transform.rect.y + _STOMP_MARGIN:
            self._transform.rect.y = transform.rect.y - self._transform.rect.h
            self.start_jump(750.0)
            turtle.on_jump()
        else:
            self.die()