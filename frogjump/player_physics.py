"""Platformer movement: running, jumping, wall sliding and tile collisions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

import pygame

from .components import ColliderComponent, FRect, TransformComponent
from .enemies import TileGrid
from .tilemap import TILE_SIZE

_EPSILON = 0.001
_PROBE_INSET = 2.0


@dataclass(frozen=True)
class Controls:
    """The state of the movement keys for one frame."""

    left: bool = False
    right: bool = False
    run: bool = False
    jump: bool = False


def read_controls() -> Controls:
    """Read the movement keys from the keyboard."""
    pressed = pygame.key.get_pressed()
    return Controls(
        left=bool(pressed[pygame.K_a]),
        right=bool(pressed[pygame.K_d]),
        run=bool(pressed[pygame.K_LSHIFT]),
        jump=bool(pressed[pygame.K_SPACE]),
    )


def tile_col(x: float) -> int:
    """Grid column that holds a horizontal coordinate."""
    return math.floor(x / TILE_SIZE)


def tile_row(y: float) -> int:
    """Grid row that holds a vertical coordinate."""
    return math.floor(y / TILE_SIZE)


class JumpKind(Enum):
    """Which kind of jump has just started."""

    NORMAL = auto()
    WALL = auto()
    DOUBLE = auto()


class PlayerBody:
    """Velocity, ground and wall state of the player, moved against a tile grid.

    ``jump_listener`` is told about every jump, so the owner can play sounds
    and switch animations.
    """

    MAX_WALK_SPEED = 240.0
    MAX_RUN_SPEED = 540.0
    RUN_BUILD_RATE = 4.5
    RUN_DECAY_RATE = 3.0

    GROUND_ACCEL = 5200.0
    AIR_ACCEL = 2600.0
    TURN_DECEL = 6400.0
    GROUND_FRICTION = 3200.0

    BASE_JUMP_VELOCITY = 620.0
    RUN_JUMP_BONUS = 140.0
    GRAVITY = 1800.0
    FALL_GRAVITY_MUL = 1.25
    LOW_JUMP_MUL = 1.7
    APEX_VY = 45.0
    APEX_GRAVITY_SCALE = 0.85
    MAX_FALL_SPEED = 1400.0
    DOUBLE_JUMP_VELOCITY = 560.0

    SKID_SPEED_THRESHOLD = 160.0

    COYOTE_TIME_MAX = 0.100
    JUMP_BUFFER_MAX = 0.120

    WALL_SLIDE_MAX_SPEED = 280.0
    WALL_SLIDE_GRAVITY_MUL = 0.60
    WALL_STICK_MAX = 0.150
    WALL_JUMP_H_VELOCITY = 420.0
    WALL_JUMP_V_VELOCITY = 640.0

    COLLIDER_SCALE = (0.72, 1.0)

    def __init__(
        self,
        transform: TransformComponent | None = None,
        collider: ColliderComponent | None = None,
        tile_map: TileGrid | None = None,
    ) -> None:
        if transform is None:
            transform = TransformComponent(FRect(0.0, 0.0, 64.0, 64.0))
        self.transform = transform
        self.collider = collider if collider is not None else ColliderComponent()
        self.tile_map = tile_map
        self.jump_listener: Callable[[JumpKind], None] | None = None

        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self.on_ground = False
        self.can_double_jump = True

        self.coyote_time = 0.0
        self.jump_buffer = 0.0
        self.jump_held_prev = False
        self.run_factor = 0.0

        self.on_wall = False
        self.wall_dir = 0
        self.wall_stick_timer = 0.0

    @property
    def rect(self) -> FRect:
        return self.transform.rect

    def _notify(self, kind: JumpKind) -> None:
        if self.jump_listener is not None:
            self.jump_listener(kind)

    def update_timers(self, dt: float) -> None:
        """Refresh coyote time on the ground, decay it and the jump buffer in the air."""
        if self.on_ground:
            self.coyote_time = self.COYOTE_TIME_MAX
        else:
            self.coyote_time = max(0.0, self.coyote_time - dt)
        self.jump_buffer = max(0.0, self.jump_buffer - dt)

    def step_input(self, dt: float, controls: Controls) -> None:
        """Apply running, turning, friction and jump input."""
        one_way = controls.right != controls.left
        if one_way and controls.run:
            self.run_factor = min(1.0, self.run_factor + self.RUN_BUILD_RATE * dt)
        else:
            self.run_factor = max(0.0, self.run_factor - self.RUN_DECAY_RATE * dt)

        max_speed = self.MAX_WALK_SPEED + (self.MAX_RUN_SPEED - self.MAX_WALK_SPEED) * self.run_factor

        if controls.jump and not self.jump_held_prev:
            self.jump_buffer = self.JUMP_BUFFER_MAX

        want = 0.0
        if one_way:
            want = 1.0 if controls.right else -1.0

        vx = self.velocity_x
        turning = want != 0.0 and ((vx > 0.0 and want < 0.0) or (vx < 0.0 and want > 0.0))
        if self.on_ground and turning and abs(vx) > self.SKID_SPEED_THRESHOLD:
            sign = 1.0 if vx > 0.0 else -1.0
            vx -= sign * self.TURN_DECEL * dt
            if (vx > 0.0 and sign < 0.0) or (vx < 0.0 and sign > 0.0):
                vx = 0.0
        else:
            target = want * max_speed
            accel = self.GROUND_ACCEL if self.on_ground else self.AIR_ACCEL
            delta = target - vx
            step = accel * dt
            if delta > step:
                vx += step
            elif delta < -step:
                vx -= step
            else:
                vx = target

            if self.on_ground and want == 0.0:
                if vx > 0.0:
                    vx = max(0.0, vx - self.GROUND_FRICTION * dt)
                if vx < 0.0:
                    vx = min(0.0, vx + self.GROUND_FRICTION * dt)
        self.velocity_x = vx

        self.consume_jump_if_ready(controls)

        if not controls.jump and self.jump_held_prev and self.velocity_y < 0.0:
            self.velocity_y *= 0.5

        self.jump_held_prev = controls.jump

    def detect_walls(self, dt: float, controls: Controls) -> None:
        """Start or keep a wall slide while airborne and pushing into a wall."""
        if self.on_ground:
            self.on_wall = False
            self.wall_dir = 0
            self.wall_stick_timer = 0.0
            return

        r = self.rect
        row_top = tile_row(r.y + _PROBE_INSET)
        row_bottom = tile_row(r.y + r.h - _PROBE_INSET)
        touch_left = self.col_has_solid(row_top, row_bottom, tile_col(r.x - _PROBE_INSET))
        touch_right = self.col_has_solid(row_top, row_bottom, tile_col(r.x + r.w + _PROBE_INSET))

        can_slide = self.velocity_y >= 0.0 and (
            (touch_left and controls.left) or (touch_right and controls.right)
        )
        if can_slide:
            self.on_wall = True
            self.wall_dir = -1 if touch_left else 1
            self.wall_stick_timer = self.WALL_STICK_MAX
        else:
            self.on_wall = False
            self.wall_dir = 0
            self.wall_stick_timer = max(0.0, self.wall_stick_timer - dt)

    def apply_gravity(self, dt: float, controls: Controls) -> None:
        """Accelerate downwards, lighter at the apex, heavier when falling."""
        g = self.GRAVITY
        if abs(self.velocity_y) < self.APEX_VY:
            g *= self.APEX_GRAVITY_SCALE
        if self.velocity_y > 0.0:
            g *= self.FALL_GRAVITY_MUL
        if self.velocity_y < 0.0 and not controls.jump:
            g *= self.LOW_JUMP_MUL
        if self.on_wall and self.velocity_y >= 0.0:
            g *= self.WALL_SLIDE_GRAVITY_MUL

        self.velocity_y += g * dt
        if self.on_wall and self.velocity_y > self.WALL_SLIDE_MAX_SPEED:
            self.velocity_y = self.WALL_SLIDE_MAX_SPEED
        if self.velocity_y > self.MAX_FALL_SPEED:
            self.velocity_y = self.MAX_FALL_SPEED

    def integrate_and_collide(self, dt: float) -> None:
        """Move by the velocity, stopping at solid tiles, then refit the collider."""
        dx = self.velocity_x * dt
        dy = self.velocity_y * dt
        self.resolve_vertical(dy)
        self.resolve_horizontal(dx)
        self.collider.inflate(self.transform, *self.COLLIDER_SCALE)

    def resolve_vertical(self, dy: float) -> None:
        """Move vertically, landing on floors and bumping into ceilings."""
        if abs(dy) < _EPSILON:
            return
        r = self.rect
        col_left = tile_col(r.x + _PROBE_INSET)
        col_right = tile_col(r.x + r.w - _PROBE_INSET)

        if dy > 0.0:
            start_bottom = r.y + r.h
            start_row = tile_row(start_bottom - _PROBE_INSET)
            end_row = tile_row(start_bottom + dy)
            for row in range(start_row + 1, end_row + 1):
                if self.row_has_solid(col_left, col_right, row):
                    r.y = row * TILE_SIZE - r.h
                    self.velocity_y = 0.0
                    self.on_land(row * TILE_SIZE)
                    return
            r.y += dy
            self.on_ground = False
        else:
            start_top = r.y
            start_row = tile_row(start_top + _PROBE_INSET)
            end_row = tile_row(start_top + dy)
            for row in range(start_row - 1, end_row - 1, -1):
                if self.row_has_solid(col_left, col_right, row):
                    r.y = (row + 1) * TILE_SIZE
                    self.on_bonk((row + 1) * TILE_SIZE)
                    return
            r.y += dy

    def resolve_horizontal(self, dx: float) -> None:
        """Move horizontally, stopping against walls."""
        if abs(dx) < _EPSILON:
            return
        r = self.rect
        row_top = tile_row(r.y + _PROBE_INSET)
        row_bottom = tile_row(r.y + r.h - _PROBE_INSET)

        if dx > 0.0:
            start_right = r.x + r.w
            start_col = tile_col(start_right - _PROBE_INSET)
            end_col = tile_col(start_right + dx)
            for col in range(start_col + 1, end_col + 1):
                if self.col_has_solid(row_top, row_bottom, col):
                    r.x = col * TILE_SIZE - r.w
                    self.velocity_x = 0.0
                    return
        else:
            start_left = r.x
            start_col = tile_col(start_left + _PROBE_INSET)
            end_col = tile_col(start_left + dx)
            for col in range(start_col - 1, end_col - 1, -1):
                if self.col_has_solid(row_top, row_bottom, col):
                    r.x = (col + 1) * TILE_SIZE
                    self.velocity_x = 0.0
                    return
        r.x += dx

    def _solid(self, column: int, row: int) -> bool:
        return self.tile_map is not None and self.tile_map.get_tile_at(column, row) > 0

    def row_has_solid(self, col_start: int, col_end: int, row: int) -> bool:
        """True when any tile of the row between the two columns is solid."""
        low, high = sorted((col_start, col_end))
        return any(self._solid(c, row) for c in range(low, high + 1))

    def col_has_solid(self, row_start: int, row_end: int, col: int) -> bool:
        """True when any tile of the column between the two rows is solid."""
        low, high = sorted((row_start, row_end))
        return any(self._solid(col, r) for r in range(low, high + 1))

    def consume_jump_if_ready(self, controls: Controls) -> None:
        """Start a wall jump, a ground jump or a double jump when one is due."""
        if self.jump_buffer > 0.0 and not self.on_ground and (
            self.on_wall or self.wall_stick_timer > 0.0
        ):
            direction = self.wall_dir or -1
            self.on_wall = False
            self.wall_stick_timer = 0.0
            self.can_double_jump = True
            self.velocity_y = -abs(self.WALL_JUMP_V_VELOCITY)
            self.velocity_x = -direction * self.WALL_JUMP_H_VELOCITY
            self.jump_buffer = 0.0
            self._notify(JumpKind.WALL)
            return

        if self.jump_buffer > 0.0 and (self.on_ground or self.coyote_time > 0.0):
            self.start_jump(self.BASE_JUMP_VELOCITY + self.RUN_JUMP_BONUS * self.run_factor)
            self.jump_buffer = 0.0
            return

        pressed = controls.jump and not self.jump_held_prev
        if pressed and not self.on_ground and self.can_double_jump:
            self.start_jump(self.DOUBLE_JUMP_VELOCITY)
            self.can_double_jump = False
            self._notify(JumpKind.DOUBLE)

    def start_jump(self, velocity: float) -> None:
        """Leave the ground upwards at the given speed."""
        self.on_ground = False
        self.velocity_y = -abs(velocity)
        self.coyote_time = 0.0
        self._notify(JumpKind.NORMAL)

    def on_land(self, platform_top: float) -> None:
        """Stand on a surface whose top is at the given height."""
        self.on_ground = True
        self.on_wall = False
        self.wall_dir = 0
        self.wall_stick_timer = 0.0
        self.can_double_jump = True
        self.velocity_y = 0.0

    def on_bonk(self, ceiling_bottom: float) -> None:
        """Stop rising after hitting a ceiling."""
        self.velocity_y = 0.0