import pygame
import pytest

from frogjump.components import FlipMode, FRect, TextureComponent, TransformComponent
from frogjump.config import TextureID
from frogjump.enemies import Slime, Turtle
from frogjump.player import Anim, Player
from frogjump.player_physics import Controls, PlayerBody
from frogjump.resources import get_texture_store
from frogjump.tilemap import TILE_SIZE
from frogjump.traps import Arrow, FallingPlatform, PlatformState, Trampoline


@pytest.fixture(autouse=True)
def textures():
    store = get_texture_store()
    store.clear()
    sheet = pygame.Surface((700, 100))
    sheet.fill((255, 0, 0))
    for texture_id in TextureID:
        if texture_id != TextureID.NONE:
            store.add(texture_id, sheet)
    yield store
    store.clear()


class Floor:
    def __init__(self, row):
        self.row = row

    def get_tile_at(self, column, row):
        return 1 if row >= self.row else 0


class Keys:
    def __init__(self):
        self.controls = Controls()

    def __call__(self):
        return self.controls


def ready_player():
    player = Player()
    keys = Keys()
    player.controls_source = keys
    for _ in range(20):
        if player.animation != Anim.APPEARING:
            break
        player.update(0.1)
    return player, keys


def landed_player():
    player, keys = ready_player()
    player.body.tile_map = Floor(5)
    player.transform.rect = FRect(100.0, 0.0, 64.0, 64.0)
    for _ in range(200):
        player.update(1 / 60)
    return player, keys


def test_appearing_turns_into_falling():
    player, _ = ready_player()
    assert player.animation == Anim.FALLING


def test_lands_on_floor_and_idles():
    player, _ = landed_player()
    rect = player.transform.rect
    assert player.body.on_ground
    assert rect.y + rect.h == 5 * TILE_SIZE
    assert player.animation == Anim.IDLE


def test_running_reaches_walk_speed():
    player, keys = landed_player()
    keys.controls = Controls(right=True)
    for _ in range(120):
        player.update(1 / 60)
    assert player.body.velocity_x == PlayerBody.MAX_WALK_SPEED
    assert player.facing_right
    assert player.animation == Anim.RUN


def test_jump_from_ground():
    player, keys = landed_player()
    keys.controls = Controls(jump=True)
    player.update(1 / 60)
    assert player.body.velocity_y < 0
    assert not player.body.on_ground
    assert player.animation == Anim.JUMPING


def test_death_plays_hit_then_expires():
    player, _ = ready_player()
    player.die()
    assert player.dead
    for _ in range(20):
        player.update(0.2)
    assert player.animation == Anim.HIT
    assert player.expired


def _place(player, x, y):
    player.transform.rect = FRect(x, y, 64.0, 64.0)
    player.collider.inflate(player.transform, 0.72, 1.0)


def test_stomping_slime_bounces():
    player, _ = ready_player()
    slime = Slime()
    slime.get_component(TransformComponent).rect = FRect(100.0, 160.0, 70.4, 48.0)
    _place(player, 100.0, 100.0)
    player.handle_slime(slime)
    rect = player.transform.rect
    assert player.body.velocity_y == -750.0
    assert not player.dead
    assert rect.y + rect.h == 160.0


def test_touching_slime_from_side_kills():
    player, _ = ready_player()
    slime = Slime()
    slime.get_component(TransformComponent).rect = FRect(100.0, 160.0, 70.4, 48.0)
    _place(player, 100.0, 150.0)
    player.handle_slime(slime)
    assert player.dead


def test_turtle_with_spikes_kills_even_from_above():
    player, _ = ready_player()
    turtle = Turtle()
    turtle.get_component(TransformComponent).rect = FRect(100.0, 160.0, 64.0, 40.0)
    _place(player, 100.0, 100.0)
    player.handle_turtle(turtle)
    assert player.dead


def test_arrow_pushes_once():
    player, _ = ready_player()
    arrow = Arrow()
    arrow.set_direction(90.0)
    arrow.get_component(TransformComponent).rect = FRect(100.0, 100.0, 32.0, 32.0)
    _place(player, 90.0, 90.0)
    player.handle_arrow(arrow)
    assert player.body.velocity_x == 600.0
    assert arrow.used
    player.body.velocity_x = 0.0
    player.handle_arrow(arrow)
    assert player.body.velocity_x == 0.0


def test_trampoline_launches():
    player, _ = ready_player()
    trampoline = Trampoline()
    trampoline.get_component(TransformComponent).rect = FRect(100.0, 150.0, 64.0, 64.0)
    trampoline.update(0.0)
    player.body.can_double_jump = False
    _place(player, 100.0, 150.0)
    player.handle_trampoline(trampoline)
    assert player.body.velocity_y == -1000.0
    assert player.body.can_double_jump


def test_falling_platform_carries_player():
    player, _ = ready_player()
    platform = FallingPlatform()
    platform.get_component(TransformComponent).rect = FRect(100.0, 164.0, 64.0, 20.0)
    _place(player, 100.0, 105.0)
    player.handle_falling_platform(platform)
    rect = player.transform.rect
    assert player.body.on_ground
    assert rect.y + rect.h == 164.0 + 1.0
    assert platform.state is PlatformState.OFF


def test_facing_follows_velocity():
    player, _ = ready_player()
    player.body.velocity_x = -100.0
    player.update_facing()
    assert not player.facing_right
    assert player.get_component(TextureComponent).flip == FlipMode.HORIZONTAL


def test_airborne_fast_fall_uses_falling_animation():
    player, _ = ready_player()
    player.body.on_ground = False
    player.body.velocity_y = 100.0
    player.update_animation()
    assert player.animation == Anim.FALLING


def test_render_draws_texture():
    player, _ = ready_player()
    surface = pygame.Surface((200, 200))
    surface.fill((0, 0, 0))
    player.transform.rect = FRect(0.0, 0.0, 64.0, 64.0)
    player.render(surface)
    assert tuple(surface.get_at((32, 32)))[:3] == (255, 0, 0)