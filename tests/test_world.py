import pygame
import pytest

from frogjump.components import TransformComponent
from frogjump.config import TextureID
from frogjump.effects import DisappearingEffect
from frogjump.enemies import Slime
from frogjump.fruit import Fruit
from frogjump.player import Player
from frogjump.resources import get_texture_store
from frogjump.traps import Arrow, Fan
from frogjump.world import World


@pytest.fixture(autouse=True)
def textures():
    store = get_texture_store()
    store.clear()
    sheet = pygame.Surface((700, 100))
    for texture_id in TextureID:
        if texture_id != TextureID.NONE:
            store.add(texture_id, sheet)
    yield store
    store.clear()


def _center(entity):
    rect = entity.get_component(TransformComponent).rect
    return rect.x + rect.w / 2.0, rect.y + rect.h / 2.0


def test_create_item_sits_on_point():
    world = World()
    fruit = world.create_item(Fruit(), 100.0, 200.0)
    rect = fruit.get_component(TransformComponent).rect
    assert world.items == [fruit]
    assert rect.x == 100.0
    assert rect.y + rect.h == 200.0


def test_create_player_links_world():
    world = World()
    player = world.create_player(50.0, 300.0)
    rect = player.transform.rect
    assert world.player is player
    assert player.world is world
    assert player.body.tile_map is world.tile_map
    assert rect.y + rect.h == 300.0


def test_create_trap_and_enemy():
    world = World()
    fan = world.create_trap(Fan)
    slime = world.create_enemy(Slime)
    assert isinstance(fan, Fan)
    assert world.traps == [fan]
    assert world.enemies == [slime]
    assert slime.tile_map is world.tile_map


def test_destroy_item_leaves_effect_at_its_center():
    world = World()
    fruit = world.create_item(Fruit(), 100.0, 200.0)
    world.destroy_item(fruit, 0)
    assert world.items == []
    assert len(world.effects) == 1
    effect = world.effects[0]
    assert isinstance(effect, DisappearingEffect)
    assert _center(effect) == _center(fruit)


def test_destroy_trap_by_index_and_identity():
    world = World()
    first = world.create_trap(Fan)
    second = world.create_trap(Fan)
    third = world.create_trap(Fan)
    world.destroy_trap(second, 1)
    assert world.traps == [first, third]
    world.destroy_trap(third, -1)
    assert world.traps == [first]
    with pytest.raises(ValueError):
        world.destroy_trap(third, -1)


def test_player_collects_touched_item():
    world = World()
    fruit = world.create_item(Fruit(), 100.0, 200.0)
    fruit.update(0.0)
    player = world.create_player(100.0, 200.0)
    player.collider.inflate(player.transform, 0.72, 1.0)
    player.collect_items()
    assert world.items == []
    assert len(world.effects) == 1


def test_update_drops_used_arrow():
    world = World()
    world.create_item(Fruit(), 500.0, 500.0)
    arrow = world.create_trap(Arrow)
    arrow.on_hit()
    for _ in range(10):
        world.update(0.1)
    assert arrow not in world.traps
    assert len(world.items) == 1


def test_update_drops_stomped_slime():
    world = World()
    world.create_item(Fruit(), 500.0, 500.0)
    slime = world.create_enemy(Slime)
    slime.on_jump()
    for _ in range(20):
        world.update(0.1)
    assert slime not in world.enemies


def test_transition_state():
    world = World()
    assert not world.is_transitioning()
    world.transition.reset()
    assert world.is_transitioning()


def test_player_class_is_created():
    world = World()
    player = world.create_player(0.0, 64.0)
    assert isinstance(player, Player)
    assert player.transform.rect.y == 0.0