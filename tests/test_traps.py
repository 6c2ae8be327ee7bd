import os
import wave

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from frogjump.components import (
    AnimatorComponent,
    ColliderComponent,
    FRect,
    TextureComponent,
    TransformComponent,
)
from frogjump.config import TextureID
from frogjump.resources import get_texture_store
from frogjump.sound import SoundID, get_sound_manager
from frogjump.traps import (
    Arrow,
    ArrowType,
    FallingPlatform,
    Fan,
    FanType,
    Fire,
    PlatformState,
    Trampoline,
    Trap,
)

COLOR = (10, 200, 30)


@pytest.fixture(autouse=True)
def textures():
    store = get_texture_store()
    for texture_id in TextureID:
        if texture_id is TextureID.NONE:
            continue
        surface = pygame.Surface((256, 64))
        surface.fill(COLOR)
        store.add(texture_id, surface)
    yield store
    store.clear()


@pytest.fixture
def sounds(tmp_path):
    path = tmp_path / "coin.wav"
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(44100)
        handle.writeframes(b"\x00\x00" * 200)
    manager = get_sound_manager()
    manager.load_sound_from_file(SoundID.COLLECT_FRUIT, str(path))
    return manager


def collider_at(x, y, w=10.0, h=10.0):
    collider = ColliderComponent()
    collider.rect = FRect(x, y, w, h)
    return collider


def test_trap_is_abstract():
    with pytest.raises(TypeError):
        Trap()


def test_trampoline_collider_after_update():
    trampoline = Trampoline()
    trampoline.update(0.01)
    transform = trampoline.get_component(TransformComponent).rect
    collider = trampoline.get_component(ColliderComponent).rect
    assert collider.w == pytest.approx(transform.w)
    assert collider.h == pytest.approx(transform.h * 0.2)
    assert transform.y < collider.y < transform.y + transform.h


def test_trampoline_jump_returns_to_idle():
    trampoline = Trampoline()
    animator = trampoline.get_component(AnimatorComponent)
    trampoline.on_jump()
    assert animator.current_animation == 1
    for _ in range(30):
        trampoline.update(0.1)
    assert animator.current_animation == 0


def test_trampoline_renders():
    trampoline = Trampoline()
    trampoline.update(0.01)
    target = pygame.Surface((100, 100))
    trampoline.render(target)
    assert tuple(target.get_at((32, 32)))[:3] == COLOR


def test_fan_overlap_vertical_projection():
    fan = Fan()
    fan.get_component(TransformComponent).rect = FRect(100.0, 400.0, 48.0, 16.0)
    fan.update(0.01)
    assert fan.projection.h > fan.projection.w
    assert fan.overlap(collider_at(110.0, 300.0))
    assert not fan.overlap(collider_at(500.0, 300.0))
    assert not fan.overlap(collider_at(110.0, 450.0))


def test_fan_switches_off_and_back_on():
    fan = Fan()
    fan.get_component(TransformComponent).rect = FRect(100.0, 400.0, 48.0, 16.0)
    inside = collider_at(110.0, 300.0)
    for _ in range(41):
        fan.update(0.1)
    assert not fan.overlap(inside)
    for _ in range(35):
        fan.update(0.1)
    assert fan.overlap(inside)


def test_fan_distance_strength_bounds():
    fan = Fan()
    fan.get_component(TransformComponent).rect = FRect(100.0, 400.0, 48.0, 16.0)
    assert fan.distance_from_fan(collider_at(110.0, 400.0)) == pytest.approx(0.5)
    fan.update(0.01)
    assert fan.distance_from_fan(collider_at(110.0, 400.0)) == pytest.approx(1.0)
    assert fan.distance_from_fan(collider_at(110.0, 0.0)) == pytest.approx(0.5)
    near = fan.distance_from_fan(collider_at(110.0, 390.0))
    far = fan.distance_from_fan(collider_at(110.0, 300.0))
    assert 0.5 <= far < near <= 1.0


def test_fan_horizontal_type():
    fan = Fan()
    assert fan.fan_type is FanType.VERTICAL
    fan.set_type(FanType.HORIZONTAL)
    assert fan.fan_type is FanType.HORIZONTAL
    assert fan.get_component(TransformComponent).rotation == 90.0
    fan.update(0.01)
    assert fan.projection.w > fan.projection.h


@pytest.mark.parametrize(
    "rotation, expected",
    [
        (0.0, ArrowType.UP),
        (90.0, ArrowType.RIGHT),
        (180.0, ArrowType.DOWN),
        (270.0, ArrowType.LEFT),
        (45.0, ArrowType.UP),
    ],
)
def test_arrow_direction(rotation, expected):
    arrow = Arrow()
    arrow.set_direction(rotation)
    assert arrow.arrow_type is expected
    assert arrow.get_component(TransformComponent).rotation == rotation


def test_arrow_idle_never_expires():
    arrow = Arrow()
    for _ in range(50):
        arrow.update(0.1)
    assert not arrow.used
    assert not arrow.expired


def test_arrow_hit_expires(sounds):
    arrow = Arrow()
    arrow.on_hit()
    assert arrow.used
    for _ in range(20):
        arrow.update(0.1)
    assert arrow.expired
    assert arrow.get_component(TextureComponent).texture_id == TextureID.ARROW_HIT


def test_falling_platform_bobs_in_place():
    platform = FallingPlatform()
    for _ in range(250):
        platform.update(0.02)
    assert platform.state is PlatformState.ON
    assert abs(platform.get_component(TransformComponent).rect.y) < 30.0


def test_falling_platform_falls_after_hit():
    platform = FallingPlatform()
    platform.on_hit()
    assert platform.state is PlatformState.OFF
    for _ in range(60):
        platform.update(0.02)
    assert platform.state is PlatformState.FALLING
    rect = platform.get_component(TransformComponent).rect
    start = rect.y
    platform.update(0.02)
    assert rect.y == pytest.approx(start + 580.0 * 0.02)
    assert platform.get_component(TextureComponent).texture_id == TextureID.FALLING_PLATFORM_OFF


def test_falling_platform_second_hit_ignored():
    platform = FallingPlatform()
    platform.on_hit()
    for _ in range(60):
        platform.update(0.02)
    platform.on_hit()
    assert platform.state is PlatformState.FALLING


def make_fire():
    fire = Fire()
    fire.get_component(TransformComponent).rect = FRect(0.0, 100.0, 32.0, 64.0)
    return fire


def test_fire_ignites_after_hit_animation():
    fire = make_fire()
    fire.update(0.01)
    assert not fire.activated()
    fire.on_hit(False)
    fire.update(0.05)
    assert not fire.activated()
    fire.on_hit(True)
    assert not fire.activated()
    for _ in range(40):
        fire.update(0.05)
    assert fire.activated()
    fire.on_hit(True)
    assert fire.activated()


def test_fire_projection_covers_flame_area():
    fire = make_fire()
    fire.update(0.01)
    fire.update(0.01)
    collider = fire.get_component(ColliderComponent).rect
    assert fire.projection.y == 100.0
    assert fire.projection.h == pytest.approx(collider.h)
    assert fire.overlap_fire(collider_at(5.0, 100.0))
    assert not fire.overlap_fire(collider_at(100.0, 100.0))


def test_fire_renders():
    fire = make_fire()
    fire.update(0.01)
    target = pygame.Surface((100, 200))
    fire.render(target)
    assert tuple(target.get_at((16, 120)))[:3] == COLOR