import pygame
import pytest

from frogjump.components import TextureComponent, TransformComponent
from frogjump.config import TextureID
from frogjump.effects import DisappearingEffect, DustEmitter, Effect, TransitionEffect
from frogjump.resources import get_texture_store

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


def test_effect_is_abstract():
    with pytest.raises(TypeError):
        Effect()


def test_disappearing_effect_position_and_size():
    effect = DisappearingEffect(10.0, 20.0)
    rect = effect.get_component(TransformComponent).rect
    assert (rect.x, rect.y, rect.w, rect.h) == (10.0, 20.0, 32.0, 32.0)


def test_disappearing_effect_ends_after_animation():
    effect = DisappearingEffect(0.0, 0.0)
    assert not effect.ended()
    for _ in range(40):
        effect.update(0.1)
    assert effect.ended()
    texture = effect.get_component(TextureComponent)
    assert texture.texture_id == TextureID.DISAPPEARING_EFFECT
    assert texture.rect.x == pytest.approx(160.0)


def test_disappearing_effect_renders():
    effect = DisappearingEffect(100.0, 100.0)
    effect.update(0.01)
    target = pygame.Surface((300, 300))
    effect.render(target)
    assert tuple(target.get_at((116, 116)))[:3] == COLOR
    assert tuple(target.get_at((10, 10)))[:3] == (0, 0, 0)


def test_dust_emit_respects_rate():
    emitter = DustEmitter()
    emitter.emit(50.0, 100.0, 1.0)
    assert len(emitter.particles) == 1
    rect = emitter.particles[0].rect
    assert (rect.x, rect.y, rect.w, rect.h) == (50.0, 68.0, 32.0, 32.0)
    emitter.emit(50.0, 100.0, 1.0)
    assert len(emitter.particles) == 1
    emitter.update(0.1)
    emitter.update(0.1)
    emitter.emit(50.0, 100.0, 1.0)
    assert len(emitter.particles) == 2


@pytest.mark.parametrize("scalar", [1.0, -1.0])
def test_dust_drifts_and_shrinks(scalar):
    emitter = DustEmitter()
    emitter.emit(50.0, 100.0, scalar)
    emitter.update(0.05)
    rect = emitter.particles[0].rect
    assert rect.w < 32.0 and rect.h < 32.0
    assert rect.y < 68.0
    assert (rect.x - 50.0) * scalar > 0


def test_dust_particles_vanish():
    emitter = DustEmitter()
    emitter.emit(0.0, 0.0, 1.0)
    emitter.update(0.3)
    assert emitter.particles == []


def test_dust_clear():
    emitter = DustEmitter()
    emitter.emit(0.0, 0.0, 1.0)
    emitter.clear()
    assert emitter.particles == []


def test_transition_ended_before_reset():
    assert TransitionEffect().ended()


def test_transition_reset_lays_out_grid():
    effect = TransitionEffect()
    effect.reset()
    assert not effect.ended()
    assert len(effect.diamonds) == 18
    first = effect.diamonds[0].rect
    assert first.x == pytest.approx(TransitionEffect.MAX_SIZE / 4)
    assert first.y == pytest.approx(TransitionEffect.MAX_SIZE / 4)
    xs = sorted({round(d.rect.x, 3) for d in effect.diamonds})
    ys = sorted({round(d.rect.y, 3) for d in effect.diamonds})
    assert len(xs) == 6 and len(ys) == 3


def test_transition_keeps_diamond_centres():
    effect = TransitionEffect()
    effect.reset()
    diamond = effect.diamonds[0]
    before = (diamond.rect.x + diamond.rect.w / 2, diamond.rect.y + diamond.rect.h / 2)
    for _ in range(10):
        effect.update(0.02)
    after = (diamond.rect.x + diamond.rect.w / 2, diamond.rect.y + diamond.rect.h / 2)
    assert diamond.rect.w > 1.0
    assert after == pytest.approx(before)


def test_transition_first_of_row_moves_before_neighbours():
    effect = TransitionEffect()
    effect.reset()
    effect.update(0.01)
    assert effect.diamonds[0].elapsed_time > 0
    assert effect.diamonds[1].elapsed_time == 0


def test_transition_finishes():
    effect = TransitionEffect()
    effect.reset()
    for _ in range(2000):
        if effect.ended():
            break
        effect.update(0.01)
    assert effect.ended()


def test_transition_renders():
    effect = TransitionEffect()
    effect.reset()
    for _ in range(25):
        effect.update(0.02)
    target = pygame.Surface((1280, 720))
    effect.render(target)
    first = effect.diamonds[0].rect
    center = (int(first.x + first.w / 2), int(first.y + first.h / 2))
    assert tuple(target.get_at(center))[:3] == COLOR