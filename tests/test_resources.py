import pygame
import pytest

from frogjump.config import TextureID
from frogjump.resources import ResourceError, TextureStore, get_texture_store


def _write_image(path, size):
    surface = pygame.Surface(size)
    surface.fill((10, 20, 30))
    pygame.image.save(surface, str(path))
    return str(path)


def test_add_then_get_returns_same_surface():
    store = TextureStore()
    surface = pygame.Surface((4, 4))
    store.add(TextureID.APPLE, surface)
    assert store.get(TextureID.APPLE) is surface
    assert TextureID.APPLE in store


def test_get_missing_raises():
    store = TextureStore()
    with pytest.raises(ResourceError):
        store.get(TextureID.KIWI)


def test_load_missing_file_raises(tmp_path):
    store = TextureStore()
    with pytest.raises(ResourceError):
        store.load(TextureID.KIWI, str(tmp_path / "missing.bmp"))
    assert TextureID.KIWI not in store


def test_load_reads_image(tmp_path):
    store = TextureStore()
    path = _write_image(tmp_path / "a.bmp", (7, 3))
    store.load(TextureID.MELON, path)
    assert store.get(TextureID.MELON).get_size() == (7, 3)


def test_second_load_keeps_first(tmp_path, caplog):
    store = TextureStore()
    first = _write_image(tmp_path / "a.bmp", (7, 3))
    second = _write_image(tmp_path / "b.bmp", (2, 2))
    store.load(TextureID.MELON, first)
    store.load(TextureID.MELON, second)
    assert store.get(TextureID.MELON).get_size() == (7, 3)
    assert "already" in caplog.text


def test_clear_forgets_textures():
    store = TextureStore()
    store.add(TextureID.ORANGE, pygame.Surface((1, 1)))
    store.clear()
    with pytest.raises(ResourceError):
        store.get(TextureID.ORANGE)


def test_shared_store_is_singleton():
    first = get_texture_store()
    assert isinstance(first, TextureStore)
    first.add(TextureID.STRAWBERRY, pygame.Surface((2, 2)))
    second = get_texture_store()
    assert second is first
    assert TextureID.STRAWBERRY in second