import pygame
import pytest

from chaosparticles.textures import FALLBACK_COLOR, FALLBACK_SIZE, TextureManager


@pytest.fixture
def assets(tmp_path):
    directory = tmp_path / "assets"
    directory.mkdir()
    surface = pygame.Surface((4, 3))
    surface.fill((10, 20, 30))
    pygame.image.save(surface, str(directory / "1.bmp"))
    (directory / "broken.bmp").write_bytes(b"not an image")
    return directory


@pytest.fixture
def manager(assets, tmp_path):
    return TextureManager([assets, tmp_path / "sprites"])


def test_loads_from_search_directory(manager):
    surface = manager.get("1.bmp")
    assert surface.get_size() == (4, 3)
    assert manager.is_loaded("1.bmp")


def test_loads_direct_path(assets):
    manager = TextureManager([])
    path = str(assets / "1.bmp")
    assert manager.get(path).get_size() == (4, 3)


def test_get_is_cached(manager):
    first = manager.get("1.bmp")
    second = manager.get("1.bmp")
    assert first.get_size() == (4, 3)
    assert tuple(first.get_at((0, 0)))[:3] == (10, 20, 30)
    assert second is first


def test_missing_file_returns_magenta_fallback(manager):
    surface = manager.get("missing.bmp")
    assert surface.get_size() == FALLBACK_SIZE
    assert tuple(surface.get_at((0, 0)))[:3] == FALLBACK_COLOR
    assert not manager.is_loaded("missing.bmp")
    assert manager.is_loaded("fallback")


def test_fallback_is_shared(manager):
    assert manager.get("missing.bmp") is manager.get("broken.bmp")
    assert manager.get("fallback") is manager.get("missing.bmp")


def test_preload(manager):
    assert not manager.is_loaded("1.bmp")
    assert manager.preload("1.bmp")
    assert manager.is_loaded("1.bmp")
    assert manager.preload("1.bmp")


def test_preload_missing_does_not_create_fallback(manager):
    assert not manager.preload("missing.bmp")
    assert not manager.is_loaded("missing.bmp")
    assert not manager.is_loaded("fallback")


def test_clear_forgets_everything(manager):
    first = manager.get("1.bmp")
    manager.get("missing.bmp")
    manager.clear()
    assert not manager.is_loaded("1.bmp")
    assert not manager.is_loaded("fallback")
    assert manager.get("1.bmp") is not first
    assert manager.get("1.bmp").get_size() == (4, 3)