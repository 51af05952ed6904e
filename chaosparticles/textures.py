"""Cache of image surfaces loaded from disk, with a magenta fallback."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Union

import pygame

log = logging.getLogger(__name__)

FALLBACK_KEY = "fallback"
FALLBACK_SIZE = (32, 32)
FALLBACK_COLOR = (255, 0, 255)
DEFAULT_SEARCH_DIRS = ("assets", "sprites")


class TextureManager:
    """Loads images once and hands out the cached surfaces.

    A name is looked up as given, then inside each search directory in turn.
    """

    def __init__(
        self, search_dirs: Iterable[Union[str, Path]] = DEFAULT_SEARCH_DIRS
    ) -> None:
        self.search_dirs = tuple(Path(d) for d in search_dirs)
        self._textures: Dict[str, pygame.Surface] = {}

    def _candidates(self, filename: str) -> Iterator[Path]:
        yield Path(filename)
        for directory in self.search_dirs:
            yield directory / filename

    def _load(self, filename: str) -> Optional[pygame.Surface]:
        for path in self._candidates(filename):
            if not path.is_file():
                continue
            try:
                return pygame.image.load(str(path))
            except (pygame.error, OSError):
                continue
        return None

    def _fallback(self) -> pygame.Surface:
        surface = self._textures.get(FALLBACK_KEY)
        if surface is None:
            surface = pygame.Surface(FALLBACK_SIZE)
            surface.fill(FALLBACK_COLOR)
            self._textures[FALLBACK_KEY] = surface
        return surface

    def get(self, filename: str) -> pygame.Surface:
        """The surface for a file, or the shared fallback if it cannot be loaded."""
        cached = self._textures.get(filename)
        if cached is not None:
            return cached
        surface = self._load(filename)
        if surface is not None:
            self._textures[filename] = surface
            return surface
        log.error("could not load texture %s - using fallback", filename)
        return self._fallback()

    def preload(self, filename: str) -> bool:
        """Load a file into the cache; report whether it is now available."""
        if self.is_loaded(filename):
            return True
        surface = self._load(filename)
        if surface is None:
            return False
        self._textures[filename] = surface
        return True

    def is_loaded(self, filename: str) -> bool:
        """Whether a name is in the cache."""
        return filename in self._textures

    def clear(self) -> None:
        """Forget every cached surface, the fallback included."""
        self._textures.clear()