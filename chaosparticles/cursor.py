"""The custom mouse cursor drawn on top of the simulation."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import pygame

from .utility import Vec2, VectorLike

if TYPE_CHECKING:
    from .textures import TextureManager

log = logging.getLogger(__name__)

DEFAULT_TEXTURE = "assets/retromouse.png"
ALTERNATE_TEXTURE = "assets/retromouse_alt.png"
FORCE_TEXTURE = "assets/retromouse_force.png"
SKULL_TEXTURE = "assets/mouseskull.png"
SKULL_TIP_OFFSET = Vec2(-12.0, -27.0)


class CursorType(enum.IntEnum):
    """The cursor styles; FORCE is only shown while the mouse force is on."""

    DEFAULT = 0
    FORCE = 1
    SKULL = 2


_SCALES: Dict[CursorType, float] = {
    CursorType.DEFAULT: 0.04,
    CursorType.FORCE: 0.04,
    CursorType.SKULL: 0.06,
}

_TIP_OFFSETS: Dict[CursorType, Vec2] = {
    CursorType.DEFAULT: Vec2(-5.0, -5.0),
    CursorType.FORCE: Vec2(-5.0, -5.0),
    CursorType.SKULL: Vec2(35.0, 0.0),
}


def _load(manager: TextureManager, filename: str) -> Optional[pygame.Surface]:
    if manager.preload(filename):
        return manager.get(filename)
    return None


class Cursor:
    """A scaled sprite that follows the mouse and knows where its tip points."""

    def __init__(self) -> None:
        self.force_active = False
        self._type = CursorType.SKULL
        self.hotspot = Vec2()
        self.position = Vec2()
        self.textures: Dict[CursorType, pygame.Surface] = {}
        self._tip = _TIP_OFFSETS[self._type]

    @property
    def scale(self) -> float:
        """Scale factor applied to the current cursor texture."""
        return _SCALES[self._type]

    def initialize(self, texture_manager: TextureManager) -> None:
        """Load the cursor images; raise FileNotFoundError if none can be loaded."""
        default = _load(texture_manager, DEFAULT_TEXTURE)
        if default is None:
            log.error("could not load %s", DEFAULT_TEXTURE)
            default = _load(texture_manager, ALTERNATE_TEXTURE)
            if default is None:
                log.error("could not load the alternative cursor file")
                raise FileNotFoundError(
                    f"no cursor image found: {DEFAULT_TEXTURE} or {ALTERNATE_TEXTURE}"
                )
        self.textures[CursorType.DEFAULT] = default

        for cursor_type, filename in (
            (CursorType.FORCE, FORCE_TEXTURE),
            (CursorType.SKULL, SKULL_TEXTURE),
        ):
            texture = _load(texture_manager, filename)
            if texture is None:
                log.error("could not load %s", filename)
                texture = default
            self.textures[cursor_type] = texture

        width, height = self.textures[self._type].get_size()
        self.hotspot = Vec2(width * 0.5, height * 0.5)
        self._update_tip()

    def _update_tip(self) -> None:
        if self.force_active:
            self._tip = _TIP_OFFSETS[CursorType.FORCE]
        else:
            self._tip = _TIP_OFFSETS[self._type]

    def update(self, mouse_position: VectorLike, window_size: Tuple[int, int]) -> None:
        """Move the cursor to the mouse, kept inside the window."""
        mx, my = mouse_position
        width, height = window_size
        x = max(0, min(int(width) - 2, int(mx)))
        y = max(0, min(int(height) - 2, int(my)))
        self.position = Vec2(float(x), float(y))

    def set_force_mode(self, active: bool) -> None:
        """Tell the cursor whether the mouse force is on."""
        self.force_active = bool(active)
        self._update_tip()

    def cycle(self) -> CursorType:
        """Switch to the next selectable style, skipping FORCE; return it."""
        next_type = self._type + 1
        if next_type == CursorType.FORCE:
            next_type += 1
        if next_type >= len(CursorType):
            next_type = 0
        self._type = CursorType(next_type)
        self._update_tip()
        return self._type

    def current_type(self) -> CursorType:
        """The selected cursor style."""
        return self._type

    def tip_offset(self) -> Vec2:
        """Offset from the cursor position to the point the cursor indicates."""
        if not self.force_active and self._type is CursorType.SKULL:
            return SKULL_TIP_OFFSET
        return (self._tip - self.hotspot) * self.scale

    def draw(self, surface: pygame.Surface) -> None:
        """Blit the cursor onto a surface; does nothing before initialisation."""
        texture = self.textures.get(self._type)
        if texture is None:
            return
        scale = self.scale
        width, height = texture.get_size()
        size = (max(1, round(width * scale)), max(1, round(height * scale)))
        try:
            image = pygame.transform.smoothscale(texture, size)
        except ValueError:
            image = pygame.transform.scale(texture, size)
        corner = self.position - self.hotspot * scale
        surface.blit(image, (int(corner.x), int(corner.y)))