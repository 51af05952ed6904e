"""A single simulated particle: motion state, colour, trail and sprite."""

from __future__ import annotations

import enum
import logging
import math
import random
from collections import deque
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Deque, List, Optional, Sequence, Tuple

import pygame

from .color import hsv_to_rgb, rgb_to_hsv
from .utility import Vec2, VectorLike, is_visible

if TYPE_CHECKING:
    from .textures import TextureManager

log = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]

MAX_TRAIL_LENGTH = 60
TRAIL_FADE_RATE = 0.85
TRAIL_ALPHA = 200
TRAIL_MIN_DISTANCE_SQ = 4.0
TRAIL_SPEED_FACTOR = 0.08
ROTATION_SPEED = 15.0
CRYSTAL_SCALE_FACTOR = 5.0
SPEED_COLOR_RANGE = 500.0
TRANSPARENT: Color = (0, 0, 0, 0)
WHITE: Color = (255, 255, 255, 255)

_rng = random.Random()


class ParticleType(enum.Enum):
    """How a particle's head is drawn."""

    ORIGINAL = "Original"
    CRYSTAL = "Crystal"


@dataclass(frozen=True)
class TrailPoint:
    """One point of a particle's trail."""

    position: Vec2
    color: Color

    def faded(self, rate: float) -> TrailPoint:
        """The same point with its alpha scaled down and truncated."""
        r, g, b, a = self.color
        return replace(self, color=(r, g, b, int(a * rate)))


def _rgba(color: Sequence[int]) -> Color:
    if len(color) == 3:
        r, g, b = color
        a = 255
    elif len(color) == 4:
        r, g, b, a = color
    else:
        raise ValueError("a colour needs three or four components")
    return int(r), int(g), int(b), int(a)


class Particle:
    """A massive disc that leaves a fading trail behind it."""

    MAX_TRAIL_LENGTH = MAX_TRAIL_LENGTH

    def __init__(self, texture_manager: Optional[TextureManager] = None) -> None:
        self.texture_manager = texture_manager
        self.position = Vec2()
        self.velocity = Vec2()
        self.acceleration = Vec2()
        self.mass = 1.0
        self.radius = 6.0
        self.color: Color = WHITE
        self.base_color: Color = WHITE
        self.particle_type = ParticleType.ORIGINAL
        self.texture: Optional[pygame.Surface] = None
        self.sprite_scale = 1.0
        self.rotation = 0.0
        self.color_pulse_phase = 0.0
        self.use_speed_color = True
        self.pool_index: Optional[int] = None
        self.soa_index: Optional[int] = None
        self._trail: Deque[TrailPoint] = deque(
            [TrailPoint(Vec2(), TRANSPARENT)], maxlen=MAX_TRAIL_LENGTH
        )

    def initialize(
        self,
        mass: float,
        position: VectorLike,
        velocity: VectorLike,
        color: Sequence[int],
    ) -> None:
        """Reset the particle to a fresh state."""
        self.velocity = Vec2(*velocity)
        self.acceleration = Vec2()
        self.mass = mass
        self.texture = None
        self.particle_type = ParticleType.ORIGINAL
        self.color_pulse_phase = 0.0
        self.use_speed_color = True
        self.radius = 5.0 + mass * 1.0

        r, g, b, a = _rgba(color)
        h, s, v = rgb_to_hsv(r, g, b)
        s = min(1.0, s * 1.3)
        v = min(1.0, v * 1.2)
        enhanced = (*hsv_to_rgb(h, s, v), a)

        self.base_color = enhanced
        self.color = enhanced
        self.position = Vec2(*position)
        self._trail = deque(
            [TrailPoint(self.position, enhanced)], maxlen=MAX_TRAIL_LENGTH
        )
        self.set_particle_type(self.particle_type)

    def _lookup_texture(self, filename: str) -> Optional[pygame.Surface]:
        if self.texture_manager is None:
            return None
        return self.texture_manager.get(filename)

    def set_particle_type(self, particle_type: ParticleType) -> None:
        """Switch drawing style; crystals pick one of three textures at random."""
        particle_type = ParticleType(particle_type)
        current = self.color
        self.particle_type = particle_type

        if particle_type is ParticleType.ORIGINAL:
            self.texture = None
            self._update_color()
            return

        texture_file = f"{_rng.randint(1, 3)}.png"
        texture = self._lookup_texture(texture_file)
        if texture is None or texture.get_width() == 0:
            texture = self._lookup_texture("assets/" + texture_file)

        if texture is not None and texture.get_width() > 0:
            self.texture = texture
            width, height = texture.get_size()
            self.sprite_scale = (self.radius * CRYSTAL_SCALE_FACTOR) / max(width, height)
            self.color = (*current[:3], 255)
        else:
            log.error("could not load texture %s", texture_file)
            self.particle_type = ParticleType.ORIGINAL
            self.texture = None
            r, g, b, _ = self.base_color
            self.color = (max(100, r), max(100, g), max(100, b), 255)

        self._update_color()

    def set_mass(self, mass: float, manage_radius: bool = True) -> None:
        """Change the mass, and by default the radius that follows from it."""
        self.mass = mass
        if manage_radius:
            self.radius = 5.0 + mass

    def _update_color(self) -> None:
        if not self.use_speed_color:
            self.color = (*self.base_color[:3], 255)
            return

        speed = self.velocity.length()
        h, s, v = rgb_to_hsv(*self.base_color[:3])
        if math.isnan(h) or math.isinf(h):
            h = 0.0
        s = max(0.5, min(1.0, s))
        v = max(0.5, min(1.0, v))

        speed_factor = min(1.0, speed / SPEED_COLOR_RANGE)
        new_hue = 240.0 - speed_factor * 240.0

        pulse = (math.sin(self.color_pulse_phase) + 1.0) * 0.1
        s = min(1.0, s + pulse)
        v = min(1.0, v + pulse)

        self.color = (*hsv_to_rgb(new_hue, s, v), 255)

    def update_visuals(self, dt: float) -> None:
        """Refresh colour, trail, pulse phase and rotation after a physics step."""
        current = self.position
        speed = self.velocity.length()
        target_length = max(1, min(MAX_TRAIL_LENGTH, int(speed * TRAIL_SPEED_FACTOR)))

        self._update_color()

        newest = self._trail[-1]
        moved = (current - newest.position).length_squared()
        if moved > TRAIL_MIN_DISTANCE_SQ or len(self._trail) <= 1:
            self._trail.append(TrailPoint(current, (*self.color[:3], TRAIL_ALPHA)))

        if len(self._trail) > target_length:
            self._trail.popleft()

        oldest, *rest = self._trail
        self._trail = deque(
            [oldest, *(point.faded(TRAIL_FADE_RATE) for point in rest)],
            maxlen=MAX_TRAIL_LENGTH,
        )

        self.color_pulse_phase += dt * 2.0
        if self.color_pulse_phase > 2.0 * math.pi:
            self.color_pulse_phase -= 2.0 * math.pi

        self.rotation = (self.rotation + ROTATION_SPEED * dt) % 360.0

    def apply_force(self, force: VectorLike) -> None:
        """Accumulate the acceleration a force produces on this mass."""
        fx, fy = force
        self.acceleration = self.acceleration + (fx / self.mass, fy / self.mass)

    def apply_drag(self, drag_coefficient: float) -> None:
        """Apply quadratic drag against the direction of motion."""
        speed_sq = self.velocity.length_squared()
        if speed_sq > 0.1:
            speed = math.sqrt(speed_sq)
            magnitude = drag_coefficient * speed_sq
            self.apply_force(-magnitude * (self.velocity / speed))

    def trail(self) -> List[TrailPoint]:
        """The visible trail, oldest point first."""
        return list(self._trail)

    def draw(
        self,
        surface: pygame.Surface,
        view_center: Optional[VectorLike] = None,
        view_size: Optional[VectorLike] = None,
    ) -> bool:
        """Draw the particle's head if it is in view; report whether it was drawn."""
        if view_size is None:
            view_size = surface.get_size()
        width, height = view_size
        if view_center is None:
            view_center = (width / 2, height / 2)
        cx, cy = view_center

        radius = self.radius
        if self.texture is not None:
            radius = self.sprite_scale * self.texture.get_width() * 0.5

        if not is_visible(self.position, radius, view_center, view_size):
            return False

        screen = (self.position.x - (cx - width / 2), self.position.y - (cy - height / 2))

        if self.particle_type is ParticleType.CRYSTAL and self.texture is not None:
            image = pygame.transform.rotozoom(self.texture, -self.rotation, self.sprite_scale)
            image.fill(self.color, special_flags=pygame.BLEND_RGBA_MULT)
            surface.blit(image, image.get_rect(center=screen))
        elif self.particle_type is ParticleType.ORIGINAL:
            pygame.draw.circle(surface, self.color, screen, radius)
        else:
            pygame.draw.circle(surface, WHITE, screen, radius)
        return True