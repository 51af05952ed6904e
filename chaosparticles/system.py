"""The particle world: forces, integration, collisions and drawing."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np
import pygame

from .grid import SpatialGrid
from .particle import Color, Particle
from .physics import update_particles
from .pool import ParticlePool
from .utility import Vec2, VectorLike

if TYPE_CHECKING:
    from .textures import TextureManager

INITIAL_POOL_CAPACITY = 1000
GRID_CELL_SIZE = 60.0
MIN_VALID_MASS = 0.0001
MAX_REPULSION_FORCE = 5000.0
MIN_REPULSION_DISTANCE = 5.0
MOUSE_INFLUENCE_RADIUS = 800.0
MOUSE_MIN_MASS = 1.0
VORTEX_ORBIT_RADIUS = 60.0
PULSE_STEP = 0.05
COLLISION_FRICTION = 0.9
CORRECTION_PERCENT = 0.5
CORRECTION_SLOP = 0.01
HEAD_POINT_COUNT = 12

TrailVertex = Tuple[Vec2, Color]

_rng = random.Random()


class ForceMode(enum.IntEnum):
    """Pattern of the force the mouse exerts."""

    STANDARD = 0
    VORTEX = 1
    PULSE_WAVE = 2
    FORCE_LINE = 3


@dataclass
class PhysicsInputs:
    """Everything one physics step needs to know from the user interface."""

    gravity_enabled: bool = False
    gravitational_acceleration: float = 0.0
    repulsion_enabled: bool = False
    repulsion_strength: float = 0.0
    collisions_enabled: bool = False
    collision_restitution: float = 0.7
    mouse_force_enabled: bool = False
    mouse_position: Vec2 = field(default_factory=Vec2)
    mouse_force_strength: float = 0.0
    mouse_force_attract_mode: bool = True
    force_mode: ForceMode = ForceMode.STANDARD

    def __post_init__(self) -> None:
        self.force_mode = ForceMode(self.force_mode)
        self.mouse_position = Vec2(*self.mouse_position)


class ParticleSystem:
    """Owns the particles of a rectangular world and steps them in time."""

    def __init__(
        self,
        width: float,
        height: float,
        texture_manager: Optional[TextureManager] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.texture_manager = texture_manager
        self._pool = ParticlePool(INITIAL_POOL_CAPACITY, texture_manager)
        self._grid = SpatialGrid(width, height, GRID_CELL_SIZE)
        self._pulse_time = 0.0
        self._positions = np.zeros((0, 2))
        self._velocities = np.zeros((0, 2))
        self._accelerations = np.zeros((0, 2))
        self._masses = np.zeros(0)
        self._radii = np.zeros(0)
        self._previous = np.zeros((0, 2))
        self._previous_valid = False

    def set_window_size(self, width: float, height: float) -> None:
        """Resize the world; particles are kept inside the new bounds on the next step."""
        self.width = width
        self.height = height
        self._grid = SpatialGrid(width, height, GRID_CELL_SIZE)

    def add_particle(
        self,
        mass: float,
        position: VectorLike,
        velocity: VectorLike,
        color: Sequence[int],
    ) -> Optional[Particle]:
        """Add a particle; if the pool is exhausted, free the oldest tenth and retry."""
        particle = self._pool.acquire(mass, position, velocity, color)
        if particle is None:
            to_release = self._pool.active_count() // 10
            if to_release > 0:
                for i in range(to_release):
                    live = self._pool.active()
                    if i >= len(live):
                        break
                    self._pool.release(live[i])
                particle = self._pool.acquire(mass, position, velocity, color)
        return particle

    def remove_particle(self, particle: Optional[Particle]) -> None:
        """Remove a particle; unknown particles are ignored."""
        if particle is not None:
            self._pool.release(particle)

    def remove_at(self, index: int) -> None:
        """Remove the particle at a position of the active list, if there is one."""
        active = self._pool.active()
        if 0 <= index < len(active):
            self._pool.release(active[index])

    def particle_count(self) -> int:
        """Number of live particles."""
        return self._pool.active_count()

    def particles(self) -> Tuple[Particle, ...]:
        """The live particles, in pool order."""
        return self._pool.active()

    def update(self, dt: float, inputs: PhysicsInputs) -> None:
        """Advance the world by dt seconds."""
        if dt <= 0:
            raise ValueError("time step must be positive")
        self._sync_to_arrays()

        if inputs.gravity_enabled:
            self._apply_gravity(inputs.gravitational_acceleration)
        if inputs.repulsion_enabled:
            self._apply_interactive_forces(inputs.repulsion_strength)
        if inputs.mouse_force_enabled:
            self._apply_mouse_force(
                inputs.mouse_position,
                inputs.mouse_force_strength,
                inputs.mouse_force_attract_mode,
                inputs.force_mode,
            )

        if not self._previous_valid or self._previous.shape != self._positions.shape:
            self._previous = self._positions - self._velocities * dt
            self._previous_valid = True

        update_particles(
            self._positions,
            self._previous,
            self._velocities,
            self._accelerations,
            self._masses,
            self._radii,
            dt,
            self.width,
            self.height,
            inputs.collision_restitution,
        )

        self._sync_from_arrays(dt)

        if inputs.collisions_enabled:
            self.handle_collisions(inputs.collision_restitution, dt)

    def _sync_to_arrays(self) -> None:
        active = self._pool.active()
        for index, particle in enumerate(active):
            particle.soa_index = index
        self._positions = np.array(
            [(p.position.x, p.position.y) for p in active], dtype=float
        ).reshape(-1, 2)
        self._velocities = np.array(
            [(p.velocity.x, p.velocity.y) for p in active], dtype=float
        ).reshape(-1, 2)
        self._masses = np.array([p.mass for p in active], dtype=float)
        self._radii = np.array([p.radius for p in active], dtype=float)
        self._accelerations = np.zeros_like(self._positions)

    def _sync_from_arrays(self, dt: float) -> None:
        for particle, (x, y), (vx, vy) in zip(
            self._pool.active(), self._positions, self._velocities
        ):
            particle.position = Vec2(float(x), float(y))
            particle.velocity = Vec2(float(vx), float(vy))
            particle.update_visuals(dt)

    def _apply_gravity(self, acceleration: float) -> None:
        self._accelerations[self._masses > MIN_VALID_MASS, 1] += acceleration

    def _fill_grid(self, active: Sequence[Particle]) -> None:
        self._grid.clear()
        for particle in active:
            self._grid.insert(particle)

    def _apply_interactive_forces(self, strength: float) -> None:
        active = self._pool.active()
        self._fill_grid(active)

        for p1 in active:
            for p2 in self._grid.nearby(p1):
                if p1.soa_index >= p2.soa_index:
                    continue
                delta = p1.position - p2.position
                dist_sq = delta.length_squared()
                if dist_sq <= 0.0001:
                    continue
                dist = math.sqrt(dist_sq)
                effective = max(dist, MIN_REPULSION_DISTANCE)
                magnitude = strength * p1.mass * p2.mass / (effective * effective)
                magnitude = min(magnitude, MAX_REPULSION_FORCE)
                fx = delta.x / dist * magnitude
                fy = delta.y / dist * magnitude

                if p1.mass > MIN_VALID_MASS:
                    self._accelerations[p1.soa_index] += (fx, fy)
                if p2.mass > MIN_VALID_MASS:
                    self._accelerations[p2.soa_index] -= (fx, fy)

    def _apply_mouse_force(
        self,
        mouse: Vec2,
        strength: float,
        attract: bool,
        mode: ForceMode,
    ) -> None:
        mode = ForceMode(mode)
        mouse = Vec2(*mouse)
        self._pulse_time += PULSE_STEP

        for index, ((px, py), mass) in enumerate(zip(self._positions, self._masses)):
            direction = mouse - (float(px), float(py))
            distance = direction.length()
            if not 0.01 < distance < MOUSE_INFLUENCE_RADIUS:
                continue

            normalized = min(1.0, distance / MOUSE_INFLUENCE_RADIUS)
            falloff = (1.0 - normalized) ** 2
            magnitude = strength * falloff / max(float(mass), MOUSE_MIN_MASS)
            if not attract:
                magnitude = -magnitude

            unit = direction / distance
            if mode is ForceMode.STANDARD:
                force = unit * magnitude
            elif mode is ForceMode.VORTEX:
                tangent = direction.perpendicular() / distance
                if distance > VORTEX_ORBIT_RADIUS:
                    radial = unit * magnitude * 2.0
                    swirl = tangent * magnitude * 0.5
                else:
                    push = magnitude * (1.0 - distance / VORTEX_ORBIT_RADIUS)
                    radial = -unit * push * 0.5
                    swirl = tangent * magnitude * 2.0
                force = radial + swirl
            elif mode is ForceMode.PULSE_WAVE:
                pulse = math.sin(self._pulse_time - distance * 0.05)
                force = unit * magnitude * pulse
            else:
                dx = mouse.x - float(px)
                line_falloff = max(0.0, 1.0 - abs(dx) / MOUSE_INFLUENCE_RADIUS)
                line_force = strength * line_falloff / max(float(mass), MOUSE_MIN_MASS)
                if dx < 0:
                    line_force = -line_force
                if not attract:
                    line_force = -line_force
                force = Vec2(line_force, 0.0)

            self._accelerations[index] += (force.x, force.y)

    def handle_collisions(self, restitution: float, dt: float) -> None:
        """Resolve overlapping pairs with impulses, friction and positional correction."""
        active = self._pool.active()
        for index, particle in enumerate(active):
            particle.soa_index = index
        if not self._previous_valid or self._previous.shape != (len(active), 2):
            self._previous = np.array(
                [tuple(p.position - p.velocity * dt) for p in active], dtype=float
            ).reshape(-1, 2)
            self._previous_valid = True
        self._fill_grid(active)

        for p1 in active:
            for p2 in self._grid.nearby(p1):
                if p1.soa_index >= p2.soa_index:
                    continue
                inv1 = 1.0 / p1.mass if p1.mass > MIN_VALID_MASS else 0.0
                inv2 = 1.0 / p2.mass if p2.mass > MIN_VALID_MASS else 0.0
                radius_sum = p1.radius + p2.radius
                delta = p1.position - p2.position
                dist_sq = delta.length_squared()
                if dist_sq >= radius_sum * radius_sum:
                    continue
                inv_sum = inv1 + inv2
                if inv_sum == 0.0:
                    continue

                distance = math.sqrt(dist_sq)
                normal = delta / distance if distance > 0.0001 else Vec2(1.0, 0.0)
                relative = p1.velocity - p2.velocity
                along_normal = relative.dot(normal)
                if along_normal > 0:
                    continue

                j = -(1.0 + restitution) * along_normal / inv_sum
                impulse = normal * j
                p1.velocity = p1.velocity + impulse * inv1
                p2.velocity = p2.velocity - impulse * inv2

                tangent = Vec2(-normal.y, normal.x)
                vt = relative.dot(tangent)
                tangent_impulse = tangent * (vt * COLLISION_FRICTION) / inv_sum
                p1.velocity = p1.velocity - tangent_impulse * inv1
                p2.velocity = p2.velocity + tangent_impulse * inv2

                penetration = max(radius_sum - distance - CORRECTION_SLOP, 0.0)
                correction = normal * (penetration / inv_sum) * CORRECTION_PERCENT
                p1.position = p1.position + correction * inv1
                p2.position = p2.position - correction * inv2

                for particle in (p1, p2):
                    self._previous[particle.soa_index] = tuple(
                        particle.position - particle.velocity * dt
                    )

    def generate_random_particles(
        self, count: int, min_mass: float = 1.0, max_mass: float = 5.0
    ) -> None:
        """Add count particles with random mass, colour, position and velocity."""
        for _ in range(count):
            self.generate_random_particle(min_mass, max_mass)

    def generate_random_particle(
        self, min_mass: float, max_mass: float
    ) -> Optional[Particle]:
        """Add one particle placed at random inside the world."""
        mass = _rng.uniform(min_mass, max_mass)
        color = tuple(int(_rng.uniform(0.0, 255.0)) for _ in range(3))
        x = _rng.uniform(0.0, self.width)
        y = _rng.uniform(0.0, self.height)
        vx = _rng.uniform(-50.0, 50.0)
        vy = _rng.uniform(-50.0, 50.0)
        return self.add_particle(mass, (x, y), (vx, vy), color)

    def trail_strips(self) -> List[List[TrailVertex]]:
        """One triangle strip per particle trail, two vertices per trail point."""
        strips: List[List[TrailVertex]] = []
        for particle in self._pool.active():
            trail = particle.trail()
            size = len(trail)
            if size < 2:
                continue
            strip: List[TrailVertex] = []
            for i, point in enumerate(trail):
                if i < size - 1:
                    direction = trail[i + 1].position - point.position
                else:
                    direction = point.position - trail[i - 1].position
                length = max(direction.length(), 0.1)
                perpendicular = Vec2(-direction.y / length, direction.x / length)

                ratio = i / (size - 1)
                ease = ratio * (2.0 - ratio)
                offset = perpendicular * (particle.radius * 0.7 * ease)
                strip.append((point.position - offset, point.color))
                strip.append((point.position + offset, point.color))
            strips.append(strip)
        return strips

    def draw(self, surface: pygame.Surface) -> None:
        """Draw trails with additive blending, then every particle head."""
        strips = self.trail_strips()
        if strips:
            overlay = pygame.Surface(surface.get_size())
            overlay.fill((0, 0, 0))
            for strip in strips:
                pairs = list(zip(strip[0::2], strip[1::2]))
                for (a_left, a_right), (b_left, b_right) in zip(pairs, pairs[1:]):
                    r, g, b, a = a_left[1]
                    color = (r * a // 255, g * a // 255, b * a // 255)
                    points = [
                        tuple(a_left[0]),
                        tuple(a_right[0]),
                        tuple(b_right[0]),
                        tuple(b_left[0]),
                    ]
                    pygame.draw.polygon(overlay, color, points)
            surface.blit(overlay, (0, 0), special_flags=pygame.BLEND_ADD)

        for particle in self._pool.active():
            self._draw_head(surface, particle)

    @staticmethod
    def _draw_head(surface: pygame.Surface, particle: Particle) -> None:
        pos = particle.position
        radius = particle.radius
        color = particle.color
        if particle.texture is not None:
            side = max(1, int(round(2 * radius)))
            image = pygame.transform.scale(particle.texture, (side, side))
            image.fill(color, special_flags=pygame.BLEND_RGBA_MULT)
            surface.blit(image, (pos.x - radius, pos.y - radius))
            return
        step = 2.0 * math.pi / HEAD_POINT_COUNT
        points = [
            (pos.x + radius * math.cos(k * step), pos.y + radius * math.sin(k * step))
            for k in range(HEAD_POINT_COUNT)
        ]
        pygame.draw.polygon(surface, color, points)