"""A reusable store of particle objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from .particle import Particle
from .utility import VectorLike

if TYPE_CHECKING:
    from .textures import TextureManager

MAX_AUTO_EXPAND_CAPACITY = 10000


class ParticlePool:
    """Hands out particles, growing on demand up to a fixed ceiling.

    Once the ceiling is reached, acquiring a particle recycles the one at the
    front of the active list.
    """

    MAX_AUTO_EXPAND_CAPACITY = MAX_AUTO_EXPAND_CAPACITY

    def __init__(
        self,
        initial_capacity: int = 1000,
        texture_manager: Optional[TextureManager] = None,
    ) -> None:
        if initial_capacity < 0:
            raise ValueError("capacity cannot be negative")
        self.texture_manager = texture_manager
        self._capacity = initial_capacity
        self._active: List[Particle] = []
        self._inactive: List[Particle] = [
            Particle(texture_manager) for _ in range(initial_capacity)
        ]

    def acquire(
        self,
        mass: float,
        position: VectorLike,
        velocity: VectorLike,
        color: Sequence[int],
    ) -> Optional[Particle]:
        """Initialise and activate a particle, or return None if none is free."""
        if not self._inactive:
            if self._capacity < MAX_AUTO_EXPAND_CAPACITY:
                self.expand(self._capacity // 2 if self._capacity > 0 else 16)
            elif self._active:
                self.release(self._active[0])

        if not self._inactive:
            return None

        particle = self._inactive.pop()
        particle.initialize(mass, position, velocity, color)
        self._active.append(particle)
        particle.pool_index = len(self._active) - 1
        return particle

    def release(self, particle: Optional[Particle]) -> None:
        """Return an active particle to the pool; anything else is ignored."""
        if particle is None or not self._active:
            return
        index = particle.pool_index
        if index is None or index >= len(self._active) or self._active[index] is not particle:
            return

        last = self._active[-1]
        self._active[index] = last
        last.pool_index = index
        self._active.pop()
        self._inactive.append(particle)

    def clear(self) -> None:
        """Deactivate every particle."""
        self._inactive.extend(self._active)
        self._active.clear()

    def expand(self, additional_capacity: int) -> None:
        """Add free particles, never growing past the ceiling."""
        if additional_capacity < 0:
            raise ValueError("cannot shrink the pool")
        if self._capacity + additional_capacity > MAX_AUTO_EXPAND_CAPACITY:
            additional_capacity = MAX_AUTO_EXPAND_CAPACITY - self._capacity
            if additional_capacity <= 0:
                return
        self._capacity += additional_capacity
        self._inactive.extend(
            Particle(self.texture_manager) for _ in range(additional_capacity)
        )

    def active(self) -> Tuple[Particle, ...]:
        """The active particles, in pool order."""
        return tuple(self._active)

    def active_count(self) -> int:
        """Number of particles in use."""
        return len(self._active)

    def inactive_count(self) -> int:
        """Number of particles free for reuse."""
        return len(self._inactive)

    def capacity(self) -> int:
        """Total number of particles the pool owns."""
        return self._capacity