"""Uniform spatial hash used to find neighbouring particles."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, DefaultDict, List, Tuple

Cell = Tuple[int, int]


class SpatialGrid:
    """Buckets particles by the cell their position falls in.

    Particles only need a ``position`` attribute with ``x`` and ``y``.
    Cell coordinates are truncated toward zero.
    """

    def __init__(self, width: float, height: float, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError("cell size must be positive")
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self._cells: DefaultDict[Cell, List[Any]] = defaultdict(list)

    def _cell_of(self, particle: Any) -> Cell:
        position = particle.position
        return int(position.x / self.cell_size), int(position.y / self.cell_size)

    def clear(self) -> None:
        """Remove every particle from the grid."""
        self._cells.clear()

    def insert(self, particle: Any) -> None:
        """Add a particle to the cell that holds its position."""
        if particle is None:
            return
        self._cells[self._cell_of(particle)].append(particle)

    def nearby(self, particle: Any) -> List[Any]:
        """Particles in the 3x3 block of cells around the particle's cell."""
        if particle is None:
            return []
        cx, cy = self._cell_of(particle)
        found: List[Any] = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                bucket = self._cells.get((cx + dx, cy + dy))
                if bucket:
                    found.extend(bucket)
        return found