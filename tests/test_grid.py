from dataclasses import dataclass

import pytest

from chaosparticles.grid import SpatialGrid
from chaosparticles.utility import Vec2


@dataclass(eq=False)
class Dot:
    position: Vec2


def dot(x, y):
    return Dot(Vec2(x, y))


@pytest.fixture
def grid():
    return SpatialGrid(800.0, 600.0, 60.0)


def test_nearby_includes_self_and_neighbours(grid):
    a = dot(100.0, 100.0)
    b = dot(130.0, 110.0)
    grid.insert(a)
    grid.insert(b)
    found = grid.nearby(a)
    assert a in found
    assert b in found
    assert len(found) == 2


def test_adjacent_cell_is_included(grid):
    a = dot(100.0, 100.0)
    b = dot(170.0, 170.0)
    grid.insert(a)
    grid.insert(b)
    assert b in grid.nearby(a)
    assert a in grid.nearby(b)


def test_distant_particle_is_excluded(grid):
    a = dot(10.0, 10.0)
    far = dot(500.0, 500.0)
    grid.insert(a)
    grid.insert(far)
    assert grid.nearby(a) == [a]


def test_clear_empties_grid(grid):
    a = dot(10.0, 10.0)
    grid.insert(a)
    grid.clear()
    assert grid.nearby(a) == []


def test_uninserted_query_sees_inserted_neighbours(grid):
    a = dot(200.0, 200.0)
    grid.insert(a)
    probe = dot(210.0, 190.0)
    assert grid.nearby(probe) == [a]


def test_none_is_ignored(grid):
    grid.insert(None)
    assert grid.nearby(None) == []


def test_cells_truncate_toward_zero(grid):
    left = dot(-30.0, 0.0)
    right = dot(30.0, 0.0)
    grid.insert(left)
    grid.insert(right)
    assert set(map(id, grid.nearby(left))) == {id(left), id(right)}


def test_nearby_order_follows_cell_scan(grid):
    lower_left = dot(10.0, 10.0)
    upper_right = dot(70.0, 10.0)
    centre = dot(10.0, 70.0)
    for p in (upper_right, centre, lower_left):
        grid.insert(p)
    assert grid.nearby(centre) == [lower_left, centre, upper_right]


def test_invalid_cell_size_raises():
    with pytest.raises(ValueError):
        SpatialGrid(800.0, 600.0, 0.0)