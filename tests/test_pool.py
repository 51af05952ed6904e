import pytest

from chaosparticles.particle import Particle
from chaosparticles.pool import MAX_AUTO_EXPAND_CAPACITY, ParticlePool
from chaosparticles.utility import Vec2

COLOR = (100, 150, 200)


def acquire(pool, x=1.0, y=2.0):
    return pool.acquire(2.0, (x, y), (0.0, 0.0), COLOR)


def test_new_pool_is_all_inactive():
    pool = ParticlePool(5)
    assert pool.active_count() == 0
    assert pool.inactive_count() == 5
    assert pool.capacity() == 5


def test_acquire_initializes_particle():
    pool = ParticlePool(5)
    p = acquire(pool, 1.0, 2.0)
    assert p.position == Vec2(1.0, 2.0)
    assert p.mass == 2.0
    assert p.pool_index == 0
    assert pool.active() == (p,)
    assert pool.active_count() + pool.inactive_count() == pool.capacity()


def test_release_swaps_last_into_place():
    pool = ParticlePool(5)
    a, b, c = acquire(pool), acquire(pool), acquire(pool)
    pool.release(a)
    assert pool.active() == (c, b)
    assert c.pool_index == 0
    assert pool.inactive_count() == 3


def test_release_twice_is_ignored():
    pool = ParticlePool(5)
    a = acquire(pool)
    acquire(pool)
    pool.release(a)
    pool.release(a)
    assert pool.active_count() == 1
    assert pool.inactive_count() == 4


def test_release_foreign_or_none_is_ignored():
    pool = ParticlePool(5)
    acquire(pool)
    pool.release(Particle())
    pool.release(None)
    assert pool.active_count() == 1


def test_pool_indices_stay_consistent():
    pool = ParticlePool(10)
    particles = [acquire(pool, float(i)) for i in range(8)]
    for p in particles[::3]:
        pool.release(p)
    for index, p in enumerate(pool.active()):
        assert p.pool_index == index


def test_exhausted_pool_expands():
    pool = ParticlePool(4)
    for _ in range(5):
        assert acquire(pool) is not None
    assert pool.capacity() > 4
    assert pool.active_count() == 5
    assert pool.active_count() + pool.inactive_count() == pool.capacity()


def test_empty_pool_expands_by_sixteen():
    pool = ParticlePool(0)
    assert acquire(pool) is not None
    assert pool.capacity() == 16


def test_pool_of_one_cannot_grow():
    pool = ParticlePool(1)
    assert acquire(pool) is not None
    assert acquire(pool) is None
    assert pool.capacity() == 1


def test_expand_stops_at_ceiling():
    pool = ParticlePool(MAX_AUTO_EXPAND_CAPACITY - 10)
    pool.expand(100)
    assert pool.capacity() == MAX_AUTO_EXPAND_CAPACITY
    pool.expand(5)
    assert pool.capacity() == MAX_AUTO_EXPAND_CAPACITY


def test_full_pool_recycles_oldest():
    pool = ParticlePool(MAX_AUTO_EXPAND_CAPACITY)
    first = acquire(pool)
    for _ in range(MAX_AUTO_EXPAND_CAPACITY - 1):
        acquire(pool)
    recycled = acquire(pool, 7.0, 8.0)
    assert recycled is first
    assert recycled.position == Vec2(7.0, 8.0)
    assert pool.active_count() == MAX_AUTO_EXPAND_CAPACITY


def test_clear_deactivates_everything():
    pool = ParticlePool(5)
    for _ in range(3):
        acquire(pool)
    pool.clear()
    assert pool.active_count() == 0
    assert pool.inactive_count() == pool.capacity()


def test_expand_negative_rejected():
    pool = ParticlePool(5)
    with pytest.raises(ValueError):
        pool.expand(-1)


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        ParticlePool(-1)