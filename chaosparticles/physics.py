"""Verlet integration of particle state held in parallel arrays."""

from __future__ import annotations

import numpy as np

BASE_AIR_RESISTANCE = 0.002
DAMPING = 0.998
MIN_MASS = 0.0001


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the closed range [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def update_particles(
    positions: np.ndarray,
    previous_positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    masses: np.ndarray,
    radii: np.ndarray,
    dt: float,
    world_width: float,
    world_height: float,
    restitution: float,
) -> None:
    """Advance every particle one step, updating the arrays in place.

    Positions, previous positions, velocities and accelerations are (n, 2)
    arrays; masses and radii are (n,) arrays.  Air drag is added to the
    accelerations of particles with a non-negligible mass, the Verlet step is
    taken, velocities are damped, and particles are bounced off the edges of
    the world with the given restitution.
    """
    if dt <= 0:
        raise ValueError("time step must be positive")
    count = positions.shape[0] if positions.ndim == 2 else -1
    for name, array in (
        ("positions", positions),
        ("previous_positions", previous_positions),
        ("velocities", velocities),
        ("accelerations", accelerations),
    ):
        if array.shape != (count, 2):
            raise ValueError(f"{name} must have shape (n, 2)")
    for name, array in (("masses", masses), ("radii", radii)):
        if array.shape != (count,):
            raise ValueError(f"{name} must have shape (n,)")
    if count == 0:
        return

    massive = masses > MIN_MASS
    if np.any(massive):
        current_velocity = (positions[massive] - previous_positions[massive]) / dt
        drag_factor = BASE_AIR_RESISTANCE / masses[massive]
        accelerations[massive] += -current_velocity * drag_factor[:, None]

    new_positions = 2.0 * positions - previous_positions + accelerations * dt * dt
    previous_positions[...] = positions
    positions[...] = new_positions

    velocities[...] = (positions - previous_positions) / dt * DAMPING
    previous_positions[...] = positions - velocities * dt

    limits = (world_width, world_height)
    for axis, extent in enumerate(limits):
        coords = positions[:, axis]
        below = coords < radii
        above = ~below & (coords > extent - radii)
        bounced = below | above
        if not np.any(bounced):
            continue
        coords[below] = radii[below]
        coords[above] = extent - radii[above]
        velocities[bounced, axis] *= -restitution
        previous_positions[bounced, axis] = (
            coords[bounced] - velocities[bounced, axis] * dt
        )