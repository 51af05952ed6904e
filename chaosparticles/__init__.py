"""Interactive 2D particle simulator with Verlet physics and mouse force fields."""

__version__ = "0.95.0"