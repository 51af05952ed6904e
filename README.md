# chaosparticles

An interactive 2D particle simulator. Particles are moved with Verlet
integration and feel gravity, air drag, collisions with each other and with
the window borders, optional pairwise repulsion, and a force field that
follows the mouse. Each particle leaves a fading trail, and its colour shifts
with its speed.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Running

```
chaosparticles
chaosparticles --width 1024 --height 768
```

This opens a resizable window, 800x600 unless `--width` and `--height` say
otherwise. Images are looked up by name, then in `assets/` and `sprites/`
under the working directory.

## Controls

| Input | Action |
|-------|--------|
| Left / right mouse button | Add a light (mass 2) / heavy (mass 10) particle at the cursor tip |
| G | Toggle gravity |
| R | Toggle repulsion (turns collisions off) |
| L | Toggle collisions (turns repulsion off) |
| M | Toggle the mouse force |
| N | Switch the mouse force between attract and repel (while it is on) |
| F | Cycle the force pattern: standard, vortex, pulse wave, force line |
| + / - | Raise or lower the mouse force strength (while it is on) |
| I / U | Raise or lower collision restitution |
| T | Switch the type of new particles between Original and Crystal |
| K | Cycle the cursor style |
| S | Show or hide the controls panel |
| C | Remove all particles |
| Space | Add 20 random particles |

## Using the library

The simulation runs without a window:

```python
from chaosparticles.system import ParticleSystem, PhysicsInputs

system = ParticleSystem(800, 600, None)
system.generate_random_particles(50, 1.0, 5.0)
system.update(1 / 60, PhysicsInputs())
print(system.particle_count())
```

- `chaosparticles.system.ParticleSystem` owns the particles and steps them;
  `PhysicsInputs` says which forces apply, and `ForceMode` picks the mouse
  force pattern. `trail_strips()` gives the trail geometry and `draw()`
  renders onto a pygame surface.
- `chaosparticles.physics.update_particles` is the integration step on its
  own, working in place on NumPy arrays of positions, velocities and
  accelerations.
- `chaosparticles.grid.SpatialGrid` is the uniform grid used to find
  neighbouring particles.
- `chaosparticles.pool.ParticlePool` reuses particle objects, growing up to
  10,000 particles.
- `chaosparticles.color` converts between 8-bit RGB and HSV.
- `chaosparticles.textures.TextureManager` caches loaded images and returns a
  magenta stand-in for images it cannot find.

## What it does not do

No images or fonts are shipped with the package. The window needs a font at
`assets/fonts/PressStart2P-Regular.ttf` (or `C:/Windows/Fonts/arial.ttf`) and
a cursor image at `assets/retromouse.png` or `assets/retromouse_alt.png`;
without them `chaosparticles` prints an error and exits. A missing background
falls back to a plain colour, and missing Crystal particle images (`1.png`,
`2.png`, `3.png`) fall back to the magenta stand-in.