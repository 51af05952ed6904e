[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chaosparticles"
version = "0.95.0"
description = "Interactive 2D particle simulator with Verlet physics, collisions and mouse force fields"
requires-python = ">=3.10"
keywords = ["particles", "physics", "simulation", "verlet", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
chaosparticles = "chaosparticles.app:main"

[tool.hatch.build.targets.wheel]
packages = ["chaosparticles"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
