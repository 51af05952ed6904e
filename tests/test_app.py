import pygame
import pytest

from chaosparticles.app import AppState, main
from chaosparticles.cursor import CursorType
from chaosparticles.particle import ParticleType
from chaosparticles.system import ForceMode
from chaosparticles.utility import Vec2


@pytest.fixture
def state():
    return AppState(800, 600, None)


def test_defaults(state):
    assert state.gravity_enabled is True
    assert state.collisions_enabled is True
    assert state.repulsion_enabled is False
    assert state.mouse_force_strength == AppState.DEFAULT_MOUSE_FORCE
    assert state.particle_system.particle_count() == 0


def test_gravity_toggle(state):
    state.handle_key(pygame.K_g)
    assert state.gravity_enabled is False
    state.handle_key(pygame.K_g)
    assert state.gravity_enabled is True


def test_repulsion_and_collisions_exclude_each_other(state):
    state.handle_key(pygame.K_r)
    assert state.repulsion_enabled and not state.collisions_enabled
    state.handle_key(pygame.K_l)
    assert state.collisions_enabled and not state.repulsion_enabled


def test_attract_mode_needs_mouse_force(state):
    state.handle_key(pygame.K_n)
    assert state.mouse_force_attract_mode is True
    state.handle_key(pygame.K_m)
    assert state.cursor.force_active is True
    state.handle_key(pygame.K_n)
    assert state.mouse_force_attract_mode is False


def test_mouse_force_strength_limits(state):
    state.handle_key(pygame.K_EQUALS)
    assert state.mouse_force_strength == AppState.DEFAULT_MOUSE_FORCE
    state.handle_key(pygame.K_m)
    state.handle_key(pygame.K_KP_PLUS)
    assert state.mouse_force_strength == AppState.DEFAULT_MOUSE_FORCE + AppState.MOUSE_FORCE_STEP
    for _ in range(200):
        state.handle_key(pygame.K_EQUALS)
    assert state.mouse_force_strength == AppState.MAX_MOUSE_FORCE
    for _ in range(200):
        state.handle_key(pygame.K_MINUS)
    assert state.mouse_force_strength == AppState.MIN_MOUSE_FORCE


def test_restitution_limits(state):
    for _ in range(20):
        state.handle_key(pygame.K_i)
    assert state.collision_restitution == 1.0
    for _ in range(40):
        state.handle_key(pygame.K_u)
    assert state.collision_restitution == 0.0


def test_particle_type_toggle(state):
    state.handle_key(pygame.K_t)
    assert state.particle_type is ParticleType.CRYSTAL
    assert state.particle_type_name == "Crystal"
    state.handle_key(pygame.K_t)
    assert state.particle_type_name == "Original"


def test_force_mode_cycles(state):
    names = []
    for _ in range(4):
        state.handle_key(pygame.K_f)
        names.append(state.force_mode_name)
    assert names == ["Redemoinho", "Onda de Pulso", "Linha de Força", "Padrão"]
    assert state.force_mode is ForceMode.STANDARD


def test_space_adds_and_c_clears(state):
    state.handle_key(pygame.K_SPACE)
    assert state.particle_system.particle_count() == AppState.RANDOM_BATCH
    state.handle_key(pygame.K_c)
    assert state.particle_system.particle_count() == 0


def test_cursor_and_instructions_keys(state):
    state.handle_key(pygame.K_k)
    assert state.cursor.current_type() is CursorType.DEFAULT
    state.handle_key(pygame.K_s)
    assert state.instructions_visible is False


def test_add_particle_at_uses_cursor_tip(state):
    light = state.add_particle_at((100, 100))
    heavy = state.add_particle_at((200, 150), heavy=True)
    assert light.mass == AppState.LIGHT_MASS
    assert heavy.mass == AppState.HEAVY_MASS
    assert light.position == Vec2(100, 100) + state.cursor.tip_offset()
    assert state.particle_system.particle_count() == 2


def test_physics_inputs_mirror_state(state):
    state.handle_key(pygame.K_m)
    state.handle_key(pygame.K_f)
    state.mouse_position = Vec2(12.0, 34.0)
    inputs = state.physics_inputs()
    assert inputs.gravity_enabled == state.gravity_enabled
    assert inputs.gravitational_acceleration == AppState.DEFAULT_GRAVITY
    assert inputs.repulsion_strength == AppState.DEFAULT_REPULSION
    assert inputs.mouse_force_enabled is True
    assert inputs.force_mode is ForceMode.VORTEX
    assert inputs.mouse_position == Vec2(12.0, 34.0)


def test_status_text(state):
    text = state.status_text(60.7)
    assert "G: Gravidade (ON)" in text
    assert "I/U: Restituição (0.70)" in text
    assert "+/-: Intensidade da Força (3750)" in text
    assert text.endswith("Partículas: 0\nFPS: 60")
    state.handle_key(pygame.K_g)
    assert "G: Gravidade (OFF)" in state.status_text(0)


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit):
        main(["--bogus"])