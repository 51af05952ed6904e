"""Interactive window: user controls, status panel and the main loop."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

import pygame

from .cursor import Cursor
from .particle import Particle, ParticleType
from .system import ForceMode, ParticleSystem, PhysicsInputs
from .textures import TextureManager
from .utility import Vec2, VectorLike

if TYPE_CHECKING:
    pass

log = logging.getLogger(__name__)

WIDTH = 800
HEIGHT = 600
FRAME_RATE = 60
TIME_PER_FRAME = 1.0 / 60.0
ICON_FILE = "assets/icon.png"
BACKGROUND_FILE = "assets/background.png"
BACKGROUND_FALLBACK = (20, 20, 50)
FONT_FILES = ("assets/fonts/PressStart2P-Regular.ttf", "C:/Windows/Fonts/arial.ttf")
FONT_SIZE = 8
TEXT_POSITION = (10, 10)

HARMONIOUS_PALETTE = (
    (3, 169, 244),
    (156, 39, 176),
    (255, 87, 34),
    (76, 175, 80),
    (255, 193, 7),
)

FORCE_MODE_NAMES = {
    ForceMode.STANDARD: "Padrão",
    ForceMode.VORTEX: "Redemoinho",
    ForceMode.PULSE_WAVE: "Onda de Pulso",
    ForceMode.FORCE_LINE: "Linha de Força",
}

_rng = random.Random()


def _on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


class AppState:
    """Everything the user can toggle, plus the simulation and the cursor."""

    INITIAL_PARTICLES = 0
    DEFAULT_GRAVITY = 250.0
    DEFAULT_REPULSION = 5.0
    DEFAULT_RESTITUTION = 0.7
    DEFAULT_MOUSE_FORCE = 3750.0
    MIN_MOUSE_FORCE = 50.0
    MAX_MOUSE_FORCE = 25000.0
    MOUSE_FORCE_STEP = 250.0
    RESTITUTION_STEP = 0.05
    LIGHT_MASS = 2.0
    HEAVY_MASS = 10.0
    RANDOM_BATCH = 20

    def __init__(
        self,
        width: float,
        height: float,
        texture_manager: Optional[TextureManager] = None,
    ) -> None:
        self.gravitational_acceleration = self.DEFAULT_GRAVITY
        self.gravity_enabled = True
        self.repulsion_enabled = False
        self.collisions_enabled = True
        self.collision_restitution = self.DEFAULT_RESTITUTION
        self.particle_type = ParticleType.ORIGINAL
        self.instructions_visible = True
        self.force_mode = ForceMode.STANDARD
        self.mouse_force_enabled = False
        self.mouse_force_attract_mode = True
        self.mouse_force_strength = self.DEFAULT_MOUSE_FORCE
        self.mouse_position = Vec2()
        self.particle_system = ParticleSystem(width, height, texture_manager)
        self.cursor = Cursor()

    @property
    def particle_type_name(self) -> str:
        """Display name of the type new particles get."""
        return self.particle_type.value

    @property
    def force_mode_name(self) -> str:
        """Display name of the mouse force pattern."""
        return FORCE_MODE_NAMES[self.force_mode]

    def handle_key(self, key: int) -> None:
        """React to a pygame key code; unknown keys are ignored."""
        if key == pygame.K_g:
            self.gravity_enabled = not self.gravity_enabled
        elif key == pygame.K_r:
            self.repulsion_enabled = not self.repulsion_enabled
            if self.repulsion_enabled:
                self.collisions_enabled = False
        elif key == pygame.K_l:
            self.collisions_enabled = not self.collisions_enabled
            if self.collisions_enabled:
                self.repulsion_enabled = False
        elif key == pygame.K_c:
            while self.particle_system.particle_count() > 0:
                self.particle_system.remove_at(0)
        elif key == pygame.K_SPACE:
            for _ in range(self.RANDOM_BATCH):
                particle = self.particle_system.generate_random_particle(2.0, 2.0)
                if particle is not None:
                    particle.set_particle_type(self.particle_type)
        elif key == pygame.K_m:
            self.mouse_force_enabled = not self.mouse_force_enabled
            self.cursor.set_force_mode(self.mouse_force_enabled)
        elif key == pygame.K_n:
            if self.mouse_force_enabled:
                self.mouse_force_attract_mode = not self.mouse_force_attract_mode
        elif key in (pygame.K_KP_PLUS, pygame.K_EQUALS):
            if self.mouse_force_enabled:
                self.mouse_force_strength = min(
                    self.MAX_MOUSE_FORCE, self.mouse_force_strength + self.MOUSE_FORCE_STEP
                )
        elif key in (pygame.K_KP_MINUS, pygame.K_MINUS):
            if self.mouse_force_enabled:
                self.mouse_force_strength = max(
                    self.MIN_MOUSE_FORCE, self.mouse_force_strength - self.MOUSE_FORCE_STEP
                )
        elif key == pygame.K_k:
            self.cursor.cycle()
        elif key == pygame.K_s:
            self.instructions_visible = not self.instructions_visible
        elif key == pygame.K_i:
            self.collision_restitution = min(
                1.0, self.collision_restitution + self.RESTITUTION_STEP
            )
        elif key == pygame.K_u:
            self.collision_restitution = max(
                0.0, self.collision_restitution - self.RESTITUTION_STEP
            )
        elif key == pygame.K_t:
            if self.particle_type is ParticleType.ORIGINAL:
                self.particle_type = ParticleType.CRYSTAL
            else:
                self.particle_type = ParticleType.ORIGINAL
        elif key == pygame.K_f:
            self.force_mode = ForceMode((self.force_mode + 1) % len(ForceMode))

    def add_particle_at(self, position: VectorLike, heavy: bool = False) -> Optional[Particle]:
        """Add a particle where the cursor tip points, heavy for the right button."""
        spot = Vec2(*position) + self.cursor.tip_offset()
        velocity = (_rng.uniform(-50.0, 50.0), _rng.uniform(-50.0, 50.0))
        color = _rng.choice(HARMONIOUS_PALETTE)
        mass = self.HEAVY_MASS if heavy else self.LIGHT_MASS
        particle = self.particle_system.add_particle(mass, spot, velocity, color)
        if particle is not None:
            particle.set_particle_type(self.particle_type)
        return particle

    def physics_inputs(self) -> PhysicsInputs:
        """The inputs for one physics step, taken from the current state."""
        return PhysicsInputs(
            gravity_enabled=self.gravity_enabled,
            gravitational_acceleration=self.gravitational_acceleration,
            repulsion_enabled=self.repulsion_enabled,
            repulsion_strength=self.DEFAULT_REPULSION,
            collisions_enabled=self.collisions_enabled,
            collision_restitution=self.collision_restitution,
            mouse_force_enabled=self.mouse_force_enabled,
            mouse_position=self.mouse_position,
            mouse_force_strength=self.mouse_force_strength,
            mouse_force_attract_mode=self.mouse_force_attract_mode,
            force_mode=self.force_mode,
        )

    def status_text(self, fps: float) -> str:
        """The control panel text shown in the corner of the window."""
        restitution = f"{self.collision_restitution:.6f}"[:4]
        attract = "Atrair" if self.mouse_force_attract_mode else "Repelir"
        lines = [
            "Controles:",
            "Botão esquerdo/direito: Adicionar partícula",
            f"G: Gravidade ({_on_off(self.gravity_enabled)})",
            f"R: Repulsao ({_on_off(self.repulsion_enabled)})",
            f"L: Colisões ({_on_off(self.collisions_enabled)})",
            f"M: Força do Mouse ({_on_off(self.mouse_force_enabled)})",
            f"N: Modo da Força ({attract})",
            f"F: Padrão da Força ({self.force_mode_name})",
            f"+/-: Intensidade da Força ({int(self.mouse_force_strength)})",
            f"I/U: Restituição ({restitution})",
            f"T: Tipo de Partícula ({self.particle_type_name})",
            "K: Alternar Mouse",
            "S: Mostrar/Ocultar Controles",
            "C: Limpar Tudo | Espaço: Adicionar Aleatórias",
            "",
            f"Partículas: {self.particle_system.particle_count()}",
            f"FPS: {int(fps)}",
        ]
        return "\n".join(lines)


def _load_background() -> pygame.Surface:
    try:
        return pygame.image.load(BACKGROUND_FILE)
    except (pygame.error, OSError, FileNotFoundError):
        log.warning("could not load %s, using a fallback colour", BACKGROUND_FILE)
        surface = pygame.Surface((1, 1))
        surface.fill(BACKGROUND_FALLBACK)
        return surface


def _load_font() -> pygame.font.Font:
    for path in FONT_FILES:
        if Path(path).is_file():
            return pygame.font.Font(path, FONT_SIZE)
    raise RuntimeError("Font not found")


def _setup(window: pygame.Surface, state: AppState, textures: TextureManager):
    if Path(ICON_FILE).is_file():
        pygame.display.set_icon(pygame.image.load(ICON_FILE))
    else:
        log.warning("could not load %s", ICON_FILE)

    background = _load_background()
    font = _load_font()
    state.particle_system.generate_random_particles(AppState.INITIAL_PARTICLES, 1.0, 10.0)
    try:
        state.cursor.initialize(textures)
    except FileNotFoundError as exc:
        raise RuntimeError("could not initialise the cursor; check the cursor assets") from exc
    pygame.mouse.set_visible(False)
    return background, font


def _render(window, state, background, font, text):
    window.fill((0, 0, 0))
    window.blit(pygame.transform.scale(background, window.get_size()), (0, 0))
    state.particle_system.draw(window)
    if state.instructions_visible:
        x, y = TEXT_POSITION
        for line in text.split("\n"):
            if line:
                window.blit(font.render(line, True, (255, 255, 255)), (x, y))
            y += font.get_linesize()
    state.cursor.draw(window)
    pygame.display.flip()


def _run(width: int, height: int) -> int:
    window = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption("Chaos")
    textures = TextureManager()
    state = AppState(width, height, textures)
    background, font = _setup(window, state, textures)

    clock = pygame.time.Clock()
    accumulated = 0.0
    running = True
    while running:
        elapsed = clock.tick(FRAME_RATE) / 1000.0
        accumulated += elapsed

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                window = pygame.display.get_surface()
                state.particle_system.set_window_size(float(event.w), float(event.h))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                state.add_particle_at(event.pos, heavy=event.button == 3)
            elif event.type == pygame.KEYDOWN:
                state.handle_key(event.key)

        while accumulated > TIME_PER_FRAME:
            accumulated -= TIME_PER_FRAME
            state.particle_system.update(TIME_PER_FRAME, state.physics_inputs())

        mouse = pygame.mouse.get_pos()
        state.mouse_position = Vec2(*mouse)
        state.cursor.update(mouse, window.get_size())
        fps = 1.0 / elapsed if elapsed > 0.0001 else 0.0
        _render(window, state, background, font, state.status_text(fps))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the simulator window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="chaosparticles", description="Interactive 2D particle simulator."
    )
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    args = parser.parse_args(argv)

    pygame.init()
    try:
        return _run(args.width, args.height)
    except Exception as exc:
        print(f"ERRO FATAL: {exc}", file=sys.stderr)
        return -1
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())