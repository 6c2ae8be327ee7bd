"""The game window, its main loop and the command that starts it."""

from __future__ import annotations

from typing import Iterable, Sequence

import pygame

from .config import CAP_FPS, DEBUG_STATE, WINDOW_HEIGHT, WINDOW_WIDTH, MapID, TextureID
from .resources import ResourceError, get_texture_store
from .sound import SoundID, get_sound_manager
from .world import World

_FONT_PATH = "assets/Menu/Text/Coolvetica Rg.otf"


class Game:
    """Owns the window and runs the event, update and render loop.

    A surface may be given to draw on instead of opening a window.
    """

    def __init__(self, screen: pygame.Surface | None = None) -> None:
        self.world = World()
        self.screen = screen
        self.running = False
        self.dt = 0.0
        self._font: pygame.font.Font | None = None
        self._owns_display = False

    def _init(self) -> None:
        pygame.init()
        if self.screen is None:
            self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
            pygame.display.set_caption("Game")
            self._owns_display = True
        try:
            self._font = pygame.font.Font(_FONT_PATH, 48)
        except (OSError, FileNotFoundError) as exc:
            raise ResourceError(f"cannot open font {_FONT_PATH!r}: {exc}") from exc

        get_sound_manager().load_sound_from_file(SoundID.HURT, "assets/Sounds/hurt.wav")
        store = get_texture_store()
        store.load(TextureID.TERRAIN, "assets/Terrain/Terrain (16x16).png")
        store.load(TextureID.SHADOW, "assets/Other/Shadow.png")
        self.world.init()

    def _destroy(self) -> None:
        get_texture_store().clear()
        pygame.quit()

    def run(self) -> None:
        """Open the window and play until it is closed."""
        self._init()
        self.running = True
        last = 0
        try:
            while self.running:
                now = pygame.time.get_ticks()
                dt = (now - last) / 1000.0
                if CAP_FPS:
                    dt = min(dt, 1.0 / 144.0)
                self.dt = dt
                last = now

                self.handle_events(pygame.event.get())
                self.update(dt)
                self.render()
        finally:
            self._destroy()

    def handle_events(self, events: Iterable[pygame.event.Event]) -> None:
        """Quit on window close; the E key jumps to the first level."""
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_e:
                self.world.load_map(MapID.LEVEL_1)

    def update(self, dt: float) -> None:
        self.world.update(dt)

    def render(self) -> None:
        if self.screen is None:
            raise RuntimeError("the game has no screen to draw on")
        screen = self.screen
        screen.fill((255, 255, 255))
        self.world.render(screen)

        if DEBUG_STATE and self._font is not None:
            text = f"dt  {int(self.dt * 1000.0)}ms"
            rendered = self._font.render(text, False, (255, 255, 255))
            size = (int(len(text) * 8), 36)
            screen.fill((0, 0, 0), pygame.Rect((0, 0), size))
            screen.blit(pygame.transform.scale(rendered, size), (0, 0))

        if self._owns_display:
            pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game."""
    Game().run()
    return 0