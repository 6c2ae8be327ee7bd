"""Sound effect loading and playback."""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path

import pygame

from .config import ENABLE_SOUND
from .resources import ResourceError

logger = logging.getLogger(__name__)


class SoundID(Enum):
    """Identifiers of the sound effects."""

    COLLECT_FRUIT = auto()
    JUMP = auto()
    HURT = auto()


class SoundManager:
    """Loads sound effects once and plays them on demand.

    When no audio device can be opened, sounds are still registered but
    playing them does nothing.
    """

    def __init__(self, mixer_enabled: bool = True) -> None:
        self._sounds: dict[SoundID, pygame.mixer.Sound | None] = {}
        self.available = False
        if mixer_enabled:
            try:
                pygame.mixer.init(frequency=44100, size=32, channels=2)
                self.available = True
            except pygame.error as exc:
                logger.warning("audio is unavailable: %s", exc)

    def __contains__(self, sound_id: object) -> bool:
        return sound_id in self._sounds

    def load_sound_from_file(self, sound_id: SoundID, path: str) -> None:
        """Load a sound once; later loads of the same id are ignored."""
        if sound_id in self._sounds:
            logger.warning("sound %s has already been loaded", sound_id.name)
            return
        if not Path(path).is_file():
            raise ResourceError(f"sound file {path!r} does not exist")
        sound = None
        if self.available:
            try:
                sound = pygame.mixer.Sound(path)
            except (pygame.error, OSError) as exc:
                raise ResourceError(f"cannot load sound {path!r}: {exc}") from exc
        self._sounds[sound_id] = sound

    def play_sound(self, sound_id: SoundID) -> None:
        """Play a loaded sound once."""
        if not ENABLE_SOUND:
            return
        try:
            sound = self._sounds[sound_id]
        except KeyError:
            raise ResourceError(f"sound {sound_id!r} is not loaded") from None
        if sound is not None:
            sound.play()


_manager: SoundManager | None = None


def get_sound_manager() -> SoundManager:
    """Return the shared sound manager, creating it on first use."""
    global _manager
    if _manager is None:
        _manager = SoundManager()
    return _manager