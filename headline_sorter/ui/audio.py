"""
Sound player - plays effects for game events and loops background music.
This is a THIN ADAPTER - no game logic here.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import pygame

from headline_sorter.gameplay.game import (
    GameEvent, IncorrectDropEvent, SuccessEvent, TimeoutFailEvent
)

logger = logging.getLogger(__name__)

SOUND_FILES = {
    "wrong": "wrong.wav",
    "correct": "correct-bin.wav",
}
MUSIC_FILE = "background.mp3"
MUSIC_VOLUME = 0.7


class SoundPlayer:
    """
    Reacts to game events with short sound effects.

    Every file is optional: missing files or a missing audio device just
    mean silence.
    """

    def __init__(self, sounds_dir: Path, muted: bool = False):
        self.sounds_dir = Path(sounds_dir)
        self.muted = muted
        self.enabled = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._music_loaded = False
        self._music_paused = False

    def init(self) -> None:
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning(f"Audio disabled: {exc}")
            return
        self.enabled = True

        for name, filename in SOUND_FILES.items():
            path = self.sounds_dir / filename
            if not path.exists():
                logger.info(f"Sound {path} not found, skipping")
                continue
            try:
                self._sounds[name] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.warning(f"Could not load sound {path}: {exc}")

        music = self.sounds_dir / MUSIC_FILE
        if music.exists():
            try:
                pygame.mixer.music.load(str(music))
                pygame.mixer.music.set_volume(MUSIC_VOLUME)
                self._music_loaded = True
            except pygame.error as exc:
                logger.warning(f"Could not load music {music}: {exc}")

        if self._music_loaded and not self.muted:
            pygame.mixer.music.play(loops=-1)

    def handle_events(self, events: Iterable[GameEvent]) -> None:
        for event in events:
            if isinstance(event, SuccessEvent):
                self._play("correct")
            elif isinstance(event, (IncorrectDropEvent, TimeoutFailEvent)):
                self._play("wrong")

    def toggle_mute(self) -> bool:
        """Toggle background music. Returns the new muted flag."""
        self.muted = not self.muted
        if self.enabled and self._music_loaded:
            if self.muted:
                pygame.mixer.music.pause()
                self._music_paused = True
            elif self._music_paused:
                # get_busy() is False while paused, so track it ourselves
                pygame.mixer.music.unpause()
                self._music_paused = False
            else:
                pygame.mixer.music.play(loops=-1)
        logger.info(f"Background music {'muted' if self.muted else 'unmuted'}")
        return self.muted

    def _play(self, name: str) -> None:
        sound: Optional[pygame.mixer.Sound] = self._sounds.get(name)
        if sound is None:
            return
        sound.stop()
        sound.play()
