"""Procedural sound effects for simulation events. No external files required."""
from __future__ import annotations
import math
import random
import struct
from typing import Iterable, Optional

import pygame

from .log import get_logger
from .session import (
    EVENT_ENEMY_DESTROYED,
    EVENT_FIRE,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_PLAYER_HIT,
    EVENT_WIN,
)

logger = get_logger(__name__)

SAMPLE_RATE = 22050


class SoundManager:
    """Generate small tones up front and play them when the simulation reports events."""
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.muted = False
        self.sounds = {}
        self._init_mixer()
        if self.enabled:
            self.sounds[EVENT_FIRE] = self._make_tone(880, 60, 0.2)
            self.sounds[EVENT_ENEMY_DESTROYED] = self._make_noise_pop(160, 0.3)
            self.sounds[EVENT_PLAYER_HIT] = self._make_sweep(440, 110, 300, 0.35)
            self.sounds[EVENT_LEVEL_UP] = self._make_sweep(660, 1320, 400, 0.3)
            self.sounds[EVENT_GAME_OVER] = self._make_sweep(440, 80, 900, 0.35)
            self.sounds[EVENT_WIN] = self._make_sweep(520, 1560, 900, 0.3)

    def _init_mixer(self):
        if not self.enabled:
            return
        try:
            pygame.mixer.pre_init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Audio unavailable, continuing silently: %s", e)
            self.enabled = False

    def _to_sound(self, buf: bytearray) -> Optional[pygame.mixer.Sound]:
        try:
            return pygame.mixer.Sound(buffer=bytes(buf))
        except pygame.error as e:
            logger.debug("Could not build sound: %s", e)
            return None

    def _make_tone(self, freq: int, ms: int, volume: float):
        return self._make_sweep(freq, freq, ms, volume)

    def _make_sweep(self, start_freq: int, end_freq: int, ms: int, volume: float):
        n = max(1, int(SAMPLE_RATE * (ms / 1000.0)))
        amp = 32767 * volume
        buf = bytearray()
        phase = 0.0
        for i in range(n):
            freq = start_freq + (end_freq - start_freq) * (i / n)
            phase += 2 * math.pi * freq / SAMPLE_RATE
            buf += struct.pack('<h', int(amp * (1.0 - i / n) * math.sin(phase)))
        return self._to_sound(buf)

    def _make_noise_pop(self, ms: int, volume: float):
        n = max(1, int(SAMPLE_RATE * (ms / 1000.0)))
        buf = bytearray()
        for i in range(n):
            decay = 1.0 - (i / n)
            buf += struct.pack('<h', int(32767 * volume * decay * (random.random() * 2 - 1)))
        return self._to_sound(buf)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        logger.info("Sound %s", "muted" if self.muted else "unmuted")
        return self.muted

    def play(self, name: str):
        if not self.enabled or self.muted:
            return
        snd = self.sounds.get(name)
        if snd is not None:
            snd.play()

    def play_all(self, events: Iterable[str]):
        for name in events:
            self.play(name)
