from __future__ import annotations

import logging
import math
from array import array

import pygame

logger = logging.getLogger(__name__)


class ToneCuePlayer:
    """Pygame mixer adapter that sounds one synthesized tone per pattern symbol.

    Several symbols in one call play together on separate channels (the
    failure chord). If the mixer cannot start, every cue is silent.
    """

    _sample_rate = 22050
    _amp = 32767
    _frequencies_hz: tuple[float, ...] = (392.0, 523.25, 659.25, 783.99)
    _duration_s = 0.40
    _attack_s = 0.004
    _decay_per_s = 9.0
    _pitch_drop = 0.18

    def __init__(self) -> None:
        self._available = False
        self._sounds: list[pygame.mixer.Sound] = []
        self._channels: list[pygame.mixer.Channel] = []

        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=self._sample_rate, size=-16, channels=1, buffer=512)
            pygame.mixer.set_num_channels(max(len(self._frequencies_hz), int(pygame.mixer.get_num_channels())))

            self._sounds = [pygame.mixer.Sound(buffer=self.render_drop_pcm(freq).tobytes()) for freq in self._frequencies_hz]
            self._channels = [pygame.mixer.Channel(i) for i in range(len(self._sounds))]
            self._available = True
        except (pygame.error, NotImplementedError) as exc:
            logger.warning("Audio unavailable, cues will be silent: %s", exc)
            self._available = False

    def play(self, symbols: tuple[int, ...]) -> None:
        if not self._available:
            return
        for symbol in symbols:
            idx = min(max(0, int(symbol)), len(self._sounds) - 1)
            self._channels[idx].play(self._sounds[idx])

    @classmethod
    def render_drop_pcm(cls, base_hz: float, *, gain: float = 0.30) -> array[int]:
        """Water-drop style cue: short attack, exponential decay, falling pitch."""
        sample_count = max(1, int(cls._sample_rate * cls._duration_s))
        attack_n = max(1, int(cls._sample_rate * cls._attack_s))
        out = array("h")
        phase = 0.0
        for idx in range(sample_count):
            t = idx / float(cls._sample_rate)
            # Pitch glides down from base_hz towards base_hz * (1 - _pitch_drop).
            freq = base_hz * (1.0 - cls._pitch_drop * (1.0 - math.exp(-t * cls._decay_per_s)))
            phase += 2.0 * math.pi * freq / float(cls._sample_rate)
            level = min(1.0, idx / float(attack_n)) * math.exp(-t * cls._decay_per_s)
            out.append(int(max(-1.0, min(1.0, math.sin(phase) * gain * level)) * cls._amp))
        return out
