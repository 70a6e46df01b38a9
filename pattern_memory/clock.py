from __future__ import annotations

import math
import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction.

    The frame pipeline derives per-frame deltas from this interface rather
    than calling real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class RepeatingTimer:
    """Repeating interval timer driven by accumulated frame deltas.

    ``tick`` reports whether at least one interval boundary was crossed during
    the given delta. Overshoot carries into the next interval so the cadence
    stays independent of frame rate. Deltas derived from subtracting clock
    readings drift by a few ulps, so a boundary missed by less than
    ``_EPSILON_S`` still counts as reached.
    """

    _EPSILON_S = 1e-9

    def __init__(self, period_s: float) -> None:
        if period_s <= 0.0:
            raise ValueError("period_s must be > 0")
        self._period_s = float(period_s)
        self._elapsed_s = 0.0

    @property
    def elapsed_s(self) -> float:
        return self._elapsed_s

    def reset(self) -> None:
        self._elapsed_s = 0.0

    def tick(self, dt: float) -> bool:
        if dt <= 0.0:
            return False
        self._elapsed_s += float(dt)
        if self._elapsed_s + self._EPSILON_S < self._period_s:
            return False
        laps = math.floor((self._elapsed_s + self._EPSILON_S) / self._period_s)
        self._elapsed_s = max(0.0, self._elapsed_s - laps * self._period_s)
        return True
