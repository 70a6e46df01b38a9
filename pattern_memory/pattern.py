from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import StrEnum

from .clock import RepeatingTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PatternConfig:
    pattern_length: int = 255
    symbol_count: int = 4
    playback_interval_s: float = 1.0

    def __post_init__(self) -> None:
        if not (1 <= self.pattern_length <= 255):
            raise ValueError("pattern_length must be in [1, 255]")
        if self.symbol_count < 1:
            raise ValueError("symbol_count must be >= 1")
        if self.playback_interval_s <= 0.0:
            raise ValueError("playback_interval_s must be > 0")


@dataclass(slots=True)
class GameState:
    pattern: list[int] = field(default_factory=list)
    interactive: bool = False
    max_idx: int = 0
    idx: int = 0

    def reset(self) -> None:
        self.pattern = []
        self.interactive = False
        self.max_idx = 0
        self.idx = 0


class PatternOutcome(StrEnum):
    NONE = "none"
    CUE = "cue"
    INPUT_OPEN = "input_open"
    CORRECT = "correct"
    ADVANCED = "advanced"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PatternStep:
    outcome: PatternOutcome
    symbol: int | None = None


_NOTHING = PatternStep(PatternOutcome.NONE)


def generate_pattern(rng: random.Random, *, length: int, symbol_count: int) -> list[int]:
    return [rng.randrange(symbol_count) for _ in range(length)]


class PatternEngine:
    """Plays back a growing prefix of a random pattern and judges reproduction.

    Playback (``interactive`` false): every timer interval either demonstrates
    ``pattern[idx]`` or, once the whole prefix up to ``max_idx`` has been
    shown, opens the input phase. Input (``interactive`` true): each press is
    compared with ``pattern[idx]``; completing the prefix grows it by one and
    returns to playback, a mismatch ends the playthrough.

    ``max_idx`` saturates at ``pattern_length - 1``: once the full pattern is
    reproduced it is replayed at the same length.
    """

    def __init__(self, *, config: PatternConfig | None = None, rng: random.Random | None = None) -> None:
        self._cfg = config or PatternConfig()
        self._rng = rng or random.Random()
        self._state = GameState()
        self._timer = RepeatingTimer(self._cfg.playback_interval_s)

    @property
    def config(self) -> PatternConfig:
        return self._cfg

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def timer(self) -> RepeatingTimer:
        return self._timer

    @property
    def interactive(self) -> bool:
        return self._state.interactive

    @property
    def score(self) -> int:
        return self._state.max_idx

    def start(self) -> None:
        self._timer.reset()
        self._state.reset()
        self._state.pattern = generate_pattern(
            self._rng,
            length=self._cfg.pattern_length,
            symbol_count=self._cfg.symbol_count,
        )

    def tick(self, dt: float) -> PatternStep:
        state = self._state
        if state.interactive or not state.pattern:
            return _NOTHING
        if not self._timer.tick(dt):
            return _NOTHING

        if state.idx > state.max_idx:
            state.interactive = True
            state.idx = 0
            logger.debug("Playback of %d symbols finished; awaiting input", state.max_idx + 1)
            return PatternStep(PatternOutcome.INPUT_OPEN)

        symbol = state.pattern[state.idx]
        logger.debug("Playing symbol %d for idx %d", symbol, state.idx)
        state.idx += 1
        return PatternStep(PatternOutcome.CUE, symbol)

    def press(self, symbol: int) -> PatternStep:
        if not (0 <= symbol < self._cfg.symbol_count):
            raise ValueError(f"symbol must be in [0, {self._cfg.symbol_count})")

        state = self._state
        if not state.interactive:
            return _NOTHING

        if symbol != state.pattern[state.idx]:
            logger.info("Wrong symbol %d at idx %d; final score %d", symbol, state.idx, state.max_idx)
            return PatternStep(PatternOutcome.FAILED, symbol)

        if state.idx < state.max_idx:
            state.idx += 1
            return PatternStep(PatternOutcome.CORRECT, symbol)

        state.idx = 0
        state.max_idx = min(state.max_idx + 1, len(state.pattern) - 1)
        state.interactive = False
        self._timer.reset()
        logger.debug("Prefix complete; max_idx now %d", state.max_idx)
        return PatternStep(PatternOutcome.ADVANCED, symbol)

    def all_symbols(self) -> tuple[int, ...]:
        return tuple(range(self._cfg.symbol_count))
