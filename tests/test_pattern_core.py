from __future__ import annotations

import random

import pytest

from pattern_memory.clock import RepeatingTimer
from pattern_memory.pattern import (
    PatternConfig,
    PatternEngine,
    PatternOutcome,
    generate_pattern,
)


def _engine(seed: int = 11, **cfg: object) -> PatternEngine:
    engine = PatternEngine(config=PatternConfig(**cfg), rng=random.Random(seed))  # type: ignore[arg-type]
    engine.start()
    return engine


def _play_back(engine: PatternEngine) -> list[int]:
    """Tick whole intervals until the input phase opens; return the cued symbols."""
    cued: list[int] = []
    for _ in range(engine.config.pattern_length + 2):
        step = engine.tick(engine.config.playback_interval_s)
        if step.outcome is PatternOutcome.INPUT_OPEN:
            return cued
        assert step.outcome is PatternOutcome.CUE
        assert step.symbol is not None
        cued.append(step.symbol)
    raise AssertionError("input phase never opened")


def test_generated_patterns_have_fixed_length_and_alphabet() -> None:
    for seed in range(20):
        pattern = generate_pattern(random.Random(seed), length=255, symbol_count=4)
        assert len(pattern) == 255
        assert set(pattern) <= {0, 1, 2, 3}


def test_start_resets_state_and_timer() -> None:
    engine = _engine()
    state = engine.state
    assert len(state.pattern) == 255
    assert (state.max_idx, state.idx, state.interactive) == (0, 0, False)
    assert engine.timer.elapsed_s == 0.0


def test_playback_waits_for_accumulated_time() -> None:
    engine = _engine()
    assert engine.tick(0.25).outcome is PatternOutcome.NONE
    assert engine.tick(0.5).outcome is PatternOutcome.NONE
    step = engine.tick(0.25)
    assert step.outcome is PatternOutcome.CUE
    assert step.symbol == engine.state.pattern[0]
    assert engine.state.idx == 1


def test_playback_opens_input_after_prefix() -> None:
    engine = _engine()
    assert _play_back(engine) == engine.state.pattern[:1]
    assert engine.interactive
    assert engine.state.idx == 0


def test_ticks_are_ignored_during_input_phase() -> None:
    engine = _engine()
    _play_back(engine)
    for _ in range(5):
        assert engine.tick(1.0).outcome is PatternOutcome.NONE
    assert engine.state.idx == 0


def test_correct_prefix_advances_difficulty_each_round() -> None:
    engine = _engine(seed=3)
    for round_no in range(6):
        assert engine.state.max_idx == round_no
        cued = _play_back(engine)
        assert cued == engine.state.pattern[: round_no + 1]

        for i, symbol in enumerate(cued):
            step = engine.press(symbol)
            if i < len(cued) - 1:
                assert step.outcome is PatternOutcome.CORRECT
                assert engine.state.idx == i + 1
                assert engine.interactive

        assert step.outcome is PatternOutcome.ADVANCED
        assert engine.state.max_idx == round_no + 1
        assert engine.state.idx == 0
        assert not engine.interactive
        assert engine.timer.elapsed_s == 0.0


def test_wrong_press_fails_without_touching_max_idx() -> None:
    engine = _engine(seed=5)
    state = engine.state
    state.pattern = [0, 1, 2, 3] * 4
    state.max_idx = 2
    state.idx = 1
    state.interactive = True

    step = engine.press(3)
    assert step.outcome is PatternOutcome.FAILED
    assert state.max_idx == 2
    assert engine.score == 2


def test_press_outside_input_phase_is_ignored() -> None:
    engine = _engine()
    assert engine.press(engine.state.pattern[0]).outcome is PatternOutcome.NONE
    assert engine.state.max_idx == 0


def test_press_rejects_symbols_out_of_range() -> None:
    engine = _engine()
    with pytest.raises(ValueError):
        engine.press(4)
    with pytest.raises(ValueError):
        engine.press(-1)


def test_max_idx_saturates_at_pattern_end() -> None:
    engine = _engine(seed=9, pattern_length=3)
    for _ in range(5):
        for symbol in _play_back(engine):
            engine.press(symbol)
        assert engine.state.max_idx <= 2
    assert engine.state.max_idx == 2
    assert len(_play_back(engine)) == 3


def test_unstarted_engine_never_plays() -> None:
    engine = PatternEngine(rng=random.Random(1))
    for _ in range(3):
        assert engine.tick(1.0).outcome is PatternOutcome.NONE


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        PatternConfig(pattern_length=0)
    with pytest.raises(ValueError):
        PatternConfig(pattern_length=256)
    with pytest.raises(ValueError):
        PatternConfig(playback_interval_s=0.0)


def test_repeating_timer_carries_overshoot() -> None:
    timer = RepeatingTimer(1.0)
    assert not timer.tick(0.75)
    assert timer.tick(0.5)
    assert timer.elapsed_s == pytest.approx(0.25)
    timer.reset()
    assert timer.elapsed_s == 0.0


def test_repeating_timer_fires_on_deltas_from_clock_readings() -> None:
    # Readings that start off a frame boundary lose a few ulps when subtracted.
    readings = [1.0 / 60.0 + 1.0 / 60.0]
    for _ in range(4):
        readings.append(readings[-1] + 0.5)
    deltas = [b - a for a, b in zip(readings, readings[1:])]

    timer = RepeatingTimer(1.0)
    fired = [timer.tick(dt) for dt in deltas]
    assert fired == [False, True, False, True]
    assert timer.elapsed_s == pytest.approx(0.0, abs=1e-9)


def test_repeating_timer_does_not_fire_short_of_period() -> None:
    timer = RepeatingTimer(1.0)
    assert not timer.tick(0.999)
    assert not timer.tick(0.0)
    assert not timer.tick(-1.0)
    assert timer.tick(0.001)
