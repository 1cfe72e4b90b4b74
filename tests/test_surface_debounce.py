from __future__ import annotations

import pytest

from memento_editor.surface import IdleDebouncer


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms / 1000.0


def test_poll_fires_once_after_idle_window() -> None:
    clock = FakeClock()
    debouncer = IdleDebouncer(1200, clock=clock)

    debouncer.reset()
    clock.advance(1199)
    assert debouncer.poll() is False

    clock.advance(1)
    assert debouncer.poll() is True
    assert debouncer.poll() is False
    assert debouncer.pending is False


def test_reset_pushes_deadline_back() -> None:
    clock = FakeClock()
    debouncer = IdleDebouncer(1000, clock=clock)

    debouncer.reset()
    clock.advance(800)
    debouncer.reset()
    clock.advance(800)

    assert debouncer.poll() is False
    assert debouncer.deadline == pytest.approx(clock.now + 0.2)

    clock.advance(200)
    assert debouncer.poll() is True


def test_cancel_disarms_timer() -> None:
    clock = FakeClock()
    debouncer = IdleDebouncer(500, clock=clock)

    debouncer.reset()
    debouncer.cancel()
    clock.advance(1000)

    assert debouncer.poll() is False
    assert debouncer.deadline is None


def test_force_fires_only_when_armed() -> None:
    debouncer = IdleDebouncer(500, clock=FakeClock())

    assert debouncer.force() is False
    debouncer.reset()
    assert debouncer.force() is True
    assert debouncer.pending is False


def test_delay_must_be_positive() -> None:
    with pytest.raises(ValueError):
        IdleDebouncer(0)
