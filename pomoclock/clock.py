"""Pomodoro phase state machine driven by wall-clock reconciled ticks."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import Settings

TICK_SECONDS = 1.0


class Phase(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        if self is Phase.WORK:
            return "work"
        if self is Phase.SHORT_BREAK:
            return "break"
        return "long break"


def phase_minutes(settings: Settings, phase: Phase) -> int:
    if phase is Phase.WORK:
        return settings.work_minutes
    if phase is Phase.SHORT_BREAK:
        return settings.short_break_minutes
    return settings.long_break_minutes


@dataclass(frozen=True)
class ClockSnapshot:
    """Immutable clock view handed to the renderer."""
    phase: Phase
    remaining_seconds: int
    duration_seconds: int
    running: bool
    completed_work_cycles: int
    cycle_position: int
    cycles_before_long_break: int


class PhaseClock:
    """Work/break cycle with a whole-second countdown.

    ``tick`` reconciles against a monotonic clock instead of counting loop
    iterations: the anchor moves forward by exactly the whole seconds that
    were applied, so fractions carry over to the next call.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        auto_continue: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings
        self._logger = logger or logging.getLogger("pomoclock.clock")
        self.auto_continue = auto_continue

        self.phase = Phase.WORK
        self.duration = self.duration_for(Phase.WORK)
        self.remaining = self.duration
        self.running = False
        self.completed_work_cycles = 0
        self.cycle_position = 0
        self._anchor: Optional[float] = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def duration_for(self, phase: Phase) -> int:
        return phase_minutes(self._settings, phase) * 60

    def apply_settings(self, settings: Settings) -> None:
        # The in-flight phase keeps its captured duration.
        self._settings = settings

    def snapshot(self) -> ClockSnapshot:
        return ClockSnapshot(
            phase=self.phase,
            remaining_seconds=self.remaining,
            duration_seconds=self.duration,
            running=self.running,
            completed_work_cycles=self.completed_work_cycles,
            cycle_position=self.cycle_position,
            cycles_before_long_break=self._settings.cycles_before_long_break,
        )

    def tick(self, now: Optional[float] = None) -> bool:
        """Apply elapsed whole seconds; True when a phase transition happened."""
        if not self.running:
            self._anchor = None
            return False
        if now is None:
            now = time.monotonic()
        if self._anchor is None:
            self._anchor = now
            return False
        elapsed = int(now - self._anchor)
        if elapsed <= 0:
            return False
        self._anchor += elapsed
        return self.elapse(elapsed)

    def elapse(self, seconds: int) -> bool:
        if not self.running or seconds <= 0:
            return False
        self.remaining = max(0, self.remaining - seconds)
        if self.remaining == 0:
            self.advance()
            return True
        return False

    def next_tick_in(self, now: Optional[float] = None) -> float:
        if not self.running or self._anchor is None:
            return TICK_SECONDS
        if now is None:
            now = time.monotonic()
        due = TICK_SECONDS - ((now - self._anchor) % TICK_SECONDS)
        return max(0.0, min(TICK_SECONDS, due))

    def toggle_running(self) -> None:
        if not self.running and self.remaining == 0:
            self.advance()
        self.running = not self.running
        self._anchor = None
        self._logger.info(
            "Clock %s: phase=%s remaining=%ss",
            "started" if self.running else "paused",
            self.phase.value,
            self.remaining,
        )

    def reset(self) -> None:
        self.duration = self.duration_for(self.phase)
        self.remaining = self.duration
        self._anchor = None
        self._logger.info("Phase reset: phase=%s duration=%ss", self.phase.value, self.duration)

    def restart(self) -> None:
        self.phase = Phase.WORK
        self.duration = self.duration_for(Phase.WORK)
        self.remaining = self.duration
        self.running = False
        self.completed_work_cycles = 0
        self.cycle_position = 0
        self._anchor = None
        self._logger.info("Session restarted")

    def skip(self) -> None:
        self._logger.info("Skipping phase=%s remaining=%ss", self.phase.value, self.remaining)
        self.advance()

    def advance(self) -> None:
        previous = self.phase
        if previous is Phase.WORK:
            self.completed_work_cycles += 1
            self.cycle_position += 1
            if self.cycle_position >= self._settings.cycles_before_long_break:
                self.phase = Phase.LONG_BREAK
                self.cycle_position = 0
            else:
                self.phase = Phase.SHORT_BREAK
        else:
            self.phase = Phase.WORK

        self.duration = self.duration_for(self.phase)
        self.remaining = self.duration
        if not self.auto_continue:
            self.running = False
        self._logger.info(
            "Phase %s -> %s: duration=%ss completed_work_cycles=%s running=%s",
            previous.value,
            self.phase.value,
            self.duration,
            self.completed_work_cycles,
            self.running,
        )
