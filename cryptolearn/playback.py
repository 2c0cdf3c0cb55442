"""Playback Sequencer: a read-only cursor over a generated trace.

States::

    IDLE --load--> READY --next/jump/play--> ADVANCING / PAUSED --> COMPLETE

Autoplay is a chain of one-shot ticks obtained from a :class:`Scheduler`.
The pending tick is cancelled whenever playback stops, a new trace is
loaded, or the cursor reaches the last step. Each tick also carries the
generation it was scheduled in, so a tick that was already firing when it
got cancelled still cannot touch a newer trace.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Optional

from .config import load_settings
from .exceptions import EmptyTrace, SequencerIdle
from .trace.model import StepRecord, TraceResult

logger = logging.getLogger(__name__)


class SequencerState(str, enum.Enum):
    IDLE = "idle"
    READY = "ready"
    ADVANCING = "advancing"
    PAUSED = "paused"
    COMPLETE = "complete"


class Cancellable:
    def cancel(self) -> None:  # pragma: no cover
        raise NotImplementedError


class Scheduler:
    """Runs ``callback`` once after ``delay`` seconds; returns a cancel handle."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> Cancellable:  # pragma: no cover
        raise NotImplementedError


class TimerScheduler(Scheduler):
    """Default scheduler backed by daemon ``threading.Timer`` threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class PlaybackSequencer:
    """Cursor, bounds and autoplay over one :class:`TraceResult` at a time."""

    def __init__(self, interval: Optional[float] = None, scheduler: Optional[Scheduler] = None):
        if interval is None:
            interval = load_settings().autoplay_interval_seconds
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = float(interval)
        self._scheduler = scheduler or TimerScheduler()
        self._lock = threading.RLock()
        self._trace: Optional[TraceResult] = None
        self._cursor = 0
        self._moved = False
        self._playing = False
        self._generation = 0
        self._pending: Optional[Cancellable] = None

    # ------------------------------------------------------------------
    # read access
    # ------------------------------------------------------------------

    @property
    def trace(self) -> Optional[TraceResult]:
        return self._trace

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def total(self) -> int:
        return len(self._trace.steps) if self._trace is not None else 0

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def current(self) -> Optional[StepRecord]:
        with self._lock:
            if self._trace is None:
                return None
            return self._trace.steps[self._cursor]

    @property
    def progress(self) -> float:
        """Fraction of the trace walked so far, 0.0 to 1.0."""
        total = self.total
        if total == 0:
            return 0.0
        if total == 1:
            return 1.0
        return self._cursor / (total - 1)

    @property
    def can_go_next(self) -> bool:
        return self._trace is not None and self._cursor < self.total - 1

    @property
    def can_go_previous(self) -> bool:
        return self._trace is not None and self._cursor > 0

    @property
    def state(self) -> SequencerState:
        with self._lock:
            if self._trace is None:
                return SequencerState.IDLE
            if self._playing:
                return SequencerState.ADVANCING
            if not self._moved:
                return SequencerState.READY
            if self._cursor == self.total - 1:
                return SequencerState.COMPLETE
            return SequencerState.PAUSED

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------

    def load(self, trace: TraceResult) -> None:
        """Take ownership of a new trace; any running autoplay is cancelled."""
        if not trace.steps:
            raise EmptyTrace()
        with self._lock:
            self._stop_autoplay()
            self._trace = trace
            self._cursor = 0
            self._moved = False
            logger.debug("Loaded trace %s", trace.summary())

    def next(self) -> int:
        with self._lock:
            self._require_trace("step forward")
            self._move_to(self._cursor + 1)
            return self._cursor

    def previous(self) -> int:
        with self._lock:
            self._require_trace("step back")
            self._move_to(self._cursor - 1)
            return self._cursor

    def jump_to(self, index: int) -> int:
        with self._lock:
            self._require_trace("jump")
            self._move_to(index)
            return self._cursor

    def reset(self) -> None:
        """Back to the first step with autoplay off."""
        with self._lock:
            self._require_trace("reset")
            self._stop_autoplay()
            self._cursor = 0
            self._moved = False

    def toggle_play(self) -> bool:
        """Start or stop autoplay; returns the new ``playing`` flag.

        Starting at the last step is a no-op: there is nothing to advance to.
        """
        with self._lock:
            self._require_trace("play")
            if self._playing:
                self._stop_autoplay()
                logger.debug("Autoplay paused at step %d/%d", self._cursor + 1, self.total)
            elif self._cursor < self.total - 1:
                self._playing = True
                self._moved = True
                self._schedule_tick()
                logger.debug("Autoplay started at step %d/%d", self._cursor + 1, self.total)
            return self._playing

    def close(self) -> None:
        """Cancel any pending tick. The sequencer keeps its trace and cursor."""
        with self._lock:
            self._stop_autoplay()

    def __enter__(self) -> "PlaybackSequencer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _require_trace(self, operation: str) -> None:
        if self._trace is None:
            raise SequencerIdle(operation)

    def _move_to(self, index: int) -> None:
        self._cursor = max(0, min(index, self.total - 1))
        self._moved = True
        if self._playing and self._cursor == self.total - 1:
            self._stop_autoplay()

    def _schedule_tick(self) -> None:
        generation = self._generation
        self._pending = self._scheduler.schedule(self.interval, lambda: self._on_tick(generation))

    def _stop_autoplay(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._generation += 1
        self._playing = False

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self._playing:
                return
            self._pending = None
            self._cursor = min(self._cursor + 1, self.total - 1)
            if self._cursor == self.total - 1:
                self._stop_autoplay()
                logger.debug("Autoplay reached the last step")
            else:
                self._schedule_tick()
