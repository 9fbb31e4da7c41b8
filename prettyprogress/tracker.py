"""Tracking of a single task's progress, and orderings of trackers."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum
from typing import List, Optional

from .units import Units

MAX_INT64 = 2**63 - 1


@dataclass(eq=False)
class Tracker:
    """Progress of one task.

    ``time_start`` and ``time_stop`` are ``time.monotonic()`` readings, or
    ``None`` when unset. Durations are ``timedelta`` values.
    """

    message: str = ""
    defer_start: bool = False
    expected_duration: timedelta = timedelta(0)
    total: int = 0
    units: Units = field(default_factory=Units)

    min_eta: timedelta = field(default=timedelta(0), init=False, repr=False)
    _done: bool = field(default=False, init=False, repr=False)
    _err: bool = field(default=False, init=False, repr=False)
    _time_start: Optional[float] = field(default=None, init=False, repr=False)
    _time_stop: Optional[float] = field(default=None, init=False, repr=False)
    _value: int = field(default=0, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    @property
    def value(self) -> int:
        """The current value."""
        with self._lock:
            return self._value

    @value.setter
    def value(self, value: int) -> None:
        """Overwrite the raw value without touching completion state."""
        with self._lock:
            self._value = value

    @property
    def time_start(self) -> Optional[float]:
        with self._lock:
            return self._time_start

    @property
    def time_stop(self) -> Optional[float]:
        with self._lock:
            return self._time_stop

    def eta(self) -> timedelta:
        """Estimated time left until completion."""
        with self._lock:
            if self._time_start is None:
                return timedelta(0)
            time_taken = timedelta(seconds=time.monotonic() - self._time_start)
            if self.expected_duration > timedelta(0) and self.expected_duration > time_taken:
                return self.expected_duration - time_taken
            p_done = int(self._percent_done())
            if p_done == 0:
                return timedelta(0)
            eta = (time_taken // p_done) * (100 - p_done)
            return max(eta, self.min_eta)

    def increment(self, value: int) -> None:
        """Add to the current value."""
        with self._lock:
            self._increment(value)

    def increment_with_error(self, value: int) -> None:
        """Add to the current value and record that an error occurred."""
        with self._lock:
            self._increment(value)
            self._err = True

    def is_started(self) -> bool:
        with self._lock:
            return self._time_start is not None

    def is_done(self) -> bool:
        with self._lock:
            return self._done

    def is_errored(self) -> bool:
        with self._lock:
            return self._err

    def is_indeterminate(self) -> bool:
        """True when the total is unknown."""
        with self._lock:
            return self.total == 0

    def mark_as_done(self) -> None:
        """Force completion by taking the current value as the total."""
        with self._lock:
            self.total = self._value
            self._stop()

    def mark_as_errored(self) -> None:
        """Force completion with an error, unless already done."""
        with self._lock:
            if not self._done:
                self.total = self._value
                self._err = True
                self._stop()

    def percent_done(self) -> float:
        with self._lock:
            return self._percent_done()

    def reset(self) -> None:
        """Return to the initial, unstarted state."""
        with self._lock:
            self._done = False
            self._err = False
            self._time_start = None
            self._time_stop = None
            self._value = 0

    def set_value(self, value: int) -> None:
        """Set the value and recompute whether the tracker is done."""
        with self._lock:
            self._done = False
            self._time_stop = None
            self._value = 0
            self._increment(value)

    def update_message(self, msg: str) -> None:
        with self._lock:
            self.message = msg

    def update_total(self, total: int) -> None:
        with self._lock:
            if total > self.total:
                self._done = False
            self.total = total

    def start(self) -> None:
        """Start the clock if it has not been started yet."""
        with self._lock:
            if self._time_start is None:
                self._start()

    def _percent_done(self) -> float:
        if self.total == 0:
            return 0.0
        return float(self._value) * 100.0 / float(self.total)

    def _increment(self, value: int) -> None:
        if self._done:
            return
        if self._time_start is None:
            self._start()
        self._value += value
        if self.total > 0 and self._value >= self.total:
            self._stop()

    def _start(self) -> None:
        if self.total < 0:
            self.total = MAX_INT64
        self._done = False
        self._err = False
        self._time_start = time.monotonic()

    def _stop(self) -> None:
        self._done = True
        self._time_stop = time.monotonic()
        if self._value > self.total:
            self.total = self._value


def _start_key(tracker: Tracker):
    start = tracker.time_start
    return (start is not None, start or 0.0)


class SortBy(IntEnum):
    """Orderings for a list of trackers."""

    NONE = 0
    MESSAGE = 1
    MESSAGE_DSC = 2
    PERCENT = 3
    PERCENT_DSC = 4
    VALUE = 5
    VALUE_DSC = 6

    def sort(self, trackers: List[Tracker]) -> None:
        """Sort the list in place; NONE keeps insertion order."""
        if self in (SortBy.MESSAGE, SortBy.MESSAGE_DSC):
            trackers.sort(key=lambda t: t.message, reverse=self is SortBy.MESSAGE_DSC)
        elif self in (SortBy.PERCENT, SortBy.PERCENT_DSC):
            trackers.sort(
                key=lambda t: (t.percent_done(), _start_key(t)),
                reverse=self is SortBy.PERCENT_DSC,
            )
        elif self in (SortBy.VALUE, SortBy.VALUE_DSC):
            trackers.sort(
                key=lambda t: (t.value, _start_key(t)),
                reverse=self is SortBy.VALUE_DSC,
            )