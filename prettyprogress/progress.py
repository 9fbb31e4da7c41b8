"""Tracking and rendering of one or more trackers on a terminal."""

from __future__ import annotations

import sys
import threading
from datetime import timedelta
from typing import IO, Iterable, List, Optional, Tuple, Union

from .indicator import display_width
from .render import CURSOR_UP, ERASE_LINE, RenderHint, Renderer
from .style import STYLE_DEFAULT, Position, Style
from .tracker import SortBy, Tracker
from .units import format_number

DEFAULT_LENGTH_TRACKER = 20
DEFAULT_UPDATE_FREQUENCY = timedelta(milliseconds=250)

Frequency = Union[timedelta, float, int]


def _to_timedelta(value: Frequency) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=float(value))


class Progress:
    """Tracks progress for one or more tasks and renders it periodically."""

    def __init__(self) -> None:
        self._auto_stop = False
        self._done = threading.Event()
        self._length_progress = 0
        self._length_progress_overall = 0
        self._length_tracker = 0
        self._logs: List[str] = []
        self._message_width = 0
        self._num_trackers_expected = 0
        self._output_writer: Optional[IO[str]] = None
        self._overall_tracker: Optional[Tracker] = None
        self._pinned_messages: Tuple[str, ...] = ()
        self._pinned_message_num_lines = 0
        self._render_in_progress = False
        self._render_lock = threading.Lock()
        self._sort_by = SortBy.NONE
        self._style: Optional[Style] = None
        self._tracker_position = Position.LEFT
        self._trackers_active: List[Tracker] = []
        self._trackers_done: List[Tracker] = []
        self._trackers_in_queue: List[Tracker] = []
        self._lock = threading.RLock()
        self._update_frequency = timedelta(0)

    # --- read-only views of the configuration -------------------------------

    @property
    def auto_stop(self) -> bool:
        return self._auto_stop

    @property
    def message_width(self) -> int:
        return self._message_width

    @property
    def num_trackers_expected(self) -> int:
        return self._num_trackers_expected

    @property
    def output_writer(self) -> Optional[IO[str]]:
        return self._output_writer

    @property
    def overall_tracker(self) -> Optional[Tracker]:
        return self._overall_tracker

    @property
    def pinned_messages(self) -> Tuple[str, ...]:
        with self._lock:
            return self._pinned_messages

    @property
    def sort_by(self) -> SortBy:
        return self._sort_by

    @property
    def tracker_length(self) -> int:
        return self._length_tracker

    @property
    def tracker_position(self) -> Position:
        return self._tracker_position

    @property
    def update_frequency(self) -> timedelta:
        return self._update_frequency

    # --- trackers ------------------------------------------------------------

    def append_tracker(self, tracker: Tracker) -> None:
        """Queue a tracker; it is picked up in the next rendering cycle."""
        if not tracker.defer_start:
            tracker.start()
        with self._lock:
            if self._overall_tracker is None:
                overall = Tracker(total=1)
                if self._num_trackers_expected > 0:
                    overall.total = self._num_trackers_expected * 100
                overall.start()
                self._overall_tracker = overall
            self._trackers_in_queue.append(tracker)
            self._overall_tracker.update_total(self.length() * 100)

    def append_trackers(self, trackers: Iterable[Tracker]) -> None:
        for tracker in trackers:
            self.append_tracker(tracker)

    def is_render_in_progress(self) -> bool:
        with self._render_lock:
            return self._render_in_progress

    def length(self) -> int:
        """Number of trackers tracked overall."""
        with self._lock:
            return len(self._trackers_in_queue) + len(self._trackers_active) + len(self._trackers_done)

    def length_active(self) -> int:
        """Number of trackers not done yet."""
        with self._lock:
            return len(self._trackers_in_queue) + len(self._trackers_active)

    def length_done(self) -> int:
        with self._lock:
            return len(self._trackers_done)

    def length_in_queue(self) -> int:
        with self._lock:
            return len(self._trackers_in_queue)

    def log(self, msg: str, *args: object) -> None:
        """Queue a line to print above the active trackers on the next refresh."""
        if args:
            msg = msg % args
        with self._lock:
            self._logs.append(msg)

    # --- configuration -------------------------------------------------------

    def set_auto_stop(self, auto_stop: bool) -> None:
        self._auto_stop = auto_stop

    def set_message_width(self, width: int) -> None:
        self._message_width = width

    def set_num_trackers_expected(self, num_trackers: int) -> None:
        self._num_trackers_expected = num_trackers

    def set_output_writer(self, writer: IO[str]) -> None:
        self._output_writer = writer

    def set_pinned_messages(self, *args: str) -> None:
        """Replace the messages pinned above the trackers; no arguments clears them."""
        with self._lock:
            self._pinned_messages = tuple(args)

    def set_sort_by(self, sort_by: SortBy) -> None:
        self._sort_by = sort_by

    def set_style(self, style: Style) -> None:
        self._style = style.copy()

    def set_tracker_length(self, length: int) -> None:
        self._length_tracker = length

    def set_tracker_position(self, position: Position) -> None:
        self._tracker_position = position

    def set_update_frequency(self, frequency: Frequency) -> None:
        self._update_frequency = _to_timedelta(frequency)

    def show_eta(self, show: bool) -> None:
        self.style().visibility.eta = show

    def show_percentage(self, show: bool) -> None:
        self.style().visibility.percentage = show

    def show_overall_tracker(self, show: bool) -> None:
        self.style().visibility.tracker_overall = show

    def show_time(self, show: bool) -> None:
        self.style().visibility.time = show

    def show_tracker(self, show: bool) -> None:
        self.style().visibility.tracker = show

    def show_value(self, show: bool) -> None:
        self.style().visibility.value = show

    def stop(self) -> None:
        """Stop a render that is in progress."""
        with self._render_lock:
            if self._render_in_progress:
                self._done.set()

    def style(self) -> Style:
        """The current style, created from the default on first use."""
        if self._style is None:
            self._style = STYLE_DEFAULT.copy()
        return self._style

    # --- rendering -----------------------------------------------------------

    def render(self) -> None:
        """Render until stopped; returns at once if a render is already running."""
        if not self._begin_render():
            return
        try:
            self._init_for_render()
            interval = self._update_frequency.total_seconds()
            last_render_length = 0
            while True:
                if self._done.wait(interval):
                    self._render_trackers(last_render_length)
                    return
                last_render_length = self._render_trackers(last_render_length)
        finally:
            self._end_render()

    def _begin_render(self) -> bool:
        with self._render_lock:
            if self._render_in_progress:
                return False
            self._render_in_progress = True
            self._done.clear()
            return True

    def _end_render(self) -> None:
        with self._render_lock:
            self._render_in_progress = False

    def _init_for_render(self) -> None:
        style = self.style()
        if style.options.speed_overall_formatter is None:
            style.options.speed_overall_formatter = format_number
        if self._length_tracker <= 0:
            self._length_tracker = DEFAULT_LENGTH_TRACKER
        self._length_progress = self._length_tracker - len(style.chars.box_left) - len(style.chars.box_right)
        self._length_progress_overall = (
            self._message_width + display_width(style.options.separator) + self._length_progress + 1
        )
        if style.visibility.percentage:
            self._length_progress_overall += display_width(style.options.percent_format % 0.0)
        if self._output_writer is None:
            self._output_writer = sys.stdout
        if self._update_frequency <= timedelta(0):
            self._update_frequency = DEFAULT_UPDATE_FREQUENCY

    def _renderer(self) -> Renderer:
        return Renderer(
            style=self.style(),
            message_width=self._message_width,
            tracker_position=self._tracker_position,
            length_progress=self._length_progress,
            length_progress_overall=self._length_progress_overall,
        )

    def _consume_queued_trackers(self) -> None:
        with self._lock:
            if self._trackers_in_queue:
                self._trackers_active.extend(self._trackers_in_queue)
                self._trackers_in_queue = []

    def _extract_done_and_active(self) -> Tuple[List[Tracker], List[Tracker]]:
        self._consume_queued_trackers()
        active: List[Tracker] = []
        done: List[Tracker] = []
        active_progress = 0
        max_eta = timedelta(0)
        with self._lock:
            candidates = list(self._trackers_active)
        for tracker in candidates:
            if tracker.is_done():
                done.append(tracker)
                continue
            active.append(tracker)
            active_progress += int(tracker.percent_done())
            max_eta = max(max_eta, tracker.eta())
        self._sort_by.sort(done)
        self._sort_by.sort(active)

        overall = self._overall_tracker
        if overall is not None:
            overall.value = (self.length_done() + len(done)) * 100 + active_progress
            overall.min_eta = max_eta
            if not active:
                overall.mark_as_done()
        return active, done

    def _cursor_to_top(self) -> str:
        lines = len(self._trackers_active)
        visibility = self.style().visibility
        overall = self._overall_tracker
        if visibility.tracker_overall and overall is not None and not overall.is_done():
            lines += 1
        if visibility.pinned:
            lines += self._pinned_message_num_lines
        return (CURSOR_UP + ERASE_LINE) * lines

    def _render_done_and_active(self, renderer: Renderer) -> str:
        active, done = self._extract_done_and_active()
        parts: List[str] = []
        current_active = list(self._trackers_active)

        for tracker in done:
            parts.append(renderer.render_tracker(tracker, RenderHint(), current_active))
        with self._lock:
            self._trackers_done.extend(done)
            logs, self._logs = self._logs, []
            pinned = self._pinned_messages

        for line in logs:
            parts.append(ERASE_LINE + line + "\n")

        if active and self.style().visibility.pinned:
            text, num_lines = renderer.render_pinned_messages(pinned)
            parts.append(text)
            self._pinned_message_num_lines = num_lines

        for tracker in active:
            parts.append(renderer.render_tracker(tracker, RenderHint(), current_active))
        with self._lock:
            self._trackers_active = active
        return "".join(parts)

    def _render_trackers(self, last_render_length: int) -> int:
        if self.length_active() == 0:
            return 0
        renderer = self._renderer()
        parts: List[str] = []
        if last_render_length > 0:
            parts.append(self._cursor_to_top())
        parts.append(self._render_done_and_active(renderer))
        overall = self._overall_tracker
        if self.style().visibility.tracker_overall and overall is not None:
            with self._lock:
                active = list(self._trackers_active)
            parts.append(renderer.render_tracker(overall, RenderHint(is_overall_tracker=True), active))

        text = "".join(parts)
        writer = self._output_writer or sys.stdout
        writer.write(text)
        flush = getattr(writer, "flush", None)
        if callable(flush):
            flush()

        if self._auto_stop and self.length_active() == 0:
            self._done.set()
        return len(text)


def new_writer() -> Progress:
    """A fresh progress writer."""
    return Progress()