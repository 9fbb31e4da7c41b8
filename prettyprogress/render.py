"""Rendering of trackers into lines of terminal text."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from .indicator import display_width, pad, snip
from .style import Position, Style
from .tracker import Tracker
from .units import format_number

CURSOR_UP = "\x1b[A"
ERASE_LINE = "\x1b[K"

_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True)
class RenderHint:
    """Hints that change how a single tracker line is drawn."""

    hide_time: bool = False
    hide_value: bool = False
    is_overall_tracker: bool = False


def round_duration(duration: timedelta, precision: timedelta) -> timedelta:
    """Round to the nearest multiple of precision, halves away from zero."""
    if precision <= timedelta(0):
        return duration
    micros = duration // _MICROSECOND
    unit = precision // _MICROSECOND
    if unit <= 0:
        return duration
    sign = -1 if micros < 0 else 1
    magnitude = abs(micros)
    remainder = magnitude % unit
    if remainder * 2 < unit:
        magnitude -= remainder
    else:
        magnitude += unit - remainder
    return timedelta(microseconds=sign * magnitude)


def _fraction(value: int, unit: int) -> str:
    whole, remainder = divmod(value, unit)
    if remainder == 0:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{remainder:0{digits}d}".rstrip("0")


def format_duration(duration: timedelta) -> str:
    """Format a duration the way compact clocks do: 0s, 1.5ms, 2m3s, 1h0m0s."""
    nanos = (duration // _MICROSECOND) * 1000
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos == 0:
        return "0s"
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_fraction(nanos, 1_000)}µs"
    if nanos < 1_000_000_000:
        return f"{sign}{_fraction(nanos, 1_000_000)}ms"
    hours, rest = divmod(nanos, 3_600_000_000_000)
    minutes, rest = divmod(rest, 60_000_000_000)
    text = f"{_fraction(rest, 1_000_000_000)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text


def _since(start: float) -> timedelta:
    return timedelta(seconds=time.monotonic() - start)


@dataclass
class Renderer:
    """Turns trackers into text according to a style and layout."""

    style: Style = field(default_factory=Style)
    message_width: int = 0
    tracker_position: Position = Position.LEFT
    length_progress: int = 0
    length_progress_overall: int = 0

    def generate_tracker_str(self, tracker: Tracker, max_len: int, hint: RenderHint = RenderHint()) -> str:
        """The bar itself, boxed, for a tracker drawn at the given width."""
        value, total = tracker.value, tracker.total
        if not hint.is_overall_tracker and tracker.is_started() and (total == 0 or value > total):
            return self._tracker_str_indeterminate(max_len)
        return self._tracker_str_determinate(value, total, max_len)

    def _tracker_str_determinate(self, value: int, total: int, max_len: int) -> str:
        chars = self.style.chars
        finished_dots = 0.0
        fraction = 0.0
        dot_value = float(total) / float(max_len) if max_len else 0.0
        if dot_value > 0:
            finished_dots = float(value) / dot_value
            fraction = finished_dots - float(int(finished_dots))
        finished_len = int(math.floor(finished_dots))

        finished = chars.finished * finished_len if finished_len > 0 else ""
        if fraction >= 0.75:
            in_progress = chars.finished75
        elif fraction >= 0.50:
            in_progress = chars.finished50
        elif fraction >= 0.25:
            in_progress = chars.finished25
        elif fraction == 0:
            in_progress = ""
        else:
            in_progress = chars.unfinished
        drawn = display_width(finished + in_progress)
        unfinished = chars.unfinished * (max_len - drawn) if drawn < max_len else ""
        return self.style.colors.tracker.sprint(
            chars.box_left + finished + in_progress + unfinished + chars.box_right
        )

    def _tracker_str_indeterminate(self, max_len: int) -> str:
        chars = self.style.chars
        indicator = chars.indeterminate(max_len)
        body = chars.unfinished * indicator.position if indicator.position > 0 else ""
        body += indicator.text
        width = display_width(body)
        if width < max_len:
            body += chars.unfinished * (max_len - width)
        return self.style.colors.tracker.sprint(chars.box_left + body + chars.box_right)

    def render_pinned_messages(self, messages: Iterable[str]) -> Tuple[str, int]:
        """Pinned messages as text, and the number of lines they take."""
        messages = list(messages)
        lines = len(messages)
        out: List[str] = []
        for msg in messages:
            msg = msg.strip()
            out.append(self.style.colors.pinned.sprint(msg))
            out.append("\n")
            lines += msg.count("\n")
        return "".join(out), lines

    def render_tracker(
        self,
        tracker: Tracker,
        hint: RenderHint = RenderHint(),
        active_trackers: Sequence[Tracker] = (),
    ) -> str:
        """One line of text for the tracker, newline included; empty for a finished overall tracker."""
        message = self._prepare_message(tracker.message)
        visibility = self.style.visibility
        if hint.is_overall_tracker:
            if tracker.is_done():
                return ""
            overall_hint = RenderHint(hide_value=True, is_overall_tracker=True)
            bar = self.generate_tracker_str(tracker, self.length_progress_overall, overall_hint)
            return self._render_progress(tracker, message, bar, overall_hint, active_trackers)
        if tracker.is_done():
            return self._render_done(tracker, message, active_trackers)
        line_hint = RenderHint(hide_time=not visibility.time, hide_value=not visibility.value)
        bar = self.generate_tracker_str(tracker, self.length_progress, line_hint)
        return self._render_progress(tracker, message, bar, line_hint, active_trackers)

    def _prepare_message(self, message: str) -> str:
        message = message.replace("\t", "    ").replace("\r", "")
        if self.message_width > 0:
            if display_width(message) < self.message_width:
                message = pad(message, self.message_width, " ")
            else:
                message = snip(message, self.message_width, self.style.options.snip_indicator)
        return message

    def _render_done(self, tracker: Tracker, message: str, active: Sequence[Tracker]) -> str:
        colors, options, visibility = self.style.colors, self.style.options, self.style.visibility
        parts = [colors.message.sprint(message), colors.message.sprint(options.separator)]
        if tracker.is_errored():
            parts.append(colors.error.sprint(options.error_string))
        else:
            parts.append(colors.message.sprint(options.done_string))
        hint = RenderHint(hide_time=not visibility.time, hide_value=not visibility.value)
        parts.append(self._stats(tracker, hint, active))
        parts.append("\n")
        return "".join(parts)

    def _render_message(self, tracker: Tracker, message: str) -> str:
        colors = self.style.colors
        if tracker.is_errored():
            return colors.error.sprint(message)
        return colors.message.sprint(message)

    def _render_percentage(self, tracker: Tracker) -> str:
        if not self.style.visibility.percentage:
            return ""
        options = self.style.options
        if tracker.is_indeterminate():
            text = options.percent_indeterminate
        else:
            text = options.percent_format % tracker.percent_done()
        return self.style.colors.percent.sprint(text)

    def _render_progress(
        self,
        tracker: Tracker,
        message: str,
        bar: str,
        hint: RenderHint,
        active: Sequence[Tracker],
    ) -> str:
        colors, options, visibility = self.style.colors, self.style.options, self.style.visibility
        stats = self._stats(tracker, hint, active)
        if hint.is_overall_tracker:
            return colors.tracker.sprint(bar) + stats + "\n"
        bar_part = colors.tracker.sprint(" " + bar) if visibility.tracker else ""
        separator = colors.message.sprint(options.separator)
        if self.tracker_position == Position.RIGHT:
            return (
                self._render_message(tracker, message)
                + separator
                + self._render_percentage(tracker)
                + bar_part
                + stats
                + "\n"
            )
        return (
            self._render_percentage(tracker)
            + bar_part
            + stats
            + separator
            + self._render_message(tracker, message)
            + "\n"
        )

    def _stats(self, tracker: Tracker, hint: RenderHint, active: Sequence[Tracker]) -> str:
        if hint.hide_value and hint.hide_time:
            return ""
        colors, options = self.style.colors, self.style.options
        parts = [" ["]
        if options.speed_position == Position.LEFT:
            parts.append(self._stats_speed(tracker, hint, active))
        if not hint.hide_value:
            parts.append(colors.value.sprint(tracker.units.sprint(tracker.value)))
        if not hint.hide_value and not hint.hide_time:
            parts.append(" in ")
        if not hint.hide_time:
            parts.append(self._stats_time(tracker, hint))
        if options.speed_position == Position.RIGHT:
            parts.append(self._stats_speed(tracker, hint, active))
        parts.append("]")
        return colors.stats.sprint("".join(parts))

    def _stats_speed(self, tracker: Tracker, hint: RenderHint, active: Sequence[Tracker]) -> str:
        visibility, options = self.style.visibility, self.style.options
        if hint.is_overall_tracker and not visibility.speed_overall:
            return ""
        if not hint.is_overall_tracker and not visibility.speed:
            return ""
        precision = options.speed_precision
        if hint.is_overall_tracker:
            speed = 0.0
            for other in active:
                start = other.time_start
                if start is None:
                    continue
                elapsed = round_duration(_since(start), precision).total_seconds()
                if elapsed > 0:
                    speed += float(other.value) / elapsed
            if speed > 0:
                formatter = options.speed_overall_formatter or format_number
                return self._speed_text(formatter(int(speed)))
            return ""
        start = tracker.time_start
        if start is None:
            return ""
        rounded = round_duration(_since(start), precision)
        if rounded > precision:
            per_second = int(float(tracker.value) / rounded.total_seconds())
            return self._speed_text(tracker.units.sprint(per_second))
        return ""

    def _speed_text(self, speed: str) -> str:
        options = self.style.options
        text = self.style.colors.speed.sprint(speed) + options.speed_suffix
        if options.speed_position == Position.RIGHT:
            return "; " + text
        return text + "; "

    def _stats_time(self, tracker: Tracker, hint: RenderHint) -> str:
        options = self.style.options
        taken = timedelta(0)
        start: Optional[float] = tracker.time_start
        done = tracker.is_done()
        if start is not None:
            stop = tracker.time_stop
            if done and stop is not None:
                taken = timedelta(seconds=stop - start)
            else:
                taken = _since(start)
        if hint.is_overall_tracker:
            precision = options.time_overall_precision
        elif done:
            precision = options.time_done_precision
        else:
            precision = options.time_in_progress_precision
        text = self.style.colors.time.sprint(format_duration(round_duration(taken, precision)))
        return text + self._stats_eta(tracker, hint)

    def _stats_eta(self, tracker: Tracker, hint: RenderHint) -> str:
        visibility, options = self.style.visibility, self.style.options
        if hint.is_overall_tracker and not visibility.eta_overall:
            return ""
        if not hint.is_overall_tracker and not visibility.eta:
            return ""
        precision = options.eta_precision
        eta = round_duration(tracker.eta(), precision)
        if hint.is_overall_tracker or eta > precision:
            return f"; {options.eta_string}: " + self.style.colors.time.sprint(format_duration(eta))
        return ""