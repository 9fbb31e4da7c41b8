"""Indicators for progress whose total is unknown, and width-aware text helpers."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional, Union

from wcwidth import wcwidth

_ESCAPE_SEQUENCE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

PAC_MAN_MOVING_RIGHT = "ᗧ"
PAC_MAN_MOVING_LEFT = "ᗤ"

Duration = Union[timedelta, float, int]


@dataclass(frozen=True)
class IndeterminateIndicator:
    """Text to draw inside a progress bar and the offset to draw it at."""

    position: int
    text: str


IndeterminateIndicatorGenerator = Callable[[int], IndeterminateIndicator]


def _char_width(char: str) -> int:
    return max(wcwidth(char), 0)


def display_width(text: str) -> int:
    """Printed width of the text, ignoring terminal escape sequences."""
    return sum(_char_width(char) for char in _ESCAPE_SEQUENCE.sub("", text))


def pad(text: str, width: int, char: str) -> str:
    """Append the padding character until the text is as wide as asked."""
    missing = width - display_width(text)
    if missing > 0:
        return text + char * missing
    return text


def _trim(text: str, width: int) -> str:
    """Keep at most ``width`` printable characters; escape sequences are kept."""
    if width <= 0:
        return ""
    pieces = []
    kept = 0
    position = 0
    for match in _ESCAPE_SEQUENCE.finditer(text):
        plain = text[position:match.start()]
        take = plain[: max(width - kept, 0)]
        kept += len(take)
        pieces.append(take)
        pieces.append(match.group())
        position = match.end()
    plain = text[position:]
    pieces.append(plain[: max(width - kept, 0)])
    return "".join(pieces)


def snip(text: str, width: int, indicator: str) -> str:
    """Cut the text to the width, marking the cut with the indicator."""
    if width > 0 and display_width(text) > width:
        return _trim(text, width - display_width(indicator)) + indicator
    return text


def _to_seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


def _timed(generator: IndeterminateIndicatorGenerator, duration: Duration) -> IndeterminateIndicatorGenerator:
    """Advance the generator at most once per duration; zero advances on every call."""
    interval = _to_seconds(duration)
    current: Optional[IndeterminateIndicator] = None
    last_render = time.monotonic()

    def tick(max_len: int) -> IndeterminateIndicator:
        nonlocal current, last_render
        now = time.monotonic()
        if current is None or interval == 0 or now - last_render > interval:
            current = generator(max_len)
            last_render = now
        return current

    return tick


def _dominoes() -> IndeterminateIndicatorGenerator:
    direction = 1
    next_position = 0

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal direction, next_position
        current = next_position
        if current == 0:
            direction = 1
        elif current == max_len:
            direction = -1
        next_position += direction
        return IndeterminateIndicator(0, "/" * current + "\\" * (max_len - current))

    return generate


def _back_and_forth(indicator: str) -> IndeterminateIndicatorGenerator:
    direction = 1
    next_position = 0
    width = display_width(indicator)

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal direction, next_position
        current = next_position
        if current == 0:
            direction = 1
        elif current + width == max_len:
            direction = -1
        next_position += direction
        return IndeterminateIndicator(current, indicator)

    return generate


def _left_to_right(indicator: str) -> IndeterminateIndicatorGenerator:
    next_position = 0
    width = display_width(indicator)

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal next_position
        current = next_position
        next_position += 1
        if next_position + width > max_len:
            next_position = 0
        return IndeterminateIndicator(current, indicator)

    return generate


def _right_to_left(indicator: str) -> IndeterminateIndicatorGenerator:
    next_position = -1
    width = display_width(indicator)

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal next_position
        if next_position == -1:
            next_position = max_len - width
        current = next_position
        next_position -= 1
        return IndeterminateIndicator(current, indicator)

    return generate


def _pac_man() -> IndeterminateIndicatorGenerator:
    direction = 1
    sprite = PAC_MAN_MOVING_RIGHT
    next_position = 0

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal direction, sprite, next_position
        current = next_position
        text = " " * max(current, 0) + sprite + " " * (max_len - current - 1)
        if current == 0:
            direction = 1
            sprite = PAC_MAN_MOVING_RIGHT
        elif current + display_width(sprite) == max_len:
            direction = -1
            sprite = PAC_MAN_MOVING_LEFT
        next_position += direction
        return IndeterminateIndicator(0, text)

    return generate


def indeterminate_indicator_dominoes(duration: Duration) -> IndeterminateIndicatorGenerator:
    """Dominoes falling back and forth across the whole bar."""
    return _timed(_dominoes(), duration)


def indeterminate_indicator_moving_back_and_forth(indicator: str, duration: Duration) -> IndeterminateIndicatorGenerator:
    """Move the indicator left to right and back, one step per duration."""
    return _timed(_back_and_forth(indicator), duration)


def indeterminate_indicator_moving_left_to_right(indicator: str, duration: Duration) -> IndeterminateIndicatorGenerator:
    """Move the indicator left to right, wrapping to the left edge."""
    return _timed(_left_to_right(indicator), duration)


def indeterminate_indicator_moving_right_to_left(indicator: str, duration: Duration) -> IndeterminateIndicatorGenerator:
    """Move the indicator right to left, wrapping to the right edge."""
    return _timed(_right_to_left(indicator), duration)


def indeterminate_indicator_pac_man(duration: Duration) -> IndeterminateIndicatorGenerator:
    """A Pac-Man chomping back and forth across the whole bar."""
    return _timed(_pac_man(), duration)