"""Styles: characters, colours, options and visibility for rendering."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta
from enum import IntEnum
from typing import Iterator, Optional, Tuple

from .indicator import (
    IndeterminateIndicatorGenerator,
    indeterminate_indicator_moving_back_and_forth,
)
from .units import UnitsFormatter, format_number

_INDICATOR_INTERVAL = timedelta(milliseconds=125)
_ESCAPE_RESET = "\x1b[0m"


class Position(IntEnum):
    """Placement of one part relative to another."""

    LEFT = 0
    RIGHT = 1


class Colors:
    """A set of SGR attribute codes applied together."""

    __slots__ = ("codes",)

    def __init__(self, *codes: int) -> None:
        self.codes: Tuple[int, ...] = tuple(int(code) for code in codes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Colors):
            return NotImplemented
        return self.codes == other.codes

    def __hash__(self) -> int:
        return hash(self.codes)

    def __repr__(self) -> str:
        return f"Colors{self.codes!r}"

    def __bool__(self) -> bool:
        return bool(self.codes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.codes)

    @property
    def escape_sequence(self) -> str:
        if not self.codes:
            return ""
        return "\x1b[" + ";".join(str(code) for code in self.codes) + "m"

    def sprint(self, value: object) -> str:
        """Render the value wrapped in these colours; unchanged when empty."""
        text = str(value)
        if not self.codes or not text:
            return text
        sequence = self.escape_sequence
        return sequence + text.replace(_ESCAPE_RESET, _ESCAPE_RESET + sequence) + _ESCAPE_RESET


def _default_indicator() -> IndeterminateIndicatorGenerator:
    return indeterminate_indicator_moving_back_and_forth("<#>", _INDICATOR_INTERVAL)


@dataclass
class StyleChars:
    """Characters used to draw a tracker."""

    box_left: str = "["
    box_right: str = "]"
    finished: str = "#"
    finished25: str = "."
    finished50: str = "."
    finished75: str = "."
    indeterminate: IndeterminateIndicatorGenerator = field(default_factory=_default_indicator)
    unfinished: str = "."


@dataclass
class StyleColors:
    """Colours for the parts of a tracker line."""

    message: Colors = field(default_factory=Colors)
    error: Colors = field(default_factory=Colors)
    percent: Colors = field(default_factory=Colors)
    pinned: Colors = field(default_factory=Colors)
    stats: Colors = field(default_factory=Colors)
    time: Colors = field(default_factory=Colors)
    tracker: Colors = field(default_factory=Colors)
    value: Colors = field(default_factory=Colors)
    speed: Colors = field(default_factory=Colors)


@dataclass
class StyleOptions:
    """Miscellaneous rendering options."""

    done_string: str = "done!"
    error_string: str = "fail!"
    eta_precision: timedelta = timedelta(seconds=1)
    eta_string: str = "~ETA"
    percent_format: str = "%5.2f%%"
    percent_indeterminate: str = " ??? "
    separator: str = " ... "
    snip_indicator: str = "~"
    speed_position: Position = Position.RIGHT
    speed_precision: timedelta = timedelta(microseconds=1)
    speed_overall_formatter: Optional[UnitsFormatter] = format_number
    speed_suffix: str = "/s"
    time_done_precision: timedelta = timedelta(milliseconds=1)
    time_in_progress_precision: timedelta = timedelta(microseconds=1)
    time_overall_precision: timedelta = timedelta(seconds=1)


@dataclass
class StyleVisibility:
    """Which parts of a tracker line are shown."""

    eta: bool = False
    eta_overall: bool = True
    percentage: bool = True
    pinned: bool = True
    speed: bool = False
    speed_overall: bool = False
    time: bool = True
    tracker: bool = True
    tracker_overall: bool = False
    value: bool = True


@dataclass
class Style:
    """Everything that decides how trackers are rendered."""

    name: str = "StyleDefault"
    chars: StyleChars = field(default_factory=StyleChars)
    colors: StyleColors = field(default_factory=StyleColors)
    options: StyleOptions = field(default_factory=StyleOptions)
    visibility: StyleVisibility = field(default_factory=StyleVisibility)

    def copy(self) -> "Style":
        """A copy whose parts can be changed without touching this style."""
        return Style(
            name=self.name,
            chars=replace(self.chars),
            colors=replace(self.colors),
            options=replace(self.options),
            visibility=replace(self.visibility),
        )


STYLE_CHARS_DEFAULT = StyleChars()

STYLE_CHARS_BLOCKS = StyleChars(
    box_left="║",
    box_right="║",
    finished="█",
    finished25="░",
    finished50="▒",
    finished75="▓",
    indeterminate=indeterminate_indicator_moving_back_and_forth("▒█▒", _INDICATOR_INTERVAL),
    unfinished="░",
)

STYLE_CHARS_CIRCLE = StyleChars(
    box_left="(",
    box_right=")",
    finished="●",
    finished25="○",
    finished50="○",
    finished75="○",
    indeterminate=indeterminate_indicator_moving_back_and_forth("○●○", _INDICATOR_INTERVAL),
    unfinished="◌",
)

STYLE_CHARS_RHOMBUS = StyleChars(
    box_left="<",
    box_right=">",
    finished="◆",
    finished25="◈",
    finished50="◈",
    finished75="◈",
    indeterminate=indeterminate_indicator_moving_back_and_forth("◈◆◈", _INDICATOR_INTERVAL),
    unfinished="◇",
)

STYLE_COLORS_DEFAULT = StyleColors()

STYLE_COLORS_EXAMPLE = StyleColors(
    message=Colors(37),
    error=Colors(31),
    percent=Colors(91),
    pinned=Colors(100, 37, 1),
    stats=Colors(90),
    time=Colors(32),
    tracker=Colors(33),
    value=Colors(36),
    speed=Colors(35),
)

STYLE_OPTIONS_DEFAULT = StyleOptions()
STYLE_VISIBILITY_DEFAULT = StyleVisibility()

STYLE_DEFAULT = Style(name="StyleDefault", chars=STYLE_CHARS_DEFAULT)
STYLE_BLOCKS = Style(name="StyleBlocks", chars=STYLE_CHARS_BLOCKS)
STYLE_CIRCLE = Style(name="StyleCircle", chars=STYLE_CHARS_CIRCLE)
STYLE_RHOMBUS = Style(name="StyleRhombus", chars=STYLE_CHARS_RHOMBUS)