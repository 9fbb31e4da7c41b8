from datetime import timedelta

from prettyprogress.indicator import display_width
from prettyprogress.style import (
    STYLE_BLOCKS,
    STYLE_CIRCLE,
    STYLE_DEFAULT,
    STYLE_RHOMBUS,
    Colors,
    Position,
    Style,
    StyleChars,
    StyleOptions,
    StyleVisibility,
)
from prettyprogress.units import format_number


def test_style_names_survive_copy():
    assert STYLE_DEFAULT.copy().name == "StyleDefault"
    assert STYLE_BLOCKS.copy().name == "StyleBlocks"
    assert STYLE_CIRCLE.copy().name == "StyleCircle"
    assert STYLE_RHOMBUS.copy().name == "StyleRhombus"


def test_default_chars_survive_copy():
    chars = STYLE_DEFAULT.copy().chars
    assert (chars.box_left, chars.box_right, chars.finished, chars.unfinished) == ("[", "]", "#", ".")


def test_blocks_chars_survive_copy():
    chars = STYLE_BLOCKS.copy().chars
    assert chars.box_left == "║"
    assert chars.finished == "█"
    assert (chars.finished25, chars.finished50, chars.finished75) == ("░", "▒", "▓")


def test_default_indicator_moves_back_and_forth():
    chars = StyleChars()
    first = chars.indeterminate(10)
    assert first.text == "<#>"
    assert first.position == 0


def test_visibility_defaults():
    visibility = StyleVisibility()
    assert visibility.eta is False
    assert visibility.eta_overall is True
    assert visibility.percentage is True
    assert visibility.pinned is True
    assert visibility.speed is False
    assert visibility.speed_overall is False
    assert visibility.time is True
    assert visibility.tracker is True
    assert visibility.tracker_overall is False
    assert visibility.value is True


def test_option_defaults():
    options = StyleOptions()
    assert options.done_string == "done!"
    assert options.error_string == "fail!"
    assert options.eta_string == "~ETA"
    assert options.percent_format == "%5.2f%%"
    assert options.percent_indeterminate == " ??? "
    assert options.separator == " ... "
    assert options.snip_indicator == "~"
    assert options.speed_suffix == "/s"
    assert options.speed_position is Position.RIGHT
    assert options.eta_precision == timedelta(seconds=1)
    assert options.time_done_precision == timedelta(milliseconds=1)
    assert options.speed_overall_formatter is format_number


def test_percent_format_width_matches_indeterminate_string():
    options = StyleOptions()
    formatted = options.percent_format % 0.0
    assert display_width(formatted) == display_width(options.percent_indeterminate) + 1


def test_copy_is_independent():
    copied = STYLE_DEFAULT.copy()
    copied.visibility.eta = True
    copied.options.done_string = "finished"
    copied.chars.box_left = "{"
    assert STYLE_DEFAULT.visibility.eta is False
    assert STYLE_DEFAULT.options.done_string == "done!"
    assert STYLE_DEFAULT.chars.box_left == "["
    assert copied.name == STYLE_DEFAULT.name


def test_copy_equals_original_until_changed():
    style = Style()
    copied = style.copy()
    assert copied.options == style.options
    assert copied.visibility == style.visibility
    assert copied.colors == style.colors


def test_empty_colors_leave_text_unchanged():
    assert Colors().sprint("text") == "text"
    assert Colors().sprint(42) == "42"


def test_colors_wrap_text():
    colored = Colors(31).sprint("text")
    assert colored.startswith("\x1b[31m")
    assert colored.endswith("\x1b[0m")
    assert display_width(colored) == display_width("text")


def test_colors_reapply_after_inner_reset():
    inner = Colors(32).sprint("a")
    outer = Colors(31).sprint(inner + "b")
    assert outer.endswith("\x1b[0m\x1b[31mb\x1b[0m")


def test_colors_equality():
    assert Colors(1, 2) == Colors(1, 2)
    assert Colors(1, 2) != Colors(2, 1)
    assert not Colors()


def test_position_order():
    assert Position.LEFT < Position.RIGHT
    assert Position(0) is Position.LEFT