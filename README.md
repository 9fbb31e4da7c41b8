# prettyprogress

A library that tracks the progress of one or more tasks and renders them on
the terminal: percentages, progress bars, values with units, elapsed time,
ETA, speed, pinned messages, log lines and an optional overall tracker.

## Installation

```
pip install prettyprogress
```

The only runtime dependency is `wcwidth`, used to measure the printed width
of text.

## Usage

```python
import threading
import time

from prettyprogress.progress import new_writer
from prettyprogress.tracker import SortBy, Tracker
from prettyprogress.units import Units, format_bytes

pw = new_writer()
pw.set_auto_stop(True)
pw.set_tracker_length(25)
pw.set_message_width(24)
pw.set_sort_by(SortBy.PERCENT_DSC)
pw.style().visibility.eta = True
pw.style().visibility.tracker_overall = True

tracker = Tracker(message="Downloading File # 1", total=1000,
                  units=Units(formatter=format_bytes))
pw.append_tracker(tracker)

def work():
    while not tracker.is_done():
        tracker.increment(100)
        time.sleep(0.1)

threading.Thread(target=work).start()
pw.render()  # returns once all trackers are done (auto-stop)
```

Without auto-stop, run `render()` in a thread and call `stop()` to end it;
the current state is drawn one last time before `render()` returns. A
second call to `render()` while one is running returns at once.

### Progress (`prettyprogress.progress`)

`Progress` (also returned by `new_writer()`) holds the trackers:

- `append_tracker()` / `append_trackers()` queue trackers; they become
  active in the next rendering cycle. A tracker without `defer_start` is
  started when appended.
- `length()`, `length_active()`, `length_done()`, `length_in_queue()`
  count trackers.
- `log(msg, *args)` queues a line (formatted with `%` when arguments are
  given) to print above the trackers on the next refresh.
- `set_pinned_messages(*messages)` pins lines above the active trackers;
  call it without arguments to clear them.
- `set_message_width()` pads or snips messages to a fixed width,
  `set_tracker_length()` sets the bar width (default 20),
  `set_tracker_position(Position.LEFT | Position.RIGHT)` puts the bar before
  or after the message, `set_update_frequency()` takes a `timedelta` or
  seconds (default 250 ms), `set_output_writer()` takes any text stream
  (default `sys.stdout`), `set_num_trackers_expected()` helps the overall
  tracker estimate its total.
- `style()` returns the active `Style`; `set_style()` installs a copy of the
  given one. `show_eta()`, `show_percentage()`, `show_overall_tracker()`,
  `show_time()`, `show_tracker()` and `show_value()` toggle the matching
  `style().visibility` flags.

### Trackers (`prettyprogress.tracker`)

A `Tracker` has a `message`, a `total`, `units`, `expected_duration` (used
for the ETA) and `defer_start`. Move it forward with `increment()`,
`increment_with_error()` or `set_value()`; end it early with
`mark_as_done()` or `mark_as_errored()`; `reset()` returns it to its
initial state. A total of `0` makes it indeterminate, and an animated
indicator is drawn instead of a bar; a negative total becomes the largest
64-bit integer when started. `eta()` returns a `timedelta`.

`SortBy` (`NONE`, `MESSAGE`, `MESSAGE_DSC`, `PERCENT`, `PERCENT_DSC`,
`VALUE`, `VALUE_DSC`) sorts a list of trackers in place with `sort()`.

### Units (`prettyprogress.units`)

`Units` combines a formatter with a notation placed before or after the
value (`UnitsNotationPosition.BEFORE` / `AFTER`). Ready-made units:
`UNITS_DEFAULT`, `UNITS_BYTES`, `UNITS_CURRENCY_DOLLAR`,
`UNITS_CURRENCY_EURO`, `UNITS_CURRENCY_POUND`.

```python
from prettyprogress.units import UNITS_CURRENCY_DOLLAR, format_bytes, format_number

format_number(1500)               # '1.50K'
format_bytes(1500)                # '1.50KB'
UNITS_CURRENCY_DOLLAR.sprint(1500)  # '$1.50K'
```

### Styles (`prettyprogress.style`)

A `Style` is made of `StyleChars` (box, finished, partial and unfinished
characters and the indeterminate indicator), `StyleColors` (each a
`Colors` of SGR codes, e.g. `Colors(31)` for red), `StyleOptions` (done and
error strings, separator, percent format, precisions, speed position and
formatter) and `StyleVisibility`. Predefined styles: `STYLE_DEFAULT`,
`STYLE_BLOCKS`, `STYLE_CIRCLE`, `STYLE_RHOMBUS`; `STYLE_COLORS_EXAMPLE`
shows a coloured palette.

### Indicators (`prettyprogress.indicator`)

Generators for indeterminate progress, each advancing at most once per
given duration (`timedelta` or seconds; `0` advances on every call):
`indeterminate_indicator_dominoes`, `indeterminate_indicator_pac_man`,
`indeterminate_indicator_moving_back_and_forth`,
`indeterminate_indicator_moving_left_to_right` and
`indeterminate_indicator_moving_right_to_left`. The module also offers
`display_width`, `pad` and `snip`, which ignore terminal escape sequences.

### Rendering (`prettyprogress.render`)

`Renderer` turns a single tracker into a line of text (`render_tracker`,
`generate_tracker_str`, `render_pinned_messages`), and can be used without
`Progress`. `format_duration` and `round_duration` format and round the
times shown.

## What it does not do

This is a library only: it installs no command-line program. It draws by
moving the cursor with terminal escape sequences, so output redirected to a
file contains those sequences.

## Running the tests

```
pip install -e ".[test]"
pytest
```