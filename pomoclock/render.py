"""Pure frame building for the timer and config screens.

Nothing here touches curses: a ``Frame`` is a list of styled spans placed on
a ``rows`` x ``cols`` grid, and ``ui`` paints it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from . import timecalc
from .clock import ClockSnapshot
from .config import Theme
from .editor import ConfigEditor

PRIMARY = "primary"
DIM = "dim"

PIXEL = "██"
BLANK = "  "

# 3x5 block glyphs, two cells per pixel
DIGITS = [
    ["111", "101", "101", "101", "111"],
    ["001", "001", "001", "001", "001"],
    ["111", "001", "111", "100", "111"],
    ["111", "001", "111", "001", "111"],
    ["101", "101", "111", "001", "001"],
    ["111", "100", "111", "001", "111"],
    ["111", "100", "111", "101", "111"],
    ["111", "001", "001", "001", "001"],
    ["111", "101", "111", "101", "111"],
    ["111", "101", "111", "001", "111"],
]

DIGIT_HEIGHT = 5
DIGIT_WIDTH = 6
# horizontal advance after a digit and after the colon
DIGIT_STEP = 8
COLON_STEP = 4
BAR_LINES = 2
MESSAGE_LINES = 1
STATUS_LINES = 1

TIMER_HELP = " space:start/pause  r:reset  s:skip  c:config  q:quit "
CONFIG_HELP = " config | j/k:navigate  h/l:change  q:save&exit  esc:cancel "


@dataclass(frozen=True)
class Palette:
    primary: int
    dim: int
    basic: int


# xterm-256 colours, plus the nearest of the 8 basic colours
THEME_PALETTES: Dict[Theme, Palette] = {
    Theme.BLUE: Palette(primary=75, dim=153, basic=4),
    Theme.PURPLE: Palette(primary=177, dim=225, basic=5),
    Theme.GREEN: Palette(primary=78, dim=157, basic=2),
    Theme.RED: Palette(primary=203, dim=224, basic=1),
    Theme.ORANGE: Palette(primary=214, dim=221, basic=3),
    Theme.CYAN: Palette(primary=45, dim=123, basic=6),
}


def palette_for(theme: str) -> Palette:
    try:
        return THEME_PALETTES[Theme(theme)]
    except ValueError:
        return THEME_PALETTES[Theme.BLUE]


@dataclass(frozen=True)
class Span:
    y: int
    x: int
    text: str
    style: str = PRIMARY


@dataclass
class Frame:
    rows: int
    cols: int
    theme: str
    spans: List[Span] = field(default_factory=list)

    def put(self, y: int, x: int, text: str, style: str = PRIMARY) -> None:
        if not (0 <= y < self.rows) or x >= self.cols:
            return
        if x < 0:
            text = text[-x:]
            x = 0
        text = text[: self.cols - x]
        if text:
            self.spans.append(Span(y, x, text, style))

    def put_centered(self, y: int, text: str, style: str = PRIMARY) -> None:
        self.put(y, max(0, (self.cols - len(text)) // 2), text, style)

    def lines(self) -> List[str]:
        canvas = [[" " for _ in range(self.cols)] for _ in range(self.rows)]
        for span in self.spans:
            for i, ch in enumerate(span.text):
                canvas[span.y][span.x + i] = ch
        return ["".join(row) for row in canvas]


def _draw_digit(frame: Frame, digit: int, x: int, y: int) -> None:
    for row, bits in enumerate(DIGITS[digit]):
        text = "".join(PIXEL if bit == "1" else BLANK for bit in bits)
        frame.put(y + row, x, text)


def _draw_colon(frame: Frame, x: int, y: int) -> None:
    frame.put(y + 1, x, PIXEL)
    frame.put(y + 3, x, PIXEL)


def _clock_layout(digits: List[int]) -> Tuple[List[int], int, int]:
    """Digit x offsets, colon x offset and total width of an MM:SS block."""
    offsets = []
    x = 0
    for _ in digits[:-2]:
        offsets.append(x)
        x += DIGIT_STEP
    colon = x
    x += COLON_STEP
    for _ in digits[-2:]:
        offsets.append(x)
        x += DIGIT_STEP
    return offsets, colon, x - DIGIT_STEP + DIGIT_WIDTH


def _draw_progress_bar(frame: Frame, x: int, y: int, width: int, fraction: float) -> None:
    filled = int(width * fraction)
    frame.put(y, x, "=" * filled + "-" * (width - filled), DIM)


def _status_line(frame: Frame, snapshot: ClockSnapshot) -> None:
    y = frame.rows - 1
    status = "running" if snapshot.running else "paused"
    left = f" {snapshot.phase.label} | {status} "
    cycles = f"cycles: {snapshot.cycle_position}/{snapshot.cycles_before_long_break}"
    frame.put(y, 0, left)
    right_x = frame.cols
    if frame.cols >= len(left) + len(cycles) + len(TIMER_HELP) + 2:
        right_x = frame.cols - len(TIMER_HELP)
        frame.put(y, right_x, TIMER_HELP, DIM)
    # cycles sit centred in the gap between the two sides
    gap = right_x - len(left)
    frame.put(y, len(left) + max(0, (gap - len(cycles)) // 2), cycles, DIM)


def _compact_timer(frame: Frame, snapshot: ClockSnapshot, message: str) -> None:
    status = "running" if snapshot.running else "paused"
    frame.put(0, 0, f"{snapshot.phase.label.upper()} {timecalc.format_mmss(snapshot.remaining_seconds)} ({status})")
    frame.put(1, 0, f"cycles: {snapshot.cycle_position}/{snapshot.cycles_before_long_break}", DIM)
    if message:
        frame.put(2, 0, message, DIM)


def render_timer(snapshot: ClockSnapshot, theme: str, rows: int, cols: int, message: str = "") -> Frame:
    frame = Frame(rows=rows, cols=cols, theme=theme)
    digits = timecalc.clock_digits(snapshot.remaining_seconds)
    offsets, colon, width = _clock_layout(digits)
    min_rows = DIGIT_HEIGHT + BAR_LINES + MESSAGE_LINES + STATUS_LINES
    if cols < width or rows < min_rows:
        _compact_timer(frame, snapshot, message)
        return frame

    start_x = max(0, (cols - width) // 2)
    # the bar must stay above the message row
    top = max(0, min(rows // 2 - 3, rows - min_rows))

    for offset, digit in zip(offsets, digits):
        _draw_digit(frame, digit, start_x + offset, top)
    _draw_colon(frame, start_x + colon, top)

    fraction = timecalc.progress(snapshot.duration_seconds, snapshot.remaining_seconds)
    _draw_progress_bar(frame, start_x, top + DIGIT_HEIGHT + 1, width, fraction)

    if message:
        frame.put_centered(rows - 2, message, DIM)
    _status_line(frame, snapshot)
    return frame


def render_config(editor: ConfigEditor, rows: int, cols: int, message: str = "") -> Frame:
    frame = Frame(rows=rows, cols=cols, theme=editor.draft.theme)
    entries = list(editor.rows())
    block_height = 2 + len(entries) * 2
    start_y = max(0, (rows - block_height) // 2)

    frame.put_centered(start_y, "settings", DIM)
    width = max(len(label) for label, _, _ in entries) + 2
    for i, (label, value, selected) in enumerate(entries):
        pointer = "> " if selected else "  "
        line = f"{pointer}{label.ljust(width)}{value.rjust(6)}"
        frame.put_centered(start_y + 2 + i * 2, line, PRIMARY if selected else DIM)

    hint = "durations apply from the next phase"
    frame.put_centered(start_y + block_height, hint, DIM)
    if message:
        frame.put_centered(rows - 2, message, DIM)
    frame.put_centered(rows - 1, CONFIG_HELP)
    return frame
