#!/usr/bin/env python3
"""
Minimal ANSI terminal driver.

All output is buffered and sent to the stream in one write on flush(), so a whole
frame reaches the terminal at once. Coordinates are 1-based (col, row); negative
values count back from the far edge (-1 is the last column/row).

Box drawing uses the VT100 special graphics charset (ESC ( 0), which every
xterm-compatible terminal understands.
"""
import contextlib
import shutil
import sys
from typing import List, TextIO, Tuple

ESC = "\033"
CSI = ESC + "["

# VT100 line-drawing glyphs, valid while the special graphics charset is selected
LINE_HORIZ = "q"
LINE_VERTI = "x"
LINE_TOP_LEFT = "l"
LINE_TOP_RIGHT = "k"
LINE_BOTTOM_RIGHT = "j"
LINE_BOTTOM_LEFT = "m"


class ANSITerminal:
    """Buffered writer of ANSI control sequences."""

    def __init__(self, stream: TextIO = None, size: Tuple[int, int] = None):
        self.stream = stream if stream is not None else sys.stdout
        self._fixed_size = size
        self._buffer: List[str] = []
        self._linedraw_depth = 0

    # ---- output --------------------------------------------------------

    def _emit(self, text: str) -> None:
        self._buffer.append(text)

    def write(self, text: str) -> None:
        self._emit(text)

    def flush(self) -> None:
        if self._buffer:
            self.stream.write("".join(self._buffer))
            self._buffer.clear()
        self.stream.flush()

    def size(self) -> Tuple[int, int]:
        """Terminal size as (cols, rows)."""
        if self._fixed_size is not None:
            return self._fixed_size
        cols, rows = shutil.get_terminal_size()
        return (cols, rows)

    # ---- cursor and attributes -----------------------------------------

    def moveto(self, col: int, row: int) -> None:
        if col < 0 or row < 0:
            cols, rows = self.size()
            if col < 0:
                col = cols + col + 1
            if row < 0:
                row = rows + row + 1
        self._emit(f"{CSI}{row};{col}f")

    def clear(self) -> None:
        self._emit(CSI + "2J")

    def cursor(self, visible: bool) -> None:
        self._emit(CSI + ("?25h" if visible else "?25l"))

    def fg8(self, colour: int) -> None:
        self._emit(f"{CSI}38;5;{colour}m")

    def bold(self) -> None:
        self._emit(CSI + "1m")

    def reset(self) -> None:
        self._emit(CSI + "m")

    def replace_mode(self) -> None:
        self._emit(CSI + "4l")

    def alternate(self) -> None:
        self._emit(CSI + "?47h")

    def normal(self) -> None:
        self._emit(CSI + "?47l")

    def soft_reset(self) -> None:
        """Undo everything a session may have changed on screen."""
        self.normal()
        self.cursor(True)
        self.replace_mode()
        self.reset()

    # ---- line drawing --------------------------------------------------

    def linedraw_enable(self) -> None:
        self._linedraw_depth += 1
        if self._linedraw_depth == 1:
            self._emit(ESC + "(0")

    def linedraw_disable(self) -> None:
        if self._linedraw_depth <= 0:
            raise RuntimeError("linedraw_disable() without matching linedraw_enable()")
        self._linedraw_depth -= 1
        if self._linedraw_depth == 0:
            self._emit(ESC + "(B")

    def draw_horiz_line(self, row: int, col_from: int, col_to: int) -> None:
        self.moveto(col_from, row)
        self.linedraw_enable()
        self._emit(LINE_HORIZ * (col_to - col_from + 1))
        self.linedraw_disable()

    def draw_verti_line(self, col: int, row_from: int, row_to: int) -> None:
        self.linedraw_enable()
        for row in range(row_from, row_to + 1):
            self.moveto(col, row)
            self._emit(LINE_VERTI)
        self.linedraw_disable()

    def draw_box(self, col1: int, row1: int, col2: int, row2: int) -> None:
        self.linedraw_enable()
        self.moveto(col1, row1)
        self._emit(LINE_TOP_LEFT)
        self.moveto(col2, row1)
        self._emit(LINE_TOP_RIGHT)
        self.moveto(col1, row2)
        self._emit(LINE_BOTTOM_LEFT)
        self.moveto(col2, row2)
        self._emit(LINE_BOTTOM_RIGHT)
        self.draw_horiz_line(row1, col1 + 1, col2 - 1)
        self.draw_horiz_line(row2, col1 + 1, col2 - 1)
        self.draw_verti_line(col1, row1 + 1, row2 - 1)
        self.draw_verti_line(col2, row1 + 1, row2 - 1)
        self.linedraw_disable()

    # ---- input mode ----------------------------------------------------

    @contextlib.contextmanager
    def raw_mode(self):
        """
        Turn off echo and line buffering for the duration of the block.

        Signal keys stay active so Ctrl-C still stops the program. Does nothing when
        the stream is not attached to a TTY (pipes, tests, Windows).
        """
        try:
            fd = self.stream.fileno()
            is_tty = self.stream.isatty()
        except (AttributeError, OSError, ValueError):
            is_tty = False
        if not is_tty:
            yield
            return

        try:
            import termios
        except ImportError:
            yield
            return

        original = termios.tcgetattr(fd)
        changed = termios.tcgetattr(fd)
        changed[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON)
        changed[6][termios.VMIN] = 1
        changed[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, changed)
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, original)
