"""Cursor movement and position queries on ANSI terminals."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from quizprompt.terminal.base import Coord

_DSR_PATTERN = re.compile(rb"\x1b\[(\d+);(\d+)R\Z")


@dataclass
class Cursor:
    """Moves and queries the cursor through a terminal's streams.

    ``in_`` is a binary stream, ``out`` a text stream.
    """

    in_: Any = None
    out: Any = None

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def up(self, n: int) -> None:
        """Move the cursor ``n`` cells up."""
        self._write(f"\x1b[{n}A")

    def down(self, n: int) -> None:
        """Move the cursor ``n`` cells down."""
        self._write(f"\x1b[{n}B")

    def forward(self, n: int) -> None:
        """Move the cursor ``n`` cells right."""
        self._write(f"\x1b[{n}C")

    def back(self, n: int) -> None:
        """Move the cursor ``n`` cells left."""
        self._write(f"\x1b[{n}D")

    def next_line(self, n: int) -> None:
        """Move the cursor to the beginning of the next line."""
        self.down(1)
        self.horizontal_absolute(0)

    def previous_line(self, n: int) -> None:
        """Move the cursor to the beginning of the previous line."""
        self.up(1)
        self.horizontal_absolute(0)

    def horizontal_absolute(self, x: int) -> None:
        """Move the cursor to column ``x`` of the current line."""
        self._write(f"\x1b[{x}G")

    def show(self) -> None:
        """Show the cursor."""
        self._write("\x1b[?25h")

    def hide(self) -> None:
        """Hide the cursor."""
        self._write("\x1b[?25l")

    def _move(self, x: int, y: int) -> None:
        self._write(f"\x1b[{x};{y}f")

    def save(self) -> None:
        """Save the current cursor position."""
        self._write("\x1b7")

    def restore(self) -> None:
        """Restore the saved cursor position."""
        self._write("\x1b8")

    def move_next_line(self, cur: Coord, terminal_size: Coord) -> None:
        """Move to the next line, scrolling first when on the bottom row."""
        if cur.y == terminal_size.y:
            self._write("\n")
        self.next_line(1)

    def _read_until_r(self) -> bytes:
        data = bytearray()
        while True:
            chunk = self.in_.read(1)
            if not chunk:
                raise EOFError("end of input while reading the cursor position")
            data += chunk
            if chunk == b"R":
                return bytes(data)

    def location(self, buf: Optional[bytearray]) -> Coord:
        """Ask the terminal where the cursor is.

        Input that arrives before the position report is appended to ``buf``
        so it is not lost.
        """
        self._write("\x1b[6n")
        while True:
            text = self._read_until_r()
            match = _DSR_PATTERN.search(text)
            if match is None:
                if buf is not None:
                    buf.extend(text)
                continue
            if buf is not None:
                buf.extend(text[: match.start()])
            row, col = int(match.group(1)), int(match.group(2))
            return Coord(col, row)

    def size(self, buf: Optional[bytearray]) -> Coord:
        """Return the terminal's width and height as a ``Coord``."""
        self.hide()
        try:
            self.save()
            try:
                self._move(999, 999)
                return self.location(buf)
            finally:
                self.restore()
        finally:
            self.show()