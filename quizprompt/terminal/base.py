"""Key codes, coordinates, standard streams and small terminal helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TextIO

KEY_ARROW_LEFT = "\x02"
KEY_ARROW_RIGHT = "\x06"
KEY_ARROW_UP = "\x10"
KEY_ARROW_DOWN = "\x0e"
KEY_SPACE = " "
KEY_ENTER = "\r"
KEY_BACKSPACE = "\b"
KEY_DELETE = "\x7f"
KEY_INTERRUPT = "\x03"
KEY_END_TRANSMISSION = "\x04"
KEY_ESCAPE = "\x1b"
KEY_DELETE_WORD = "\x17"  # Ctrl+W
KEY_DELETE_LINE = "\x18"  # Ctrl+X
SPECIAL_KEY_HOME = "\x01"
SPECIAL_KEY_END = "\x11"
SPECIAL_KEY_DELETE = "\x12"
IGNORE_KEY = "\x00"
KEY_TAB = "\t"

# Terminal coordinates reported by the device start at 1.
COORDINATE_SYSTEM_BEGIN = 1


class InterruptError(Exception):
    """Raised when the user interrupts a prompt (for example with Ctrl+C)."""

    def __init__(self, message: str = "interrupt") -> None:
        super().__init__(message)


@dataclass
class Coord:
    """A cell position in the terminal; ``x`` is the column, ``y`` the row."""

    x: int = 0
    y: int = 0

    def cursor_is_at_line_end(self, size: Coord) -> bool:
        """Return True when this position sits in the last column of ``size``."""
        return self.x == size.x

    def cursor_is_at_line_begin(self) -> bool:
        """Return True when this position sits in the first column."""
        return self.x == COORDINATE_SYSTEM_BEGIN


@dataclass
class Stdio:
    """The input, output and error streams a prompt talks to.

    ``in_`` is a binary stream, ``out`` and ``err`` are text streams.
    """

    in_: Any = None
    out: Any = None
    err: Any = None


def sound_bell(out: TextIO) -> None:
    """Ring the terminal bell."""
    out.write("\a")
    out.flush()


def _require_writer(out: Any) -> TextIO:
    if not callable(getattr(out, "write", None)):
        raise TypeError(f"expected a writable stream, got {type(out).__name__}")
    return out


def new_ansi_stdout(out: TextIO) -> TextIO:
    """Return a stream that understands ANSI escape sequences for standard output.

    ANSI-capable terminals need no translation, so the stream itself is
    returned once it is known to be writable.
    """
    return _require_writer(out)


def new_ansi_stderr(out: TextIO) -> TextIO:
    """Return a stream that understands ANSI escape sequences for standard error.

    ANSI-capable terminals need no translation, so the stream itself is
    returned once it is known to be writable.
    """
    return _require_writer(out)