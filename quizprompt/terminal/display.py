"""Line erasing on ANSI terminals."""

from __future__ import annotations

from enum import IntEnum
from typing import TextIO


class EraseLineMode(IntEnum):
    """Which part of the current line to erase."""

    END = 0
    START = 1
    ALL = 2


def erase_line(out: TextIO, mode: EraseLineMode) -> None:
    """Erase part of the current line according to ``mode``."""
    out.write(f"\x1b[{int(EraseLineMode(mode))}K")
    out.flush()