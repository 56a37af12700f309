"""Reading single key presses and editable lines from a terminal."""

from __future__ import annotations

import unicodedata
from typing import Any, Callable, Optional, Tuple

from quizprompt.terminal.base import (
    COORDINATE_SYSTEM_BEGIN,
    IGNORE_KEY,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END_TRANSMISSION,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    SPECIAL_KEY_DELETE,
    SPECIAL_KEY_END,
    SPECIAL_KEY_HOME,
    InterruptError,
    Stdio,
    sound_bell,
)
from quizprompt.terminal.cursor import Cursor
from quizprompt.terminal.display import EraseLineMode, erase_line
from quizprompt.terminal.width import rune_width

try:
    import termios
except ImportError:  # pragma: no cover - platforms without termios
    termios = None  # type: ignore[assignment]

_NORMAL_KEYPAD = "["
_APPLICATION_KEYPAD = "O"
_READ_CHUNK = 4096

_ESCAPE_KEYS = {
    "A": KEY_ARROW_UP,
    "B": KEY_ARROW_DOWN,
    "C": KEY_ARROW_RIGHT,
    "D": KEY_ARROW_LEFT,
    "F": SPECIAL_KEY_END,
    "H": SPECIAL_KEY_HOME,
}

OnRune = Callable[[str, str], Tuple[str, bool]]


class BufferedReader:
    """Serves bytes from ``buffer`` first, then from the stream ``in_``."""

    def __init__(self, in_: Any, buffer: bytearray) -> None:
        self.in_ = in_
        self.buffer = buffer

    def read(self, size: int) -> bytes:
        """Return up to ``size`` bytes, preferring those held in the buffer."""
        if self.buffer:
            data = bytes(self.buffer[:size])
            del self.buffer[:size]
            return data
        reader = getattr(self.in_, "read1", None) or self.in_.read
        return reader(size)


class RuneReader:
    """Reads key presses and lines of text from a terminal's input."""

    def __init__(self, stdio: Stdio) -> None:
        self.stdio = stdio
        self.buffer = bytearray()
        self._source = BufferedReader(stdio.in_, self.buffer)
        self._pending = bytearray()
        self._saved_mode: Optional[list] = None

    # terminal modes -------------------------------------------------------

    def set_term_mode(self) -> None:
        """Turn off echo, line buffering and signal keys on the input terminal."""
        if termios is None:
            raise OSError("terminal modes are not supported on this platform")
        fd = self.stdio.in_.fileno()
        try:
            saved = termios.tcgetattr(fd)
        except termios.error as exc:
            raise OSError(*exc.args) from exc
        self._saved_mode = saved
        new_mode = list(saved)
        new_mode[6] = list(saved[6])
        new_mode[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG)
        new_mode[6][termios.VMIN] = 1
        new_mode[6][termios.VTIME] = 0
        try:
            termios.tcsetattr(fd, termios.TCSANOW, new_mode)
        except termios.error as exc:
            raise OSError(*exc.args) from exc

    def restore_term_mode(self) -> None:
        """Put the input terminal back into the mode saved by ``set_term_mode``."""
        if termios is None or self._saved_mode is None:
            return
        try:
            termios.tcsetattr(self.stdio.in_.fileno(), termios.TCSANOW, self._saved_mode)
        except termios.error as exc:
            raise OSError(*exc.args) from exc

    # low level input ------------------------------------------------------

    def _fill(self) -> bool:
        data = self._source.read(_READ_CHUNK)
        if not data:
            return False
        self._pending += data
        return True

    def _next_byte(self) -> int:
        if not self._pending and not self._fill():
            raise EOFError("end of input")
        byte = self._pending[0]
        del self._pending[0]
        return byte

    def _next_char(self) -> str:
        lead = self._next_byte()
        if lead < 0x80:
            return chr(lead)
        if 0xC0 <= lead <= 0xDF:
            length = 2
        elif 0xE0 <= lead <= 0xEF:
            length = 3
        elif 0xF0 <= lead <= 0xF7:
            length = 4
        else:
            return "\ufffd"
        while len(self._pending) < length - 1:
            if not self._fill():
                return "\ufffd"
        try:
            char = (bytes([lead]) + bytes(self._pending[: length - 1])).decode("utf-8")
        except UnicodeDecodeError:
            return "\ufffd"
        del self._pending[: length - 1]
        return char

    def _discard(self, count: int) -> None:
        for _ in range(count):
            if not self._pending and not self._fill():
                return
            del self._pending[0]

    def read_rune(self) -> str:
        """Read one key press, turning escape sequences into key codes."""
        char = self._next_char()
        if char != KEY_ESCAPE:
            return char
        if not self._pending:
            # nothing follows, so this was the Escape key itself
            return KEY_ESCAPE
        char = self._next_char()
        if char not in (_NORMAL_KEYPAD, _APPLICATION_KEYPAD):
            raise ValueError(
                f"unexpected escape sequence from terminal: {[KEY_ESCAPE, char]!r}"
            )
        keypad = char
        char = self._next_char()
        if char in _ESCAPE_KEYS:
            return _ESCAPE_KEYS[char]
        if char == "3" and keypad == _NORMAL_KEYPAD:
            self._discard(1)
            return SPECIAL_KEY_DELETE
        self._discard(1)
        return IGNORE_KEY

    # line editing ---------------------------------------------------------

    def _print_char(self, char: str, mask: str) -> None:
        self.stdio.out.write(mask if mask else char)
        self.stdio.out.flush()

    def read_line(self, mask: str = "", on_rune: Optional[OnRune] = None) -> str:
        """Read an editable line of text; ``mask`` replaces echoed characters."""
        return self.read_line_with_default(mask, "", on_rune)

    def read_line_with_default(
        self, mask: str = "", default: str = "", on_rune: Optional[OnRune] = None
    ) -> str:
        """Read an editable line of text that starts out holding ``default``.

        ``on_rune`` sees every key with the current line and returns the line
        to use and whether reading should stop.
        """
        out = self.stdio.out
        cursor = Cursor(in_=self.stdio.in_, out=out)
        line: list[str] = []
        index = 0

        terminal_size = cursor.size(self.buffer)
        current = cursor.location(self.buffer)

        def increment() -> None:
            if current.cursor_is_at_line_end(terminal_size):
                current.x = COORDINATE_SYSTEM_BEGIN
                current.y += 1
            else:
                current.x += 1

        def decrement() -> None:
            if current.cursor_is_at_line_begin():
                current.x = terminal_size.x
                current.y -= 1
            else:
                current.x -= 1

        def erase_to_end() -> None:
            erase_line(out, EraseLineMode.END)

        if default:
            index = len(default)
            out.write(default)
            out.flush()
            line = list(default)
            for _ in default:
                increment()

        while True:
            key = self.read_rune()

            if on_rune is not None:
                result, stop = on_rune(key, "".join(line))
                if stop:
                    return result

            if key in ("\r", "\n", KEY_END_TRANSMISSION):
                while index > 0:
                    if current.cursor_is_at_line_begin():
                        erase_to_end()
                        cursor.previous_line(1)
                        cursor.forward(terminal_size.x)
                    else:
                        cursor.back(1)
                    decrement()
                    index -= 1
                cursor.move_next_line(current, terminal_size)
                return "".join(line)

            if key == KEY_INTERRUPT:
                out.write("\r\n")
                out.flush()
                raise InterruptError()

            if key in (KEY_BACKSPACE, KEY_DELETE):
                if index > 0 and line:
                    if index == len(line):
                        cells = rune_width(line[-1])
                        line.pop()
                        if current.x == 1:
                            cursor.previous_line(1)
                            cursor.forward(terminal_size.x)
                        else:
                            cursor.back(cells)
                        erase_to_end()
                    else:
                        cells = rune_width(line[index - 1])
                        del line[index - 1]
                        cursor.save()
                        cursor.back(cells)
                        for char in line[index - 1:]:
                            erase_to_end()
                            self._print_char(char, mask)
                        if current.y < terminal_size.y:
                            cursor.next_line(1)
                            erase_to_end()
                        cursor.restore()
                        if current.cursor_is_at_line_begin():
                            cursor.previous_line(1)
                            cursor.forward(terminal_size.x)
                        else:
                            cursor.back(cells)
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if key == KEY_ARROW_LEFT:
                if index > 0:
                    if current.cursor_is_at_line_begin():
                        cursor.previous_line(1)
                        cursor.forward(terminal_size.x)
                    else:
                        cursor.back(rune_width(line[index - 1]))
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if key == KEY_ARROW_RIGHT:
                if index < len(line):
                    if current.cursor_is_at_line_end(terminal_size):
                        cursor.next_line(1)
                    else:
                        cursor.forward(rune_width(line[index]))
                    index += 1
                    increment()
                else:
                    sound_bell(out)
                continue

            if key == SPECIAL_KEY_HOME:
                while index > 0:
                    if current.cursor_is_at_line_begin():
                        cursor.previous_line(1)
                        cursor.forward(terminal_size.x)
                        current.y -= 1
                        current.x = terminal_size.x
                    else:
                        cells = rune_width(line[index - 1])
                        cursor.back(cells)
                        current.x -= cells
                    index -= 1
                continue

            if key == SPECIAL_KEY_END:
                while index != len(line):
                    if current.cursor_is_at_line_end(terminal_size):
                        cursor.next_line(1)
                        current.y += 1
                        current.x = COORDINATE_SYSTEM_BEGIN
                    else:
                        cells = rune_width(line[index])
                        cursor.forward(cells)
                        current.x += cells
                    index += 1
                continue

            if key == SPECIAL_KEY_DELETE:
                if index != len(line):
                    cursor.save()
                    del line[index]
                    for char in line[index:]:
                        erase_to_end()
                        self._print_char(char, mask)
                    if current.y < terminal_size.y:
                        cursor.next_line(1)
                        erase_to_end()
                    cursor.restore()
                    if not line or index == len(line):
                        erase_to_end()
                continue

            if unicodedata.category(key) == "Cc" or key == IGNORE_KEY:
                continue

            if index == len(line):
                line.append(key)
                index += 1
                increment()
                self._print_char(key, mask)
            else:
                line.insert(index, key)
                cursor.save()
                erase_to_end()
                for char in line[index:]:
                    erase_to_end()
                    self._print_char(char, mask)
                    increment()
                if (
                    current.cursor_is_at_line_end(terminal_size)
                    and current.y == terminal_size.y
                ):
                    out.write("\n")
                    out.flush()
                    cursor.restore()
                    cursor.previous_line(1)
                else:
                    cursor.restore()
                current = cursor.location(self.buffer)
                if current.cursor_is_at_line_end(terminal_size):
                    cursor.next_line(1)
                else:
                    cursor.forward(rune_width(key))
                index += 1
                increment()