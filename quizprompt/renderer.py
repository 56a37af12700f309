"""Drawing prompts on the terminal and erasing what was drawn before."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, Sequence, Tuple

from quizprompt.options import OptionAnswer
from quizprompt.survey import Icon, PromptConfig
from quizprompt.terminal.base import Stdio, new_ansi_stdout
from quizprompt.terminal.cursor import Cursor
from quizprompt.terminal.display import EraseLineMode, erase_line
from quizprompt.terminal.runereader import RuneReader
from quizprompt.terminal.width import string_width

ColorFunc = Callable[[str], str]
Template = Callable[[Any, ColorFunc], str]

_RESET = "\x1b[0m"
_FALLBACK_WIDTH = 10000

_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}

_FOREGROUND_FLAGS = (("b", "1"), ("B", "5"), ("u", "4"), ("i", "7"), ("s", "9"))


def _color_number(key: str, base: int, extended: str) -> str:
    if key.isascii() and key.isdigit():
        return f"{extended};5;{int(key)}"
    return str(base + _COLORS.get(key, 0))


def ansi_code(style: str) -> str:
    """Return the escape sequence for a style such as ``"green+hb"`` or ``"red:blue"``.

    ``"reset"`` resets all attributes; an empty style or ``"off"`` gives nothing.
    """
    if style in ("", "off"):
        return ""
    if style == "reset":
        return _RESET

    fg_part, _, bg_part = style.partition(":")
    fg_key, _, fg_style = fg_part.partition("+")
    bg_key, _, bg_style = bg_part.partition("+")

    codes = [code for flag, code in _FOREGROUND_FLAGS if flag in fg_style]
    if fg_key:
        base = 90 if "h" in fg_style else 30
        codes.append(_color_number(fg_key, base, "38"))
    if bg_key:
        base = 100 if "h" in bg_style else 40
        codes.append(_color_number(bg_key, base, "48"))
    if not codes:
        return ""
    return "\x1b[" + ";".join(codes) + "m"


@dataclass(frozen=True)
class _Palette:
    """Turns style names into escape sequences, or into nothing when disabled."""

    enabled: bool

    def __call__(self, style: str) -> str:
        return ansi_code(style) if self.enabled else ""


_colored = _Palette(enabled=True)
_plain = _Palette(enabled=False)


def run_template(template: Template, data: Any) -> Tuple[str, str]:
    """Render ``template`` twice: with colours for the user, without for layout."""
    return template(data, _colored), template(data, _plain)


@dataclass
class ErrorTemplateData:
    """What the error template shows: the error and the icon in front of it."""

    error: BaseException
    icon: Icon


def error_template(data: ErrorTemplateData, color: ColorFunc) -> str:
    """Render the message telling the user their answer was rejected."""
    return (
        f"{color(data.icon.format)}{data.icon.text} Sorry, your reply was invalid: "
        f"{data.error}{color('reset')}\n"
    )


class IterableOpts(Protocol):
    """Template data that can be narrowed down to a single option."""

    def iterate_option(self, ix: int, opt: OptionAnswer) -> Any:
        ...


def compute_cursor_offset(
    render_option: Template,
    data: IterableOpts,
    opts: Sequence[OptionAnswer],
    idx: int,
    term_width: int,
) -> int:
    """Return how many lines up from the bottom the option at ``idx`` is drawn."""
    offset = len(opts) - idx
    for i, opt in enumerate(opts):
        if i < idx:
            continue
        rendered = render_option(data.iterate_option(i, opt), _plain)
        width = len(rendered)
        if width > term_width:
            split_count = width // term_width
            if width % term_width == 0:
                split_count -= 1
            offset += split_count
    return offset


@dataclass
class Renderer:
    """Draws prompt text and remembers it so it can be erased and redrawn."""

    stdio: Stdio = field(default_factory=Stdio, kw_only=True)
    _rendered_errors: str = field(default="", init=False, repr=False, compare=False)
    _rendered_text: str = field(default="", init=False, repr=False, compare=False)

    def with_stdio(self, stdio: Stdio) -> None:
        """Use ``stdio`` for all further input and output."""
        self.stdio = stdio

    def new_rune_reader(self) -> RuneReader:
        """Return a key reader on this renderer's input."""
        return RuneReader(self.stdio)

    def new_cursor(self) -> Cursor:
        """Return a cursor on this renderer's streams."""
        return Cursor(in_=self.stdio.in_, out=self.stdio.out)

    def _write(self, text: str) -> None:
        out = new_ansi_stdout(self.stdio.out)
        out.write(text)
        out.flush()

    def error(self, config: PromptConfig, invalid: BaseException) -> None:
        """Erase the prompt and show why the last answer was rejected."""
        self._reset_prompt(self.count_lines(self._rendered_errors))
        self._rendered_errors = ""
        self._reset_prompt(self.count_lines(self._rendered_text))
        self._rendered_text = ""

        user_out, layout_out = run_template(
            error_template, ErrorTemplateData(error=invalid, icon=config.icons.error)
        )
        self._write(user_out)
        self._rendered_errors += layout_out

    def offset_cursor(self, offset: int) -> None:
        """Move the cursor ``offset`` lines up."""
        cursor = self.new_cursor()
        for _ in range(offset):
            cursor.previous_line(1)

    def render(self, template: Template, data: Any) -> None:
        """Erase what was drawn last and draw ``template`` filled with ``data``."""
        self._reset_prompt(self.count_lines(self._rendered_text))
        self._rendered_text = ""

        user_out, layout_out = run_template(template, data)
        self._write(user_out)
        self.append_rendered_text(layout_out)

    def render_with_cursor_offset(
        self,
        template: Template,
        render_option: Template,
        data: IterableOpts,
        opts: Sequence[OptionAnswer],
        idx: int,
    ) -> None:
        """Draw the template, then put the cursor on the line of option ``idx``."""
        cursor = self.new_cursor()
        cursor.restore()
        self.render(template, data)
        cursor.save()
        offset = compute_cursor_offset(
            render_option, data, opts, idx, self.term_width_safe()
        )
        self.offset_cursor(offset)

    def append_rendered_text(self, text: str) -> None:
        """Record ``text`` as drawn, so the next redraw erases it too."""
        self._rendered_text += text

    def _reset_prompt(self, lines: int) -> None:
        cursor = self.new_cursor()
        cursor.horizontal_absolute(0)
        erase_line(self.stdio.out, EraseLineMode.ALL)
        for _ in range(lines):
            cursor.previous_line(1)
            erase_line(self.stdio.out, EraseLineMode.ALL)

    def _term_width(self) -> int:
        return os.get_terminal_size(self.stdio.out.fileno()).columns

    def term_width_safe(self) -> int:
        """Return the terminal width, or a very wide one when it cannot be found."""
        try:
            width = self._term_width()
        except (OSError, ValueError, AttributeError):
            width = 0
        return width or _FALLBACK_WIDTH

    def count_lines(self, text: str) -> int:
        """Count the lines ``text`` takes up, including lines wrapped by the terminal."""
        width = self.term_width_safe()
        count = text.count("\n")
        for line in text.split("\n"):
            line_width = string_width(line)
            if line_width > width:
                count += line_width // width
                if line_width % width == 0:
                    count -= 1
        return count