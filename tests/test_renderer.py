import io
import os
import tempfile
from dataclasses import dataclass
from unittest.mock import patch

import pytest

from quizprompt.options import option_answer_list
from quizprompt.renderer import (
    ErrorTemplateData,
    Renderer,
    ansi_code,
    compute_cursor_offset,
    error_template,
    run_template,
)
from quizprompt.survey import default_icons, default_prompt_config
from quizprompt.terminal.base import Stdio

ERASE = "\x1b[0G\x1b[2K"
UP = "\x1b[1A\x1b[0G"


def make_renderer():
    out = io.StringIO()
    return Renderer(stdio=Stdio(in_=io.BytesIO(), out=out, err=io.StringIO())), out


@dataclass
class _Rows:
    def iterate_option(self, ix, opt):
        return opt.value


def test_validation_error():
    user_out, layout_out = run_template(
        error_template,
        ErrorTemplateData(
            error=ValueError("Football is not a valid month"),
            icon=default_icons().error,
        ),
    )
    expected = "X Sorry, your reply was invalid: Football is not a valid month\n"
    assert layout_out == expected
    assert user_out == "\x1b[31m" + expected[:-1] + "\x1b[0m\n"


@pytest.mark.parametrize(
    "style, code",
    [
        ("", ""),
        ("off", ""),
        ("reset", "\x1b[0m"),
        ("red", "\x1b[31m"),
        ("green+hb", "\x1b[1;92m"),
        ("cyan+b", "\x1b[1;36m"),
        ("default+hb", "\x1b[1;99m"),
        ("red:blue", "\x1b[31;44m"),
        ("red:blue+h", "\x1b[31;104m"),
        ("200", "\x1b[38;5;200m"),
    ],
)
def test_ansi_code(style, code):
    assert ansi_code(style) == code


@pytest.mark.parametrize(
    "text, wants",
    [
        ("", 0),
        ("hello", 0),
        ("hello\n", 1),
        ("hello\nbeautiful\nworld\n", 3),
        ("A" * 72 + "\n", 1),
        ("A" * 73 + "\n", 2),
        ("A" * 144 + "\n", 2),
        ("A" * 145 + "\n", 3),
    ],
)
def test_count_lines(text, wants):
    size = os.terminal_size((72, 30))
    with tempfile.TemporaryFile("w+") as out:
        renderer = Renderer(stdio=Stdio(out=out))
        with patch("os.get_terminal_size", return_value=size):
            assert renderer.count_lines(text) == wants


def test_term_width_safe_falls_back_without_terminal():
    renderer, _ = make_renderer()
    assert renderer.term_width_safe() == 10000


def test_render_erases_previous_text():
    renderer, out = make_renderer()
    template = lambda data, color: data
    renderer.render(template, "a\nb\n")
    renderer.render(template, "c\n")
    assert out.getvalue() == ERASE + "a\nb\n" + ERASE + (UP + "\x1b[2K") * 2 + "c\n"


def test_render_uses_colours_for_user():
    renderer, out = make_renderer()
    renderer.render(lambda data, color: color("red") + data + color("reset"), "x")
    assert out.getvalue() == ERASE + "\x1b[31mx\x1b[0m"


def test_error_prints_message():
    renderer, out = make_renderer()
    renderer.error(default_prompt_config(), ValueError("bad"))
    assert out.getvalue() == (
        ERASE + ERASE + "\x1b[31mX Sorry, your reply was invalid: bad\x1b[0m\n"
    )


def test_error_is_erased_on_next_error():
    renderer, out = make_renderer()
    config = default_prompt_config()
    renderer.error(config, ValueError("first"))
    start = len(out.getvalue())
    renderer.error(config, ValueError("second"))
    second = out.getvalue()[start:]
    assert second.startswith(ERASE + UP + "\x1b[2K" + ERASE)
    assert second.endswith("second\x1b[0m\n")


def test_offset_cursor():
    renderer, out = make_renderer()
    renderer.offset_cursor(2)
    assert out.getvalue() == UP * 2


def test_render_with_cursor_offset():
    renderer, out = make_renderer()
    opts = option_answer_list(["a", "b", "c"])
    renderer.render_with_cursor_offset(
        lambda data, color: "list\n",
        lambda value, color: f"  {value}\n",
        _Rows(),
        opts,
        1,
    )
    assert out.getvalue() == "\x1b8" + ERASE + "list\n" + "\x1b7" + UP * 2


@pytest.mark.parametrize(
    "values, idx, width, want",
    [
        ([], 0, 100, 0),
        (["one", "two"], 0, 100, 2),
        (["one", "two", "three"], 2, 100, 1),
        (["x" * 25], 0, 10, 3),
        (["x" * 20], 0, 10, 2),
        (["x" * 25, "y"], 1, 10, 1),
    ],
)
def test_compute_cursor_offset(values, idx, width, want):
    opts = option_answer_list(values)
    got = compute_cursor_offset(lambda value, color: value, _Rows(), opts, idx, width)
    assert got == want


def test_new_cursor_and_reader_use_stdio():
    renderer, out = make_renderer()
    cursor = renderer.new_cursor()
    reader = renderer.new_rune_reader()
    assert cursor.out is out
    assert reader.stdio is renderer.stdio


def test_with_stdio_replaces_streams():
    renderer, _ = make_renderer()
    other = io.StringIO()
    renderer.with_stdio(Stdio(out=other))
    renderer.render(lambda data, color: data, "z")
    assert other.getvalue() == ERASE + "z"