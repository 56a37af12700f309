import io

import pytest

from quizprompt.terminal.base import (
    COORDINATE_SYSTEM_BEGIN,
    Coord,
    InterruptError,
    Stdio,
    new_ansi_stderr,
    new_ansi_stdout,
    sound_bell,
)


def test_cursor_at_line_end_when_column_matches_width():
    size = Coord(80, 24)
    assert Coord(80, 3).cursor_is_at_line_end(size)
    assert not Coord(79, 3).cursor_is_at_line_end(size)


def test_cursor_at_line_begin_uses_first_column():
    assert Coord(COORDINATE_SYSTEM_BEGIN, 5).cursor_is_at_line_begin()
    assert not Coord(COORDINATE_SYSTEM_BEGIN + 1, 5).cursor_is_at_line_begin()


def test_coord_is_mutable():
    c = Coord(1, 1)
    c.x += 2
    c.y -= 1
    assert c == Coord(3, 0)


def test_interrupt_error_message():
    error = InterruptError()
    assert str(error) == "interrupt"


def test_sound_bell_writes_bell():
    out = io.StringIO()
    sound_bell(out)
    assert out.getvalue() == "\a"


def test_ansi_streams_pass_through():
    out = io.StringIO()
    err = io.StringIO()
    assert new_ansi_stdout(out) is out
    assert new_ansi_stderr(err) is err


def test_stdio_holds_streams():
    in_ = io.BytesIO(b"abc")
    out = io.StringIO()
    stdio = Stdio(in_=in_, out=out, err=out)
    assert stdio.in_.read() == b"abc"
    assert stdio.out is stdio.err