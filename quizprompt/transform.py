"""Transformers that turn an answer into a different representation."""

from __future__ import annotations

import re
from typing import Any, Callable

from quizprompt.validate import is_zero

Transformer = Callable[[Any], Any]

_WORD = re.compile(r"[^\W_]+(?:['\u2019][^\W_]+)*")


def transform_string(f: Callable[[str], str]) -> Transformer:
    """Return a transformer applying ``f`` to string answers.

    Empty and non-string answers give an empty string.
    """

    def transform(ans: Any) -> Any:
        if is_zero(ans) or not isinstance(ans, str):
            return ""
        return f(ans)

    return transform


def to_lower(ans: Any) -> Any:
    """Lower-case a string answer."""
    return transform_string(str.lower)(ans)


def _title_case(text: str) -> str:
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)


def title(ans: Any) -> Any:
    """Capitalise the first letter of every word of a string answer."""
    return transform_string(_title_case)(ans)


def compose_transformers(*transformers: Transformer) -> Transformer:
    """Return a transformer that applies ``transformers`` one after another."""

    def transform(ans: Any) -> Any:
        for transformer in transformers:
            ans = transformer(ans)
        return ans

    return transform