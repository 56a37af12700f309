"""Answers picked from a list of options, and paging through such a list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class OptionAnswer:
    """An option chosen by the user: its text and its position in the list."""

    value: str = ""
    index: int = 0


def option_answer_list(choices: Iterable[str]) -> List[OptionAnswer]:
    """Wrap each choice in an ``OptionAnswer`` carrying its position."""
    return [OptionAnswer(value=choice, index=i) for i, choice in enumerate(choices)]


def paginate(
    page_size: int, choices: Sequence[OptionAnswer], sel: int
) -> Tuple[List[OptionAnswer], int]:
    """Return the page of ``choices`` around ``sel`` and the cursor on that page."""
    total = len(choices)
    half = page_size // 2

    if total < page_size:
        # not enough options to fill a page
        start, end, cursor = 0, total, sel
    elif sel < half:
        # in the first half page
        start, end, cursor = 0, page_size, sel
    elif total - sel - 1 < half:
        # in the last half page
        start, end = total - page_size, total
        cursor = sel - start
    else:
        # somewhere in the middle
        above = half
        below = page_size - above
        cursor = half
        start, end = sel - above, sel + below

    return list(choices[start:end]), cursor