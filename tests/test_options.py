import pytest

from quizprompt.options import OptionAnswer, option_answer_list, paginate


def test_option_answer_list_assigns_indices():
    answers = option_answer_list(["a", "b", "c"])
    assert answers == [
        OptionAnswer(value="a", index=0),
        OptionAnswer(value="b", index=1),
        OptionAnswer(value="c", index=2),
    ]


def test_option_answer_list_empty():
    assert option_answer_list([]) == []


def test_pagination_too_few():
    choices = option_answer_list(["choice1", "choice2", "choice3"])
    page, idx = paginate(4, choices, 3)
    assert page == choices
    assert idx == 3


def test_pagination_first_half():
    choices = option_answer_list(
        ["choice1", "choice2", "choice3", "choice4", "choice5", "choice6"]
    )
    page, idx = paginate(4, choices, 2)
    assert page == choices[0:4]
    assert idx == 2


def test_pagination_middle():
    choices = option_answer_list(
        ["choice0", "choice1", "choice2", "choice3", "choice4", "choice5"]
    )
    page, idx = paginate(2, choices, 3)
    assert page == choices[2:4]
    assert idx == 1


def test_pagination_last_half():
    choices = option_answer_list(
        ["choice0", "choice1", "choice2", "choice3", "choice4", "choice5"]
    )
    page, idx = paginate(3, choices, 5)
    assert page == choices[3:6]
    assert idx == 2


@pytest.mark.parametrize("sel", range(10))
def test_pagination_cursor_points_at_selection(sel):
    choices = option_answer_list([f"c{i}" for i in range(10)])
    page, idx = paginate(4, choices, sel)
    assert len(page) == 4
    assert page[idx] == choices[sel]


def test_page_size_one_shows_only_selection():
    choices = option_answer_list(["red", "blue", "green"])
    page, idx = paginate(1, choices, 2)
    assert page == [OptionAnswer(value="green", index=2)]
    assert idx == 0