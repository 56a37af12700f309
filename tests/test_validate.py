import pytest

from quizprompt.options import OptionAnswer
from quizprompt.validate import (
    ValidationError,
    compose_validators,
    is_zero,
    max_items,
    max_length,
    min_items,
    min_length,
    required,
)

SIX_ANSWERS = [OptionAnswer(value=v, index=i) for i, v in enumerate("abcdef")]
TWELVE = "abcdefGHIJKL"
EMOJI_TEXT = "I😍Python"


def test_required_succeeds_on_string():
    assert required("hello") is None


def test_required_fails_on_empty_string():
    with pytest.raises(ValidationError, match="Value is required"):
        required("")


def test_required_succeeds_on_map():
    assert required({"hello": 1}) is None


def test_required_passes_on_false():
    assert required(False) is None


def test_required_fails_on_empty_map():
    with pytest.raises(ValidationError):
        required({})


def test_required_succeeds_on_list():
    assert required(["hello"]) is None


def test_required_fails_on_empty_list():
    with pytest.raises(ValidationError):
        required([])


def test_required_fails_on_zero():
    with pytest.raises(ValidationError, match="Value is required"):
        required(0)


def test_required_fails_on_none():
    with pytest.raises(ValidationError, match="Value is required"):
        required(None)


def test_max_items():
    with pytest.raises(ValidationError, match="Max items is 4"):
        max_items(4)(SIX_ANSWERS)
    assert max_items(6)(SIX_ANSWERS) is None


def test_min_items():
    with pytest.raises(ValidationError, match="Min items is 10"):
        min_items(10)(SIX_ANSWERS)
    assert min_items(6)(SIX_ANSWERS) is None


def test_items_reject_non_answer_lists():
    with pytest.raises(ValidationError, match="list of answers"):
        max_items(3)("abc")
    with pytest.raises(ValidationError, match="list of answers"):
        min_items(1)(["a"])


def test_max_length():
    with pytest.raises(ValidationError, match="value is too long. Max length is 140"):
        max_length(140)("x" * 150)
    assert max_length(10)(EMOJI_TEXT) is None


def test_min_length():
    with pytest.raises(ValidationError, match="value is too short. Min length is 12"):
        min_length(12)("abcdefghij")
    with pytest.raises(ValidationError, match="Min length is 10"):
        min_length(10)(EMOJI_TEXT)


def test_min_length_on_int():
    with pytest.raises(ValidationError, match="cannot enforce length on response of type int"):
        min_length(12)(1)


def test_max_length_on_int():
    with pytest.raises(ValidationError, match="cannot enforce length on response of type int"):
        max_length(12)(1)


def test_compose_validators_rejects_long_string():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError):
        valid(TWELVE)


def test_compose_validators_fails_on_first_error():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError, match="Value is required"):
        valid("")


def test_compose_validators_fails_on_subsequent_validators():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError, match="Max length is 10"):
        valid(TWELVE)


def test_compose_validators_accepts_valid():
    valid = compose_validators(required, max_length(10))
    assert valid("short") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", True),
        ("a", False),
        (0, True),
        (3, False),
        (False, True),
        (True, False),
        ([], True),
        ({}, True),
        (None, True),
        (OptionAnswer(), True),
        (OptionAnswer(value="x", index=0), False),
    ],
)
def test_is_zero(value, expected):
    assert is_zero(value) is expected