"""Validators that check an answer and raise when it is not acceptable."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

from quizprompt.options import OptionAnswer

Validator = Callable[[Any], None]


class ValidationError(ValueError):
    """Raised by a validator when an answer is not acceptable."""


def is_zero(value: Any) -> bool:
    """Return True when ``value`` is the empty or zero value of its type."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, complex)):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(
            is_zero(getattr(value, field.name)) for field in dataclasses.fields(value)
        )
    return False


def required(val: Any) -> None:
    """Reject empty answers; ``False`` counts as an answer."""
    if is_zero(val) and not isinstance(val, bool):
        raise ValidationError("Value is required")


def max_length(length: int) -> Validator:
    """Return a validator that rejects strings longer than ``length`` characters."""

    def validate(val: Any) -> None:
        if not isinstance(val, str):
            raise ValidationError(
                f"cannot enforce length on response of type {type(val).__name__}"
            )
        if len(val) > length:
            raise ValidationError(f"value is too long. Max length is {length}")

    return validate


def min_length(length: int) -> Validator:
    """Return a validator that rejects strings shorter than ``length`` characters."""

    def validate(val: Any) -> None:
        if not isinstance(val, str):
            raise ValidationError(
                f"cannot enforce length on response of type {type(val).__name__}"
            )
        if len(val) < length:
            raise ValidationError(f"value is too short. Min length is {length}")

    return validate


def _is_answer_list(val: Any) -> bool:
    return isinstance(val, (list, tuple)) and all(
        isinstance(item, OptionAnswer) for item in val
    )


def max_items(number_items: int) -> Validator:
    """Return a validator that rejects lists of more than ``number_items`` answers."""

    def validate(val: Any) -> None:
        if not _is_answer_list(val):
            raise ValidationError(
                "cannot impose the length on something other than a list of answers"
            )
        if len(val) > number_items:
            raise ValidationError(f"value is too long. Max items is {number_items}")

    return validate


def min_items(number_items: int) -> Validator:
    """Return a validator that rejects lists of fewer than ``number_items`` answers."""

    def validate(val: Any) -> None:
        if not _is_answer_list(val):
            raise ValidationError(
                "cannot impose the length on something other than a list of answers"
            )
        if len(val) < number_items:
            raise ValidationError(f"value is too short. Min items is {number_items}")

    return validate


def compose_validators(*validators: Validator) -> Validator:
    """Return a validator that runs ``validators`` in order, stopping at the first failure."""

    def validate(val: Any) -> None:
        for validator in validators:
            validator(val)

    return validate