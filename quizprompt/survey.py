"""Asking a series of questions, validating and transforming the answers."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from quizprompt.terminal.base import Stdio

Validator = Callable[[Any], None]
Transformer = Callable[[Any], Any]
Filter = Callable[[str, str, int], bool]


def _contains_filter(filter_text: str, value: str, index: int) -> bool:
    """Include an option when it contains the filter text, ignoring case."""
    return filter_text.lower() in value.lower()


@dataclass
class Icon:
    """The text shown for an icon and the colour format it is shown in."""

    text: str = ""
    format: str = ""


@dataclass
class IconSet:
    """The icons used by the prompts."""

    help_input: Icon = field(default_factory=Icon)
    error: Icon = field(default_factory=lambda: Icon("X", "red"))
    help: Icon = field(default_factory=lambda: Icon("?", "cyan"))
    question: Icon = field(default_factory=lambda: Icon("?", "green+hb"))
    marked_option: Icon = field(default_factory=lambda: Icon("[x]", "green"))
    unmarked_option: Icon = field(default_factory=lambda: Icon("[ ]", "default+hb"))
    select_focus: Icon = field(default_factory=lambda: Icon(">", "cyan+b"))


@dataclass
class PromptConfig:
    """Settings shared by every prompt of one ``ask`` call."""

    page_size: int = 7
    icons: IconSet = field(default_factory=IconSet)
    help_input: str = "?"
    suggest_input: str = "tab"
    filter: Filter = _contains_filter
    keep_filter: bool = False
    show_cursor: bool = False
    remove_select_all: bool = False
    remove_select_none: bool = False
    hide_character: str = "*"


class Prompt(ABC):
    """Something that can ask the user for an answer.

    A prompt may also define ``with_stdio(stdio)`` to receive the streams it
    should use, and ``prompt_again(config, invalid, err)`` to ask again after
    an invalid answer.
    """

    @abstractmethod
    def prompt(self, config: PromptConfig) -> Any:
        """Ask the user and return the answer."""

    @abstractmethod
    def cleanup(self, config: PromptConfig, val: Any) -> None:
        """Redraw the prompt showing the final answer ``val``."""

    @abstractmethod
    def error(self, config: PromptConfig, err: Exception) -> None:
        """Show the user why the last answer was rejected."""


@dataclass
class Question:
    """One question: where its answer goes, how to ask, check and transform it."""

    name: str
    prompt: Any
    validate: Optional[Validator] = None
    transform: Optional[Transformer] = None


def _default_stdio() -> Stdio:
    return Stdio(
        in_=getattr(sys.stdin, "buffer", sys.stdin),
        out=sys.stdout,
        err=sys.stderr,
    )


@dataclass
class AskOptions:
    """Everything an ``ask`` call is configured with."""

    stdio: Stdio = field(default_factory=_default_stdio)
    validators: List[Validator] = field(default_factory=list)
    prompt_config: PromptConfig = field(default_factory=PromptConfig)


AskOpt = Callable[[AskOptions], None]


def default_ask_options() -> AskOptions:
    """Return the options used when none are given, talking to the process's stdio."""
    return AskOptions()


def default_prompt_config() -> PromptConfig:
    """Return the default prompt configuration."""
    return default_ask_options().prompt_config


def default_icons() -> IconSet:
    """Return the default icon set."""
    return default_prompt_config().icons


def with_stdio(in_: Any, out: Any, err: Any) -> AskOpt:
    """Use the given input, output and error streams."""

    def apply(options: AskOptions) -> None:
        options.stdio.in_ = in_
        options.stdio.out = out
        options.stdio.err = err

    return apply


def with_filter(filter: Filter) -> AskOpt:
    """Use ``filter`` as the default option filter."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.filter = filter

    return apply


def with_keep_filter(keep_filter: bool) -> AskOpt:
    """Choose whether the filter is kept after a selection."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.keep_filter = keep_filter

    return apply


def with_remove_select_all() -> AskOpt:
    """Remove the select-all shortcut from multi-selects."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.remove_select_all = True

    return apply


def with_remove_select_none() -> AskOpt:
    """Remove the select-none shortcut from multi-selects."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.remove_select_none = True

    return apply


def with_validator(v: Validator) -> AskOpt:
    """Add a validator applied to every answer."""

    def apply(options: AskOptions) -> None:
        options.validators.append(v)

    return apply


def with_page_size(page_size: int) -> AskOpt:
    """Set the default number of options shown per page."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.page_size = page_size

    return apply


def with_help_input(char: str) -> AskOpt:
    """Set the key that asks a prompt for its help text."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.help_input = str(char)

    return apply


def with_icons(set_icons: Callable[[IconSet], None]) -> AskOpt:
    """Let ``set_icons`` change the icon set in place."""

    def apply(options: AskOptions) -> None:
        set_icons(options.prompt_config.icons)

    return apply


def with_show_cursor(show_cursor: bool) -> AskOpt:
    """Choose whether the cursor stays visible while prompting."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.show_cursor = show_cursor

    return apply


def with_hide_character(char: str) -> AskOpt:
    """Set the character shown in place of typed password characters."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.hide_character = char

    return apply


def _build_options(opts: tuple) -> AskOptions:
    options = default_ask_options()
    for opt in opts:
        if opt is not None:
            opt(options)
    return options


def ask(questions: List[Question], *args: Optional[AskOpt]) -> Dict[str, Any]:
    """Ask every question in turn and return the answers keyed by question name.

    ``args`` are option functions such as those made by ``with_validator``;
    ``None`` entries are ignored. A validator rejects an answer by raising
    ``ValueError``; the prompt then shows the error and asks again.
    """
    options = _build_options(args)
    config = options.prompt_config

    def validate(question: Question, val: Any) -> None:
        if question.validate is not None:
            question.validate(val)
        for validator in options.validators:
            validator(val)

    answers: Dict[str, Any] = {}
    for question in questions:
        prompt = question.prompt
        if hasattr(prompt, "with_stdio"):
            prompt.with_stdio(options.stdio)

        ans: Any = None
        validation_error: Optional[Exception] = None
        while True:
            if validation_error is not None:
                prompt.error(config, validation_error)
                if hasattr(prompt, "prompt_again"):
                    ans = prompt.prompt_again(config, ans, validation_error)
                else:
                    ans = prompt.prompt(config)
            else:
                ans = prompt.prompt(config)
            try:
                validate(question, ans)
            except ValueError as exc:
                validation_error = exc
                continue
            break

        if question.transform is not None:
            new_ans = question.transform(ans)
            if new_ans is not None:
                ans = new_ans

        prompt.cleanup(config, ans)
        answers[question.name] = ans

    return answers


def ask_one(prompt: Any, *args: Optional[AskOpt]) -> Any:
    """Ask a single prompt and return its validated answer."""
    return ask([Question(name="", prompt=prompt)], *args)[""]