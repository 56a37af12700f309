"""A prompt that lets the user pick one option from a list."""

from __future__ import annotations

import contextlib
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from quizprompt.options import OptionAnswer, option_answer_list, paginate
from quizprompt.renderer import ColorFunc, Renderer
from quizprompt.survey import Prompt, PromptConfig
from quizprompt.terminal.base import (
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DELETE_LINE,
    KEY_DELETE_WORD,
    KEY_END_TRANSMISSION,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    KEY_SPACE,
    KEY_TAB,
    InterruptError,
)

Filter = Callable[[str, str, int], bool]
Describe = Callable[[str, int], str]


@dataclass
class SelectTemplateData:
    """What the select templates show."""

    select: Select
    page_entries: List[OptionAnswer] = field(default_factory=list)
    selected_index: int = 0
    answer: str = ""
    show_answer: bool = False
    show_help: bool = False
    description: Optional[Describe] = None
    config: Optional[PromptConfig] = None
    current_opt: OptionAnswer = field(default_factory=OptionAnswer)
    current_index: int = 0

    def iterate_option(self, ix: int, opt: OptionAnswer) -> SelectTemplateData:
        """Return a copy focused on the option ``opt`` at page position ``ix``."""
        return dataclasses.replace(self, current_index=ix, current_opt=opt)

    def get_description(self, opt: OptionAnswer) -> str:
        """Return the description of ``opt``, or an empty string."""
        if self.description is None:
            return ""
        return self.description(opt.value, opt.index)


def select_option_template(data: SelectTemplateData, color: ColorFunc) -> str:
    """Render the single option ``data.current_opt``."""
    icons = data.config.icons
    if data.selected_index == data.current_index:
        text = f"{color(icons.select_focus.format)}{icons.select_focus.text} "
    else:
        text = f"{color('default')}  "
    text += data.current_opt.value
    description = data.get_description(data.current_opt)
    if description != "":
        text += f" - {color('cyan')}{description}"
    return text + color("reset") + "\n"


def select_question_template(data: SelectTemplateData, color: ColorFunc) -> str:
    """Render the whole select prompt, or its answer once chosen."""
    config = data.config
    icons = config.icons
    select = data.select
    parts = []
    if data.show_help:
        parts.append(
            f"{color(icons.help.format)}{icons.help.text} {select.help}{color('reset')}\n"
        )
    parts.append(f"{color(icons.question.format)}{icons.question.text} {color('reset')}")
    parts.append(
        f"{color('default+hb')}{select.message}{select.filter_message}{color('reset')}"
    )
    if data.show_answer:
        parts.append(f"{color('cyan')} {data.answer}{color('reset')}\n")
        return "".join(parts)

    hint = "[Use arrows to move, type to filter"
    if select.help and not data.show_help:
        hint += f", {config.help_input} for more help"
    parts.append(f"  {color('cyan')}{hint}]{color('reset')}\n")
    parts.extend(
        select_option_template(data.iterate_option(ix, opt), color)
        for ix, opt in enumerate(data.page_entries)
    )
    return "".join(parts)


@dataclass
class Select(Renderer, Prompt):
    """Presents options to move through with the arrow keys and pick with enter.

    Typing filters the options; the answer is an ``OptionAnswer``.
    """

    message: str = ""
    options: List[str] = field(default_factory=list)
    default: Any = None
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: Optional[Filter] = None
    description: Optional[Describe] = None
    _filter_text: str = field(default="", init=False, repr=False)
    _selected_index: int = field(default=0, init=False, repr=False)
    _showing_help: bool = field(default=False, init=False, repr=False)

    def _page_size(self, config: PromptConfig) -> int:
        return self.page_size or config.page_size

    def _filter_options(self, config: PromptConfig) -> List[OptionAnswer]:
        if self._filter_text == "":
            return option_answer_list(self.options)
        include = self.filter if self.filter is not None else config.filter
        return [
            OptionAnswer(value=opt, index=i)
            for i, opt in enumerate(self.options)
            if include(self._filter_text, opt, i)
        ]

    def _draw(self, config: PromptConfig, options: List[OptionAnswer]) -> None:
        opts, idx = paginate(self._page_size(config), options, self._selected_index)
        data = SelectTemplateData(
            select=self,
            selected_index=idx,
            show_help=self._showing_help,
            description=self.description,
            page_entries=opts,
            config=config,
        )
        self.render_with_cursor_offset(
            select_question_template, select_option_template, data, opts, idx
        )

    def on_change(self, key: str, config: PromptConfig) -> bool:
        """Handle one key press; return True when an option has been chosen."""
        options = self._filter_options(config)
        old_filter = self._filter_text

        if key in (KEY_ENTER, "\n"):
            return bool(options) and self._selected_index < len(options)
        if (key == KEY_ARROW_UP or (self.vim_mode and key == "k")) and options:
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif (
            key in (KEY_TAB, KEY_ARROW_DOWN) or (self.vim_mode and key == "j")
        ) and options:
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == config.help_input and self.help != "":
            self._showing_help = True
        elif key == KEY_ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (KEY_DELETE_WORD, KEY_DELETE_LINE):
            self._filter_text = ""
        elif key in (KEY_DELETE, KEY_BACKSPACE):
            self._filter_text = self._filter_text[:-1]
        elif ord(key) >= ord(KEY_SPACE):
            self._filter_text += key
            self.vim_mode = False

        self.filter_message = f" {self._filter_text}" if self._filter_text else ""
        if old_filter != self._filter_text:
            options = self._filter_options(config)
            if options and len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        with contextlib.suppress(OSError):
            self._draw(config, options)
        return False

    def _apply_default(self) -> None:
        self._selected_index = 0
        default = self.default
        if default is None:
            return
        if isinstance(default, str):
            matches = [i for i, opt in enumerate(self.options) if opt == default]
            if not matches:
                raise ValueError(f'default value "{default}" not found in options')
            self._selected_index = matches[-1]
        elif isinstance(default, int) and not isinstance(default, bool):
            if default >= len(self.options):
                raise ValueError(
                    f"default index {default} exceeds the number of options"
                )
            self._selected_index = default
        else:
            raise TypeError("default value of select must be an int or string")

    def prompt(self, config: PromptConfig) -> OptionAnswer:
        """Ask the user to pick an option and return it."""
        if not self.options:
            raise ValueError("please provide options to select from")
        self._apply_default()

        cursor = self.new_cursor()
        cursor.save()
        cursor.hide()
        try:
            self._draw(config, option_answer_list(self.options))
            reader = self.new_rune_reader()
            with contextlib.suppress(OSError):
                reader.set_term_mode()
            try:
                while True:
                    key = reader.read_rune()
                    if key == KEY_INTERRUPT:
                        raise InterruptError()
                    if key == KEY_END_TRANSMISSION:
                        break
                    if self.on_change(key, config):
                        break
            finally:
                with contextlib.suppress(OSError):
                    reader.restore_term_mode()
        finally:
            cursor.restore()
            cursor.show()

        options = self._filter_options(config)
        self._filter_text = ""
        self.filter_message = ""
        if self._selected_index < len(options):
            return options[self._selected_index]
        return options[0]

    def cleanup(self, config: PromptConfig, val: OptionAnswer) -> None:
        """Redraw the prompt showing the chosen answer."""
        self.new_cursor().restore()
        self.render(
            select_question_template,
            SelectTemplateData(
                select=self,
                answer=val.value,
                show_answer=True,
                description=self.description,
                config=config,
            ),
        )