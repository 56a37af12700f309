# quizprompt

Interactive terminal prompts for Python programs. It asks the user a series
of questions, validates each answer, optionally transforms it, and returns
the answers keyed by question name.

## Installation

```
pip install quizprompt
```

## Asking questions

```python
from quizprompt.survey import Question, ask
from quizprompt.select import Select
from quizprompt.validate import required

questions = [
    Question(
        name="color",
        prompt=Select(message="Choose a color:", options=["red", "blue", "green"]),
        validate=required,
    ),
]

answers = ask(questions)
print(answers["color"].value)   # e.g. "blue"
print(answers["color"].index)   # e.g. 1
```

A single prompt can be asked with `ask_one`, which returns its answer:

```python
from quizprompt.survey import ask_one
from quizprompt.select import Select

answer = ask_one(Select(message="Pick one:", options=["a", "b"], default="b"))
```

The answer of a `Select` is an `OptionAnswer` (from `quizprompt.options`)
holding the chosen `value` and its `index` in the option list.

## The select prompt

`Select` takes `message`, `options`, an optional `default` (an option string
or an index), `help`, `page_size` (0 means use the configured one),
`vim_mode`, a custom `filter(filter_text, value, index)` and a
`description(value, index)` shown next to each option.

While it runs:

- Up / Down arrows or Tab move the selection, wrapping at either end;
  with vim mode on, `k` and `j` do the same.
- Typing filters the options (case-insensitive substring match by default);
  Backspace/Delete removes the last filter character, Ctrl+W or Ctrl+X clears it.
- Escape toggles vim mode; typing a filter character turns it off.
- The help key (`?` by default) shows the prompt's help text, if it has one.
- Enter confirms when at least one option is shown; Ctrl+D confirms too.
- Ctrl+C raises `quizprompt.terminal.base.InterruptError`.

A `Select` with no options raises `ValueError`, as does a default that is not
among the options or is out of range; a default of any other type raises
`TypeError`.

## Options

`ask` and `ask_one` take option functions from `quizprompt.survey`:

- `with_stdio(in_, out, err)`: use other streams than the process's standard ones
  (`in_` is a binary stream, `out` and `err` text streams)
- `with_validator(v)`: add a validator run on every answer
- `with_page_size(n)`: number of options shown at once (default 7)
- `with_filter(fn)`: the function deciding which options match the typed filter
- `with_help_input(char)`: the key that shows a prompt's help text
- `with_icons(fn)`: change the `IconSet` in place
- `with_keep_filter`, `with_show_cursor`, `with_hide_character`,
  `with_remove_select_all`, `with_remove_select_none`: stored in the
  `PromptConfig` for prompts that use them

`None` entries among the options are ignored.

## Validators and transformers

`quizprompt.validate` provides `required`, `min_length`, `max_length`,
`min_items`, `max_items` and `compose_validators`. A validator raises
`ValidationError` (a `ValueError`) when an answer is rejected; `ask` then
shows the error through the prompt and asks again. Any validator of your own
that raises `ValueError` works the same way.

`quizprompt.transform` provides `to_lower`, `title`, `transform_string` and
`compose_transformers`. A question's `transform` is applied to the accepted
answer before it is recorded; a `None` result leaves the answer unchanged.
The string transformers return `""` for empty or non-string answers.

## Writing your own prompt

Subclass `quizprompt.survey.Prompt` and implement `prompt(config)`,
`cleanup(config, val)` and `error(config, err)`. A prompt may also define
`with_stdio(stdio)` to receive the streams, and
`prompt_again(config, invalid, err)` to ask again after an invalid answer.
`quizprompt.renderer.Renderer` handles drawing text and erasing what was
drawn before.

## Terminal helpers

`quizprompt.terminal` holds the lower layers: key codes and `Stdio` in
`base`, ANSI cursor movement in `cursor`, line erasing in `display`,
visible text width in `width`, and key and line reading (`RuneReader`) in
`runereader`.

## What it does not do

- `Select` is the only ready-made prompt: there is no text input, confirm,
  password, multi-select or editor prompt.
- Terminals are driven with ANSI escape sequences and POSIX terminal modes;
  there is no Windows console support.
- There is no command-line program; it is a library only.