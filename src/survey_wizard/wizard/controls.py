"""
Per-kind input controls.

A control turns a question and its current value into an editable widget
(HTML for the browser, a prompt for the console) and turns user input back
into the new value. Controls never touch the answer store; the caller hands
the returned value to ``SurveyWizard.set_answer``.
"""

from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Sequence, Union

from ..surveys.schema import QUESTION_KINDS, QuestionSpec


_INPUT_CLASS = "field"


def toggle_option(current: Sequence[str], option: str) -> List[str]:
    """Remove ``option`` if selected, append it otherwise."""
    selected = list(dict.fromkeys(current))
    if option in selected:
        selected.remove(option)
    else:
        selected.append(option)
    return selected


def parse_number(raw: str) -> Union[int, float, str]:
    """Empty input maps to the ``""`` sentinel, anything else to a number."""
    raw = raw.strip()
    if raw == "":
        return ""
    try:
        return int(raw)
    except ValueError:
        pass
    number = float(raw)
    if number != number or number in (float("inf"), float("-inf")):
        raise ValueError(f"not a finite number: {raw!r}")
    return number


def _first(submitted: Sequence[str]) -> str:
    return submitted[0] if submitted else ""


class Control:
    kind: str = ""

    def render(self, question: QuestionSpec, value: Any) -> str:
        raise NotImplementedError

    def read(self, question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
        """Map submitted form values to the question's new value."""
        raise NotImplementedError

    def prompt(self, question: QuestionSpec) -> str:
        return question.title

    def read_line(self, question: QuestionSpec, line: str, current: Any) -> Any:
        return self.read(question, [line], current)


class TextControl(Control):
    kind = "text"

    def render(self, question: QuestionSpec, value: Any) -> str:
        placeholder = question.description or question.title
        return (
            f"<input class='{_INPUT_CLASS}' type='text' name='answer' autofocus "
            f"value='{escape(str(value or ''), quote=True)}' "
            f"placeholder='{escape(placeholder, quote=True)}' />"
        )

    def read(self, question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
        return _first(submitted)


class NumberControl(Control):
    kind = "number"

    def render(self, question: QuestionSpec, value: Any) -> str:
        placeholder = question.description or question.title
        shown = "" if value is None else str(value)
        return (
            f"<input class='{_INPUT_CLASS}' type='number' step='any' name='answer' autofocus "
            f"value='{escape(shown, quote=True)}' "
            f"placeholder='{escape(placeholder, quote=True)}' />"
        )

    def read(self, question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
        try:
            return parse_number(_first(submitted))
        except ValueError:
            # browsers only post numeric strings; keep the old value otherwise
            return current

    def prompt(self, question: QuestionSpec) -> str:
        return f"{question.title} (number)"


class LongTextControl(Control):
    kind = "long-text"

    def render(self, question: QuestionSpec, value: Any) -> str:
        return (
            f"<textarea class='{_INPUT_CLASS}' name='answer' rows='4' "
            f"placeholder='{escape(question.description or '', quote=True)}'>"
            f"{escape(str(value or ''))}</textarea>"
        )

    def read(self, question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
        return _first(submitted)

    def read_line(self, question: QuestionSpec, line: str, current: Any) -> Any:
        # "\n" typed literally becomes a line break
        return line.replace("\\n", "\n")


class SingleChoiceControl(Control):
    kind = "single-choice"

    def render(self, question: QuestionSpec, value: Any) -> str:
        rows = []
        for opt in question.options or []:
            checked = " checked" if value == opt else ""
            css = "option selected" if value == opt else "option"
            rows.append(
                f"<label class='{css}'>"
                f"<input type='radio' name='answer' value='{escape(opt, quote=True)}'{checked} />"
                f"<span>{escape(opt)}</span>"
                f"</label>"
            )
        return f"<div class='options'>{''.join(rows)}</div>"

    def read(self, question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
        choice = _first(submitted)
        if choice and choice in (question.options or []):
            return choice
        return current

    def prompt(self, question: QuestionSpec) -> str:
        lines = [question.title]
        lines.extend(f"  {i}) {opt}" for i, opt in enumerate(question.options or [], start=1))
        return "\n".join(lines)

    def read_line(self, question: QuestionSpec, line: str, current: Any) -> Any:
        options = question.options or []
        line = line.strip()
        if line.isdigit() and 1 <= int(line) <= len(options):
            return options[int(line) - 1]
        return self.read(question, [line], current)


class MultiChoiceControl(Control):
    kind = "multi-choice"

    def render(self, question: QuestionSpec, value: Any) -> str:
        selected = value if isinstance(value, list) else []
        rows = []
        for opt in question.options or []:
            checked = opt in selected
            rows.append(
                f"<label class='{'option selected' if checked else 'option'}'>"
                f"<input type='checkbox' name='answer' value='{escape(opt, quote=True)}'"
                f"{' checked' if checked else ''} />"
                f"<span>{escape(opt)}</span>"
                f"<button type='submit' name='action' value='toggle:{escape(opt, quote=True)}' "
                f"class='toggle'>{'Remove' if checked else 'Add'}</button>"
                f"</label>"
            )
        return f"<div class='options'>{''.join(rows)}</div>"

    def read(self, question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
        posted = set(submitted)
        return [opt for opt in question.options or [] if opt in posted]

    def prompt(self, question: QuestionSpec) -> str:
        lines = [f"{question.title} (numbers toggle a choice, e.g. 1 3)"]
        lines.extend(f"  {i}) {opt}" for i, opt in enumerate(question.options or [], start=1))
        return "\n".join(lines)

    def read_line(self, question: QuestionSpec, line: str, current: Any) -> Any:
        options = question.options or []
        selected = list(current) if isinstance(current, list) else []
        for token in line.replace(",", " ").split():
            if token.isdigit() and 1 <= int(token) <= len(options):
                selected = toggle_option(selected, options[int(token) - 1])
        return selected


CONTROLS: Dict[str, Control] = {
    c.kind: c
    for c in (
        TextControl(),
        NumberControl(),
        LongTextControl(),
        SingleChoiceControl(),
        MultiChoiceControl(),
    )
}

_missing = set(QUESTION_KINDS) - set(CONTROLS)
if _missing:
    raise RuntimeError(f"no control registered for kinds: {sorted(_missing)}")


def control_for(question: QuestionSpec) -> Control:
    return CONTROLS[question.kind]


def render_control(question: QuestionSpec, value: Any) -> str:
    return control_for(question).render(question, value)


def read_control(question: QuestionSpec, submitted: Sequence[str], current: Any) -> Any:
    return control_for(question).read(question, submitted, current)
