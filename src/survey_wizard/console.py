"""
Terminal rendition of the survey wizard.

Lines starting with ``:`` are navigation commands; anything else answers the
current question.
"""

from __future__ import annotations

from typing import Callable

from .wizard.controls import control_for
from .wizard.machine import SurveyWizard


HELP = ":prev  :next  :preview  :back  :jump N  :submit  :quit"


def _show_question(wizard: SurveyWizard, out: Callable[[str], None]) -> None:
    q = wizard.current_question
    out(f"\n[{wizard.progress}%] Step {wizard.current_index + 1} of {wizard.total}")
    out(control_for(q).prompt(q) + (" *" if q.required else ""))
    if q.description:
        out(f"  {q.description}")
    current = wizard.value(q)
    if current not in ("", []):
        out(f"  current: {current}")


def _show_preview(wizard: SurveyWizard, out: Callable[[str], None]) -> None:
    out(f"\nPreview your answers ({wizard.answered_count()} answered)")
    for item in wizard.preview():
        out(f"  {item.index + 1}. {item.title}: {item.display}")
    out("Type :submit to send, :jump N to edit, :back to return.")


async def run_console(
    wizard: SurveyWizard,
    read: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> bool:
    """Drive ``wizard`` until a successful submit or ``:quit``."""
    out(wizard.survey.title)
    if wizard.survey.description:
        out(wizard.survey.description)
    out(HELP)
    while True:
        if wizard.reviewing:
            _show_preview(wizard, out)
        else:
            _show_question(wizard, out)
        if wizard.validation_error:
            out(f"! {wizard.validation_error}")

        try:
            line = read("> ")
        except EOFError:
            return False
        cmd, _, arg = line.strip().partition(" ")

        if cmd == ":quit":
            return False
        elif cmd == ":prev":
            wizard.prev()
        elif cmd == ":next":
            wizard.next()
        elif cmd == ":preview":
            wizard.request_review()
        elif cmd == ":back":
            wizard.back_to_questions()
        elif cmd == ":jump":
            if arg.strip().isdigit() and 1 <= int(arg) <= wizard.total:
                wizard.jump_to(int(arg) - 1)
            else:
                out(f"! pick a question between 1 and {wizard.total}")
        elif cmd == ":submit":
            if await wizard.submit() is not None:
                out("Survey submitted!")
                return True
        elif cmd.startswith(":"):
            out(HELP)
        elif wizard.reviewing:
            out(HELP)
        else:
            q = wizard.current_question
            wizard.set_answer(q.id, control_for(q).read_line(q, line, wizard.value(q)))
            # multi-choice stays put so several toggles can be entered
            if q.kind != "multi-choice":
                wizard.next()
