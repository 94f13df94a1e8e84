"""
Client-side survey wizard: answer store, state machine and input controls.
"""

from .answers import AnswerStore, AnswerTypeError
from .controls import CONTROLS, render_control, read_control, toggle_option
from .machine import INCOMPLETE_MESSAGE, REQUIRED_MESSAGE, Phase, PreviewItem, SurveyWizard
from .progress import calc_progress, display_value

__all__ = [
    "AnswerStore",
    "AnswerTypeError",
    "CONTROLS",
    "INCOMPLETE_MESSAGE",
    "REQUIRED_MESSAGE",
    "Phase",
    "PreviewItem",
    "SurveyWizard",
    "calc_progress",
    "display_value",
    "read_control",
    "render_control",
    "toggle_option",
]
