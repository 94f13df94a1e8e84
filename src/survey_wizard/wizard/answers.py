"""
Typed answer values for the wizard.

Each question kind maps to exactly one answer variant; the store keeps one
variant per question and hands out plain values for the wire.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Union, assert_never

from pydantic import BaseModel, ConfigDict, Field

from ..surveys.schema import QuestionSpec, SurveySpec


class AnswerTypeError(TypeError):
    """Raised when a value does not fit the question's kind."""


class TextAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: Literal["text"] = "text"
    text: str = ""

    @property
    def value(self) -> str:
        return self.text

    def is_blank(self) -> bool:
        return self.text.strip() == ""


class NumberAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: Literal["number"] = "number"
    # "" is the only empty sentinel; 0 and negatives are real answers
    number: Union[int, float, Literal[""]] = ""

    @property
    def value(self) -> Union[int, float, str]:
        return self.number

    def is_blank(self) -> bool:
        return isinstance(self.number, str)


class ChoiceAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: Literal["choice"] = "choice"
    choice: str = ""

    @property
    def value(self) -> str:
        return self.choice

    def is_blank(self) -> bool:
        return self.choice.strip() == ""


class ChoicesAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: Literal["choices"] = "choices"
    choices: List[str] = Field(default_factory=list)

    @property
    def value(self) -> List[str]:
        return list(self.choices)

    def is_blank(self) -> bool:
        return len(self.choices) == 0


Answer = Annotated[
    Union[TextAnswer, NumberAnswer, ChoiceAnswer, ChoicesAnswer],
    Field(discriminator="tag"),
]


def empty_answer(question: QuestionSpec) -> Answer:
    kind = question.kind
    if kind == "text" or kind == "long-text":
        return TextAnswer()
    elif kind == "number":
        return NumberAnswer()
    elif kind == "single-choice":
        return ChoiceAnswer()
    elif kind == "multi-choice":
        return ChoicesAnswer()
    else:
        assert_never(kind)


def answer_for(question: QuestionSpec, value: Any) -> Answer:
    """Wrap a raw value in the variant matching ``question.kind``."""
    kind = question.kind
    if kind == "text" or kind == "long-text":
        if not isinstance(value, str):
            raise AnswerTypeError(f"{question.id}: expected str, got {type(value).__name__}")
        return TextAnswer(text=value)
    elif kind == "number":
        if value == "" and isinstance(value, str):
            return NumberAnswer()
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise AnswerTypeError(f"{question.id}: expected number or '', got {value!r}")
        return NumberAnswer(number=value)
    elif kind == "single-choice":
        if not isinstance(value, str):
            raise AnswerTypeError(f"{question.id}: expected str, got {type(value).__name__}")
        return ChoiceAnswer(choice=value)
    elif kind == "multi-choice":
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise AnswerTypeError(f"{question.id}: expected list of str, got {value!r}")
        return ChoicesAnswer(choices=list(dict.fromkeys(value)))
    else:
        assert_never(kind)


class AnswerStore:
    """Per-session mapping of question id to its current answer."""

    def __init__(self, survey: SurveySpec) -> None:
        self._survey = survey
        self._answers: Dict[str, Answer] = {}

    @classmethod
    def for_survey(cls, survey: SurveySpec) -> "AnswerStore":
        store = cls(survey)
        for q in survey.questions:
            store._answers[q.id] = empty_answer(q)
        return store

    def get(self, question: QuestionSpec) -> Answer:
        # a missing entry behaves like the kind's empty default
        answer = self._answers.get(question.id)
        if answer is None:
            return empty_answer(question)
        return answer

    def set(self, question: QuestionSpec, value: Any) -> Answer:
        answer = answer_for(question, value)
        self._answers[question.id] = answer
        return answer

    def value(self, question_id: str) -> Any:
        return self.get(self._survey.question(question_id)).value

    def snapshot(self) -> Dict[str, Any]:
        return {q.id: self.get(q).value for q in self._survey.questions}

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._answers

    def __len__(self) -> int:
        return len(self._answers)
