"""
Survey wizard state machine.

Walks one respondent through a survey's questions in order, keeps their
answers, validates required questions on navigation and submission, and hands
the finished answers to a submission gateway.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, assert_never

from ..gateway import SubmissionError, SubmissionGateway
from ..surveys.schema import QuestionSpec, SurveySpec
from .answers import AnswerStore
from .progress import calc_progress, display_value


logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This question is required."
INCOMPLETE_MESSAGE = "Please complete required fields."
SUBMIT_FAILED_MESSAGE = "Submission failed"


class Phase(str, Enum):
    ANSWERING = "answering"
    REVIEWING = "reviewing"


@dataclass(frozen=True)
class PreviewItem:
    index: int
    question_id: str
    title: str
    display: str


class SurveyWizard:
    """One survey-taking session."""

    def __init__(self, survey: SurveySpec, gateway: Optional[SubmissionGateway] = None) -> None:
        self.survey = survey
        self.gateway = gateway
        self.answers = AnswerStore.for_survey(survey)
        self.current_index = 0
        self.phase = Phase.ANSWERING
        self.validation_error: Optional[str] = None
        self.last_submission: Optional[Dict[str, Any]] = None
        self.submitting = False

    # ------------------------------------------------------------------ state

    @property
    def questions(self) -> List[QuestionSpec]:
        return self.survey.questions

    @property
    def total(self) -> int:
        return len(self.survey.questions)

    @property
    def current_question(self) -> QuestionSpec:
        return self.survey.questions[self.current_index]

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def reviewing(self) -> bool:
        return self.phase is Phase.REVIEWING

    @property
    def progress(self) -> int:
        return calc_progress(self.current_index, self.total)

    def value(self, question: QuestionSpec) -> Any:
        return self.answers.get(question).value

    # ----------------------------------------------------------- answering

    def set_answer(self, question_id: str, value: Any) -> None:
        question = self.survey.question(question_id)
        before = self.answers.get(question)
        if self.answers.set(question, value) != before:
            # an edit after submitting means the stored submission is stale
            self.last_submission = None

    def can_proceed(self, question: QuestionSpec) -> bool:
        if not question.required:
            return True
        answer = self.answers.get(question)
        kind = question.kind
        if kind == "text" or kind == "long-text" or kind == "single-choice":
            # whitespace-only counts as empty
            return not answer.is_blank()
        elif kind == "multi-choice":
            return len(answer.value) > 0
        elif kind == "number":
            # only the "" sentinel fails; 0 and negatives pass
            return not answer.is_blank()
        else:
            assert_never(kind)

    # ---------------------------------------------------------- navigation

    def next(self) -> None:
        self.validation_error = None
        if not self.can_proceed(self.current_question):
            self.validation_error = REQUIRED_MESSAGE
            return
        if self.current_index < self.total - 1:
            self.current_index += 1
        else:
            self.phase = Phase.REVIEWING

    def prev(self) -> None:
        self.validation_error = None
        if self.current_index > 0:
            self.current_index -= 1

    def back_to_questions(self) -> None:
        self.phase = Phase.ANSWERING

    def jump_to(self, index: int) -> None:
        if not 0 <= index < self.total:
            raise IndexError(f"question index out of range: {index}")
        self.phase = Phase.ANSWERING
        self.current_index = index

    def edit_last(self) -> None:
        self.jump_to(self.total - 1)

    def request_review(self) -> None:
        self.phase = Phase.REVIEWING

    # -------------------------------------------------------------- review

    def preview(self) -> List[PreviewItem]:
        return [
            PreviewItem(index=i, question_id=q.id, title=q.title, display=display_value(self.value(q)))
            for i, q in enumerate(self.questions)
        ]

    def answered_count(self) -> int:
        # counts non-blank answers: 0 is answered, [] and whitespace are not
        return sum(1 for q in self.questions if not self.answers.get(q).is_blank())

    def first_incomplete(self) -> Optional[int]:
        for i, q in enumerate(self.questions):
            if q.required and not self.can_proceed(q):
                return i
        return None

    async def submit(self) -> Optional[Dict[str, Any]]:
        """Validate every required question, then send the answers.

        Returns the gateway's payload on success, ``None`` otherwise; failures
        end up in ``validation_error``.
        """
        if self.submitting:
            logger.debug("submit ignored: a submission is already in flight")
            return None

        missing = self.first_incomplete()
        if missing is not None:
            self.phase = Phase.ANSWERING
            self.current_index = missing
            self.validation_error = INCOMPLETE_MESSAGE
            return None

        self.validation_error = None
        if self.gateway is None:
            raise RuntimeError("SurveyWizard has no submission gateway")

        self.submitting = True
        try:
            result = await self.gateway.submit_answers(self.survey.id, self.answers.snapshot())
        except SubmissionError as e:
            logger.warning("submit failed: %s", e.message)
            self.validation_error = e.message or SUBMIT_FAILED_MESSAGE
            return None
        finally:
            self.submitting = False

        logger.info("Saved submission for survey %s", self.survey.id)
        self.last_submission = result
        return result

    def reset(self) -> None:
        self.answers = AnswerStore.for_survey(self.survey)
        self.current_index = 0
        self.phase = Phase.ANSWERING
        self.validation_error = None
        self.last_submission = None
