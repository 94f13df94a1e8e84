from __future__ import annotations

from typing import Any, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


QuestionKind = Literal["text", "number", "single-choice", "multi-choice", "long-text"]

QUESTION_KINDS: tuple[str, ...] = get_args(QuestionKind)
CHOICE_KINDS = frozenset({"single-choice", "multi-choice"})

# names used by older schema files
LEGACY_KINDS = {
    "radio": "single-choice",
    "checkbox": "multi-choice",
    "textarea": "long-text",
}


class QuestionSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    kind: QuestionKind = Field(alias="type")
    required: bool = False
    options: Optional[List[str]] = None  # for choice kinds

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LEGACY_KINDS.get(value, value)
        return value

    @field_validator("options")
    @classmethod
    def _dedupe_options(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def _check_options(self) -> "QuestionSpec":
        if self.is_choice and not self.options:
            raise ValueError(f"question {self.id!r} of kind {self.kind} needs options")
        if not self.is_choice and self.options:
            raise ValueError(f"question {self.id!r} of kind {self.kind} cannot have options")
        return self

    @property
    def is_choice(self) -> bool:
        return self.kind in CHOICE_KINDS


class SurveySpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    questions: List[QuestionSpec] = Field(min_length=1)

    @field_validator("questions")
    @classmethod
    def _unique_ids(cls, value: List[QuestionSpec]) -> List[QuestionSpec]:
        seen: set[str] = set()
        for q in value:
            if q.id in seen:
                raise ValueError(f"duplicate question id: {q.id}")
            seen.add(q.id)
        return value

    def index_of(self, question_id: str) -> int:
        for i, q in enumerate(self.questions):
            if q.id == question_id:
                return i
        raise KeyError(question_id)

    def question(self, question_id: str) -> QuestionSpec:
        return self.questions[self.index_of(question_id)]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
