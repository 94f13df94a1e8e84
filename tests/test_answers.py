"""
Tests for typed answers and the answer store.
"""

import pytest

from survey_wizard.wizard.answers import (
    AnswerStore,
    AnswerTypeError,
    ChoiceAnswer,
    ChoicesAnswer,
    NumberAnswer,
    TextAnswer,
    answer_for,
)


class TestAnswerFor:
    """Tests for wrapping raw values by question kind."""

    def test_variants_by_kind(self, all_kinds_survey):
        q = {x.id: x for x in all_kinds_survey.questions}

        assert isinstance(answer_for(q["name"], "Ann"), TextAnswer)
        assert isinstance(answer_for(q["notes"], "line\nline"), TextAnswer)
        assert isinstance(answer_for(q["age"], 41), NumberAnswer)
        assert isinstance(answer_for(q["smoke"], "No"), ChoiceAnswer)
        assert isinstance(answer_for(q["sports"], ["Run"]), ChoicesAnswer)

    def test_number_values(self, all_kinds_survey):
        """Numbers keep their type; '' is the empty sentinel."""
        age = all_kinds_survey.question("age")

        assert answer_for(age, 0).value == 0
        assert answer_for(age, -3).value == -3
        assert answer_for(age, 2.5).value == 2.5
        assert answer_for(age, "").value == ""
        assert answer_for(age, "").is_blank()
        assert not answer_for(age, 0).is_blank()

    @pytest.mark.parametrize(
        "question_id, value",
        [
            ("name", ["Ann"]),
            ("name", 3),
            ("age", "12"),
            ("age", True),
            ("age", None),
            ("smoke", ["No"]),
            ("sports", "Run"),
            ("sports", ["Run", 1]),
        ],
    )
    def test_wrong_type_rejected(self, all_kinds_survey, question_id, value):
        with pytest.raises(AnswerTypeError):
            answer_for(all_kinds_survey.question(question_id), value)

    def test_multi_choice_deduplicated(self, all_kinds_survey):
        answer = answer_for(all_kinds_survey.question("sports"), ["Run", "Gym", "Run"])
        assert answer.value == ["Run", "Gym"]


class TestAnswerStore:
    """Tests for AnswerStore."""

    def test_prepopulated_defaults(self, all_kinds_survey):
        """Every question starts with its kind's empty value."""
        store = AnswerStore.for_survey(all_kinds_survey)

        assert len(store) == 5
        assert store.snapshot() == {"name": "", "age": "", "smoke": "", "sports": [], "notes": ""}

    def test_set_and_value(self, all_kinds_survey):
        store = AnswerStore.for_survey(all_kinds_survey)
        store.set(all_kinds_survey.question("sports"), ["Swim"])

        assert store.value("sports") == ["Swim"]

    def test_missing_entry_is_empty_default(self, all_kinds_survey):
        """An absent key behaves like the empty default."""
        store = AnswerStore(all_kinds_survey)

        assert "sports" not in store
        assert store.get(all_kinds_survey.question("sports")).value == []
        assert store.value("age") == ""

    def test_snapshot_is_a_copy(self, all_kinds_survey):
        store = AnswerStore.for_survey(all_kinds_survey)
        snap = store.snapshot()
        snap["sports"].append("Run")

        assert store.value("sports") == []
