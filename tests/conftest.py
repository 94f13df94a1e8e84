"""Shared fixtures."""

import pytest

from survey_wizard.db import configure_engine, init_db
from survey_wizard.surveys.schema import SurveySpec


@pytest.fixture
def two_question_survey():
    """q1 required text, q2 optional number."""
    return SurveySpec.model_validate(
        {
            "id": "mini",
            "title": "Mini",
            "questions": [
                {"id": "q1", "title": "Name?", "type": "text", "required": True},
                {"id": "q2", "title": "Age?", "type": "number"},
            ],
        }
    )


@pytest.fixture
def all_kinds_survey():
    """One required question of every kind."""
    return SurveySpec.model_validate(
        {
            "id": "kinds",
            "title": "Every kind",
            "questions": [
                {"id": "name", "title": "Name", "type": "text", "required": True},
                {"id": "age", "title": "Age", "type": "number", "required": True},
                {"id": "smoke", "title": "Smoke?", "type": "single-choice", "required": True,
                 "options": ["No", "Yes"]},
                {"id": "sports", "title": "Sports", "type": "multi-choice", "required": True,
                 "options": ["Run", "Swim", "Gym"]},
                {"id": "notes", "title": "Notes", "type": "long-text", "required": True},
            ],
        }
    )


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'survey.db'}"
    configure_engine(url)
    init_db()
    return url
