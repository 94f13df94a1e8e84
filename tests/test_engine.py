"""
Tests for response persistence.
"""

from datetime import datetime

from survey_wizard.models import SurveyResponse
from survey_wizard.surveys.engine import list_responses, record_response


class TestResponses:
    """Tests for record_response/list_responses."""

    def test_record_assigns_id_and_timestamp(self, database_url):
        row = record_response("demo", {"q_name": "Ann", "q_age": 0})

        assert row.id is not None
        assert row.created_at is not None
        data = row.to_dict()
        assert data["survey_id"] == "demo"
        assert data["answers"] == {"q_name": "Ann", "q_age": 0}

    def test_list_newest_first(self, database_url):
        first = record_response("demo", {"n": 1})
        second = record_response("demo", {"n": 2})
        third = record_response("other", {"n": 3})

        ids = [r.id for r in list_responses()]
        assert ids == [third.id, second.id, first.id]

    def test_list_empty(self, database_url):
        assert list_responses() == []

    def test_timestamp_is_timezone_aware(self, database_url):
        assert SurveyResponse(survey_id="demo", answers="{}").created_at.tzinfo is not None

        row = record_response("demo", {})
        created = row.to_dict()["created_at"]
        assert datetime.strptime(created, "%Y-%m-%d %H:%M:%S")

    def test_stored_timestamp_survives_reload(self, database_url):
        row = record_response("demo", {"n": 1})

        [loaded] = list_responses()
        assert loaded.id == row.id
        assert loaded.to_dict()["created_at"] == row.to_dict()["created_at"]
