"""
Tests for the per-kind input controls.
"""

from survey_wizard.surveys.schema import QUESTION_KINDS
from survey_wizard.wizard.controls import (
    CONTROLS,
    control_for,
    parse_number,
    read_control,
    render_control,
    toggle_option,
)


class TestRegistry:
    """Every kind has a control."""

    def test_all_kinds_covered(self):
        assert set(CONTROLS) == set(QUESTION_KINDS)


class TestToggleOption:
    """Tests for multi-choice toggling."""

    def test_add_and_remove(self):
        assert toggle_option([], "Run") == ["Run"]
        assert toggle_option(["Run", "Gym"], "Run") == ["Gym"]

    def test_double_toggle_restores(self):
        original = ["Swim", "Gym"]
        once = toggle_option(original, "Run")
        twice = toggle_option(once, "Run")

        assert set(twice) == set(original)
        assert original == ["Swim", "Gym"]

    def test_double_toggle_of_selected(self):
        original = ["Swim", "Gym"]
        assert set(toggle_option(toggle_option(original, "Swim"), "Swim")) == set(original)


class TestParseNumber:
    """Tests for number input parsing."""

    def test_empty_is_sentinel(self):
        assert parse_number("") == ""
        assert parse_number("   ") == ""

    def test_numbers(self):
        assert parse_number("0") == 0
        assert parse_number("-4") == -4
        assert parse_number("2.5") == 2.5

    def test_garbage(self):
        for raw in ("abc", "nan", "inf"):
            try:
                parse_number(raw)
            except ValueError:
                continue
            raise AssertionError(f"{raw!r} should not parse")


class TestRead:
    """Form input mapped to answer values."""

    def test_text_passthrough(self, all_kinds_survey):
        q = all_kinds_survey.question("name")
        assert read_control(q, ["  Ann "], "") == "  Ann "
        assert read_control(q, [], "old") == ""

    def test_long_text_keeps_newlines(self, all_kinds_survey):
        q = all_kinds_survey.question("notes")
        assert read_control(q, ["a\nb"], "") == "a\nb"

    def test_number(self, all_kinds_survey):
        q = all_kinds_survey.question("age")
        assert read_control(q, [""], 5) == ""
        assert read_control(q, ["0"], "") == 0
        assert read_control(q, ["oops"], 7) == 7

    def test_single_choice(self, all_kinds_survey):
        q = all_kinds_survey.question("smoke")
        assert read_control(q, ["Yes"], "No") == "Yes"
        assert read_control(q, ["Maybe"], "No") == "No"

    def test_multi_choice_follows_option_order(self, all_kinds_survey):
        q = all_kinds_survey.question("sports")
        assert read_control(q, ["Gym", "Run", "Gym"], []) == ["Run", "Gym"]
        assert read_control(q, [], ["Run"]) == []


class TestRender:
    """HTML controls."""

    def test_text_escapes_value(self, all_kinds_survey):
        html = render_control(all_kinds_survey.question("name"), "<b>'x'</b>")

        assert "type='text'" in html
        assert "<b>" not in html
        assert "&lt;b&gt;" in html

    def test_number_shows_zero(self, all_kinds_survey):
        html = render_control(all_kinds_survey.question("age"), 0)
        assert "value='0'" in html

    def test_textarea(self, all_kinds_survey):
        html = render_control(all_kinds_survey.question("notes"), "hello")
        assert html.startswith("<textarea")
        assert ">hello</textarea>" in html

    def test_single_choice_marks_selected(self, all_kinds_survey):
        html = render_control(all_kinds_survey.question("smoke"), "Yes")

        assert html.count("type='radio'") == 2
        assert "value='Yes' checked" in html
        assert "value='No' checked" not in html

    def test_multi_choice_marks_selected(self, all_kinds_survey):
        html = render_control(all_kinds_survey.question("sports"), ["Swim"])

        assert html.count("type='checkbox'") == 3
        assert "value='Swim' checked" in html
        assert "value='toggle:Swim'" in html


class TestConsole:
    """Console prompts and line parsing."""

    def test_single_choice_by_number(self, all_kinds_survey):
        q = all_kinds_survey.question("smoke")
        control = control_for(q)

        assert "2) Yes" in control.prompt(q)
        assert control.read_line(q, "2", "") == "Yes"
        assert control.read_line(q, "No", "") == "No"

    def test_multi_choice_toggles(self, all_kinds_survey):
        q = all_kinds_survey.question("sports")
        control = control_for(q)

        assert control.read_line(q, "1 3", []) == ["Run", "Gym"]
        assert control.read_line(q, "1", ["Run", "Gym"]) == ["Gym"]

    def test_number_line(self, all_kinds_survey):
        q = all_kinds_survey.question("age")
        assert control_for(q).read_line(q, "33", "") == 33
