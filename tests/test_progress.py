"""
Tests for progress and preview display helpers.
"""

import pytest

from survey_wizard.wizard.progress import EMPTY_DISPLAY, calc_progress, display_value


class TestCalcProgress:
    """Tests for calc_progress."""

    @pytest.mark.parametrize("total", [1, 2, 3, 5, 7, 8, 13])
    def test_monotonic_and_ends_at_100(self, total):
        values = [calc_progress(i, total) for i in range(total)]

        assert values == sorted(values)
        assert values[-1] == 100
        assert all(v < 100 for v in values[:-1])

    def test_known_values(self):
        assert calc_progress(0, 5) == 20
        assert calc_progress(0, 3) == 33
        assert calc_progress(1, 3) == 67

    def test_rounds_half_up(self):
        """1/8 is 12.5%, which rounds to 13 like Math.round."""
        assert calc_progress(0, 8) == 13


class TestDisplayValue:
    """Tests for display_value."""

    def test_empty_values(self):
        assert display_value(None) == EMPTY_DISPLAY
        assert display_value("") == EMPTY_DISPLAY

    def test_list_joined(self):
        assert display_value(["Walking", "Gym"]) == "Walking, Gym"

    def test_scalars(self):
        assert display_value("Alice") == "Alice"
        assert display_value(0) == "0"
        assert display_value(-2) == "-2"
        assert display_value(2.5) == "2.5"
        assert display_value(30.0) == "30"
