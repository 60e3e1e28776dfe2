"""
Hint Message Tests
==================

Every branch of the priority chain, and that earlier branches win.
"""

import pytest

from timeregistration.contracts.base import EnteringMode
from timeregistration.views import hints
from timeregistration.views.hints import hint_message

from tests.fixtures import TODAY, CURRENT_MONTH, PAST_MONTH, selections, markers


def hint(month=CURRENT_MONTH, logs_loading=False, selected=(), loading=(),
         mode=EnteringMode.IDLE, today=TODAY):
    return hint_message(month, logs_loading, selected, loading, mode, today)


class TestPriorityChain:

    def test_loading_beats_multi_selection(self):
        assert hint(logs_loading=True, selected=selections(5)) == hints.LOADING_MESSAGE

    def test_loading_beats_everything(self):
        message = hint(
            month=PAST_MONTH,
            logs_loading=True,
            selected=selections(3),
            loading=markers(6),
            mode=EnteringMode.HOURS
        )

        assert message == hints.LOADING_MESSAGE

    def test_saving_beats_editing(self):
        assert hint(loading=markers(1), mode=EnteringMode.HOURS) == hints.SAVING_MESSAGE

    def test_editing_beats_selection(self):
        message = hint(selected=selections(3), mode=EnteringMode.HOURS)

        assert message.startswith("You are editing 3 entries.")

    def test_selection_beats_past_month(self):
        assert hint(month=PAST_MONTH, selected=selections(1)) == hints.SINGLE_SELECTION_MESSAGE


class TestBranches:

    @pytest.mark.parametrize("count", [1, 2, 4])
    def test_few_markers_generic_saving(self, count):
        assert hint(loading=markers(count)) == hints.SAVING_MESSAGE

    def test_six_markers_show_count(self):
        message = hint(loading=markers(6))

        assert "6" in message
        assert "updating" in message

    def test_threshold_is_five(self):
        assert hint(loading=markers(5)) == (
            "5 entries are updating. This might take a while, so hold on!"
        )

    def test_editing_with_no_selection(self):
        assert hint(mode=EnteringMode.HOURS) == hints.EDITING_MESSAGE.format(count=0)

    def test_single_selection(self):
        assert hint(selected=selections(1)) == hints.SINGLE_SELECTION_MESSAGE

    def test_multi_selection_shows_count(self):
        assert hint(selected=selections(7)) == (
            "7 days selected. Hit CTRL+ENTER to edit or ESC to cancel"
        )

    def test_past_month_notice(self):
        assert hint(month=PAST_MONTH) == hints.PAST_MONTH_MESSAGE

    def test_idle(self):
        assert hint() == hints.IDLE_MESSAGE
