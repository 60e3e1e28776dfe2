"""
Hint Message
============

Contextual instruction line shown under the grid.

PRIORITY (first match wins):
1. Log entries loading
2. Cells saving (wording depends on how many)
3. Bulk hours editing
4. One cell selected
5. Several cells selected
6. Past month
7. Idle
"""

from __future__ import annotations
from typing import Collection

from ..contracts.base import (
    DateLike, EnteringMode, LoadingMarker, Selection, SAVING_MESSAGE_THRESHOLD,
)
from .calendar import is_month_read_only


LOADING_MESSAGE = "Loading data. Please wait."
SAVING_MESSAGE = "Data is saving. Please wait."
UPDATING_MESSAGE = "{count} entries are updating. This might take a while, so hold on!"
EDITING_MESSAGE = (
    "You are editing {count} entries. Hit ENTER to submit or ESC to cancel. "
    "Use value 0 to delete the entry"
)
SINGLE_SELECTION_MESSAGE = (
    "Hit CTRL+ENTER to edit. Or hold CTRL (or CMD) and click on other cells to select more. "
    "Or hold SHIFT and click on other cell to select the range of dates"
)
MULTI_SELECTION_MESSAGE = "{count} days selected. Hit CTRL+ENTER to edit or ESC to cancel"
PAST_MONTH_MESSAGE = (
    "You are not allowed to change data in the past, "
    "but you can look at it and be proud of your work!"
)
IDLE_MESSAGE = "Double click on a cell to edit. Use value 0 to delete the entry"


def hint_message(
    month: DateLike,
    logs_loading: bool,
    selections: Collection[Selection],
    loading_markers: Collection[LoadingMarker],
    entering_mode: EnteringMode,
    today: DateLike
) -> str:
    if logs_loading:
        return LOADING_MESSAGE

    if loading_markers:
        if len(loading_markers) < SAVING_MESSAGE_THRESHOLD:
            return SAVING_MESSAGE
        return UPDATING_MESSAGE.format(count=len(loading_markers))

    if entering_mode == EnteringMode.HOURS:
        return EDITING_MESSAGE.format(count=len(selections))

    if len(selections) == 1:
        return SINGLE_SELECTION_MESSAGE
    if len(selections) > 1:
        return MULTI_SELECTION_MESSAGE.format(count=len(selections))

    if is_month_read_only(month, today):
        return PAST_MONTH_MESSAGE

    return IDLE_MESSAGE
