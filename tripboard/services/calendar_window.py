"""Which UTC days the board shows for a given view and anchor date."""

from __future__ import annotations

from datetime import date, timedelta

from tripboard.contracts.enums import BoardView
from tripboard.services.utc import add_days

WEEK_DAYS = 7
MONTH_DAYS = 31
# Month view is a rolling window with the anchor in the middle.
MONTH_DAYS_BEFORE_ANCHOR = 15


def start_of_week(day: date) -> date:
    """Monday of the week containing *day*."""
    return day - timedelta(days=day.weekday())


def view_days(view: BoardView | str, anchor: date) -> list[date]:
    """Days of the calendar window, oldest first.

    - week: Monday through Sunday of the anchor's week
    - month: 31 days, from 15 days before the anchor to 15 days after

    A window that would run past the last representable date is moved back
    to end on it.
    """
    if BoardView(view) == BoardView.WEEK:
        first = start_of_week(anchor)
        count = WEEK_DAYS
    else:
        first = add_days(anchor, -MONTH_DAYS_BEFORE_ANCHOR)
        count = MONTH_DAYS
    first = min(first, date.max - timedelta(days=count - 1))
    return [first + timedelta(days=i) for i in range(count)]


def shift_anchor(view: BoardView | str, anchor: date, direction: int) -> date:
    """Move the anchor one window forward (``direction > 0``) or back."""
    step = WEEK_DAYS if BoardView(view) == BoardView.WEEK else MONTH_DAYS
    sign = (direction > 0) - (direction < 0)
    return add_days(anchor, sign * step)
