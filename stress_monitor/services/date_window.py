"""
Date window selection for the trend view.

The window is the 7 consecutive calendar days ending on the anchor (normally
today), so it always starts on the weekday six days before the anchor. All
day comparisons go through is_same_day; raw timestamp equality is never used.
"""

import calendar
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from stress_monitor.domain.models import WindowSelection

WINDOW_DAYS = 7


def calendar_day(value: date | datetime) -> date:
    """Strip the time of day. Aware datetimes keep their own wall-clock date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def local_day(value: datetime) -> date:
    """Calendar day of a timestamp in the local zone; naive values are taken as local time."""
    if value.tzinfo is None:
        return value.date()
    return value.astimezone().date()


def is_same_day(a: date | datetime, b: date | datetime) -> bool:
    return calendar_day(a) == calendar_day(b)


def compute_window(anchor: date | datetime) -> list[date]:
    """Return the 7 ascending calendar days ending on the anchor's day."""
    end = calendar_day(anchor)
    return [end - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]


def select(window: Sequence[date | datetime], candidate: date | datetime) -> WindowSelection:
    """
    Mark the window day matching candidate by calendar day.

    A candidate outside the window selects nothing; that is not an error.
    """
    days = tuple(calendar_day(day) for day in window)
    selected = next((day for day in days if is_same_day(day, candidate)), None)
    return WindowSelection(days=days, selected=selected)


def weekday_labels(window: Sequence[date | datetime]) -> list[str]:
    """Short weekday names for a window, e.g. ['Thu', 'Fri', ...]."""
    return [calendar.day_abbr[calendar_day(day).weekday()] for day in window]


class DateWindowSelector:
    """
    Caller-owned window plus selection cell.

    Holds no other state: the window changes only on reanchor() and the
    selection only on select().
    """

    def __init__(self, anchor: date | datetime) -> None:
        self._anchor = calendar_day(anchor)
        self._selection = select(compute_window(self._anchor), self._anchor)

    @property
    def anchor(self) -> date:
        return self._anchor

    @property
    def window(self) -> list[date]:
        return list(self._selection.days)

    @property
    def selection(self) -> WindowSelection:
        return self._selection

    @property
    def selected(self) -> date | None:
        return self._selection.selected

    def select(self, candidate: date | datetime) -> WindowSelection:
        self._selection = select(self._selection.days, candidate)
        return self._selection

    def reanchor(self, anchor: date | datetime) -> WindowSelection:
        """
        Recompute the window for a new anchor.

        The current selection is kept when its day is still in the new window
        and cleared otherwise.
        """
        self._anchor = calendar_day(anchor)
        window = compute_window(self._anchor)
        if self._selection.selected is None:
            self._selection = WindowSelection(days=tuple(window))
        else:
            self._selection = select(window, self._selection.selected)
        return self._selection
