"""
In-memory series of classified HRV points, one per calendar day.

Single-writer discipline: callers must not insert while iterating the result
of windowed_series() or points(). No locking is done here.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime

from stress_monitor.domain.errors import DuplicateEntry, InvalidMeasurement
from stress_monitor.domain.models import DuplicatePolicy, SubjectProfile, TrendPoint
from stress_monitor.services.classification import classify
from stress_monitor.services.date_window import calendar_day
from stress_monitor.services.telemetry import logger


class SeriesStore:
    """
    Dated series of TrendPoints keyed by calendar day.

    Retrieval is always ascending by day regardless of insertion order.
    A missing day is reported as None, never as a zero-valued point.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE) -> None:
        self.duplicate_policy = duplicate_policy
        self._points: dict[date, TrendPoint] = {}
        self.logger = logger.bind(component="series_store")

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return calendar_day(day) in self._points

    def insert(
        self, day: date | datetime, measurement_ms: float, profile: SubjectProfile
    ) -> TrendPoint:
        """
        Classify a measurement and record it for its calendar day.

        Raises:
            InvalidMeasurement: measurement is negative or not finite
            DuplicateEntry: day already recorded and the policy is REJECT
        """
        if not math.isfinite(measurement_ms) or measurement_ms < 0:
            self.logger.warning(
                "trend_point_rejected", reason="invalid_measurement", value_ms=measurement_ms
            )
            raise InvalidMeasurement(measurement_ms)

        key = calendar_day(day)
        replaced = key in self._points
        if replaced and self.duplicate_policy is DuplicatePolicy.REJECT:
            self.logger.warning("trend_point_rejected", reason="duplicate_day", day=key.isoformat())
            raise DuplicateEntry(f"A measurement is already recorded for {key.isoformat()}")

        point = TrendPoint(
            day=key, value_ms=measurement_ms, category=classify(measurement_ms, profile)
        )
        self._points[key] = point

        self.logger.info(
            "trend_point_recorded",
            day=key.isoformat(),
            value_ms=measurement_ms,
            category=point.category.value,
            replaced=replaced,
        )
        return point

    def get(self, day: date | datetime) -> TrendPoint | None:
        return self._points.get(calendar_day(day))

    def windowed_series(self, days: Iterable[date | datetime]) -> list[TrendPoint | None]:
        """One slot per requested day, in request order; None where nothing was recorded."""
        return [self.get(day) for day in days]

    def latest(self) -> TrendPoint | None:
        """Point with the most recent day, or None when the store is empty."""
        if not self._points:
            return None
        return self._points[max(self._points)]

    def points(self) -> list[TrendPoint]:
        """All points, ascending by day."""
        return [self._points[day] for day in sorted(self._points)]
