"""
Tests for the per-day series store.

Covers classification at insertion, replace/reject duplicate policies,
absent slots in windowed retrieval and validation that leaves state intact.
"""

import math
from datetime import date, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stress_monitor.domain.errors import DuplicateEntry, InvalidMeasurement
from stress_monitor.domain.models import DuplicatePolicy, Sex, StressCategory, SubjectProfile
from stress_monitor.services.classification import is_alert_worthy
from stress_monitor.services.date_window import compute_window
from stress_monitor.services.series_store import SeriesStore

MALE = SubjectProfile(sex=Sex.MALE, age_years=30)
GIRL = SubjectProfile(sex=Sex.FEMALE, age_years=12)
WEDNESDAY = date(2026, 10, 14)


@pytest.fixture
def store() -> SeriesStore:
    return SeriesStore()


class TestInsert:
    def test_insert_classifies_and_returns_point(self, store: SeriesStore) -> None:
        point = store.insert(WEDNESDAY, 55.0, MALE)

        assert point.day == WEDNESDAY
        assert point.value_ms == 55.0
        assert point.category is StressCategory.NORMAL
        assert store.windowed_series([WEDNESDAY]) == [point]

    def test_insert_uses_profile_thresholds(self, store: SeriesStore) -> None:
        assert store.insert(WEDNESDAY, 19.0, MALE).category is StressCategory.OVERLOAD
        assert store.insert(WEDNESDAY, 19.0, GIRL).category is StressCategory.ATTENTION

    def test_datetime_is_keyed_by_calendar_day(self, store: SeriesStore) -> None:
        store.insert(datetime(2026, 10, 14, 7, 30), 30.0, MALE)

        assert WEDNESDAY in store
        assert datetime(2026, 10, 14, 22, 0) in store
        assert store.get(datetime(2026, 10, 14, 23, 59)) is not None

    def test_reinsert_same_day_replaces(self, store: SeriesStore) -> None:
        store.insert(WEDNESDAY, 15.0, MALE)
        second = store.insert(datetime(2026, 10, 14, 18, 0), 90.0, MALE)

        assert len(store) == 1
        assert store.get(WEDNESDAY) == second
        assert second.category is StressCategory.EXCELLENT

    def test_reject_policy_keeps_first_point(self) -> None:
        store = SeriesStore(duplicate_policy=DuplicatePolicy.REJECT)
        first = store.insert(WEDNESDAY, 15.0, MALE)

        with pytest.raises(DuplicateEntry, match="2026-10-14"):
            store.insert(WEDNESDAY, 90.0, MALE)

        assert len(store) == 1
        assert store.get(WEDNESDAY) == first

    @pytest.mark.parametrize("value", [-1.0, -0.5, math.nan, math.inf, -math.inf])
    def test_invalid_measurement_rejected_without_side_effects(
        self, store: SeriesStore, value: float
    ) -> None:
        existing = store.insert(WEDNESDAY, 42.0, MALE)

        with pytest.raises(InvalidMeasurement):
            store.insert(WEDNESDAY, value, MALE)
        with pytest.raises(InvalidMeasurement):
            store.insert(WEDNESDAY + timedelta(days=1), value, MALE)

        assert len(store) == 1
        assert store.get(WEDNESDAY) == existing

    def test_invalid_measurement_is_a_value_error(self, store: SeriesStore) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            store.insert(WEDNESDAY, -3.0, MALE)

    def test_points_are_immutable(self, store: SeriesStore) -> None:
        point = store.insert(WEDNESDAY, 42.0, MALE)
        with pytest.raises(ValueError, match="frozen"):
            point.value_ms = 10.0  # type: ignore[misc]


class TestRetrieval:
    def test_missing_day_is_none_not_zero(self, store: SeriesStore) -> None:
        store.insert(WEDNESDAY, 0.0, MALE)

        series = store.windowed_series([WEDNESDAY - timedelta(days=1), WEDNESDAY])

        assert series[0] is None
        assert series[1] is not None
        assert series[1].value_ms == 0.0
        assert series[1].category is StressCategory.OVERLOAD

    def test_windowed_series_follows_request_order(self, store: SeriesStore) -> None:
        window = compute_window(WEDNESDAY)
        store.insert(window[4], 60.0, MALE)
        store.insert(window[1], 30.0, MALE)

        series = store.windowed_series(window)

        assert len(series) == 7
        assert [p is not None for p in series] == [False, True, False, False, True, False, False]

    def test_points_ascending_regardless_of_insert_order(self, store: SeriesStore) -> None:
        for offset in (3, 0, 5, 1):
            store.insert(WEDNESDAY - timedelta(days=offset), 50.0, MALE)

        days = [p.day for p in store.points()]
        assert days == sorted(days)
        assert len(days) == 4

    def test_latest_empty_is_none(self, store: SeriesStore) -> None:
        assert store.latest() is None

    def test_latest_is_most_recent_day_not_last_insert(self, store: SeriesStore) -> None:
        newest = store.insert(WEDNESDAY, 70.0, MALE)
        store.insert(WEDNESDAY - timedelta(days=2), 25.0, MALE)

        assert store.latest() == newest

    @given(
        entries=st.lists(
            st.tuples(
                st.dates(min_value=date(2020, 1, 1), max_value=date(2030, 12, 31)),
                st.floats(min_value=0.0, max_value=300.0, allow_nan=False),
            ),
            max_size=30,
        )
    )
    def test_one_point_per_day(self, entries: list[tuple[date, float]]) -> None:
        store = SeriesStore()
        for day, value in entries:
            store.insert(day, value, MALE)

        assert len(store) == len({day for day, _ in entries})
        days = [p.day for p in store.points()]
        assert days == sorted(set(days))


class TestEndToEnd:
    def test_wednesday_overload_scenario(self, store: SeriesStore) -> None:
        window = compute_window(WEDNESDAY)
        assert window[0] == date(2026, 10, 8)  # previous Thursday

        point = store.insert(WEDNESDAY, 15.0, MALE)

        assert point.category is StressCategory.OVERLOAD
        assert is_alert_worthy(point.category) is True
        assert store.latest() == point
        assert store.windowed_series(window) == [None] * 6 + [point]
