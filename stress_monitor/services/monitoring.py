"""
Acquisition and alerting around the classification core.

Key patterns:
- Protocol-based sources, so platform health APIs plug in without coupling
- Result type for expected failures (source down vs. no data)
- One synchronous SeriesStore.insert per cycle; everything else is I/O
"""

import asyncio
import inspect
import random
from collections import deque
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any, Generic, Protocol, TypeVar

from stress_monitor.config import AppConfig, get_config
from stress_monitor.domain.errors import DuplicateEntry
from stress_monitor.domain.models import Measurement, StressCategory, SubjectProfile, TrendPoint
from stress_monitor.services.classification import is_alert_worthy
from stress_monitor.services.date_window import DateWindowSelector, local_day
from stress_monitor.services.presentation import gauge_fraction, status_message
from stress_monitor.services.series_store import SeriesStore
from stress_monitor.services.telemetry import logger

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Ok(None) is allowed: a source that answered but had no sample is not an error.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT | None) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT | None:
        if self._error is not None:
            raise self._error
        return self._value

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error


class HRVSource(Protocol):
    """
    Where HRV samples come from (HealthKit, Health Connect, a strap, ...).

    Must deliver at most one authoritative sample per call. Failure is
    Result.err, "no sample available" is Result.ok(None).
    """

    source_name: str

    async def fetch_latest(self) -> Result[Measurement | None, Exception]: ...


class SimulatedHRVSource:
    """
    Simulated HRV source for demos and local runs.

    Produces SDNN-like values with a small failure and no-data rate.
    """

    def __init__(
        self,
        source_name: str = "simulated-hrv",
        failure_rate: float = 0.05,
        no_data_rate: float = 0.05,
    ) -> None:
        self.source_name = source_name
        self.failure_rate = failure_rate
        self.no_data_rate = no_data_rate
        self.logger = logger.bind(source=source_name)

    async def fetch_latest(self) -> Result[Measurement | None, Exception]:
        try:
            await asyncio.sleep(random.uniform(0.05, 0.2))

            roll = random.random()
            if roll < self.failure_rate:
                raise ConnectionError(f"Failed to query {self.source_name}")
            if roll < self.failure_rate + self.no_data_rate:
                self.logger.info("hrv_sample_unavailable")
                return Result.ok(None)

            measurement = Measurement(
                value_ms=round(random.uniform(10.0, 120.0), 1),
                timestamp=datetime.now().astimezone(),
                source=self.source_name,
            )
            self.logger.info("hrv_sample_fetched", value_ms=measurement.value_ms)
            return Result.ok(measurement)

        except Exception as e:
            self.logger.exception("hrv_fetch_failed", error=str(e))
            return Result.err(e)


@dataclass
class AlertEvent:
    """Payload handed to the notification collaborator."""

    timestamp: datetime
    day: date
    category: StressCategory
    alert_worthy: bool
    value_ms: float
    title: str
    body: str


AlertHandler = Callable[[AlertEvent], Any]


class AlertManager:
    """
    Turns classified points into AlertEvents and dispatches them.

    Every point yields one event carrying its alert-worthy flag, so handlers
    that track the latest status see calm days too. Only alert-worthy events
    are kept in alert_history.
    """

    title = "Stress Alert"
    body = "Your HRV indicates high stress levels. Consider taking a moment to relax."
    status_title = "HRV Update"

    def __init__(self) -> None:
        self.alert_history: deque[AlertEvent] = deque(maxlen=1000)
        self.logger = logger.bind(component="alert_manager")

    def process_point(self, point: TrendPoint) -> list[AlertEvent]:
        alert_worthy = is_alert_worthy(point.category)
        alert = AlertEvent(
            timestamp=datetime.now(UTC),
            day=point.day,
            category=point.category,
            alert_worthy=alert_worthy,
            value_ms=point.value_ms,
            title=self.title if alert_worthy else self.status_title,
            body=self.body if alert_worthy else status_message(point.category),
        )
        if alert_worthy:
            self.alert_history.append(alert)
            self.logger.info(
                "alert_generated",
                category=point.category.value,
                day=point.day.isoformat(),
                value_ms=point.value_ms,
            )
        return [alert]

    async def dispatch_alerts(
        self,
        alerts: list[AlertEvent],
        handlers: list[AlertHandler] | None = None,
    ) -> None:
        """Dispatch alerts to handlers; one failing handler does not stop the rest."""
        if not alerts:
            return

        if not handlers:
            handlers = [self._console_alert_handler]

        for alert in alerts:
            for handler in handlers:
                try:
                    outcome = handler(alert)
                    if inspect.isawaitable(outcome):
                        await outcome
                except Exception as e:
                    self.logger.error(
                        "alert_dispatch_failed", error=str(e), category=alert.category.value
                    )

    def _console_alert_handler(self, alert: AlertEvent) -> None:
        """Development alert handler that prints alert-worthy events to console."""
        if not alert.alert_worthy:
            return
        print(f"\n🚨 {alert.title.upper()} - {alert.category.value.upper()}")
        print(f"Day: {alert.day.isoformat()}")
        print(f"HRV: {alert.value_ms:.1f} ms")
        print(alert.body)
        print("-" * 80)


class StressMonitorService:
    """
    Drives measure → classify → store → alert cycles for one subject.

    `today` is injected so the window anchor never comes from an ambient clock
    inside the core. `day_of` maps a sample timestamp to the day it is filed
    under and must agree with `today` on the zone; both default to local time.
    """

    def __init__(
        self,
        source: HRVSource,
        config: AppConfig | None = None,
        profile: SubjectProfile | None = None,
        store: SeriesStore | None = None,
        alert_handlers: list[AlertHandler] | None = None,
        today: Callable[[], date] = date.today,
        day_of: Callable[[datetime], date] = local_day,
    ) -> None:
        self.config = config or get_config()
        self.source = source
        self.profile = profile or self.config.subject.profile()
        if store is None:
            store = SeriesStore(self.config.store.duplicate_policy)
        self.store = store
        self.alert_manager = AlertManager()
        self.alert_handlers = alert_handlers
        self.today = today
        self.day_of = day_of
        self.selector = DateWindowSelector(today())
        self.current_value_ms: float | None = None
        self.current_category: StressCategory | None = None
        self.logger = logger.bind(component="stress_monitor", source=source.source_name)
        self._is_running = False

    async def run_cycle(self) -> TrendPoint | None:
        """
        Fetch one sample and record it.

        Returns the stored point, or None when the source failed, timed out,
        had no data, or the day was already recorded under the REJECT policy.
        """
        try:
            result = await asyncio.wait_for(
                self.source.fetch_latest(), timeout=self.config.monitoring.fetch_timeout_seconds
            )
        except TimeoutError:
            self.logger.warning(
                "hrv_fetch_timeout", timeout_seconds=self.config.monitoring.fetch_timeout_seconds
            )
            return None

        if result.is_err():
            self.logger.warning("hrv_fetch_failed", error=str(result.unwrap_err()))
            return None

        measurement = result.unwrap()
        if measurement is None:
            self.logger.info("hrv_no_data")
            return None

        try:
            point = self.store.insert(
                self.day_of(measurement.timestamp), measurement.value_ms, self.profile
            )
        except DuplicateEntry as e:
            self.logger.warning("hrv_sample_skipped", error=str(e))
            return None

        self.current_value_ms = point.value_ms
        self.current_category = point.category

        alerts = self.alert_manager.process_point(point)
        await self.alert_manager.dispatch_alerts(alerts, self.alert_handlers)

        self.logger.info(
            "monitoring_cycle_completed",
            day=point.day.isoformat(),
            category=point.category.value,
            alerts_generated=sum(alert.alert_worthy for alert in alerts),
        )
        return point

    async def run_continuously(self) -> AsyncIterator[TrendPoint]:
        """Poll the source at the configured interval, yielding recorded points."""
        interval = self.config.monitoring.poll_interval_seconds
        self.logger.info("continuous_monitoring_starting", interval_seconds=interval)
        self._is_running = True

        try:
            while self._is_running:
                point = await self.run_cycle()
                if point is not None:
                    yield point
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            self.logger.info("continuous_monitoring_cancelled")
            raise
        finally:
            self._is_running = False

    async def stop(self) -> None:
        self.logger.info("stopping_stress_monitor")
        self._is_running = False

    def refresh_window(self) -> list[date]:
        """Reanchor the selector when the day has rolled over."""
        today = self.today()
        if today != self.selector.anchor:
            self.selector.reanchor(today)
            self.logger.info("window_reanchored", anchor=today.isoformat())
        return self.selector.window

    def trend(self) -> list[TrendPoint | None]:
        """Store contents for the current 7-day window."""
        return self.store.windowed_series(self.refresh_window())

    def gauge(self) -> float:
        """Fill fraction for the live gauge; empty before the first reading."""
        if self.current_value_ms is None:
            return 0.0
        return gauge_fraction(self.current_value_ms, self.config.display.gauge_full_scale_ms)
