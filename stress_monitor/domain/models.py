"""
Domain models for HRV stress monitoring.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation; all of them are immutable once created.
"""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stress_monitor.domain.errors import InvalidProfile


class Sex(str, Enum):
    """Subject sex, as supplied by the profile collaborator."""

    MALE = "male"
    FEMALE = "female"


class StressCategory(str, Enum):
    """
    Stress level implied by an HRV measurement.

    Declaration order is severity order, most stressed first. UNKNOWN is a
    sentinel for inputs outside every band and has no rank.
    """

    OVERLOAD = "overload"
    ATTENTION = "attention"
    NORMAL = "normal"
    EXCELLENT = "excellent"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int | None:
        """0 for OVERLOAD up to 3 for EXCELLENT, None for UNKNOWN."""
        if self is StressCategory.UNKNOWN:
            return None
        return list(StressCategory).index(self)

    @classmethod
    def ranked(cls) -> tuple["StressCategory", ...]:
        """The four real categories in severity order."""
        return (cls.OVERLOAD, cls.ATTENTION, cls.NORMAL, cls.EXCELLENT)


class DuplicatePolicy(str, Enum):
    """What SeriesStore does when a day already has a point."""

    REPLACE = "replace"
    REJECT = "reject"


class Measurement(BaseModel):
    """Single HRV reading as delivered by an acquisition source."""

    model_config = ConfigDict(frozen=True)

    value_ms: float = Field(ge=0.0, allow_inf_nan=False, description="HRV (SDNN) in milliseconds")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    source: str = Field(default="unknown", description="Source name of the reading")


class SubjectProfile(BaseModel):
    """Subject attributes the thresholds depend on. Never inferred here."""

    model_config = ConfigDict(frozen=True)

    sex: Sex
    age_years: int = Field(ge=0, description="Age in whole years")

    @classmethod
    def build(cls, sex: Sex | str, age_years: int) -> "SubjectProfile":
        """Validate raw inputs, raising InvalidProfile instead of ValidationError."""
        try:
            return cls(sex=sex, age_years=age_years)  # type: ignore[arg-type]
        except ValidationError as e:
            raise InvalidProfile(
                f"Invalid subject profile (sex={sex!r}, age_years={age_years!r}): "
                f"{e.error_count()} validation error(s)"
            ) from e


class TrendPoint(BaseModel):
    """One classified measurement, keyed by calendar day."""

    model_config = ConfigDict(frozen=True)

    day: date
    value_ms: float
    category: StressCategory


class WindowSelection(BaseModel):
    """A 7-day display window and which of its days, if any, is selected."""

    model_config = ConfigDict(frozen=True)

    days: tuple[date, ...] = Field(min_length=7, max_length=7)
    selected: date | None = None

    @property
    def selected_index(self) -> int | None:
        if self.selected is None:
            return None
        return self.days.index(self.selected)

    def is_selected(self, day: date) -> bool:
        return self.selected is not None and self.selected == day
