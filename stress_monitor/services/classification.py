"""
HRV stress classification.

Maps a measurement plus subject profile to a StressCategory using
age/sex-dependent threshold tables. Everything here is pure: no logging,
no clock, no I/O.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stress_monitor.domain.models import Sex, StressCategory, SubjectProfile

# Female subjects below this age use the lower threshold table.
ADULT_AGE_YEARS = 18

ALERT_WORTHY_CATEGORIES = frozenset({StressCategory.OVERLOAD, StressCategory.ATTENTION})


class ThresholdTable(BaseModel):
    """
    Inclusive upper bounds (ms) for the three lower bands.

    Anything above normal_max is EXCELLENT.
    """

    model_config = ConfigDict(frozen=True)

    overload_max: float = Field(gt=0.0)
    attention_max: float = Field(gt=0.0)
    normal_max: float = Field(gt=0.0)

    @model_validator(mode="after")
    def bounds_ascending(self) -> "ThresholdTable":
        if not self.overload_max < self.attention_max < self.normal_max:
            raise ValueError("threshold bounds must be strictly ascending")
        return self

    def bands(self) -> tuple[tuple[float, StressCategory], ...]:
        return (
            (self.overload_max, StressCategory.OVERLOAD),
            (self.attention_max, StressCategory.ATTENTION),
            (self.normal_max, StressCategory.NORMAL),
        )

    def category_for(self, measurement_ms: float) -> StressCategory:
        for upper_bound, category in self.bands():
            if measurement_ms <= upper_bound:
                return category
        return StressCategory.EXCELLENT


MALE_TABLE = ThresholdTable(overload_max=20, attention_max=40, normal_max=80)
FEMALE_MINOR_TABLE = ThresholdTable(overload_max=18, attention_max=38, normal_max=78)
FEMALE_ADULT_TABLE = ThresholdTable(overload_max=20, attention_max=40, normal_max=80)


def threshold_table_for(profile: SubjectProfile) -> ThresholdTable:
    """Pick the table for a profile. The male table ignores age."""
    if profile.sex is Sex.MALE:
        return MALE_TABLE
    if profile.age_years < ADULT_AGE_YEARS:
        return FEMALE_MINOR_TABLE
    return FEMALE_ADULT_TABLE


def classify(measurement_ms: float, profile: SubjectProfile) -> StressCategory:
    """
    Classify an HRV measurement for a subject.

    Total: never raises. Negative, NaN and infinite values map to UNKNOWN
    instead of falling into the lowest band.

    Args:
        measurement_ms: HRV magnitude in milliseconds
        profile: Subject the thresholds are selected for

    Returns:
        StressCategory: exactly one category
    """
    if not math.isfinite(measurement_ms) or measurement_ms < 0:
        return StressCategory.UNKNOWN
    return threshold_table_for(profile).category_for(measurement_ms)


def is_alert_worthy(category: StressCategory) -> bool:
    """True when the caller should raise a stress alert for this category."""
    return category in ALERT_WORTHY_CATEGORIES
