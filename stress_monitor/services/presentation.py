"""
Display mapping for stress categories.

Kept apart from classification: renderers may ignore all of this and map
StressCategory to their own visuals.
"""

import math

from stress_monitor.domain.models import StressCategory, TrendPoint

CATEGORY_LABELS: dict[StressCategory, str] = {
    StressCategory.OVERLOAD: "Overload",
    StressCategory.ATTENTION: "Attention",
    StressCategory.NORMAL: "Normal",
    StressCategory.EXCELLENT: "Excellent",
    StressCategory.UNKNOWN: "Unknown",
}

CATEGORY_EMOJI: dict[StressCategory, str] = {
    StressCategory.OVERLOAD: "😫",
    StressCategory.ATTENTION: "😟",
    StressCategory.NORMAL: "😊",
    StressCategory.EXCELLENT: "😌",
    StressCategory.UNKNOWN: "",
}

# Color names understood by rich; UNKNOWN renders neutral
CATEGORY_COLORS: dict[StressCategory, str] = {
    StressCategory.OVERLOAD: "red",
    StressCategory.ATTENTION: "orange3",
    StressCategory.NORMAL: "blue",
    StressCategory.EXCELLENT: "green",
    StressCategory.UNKNOWN: "grey50",
}

NO_DATA_LABEL = "No data"


def status_message(category: StressCategory) -> str:
    """Status line shown under the gauge, e.g. 'HRV Status: 😊 Normal'."""
    emoji = CATEGORY_EMOJI[category]
    label = CATEGORY_LABELS[category]
    return f"HRV Status: {emoji} {label}" if emoji else f"HRV Status: {label}"


def point_label(point: TrendPoint | None) -> str:
    """Label for a trend slot; an absent point is distinct from UNKNOWN."""
    if point is None:
        return NO_DATA_LABEL
    return CATEGORY_LABELS[point.category]


def gauge_fraction(value_ms: float, full_scale_ms: float = 100.0) -> float:
    """Fraction of the gauge ring to fill, clamped to [0, 1]."""
    if full_scale_ms <= 0:
        raise ValueError("full_scale_ms must be positive")
    if math.isnan(value_ms) or value_ms <= 0:
        return 0.0
    return min(value_ms / full_scale_ms, 1.0)
