"""
Core services for the stress monitor.

Classification, the per-day series store and the date window make up the
pure core; monitoring wires them to an HRV source and alert handlers.
"""

from .classification import classify, is_alert_worthy, threshold_table_for
from .date_window import DateWindowSelector, compute_window, is_same_day, select
from .monitoring import AlertManager, HRVSource, Result, SimulatedHRVSource, StressMonitorService
from .series_store import SeriesStore

__all__ = [
    "classify",
    "is_alert_worthy",
    "threshold_table_for",
    "SeriesStore",
    "DateWindowSelector",
    "compute_window",
    "is_same_day",
    "select",
    "HRVSource",
    "Result",
    "SimulatedHRVSource",
    "AlertManager",
    "StressMonitorService",
]
