"""HRV stress monitoring.

Classifies heart-rate-variability samples into stress categories and keeps
the per-day series and 7-day window needed to render a trend view.
"""
