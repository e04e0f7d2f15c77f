"""Search monitoring module."""

from shopsense.monitoring.analytics import SearchAnalytics

__all__ = ["SearchAnalytics"]
