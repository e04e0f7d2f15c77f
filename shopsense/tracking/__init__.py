"""Behavior tracking module."""

from shopsense.tracking.behavior import BehaviorLog, BehaviorTracker

__all__ = ["BehaviorLog", "BehaviorTracker"]
