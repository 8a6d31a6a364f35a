"""Interval aggregation of multisensor readings."""

from .window import AggregationWindow, round_half_away, MIN_INTERVAL

__all__ = ["AggregationWindow", "round_half_away", "MIN_INTERVAL"]
