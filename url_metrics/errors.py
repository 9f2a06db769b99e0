"""Errors raised by the viewport grouping engine."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Breakpoints, sample size or freshness TTL cannot form a group collection."""
