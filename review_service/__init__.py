"""Workplace review service: reviews, threaded comments and vote counters."""

__version__ = "1.0.0"
