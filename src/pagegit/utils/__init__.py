"""Utility functions."""

from .datetime import now_utc, to_iso

__all__ = ["now_utc", "to_iso"]
