"""Exceptions raised by the tracking core."""

from __future__ import annotations


class TrackingError(Exception):
    """Base class for recoverable tracking failures (the cycle is skipped)."""


class InsufficientPathError(TrackingError):
    """Path is empty or shorter than the window/goal index being requested."""
