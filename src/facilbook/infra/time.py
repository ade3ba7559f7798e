"""Time utilities for consistent date handling."""

from datetime import date


def local_today() -> date:
    """Return the current calendar date in the server's local time."""
    return date.today()
