"""Exceptions raised by the jurisdiction resolver."""
from typing import Optional


class JurisdictionError(Exception):
    """Base class for resolver errors."""


class InvalidPoint(JurisdictionError, ValueError):
    """Query coordinates are outside the valid latitude/longitude range."""

    def __init__(self, message: str, latitude=None, longitude=None):
        super().__init__(message)
        self.latitude = latitude
        self.longitude = longitude


class MalformedPolygon(JurisdictionError, ValueError):
    """A stored boundary record violates the ring invariants."""

    def __init__(self, message: str, record_id: Optional[str] = None):
        super().__init__(message)
        self.record_id = record_id

    def __str__(self):
        base = super().__str__()
        if self.record_id is None:
            return base
        return f"{base} (record {self.record_id})"
