"""
Exception classes for the Bus Route Simulator.

Lookups never raise: a missing stop is reported as ``None`` (or ``False``
for deletions). These exceptions cover the persistence boundary, where the
codec raises and the adapter turns the failure into a result object.
"""


class RouteError(Exception):
    """Base exception for route operations."""
    pass


class PersistenceError(RouteError):
    """Raised when a route file cannot be read or written."""
    pass


class MalformedRecordError(PersistenceError):
    """Raised when a single persisted row fails schema validation."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


__all__ = ["RouteError", "PersistenceError", "MalformedRecordError"]
