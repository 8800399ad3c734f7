"""Custom exception hierarchy for the readiness engine.

Missing or non-finite inputs are never errors; these cover programmer
errors and unmappable records at the ingestion boundary.
"""

from __future__ import annotations


class ReadinessEngineError(Exception):
    """Base exception for all readiness_engine errors."""


class InvalidReferenceDateError(ReadinessEngineError, ValueError):
    """The reference date is not a canonical calendar day."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Reference date must be a datetime.date (not datetime), got {value!r}"
        )
        self.value = value


class InvalidCycleAnchorError(ReadinessEngineError, ValueError):
    """The cycle anchor cannot produce a cycle day (e.g. length < 1)."""


class RecordMappingError(ReadinessEngineError, ValueError):
    """A raw record could not be mapped to an engine input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
