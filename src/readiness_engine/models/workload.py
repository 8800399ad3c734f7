"""Acute:chronic workload window — derived, never persisted."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from readiness_engine.models.enums import AcwrBand


@dataclass(frozen=True)
class LoadContributor:
    """One acute-window activity that contributed to the load sums."""

    date: date
    load: float
    activity_id: str | None = None
    sport_type: str = "Session"
    source: str | None = None


@dataclass(frozen=True)
class WorkloadCounts:
    """How many activities were used or filtered out, and why."""

    fetched: int = 0
    used_acute: int = 0
    used_chronic: int = 0
    excluded_by_flag: int = 0
    non_finite_load: int = 0
    outside_window: int = 0


@dataclass(frozen=True)
class WorkloadWindow:
    """Acute and chronic sums plus the ACWR for one reference date.

    ``ratio`` is None when the chronic weekly average is not positive; this
    is "not computable", which the decision layer treats differently from
    any in-bounds value.
    """

    reference_date: date
    window_days: int
    acute_sum: float
    chronic_sum: float
    chronic_weekly_average: float
    ratio: float | None
    band: AcwrBand | None
    acute_start: date
    window_start: date
    contributors: tuple[LoadContributor, ...] = field(default_factory=tuple)
    counts: WorkloadCounts = field(default_factory=WorkloadCounts)

    @property
    def is_computable(self) -> bool:
        return self.ratio is not None
