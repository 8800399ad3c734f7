"""Daily biometric logs, rolling baselines and red-flag results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from readiness_engine.models.enums import LogSource


@dataclass(frozen=True)
class DailyBiometricLog:
    """One day's subjective and objective readings for an athlete.

    Any finite HRV/RHR value feeds the rolling baselines, even when the
    other fields are absent.
    """

    date: date
    sleep_hours: float | None = None
    heart_rate_variability: float | None = None
    resting_heart_rate: float | None = None
    readiness_score: float | None = None  # 1-10
    is_sick_or_injured: bool = False
    source: LogSource = LogSource.CHECKIN


@dataclass(frozen=True)
class BiometricBaselines:
    """Rolling means of HRV and RHR ending on (and including) ``on_date``."""

    on_date: date
    hrv_28d: float | None = None
    rhr_28d: float | None = None
    hrv_7d: float | None = None
    rhr_7d: float | None = None

    @property
    def has_any_28d(self) -> bool:
        return self.hrv_28d is not None or self.rhr_28d is not None


@dataclass(frozen=True)
class RedFlagCheck:
    """Outcome of one red-flag comparison."""

    value: float
    threshold: float
    flagged: bool
    baseline: float | None = None
    adjusted_baseline: float | None = None
    luteal_adjusted: bool = False


@dataclass(frozen=True)
class RedFlagResult:
    """Red-flag count with explanations.

    ``count`` is None when the detector lacked one of its five inputs; that
    marker must reach the decision layer instead of a silent zero.
    """

    count: int | None
    reasons: tuple[str, ...] = field(default_factory=tuple)
    sleep: RedFlagCheck | None = None
    rhr: RedFlagCheck | None = None
    hrv: RedFlagCheck | None = None

    @property
    def is_computable(self) -> bool:
        return self.count is not None
