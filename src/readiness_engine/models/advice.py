"""Daily advice — one fully resolved day, live or re-derived from history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from readiness_engine.models.biometrics import BiometricBaselines, RedFlagResult
from readiness_engine.models.cycle import CycleContext
from readiness_engine.models.enums import Confidence, ConfidenceGrade
from readiness_engine.models.status import StatusDecision
from readiness_engine.models.workload import WorkloadWindow


@dataclass(frozen=True)
class DataConfidence:
    """Grade of the inputs behind an advice plus the missing signals."""

    grade: ConfidenceGrade
    blind_spots: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DailyAdvice:
    """Everything that went into, and came out of, one day's decision."""

    date: date
    decision: StatusDecision
    workload: WorkloadWindow
    baselines: BiometricBaselines
    cycle: CycleContext
    confidence: DataConfidence
    red_flags: RedFlagResult | None = None
    hrv_vs_baseline_percent: float | None = None
    rhr_delta: float | None = None
    needs_checkin: bool = False
    flags_confidence: Confidence = Confidence.LOW
    engine_version: str = ""
    kb_version: str = ""
