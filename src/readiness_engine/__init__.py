"""Training-readiness decision engine.

Three pure entry points:
    estimate_and_correct_load(activity, profile, readiness_score=None) -> int
    compute_workload_ratio(activities, reference_date, window_days=None) -> WorkloadWindow
    compute_status(inputs) -> StatusDecision
"""

from readiness_engine.advisor import ReadinessAdvisor
from readiness_engine.engine import StatusEngine, compute_status
from readiness_engine.math.training_load import estimate_and_correct_load
from readiness_engine.math.workload_ratio import compute_workload_ratio
from readiness_engine.models import (
    Activity,
    AthleteProfile,
    CycleAnchor,
    DailyAdvice,
    DailyBiometricLog,
    StatusDecision,
    StatusInputs,
    StatusTag,
    WorkloadWindow,
)
from readiness_engine.registry import RuleRegistry

__version__ = "1.0.0"

__all__ = [
    "Activity",
    "AthleteProfile",
    "CycleAnchor",
    "DailyAdvice",
    "DailyBiometricLog",
    "ReadinessAdvisor",
    "RuleRegistry",
    "StatusDecision",
    "StatusEngine",
    "StatusInputs",
    "StatusTag",
    "WorkloadWindow",
    "compute_status",
    "compute_workload_ratio",
    "estimate_and_correct_load",
]
