"""Data models for the readiness engine."""

from readiness_engine.models.activity import Activity, AthleteProfile
from readiness_engine.models.advice import DailyAdvice, DataConfidence
from readiness_engine.models.biometrics import (
    BiometricBaselines,
    DailyBiometricLog,
    RedFlagCheck,
    RedFlagResult,
)
from readiness_engine.models.cycle import CycleAnchor, CycleContext, CyclePhaseInfo
from readiness_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from readiness_engine.models.enums import (
    AcwrBand,
    CascadeStage,
    Confidence,
    ContraceptionMode,
    CyclePhase,
    GoalIntent,
    InstructionClass,
    LogSource,
    PrescriptionHint,
    Signal,
    StatusTag,
)
from readiness_engine.models.status import Reason, RuleOutcome, StatusDecision, StatusInputs
from readiness_engine.models.workload import LoadContributor, WorkloadCounts, WorkloadWindow

__all__ = [
    "Activity",
    "AcwrBand",
    "AthleteProfile",
    "BiometricBaselines",
    "CascadeStage",
    "Confidence",
    "ContraceptionMode",
    "CycleAnchor",
    "CycleContext",
    "CyclePhase",
    "CyclePhaseInfo",
    "DailyAdvice",
    "DailyBiometricLog",
    "DataConfidence",
    "DecisionTrace",
    "GoalIntent",
    "InstructionClass",
    "LoadContributor",
    "LogSource",
    "PrescriptionHint",
    "Reason",
    "RedFlagCheck",
    "RedFlagResult",
    "RuleOutcome",
    "RuleResult",
    "RuleStatus",
    "Signal",
    "StatusDecision",
    "StatusInputs",
    "StatusTag",
    "WorkloadCounts",
    "WorkloadWindow",
]
