"""Status decision inputs, per-rule outcomes and the final decision."""

from __future__ import annotations

from dataclasses import dataclass, field

from readiness_engine.math.numeric import finite_or_none
from readiness_engine.models.decision_trace import DecisionTrace
from readiness_engine.models.enums import (
    TAG_TO_INSTRUCTION_CLASS,
    TAG_TO_SIGNAL,
    CyclePhase,
    GoalIntent,
    InstructionClass,
    PrescriptionHint,
    Signal,
    StatusTag,
)


@dataclass(frozen=True)
class Reason:
    """One rule-firing explanation: a stable code plus readable text."""

    code: str
    text: str = ""


@dataclass(frozen=True)
class StatusInputs:
    """Frozen snapshot of every input the status cascade reads.

    Numeric fields may arrive as None or non-finite; the ``*_value``
    properties expose them as finite floats or None.
    """

    acwr: float | None = None
    is_sick_or_injured: bool = False
    readiness: float | None = None  # 1-10
    red_flags_count: int | None = None
    cycle_phase: CyclePhase | str | None = None
    hrv_vs_baseline_percent: float | None = None
    cycle_day_index: int | None = None
    goal_intent: GoalIntent | None = None
    has_checkin: bool = True

    def __post_init__(self) -> None:
        # numpy.bool_ and other truthy flags collapse to a plain bool
        object.__setattr__(self, "is_sick_or_injured", bool(self.is_sick_or_injured))
        object.__setattr__(self, "has_checkin", bool(self.has_checkin))

    @property
    def acwr_value(self) -> float | None:
        return finite_or_none(self.acwr)

    @property
    def readiness_value(self) -> float | None:
        return finite_or_none(self.readiness)

    @property
    def red_flags_value(self) -> float | None:
        return finite_or_none(self.red_flags_count)

    @property
    def hrv_percent_value(self) -> float | None:
        return finite_or_none(self.hrv_vs_baseline_percent)

    @property
    def cycle_day_value(self) -> float | None:
        return finite_or_none(self.cycle_day_index)

    @property
    def phase(self) -> CyclePhase | None:
        return CyclePhase.parse(self.cycle_phase)


@dataclass(frozen=True)
class RuleOutcome:
    """What a single cascade rule contributes when it fires.

    ``tag`` None leaves the running tag untouched. ``terminal`` stops the
    cascade after this rule.
    """

    tag: StatusTag | None = None
    reasons: tuple[Reason, ...] = field(default_factory=tuple)
    prescription_hint: PrescriptionHint | None = None
    terminal: bool = False


@dataclass(frozen=True)
class StatusDecision:
    """The engine's externally visible output. Recomputed on every request."""

    tag: StatusTag
    reasons: tuple[Reason, ...] = field(default_factory=tuple)
    prescription_hint: PrescriptionHint | None = None
    trace: DecisionTrace = field(default_factory=DecisionTrace)

    @property
    def signal(self) -> Signal:
        return TAG_TO_SIGNAL[self.tag]

    @property
    def instruction_class(self) -> InstructionClass:
        return TAG_TO_INSTRUCTION_CLASS[self.tag]

    @property
    def reason_codes(self) -> tuple[str, ...]:
        return tuple(r.code for r in self.reasons)
