"""ADVISORY rule: progressive-stimulus hint for athletes chasing progress.

In the ACWR sweet spot (0.8-1.3) with no red flags and readiness >= 6,
an athlete whose goal is PROGRESS gets a progressive-overload hint. The
tag is never changed.
"""

from __future__ import annotations

from readiness_engine.models.enums import (
    ACWR_OPTIMAL_HIGH,
    ACWR_OPTIMAL_LOW,
    PROGRESS_READINESS_MIN,
    CascadeStage,
    GoalIntent,
    PrescriptionHint,
    StatusTag,
)
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


class ProgressIntentRule(StatusRule):
    """Adds PROGRESSIVE_STIMULUS when load, flags and readiness allow it."""

    rule_id = "progress_intent"
    version = "1.0.0"
    stage = CascadeStage.ADVISORY
    required_data = ["acwr", "readiness", "goal_intent"]

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        if inputs.goal_intent != GoalIntent.PROGRESS:
            return None
        if not ACWR_OPTIMAL_LOW <= inputs.acwr_value <= ACWR_OPTIMAL_HIGH:
            return None
        red_flags = inputs.red_flags_value
        if (red_flags or 0) != 0:
            return None
        if inputs.readiness_value < PROGRESS_READINESS_MIN:
            return None

        return RuleOutcome(
            prescription_hint=PrescriptionHint.PROGRESSIVE_STIMULUS,
            reasons=(
                Reason("GOAL_PROGRESS", "Goal PROGRESS in the ACWR sweet spot: progressive stimulus."),
            ),
        )
