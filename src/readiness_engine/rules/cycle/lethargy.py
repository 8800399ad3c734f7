"""PHASE_OVERRIDE rule: luteal lethargy.

A low-energy luteal day (readiness 4-6) with HRV above 105% of baseline is
not a recovery signal; the athlete is held at MAINTAIN instead of resting.
"""

from __future__ import annotations

from readiness_engine.models.enums import (
    LETHARGY_HRV_PCT,
    LETHARGY_READINESS,
    CascadeStage,
    CyclePhase,
    StatusTag,
)
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


class LethargyOverrideRule(StatusRule):
    """Forces MAINTAIN on a lethargic luteal day with elevated HRV."""

    rule_id = "lethargy_override"
    version = "1.0.0"
    stage = CascadeStage.PHASE_OVERRIDE
    order = 0
    required_data = ["cycle_phase", "readiness", "hrv_vs_baseline_percent"]

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        low, high = LETHARGY_READINESS
        readiness = inputs.readiness_value
        hrv_pct = inputs.hrv_percent_value

        if inputs.phase != CyclePhase.LUTEAL:
            return None
        if not low <= readiness <= high or hrv_pct <= LETHARGY_HRV_PCT:
            return None

        return RuleOutcome(
            tag=StatusTag.MAINTAIN,
            reasons=(
                Reason(
                    "LETHARGY_OVERRIDE",
                    f"Luteal phase, readiness {low}-{high}, "
                    f"HRV {hrv_pct:g}% > {LETHARGY_HRV_PCT:g}% of baseline: MAINTAIN.",
                ),
            ),
        )
