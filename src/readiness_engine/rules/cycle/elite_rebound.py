"""PHASE_OVERRIDE rule: early-menstrual elite rebound.

On cycle days 1-3 a high readiness score with HRV at or near baseline
signals a performance window; the tag is raised to PUSH. ACWR bounds
still apply afterwards.

Reference:
    McNulty et al. (2020). The Effects of Menstrual Cycle Phase on Exercise
    Performance in Eumenorrheic Women. Sports Med 50(10):1813-1827.
"""

from __future__ import annotations

from readiness_engine.models.enums import (
    ELITE_REBOUND_DAYS,
    ELITE_REBOUND_HRV_PCT,
    PUSH_READINESS_MIN,
    CascadeStage,
    CyclePhase,
    StatusTag,
)
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


class EliteReboundRule(StatusRule):
    """Forces PUSH early in menstruation when readiness is high."""

    rule_id = "elite_rebound"
    version = "1.0.0"
    stage = CascadeStage.PHASE_OVERRIDE
    order = 1
    # HRV is optional: an absent reading does not block the override
    required_data = ["cycle_phase", "cycle_day_index", "readiness"]

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        first, last = ELITE_REBOUND_DAYS
        cycle_day = inputs.cycle_day_value
        hrv_pct = inputs.hrv_percent_value

        if inputs.phase != CyclePhase.MENSTRUAL:
            return None
        if not first <= cycle_day <= last:
            return None
        if inputs.readiness_value < PUSH_READINESS_MIN:
            return None
        if hrv_pct is not None and hrv_pct < ELITE_REBOUND_HRV_PCT:
            return None

        return RuleOutcome(
            tag=StatusTag.PUSH,
            reasons=(
                Reason(
                    "ELITE_REBOUND_OVERRIDE",
                    f"Menstrual day {cycle_day:g}, readiness >= {PUSH_READINESS_MIN}, "
                    f"HRV >= {ELITE_REBOUND_HRV_PCT:g}% of baseline: PUSH.",
                ),
            ),
        )
