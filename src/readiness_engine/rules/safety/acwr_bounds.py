"""SAFETY rule: hard Acute:Chronic Workload Ratio bounds.

Reference:
    Gabbett (2016). The training-injury prevention paradox: should athletes
    be training smarter and harder? Br J Sports Med 50(5):273-280.

Bounds, applied to the tag produced by the base rule and overrides:
    ACWR > 1.5           → RECOVER (spike ceiling, overrides everything)
    ACWR > 1.3 and PUSH  → RECOVER (overreaching ceiling)
    ACWR < 0.8 and PUSH  → MAINTAIN (detraining floor)
    ACWR 0.8-1.3         → no clamp
"""

from __future__ import annotations

from readiness_engine.models.enums import (
    ACWR_OPTIMAL_HIGH,
    ACWR_OPTIMAL_LOW,
    ACWR_SPIKE_THRESHOLD,
    CascadeStage,
    StatusTag,
)
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


def clamp_to_acwr_bounds(tag: StatusTag, acwr: float | None) -> tuple[StatusTag, str | None]:
    """Clamp *tag* to the ACWR bounds; returns (tag, reason code or None)."""
    if acwr is None:
        return tag, None
    if acwr > ACWR_SPIKE_THRESHOLD:
        return StatusTag.RECOVER, "ACWR_SPIKE_CEILING"
    if acwr > ACWR_OPTIMAL_HIGH and tag == StatusTag.PUSH:
        return StatusTag.RECOVER, "ACWR_OVERREACHING_CEILING"
    if acwr < ACWR_OPTIMAL_LOW and tag == StatusTag.PUSH:
        return StatusTag.MAINTAIN, "ACWR_DETRAINING_FLOOR"
    return tag, None


class AcwrBoundsRule(StatusRule):
    """Clamps the running tag to the workload-ratio ceiling and floor."""

    rule_id = "acwr_bounds"
    version = "1.0.0"
    stage = CascadeStage.ACWR_BOUNDS
    required_data = ["acwr"]

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        acwr = inputs.acwr_value
        if acwr is None or current_tag is None:
            return None

        clamped, code = clamp_to_acwr_bounds(current_tag, acwr)
        if clamped == current_tag:
            return None

        return RuleOutcome(
            tag=clamped,
            reasons=(
                Reason(code, f"ACWR={acwr:.2f} bound: {clamped.name}. Ref: Gabbett (2016)."),
            ),
        )
