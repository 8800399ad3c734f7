"""SAFETY rule: never recommend PUSH without a computable workload ratio.

A missing ratio is not the same as an in-bounds ratio; without one there
is no load signal to justify peak exertion.
"""

from __future__ import annotations

from readiness_engine.models.enums import CascadeStage, StatusTag
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


class NoAcwrNoPushRule(StatusRule):
    """Downgrades PUSH to MAINTAIN when ACWR is absent or non-finite."""

    rule_id = "no_acwr_no_push"
    version = "1.0.0"
    stage = CascadeStage.ACWR_FALLBACK
    required_data: list[str] = []

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        if inputs.acwr_value is not None or current_tag != StatusTag.PUSH:
            return None
        return RuleOutcome(
            tag=StatusTag.MAINTAIN,
            reasons=(
                Reason("NO_ACWR_NO_PUSH", "Workload ratio not computable: PUSH capped at MAINTAIN."),
            ),
        )
