"""Check-in gate: a day without a readiness check-in is held at MAINTAIN.

Runs right after the sick override, so a sick athlete still recovers on a
day they skipped the check-in.
"""

from __future__ import annotations

from readiness_engine.models.enums import CascadeStage, StatusTag
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


class MissingCheckinRule(StatusRule):
    """Stops the cascade at MAINTAIN when no eligible check-in exists."""

    rule_id = "missing_checkin"
    version = "1.0.0"
    stage = CascadeStage.CHECKIN_GATE
    required_data: list[str] = []

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        if inputs.has_checkin:
            return None
        return RuleOutcome(
            tag=StatusTag.MAINTAIN,
            reasons=(
                Reason("MISSING_CHECKIN_INPUT", "No check-in with a readiness score for this day."),
            ),
            terminal=True,
        )
