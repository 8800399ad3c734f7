"""SAFETY rule: an athlete reporting sickness or injury always recovers.

Sickness short-circuits the cascade; no later rule can raise the tag.
"""

from __future__ import annotations

from readiness_engine.models.enums import CascadeStage, StatusTag
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


class SickOverrideRule(StatusRule):
    """Forces RECOVER and stops evaluation when the athlete is sick or injured."""

    rule_id = "sick_override"
    version = "1.0.0"
    stage = CascadeStage.SICK_OVERRIDE
    required_data: list[str] = []

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        if not inputs.is_sick_or_injured:
            return None
        return RuleOutcome(
            tag=StatusTag.RECOVER,
            reasons=(Reason("SICK_OR_INJURED", "Sick or injured: recovery comes first."),),
            terminal=True,
        )
