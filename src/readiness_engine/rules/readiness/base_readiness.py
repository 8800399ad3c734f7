"""BASE rule: readiness, red flags and cycle phase decision table.

Evaluated in order, first match wins:
    readiness <= 3                               → REST
    red flags >= 2                               → REST
    red flags == 1                               → RECOVER
    readiness 4-5 and luteal                     → RECOVER
    readiness >= 8, 0 red flags and follicular   → PUSH
    otherwise                                    → MAINTAIN

Missing readiness defaults to 5, missing red flags to 0 and a missing
phase to "Unknown" (matches neither luteal nor follicular).
"""

from __future__ import annotations

from readiness_engine.models.enums import (
    DEFAULT_READINESS,
    LUTEAL_RECOVER_READINESS,
    PUSH_READINESS_MIN,
    READINESS_REST_MAX,
    CascadeStage,
    CyclePhase,
    StatusTag,
)
from readiness_engine.models.status import Reason, RuleOutcome, StatusInputs
from readiness_engine.rules.base import StatusRule


def _fmt(value: float) -> str:
    return f"{value:g}"


class BaseReadinessRule(StatusRule):
    """Selects the base tag before any phase override or ACWR clamp."""

    rule_id = "base_readiness"
    version = "1.0.0"
    stage = CascadeStage.BASE
    required_data: list[str] = []

    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        readiness = inputs.readiness_value
        readiness = DEFAULT_READINESS if readiness is None else readiness
        red_flags = inputs.red_flags_value
        assessed = red_flags is not None
        red_flags = 0 if red_flags is None else red_flags
        phase = inputs.phase

        tag, reason = self._decide(readiness, red_flags, phase)
        reasons = [reason]
        if not assessed:
            reasons.append(
                Reason("RED_FLAGS_NOT_ASSESSED", "Red flags could not be computed; counted as 0.")
            )
        return RuleOutcome(tag=tag, reasons=tuple(reasons))

    @staticmethod
    def _decide(
        readiness: float, red_flags: float, phase: CyclePhase | None
    ) -> tuple[StatusTag, Reason]:
        low, high = LUTEAL_RECOVER_READINESS

        if readiness <= READINESS_REST_MAX:
            return StatusTag.REST, Reason(
                "READINESS_LOW", f"Readiness <= {READINESS_REST_MAX} ({_fmt(readiness)})"
            )
        if red_flags >= 2:
            return StatusTag.REST, Reason(
                "RED_FLAGS_MULTIPLE", f"Red flags >= 2 ({_fmt(red_flags)})"
            )
        if red_flags == 1:
            return StatusTag.RECOVER, Reason("RED_FLAGS_SINGLE", "Red flags == 1 (1)")
        if low <= readiness <= high and phase == CyclePhase.LUTEAL:
            return StatusTag.RECOVER, Reason(
                "LUTEAL_LOW_READINESS",
                f"Readiness {low}-{high} ({_fmt(readiness)}) in luteal phase",
            )
        if readiness >= PUSH_READINESS_MIN and red_flags == 0 and phase == CyclePhase.FOLLICULAR:
            return StatusTag.PUSH, Reason(
                "FOLLICULAR_HIGH_READINESS",
                f"Readiness >= {PUSH_READINESS_MIN} ({_fmt(readiness)}), "
                "0 red flags, follicular phase",
            )
        return StatusTag.MAINTAIN, Reason(
            "NO_SPECIFIC_CONDITION", "No specific condition for REST, RECOVER or PUSH"
        )
