"""StatusEngine — the single place a final readiness tag is computed."""

from __future__ import annotations

import logging

from readiness_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from readiness_engine.models.enums import PrescriptionHint, StatusTag
from readiness_engine.models.status import Reason, StatusDecision, StatusInputs
from readiness_engine.registry import RuleRegistry

logger = logging.getLogger(__name__)


class StatusEngine:
    """Folds the ordered rule cascade over one StatusInputs snapshot.

    Every caller, whether a live daily request or a historical
    re-derivation, routes through compute_status so there is exactly one
    decision path.

    Usage:
        engine = StatusEngine()
        decision = engine.compute_status(StatusInputs(acwr=1.0, readiness=8))
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry or RuleRegistry()

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def compute_status(self, inputs: StatusInputs) -> StatusDecision:
        """Evaluate the cascade and produce the final decision.

        Args:
            inputs: Frozen snapshot of the decision inputs.

        Returns:
            StatusDecision with tag, accumulated reasons, optional
            prescription hint and the full decision trace.
        """
        tag: StatusTag | None = None
        reasons: list[Reason] = []
        hint: PrescriptionHint | None = None
        rule_results: list[RuleResult] = []
        terminated_by: str | None = None

        for rule in self.registry.get_all_rules():
            if terminated_by is not None:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        tag_before=tag,
                        tag_after=tag,
                        explanation=f"Cascade terminated by {terminated_by}.",
                    )
                )
                continue

            if not rule.has_required_data(inputs):
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.NOT_APPLICABLE,
                        tag_before=tag,
                        tag_after=tag,
                        explanation=f"Missing required data: {rule.required_data}",
                    )
                )
                continue

            outcome = rule.evaluate(inputs, tag)
            if outcome is None:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        tag_before=tag,
                        tag_after=tag,
                        explanation="Rule conditions not met.",
                    )
                )
                continue

            tag_before = tag
            if outcome.tag is not None:
                tag = outcome.tag
            if outcome.prescription_hint is not None:
                hint = outcome.prescription_hint
            reasons.extend(outcome.reasons)

            logger.debug(
                "Rule %s fired: %s -> %s (%s)",
                rule.rule_id,
                tag_before.name if tag_before is not None else None,
                tag.name if tag is not None else None,
                ", ".join(r.code for r in outcome.reasons),
            )
            rule_results.append(
                RuleResult(
                    rule_id=rule.rule_id,
                    status=RuleStatus.FIRED,
                    tag_before=tag_before,
                    tag_after=tag,
                    explanation="; ".join(r.text or r.code for r in outcome.reasons),
                )
            )
            if outcome.terminal:
                terminated_by = rule.rule_id

        if tag is None:
            # Only reachable with a registry that holds no base rule
            tag = StatusTag.MAINTAIN
            reasons.append(Reason("NO_SPECIFIC_CONDITION", "No rule selected a tag."))

        trace = DecisionTrace(
            rule_results=tuple(rule_results),
            final_tag=tag,
            terminated_by=terminated_by,
        )
        return StatusDecision(
            tag=tag,
            reasons=tuple(reasons),
            prescription_hint=hint,
            trace=trace,
        )


_default_engine: StatusEngine | None = None


def default_engine() -> StatusEngine:
    """Shared engine over the auto-discovered rule set."""
    global _default_engine
    if _default_engine is None:
        _default_engine = StatusEngine()
    return _default_engine


def compute_status(inputs: StatusInputs) -> StatusDecision:
    """Compute the authoritative status decision with the default engine."""
    return default_engine().compute_status(inputs)
