"""Abstract base class for all status cascade rules."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from numbers import Real

from readiness_engine.models.enums import CascadeStage, StatusTag
from readiness_engine.models.status import RuleOutcome, StatusInputs


class StatusRule(ABC):
    """Base class for one step of the status decision cascade.

    Rules are discovered automatically by the RuleRegistry and folded in
    ``(stage, order)`` order by the StatusEngine. Each rule sees the tag
    produced so far and may replace it.

    Subclasses must define:
        rule_id: unique identifier (e.g. "acwr_bounds")
        version: semantic version string
        stage: CascadeStage the rule belongs to
        order: tie-breaker within the stage (lower runs first)
        required_data: StatusInputs field names the rule cannot do without
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    stage: CascadeStage
    order: int = 0
    required_data: list[str] = []

    def has_required_data(self, inputs: StatusInputs) -> bool:
        """Check that all required StatusInputs fields are present and finite."""
        for field_name in self.required_data:
            value = getattr(inputs, field_name, None)
            if value is None:
                return False
            if isinstance(value, Real) and not isinstance(value, bool):
                if not math.isfinite(float(value)):
                    return False
        return True

    @abstractmethod
    def evaluate(self, inputs: StatusInputs, current_tag: StatusTag | None) -> RuleOutcome | None:
        """Evaluate this rule against the inputs and the running tag.

        ``current_tag`` is None only for rules that run before the base
        decision. Returns a RuleOutcome if the rule fires, or None.
        """
        ...
