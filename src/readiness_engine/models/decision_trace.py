"""Decision trace — full audit trail of how the cascade reached its tag."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto

from readiness_engine.models.enums import StatusTag


class RuleStatus(IntEnum):
    """Whether a rule fired, was skipped, or was not applicable."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single rule's evaluation during one compute_status call."""

    rule_id: str
    status: RuleStatus
    tag_before: StatusTag | None = None
    tag_after: StatusTag | None = None
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Complete audit trail for a single compute_status() call.

    Records every rule's outcome so each recommendation can be replayed
    and explained.
    """

    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    final_tag: StatusTag | None = None
    terminated_by: str | None = None

    @property
    def fired_rule_ids(self) -> tuple[str, ...]:
        return tuple(r.rule_id for r in self.rule_results if r.status == RuleStatus.FIRED)
