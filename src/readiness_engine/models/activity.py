"""Activity records and the athlete profile consumed by load estimation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from readiness_engine.models.cycle import CycleAnchor
from readiness_engine.models.enums import ContraceptionMode, GoalIntent


@dataclass(frozen=True)
class Activity:
    """One completed training session, already normalized to a calendar day.

    ``corrected_load`` carries a previously persisted corrected load; when it
    is finite, aggregation uses it instead of re-estimating.
    """

    date: date
    duration_seconds: float | None = None
    average_heart_rate: float | None = None
    perceived_exertion_score: float | None = None  # vendor effort score
    include_in_aggregate: bool = True
    corrected_load: float | None = None
    activity_id: str | None = None
    sport_type: str = "Session"
    source: str | None = None


@dataclass(frozen=True)
class AthleteProfile:
    """Profile fields the engine reads: heart-rate anchors and cycle context."""

    max_heart_rate: float | None = None
    resting_heart_rate: float | None = None
    cycle_anchor: CycleAnchor | None = None
    contraception_mode: ContraceptionMode | None = None
    goal_intent: GoalIntent | None = None

    @property
    def resolved_contraception_mode(self) -> ContraceptionMode:
        """Explicit mode, else NATURAL when an anchor exists, else UNKNOWN."""
        if self.contraception_mode is not None:
            return self.contraception_mode
        if self.cycle_anchor is not None:
            return ContraceptionMode.NATURAL
        return ContraceptionMode.UNKNOWN
