"""Menstrual-cycle reference and derived phase models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from readiness_engine.models.enums import (
    DEFAULT_CYCLE_LENGTH_DAYS,
    Confidence,
    ContraceptionMode,
    CyclePhase,
)


@dataclass(frozen=True)
class CycleAnchor:
    """The athlete's cycle reference: last period start and average length."""

    last_period_start: date
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS


@dataclass(frozen=True)
class CyclePhaseInfo:
    """Phase of the cycle on one target date."""

    phase: CyclePhase
    cycle_day: int  # 1-based, always in [1, cycle_length]
    days_since_anchor: int
    cycle_length: int
    ovulation_day: int

    @property
    def is_luteal(self) -> bool:
        return self.phase == CyclePhase.LUTEAL

    @property
    def luteal_range(self) -> tuple[int, int]:
        return (self.ovulation_day + 1, self.cycle_length)


@dataclass(frozen=True)
class CycleContext:
    """Cycle phase as trusted by the decision layer for one day.

    ``phase`` and ``cycle_day`` are None whenever confidence is LOW or no
    anchor is known, so no cycle-based rule can fire.
    """

    mode: ContraceptionMode
    confidence: Confidence
    phase: CyclePhase | None = None
    cycle_day: int | None = None

    @property
    def is_luteal(self) -> bool:
        return self.phase == CyclePhase.LUTEAL
