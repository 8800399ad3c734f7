"""Menstrual-cycle phase calculation and confidence gating.

Phase model: menstrual days 1-5, follicular up to ovulation
(floor(cycle_length / 2)), luteal from ovulation + 1 to the end of the cycle.

Reference:
    McNulty et al. (2020). The Effects of Menstrual Cycle Phase on Exercise
    Performance in Eumenorrheic Women. Sports Med 50(10):1813-1827.
"""

from __future__ import annotations

from datetime import date

from readiness_engine.exceptions import InvalidCycleAnchorError
from readiness_engine.math.numeric import finite_or_none
from readiness_engine.models.activity import AthleteProfile
from readiness_engine.models.cycle import CycleAnchor, CycleContext, CyclePhaseInfo
from readiness_engine.models.enums import (
    MENSTRUAL_PHASE_LAST_DAY,
    Confidence,
    ContraceptionMode,
    CyclePhase,
)


def phase_for_date(anchor: CycleAnchor, target_date: date) -> CyclePhaseInfo:
    """Derive the cycle phase and 1-based cycle day for *target_date*.

    Pure: gives identical results for "today" and for any historical date,
    including dates before the anchor (the cycle day wraps around).

    Args:
        anchor: Last period start and average cycle length.
        target_date: Calendar day to evaluate.

    Returns:
        CyclePhaseInfo with phase, cycle day and the ovulation day used.
    """
    length = finite_or_none(anchor.cycle_length_days)
    if length is None:
        raise InvalidCycleAnchorError(
            f"cycle_length_days must be a finite number, got {anchor.cycle_length_days!r}"
        )
    cycle_length = int(length)
    if cycle_length < 1:
        raise InvalidCycleAnchorError(
            f"cycle_length_days must be >= 1, got {anchor.cycle_length_days!r}"
        )

    days_since_anchor = (target_date - anchor.last_period_start).days
    # Python's % already returns a non-negative result for a positive modulus
    cycle_day = days_since_anchor % cycle_length + 1
    ovulation_day = cycle_length // 2

    if cycle_day <= MENSTRUAL_PHASE_LAST_DAY:
        phase = CyclePhase.MENSTRUAL
    elif cycle_day <= ovulation_day:
        phase = CyclePhase.FOLLICULAR
    elif cycle_day <= cycle_length:
        phase = CyclePhase.LUTEAL
    else:
        phase = CyclePhase.MENSTRUAL

    return CyclePhaseInfo(
        phase=phase,
        cycle_day=cycle_day,
        days_since_anchor=days_since_anchor,
        cycle_length=cycle_length,
        ovulation_day=ovulation_day,
    )


def cycle_confidence(mode: ContraceptionMode, anchor: CycleAnchor | None) -> Confidence:
    """Only a natural cycle is trusted; without an anchor confidence is MED."""
    if mode != ContraceptionMode.NATURAL:
        return Confidence.LOW
    if anchor is None:
        return Confidence.MED
    return Confidence.HIGH


def cycle_context_for(profile: AthleteProfile | None, target_date: date) -> CycleContext:
    """Resolve the cycle context the decision layer may act on for one day.

    Phase and cycle day stay None when confidence is LOW or no anchor is
    known, so no cycle-based rule or load correction can fire.
    """
    profile = profile or AthleteProfile()
    mode = profile.resolved_contraception_mode
    anchor = profile.cycle_anchor
    confidence = cycle_confidence(mode, anchor)

    if anchor is None or confidence == Confidence.LOW:
        return CycleContext(mode=mode, confidence=confidence)

    info = phase_for_date(anchor, target_date)
    return CycleContext(
        mode=mode,
        confidence=confidence,
        phase=info.phase,
        cycle_day=info.cycle_day,
    )
