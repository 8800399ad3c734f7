"""Per-activity load: raw estimation (TRIMP) and physiological correction.

References:
    - Banister (1991): TRIMP formula, heart-rate reserve weighting
    - Foster et al. (2001): session-RPE load as a flat effort fallback
    - Janse de Jonge (2003): elevated internal strain in the luteal phase
"""

from __future__ import annotations

import dataclasses
import math
import sys
from datetime import date
from typing import Iterable, Mapping

from readiness_engine.math.cycle import cycle_context_for
from readiness_engine.math.numeric import finite_or_none, round_half_up
from readiness_engine.models.activity import Activity, AthleteProfile
from readiness_engine.models.enums import (
    ACTIVE_WEEKLY_HOURS,
    ACTIVE_WEEKLY_LOAD,
    DEFAULT_MAX_HR,
    DEFAULT_RESTING_HR,
    ELITE_WEEKLY_HOURS,
    ELITE_WEEKLY_LOAD,
    LUTEAL_BASE_MULTIPLIER,
    LUTEAL_INTENSITY_HR_FRACTION,
    LUTEAL_INTENSITY_TAX,
    LUTEAL_PHASE_NAMES,
    MAX_SYMPTOM_SEVERITY,
    RPE_FALLBACK_LOAD_PER_MIN,
    SYMPTOM_TAX_CAP,
    SYMPTOM_TAX_PER_POINT,
    TRIMP_COEFFICIENT,
    TRIMP_EXPONENT,
    AthleteLevel,
    CyclePhase,
)


def calculate_trimp(
    duration_min: float,
    avg_hr: float,
    max_hr: float,
    resting_hr: float,
) -> float | None:
    """Calculate Banister TRIMP (Training Impulse) for a single session.

    TRIMP = duration × hrr × 0.64 × e^(1.92 × hrr), with the heart-rate
    reserve fraction hrr clamped to [0, 1].

    Returns:
        TRIMP rounded to one decimal, or None when max_hr <= resting_hr.

    Reference:
        Banister (1991). Modeling elite athletic performance. In:
        Physiological Testing of Elite Athletes.
    """
    denominator = max_hr - resting_hr
    if denominator <= 0:
        return None
    hrr = (avg_hr - resting_hr) / denominator
    hrr = max(0.0, min(1.0, hrr))
    trimp = duration_min * hrr * TRIMP_COEFFICIENT * math.exp(TRIMP_EXPONENT * hrr)
    return round_half_up(trimp, 1)


def estimate_raw_load(activity: Activity, profile: AthleteProfile | None = None) -> float:
    """Convert one activity into a raw (uncorrected) load value.

    Priority:
        1. Vendor perceived-exertion score, used as-is.
        2. Banister TRIMP from average heart rate.
        3. Flat perceived-effort estimate: duration_min × 40.

    Missing or zero duration yields 0 for the duration-based paths.
    """
    profile = profile or AthleteProfile()

    score = finite_or_none(activity.perceived_exertion_score)
    if score is not None:
        return max(score, 0.0)

    duration_sec = finite_or_none(activity.duration_seconds) or 0.0
    if duration_sec <= 0:
        return 0.0
    duration_min = duration_sec / 60.0

    avg_hr = finite_or_none(activity.average_heart_rate)
    if avg_hr is not None:
        max_hr = finite_or_none(profile.max_heart_rate)
        resting_hr = finite_or_none(profile.resting_heart_rate)
        trimp = calculate_trimp(
            duration_min,
            avg_hr,
            max_hr if max_hr is not None else DEFAULT_MAX_HR,
            resting_hr if resting_hr is not None else DEFAULT_RESTING_HR,
        )
        if trimp is not None:
            return trimp

    return round_half_up(duration_min * RPE_FALLBACK_LOAD_PER_MIN, 1)


def is_luteal_phase_name(phase: CyclePhase | str | None) -> bool:
    """True for CyclePhase.LUTEAL or any luteal label, case-insensitively."""
    if phase is None:
        return False
    if isinstance(phase, CyclePhase):
        return phase == CyclePhase.LUTEAL
    return str(phase).strip().lower() in LUTEAL_PHASE_NAMES


def correct_load(
    raw_load: float | None,
    phase: CyclePhase | str | None,
    readiness_score: float | None,
    average_heart_rate: float | None = None,
    max_heart_rate: float | None = None,
) -> int:
    """Correct a raw load for cycle phase, intensity and same-day readiness ("prime load").

    Multiplier starts at 1.0:
        - luteal phase: 1.05, plus 0.05 when avg_hr / max_hr >= 0.85
        - readiness r: + min(clamp(10 - r, 0, 9) × 0.01, 0.04)

    Returns:
        round(raw_load × multiplier) as an int; 0 for non-positive or
        non-finite raw loads.
    """
    raw = finite_or_none(raw_load)
    if raw is None or raw <= 0:
        return 0

    multiplier = 1.0

    if is_luteal_phase_name(phase):
        multiplier = LUTEAL_BASE_MULTIPLIER
        avg_hr = finite_or_none(average_heart_rate)
        max_hr = finite_or_none(max_heart_rate)
        if avg_hr and max_hr and avg_hr / max_hr >= LUTEAL_INTENSITY_HR_FRACTION:
            multiplier += LUTEAL_INTENSITY_TAX

    readiness = finite_or_none(readiness_score)
    if readiness is not None:
        symptom_severity = max(0.0, min(float(MAX_SYMPTOM_SEVERITY), 10 - readiness))
        multiplier += min(symptom_severity * SYMPTOM_TAX_PER_POINT, SYMPTOM_TAX_CAP)

    corrected = min(raw * multiplier, sys.float_info.max)
    return int(round_half_up(corrected))


def estimate_and_correct_load(
    activity: Activity,
    profile: AthleteProfile | None = None,
    readiness_score: float | None = None,
) -> int:
    """Estimate and correct the load of one activity.

    The cycle phase is derived for the activity's own date from the
    profile's (gated) cycle context, so historical activities get the phase
    they were performed in.
    """
    profile = profile or AthleteProfile()
    raw_load = estimate_raw_load(activity, profile)
    context = cycle_context_for(profile, activity.date)
    return correct_load(
        raw_load,
        context.phase,
        readiness_score,
        activity.average_heart_rate,
        profile.max_heart_rate,
    )


def with_corrected_loads(
    activities: Iterable[Activity],
    profile: AthleteProfile | None = None,
    readiness_by_date: Mapping[date, float | None] | None = None,
) -> tuple[Activity, ...]:
    """Fill in ``corrected_load`` for every activity that lacks a finite one.

    A finite persisted corrected load is kept as-is.
    """
    readiness_by_date = readiness_by_date or {}
    resolved: list[Activity] = []
    for activity in activities:
        if finite_or_none(activity.corrected_load) is not None:
            resolved.append(activity)
            continue
        load = estimate_and_correct_load(
            activity, profile, readiness_by_date.get(activity.date)
        )
        resolved.append(dataclasses.replace(activity, corrected_load=float(load)))
    return tuple(resolved)


def determine_athlete_level(
    avg_weekly_load: float | None, avg_weekly_hours: float | None
) -> AthleteLevel:
    """Classify the athlete from average weekly load and training hours."""
    load = finite_or_none(avg_weekly_load)
    hours = finite_or_none(avg_weekly_hours)

    if (load is not None and load > ELITE_WEEKLY_LOAD) or (
        hours is not None and hours > ELITE_WEEKLY_HOURS
    ):
        return AthleteLevel.ELITE

    load_low, load_high = ACTIVE_WEEKLY_LOAD
    hours_low, hours_high = ACTIVE_WEEKLY_HOURS
    if (load is not None and load_low <= load <= load_high) or (
        hours is not None and hours_low <= hours <= hours_high
    ):
        return AthleteLevel.ACTIVE
    return AthleteLevel.ROOKIE
