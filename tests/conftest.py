"""Shared test fixtures: athlete profiles, activity histories, biometric logs."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from readiness_engine.models.activity import Activity, AthleteProfile
from readiness_engine.models.biometrics import DailyBiometricLog
from readiness_engine.models.cycle import CycleAnchor
from readiness_engine.models.enums import ContraceptionMode, GoalIntent, LogSource
from readiness_engine.models.status import StatusInputs

REFERENCE_DATE = date(2024, 3, 28)


@pytest.fixture
def reference_date() -> date:
    """Thursday 28 March 2024: the "today" of most scenarios."""
    return REFERENCE_DATE


@pytest.fixture
def natural_cycle_profile() -> AthleteProfile:
    """Natural 28-day cycle; period started 14 March 2024 (day 15 on the reference date)."""
    return AthleteProfile(
        max_heart_rate=190,
        resting_heart_rate=55,
        cycle_anchor=CycleAnchor(last_period_start=date(2024, 3, 14), cycle_length_days=28),
        goal_intent=GoalIntent.PROGRESS,
    )


@pytest.fixture
def hormonal_profile() -> AthleteProfile:
    """Hormonal contraception: cycle phase is never trusted."""
    return AthleteProfile(
        max_heart_rate=185,
        resting_heart_rate=50,
        cycle_anchor=CycleAnchor(last_period_start=date(2024, 3, 14)),
        contraception_mode=ContraceptionMode.HBC_OTHER,
    )


@pytest.fixture
def no_cycle_profile() -> AthleteProfile:
    return AthleteProfile(max_heart_rate=195, resting_heart_rate=48)


@pytest.fixture
def make_activities() -> Callable[..., list[Activity]]:
    """Factory: one activity per day with a fixed corrected load, ending on *end*."""

    def _make(end: date, days: int, load: float) -> list[Activity]:
        return [
            Activity(
                date=end - timedelta(days=offset),
                duration_seconds=3600,
                corrected_load=load,
                activity_id=f"act-{offset}",
                sport_type="Run",
            )
            for offset in range(days)
        ]

    return _make


@pytest.fixture
def steady_activities(make_activities) -> list[Activity]:
    """28 days at a constant load of 40 → ACWR exactly 1.0 on the reference date."""
    return make_activities(REFERENCE_DATE, 28, 40.0)


@pytest.fixture
def make_logs() -> Callable[..., list[DailyBiometricLog]]:
    """Factory: stable daily check-ins (HRV 50, RHR 60) ending on *end*."""

    def _make(
        end: date,
        days: int,
        hrv: float = 50.0,
        rhr: float = 60.0,
        sleep: float = 7.5,
        readiness: float | None = 7,
        source: LogSource = LogSource.CHECKIN,
    ) -> list[DailyBiometricLog]:
        return [
            DailyBiometricLog(
                date=end - timedelta(days=offset),
                sleep_hours=sleep,
                heart_rate_variability=hrv,
                resting_heart_rate=rhr,
                readiness_score=readiness,
                source=source,
            )
            for offset in range(days)
        ]

    return _make


@pytest.fixture
def golden_inputs() -> StatusInputs:
    """Readiness 8, no red flags, follicular, ACWR 1.0 → PUSH."""
    return StatusInputs(
        acwr=1.0,
        readiness=8,
        red_flags_count=0,
        cycle_phase="Follicular",
    )
