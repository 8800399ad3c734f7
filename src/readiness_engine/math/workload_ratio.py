"""Acute:Chronic Workload Ratio from rolling calendar-day windows.

The acute window is the trailing 7 days and the chronic window the trailing
28 (up to 56) days, both inclusive of the reference date. The chronic sum is
normalized to a weekly average by dividing by 4.

References:
    - Hulin et al. (2014): rolling-average ACWR, Br J Sports Med 48(8):708-712
    - Gabbett (2016): ACWR thresholds, Br J Sports Med 50(5):273-280
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

import pandas as pd

from readiness_engine import config
from readiness_engine.math.dates import ensure_calendar_day
from readiness_engine.math.numeric import finite_or_none, round_half_up
from readiness_engine.models.activity import Activity
from readiness_engine.models.enums import (
    ACUTE_WINDOW_DAYS,
    ACWR_OPTIMAL_HIGH,
    ACWR_OPTIMAL_LOW,
    ACWR_SPIKE_THRESHOLD,
    CHRONIC_WEEKS_DIVISOR,
    MAX_CHRONIC_WINDOW_DAYS,
    MAX_LOAD_CONTRIBUTORS,
    MIN_CHRONIC_WINDOW_DAYS,
    AcwrBand,
)
from readiness_engine.models.workload import LoadContributor, WorkloadCounts, WorkloadWindow


def clamp_window_days(window_days: float | None) -> int:
    """Clamp the chronic window to [28, 56]; None or non-finite → configured default."""
    value = finite_or_none(window_days)
    if value is None or value == 0:
        value = float(config.DEFAULT_ACWR_WINDOW_DAYS)
    return int(min(MAX_CHRONIC_WINDOW_DAYS, max(MIN_CHRONIC_WINDOW_DAYS, value)))


def calculate_acwr(acute_sum: float, chronic_weekly_average: float) -> float | None:
    """ACWR rounded to two decimals, or None when chronic load is not positive."""
    chronic = finite_or_none(chronic_weekly_average)
    acute = finite_or_none(acute_sum)
    if chronic is None or chronic <= 0 or acute is None:
        return None
    return round_half_up(acute / chronic, 2)


def classify_acwr(acwr: float | None) -> AcwrBand | None:
    """Classify an ACWR value into a diagnostic band.

    Reference:
        Gabbett (2016), Br J Sports Med 50(5):273-280.
        Sweet spot: 0.8 - 1.3. Spike: > 1.5.
    """
    value = finite_or_none(acwr)
    if value is None:
        return None
    if value < ACWR_OPTIMAL_LOW:
        return AcwrBand.LOW
    if value <= ACWR_OPTIMAL_HIGH:
        return AcwrBand.SWEET
    if value <= ACWR_SPIKE_THRESHOLD:
        return AcwrBand.OVERREACHING
    return AcwrBand.SPIKE


def _activity_frame(activities: Sequence[Activity]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": pd.Series([a.date for a in activities], dtype=object),
            "load": pd.Series(
                [finite_or_none(a.corrected_load) for a in activities], dtype="float64"
            ),
            "included": pd.Series(
                [a.include_in_aggregate is not False for a in activities], dtype=bool
            ),
        }
    )


def compute_workload_ratio(
    activities: Sequence[Activity],
    reference_date: date,
    window_days: float | None = None,
) -> WorkloadWindow:
    """Aggregate corrected loads into acute and chronic windows and derive the ACWR.

    Membership is by calendar day, so an activity counts anywhere within its
    day regardless of time. Activities excluded from aggregation, or whose
    corrected load is missing or non-finite, never count (not even as 0).

    Args:
        activities: Activities carrying ``corrected_load``.
        reference_date: The "today" of the computation; never read from a clock.
        window_days: Chronic window length, clamped to [28, 56].

    Returns:
        A WorkloadWindow; ``ratio`` is None when not computable.
    """
    today = ensure_calendar_day(reference_date)
    window = clamp_window_days(window_days)
    acute_start = today - timedelta(days=ACUTE_WINDOW_DAYS - 1)
    window_start = today - timedelta(days=window - 1)

    activities = list(activities)
    frame = _activity_frame(activities)

    included = frame[frame["included"]]
    with_load = included.dropna(subset=["load"])
    in_window = (with_load["date"] >= window_start) & (with_load["date"] <= today)
    chronic = with_load[in_window]
    acute = chronic[chronic["date"] >= acute_start]

    acute_sum = float(acute["load"].sum())
    chronic_sum = float(chronic["load"].sum())
    chronic_weekly_average = chronic_sum / CHRONIC_WEEKS_DIVISOR
    ratio = calculate_acwr(acute_sum, chronic_weekly_average)

    top = acute.sort_values("load", ascending=False, kind="mergesort").head(
        MAX_LOAD_CONTRIBUTORS
    )
    contributors = tuple(
        LoadContributor(
            date=activities[position].date,
            load=float(load),
            activity_id=activities[position].activity_id,
            sport_type=activities[position].sport_type,
            source=activities[position].source,
        )
        for position, load in zip(top.index, top["load"])
    )

    counts = WorkloadCounts(
        fetched=len(activities),
        used_acute=len(acute),
        used_chronic=len(chronic),
        excluded_by_flag=len(frame) - len(included),
        non_finite_load=len(included) - len(with_load),
        outside_window=int((~in_window).sum()),
    )

    return WorkloadWindow(
        reference_date=today,
        window_days=window,
        acute_sum=acute_sum,
        chronic_sum=chronic_sum,
        chronic_weekly_average=chronic_weekly_average,
        ratio=ratio,
        band=classify_acwr(ratio),
        acute_start=acute_start,
        window_start=window_start,
        contributors=contributors,
        counts=counts,
    )
