"""Rolling HRV and RHR baselines from daily biometric logs.

Baselines are plain means over the trailing 28 (and 7) calendar days,
inclusive of the day being evaluated. Only finite values contribute.

Reference:
    Plews et al. (2012). Heart rate variability in elite triathletes: is
    variation in variability the key to effective training? Eur J Appl
    Physiol 112(11):3729-3741.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

import numpy as np
import pandas as pd

from readiness_engine.math.numeric import finite_or_none, round_half_up
from readiness_engine.models.biometrics import BiometricBaselines, DailyBiometricLog
from readiness_engine.models.enums import (
    BASELINE_WINDOW_DAYS,
    SHORT_BASELINE_WINDOW_DAYS,
    LogSource,
)

_LOG_COLUMNS = ("date", "hrv", "rhr")


def logs_frame(logs: Iterable[DailyBiometricLog]) -> pd.DataFrame:
    """Tabulate logs as (date, hrv, rhr) with non-finite values as NaN."""
    rows = [
        (
            log.date,
            finite_or_none(log.heart_rate_variability),
            finite_or_none(log.resting_heart_rate),
        )
        for log in logs
    ]
    frame = pd.DataFrame(rows, columns=list(_LOG_COLUMNS))
    frame["hrv"] = frame["hrv"].astype("float64")
    frame["rhr"] = frame["rhr"].astype("float64")
    return frame


def _window_mean(frame: pd.DataFrame, column: str, start: date, end: date) -> float | None:
    mask = (frame["date"] >= start) & (frame["date"] <= end)
    values = frame.loc[mask, column].to_numpy(dtype=np.float64)
    values = values[np.isfinite(values)]
    if values.size == 0:
        return None
    return float(np.mean(values))


def compute_baselines(
    logs: Iterable[DailyBiometricLog] | pd.DataFrame, on_date: date
) -> BiometricBaselines:
    """Compute 28-day and 7-day HRV/RHR baselines ending on *on_date*.

    RHR means are rounded half-up to whole beats, HRV means to one decimal.
    An empty window yields None for that baseline.
    """
    frame = logs if isinstance(logs, pd.DataFrame) else logs_frame(logs)
    start_28 = on_date - timedelta(days=BASELINE_WINDOW_DAYS - 1)
    start_7 = on_date - timedelta(days=SHORT_BASELINE_WINDOW_DAYS - 1)

    def _rounded(value: float | None, ndigits: int) -> float | None:
        return round_half_up(value, ndigits) if value is not None else None

    return BiometricBaselines(
        on_date=on_date,
        hrv_28d=_rounded(_window_mean(frame, "hrv", start_28, on_date), 1),
        rhr_28d=_rounded(_window_mean(frame, "rhr", start_28, on_date), 0),
        hrv_7d=_rounded(_window_mean(frame, "hrv", start_7, on_date), 1),
        rhr_7d=_rounded(_window_mean(frame, "rhr", start_7, on_date), 0),
    )


def hrv_vs_baseline_percent(hrv: float | None, hrv_baseline: float | None) -> float | None:
    """Today's HRV as a percentage of baseline, one decimal (e.g. 105.3)."""
    today = finite_or_none(hrv)
    baseline = finite_or_none(hrv_baseline)
    if today is None or baseline is None or baseline <= 0:
        return None
    return round_half_up(today / baseline * 100, 1)


def rhr_delta(rhr: float | None, rhr_baseline: float | None) -> float | None:
    """Today's RHR minus baseline in bpm, one decimal."""
    today = finite_or_none(rhr)
    baseline = finite_or_none(rhr_baseline)
    if today is None or baseline is None:
        return None
    return round_half_up(today - baseline, 1)


def merge_logs_by_date(logs: Iterable[DailyBiometricLog]) -> tuple[DailyBiometricLog, ...]:
    """Collapse several logs for one date into one, oldest date first.

    Each numeric field takes the first finite value in input order; the
    day is sick if any log says so. The source is that of the first log.
    """
    rows = [
        {
            "date": log.date,
            "sleep": finite_or_none(log.sleep_hours),
            "hrv": finite_or_none(log.heart_rate_variability),
            "rhr": finite_or_none(log.resting_heart_rate),
            "readiness": finite_or_none(log.readiness_score),
            "sick": bool(log.is_sick_or_injured),
            "source": int(log.source),
        }
        for log in logs
    ]
    if not rows:
        return ()

    merged = (
        pd.DataFrame(rows)
        .groupby("date", sort=True)
        .agg(
            sleep=("sleep", "first"),
            hrv=("hrv", "first"),
            rhr=("rhr", "first"),
            readiness=("readiness", "first"),
            sick=("sick", "any"),
            source=("source", "first"),
        )
    )
    return tuple(
        DailyBiometricLog(
            date=day,
            sleep_hours=finite_or_none(row["sleep"]),
            heart_rate_variability=finite_or_none(row["hrv"]),
            resting_heart_rate=finite_or_none(row["rhr"]),
            readiness_score=finite_or_none(row["readiness"]),
            is_sick_or_injured=bool(row["sick"]),
            source=LogSource(int(row["source"])),
        )
        for day, row in merged.iterrows()
    )
