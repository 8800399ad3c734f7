"""ReadinessAdvisor — resolves one day (or a trailing history) into advice.

Assembles loads, the workload window, cycle context, baselines and red
flags for a reference date, then hands the decision to the StatusEngine.
Live "today" requests and historical re-derivation share this code path.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Sequence

import pandas as pd

from readiness_engine import config
from readiness_engine.engine import StatusEngine, default_engine
from readiness_engine.math.baselines import (
    compute_baselines,
    hrv_vs_baseline_percent,
    logs_frame,
    merge_logs_by_date,
    rhr_delta,
)
from readiness_engine.math.cycle import cycle_context_for
from readiness_engine.math.dates import ensure_calendar_day
from readiness_engine.math.numeric import finite_or_none
from readiness_engine.math.red_flags import detect_red_flags
from readiness_engine.math.training_load import with_corrected_loads
from readiness_engine.math.workload_ratio import compute_workload_ratio
from readiness_engine.models.activity import Activity, AthleteProfile
from readiness_engine.models.advice import DailyAdvice, DataConfidence
from readiness_engine.models.biometrics import BiometricBaselines, DailyBiometricLog
from readiness_engine.models.enums import (
    ALLOWED_HISTORY_DAYS,
    FALLBACK_HISTORY_DAYS,
    Confidence,
    ConfidenceGrade,
    LogSource,
)
from readiness_engine.models.status import StatusInputs

logger = logging.getLogger(__name__)


def select_checkin(day_logs: Iterable[DailyBiometricLog]) -> DailyBiometricLog | None:
    """Pick the log allowed to drive a day's decision.

    Imported logs never qualify, and a candidate needs a finite readiness
    score. A CHECKIN log is preferred over a SYNC log.
    """
    eligible = [
        log
        for log in day_logs
        if log.source != LogSource.IMPORT and finite_or_none(log.readiness_score) is not None
    ]
    if not eligible:
        return None
    for log in eligible:
        if log.source == LogSource.CHECKIN:
            return log
    return eligible[0]


def build_confidence(
    hrv_today: float | None,
    rhr_today: float | None,
    baselines: BiometricBaselines,
    acwr: float | None,
    cycle_confidence: Confidence,
) -> DataConfidence:
    """Grade the completeness of a day's inputs.

    A: HRV, RHR, a 28-day baseline and ACWR all present, no blind spots.
    B: those four present with a blind spot, or HRV and RHR present with
       either a baseline or ACWR.
    C: anything less.
    """
    has_hrv = finite_or_none(hrv_today) is not None
    has_rhr = finite_or_none(rhr_today) is not None
    has_baselines = baselines.has_any_28d
    has_acwr = finite_or_none(acwr) is not None

    blind_spots: list[str] = []
    if not has_hrv:
        blind_spots.append("HRV_TODAY_MISSING")
    if not has_rhr:
        blind_spots.append("RHR_TODAY_MISSING")
    if not has_baselines:
        blind_spots.append("BASELINES_MISSING")
    if not has_acwr:
        blind_spots.append("ACWR_NOT_COMPUTED")
    if cycle_confidence == Confidence.LOW:
        blind_spots.append("CYCLE_CONFIDENCE_LOW")

    if has_hrv and has_rhr and has_baselines and has_acwr:
        grade = ConfidenceGrade.B if blind_spots else ConfidenceGrade.A
    elif has_hrv and has_rhr and (has_baselines or has_acwr):
        grade = ConfidenceGrade.B
    else:
        grade = ConfidenceGrade.C
    return DataConfidence(grade=grade, blind_spots=tuple(blind_spots))


def resolve_history_days(days: int | None) -> int:
    """Configured default for None; any value outside 7/14/28/56 becomes 28."""
    if days is None:
        days = config.DEFAULT_HISTORY_DAYS
    if isinstance(days, bool) or days not in ALLOWED_HISTORY_DAYS:
        return FALLBACK_HISTORY_DAYS
    return int(days)


class ReadinessAdvisor:
    """Builds DailyAdvice for a reference date or a trailing window of days.

    Usage:
        advisor = ReadinessAdvisor()
        advice = advisor.advise_day(activities, logs, profile, date(2024, 3, 14))
        timeline = advisor.build_history(activities, logs, profile, date(2024, 3, 14), days=14)
    """

    def __init__(self, engine: StatusEngine | None = None) -> None:
        self.engine = engine or default_engine()

    def advise_day(
        self,
        activities: Sequence[Activity],
        logs: Sequence[DailyBiometricLog],
        profile: AthleteProfile | None,
        reference_date: date,
        window_days: float | None = None,
    ) -> DailyAdvice:
        """Resolve all inputs for *reference_date* and compute its decision.

        Args:
            activities: Activity history; loads are estimated where missing.
            logs: Daily biometric logs, any source.
            profile: Athlete profile (heart-rate anchors, cycle, goal).
            reference_date: The day to advise on.
            window_days: Chronic ACWR window, clamped to [28, 56].

        Returns:
            DailyAdvice with the decision and every intermediate value.

        Raises:
            InvalidReferenceDateError: if reference_date is not a plain date.
        """
        today = ensure_calendar_day(reference_date)
        context = _HistoryContext.build(activities, logs, profile)
        advice = self._advise(today, context, window_days)
        logger.info(
            "Advice for %s: %s (grade %s, ACWR %s, reasons %s)",
            today.isoformat(),
            advice.decision.tag.name,
            advice.confidence.grade.name,
            advice.workload.ratio,
            ",".join(advice.decision.reason_codes),
        )
        return advice

    def build_history(
        self,
        activities: Sequence[Activity],
        logs: Sequence[DailyBiometricLog],
        profile: AthleteProfile | None,
        reference_date: date,
        days: int | None = None,
        window_days: float | None = None,
    ) -> tuple[DailyAdvice, ...]:
        """Re-derive one DailyAdvice per day for the trailing *days* days.

        Days run oldest first and end on *reference_date*. Each day goes
        through the same decision path as a live request.
        """
        today = ensure_calendar_day(reference_date)
        span = resolve_history_days(days)
        context = _HistoryContext.build(activities, logs, profile)

        timeline = tuple(
            self._advise(today - timedelta(days=offset), context, window_days)
            for offset in range(span - 1, -1, -1)
        )
        logger.info(
            "Built %d-day history ending %s: %s",
            span,
            today.isoformat(),
            " ".join(advice.decision.tag.name for advice in timeline),
        )
        return timeline

    def _advise(
        self, day: date, context: "_HistoryContext", window_days: float | None
    ) -> DailyAdvice:
        profile = context.profile
        workload = compute_workload_ratio(context.activities, day, window_days)
        cycle = cycle_context_for(profile, day)
        baselines = compute_baselines(context.frame, day)

        day_logs = context.logs_by_date.get(day, ())
        checkin = select_checkin(day_logs)
        today_log = _merged_day_reading(day_logs, checkin)

        hrv_today = today_log.heart_rate_variability if today_log else None
        rhr_today = today_log.resting_heart_rate if today_log else None
        hrv_pct = hrv_vs_baseline_percent(hrv_today, baselines.hrv_28d)
        rhr_diff = rhr_delta(rhr_today, baselines.rhr_28d)
        red_flags = detect_red_flags(
            today_log.sleep_hours if today_log else None,
            rhr_today,
            baselines.rhr_28d,
            hrv_today,
            baselines.hrv_28d,
            is_luteal=cycle.is_luteal,
        )
        confidence = build_confidence(
            hrv_today, rhr_today, baselines, workload.ratio, cycle.confidence
        )

        if checkin is None:
            logger.debug("No eligible check-in for %s", day.isoformat())
        inputs = StatusInputs(
            acwr=workload.ratio,
            is_sick_or_injured=today_log.is_sick_or_injured if today_log else False,
            readiness=checkin.readiness_score if checkin else None,
            red_flags_count=red_flags.count,
            cycle_phase=cycle.phase,
            hrv_vs_baseline_percent=hrv_pct,
            cycle_day_index=cycle.cycle_day,
            goal_intent=profile.goal_intent,
            has_checkin=checkin is not None,
        )
        decision = self.engine.compute_status(inputs)

        return DailyAdvice(
            date=day,
            decision=decision,
            workload=workload,
            baselines=baselines,
            cycle=cycle,
            confidence=confidence,
            red_flags=red_flags,
            hrv_vs_baseline_percent=hrv_pct,
            rhr_delta=rhr_diff,
            needs_checkin=checkin is None,
            flags_confidence=Confidence.HIGH if red_flags.is_computable else Confidence.LOW,
            engine_version=config.ENGINE_VERSION,
            kb_version=config.KB_VERSION,
        )


def _merged_day_reading(
    day_logs: Sequence[DailyBiometricLog], checkin: DailyBiometricLog | None
) -> DailyBiometricLog | None:
    """Today's readings from non-imported logs, the chosen check-in first."""
    candidates = [log for log in day_logs if log.source != LogSource.IMPORT]
    if checkin is not None:
        candidates = [checkin] + [log for log in candidates if log is not checkin]
    merged = merge_logs_by_date(candidates)
    return merged[0] if merged else None


class _HistoryContext:
    """Inputs shared by every day of a history: resolved loads and log tables."""

    def __init__(
        self,
        activities: tuple[Activity, ...],
        logs_by_date: dict[date, tuple[DailyBiometricLog, ...]],
        frame: pd.DataFrame,
        profile: AthleteProfile,
    ) -> None:
        self.activities = activities
        self.logs_by_date = logs_by_date
        self.frame = frame
        self.profile = profile

    @classmethod
    def build(
        cls,
        activities: Iterable[Activity],
        logs: Iterable[DailyBiometricLog],
        profile: AthleteProfile | None,
    ) -> "_HistoryContext":
        profile = profile or AthleteProfile()
        logs = tuple(logs)

        grouped: dict[date, list[DailyBiometricLog]] = defaultdict(list)
        for log in logs:
            grouped[log.date].append(log)
        logs_by_date = {day: tuple(day_logs) for day, day_logs in grouped.items()}

        # Same-day check-in readiness feeds the load corrector
        readiness_by_date = {}
        for day, day_logs in logs_by_date.items():
            checkin = select_checkin(day_logs)
            if checkin is not None:
                readiness_by_date[day] = checkin.readiness_score

        resolved = with_corrected_loads(activities, profile, readiness_by_date)
        return cls(resolved, logs_by_date, logs_frame(logs), profile)
