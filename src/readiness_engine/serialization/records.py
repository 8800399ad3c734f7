"""Mapping between raw vendor/app records and engine models.

Inbound: raw activity and daily-log dicts are normalized to canonical
calendar days and finite-or-None numerics before they reach the engine.
Outbound: decisions and advice are exported as JSON-safe dicts (enum
names, ISO dates).

All functions are pure (no I/O, no clock).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from readiness_engine import config
from readiness_engine.exceptions import RecordMappingError
from readiness_engine.math.numeric import finite_or_none
from readiness_engine.models.activity import Activity
from readiness_engine.models.advice import DailyAdvice
from readiness_engine.models.biometrics import DailyBiometricLog
from readiness_engine.models.enums import LogSource
from readiness_engine.models.status import StatusDecision
from readiness_engine.models.workload import WorkloadWindow

logger = logging.getLogger(__name__)

_ACTIVITY_DATE_KEYS = ("date", "start_date_local", "start_date")
_TIMESTAMP_SECONDS_KEYS = ("seconds", "_seconds")


@dataclass(frozen=True)
class NormalizedDay:
    """A canonical calendar day plus whether the UTC fallback zone was used."""

    day: date
    used_default_timezone: bool = False


def resolve_timezone(timezone_name: str | None = None) -> tuple[ZoneInfo, bool]:
    """Return (zone, used_fallback). Unknown zone names fall back to UTC."""
    name = timezone_name or config.DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name), False
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using UTC for calendar days", name)
        return ZoneInfo("UTC"), True


def normalize_calendar_day(value: Any, timezone_name: str | None = None) -> NormalizedDay:
    """Normalize a date-like value to a calendar day in the athlete's zone.

    Accepts ``date``, naive or aware ``datetime``, ISO strings (the first
    ten characters are used), epoch seconds, and timestamp mappings with a
    ``seconds`` key. Aware datetimes and epoch values are converted into
    the configured zone before taking the day.

    Raises:
        RecordMappingError: if the value cannot be read as a day.
    """
    zone, used_default = resolve_timezone(timezone_name)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return NormalizedDay(value.date(), used_default)
        return NormalizedDay(value.astimezone(zone).date(), used_default)

    if isinstance(value, date):
        return NormalizedDay(value, used_default)

    if isinstance(value, Mapping):
        for key in _TIMESTAMP_SECONDS_KEYS:
            if key in value:
                return normalize_calendar_day(value[key], timezone_name)
        raise RecordMappingError(f"Timestamp mapping without seconds: {value!r}", field="date")

    if isinstance(value, str):
        text = value.strip()
        try:
            return NormalizedDay(date.fromisoformat(text[:10]), used_default)
        except ValueError as exc:
            raise RecordMappingError(f"Not an ISO date: {value!r}", field="date") from exc

    seconds = finite_or_none(value)
    if seconds is None:
        raise RecordMappingError(f"Cannot read a calendar day from {value!r}", field="date")
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise RecordMappingError(f"Epoch seconds out of range: {value!r}", field="date") from exc
    return NormalizedDay(moment.astimezone(zone).date(), used_default)


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


def activity_from_dict(raw: Mapping[str, Any], timezone_name: str | None = None) -> Activity:
    """Map a vendor-style activity record to an Activity.

    Raises:
        RecordMappingError: if no usable date is present.
    """
    date_value = next((raw[k] for k in _ACTIVITY_DATE_KEYS if raw.get(k) is not None), None)
    if date_value is None:
        raise RecordMappingError("Activity record has no date", field="date")
    day = normalize_calendar_day(date_value, timezone_name).day

    corrected = _number(raw.get("loadUsed"))
    if corrected is None:
        corrected = _number(raw.get("prime_load"))

    activity_id = raw.get("id")
    return Activity(
        date=day,
        duration_seconds=_number(raw.get("moving_time")),
        average_heart_rate=_number(raw.get("average_heartrate")),
        perceived_exertion_score=_number(raw.get("suffer_score")),
        include_in_aggregate=raw.get("includeInAcwr") is not False,
        corrected_load=corrected,
        activity_id=str(activity_id) if activity_id is not None else None,
        sport_type=str(raw.get("type") or "Session"),
        source=raw.get("source"),
    )


def daily_log_from_dict(raw: Mapping[str, Any], timezone_name: str | None = None) -> DailyBiometricLog:
    """Map a daily-log record (``metrics`` sub-dict) to a DailyBiometricLog.

    Metric values may be plain numbers or ``{"current": x}`` objects.

    Raises:
        RecordMappingError: if the record has no usable date.
    """
    if raw.get("date") is None:
        raise RecordMappingError("Daily log has no date", field="date")
    day = normalize_calendar_day(raw["date"], timezone_name).day
    metrics = raw.get("metrics") or {}
    if not isinstance(metrics, Mapping):
        raise RecordMappingError("metrics must be a mapping", field="metrics")

    return DailyBiometricLog(
        date=day,
        sleep_hours=_metric(metrics.get("sleep")),
        heart_rate_variability=_metric(metrics.get("hrv")),
        resting_heart_rate=_metric(metrics.get("rhr")),
        readiness_score=_metric(metrics.get("readiness")),
        is_sick_or_injured=raw.get("isSick") is True,
        source=_log_source(raw),
    )


def _log_source(raw: Mapping[str, Any]) -> LogSource:
    source = raw.get("source")
    if source is None:
        return LogSource.IMPORT if raw.get("imported") is True else LogSource.CHECKIN
    name = str(source).strip().lower()
    if name == "checkin":
        return LogSource.CHECKIN
    if name == "import":
        return LogSource.IMPORT
    return LogSource.SYNC


def _metric(value: Any) -> float | None:
    if isinstance(value, Mapping):
        value = value.get("current")
    return _number(value)


def _number(value: Any) -> float | None:
    """Coerce numbers and numeric strings; anything non-finite becomes None."""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    return finite_or_none(value)


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------


def _name(member: Any) -> str | None:
    return member.name if member is not None else None


def _iso(day: date | None) -> str | None:
    return day.isoformat() if day is not None else None


def decision_to_dict(decision: StatusDecision) -> dict:
    """Export a StatusDecision as a JSON-safe dict, trace included."""
    return {
        "tag": decision.tag.name,
        "signal": decision.signal.name,
        "instruction_class": decision.instruction_class.name,
        "prescription_hint": _name(decision.prescription_hint),
        "reasons": [{"code": r.code, "text": r.text} for r in decision.reasons],
        "trace": [
            {
                "rule_id": result.rule_id,
                "status": result.status.name,
                "tag_before": _name(result.tag_before),
                "tag_after": _name(result.tag_after),
                "explanation": result.explanation,
            }
            for result in decision.trace.rule_results
        ],
    }


def workload_to_dict(window: WorkloadWindow) -> dict:
    """Export a WorkloadWindow with its diagnostics."""
    counts = window.counts
    return {
        "reference_date": _iso(window.reference_date),
        "window_days": window.window_days,
        "acute_start": _iso(window.acute_start),
        "window_start": _iso(window.window_start),
        "acute_sum": window.acute_sum,
        "chronic_sum": window.chronic_sum,
        "chronic_weekly_average": window.chronic_weekly_average,
        "ratio": window.ratio,
        "band": _name(window.band),
        "contributors": [
            {
                "date": _iso(c.date),
                "load": c.load,
                "activity_id": c.activity_id,
                "sport_type": c.sport_type,
                "source": c.source,
            }
            for c in window.contributors
        ],
        "counts": {
            "fetched": counts.fetched,
            "used_acute": counts.used_acute,
            "used_chronic": counts.used_chronic,
            "excluded_by_flag": counts.excluded_by_flag,
            "non_finite_load": counts.non_finite_load,
            "outside_window": counts.outside_window,
        },
    }


def advice_to_dict(advice: DailyAdvice) -> dict:
    """Export a DailyAdvice as a JSON-safe dict."""
    baselines = advice.baselines
    red_flags = advice.red_flags
    return {
        "date": _iso(advice.date),
        "decision": decision_to_dict(advice.decision),
        "workload": workload_to_dict(advice.workload),
        "baselines": {
            "hrv_28d": baselines.hrv_28d,
            "rhr_28d": baselines.rhr_28d,
            "hrv_7d": baselines.hrv_7d,
            "rhr_7d": baselines.rhr_7d,
        },
        "cycle": {
            "mode": advice.cycle.mode.name,
            "confidence": advice.cycle.confidence.name,
            "phase": advice.cycle.phase.label if advice.cycle.phase is not None else None,
            "cycle_day": advice.cycle.cycle_day,
        },
        "red_flags": {
            "count": red_flags.count if red_flags is not None else None,
            "reasons": list(red_flags.reasons) if red_flags is not None else [],
        },
        "flags_confidence": advice.flags_confidence.name,
        "hrv_vs_baseline_percent": _json_number(advice.hrv_vs_baseline_percent),
        "rhr_delta": _json_number(advice.rhr_delta),
        "confidence": {
            "grade": advice.confidence.grade.name,
            "blind_spots": list(advice.confidence.blind_spots),
        },
        "needs_checkin": advice.needs_checkin,
        "engine_version": advice.engine_version,
        "kb_version": advice.kb_version,
    }


def _json_number(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value
