"""Red-flag detection from sleep, resting heart rate and HRV.

Three independent flags, each counted once:
    - sleep < 5.5 h
    - RHR > baseline × 1.05
    - HRV < baseline × 0.90

In the luteal phase the RHR baseline is raised by 3 bpm and the HRV
baseline by 12%, so cycle-driven shifts are not mistaken for strain.

References:
    Fullagar et al. (2015). Sleep and Athletic Performance. Sports Med
    45(2):161-186.
    Plews et al. (2013). Training Adaptation and Heart Rate Variability
    in Elite Endurance Athletes. Int J Sports Physiol Perform 8(6):688-694.
    Janse de Jonge (2003). Effects of the menstrual cycle on exercise
    performance. Sports Med 33(11):833-851.
"""

from __future__ import annotations

from readiness_engine.math.numeric import finite_or_none
from readiness_engine.models.biometrics import RedFlagCheck, RedFlagResult
from readiness_engine.models.enums import (
    LUTEAL_HRV_FACTOR,
    LUTEAL_RHR_OFFSET_BPM,
    RED_FLAG_HRV_FACTOR,
    RED_FLAG_RHR_FACTOR,
    RED_FLAG_SLEEP_HOURS,
)

INSUFFICIENT_INPUT = "INSUFFICIENT_INPUT_FOR_REDFLAGS"


def detect_red_flags(
    sleep_hours: float | None,
    rhr: float | None,
    rhr_baseline: float | None,
    hrv: float | None,
    hrv_baseline: float | None,
    is_luteal: bool = False,
) -> RedFlagResult:
    """Count physiological warning signals against phase-adjusted baselines.

    All five readings must be finite; otherwise the result reports
    insufficient input with ``count=None`` rather than zero.

    Args:
        sleep_hours: Last night's sleep in hours.
        rhr: Today's resting heart rate.
        rhr_baseline: 28-day RHR baseline.
        hrv: Today's HRV.
        hrv_baseline: 28-day HRV baseline.
        is_luteal: Apply the luteal baseline offsets.

    Returns:
        RedFlagResult with count in [0, 3] and one reason per fired flag.
    """
    sleep = finite_or_none(sleep_hours)
    rhr_today = finite_or_none(rhr)
    rhr_base = finite_or_none(rhr_baseline)
    hrv_today = finite_or_none(hrv)
    hrv_base = finite_or_none(hrv_baseline)

    if None in (sleep, rhr_today, rhr_base, hrv_today, hrv_base):
        return RedFlagResult(count=None, reasons=(INSUFFICIENT_INPUT,))

    adjusted_rhr = rhr_base + LUTEAL_RHR_OFFSET_BPM if is_luteal else rhr_base
    adjusted_hrv = hrv_base * LUTEAL_HRV_FACTOR if is_luteal else hrv_base
    rhr_threshold = adjusted_rhr * RED_FLAG_RHR_FACTOR
    hrv_threshold = adjusted_hrv * RED_FLAG_HRV_FACTOR

    sleep_check = RedFlagCheck(
        value=sleep,
        threshold=RED_FLAG_SLEEP_HOURS,
        flagged=sleep < RED_FLAG_SLEEP_HOURS,
    )
    rhr_check = RedFlagCheck(
        value=rhr_today,
        threshold=rhr_threshold,
        flagged=rhr_today > rhr_threshold,
        baseline=rhr_base,
        adjusted_baseline=adjusted_rhr,
        luteal_adjusted=is_luteal,
    )
    hrv_check = RedFlagCheck(
        value=hrv_today,
        threshold=hrv_threshold,
        flagged=hrv_today < hrv_threshold,
        baseline=hrv_base,
        adjusted_baseline=adjusted_hrv,
        luteal_adjusted=is_luteal,
    )

    reasons: list[str] = []
    if sleep_check.flagged:
        reasons.append(f"Sleep < {RED_FLAG_SLEEP_HOURS}h ({sleep:.1f}h)")
    if rhr_check.flagged:
        increase = (rhr_today - adjusted_rhr) / adjusted_rhr * 100
        luteal_note = " (luteal +3 bpm)" if is_luteal else ""
        reasons.append(
            f"RHR > baseline + 5% ({rhr_today:g} vs {adjusted_rhr:.1f}{luteal_note}, "
            f"+{increase:.1f}%)"
        )
    if hrv_check.flagged:
        decrease = (adjusted_hrv - hrv_today) / adjusted_hrv * 100
        luteal_note = " (luteal +12%)" if is_luteal else ""
        reasons.append(
            f"HRV < baseline - 10% ({hrv_today:g} vs {adjusted_hrv:.1f}{luteal_note}, "
            f"-{decrease:.1f}%)"
        )

    count = sum(check.flagged for check in (sleep_check, rhr_check, hrv_check))
    return RedFlagResult(
        count=count,
        reasons=tuple(reasons),
        sleep=sleep_check,
        rhr=rhr_check,
        hrv=hrv_check,
    )
