"""Enumerations and physiological constants for the readiness engine.

All thresholds and constants cite their published research source where one
exists; the remainder are product constants of the decision table.
"""

from enum import IntEnum, auto


class StatusTag(IntEnum):
    """Daily recommendation tags, ordered from most to least conservative."""

    REST = 0
    RECOVER = 1
    MAINTAIN = 2
    PUSH = 3


class Signal(IntEnum):
    """Traffic-light signal derived one-to-one from the StatusTag."""

    GREEN = auto()
    ORANGE = auto()
    RED = auto()


class InstructionClass(IntEnum):
    """Instruction class handed to downstream guidance generation."""

    NO_TRAINING = auto()
    ACTIVE_RECOVERY = auto()
    MAINTAIN = auto()
    HARD_PUSH = auto()


class PrescriptionHint(IntEnum):
    """Secondary advisory directive layered on top of the tag."""

    PROGRESSIVE_STIMULUS = auto()


class GoalIntent(IntEnum):
    """Athlete goal intent captured at intake."""

    PROGRESS = auto()
    PERFORMANCE = auto()
    HEALTH = auto()
    FATLOSS = auto()
    UNKNOWN = auto()


class CascadeStage(IntEnum):
    """Stages of the status rule cascade — lower value = evaluated earlier.

    A later stage may override the tag produced by an earlier one.
    """

    SICK_OVERRIDE = 0
    CHECKIN_GATE = 1
    BASE = 2
    PHASE_OVERRIDE = 3
    ACWR_BOUNDS = 4
    ACWR_FALLBACK = 5
    ADVISORY = 6


class CyclePhase(IntEnum):
    """Menstrual-cycle phases used by the decision table."""

    MENSTRUAL = auto()
    FOLLICULAR = auto()
    LUTEAL = auto()

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "CyclePhase | str | None") -> "CyclePhase | None":
        """Resolve a phase from an enum member or a case-insensitive name.

        Luteal sub-labels ("mid_luteal", "late_luteal") resolve to LUTEAL.
        Unknown names resolve to None.
        """
        if value is None or isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name in LUTEAL_PHASE_NAMES:
            return cls.LUTEAL
        for member in cls:
            if member.name.lower() == name:
                return member
        return None


class ContraceptionMode(IntEnum):
    """How the athlete's cycle is regulated; only NATURAL cycles are trusted."""

    NATURAL = auto()
    HBC_OTHER = auto()
    COPPER_IUD = auto()
    HBC_LNG_IUD = auto()
    UNKNOWN = auto()


class Confidence(IntEnum):
    """Confidence in a derived signal (cycle phase, red flags)."""

    LOW = auto()
    MED = auto()
    HIGH = auto()


class AcwrBand(IntEnum):
    """Diagnostic ACWR band (not a direct decision input)."""

    LOW = auto()
    SWEET = auto()
    OVERREACHING = auto()
    SPIKE = auto()


class LogSource(IntEnum):
    """Origin of a daily biometric log."""

    CHECKIN = auto()
    IMPORT = auto()
    SYNC = auto()


class ConfidenceGrade(IntEnum):
    """Data-availability grade of a daily advice (A = complete)."""

    A = auto()
    B = auto()
    C = auto()


class AthleteLevel(IntEnum):
    """Athlete level from average weekly load and hours."""

    ROOKIE = 1
    ACTIVE = 2
    ELITE = 3


# ---------------------------------------------------------------------------
# Load estimation — Banister (1991) TRIMP, heart-rate reserve model
# ---------------------------------------------------------------------------
DEFAULT_MAX_HR = 190
DEFAULT_RESTING_HR = 60
TRIMP_COEFFICIENT = 0.64
TRIMP_EXPONENT = 1.92
# Flat perceived-effort fallback when no heart rate is recorded
RPE_FALLBACK_LOAD_PER_MIN = 40.0

# ---------------------------------------------------------------------------
# Prime load correction — luteal and low-readiness internal-strain tax
# ---------------------------------------------------------------------------
LUTEAL_PHASE_NAMES = frozenset({"luteal", "mid_luteal", "late_luteal"})
LUTEAL_BASE_MULTIPLIER = 1.05
LUTEAL_INTENSITY_TAX = 0.05
LUTEAL_INTENSITY_HR_FRACTION = 0.85  # avg HR / max HR at or above this is "hard"
SYMPTOM_TAX_PER_POINT = 0.01
SYMPTOM_TAX_CAP = 0.04
MAX_SYMPTOM_SEVERITY = 9

# ---------------------------------------------------------------------------
# ACWR — Gabbett (2016), Br J Sports Med 50(5):273-280
# ---------------------------------------------------------------------------
ACWR_SPIKE_THRESHOLD = 1.5  # Above this: forced RECOVER
ACWR_OPTIMAL_HIGH = 1.3  # Above this: no PUSH
ACWR_OPTIMAL_LOW = 0.8  # Below this: no PUSH (detraining)
ACUTE_WINDOW_DAYS = 7
MIN_CHRONIC_WINDOW_DAYS = 28
MAX_CHRONIC_WINDOW_DAYS = 56
CHRONIC_WEEKS_DIVISOR = 4
MAX_LOAD_CONTRIBUTORS = 5

# ---------------------------------------------------------------------------
# Cycle phase model
# ---------------------------------------------------------------------------
DEFAULT_CYCLE_LENGTH_DAYS = 28
MENSTRUAL_PHASE_LAST_DAY = 5

# ---------------------------------------------------------------------------
# Red flags — Plews et al. (2013), Buchheit (2014); luteal offsets per
# Janse de Jonge (2003), Sports Med 33(11):833-851
# ---------------------------------------------------------------------------
RED_FLAG_SLEEP_HOURS = 5.5
RED_FLAG_RHR_FACTOR = 1.05  # RHR > baseline + 5%
RED_FLAG_HRV_FACTOR = 0.90  # HRV < baseline - 10%
LUTEAL_RHR_OFFSET_BPM = 3.0
LUTEAL_HRV_FACTOR = 1.12
BASELINE_WINDOW_DAYS = 28
SHORT_BASELINE_WINDOW_DAYS = 7

# ---------------------------------------------------------------------------
# Status decision table
# ---------------------------------------------------------------------------
DEFAULT_READINESS = 5
READINESS_REST_MAX = 3
LUTEAL_RECOVER_READINESS = (4, 5)
PUSH_READINESS_MIN = 8
LETHARGY_READINESS = (4, 6)
LETHARGY_HRV_PCT = 105.0  # HRV paradoxically above baseline on a low-energy day
ELITE_REBOUND_DAYS = (1, 3)
ELITE_REBOUND_HRV_PCT = 98.0
PROGRESS_READINESS_MIN = 6

TAG_TO_SIGNAL = {
    StatusTag.PUSH: Signal.GREEN,
    StatusTag.MAINTAIN: Signal.ORANGE,
    StatusTag.RECOVER: Signal.RED,
    StatusTag.REST: Signal.RED,
}

TAG_TO_INSTRUCTION_CLASS = {
    StatusTag.REST: InstructionClass.NO_TRAINING,
    StatusTag.RECOVER: InstructionClass.ACTIVE_RECOVERY,
    StatusTag.MAINTAIN: InstructionClass.MAINTAIN,
    StatusTag.PUSH: InstructionClass.HARD_PUSH,
}

# ---------------------------------------------------------------------------
# History re-derivation
# ---------------------------------------------------------------------------
ALLOWED_HISTORY_DAYS = (7, 14, 28, 56)
FALLBACK_HISTORY_DAYS = 28

# ---------------------------------------------------------------------------
# Athlete level thresholds
# ---------------------------------------------------------------------------
ELITE_WEEKLY_LOAD = 600
ELITE_WEEKLY_HOURS = 6
ACTIVE_WEEKLY_LOAD = (300, 600)
ACTIVE_WEEKLY_HOURS = (3, 6)
