"""Numeric guards shared by every calculation: finiteness and half-up rounding."""

from __future__ import annotations

import math
from numbers import Real
from typing import Any


def finite_or_none(value: Any) -> float | None:
    """Return *value* as a float if it is a finite real number, else None.

    Booleans are not numbers here; NaN and infinities are treated as absent.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero at *ndigits* decimals.

    Python's built-in round() uses banker's rounding; the published tables
    this engine reproduces round .5 upwards.
    """
    factor = 10**ndigits
    scaled = abs(value) * factor
    if not math.isfinite(scaled) or scaled >= 2**52:
        # Already integral at this precision
        return float(value)
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value) if value != 0 else 0.0
