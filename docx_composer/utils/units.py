"""
Unit helpers for WordprocessingML values.

OOXML stores page geometry and spacing in twips (1/20 pt) and font sizes in
half-points. Values coming from builders may be numbers or strings, so
``twips_to_points`` accepts either and reports failures through
``parse_float``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

logger = logging.getLogger(__name__)

TWIPS_PER_POINT = 20
HALF_POINTS_PER_POINT = 2
POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4


def parse_float(value: Any) -> Optional[float]:
    """
    Parse a numeric OOXML attribute.

    Args:
        value: int, float or numeric string (e.g. ``"11906"``)

    Returns:
        Parsed float, or None when the value is missing or not a finite number
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            logger.debug(f"Ignoring non-numeric value: {value!r}")
            return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer attribute such as ``w:start``; None when unparsable."""
    parsed = parse_float(value)
    if parsed is None or not parsed.is_integer():
        return None
    return int(parsed)


def twips_to_points(value: Any, default: Optional[float] = None) -> Optional[float]:
    parsed = parse_float(value)
    if parsed is None:
        return default
    return parsed / TWIPS_PER_POINT


def points_to_half_points(value: float) -> int:
    return int(round(float(value) * HALF_POINTS_PER_POINT))


def mm_to_twips(value: float) -> int:
    """Convert millimetres to twips (1 inch = 25.4 mm = 1440 twips)."""
    return int(round(float(value) / MM_PER_INCH * POINTS_PER_INCH * TWIPS_PER_POINT))

