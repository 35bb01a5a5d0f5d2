# File: utils/math_utils.py
"""Math and calculation utilities for EcoQuest.

Pure Python math functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Functions:
    - round_value: Consistent rounding to a fixed precision
    - clamp: Bound a value to a range
    - calculate_ratio_floor: Floor of a clamped ratio scaled by a reward
    - calculate_percentage: Progress percentage calculations
    - percent_change: Relative change between two periods
"""

from __future__ import annotations

import logging
import math

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

# Default float precision for impact metrics
DATA_FLOAT_PRECISION = 1


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a value to the configured precision.

    Examples:
        round_value(0.30000000000000004) → 0.3
        round_value(12.25, 2) → 12.25
    """
    return round(value, precision)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Value clamped to [min_val, max_val] range

    Examples:
        clamp(1.5, 0, 1) → 1
        clamp(-0.2, 0, 1) → 0
    """
    return max(min_val, min(value, max_val))


def calculate_ratio_floor(score: float, max_score: float, reward: int) -> int:
    """Return floor(clamp(score / max_score, 0, 1) * reward).

    A non-positive max_score yields 0 so a broken catalog entry cannot award XP.

    Examples:
        calculate_ratio_floor(500, 1000, 50) → 25
        calculate_ratio_floor(999, 1000, 75) → 74
        calculate_ratio_floor(5000, 1000, 50) → 50
    """
    if max_score <= 0:
        _LOGGER.debug("Ratio requested with non-positive max score %s", max_score)
        return 0
    ratio = clamp(score / max_score, 0.0, 1.0)
    return math.floor(ratio * reward)


def calculate_percentage(current: float, target: float) -> int:
    """Calculate a whole-number progress percentage.

    Examples:
        calculate_percentage(4, 5) → 80
        calculate_percentage(2, 3) → 67
        calculate_percentage(5, 0) → 0  # Division by zero protection
    """
    if target <= 0:
        return 0
    return round((current / target) * 100)


def percent_change(current: float, previous: float) -> int:
    """Relative change from previous to current as a whole percentage.

    There is no baseline when previous is zero, so the change is reported as 0.

    Examples:
        percent_change(150, 100) → 50
        percent_change(50, 100) → -50
        percent_change(20, 0) → 0
    """
    if previous <= 0:
        return 0
    return round(((current - previous) / previous) * 100)
