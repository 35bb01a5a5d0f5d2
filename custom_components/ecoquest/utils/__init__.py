# File: utils/__init__.py
"""Pure Python utilities for EcoQuest.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Submodules:
    - dt_utils: Timezone handling, ISO parsing, calendar-day and week arithmetic
    - math_utils: Rounding, clamping, ratio and percentage calculations

Usage:
    from . import dt_utils
    from .math_utils import clamp
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
