"""Progression Engine - Pure logic for XP, levels, streaks and weekly targets.

This engine provides stateless, pure Python functions for:
- Deriving the level from total XP (the single place this is computed)
- Level progress values for display
- Daily streak transitions based on calendar days
- Rolling seven day weekly target updates

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
The coordinator owns state and calls these functions to compute new values.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, NamedTuple
from zoneinfo import ZoneInfo

from .. import const
from ..utils.dt_utils import calendar_days_between
from ..utils.math_utils import clamp

if TYPE_CHECKING:
    from ..type_defs import WeeklyTarget


class StreakUpdate(NamedTuple):
    """Result of applying a daily check-in to a streak."""

    current_streak: int
    longest_streak: int
    changed: bool


class ProgressionEngine:
    """Pure logic engine for progression math.

    All methods are static - no instance state.
    """

    @staticmethod
    def calculate_level(total_xp: int) -> int:
        """Return floor(total_xp / XP_PER_LEVEL) + 1.

        Examples:
            calculate_level(0) → 1
            calculate_level(999) → 1
            calculate_level(1000) → 2
        """
        return max(total_xp, 0) // const.XP_PER_LEVEL + 1

    @staticmethod
    def xp_for_next_level(level: int) -> int:
        """Return the total XP at which the next level starts."""
        return level * const.XP_PER_LEVEL

    @staticmethod
    def progress_to_next_level(total_xp: int, level: int) -> float:
        """Return the fraction of the current level completed, clamped to [0, 1]."""
        into_level = total_xp - (level - 1) * const.XP_PER_LEVEL
        return clamp(into_level / const.XP_PER_LEVEL, 0.0, 1.0)

    @staticmethod
    def apply_check_in(
        current_streak: int,
        longest_streak: int,
        last_active_at: datetime,
        now: datetime,
        tz: ZoneInfo | None = None,
    ) -> StreakUpdate:
        """Compute the streak after a check-in at ``now``.

        Day difference is counted in calendar days in the given timezone:
        0 keeps the streak, 1 extends it, more than 1 restarts it at 1. A
        check-in dated before the last activity is treated like the same day.
        """
        days = calendar_days_between(last_active_at, now, tz)
        if days <= 0:
            new_streak = current_streak
        elif days == 1:
            new_streak = current_streak + 1
        else:
            new_streak = 1

        return StreakUpdate(
            current_streak=new_streak,
            longest_streak=max(longest_streak, new_streak),
            changed=new_streak != current_streak,
        )

    @staticmethod
    def advance_weekly_target(target: WeeklyTarget, now: datetime) -> WeeklyTarget:
        """Return the weekly target after one quest completion at ``now``.

        Inside [week_start_date, week_start_date + 7 days) progress is
        incremented. Otherwise the window restarts at ``now`` with progress 1.
        """
        week_start = target[const.DATA_WEEKLY_WEEK_START]
        window_end = week_start + timedelta(days=const.WEEKLY_WINDOW_DAYS)
        updated: WeeklyTarget = dict(target)  # type: ignore[assignment]

        if week_start <= now < window_end:
            updated[const.DATA_WEEKLY_CURRENT_PROGRESS] = (
                target[const.DATA_WEEKLY_CURRENT_PROGRESS] + 1
            )
        else:
            const.LOGGER.debug(
                "DEBUG: Weekly window %s expired at %s, starting new window",
                week_start,
                now,
            )
            updated[const.DATA_WEEKLY_WEEK_START] = now
            updated[const.DATA_WEEKLY_CURRENT_PROGRESS] = 1
        return updated
