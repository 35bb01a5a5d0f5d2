"""Tests for ProgressionEngine - pure logic, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from custom_components.ecoquest import const
from custom_components.ecoquest.engines.progression_engine import ProgressionEngine

PACIFIC = ZoneInfo("US/Pacific")

# =============================================================================
# TEST: LEVELS
# =============================================================================


class TestLevels:
    """Test level derivation from total XP."""

    @pytest.mark.parametrize(
        ("total_xp", "level"),
        [(0, 1), (1, 1), (999, 1), (1000, 2), (1050, 2), (1999, 2), (25000, 26)],
    )
    def test_calculate_level(self, total_xp: int, level: int) -> None:
        """Level is floor(xp / 1000) + 1."""
        assert ProgressionEngine.calculate_level(total_xp) == level

    def test_negative_xp_is_level_one(self) -> None:
        """Corrupt negative XP never yields level 0."""
        assert ProgressionEngine.calculate_level(-50) == 1

    def test_level_is_monotonic(self) -> None:
        """More XP never lowers the level."""
        levels = [ProgressionEngine.calculate_level(xp) for xp in range(0, 5000, 37)]
        assert levels == sorted(levels)

    def test_xp_for_next_level(self) -> None:
        """Next level threshold is level * 1000."""
        assert ProgressionEngine.xp_for_next_level(1) == 1000
        assert ProgressionEngine.xp_for_next_level(4) == 4000

    def test_progress_to_next_level(self) -> None:
        """Progress is the fraction of the current level's 1000 XP."""
        assert ProgressionEngine.progress_to_next_level(1050, 2) == pytest.approx(0.05)
        assert ProgressionEngine.progress_to_next_level(0, 1) == 0.0

    def test_progress_is_clamped(self) -> None:
        """A stale level never yields progress outside [0, 1]."""
        assert ProgressionEngine.progress_to_next_level(2500, 1) == 1.0
        assert ProgressionEngine.progress_to_next_level(100, 3) == 0.0


# =============================================================================
# TEST: STREAKS
# =============================================================================


class TestStreaks:
    """Test daily check-in streak transitions."""

    def test_same_day_keeps_streak(self) -> None:
        """Two check-ins on one local day do not change the streak."""
        last = datetime(2025, 6, 11, 8, 0, tzinfo=UTC)
        now = datetime(2025, 6, 11, 20, 0, tzinfo=UTC)
        result = ProgressionEngine.apply_check_in(3, 5, last, now, UTC)
        assert result.current_streak == 3
        assert result.longest_streak == 5
        assert not result.changed

    def test_next_day_extends_streak(self) -> None:
        """A check-in on the next calendar day adds one."""
        last = datetime(2025, 6, 11, 23, 30, tzinfo=UTC)
        now = datetime(2025, 6, 12, 0, 15, tzinfo=UTC)
        result = ProgressionEngine.apply_check_in(3, 3, last, now, UTC)
        assert result.current_streak == 4
        assert result.longest_streak == 4
        assert result.changed

    def test_gap_resets_to_one(self) -> None:
        """Missing a day restarts the streak at 1 and keeps the record."""
        last = datetime(2025, 6, 11, 12, 0, tzinfo=UTC)
        now = datetime(2025, 6, 13, 12, 0, tzinfo=UTC)
        result = ProgressionEngine.apply_check_in(6, 9, last, now, UTC)
        assert result.current_streak == 1
        assert result.longest_streak == 9

    def test_local_calendar_days_are_used(self) -> None:
        """Two UTC dates that are the same Pacific day count as one day."""
        # 2025-06-11 16:00 PDT and 2025-06-11 23:00 PDT
        last = datetime(2025, 6, 11, 23, 0, tzinfo=UTC)
        now = datetime(2025, 6, 12, 6, 0, tzinfo=UTC)
        assert ProgressionEngine.apply_check_in(2, 2, last, now, UTC).current_streak == 3
        assert (
            ProgressionEngine.apply_check_in(2, 2, last, now, PACIFIC).current_streak
            == 2
        )

    def test_longest_never_below_current(self) -> None:
        """Longest streak is always at least the current streak."""
        last = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
        current, longest = 0, 0
        for day in range(1, 15):
            now = last + timedelta(days=day if day != 7 else 8)
            result = ProgressionEngine.apply_check_in(current, longest, last, now, UTC)
            assert result.longest_streak >= result.current_streak
            current, longest, last = result.current_streak, result.longest_streak, now

    def test_check_in_before_last_activity(self) -> None:
        """A clock that went backwards is treated like the same day."""
        last = datetime(2025, 6, 12, 12, 0, tzinfo=UTC)
        now = datetime(2025, 6, 10, 12, 0, tzinfo=UTC)
        assert ProgressionEngine.apply_check_in(4, 4, last, now, UTC).current_streak == 4


# =============================================================================
# TEST: WEEKLY TARGET
# =============================================================================


class TestWeeklyTarget:
    """Test the rolling seven day weekly target."""

    @staticmethod
    def _target(week_start: datetime, progress: int = 0) -> dict:
        return {
            const.DATA_WEEKLY_CHALLENGES_PER_WEEK: 3,
            const.DATA_WEEKLY_CURRENT_PROGRESS: progress,
            const.DATA_WEEKLY_WEEK_START: week_start,
        }

    def test_inside_window_increments(self) -> None:
        """A completion inside the window adds one."""
        start = datetime(2025, 6, 8, 7, 0, tzinfo=UTC)
        updated = ProgressionEngine.advance_weekly_target(
            self._target(start, 2), start + timedelta(days=6, hours=23)
        )
        assert updated[const.DATA_WEEKLY_CURRENT_PROGRESS] == 3
        assert updated[const.DATA_WEEKLY_WEEK_START] == start

    def test_window_end_is_exclusive(self) -> None:
        """Exactly seven days after the start begins a new window."""
        start = datetime(2025, 6, 8, 7, 0, tzinfo=UTC)
        now = start + timedelta(days=7)
        updated = ProgressionEngine.advance_weekly_target(self._target(start, 2), now)
        assert updated[const.DATA_WEEKLY_CURRENT_PROGRESS] == 1
        assert updated[const.DATA_WEEKLY_WEEK_START] == now

    def test_eight_days_later_resets(self) -> None:
        """A completion eight days after the start resets progress to 1."""
        start = datetime(2025, 6, 8, 7, 0, tzinfo=UTC)
        now = start + timedelta(days=8)
        updated = ProgressionEngine.advance_weekly_target(self._target(start, 3), now)
        assert updated[const.DATA_WEEKLY_CURRENT_PROGRESS] == 1
        assert updated[const.DATA_WEEKLY_WEEK_START] == now
        assert updated[const.DATA_WEEKLY_CHALLENGES_PER_WEEK] == 3

    def test_input_is_not_mutated(self) -> None:
        """The engine returns a new dict."""
        start = datetime(2025, 6, 8, 7, 0, tzinfo=UTC)
        target = self._target(start, 1)
        ProgressionEngine.advance_weekly_target(target, start + timedelta(days=1))
        assert target[const.DATA_WEEKLY_CURRENT_PROGRESS] == 1
