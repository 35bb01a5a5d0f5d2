"""Achievement Engine - Pure logic for achievement unlock evaluation.

This engine provides stateless, pure Python functions for:
- Measuring the aggregate an achievement requirement refers to
- Unlocking achievements whose threshold is met (monotonic, never re-locked)
- Reporting (current, threshold) progress for sensors and exports

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data and return
new structures. Inputs are never mutated.

Requirement kinds (const.RequirementKind):
- quest_count: Completed quests, optionally limited to one quest type
- streak_days: Current daily streak
- quiz_score: Perfect quiz sessions (every answer correct)
- game_score: Mini-game plays
- xp_total: Lifetime XP

Achievement XP rewards are informational; unlocking does not credit them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, assert_never

from .. import const

if TYPE_CHECKING:
    from ..type_defs import (
        Achievement,
        AchievementRequirement,
        MiniGameScore,
        PlayerProfile,
        Quest,
        QuizSession,
    )


class AchievementEngine:
    """Pure logic engine for achievement evaluation.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.
    """

    @staticmethod
    def requirement_kind(
        requirement: AchievementRequirement | dict[str, Any],
    ) -> const.RequirementKind | None:
        """Return the requirement kind, or None when stored data holds an unknown one."""
        raw = requirement.get(const.DATA_REQUIREMENT_TYPE)
        try:
            return const.RequirementKind(raw)
        except ValueError:
            return None

    @staticmethod
    def measure(
        kind: const.RequirementKind,
        requirement: AchievementRequirement | dict[str, Any],
        player: PlayerProfile,
        quests: list[Quest],
        quiz_sessions: list[QuizSession],
        game_scores: list[MiniGameScore],
    ) -> int:
        """Return the current value of the aggregate a requirement is compared to."""
        match kind:
            case const.RequirementKind.QUEST_COUNT:
                category = requirement.get(const.DATA_REQUIREMENT_CATEGORY)
                return sum(
                    1
                    for quest in quests
                    if quest[const.DATA_QUEST_STATUS] == const.QuestStatus.COMPLETED
                    and (not category or quest[const.DATA_QUEST_TYPE] == category)
                )
            case const.RequirementKind.STREAK_DAYS:
                return player[const.DATA_PLAYER_CURRENT_STREAK]
            case const.RequirementKind.QUIZ_SCORE:
                return sum(
                    1
                    for session in quiz_sessions
                    if session[const.DATA_QUIZ_SESSION_SCORE]
                    == len(session[const.DATA_QUIZ_SESSION_QUESTIONS])
                )
            case const.RequirementKind.GAME_SCORE:
                return len(game_scores)
            case const.RequirementKind.XP_TOTAL:
                return player[const.DATA_PLAYER_TOTAL_XP]
            case _:
                assert_never(kind)

    @staticmethod
    def evaluate(
        achievements: list[Achievement],
        player: PlayerProfile,
        quests: list[Quest],
        quiz_sessions: list[QuizSession],
        game_scores: list[MiniGameScore],
        *,
        now: datetime | None = None,
    ) -> list[Achievement]:
        """Return a new achievement list with newly met thresholds unlocked.

        Args:
            achievements: Current achievement records (full catalog).
            player: Player profile (streak and XP are read).
            quests: All quests (completed ones are counted).
            quiz_sessions: Recorded quiz sessions.
            game_scores: Recorded mini-game plays.
            now: Unlock timestamp override for testing.

        Returns:
            New list of new dicts in the same order. Unlocked entries are
            passed through unchanged.
        """
        unlock_time = now or datetime.now(UTC)
        evaluated: list[Achievement] = []

        for achievement in achievements:
            if achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED):
                evaluated.append(dict(achievement))  # type: ignore[arg-type]
                continue

            requirement = achievement[const.DATA_ACHIEVEMENT_REQUIREMENT]
            kind = AchievementEngine.requirement_kind(requirement)
            if kind is None:
                const.LOGGER.warning(
                    "WARNING: Achievement '%s' has unknown requirement type '%s'",
                    achievement.get(const.DATA_ACHIEVEMENT_ID),
                    requirement.get(const.DATA_REQUIREMENT_TYPE),
                )
                evaluated.append(dict(achievement))  # type: ignore[arg-type]
                continue

            current = AchievementEngine.measure(
                kind, requirement, player, quests, quiz_sessions, game_scores
            )
            updated = dict(achievement)
            if current >= requirement[const.DATA_REQUIREMENT_VALUE]:
                updated[const.DATA_ACHIEVEMENT_UNLOCKED] = True
                updated[const.DATA_ACHIEVEMENT_UNLOCKED_AT] = unlock_time
                const.LOGGER.debug(
                    "DEBUG: Achievement unlocked: %s (%s >= %s)",
                    achievement[const.DATA_ACHIEVEMENT_ID],
                    current,
                    requirement[const.DATA_REQUIREMENT_VALUE],
                )
            evaluated.append(updated)  # type: ignore[arg-type]

        return evaluated

    @staticmethod
    def newly_unlocked(
        before: list[Achievement], after: list[Achievement]
    ) -> list[Achievement]:
        """Return achievements unlocked in ``after`` but not in ``before``."""
        previously = {
            a[const.DATA_ACHIEVEMENT_ID]
            for a in before
            if a.get(const.DATA_ACHIEVEMENT_UNLOCKED)
        }
        return [
            a
            for a in after
            if a.get(const.DATA_ACHIEVEMENT_UNLOCKED)
            and a[const.DATA_ACHIEVEMENT_ID] not in previously
        ]

    @staticmethod
    def progress(
        achievements: list[Achievement],
        player: PlayerProfile,
        quests: list[Quest],
        quiz_sessions: list[QuizSession],
        game_scores: list[MiniGameScore],
    ) -> dict[str, tuple[int, int]]:
        """Map achievement id to (current, threshold), capped at the threshold."""
        result: dict[str, tuple[int, int]] = {}
        for achievement in achievements:
            requirement = achievement[const.DATA_ACHIEVEMENT_REQUIREMENT]
            threshold = requirement[const.DATA_REQUIREMENT_VALUE]
            kind = AchievementEngine.requirement_kind(requirement)
            if achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED):
                current = threshold
            elif kind is None:
                current = 0
            else:
                current = min(
                    AchievementEngine.measure(
                        kind, requirement, player, quests, quiz_sessions, game_scores
                    ),
                    threshold,
                )
            result[achievement[const.DATA_ACHIEVEMENT_ID]] = (current, threshold)
        return result
