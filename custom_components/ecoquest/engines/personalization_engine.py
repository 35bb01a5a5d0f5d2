"""Personalization Engine - Pure logic for tailoring content to a player.

This engine provides stateless, pure Python functions for:
- Filtering, ranking and truncating quests by the player's preferences
- Scoring how relevant a quest is to the player
- Estimating environmental impact of completed quests
- Picking achievements, tips and a next action that match the player

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..utils.math_utils import round_value

if TYPE_CHECKING:
    from ..type_defs import Achievement, ImpactMetrics, PlayerProfile, Quest

# Difficulties a player sees for each experience level
_ALLOWED_DIFFICULTIES: dict[str, frozenset[str]] = {
    const.ExperienceLevel.BEGINNER: frozenset({const.Difficulty.EASY}),
    const.ExperienceLevel.INTERMEDIATE: frozenset(
        {const.Difficulty.EASY, const.Difficulty.MEDIUM}
    ),
    const.ExperienceLevel.ADVANCED: frozenset(
        {const.Difficulty.EASY, const.Difficulty.MEDIUM, const.Difficulty.HARD}
    ),
}

# Relevance bonus by (experience level, quest difficulty)
_DIFFICULTY_ALIGNMENT: dict[str, dict[str, int]] = {
    const.ExperienceLevel.BEGINNER: {
        const.Difficulty.EASY: 5,
        const.Difficulty.MEDIUM: 0,
        const.Difficulty.HARD: -5,
    },
    const.ExperienceLevel.INTERMEDIATE: {
        const.Difficulty.EASY: 2,
        const.Difficulty.MEDIUM: 5,
        const.Difficulty.HARD: 2,
    },
    const.ExperienceLevel.ADVANCED: {
        const.Difficulty.EASY: 0,
        const.Difficulty.MEDIUM: 3,
        const.Difficulty.HARD: 5,
    },
}

INTEREST_SCORE = 10
GOAL_SCORE = 15

_CLIMATE_TIPS = {
    const.CLIMATE_TROPICAL: (
        "In tropical climates, collect rainwater for plants during the wet season"
    ),
    const.CLIMATE_ARID: (
        "Use drought-resistant plants to reduce water usage in dry climates"
    ),
    const.CLIMATE_POLAR: (
        "Proper insulation can reduce heating costs by up to 30% in cold climates"
    ),
}

_INTEREST_TIPS = (
    (const.QuestType.ENERGY, "LED bulbs use 75% less energy than incandescent bulbs"),
    (
        const.QuestType.WATER,
        "A 5-minute shower uses about 25 gallons less water than a bath",
    ),
    (
        const.QuestType.WASTE,
        "Composting food scraps can reduce household waste by up to 30%",
    ),
)

_MONEY_TIP = "Unplugging electronics when not in use can save $100+ per year"

ACTION_CHALLENGE = "Complete your next eco-challenge"
ACTION_QUIZ = "Take a quick sustainability quiz"
ACTION_GAME = "Play an eco-friendly mini-game"
ACTION_EXPLORE = "Explore new environmental activities"


class PersonalizationEngine:
    """Pure logic engine for personalization.

    All methods are static - no instance state.
    """

    @staticmethod
    def relevance_score(quest: Quest, player: PlayerProfile) -> int:
        """Score a quest against the player's interests, goals and experience.

        +10 when the quest type is an interest, +15 for each primary goal that
        maps to the quest type, plus the difficulty alignment bonus.
        """
        preferences = player[const.DATA_PLAYER_PREFERENCES]
        quest_type = quest[const.DATA_QUEST_TYPE]
        score = 0

        if quest_type in preferences[const.DATA_PREF_INTERESTS]:
            score += INTEREST_SCORE

        for goal in preferences[const.DATA_PREF_PRIMARY_GOALS]:
            if const.GOAL_QUEST_TYPE_MAP.get(goal) == quest_type:
                score += GOAL_SCORE

        alignment = _DIFFICULTY_ALIGNMENT.get(
            preferences[const.DATA_PREF_EXPERIENCE_LEVEL],
            _DIFFICULTY_ALIGNMENT[const.ExperienceLevel.BEGINNER],
        )
        score += alignment.get(quest[const.DATA_QUEST_DIFFICULTY], 0)
        return score

    @staticmethod
    def personalized_quests(quests: list[Quest], player: PlayerProfile) -> list[Quest]:
        """Return the quests best suited to the player.

        Filters by interests (all types when none declared) and by the
        difficulties allowed for the experience level, ranks by relevance
        (stable for ties) and keeps as many as the available time allows.
        """
        preferences = player[const.DATA_PLAYER_PREFERENCES]
        interests = preferences[const.DATA_PREF_INTERESTS]
        allowed = _ALLOWED_DIFFICULTIES.get(
            preferences[const.DATA_PREF_EXPERIENCE_LEVEL],
            _ALLOWED_DIFFICULTIES[const.ExperienceLevel.BEGINNER],
        )
        limit = const.AVAILABLE_TIME_QUEST_LIMITS.get(
            preferences[const.DATA_PREF_AVAILABLE_TIME],
            const.AVAILABLE_TIME_QUEST_LIMITS[const.DEFAULT_AVAILABLE_TIME],
        )

        candidates = [
            quest
            for quest in quests
            if (not interests or quest[const.DATA_QUEST_TYPE] in interests)
            and quest[const.DATA_QUEST_DIFFICULTY] in allowed
        ]
        # sorted() is stable, so equal scores keep their input order
        ranked = sorted(
            candidates,
            key=lambda quest: PersonalizationEngine.relevance_score(quest, player),
            reverse=True,
        )
        return ranked[:limit]

    @staticmethod
    def impact_metrics(
        completed_quests: list[Quest], player: PlayerProfile | None = None
    ) -> ImpactMetrics:
        """Estimate impact from the number of completed quests.

        Recomputed from scratch on every call. ``player`` is accepted for
        future per-player factors and currently unused.
        """
        count = len(completed_quests)
        return {
            "co2_saved": round_value(count * const.IMPACT_CO2_PER_QUEST),
            "money_saved": count * const.IMPACT_MONEY_PER_QUEST,
            "trees_equivalent": round_value(count * const.IMPACT_TREES_PER_QUEST),
        }

    @staticmethod
    def personalized_achievements(
        player: PlayerProfile, achievements: list[Achievement]
    ) -> list[Achievement]:
        """Return achievements relevant to the player's interests.

        Streak, quiz and game badges are always shown; quest-type badges only
        when that type is an interest (or no interests are declared).
        """
        interests = player[const.DATA_PLAYER_PREFERENCES][const.DATA_PREF_INTERESTS]
        return [
            achievement
            for achievement in achievements
            if achievement[const.DATA_ACHIEVEMENT_CATEGORY]
            in const.GENERAL_ACHIEVEMENT_CATEGORIES
            or not interests
            or achievement[const.DATA_ACHIEVEMENT_CATEGORY] in interests
        ]

    @staticmethod
    def personalized_tips(player: PlayerProfile) -> list[str]:
        """Return up to three tips drawn from climate, interests and motivations."""
        preferences = player[const.DATA_PLAYER_PREFERENCES]
        tips: list[str] = []

        location = preferences.get(const.DATA_PREF_LOCATION) or {}
        climate_tip = _CLIMATE_TIPS.get(location.get(const.DATA_LOCATION_CLIMATE, ""))
        if climate_tip:
            tips.append(climate_tip)

        interests = preferences[const.DATA_PREF_INTERESTS]
        tips.extend(tip for quest_type, tip in _INTEREST_TIPS if quest_type in interests)

        if const.MOTIVATION_SAVE_MONEY in preferences[const.DATA_PREF_MOTIVATIONS]:
            tips.append(_MONEY_TIP)

        return tips[: const.PERSONALIZED_TIPS_LIMIT]

    @staticmethod
    def next_recommended_action(
        player: PlayerProfile, available_quests: list[Quest]
    ) -> str:
        """Suggest what the player should do next based on preferred activities."""
        activities = player[const.DATA_PLAYER_PREFERENCES][
            const.DATA_PREF_PREFERRED_ACTIVITIES
        ]
        if available_quests and const.ACTIVITY_CHALLENGES in activities:
            return ACTION_CHALLENGE
        if const.ACTIVITY_QUIZZES in activities:
            return ACTION_QUIZ
        if const.ACTIVITY_GAMES in activities:
            return ACTION_GAME
        return ACTION_EXPLORE
