"""Tests for PersonalizationEngine - pure logic, no HA fixtures needed."""

from __future__ import annotations

from typing import Any

from custom_components.ecoquest import const
from custom_components.ecoquest.data_builders import (
    build_catalog_achievements,
    build_preferences,
)
from custom_components.ecoquest.engines import personalization_engine as pe
from custom_components.ecoquest.engines.personalization_engine import (
    PersonalizationEngine,
)
from tests.conftest import create_player, create_quest

E = const.Difficulty.EASY
M = const.Difficulty.MEDIUM
H = const.Difficulty.HARD


def _player(**preferences: Any) -> dict:
    player = create_player()
    player[const.DATA_PLAYER_PREFERENCES] = build_preferences(preferences)
    return player


def _ids(quests: list) -> list[str]:
    return [q[const.DATA_QUEST_ID] for q in quests]


# =============================================================================
# TEST: QUEST PERSONALIZATION
# =============================================================================


class TestPersonalizedQuests:
    """Test filtering, ranking and truncation of quests."""

    def test_relevance_score(self) -> None:
        """Interest, goal and difficulty alignment add up."""
        player = _player(
            interests=[const.QuestType.WASTE],
            experience_level=const.ExperienceLevel.INTERMEDIATE,
            primary_goals=[const.GOAL_REDUCE_WASTE],
        )
        waste_medium = create_quest("a", const.QuestType.WASTE, M)
        water_hard = create_quest("b", const.QuestType.WATER, H)

        assert PersonalizationEngine.relevance_score(waste_medium, player) == (
            pe.INTEREST_SCORE + pe.GOAL_SCORE + 5
        )
        assert PersonalizationEngine.relevance_score(water_hard, player) == 2

    def test_filter_rank_and_order(self) -> None:
        """Non-interests and too-hard quests are dropped, the rest ranked."""
        player = _player(
            interests=[const.QuestType.WASTE, const.QuestType.ENERGY],
            experience_level=const.ExperienceLevel.INTERMEDIATE,
            primary_goals=[const.GOAL_REDUCE_WASTE],
        )
        quests = [
            create_quest("energy-medium", const.QuestType.ENERGY, M),
            create_quest("water-easy", const.QuestType.WATER, E),
            create_quest("waste-easy", const.QuestType.WASTE, E),
            create_quest("waste-hard", const.QuestType.WASTE, H),
            create_quest("waste-medium", const.QuestType.WASTE, M),
        ]

        result = PersonalizationEngine.personalized_quests(quests, player)

        assert _ids(result) == ["waste-medium", "waste-easy", "energy-medium"]

    def test_beginner_sees_easy_only(self) -> None:
        """Beginners are only offered easy quests."""
        player = _player(experience_level=const.ExperienceLevel.BEGINNER)
        quests = [
            create_quest("easy", difficulty=E),
            create_quest("medium", difficulty=M),
            create_quest("hard", difficulty=H),
        ]
        assert _ids(PersonalizationEngine.personalized_quests(quests, player)) == [
            "easy"
        ]

    def test_no_interests_means_all_types(self) -> None:
        """An empty interest list does not filter by type."""
        player = _player(experience_level=const.ExperienceLevel.ADVANCED)
        quests = [
            create_quest("waste", const.QuestType.WASTE, H),
            create_quest("water", const.QuestType.WATER, H),
        ]
        assert len(PersonalizationEngine.personalized_quests(quests, player)) == 2

    def test_ties_keep_input_order(self) -> None:
        """Equal scores keep their original relative order."""
        player = _player(experience_level=const.ExperienceLevel.ADVANCED)
        quests = [create_quest(f"q{i}", difficulty=H) for i in range(3)]
        assert _ids(PersonalizationEngine.personalized_quests(quests, player)) == [
            "q0",
            "q1",
            "q2",
        ]

    def test_available_time_limits_count(self) -> None:
        """Only as many quests as the available time allows are returned."""
        quests = [create_quest(f"q{i}", difficulty=E) for i in range(12)]
        short = _player(available_time=const.AVAILABLE_TIME_5_10)
        long = _player(available_time=const.AVAILABLE_TIME_30_PLUS)

        assert len(PersonalizationEngine.personalized_quests(quests, short)) == 2
        assert len(PersonalizationEngine.personalized_quests(quests, long)) == 10


# =============================================================================
# TEST: IMPACT, ACHIEVEMENTS, TIPS, NEXT ACTION
# =============================================================================


class TestImpactAndSuggestions:
    """Test the other personalization outputs."""

    def test_impact_metrics(self) -> None:
        """Impact scales with the number of completed quests."""
        quests = [create_quest(f"q{i}") for i in range(3)]
        metrics = PersonalizationEngine.impact_metrics(quests)
        assert metrics["co2_saved"] == 7.5
        assert metrics["money_saved"] == 15
        assert metrics["trees_equivalent"] == 0.3

    def test_impact_metrics_empty(self) -> None:
        """No completions means no impact."""
        metrics = PersonalizationEngine.impact_metrics([])
        assert metrics == {"co2_saved": 0, "money_saved": 0, "trees_equivalent": 0}

    def test_personalized_achievements(self) -> None:
        """General badges always show, type badges only for interests."""
        player = _player(interests=[const.QuestType.WATER])
        result = PersonalizationEngine.personalized_achievements(
            player, build_catalog_achievements()
        )
        categories = {a[const.DATA_ACHIEVEMENT_CATEGORY] for a in result}
        assert categories == {"water", "streak", "quiz", "game"}

    def test_personalized_tips(self) -> None:
        """Climate tip first, then interest tips, capped at three."""
        player = _player(
            interests=[const.QuestType.ENERGY, const.QuestType.WASTE],
            motivations=[const.MOTIVATION_SAVE_MONEY],
            climate=const.CLIMATE_ARID,
            country="India",
        )
        tips = PersonalizationEngine.personalized_tips(player)
        assert len(tips) == const.PERSONALIZED_TIPS_LIMIT
        assert "drought-resistant" in tips[0]
        assert "LED" in tips[1]
        assert "Composting" in tips[2]

    def test_tips_without_preferences(self) -> None:
        """A player who skipped onboarding gets no tips."""
        assert PersonalizationEngine.personalized_tips(_player()) == []

    def test_next_recommended_action(self) -> None:
        """Preferred activities decide the suggestion."""
        quests = [create_quest("q")]
        challenges = _player(preferred_activities=[const.ACTIVITY_CHALLENGES])
        quizzes = _player(
            preferred_activities=[const.ACTIVITY_CHALLENGES, const.ACTIVITY_QUIZZES]
        )
        games = _player(preferred_activities=[const.ACTIVITY_GAMES])

        assert (
            PersonalizationEngine.next_recommended_action(challenges, quests)
            == pe.ACTION_CHALLENGE
        )
        # No open quests, so the next preference wins
        assert (
            PersonalizationEngine.next_recommended_action(quizzes, []) == pe.ACTION_QUIZ
        )
        assert PersonalizationEngine.next_recommended_action(games, quests) == (
            pe.ACTION_GAME
        )
        assert PersonalizationEngine.next_recommended_action(_player(), quests) == (
            pe.ACTION_EXPLORE
        )
