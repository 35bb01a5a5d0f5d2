"""Tests for data_builders record construction and validation."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from custom_components.ecoquest import const
from custom_components.ecoquest.data_builders import (
    GameDataValidationError,
    build_default_game_state,
    build_mini_game_score,
    build_player,
    build_preferences,
    build_quest,
    build_quiz_session,
    validate_quest_data,
)
from tests.conftest import BASE_TIME


def _template(**overrides) -> dict:
    template = {
        const.DATA_QUEST_TITLE: "  Bike to Work  ",
        const.DATA_QUEST_DESCRIPTION: "Leave the car at home.",
        const.DATA_QUEST_TYPE: const.QuestType.TRANSPORT,
        const.DATA_QUEST_DIFFICULTY: const.Difficulty.MEDIUM,
        const.DATA_QUEST_XP_REWARD: 150,
    }
    template.update(overrides)
    return template


class TestPlayerAndState:
    """Test player and game state construction."""

    def test_new_player(self) -> None:
        """A new player starts at level 1 with zeroed stats."""
        player = build_player(BASE_TIME, name="Asha", tz=UTC)
        assert player[const.DATA_PLAYER_LEVEL] == 1
        assert player[const.DATA_PLAYER_TOTAL_XP] == 0
        assert player[const.DATA_PLAYER_JOINED_AT] == BASE_TIME
        assert player[const.DATA_PLAYER_LAST_ACTIVE_AT] == BASE_TIME
        assert player[const.DATA_PLAYER_ONBOARDING_COMPLETE] is False
        assert not any(player[const.DATA_PLAYER_STATS].values())

    def test_weekly_window_starts_on_sunday(self) -> None:
        """The first weekly window starts at local Sunday midnight."""
        player = build_player(BASE_TIME, tz=UTC)
        target = player[const.DATA_PLAYER_WEEKLY_TARGET]
        assert target[const.DATA_WEEKLY_WEEK_START] == datetime(2025, 6, 8, tzinfo=UTC)
        assert target[const.DATA_WEEKLY_CURRENT_PROGRESS] == 0
        assert (
            target[const.DATA_WEEKLY_CHALLENGES_PER_WEEK]
            == const.DEFAULT_CHALLENGES_PER_WEEK
        )

    def test_default_game_state(self) -> None:
        """A new game has the full locked catalog and empty histories."""
        state = build_default_game_state(BASE_TIME, tz=UTC)
        assert state[const.DATA_META][const.DATA_META_SCHEMA_VERSION] == (
            const.SCHEMA_VERSION
        )
        assert state[const.DATA_QUESTS] == []
        assert state[const.DATA_QUIZ_SESSIONS] == []
        assert state[const.DATA_MINI_GAME_SCORES] == []
        assert len(state[const.DATA_ACHIEVEMENTS]) == 12
        assert not any(
            a[const.DATA_ACHIEVEMENT_UNLOCKED] for a in state[const.DATA_ACHIEVEMENTS]
        )

    def test_build_preferences_with_location(self) -> None:
        """Flow input maps to stored preferences including the location."""
        preferences = build_preferences(
            {
                const.CONF_INTERESTS: [const.QuestType.WATER],
                const.CONF_EXPERIENCE_LEVEL: const.ExperienceLevel.ADVANCED,
                const.CONF_CLIMATE: const.CLIMATE_TROPICAL,
                const.CONF_COUNTRY: "Kenya",
                const.CONF_REGION: "Coast",
            }
        )
        assert preferences[const.DATA_PREF_INTERESTS] == [const.QuestType.WATER]
        assert preferences[const.DATA_PREF_EXPERIENCE_LEVEL] == "advanced"
        assert preferences[const.DATA_PREF_AVAILABLE_TIME] == (
            const.DEFAULT_AVAILABLE_TIME
        )
        assert preferences[const.DATA_PREF_LOCATION] == {
            const.DATA_LOCATION_COUNTRY: "Kenya",
            const.DATA_LOCATION_CLIMATE: const.CLIMATE_TROPICAL,
            const.DATA_LOCATION_REGION: "Coast",
        }

    def test_build_preferences_without_location(self) -> None:
        """No climate and no country means no location."""
        assert const.DATA_PREF_LOCATION not in build_preferences({})


class TestQuests:
    """Test quest validation and construction."""

    def test_build_quest(self) -> None:
        """A valid template becomes an available quest."""
        quest = build_quest(_template(), BASE_TIME)
        assert quest[const.DATA_QUEST_TITLE] == "Bike to Work"
        assert quest[const.DATA_QUEST_STATUS] == const.QuestStatus.AVAILABLE
        assert quest[const.DATA_QUEST_COMPLETED_AT] is None
        assert quest[const.DATA_QUEST_CREATED_AT] == BASE_TIME
        assert quest[const.DATA_QUEST_REALM] == "Transport Realm"
        assert quest[const.DATA_QUEST_IS_AI_GENERATED] is False
        assert quest[const.DATA_QUEST_ID]

    def test_ids_are_unique(self) -> None:
        """Each quest receives its own id."""
        assert (
            build_quest(_template(), BASE_TIME)[const.DATA_QUEST_ID]
            != build_quest(_template(), BASE_TIME)[const.DATA_QUEST_ID]
        )

    @pytest.mark.parametrize(
        ("overrides", "field", "key"),
        [
            ({const.DATA_QUEST_TITLE: "   "}, const.DATA_QUEST_TITLE, "invalid_quest_title"),
            ({const.DATA_QUEST_TYPE: "air"}, const.DATA_QUEST_TYPE, "invalid_quest_type"),
            (
                {const.DATA_QUEST_DIFFICULTY: "insane"},
                const.DATA_QUEST_DIFFICULTY,
                "invalid_quest_difficulty",
            ),
            ({const.DATA_QUEST_XP_REWARD: 0}, const.DATA_QUEST_XP_REWARD, "invalid_xp_reward"),
            (
                {const.DATA_QUEST_XP_REWARD: "lots"},
                const.DATA_QUEST_XP_REWARD,
                "invalid_xp_reward",
            ),
        ],
    )
    def test_invalid_template(self, overrides: dict, field: str, key: str) -> None:
        """Invalid templates are rejected with the failing field."""
        assert validate_quest_data(_template(**overrides)) == {field: key}
        with pytest.raises(GameDataValidationError) as err:
            build_quest(_template(**overrides), BASE_TIME)
        assert err.value.field == field
        assert err.value.translation_key == key


class TestQuizSessions:
    """Test quiz scoring."""

    def test_scoring(self) -> None:
        """Score counts correct answers and XP is 20 per correct answer."""
        session = build_quiz_session(
            ["waste-001", "waste-002", "waste-003"], [2, 0, 3], BASE_TIME
        )
        assert session[const.DATA_QUIZ_SESSION_SCORE] == 2
        assert session[const.DATA_QUIZ_SESSION_XP_EARNED] == 40
        assert session[const.DATA_QUIZ_SESSION_COMPLETED_AT] == BASE_TIME
        assert [
            q[const.DATA_QUESTION_ID]
            for q in session[const.DATA_QUIZ_SESSION_QUESTIONS]
        ] == ["waste-001", "waste-002", "waste-003"]

    def test_length_mismatch(self) -> None:
        """Answer count must equal question count."""
        with pytest.raises(GameDataValidationError) as err:
            build_quiz_session(["waste-001", "waste-002"], [2], BASE_TIME)
        assert err.value.translation_key == const.TRANS_KEY_ERROR_QUIZ_LENGTH_MISMATCH
        assert err.value.placeholders == {"questions": "2", "answers": "1"}

    def test_empty_quiz(self) -> None:
        """An empty quiz is rejected."""
        with pytest.raises(GameDataValidationError):
            build_quiz_session([], [], BASE_TIME)

    def test_unknown_question(self) -> None:
        """Unknown question ids are rejected."""
        with pytest.raises(GameDataValidationError) as err:
            build_quiz_session(["waste-001", "nope"], [2, 0], BASE_TIME)
        assert err.value.translation_key == const.TRANS_KEY_ERROR_UNKNOWN_QUESTION
        assert err.value.placeholders == {"question_id": "nope"}


class TestMiniGameScores:
    """Test mini-game XP conversion."""

    @pytest.mark.parametrize(
        ("game_id", "score", "xp"),
        [
            ("waste-sorting", 500, 25),
            ("waste-sorting", 1000, 50),
            ("waste-sorting", 5000, 50),
            ("waste-sorting", 0, 0),
            ("water-drops", 1499, 74),
        ],
    )
    def test_xp_is_floored_ratio(self, game_id: str, score: int, xp: int) -> None:
        """XP is the floored, clamped score ratio times the game reward."""
        record = build_mini_game_score(game_id, score, BASE_TIME)
        assert record[const.DATA_GAME_SCORE_XP_EARNED] == xp
        assert record[const.DATA_GAME_SCORE_SCORE] == score
        assert record[const.DATA_GAME_SCORE_PLAYED_AT] == BASE_TIME

    def test_game_name_is_recorded(self) -> None:
        """The game title is stored with the score."""
        record = build_mini_game_score("waste-sorting", 10, BASE_TIME)
        assert record[const.DATA_GAME_SCORE_GAME_NAME] == "Waste Sorting Challenge"

    def test_unknown_game(self) -> None:
        """Unknown game ids are rejected."""
        with pytest.raises(GameDataValidationError) as err:
            build_mini_game_score("tetris", 10, BASE_TIME)
        assert err.value.translation_key == const.TRANS_KEY_ERROR_UNKNOWN_GAME
        assert err.value.placeholders == {"game_id": "tetris"}
