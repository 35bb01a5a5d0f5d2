"""Game data construction helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Record field defaults (player, preferences, weekly target)
- Complete record structure building (quests, quiz sessions, mini-game scores)
- Business rule validation of externally supplied data

### Build Functions
Each record type has a `build_<record>()` function that:
- Generates a uuid for new records
- Sets timestamps from the ``now`` argument
- Applies field defaults
- Returns a complete dict ready for the game state

Consumers:
- coordinator.py (state construction and mutation)
- store.py (backfilling older snapshots)
- config_flow.py / services.py (mapping user input)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
import uuid
from zoneinfo import ZoneInfo

from . import const
from .content import ACHIEVEMENT_DEFINITIONS, get_mini_game_by_id, get_question_by_id
from .engines.progression_engine import ProgressionEngine
from .type_defs import (
    Achievement,
    GameState,
    MiniGameScore,
    PlayerProfile,
    PlayerStats,
    Quest,
    QuestTemplate,
    QuizQuestion,
    QuizSession,
    UserPreferences,
    WeeklyTarget,
)
from .utils.dt_utils import start_of_local_week
from .utils.math_utils import calculate_ratio_floor

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class GameDataValidationError(Exception):
    """Validation error for externally supplied game data.

    Attributes:
        field: The input field that failed validation
        translation_key: The TRANS_KEY_* constant for the error message
        placeholders: Optional dict for translation string placeholders
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize GameDataValidationError."""
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(translation_key)


def _new_id() -> str:
    return uuid.uuid4().hex


# ==============================================================================
# PLAYER
# ==============================================================================


def build_default_preferences() -> UserPreferences:
    """Return preferences for a player who skipped onboarding."""
    return {
        const.DATA_PREF_INTERESTS: [],
        const.DATA_PREF_EXPERIENCE_LEVEL: const.DEFAULT_EXPERIENCE_LEVEL,
        const.DATA_PREF_PRIMARY_GOALS: [],
        const.DATA_PREF_AVAILABLE_TIME: const.DEFAULT_AVAILABLE_TIME,
        const.DATA_PREF_PREFERRED_ACTIVITIES: [],
        const.DATA_PREF_MOTIVATIONS: [],
    }


def build_default_weekly_target(
    now: datetime, tz: ZoneInfo | None = None
) -> WeeklyTarget:
    """Return an empty weekly target whose window starts on this week's Sunday."""
    return {
        const.DATA_WEEKLY_CHALLENGES_PER_WEEK: const.DEFAULT_CHALLENGES_PER_WEEK,
        const.DATA_WEEKLY_CURRENT_PROGRESS: 0,
        const.DATA_WEEKLY_WEEK_START: start_of_local_week(now, tz),
    }


def build_default_stats() -> PlayerStats:
    """Return zeroed player statistics."""
    return {
        const.DATA_STATS_CHALLENGES_COMPLETED: 0,
        const.DATA_STATS_QUIZZES_COMPLETED: 0,
        const.DATA_STATS_MINI_GAMES_PLAYED: 0,
        const.DATA_STATS_BADGES_EARNED: 0,
        const.DATA_STATS_CO2_SAVED: 0,
        const.DATA_STATS_MONEY_SAVED: 0,
        const.DATA_STATS_TREES_EQUIVALENT: 0,
    }


def build_player(
    now: datetime,
    name: str = const.DEFAULT_PLAYER_NAME,
    display_name: str = "",
    tz: ZoneInfo | None = None,
) -> PlayerProfile:
    """Return a brand new level 1 player."""
    return {
        const.DATA_PLAYER_ID: _new_id(),
        const.DATA_PLAYER_NAME: name,
        const.DATA_PLAYER_DISPLAY_NAME: display_name,
        const.DATA_PLAYER_TOTAL_XP: 0,
        const.DATA_PLAYER_LEVEL: ProgressionEngine.calculate_level(0),
        const.DATA_PLAYER_CURRENT_STREAK: 0,
        const.DATA_PLAYER_LONGEST_STREAK: 0,
        const.DATA_PLAYER_JOINED_AT: now,
        const.DATA_PLAYER_LAST_ACTIVE_AT: now,
        const.DATA_PLAYER_STATS: build_default_stats(),
        const.DATA_PLAYER_PREFERENCES: build_default_preferences(),
        const.DATA_PLAYER_PERSONAL_GOALS: [],
        const.DATA_PLAYER_WEEKLY_TARGET: build_default_weekly_target(now, tz),
        const.DATA_PLAYER_ONBOARDING_COMPLETE: False,
    }


def build_preferences(user_input: dict[str, Any]) -> UserPreferences:
    """Map config/options flow input (CONF_* keys) to stored preferences."""
    preferences = build_default_preferences()
    preferences[const.DATA_PREF_INTERESTS] = list(
        user_input.get(const.CONF_INTERESTS, [])
    )
    preferences[const.DATA_PREF_EXPERIENCE_LEVEL] = user_input.get(
        const.CONF_EXPERIENCE_LEVEL, const.DEFAULT_EXPERIENCE_LEVEL
    )
    preferences[const.DATA_PREF_PRIMARY_GOALS] = list(
        user_input.get(const.CONF_PRIMARY_GOALS, [])
    )
    preferences[const.DATA_PREF_AVAILABLE_TIME] = user_input.get(
        const.CONF_AVAILABLE_TIME, const.DEFAULT_AVAILABLE_TIME
    )
    preferences[const.DATA_PREF_PREFERRED_ACTIVITIES] = list(
        user_input.get(const.CONF_PREFERRED_ACTIVITIES, [])
    )
    preferences[const.DATA_PREF_MOTIVATIONS] = list(
        user_input.get(const.CONF_MOTIVATIONS, [])
    )

    climate = user_input.get(const.CONF_CLIMATE)
    country = user_input.get(const.CONF_COUNTRY, "")
    if climate or country:
        location: dict[str, str] = {
            const.DATA_LOCATION_COUNTRY: country,
            const.DATA_LOCATION_CLIMATE: climate or const.CLIMATE_TEMPERATE,
        }
        if region := user_input.get(const.CONF_REGION):
            location[const.DATA_LOCATION_REGION] = region
        preferences[const.DATA_PREF_LOCATION] = location  # type: ignore[typeddict-item]
    return preferences


# ==============================================================================
# ACHIEVEMENTS
# ==============================================================================


def build_catalog_achievements() -> list[Achievement]:
    """Return one locked record per achievement definition, in catalog order."""
    return [build_locked_achievement(definition) for definition in ACHIEVEMENT_DEFINITIONS]


def build_locked_achievement(definition: dict[str, Any]) -> Achievement:
    """Return a locked achievement record for a catalog definition."""
    achievement = dict(definition)
    achievement[const.DATA_ACHIEVEMENT_REQUIREMENT] = dict(
        definition[const.DATA_ACHIEVEMENT_REQUIREMENT]
    )
    achievement[const.DATA_ACHIEVEMENT_UNLOCKED] = False
    achievement[const.DATA_ACHIEVEMENT_UNLOCKED_AT] = None
    return achievement  # type: ignore[return-value]


# ==============================================================================
# GAME STATE
# ==============================================================================


def build_default_game_state(
    now: datetime,
    name: str = const.DEFAULT_PLAYER_NAME,
    display_name: str = "",
    tz: ZoneInfo | None = None,
) -> GameState:
    """Return the state of a brand new game."""
    return {
        const.DATA_META: {const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION},
        const.DATA_PLAYER: build_player(now, name, display_name, tz),
        const.DATA_QUESTS: [],
        const.DATA_ACHIEVEMENTS: build_catalog_achievements(),
        const.DATA_QUIZ_SESSIONS: [],
        const.DATA_MINI_GAME_SCORES: [],
        const.DATA_LAST_UPDATED: now,
    }


# ==============================================================================
# QUESTS
# ==============================================================================


def validate_quest_data(data: dict[str, Any]) -> dict[str, str]:
    """Validate quest fields supplied by a user.

    Returns:
        Dict of errors: {field: translation_key}. Empty means valid.
    """
    errors: dict[str, str] = {}
    if not str(data.get(const.DATA_QUEST_TITLE, "")).strip():
        errors[const.DATA_QUEST_TITLE] = "invalid_quest_title"
    if data.get(const.DATA_QUEST_TYPE) not in const.QUEST_TYPES:
        errors[const.DATA_QUEST_TYPE] = "invalid_quest_type"
    if data.get(const.DATA_QUEST_DIFFICULTY) not in const.DIFFICULTIES:
        errors[const.DATA_QUEST_DIFFICULTY] = "invalid_quest_difficulty"
    try:
        if int(data.get(const.DATA_QUEST_XP_REWARD, 0)) <= 0:
            errors[const.DATA_QUEST_XP_REWARD] = "invalid_xp_reward"
    except (TypeError, ValueError):
        errors[const.DATA_QUEST_XP_REWARD] = "invalid_xp_reward"
    return errors


def build_quest(template: QuestTemplate | dict[str, Any], now: datetime) -> Quest:
    """Instantiate an available quest from a template.

    Raises:
        GameDataValidationError: If the template fails validation.
    """
    errors = validate_quest_data(dict(template))
    if errors:
        field, translation_key = next(iter(errors.items()))
        raise GameDataValidationError(field=field, translation_key=translation_key)

    quest_type = template[const.DATA_QUEST_TYPE]
    return {
        const.DATA_QUEST_ID: _new_id(),
        const.DATA_QUEST_TITLE: str(template[const.DATA_QUEST_TITLE]).strip(),
        const.DATA_QUEST_DESCRIPTION: str(
            template.get(const.DATA_QUEST_DESCRIPTION, "")
        ),
        const.DATA_QUEST_TYPE: quest_type,
        const.DATA_QUEST_DIFFICULTY: template[const.DATA_QUEST_DIFFICULTY],
        const.DATA_QUEST_XP_REWARD: int(template[const.DATA_QUEST_XP_REWARD]),
        const.DATA_QUEST_REALM: template.get(const.DATA_QUEST_REALM)
        or f"{quest_type.capitalize()} Realm",
        const.DATA_QUEST_STATUS: const.QuestStatus.AVAILABLE.value,
        const.DATA_QUEST_COMPLETED_AT: None,
        const.DATA_QUEST_CREATED_AT: now,
        const.DATA_QUEST_IS_AI_GENERATED: bool(
            template.get(const.DATA_QUEST_IS_AI_GENERATED, False)
        ),
    }


# ==============================================================================
# QUIZZES
# ==============================================================================


def build_quiz_session(
    question_ids: list[str],
    answers: list[int],
    now: datetime,
) -> QuizSession:
    """Score a quiz against the question bank.

    Score is the number of answers equal to the question's correct index.
    XP is QUIZ_XP_PER_CORRECT_ANSWER per correct answer.

    Raises:
        GameDataValidationError: On empty input, mismatched lengths or an
            unknown question id.
    """
    if not question_ids or len(question_ids) != len(answers):
        raise GameDataValidationError(
            field=const.FIELD_ANSWERS,
            translation_key=const.TRANS_KEY_ERROR_QUIZ_LENGTH_MISMATCH,
            placeholders={
                "questions": str(len(question_ids)),
                "answers": str(len(answers)),
            },
        )

    questions: list[QuizQuestion] = []
    for question_id in question_ids:
        question = get_question_by_id(question_id)
        if question is None:
            raise GameDataValidationError(
                field=const.FIELD_QUESTION_IDS,
                translation_key=const.TRANS_KEY_ERROR_UNKNOWN_QUESTION,
                placeholders={"question_id": question_id},
            )
        questions.append(question)

    score = sum(
        1
        for question, answer in zip(questions, answers, strict=True)
        if answer == question[const.DATA_QUESTION_CORRECT_ANSWER]
    )
    return {
        const.DATA_QUIZ_SESSION_ID: _new_id(),
        const.DATA_QUIZ_SESSION_QUESTIONS: questions,
        const.DATA_QUIZ_SESSION_ANSWERS: list(answers),
        const.DATA_QUIZ_SESSION_SCORE: score,
        const.DATA_QUIZ_SESSION_XP_EARNED: score * const.QUIZ_XP_PER_CORRECT_ANSWER,
        const.DATA_QUIZ_SESSION_COMPLETED_AT: now,
    }


# ==============================================================================
# MINI-GAMES
# ==============================================================================


def build_mini_game_score(game_id: str, score: int, now: datetime) -> MiniGameScore:
    """Record a mini-game play.

    XP is floor(clamp(score / max_score, 0, 1) * xp_reward).

    Raises:
        GameDataValidationError: If the game id is unknown.
    """
    game = get_mini_game_by_id(game_id)
    if game is None:
        raise GameDataValidationError(
            field=const.FIELD_GAME_ID,
            translation_key=const.TRANS_KEY_ERROR_UNKNOWN_GAME,
            placeholders={"game_id": game_id},
        )

    return {
        const.DATA_GAME_SCORE_ID: _new_id(),
        const.DATA_GAME_SCORE_GAME_ID: game_id,
        const.DATA_GAME_SCORE_GAME_NAME: game[const.DATA_GAME_TITLE],
        const.DATA_GAME_SCORE_SCORE: score,
        const.DATA_GAME_SCORE_XP_EARNED: calculate_ratio_floor(
            score, game[const.DATA_GAME_MAX_SCORE], game[const.DATA_GAME_XP_REWARD]
        ),
        const.DATA_GAME_SCORE_PLAYED_AT: now,
    }
