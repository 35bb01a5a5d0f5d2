# File: const.py
"""Constants for the EcoQuest integration.

This file centralizes storage keys, defaults, progression tuning values,
service names, and platform identifiers for consistency across the integration.
"""

import logging
from enum import StrEnum

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
ECOQUEST_TITLE = "EcoQuest"

# Integration Domain
DOMAIN = "ecoquest"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORE = "store"
STORAGE_KEY = "ecoquest_game_state"
STORAGE_VERSION = 1
SCHEMA_VERSION = 1

# ------------------------------------------------------------------------------------------------
# Progression Tuning
# ------------------------------------------------------------------------------------------------
XP_PER_LEVEL = 1000
QUIZ_XP_PER_CORRECT_ANSWER = 20
DEFAULT_QUIZ_QUESTION_COUNT = 5

# Impact factors per completed quest
IMPACT_CO2_PER_QUEST = 2.5
IMPACT_MONEY_PER_QUEST = 5
IMPACT_TREES_PER_QUEST = 0.1

# Weekly target window
DEFAULT_CHALLENGES_PER_WEEK = 3
WEEKLY_WINDOW_DAYS = 7

# Analytics
ANALYTICS_ACTIVITY_DAYS = 30
ANALYTICS_RECENT_ACHIEVEMENTS = 3
PERSONALIZED_TIPS_LIMIT = 3


# ------------------------------------------------------------------------------------------------
# Enumerations
# ------------------------------------------------------------------------------------------------
class QuestType(StrEnum):
    """Eco domain of a quest."""

    WASTE = "waste"
    WATER = "water"
    ENERGY = "energy"
    TRANSPORT = "transport"
    BIODIVERSITY = "biodiversity"


class Difficulty(StrEnum):
    """Difficulty tier shared by quests, questions and mini-games."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestStatus(StrEnum):
    """Lifecycle state of a quest."""

    AVAILABLE = "available"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class RequirementKind(StrEnum):
    """Aggregate an achievement requirement is measured against."""

    QUEST_COUNT = "quest_count"
    STREAK_DAYS = "streak_days"
    QUIZ_SCORE = "quiz_score"
    GAME_SCORE = "game_score"
    XP_TOTAL = "xp_total"


class ExperienceLevel(StrEnum):
    """Self-declared sustainability experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


QUEST_TYPES = [member.value for member in QuestType]
DIFFICULTIES = [member.value for member in Difficulty]
EXPERIENCE_LEVELS = [member.value for member in ExperienceLevel]

# Onboarding option lists
GOAL_REDUCE_WASTE = "reduce_waste"
GOAL_SAVE_ENERGY = "save_energy"
GOAL_CONSERVE_WATER = "conserve_water"
GOAL_SUSTAINABLE_TRANSPORT = "sustainable_transport"
GOAL_PROTECT_NATURE = "protect_nature"
PRIMARY_GOALS = [
    GOAL_REDUCE_WASTE,
    GOAL_SAVE_ENERGY,
    GOAL_CONSERVE_WATER,
    GOAL_SUSTAINABLE_TRANSPORT,
    GOAL_PROTECT_NATURE,
]

# Goal -> quest type it rewards in relevance scoring
GOAL_QUEST_TYPE_MAP = {
    GOAL_REDUCE_WASTE: QuestType.WASTE,
    GOAL_SAVE_ENERGY: QuestType.ENERGY,
    GOAL_CONSERVE_WATER: QuestType.WATER,
    GOAL_SUSTAINABLE_TRANSPORT: QuestType.TRANSPORT,
    GOAL_PROTECT_NATURE: QuestType.BIODIVERSITY,
}

AVAILABLE_TIME_5_10 = "5-10min"
AVAILABLE_TIME_10_20 = "10-20min"
AVAILABLE_TIME_20_30 = "20-30min"
AVAILABLE_TIME_30_PLUS = "30min+"
AVAILABLE_TIMES = [
    AVAILABLE_TIME_5_10,
    AVAILABLE_TIME_10_20,
    AVAILABLE_TIME_20_30,
    AVAILABLE_TIME_30_PLUS,
]

# Max personalized quests shown per available-time bucket
AVAILABLE_TIME_QUEST_LIMITS = {
    AVAILABLE_TIME_5_10: 2,
    AVAILABLE_TIME_10_20: 4,
    AVAILABLE_TIME_20_30: 6,
    AVAILABLE_TIME_30_PLUS: 10,
}

ACTIVITY_CHALLENGES = "challenges"
ACTIVITY_QUIZZES = "quizzes"
ACTIVITY_GAMES = "games"
ACTIVITY_READING = "reading"
PREFERRED_ACTIVITIES = [
    ACTIVITY_CHALLENGES,
    ACTIVITY_QUIZZES,
    ACTIVITY_GAMES,
    ACTIVITY_READING,
]

MOTIVATION_SAVE_MONEY = "save_money"
MOTIVATION_HELP_PLANET = "help_planet"
MOTIVATION_LEARN = "learn_new_things"
MOTIVATION_COMPETE = "compete_friends"
MOTIVATION_HABITS = "build_habits"
MOTIVATIONS = [
    MOTIVATION_SAVE_MONEY,
    MOTIVATION_HELP_PLANET,
    MOTIVATION_LEARN,
    MOTIVATION_COMPETE,
    MOTIVATION_HABITS,
]

CLIMATE_TEMPERATE = "temperate"
CLIMATE_TROPICAL = "tropical"
CLIMATE_ARID = "arid"
CLIMATE_POLAR = "polar"
CLIMATES = [CLIMATE_TEMPERATE, CLIMATE_TROPICAL, CLIMATE_ARID, CLIMATE_POLAR]

# Achievement categories that are not tied to a quest type
GENERAL_ACHIEVEMENT_CATEGORIES = ["streak", "quiz", "game"]

# ------------------------------------------------------------------------------------------------
# Data Keys (storage schema)
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_LAST_UPDATED = "last_updated"

DATA_PLAYER = "player"
DATA_PLAYER_ID = "id"
DATA_PLAYER_NAME = "name"
DATA_PLAYER_DISPLAY_NAME = "display_name"
DATA_PLAYER_TOTAL_XP = "total_xp"
DATA_PLAYER_LEVEL = "level"
DATA_PLAYER_CURRENT_STREAK = "current_streak"
DATA_PLAYER_LONGEST_STREAK = "longest_streak"
DATA_PLAYER_JOINED_AT = "joined_at"
DATA_PLAYER_LAST_ACTIVE_AT = "last_active_at"
DATA_PLAYER_STATS = "stats"
DATA_PLAYER_PREFERENCES = "preferences"
DATA_PLAYER_PERSONAL_GOALS = "personal_goals"
DATA_PLAYER_WEEKLY_TARGET = "weekly_target"
DATA_PLAYER_ONBOARDING_COMPLETE = "is_onboarding_complete"

# Fields update_player never overwrites
PLAYER_PROTECTED_FIELDS = frozenset(
    {
        DATA_PLAYER_ID,
        DATA_PLAYER_TOTAL_XP,
        DATA_PLAYER_LEVEL,
        DATA_PLAYER_JOINED_AT,
    }
)

DATA_STATS_CHALLENGES_COMPLETED = "challenges_completed"
DATA_STATS_QUIZZES_COMPLETED = "quizzes_completed"
DATA_STATS_MINI_GAMES_PLAYED = "mini_games_played"
DATA_STATS_BADGES_EARNED = "badges_earned"
DATA_STATS_CO2_SAVED = "co2_saved"
DATA_STATS_MONEY_SAVED = "money_saved"
DATA_STATS_TREES_EQUIVALENT = "trees_equivalent"

DATA_PREF_INTERESTS = "interests"
DATA_PREF_EXPERIENCE_LEVEL = "experience_level"
DATA_PREF_PRIMARY_GOALS = "primary_goals"
DATA_PREF_AVAILABLE_TIME = "available_time"
DATA_PREF_PREFERRED_ACTIVITIES = "preferred_activities"
DATA_PREF_LOCATION = "location"
DATA_PREF_MOTIVATIONS = "motivations"
DATA_LOCATION_COUNTRY = "country"
DATA_LOCATION_REGION = "region"
DATA_LOCATION_CLIMATE = "climate"

DATA_WEEKLY_CHALLENGES_PER_WEEK = "challenges_per_week"
DATA_WEEKLY_CURRENT_PROGRESS = "current_week_progress"
DATA_WEEKLY_WEEK_START = "week_start_date"

DATA_QUESTS = "quests"
DATA_QUEST_ID = "id"
DATA_QUEST_TITLE = "title"
DATA_QUEST_DESCRIPTION = "description"
DATA_QUEST_TYPE = "type"
DATA_QUEST_DIFFICULTY = "difficulty"
DATA_QUEST_XP_REWARD = "xp_reward"
DATA_QUEST_REALM = "realm"
DATA_QUEST_STATUS = "status"
DATA_QUEST_COMPLETED_AT = "completed_at"
DATA_QUEST_CREATED_AT = "created_at"
DATA_QUEST_IS_AI_GENERATED = "is_ai_generated"

# Fields update_quest never merges directly
QUEST_PROTECTED_FIELDS = frozenset(
    {DATA_QUEST_ID, DATA_QUEST_STATUS, DATA_QUEST_COMPLETED_AT}
)

DATA_ACHIEVEMENTS = "achievements"
DATA_ACHIEVEMENT_ID = "id"
DATA_ACHIEVEMENT_TITLE = "title"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_ICON = "icon"
DATA_ACHIEVEMENT_CATEGORY = "category"
DATA_ACHIEVEMENT_REQUIREMENT = "requirement"
DATA_ACHIEVEMENT_XP_REWARD = "xp_reward"
DATA_ACHIEVEMENT_UNLOCKED = "unlocked"
DATA_ACHIEVEMENT_UNLOCKED_AT = "unlocked_at"
DATA_REQUIREMENT_TYPE = "type"
DATA_REQUIREMENT_VALUE = "value"
DATA_REQUIREMENT_CATEGORY = "category"

DATA_QUIZ_SESSIONS = "quiz_sessions"
DATA_QUIZ_SESSION_ID = "id"
DATA_QUIZ_SESSION_QUESTIONS = "questions"
DATA_QUIZ_SESSION_ANSWERS = "answers"
DATA_QUIZ_SESSION_SCORE = "score"
DATA_QUIZ_SESSION_XP_EARNED = "xp_earned"
DATA_QUIZ_SESSION_COMPLETED_AT = "completed_at"

DATA_QUESTION_ID = "id"
DATA_QUESTION_TEXT = "question"
DATA_QUESTION_OPTIONS = "options"
DATA_QUESTION_CORRECT_ANSWER = "correct_answer"
DATA_QUESTION_EXPLANATION = "explanation"
DATA_QUESTION_CATEGORY = "category"
DATA_QUESTION_DIFFICULTY = "difficulty"

DATA_MINI_GAME_SCORES = "mini_game_scores"
DATA_GAME_SCORE_ID = "id"
DATA_GAME_SCORE_GAME_ID = "game_id"
DATA_GAME_SCORE_GAME_NAME = "game_name"
DATA_GAME_SCORE_SCORE = "score"
DATA_GAME_SCORE_XP_EARNED = "xp_earned"
DATA_GAME_SCORE_PLAYED_AT = "played_at"

DATA_GAME_ID = "id"
DATA_GAME_TITLE = "title"
DATA_GAME_MAX_SCORE = "max_score"
DATA_GAME_XP_REWARD = "xp_reward"

# ------------------------------------------------------------------------------------------------
# Default Values
# ------------------------------------------------------------------------------------------------
DEFAULT_PLAYER_NAME = "Eco Explorer"
DEFAULT_EXPERIENCE_LEVEL = ExperienceLevel.BEGINNER.value
DEFAULT_AVAILABLE_TIME = AVAILABLE_TIME_10_20
DEFAULT_ZERO = 0

# ------------------------------------------------------------------------------------------------
# Config Flow / Options Keys
# ------------------------------------------------------------------------------------------------
CONF_PLAYER_NAME = "player_name"
CONF_DISPLAY_NAME = "display_name"
CONF_INTERESTS = "interests"
CONF_EXPERIENCE_LEVEL = "experience_level"
CONF_PRIMARY_GOALS = "primary_goals"
CONF_AVAILABLE_TIME = "available_time"
CONF_PREFERRED_ACTIVITIES = "preferred_activities"
CONF_MOTIVATIONS = "motivations"
CONF_COUNTRY = "country"
CONF_REGION = "region"
CONF_CLIMATE = "climate"
CONF_CHALLENGES_PER_WEEK = "challenges_per_week"

CONFIG_FLOW_STEP_USER = "user"
CONFIG_FLOW_STEP_PREFERENCES = "preferences"
OPTIONS_FLOW_STEP_INIT = "init"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_NAME_REQUIRED = "name_required"
TRANS_KEY_ERROR_NO_INTERESTS = "interests_required"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_GENERATE_QUEST = "generate_quest"
SERVICE_ADD_QUEST = "add_quest"
SERVICE_START_QUEST = "start_quest"
SERVICE_PAUSE_QUEST = "pause_quest"
SERVICE_COMPLETE_QUEST = "complete_quest"
SERVICE_GENERATE_QUIZ = "generate_quiz"
SERVICE_SUBMIT_QUIZ = "submit_quiz"
SERVICE_RECORD_MINI_GAME = "record_mini_game"
SERVICE_CHECK_IN = "check_in"
SERVICE_UPDATE_PLAYER = "update_player"
SERVICE_RESET_GAME = "reset_game"
SERVICE_EXPORT_PROGRESS = "export_progress"

SERVICES = [
    SERVICE_GENERATE_QUEST,
    SERVICE_ADD_QUEST,
    SERVICE_START_QUEST,
    SERVICE_PAUSE_QUEST,
    SERVICE_COMPLETE_QUEST,
    SERVICE_GENERATE_QUIZ,
    SERVICE_SUBMIT_QUIZ,
    SERVICE_RECORD_MINI_GAME,
    SERVICE_CHECK_IN,
    SERVICE_UPDATE_PLAYER,
    SERVICE_RESET_GAME,
    SERVICE_EXPORT_PROGRESS,
]

FIELD_QUEST_ID = "quest_id"
FIELD_TYPE = "type"
FIELD_DIFFICULTY = "difficulty"
FIELD_TITLE = "title"
FIELD_DESCRIPTION = "description"
FIELD_XP_REWARD = "xp_reward"
FIELD_REALM = "realm"
FIELD_COUNT = "count"
FIELD_CATEGORY = "category"
FIELD_QUESTION_IDS = "question_ids"
FIELD_ANSWERS = "answers"
FIELD_GAME_ID = "game_id"
FIELD_SCORE = "score"
FIELD_NAME = "name"
FIELD_DISPLAY_NAME = "display_name"
FIELD_CHALLENGES_PER_WEEK = "challenges_per_week"
FIELD_CONFIRM_DESTRUCTIVE = "confirm_destructive"
FIELD_DELETE_STORAGE = "delete_storage"

TRANS_KEY_ERROR_NOT_LOADED = "not_loaded"
TRANS_KEY_ERROR_QUIZ_LENGTH_MISMATCH = "quiz_length_mismatch"
TRANS_KEY_ERROR_UNKNOWN_QUESTION = "unknown_question"
TRANS_KEY_ERROR_UNKNOWN_GAME = "unknown_game"
TRANS_KEY_ERROR_CONFIRM_REQUIRED = "confirm_required"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_KEY_TOTAL_XP = "total_xp"
SENSOR_KEY_LEVEL = "level"
SENSOR_KEY_STREAK = "current_streak"
SENSOR_KEY_CHALLENGES_COMPLETED = "challenges_completed"
SENSOR_KEY_CO2_SAVED = "co2_saved"
SENSOR_KEY_ACHIEVEMENTS = "achievements_unlocked"
SENSOR_KEY_WEEKLY_PROGRESS = "weekly_progress"

ATTR_LEVEL = "level"
ATTR_XP_FOR_NEXT_LEVEL = "xp_for_next_level"
ATTR_PROGRESS_TO_NEXT_LEVEL = "progress_to_next_level"
ATTR_LONGEST_STREAK = "longest_streak"
ATTR_MONEY_SAVED = "money_saved"
ATTR_TREES_EQUIVALENT = "trees_equivalent"
ATTR_UNLOCKED_ACHIEVEMENTS = "unlocked_achievements"
ATTR_TOTAL_ACHIEVEMENTS = "total_achievements"
ATTR_CHALLENGES_PER_WEEK = "challenges_per_week"
ATTR_WEEK_START = "week_start_date"
ATTR_PERCENT_COMPLETE = "percent_complete"
ATTR_AVAILABLE_QUESTS = "available_quests"

UNIT_XP = "XP"
UNIT_DAYS = "days"
UNIT_QUESTS = "quests"
UNIT_BADGES = "badges"
