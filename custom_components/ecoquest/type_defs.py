"""Type definitions for EcoQuest data structures.

All persisted structures have keys that are fixed at design time, so every
record is modelled as a TypedDict. Timestamps are timezone-aware UTC
``datetime`` objects in memory; the store converts them to and from ISO 8601
strings at the persistence boundary.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports the coordinator to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of loaded data
happens in store.py.
"""

from datetime import datetime
from typing import Any, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

PlayerId = str  # uuid4 hex
QuestId = str
AchievementId = str
QuestionId = str
GameId = str


# =============================================================================
# Player
# =============================================================================


class PlayerStats(TypedDict):
    """Counters and impact estimates for a player."""

    challenges_completed: int
    quizzes_completed: int
    mini_games_played: int
    badges_earned: int
    co2_saved: float
    money_saved: float
    trees_equivalent: float


class PlayerLocation(TypedDict):
    """Optional location captured during onboarding."""

    country: str
    region: NotRequired[str]
    climate: str  # temperate | tropical | arid | polar


class UserPreferences(TypedDict):
    """Onboarding answers used for personalization."""

    interests: list[str]  # quest types
    experience_level: str
    primary_goals: list[str]
    available_time: str
    preferred_activities: list[str]
    location: NotRequired[PlayerLocation]
    motivations: list[str]


class WeeklyTarget(TypedDict):
    """Rolling seven day challenge goal."""

    challenges_per_week: int
    current_week_progress: int
    week_start_date: datetime


class PlayerProfile(TypedDict):
    """The single player tracked by an EcoQuest config entry."""

    id: PlayerId
    name: str
    display_name: str
    total_xp: int
    level: int
    current_streak: int
    longest_streak: int
    joined_at: datetime
    last_active_at: datetime
    stats: PlayerStats
    preferences: UserPreferences
    personal_goals: list[str]
    weekly_target: WeeklyTarget
    is_onboarding_complete: bool


# =============================================================================
# Quests
# =============================================================================


class QuestTemplate(TypedDict):
    """Catalog entry a quest is instantiated from."""

    title: str
    description: str
    type: str
    difficulty: str
    xp_reward: int
    realm: str
    is_ai_generated: bool


class Quest(TypedDict):
    """Quest instance owned by the player."""

    id: QuestId
    title: str
    description: str
    type: str
    difficulty: str
    xp_reward: int
    realm: str
    status: str  # available | in-progress | completed
    completed_at: datetime | None
    created_at: datetime
    is_ai_generated: bool


# =============================================================================
# Achievements
# =============================================================================


class AchievementRequirement(TypedDict):
    """Threshold an achievement unlocks at."""

    type: str  # RequirementKind value
    value: int
    category: NotRequired[str]


class Achievement(TypedDict):
    """Badge record; the state always holds the full catalog."""

    id: AchievementId
    title: str
    description: str
    icon: str
    category: str
    requirement: AchievementRequirement
    xp_reward: int
    unlocked: bool
    unlocked_at: datetime | None


# =============================================================================
# Quizzes and Mini-Games
# =============================================================================


class QuizQuestion(TypedDict):
    """Question bank entry."""

    id: QuestionId
    question: str
    options: list[str]
    correct_answer: int
    explanation: str
    category: str
    difficulty: str


class QuizSession(TypedDict):
    """Completed quiz attempt (immutable once recorded)."""

    id: str
    questions: list[QuizQuestion]
    answers: list[int]
    score: int
    xp_earned: int
    completed_at: datetime


class MiniGame(TypedDict):
    """Mini-game catalog entry."""

    id: GameId
    title: str
    description: str
    category: str
    difficulty: str
    estimated_time: int  # minutes
    max_score: int
    xp_reward: int
    instructions: list[str]
    icon: str


class MiniGameScore(TypedDict):
    """Recorded mini-game play (immutable once recorded)."""

    id: str
    game_id: GameId
    game_name: str
    score: int
    xp_earned: int
    played_at: datetime


# =============================================================================
# Aggregate State
# =============================================================================


class GameMeta(TypedDict):
    """Storage bookkeeping."""

    schema_version: int


class GameState(TypedDict):
    """Everything persisted for one player."""

    meta: GameMeta
    player: PlayerProfile
    quests: list[Quest]
    achievements: list[Achievement]
    quiz_sessions: list[QuizSession]
    mini_game_scores: list[MiniGameScore]
    last_updated: datetime


class ImpactMetrics(TypedDict):
    """Derived environmental impact of completed quests."""

    co2_saved: float
    money_saved: float
    trees_equivalent: float


# =============================================================================
# Analytics export (read-only service response)
# =============================================================================


class ActivityDay(TypedDict):
    """One day of activity counts."""

    date: str
    challenges: int
    quizzes: int
    games: int
    xp_earned: int


class CategoryStats(TypedDict):
    """Per quest type aggregate."""

    category: str
    name: str
    completed: int
    total_xp: int
    average_score: int


class WeeklyComparison(TypedDict):
    """This week versus last week XP."""

    this_week: int
    last_week: int
    change: int


ProgressExport = dict[str, Any]
