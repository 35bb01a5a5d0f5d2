"""Engine modules for EcoQuest integration.

Contains specialized computation engines:
- achievement_engine: Achievement unlock evaluation and progress
- analytics_engine: Progress reports and exports
- personalization_engine: Quest ranking, impact metrics, tips
- progression_engine: Levels, streaks and weekly targets
- quest_engine: Quest state machine
"""

# Use relative imports within package to avoid mypy module resolution issues
from .achievement_engine import AchievementEngine
from .analytics_engine import AnalyticsEngine
from .personalization_engine import PersonalizationEngine
from .progression_engine import ProgressionEngine, StreakUpdate
from .quest_engine import QuestEngine

__all__ = [
    "AchievementEngine",
    "AnalyticsEngine",
    "PersonalizationEngine",
    "ProgressionEngine",
    "QuestEngine",
    "StreakUpdate",
]
