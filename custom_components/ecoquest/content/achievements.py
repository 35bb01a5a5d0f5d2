# File: content/achievements.py
"""Achievement badge definitions.

The game state always carries one record per definition here. Records are
created locked by data_builders.build_catalog_achievements and unlocked by the
achievement engine.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from ..type_defs import AchievementRequirement

_K = const.RequirementKind


def _definition(
    achievement_id: str,
    title: str,
    description: str,
    icon: str,
    category: str,
    requirement: AchievementRequirement,
    xp_reward: int,
) -> dict[str, Any]:
    return {
        const.DATA_ACHIEVEMENT_ID: achievement_id,
        const.DATA_ACHIEVEMENT_TITLE: title,
        const.DATA_ACHIEVEMENT_DESCRIPTION: description,
        const.DATA_ACHIEVEMENT_ICON: icon,
        const.DATA_ACHIEVEMENT_CATEGORY: category,
        const.DATA_ACHIEVEMENT_REQUIREMENT: requirement,
        const.DATA_ACHIEVEMENT_XP_REWARD: xp_reward,
    }


def _quest_count(value: int, category: const.QuestType) -> AchievementRequirement:
    return {
        const.DATA_REQUIREMENT_TYPE: _K.QUEST_COUNT.value,
        const.DATA_REQUIREMENT_VALUE: value,
        const.DATA_REQUIREMENT_CATEGORY: category.value,
    }


def _threshold(kind: const.RequirementKind, value: int) -> AchievementRequirement:
    return {const.DATA_REQUIREMENT_TYPE: kind.value, const.DATA_REQUIREMENT_VALUE: value}


ACHIEVEMENT_DEFINITIONS: tuple[dict[str, Any], ...] = (
    # Waste
    _definition(
        "waste-warrior-1",
        "Waste Warrior",
        "Complete 5 waste management challenges",
        "mdi:recycle",
        "waste",
        _quest_count(5, const.QuestType.WASTE),
        100,
    ),
    _definition(
        "waste-master",
        "Waste Master",
        "Complete 15 waste management challenges",
        "mdi:delete-variant",
        "waste",
        _quest_count(15, const.QuestType.WASTE),
        250,
    ),
    # Water
    _definition(
        "jal-rakshak",
        "Jal Rakshak",
        "Complete 5 water conservation challenges",
        "mdi:water",
        "water",
        _quest_count(5, const.QuestType.WATER),
        100,
    ),
    _definition(
        "water-guardian",
        "Water Guardian",
        "Complete 15 water conservation challenges",
        "mdi:waves",
        "water",
        _quest_count(15, const.QuestType.WATER),
        250,
    ),
    # Biodiversity
    _definition(
        "biodiversity-scout",
        "Biodiversity Scout",
        "Complete 5 biodiversity challenges",
        "mdi:sprout",
        "biodiversity",
        _quest_count(5, const.QuestType.BIODIVERSITY),
        100,
    ),
    _definition(
        "nature-protector",
        "Nature Protector",
        "Complete 15 biodiversity challenges",
        "mdi:tree",
        "biodiversity",
        _quest_count(15, const.QuestType.BIODIVERSITY),
        250,
    ),
    # Energy
    _definition(
        "energy-saver",
        "Energy Saver",
        "Complete 5 energy conservation challenges",
        "mdi:lightning-bolt",
        "energy",
        _quest_count(5, const.QuestType.ENERGY),
        100,
    ),
    # Transport
    _definition(
        "green-commuter",
        "Green Commuter",
        "Complete 5 sustainable transport challenges",
        "mdi:bike",
        "transport",
        _quest_count(5, const.QuestType.TRANSPORT),
        100,
    ),
    # Streaks
    _definition(
        "consistent-learner",
        "Consistent Learner",
        "Maintain a 7-day streak",
        "mdi:fire",
        "streak",
        _threshold(_K.STREAK_DAYS, 7),
        150,
    ),
    _definition(
        "dedication-master",
        "Dedication Master",
        "Maintain a 30-day streak",
        "mdi:trophy",
        "streak",
        _threshold(_K.STREAK_DAYS, 30),
        500,
    ),
    # Quizzes
    _definition(
        "quiz-champion",
        "Quiz Champion",
        "Score 100% on 5 quizzes",
        "mdi:brain",
        "quiz",
        _threshold(_K.QUIZ_SCORE, 5),
        200,
    ),
    # Games
    _definition(
        "game-master",
        "Game Master",
        "Play 10 mini-games",
        "mdi:gamepad-variant",
        "game",
        _threshold(_K.GAME_SCORE, 10),
        150,
    ),
)


def get_achievement_definition(achievement_id: str) -> dict[str, Any] | None:
    """Return a copy of one definition, or None if unknown."""
    for definition in ACHIEVEMENT_DEFINITIONS:
        if definition[const.DATA_ACHIEVEMENT_ID] == achievement_id:
            return copy.deepcopy(definition)
    return None
