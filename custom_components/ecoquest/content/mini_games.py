# File: content/mini_games.py
"""Mini-game definitions.

Scores for a game are converted to XP as the floored share of ``max_score``
times ``xp_reward`` (see data_builders.build_mini_game_score).
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import MiniGame

MINI_GAMES: tuple[MiniGame, ...] = (
    {
        "id": "waste-sorting",
        "title": "Waste Sorting Challenge",
        "description": "Sort different items into the correct recycling bins as "
        "quickly as possible!",
        "category": const.QuestType.WASTE.value,
        "difficulty": const.Difficulty.EASY.value,
        "estimated_time": 3,
        "max_score": 1000,
        "xp_reward": 50,
        "instructions": [
            "Items will appear on the screen",
            "Drag each item to the correct bin",
            "Green bin: Compostable items",
            "Blue bin: Recyclable items",
            "Gray bin: General waste",
            "Speed and accuracy both matter!",
        ],
        "icon": "mdi:recycle",
    },
    {
        "id": "water-drops",
        "title": "Save the Water Drops",
        "description": "Catch falling water drops to prevent waste and learn "
        "about conservation!",
        "category": const.QuestType.WATER.value,
        "difficulty": const.Difficulty.MEDIUM.value,
        "estimated_time": 4,
        "max_score": 1500,
        "xp_reward": 75,
        "instructions": [
            "Water drops are falling from leaky faucets",
            "Move your bucket to catch them",
            "Each drop saved earns points",
            "Avoid catching polluted drops (dark colored)",
            "Bonus points for catching multiple drops in a row",
        ],
        "icon": "mdi:water",
    },
    {
        "id": "energy-saver",
        "title": "Energy Saver House",
        "description": "Turn off lights and appliances to save energy in this "
        "virtual house!",
        "category": const.QuestType.ENERGY.value,
        "difficulty": const.Difficulty.EASY.value,
        "estimated_time": 3,
        "max_score": 800,
        "xp_reward": 60,
        "instructions": [
            "Click on lights and appliances to turn them off",
            "Each item turned off saves energy points",
            "Some items use more energy than others",
            "Complete all rooms to finish the game",
            "Faster completion = bonus points",
        ],
        "icon": "mdi:lightning-bolt",
    },
    {
        "id": "carbon-footprint",
        "title": "Carbon Footprint Race",
        "description": "Choose the most eco-friendly transportation options to "
        "reduce your carbon footprint!",
        "category": const.QuestType.TRANSPORT.value,
        "difficulty": const.Difficulty.MEDIUM.value,
        "estimated_time": 5,
        "max_score": 1200,
        "xp_reward": 80,
        "instructions": [
            "You need to travel to different destinations",
            "Choose from various transport options",
            "Each choice affects your carbon footprint",
            "Lower emissions = higher score",
            "Balance speed, cost, and environmental impact",
        ],
        "icon": "mdi:bike",
    },
    {
        "id": "pollinator-garden",
        "title": "Build a Pollinator Garden",
        "description": "Plant the right flowers to attract bees, butterflies, and "
        "other pollinators!",
        "category": const.QuestType.BIODIVERSITY.value,
        "difficulty": const.Difficulty.HARD.value,
        "estimated_time": 6,
        "max_score": 2000,
        "xp_reward": 100,
        "instructions": [
            "Different pollinators prefer different flowers",
            "Plant flowers that bloom in different seasons",
            "Consider flower colors and shapes",
            "Create a balanced ecosystem",
            "Watch your garden come to life!",
        ],
        "icon": "mdi:flower",
    },
)


def get_mini_game_by_id(game_id: str) -> MiniGame | None:
    """Return a copy of the game definition, or None if unknown."""
    for game in MINI_GAMES:
        if game[const.DATA_GAME_ID] == game_id:
            return copy.deepcopy(game)
    return None


def get_mini_games_by_category(category: str) -> list[MiniGame]:
    """Return copies of all games in one quest-type category."""
    return [copy.deepcopy(g) for g in MINI_GAMES if g["category"] == category]


def get_mini_games_by_difficulty(difficulty: str) -> list[MiniGame]:
    """Return copies of all games of one difficulty."""
    return [copy.deepcopy(g) for g in MINI_GAMES if g["difficulty"] == difficulty]
