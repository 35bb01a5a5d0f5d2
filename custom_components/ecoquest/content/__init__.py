# File: content/__init__.py
"""Static content catalogs for EcoQuest.

Catalogs are compiled into the package and never mutated. Every lookup
returns copies so callers can adapt an entry without touching the catalog.

Submodules:
    - challenges: Quest templates and the quest generator
    - quiz_questions: Question bank and the quiz generator
    - mini_games: Mini-game definitions
    - achievements: Achievement badge definitions
"""

from .achievements import ACHIEVEMENT_DEFINITIONS, get_achievement_definition
from .challenges import (
    CHALLENGE_LIBRARY,
    ChallengeProvider,
    generate_challenge,
    get_challenges_by_difficulty,
    get_challenges_by_type,
    get_random_challenge,
)
from .mini_games import (
    MINI_GAMES,
    get_mini_game_by_id,
    get_mini_games_by_category,
    get_mini_games_by_difficulty,
)
from .quiz_questions import (
    QUIZ_QUESTION_BANK,
    QuizProvider,
    generate_quiz,
    get_question_by_id,
    get_questions_by_category,
    get_questions_by_difficulty,
    get_random_questions,
)

__all__ = [
    "ACHIEVEMENT_DEFINITIONS",
    "CHALLENGE_LIBRARY",
    "ChallengeProvider",
    "MINI_GAMES",
    "QUIZ_QUESTION_BANK",
    "QuizProvider",
    "generate_challenge",
    "generate_quiz",
    "get_achievement_definition",
    "get_challenges_by_difficulty",
    "get_challenges_by_type",
    "get_mini_game_by_id",
    "get_mini_games_by_category",
    "get_mini_games_by_difficulty",
    "get_question_by_id",
    "get_questions_by_category",
    "get_questions_by_difficulty",
    "get_random_challenge",
    "get_random_questions",
]
