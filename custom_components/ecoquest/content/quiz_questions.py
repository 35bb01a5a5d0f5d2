# File: content/quiz_questions.py
"""Quiz question bank and quiz generation."""

from __future__ import annotations

from collections.abc import Callable
import copy
import random
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import QuizQuestion

QuizProvider = Callable[[int, str | None, str | None], "list[QuizQuestion]"]


def _question(
    question_id: str,
    text: str,
    options: list[str],
    correct_answer: int,
    explanation: str,
    category: const.QuestType,
    difficulty: const.Difficulty,
) -> QuizQuestion:
    return {
        const.DATA_QUESTION_ID: question_id,
        const.DATA_QUESTION_TEXT: text,
        const.DATA_QUESTION_OPTIONS: options,
        const.DATA_QUESTION_CORRECT_ANSWER: correct_answer,
        const.DATA_QUESTION_EXPLANATION: explanation,
        const.DATA_QUESTION_CATEGORY: category.value,
        const.DATA_QUESTION_DIFFICULTY: difficulty.value,
    }


_C = const.QuestType
_D = const.Difficulty

QUIZ_QUESTION_BANK: tuple[QuizQuestion, ...] = (
    # Waste
    _question(
        "waste-001",
        "How long does it take for a plastic bottle to decompose in a landfill?",
        ["50 years", "100 years", "450 years", "1000 years"],
        2,
        "Plastic bottles can take up to 450 years to decompose in landfills, which "
        "is why recycling and reducing plastic use is so important.",
        _C.WASTE,
        _D.EASY,
    ),
    _question(
        "waste-002",
        "What percentage of plastic waste is actually recycled globally?",
        ["Less than 10%", "About 25%", "Around 50%", "Over 75%"],
        0,
        "Less than 10% of plastic waste is actually recycled globally. Most plastic "
        "ends up in landfills, oceans, or is incinerated.",
        _C.WASTE,
        _D.MEDIUM,
    ),
    _question(
        "waste-003",
        "Which of these materials can be composted?",
        ["Banana peels", "Plastic bags", "Glass bottles", "Aluminum cans"],
        0,
        "Banana peels are organic matter that can be composted. Plastic, glass, and "
        "aluminum should be recycled through different processes.",
        _C.WASTE,
        _D.EASY,
    ),
    _question(
        "waste-004",
        "What is the concept of 'circular economy' in waste management?",
        [
            "Throwing waste in circular bins",
            "Reusing and recycling materials to minimize waste",
            "Burning waste in circular furnaces",
            "Burying waste in circular patterns",
        ],
        1,
        "A circular economy focuses on reusing, recycling, and regenerating "
        "materials to keep them in use for as long as possible, minimizing waste.",
        _C.WASTE,
        _D.HARD,
    ),
    # Water
    _question(
        "water-001",
        "What percentage of Earth's water is fresh water available for human use?",
        ["30%", "10%", "3%", "Less than 1%"],
        3,
        "Less than 1% of Earth's water is fresh water available for human use. Most "
        "water is saltwater in oceans or frozen in ice caps.",
        _C.WATER,
        _D.MEDIUM,
    ),
    _question(
        "water-002",
        "How much water does a typical 5-minute shower use?",
        ["10 gallons", "25 gallons", "50 gallons", "100 gallons"],
        1,
        "A typical 5-minute shower uses about 25 gallons of water. Reducing shower "
        "time is an easy way to conserve water.",
        _C.WATER,
        _D.EASY,
    ),
    _question(
        "water-003",
        "Which activity uses the most water in an average household?",
        ["Showering", "Toilet flushing", "Washing clothes", "Washing dishes"],
        1,
        "Toilet flushing typically uses the most water in an average household, "
        "accounting for about 30% of indoor water use.",
        _C.WATER,
        _D.MEDIUM,
    ),
    _question(
        "water-004",
        "What is greywater?",
        [
            "Dirty rainwater",
            "Water from sinks, showers, and washing machines",
            "Water mixed with concrete",
            "Polluted groundwater",
        ],
        1,
        "Greywater is wastewater from sinks, showers, and washing machines that can "
        "be reused for irrigation and other non-potable uses.",
        _C.WATER,
        _D.HARD,
    ),
    # Energy
    _question(
        "energy-001",
        "Which type of light bulb is most energy-efficient?",
        ["Incandescent", "Halogen", "CFL (Compact Fluorescent)", "LED"],
        3,
        "LED bulbs are the most energy-efficient, using up to 80% less energy than "
        "incandescent bulbs and lasting much longer.",
        _C.ENERGY,
        _D.EASY,
    ),
    _question(
        "energy-002",
        "What are 'phantom loads' or 'vampire power'?",
        [
            "Solar power at night",
            "Energy used by devices when turned off but plugged in",
            "Power from wind turbines",
            "Energy stored in batteries",
        ],
        1,
        "Phantom loads refer to energy consumed by electronic devices when they're "
        "turned off but still plugged in, which can account for 5-10% of home "
        "energy use.",
        _C.ENERGY,
        _D.MEDIUM,
    ),
    _question(
        "energy-003",
        "Which renewable energy source is most widely used globally?",
        ["Solar", "Wind", "Hydroelectric", "Geothermal"],
        2,
        "Hydroelectric power is the most widely used renewable energy source "
        "globally, providing about 16% of the world's electricity.",
        _C.ENERGY,
        _D.MEDIUM,
    ),
    _question(
        "energy-004",
        "What is the most effective way to reduce home energy consumption?",
        [
            "Using energy-efficient appliances",
            "Improving insulation",
            "Using renewable energy",
            "All of the above",
        ],
        3,
        "The most effective approach combines energy-efficient appliances, proper "
        "insulation, and renewable energy sources to minimize overall consumption.",
        _C.ENERGY,
        _D.HARD,
    ),
    # Transport
    _question(
        "transport-001",
        "Which mode of transport produces the least CO2 emissions per passenger?",
        ["Car", "Bus", "Train", "Bicycle"],
        3,
        "Bicycles produce zero direct emissions and are the most environmentally "
        "friendly mode of transport for short to medium distances.",
        _C.TRANSPORT,
        _D.EASY,
    ),
    _question(
        "transport-002",
        "How much can carpooling reduce individual carbon emissions from commuting?",
        ["10-20%", "25-35%", "45-55%", "65-75%"],
        2,
        "Carpooling can reduce individual carbon emissions by 45-55% by sharing the "
        "environmental cost among multiple passengers.",
        _C.TRANSPORT,
        _D.MEDIUM,
    ),
    _question(
        "transport-003",
        "What is the main environmental benefit of electric vehicles?",
        [
            "They're completely emission-free",
            "They reduce local air pollution",
            "They're always powered by renewable energy",
            "They never need maintenance",
        ],
        1,
        "Electric vehicles reduce local air pollution and can have lower overall "
        "emissions, especially when powered by clean electricity sources.",
        _C.TRANSPORT,
        _D.MEDIUM,
    ),
    _question(
        "transport-004",
        "What does 'active transportation' refer to?",
        [
            "Electric vehicles",
            "Public transportation",
            "Walking and cycling",
            "Ride-sharing services",
        ],
        2,
        "Active transportation refers to human-powered transport like walking and "
        "cycling, which provides health benefits while producing zero emissions.",
        _C.TRANSPORT,
        _D.EASY,
    ),
    # Biodiversity
    _question(
        "biodiversity-001",
        "What percentage of known species are currently threatened with extinction?",
        ["5%", "15%", "25%", "40%"],
        2,
        "Approximately 25% of known plant and animal species are currently "
        "threatened with extinction due to human activities and climate change.",
        _C.BIODIVERSITY,
        _D.MEDIUM,
    ),
    _question(
        "biodiversity-002",
        "Which of these is most important for supporting local biodiversity?",
        [
            "Planting exotic species",
            "Using pesticides",
            "Creating native plant gardens",
            "Building more roads",
        ],
        2,
        "Native plant gardens provide food and habitat for local wildlife and are "
        "adapted to local climate conditions, supporting biodiversity.",
        _C.BIODIVERSITY,
        _D.EASY,
    ),
    _question(
        "biodiversity-003",
        "What are pollinators essential for?",
        ["Cleaning the air", "Food production", "Water purification", "Soil formation"],
        1,
        "Pollinators like bees, butterflies, and birds are essential for food "
        "production, as they help plants reproduce by transferring pollen.",
        _C.BIODIVERSITY,
        _D.EASY,
    ),
    _question(
        "biodiversity-004",
        "What is habitat fragmentation?",
        [
            "Animals moving to new areas",
            "Breaking up large habitats into smaller, isolated pieces",
            "Creating new habitats for wildlife",
            "Protecting endangered species",
        ],
        1,
        "Habitat fragmentation occurs when large, continuous habitats are broken "
        "into smaller, isolated pieces, making it difficult for wildlife to survive "
        "and reproduce.",
        _C.BIODIVERSITY,
        _D.HARD,
    ),
)

_QUESTIONS_BY_ID = {q[const.DATA_QUESTION_ID]: q for q in QUIZ_QUESTION_BANK}


def get_question_by_id(question_id: str) -> QuizQuestion | None:
    """Return a copy of a question, or None if the id is unknown."""
    question = _QUESTIONS_BY_ID.get(question_id)
    return copy.deepcopy(question) if question else None


def get_questions_by_category(category: str) -> list[QuizQuestion]:
    """Return copies of all questions in one quest-type category."""
    return [
        copy.deepcopy(q)
        for q in QUIZ_QUESTION_BANK
        if q[const.DATA_QUESTION_CATEGORY] == category
    ]


def get_questions_by_difficulty(difficulty: str) -> list[QuizQuestion]:
    """Return copies of all questions of one difficulty."""
    return [
        copy.deepcopy(q)
        for q in QUIZ_QUESTION_BANK
        if q[const.DATA_QUESTION_DIFFICULTY] == difficulty
    ]


def _sample(
    count: int,
    category: str | None,
    difficulty: str | None,
    rng: random.Random | None,
) -> list[QuizQuestion]:
    chooser = rng or random
    candidates = [
        q
        for q in QUIZ_QUESTION_BANK
        if (not category or q[const.DATA_QUESTION_CATEGORY] == category)
        and (not difficulty or q[const.DATA_QUESTION_DIFFICULTY] == difficulty)
    ]
    picked = chooser.sample(candidates, k=min(max(count, 0), len(candidates)))
    return [copy.deepcopy(q) for q in picked]


def get_random_questions(
    count: int = const.DEFAULT_QUIZ_QUESTION_COUNT,
    category: str | None = None,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """Return up to ``count`` distinct questions in random order."""
    return _sample(count, category, None, rng)


def generate_quiz(
    count: int = const.DEFAULT_QUIZ_QUESTION_COUNT,
    category: str | None = None,
    difficulty: str | None = None,
    provider: QuizProvider | None = None,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """Produce quiz questions, never raising.

    The provider result is used when it returns at least one question. Any
    failure falls back to the question bank under the same filters, relaxing
    the difficulty filter and then the category filter when nothing matches.
    """
    if provider is not None:
        try:
            generated = [dict(q) for q in provider(count, category, difficulty)]
            if not generated:
                raise ValueError("Quiz generator returned no questions")
            return generated[:count]  # type: ignore[return-value]
        except Exception as err:  # pylint: disable=broad-exception-caught
            const.LOGGER.warning(
                "WARNING: Quiz generator failed, using question bank: %s", err
            )

    questions = _sample(count, category, difficulty, rng)
    if not questions and difficulty:
        questions = _sample(count, category, None, rng)
    if not questions:
        questions = _sample(count, None, None, rng)
    return questions
