# File: content/challenges.py
"""Quest template library and quest generation.

The library holds four templates per quest type. ``generate_challenge`` is the
single entry point used by the coordinator: it asks an optional provider (for
example an AI-backed generator) for a template and falls back to a random
catalog pick when no provider is configured or the provider fails.
"""

from __future__ import annotations

from collections.abc import Callable
import copy
import random
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import QuestTemplate

ChallengeProvider = Callable[[str | None, str | None], "QuestTemplate"]


def _template(
    title: str,
    description: str,
    quest_type: const.QuestType,
    difficulty: const.Difficulty,
    xp_reward: int,
    realm: str,
) -> QuestTemplate:
    return {
        const.DATA_QUEST_TITLE: title,
        const.DATA_QUEST_DESCRIPTION: description,
        const.DATA_QUEST_TYPE: quest_type.value,
        const.DATA_QUEST_DIFFICULTY: difficulty.value,
        const.DATA_QUEST_XP_REWARD: xp_reward,
        const.DATA_QUEST_REALM: realm,
        const.DATA_QUEST_IS_AI_GENERATED: False,
    }


REALM_WASTE = "Waste Warrior Realm"
REALM_WATER = "Aqua Guardian Realm"
REALM_ENERGY = "Power Saver Realm"
REALM_TRANSPORT = "Green Mobility Realm"
REALM_BIODIVERSITY = "Nature Guardian Realm"

_W = const.QuestType
_D = const.Difficulty

CHALLENGE_LIBRARY: tuple[QuestTemplate, ...] = (
    # Waste
    _template(
        "Plastic-Free Day Challenge",
        "Go an entire day without using any single-use plastic items. Document "
        "alternatives you used and share your experience.",
        _W.WASTE,
        _D.MEDIUM,
        150,
        REALM_WASTE,
    ),
    _template(
        "Waste Audit Adventure",
        "Conduct a waste audit of your household for one week. Categorize and "
        "weigh different types of waste, then create an action plan to reduce it.",
        _W.WASTE,
        _D.HARD,
        200,
        REALM_WASTE,
    ),
    _template(
        "Upcycling Creation",
        "Transform at least 3 items that would normally be thrown away into "
        "something useful or decorative. Share photos of your creations.",
        _W.WASTE,
        _D.MEDIUM,
        175,
        REALM_WASTE,
    ),
    _template(
        "Zero Waste Lunch Week",
        "Pack waste-free lunches for an entire school/work week using reusable "
        "containers, utensils, and napkins.",
        _W.WASTE,
        _D.EASY,
        100,
        REALM_WASTE,
    ),
    # Water
    _template(
        "Water Usage Tracker",
        "Track your daily water usage for a week and implement 3 water-saving "
        "techniques. Calculate how much water you saved.",
        _W.WATER,
        _D.MEDIUM,
        150,
        REALM_WATER,
    ),
    _template(
        "Rainwater Harvesting Setup",
        "Set up a simple rainwater collection system at home or school. Use the "
        "collected water for plants or cleaning.",
        _W.WATER,
        _D.HARD,
        200,
        REALM_WATER,
    ),
    _template(
        "Shower Timer Challenge",
        "Reduce your shower time to 5 minutes or less for two weeks. Track your "
        "water savings and share tips with others.",
        _W.WATER,
        _D.EASY,
        100,
        REALM_WATER,
    ),
    _template(
        "Greywater Garden Project",
        "Create a simple greywater system to reuse water from sinks or washing "
        "machines for watering plants.",
        _W.WATER,
        _D.HARD,
        225,
        REALM_WATER,
    ),
    # Energy
    _template(
        "Energy Detective Mission",
        "Identify and eliminate 5 energy vampires in your home (devices that "
        "consume power when not in use).",
        _W.ENERGY,
        _D.EASY,
        100,
        REALM_ENERGY,
    ),
    _template(
        "Solar Cooking Experiment",
        "Build a simple solar cooker and use it to prepare a meal. Document the "
        "process and cooking time.",
        _W.ENERGY,
        _D.HARD,
        200,
        REALM_ENERGY,
    ),
    _template(
        "LED Light Conversion",
        "Replace all incandescent bulbs in one room with LED bulbs. Calculate "
        "the energy and cost savings over a year.",
        _W.ENERGY,
        _D.MEDIUM,
        150,
        REALM_ENERGY,
    ),
    _template(
        "Unplugged Day Challenge",
        "Spend an entire day using minimal electricity: no TV, computer, or "
        "unnecessary lights. Find alternative activities.",
        _W.ENERGY,
        _D.MEDIUM,
        175,
        REALM_ENERGY,
    ),
    # Transport
    _template(
        "Car-Free Week",
        "Use only sustainable transportation (walking, cycling, public transport) "
        "for one week. Track your carbon footprint reduction.",
        _W.TRANSPORT,
        _D.MEDIUM,
        150,
        REALM_TRANSPORT,
    ),
    _template(
        "Bike Commute Challenge",
        "Cycle to school or work for 10 days. Calculate the distance covered and "
        "emissions avoided.",
        _W.TRANSPORT,
        _D.EASY,
        125,
        REALM_TRANSPORT,
    ),
    _template(
        "Public Transport Explorer",
        "Use only public transportation for two weeks. Create a guide of the "
        "most efficient routes in your area.",
        _W.TRANSPORT,
        _D.EASY,
        100,
        REALM_TRANSPORT,
    ),
    _template(
        "Carpooling Coordinator",
        "Organize a carpooling system for your school or workplace. Get at least "
        "5 people to participate for one month.",
        _W.TRANSPORT,
        _D.HARD,
        200,
        REALM_TRANSPORT,
    ),
    # Biodiversity
    _template(
        "Native Plant Garden",
        "Create a small garden with at least 5 native plant species. Research "
        "their benefits to local wildlife.",
        _W.BIODIVERSITY,
        _D.MEDIUM,
        175,
        REALM_BIODIVERSITY,
    ),
    _template(
        "Wildlife Habitat Builder",
        "Build and install 3 different wildlife habitats (bird house, bee hotel, "
        "butterfly garden) in your area.",
        _W.BIODIVERSITY,
        _D.HARD,
        225,
        REALM_BIODIVERSITY,
    ),
    _template(
        "Species Documentation Project",
        "Document 20 different species (plants, birds, insects) in your local "
        "area with photos and descriptions.",
        _W.BIODIVERSITY,
        _D.MEDIUM,
        150,
        REALM_BIODIVERSITY,
    ),
    _template(
        "Pollinator Garden Challenge",
        "Plant a pollinator-friendly garden with at least 8 different flowering "
        "plants that bloom throughout the season.",
        _W.BIODIVERSITY,
        _D.EASY,
        125,
        REALM_BIODIVERSITY,
    ),
)


def get_random_challenge(rng: random.Random | None = None) -> QuestTemplate:
    """Return a copy of a uniformly chosen template."""
    chooser = rng or random
    return copy.deepcopy(chooser.choice(CHALLENGE_LIBRARY))


def get_challenges_by_type(quest_type: str) -> list[QuestTemplate]:
    """Return copies of all templates of one quest type."""
    return [
        copy.deepcopy(template)
        for template in CHALLENGE_LIBRARY
        if template[const.DATA_QUEST_TYPE] == quest_type
    ]


def get_challenges_by_difficulty(difficulty: str) -> list[QuestTemplate]:
    """Return copies of all templates of one difficulty."""
    return [
        copy.deepcopy(template)
        for template in CHALLENGE_LIBRARY
        if template[const.DATA_QUEST_DIFFICULTY] == difficulty
    ]


def _pick_from_catalog(
    quest_type: str | None,
    difficulty: str | None,
    rng: random.Random | None,
) -> QuestTemplate:
    chooser = rng or random
    candidates = [
        template
        for template in CHALLENGE_LIBRARY
        if (not quest_type or template[const.DATA_QUEST_TYPE] == quest_type)
        and (not difficulty or template[const.DATA_QUEST_DIFFICULTY] == difficulty)
    ]
    if not candidates:
        const.LOGGER.debug(
            "DEBUG: No templates match type=%s difficulty=%s, using full library",
            quest_type,
            difficulty,
        )
        return get_random_challenge(rng)
    return copy.deepcopy(chooser.choice(candidates))


def generate_challenge(
    quest_type: str | None = None,
    difficulty: str | None = None,
    provider: ChallengeProvider | None = None,
    rng: random.Random | None = None,
) -> QuestTemplate:
    """Produce a quest template, never raising.

    Args:
        quest_type: Optional quest type filter.
        difficulty: Optional difficulty filter.
        provider: Optional external generator. Its output is tagged as AI
            generated. Any failure falls back to the static catalog.
        rng: Optional random source for deterministic selection.

    Returns:
        A new template dict the caller may freely modify.
    """
    if provider is not None:
        try:
            generated = dict(provider(quest_type, difficulty))
            for key in (
                const.DATA_QUEST_TITLE,
                const.DATA_QUEST_DESCRIPTION,
                const.DATA_QUEST_TYPE,
                const.DATA_QUEST_DIFFICULTY,
                const.DATA_QUEST_XP_REWARD,
                const.DATA_QUEST_REALM,
            ):
                if key not in generated:
                    raise ValueError(f"Generated quest is missing '{key}'")
            generated[const.DATA_QUEST_IS_AI_GENERATED] = True
            return generated  # type: ignore[return-value]
        except Exception as err:  # pylint: disable=broad-exception-caught
            const.LOGGER.warning(
                "WARNING: Quest generator failed, using challenge library: %s", err
            )

    return _pick_from_catalog(quest_type, difficulty, rng)
