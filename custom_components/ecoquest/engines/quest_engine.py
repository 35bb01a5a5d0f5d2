"""Quest Engine - Pure logic for the quest lifecycle.

Quest states:
    available → in-progress (start)
    in-progress → available (pause)
    available | in-progress → completed (terminal)

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
The coordinator applies the effects of a completion (XP, stats, targets).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from ..type_defs import Quest


class QuestEngine:
    """Pure logic engine for quest state transitions.

    All methods are static - no instance state.
    """

    # Valid state transitions matrix
    VALID_TRANSITIONS: dict[str, list[str]] = {
        const.QuestStatus.AVAILABLE: [
            const.QuestStatus.IN_PROGRESS,
            const.QuestStatus.COMPLETED,
        ],
        const.QuestStatus.IN_PROGRESS: [
            const.QuestStatus.AVAILABLE,
            const.QuestStatus.COMPLETED,
        ],
        # Completed is terminal
        const.QuestStatus.COMPLETED: [],
    }

    @staticmethod
    def can_transition(current_state: str, target_state: str) -> bool:
        """Validate if a state transition is allowed."""
        valid_targets = QuestEngine.VALID_TRANSITIONS.get(current_state, [])
        return target_state in valid_targets

    @staticmethod
    def is_completed(quest: Quest | dict[str, Any]) -> bool:
        """Return True if the quest reached the terminal state."""
        return quest.get(const.DATA_QUEST_STATUS) == const.QuestStatus.COMPLETED

    @staticmethod
    def find_quest(quests: list[Quest], quest_id: str) -> Quest | None:
        """Return the quest with the given id, or None."""
        for quest in quests:
            if quest[const.DATA_QUEST_ID] == quest_id:
                return quest
        return None

    @staticmethod
    def filter_by_status(quests: list[Quest], status: str) -> list[Quest]:
        """Return quests in one state, preserving order."""
        return [q for q in quests if q[const.DATA_QUEST_STATUS] == status]
