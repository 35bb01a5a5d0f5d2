# File: store.py
"""Handles persistent data storage for the EcoQuest integration.

Uses Home Assistant's Storage helper to save and load the game state under a
single fixed key, so progress is preserved across restarts. Timestamps are
stored as ISO 8601 strings and revived to UTC datetimes on load. Snapshots
written by older versions are backfilled with current defaults.
"""

from __future__ import annotations

import copy
from datetime import datetime
from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const
from . import data_builders as db
from .engines.progression_engine import ProgressionEngine
from .utils.dt_utils import dt_now_utc, dt_to_iso, dt_to_utc

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import GameState


class MalformedStateError(ValueError):
    """Raised when stored data cannot be turned into a game state."""


def _revive(value: Any, field: str, *, optional: bool = False) -> datetime | None:
    """Parse a stored timestamp, raising MalformedStateError when invalid."""
    if value is None and optional:
        return None
    if isinstance(value, datetime):
        return value
    parsed = dt_to_utc(value)
    if parsed is None:
        raise MalformedStateError(f"Invalid timestamp for '{field}': {value!r}")
    return parsed


class EcoQuestStore:
    """Handles persistent storage operations for EcoQuest game state.

    Thin wrapper around Home Assistant's Store API. The in-memory state is
    owned by the coordinator; this class only converts and moves snapshots.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)

    # -------------------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------------------

    @staticmethod
    def serialize(state: GameState, saved_at: datetime) -> dict[str, Any]:
        """Return a JSON-compatible copy of the state with every date as ISO text.

        The top-level last_updated is set to ``saved_at``.
        """
        data: dict[str, Any] = copy.deepcopy(dict(state))

        player = data[const.DATA_PLAYER]
        for key in (const.DATA_PLAYER_JOINED_AT, const.DATA_PLAYER_LAST_ACTIVE_AT):
            player[key] = dt_to_iso(player[key])
        weekly = player[const.DATA_PLAYER_WEEKLY_TARGET]
        weekly[const.DATA_WEEKLY_WEEK_START] = dt_to_iso(
            weekly[const.DATA_WEEKLY_WEEK_START]
        )

        for quest in data[const.DATA_QUESTS]:
            quest[const.DATA_QUEST_CREATED_AT] = dt_to_iso(
                quest[const.DATA_QUEST_CREATED_AT]
            )
            quest[const.DATA_QUEST_COMPLETED_AT] = dt_to_iso(
                quest.get(const.DATA_QUEST_COMPLETED_AT)
            )
        for achievement in data[const.DATA_ACHIEVEMENTS]:
            achievement[const.DATA_ACHIEVEMENT_UNLOCKED_AT] = dt_to_iso(
                achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT)
            )
        for session in data[const.DATA_QUIZ_SESSIONS]:
            session[const.DATA_QUIZ_SESSION_COMPLETED_AT] = dt_to_iso(
                session[const.DATA_QUIZ_SESSION_COMPLETED_AT]
            )
        for score in data[const.DATA_MINI_GAME_SCORES]:
            score[const.DATA_GAME_SCORE_PLAYED_AT] = dt_to_iso(
                score[const.DATA_GAME_SCORE_PLAYED_AT]
            )

        data[const.DATA_LAST_UPDATED] = dt_to_iso(saved_at)
        return data

    @staticmethod
    def deserialize(raw: dict[str, Any]) -> GameState:
        """Rebuild a game state from stored data.

        Fills defaults for fields older snapshots lack and appends locked
        records for catalog achievements the snapshot does not know about.

        Raises:
            MalformedStateError: If required structure or timestamps are missing.
        """
        if not isinstance(raw, dict) or not isinstance(raw.get(const.DATA_PLAYER), dict):
            raise MalformedStateError("Stored state has no player record")

        data: dict[str, Any] = copy.deepcopy(raw)
        for key in (
            const.DATA_QUESTS,
            const.DATA_ACHIEVEMENTS,
            const.DATA_QUIZ_SESSIONS,
            const.DATA_MINI_GAME_SCORES,
        ):
            if not isinstance(data.get(key), list):
                raise MalformedStateError(f"Stored state has no '{key}' list")

        last_updated = data.get(const.DATA_LAST_UPDATED)
        data[const.DATA_LAST_UPDATED] = (
            _revive(last_updated, const.DATA_LAST_UPDATED)
            if last_updated is not None
            else dt_now_utc()
        )
        data.setdefault(
            const.DATA_META, {const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION}
        )

        EcoQuestStore._revive_player(data[const.DATA_PLAYER], data[const.DATA_LAST_UPDATED])

        for quest in data[const.DATA_QUESTS]:
            quest[const.DATA_QUEST_CREATED_AT] = _revive(
                quest.get(const.DATA_QUEST_CREATED_AT), const.DATA_QUEST_CREATED_AT
            )
            quest[const.DATA_QUEST_COMPLETED_AT] = _revive(
                quest.get(const.DATA_QUEST_COMPLETED_AT),
                const.DATA_QUEST_COMPLETED_AT,
                optional=True,
            )
            quest.setdefault(const.DATA_QUEST_IS_AI_GENERATED, False)

        for achievement in data[const.DATA_ACHIEVEMENTS]:
            achievement[const.DATA_ACHIEVEMENT_UNLOCKED_AT] = _revive(
                achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT),
                const.DATA_ACHIEVEMENT_UNLOCKED_AT,
                optional=True,
            )
            achievement.setdefault(const.DATA_ACHIEVEMENT_UNLOCKED, False)
        EcoQuestStore._complete_achievement_catalog(data[const.DATA_ACHIEVEMENTS])

        for session in data[const.DATA_QUIZ_SESSIONS]:
            session[const.DATA_QUIZ_SESSION_COMPLETED_AT] = _revive(
                session.get(const.DATA_QUIZ_SESSION_COMPLETED_AT),
                const.DATA_QUIZ_SESSION_COMPLETED_AT,
            )
        for score in data[const.DATA_MINI_GAME_SCORES]:
            score[const.DATA_GAME_SCORE_PLAYED_AT] = _revive(
                score.get(const.DATA_GAME_SCORE_PLAYED_AT),
                const.DATA_GAME_SCORE_PLAYED_AT,
            )

        return data  # type: ignore[return-value]

    @staticmethod
    def _revive_player(player: dict[str, Any], fallback_now: datetime) -> None:
        """Revive player timestamps and backfill fields added after v1 snapshots."""
        for key in (
            const.DATA_PLAYER_ID,
            const.DATA_PLAYER_NAME,
            const.DATA_PLAYER_TOTAL_XP,
        ):
            if key not in player:
                raise MalformedStateError(f"Stored player has no '{key}'")

        # Level always follows total XP
        player[const.DATA_PLAYER_LEVEL] = ProgressionEngine.calculate_level(
            player[const.DATA_PLAYER_TOTAL_XP]
        )

        player[const.DATA_PLAYER_JOINED_AT] = _revive(
            player.get(const.DATA_PLAYER_JOINED_AT), const.DATA_PLAYER_JOINED_AT
        )
        player[const.DATA_PLAYER_LAST_ACTIVE_AT] = _revive(
            player.get(const.DATA_PLAYER_LAST_ACTIVE_AT),
            const.DATA_PLAYER_LAST_ACTIVE_AT,
        )

        player.setdefault(const.DATA_PLAYER_DISPLAY_NAME, "")
        player.setdefault(const.DATA_PLAYER_CURRENT_STREAK, 0)
        player.setdefault(
            const.DATA_PLAYER_LONGEST_STREAK, player[const.DATA_PLAYER_CURRENT_STREAK]
        )
        player.setdefault(const.DATA_PLAYER_PERSONAL_GOALS, [])
        player.setdefault(const.DATA_PLAYER_ONBOARDING_COMPLETE, False)

        stats = player.setdefault(const.DATA_PLAYER_STATS, {})
        for key, default in db.build_default_stats().items():
            stats.setdefault(key, default)

        preferences = player.setdefault(const.DATA_PLAYER_PREFERENCES, {})
        for key, default in db.build_default_preferences().items():
            preferences.setdefault(key, default)

        weekly = player.get(const.DATA_PLAYER_WEEKLY_TARGET)
        if not isinstance(weekly, dict):
            player[const.DATA_PLAYER_WEEKLY_TARGET] = db.build_default_weekly_target(
                fallback_now
            )
        else:
            weekly.setdefault(
                const.DATA_WEEKLY_CHALLENGES_PER_WEEK, const.DEFAULT_CHALLENGES_PER_WEEK
            )
            weekly.setdefault(const.DATA_WEEKLY_CURRENT_PROGRESS, 0)
            week_start = weekly.get(const.DATA_WEEKLY_WEEK_START)
            weekly[const.DATA_WEEKLY_WEEK_START] = (
                _revive(week_start, const.DATA_WEEKLY_WEEK_START)
                if week_start is not None
                else db.build_default_weekly_target(fallback_now)[
                    const.DATA_WEEKLY_WEEK_START
                ]
            )

    @staticmethod
    def _complete_achievement_catalog(achievements: list[dict[str, Any]]) -> None:
        """Append locked records for catalog achievements missing from storage."""
        known = {a.get(const.DATA_ACHIEVEMENT_ID) for a in achievements}
        for locked in db.build_catalog_achievements():
            if locked[const.DATA_ACHIEVEMENT_ID] not in known:
                const.LOGGER.debug(
                    "DEBUG: Adding new achievement to stored state: %s",
                    locked[const.DATA_ACHIEVEMENT_ID],
                )
                achievements.append(dict(locked))

    # -------------------------------------------------------------------------------------
    # Storage I/O
    # -------------------------------------------------------------------------------------

    async def async_load(self) -> GameState | None:
        """Load the stored game state.

        Returns:
            The revived state, or None when nothing is stored or the stored
            data is unreadable. Errors are logged, never raised.
        """
        const.LOGGER.debug("DEBUG: EcoQuestStore: Loading data from storage")
        try:
            raw = await self._store.async_load()
        except (HomeAssistantError, OSError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to read storage %s: %s. Starting a new game",
                self._store.path,
                err,
            )
            return None

        if raw is None:
            const.LOGGER.info("INFO: No existing storage found")
            return None

        try:
            state = self.deserialize(raw)
        except (MalformedStateError, KeyError, TypeError, AttributeError) as err:
            const.LOGGER.error(
                "ERROR: Stored game state is malformed: %s. Starting a new game", err
            )
            return None

        const.LOGGER.debug(
            "DEBUG: Loaded game state: %s",
            {
                "quests": len(state[const.DATA_QUESTS]),
                "achievements": len(state[const.DATA_ACHIEVEMENTS]),
                "quiz_sessions": len(state[const.DATA_QUIZ_SESSIONS]),
                "mini_game_scores": len(state[const.DATA_MINI_GAME_SCORES]),
            },
        )
        return state

    async def async_save(self, state: GameState) -> None:
        """Save a game state snapshot to storage.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        try:
            await self._store.async_save(self.serialize(state, dt_now_utc()))
            const.LOGGER.debug("DEBUG: Game state saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_clear(self) -> None:
        """Delete the storage file completely from disk."""
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
