# File: coordinator.py
"""Coordinator for the EcoQuest integration.

Owns the single mutable game state of a config entry and exposes every
progression operation: quest lifecycle, quiz and mini-game recording, daily
streak check-ins, profile edits and resets. Derived values (level, impact
metrics, achievement unlocks) are recomputed here after each mutation and the
resulting snapshot is handed to the store once per operation.
"""

# pylint: disable=too-many-public-methods

from __future__ import annotations

import copy
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from . import data_builders as db
from .content import ChallengeProvider, QuizProvider, generate_challenge, generate_quiz
from .engines import (
    AchievementEngine,
    AnalyticsEngine,
    PersonalizationEngine,
    ProgressionEngine,
    QuestEngine,
)
from .store import EcoQuestStore
from .type_defs import (
    Achievement,
    GameState,
    MiniGameScore,
    PlayerProfile,
    Quest,
    QuizQuestion,
    QuizSession,
)


class EcoQuestCoordinator(DataUpdateCoordinator[GameState]):
    """Coordinator for EcoQuest integration.

    All mutating operations are synchronous and run on the event loop, so no
    partially updated state is ever observable. Each accepts an optional
    ``now`` override used by tests.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: EcoQuestStore,
    ) -> None:
        """Initialize the EcoQuestCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.store = store
        self._data: GameState = db.build_default_game_state(dt_util.utcnow())
        self.challenge_provider: ChallengeProvider | None = None
        self.quiz_provider: QuizProvider | None = None

    # -------------------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------------------

    async def async_load_state(self) -> None:
        """Load the stored game or start a new one.

        A restored game is re-evaluated so achievements added to the catalog
        since the last save unlock immediately when already earned.
        """
        stored = await self.store.async_load()
        now = dt_util.utcnow()

        if stored is not None:
            self._data = stored
            if self._evaluate_achievements(now):
                self._persist()
            const.LOGGER.info(
                "INFO: Restored EcoQuest game for player '%s' (level %s)",
                self.player[const.DATA_PLAYER_NAME],
                self.player[const.DATA_PLAYER_LEVEL],
            )
        else:
            self._data = db.build_default_game_state(now, tz=self._tz)
            const.LOGGER.info("INFO: Started a new EcoQuest game")
            self._persist()

    async def async_config_entry_first_refresh(self) -> None:
        """Load from storage before the first refresh."""
        await self.async_load_state()
        await super().async_config_entry_first_refresh()

    async def _async_update_data(self) -> GameState:
        """Return the in-memory game state."""
        return self._data

    # -------------------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------------------

    @property
    def _tz(self) -> ZoneInfo:
        """Home Assistant's configured time zone (calendar day boundaries)."""
        return dt_util.get_time_zone(self.hass.config.time_zone) or ZoneInfo("UTC")

    def _persist(self) -> None:
        """Schedule a save of the current snapshot."""
        self.hass.async_create_task(
            self.store.async_save(copy.deepcopy(self._data)),
            f"{const.DOMAIN}_save",
        )

    def _persist_and_update(self, now: datetime) -> None:
        """Stamp, save once and notify listeners after a mutation."""
        self._data[const.DATA_LAST_UPDATED] = now
        self._persist()
        self.async_set_updated_data(self._data)

    def _touch(self, now: datetime) -> None:
        self.player[const.DATA_PLAYER_LAST_ACTIVE_AT] = now

    def _apply_xp(self, amount: int) -> None:
        """Credit XP and recompute the level."""
        player = self.player
        player[const.DATA_PLAYER_TOTAL_XP] += max(int(amount), 0)
        previous_level = player[const.DATA_PLAYER_LEVEL]
        player[const.DATA_PLAYER_LEVEL] = ProgressionEngine.calculate_level(
            player[const.DATA_PLAYER_TOTAL_XP]
        )
        if player[const.DATA_PLAYER_LEVEL] > previous_level:
            const.LOGGER.info(
                "INFO: Player '%s' reached level %s",
                player[const.DATA_PLAYER_NAME],
                player[const.DATA_PLAYER_LEVEL],
            )

    def _evaluate_achievements(self, now: datetime) -> list[Achievement]:
        """Re-run the achievement engine and keep badges_earned in sync.

        Returns:
            Achievements unlocked by this evaluation.
        """
        before = self._data[const.DATA_ACHIEVEMENTS]
        after = AchievementEngine.evaluate(
            before,
            self.player,
            self._data[const.DATA_QUESTS],
            self._data[const.DATA_QUIZ_SESSIONS],
            self._data[const.DATA_MINI_GAME_SCORES],
            now=now,
        )
        self._data[const.DATA_ACHIEVEMENTS] = after
        self.player[const.DATA_PLAYER_STATS][const.DATA_STATS_BADGES_EARNED] = sum(
            1 for a in after if a.get(const.DATA_ACHIEVEMENT_UNLOCKED)
        )

        unlocked = AchievementEngine.newly_unlocked(before, after)
        for achievement in unlocked:
            const.LOGGER.info(
                "INFO: Achievement unlocked: %s",
                achievement[const.DATA_ACHIEVEMENT_TITLE],
            )
        return unlocked

    def _refresh_impact(self) -> None:
        stats = self.player[const.DATA_PLAYER_STATS]
        stats.update(
            PersonalizationEngine.impact_metrics(self.completed_quests, self.player)
        )

    # -------------------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------------------

    @property
    def game_state(self) -> GameState:
        """Return the live game state."""
        return self._data

    @property
    def player(self) -> PlayerProfile:
        """Return the player profile."""
        return self._data[const.DATA_PLAYER]

    @property
    def quests(self) -> list[Quest]:
        """Return all quests in insertion order."""
        return self._data[const.DATA_QUESTS]

    @property
    def achievements(self) -> list[Achievement]:
        """Return the full achievement list."""
        return self._data[const.DATA_ACHIEVEMENTS]

    @property
    def quiz_sessions(self) -> list[QuizSession]:
        """Return recorded quiz sessions."""
        return self._data[const.DATA_QUIZ_SESSIONS]

    @property
    def mini_game_scores(self) -> list[MiniGameScore]:
        """Return recorded mini-game plays."""
        return self._data[const.DATA_MINI_GAME_SCORES]

    @property
    def level(self) -> int:
        """Return the current level."""
        return ProgressionEngine.calculate_level(self.player[const.DATA_PLAYER_TOTAL_XP])

    @property
    def xp_for_next_level(self) -> int:
        """Return the total XP at which the next level starts."""
        return ProgressionEngine.xp_for_next_level(self.level)

    @property
    def progress_to_next_level(self) -> float:
        """Return how far into the current level the player is, in [0, 1]."""
        return ProgressionEngine.progress_to_next_level(
            self.player[const.DATA_PLAYER_TOTAL_XP], self.level
        )

    @property
    def available_quests(self) -> list[Quest]:
        """Return quests that have not been started yet."""
        return QuestEngine.filter_by_status(self.quests, const.QuestStatus.AVAILABLE)

    @property
    def completed_quests(self) -> list[Quest]:
        """Return completed quests."""
        return QuestEngine.filter_by_status(self.quests, const.QuestStatus.COMPLETED)

    @property
    def unlocked_achievements(self) -> list[Achievement]:
        """Return unlocked achievements."""
        return [a for a in self.achievements if a.get(const.DATA_ACHIEVEMENT_UNLOCKED)]

    @property
    def personalized_quests(self) -> list[Quest]:
        """Return available quests ranked for the player."""
        return PersonalizationEngine.personalized_quests(
            self.available_quests, self.player
        )

    def get_quest(self, quest_id: str) -> Quest | None:
        """Return a quest by id, or None."""
        return QuestEngine.find_quest(self.quests, quest_id)

    def build_export(self, now: datetime | None = None) -> dict[str, Any]:
        """Return the read-only progress report."""
        now = now or dt_util.utcnow()
        export = AnalyticsEngine.build_export(self._data, now, tz=self._tz)
        export["personalization"] = {
            "tips": PersonalizationEngine.personalized_tips(self.player),
            "next_action": PersonalizationEngine.next_recommended_action(
                self.player, self.available_quests
            ),
            "achievements": [
                a[const.DATA_ACHIEVEMENT_ID]
                for a in PersonalizationEngine.personalized_achievements(
                    self.player, self.achievements
                )
            ],
        }
        export["achievement_progress"] = {
            achievement_id: {"current": current, "threshold": threshold}
            for achievement_id, (current, threshold) in AchievementEngine.progress(
                self.achievements,
                self.player,
                self.quests,
                self.quiz_sessions,
                self.mini_game_scores,
            ).items()
        }
        return export

    # -------------------------------------------------------------------------------------
    # Quests
    # -------------------------------------------------------------------------------------

    def add_quest(self, quest: Quest, now: datetime | None = None) -> None:
        """Append a quest to the list."""
        now = now or dt_util.utcnow()
        self.quests.append(quest)
        const.LOGGER.debug(
            "DEBUG: Added quest '%s' (%s)",
            quest[const.DATA_QUEST_TITLE],
            quest[const.DATA_QUEST_ID],
        )
        self._touch(now)
        self._persist_and_update(now)

    def generate_quest(
        self,
        quest_type: str | None = None,
        difficulty: str | None = None,
        now: datetime | None = None,
    ) -> Quest:
        """Create a quest from the generator (or catalog) and add it."""
        now = now or dt_util.utcnow()
        template = generate_challenge(
            quest_type, difficulty, provider=self.challenge_provider
        )
        quest = db.build_quest(template, now)
        self.add_quest(quest, now=now)
        return quest

    def generate_quiz(
        self,
        count: int = const.DEFAULT_QUIZ_QUESTION_COUNT,
        category: str | None = None,
        difficulty: str | None = None,
    ) -> list[QuizQuestion]:
        """Return quiz questions from the generator (or question bank)."""
        return generate_quiz(count, category, difficulty, provider=self.quiz_provider)

    def update_quest(
        self,
        quest_id: str,
        updates: dict[str, Any],
        now: datetime | None = None,
    ) -> None:
        """Merge field updates into a quest.

        Status changes go through the quest state machine; completion must use
        complete_quest so its side effects are applied. Unknown ids are ignored.
        """
        quest = self.get_quest(quest_id)
        if quest is None:
            const.LOGGER.debug("DEBUG: update_quest ignored unknown quest %s", quest_id)
            return

        now = now or dt_util.utcnow()
        changed = False

        target_status = updates.get(const.DATA_QUEST_STATUS)
        if target_status is not None and target_status != quest[const.DATA_QUEST_STATUS]:
            if target_status == const.QuestStatus.COMPLETED:
                const.LOGGER.warning(
                    "WARNING: Quest %s must be completed with complete_quest", quest_id
                )
            elif QuestEngine.can_transition(
                quest[const.DATA_QUEST_STATUS], target_status
            ):
                quest[const.DATA_QUEST_STATUS] = target_status
                changed = True
            else:
                const.LOGGER.warning(
                    "WARNING: Invalid quest transition %s -> %s for %s",
                    quest[const.DATA_QUEST_STATUS],
                    target_status,
                    quest_id,
                )

        for key, value in updates.items():
            if key in const.QUEST_PROTECTED_FIELDS:
                continue
            quest[key] = value  # type: ignore[literal-required]
            changed = True

        if not changed:
            return

        self._touch(now)
        self._persist_and_update(now)

    def start_quest(self, quest_id: str, now: datetime | None = None) -> None:
        """Move an available quest to in-progress."""
        self.update_quest(
            quest_id, {const.DATA_QUEST_STATUS: const.QuestStatus.IN_PROGRESS}, now
        )

    def pause_quest(self, quest_id: str, now: datetime | None = None) -> None:
        """Move an in-progress quest back to available."""
        self.update_quest(
            quest_id, {const.DATA_QUEST_STATUS: const.QuestStatus.AVAILABLE}, now
        )

    def complete_quest(self, quest_id: str, now: datetime | None = None) -> None:
        """Complete a quest and apply its rewards.

        No-op when the quest is unknown or already completed, so repeated
        calls never double-credit XP.
        """
        quest = self.get_quest(quest_id)
        if quest is None:
            const.LOGGER.debug(
                "DEBUG: complete_quest ignored unknown quest %s", quest_id
            )
            return
        if QuestEngine.is_completed(quest):
            const.LOGGER.debug(
                "DEBUG: complete_quest ignored already completed quest %s", quest_id
            )
            return

        now = now or dt_util.utcnow()
        player = self.player

        quest[const.DATA_QUEST_STATUS] = const.QuestStatus.COMPLETED.value
        quest[const.DATA_QUEST_COMPLETED_AT] = now

        self._apply_xp(quest[const.DATA_QUEST_XP_REWARD])
        player[const.DATA_PLAYER_STATS][const.DATA_STATS_CHALLENGES_COMPLETED] += 1
        self._refresh_impact()
        player[const.DATA_PLAYER_WEEKLY_TARGET] = ProgressionEngine.advance_weekly_target(
            player[const.DATA_PLAYER_WEEKLY_TARGET], now
        )
        self._touch(now)
        self._evaluate_achievements(now)

        const.LOGGER.debug(
            "DEBUG: Completed quest '%s' for %s XP (total %s)",
            quest[const.DATA_QUEST_TITLE],
            quest[const.DATA_QUEST_XP_REWARD],
            player[const.DATA_PLAYER_TOTAL_XP],
        )
        self._persist_and_update(now)

    # -------------------------------------------------------------------------------------
    # Quizzes and mini-games
    # -------------------------------------------------------------------------------------

    def add_quiz_session(self, session: QuizSession, now: datetime | None = None) -> None:
        """Record a completed quiz and credit its XP."""
        now = now or dt_util.utcnow()
        self.quiz_sessions.append(session)
        self._apply_xp(session[const.DATA_QUIZ_SESSION_XP_EARNED])
        self.player[const.DATA_PLAYER_STATS][const.DATA_STATS_QUIZZES_COMPLETED] += 1
        self._touch(now)
        self._evaluate_achievements(now)

        const.LOGGER.debug(
            "DEBUG: Recorded quiz %s/%s for %s XP",
            session[const.DATA_QUIZ_SESSION_SCORE],
            len(session[const.DATA_QUIZ_SESSION_QUESTIONS]),
            session[const.DATA_QUIZ_SESSION_XP_EARNED],
        )
        self._persist_and_update(now)

    def submit_quiz(
        self,
        question_ids: list[str],
        answers: list[int],
        now: datetime | None = None,
    ) -> QuizSession:
        """Score answers against the question bank and record the session.

        Raises:
            GameDataValidationError: For mismatched or unknown questions.
        """
        now = now or dt_util.utcnow()
        session = db.build_quiz_session(question_ids, answers, now)
        self.add_quiz_session(session, now=now)
        return session

    def add_mini_game_score(
        self, score: MiniGameScore, now: datetime | None = None
    ) -> None:
        """Record a mini-game play and credit its XP."""
        now = now or dt_util.utcnow()
        self.mini_game_scores.append(score)
        self._apply_xp(score[const.DATA_GAME_SCORE_XP_EARNED])
        self.player[const.DATA_PLAYER_STATS][const.DATA_STATS_MINI_GAMES_PLAYED] += 1
        self._touch(now)
        self._evaluate_achievements(now)

        const.LOGGER.debug(
            "DEBUG: Recorded %s score %s for %s XP",
            score[const.DATA_GAME_SCORE_GAME_ID],
            score[const.DATA_GAME_SCORE_SCORE],
            score[const.DATA_GAME_SCORE_XP_EARNED],
        )
        self._persist_and_update(now)

    def record_mini_game(
        self, game_id: str, score: int, now: datetime | None = None
    ) -> MiniGameScore:
        """Convert a raw game score to XP and record it.

        Raises:
            GameDataValidationError: If the game id is unknown.
        """
        now = now or dt_util.utcnow()
        game_score = db.build_mini_game_score(game_id, score, now)
        self.add_mini_game_score(game_score, now=now)
        return game_score

    # -------------------------------------------------------------------------------------
    # Player
    # -------------------------------------------------------------------------------------

    def update_streak(self, now: datetime | None = None) -> None:
        """Apply a daily check-in to the streak."""
        now = now or dt_util.utcnow()
        player = self.player
        result = ProgressionEngine.apply_check_in(
            player[const.DATA_PLAYER_CURRENT_STREAK],
            player[const.DATA_PLAYER_LONGEST_STREAK],
            player[const.DATA_PLAYER_LAST_ACTIVE_AT],
            now,
            self._tz,
        )
        player[const.DATA_PLAYER_CURRENT_STREAK] = result.current_streak
        player[const.DATA_PLAYER_LONGEST_STREAK] = result.longest_streak
        self._touch(now)
        self._evaluate_achievements(now)

        if result.changed:
            const.LOGGER.debug(
                "DEBUG: Streak is now %s (longest %s)",
                result.current_streak,
                result.longest_streak,
            )
        self._persist_and_update(now)

    def update_player(
        self, updates: dict[str, Any], now: datetime | None = None
    ) -> None:
        """Shallow-merge profile updates into the player.

        Identity and progression fields (id, total_xp, level, joined_at) are
        never overwritten.
        """
        now = now or dt_util.utcnow()
        player = self.player
        for key, value in updates.items():
            if key in const.PLAYER_PROTECTED_FIELDS:
                const.LOGGER.warning(
                    "WARNING: update_player ignored protected field '%s'", key
                )
                continue
            player[key] = value  # type: ignore[literal-required]
        self._touch(now)
        self._persist_and_update(now)

    def apply_preferences(
        self, user_input: dict[str, Any], now: datetime | None = None
    ) -> None:
        """Apply onboarding or options flow input to the player profile.

        Names are only changed when present in the input; the weekly target
        keeps its current window and progress.
        """
        updates: dict[str, Any] = {
            const.DATA_PLAYER_PREFERENCES: db.build_preferences(user_input),
            const.DATA_PLAYER_ONBOARDING_COMPLETE: True,
        }
        if name := user_input.get(const.CONF_PLAYER_NAME):
            updates[const.DATA_PLAYER_NAME] = name
        if const.CONF_DISPLAY_NAME in user_input:
            updates[const.DATA_PLAYER_DISPLAY_NAME] = user_input[const.CONF_DISPLAY_NAME]
        if const.CONF_CHALLENGES_PER_WEEK in user_input:
            weekly_target = dict(self.player[const.DATA_PLAYER_WEEKLY_TARGET])
            weekly_target[const.DATA_WEEKLY_CHALLENGES_PER_WEEK] = int(
                user_input[const.CONF_CHALLENGES_PER_WEEK]
            )
            updates[const.DATA_PLAYER_WEEKLY_TARGET] = weekly_target

        const.LOGGER.debug("DEBUG: Applying player preferences: %s", list(updates))
        self.update_player(updates, now=now)

    def reset_game(self, now: datetime | None = None) -> None:
        """Replace the game with a brand new one."""
        now = now or dt_util.utcnow()
        self._data = db.build_default_game_state(now, tz=self._tz)
        const.LOGGER.warning("WARNING: EcoQuest game state has been reset")
        self._persist_and_update(now)
