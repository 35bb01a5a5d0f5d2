"""Analytics Engine - Pure logic for progress reports.

Builds the read-only progress export returned by the export_progress service
and included in diagnostics:
- Daily activity buckets over a trailing window
- Per quest type statistics
- Streak history
- Progress insights and improvement areas
- This week versus last week XP

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
Day buckets use the local calendar of the timezone passed in (or the
dt_utils default).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from .. import const
from ..utils.dt_utils import dt_local_date, dt_to_iso
from ..utils.math_utils import percent_change

if TYPE_CHECKING:
    from ..type_defs import (
        Achievement,
        ActivityDay,
        CategoryStats,
        GameState,
        MiniGameScore,
        PlayerProfile,
        Quest,
        QuizSession,
        WeeklyComparison,
    )

IMPROVE_STREAK = "Build a longer daily streak"
IMPROVE_CATEGORIES = "Try activities in all categories"
IMPROVE_QUIZZES = "Take more quizzes to test knowledge"
IMPROVE_GAMES = "Play more mini-games for fun learning"

STREAK_IMPROVEMENT_THRESHOLD = 3
QUIZ_IMPROVEMENT_THRESHOLD = 5
GAME_IMPROVEMENT_THRESHOLD = 3


class AnalyticsEngine:
    """Pure logic engine for progress analytics.

    All methods are static - no instance state.
    """

    @staticmethod
    def activity_data(
        quests: list[Quest],
        quiz_sessions: list[QuizSession],
        game_scores: list[MiniGameScore],
        now: datetime,
        days: int = const.ANALYTICS_ACTIVITY_DAYS,
        tz: ZoneInfo | None = None,
    ) -> list[ActivityDay]:
        """Return one row per local day for the ``days`` days ending today.

        Rows are ordered oldest first. Activity outside the window is ignored.
        """
        today = dt_local_date(now, tz)
        rows: dict[date, ActivityDay] = {}
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            rows[day] = {
                "date": day.isoformat(),
                "challenges": 0,
                "quizzes": 0,
                "games": 0,
                "xp_earned": 0,
            }

        for quest in quests:
            completed_at = quest.get(const.DATA_QUEST_COMPLETED_AT)
            if quest[const.DATA_QUEST_STATUS] != const.QuestStatus.COMPLETED:
                continue
            if completed_at is None:
                continue
            row = rows.get(dt_local_date(completed_at, tz))
            if row is not None:
                row["challenges"] += 1
                row["xp_earned"] += quest[const.DATA_QUEST_XP_REWARD]

        for session in quiz_sessions:
            row = rows.get(dt_local_date(session[const.DATA_QUIZ_SESSION_COMPLETED_AT], tz))
            if row is not None:
                row["quizzes"] += 1
                row["xp_earned"] += session[const.DATA_QUIZ_SESSION_XP_EARNED]

        for score in game_scores:
            row = rows.get(dt_local_date(score[const.DATA_GAME_SCORE_PLAYED_AT], tz))
            if row is not None:
                row["games"] += 1
                row["xp_earned"] += score[const.DATA_GAME_SCORE_XP_EARNED]

        return list(rows.values())

    @staticmethod
    def category_stats(
        quests: list[Quest], quiz_sessions: list[QuizSession]
    ) -> list[CategoryStats]:
        """Return completed counts, XP and average quiz score per quest type.

        A quiz counts toward every category any of its questions belongs to.
        """
        stats: list[CategoryStats] = []
        for category in const.QUEST_TYPES:
            completed = [
                q
                for q in quests
                if q[const.DATA_QUEST_TYPE] == category
                and q[const.DATA_QUEST_STATUS] == const.QuestStatus.COMPLETED
            ]
            sessions = [
                s
                for s in quiz_sessions
                if any(
                    question[const.DATA_QUESTION_CATEGORY] == category
                    for question in s[const.DATA_QUIZ_SESSION_QUESTIONS]
                )
            ]
            percentages = [
                s[const.DATA_QUIZ_SESSION_SCORE]
                / len(s[const.DATA_QUIZ_SESSION_QUESTIONS])
                * 100
                for s in sessions
            ]
            stats.append(
                {
                    "category": category,
                    "name": category.capitalize(),
                    "completed": len(completed) + len(sessions),
                    "total_xp": sum(q[const.DATA_QUEST_XP_REWARD] for q in completed)
                    + sum(s[const.DATA_QUIZ_SESSION_XP_EARNED] for s in sessions),
                    "average_score": round(sum(percentages) / len(percentages))
                    if percentages
                    else 0,
                }
            )
        return stats

    @staticmethod
    def streak_data(
        player: PlayerProfile, activity: list[ActivityDay]
    ) -> dict[str, Any]:
        """Return current and longest streak plus per-day activity flags."""
        return {
            "current_streak": player[const.DATA_PLAYER_CURRENT_STREAK],
            "longest_streak": player[const.DATA_PLAYER_LONGEST_STREAK],
            "history": [
                {
                    "date": row["date"],
                    "active": bool(row["challenges"] or row["quizzes"] or row["games"]),
                }
                for row in activity
            ],
        }

    @staticmethod
    def progress_insights(
        player: PlayerProfile,
        quests: list[Quest],
        quiz_sessions: list[QuizSession],
        game_scores: list[MiniGameScore],
        achievements: list[Achievement],
        activity: list[ActivityDay],
    ) -> dict[str, Any]:
        """Summarize overall progress and suggest areas to improve."""
        completed_count = sum(
            1
            for q in quests
            if q[const.DATA_QUEST_STATUS] == const.QuestStatus.COMPLETED
        )
        quiz_count = len(quiz_sessions)
        game_count = len(game_scores)
        total_xp = player[const.DATA_PLAYER_TOTAL_XP]

        active_days = sum(1 for row in activity if row["xp_earned"] > 0)
        average_xp_per_day = round(total_xp / active_days) if active_days else 0

        categories = AnalyticsEngine.category_stats(quests, quiz_sessions)
        # First category wins ties
        most_active = categories[0]
        for entry in categories[1:]:
            if entry["completed"] > most_active["completed"]:
                most_active = entry

        favorite = const.ACTIVITY_CHALLENGES
        if quiz_count > completed_count and quiz_count > game_count:
            favorite = const.ACTIVITY_QUIZZES
        elif game_count > completed_count and game_count > quiz_count:
            favorite = const.ACTIVITY_GAMES

        improvement_areas: list[str] = []
        if player[const.DATA_PLAYER_CURRENT_STREAK] < STREAK_IMPROVEMENT_THRESHOLD:
            improvement_areas.append(IMPROVE_STREAK)
        if any(entry["completed"] == 0 for entry in categories):
            improvement_areas.append(IMPROVE_CATEGORIES)
        if quiz_count < QUIZ_IMPROVEMENT_THRESHOLD:
            improvement_areas.append(IMPROVE_QUIZZES)
        if game_count < GAME_IMPROVEMENT_THRESHOLD:
            improvement_areas.append(IMPROVE_GAMES)

        unlocked = [a for a in achievements if a.get(const.DATA_ACHIEVEMENT_UNLOCKED)]
        recent = sorted(
            (a for a in unlocked if a.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT)),
            key=lambda a: a[const.DATA_ACHIEVEMENT_UNLOCKED_AT],
            reverse=True,
        )[: const.ANALYTICS_RECENT_ACHIEVEMENTS]

        return {
            "total_activities": completed_count + quiz_count + game_count,
            "total_xp_earned": total_xp,
            "average_xp_per_day": average_xp_per_day,
            "most_active_category": most_active["name"],
            "favorite_activity": favorite,
            "improvement_areas": improvement_areas,
            "achievements": {
                "total": len(unlocked),
                "recent": [
                    {
                        "id": a[const.DATA_ACHIEVEMENT_ID],
                        "title": a[const.DATA_ACHIEVEMENT_TITLE],
                        "unlocked_at": dt_to_iso(a[const.DATA_ACHIEVEMENT_UNLOCKED_AT]),
                    }
                    for a in recent
                ],
            },
        }

    @staticmethod
    def weekly_comparison(activity: list[ActivityDay]) -> WeeklyComparison:
        """Compare XP of the last seven rows with the seven rows before them."""
        this_week = sum(row["xp_earned"] for row in activity[-7:])
        last_week = sum(row["xp_earned"] for row in activity[-14:-7])
        return {
            "this_week": this_week,
            "last_week": last_week,
            "change": percent_change(this_week, last_week),
        }

    @staticmethod
    def build_export(
        state: GameState, now: datetime, tz: ZoneInfo | None = None
    ) -> dict[str, Any]:
        """Return the complete progress report for a game state snapshot."""
        player = state[const.DATA_PLAYER]
        quests = state[const.DATA_QUESTS]
        sessions = state[const.DATA_QUIZ_SESSIONS]
        scores = state[const.DATA_MINI_GAME_SCORES]
        achievements = state[const.DATA_ACHIEVEMENTS]

        activity = AnalyticsEngine.activity_data(quests, sessions, scores, now, tz=tz)
        return {
            "generated_at": dt_to_iso(now),
            "player": {
                "name": player[const.DATA_PLAYER_NAME],
                "level": player[const.DATA_PLAYER_LEVEL],
                "total_xp": player[const.DATA_PLAYER_TOTAL_XP],
                "stats": dict(player[const.DATA_PLAYER_STATS]),
            },
            "activity": activity,
            "categories": AnalyticsEngine.category_stats(quests, sessions),
            "streak": AnalyticsEngine.streak_data(player, activity),
            "insights": AnalyticsEngine.progress_insights(
                player, quests, sessions, scores, achievements, activity
            ),
            "weekly_comparison": AnalyticsEngine.weekly_comparison(activity),
        }
