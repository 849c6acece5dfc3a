"""Activity statistics and achievement evaluation."""

from collections import Counter
from datetime import date, datetime, timedelta
from pathlib import Path

from ..db.repositories import ActivityRepository
from ..models.achievements import Achievement, ActivityStats, unlocked_achievements

EARLY_BIRD_HOUR = 8
NIGHT_OWL_HOUR = 22


def _streaks(days: list[date], today: date) -> tuple[int, int]:
    """Return (current, longest) runs of consecutive active days.

    The current streak still counts if the last active day was yesterday.
    """
    if not days:
        return 0, 0

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    current_streak = 0
    if today - days[-1] <= timedelta(days=1):
        current_streak = 1
        for previous, current in zip(reversed(days[:-1]), reversed(days[1:])):
            if current - previous != timedelta(days=1):
                break
            current_streak += 1

    return current_streak, longest


def build_stats(
    sessions: list[tuple[datetime, int]],
    exercise_counts: dict[str, int],
    extension_count: int,
    today: date | None = None,
) -> ActivityStats:
    """Derive lifetime counters from the activity log.

    Args:
        sessions: Completed sessions as (completed_at, work_minutes)
        exercise_counts: Completion count per exercise id
        extension_count: Number of granted break extensions
        today: Reference day for the current streak (defaults to today)

    Returns:
        ActivityStats for the achievements
    """
    today = today or date.today()
    per_day = Counter(completed_at.date() for completed_at, _ in sessions)
    days = sorted(per_day)
    current_streak, longest_streak = _streaks(days, today)

    day_set = set(days)
    weekend_warrior = any(
        d.weekday() == 5 and d + timedelta(days=1) in day_set for d in day_set
    )

    return ActivityStats(
        total_sessions=len(sessions),
        total_exercises=sum(exercise_counts.values()),
        total_extensions=extension_count,
        unique_exercises=len(exercise_counts),
        focus_minutes=sum(minutes for _, minutes in sessions),
        active_days=len(days),
        current_streak=current_streak,
        longest_streak=longest_streak,
        max_sessions_in_day=max(per_day.values(), default=0),
        early_bird=any(at.hour < EARLY_BIRD_HOUR for at, _ in sessions),
        night_owl=any(at.hour >= NIGHT_OWL_HOUR for at, _ in sessions),
        weekend_warrior=weekend_warrior,
    )


class StatsService:
    """Loads activity statistics from the activity log."""

    def __init__(self, db_path: Path | None = None):
        self.repo = ActivityRepository(db_path)

    async def get_stats(self, today: date | None = None) -> ActivityStats:
        sessions = await self.repo.get_sessions()
        exercise_counts = await self.repo.get_exercise_counts()
        extension_count = await self.repo.count_extensions()
        return build_stats(sessions, exercise_counts, extension_count, today)


def newly_unlocked(before: ActivityStats, after: ActivityStats) -> list[Achievement]:
    """Achievements unlocked by ``after`` but not by ``before``."""
    already = {a.id for a in unlocked_achievements(before)}
    return [a for a in unlocked_achievements(after) if a.id not in already]
