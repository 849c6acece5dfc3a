"""Tests for activity statistics."""

from datetime import date, datetime

from movemoro.db import ActivityRepository, init_db
from movemoro.models.achievements import ActivityStats, unlocked_achievements
from movemoro.services.stats import StatsService, build_stats, newly_unlocked


def session_at(year, month, day, hour=12, minutes=25):
    return (datetime(year, month, day, hour), minutes)


class TestBuildStats:
    def test_empty(self):
        assert build_stats([], {}, 0, today=date(2024, 1, 10)) == ActivityStats()

    def test_counters(self):
        stats = build_stats(
            [session_at(2024, 1, 1), session_at(2024, 1, 1, minutes=50)],
            {"a": 3, "b": 1},
            2,
            today=date(2024, 1, 1),
        )

        assert stats.total_sessions == 2
        assert stats.focus_minutes == 75
        assert stats.total_exercises == 4
        assert stats.unique_exercises == 2
        assert stats.total_extensions == 2
        assert stats.max_sessions_in_day == 2
        assert stats.active_days == 1

    def test_streaks(self):
        sessions = [session_at(2024, 1, d) for d in (1, 2, 3, 4, 8, 9)]
        stats = build_stats(sessions, {}, 0, today=date(2024, 1, 10))

        assert stats.longest_streak == 4
        assert stats.current_streak == 2

    def test_streak_broken(self):
        sessions = [session_at(2024, 1, d) for d in (1, 2)]
        stats = build_stats(sessions, {}, 0, today=date(2024, 1, 5))

        assert stats.current_streak == 0
        assert stats.longest_streak == 2

    def test_time_of_day_flags(self):
        stats = build_stats(
            [session_at(2024, 1, 1, hour=7), session_at(2024, 1, 1, hour=22)],
            {},
            0,
            today=date(2024, 1, 1),
        )
        assert stats.early_bird
        assert stats.night_owl

    def test_daytime_sessions_set_no_flags(self):
        stats = build_stats([session_at(2024, 1, 1, hour=8)], {}, 0, today=date(2024, 1, 1))
        assert not stats.early_bird
        assert not stats.night_owl

    def test_weekend_warrior(self):
        # 2024-01-06 is a Saturday.
        both = build_stats([session_at(2024, 1, 6), session_at(2024, 1, 7)], {}, 0)
        sunday_then_saturday = build_stats([session_at(2024, 1, 7), session_at(2024, 1, 13)], {}, 0)

        assert both.weekend_warrior
        assert not sunday_then_saturday.weekend_warrior


def test_newly_unlocked():
    before = ActivityStats(total_sessions=0)
    after = ActivityStats(total_sessions=1)

    assert [a.id for a in newly_unlocked(before, after)] == ["first-session"]
    assert newly_unlocked(after, after) == []


async def test_stats_service(temp_db_path):
    await init_db(temp_db_path)
    repo = ActivityRepository(temp_db_path)
    await repo.record_session(1, 25, datetime(2024, 1, 6, 6, 45))
    await repo.record_exercise("a", "snack")

    service = StatsService(temp_db_path)
    stats = await service.get_stats(today=date(2024, 1, 6))

    assert stats.total_sessions == 1
    assert stats.early_bird
    assert {a.id for a in unlocked_achievements(stats)} == {"first-session", "early-bird"}
