"""Lifetime activity counters and achievement definitions."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class AchievementCategory(str, Enum):
    """Achievement groupings."""

    MILESTONE = "milestone"
    STREAK = "streak"
    EXERCISE = "exercise"
    TIME = "time"
    SPECIAL = "special"


@dataclass(frozen=True)
class ActivityStats:
    """Counters derived from the activity log."""

    total_sessions: int = 0
    total_exercises: int = 0
    total_extensions: int = 0
    unique_exercises: int = 0
    focus_minutes: int = 0
    active_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    max_sessions_in_day: int = 0
    early_bird: bool = False  # a session completed before 08:00
    night_owl: bool = False  # a session completed at or after 22:00
    weekend_warrior: bool = False  # sessions on both Saturday and Sunday of one weekend

    @property
    def focus_hours(self) -> float:
        return self.focus_minutes / 60

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "total_exercises": self.total_exercises,
            "total_extensions": self.total_extensions,
            "unique_exercises": self.unique_exercises,
            "focus_minutes": self.focus_minutes,
            "active_days": self.active_days,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "max_sessions_in_day": self.max_sessions_in_day,
            "early_bird": self.early_bird,
            "night_owl": self.night_owl,
            "weekend_warrior": self.weekend_warrior,
        }


@dataclass(frozen=True)
class Achievement:
    """An unlockable achievement."""

    id: str
    name: str
    description: str
    icon: str
    category: AchievementCategory
    is_unlocked: Callable[[ActivityStats], bool]

    def to_dict(self, stats: ActivityStats | None = None) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "category": self.category.value,
        }
        if stats is not None:
            data["unlocked"] = self.is_unlocked(stats)
        return data


def _sessions(n: int) -> Callable[[ActivityStats], bool]:
    return lambda stats: stats.total_sessions >= n


def _streak(n: int) -> Callable[[ActivityStats], bool]:
    return lambda stats: stats.longest_streak >= n


ACHIEVEMENTS: list[Achievement] = [
    # Milestones
    Achievement("first-session", "First Steps", "Complete your first pomodoro session",
                "🌱", AchievementCategory.MILESTONE, _sessions(1)),
    Achievement("getting-started", "Getting Started", "Complete 10 pomodoro sessions",
                "🎯", AchievementCategory.MILESTONE, _sessions(10)),
    Achievement("dedicated", "Dedicated", "Complete 50 pomodoro sessions",
                "💎", AchievementCategory.MILESTONE, _sessions(50)),
    Achievement("centurion", "Centurion", "Complete 100 pomodoro sessions",
                "👑", AchievementCategory.MILESTONE, _sessions(100)),
    Achievement("legend", "Legend", "Complete 500 pomodoro sessions",
                "⭐", AchievementCategory.MILESTONE, _sessions(500)),
    # Streaks
    Achievement("week-warrior", "Week Warrior", "Maintain a 7-day streak",
                "🔥", AchievementCategory.STREAK, _streak(7)),
    Achievement("consistency", "Consistency",
                "Complete at least 1 session for 14 consecutive days",
                "📊", AchievementCategory.STREAK, _streak(14)),
    Achievement("month-master", "Month Master", "Maintain a 30-day streak",
                "🏆", AchievementCategory.STREAK, _streak(30)),
    Achievement("century-streak", "Century Streak", "Maintain a 100-day streak",
                "💯", AchievementCategory.STREAK, _streak(100)),
    # Exercise
    Achievement("overachiever", "Overachiever", "Extend your break 10 times",
                "💪", AchievementCategory.EXERCISE, lambda s: s.total_extensions >= 10),
    Achievement("exercise-enthusiast", "Exercise Enthusiast", "Complete 50 exercises",
                "🏃", AchievementCategory.EXERCISE, lambda s: s.total_exercises >= 50),
    Achievement("fitness-fanatic", "Fitness Fanatic", "Complete 200 exercises",
                "🦾", AchievementCategory.EXERCISE, lambda s: s.total_exercises >= 200),
    Achievement("variety-seeker", "Variety Seeker", "Complete 20 different unique exercises",
                "🌈", AchievementCategory.EXERCISE, lambda s: s.unique_exercises >= 20),
    # Time
    Achievement("time-warrior", "Time Warrior", "Accumulate 50 hours of focus time",
                "⏰", AchievementCategory.TIME, lambda s: s.focus_hours >= 50),
    Achievement("focus-master", "Focus Master", "Accumulate 100 hours of focus time",
                "🧘", AchievementCategory.TIME, lambda s: s.focus_hours >= 100),
    # Special
    Achievement("early-bird", "Early Bird", "Complete a session before 8 AM",
                "🌅", AchievementCategory.SPECIAL, lambda s: s.early_bird),
    Achievement("night-owl", "Night Owl", "Complete a session after 10 PM",
                "🦉", AchievementCategory.SPECIAL, lambda s: s.night_owl),
    Achievement("marathon", "Marathon", "Complete 10 sessions in one day",
                "🏃‍♂️", AchievementCategory.SPECIAL, lambda s: s.max_sessions_in_day >= 10),
    Achievement("weekend-warrior", "Weekend Warrior", "Complete sessions on Saturday and Sunday",
                "🎉", AchievementCategory.SPECIAL, lambda s: s.weekend_warrior),
]


def get_achievement(achievement_id: str) -> Achievement | None:
    """Get an achievement definition by ID."""
    for achievement in ACHIEVEMENTS:
        if achievement.id == achievement_id:
            return achievement
    return None


def get_achievements_by_category(category: AchievementCategory) -> list[Achievement]:
    return [a for a in ACHIEVEMENTS if a.category == category]


def unlocked_achievements(stats: ActivityStats) -> list[Achievement]:
    """Achievements unlocked by the given stats, in definition order."""
    return [a for a in ACHIEVEMENTS if a.is_unlocked(stats)]
