"""Closed vocabularies of a scheduled workout session."""

from enum import Enum


class WorkoutType(str, Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"
    HIIT = "HIIT"
    YOGA = "Yoga"
    RECOVERY = "Recovery"


class Intensity(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HIGH = "high"


class Equipment(str, Enum):
    MINIMAL = "minimal"
    MODERATE = "moderate"
    FULL_GYM = "full-gym"


class Frequency(str, Enum):
    """Recurrence cadence.  Recorded only; conflict checks ignore it."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class Performance(str, Enum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


# Calendar position of each weekday (Monday first)
WEEKDAY_ORDER: dict[Weekday, int] = {day: index for index, day in enumerate(Weekday)}
