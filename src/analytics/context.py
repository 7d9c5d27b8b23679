"""
src/analytics/context.py
─────────────────────────
Environmental context for risk scoring.

Provides:
  - build_time_context()   : TimeContext derived from a wall-clock instant
  - fallback_weather()     : deterministic condition when no snapshot exists
  - weather_multiplier()   : accident score multiplier for a condition
  - apply_time_multipliers(): compound rush-hour / calendar / season / hour factors

Seasons (by month):
  Summer   Mar–May
  Monsoon  Jun–Sep
  Winter   Oct–Feb
"""
from __future__ import annotations

from collections.abc import Collection
from datetime import date, datetime

from config.settings import settings
from config.zones import Zone
from src.data.models import Season, TimeContext, WeatherCondition

RUSH_HOURS = frozenset({8, 9, 10, 17, 18, 19})

WEATHER_MULTIPLIERS: dict[WeatherCondition, float] = {
    WeatherCondition.RAINY: 1.5,
    WeatherCondition.STORMY: 2.0,
    WeatherCondition.FOGGY: 1.3,
    WeatherCondition.SNOWY: 1.8,
    WeatherCondition.WINDY: 1.2,
}

SEASON_MULTIPLIERS: dict[Season, float] = {
    Season.MONSOON: 1.2,
    Season.SUMMER: 1.1,
    Season.WINTER: 1.15,
}

RUSH_HOUR_MULTIPLIER = 1.25
WEEKEND_MULTIPLIER = 1.15
HOLIDAY_MULTIPLIER = 1.3
FESTIVAL_MULTIPLIER = 1.4

SEVERE_CONDITIONS = frozenset({WeatherCondition.STORMY, WeatherCondition.FOGGY, WeatherCondition.SNOWY})

# Cycled by (day of month + zone name length)
FALLBACK_CONDITIONS: tuple[WeatherCondition, ...] = (
    WeatherCondition.CLEAR,
    WeatherCondition.CLOUDY,
    WeatherCondition.RAINY,
    WeatherCondition.WINDY,
)


def season_for_month(month: int) -> Season:
    if 3 <= month <= 5:
        return Season.SUMMER
    if 6 <= month <= 9:
        return Season.MONSOON
    return Season.WINTER


def build_time_context(
    now: datetime,
    holidays: Collection[date] | None = None,
    festivals: Collection[date] | None = None,
) -> TimeContext:
    """
    Compute the TimeContext for `now`.

    Holidays and festivals default to the calendar in settings; with no
    calendar configured both flags are always False.
    """
    holidays = settings.holiday_dates() if holidays is None else holidays
    festivals = settings.festival_dates() if festivals is None else festivals
    today = now.date()
    weekday = now.weekday()
    return TimeContext(
        hour=now.hour,
        day_of_week=weekday,
        is_weekend=weekday >= 5,
        is_rush_hour=now.hour in RUSH_HOURS,
        season=season_for_month(now.month),
        is_holiday=today in holidays,
        is_festival=today in festivals,
    )


def fallback_weather(zone: Zone, day: date) -> WeatherCondition:
    """Stand-in condition for a (zone, day) with no snapshot. Pure and repeatable."""
    index = (day.day + len(zone.value)) % len(FALLBACK_CONDITIONS)
    return FALLBACK_CONDITIONS[index]


def weather_multiplier(condition: WeatherCondition | None) -> float:
    if condition is None:
        return 1.0
    return WEATHER_MULTIPLIERS.get(condition, 1.0)


def hour_multiplier(hour: int) -> float:
    if 7 <= hour <= 9:
        return 1.2
    if 17 <= hour <= 19:
        return 1.25
    if hour >= 22 or hour <= 4:
        return 1.1
    return 1.0


def apply_time_multipliers(score: float, ctx: TimeContext | None) -> float:
    """Compound the time factors onto `score`; the order of application is fixed."""
    if ctx is None:
        return score
    if ctx.is_rush_hour:
        score *= RUSH_HOUR_MULTIPLIER
    if ctx.is_weekend:
        score *= WEEKEND_MULTIPLIER
    if ctx.is_holiday:
        score *= HOLIDAY_MULTIPLIER
    if ctx.is_festival:
        score *= FESTIVAL_MULTIPLIER
    score *= SEASON_MULTIPLIERS.get(ctx.season, 1.0)
    score *= hour_multiplier(ctx.hour)
    return score


def is_severe_weather(condition: WeatherCondition) -> bool:
    return condition in SEVERE_CONDITIONS
