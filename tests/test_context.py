"""
tests/test_context.py
──────────────────────
Tests for time context, weather fallback and environmental multipliers.
"""
from datetime import UTC, date, datetime

import pytest

from config.zones import ZONES, Zone
from src.analytics.context import (
    FESTIVAL_MULTIPLIER,
    HOLIDAY_MULTIPLIER,
    RUSH_HOUR_MULTIPLIER,
    SEASON_MULTIPLIERS,
    WEEKEND_MULTIPLIER,
    apply_time_multipliers,
    build_time_context,
    fallback_weather,
    hour_multiplier,
    is_severe_weather,
    season_for_month,
    weather_multiplier,
)
from src.data.models import Season, TimeContext, WeatherCondition


class TestBuildTimeContext:
    def test_tuesday_morning(self, now):
        ctx = build_time_context(now, holidays=frozenset(), festivals=frozenset())
        assert ctx.hour == 9
        assert ctx.day_of_week == 1  # Monday = 0
        assert ctx.is_weekend is False
        assert ctx.is_rush_hour is True
        assert ctx.season == Season.MONSOON

    @pytest.mark.parametrize("hour", [8, 9, 10, 17, 18, 19])
    def test_rush_hours(self, now, hour):
        assert build_time_context(now.replace(hour=hour)).is_rush_hour

    @pytest.mark.parametrize("hour", [0, 7, 11, 12, 16, 20, 23])
    def test_non_rush_hours(self, now, hour):
        assert not build_time_context(now.replace(hour=hour)).is_rush_hour

    def test_weekend(self):
        saturday = datetime(2024, 6, 8, 12, tzinfo=UTC)
        sunday = datetime(2024, 6, 9, 12, tzinfo=UTC)
        assert build_time_context(saturday).is_weekend
        assert build_time_context(sunday).is_weekend
        assert build_time_context(saturday).day_of_week == 5

    def test_holiday_and_festival_calendar(self, now):
        ctx = build_time_context(now, holidays={now.date()}, festivals={date(2024, 1, 1)})
        assert ctx.is_holiday is True
        assert ctx.is_festival is False

    def test_no_calendar_means_no_holidays(self, now):
        ctx = build_time_context(now, holidays=frozenset(), festivals=frozenset())
        assert not ctx.is_holiday
        assert not ctx.is_festival


class TestSeasons:
    @pytest.mark.parametrize("month,season", [
        (3, Season.SUMMER), (5, Season.SUMMER),
        (6, Season.MONSOON), (9, Season.MONSOON),
        (10, Season.WINTER), (1, Season.WINTER), (2, Season.WINTER),
    ])
    def test_season_for_month(self, month, season):
        assert season_for_month(month) == season


class TestFallbackWeather:
    def test_deterministic(self):
        day = date(2024, 6, 4)
        for zone in ZONES:
            assert fallback_weather(zone, day) == fallback_weather(zone, day)

    def test_known_values(self):
        day = date(2024, 6, 4)
        assert fallback_weather(Zone.NORTH, day) == WeatherCondition.CLOUDY    # (4 + 5) % 4 = 1
        assert fallback_weather(Zone.EAST, day) == WeatherCondition.CLEAR      # (4 + 4) % 4 = 0
        assert fallback_weather(Zone.CENTRAL, day) == WeatherCondition.WINDY   # (4 + 7) % 4 = 3

    def test_never_severe(self):
        for day_of_month in range(1, 32):
            for zone in ZONES:
                assert not is_severe_weather(fallback_weather(zone, date(2024, 1, day_of_month)))


class TestMultipliers:
    def test_weather_multipliers(self):
        assert weather_multiplier(WeatherCondition.STORMY) == 2.0
        assert weather_multiplier(WeatherCondition.RAINY) == 1.5
        assert weather_multiplier(WeatherCondition.CLEAR) == 1.0
        assert weather_multiplier(None) == 1.0

    @pytest.mark.parametrize("hour,expected", [
        (7, 1.2), (9, 1.2), (17, 1.25), (19, 1.25),
        (22, 1.1), (0, 1.1), (4, 1.1), (5, 1.0), (12, 1.0),
    ])
    def test_hour_multiplier(self, hour, expected):
        assert hour_multiplier(hour) == expected

    def test_all_factors_compound(self):
        ctx = TimeContext(
            hour=18, day_of_week=6, is_weekend=True, is_rush_hour=True,
            season=Season.MONSOON, is_holiday=True, is_festival=True,
        )
        expected = (
            RUSH_HOUR_MULTIPLIER * WEEKEND_MULTIPLIER * HOLIDAY_MULTIPLIER
            * FESTIVAL_MULTIPLIER * SEASON_MULTIPLIERS[Season.MONSOON] * 1.25
        )
        assert apply_time_multipliers(1.0, ctx) == pytest.approx(expected)

    def test_no_context_leaves_score(self):
        assert apply_time_multipliers(4.0, None) == 4.0

    def test_severe_conditions(self):
        assert is_severe_weather(WeatherCondition.STORMY)
        assert is_severe_weather(WeatherCondition.FOGGY)
        assert is_severe_weather(WeatherCondition.SNOWY)
        assert not is_severe_weather(WeatherCondition.RAINY)
