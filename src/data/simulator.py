"""
src/data/simulator.py
─────────────────────
Synthetic source data for the five zones.

Generates:
  - 2–3 hospitals and a small ambulance fleet per zone
  - Hourly ambulance activity and accident incidents over HISTORY_DAYS,
    with per-zone intensity and a daytime peak
  - One weather snapshot per zone per day
  - A fixed fallback prediction set for when the store is unavailable

Design:
  - Reproducible with SIMULATION_SEED for consistent demos
  - Intensities are Poisson rates per hour; accident severity and dispatch
    risk level are drawn from fixed categorical distributions
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import numpy as np

from config.settings import settings
from config.zones import ZONES, Zone
from src.analytics.context import build_time_context
from src.data.models import (
    AccidentRecord,
    Ambulance,
    AmbulanceActivityRecord,
    EnvironmentalFactors,
    FleetStatus,
    Hospital,
    PredictionDetails,
    RecordSeverity,
    RiskLevel,
    Trend,
    WeatherCondition,
    WeatherSnapshot,
    ZonePrediction,
)

# ── Per-zone profiles ─────────────────────────────────────────────────────────

ZONE_PROFILES: dict[Zone, dict] = {
    Zone.NORTH: {"hospitals": 2, "fleet": 6, "dispatch_rate": 0.30, "accident_rate": 0.08},
    Zone.SOUTH: {"hospitals": 3, "fleet": 8, "dispatch_rate": 0.45, "accident_rate": 0.12},
    Zone.EAST: {"hospitals": 2, "fleet": 5, "dispatch_rate": 0.25, "accident_rate": 0.06},
    Zone.WEST: {"hospitals": 2, "fleet": 6, "dispatch_rate": 0.35, "accident_rate": 0.10},
    Zone.CENTRAL: {"hospitals": 3, "fleet": 10, "dispatch_rate": 0.60, "accident_rate": 0.18},
}

HOSPITAL_NAMES = ("General Hospital", "Medical Center", "Trauma Center")

SEVERITY_P = {
    RecordSeverity.LOW: 0.35,
    RecordSeverity.MEDIUM: 0.35,
    RecordSeverity.HIGH: 0.22,
    RecordSeverity.CRITICAL: 0.08,
}

DISPATCH_RISK_P = {
    RiskLevel.LOW: 0.55,
    RiskLevel.MEDIUM: 0.35,
    RiskLevel.HIGH: 0.10,
}

FLEET_STATUS_P = {
    FleetStatus.AVAILABLE: 0.6,
    FleetStatus.BUSY: 0.3,
    FleetStatus.MAINTENANCE: 0.1,
}

WEATHER_P = {
    WeatherCondition.CLEAR: 0.30,
    WeatherCondition.SUNNY: 0.15,
    WeatherCondition.CLOUDY: 0.20,
    WeatherCondition.RAINY: 0.15,
    WeatherCondition.STORMY: 0.05,
    WeatherCondition.FOGGY: 0.07,
    WeatherCondition.SNOWY: 0.02,
    WeatherCondition.WINDY: 0.06,
}

INCIDENT_TYPES = ("road_accident", "fall", "fire_incident", "industrial", "collision")


@dataclass
class SeedData:
    hospitals: list[Hospital] = field(default_factory=list)
    ambulances: list[Ambulance] = field(default_factory=list)
    activity: list[AmbulanceActivityRecord] = field(default_factory=list)
    accidents: list[AccidentRecord] = field(default_factory=list)
    weather: list[WeatherSnapshot] = field(default_factory=list)


def _choice(rng: np.random.Generator, weights: dict):
    keys = list(weights)
    return keys[int(rng.choice(len(keys), p=list(weights.values())))]


def _hourly_factor(hour: int) -> float:
    """Daytime peak: ~1.6× at 18:00, ~0.4× around 04:00."""
    return 1.0 + 0.6 * np.sin((hour - 12) / 24 * 2 * np.pi)


def _generate_zone(
    zone: Zone,
    timestamps: list[datetime],
    rng: np.random.Generator,
    data: SeedData,
) -> None:
    profile = ZONE_PROFILES[zone]
    prefix = zone.value[:3].upper()

    hospitals = [
        Hospital(
            id=f"{prefix}-H{i + 1}",
            name=f"{zone.value} {HOSPITAL_NAMES[i % len(HOSPITAL_NAMES)]}",
            zone=zone,
            capacity=int(rng.integers(60, 200)),
            current_load=0,
        )
        for i in range(profile["hospitals"])
    ]
    for hospital in hospitals:
        hospital.current_load = int(hospital.capacity * rng.uniform(0.3, 0.95))
    data.hospitals.extend(hospitals)

    for i in range(profile["fleet"]):
        data.ambulances.append(Ambulance(
            id=f"{prefix}-A{i + 1:02d}",
            zone=zone,
            status=_choice(rng, FLEET_STATUS_P),
            assigned_hospital=hospitals[i % len(hospitals)].id,
        ))

    for ts in timestamps:
        factor = _hourly_factor(ts.hour)

        for _ in range(int(rng.poisson(profile["dispatch_rate"] * factor))):
            n = len(data.activity) + 1
            data.activity.append(AmbulanceActivityRecord(
                id=f"LOG-{n:06d}",
                zone=zone,
                hospital_id=hospitals[int(rng.integers(len(hospitals)))].id,
                patient_count=int(rng.integers(1, 4)),
                timestamp=ts + timedelta(minutes=int(rng.integers(60))),
                risk_level=_choice(rng, DISPATCH_RISK_P),
                ambulance_id=f"{prefix}-A{int(rng.integers(profile['fleet'])) + 1:02d}",
            ))

        for _ in range(int(rng.poisson(profile["accident_rate"] * factor))):
            n = len(data.accidents) + 1
            severity = _choice(rng, SEVERITY_P)
            incident_type = INCIDENT_TYPES[int(rng.integers(len(INCIDENT_TYPES)))]
            data.accidents.append(AccidentRecord(
                id=f"ACC-{n:06d}",
                zone=zone,
                severity=severity,
                timestamp=ts + timedelta(minutes=int(rng.integers(60))),
                description=f"{severity.value} {incident_type.replace('_', ' ')} in {zone.value}",
                incident_type=incident_type,
            ))

    days = sorted({ts.date() for ts in timestamps})
    for day in days:
        data.weather.append(WeatherSnapshot(
            zone=zone,
            day=day,
            condition=_choice(rng, WEATHER_P),
            temperature_c=round(float(rng.normal(24.0, 6.0)), 1),
            humidity=round(float(np.clip(rng.normal(60.0, 15.0), 0.0, 100.0)), 1),
        ))


# ── Public API ────────────────────────────────────────────────────────────────

def generate_seed_data(
    seed: int = settings.SIMULATION_SEED,
    days: int = settings.HISTORY_DAYS,
    end: datetime | None = None,
) -> SeedData:
    """
    Generate `days` × 24 hours of records for every zone, ending at `end`
    (default: the current hour). Activity timestamps fall inside each hour
    and never after `end`.
    """
    rng = np.random.default_rng(seed)
    end_ts = (end or datetime.now(tz=UTC)).replace(minute=0, second=0, microsecond=0)
    total_hours = days * 24
    timestamps = [end_ts - timedelta(hours=total_hours - h) for h in range(total_hours)]

    data = SeedData()
    for zone in ZONES:
        _generate_zone(zone, timestamps, rng, data)
    return data


def fallback_predictions(now: datetime | None = None) -> list[ZonePrediction]:
    """
    Fixed prediction set shown when the record store is unavailable.

    Every zone reads Low / Stable with minimum confidence; nothing here is
    random, so two calls with the same clock are identical.
    """
    now = now or datetime.now(tz=UTC)
    ctx = build_time_context(now)
    return [
        ZonePrediction(
            zone=zone,
            ed_pressure=RiskLevel.LOW,
            ambulance_pressure=RiskLevel.LOW,
            accident_risk=RiskLevel.LOW,
            overall_risk=RiskLevel.LOW,
            trend=Trend.STABLE,
            confidence=0,
            timestamp=now,
            details=PredictionDetails(
                recent_log_count=0,
                historical_log_count=0,
                recent_accident_count=0,
                historical_accident_count=0,
                average_load=0.0,
                historical_average_load=0.0,
                accident_score=0.0,
                environmental_factors=EnvironmentalFactors(
                    weather_condition=WeatherCondition.CLEAR,
                    weather_source="fallback",
                    hour=ctx.hour,
                    season=ctx.season,
                    is_rush_hour=ctx.is_rush_hour,
                    is_weekend=ctx.is_weekend,
                    is_holiday=ctx.is_holiday,
                    is_festival=ctx.is_festival,
                ),
            ),
        )
        for zone in ZONES
    ]
