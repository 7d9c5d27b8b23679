"""
src/analytics/risk.py
──────────────────────
Zone Risk Calculator.

For one zone and an evaluation instant, classifies:
  ed_pressure         avg patients per hospital over the last 24 h
  ambulance_pressure  fleet availability ratio, or 24 h dispatch volume
  accident_risk       weighted incidents × trend / weather / time factors
  trend               recent vs. prior-week volume of dispatches and incidents
  overall_risk        sum of the three levels, nudged by trend
and attaches a 0–95 confidence reflecting how much data backs the call.

Windows:
  recent      (now − 24 h, now]
  historical  (now − 7 d,  now − 24 h]

All functions below calculate_zone_prediction() are pure.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime, timedelta

import numpy as np

from config.zones import THRESHOLDS, Zone, parse_zone
from src.analytics.context import (
    apply_time_multipliers,
    build_time_context,
    fallback_weather,
    weather_multiplier,
)
from src.data.models import (
    AccidentRecord,
    AmbulanceActivityRecord,
    EnvironmentalFactors,
    FleetStatus,
    PredictionDetails,
    RecordSeverity,
    RiskLevel,
    TimeContext,
    Trend,
    WeatherCondition,
    ZonePrediction,
)
from src.data.repository import RecordSource

RECENT_WINDOW = timedelta(hours=24)
HISTORICAL_WINDOW = timedelta(days=7)

RISK_POINTS: dict[RiskLevel, int] = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}

_SEVERE = (RecordSeverity.HIGH, RecordSeverity.CRITICAL)


# ── ED pressure ───────────────────────────────────────────────────────────────

def hospital_loads(records: Iterable[AmbulanceActivityRecord]) -> dict[str, int]:
    """Total patients per hospital; records without a hospital are skipped."""
    loads: dict[str, int] = defaultdict(int)
    for record in records:
        if record.hospital_id:
            loads[record.hospital_id] += record.patient_count
    return dict(loads)


def average_hospital_load(records: Iterable[AmbulanceActivityRecord]) -> float:
    loads = hospital_loads(records)
    if not loads:
        return 0.0
    return sum(loads.values()) / len(loads)


def classify_ed_pressure(avg_load: float, historical_avg: float) -> RiskLevel:
    thr = THRESHOLDS.ed
    increase = avg_load > historical_avg * thr.increase_factor
    if avg_load >= thr.high or (avg_load >= thr.high_if_increasing and increase):
        return RiskLevel.HIGH
    if avg_load >= thr.medium or (avg_load >= thr.medium_if_increasing and increase):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def calculate_ed_pressure(
    recent: Sequence[AmbulanceActivityRecord],
    historical: Sequence[AmbulanceActivityRecord],
) -> RiskLevel:
    if not hospital_loads(recent):
        return RiskLevel.LOW
    return classify_ed_pressure(average_hospital_load(recent), average_hospital_load(historical))


# ── Ambulance pressure ────────────────────────────────────────────────────────

def calculate_ambulance_pressure(
    recent_count: int,
    historical_count: int,
    fleet_available: int = 0,
    fleet_total: int = 0,
) -> RiskLevel:
    """
    Fleet availability wins whenever the zone has a registered fleet;
    otherwise pressure is estimated from dispatch volume.
    """
    thr = THRESHOLDS.ambulance
    if fleet_total > 0:
        ratio = fleet_available / fleet_total
        if ratio < thr.ratio_high:
            return RiskLevel.HIGH
        if ratio < thr.ratio_medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    increase = recent_count > historical_count * thr.increase_factor
    if recent_count >= thr.high or (recent_count >= thr.high_if_increasing and increase):
        return RiskLevel.HIGH
    if recent_count >= thr.medium or (recent_count >= thr.medium_if_increasing and increase):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


# ── Accident risk ─────────────────────────────────────────────────────────────

def accident_base_score(accidents: Iterable[AccidentRecord]) -> float:
    thr = THRESHOLDS.accident
    score = 0
    for accident in accidents:
        if accident.severity in _SEVERE:
            score += thr.severe_weight
        elif accident.severity == RecordSeverity.MEDIUM:
            score += thr.medium_weight
    return float(score)


def calculate_accident_score(
    recent: Sequence[AccidentRecord],
    historical: Sequence[AccidentRecord],
    weather: WeatherCondition | None,
    time_context: TimeContext | None,
) -> float:
    thr = THRESHOLDS.accident
    score = accident_base_score(recent)
    if score > accident_base_score(historical) * thr.trend_factor:
        score *= thr.trend_penalty
    score *= weather_multiplier(weather)
    return apply_time_multipliers(score, time_context)


def classify_accident_score(score: float) -> RiskLevel:
    thr = THRESHOLDS.accident
    if score >= thr.high:
        return RiskLevel.HIGH
    if score >= thr.medium:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


# ── Trend / confidence / overall ──────────────────────────────────────────────

def _relative_change(recent: int, historical: int) -> float:
    if historical == 0:
        return 0.0
    return (recent - historical) / historical


def calculate_trend(
    recent_logs: int,
    historical_logs: int,
    recent_accidents: int,
    historical_accidents: int,
) -> Trend:
    combined = (
        _relative_change(recent_logs, historical_logs)
        + _relative_change(recent_accidents, historical_accidents)
    ) / 2
    if combined > THRESHOLDS.trend.increasing:
        return Trend.INCREASING
    if combined < THRESHOLDS.trend.decreasing:
        return Trend.DECREASING
    return Trend.STABLE


def calculate_confidence(
    recent_logs: int,
    recent_accidents: int,
    has_weather: bool,
    has_time_context: bool = True,
) -> int:
    confidence = 50
    if recent_logs >= 10:
        confidence += 15
    elif recent_logs >= 5:
        confidence += 10
    elif recent_logs >= 2:
        confidence += 5

    if recent_accidents >= 5:
        confidence += 10
    elif recent_accidents >= 2:
        confidence += 5

    if has_weather:
        confidence += 10
    if has_time_context:
        confidence += 5
    return min(confidence, THRESHOLDS.max_confidence)


def calculate_overall_risk(
    ed_pressure: RiskLevel,
    ambulance_pressure: RiskLevel,
    accident_risk: RiskLevel,
    trend: Trend = Trend.STABLE,
) -> RiskLevel:
    total = RISK_POINTS[ed_pressure] + RISK_POINTS[ambulance_pressure] + RISK_POINTS[accident_risk]
    if trend == Trend.INCREASING:
        total += 1
    elif trend == Trend.DECREASING:
        total -= 1
    total = int(np.clip(total, 3, 9))

    if total >= 7:
        return RiskLevel.HIGH
    if total >= 4:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


# ── Main API ──────────────────────────────────────────────────────────────────

def calculate_zone_prediction(
    zone: Zone | str,
    source: RecordSource,
    now: datetime | None = None,
) -> ZonePrediction:
    """
    Compute the ZonePrediction for one zone.

    Store faults surface as DataUnavailable from `source`; a missing
    weather snapshot is replaced by fallback_weather() instead.
    """
    zone = parse_zone(zone)
    now = now or datetime.now(tz=UTC)
    recent_start = now - RECENT_WINDOW
    historical_start = now - HISTORICAL_WINDOW

    recent_logs = source.find_ambulance_activity(zone, recent_start, now)
    historical_logs = source.find_ambulance_activity(zone, historical_start, recent_start)
    recent_accidents = source.find_accidents(zone, recent_start, now)
    historical_accidents = source.find_accidents(zone, historical_start, recent_start)
    snapshot = source.find_weather(zone, now.date())
    fleet_total = source.count_fleet(zone)
    fleet_available = source.count_fleet(zone, FleetStatus.AVAILABLE) if fleet_total else 0

    time_context = build_time_context(now)
    if snapshot is not None:
        condition, weather_source = snapshot.condition, "observed"
    else:
        condition, weather_source = fallback_weather(zone, now.date()), "fallback"

    avg_load = average_hospital_load(recent_logs)
    historical_avg = average_hospital_load(historical_logs)

    ed_pressure = calculate_ed_pressure(recent_logs, historical_logs)
    ambulance_pressure = calculate_ambulance_pressure(
        len(recent_logs), len(historical_logs), fleet_available, fleet_total
    )
    accident_score = calculate_accident_score(
        recent_accidents, historical_accidents, condition, time_context
    )
    accident_risk = classify_accident_score(accident_score)
    trend = calculate_trend(
        len(recent_logs), len(historical_logs), len(recent_accidents), len(historical_accidents)
    )
    confidence = calculate_confidence(
        len(recent_logs), len(recent_accidents), has_weather=snapshot is not None
    )

    return ZonePrediction(
        zone=zone,
        ed_pressure=ed_pressure,
        ambulance_pressure=ambulance_pressure,
        accident_risk=accident_risk,
        overall_risk=calculate_overall_risk(ed_pressure, ambulance_pressure, accident_risk, trend),
        trend=trend,
        confidence=confidence,
        timestamp=now,
        details=PredictionDetails(
            recent_log_count=len(recent_logs),
            historical_log_count=len(historical_logs),
            recent_accident_count=len(recent_accidents),
            historical_accident_count=len(historical_accidents),
            average_load=round(avg_load, 2),
            historical_average_load=round(historical_avg, 2),
            accident_score=round(accident_score, 3),
            fleet_available=fleet_available,
            fleet_total=fleet_total,
            environmental_factors=EnvironmentalFactors(
                weather_condition=condition,
                weather_source=weather_source,
                temperature_c=snapshot.temperature_c if snapshot else None,
                hour=time_context.hour,
                season=time_context.season,
                is_rush_hour=time_context.is_rush_hour,
                is_weekend=time_context.is_weekend,
                is_holiday=time_context.is_holiday,
                is_festival=time_context.is_festival,
            ),
        ),
    )
