"""
src/analytics/dashboard.py
───────────────────────────
Dashboard Aggregator.

Combines the zone predictions, current alerts, fleet availability and
hospital loads into a single DashboardSummary for the overview page.

Overall pressure level:
  NO DATA   no hospitals registered
  CRITICAL  more than one zone at High risk, or any CRITICAL alert
  WARNING   one zone at High risk, or more than five alerts
  NORMAL    otherwise
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import pandas as pd

from config.alerts import AlertSeverity
from config.zones import ZONES
from src.analytics.alerts import get_current_alerts
from src.analytics.anomaly import flag_spikes
from src.analytics.predictions import get_risk_predictions
from src.analytics.risk import RECENT_WINDOW
from src.data.models import (
    Alert,
    DashboardSummary,
    FleetStatus,
    Hospital,
    HospitalLoad,
    RiskLevel,
    ZoneFleet,
    ZonePrediction,
)
from src.data.repository import DashboardSource
from src.data.simulator import fallback_predictions
from src.logging_setup import get_logger

logger = get_logger(__name__)

RECENT_ALERTS = 5
TOP_HOSPITALS = 5


def hospital_status(hospital: Hospital) -> str:
    utilization = hospital.current_load / hospital.capacity
    if utilization > 0.9:
        return "Critical"
    if utilization > 0.7:
        return "High"
    if utilization > 0.5:
        return "Medium"
    return "Normal"


def hospital_load_ranking(hospitals: Sequence[Hospital], limit: int = TOP_HOSPITALS) -> list[HospitalLoad]:
    """Busiest hospitals first by load percentage."""
    loads = [
        HospitalLoad(
            hospital_name=h.name,
            zone=h.zone,
            level=hospital_status(h).upper(),
            percentage=round(h.current_load / h.capacity * 100),
        )
        for h in hospitals
    ]
    loads.sort(key=lambda load: load.percentage, reverse=True)
    return loads[:limit]


def overall_pressure_level(
    hospital_count: int,
    predictions: Sequence[ZonePrediction],
    alerts: Sequence[Alert],
) -> str:
    if hospital_count == 0:
        return "NO DATA"
    high_zones = sum(1 for p in predictions if p.overall_risk == RiskLevel.HIGH)
    critical_alerts = sum(1 for a in alerts if a.severity == AlertSeverity.CRITICAL)
    if high_zones > 1 or critical_alerts > 0:
        return "CRITICAL"
    if high_zones > 0 or len(alerts) > 5:
        return "WARNING"
    return "NORMAL"


def pressure_trends(frame: pd.DataFrame, by_zone: bool = True) -> pd.DataFrame:
    """
    Hourly ambulance activity from a get_activity_frame() DataFrame.

    Returns columns: [zone,] hour, log_count, mean_patients, log_count_zscore,
    spike. Hours with no activity are absent; spikes are flagged per zone.
    """
    keys = ["zone", "hour"] if by_zone else ["hour"]
    columns = keys + ["log_count", "mean_patients", "log_count_zscore", "spike"]
    if frame.empty:
        return pd.DataFrame(columns=columns)

    df = frame.assign(hour=frame["timestamp"].dt.floor("h"))
    hourly = (
        df.groupby(keys)
        .agg(log_count=("patient_count", "size"), mean_patients=("patient_count", "mean"))
        .reset_index()
    )
    hourly["mean_patients"] = hourly["mean_patients"].round(2)

    if not by_zone:
        return flag_spikes(hourly)[columns]
    flagged = [flag_spikes(group) for _, group in hourly.groupby("zone", sort=False)]
    return pd.concat(flagged, ignore_index=True)[columns]


def build_dashboard_summary(source: DashboardSource, now: datetime | None = None) -> DashboardSummary:
    """
    Assemble the overview summary. DataUnavailable from the source
    propagates; the caller decides on a fallback.
    """
    now = now or datetime.now(tz=UTC)
    since = now - RECENT_WINDOW

    hospitals = source.list_hospitals()
    predictions = get_risk_predictions(source, now)
    alerts = get_current_alerts(source, now, predictions)

    fleet = [
        ZoneFleet(zone=zone, available=source.count_fleet(zone, FleetStatus.AVAILABLE), total=source.count_fleet(zone))
        for zone in ZONES
    ]
    level = overall_pressure_level(len(hospitals), predictions, alerts)
    logger.info("Dashboard summary: pressure %s, %d alerts", level, len(alerts))

    return DashboardSummary(
        overall_pressure_level=level,
        hospitals_monitored=len(hospitals),
        ambulance_logs_24h=source.count_ambulance_logs(since, now),
        active_incidents=source.count_accidents(since, now),
        available_ambulances=sum(f.available for f in fleet),
        total_ambulances=sum(f.total for f in fleet),
        predictions=predictions,
        alerts=alerts[:RECENT_ALERTS],
        pressure_trends=hospital_load_ranking(hospitals),
        ambulance_status=fleet,
        last_updated=now,
    )


def fallback_summary(now: datetime | None = None) -> DashboardSummary:
    """Summary shown when the record store is unavailable: fixed predictions, no counts."""
    now = now or datetime.now(tz=UTC)
    return DashboardSummary(
        overall_pressure_level="NO DATA",
        hospitals_monitored=0,
        ambulance_logs_24h=0,
        active_incidents=0,
        available_ambulances=0,
        total_ambulances=0,
        predictions=fallback_predictions(now),
        alerts=[],
        pressure_trends=[],
        ambulance_status=[ZoneFleet(zone=zone, available=0, total=0) for zone in ZONES],
        last_updated=now,
    )
