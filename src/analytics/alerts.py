"""
src/analytics/alerts.py
────────────────────────
Alert Deriver.

Re-examines each zone's record streams and emits discrete alerts. Several
conditions fire per record (one alert per incident, one per high-risk
dispatch) rather than collapsing into a level, so this is not a view over
ZonePrediction.

Per zone, all independent:
  ED_OVERLOAD_RISK    CRITICAL  ED pressure is High
  ACCIDENT_HOTSPOT    mapped    one per incident in the last 24 h
  HIGH_RISK_DISPATCH  CRITICAL  one per dispatch flagged High risk
  ACCIDENT_HOTSPOT    CRITICAL  base accident score classifies High
  AMBULANCE_OVERLOAD  WARNING   ≥ 12 dispatches in the last 24 h
  SEVERE_WEATHER      WARNING   observed Stormy / Foggy / Snowy today
  RUSH_HOUR           INFO      current hour is a rush hour
  HIGH_RISK_ZONE      CRITICAL  zone prediction overall risk is High

Acknowledgement is not persisted: acknowledge_alert() only confirms the
alert exists, and the alert is active again on the next recomputation.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from config.alerts import (
    ALERT_SEVERITY_RANK,
    ALERT_TYPE_DISPLAY_SEVERITY,
    AlertSeverity,
    AlertType,
)
from config.zones import AMBULANCE_OVERLOAD_LOGS, Zone, parse_zone
from src.analytics.context import build_time_context, is_severe_weather
from src.analytics.predictions import get_risk_predictions, run_per_zone
from src.analytics.risk import (
    HISTORICAL_WINDOW,
    RECENT_WINDOW,
    accident_base_score,
    average_hospital_load,
    calculate_ed_pressure,
    calculate_zone_prediction,
    classify_accident_score,
    hospital_loads,
)
from src.data.models import (
    AccidentRecord,
    AcknowledgedAlert,
    Alert,
    AlertTypeCount,
    RecordSeverity,
    RiskLevel,
    ZonePrediction,
)
from src.data.repository import RecordSource
from src.logging_setup import get_logger

logger = get_logger(__name__)

# Medium incidents are raised to WARNING for visibility.
INCIDENT_ALERT_SEVERITY: dict[RecordSeverity, AlertSeverity] = {
    RecordSeverity.CRITICAL: AlertSeverity.CRITICAL,
    RecordSeverity.HIGH: AlertSeverity.WARNING,
    RecordSeverity.MEDIUM: AlertSeverity.WARNING,
    RecordSeverity.LOW: AlertSeverity.INFO,
}


def _bucket(now: datetime) -> str:
    """Hour bucket used in zone-level alert ids."""
    return now.strftime("%Y%m%d%H")


def _incident_alert(zone: Zone, incident: AccidentRecord) -> Alert:
    severity = incident.severity.value
    return Alert(
        id=f"incident_alert_{zone.value}_{incident.id}",
        type=AlertType.ACCIDENT_HOTSPOT,
        zone=zone,
        severity=INCIDENT_ALERT_SEVERITY[incident.severity],
        message=f"{severity} Severity Incident in {zone.value}",
        description=incident.description or f"{severity} severity accident reported in {zone.value} zone.",
        timestamp=incident.timestamp,
        details={
            "record_severity": severity,
            "incident_type": incident.incident_type,
            "notes": incident.description or "No additional details",
        },
    )


def derive_zone_alerts(
    zone: Zone | str,
    source: RecordSource,
    now: datetime | None = None,
    prediction: ZonePrediction | None = None,
) -> list[Alert]:
    """Every alert condition for one zone, unsorted."""
    zone = parse_zone(zone)
    now = now or datetime.now(tz=UTC)
    recent_start = now - RECENT_WINDOW
    bucket = _bucket(now)
    alerts: list[Alert] = []

    recent_logs = source.find_ambulance_activity(zone, recent_start, now)
    historical_logs = source.find_ambulance_activity(zone, now - HISTORICAL_WINDOW, recent_start)
    recent_accidents = source.find_accidents(zone, recent_start, now)

    # ── ED overload ───────────────────────────────────────────────────────────
    if calculate_ed_pressure(recent_logs, historical_logs) == RiskLevel.HIGH:
        hospital_count = len(hospital_loads(recent_logs))
        avg_load = average_hospital_load(recent_logs)
        alerts.append(Alert(
            id=f"ed_pressure_{zone.value}_{bucket}",
            type=AlertType.ED_OVERLOAD_RISK,
            zone=zone,
            severity=AlertSeverity.CRITICAL,
            message=f"Emergency Department overload risk in {zone.value} zone",
            description=(
                f"High patient volume detected across {hospital_count} hospitals in "
                f"{zone.value} zone. Average load is {avg_load:.1f}."
            ),
            timestamp=now,
            details={"hospital_count": hospital_count, "average_load": round(avg_load, 2)},
        ))

    # ── Individual incidents (newest first) ───────────────────────────────────
    for incident in sorted(recent_accidents, key=lambda a: a.timestamp, reverse=True):
        alerts.append(_incident_alert(zone, incident))

    # ── High-risk dispatches: one alert per record ────────────────────────────
    high_risk = [r for r in recent_logs if r.risk_level == RiskLevel.HIGH]
    for record in sorted(high_risk, key=lambda r: r.timestamp, reverse=True):
        alerts.append(Alert(
            id=f"dispatch_risk_{zone.value}_{record.id}",
            type=AlertType.HIGH_RISK_DISPATCH,
            zone=zone,
            severity=AlertSeverity.CRITICAL,
            message=f"High Risk Accident Dispatch in {zone.value}",
            description=record.description or f"Critical ambulance dispatch reported in {zone.value} zone.",
            timestamp=record.timestamp,
            details={
                "risk_level": record.risk_level.value if record.risk_level else None,
                "ambulance_id": record.ambulance_id or "Unassigned",
                "hospital_id": record.hospital_id,
                "notes": record.description or "No additional details",
            },
        ))

    # ── Zone-wide accident risk (no weather / time factors) ───────────────────
    if classify_accident_score(accident_base_score(recent_accidents)) == RiskLevel.HIGH:
        severe = sum(
            1 for a in recent_accidents if a.severity in (RecordSeverity.HIGH, RecordSeverity.CRITICAL)
        )
        alerts.append(Alert(
            id=f"accident_risk_{zone.value}_{bucket}",
            type=AlertType.ACCIDENT_HOTSPOT,
            zone=zone,
            severity=AlertSeverity.CRITICAL,
            message=f"Accident hotspot detected in {zone.value} zone",
            description=(
                f"Multiple high-severity accidents reported in {zone.value} zone. "
                f"Total accidents: {len(recent_accidents)}."
            ),
            timestamp=now,
            details={"accident_count": len(recent_accidents), "high_severity_count": severe},
        ))

    # ── Ambulance overload ────────────────────────────────────────────────────
    if len(recent_logs) >= AMBULANCE_OVERLOAD_LOGS:
        avg_patients = sum(r.patient_count for r in recent_logs) / len(recent_logs)
        alerts.append(Alert(
            id=f"ambulance_pressure_{zone.value}_{bucket}",
            type=AlertType.AMBULANCE_OVERLOAD,
            zone=zone,
            severity=AlertSeverity.WARNING,
            message=f"High ambulance activity in {zone.value} zone",
            description=f"Ambulance fleet is under high pressure. {len(recent_logs)} recent logs.",
            timestamp=now,
            details={"arrival_count": len(recent_logs), "average_patients": round(avg_patients, 2)},
        ))

    # ── Severe weather (observed snapshots only) ──────────────────────────────
    weather = source.find_weather(zone, now.date())
    if weather is not None and is_severe_weather(weather.condition):
        temperature = "n/a" if weather.temperature_c is None else f"{weather.temperature_c:.1f}°C"
        alerts.append(Alert(
            id=f"weather_alert_{zone.value}_{bucket}",
            type=AlertType.SEVERE_WEATHER,
            zone=zone,
            severity=AlertSeverity.WARNING,
            message=f"Severe weather conditions in {zone.value} zone: {weather.condition.value}",
            description=f"Weather warning: {weather.condition.value}. Temperature: {temperature}.",
            timestamp=now,
            details={
                "condition": weather.condition.value,
                "temperature_c": weather.temperature_c,
                "humidity": weather.humidity,
            },
        ))

    # ── Rush hour ─────────────────────────────────────────────────────────────
    time_context = build_time_context(now)
    if time_context.is_rush_hour:
        alerts.append(Alert(
            id=f"rush_hour_{zone.value}_{bucket}",
            type=AlertType.RUSH_HOUR,
            zone=zone,
            severity=AlertSeverity.INFO,
            message=f"Rush hour traffic expected in {zone.value} zone",
            description="Traffic congestion likely due to rush hour. Delays expected for ambulance routing.",
            timestamp=now,
            details={
                "hour": time_context.hour,
                "is_weekend": time_context.is_weekend,
                "is_holiday": time_context.is_holiday,
            },
        ))

    # ── Zone prediction ───────────────────────────────────────────────────────
    if prediction is not None and prediction.zone == zone and prediction.overall_risk == RiskLevel.HIGH:
        alerts.append(Alert(
            id=f"high_risk_zone_{zone.value}_{bucket}",
            type=AlertType.HIGH_RISK_ZONE,
            zone=zone,
            severity=AlertSeverity.CRITICAL,
            message=f"High overall risk detected in {zone.value} zone",
            description=(
                f"ED {prediction.ed_pressure.value}, ambulance {prediction.ambulance_pressure.value}, "
                f"accident {prediction.accident_risk.value}; trend {prediction.trend.value}."
            ),
            timestamp=now,
            details={
                "trend": prediction.trend.value,
                "confidence": prediction.confidence,
            },
        ))

    return alerts


def sort_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    """Most severe first; equal severities keep their input order."""
    return sorted(alerts, key=lambda a: ALERT_SEVERITY_RANK[a.severity], reverse=True)


def get_current_alerts(
    source: RecordSource,
    now: datetime | None = None,
    predictions: list[ZonePrediction] | None = None,
) -> list[Alert]:
    """All zones' alerts, severity-sorted. Computes predictions when not given."""
    now = now or datetime.now(tz=UTC)
    if predictions is None:
        predictions = get_risk_predictions(source, now)
    by_zone = {p.zone: p for p in predictions}

    per_zone = run_per_zone(lambda zone: derive_zone_alerts(zone, source, now, by_zone.get(zone)))
    alerts = sort_alerts(alert for zone_alerts in per_zone for alert in zone_alerts)
    logger.info("Derived %d alerts across zones", len(alerts))
    return alerts


def get_alerts_by_zone(
    zone: Zone | str,
    source: RecordSource,
    now: datetime | None = None,
    prediction: ZonePrediction | None = None,
) -> list[Alert]:
    """One zone's slice of get_current_alerts(). Computes the zone prediction when not given."""
    zone = parse_zone(zone)
    now = now or datetime.now(tz=UTC)
    if prediction is None:
        prediction = calculate_zone_prediction(zone, source, now)
    return sort_alerts(derive_zone_alerts(zone, source, now, prediction))


def acknowledge_alert(
    alert_id: str,
    acknowledged_by: str | None,
    source: RecordSource,
    now: datetime | None = None,
) -> AcknowledgedAlert | None:
    """
    Confirm an alert by id.

    Returns None when the id is not among the current alerts. Nothing is
    stored: the same alert is reported as active on the next call to
    get_current_alerts().
    """
    now = now or datetime.now(tz=UTC)
    current = get_current_alerts(source, now)
    if not any(alert.id == alert_id for alert in current):
        logger.warning("Acknowledge requested for unknown alert %s", alert_id)
        return None
    logger.info("Alert %s acknowledged by %s", alert_id, acknowledged_by or "anonymous")
    return AcknowledgedAlert(id=alert_id, acknowledged_by=acknowledged_by, acknowledged_at=now)


def count_alert_types(alerts: Iterable[Alert]) -> list[AlertTypeCount]:
    """Alert counts per type, first-seen order, with the display severity of each type."""
    counts = Counter(alert.type for alert in alerts)
    return [
        AlertTypeCount(type=alert_type, count=count, display_severity=ALERT_TYPE_DISPLAY_SEVERITY[alert_type])
        for alert_type, count in counts.items()
    ]
