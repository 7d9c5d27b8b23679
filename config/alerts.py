"""
config/alerts.py
────────────────
Alert severity levels, alert types, and display configuration.

Alerts carry their own severity scale (CRITICAL / WARNING / INFO). It is
unrelated to the Low / Medium / High / Critical scale of accident records
and the two are ranked by separate tables.
"""

from enum import Enum


class AlertSeverity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class AlertType(str, Enum):
    ED_OVERLOAD_RISK = "ED_OVERLOAD_RISK"
    ACCIDENT_HOTSPOT = "ACCIDENT_HOTSPOT"
    HIGH_RISK_DISPATCH = "HIGH_RISK_DISPATCH"
    AMBULANCE_OVERLOAD = "AMBULANCE_OVERLOAD"
    SEVERE_WEATHER = "SEVERE_WEATHER"
    RUSH_HOUR = "RUSH_HOUR"
    HIGH_RISK_ZONE = "HIGH_RISK_ZONE"


class AlertStatus(str, Enum):
    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"


# Severity ordering for sorting (higher = more severe)
ALERT_SEVERITY_RANK: dict[AlertSeverity, int] = {
    AlertSeverity.CRITICAL: 3,
    AlertSeverity.WARNING: 2,
    AlertSeverity.INFO: 1,
}

# Informational only: the severity an alert type is "usually" shown with,
# on the record scale. Emitted alerts carry their own severity.
ALERT_TYPE_DISPLAY_SEVERITY: dict[AlertType, str] = {
    AlertType.HIGH_RISK_DISPATCH: "Critical",
    AlertType.HIGH_RISK_ZONE: "Critical",
    AlertType.ED_OVERLOAD_RISK: "High",
    AlertType.ACCIDENT_HOTSPOT: "High",
    AlertType.AMBULANCE_OVERLOAD: "Medium",
    AlertType.SEVERE_WEATHER: "Medium",
    AlertType.RUSH_HOUR: "Low",
}

SEVERITY_COLORS: dict[str, str] = {
    AlertSeverity.INFO.value: "#58a6ff",
    AlertSeverity.WARNING.value: "#e8a020",
    AlertSeverity.CRITICAL.value: "#da3633",
}

SEVERITY_LABELS: dict[str, str] = {
    AlertSeverity.INFO.value: "Info",
    AlertSeverity.WARNING.value: "Warning",
    AlertSeverity.CRITICAL.value: "Critical",
}

ALERT_TYPE_LABELS: dict[str, str] = {
    AlertType.ED_OVERLOAD_RISK.value: "ED overload",
    AlertType.ACCIDENT_HOTSPOT.value: "Accident hotspot",
    AlertType.HIGH_RISK_DISPATCH.value: "High-risk dispatch",
    AlertType.AMBULANCE_OVERLOAD.value: "Ambulance overload",
    AlertType.SEVERE_WEATHER.value: "Severe weather",
    AlertType.RUSH_HOUR.value: "Rush hour",
    AlertType.HIGH_RISK_ZONE.value: "High-risk zone",
}

# Colors for RiskLevel values on prediction cards
RISK_COLORS: dict[str, str] = {
    "Low": "#2ea44f",
    "Medium": "#e8a020",
    "High": "#da3633",
}

MAX_ALERTS_DISPLAY = 100
