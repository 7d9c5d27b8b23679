"""
src/data/models.py
──────────────────
Pydantic v2 data models for source records, zone predictions, alerts,
and dashboard summaries.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from config.alerts import AlertSeverity, AlertStatus, AlertType
from config.zones import Zone


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RecordSeverity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# Record-severity ordering (accident records only; alerts use ALERT_SEVERITY_RANK)
RECORD_SEVERITY_RANK: dict[RecordSeverity, int] = {
    RecordSeverity.CRITICAL: 4,
    RecordSeverity.HIGH: 3,
    RecordSeverity.MEDIUM: 2,
    RecordSeverity.LOW: 1,
}


class Trend(str, Enum):
    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    STABLE = "Stable"


class WeatherCondition(str, Enum):
    CLEAR = "Clear"
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAINY = "Rainy"
    STORMY = "Stormy"
    FOGGY = "Foggy"
    SNOWY = "Snowy"
    WINDY = "Windy"


class Season(str, Enum):
    SUMMER = "Summer"
    MONSOON = "Monsoon"
    WINTER = "Winter"


class FleetStatus(str, Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"
    MAINTENANCE = "Maintenance"


# ── Source records ────────────────────────────────────────────────────────────

class Hospital(BaseModel):
    id: str
    name: str = Field(max_length=100)
    zone: Zone
    capacity: int = Field(ge=1, le=1000)
    current_load: int = Field(default=0, ge=0)


class Ambulance(BaseModel):
    id: str
    zone: Zone
    status: FleetStatus = FleetStatus.AVAILABLE
    assigned_hospital: str | None = None


class AmbulanceActivityRecord(BaseModel):
    id: str
    zone: Zone
    hospital_id: str | None = None
    patient_count: int = Field(ge=0)
    timestamp: datetime
    risk_level: RiskLevel | None = None
    ambulance_id: str | None = None
    description: str | None = None


class AccidentRecord(BaseModel):
    id: str
    zone: Zone
    severity: RecordSeverity
    timestamp: datetime
    description: str | None = Field(default=None, max_length=500)
    incident_type: str | None = None


class WeatherSnapshot(BaseModel):
    zone: Zone
    day: date
    condition: WeatherCondition
    temperature_c: float | None = Field(default=None, ge=-50.0, le=60.0)
    humidity: float | None = Field(default=None, ge=0.0, le=100.0)


class TimeContext(BaseModel):
    hour: int = Field(ge=0, le=23)
    day_of_week: int = Field(ge=0, le=6)  # Monday = 0
    is_weekend: bool
    is_rush_hour: bool
    season: Season
    is_holiday: bool = False
    is_festival: bool = False


# ── Predictions ───────────────────────────────────────────────────────────────

class EnvironmentalFactors(BaseModel):
    weather_condition: WeatherCondition
    weather_source: str  # "observed" | "fallback"
    temperature_c: float | None = None
    hour: int
    season: Season
    is_rush_hour: bool
    is_weekend: bool
    is_holiday: bool
    is_festival: bool


class PredictionDetails(BaseModel):
    recent_log_count: int = Field(ge=0)
    historical_log_count: int = Field(ge=0)
    recent_accident_count: int = Field(ge=0)
    historical_accident_count: int = Field(ge=0)
    average_load: float = Field(ge=0.0)
    historical_average_load: float = Field(ge=0.0)
    accident_score: float = Field(ge=0.0)
    fleet_available: int = 0
    fleet_total: int = 0
    environmental_factors: EnvironmentalFactors


class ZonePrediction(BaseModel):
    zone: Zone
    ed_pressure: RiskLevel
    ambulance_pressure: RiskLevel
    accident_risk: RiskLevel
    overall_risk: RiskLevel
    trend: Trend
    confidence: int = Field(ge=0, le=95)
    timestamp: datetime
    details: PredictionDetails


# ── Alerts ────────────────────────────────────────────────────────────────────

class Alert(BaseModel):
    id: str
    type: AlertType
    zone: Zone
    severity: AlertSeverity
    message: str
    description: str
    timestamp: datetime
    status: AlertStatus = AlertStatus.ACTIVE
    details: dict[str, Any] = Field(default_factory=dict)


class AcknowledgedAlert(BaseModel):
    id: str
    acknowledged: bool = True
    acknowledged_by: str | None = None
    acknowledged_at: datetime
    status: AlertStatus = AlertStatus.ACKNOWLEDGED


class AlertTypeCount(BaseModel):
    type: AlertType
    count: int = Field(ge=0)
    display_severity: str


# ── Dashboard ─────────────────────────────────────────────────────────────────

class HospitalLoad(BaseModel):
    hospital_name: str
    zone: Zone
    level: str
    percentage: int


class ZoneFleet(BaseModel):
    zone: Zone
    available: int = Field(ge=0)
    total: int = Field(ge=0)


class DashboardSummary(BaseModel):
    overall_pressure_level: str
    hospitals_monitored: int
    ambulance_logs_24h: int
    active_incidents: int
    available_ambulances: int
    total_ambulances: int
    predictions: list[ZonePrediction]
    alerts: list[Alert]
    pressure_trends: list[HospitalLoad]
    ambulance_status: list[ZoneFleet]
    last_updated: datetime
