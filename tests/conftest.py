"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Zone Risk Monitor test suite.
"""
import itertools
import os
from datetime import UTC, date, datetime

import pytest

# Use in-memory SQLite for tests
os.environ.setdefault("DATABASE_URL", ":memory:")
os.environ.setdefault("HISTORY_DAYS", "3")
os.environ.setdefault("SIMULATION_SEED", "42")


class InMemorySource:
    """Record source over plain lists. Windows are (start, end]."""

    def __init__(self, activity=(), accidents=(), weather=(), ambulances=(), hospitals=()):
        self.activity = list(activity)
        self.accidents = list(accidents)
        self.weather = {(w.zone, w.day): w for w in weather}
        self.ambulances = list(ambulances)
        self.hospitals = list(hospitals)

    def find_ambulance_activity(self, zone, start, end):
        return [r for r in self.activity if r.zone == zone and start < r.timestamp <= end]

    def find_accidents(self, zone, start, end):
        return [a for a in self.accidents if a.zone == zone and start < a.timestamp <= end]

    def find_weather(self, zone, day: date):
        return self.weather.get((zone, day))

    def count_fleet(self, zone, status=None):
        return sum(1 for a in self.ambulances if a.zone == zone and (status is None or a.status == status))

    def list_hospitals(self):
        return list(self.hospitals)

    def count_ambulance_logs(self, since, until):
        return sum(1 for r in self.activity if since < r.timestamp <= until)

    def count_accidents(self, since, until):
        return sum(1 for a in self.accidents if since < a.timestamp <= until)


class FailingSource(InMemorySource):
    """Source whose activity query fails for the given zones (all zones by default)."""

    def __init__(self, zones=None, **kwargs):
        super().__init__(**kwargs)
        self.failing = zones

    def find_ambulance_activity(self, zone, start, end):
        from src.data.errors import DataUnavailable
        if self.failing is None or zone in self.failing:
            raise DataUnavailable(f"store offline for {zone.value}")
        return super().find_ambulance_activity(zone, start, end)


@pytest.fixture
def now() -> datetime:
    """Tuesday, 09:00 UTC: a rush hour in the monsoon season."""
    return datetime(2024, 6, 4, 9, 0, 0, tzinfo=UTC)


@pytest.fixture
def off_peak(now) -> datetime:
    """Same Tuesday at 11:00, outside rush hours."""
    return now.replace(hour=11)


@pytest.fixture
def source_factory():
    return InMemorySource


@pytest.fixture
def failing_source_factory():
    return FailingSource


@pytest.fixture
def make_log():
    from src.data.models import AmbulanceActivityRecord
    counter = itertools.count(1)

    def _make(zone, timestamp, hospital_id="H1", patient_count=1, risk_level=None, **kwargs):
        return AmbulanceActivityRecord(
            id=kwargs.pop("id", f"LOG-{next(counter):04d}"),
            zone=zone,
            hospital_id=hospital_id,
            patient_count=patient_count,
            timestamp=timestamp,
            risk_level=risk_level,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_accident():
    from src.data.models import AccidentRecord
    counter = itertools.count(1)

    def _make(zone, timestamp, severity, **kwargs):
        return AccidentRecord(
            id=kwargs.pop("id", f"ACC-{next(counter):04d}"),
            zone=zone,
            severity=severity,
            timestamp=timestamp,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_alert(now):
    from config.alerts import AlertType
    from config.zones import Zone
    from src.data.models import Alert

    def _make(alert_id, severity, alert_type=AlertType.RUSH_HOUR, zone=Zone.NORTH):
        return Alert(
            id=alert_id,
            type=alert_type,
            zone=zone,
            severity=severity,
            message=f"{alert_id} message",
            description=f"{alert_id} description",
            timestamp=now,
        )

    return _make
