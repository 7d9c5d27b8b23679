"""
tests/test_store.py
────────────────────
Tests for the SQLite record store (in-memory database).
"""
import sqlite3
from datetime import timedelta

import pytest

from config.zones import ZONES, Zone
from src.analytics.predictions import get_risk_predictions
from src.data import store
from src.data.errors import DataUnavailable
from src.data.models import Ambulance, FleetStatus, Hospital, WeatherSnapshot


@pytest.fixture(autouse=True)
def empty_db():
    store.initialize_db(force_reseed=True, seed_data=False)
    yield


class TestActivity:
    def test_window_is_half_open(self, now, make_log):
        store.insert_activity([
            make_log(Zone.NORTH, now - timedelta(hours=24), id="edge-start"),
            make_log(Zone.NORTH, now - timedelta(hours=3), id="inside"),
            make_log(Zone.NORTH, now, id="edge-end"),
            make_log(Zone.NORTH, now + timedelta(seconds=1), id="future"),
        ])
        found = store.find_ambulance_activity(Zone.NORTH, now - timedelta(hours=24), now)
        assert [r.id for r in found] == ["inside", "edge-end"]

    def test_filters_by_zone_and_orders_by_time(self, now, make_log):
        store.insert_activity([
            make_log(Zone.SOUTH, now - timedelta(hours=1), id="s-late"),
            make_log(Zone.SOUTH, now - timedelta(hours=5), id="s-early"),
            make_log(Zone.EAST, now - timedelta(hours=2), id="e"),
        ])
        found = store.find_ambulance_activity(Zone.SOUTH, now - timedelta(days=1), now)
        assert [r.id for r in found] == ["s-early", "s-late"]

    def test_record_roundtrip(self, now, make_log):
        from src.data.models import RiskLevel
        original = make_log(
            Zone.WEST, now - timedelta(minutes=5), hospital_id=None, patient_count=3,
            risk_level=RiskLevel.HIGH, ambulance_id="WES-A01", description="cardiac",
        )
        store.insert_activity([original])
        [found] = store.find_ambulance_activity(Zone.WEST, now - timedelta(hours=1), now)
        assert found == original

    def test_duplicate_ids_ignored(self, now, make_log):
        record = make_log(Zone.NORTH, now - timedelta(hours=1), id="dup")
        store.insert_activity([record, record])
        assert len(store.find_ambulance_activity(Zone.NORTH, now - timedelta(days=1), now)) == 1

    def test_count_window(self, now, make_log):
        store.insert_activity([
            make_log(Zone.NORTH, now - timedelta(hours=2)),
            make_log(Zone.CENTRAL, now - timedelta(hours=10)),
            make_log(Zone.WEST, now),
            make_log(Zone.EAST, now - timedelta(hours=30)),
            make_log(Zone.SOUTH, now + timedelta(minutes=5)),
        ])
        assert store.count_ambulance_logs(now - timedelta(hours=24), now) == 3


class TestAccidentsAndWeather:
    def test_find_accidents(self, now, make_accident):
        from src.data.models import RecordSeverity
        store.insert_accidents([
            make_accident(Zone.EAST, now - timedelta(hours=2), RecordSeverity.HIGH, incident_type="fall"),
            make_accident(Zone.EAST, now - timedelta(hours=30), RecordSeverity.LOW),
        ])
        found = store.find_accidents(Zone.EAST, now - timedelta(hours=24), now)
        assert len(found) == 1
        assert found[0].severity == RecordSeverity.HIGH
        assert found[0].incident_type == "fall"
        assert store.count_accidents(now - timedelta(days=7), now) == 2

    def test_count_accidents_excludes_later_records(self, now, make_accident):
        from src.data.models import RecordSeverity
        store.insert_accidents([
            make_accident(Zone.EAST, now - timedelta(hours=1), RecordSeverity.LOW),
            make_accident(Zone.EAST, now + timedelta(hours=1), RecordSeverity.LOW),
        ])
        assert store.count_accidents(now - timedelta(hours=24), now) == 1

    def test_weather_roundtrip(self, now):
        snapshot = WeatherSnapshot(zone=Zone.NORTH, day=now.date(), condition="Foggy", temperature_c=12.5, humidity=90.0)
        store.insert_weather([snapshot])
        assert store.find_weather(Zone.NORTH, now.date()) == snapshot

    def test_missing_weather_is_none(self, now):
        assert store.find_weather(Zone.SOUTH, now.date()) is None


class TestFleetAndHospitals:
    @pytest.fixture
    def fleet(self):
        store.insert_ambulances([
            Ambulance(id="N1", zone=Zone.NORTH, status=FleetStatus.AVAILABLE),
            Ambulance(id="N2", zone=Zone.NORTH, status=FleetStatus.BUSY),
            Ambulance(id="N3", zone=Zone.NORTH, status=FleetStatus.AVAILABLE),
            Ambulance(id="C1", zone=Zone.CENTRAL, status=FleetStatus.MAINTENANCE),
        ])

    def test_count_fleet(self, fleet):
        assert store.count_fleet(Zone.NORTH) == 3
        assert store.count_fleet(Zone.NORTH, FleetStatus.AVAILABLE) == 2
        assert store.count_fleet(Zone.CENTRAL, FleetStatus.AVAILABLE) == 0
        assert store.count_fleet(Zone.EAST) == 0

    def test_fleet_status_by_zone(self, fleet):
        status = store.fleet_status_by_zone()
        assert [f.zone for f in status] == list(ZONES)
        assert (status[0].available, status[0].total) == (2, 3)
        assert (status[4].available, status[4].total) == (0, 1)

    def test_list_hospitals_by_name(self):
        store.insert_hospitals([
            Hospital(id="2", name="West General", zone=Zone.WEST, capacity=100, current_load=40),
            Hospital(id="1", name="East Clinic", zone=Zone.EAST, capacity=50, current_load=45),
        ])
        assert [h.name for h in store.list_hospitals()] == ["East Clinic", "West General"]


class TestActivityFrame:
    def test_frame_window_and_timezone(self, now, make_log):
        store.insert_activity([
            make_log(Zone.NORTH, now - timedelta(hours=1), patient_count=2),
            make_log(Zone.SOUTH, now - timedelta(hours=2), patient_count=1),
            make_log(Zone.NORTH, now - timedelta(hours=30)),
        ])
        df = store.get_activity_frame(hours=24, now=now)
        assert len(df) == 2
        assert str(df["timestamp"].dt.tz) == "UTC"
        assert set(df.columns) >= {"zone", "hospital_id", "patient_count", "timestamp"}

    def test_frame_zone_filter(self, now, make_log):
        store.insert_activity([
            make_log(Zone.NORTH, now - timedelta(hours=1)),
            make_log(Zone.SOUTH, now - timedelta(hours=2)),
        ])
        df = store.get_activity_frame(hours=24, zone=Zone.SOUTH, now=now)
        assert df["zone"].tolist() == ["South"]

    def test_empty_frame(self, now):
        assert store.get_activity_frame(hours=24, now=now).empty


class TestFailures:
    def test_sqlite_error_becomes_data_unavailable(self, now, monkeypatch):
        def broken():
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(store, "_get_conn", broken)
        with pytest.raises(DataUnavailable, match="locked"):
            store.find_accidents(Zone.NORTH, now - timedelta(hours=24), now)


class TestSeeding:
    def test_seeded_store_serves_predictions(self):
        store.initialize_db(force_reseed=True)
        assert len(store.list_hospitals()) > 0
        predictions = get_risk_predictions(store)
        assert [p.zone for p in predictions] == list(ZONES)

    def test_initialize_is_idempotent(self):
        store.initialize_db(force_reseed=True)
        before = len(store.list_hospitals())
        store.initialize_db()
        assert len(store.list_hospitals()) == before
