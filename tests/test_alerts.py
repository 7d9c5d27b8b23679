"""
tests/test_alerts.py
─────────────────────
Tests for the alert deriver.
"""
from datetime import timedelta

import pytest

from config.alerts import AlertSeverity, AlertStatus, AlertType
from config.zones import ZONES, Zone
from src.analytics.alerts import (
    acknowledge_alert,
    count_alert_types,
    derive_zone_alerts,
    get_alerts_by_zone,
    get_current_alerts,
    sort_alerts,
)
from src.analytics.risk import calculate_zone_prediction
from src.data.errors import DataUnavailable, InvalidZone
from src.data.models import RecordSeverity, RiskLevel, WeatherSnapshot


def _of_type(alerts, alert_type):
    return [a for a in alerts if a.type == alert_type]


class TestSortAlerts:
    def test_most_severe_first_stable(self, make_alert):
        alerts = [
            make_alert("info", AlertSeverity.INFO),
            make_alert("warn-a", AlertSeverity.WARNING),
            make_alert("crit", AlertSeverity.CRITICAL),
            make_alert("warn-b", AlertSeverity.WARNING),
        ]
        assert [a.id for a in sort_alerts(alerts)] == ["crit", "warn-a", "warn-b", "info"]

    def test_empty(self):
        assert sort_alerts([]) == []


class TestRushHour:
    def test_rush_hour_alert_for_every_zone(self, now, source_factory):
        alerts = get_current_alerts(source_factory(), now)
        assert len(alerts) == len(ZONES)
        assert all(a.type == AlertType.RUSH_HOUR for a in alerts)
        assert all(a.severity == AlertSeverity.INFO for a in alerts)
        assert [a.zone for a in alerts] == list(ZONES)

    def test_no_alerts_off_peak(self, off_peak, source_factory):
        assert get_current_alerts(source_factory(), off_peak) == []

    def test_id_is_stable_within_the_hour(self, now, source_factory):
        first = derive_zone_alerts(Zone.NORTH, source_factory(), now)
        later = derive_zone_alerts(Zone.NORTH, source_factory(), now + timedelta(minutes=40))
        assert first[0].id == later[0].id == "rush_hour_North_2024060409"


class TestIncidentAlerts:
    def test_one_alert_per_incident_with_mapped_severity(self, off_peak, source_factory, make_accident):
        accidents = [
            make_accident(Zone.NORTH, off_peak - timedelta(hours=1), RecordSeverity.CRITICAL, id="A1"),
            make_accident(Zone.NORTH, off_peak - timedelta(hours=2), RecordSeverity.HIGH, id="A2"),
            make_accident(Zone.NORTH, off_peak - timedelta(hours=3), RecordSeverity.MEDIUM, id="A3"),
            make_accident(Zone.NORTH, off_peak - timedelta(hours=4), RecordSeverity.LOW, id="A4"),
        ]
        alerts = derive_zone_alerts(Zone.NORTH, source_factory(accidents=accidents), off_peak)
        by_id = {a.id: a for a in alerts}

        assert by_id["incident_alert_North_A1"].severity == AlertSeverity.CRITICAL
        assert by_id["incident_alert_North_A2"].severity == AlertSeverity.WARNING
        assert by_id["incident_alert_North_A3"].severity == AlertSeverity.WARNING
        assert by_id["incident_alert_North_A4"].severity == AlertSeverity.INFO
        # base score 2 + 2 + 1 = 5 stays below the hotspot threshold
        assert "accident_risk_North_2024060411" not in by_id

    def test_incident_outside_window_ignored(self, off_peak, source_factory, make_accident):
        accidents = [make_accident(Zone.NORTH, off_peak - timedelta(hours=25), RecordSeverity.CRITICAL)]
        assert derive_zone_alerts(Zone.NORTH, source_factory(accidents=accidents), off_peak) == []

    def test_hotspot_from_base_score(self, off_peak, source_factory, make_accident):
        accidents = [make_accident(Zone.EAST, off_peak - timedelta(hours=h + 1), RecordSeverity.HIGH) for h in range(5)]
        alerts = derive_zone_alerts(Zone.EAST, source_factory(accidents=accidents), off_peak)
        hotspot = [a for a in alerts if a.id == "accident_risk_East_2024060411"]
        assert len(hotspot) == 1
        assert hotspot[0].severity == AlertSeverity.CRITICAL
        assert hotspot[0].details["high_severity_count"] == 5


class TestDispatchAlerts:
    def test_one_alert_per_high_risk_record(self, off_peak, source_factory, make_log):
        logs = [
            make_log(Zone.WEST, off_peak - timedelta(hours=1), hospital_id=None, risk_level=RiskLevel.HIGH),
            make_log(Zone.WEST, off_peak - timedelta(hours=2), hospital_id=None, risk_level=RiskLevel.HIGH),
            make_log(Zone.WEST, off_peak - timedelta(hours=3), hospital_id=None, risk_level=RiskLevel.HIGH),
            make_log(Zone.WEST, off_peak - timedelta(hours=4), hospital_id=None, risk_level=RiskLevel.MEDIUM),
        ]
        alerts = derive_zone_alerts(Zone.WEST, source_factory(activity=logs), off_peak)
        dispatch = _of_type(alerts, AlertType.HIGH_RISK_DISPATCH)
        assert len(dispatch) == 3
        assert all(a.severity == AlertSeverity.CRITICAL for a in dispatch)
        assert dispatch[0].details["ambulance_id"] == "Unassigned"

    def test_ambulance_overload_threshold(self, off_peak, source_factory, make_log):
        logs = [make_log(Zone.SOUTH, off_peak - timedelta(minutes=30 * i), hospital_id=None) for i in range(12)]
        alerts = derive_zone_alerts(Zone.SOUTH, source_factory(activity=logs), off_peak)
        overload = _of_type(alerts, AlertType.AMBULANCE_OVERLOAD)
        assert len(overload) == 1
        assert overload[0].severity == AlertSeverity.WARNING

        fewer = derive_zone_alerts(Zone.SOUTH, source_factory(activity=logs[:11]), off_peak)
        assert _of_type(fewer, AlertType.AMBULANCE_OVERLOAD) == []

    def test_ed_overload(self, off_peak, source_factory, make_log):
        logs = [make_log(Zone.CENTRAL, off_peak - timedelta(hours=1), hospital_id="C1", patient_count=9)]
        alerts = derive_zone_alerts(Zone.CENTRAL, source_factory(activity=logs), off_peak)
        ed = _of_type(alerts, AlertType.ED_OVERLOAD_RISK)
        assert len(ed) == 1
        assert ed[0].severity == AlertSeverity.CRITICAL


class TestWeatherAndZoneAlerts:
    def test_observed_severe_weather(self, off_peak, source_factory):
        snapshot = WeatherSnapshot(zone=Zone.NORTH, day=off_peak.date(), condition="Stormy", temperature_c=18.0)
        alerts = derive_zone_alerts(Zone.NORTH, source_factory(weather=[snapshot]), off_peak)
        weather = _of_type(alerts, AlertType.SEVERE_WEATHER)
        assert len(weather) == 1
        assert weather[0].severity == AlertSeverity.WARNING
        assert "Stormy" in weather[0].message

    def test_mild_weather_no_alert(self, off_peak, source_factory):
        snapshot = WeatherSnapshot(zone=Zone.NORTH, day=off_peak.date(), condition="Rainy")
        assert derive_zone_alerts(Zone.NORTH, source_factory(weather=[snapshot]), off_peak) == []

    def test_high_risk_zone_from_prediction(self, off_peak, source_factory):
        source = source_factory()
        prediction = calculate_zone_prediction(Zone.EAST, source, off_peak).model_copy(
            update={"overall_risk": RiskLevel.HIGH}
        )
        alerts = derive_zone_alerts(Zone.EAST, source, off_peak, prediction)
        assert [a.type for a in alerts] == [AlertType.HIGH_RISK_ZONE]
        assert alerts[0].severity == AlertSeverity.CRITICAL

    def test_prediction_for_other_zone_ignored(self, off_peak, source_factory):
        source = source_factory()
        prediction = calculate_zone_prediction(Zone.EAST, source, off_peak).model_copy(
            update={"overall_risk": RiskLevel.HIGH}
        )
        assert derive_zone_alerts(Zone.NORTH, source, off_peak, prediction) == []


class TestAlertsByZone:
    def test_sorted_and_scoped(self, now, source_factory, make_accident):
        accidents = [
            make_accident(Zone.SOUTH, now - timedelta(hours=1), RecordSeverity.CRITICAL),
            make_accident(Zone.NORTH, now - timedelta(hours=1), RecordSeverity.CRITICAL),
        ]
        alerts = get_alerts_by_zone("south", source_factory(accidents=accidents), now)
        assert {a.zone for a in alerts} == {Zone.SOUTH}
        assert [a.severity for a in alerts] == [AlertSeverity.CRITICAL, AlertSeverity.INFO]

    def test_invalid_zone(self, now, source_factory):
        with pytest.raises(InvalidZone):
            get_alerts_by_zone("Nowhere", source_factory(), now)

    def test_matches_current_alerts_for_high_risk_zone(self, off_peak, source_factory, make_log, make_accident):
        logs = [make_log(Zone.NORTH, off_peak - timedelta(hours=h), patient_count=3) for h in range(13)]
        accidents = [
            make_accident(Zone.NORTH, off_peak - timedelta(hours=h + 1), RecordSeverity.HIGH) for h in range(6)
        ]
        source = source_factory(activity=logs, accidents=accidents)

        by_zone = get_alerts_by_zone(Zone.NORTH, source, off_peak)
        current = [a for a in get_current_alerts(source, off_peak) if a.zone == Zone.NORTH]

        assert [a.id for a in by_zone] == [a.id for a in current]
        assert "high_risk_zone_North_2024060411" in {a.id for a in by_zone}

    def test_store_failure_propagates(self, now, failing_source_factory):
        with pytest.raises(DataUnavailable):
            get_alerts_by_zone(Zone.NORTH, failing_source_factory(), now)

    def test_current_alerts_store_failure_propagates(self, now, failing_source_factory):
        with pytest.raises(DataUnavailable):
            get_current_alerts(failing_source_factory(), now)


class TestAcknowledge:
    def test_known_alert(self, now, source_factory):
        ack = acknowledge_alert("rush_hour_North_2024060409", "dispatcher-7", source_factory(), now)
        assert ack is not None
        assert ack.acknowledged is True
        assert ack.acknowledged_by == "dispatcher-7"
        assert ack.acknowledged_at == now
        assert ack.status == AlertStatus.ACKNOWLEDGED

    def test_unknown_alert_returns_none(self, now, source_factory):
        assert acknowledge_alert("rush_hour_North_1999010109", None, source_factory(), now) is None

    def test_not_persisted(self, now, source_factory):
        source = source_factory()
        acknowledge_alert("rush_hour_North_2024060409", "dispatcher-7", source, now)
        alerts = get_current_alerts(source, now)
        assert all(a.status == AlertStatus.ACTIVE for a in alerts)


class TestCountAlertTypes:
    def test_counts(self, now, source_factory):
        counts = count_alert_types(get_current_alerts(source_factory(), now))
        assert len(counts) == 1
        assert counts[0].type == AlertType.RUSH_HOUR
        assert counts[0].count == 5
        assert counts[0].display_severity == "Low"

    def test_empty(self):
        assert count_alert_types([]) == []
