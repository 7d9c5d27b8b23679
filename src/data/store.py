"""
src/data/store.py
─────────────────
SQLite data store for source records.

Provides:
  - initialize_db()            : Create tables + seed with simulated history on first run
  - insert_*()                 : Bulk insert hospitals, fleet, activity, accidents, weather
  - find_ambulance_activity()  : Activity records for a zone over (start, end]
  - find_accidents()           : Accident records for a zone over (start, end]
  - find_weather()             : Weather snapshot for a (zone, day)
  - count_fleet()              : Ambulances in a zone, optionally by status
  - list_hospitals() / count_*() / fleet_status_by_zone() : dashboard counts
  - get_activity_frame()       : Activity rows as a DataFrame for trend charts

The module itself satisfies src.data.repository.DashboardSource.
Every sqlite3.Error is re-raised as DataUnavailable.

Thread safety: uses check_same_thread=False + a module-level lock.
"""
from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime, timedelta

import pandas as pd

from config.settings import settings
from config.zones import ZONES, Zone
from src.data.errors import DataUnavailable
from src.data.models import (
    AccidentRecord,
    Ambulance,
    AmbulanceActivityRecord,
    FleetStatus,
    Hospital,
    WeatherSnapshot,
    ZoneFleet,
)
from src.logging_setup import get_logger

logger = get_logger(__name__)

_lock = threading.RLock()
_DB: sqlite3.Connection | None = None


# ── Connection ────────────────────────────────────────────────────────────────

def _get_conn() -> sqlite3.Connection:
    global _DB
    if _DB is None:
        _DB = sqlite3.connect(settings.DATABASE_URL, check_same_thread=False)
        _DB.row_factory = sqlite3.Row
    return _DB


@contextmanager
def _session() -> Iterator[sqlite3.Connection]:
    """Locked connection; sqlite errors surface as DataUnavailable."""
    try:
        conn = _get_conn()
        with _lock:
            yield conn
    except (sqlite3.Error, pd.errors.DatabaseError) as exc:
        logger.error("Record store query failed: %s", exc)
        raise DataUnavailable(str(exc)) from exc


def _ts(value: datetime) -> str:
    """Fixed-width UTC ISO string so lexical order matches time order."""
    return value.astimezone(UTC).isoformat(timespec="microseconds")


# ── Schema ────────────────────────────────────────────────────────────────────

_CREATE_HOSPITALS = """
CREATE TABLE IF NOT EXISTS hospitals (
    id            TEXT PRIMARY KEY,
    name          TEXT NOT NULL,
    zone          TEXT NOT NULL,
    capacity      INTEGER NOT NULL,
    current_load  INTEGER NOT NULL DEFAULT 0
);
"""

_CREATE_AMBULANCES = """
CREATE TABLE IF NOT EXISTS ambulances (
    id                 TEXT PRIMARY KEY,
    zone               TEXT NOT NULL,
    status             TEXT NOT NULL DEFAULT 'Available',
    assigned_hospital  TEXT
);
"""

_CREATE_ACTIVITY = """
CREATE TABLE IF NOT EXISTS ambulance_logs (
    id             TEXT PRIMARY KEY,
    zone           TEXT NOT NULL,
    hospital_id    TEXT,
    patient_count  INTEGER NOT NULL,
    timestamp      TEXT NOT NULL,
    risk_level     TEXT,
    ambulance_id   TEXT,
    description    TEXT
);
"""

_CREATE_ACCIDENTS = """
CREATE TABLE IF NOT EXISTS accidents (
    id             TEXT PRIMARY KEY,
    zone           TEXT NOT NULL,
    severity       TEXT NOT NULL,
    timestamp      TEXT NOT NULL,
    description    TEXT,
    incident_type  TEXT
);
"""

_CREATE_WEATHER = """
CREATE TABLE IF NOT EXISTS weather (
    zone           TEXT NOT NULL,
    day            TEXT NOT NULL,
    condition      TEXT NOT NULL,
    temperature_c  REAL,
    humidity       REAL,
    PRIMARY KEY (zone, day)
);
"""

_CREATE_IDX = """
CREATE INDEX IF NOT EXISTS idx_logs_zone_ts      ON ambulance_logs (zone, timestamp);
CREATE INDEX IF NOT EXISTS idx_accidents_zone_ts ON accidents      (zone, timestamp);
CREATE INDEX IF NOT EXISTS idx_ambulances_zone   ON ambulances     (zone, status);
"""

_TABLES = ("hospitals", "ambulances", "ambulance_logs", "accidents", "weather")


def _create_tables(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(
            _CREATE_HOSPITALS + _CREATE_AMBULANCES + _CREATE_ACTIVITY
            + _CREATE_ACCIDENTS + _CREATE_WEATHER + _CREATE_IDX
        )


# ── Public API: setup ─────────────────────────────────────────────────────────

def initialize_db(force_reseed: bool = False, seed_data: bool = True) -> None:
    """
    Create tables and populate with simulated history if the DB is empty.
    Safe to call multiple times (idempotent). With seed_data=False a reseed
    leaves the tables empty.
    """
    # Import here to avoid circular deps
    from src.data.simulator import generate_seed_data

    with _session() as conn:
        _create_tables(conn)
        count = conn.execute("SELECT COUNT(*) FROM hospitals").fetchone()[0]
        if count > 0 and not force_reseed:
            return  # Already seeded

        with conn:
            for table in _TABLES:
                conn.execute(f"DELETE FROM {table}")

    if not seed_data:
        return

    data = generate_seed_data()
    insert_hospitals(data.hospitals)
    insert_ambulances(data.ambulances)
    insert_activity(data.activity)
    insert_accidents(data.accidents)
    insert_weather(data.weather)
    logger.info(
        "Seeded %d hospitals, %d ambulances, %d activity logs, %d accidents",
        len(data.hospitals), len(data.ambulances), len(data.activity), len(data.accidents),
    )


def insert_hospitals(hospitals: list[Hospital]) -> None:
    if not hospitals:
        return
    rows = [(h.id, h.name, h.zone.value, h.capacity, h.current_load) for h in hospitals]
    with _session() as conn, conn:
        conn.executemany(
            "INSERT OR REPLACE INTO hospitals (id, name, zone, capacity, current_load) VALUES (?,?,?,?,?)",
            rows,
        )


def insert_ambulances(ambulances: list[Ambulance]) -> None:
    if not ambulances:
        return
    rows = [(a.id, a.zone.value, a.status.value, a.assigned_hospital) for a in ambulances]
    with _session() as conn, conn:
        conn.executemany(
            "INSERT OR REPLACE INTO ambulances (id, zone, status, assigned_hospital) VALUES (?,?,?,?)",
            rows,
        )


def insert_activity(records: list[AmbulanceActivityRecord]) -> None:
    if not records:
        return
    rows = [
        (
            r.id,
            r.zone.value,
            r.hospital_id,
            r.patient_count,
            _ts(r.timestamp),
            r.risk_level.value if r.risk_level else None,
            r.ambulance_id,
            r.description,
        )
        for r in records
    ]
    with _session() as conn, conn:
        conn.executemany(
            """INSERT OR IGNORE INTO ambulance_logs
               (id, zone, hospital_id, patient_count, timestamp,
                risk_level, ambulance_id, description)
               VALUES (?,?,?,?,?,?,?,?)""",
            rows,
        )


def insert_accidents(records: list[AccidentRecord]) -> None:
    if not records:
        return
    rows = [
        (r.id, r.zone.value, r.severity.value, _ts(r.timestamp), r.description, r.incident_type)
        for r in records
    ]
    with _session() as conn, conn:
        conn.executemany(
            """INSERT OR IGNORE INTO accidents
               (id, zone, severity, timestamp, description, incident_type)
               VALUES (?,?,?,?,?,?)""",
            rows,
        )


def insert_weather(snapshots: list[WeatherSnapshot]) -> None:
    if not snapshots:
        return
    rows = [
        (w.zone.value, w.day.isoformat(), w.condition.value, w.temperature_c, w.humidity)
        for w in snapshots
    ]
    with _session() as conn, conn:
        conn.executemany(
            """INSERT OR REPLACE INTO weather (zone, day, condition, temperature_c, humidity)
               VALUES (?,?,?,?,?)""",
            rows,
        )


# ── Public API: record source ─────────────────────────────────────────────────

def find_ambulance_activity(zone: Zone, start: datetime, end: datetime) -> list[AmbulanceActivityRecord]:
    with _session() as conn:
        rows = conn.execute(
            """SELECT * FROM ambulance_logs
               WHERE zone = ? AND timestamp > ? AND timestamp <= ?
               ORDER BY timestamp ASC""",
            (zone.value, _ts(start), _ts(end)),
        ).fetchall()
    return [
        AmbulanceActivityRecord(
            id=row["id"],
            zone=row["zone"],
            hospital_id=row["hospital_id"],
            patient_count=row["patient_count"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            risk_level=row["risk_level"],
            ambulance_id=row["ambulance_id"],
            description=row["description"],
        )
        for row in rows
    ]


def find_accidents(zone: Zone, start: datetime, end: datetime) -> list[AccidentRecord]:
    with _session() as conn:
        rows = conn.execute(
            """SELECT * FROM accidents
               WHERE zone = ? AND timestamp > ? AND timestamp <= ?
               ORDER BY timestamp ASC""",
            (zone.value, _ts(start), _ts(end)),
        ).fetchall()
    return [
        AccidentRecord(
            id=row["id"],
            zone=row["zone"],
            severity=row["severity"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            description=row["description"],
            incident_type=row["incident_type"],
        )
        for row in rows
    ]


def find_weather(zone: Zone, day: date) -> WeatherSnapshot | None:
    with _session() as conn:
        row = conn.execute(
            "SELECT * FROM weather WHERE zone = ? AND day = ?",
            (zone.value, day.isoformat()),
        ).fetchone()
    if row is None:
        return None
    return WeatherSnapshot(
        zone=row["zone"],
        day=date.fromisoformat(row["day"]),
        condition=row["condition"],
        temperature_c=row["temperature_c"],
        humidity=row["humidity"],
    )


def count_fleet(zone: Zone, status: FleetStatus | None = None) -> int:
    sql = "SELECT COUNT(*) FROM ambulances WHERE zone = ?"
    params: list = [zone.value]
    if status is not None:
        sql += " AND status = ?"
        params.append(status.value)
    with _session() as conn:
        return conn.execute(sql, params).fetchone()[0]


# ── Public API: dashboard ─────────────────────────────────────────────────────

def list_hospitals() -> list[Hospital]:
    with _session() as conn:
        rows = conn.execute("SELECT * FROM hospitals ORDER BY name ASC").fetchall()
    return [Hospital(**dict(row)) for row in rows]


def count_ambulance_logs(since: datetime, until: datetime) -> int:
    """Activity logs over (since, until]."""
    with _session() as conn:
        return conn.execute(
            "SELECT COUNT(*) FROM ambulance_logs WHERE timestamp > ? AND timestamp <= ?",
            (_ts(since), _ts(until)),
        ).fetchone()[0]


def count_accidents(since: datetime, until: datetime) -> int:
    with _session() as conn:
        return conn.execute(
            "SELECT COUNT(*) FROM accidents WHERE timestamp > ? AND timestamp <= ?",
            (_ts(since), _ts(until)),
        ).fetchone()[0]


def fleet_status_by_zone() -> list[ZoneFleet]:
    """Available / total ambulances per zone, in ZONES order."""
    return [
        ZoneFleet(zone=zone, available=count_fleet(zone, FleetStatus.AVAILABLE), total=count_fleet(zone))
        for zone in ZONES
    ]


def get_activity_frame(
    hours: int = 24,
    zone: Zone | None = None,
    now: datetime | None = None,
) -> pd.DataFrame:
    """Fetch ambulance activity over the last `hours` hours as a DataFrame."""
    now = now or datetime.now(tz=UTC)
    where = ["timestamp > ?", "timestamp <= ?"]
    params: list = [_ts(now - timedelta(hours=hours)), _ts(now)]
    if zone is not None:
        where.append("zone = ?")
        params.append(zone.value)

    sql = f"""SELECT zone, hospital_id, patient_count, timestamp, risk_level
              FROM ambulance_logs WHERE {' AND '.join(where)}
              ORDER BY timestamp ASC"""
    with _session() as conn:
        df = pd.read_sql_query(sql, conn, params=params)
    if not df.empty:
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df
