"""
src/data/repository.py
──────────────────────
Read-only record source consumed by the analytics layer.

The analytics functions take any object with these methods. The
`src.data.store` module satisfies the protocol as-is, and tests pass a
small in-memory implementation.

Time windows are half-open on the left: (start, end].
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from config.zones import Zone
from src.data.models import (
    AccidentRecord,
    AmbulanceActivityRecord,
    FleetStatus,
    Hospital,
    WeatherSnapshot,
)


class RecordSource(Protocol):
    def find_ambulance_activity(
        self, zone: Zone, start: datetime, end: datetime
    ) -> list[AmbulanceActivityRecord]: ...

    def find_accidents(self, zone: Zone, start: datetime, end: datetime) -> list[AccidentRecord]: ...

    def find_weather(self, zone: Zone, day: date) -> WeatherSnapshot | None: ...

    def count_fleet(self, zone: Zone, status: FleetStatus | None = None) -> int: ...


class DashboardSource(RecordSource, Protocol):
    """Record source plus the fleet-wide counts the dashboard needs."""

    def list_hospitals(self) -> list[Hospital]: ...

    def count_ambulance_logs(self, since: datetime, until: datetime) -> int: ...

    def count_accidents(self, since: datetime, until: datetime) -> int: ...
