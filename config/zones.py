"""
config/zones.py
───────────────
Zone definitions and risk scoring thresholds.

The zone set is closed: every component iterates ZONES, in this order,
and nothing else.

Scoring thresholds (all inclusive lower bounds):
  ED pressure         avg patients per hospital   High ≥ 8, Medium ≥ 4
  Ambulance pressure  fleet availability ratio    High < 0.2, Medium < 0.5
                      or 24h dispatch volume      High ≥ 12, Medium ≥ 6
  Accident risk       weighted incident score     High ≥ 10, Medium ≥ 5
"""
from dataclasses import dataclass
from enum import Enum

from src.data.errors import InvalidZone


class Zone(str, Enum):
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    CENTRAL = "Central"


ZONES: tuple[Zone, ...] = (Zone.NORTH, Zone.SOUTH, Zone.EAST, Zone.WEST, Zone.CENTRAL)


def parse_zone(value: "str | Zone") -> Zone:
    """Return the Zone for `value` ("North", "north", Zone.NORTH) or raise InvalidZone."""
    if isinstance(value, Zone):
        return value
    for zone in ZONES:
        if str(value).strip().lower() == zone.value.lower():
            return zone
    raise InvalidZone(f"Unknown zone {value!r}; expected one of {[z.value for z in ZONES]}")


@dataclass(frozen=True)
class EDPressureThresholds:
    high: float = 8.0
    high_if_increasing: float = 6.0
    medium: float = 4.0
    medium_if_increasing: float = 3.0
    increase_factor: float = 1.2  # recent avg > historical avg × factor


@dataclass(frozen=True)
class AmbulancePressureThresholds:
    # Fleet availability ratio (preferred when fleet data exists)
    ratio_high: float = 0.2
    ratio_medium: float = 0.5
    # 24h dispatch volume fallback
    high: int = 12
    high_if_increasing: int = 8
    medium: int = 6
    medium_if_increasing: int = 4
    increase_factor: float = 1.3


@dataclass(frozen=True)
class AccidentRiskThresholds:
    high: float = 10.0
    medium: float = 5.0
    severe_weight: int = 2        # High / Critical incidents
    medium_weight: int = 1
    trend_factor: float = 1.2     # recent > historical × factor → penalty
    trend_penalty: float = 1.3


@dataclass(frozen=True)
class TrendThresholds:
    increasing: float = 0.2
    decreasing: float = -0.2


@dataclass(frozen=True)
class ScoringThresholds:
    ed: EDPressureThresholds = EDPressureThresholds()
    ambulance: AmbulancePressureThresholds = AmbulancePressureThresholds()
    accident: AccidentRiskThresholds = AccidentRiskThresholds()
    trend: TrendThresholds = TrendThresholds()
    max_confidence: int = 95


THRESHOLDS = ScoringThresholds()

# Alert-only threshold: recent dispatches that raise AMBULANCE_OVERLOAD
AMBULANCE_OVERLOAD_LOGS = 12

# ── Display registry ──────────────────────────────────────────────────────────
ZONE_CONFIG: dict[Zone, dict] = {
    Zone.NORTH: {"name": "North", "color": "#58a6ff"},
    Zone.SOUTH: {"name": "South", "color": "#2ea44f"},
    Zone.EAST: {"name": "East", "color": "#e8a020"},
    Zone.WEST: {"name": "West", "color": "#a371f7"},
    Zone.CENTRAL: {"name": "Central", "color": "#f0883e"},
}
