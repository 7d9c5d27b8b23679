"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass
from datetime import date


def _parse_dates(raw: str) -> frozenset[date]:
    """Parse a comma-separated list of ISO dates ("2024-01-26,2024-08-15")."""
    return frozenset(date.fromisoformat(part.strip()) for part in raw.split(",") if part.strip())


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Database (SQLite path)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "zone_risk.db")

    # Live update interval in milliseconds
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "30000"))

    # Simulation
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    HISTORY_DAYS: int = int(os.getenv("HISTORY_DAYS", "14"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")

    # Per-zone fan-out
    PREDICTION_WORKERS: int = int(os.getenv("PREDICTION_WORKERS", "5"))
    ZONE_TIMEOUT_S: float = float(os.getenv("ZONE_TIMEOUT_S", "10"))

    # Calendar (comma-separated ISO dates)
    HOLIDAYS: str = os.getenv("HOLIDAYS", "")
    FESTIVALS: str = os.getenv("FESTIVALS", "")

    def holiday_dates(self) -> frozenset[date]:
        return _parse_dates(self.HOLIDAYS)

    def festival_dates(self) -> frozenset[date]:
        return _parse_dates(self.FESTIVALS)


settings = Settings()
