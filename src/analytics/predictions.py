"""
src/analytics/predictions.py
─────────────────────────────
Prediction Aggregator.

Runs the Zone Risk Calculator for every zone concurrently and returns the
results in ZONES order. Zones share no state, so the fan-out needs no
locking. One failing zone fails the whole call: callers always get the
complete zone set or a DataUnavailable.
"""
from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from datetime import UTC, datetime
from typing import TypeVar

from config.settings import settings
from config.zones import ZONES, Zone
from src.analytics.risk import calculate_zone_prediction
from src.data.errors import DataUnavailable
from src.data.models import ZonePrediction
from src.data.repository import RecordSource
from src.logging_setup import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def run_per_zone(
    task: Callable[[Zone], T],
    workers: int | None = None,
    timeout: float | None = None,
) -> list[T]:
    """
    Run `task(zone)` for each zone and return results in ZONES order.

    With one worker the zones run sequentially in the calling thread.
    The first failure (in zone order) is re-raised. `timeout` bounds the
    whole call, not each zone; running past it raises DataUnavailable.
    """
    workers = settings.PREDICTION_WORKERS if workers is None else workers
    timeout = settings.ZONE_TIMEOUT_S if timeout is None else timeout

    if workers <= 1:
        return [task(zone) for zone in ZONES]

    pool = ThreadPoolExecutor(max_workers=min(workers, len(ZONES)), thread_name_prefix="zone")
    futures: dict[Zone, Future[T]] = {zone: pool.submit(task, zone) for zone in ZONES}
    deadline = time.monotonic() + timeout
    results: list[T] = []
    try:
        for zone, future in futures.items():
            try:
                results.append(future.result(timeout=max(0.0, deadline - time.monotonic())))
            except FutureTimeout as exc:
                logger.error("Zone %s timed out after %.1fs", zone.value, timeout)
                raise DataUnavailable(f"Timed out computing zone {zone.value}") from exc
            except Exception:
                logger.exception("Zone %s failed", zone.value)
                raise
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
    return results


def get_risk_predictions(
    source: RecordSource,
    now: datetime | None = None,
    workers: int | None = None,
) -> list[ZonePrediction]:
    """One ZonePrediction per zone, in North, South, East, West, Central order."""
    now = now or datetime.now(tz=UTC)
    predictions = run_per_zone(
        lambda zone: calculate_zone_prediction(zone, source, now),
        workers=workers,
    )
    logger.debug(
        "Predictions: %s",
        ", ".join(f"{p.zone.value}={p.overall_risk.value}" for p in predictions),
    )
    return predictions
