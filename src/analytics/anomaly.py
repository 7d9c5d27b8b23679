"""
src/analytics/anomaly.py
────────────────────────
Spike detection for hourly ambulance activity.

Algorithm: Rolling Z-score on a 24-hour sliding window.
  z = (count - μ_window) / σ_window
  z > threshold → spike

Only upward deviations are flagged; a quiet hour is not an event.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

DEFAULT_WINDOW = 24      # hours
DEFAULT_THRESHOLD = 2.0  # standard deviations


def rolling_zscore(
    series: pd.Series,
    window: int = DEFAULT_WINDOW,
    min_periods: int = 4,
) -> pd.Series:
    """
    Z-score of each value against the preceding window (inclusive).

    Returns NaN until `min_periods` values are available and wherever the
    window has zero spread.
    """
    roll_mean = series.rolling(window=window, min_periods=min_periods).mean()
    roll_std = series.rolling(window=window, min_periods=min_periods).std()
    roll_std = roll_std.replace(0.0, np.nan)
    return (series - roll_mean) / roll_std


def flag_spikes(
    hourly: pd.DataFrame,
    column: str = "log_count",
    window: int = DEFAULT_WINDOW,
    threshold: float = DEFAULT_THRESHOLD,
) -> pd.DataFrame:
    """
    Add `{column}_zscore` and `spike` columns to an hourly frame.

    Returns a copy; a frame without `column` comes back unchanged.
    """
    hourly = hourly.copy()
    if column not in hourly.columns:
        return hourly

    zscores = rolling_zscore(hourly[column].astype(float), window=window)
    hourly[f"{column}_zscore"] = zscores.round(3)
    hourly["spike"] = (zscores > threshold).fillna(False).astype(bool)
    return hourly
