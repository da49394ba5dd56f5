"""
Weekly summary module for the PHRI System.

Aggregates the last seven days of a user's stored risk records into the
figures shown in the weekly health report: average, best and worst PHRI,
average pollution levels, and the direction of the PHRI trend.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

import numpy as np
import pandas as pd

from .risk_log import RiskLogStore

# Slope in PHRI points per day beyond which the trend counts as moving
TREND_TOLERANCE = 0.1


@dataclass
class WeeklySummary:
    user_id: str
    start_date: date
    end_date: date
    days_logged: int
    average_phri: Optional[float] = None
    max_phri: Optional[float] = None
    max_phri_date: Optional[date] = None
    min_phri: Optional[float] = None
    min_phri_date: Optional[date] = None
    average_aqi: Optional[float] = None
    average_pm25: Optional[float] = None
    trend_slope: float = 0.0
    trend: str = "stable"

    def to_dict(self) -> dict[str, object]:
        return {
            "user_id": self.user_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "days_logged": self.days_logged,
            "average_phri": self.average_phri,
            "max_phri": self.max_phri,
            "max_phri_date": self.max_phri_date.isoformat() if self.max_phri_date else None,
            "min_phri": self.min_phri,
            "min_phri_date": self.min_phri_date.isoformat() if self.min_phri_date else None,
            "average_aqi": self.average_aqi,
            "average_pm25": self.average_pm25,
            "trend_slope": self.trend_slope,
            "trend": self.trend,
        }


def trend_label(slope: float) -> str:
    if slope > TREND_TOLERANCE:
        return "rising"
    if slope < -TREND_TOLERANCE:
        return "falling"
    return "stable"


def _trend_slope(frame: pd.DataFrame) -> float:
    """Least-squares slope of PHRI against day offset; 0 with fewer than two days."""
    if len(frame) < 2:
        return 0.0
    days = (frame["log_date"] - frame["log_date"].min()).dt.days.to_numpy(dtype=float)
    slope, _intercept = np.polyfit(days, frame["phri"].to_numpy(dtype=float), 1)
    return round(float(slope), 3)


def weekly_summary(
    store: RiskLogStore,
    user_id: str,
    end_date: date,
    days: int = 7,
) -> WeeklySummary:
    """
    Summarizes a user's risk records for the week ending on end_date.

    Only point-scale records are summarized so values are comparable.

    Args:
        store: Store holding the user's daily records
        user_id: The user to summarize
        end_date: Last day of the window (inclusive)
        days: Window length in days

    Returns:
        WeeklySummary; statistics are None when no day was logged
    """
    start_date = end_date - timedelta(days=days - 1)
    frame = store.to_frame(user_id)
    frame = frame[
        (frame["scale"] == "point")
        & (frame["log_date"] >= pd.Timestamp(start_date))
        & (frame["log_date"] <= pd.Timestamp(end_date))
    ].sort_values("log_date")

    summary = WeeklySummary(
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        days_logged=int(len(frame)),
    )
    if frame.empty:
        return summary

    worst = frame.loc[frame["phri"].idxmax()]
    best = frame.loc[frame["phri"].idxmin()]
    summary.average_phri = round(float(frame["phri"].mean()), 1)
    summary.max_phri = float(worst["phri"])
    summary.max_phri_date = worst["log_date"].date()
    summary.min_phri = float(best["phri"])
    summary.min_phri_date = best["log_date"].date()
    summary.average_aqi = round(float(frame["aqi"].mean()), 1)
    summary.average_pm25 = round(float(frame["pm25"].mean()), 1)
    summary.trend_slope = _trend_slope(frame)
    summary.trend = trend_label(summary.trend_slope)
    return summary
