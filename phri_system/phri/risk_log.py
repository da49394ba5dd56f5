"""
Risk log module for the PHRI System.

This module defines the RiskLogEntry dataclass, one stored risk record per
user per day, and the RiskLogStore that keeps them. Writes are upserts keyed
by (user_id, log_date): the last write for a given day wins.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import pandas as pd

from .environmental_reading import EnvironmentalReading
from .risk_score import RiskScore

FRAME_COLUMNS = [
    "user_id",
    "log_date",
    "phri",
    "category",
    "scale",
    "aqi",
    "pm25",
    "created_at",
]


@dataclass
class RiskLogEntry:
    """
    Represents the stored risk record for one user on one day.

    Attributes:
        user_id: Identifier of the user the score belongs to
        log_date: Calendar day the score is stored under
        reading: The air-quality reading that was scored
        score: The computed risk score
        created_at: When the entry was written
        details: Additional metadata (alert type, clamped fields, location)
    """

    user_id: str
    log_date: date
    reading: EnvironmentalReading
    score: RiskScore
    created_at: datetime = field(default_factory=datetime.now)
    details: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> tuple[str, date]:
        return (self.user_id, self.log_date)

    def to_dict(self) -> dict[str, object]:
        """
        Converts the log entry to a serializable dictionary.

        Returns:
            A dictionary with ISO-formatted dates and plain nested dicts
        """
        return {
            "user_id": self.user_id,
            "log_date": self.log_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "reading": {
                "pm25": self.reading.pm25,
                "aqi": self.reading.aqi,
                "temperature": self.reading.temperature,
                "humidity": self.reading.humidity,
                "timestamp": self.reading.timestamp.isoformat() if self.reading.timestamp else None,
            },
            "score": self.score.to_dict(),
            "details": self.details,
        }


class RiskLogStore:
    """
    In-memory store of daily risk records.

    Each (user_id, log_date) pair holds at most one entry. The store is owned
    by the caller (normally PHRISystem); the risk engine never touches it.
    """

    def __init__(self):
        self._entries: dict[tuple[str, date], RiskLogEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def upsert(self, entry: RiskLogEntry) -> Optional[RiskLogEntry]:
        """
        Stores an entry, replacing any entry for the same user and day.

        Returns:
            The replaced entry, or None if the day had no entry yet
        """
        previous = self._entries.get(entry.key)
        self._entries[entry.key] = entry
        return previous

    def get(self, user_id: str, log_date: date) -> Optional[RiskLogEntry]:
        return self._entries.get((user_id, log_date))

    def history(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[RiskLogEntry]:
        """
        Returns a user's entries in ascending date order.

        Args:
            user_id: The user whose entries to return
            start: Optional first day to include
            end: Optional last day to include
        """
        entries = [
            entry for (owner, day), entry in self._entries.items()
            if owner == user_id
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(entries, key=lambda entry: entry.log_date)

    def latest_before(
        self,
        user_id: str,
        log_date: date,
        scale: Optional[str] = None,
    ) -> Optional[RiskLogEntry]:
        """
        Returns the most recent entry strictly before log_date, if any.

        Args:
            user_id: The user whose entries to search
            log_date: Only days before this one are considered
            scale: If given, entries on other scales are skipped
        """
        earlier = [
            entry for entry in self.history(user_id)
            if entry.log_date < log_date
            and (scale is None or entry.score.scale == scale)
        ]
        return earlier[-1] if earlier else None

    def to_frame(self, user_id: str) -> pd.DataFrame:
        """
        Returns a user's history as a DataFrame, one row per day.

        The frame always has the FRAME_COLUMNS columns, even when empty.
        """
        rows = [
            {
                "user_id": entry.user_id,
                "log_date": pd.Timestamp(entry.log_date),
                "phri": entry.score.value,
                "category": entry.score.category,
                "scale": entry.score.scale,
                "aqi": entry.reading.aqi,
                "pm25": entry.reading.pm25,
                "created_at": pd.Timestamp(entry.created_at),
            }
            for entry in self.history(user_id)
        ]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)
