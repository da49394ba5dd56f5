"""
Air quality router module for the PHRI System.

This module contains the AirQualityRouter class which is a pure classifier
for PM2.5 changes at a subscriber's last known location. It decides whether
the background air-quality check should push a notification and which tier
of message to use, but does not deliver notifications itself.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PM25Alert:
    """
    Result of a PM2.5 check for one subscriber.

    Attributes:
        should_notify: Whether a notification should be pushed
        tier: One of "HAZARDOUS", "HIGH", "RAPID_CHANGE", "ABOVE_GUIDELINE", "NORMAL"
        title: Notification title
        change: Absolute PM2.5 change since the previous check (µg/m³)
        vibrate: Vibration pattern in milliseconds for the notification
    """

    should_notify: bool
    tier: str
    title: str
    change: float
    vibrate: tuple


class AirQualityRouter:
    """
    Pure classifier for PM2.5-based push notifications.

    A notification is due when PM2.5 exceeds the subscriber's threshold or
    moves by more than 10 µg/m³ since the last check. The tier is picked from
    the absolute level first, then the size of the change.
    """

    DEFAULT_THRESHOLD = 50.0
    SIGNIFICANT_CHANGE = 10.0

    # tier -> (title, vibration pattern)
    TIERS = {
        "HAZARDOUS": ("Danger! PM2.5 is extremely high", (500, 200, 500, 200, 500, 200, 500)),
        "HIGH": ("Alert: PM2.5 is high", (400, 150, 400, 150, 400, 150, 400)),
        "RAPID_CHANGE": ("PM2.5 is changing quickly", (300, 100, 300, 100, 300, 100, 300)),
        "ABOVE_GUIDELINE": ("PM2.5 is above the guideline", (300, 100, 300, 100, 300)),
        "NORMAL": ("Air quality is normal", (200, 100, 200)),
    }

    def is_poor_air_quality(self, pm25: float, threshold: Optional[float] = None) -> bool:
        """
        Determines if PM2.5 exceeds the subscriber's notification threshold.

        Args:
            pm25: Current PM2.5 concentration
            threshold: Subscriber threshold; defaults to 50 µg/m³ when unset

        Returns:
            True if pm25 > threshold, False otherwise
        """
        if threshold is None:
            threshold = self.DEFAULT_THRESHOLD
        return pm25 > threshold

    def assess_pm25_change(
        self,
        current: float,
        previous: Optional[float] = None,
        threshold: Optional[float] = None,
    ) -> PM25Alert:
        """
        Decides whether and how to notify a subscriber about PM2.5.

        Args:
            current: PM2.5 at the subscriber's location now
            previous: PM2.5 recorded at the last check; None counts as 0
            threshold: Subscriber's PM2.5 threshold (default 50)

        Returns:
            PM25Alert with the notification decision and message tier
        """
        change = abs(current - (previous or 0))
        rapid_change = change > self.SIGNIFICANT_CHANGE
        should_notify = self.is_poor_air_quality(current, threshold) or rapid_change

        if current > 150:
            tier = "HAZARDOUS"
        elif current > 100:
            tier = "HIGH"
        elif rapid_change:
            tier = "RAPID_CHANGE"
        elif current > 50:
            tier = "ABOVE_GUIDELINE"
        else:
            tier = "NORMAL"

        title, vibrate = self.TIERS[tier]
        return PM25Alert(
            should_notify=should_notify,
            tier=tier,
            title=title,
            change=change,
            vibrate=vibrate,
        )
