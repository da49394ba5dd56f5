"""
Alert decision module for the PHRI System.

This module defines the AlertDecision dataclass which represents whether a
push notification should be sent for a newly computed risk score, and why.
"""

from dataclasses import dataclass


@dataclass
class AlertDecision:
    """
    Represents the notification decision for one risk evaluation.

    Attributes:
        alert_type: Type of alert, one of:
            - "NONE": No notification needed
            - "RISING": Score of 3 or more that rose by more than 2 points
            - "HIGH_RISK_CONDITION": Score of 3 or more for a user with a
              high-risk chronic condition
            - "URGENT": Score of 6 or more
            - "EMERGENCY": Score of 8 or more
        message: Notification text, empty when no alert is sent
    """

    alert_type: str
    message: str = ""

    @property
    def should_notify(self) -> bool:
        return self.alert_type != "NONE"
