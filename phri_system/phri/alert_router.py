"""
Alert router module for the PHRI System.

This module contains the AlertRouter class which is a pure classifier that
decides whether a PHRI value on the 0-10 scale should trigger a push
notification. It compares the new value against fixed thresholds and against
the user's previously stored value, but does not send anything itself.
"""

from typing import Optional

from .alert_decision import AlertDecision


class AlertRouter:
    """
    Pure classifier for PHRI-based notifications.

    Thresholds are fixed and independent of the category table: a value of
    8 already triggers an emergency alert even though the "emergency"
    category starts at 9.
    """

    EMERGENCY_THRESHOLD = 8.0
    URGENT_THRESHOLD = 6.0
    WARNING_THRESHOLD = 3.0
    RISING_DELTA = 2.0

    MESSAGES = {
        "EMERGENCY": "Emergency! Your PHRI is very high. Go indoors immediately.",
        "URGENT": "Urgent! Your PHRI is high. Avoid outdoor activities.",
        "RISING": "Warning! Your PHRI is rising quickly.",
        "HIGH_RISK_CONDITION": "Warning! Your PHRI is elevated and you have a high-risk condition.",
    }
    CONDITION_SUFFIX = " (You have a high-risk chronic condition.)"

    def evaluate(
        self,
        current: float,
        previous: Optional[float] = None,
        has_high_risk_condition: bool = False,
    ) -> AlertDecision:
        """
        Decides whether a new PHRI value should trigger a notification.

        Rules, strongest first:
        - current >= 8: EMERGENCY
        - current >= 6: URGENT
        - current >= 3 and current > previous + 2: RISING
        - current >= 3 and the user has a high-risk condition: HIGH_RISK_CONDITION

        When any rule fires for a user with a high-risk condition, the
        message notes the condition.

        Args:
            current: The new PHRI value on the 0-10 scale
            previous: The last stored value for this user, or None if there is none
            has_high_risk_condition: Whether the user has asthma, COPD, heart
                                     disease or is pregnant

        Returns:
            AlertDecision describing the alert to send, or "NONE"
        """
        if current >= self.EMERGENCY_THRESHOLD:
            alert_type = "EMERGENCY"
        elif current >= self.URGENT_THRESHOLD:
            alert_type = "URGENT"
        elif current >= self.WARNING_THRESHOLD and self.is_rising(current, previous):
            alert_type = "RISING"
        elif current >= self.WARNING_THRESHOLD and has_high_risk_condition:
            return AlertDecision("HIGH_RISK_CONDITION", self.MESSAGES["HIGH_RISK_CONDITION"])
        else:
            return AlertDecision("NONE")

        message = self.MESSAGES[alert_type]
        if has_high_risk_condition:
            message += self.CONDITION_SUFFIX
        return AlertDecision(alert_type, message)

    def is_rising(self, current: float, previous: Optional[float]) -> bool:
        """True if current exceeds previous by more than the rising delta."""
        if previous is None:
            return False
        return current > previous + self.RISING_DELTA
