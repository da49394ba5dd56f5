"""
PHRI system module for the PHRI System.

This module contains the PHRISystem class, the orchestrator of one risk
evaluation. It runs the pure risk engine, looks up the user's previous score,
decides on notifications, stores the day's record with upsert semantics, and
writes the decision log. All state (the log store, the log file) lives here;
the risk engine itself stays stateless.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from .air_quality_router import AirQualityRouter, PM25Alert
from .alert_decision import AlertDecision
from .alert_router import AlertRouter
from .config import Settings
from .environmental_reading import EnvironmentalReading
from .explanation import Explanation, explain, main_factor
from .logging_config import configure_logging
from .personal_factors import PersonalFactors
from .risk_engine import compute_risk
from .risk_log import RiskLogEntry, RiskLogStore
from .risk_score import RiskScore
from .scales import POINT, get_scale
from .symptom_checklist import SymptomChecklist
from .travel import TravelPlan
from .weekly_summary import WeeklySummary, weekly_summary

logger = logging.getLogger(__name__)


class PHRISystem:
    """
    Orchestrator for PHRI evaluations.

    Coordinates the risk engine, the alert and air-quality routers, and the
    daily risk log with its weekly summary.
    Alerts are only evaluated for point-scale scores, since the notification
    thresholds are defined on the 0-10 range.
    """

    LOG_FILE_NAME = "phri_log.log"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[RiskLogStore] = None,
        alert_router: Optional[AlertRouter] = None,
        air_router: Optional[AirQualityRouter] = None,
    ):
        """
        Initialize the system.

        Args:
            settings: Runtime settings; defaults to Settings()
            store: Daily risk log store; a fresh in-memory store by default
            alert_router: Notification classifier; a default AlertRouter by default
            air_router: PM2.5 push-check classifier; a default AirQualityRouter by default
        """
        self.settings = settings or Settings()
        self.store = store if store is not None else RiskLogStore()
        self.alert_router = alert_router or AlertRouter()
        self.air_router = air_router or AirQualityRouter()

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "PHRISystem":
        """
        Builds a system from environment settings and configures logging.

        Args:
            env_file: Optional .env file to load; defaults to ./.env
        """
        settings = Settings.from_env(env_file)
        configure_logging(settings.log_level)
        return cls(settings=settings)

    @property
    def log_file(self) -> Path:
        return self.settings.log_dir / self.LOG_FILE_NAME

    def _ensure_log_file_exists(self) -> None:
        """Create the log directory and the log file header if needed."""
        self.settings.log_dir.mkdir(parents=True, exist_ok=True)

        if not self.log_file.exists():
            with open(self.log_file, 'w', encoding='utf-8') as f:
                f.write("# PHRI System Log\n")
                f.write("# Format: [TIMESTAMP] USER | DATE | PHRI | CATEGORY | ALERT | MAIN FACTOR | CLAMPED\n")
                f.write("# " + "=" * 80 + "\n\n")

    def _log_decision(self, log_entry: RiskLogEntry, alert: AlertDecision) -> None:
        """
        Append one evaluation to the persistent decision log.

        Write failures are reported through logging and do not abort the
        evaluation, since the record is already in the store.
        """
        score = log_entry.score
        config = get_scale(score.scale)
        value = f"{score.value:.{config.decimals}f}/{config.maximum:g}"
        clamped = ", ".join(score.clamped_fields) if score.clamped_fields else "None"

        try:
            self._ensure_log_file_exists()
            with open(self.log_file, 'a', encoding='utf-8') as f:
                timestamp_str = log_entry.created_at.strftime("%Y-%m-%d %H:%M:%S")
                f.write(
                    f"[{timestamp_str}] {log_entry.user_id} | "
                    f"{log_entry.log_date.isoformat()} | "
                    f"{value} | "
                    f"{score.category:10s} | "
                    f"{alert.alert_type:19s} | "
                    f"{main_factor(score) or 'none':13s} | "
                    f"Clamped: {clamped}\n"
                )
        except OSError:
            logger.exception("Could not write decision log %s", self.log_file)

    def evaluate(
        self,
        user_id: str,
        reading: EnvironmentalReading,
        factors: PersonalFactors,
        symptoms: Optional[SymptomChecklist] = None,
        travel: Optional[TravelPlan] = None,
        scale: Optional[str] = None,
        log_date: Optional[date] = None,
        enable_persistent_logging: bool = False,
    ) -> tuple[RiskScore, Explanation, AlertDecision, RiskLogEntry]:
        """
        Scores a user's current risk and records it for the day.

        Args:
            user_id: The user being evaluated
            reading: Current air-quality reading at the user's location
            factors: The user's personal factors
            symptoms: Today's symptom checklist, if logged
            travel: The trip being scored, for the exposure scale
            scale: Scale name; defaults to the configured default scale
            log_date: Day to store the record under; defaults to today
            enable_persistent_logging: If True, append the result to the decision log file

        Returns:
            A tuple containing:
            - RiskScore: The computed score
            - Explanation: Recommendation text for the user
            - AlertDecision: Whether to push a notification
            - RiskLogEntry: The record that was stored

        Raises:
            TypeError, ValidationError, InvalidEnumError: Propagated from the
                risk engine; nothing is stored in that case
        """
        log_date = log_date or date.today()
        score = compute_risk(
            reading, factors, scale or self.settings.default_scale, symptoms, travel
        )

        if score.clamped_fields:
            logger.warning(
                "Clamped out-of-range inputs for user %s: %s",
                user_id,
                ", ".join(score.clamped_fields),
            )

        if score.scale == POINT:
            previous = self.store.latest_before(user_id, log_date, scale=POINT)
            alert = self.alert_router.evaluate(
                score.value,
                previous.score.value if previous else None,
                factors.has_high_risk_condition,
            )
        else:
            alert = AlertDecision("NONE")

        explanation = explain(score, factors)
        log_entry = RiskLogEntry(
            user_id=user_id,
            log_date=log_date,
            reading=reading,
            score=score,
            created_at=datetime.now(),
            details={
                "alert_type": alert.alert_type,
                "clamped_fields": ",".join(score.clamped_fields),
            },
        )
        replaced = self.store.upsert(log_entry)

        logger.info(
            "PHRI for user %s on %s: %s (%s), alert=%s%s",
            user_id,
            log_date.isoformat(),
            score.value,
            score.category,
            alert.alert_type,
            " (replaced earlier entry)" if replaced else "",
        )

        if enable_persistent_logging:
            self._log_decision(log_entry, alert)

        return (score, explanation, alert, log_entry)

    def check_air_quality(
        self,
        current_pm25: float,
        previous_pm25: Optional[float] = None,
        threshold: Optional[float] = None,
    ) -> PM25Alert:
        """
        Runs the background PM2.5 check for one subscriber.

        Args:
            current_pm25: PM2.5 at the subscriber's last known location
            previous_pm25: PM2.5 recorded at the previous check, if any
            threshold: The subscriber's notification threshold

        Returns:
            PM25Alert with the notification decision and message tier
        """
        alert = self.air_router.assess_pm25_change(current_pm25, previous_pm25, threshold)
        if alert.should_notify:
            logger.info("PM2.5 push due: %s (%.1f µg/m³)", alert.tier, current_pm25)
        return alert

    def weekly_summary(self, user_id: str, end_date: Optional[date] = None) -> WeeklySummary:
        """Summarizes the user's stored point-scale records for the week ending on end_date (default today)."""
        return weekly_summary(self.store, user_id, end_date or date.today())
