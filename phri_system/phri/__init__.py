"""
PHRI System package.

Computes the Personal Health Risk Index (PHRI) from air-quality readings and
personal factors, decides when a user should be alerted, and keeps one risk
record per user per day.
"""

from .air_quality_router import AirQualityRouter, PM25Alert
from .alert_decision import AlertDecision
from .alert_router import AlertRouter
from .config import Settings
from .environmental_reading import EnvironmentalReading
from .exceptions import InvalidEnumError, PHRIError, ValidationError
from .logging_config import configure_logging
from .personal_factors import ChronicCondition, DustSensitivity, PersonalFactors, PhysicalActivity
from .phri_system import PHRISystem
from .risk_engine import compute_risk
from .risk_log import RiskLogEntry, RiskLogStore
from .risk_score import RiskScore
from .symptom_checklist import SymptomChecklist
from .travel import MaskType, TravelMode, TravelPlan
from .weekly_summary import WeeklySummary, weekly_summary

__all__ = [
    'AirQualityRouter',
    'AlertDecision',
    'AlertRouter',
    'ChronicCondition',
    'DustSensitivity',
    'EnvironmentalReading',
    'InvalidEnumError',
    'MaskType',
    'PHRIError',
    'PHRISystem',
    'PM25Alert',
    'PersonalFactors',
    'PhysicalActivity',
    'RiskLogEntry',
    'RiskLogStore',
    'RiskScore',
    'Settings',
    'SymptomChecklist',
    'TravelMode',
    'TravelPlan',
    'ValidationError',
    'WeeklySummary',
    'compute_risk',
    'configure_logging',
    'weekly_summary',
]
