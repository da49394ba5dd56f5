"""
Explanation module for the PHRI System.

Turns a RiskScore into a short human-readable recommendation. The wording
depends on the category and is stricter for users with chronic conditions.
The largest contributing factor is appended so the user can see what drove
the score.
"""

from dataclasses import dataclass

from .personal_factors import PersonalFactors
from .risk_score import RiskScore

# category -> (general advice, advice for users with chronic conditions)
RECOMMENDATIONS = {
    "emergency": (
        "Very dangerous air. Avoid going outdoors; stay inside with windows closed.",
        "Very dangerous air. Stay indoors with windows closed and an air purifier on. "
        "Contact a doctor immediately if symptoms become severe.",
    ),
    "urgent": (
        "High risk. Reduce time outdoors and wear an N95 mask if you must go out.",
        "High risk. Avoid going outdoors, wear an N95 mask if necessary and run an "
        "air purifier indoors.",
    ),
    "warning": (
        "Be careful. Reduce time outdoors and wear a mask when going out.",
        "Be careful. Reduce outdoor activity, wear a protective mask and monitor "
        "your symptoms.",
    ),
    "safe": (
        "Safe: air quality is good, normal activities are fine.",
        "Safe: air quality is good, normal activities are fine.",
    ),
}

# The 0-100 scales reuse the point scale's advice
CATEGORY_ALIASES = {
    "severe": "emergency",
    "very_high": "emergency",
    "high": "urgent",
    "moderate": "warning",
    "low": "safe",
}

FACTOR_LABELS = {
    "environmental": "air pollution levels",
    "personal": "personal health factors",
    "behavioral": "time and activity outdoors",
    "symptoms": "reported symptoms",
}


@dataclass
class Explanation:
    """Human-readable explanation of a risk score."""

    text: str


def main_factor(score: RiskScore) -> str:
    """
    Returns the breakdown term with the largest positive contribution.

    The protective term is a reduction and never counts as a driver. Ties are
    resolved in breakdown order. Returns an empty string when nothing
    contributed.
    """
    best, best_value = "", 0.0
    for name, value in score.breakdown.items():
        if name == "protective":
            continue
        if value > best_value:
            best, best_value = name, value
    return best


def explain(score: RiskScore, factors: PersonalFactors) -> Explanation:
    """
    Builds the recommendation text for a score.

    Args:
        score: The computed risk score
        factors: The personal factors used for the score

    Returns:
        Explanation with the category advice and the main contributing factor
    """
    category = CATEGORY_ALIASES.get(score.category, score.category)
    general, with_conditions = RECOMMENDATIONS[category]
    parts = [with_conditions if factors.has_health_conditions else general]

    driver = main_factor(score)
    if driver and category != "safe":
        parts.append(f"Main contributor: {FACTOR_LABELS[driver]}.")

    return Explanation(" ".join(parts))
