"""
Risk engine module for the PHRI System.

This module computes the Personal Health Risk Index from an environmental
reading and a user's personal factors. Three models are supported, all driven
by the scale table in scales.py:

- "point" (0-10): additive points for environmental, personal, behavioural
  and symptom factors, minus a protective reduction.
- "weighted" (0-100): a piecewise-linear environmental score blended 60/40
  with the daily symptom score.
- "exposure" (0-100): a base exposure from PM2.5 and AQI, scaled by
  vulnerability, travel-mode and trip-duration modifiers.

Every function here is pure. Inputs are clamped into range rather than
rejected; only non-finite numbers, wrong types and unknown categorical
values raise.
"""

from typing import Optional

from .environmental_reading import EnvironmentalReading
from .personal_factors import DustSensitivity, PersonalFactors, PhysicalActivity
from .risk_score import RiskScore
from .scales import EXPOSURE, POINT, WEIGHTED, ScaleConfig, get_scale, interpolate
from .symptom_checklist import SymptomChecklist
from .travel import TravelMode, TravelPlan
from .validation import clamp, round_half_up

POINT_BREAKDOWN_KEYS = ("environmental", "personal", "behavioral", "symptoms", "protective")
WEIGHTED_BREAKDOWN_KEYS = ("environmental", "symptoms")


def _first_step(value: float, steps: tuple) -> float:
    """Returns the points of the first (threshold, points) step that value exceeds."""
    for threshold, points in steps:
        if value > threshold:
            return points
    return 0.0


def _point_breakdown(
    reading: EnvironmentalReading,
    factors: PersonalFactors,
    weights,
) -> dict[str, float]:
    environmental = _first_step(reading.pm25, weights["pm25_steps"])
    if reading.aqi > weights["aqi_bonus_threshold"]:
        environmental += weights["aqi_bonus"]

    personal = 0.0
    young, old = weights["age_bounds"]
    if factors.age < young or factors.age > old:
        personal += weights["age_points"]
    if factors.has_high_risk_condition:
        personal += weights["condition_points"]
    if factors.dust_sensitivity is DustSensitivity.HIGH:
        personal += weights["high_sensitivity_points"]

    behavioral = _first_step(factors.outdoor_hours, weights["outdoor_hour_steps"])
    if factors.physical_activity is PhysicalActivity.ACTIVE:
        behavioral += weights["active_points"]

    symptoms = weights["symptom_points"] if factors.has_symptoms else 0.0

    protective = 0.0
    if factors.wearing_mask:
        protective += weights["mask_reduction"]
    if factors.has_air_purifier:
        protective += weights["purifier_reduction"]

    return {
        "environmental": environmental,
        "personal": personal,
        "behavioral": behavioral,
        "symptoms": symptoms,
        "protective": protective,
    }


def _compute_point(
    reading: EnvironmentalReading,
    factors: PersonalFactors,
    scale: ScaleConfig,
    clamped: tuple,
) -> RiskScore:
    breakdown = _point_breakdown(reading, factors, scale.weights)
    raw = (
        breakdown["environmental"]
        + breakdown["personal"]
        + breakdown["behavioral"]
        + breakdown["symptoms"]
        - breakdown["protective"]
    )
    value = round_half_up(clamp(raw, scale.minimum, scale.maximum), scale.decimals)
    return RiskScore(
        value=value,
        category=scale.classify(value),
        scale=scale.name,
        raw_score=raw,
        breakdown=breakdown,
        clamped_fields=clamped,
    )


def environmental_components(
    reading: EnvironmentalReading,
    factors: PersonalFactors,
    weights,
) -> dict[str, float]:
    """
    Computes the additive terms of the weighted model's environmental score.

    The health-condition multiplier is expressed as the extra points it adds,
    so the terms sum to the unrounded environmental score.
    """
    components = {
        "aqi": interpolate(reading.aqi, weights["aqi_bands"]),
        "pm25": interpolate(reading.pm25, weights["pm25_bands"]),
        "age": 0.0,
        "outdoor_time": _first_step(factors.outdoor_hours, weights["outdoor_hour_steps"]),
        "health_conditions": 0.0,
    }
    for lower, upper, points in weights["age_steps"]:
        if factors.age < lower or factors.age > upper:
            components["age"] = points
            break

    if factors.has_health_conditions:
        subtotal = sum(components.values())
        components["health_conditions"] = subtotal * (weights["health_condition_multiplier"] - 1)
    return components


def _compute_weighted(
    reading: EnvironmentalReading,
    factors: PersonalFactors,
    symptoms: Optional[SymptomChecklist],
    scale: ScaleConfig,
    clamped: tuple,
) -> RiskScore:
    weights = scale.weights
    components = environmental_components(reading, factors, weights)
    environmental_score = clamp(
        round_half_up(sum(components.values())), scale.minimum, scale.maximum
    )
    symptom_score = symptoms.score() if symptoms is not None else 0

    breakdown = {
        "environmental": environmental_score * weights["environmental_weight"],
        "symptoms": symptom_score * weights["symptom_weight"],
    }
    raw = breakdown["environmental"] + breakdown["symptoms"]
    value = clamp(round_half_up(raw, scale.decimals), scale.minimum, scale.maximum)

    components["environmental_score"] = environmental_score
    components["symptom_score"] = float(symptom_score)
    return RiskScore(
        value=value,
        category=scale.classify(value),
        scale=scale.name,
        raw_score=raw,
        breakdown=breakdown,
        components=components,
        clamped_fields=clamped,
    )


def _first_band(value: float, bands: tuple) -> float:
    """Returns the modifier of the first (upper limit, modifier) band that contains value."""
    for limit, modifier in bands:
        if value <= limit:
            return modifier
    return bands[-1][1]


def weather_factor(reading: EnvironmentalReading, weights) -> float:
    """
    Dispersion factor for the exposure model.

    Hot, dry air disperses particles poorly and cool, humid air slightly
    better. Both temperature and humidity must be known, otherwise 1.0.
    """
    if reading.temperature is None or reading.humidity is None:
        return 1.0
    hot, dry, hot_factor = weights["hot_dry_weather"]
    if reading.temperature > hot and reading.humidity < dry:
        return hot_factor
    cool, humid, cool_factor = weights["cool_humid_weather"]
    if reading.temperature < cool and reading.humidity > humid:
        return cool_factor
    return 1.0


def vulnerability_modifier(factors: PersonalFactors, plan: TravelPlan, weights) -> float:
    """
    Multiplier for how strongly exposure affects this person.

    The strongest condition counts in full; every further condition only adds
    a share of its excess over 1. A mask scales the result down when the user
    wears one.
    """
    modifier = _first_band(factors.age, weights["age_bands"])

    condition_modifiers = sorted(
        (weights["condition_modifiers"][condition.value] for condition in factors.chronic_conditions),
        reverse=True,
    )
    if condition_modifiers:
        primary, *secondary = condition_modifiers
        share = weights["secondary_condition_share"]
        modifier *= primary + sum((extra - 1) * share for extra in secondary)

    modifier *= weights["sensitivity_modifiers"][factors.dust_sensitivity.value]
    if factors.wearing_mask:
        modifier *= weights["mask_modifiers"][plan.mask_type.value]
    return modifier


def _compute_exposure(
    reading: EnvironmentalReading,
    factors: PersonalFactors,
    plan: TravelPlan,
    scale: ScaleConfig,
    clamped: tuple,
) -> RiskScore:
    weights = scale.weights
    ceiling = weights["pollutant_ceiling"]
    weather = weather_factor(reading, weights)
    base = clamp(
        (
            reading.pm25 / ceiling * 100 * weights["pm25_weight"]
            + reading.aqi / ceiling * 100 * weights["aqi_weight"]
        ) * weather,
        scale.minimum,
        scale.maximum,
    )
    vulnerability = vulnerability_modifier(factors, plan, weights)
    travel = weights["travel_modifiers"][plan.mode.value]
    duration = _first_band(plan.duration_minutes, weights["duration_steps"])

    raw = base * vulnerability * travel * duration
    # Each modifier expressed as the points it adds on top of the previous terms
    breakdown = {
        "environmental": base,
        "personal": base * (vulnerability - 1),
        "behavioral": base * vulnerability * (travel * duration - 1),
    }
    value = round_half_up(clamp(raw, scale.minimum, scale.maximum), scale.decimals)
    return RiskScore(
        value=value,
        category=scale.classify(value),
        scale=scale.name,
        raw_score=raw,
        breakdown=breakdown,
        components={
            "base_exposure": base,
            "weather_factor": weather,
            "vulnerability_modifier": vulnerability,
            "travel_modifier": travel,
            "duration_modifier": duration,
        },
        clamped_fields=clamped,
    )


def compute_risk(
    reading: EnvironmentalReading,
    factors: PersonalFactors,
    scale=POINT,
    symptoms: Optional[SymptomChecklist] = None,
    travel: Optional[TravelPlan] = None,
) -> RiskScore:
    """
    Computes the Personal Health Risk Index.

    Args:
        reading: Air-quality reading from the upstream provider
        factors: The user's personal and behavioural factors
        scale: "point" for the 0-10 model, "weighted" or "exposure" for the
               0-100 models
        symptoms: Today's symptom checklist; only the weighted model reads it,
                  and a missing checklist counts as a symptom score of 0
        travel: The trip being scored; only the exposure model reads it. When
                omitted, the user's outdoor time is scored as walking.

    Returns:
        A new RiskScore. Identical inputs always give identical results.

    Raises:
        TypeError: If a numeric field has a non-numeric type
        ValidationError: If a numeric field is NaN or infinite
        InvalidEnumError: If scale is unknown
    """
    config = get_scale(scale)
    reading, reading_clamped = reading.normalized()
    factors, factors_clamped = factors.normalized()
    clamped = reading_clamped + factors_clamped

    if config.name == WEIGHTED:
        if symptoms is not None:
            symptoms, symptoms_clamped = symptoms.normalized()
            clamped += symptoms_clamped
        return _compute_weighted(reading, factors, symptoms, config, clamped)
    if config.name == EXPOSURE:
        if travel is None:
            travel = TravelPlan(TravelMode.WALKING, factors.outdoor_time_minutes)
        travel, travel_clamped = travel.normalized()
        return _compute_exposure(reading, factors, travel, config, clamped + travel_clamped)
    return _compute_point(reading, factors, config, clamped)


def compute_breakdown_total(score: RiskScore) -> float:
    """
    Recombines a score's breakdown into its pre-clamp raw value.

    For the point scale the protective term is subtracted; for the 0-100
    scales the contributions are added.
    """
    if score.scale == POINT:
        return (
            score.breakdown["environmental"]
            + score.breakdown["personal"]
            + score.breakdown["behavioral"]
            + score.breakdown["symptoms"]
            - score.breakdown["protective"]
        )
    return sum(score.breakdown.values())
