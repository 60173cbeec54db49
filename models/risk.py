"""
Risk Classification Model.

Compares a predicted concentration against a toxic threshold and maps the
ratio onto five discrete risk levels:

    ratio > 1.0   ->  5  Critical
    ratio > 0.8   ->  4  High
    ratio > 0.6   ->  3  Medium
    ratio > 0.3   ->  2  Low-Medium
    otherwise     ->  1  Low

Bands are checked top-down with strict ``>``, so a ratio of exactly 1.0
is "High" and does not exceed the threshold.
"""

from dataclasses import dataclass

from config import RISK_BANDS, BASE_RISK_LEVEL, BASE_RISK_CATEGORY
from models.diffusion import PredictionResult


@dataclass(frozen=True)
class RiskAssessment:
    """Risk derived from one prediction and one threshold."""

    risk_level: int
    risk_category: str
    exceeds_threshold: bool
    safety_margin: float

    def to_dict(self) -> dict:
        return {
            "riskLevel": self.risk_level,
            "riskCategory": self.risk_category,
            "exceedsThreshold": self.exceeds_threshold,
            "safetyMargin": self.safety_margin,
        }


def assess_risk(prediction: PredictionResult, toxic_threshold: float) -> RiskAssessment:
    """
    Classify a prediction against a toxic threshold.

    Args:
        prediction: Output of ``models.diffusion.predict``.
        toxic_threshold: Safety limit in the prediction's unit.  Must be > 0;
            the caller guarantees this.

    Returns:
        RiskAssessment with level 1-5, its category, whether the threshold is
        exceeded, and the safety margin ``max(0, 1 - ratio)``.
    """
    ratio = prediction.predicted_concentration / toxic_threshold

    risk_level = BASE_RISK_LEVEL
    risk_category = BASE_RISK_CATEGORY
    for lower_bound, level, category in RISK_BANDS:
        if ratio > lower_bound:
            risk_level = level
            risk_category = category
            break

    return RiskAssessment(
        risk_level=risk_level,
        risk_category=risk_category,
        exceeds_threshold=ratio > 1.0,
        safety_margin=max(0.0, 1.0 - ratio),
    )
