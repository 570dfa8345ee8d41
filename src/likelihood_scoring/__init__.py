"""
Likelihood Scoring Module

Convert raw weather measurements into condition likelihood scores.
"""

from .likelihood_scorer import LikelihoodScorer
from .probability_scorer import (
    ThresholdRange,
    discomfort_index,
    probability_color,
    score,
    severity_of,
    storm_risk,
)

__all__ = [
    "LikelihoodScorer",
    "ThresholdRange",
    "discomfort_index",
    "probability_color",
    "score",
    "severity_of",
    "storm_risk",
]
