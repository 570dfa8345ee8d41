"""
Probability Scoring Module

Maps raw weather measurements onto 0-100 likelihood scores by linear
interpolation across a calibration window, and buckets scores into
severity bands.
"""

import math
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd


class ThresholdRange(NamedTuple):
    """Calibration window: below ``min`` is unremarkable, above ``max`` is extreme"""
    min: float
    max: float


# Calibration windows for each condition
SUNNY_RANGE = ThresholdRange(25, 40)       # max temperature, °C
COLD_RANGE = ThresholdRange(-5, 10)        # min temperature, °C
RAINY_RANGE = ThresholdRange(1, 25)        # precipitation, mm
WINDY_RANGE = ThresholdRange(20, 60)       # wind speed, km/h
STORM_RANGE = ThresholdRange(50, 500)      # precipitation x wind speed

DEFAULT_BASE_SCORE = 10
DEFAULT_MAX_SCORE = 95
STORM_BASE_SCORE = 5
STORM_MAX_SCORE = 80

HIGH_SEVERITY = 70
MEDIUM_SEVERITY = 40


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _is_missing(value) -> bool:
    return value is None or bool(pd.isna(value))


def score(
    value: Optional[float],
    thresholds: ThresholdRange,
    base_score: int = DEFAULT_BASE_SCORE,
    max_score: int = DEFAULT_MAX_SCORE,
    ascending: bool = True
) -> int:
    """
    Convert a measurement into a likelihood score

    Args:
        value: Raw measurement. Missing or NaN readings score as ``base_score``.
        thresholds: Calibration window (min < max)
        base_score: Score at the unremarkable end of the window
        max_score: Score at the extreme end of the window
        ascending: If False, lower readings mean higher likelihood

    Returns:
        Integer score in [base_score, max_score]
    """
    if _is_missing(value):
        return base_score

    low, high = thresholds
    fraction = (value - low) / (high - low)

    if ascending:
        if value <= low:
            return base_score
        if value >= high:
            return max_score
        return _round_half_up(base_score + fraction * (max_score - base_score))

    if value <= low:
        return max_score
    if value >= high:
        return base_score
    return _round_half_up(max_score - fraction * (max_score - base_score))


def score_array(
    values,
    thresholds: ThresholdRange,
    base_score: int = DEFAULT_BASE_SCORE,
    max_score: int = DEFAULT_MAX_SCORE,
    ascending: bool = True
) -> np.ndarray:
    """Vectorised ``score`` over an array or Series of measurements"""
    arr = np.asarray(values, dtype=float)
    low, high = thresholds

    fraction = np.clip((arr - low) / (high - low), 0.0, 1.0)
    if ascending:
        raw = base_score + fraction * (max_score - base_score)
    else:
        raw = max_score - fraction * (max_score - base_score)

    result = np.floor(raw + 0.5)
    result = np.where(np.isnan(arr), base_score, result)
    return result.astype(int)


def severity_of(probability: int) -> str:
    """Bucket a score into low / medium / high"""
    if probability >= HIGH_SEVERITY:
        return "high"
    if probability >= MEDIUM_SEVERITY:
        return "medium"
    return "low"


def storm_risk(precipitation: Optional[float], wind_speed: Optional[float]) -> int:
    """Storm likelihood from the rain x wind proxy"""
    if _is_missing(precipitation) or _is_missing(wind_speed):
        product = None
    else:
        product = precipitation * wind_speed

    return score(product, STORM_RANGE, STORM_BASE_SCORE, STORM_MAX_SCORE, True)


def discomfort_index(hot_score: int, wet_score: int, windy_score: int) -> int:
    """Combined discomfort from heat, wet and (strong) wind scores, capped at 99"""
    wind_penalty = 10 if windy_score > 70 else 0
    return min(99, _round_half_up((hot_score + wet_score) * 0.6 + wind_penalty))


def probability_color(probability: int) -> str:
    """Chart colour for a score"""
    if probability >= 70:
        return "hsl(0, 100%, 65%)"
    if probability >= 50:
        return "hsl(30, 100%, 65%)"
    if probability >= 30:
        return "hsl(200, 100%, 65%)"
    return "hsl(160, 100%, 65%)"


def classify_forecast_day(
    max_temp: Optional[float],
    min_temp: Optional[float],
    precipitation: Optional[float]
) -> str:
    """Coarse label for a forecast day, first match wins"""
    if not _is_missing(max_temp) and max_temp > 25:
        return "Hot"
    if not _is_missing(min_temp) and min_temp < 5:
        return "Cold"
    if not _is_missing(precipitation) and precipitation > 5:
        return "Rainy"
    return "Clear"


if __name__ == "__main__":
    print("\n" + "="*60)
    print("PROBABILITY SCORER TEST")
    print("="*60 + "\n")

    examples = [
        ("Max temp 40°C", score(40, SUNNY_RANGE)),
        ("Min temp 10°C", score(10, COLD_RANGE, ascending=False)),
        ("Rain 12mm", score(12, RAINY_RANGE)),
        ("Storm 25mm x 60km/h", storm_risk(25, 60)),
    ]
    for label, value in examples:
        print(f"  {label:<22} {value:>3}/100  ({severity_of(value)})")
