"""
Likelihood Scoring Module

Turns daily weather readings into the per-condition likelihood records shown
by the API and dashboard.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..models import ConditionRecord, DailyWeather
from .probability_scorer import (
    COLD_RANGE,
    RAINY_RANGE,
    STORM_BASE_SCORE,
    STORM_MAX_SCORE,
    STORM_RANGE,
    SUNNY_RANGE,
    WINDY_RANGE,
    classify_forecast_day,
    discomfort_index,
    score,
    score_array,
    severity_of,
    storm_risk,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def format_reading(value: Optional[float]) -> str:
    """Compact display form of a reading, e.g. 20.0 -> 20 and missing -> n/a"""
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value:g}"


class LikelihoodScorer:
    """Calculate weather condition likelihoods for a location and date"""

    CONDITIONS = ["Sunny", "Cold", "Rainy", "Windy", "Stormy", "Uncomfortable"]
    PRIMARY_CONDITIONS = CONDITIONS[:4]

    def build_conditions(
        self,
        reading: DailyWeather,
        include_composites: bool = True
    ) -> List[ConditionRecord]:
        """
        Score every condition for one day of weather

        Args:
            reading: Daily aggregates from the weather API
            include_composites: Also return the Stormy and Uncomfortable
                composites. The comparison panel only uses the primary four.

        Returns:
            Condition records in fixed display order
        """
        hot = score(reading.max_temp, SUNNY_RANGE)
        cold = score(reading.min_temp, COLD_RANGE, ascending=False)
        wet = score(reading.precipitation, RAINY_RANGE)
        windy = score(reading.wind_speed, WINDY_RANGE)

        records = [
            ConditionRecord(
                condition="Sunny",
                probability=hot,
                severity=severity_of(hot),
                description=f"Max temperature: {format_reading(reading.max_temp)}°C",
                actual_value=reading.max_temp,
                unit="°C",
            ),
            ConditionRecord(
                condition="Cold",
                probability=cold,
                severity=severity_of(cold),
                description=f"Min temperature: {format_reading(reading.min_temp)}°C",
                actual_value=reading.min_temp,
                unit="°C",
            ),
            ConditionRecord(
                condition="Rainy",
                probability=wet,
                severity=severity_of(wet),
                description=f"Precipitation: {format_reading(reading.precipitation)}mm",
                actual_value=reading.precipitation,
                unit="mm",
            ),
            ConditionRecord(
                condition="Windy",
                probability=windy,
                severity=severity_of(windy),
                description=f"Wind speed: {format_reading(reading.wind_speed)} km/h",
                actual_value=reading.wind_speed,
                unit="km/h",
            ),
        ]

        if not include_composites:
            return records

        storm = storm_risk(reading.precipitation, reading.wind_speed)
        if pd.isna(reading.precipitation) or pd.isna(reading.wind_speed):
            storm_factor = None
        else:
            storm_factor = reading.precipitation * reading.wind_speed / 10

        uncomfortable = discomfort_index(hot, wet, windy)

        records.extend([
            ConditionRecord(
                condition="Stormy",
                probability=storm,
                severity=severity_of(storm),
                description="Combined rain and wind factor",
                actual_value=storm_factor,
            ),
            ConditionRecord(
                condition="Uncomfortable",
                probability=uncomfortable,
                severity=severity_of(uncomfortable),
                description="Combined discomfort index",
            ),
        ])
        return records

    @staticmethod
    def dominant_condition(conditions: Sequence[ConditionRecord]) -> Optional[ConditionRecord]:
        """Condition with the highest probability (first one wins ties)"""
        if not conditions:
            return None
        return max(conditions, key=lambda c: c.probability)

    @staticmethod
    def build_alerts(
        conditions: Sequence[ConditionRecord],
        location: Optional[str] = None
    ) -> List[Dict]:
        """Alert messages for every high-severity condition"""
        where = location or "this location"
        alerts = []
        for record in conditions:
            if record.severity != "high":
                continue
            alerts.append({
                "condition": record.condition,
                "probability": record.probability,
                "message": (
                    f"High likelihood of {record.condition.lower()} conditions "
                    f"in {where} ({record.probability}%): {record.description}"
                ),
            })
        return alerts

    def summarize(self, conditions: Sequence[ConditionRecord]) -> Dict:
        """Aggregate statistics over a set of condition records"""
        distribution = {"high": 0, "medium": 0, "low": 0}
        for record in conditions:
            distribution[record.severity] += 1

        if conditions:
            average = float(np.mean([c.probability for c in conditions]))
        else:
            average = 0.0

        dominant = self.dominant_condition(conditions)

        return {
            "average_probability": round(average, 1),
            "severity_distribution": distribution,
            "dominant_condition": dominant.condition if dominant else None,
        }

    @staticmethod
    def score_forecast(forecast_df: pd.DataFrame) -> pd.DataFrame:
        """
        Add likelihood and day-class columns to a forecast frame

        Expects columns max_temp, min_temp, precipitation, wind_speed.
        """
        df = forecast_df.copy()
        if df.empty:
            return df

        df["sunny_score"] = score_array(df["max_temp"], SUNNY_RANGE)
        df["cold_score"] = score_array(df["min_temp"], COLD_RANGE, ascending=False)
        df["rainy_score"] = score_array(df["precipitation"], RAINY_RANGE)
        df["windy_score"] = score_array(df["wind_speed"], WINDY_RANGE)
        df["stormy_score"] = score_array(
            df["precipitation"].astype(float) * df["wind_speed"].astype(float),
            STORM_RANGE, STORM_BASE_SCORE, STORM_MAX_SCORE
        )

        df["condition"] = [
            classify_forecast_day(row.max_temp, row.min_temp, row.precipitation)
            for row in df.itertuples(index=False)
        ]
        return df

    @staticmethod
    def compare(
        primary: Sequence[ConditionRecord],
        others: Sequence[Tuple[str, Sequence[ConditionRecord]]]
    ) -> List[Dict]:
        """
        Compare other locations against the primary one

        Returns:
            One entry per other location with its records and the probability
            difference (other - primary) for each condition both share.
        """
        baseline = {c.condition: c.probability for c in primary}
        results = []
        for name, records in others:
            deltas = {
                c.condition: c.probability - baseline[c.condition]
                for c in records
                if c.condition in baseline
            }
            results.append({
                "location": name,
                "conditions": [c.to_dict() for c in records],
                "deltas": deltas,
            })
        logger.info(f"Compared {len(results)} locations against primary")
        return results


if __name__ == "__main__":
    from datetime import date

    print("\n" + "="*60)
    print("LIKELIHOOD SCORING TEST")
    print("="*60 + "\n")

    scorer = LikelihoodScorer()
    reading = DailyWeather(date.today(), max_temp=34.2, min_temp=21.0,
                           precipitation=12.5, wind_speed=45.0)

    conditions = scorer.build_conditions(reading)
    for record in conditions:
        print(f"  {record.condition:<14} {record.probability:>3}%  {record.severity:<6}  {record.description}")

    summary = scorer.summarize(conditions)
    print(f"\nDominant condition: {summary['dominant_condition']}")
    print(f"Average likelihood: {summary['average_probability']}%")
    for alert in scorer.build_alerts(conditions, "Denver, CO"):
        print(f"  ⚠️ {alert['message']}")
