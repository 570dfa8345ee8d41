"""
Export of condition records as CSV or JSON downloads
"""

import logging
from datetime import date
from typing import Optional, Sequence

import pandas as pd

from ..models import ConditionRecord
from .likelihood_scorer import format_reading

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CSV_HEADERS = {
    "location": "Location",
    "date": "Date",
    "condition": "Condition",
    "probability": "Probability",
    "severity": "Severity",
    "actualValue": "ActualValue",
    "unit": "Unit",
}


def conditions_to_frame(
    conditions: Sequence[ConditionRecord],
    location: Optional[str],
    day: Optional[date] = None
) -> pd.DataFrame:
    """One row per condition, tagged with location and date"""
    if not conditions:
        raise ValueError("No data to export")

    day = day or date.today()
    records = [
        {
            "location": location or "Unknown Location",
            "date": day.isoformat(),
            "condition": c.condition,
            "probability": c.probability,
            "severity": c.severity,
            "actualValue": c.actual_value,
            "unit": c.unit,
        }
        for c in conditions
    ]
    return pd.DataFrame(records, columns=list(CSV_HEADERS))


def to_json(
    conditions: Sequence[ConditionRecord],
    location: Optional[str],
    day: Optional[date] = None
) -> str:
    df = conditions_to_frame(conditions, location, day)
    logger.info(f"Exporting {len(df)} condition records as JSON")
    return df.to_json(orient="records", indent=2, force_ascii=False)


def to_csv(
    conditions: Sequence[ConditionRecord],
    location: Optional[str],
    day: Optional[date] = None
) -> str:
    df = conditions_to_frame(conditions, location, day)
    df["probability"] = df["probability"].map(lambda p: f"{p}%")
    df["actualValue"] = df["actualValue"].map(
        lambda v: "" if pd.isna(v) else format_reading(v)
    )
    df = df.rename(columns=CSV_HEADERS)
    logger.info(f"Exporting {len(df)} condition records as CSV")
    return df.to_csv(index=False, lineterminator="\n")
