import json
from datetime import date

import pytest

from src.likelihood_scoring import LikelihoodScorer
from src.likelihood_scoring import export
from src.models import DailyWeather


@pytest.fixture
def conditions(summer_reading):
    return LikelihoodScorer().build_conditions(summer_reading)


class TestExport:
    def test_csv_layout(self, conditions):
        lines = export.to_csv(conditions, "Denver, CO", date(2024, 7, 1)).splitlines()

        assert lines[0] == "Location,Date,Condition,Probability,Severity,ActualValue,Unit"
        assert lines[1] == '"Denver, CO",2024-07-01,Sunny,53%,medium,32.5,°C'
        assert lines[-1] == '"Denver, CO",2024-07-01,Uncomfortable,64%,medium,,'
        assert len(lines) == 7

    def test_json_records(self, conditions):
        records = json.loads(export.to_json(conditions, "Denver, CO", date(2024, 7, 1)))

        assert len(records) == 6
        assert records[0] == {
            "location": "Denver, CO",
            "date": "2024-07-01",
            "condition": "Sunny",
            "probability": 53,
            "severity": "medium",
            "actualValue": 32.5,
            "unit": "°C",
        }
        assert records[-1]["actualValue"] is None
        assert records[-1]["unit"] is None

    def test_unknown_location(self, conditions):
        df = export.conditions_to_frame(conditions, "", date(2024, 7, 1))
        assert (df["location"] == "Unknown Location").all()

    def test_empty_conditions_rejected(self):
        with pytest.raises(ValueError, match="No data to export"):
            export.to_csv([], "Denver, CO")

    def test_csv_readings_use_compact_form(self):
        reading = DailyWeather(date(2024, 1, 15), max_temp=20.0, min_temp=0.0,
                               precipitation=2.5, wind_speed=12.0)
        conditions = LikelihoodScorer().build_conditions(reading)

        lines = export.to_csv(conditions, "Oslo", date(2024, 1, 15)).splitlines()

        assert lines[1] == "Oslo,2024-01-15,Sunny,10%,low,20,°C"
        assert lines[2] == "Oslo,2024-01-15,Cold,67%,medium,0,°C"
        assert lines[5] == "Oslo,2024-01-15,Stormy,5%,low,3,"
