from unittest.mock import patch

import pandas as pd
import pytest

from src.likelihood_scoring import LikelihoodScorer
from src.likelihood_scoring.probability_scorer import classify_forecast_day
from src.models import ConditionRecord


@pytest.fixture
def scorer():
    return LikelihoodScorer()


class TestBuildConditions:
    def test_order_and_scores(self, scorer, summer_reading):
        conditions = scorer.build_conditions(summer_reading)

        assert [c.condition for c in conditions] == LikelihoodScorer.CONDITIONS
        probabilities = {c.condition: c.probability for c in conditions}
        assert probabilities == {
            "Sunny": 53,
            "Cold": 10,
            "Rainy": 53,
            "Windy": 53,
            "Stormy": 80,
            "Uncomfortable": 64,
        }

    def test_severity_follows_probability(self, scorer, summer_reading):
        severities = {c.condition: c.severity for c in scorer.build_conditions(summer_reading)}
        assert severities["Cold"] == "low"
        assert severities["Sunny"] == "medium"
        assert severities["Stormy"] == "high"

    def test_descriptions_and_values(self, scorer, summer_reading):
        by_name = {c.condition: c for c in scorer.build_conditions(summer_reading)}

        assert by_name["Sunny"].description == "Max temperature: 32.5°C"
        assert by_name["Cold"].description == "Min temperature: 20°C"
        assert by_name["Rainy"].description == "Precipitation: 13mm"
        assert by_name["Windy"].description == "Wind speed: 40 km/h"
        assert by_name["Windy"].unit == "km/h"

        assert by_name["Stormy"].actual_value == pytest.approx(52.0)
        assert by_name["Stormy"].unit is None
        assert by_name["Uncomfortable"].actual_value is None

    def test_primary_only(self, scorer, summer_reading):
        conditions = scorer.build_conditions(summer_reading, include_composites=False)
        assert [c.condition for c in conditions] == LikelihoodScorer.PRIMARY_CONDITIONS

    def test_missing_data_degrades_to_base(self, scorer, empty_reading):
        conditions = scorer.build_conditions(empty_reading)
        probabilities = [c.probability for c in conditions]

        assert probabilities == [10, 10, 10, 10, 5, 12]
        assert all(c.severity == "low" for c in conditions)
        assert conditions[0].description == "Max temperature: n/a°C"
        assert conditions[4].actual_value is None


class TestAggregates:
    def test_dominant_condition(self, scorer, summer_reading):
        dominant = scorer.dominant_condition(scorer.build_conditions(summer_reading))
        assert dominant.condition == "Stormy"

    def test_dominant_condition_first_wins_ties(self, scorer):
        records = [
            ConditionRecord("Sunny", 50, "medium", ""),
            ConditionRecord("Rainy", 50, "medium", ""),
        ]
        assert scorer.dominant_condition(records).condition == "Sunny"

    def test_dominant_condition_empty(self, scorer):
        assert scorer.dominant_condition([]) is None

    def test_alerts_only_for_high_severity(self, scorer, summer_reading):
        alerts = scorer.build_alerts(scorer.build_conditions(summer_reading), "Denver, CO")

        assert len(alerts) == 1
        assert alerts[0]["condition"] == "Stormy"
        assert "Denver, CO" in alerts[0]["message"]
        assert "80%" in alerts[0]["message"]

    def test_alerts_without_location(self, scorer):
        alerts = scorer.build_alerts([ConditionRecord("Sunny", 95, "high", "Max temperature: 40°C")])
        assert "this location" in alerts[0]["message"]

    def test_summarize(self, scorer, summer_reading):
        summary = scorer.summarize(scorer.build_conditions(summer_reading))

        assert summary["average_probability"] == 52.2
        assert summary["severity_distribution"] == {"high": 1, "medium": 4, "low": 1}
        assert summary["dominant_condition"] == "Stormy"

    def test_summarize_empty(self, scorer):
        summary = scorer.summarize([])
        assert summary["average_probability"] == 0.0
        assert summary["dominant_condition"] is None


class TestForecast:
    def test_score_forecast(self, scorer):
        forecast = pd.DataFrame({
            "date": pd.to_datetime(["2024-07-01", "2024-07-02", "2024-07-03", "2024-07-04"]),
            "max_temp": [30.0, 20.0, 20.0, 18.0],
            "min_temp": [15.0, 2.0, 8.0, 8.0],
            "precipitation": [0.0, 10.0, 10.0, 1.0],
            "wind_speed": [10.0, 30.0, 30.0, 5.0],
        })

        scored = scorer.score_forecast(forecast)

        assert scored["condition"].tolist() == ["Hot", "Cold", "Rainy", "Clear"]
        assert scored["sunny_score"].tolist() == [38, 10, 10, 10]
        assert scored["stormy_score"].iloc[2] == 47
        # Input frame is left untouched
        assert "condition" not in forecast.columns

    def test_score_forecast_empty(self, scorer):
        assert scorer.score_forecast(pd.DataFrame()).empty

    def test_score_forecast_classifies_each_day(self, scorer):
        forecast = pd.DataFrame({
            "date": pd.to_datetime(["2024-07-01", "2024-07-02"]),
            "max_temp": [None, 26.0],
            "min_temp": [3.0, 1.0],
            "precipitation": [8.0, 0.0],
            "wind_speed": [10.0, 10.0],
        })

        with patch(
            "src.likelihood_scoring.likelihood_scorer.classify_forecast_day",
            wraps=classify_forecast_day
        ) as mock_classify:
            scored = scorer.score_forecast(forecast)

        assert mock_classify.call_count == 2
        assert scored["condition"].tolist() == ["Cold", "Hot"]


class TestCompare:
    def test_deltas_relative_to_primary(self, scorer, summer_reading, empty_reading):
        primary = scorer.build_conditions(summer_reading, include_composites=False)
        other = scorer.build_conditions(empty_reading, include_composites=False)

        result = scorer.compare(primary, [("Reykjavik", other)])

        assert len(result) == 1
        assert result[0]["location"] == "Reykjavik"
        assert result[0]["deltas"] == {"Sunny": -43, "Cold": 0, "Rainy": -43, "Windy": -43}
        assert len(result[0]["conditions"]) == 4
