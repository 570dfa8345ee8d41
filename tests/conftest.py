import os
import sys
from datetime import date
from unittest.mock import MagicMock

import pytest

# Add project root so the src and api packages import without installation
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from src.config import WeatherSettings
from src.models import DailyWeather


@pytest.fixture
def settings():
    """Settings with defaults only, ignoring any local .env file."""
    return WeatherSettings(_env_file=None)


@pytest.fixture
def summer_reading():
    """A warm, wet and breezy day."""
    return DailyWeather(
        date=date(2024, 7, 1),
        max_temp=32.5,
        min_temp=20.0,
        precipitation=13.0,
        wind_speed=40.0,
    )


@pytest.fixture
def empty_reading():
    """A day where the weather service returned nulls for every field."""
    return DailyWeather(
        date=date(2024, 7, 1),
        max_temp=None,
        min_temp=None,
        precipitation=None,
        wind_speed=None,
    )


@pytest.fixture
def mock_response():
    """Builds a fake requests.Response returning the given JSON."""
    def _make(payload, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        return response
    return _make
