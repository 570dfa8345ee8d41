"""
Open-Meteo Weather API Connector

Fetches daily weather aggregates from the Open-Meteo forecast and historical
archive APIs.
API Documentation: https://open-meteo.com/en/docs
"""

import requests
import pandas as pd
from datetime import date, timedelta
from typing import Optional, Dict
import logging

from ..config import WeatherSettings, get_settings
from ..models import DailyWeather

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DAILY_FIELDS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "windspeed_10m_max",
]

COLUMN_NAMES = {
    "time": "date",
    "temperature_2m_max": "max_temp",
    "temperature_2m_min": "min_temp",
    "precipitation_sum": "precipitation",
    "windspeed_10m_max": "wind_speed",
}


class OpenMeteoError(Exception):
    """Open-Meteo answered with an error body, e.g. a date outside its range"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class OpenMeteoConnector:
    """Connector for the Open-Meteo forecast and archive APIs"""

    def __init__(self, settings: Optional[WeatherSettings] = None):
        self.settings = settings or get_settings()
        self.session = requests.Session()

    def is_historical(self, day: date, today: Optional[date] = None) -> bool:
        """Dates older than the archive lag are only served by the archive API"""
        today = today or date.today()
        return day < today - timedelta(days=self.settings.archive_lag_days)

    def _request(self, url: str, params: Dict) -> Optional[Dict]:
        try:
            response = self.session.get(url, params=params, timeout=self.settings.request_timeout)
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching weather data: {e}")
            return None

        if isinstance(data, dict) and data.get("error"):
            reason = data.get("reason", "Unknown Open-Meteo error")
            logger.error(f"Open-Meteo error: {reason}")
            raise OpenMeteoError(reason)

        try:
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching weather data: {e}")
            return None

        return data

    def get_daily(self, latitude: float, longitude: float, day: date) -> Optional[DailyWeather]:
        """
        Get daily aggregates for a single date

        Returns:
            DailyWeather, or None if the service could not be reached

        Raises:
            OpenMeteoError: the API rejected the request
        """
        url = self.settings.archive_url if self.is_historical(day) else self.settings.forecast_url
        formatted = day.isoformat()

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": formatted,
            "end_date": formatted,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
        }

        logger.info(f"Fetching daily weather for ({latitude}, {longitude}) on {formatted}")
        data = self._request(url, params)
        if data is None:
            return None

        daily = data.get("daily") or {}

        def first(field: str) -> Optional[float]:
            values = daily.get(field) or []
            return values[0] if values else None

        return DailyWeather(
            date=day,
            max_temp=first("temperature_2m_max"),
            min_temp=first("temperature_2m_min"),
            precipitation=first("precipitation_sum"),
            wind_speed=first("windspeed_10m_max"),
        )

    def get_forecast(
        self,
        latitude: float,
        longitude: float,
        days: Optional[int] = None
    ) -> pd.DataFrame:
        """
        Get the daily forecast starting today

        Returns:
            DataFrame with date, max_temp, min_temp, precipitation, wind_speed
        """
        days = days or self.settings.forecast_days
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
            "forecast_days": days,
        }

        logger.info(f"Fetching {days}-day forecast for ({latitude}, {longitude})")
        data = self._request(self.settings.forecast_url, params)
        if data is None or not data.get("daily"):
            return pd.DataFrame()

        df = pd.DataFrame(data["daily"]).rename(columns=COLUMN_NAMES)
        df = df[list(COLUMN_NAMES.values())]
        df["date"] = pd.to_datetime(df["date"])

        logger.info(f"Retrieved {len(df)} forecast days")
        return df


if __name__ == "__main__":
    print("\n" + "="*60)
    print("OPEN-METEO CONNECTOR TEST")
    print("="*60 + "\n")

    connector = OpenMeteoConnector()

    print("Test 1: Today's weather for Denver, CO...")
    reading = connector.get_daily(39.7392, -104.9903, date.today())
    if reading:
        print(f"  ✓ max {reading.max_temp}°C, min {reading.min_temp}°C, "
              f"rain {reading.precipitation}mm, wind {reading.wind_speed} km/h")
    else:
        print("  ✗ Could not retrieve weather")

    print("\n" + "-"*60)
    print("Test 2: Weather one year ago (archive API)...")
    reading = connector.get_daily(39.7392, -104.9903, date.today() - timedelta(days=365))
    print(f"  {'✓' if reading else '✗'} {reading}")

    print("\n" + "-"*60)
    print("Test 3: 7-day forecast...")
    forecast = connector.get_forecast(39.7392, -104.9903)
    if not forecast.empty:
        print(forecast.to_string(index=False))
    else:
        print("  ✗ Could not retrieve forecast")
