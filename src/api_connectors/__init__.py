"""
API Connectors for the Weather Likelihood Platform

This package contains connectors for the public services the platform uses:
- Nominatim: Geocoding of place names
- Open-Meteo: Daily forecast and historical weather
"""

from .nominatim_connector import NominatimConnector
from .open_meteo_connector import OpenMeteoConnector, OpenMeteoError

__all__ = [
    "NominatimConnector",
    "OpenMeteoConnector",
    "OpenMeteoError",
]
