"""
OpenStreetMap Nominatim Geocoding Connector

Resolves free-text place names to coordinates.
API Documentation: https://nominatim.org/release-docs/latest/api/Search/
"""

import requests
from typing import Optional, Dict
import logging

from ..config import WeatherSettings, get_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class NominatimConnector:
    """Connector for the Nominatim search API"""

    def __init__(self, settings: Optional[WeatherSettings] = None):
        self.settings = settings or get_settings()
        self.session = requests.Session()
        # Nominatim rejects requests without an identifying User-Agent
        self.session.headers.update({
            "User-Agent": self.settings.user_agent
        })

    def search(self, query: str) -> Optional[Dict]:
        """
        Look up the best match for a place name

        Returns:
            {"lat", "lon", "display_name"} for the top hit, or None when the
            place is unknown or the service could not be reached
        """
        if not query or not query.strip():
            return None

        params = {
            "q": query.strip(),
            "format": "json",
            "limit": 1
        }

        try:
            logger.info(f"Geocoding '{query}'")
            response = self.session.get(
                self.settings.nominatim_url,
                params=params,
                timeout=self.settings.request_timeout
            )
            response.raise_for_status()
            results = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error geocoding '{query}': {e}")
            return None

        if not results:
            logger.info(f"Location not found: '{query}'")
            return None

        top = results[0]
        return {
            "lat": float(top["lat"]),
            "lon": float(top["lon"]),
            "display_name": top.get("display_name", query)
        }


if __name__ == "__main__":
    print("\n" + "="*60)
    print("NOMINATIM CONNECTOR TEST")
    print("="*60 + "\n")

    connector = NominatimConnector()
    for place in ["Denver, CO", "Tokyo", "Nowhere-Ville-XYZ"]:
        hit = connector.search(place)
        if hit:
            print(f"  ✓ {place}: {hit['lat']:.4f}, {hit['lon']:.4f} ({hit['display_name']})")
        else:
            print(f"  ✗ {place}: not found")
