"""Open-Meteo forecast API client."""

import logging
import re
from datetime import datetime
from typing import Optional

import httpx
from pydantic import ValidationError

from weather_service.exceptions import (
    BadStatusError,
    DecodeError,
    NetworkError,
    ParseError,
)
from weather_service.models import CurrentTemperature, ForecastResponse

logger = logging.getLogger(__name__)

# Open-Meteo "current.time" format, e.g. 2024-01-01T12:00
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}")


def parse_observed_at(value: str) -> datetime:
    """Parse an Open-Meteo timestamp: 'YYYY-MM-DDTHH:MM', no seconds, no offset."""
    # strptime alone accepts single-digit fields
    if not _TIMESTAMP_RE.fullmatch(value):
        raise ParseError(value, expected="YYYY-MM-DDTHH:MM")
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ParseError(value, expected="YYYY-MM-DDTHH:MM") from e


class OpenMeteoClient:
    """Fetch current temperature from the Open-Meteo forecast API."""

    BASE_URL = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, http_client: httpx.AsyncClient, base_url: Optional[str] = None):
        self.http_client = http_client
        self.base_url = base_url or self.BASE_URL

    async def current_temperature(self, latitude: float, longitude: float) -> CurrentTemperature:
        """
        Get current 2m temperature for a location.

        Returns temperature in Celsius with the upstream observation time
        left unparsed.
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": "temperature_2m",
        }
        logger.debug(f"Fetching: {self.base_url} lat={latitude} lon={longitude}")

        try:
            response = await self.http_client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise NetworkError(f"forecast request failed: {e}", url=self.base_url) from e

        if response.status_code != httpx.codes.OK:
            raise BadStatusError(response.status_code, url=self.base_url)

        try:
            data = ForecastResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"invalid forecast response: {e}", url=self.base_url) from e

        return CurrentTemperature(
            observed_at=data.current.time,
            temperature_celsius=data.current.temperature_2m,
        )
