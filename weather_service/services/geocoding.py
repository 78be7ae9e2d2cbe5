"""Open-Meteo geocoding API client."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from weather_service.exceptions import (
    BadStatusError,
    DecodeError,
    EmptyResultError,
    NetworkError,
)
from weather_service.models import Coordinate, GeocodingResponse

logger = logging.getLogger(__name__)


class GeocodingClient:
    """Resolves city names to coordinates."""

    BASE_URL = "https://geocoding-api.open-meteo.com/v1/search"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: Optional[str] = None,
        language: str = "ru",
    ):
        self.http_client = http_client
        self.base_url = base_url or self.BASE_URL
        self.language = language

    async def _search(self, city: str) -> GeocodingResponse:
        """Query the search endpoint for the single best match."""
        params = {
            "name": city,
            "count": 1,
            "language": self.language,
            "format": "json",
        }
        logger.debug(f"Fetching: {self.base_url} name={city}")

        try:
            response = await self.http_client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise NetworkError(f"geocoding request failed: {e}", url=self.base_url) from e

        if response.status_code != httpx.codes.OK:
            raise BadStatusError(response.status_code, url=self.base_url)

        try:
            return GeocodingResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"invalid geocoding response: {e}", url=self.base_url) from e

    async def resolve(self, city: str) -> Coordinate:
        """Return the coordinates of the top match for ``city``."""
        data = await self._search(city)
        if not data.results:
            raise EmptyResultError(city, url=self.base_url)

        top = data.results[0]
        logger.debug(f"Resolved {city} -> {top.name}, {top.country} ({top.latitude}, {top.longitude})")
        return Coordinate(latitude=top.latitude, longitude=top.longitude)
