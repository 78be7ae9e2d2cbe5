"""Pydantic models for API responses and upstream payloads."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# --- Domain Models ---

class Coordinate(BaseModel):
    """Geographic point resolved for a city."""
    latitude: float
    longitude: float


class CurrentTemperature(BaseModel):
    """Current reading returned by the forecast API.

    ``observed_at`` is kept as the raw upstream string (``YYYY-MM-DDTHH:MM``);
    parsing happens in the scheduler so a bad value aborts only that tick.
    """
    observed_at: str
    temperature_celsius: float


class WeatherDTO(BaseModel):
    """Stored reading, including the observation time."""
    city: str
    observed_at: datetime
    temperature: float


class Weather(BaseModel):
    """Public response form of a reading."""
    name: str
    temperature: float


# --- Open-Meteo API Models (for parsing responses) ---

class GeocodingResult(BaseModel):
    """Single match from the geocoding search endpoint."""
    name: str
    country: Optional[str] = None
    latitude: float
    longitude: float


class GeocodingResponse(BaseModel):
    """Response from /v1/search.

    The API omits ``results`` entirely when nothing matched.
    """
    results: List[GeocodingResult] = Field(default_factory=list)


class ForecastCurrent(BaseModel):
    """``current`` block of the forecast response."""
    time: str
    temperature_2m: float


class ForecastResponse(BaseModel):
    """Response from /v1/forecast with ``current=temperature_2m``."""
    current: ForecastCurrent
