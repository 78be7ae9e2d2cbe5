"""Service modules."""

from weather_service.services.geocoding import GeocodingClient
from weather_service.services.open_meteo import OpenMeteoClient
from weather_service.services.storage import WeatherStore
from weather_service.services.weather import WeatherService

__all__ = ["GeocodingClient", "OpenMeteoClient", "WeatherStore", "WeatherService"]
