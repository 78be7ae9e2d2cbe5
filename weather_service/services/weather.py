"""Weather read/write service."""

from datetime import datetime

from weather_service.models import Weather
from weather_service.services.storage import WeatherProvider, WeatherSaver


class WeatherService:
    """Business layer between the scheduler/router and the store.

    Saver and provider are separate so either side can be swapped or faked
    independently; in production both are the same ``WeatherStore``.
    """

    def __init__(self, saver: WeatherSaver, provider: WeatherProvider):
        self.saver = saver
        self.provider = provider

    def add(self, city: str, temperature: float, observed_at: datetime) -> None:
        """Persist a reading."""
        self.saver.insert(city, temperature, observed_at)

    def get(self, city: str) -> Weather:
        """Return the latest reading for ``city`` without its timestamp."""
        dto = self.provider.latest_for(city)
        return Weather(name=dto.city, temperature=dto.temperature)
