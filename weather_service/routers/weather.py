"""Latest-reading endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from weather_service.exceptions import NotFoundError, WeatherServiceError
from weather_service.models import Weather
from weather_service.services.weather import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_weather_service(request: Request) -> WeatherService:
    """Dependency returning the service from the application context."""
    return request.app.state.context.service


@router.get("/{city}", response_model=Weather)
def get_city_weather(city: str, service: WeatherService = Depends(get_weather_service)):
    """Get the most recent reading for a city."""
    try:
        return service.get(city)
    except NotFoundError as e:
        logger.warning(f"Weather lookup miss: {e}")
        return PlainTextResponse("No weather data for city", status_code=404)
    except WeatherServiceError as e:
        logger.error(f"Weather lookup failed for {city}: {e}")
        return PlainTextResponse("Error fetching weather", status_code=500)
