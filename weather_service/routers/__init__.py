"""API routers."""

from weather_service.routers.weather import router as weather_router

__all__ = ["weather_router"]
