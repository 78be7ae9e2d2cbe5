"""Application context: every long-lived collaborator, built once at startup."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from weather_service.config import Settings
from weather_service.database import create_db_engine, create_session_factory, init_db
from weather_service.scheduler import WeatherJob, WeatherScheduler
from weather_service.services.geocoding import GeocodingClient
from weather_service.services.open_meteo import OpenMeteoClient
from weather_service.services.storage import WeatherStore
from weather_service.services.weather import WeatherService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Wired application components."""
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    http_client: httpx.AsyncClient
    service: WeatherService
    job: WeatherJob
    scheduler: WeatherScheduler

    async def aclose(self) -> None:
        """Release network and database resources."""
        self.scheduler.stop()
        await self.http_client.aclose()
        self.engine.dispose()
        logger.info("Application context closed")


def build_context(settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> AppContext:
    """Create and wire all components from ``settings``.

    ``http_client`` replaces the default upstream client; the context owns
    and closes it either way.
    """
    engine = create_db_engine(settings.database_url, timeout=settings.request_timeout)
    init_db(engine)
    session_factory = create_session_factory(engine)

    http_client = http_client or httpx.AsyncClient(timeout=settings.request_timeout)
    geocoding = GeocodingClient(
        http_client,
        base_url=settings.geocoding_url,
        language=settings.geocoding_language,
    )
    forecast = OpenMeteoClient(http_client, base_url=settings.forecast_url)

    store = WeatherStore(session_factory)
    service = WeatherService(saver=store, provider=store)

    job = WeatherJob(settings.city, geocoding, forecast, service)
    scheduler = WeatherScheduler(job, settings.poll_interval_seconds)

    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        http_client=http_client,
        service=service,
        job=job,
        scheduler=scheduler,
    )
