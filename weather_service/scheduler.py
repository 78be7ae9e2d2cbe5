"""APScheduler setup for periodic weather collection.

Polling Strategy:
- Every tick resolves the configured city, fetches the current temperature
  and appends one reading to the store
- Any failure ends that tick only; the next tick starts from scratch
- Ticks keep no shared state, so overlapping runs cannot corrupt each other
"""

import asyncio
import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from weather_service.exceptions import (
    ParseError,
    PersistenceError,
    UpstreamError,
)
from weather_service.models import WeatherDTO
from weather_service.services.geocoding import GeocodingClient
from weather_service.services.open_meteo import OpenMeteoClient, parse_observed_at
from weather_service.services.weather import WeatherService

logger = logging.getLogger(__name__)

JOB_ID = "weather_collect"


class WeatherJob:
    """Fetch-and-persist pipeline for one fixed city."""

    def __init__(
        self,
        city: str,
        geocoding: GeocodingClient,
        forecast: OpenMeteoClient,
        service: WeatherService,
    ):
        self.city = city
        self.geocoding = geocoding
        self.forecast = forecast
        self.service = service

    async def run_once(self) -> Optional[WeatherDTO]:
        """Run a single tick.

        Returns the stored reading, or None if any step failed.
        """
        try:
            coordinate = await self.geocoding.resolve(self.city)
        except UpstreamError as e:
            logger.error(f"Geocoding failed for {self.city}: {e}")
            return None

        try:
            current = await self.forecast.current_temperature(
                coordinate.latitude, coordinate.longitude
            )
        except UpstreamError as e:
            logger.error(f"Forecast failed for {self.city}: {e}")
            return None

        try:
            observed_at = parse_observed_at(current.observed_at)
        except ParseError as e:
            logger.error(f"Bad forecast timestamp for {self.city}: {e}")
            return None

        try:
            await asyncio.to_thread(
                self.service.add, self.city, current.temperature_celsius, observed_at
            )
        except PersistenceError as e:
            logger.error(f"Saving reading for {self.city} failed: {e}")
            return None

        logger.info(f"Stored {self.city}: {current.temperature_celsius}C at {observed_at}")
        return WeatherDTO(
            city=self.city,
            observed_at=observed_at,
            temperature=current.temperature_celsius,
        )

    async def tick(self) -> None:
        """Scheduled entry point; never lets an exception reach the scheduler."""
        try:
            await self.run_once()
        except Exception as e:
            logger.exception(f"Unexpected error in weather job: {e}")


class WeatherScheduler:
    """Owns the AsyncIOScheduler driving a :class:`WeatherJob`."""

    def __init__(self, job: WeatherJob, interval_seconds: int):
        self.job = job
        self.interval_seconds = interval_seconds
        self.scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def start(self) -> None:
        """Start the background scheduler."""
        if self.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.job.tick,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            name=f"Weather collection ({self.job.city})",
            replace_existing=True,
            max_instances=1,  # Prevent overlapping runs
        )
        self.scheduler.start()
        logger.info(
            f"Scheduler started: {self.job.city} every {self.interval_seconds}s, "
            f"next run at {self.get_next_run_time()}"
        )

    def stop(self) -> None:
        """Stop the background scheduler."""
        if self.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")
        self.scheduler = None

    def get_next_run_time(self):
        """Get the next scheduled run time."""
        if self.running:
            job = self.scheduler.get_job(JOB_ID)
            if job:
                return job.next_run_time
        return None
