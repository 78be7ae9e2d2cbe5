"""Reading storage backed by SQLAlchemy."""

import logging
from datetime import datetime
from typing import Protocol

from sqlalchemy import desc, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from weather_service.database import Reading
from weather_service.exceptions import (
    NotFoundError,
    PersistenceError,
    WriteNotConfirmedError,
)
from weather_service.models import WeatherDTO

logger = logging.getLogger(__name__)


class WeatherSaver(Protocol):
    """Anything that can persist a reading."""

    def insert(self, city: str, temperature: float, observed_at: datetime) -> None:
        ...


class WeatherProvider(Protocol):
    """Anything that can return the latest reading for a city."""

    def latest_for(self, city: str) -> WeatherDTO:
        ...


class WeatherStore:
    """Append-only store of readings.

    Each call opens its own session, so one store instance is safe to share
    between the scheduler and concurrent requests.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def insert(self, city: str, temperature: float, observed_at: datetime) -> None:
        """Insert one reading; raise if the database did not confirm the write."""
        stmt = insert(Reading).values(
            name=city,
            temperature=temperature,
            timestamp=observed_at,
        )

        with self.session_factory() as db:
            try:
                result = db.execute(stmt)
                if result.rowcount == 0:
                    db.rollback()
                    raise WriteNotConfirmedError(f"reading for {city!r} was not added")
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise PersistenceError(f"failed to insert reading for {city!r}: {e}") from e

        logger.debug(f"Stored reading: {city} {temperature} at {observed_at}")

    def latest_for(self, city: str) -> WeatherDTO:
        """Return the reading with the greatest timestamp for ``city``."""
        with self.session_factory() as db:
            try:
                row = (
                    db.query(Reading)
                    .filter(Reading.name == city)
                    .order_by(desc(Reading.timestamp))
                    .first()
                )
            except SQLAlchemyError as e:
                raise PersistenceError(f"failed to read weather for {city!r}: {e}") from e

            if row is None:
                raise NotFoundError(city)

            return WeatherDTO(
                city=row.name,
                observed_at=row.timestamp,
                temperature=row.temperature,
            )
