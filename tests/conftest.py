from __future__ import annotations

import pytest

from weather_service.database import create_db_engine, create_session_factory, init_db
from weather_service.services.storage import WeatherStore
from weather_service.services.weather import WeatherService


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def store(session_factory) -> WeatherStore:
    return WeatherStore(session_factory)


@pytest.fixture
def service(store) -> WeatherService:
    return WeatherService(saver=store, provider=store)
