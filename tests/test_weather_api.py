from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tests.fakes import FORECAST_URL, GEOCODING_URL, make_http_client, moscow_upstream
from weather_service.exceptions import PersistenceError
from weather_service.main import create_app
from weather_service.scheduler import WeatherJob
from weather_service.services.geocoding import GeocodingClient
from weather_service.services.open_meteo import OpenMeteoClient
from weather_service.services.weather import WeatherService


def make_client(service: WeatherService) -> TestClient:
    return TestClient(create_app(SimpleNamespace(service=service)))


class BrokenProvider:
    def latest_for(self, city: str):
        raise PersistenceError("database is locked")


def test_get_city_returns_latest_reading(service: WeatherService) -> None:
    service.add("moscow", 1.0, datetime(2024, 1, 1, 11, 45))
    service.add("moscow", -5.3, datetime(2024, 1, 1, 12, 0))

    response = make_client(service).get("/moscow")

    assert response.status_code == 200
    assert response.json() == {"name": "moscow", "temperature": -5.3}


def test_unknown_city_is_404_plain_text(service: WeatherService) -> None:
    response = make_client(service).get("/atlantis")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "No weather data for city"


def test_storage_failure_is_500_without_detail(store) -> None:
    service = WeatherService(saver=store, provider=BrokenProvider())

    response = make_client(service).get("/moscow")

    assert response.status_code == 500
    assert response.text == "Error fetching weather"
    assert "locked" not in response.text


@pytest.mark.asyncio
async def test_tick_then_query_end_to_end(service: WeatherService) -> None:
    async with make_http_client(moscow_upstream()) as http:
        job = WeatherJob(
            "moscow",
            GeocodingClient(http, base_url=GEOCODING_URL),
            OpenMeteoClient(http, base_url=FORECAST_URL),
            service,
        )
        await job.run_once()

    response = make_client(service).get("/moscow")

    assert response.status_code == 200
    assert response.json() == {"name": "moscow", "temperature": -5.3}


def test_docs_path_is_a_city_not_swagger(service: WeatherService) -> None:
    service.add("docs", 7.0, datetime(2024, 1, 1, 12, 0))
    client = make_client(service)

    response = client.get("/docs")

    assert response.status_code == 200
    assert response.json() == {"name": "docs", "temperature": 7.0}
    assert client.get("/redoc").status_code == 404
    assert client.get("/openapi.json").text == "No weather data for city"
