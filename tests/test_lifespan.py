from __future__ import annotations

import time

import httpx
import pytest
from fastapi.testclient import TestClient

from tests.fakes import FORECAST_URL, GEOCODING_URL, make_http_client, moscow_upstream
from weather_service.config import Settings
from weather_service.context import AppContext, build_context
from weather_service.main import create_app


class Upstream:
    """Moscow upstream that counts geocoding lookups."""

    def __init__(self) -> None:
        self.lookups = 0
        self._handler = moscow_upstream()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "geocoding.test":
            self.lookups += 1
        return self._handler(request)


@pytest.fixture
def wire_app(tmp_path, monkeypatch):
    """Point the app's own context building at fake upstreams and a temp database."""
    contexts: list[AppContext] = []
    upstream = Upstream()

    def configure(**overrides) -> tuple[list[AppContext], Upstream]:
        settings = Settings(
            database_url=f"sqlite:///{tmp_path}/weather.db",
            geocoding_url=GEOCODING_URL,
            forecast_url=FORECAST_URL,
            city="moscow",
            **overrides,
        )

        def fake_build_context(_settings: Settings) -> AppContext:
            ctx = build_context(settings, http_client=make_http_client(upstream))
            contexts.append(ctx)
            return ctx

        monkeypatch.setattr("weather_service.main.get_settings", lambda: settings)
        monkeypatch.setattr("weather_service.main.build_context", fake_build_context)
        return contexts, upstream

    return configure


def assert_closed(ctx: AppContext) -> None:
    assert not ctx.scheduler.running
    assert ctx.http_client.is_closed
    # dispose() swaps in a fresh, empty pool
    assert ctx.engine.pool.checkedin() == 0


def test_startup_tick_stores_reading_before_serving(wire_app) -> None:
    contexts, upstream = wire_app(run_on_startup=True, poll_interval_seconds=3600)

    with TestClient(create_app()) as client:
        response = client.get("/moscow")
        assert contexts[0].scheduler.running

    assert response.status_code == 200
    assert response.json() == {"name": "moscow", "temperature": -5.3}
    assert upstream.lookups == 1
    assert_closed(contexts[0])


def test_scheduler_stores_reading_after_startup(wire_app) -> None:
    contexts, upstream = wire_app(run_on_startup=False, poll_interval_seconds=1)

    # Nothing runs at startup, so any reading comes from an interval tick
    with TestClient(create_app()) as client:
        deadline = time.monotonic() + 5
        response = client.get("/moscow")
        while response.status_code != 200 and time.monotonic() < deadline:
            time.sleep(0.1)
            response = client.get("/moscow")

    assert response.status_code == 200
    assert response.json() == {"name": "moscow", "temperature": -5.3}
    assert upstream.lookups >= 1
    assert_closed(contexts[0])
