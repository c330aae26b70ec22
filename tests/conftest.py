"""Shared test fixtures: fake client, day payload factories, config injection."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.config import Config
from mastertour_mcp.models import Credentials, Day, Tour, TourDays
from mastertour_mcp.server import set_config_override


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials(consumer_key="test-key", consumer_secret="test-secret")


@pytest.fixture()
def config(credentials: Credentials) -> Config:
    return Config(credentials=credentials, default_tour_id=None)


@pytest.fixture(autouse=True)
def _inject_config(config: Config):
    """Every test sees the same in-memory configuration instead of the environment."""
    set_config_override(config)
    yield
    set_config_override(None)


@pytest.fixture()
def mock_client() -> AsyncMock:
    """A MasterTourClient whose every API method is an AsyncMock."""
    return AsyncMock(spec=MasterTourClient)


def day_payload(
    *,
    day_id: str = "day-123",
    day_date: str = "2026-01-04",
    timezone: str = "America/Los_Angeles",
    schedule_items: list[dict[str, Any]] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": day_id,
        "tourId": "tour-123",
        "name": "Test Day",
        "dayDate": f"{day_date} 00:00:00",
        "timeZone": timezone,
        "dayType": "show",
        "city": "Los Angeles",
        "state": "CA",
        "country": "USA",
        "scheduleItems": schedule_items or [],
        "generalNotes": "",
        "hotelNotes": "",
        "travelNotes": "",
        "syncId": "day-sync-1",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_day() -> Callable[..., Day]:
    def _make(**kwargs: Any) -> Day:
        return Day.from_api(day_payload(**kwargs))

    return _make


@pytest.fixture()
def make_tour_days() -> Callable[..., TourDays]:
    def _make(
        tour_id: str,
        days: list[dict[str, Any]],
        *,
        artist: str = "Test Artist",
        leg: str = "Spring Leg",
    ) -> TourDays:
        return TourDays.from_api(
            {
                "tour": {"id": tour_id, "artistName": artist, "legName": leg},
                "days": days,
            }
        )

    return _make


@pytest.fixture()
def make_tour() -> Callable[..., Tour]:
    def _make(tour_id: str, **fields: Any) -> Tour:
        return Tour.from_api({"tourId": tour_id, **fields})

    return _make


@pytest.fixture()
def make_response() -> Callable[..., AsyncMock]:
    """Build an ``async with session.request(...)`` context returning ``payload``."""

    def _make(payload: Any, status: int = 200) -> AsyncMock:
        ctx = AsyncMock()
        ctx.__aenter__ = AsyncMock(return_value=ctx)
        ctx.__aexit__ = AsyncMock(return_value=False)
        ctx.status = status
        body = payload if isinstance(payload, str) else json.dumps(payload)
        ctx.text = AsyncMock(return_value=body)
        return ctx

    return _make


@pytest.fixture()
def api_client(credentials: Credentials) -> MasterTourClient:
    """A real client with a MagicMock session installed in place of aiohttp's."""
    client = MasterTourClient(credentials)
    client.session = MagicMock()
    return client
