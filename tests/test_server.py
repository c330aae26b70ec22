"""Tests for the FastMCP tool wrappers."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from mastertour_mcp import server
from mastertour_mcp.clients.mastertour import ApiError, AuthenticationError
from mastertour_mcp.config import Config
from mastertour_mcp.models import Credentials, Tour


@pytest.fixture()
def client_factory(monkeypatch, mock_client):
    """Route ``MasterTourClient(...)`` in the server to the shared mock client."""
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    monkeypatch.setattr(server, "MasterTourClient", factory)
    return factory


class TestToolWrappers:
    async def test_returns_data_and_text(self, client_factory, mock_client, credentials):
        mock_client.list_tours.return_value = [Tour("t1", "Org", "Band", "Leg", "255")]

        result = await server.list_tours()

        client_factory.assert_called_once_with(credentials)
        assert set(result) == {"data", "text"}
        assert result["data"]["tours"][0]["tourId"] == "t1"
        client_factory.return_value.__aexit__.assert_awaited()

    async def test_default_tour_id_used(self, client_factory, mock_client, credentials):
        server.set_config_override(Config(credentials, default_tour_id="tour-default"))
        mock_client.get_tour_crew.return_value = []

        await server.get_tour_crew()

        mock_client.get_tour_crew.assert_awaited_once_with("tour-default")

    async def test_missing_tour_id_is_tool_error(self, client_factory, mock_client):
        with pytest.raises(ToolError, match="MASTERTOUR_DEFAULT_TOUR_ID"):
            await server.get_tour_events()
        mock_client.get_tour_events.assert_not_called()

    async def test_validation_error_message_preserved(self, client_factory):
        with pytest.raises(ToolError, match="at least 2 characters"):
            await server.search_past_venues(query="x")

    async def test_client_error_uses_readable_message(self, client_factory, mock_client, caplog):
        mock_client.list_tours.side_effect = AuthenticationError(
            "Master Tour rejected the API credentials.",
            status=401,
            server_message="Invalid OAuth signature",
        )

        with caplog.at_level(logging.WARNING, logger="mastertour_mcp.server"):
            with pytest.raises(ToolError, match="rejected the API credentials"):
                await server.list_tours()

        assert "AUTHENTICATION_FAILED" in caplog.text

    async def test_unexpected_error_is_generic(self, client_factory, mock_client, caplog):
        mock_client.get_event_setlist.side_effect = KeyError("boom")

        with caplog.at_level(logging.ERROR, logger="mastertour_mcp.server"):
            with pytest.raises(ToolError, match="Please try again"):
                await server.get_event_setlist(event_id="ev-1")

        assert "get_event_setlist failed unexpectedly" in caplog.text

    async def test_decode_error_is_not_reported_as_validation(
        self, client_factory, mock_client, caplog
    ):
        mock_client.get_tour_crew.side_effect = UnicodeDecodeError(
            "utf-8", b"\xff", 0, 1, "invalid start byte"
        )

        with caplog.at_level(logging.ERROR, logger="mastertour_mcp.server"):
            with pytest.raises(ToolError, match="Please try again") as exc_info:
                await server.get_tour_crew(tour_id="t1")

        assert "codec" not in str(exc_info.value)
        assert "get_tour_crew failed unexpectedly" in caplog.text

    async def test_schedule_wrapper_passes_optional_fields(self, client_factory, mock_client, make_day):
        mock_client.get_day.return_value = make_day()
        mock_client.create_schedule_item.return_value = {"id": "i-1"}

        result = await server.add_schedule_item(day_id="day-123", title="Doors", start_time="19:00")

        kwargs = mock_client.create_schedule_item.await_args.kwargs
        assert kwargs["end_datetime"] == kwargs["start_datetime"] == "2026-01-05 03:00:00"
        assert result["data"]["itemId"] == "i-1"

    async def test_api_error_surfaces_status(self, client_factory, mock_client):
        mock_client.get_push_notifications.side_effect = ApiError(
            "Master Tour request failed (HTTP 500): down", status=500
        )
        with pytest.raises(ToolError, match="HTTP 500"):
            await server.get_push_notifications()


class TestConfigLoading:
    async def test_missing_credentials_is_tool_error(self, client_factory, monkeypatch):
        server.set_config_override(None)
        monkeypatch.delenv("MASTERTOUR_KEY", raising=False)
        monkeypatch.delenv("MASTERTOUR_SECRET", raising=False)

        with pytest.raises(ToolError, match="MASTERTOUR_KEY"):
            await server.list_tours()
        client_factory.assert_not_called()

    def test_main_exits_without_credentials(self, monkeypatch):
        server.set_config_override(None)
        monkeypatch.delenv("MASTERTOUR_KEY", raising=False)
        monkeypatch.delenv("MASTERTOUR_SECRET", raising=False)
        run = MagicMock()
        monkeypatch.setattr(server.mcp, "run", run)

        with pytest.raises(SystemExit):
            server.main()
        run.assert_not_called()

    def test_main_runs_server(self, monkeypatch):
        server.set_config_override(Config(Credentials("k", "s")))
        run = MagicMock()
        monkeypatch.setattr(server.mcp, "run", run)

        server.main()

        run.assert_called_once_with()
