"""Tests for upcoming shows."""

from __future__ import annotations

from datetime import date

import pytest

from mastertour_mcp.clients.mastertour import ApiError
from mastertour_mcp.tools.shows import get_upcoming_shows_impl

TODAY = date(2026, 1, 3)


def _day(day_id: str, day_date: str, day_type: str = "Show Day", **fields):
    return {
        "id": day_id,
        "name": fields.pop("name", f"Venue {day_id}"),
        "dayDate": f"{day_date} 00:00:00",
        "dayType": day_type,
        "city": "Denver",
        "state": "CO",
        "country": "US",
        **fields,
    }


@pytest.fixture()
def shows_client(mock_client, make_tour, make_tour_days):
    mock_client.list_tours.return_value = [make_tour("t1"), make_tour("t2")]
    tours = {
        "t1": make_tour_days(
            "t1",
            [
                _day("past", "2026-01-02"),
                _day("today", "2026-01-03"),
                _day("off", "2026-01-04", day_type="Day Off"),
                _day("later", "2026-02-20"),
            ],
            artist="Band",
            leg="Winter",
        ),
        "t2": make_tour_days(
            "t2",
            [_day("soon", "2026-01-05"), _day("far", "2026-06-01")],
            artist="Other",
            leg="Summer",
        ),
    }

    async def _get_tour_all(tour_id):
        return tours[tour_id]

    mock_client.get_tour_all.side_effect = _get_tour_all
    return mock_client


class TestUpcomingShows:
    async def test_sorted_across_tours_from_today(self, shows_client):
        result = await get_upcoming_shows_impl(shows_client, today=TODAY)

        assert [s["dayId"] for s in result.data["shows"]] == ["today", "soon", "later", "far"]
        assert result.data["totalFound"] == 4
        assert result.data["toursSearched"] == 2
        assert result.data["shows"][1]["tourLabel"] == "Other - Summer"

    async def test_days_ahead_window_is_inclusive(self, shows_client):
        result = await get_upcoming_shows_impl(shows_client, today=TODAY, days_ahead=2)
        assert [s["dayId"] for s in result.data["shows"]] == ["today", "soon"]
        assert "(within 2 days)" in result.text

    async def test_limit_reports_total(self, shows_client):
        result = await get_upcoming_shows_impl(shows_client, today=TODAY, limit=1)
        assert [s["dayId"] for s in result.data["shows"]] == ["today"]
        assert result.data["totalFound"] == 4
        assert "Showing next 1 of 4 shows" in result.text

    async def test_single_tour_hides_tour_label(self, mock_client, make_tour_days):
        mock_client.get_tour_all.return_value = make_tour_days("t1", [_day("d1", "2026-01-10")])

        result = await get_upcoming_shows_impl(mock_client, tour_id="t1", today=TODAY)

        mock_client.list_tours.assert_not_called()
        assert result.data["toursSearched"] == 1
        assert "🎭" not in result.text
        assert "Day ID: d1" in result.text

    async def test_failed_tour_contributes_nothing(self, shows_client):
        original = shows_client.get_tour_all.side_effect

        async def _flaky(tour_id):
            if tour_id == "t2":
                raise ApiError("down", status=503)
            return await original(tour_id)

        shows_client.get_tour_all.side_effect = _flaky
        result = await get_upcoming_shows_impl(shows_client, today=TODAY)
        assert [s["dayId"] for s in result.data["shows"]] == ["today", "later"]

    async def test_none_found(self, mock_client, make_tour_days):
        mock_client.get_tour_all.return_value = make_tour_days("t1", [_day("old", "2025-01-01")])
        result = await get_upcoming_shows_impl(mock_client, tour_id="t1", today=TODAY)
        assert result.data["shows"] == []
        assert "No upcoming shows found for this tour" in result.text

    @pytest.mark.parametrize(("limit", "days_ahead"), [(0, None), (5, -1)])
    async def test_invalid_arguments(self, mock_client, limit, days_ahead):
        with pytest.raises(ValueError):
            await get_upcoming_shows_impl(mock_client, limit=limit, days_ahead=days_ahead)
        mock_client.list_tours.assert_not_called()
