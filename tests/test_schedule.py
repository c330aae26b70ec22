"""Tests for schedule item and day-notes mutations."""

from __future__ import annotations

import pytest

from mastertour_mcp.clients.mastertour import NotFoundError, PermissionDeniedError
from mastertour_mcp.tools.schedule import (
    add_schedule_item_impl,
    delete_schedule_item_impl,
    update_day_notes_impl,
    update_schedule_item_impl,
)

SOUNDCHECK = {
    "id": "item-1",
    "syncId": "item-sync-1",
    "title": "Soundcheck",
    "details": "Full band",
    "startDatetime": "2026-01-04 23:00:00",
    "endDatetime": "2026-01-05 00:00:00",
    "paulStartTime": "2026-01-04 15:00:00",
    "paulEndTime": "2026-01-04 16:00:00",
    "isConfirmed": True,
    "isComplete": False,
}


class TestAddScheduleItem:
    async def test_converts_local_time_to_utc(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day()
        mock_client.create_schedule_item.return_value = {"id": "item-9", "syncId": "s-9"}

        result = await add_schedule_item_impl(
            mock_client, day_id="day-123", title="Doors", start_time="14:00"
        )

        kwargs = mock_client.create_schedule_item.await_args.kwargs
        assert kwargs["parent_day_id"] == "day-123"
        assert kwargs["start_datetime"] == "2026-01-04 22:00:00"
        assert kwargs["end_datetime"] == "2026-01-04 22:00:00"
        assert kwargs["details"] == ""
        assert result.data["itemId"] == "item-9"
        assert result.data["syncId"] == "s-9"
        assert result.text == '✅ "Doors" added at 14:00'

    async def test_end_time_and_other_timezone(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(
            day_date="2024-07-15", timezone="America/New_York"
        )
        mock_client.create_schedule_item.return_value = {"id": "x"}

        await add_schedule_item_impl(
            mock_client,
            day_id="day-123",
            title="Show",
            start_time="21:00",
            end_time="22:30",
            details="Headline set",
        )

        kwargs = mock_client.create_schedule_item.await_args.kwargs
        assert kwargs["start_datetime"] == "2024-07-16 01:00:00"
        assert kwargs["end_datetime"] == "2024-07-16 02:30:00"
        assert kwargs["details"] == "Headline set"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"day_id": "", "title": "Doors", "start_time": "14:00"},
            {"day_id": "day-1", "title": "  ", "start_time": "14:00"},
            {"day_id": "day-1", "title": "Doors", "start_time": ""},
            {"day_id": "day-1", "title": "Doors", "start_time": "2pm"},
            {"day_id": "day-1", "title": "Doors", "start_time": "14:00", "end_time": "24:00"},
        ],
    )
    async def test_validation_before_network(self, mock_client, kwargs):
        with pytest.raises(ValueError):
            await add_schedule_item_impl(mock_client, **kwargs)
        mock_client.get_day.assert_not_called()


class TestUpdateScheduleItem:
    async def test_requires_a_field_before_network(self, mock_client):
        with pytest.raises(ValueError, match="At least one update field"):
            await update_schedule_item_impl(mock_client, item_id="item-1", day_id="day-123")
        mock_client.get_day.assert_not_called()

    async def test_title_only_preserves_times_and_details(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(schedule_items=[SOUNDCHECK])
        mock_client.update_schedule_item.return_value = {"syncId": "item-sync-2"}

        result = await update_schedule_item_impl(
            mock_client, item_id="item-1", day_id="day-123", title="Line check"
        )

        args = mock_client.update_schedule_item.await_args
        assert args.args == ("item-1",)
        assert args.kwargs == {
            "sync_id": "item-sync-1",
            "title": "Line check",
            "details": "Full band",
            "start_datetime": "2026-01-04 23:00:00",
            "end_datetime": "2026-01-05 00:00:00",
            "is_confirmed": True,
            "is_complete": False,
        }
        assert result.data["syncId"] == "item-sync-2"

    async def test_new_start_time_is_converted(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(schedule_items=[SOUNDCHECK])
        mock_client.update_schedule_item.return_value = {}

        result = await update_schedule_item_impl(
            mock_client, item_id="item-1", day_id="day-123", start_time="14:30"
        )

        kwargs = mock_client.update_schedule_item.await_args.kwargs
        assert kwargs["start_datetime"] == "2026-01-04 22:30:00"
        assert kwargs["end_datetime"] == "2026-01-05 00:00:00"
        assert kwargs["title"] == "Soundcheck"
        assert result.data["syncId"] == "item-sync-1"

    async def test_empty_details_clears(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(schedule_items=[SOUNDCHECK])
        mock_client.update_schedule_item.return_value = {}

        await update_schedule_item_impl(
            mock_client, item_id="item-1", day_id="day-123", details=""
        )

        assert mock_client.update_schedule_item.await_args.kwargs["details"] == ""

    async def test_missing_item_is_not_found(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(schedule_items=[SOUNDCHECK])

        with pytest.raises(NotFoundError) as exc_info:
            await update_schedule_item_impl(
                mock_client, item_id="item-404", day_id="day-123", title="x"
            )

        assert exc_info.value.status == 404
        mock_client.update_schedule_item.assert_not_called()

    async def test_permission_error_propagates(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(schedule_items=[SOUNDCHECK])
        mock_client.update_schedule_item.side_effect = PermissionDeniedError(
            "no write access", status=403, server_message="tour permission required"
        )

        with pytest.raises(PermissionDeniedError):
            await update_schedule_item_impl(
                mock_client, item_id="item-1", day_id="day-123", title="x"
            )


class TestDeleteScheduleItem:
    async def test_deletes_with_current_sync_id(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(schedule_items=[SOUNDCHECK])

        result = await delete_schedule_item_impl(mock_client, item_id="item-1", day_id="day-123")

        mock_client.delete_schedule_item.assert_awaited_once_with("item-1", sync_id="item-sync-1")
        assert result.data["title"] == "Soundcheck"
        assert result.text == '🗑️ "Soundcheck" deleted'

    async def test_missing_item(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day()
        with pytest.raises(NotFoundError):
            await delete_schedule_item_impl(mock_client, item_id="item-1", day_id="day-123")
        mock_client.delete_schedule_item.assert_not_called()


class TestUpdateDayNotes:
    async def test_requires_a_note_before_network(self, mock_client):
        with pytest.raises(ValueError, match="At least one note field"):
            await update_day_notes_impl(mock_client, day_id="day-123")
        mock_client.get_day.assert_not_called()

    async def test_merges_and_forwards_day_sync_id(self, mock_client, make_day):
        mock_client.get_day.return_value = make_day(
            generalNotes="Load in 9am", hotelNotes="Hilton", travelNotes="Bus"
        )

        result = await update_day_notes_impl(
            mock_client, day_id="day-123", hotel_notes="Marriott", travel_notes=""
        )

        mock_client.update_day_notes.assert_awaited_once_with(
            "day-123",
            general_notes="Load in 9am",
            hotel_notes="Marriott",
            travel_notes="",
            sync_id="day-sync-1",
        )
        assert result.data["updatedFields"] == ["hotelNotes", "travelNotes"]
        assert result.text == "📝 Notes updated for Los Angeles"
