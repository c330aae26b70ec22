"""Schedule item and day-notes mutations.

Every mutation re-reads the day first: the API requires the record's
current ``syncId`` on writes, and item times must be converted from the
day's timezone to UTC.
"""

from __future__ import annotations

import re
from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient, NotFoundError
from mastertour_mcp.models import Day, ScheduleItem, ToolResult
from mastertour_mcp.timeconv import extract_time, local_to_utc

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _require(value: str | None, name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{name} is required")
    return value.strip()


def _validate_time(value: str | None, name: str) -> None:
    if value is not None and not _TIME_RE.fullmatch(value):
        raise ValueError(f"{name} must be in HH:MM 24-hour format, got {value!r}")


def _require_timezone(day: Day) -> str:
    if not day.timezone:
        raise ValueError(f"Day {day.id} has no timezone; cannot convert schedule times.")
    return day.timezone


def _find_item(day: Day, item_id: str, day_id: str) -> ScheduleItem:
    item = day.find_item(item_id)
    if item is None:
        raise NotFoundError(
            f"Schedule item {item_id} not found in day {day_id}",
            status=404,
            details={"itemId": item_id, "dayId": day_id},
        )
    return item


def _merged_utc(
    supplied: str | None,
    paul_time: str,
    existing_utc: str,
    day: Day,
    timezone: str,
) -> str:
    if supplied is not None:
        return local_to_utc(day.date, supplied, timezone)
    if " " in paul_time:
        # keep the item's own local date; late items can sit past midnight
        return local_to_utc(paul_time.split(" ")[0], extract_time(paul_time), timezone)
    return existing_utc


async def add_schedule_item_impl(
    client: MasterTourClient,
    *,
    day_id: str,
    title: str,
    start_time: str,
    end_time: str | None = None,
    details: str | None = None,
) -> ToolResult:
    """Create an item; times are venue-local ``HH:MM`` and end defaults to start."""
    day_id = _require(day_id, "dayId")
    title = _require(title, "title")
    start_time = _require(start_time, "startTime")
    _validate_time(start_time, "startTime")
    end_time = end_time or None
    _validate_time(end_time, "endTime")

    day = await client.get_day(day_id)
    timezone = _require_timezone(day)
    start_datetime = local_to_utc(day.date, start_time, timezone)
    end_datetime = (
        local_to_utc(day.date, end_time, timezone) if end_time else start_datetime
    )

    created = await client.create_schedule_item(
        parent_day_id=day_id,
        title=title,
        details=details or "",
        start_datetime=start_datetime,
        end_datetime=end_datetime,
    )

    data: dict[str, Any] = {
        "success": True,
        "action": "created",
        "itemId": str(created.get("id", "")),
        "syncId": str(created.get("syncId", "")),
        "dayId": day_id,
        "title": title,
        "startDatetime": start_datetime,
        "endDatetime": end_datetime,
    }
    return ToolResult(data=data, text=f'✅ "{title}" added at {start_time}')


async def update_schedule_item_impl(
    client: MasterTourClient,
    *,
    item_id: str,
    day_id: str,
    title: str | None = None,
    start_time: str | None = None,
    end_time: str | None = None,
    details: str | None = None,
) -> ToolResult:
    """Merge the supplied fields over the current item and write it back."""
    item_id = _require(item_id, "itemId")
    day_id = _require(day_id, "dayId")
    if all(v is None for v in (title, start_time, end_time, details)):
        raise ValueError(
            "At least one update field must be provided (title, startTime, endTime, details)"
        )
    _validate_time(start_time, "startTime")
    _validate_time(end_time, "endTime")

    day = await client.get_day(day_id)
    item = _find_item(day, item_id, day_id)
    timezone = _require_timezone(day)

    merged_title = title if title is not None else item.title
    merged_details = details if details is not None else item.details
    start_datetime = _merged_utc(
        start_time, item.paul_start_time, item.start_datetime, day, timezone
    )
    end_datetime = _merged_utc(end_time, item.paul_end_time, item.end_datetime, day, timezone)

    updated = await client.update_schedule_item(
        item_id,
        sync_id=item.sync_id,
        title=merged_title,
        details=merged_details,
        start_datetime=start_datetime,
        end_datetime=end_datetime,
        is_confirmed=item.is_confirmed,
        is_complete=item.is_complete,
    )

    data: dict[str, Any] = {
        "success": True,
        "action": "updated",
        "itemId": item_id,
        "syncId": str(updated.get("syncId") or item.sync_id),
        "dayId": day_id,
        "title": merged_title,
        "startDatetime": start_datetime,
        "endDatetime": end_datetime,
    }
    return ToolResult(data=data, text=f'✅ "{merged_title}" updated')


async def delete_schedule_item_impl(
    client: MasterTourClient,
    *,
    item_id: str,
    day_id: str,
) -> ToolResult:
    item_id = _require(item_id, "itemId")
    day_id = _require(day_id, "dayId")

    day = await client.get_day(day_id)
    item = _find_item(day, item_id, day_id)

    await client.delete_schedule_item(item_id, sync_id=item.sync_id)

    data: dict[str, Any] = {
        "success": True,
        "action": "deleted",
        "itemId": item_id,
        "syncId": item.sync_id,
        "dayId": day_id,
        "title": item.title,
    }
    return ToolResult(data=data, text=f'🗑️ "{item.title}" deleted')


async def update_day_notes_impl(
    client: MasterTourClient,
    *,
    day_id: str,
    general_notes: str | None = None,
    hotel_notes: str | None = None,
    travel_notes: str | None = None,
) -> ToolResult:
    """Replace the supplied note fields; omitted fields keep their value.

    An empty string clears a field.
    """
    day_id = _require(day_id, "dayId")
    if all(v is None for v in (general_notes, hotel_notes, travel_notes)):
        raise ValueError(
            "At least one note field must be provided (generalNotes, hotelNotes, travelNotes)"
        )

    day = await client.get_day(day_id)
    merged = {
        "generalNotes": general_notes if general_notes is not None else day.general_notes,
        "hotelNotes": hotel_notes if hotel_notes is not None else day.hotel_notes,
        "travelNotes": travel_notes if travel_notes is not None else day.travel_notes,
    }

    await client.update_day_notes(
        day_id,
        general_notes=merged["generalNotes"],
        hotel_notes=merged["hotelNotes"],
        travel_notes=merged["travelNotes"],
        sync_id=day.sync_id,
    )

    updated_fields = [
        name
        for name, value in (
            ("generalNotes", general_notes),
            ("hotelNotes", hotel_notes),
            ("travelNotes", travel_notes),
        )
        if value is not None
    ]
    data: dict[str, Any] = {
        "success": True,
        "dayId": day_id,
        "updatedFields": updated_fields,
        **merged,
    }
    return ToolResult(data=data, text=f"📝 Notes updated for {day.city or day_id}")
