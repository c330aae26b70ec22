"""Master Tour MCP server: FastMCP entry point.

Each tool opens one signed client session, delegates to its ``*_impl``
function and returns ``{"data": ..., "text": ...}``. Failures surface to the
host as ``ToolError`` carrying a readable message.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from mastertour_mcp.clients.mastertour import MasterTourClient, MasterTourClientError
from mastertour_mcp.config import (
    Config,
    ConfigError,
    load_config,
    load_env_file,
    resolve_tour_id,
)
from mastertour_mcp.logging_setup import configure_logging
from mastertour_mcp.models import ToolResult
from mastertour_mcp.tools.contacts import (
    get_company_contacts_impl,
    get_hotel_contacts_impl,
    get_hotel_roomlist_impl,
)
from mastertour_mcp.tools.guests import (
    add_guest_request_impl,
    get_event_guestlist_impl,
    update_guest_request_impl,
)
from mastertour_mcp.tools.notifications import get_push_notifications_impl
from mastertour_mcp.tools.schedule import (
    add_schedule_item_impl,
    delete_schedule_item_impl,
    update_day_notes_impl,
    update_schedule_item_impl,
)
from mastertour_mcp.tools.setlist import get_event_setlist_impl
from mastertour_mcp.tools.shows import get_upcoming_shows_impl
from mastertour_mcp.tools.tours import (
    get_today_schedule_impl,
    get_tour_crew_impl,
    get_tour_events_impl,
    get_tour_hotels_impl,
    list_tours_impl,
)
from mastertour_mcp.tools.venues import get_venue_details_impl, search_past_venues_impl

load_env_file()

mcp = FastMCP("mastertour")
logger = logging.getLogger(__name__)

_config_ref: Config | None = None

ToolCall = Callable[[MasterTourClient, Config], Awaitable[ToolResult]]


def _get_config() -> Config:
    """Lazy config accessor; raises ConfigError when credentials are missing."""
    global _config_ref  # noqa: PLW0603
    if _config_ref is None:
        _config_ref = load_config()
    return _config_ref


def set_config_override(config: Config | None) -> None:
    """Replace (or with ``None`` reset) the process configuration."""
    global _config_ref  # noqa: PLW0603
    _config_ref = config


def _log_tool_error(*, tool_name: str, exc: Exception, user_message: str) -> ToolError:
    if isinstance(exc, MasterTourClientError):
        logger.warning(
            "%s failed: %s (status=%s, server_message=%r)",
            tool_name,
            exc.code,
            exc.status,
            exc.server_message,
        )
    else:
        logger.exception("%s failed unexpectedly", tool_name)
    return ToolError(user_message)


async def _run(tool_name: str, call: ToolCall, *, user_message: str) -> dict[str, Any]:
    try:
        config = _get_config()
        async with MasterTourClient(config.credentials) as client:
            result = await call(client, config)
    except UnicodeError as exc:
        # A ValueError subclass, but never a validation failure
        raise _log_tool_error(tool_name=tool_name, exc=exc, user_message=user_message) from exc
    except (ValueError, ConfigError) as exc:
        raise ToolError(str(exc)) from exc
    except MasterTourClientError as exc:
        raise _log_tool_error(tool_name=tool_name, exc=exc, user_message=exc.message) from exc
    except Exception as exc:
        raise _log_tool_error(tool_name=tool_name, exc=exc, user_message=user_message) from exc
    return result.to_dict()


def _retry_message(action: str) -> str:
    return f"I am having trouble {action} right now. Please try again in a moment."


# ── Tours ───────────────────────────────────────────────────────────


@mcp.tool()
async def list_tours() -> dict[str, Any]:
    """List every tour your Master Tour account can access, with edit/read-only access."""
    return await _run(
        "list_tours",
        lambda client, _config: list_tours_impl(client),
        user_message=_retry_message("listing tours"),
    )


@mcp.tool()
async def get_today_schedule(tour_id: str = "", date: str = "") -> dict[str, Any]:
    """Get the full schedule for a tour day.

    tour_id: defaults to MASTERTOUR_DEFAULT_TOUR_ID
    date: YYYY-MM-DD, defaults to today
    """
    return await _run(
        "get_today_schedule",
        lambda client, config: get_today_schedule_impl(
            client,
            tour_id=resolve_tour_id(tour_id, config),
            date_str=date or None,
        ),
        user_message=_retry_message("loading the schedule"),
    )


@mcp.tool()
async def get_tour_events(tour_id: str = "", shows_only: bool = False) -> dict[str, Any]:
    """List every date on a tour; set shows_only to hide off, travel and rehearsal days."""
    return await _run(
        "get_tour_events",
        lambda client, config: get_tour_events_impl(
            client, tour_id=resolve_tour_id(tour_id, config), shows_only=shows_only
        ),
        user_message=_retry_message("loading tour dates"),
    )


@mcp.tool()
async def get_tour_hotels(tour_id: str = "") -> dict[str, Any]:
    """Hotel bookings and hotel notes for each day of a tour."""
    return await _run(
        "get_tour_hotels",
        lambda client, config: get_tour_hotels_impl(
            client, tour_id=resolve_tour_id(tour_id, config)
        ),
        user_message=_retry_message("loading hotel information"),
    )


@mcp.tool()
async def get_tour_crew(tour_id: str = "") -> dict[str, Any]:
    """Crew members on a tour, grouped by role."""
    return await _run(
        "get_tour_crew",
        lambda client, config: get_tour_crew_impl(
            client, tour_id=resolve_tour_id(tour_id, config)
        ),
        user_message=_retry_message("loading the crew list"),
    )


# ── Venues and shows ────────────────────────────────────────────────


@mcp.tool()
async def search_past_venues(query: str, tour_id: str = "", limit: int = 10) -> dict[str, Any]:
    """Search venues played on your tours by name or city.

    Leave tour_id empty to search every accessible tour.
    """
    return await _run(
        "search_past_venues",
        lambda client, _config: search_past_venues_impl(
            client, query=query, tour_id=tour_id or None, limit=limit
        ),
        user_message=_retry_message("searching venues"),
    )


@mcp.tool()
async def get_venue_details(venue_id: str) -> dict[str, Any]:
    """Full venue record: address, capacity, production, facilities, crew and contacts."""
    return await _run(
        "get_venue_details",
        lambda client, _config: get_venue_details_impl(client, venue_id=venue_id),
        user_message=_retry_message("loading venue details"),
    )


@mcp.tool()
async def get_upcoming_shows(
    tour_id: str = "",
    limit: int = 10,
    days_ahead: int | None = None,
) -> dict[str, Any]:
    """Upcoming show days, soonest first, across all tours unless tour_id is given."""
    return await _run(
        "get_upcoming_shows",
        lambda client, _config: get_upcoming_shows_impl(
            client, tour_id=tour_id or None, limit=limit, days_ahead=days_ahead
        ),
        user_message=_retry_message("loading upcoming shows"),
    )


# ── Schedule mutations ──────────────────────────────────────────────


@mcp.tool()
async def add_schedule_item(
    day_id: str,
    title: str,
    start_time: str,
    end_time: str = "",
    details: str = "",
) -> dict[str, Any]:
    """Add an item to a day's schedule.

    start_time / end_time: venue-local HH:MM (24-hour); end defaults to start.
    """
    return await _run(
        "add_schedule_item",
        lambda client, _config: add_schedule_item_impl(
            client,
            day_id=day_id,
            title=title,
            start_time=start_time,
            end_time=end_time or None,
            details=details or None,
        ),
        user_message=_retry_message("adding that schedule item"),
    )


@mcp.tool()
async def update_schedule_item(
    item_id: str,
    day_id: str,
    title: str | None = None,
    start_time: str | None = None,
    end_time: str | None = None,
    details: str | None = None,
) -> dict[str, Any]:
    """Update a schedule item; omitted fields keep their current values."""
    return await _run(
        "update_schedule_item",
        lambda client, _config: update_schedule_item_impl(
            client,
            item_id=item_id,
            day_id=day_id,
            title=title,
            start_time=start_time,
            end_time=end_time,
            details=details,
        ),
        user_message=_retry_message("updating that schedule item"),
    )


@mcp.tool()
async def delete_schedule_item(item_id: str, day_id: str) -> dict[str, Any]:
    """Delete a schedule item from a day."""
    return await _run(
        "delete_schedule_item",
        lambda client, _config: delete_schedule_item_impl(
            client, item_id=item_id, day_id=day_id
        ),
        user_message=_retry_message("deleting that schedule item"),
    )


@mcp.tool()
async def update_day_notes(
    day_id: str,
    general_notes: str | None = None,
    hotel_notes: str | None = None,
    travel_notes: str | None = None,
) -> dict[str, Any]:
    """Replace a day's general, hotel or travel notes. An empty string clears a field."""
    return await _run(
        "update_day_notes",
        lambda client, _config: update_day_notes_impl(
            client,
            day_id=day_id,
            general_notes=general_notes,
            hotel_notes=hotel_notes,
            travel_notes=travel_notes,
        ),
        user_message=_retry_message("updating day notes"),
    )


# ── Guest lists, setlists, contacts ─────────────────────────────────


@mcp.tool()
async def get_event_guestlist(event_id: str) -> dict[str, Any]:
    """Guest list for an event, grouped by request status."""
    return await _run(
        "get_event_guestlist",
        lambda client, _config: get_event_guestlist_impl(client, event_id=event_id),
        user_message=_retry_message("loading the guest list"),
    )


@mcp.tool()
async def add_guest_request(
    event_id: str,
    name: str,
    tickets: int = 1,
    notes: str | None = None,
    will_call: bool | None = None,
) -> dict[str, Any]:
    """Add a guest to an event's guest list."""
    return await _run(
        "add_guest_request",
        lambda client, _config: add_guest_request_impl(
            client,
            event_id=event_id,
            name=name,
            tickets=tickets,
            notes=notes,
            will_call=will_call,
        ),
        user_message=_retry_message("adding that guest"),
    )


@mcp.tool()
async def update_guest_request(
    guest_list_id: str,
    name: str | None = None,
    tickets: int | None = None,
    status: str | None = None,
    notes: str | None = None,
    will_call: bool | None = None,
) -> dict[str, Any]:
    """Update a guest list request; only supplied fields change."""
    return await _run(
        "update_guest_request",
        lambda client, _config: update_guest_request_impl(
            client,
            guest_list_id=guest_list_id,
            name=name,
            tickets=tickets,
            status=status,
            notes=notes,
            will_call=will_call,
        ),
        user_message=_retry_message("updating that guest request"),
    )


@mcp.tool()
async def get_event_setlist(event_id: str) -> dict[str, Any]:
    """Setlist for an event with main set, encore and estimated duration."""
    return await _run(
        "get_event_setlist",
        lambda client, _config: get_event_setlist_impl(client, event_id=event_id),
        user_message=_retry_message("loading the setlist"),
    )


@mcp.tool()
async def get_hotel_roomlist(hotel_id: str) -> dict[str, Any]:
    """Room assignments for a hotel."""
    return await _run(
        "get_hotel_roomlist",
        lambda client, _config: get_hotel_roomlist_impl(client, hotel_id=hotel_id),
        user_message=_retry_message("loading the room list"),
    )


@mcp.tool()
async def get_hotel_contacts(hotel_id: str) -> dict[str, Any]:
    """Contacts on file for a hotel."""
    return await _run(
        "get_hotel_contacts",
        lambda client, _config: get_hotel_contacts_impl(client, hotel_id=hotel_id),
        user_message=_retry_message("loading hotel contacts"),
    )


@mcp.tool()
async def get_company_contacts(company_id: str) -> dict[str, Any]:
    """Contacts on file for a company such as a promoter or agency."""
    return await _run(
        "get_company_contacts",
        lambda client, _config: get_company_contacts_impl(client, company_id=company_id),
        user_message=_retry_message("loading company contacts"),
    )


@mcp.tool()
async def get_push_notifications(limit: int | None = None, since: str = "") -> dict[str, Any]:
    """Recent push notifications; since accepts an ISO date or datetime."""
    return await _run(
        "get_push_notifications",
        lambda client, _config: get_push_notifications_impl(
            client, limit=limit, since=since or None
        ),
        user_message=_retry_message("loading notifications"),
    )


def main() -> None:
    configure_logging()
    try:
        _get_config()
    except ConfigError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
    logger.info("Starting Master Tour MCP server")
    mcp.run()


if __name__ == "__main__":
    main()
