"""Upcoming shows across every accessible tour."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.constants import DEFAULT_RESULT_LIMIT
from mastertour_mcp.formatters import format_date, format_location, parse_date, separator
from mastertour_mcp.iteration import count_accessible_tours, iterate_tour_days
from mastertour_mcp.models import ToolResult


def _format_shows_text(
    shows: list[dict[str, Any]],
    *,
    total_found: int,
    limit: int,
    days_ahead: int | None,
    tour_id: str | None,
    tour_count: int,
) -> str:
    lines = ["🎤 Upcoming Shows", separator(), ""]

    if not shows:
        scope = "for this tour" if tour_id else "across your tours"
        lines += [f"ℹ️ No upcoming shows found {scope}.", "", f"📊 Searched {tour_count} tour(s)"]
        return "\n".join(lines)

    if total_found > limit:
        showing = f"Showing next {limit} of {total_found} shows"
    else:
        showing = f"{len(shows)} upcoming show(s)"
    lines.append(f"{showing} (within {days_ahead} days):" if days_ahead else f"{showing}:")
    lines.append("")

    for show in shows:
        location = format_location(show["city"], show["state"], show["country"])
        lines.append(f"📅 {format_date(show['date'])}")
        lines.append(f"   🏟️ {show['venueName']}")
        lines.append(f"   📍 {location or 'Location TBD'}")
        if not tour_id:
            lines.append(f"   🎭 {show['tourLabel']}")
        lines.append(f"   🔑 Day ID: {show['dayId']}")
        lines.append("")

    lines += [
        separator(),
        f"📊 Searched {tour_count} tour(s)",
        "",
        "💡 Use get_today_schedule with a specific date to see full day details.",
    ]
    return "\n".join(lines)


async def get_upcoming_shows_impl(
    client: MasterTourClient,
    *,
    tour_id: str | None = None,
    limit: int = DEFAULT_RESULT_LIMIT,
    days_ahead: int | None = None,
    today: date | None = None,
) -> ToolResult:
    """Show days dated today or later, soonest first.

    Dates are compared without time of day. ``days_ahead`` caps the window
    at ``today + days_ahead`` inclusive.
    """
    if limit < 1:
        raise ValueError("limit must be a positive integer.")
    if days_ahead is not None and days_ahead < 0:
        raise ValueError("daysAhead must be zero or positive.")

    start = today or date.today()
    end = start + timedelta(days=days_ahead) if days_ahead is not None else None

    tour_count = await count_accessible_tours(client, tour_id)
    upcoming: list[tuple[date, dict[str, Any]]] = []

    async for ctx in iterate_tour_days(client, tour_id=tour_id, only_show_days=True):
        parsed = parse_date(ctx.day.day_date)
        if parsed is None:
            continue
        show_date = parsed.date()
        if show_date < start or (end is not None and show_date > end):
            continue
        upcoming.append(
            (
                show_date,
                {
                    "dayId": ctx.day.id,
                    "tourLabel": ctx.tour_label,
                    "date": ctx.day.date,
                    "dayType": ctx.day.day_type or "Show",
                    "venueName": ctx.day.name or "TBD",
                    "city": ctx.day.city,
                    "state": ctx.day.state,
                    "country": ctx.day.country,
                },
            )
        )

    upcoming.sort(key=lambda pair: pair[0])
    shows = [show for _, show in upcoming[:limit]]

    data = {
        "shows": shows,
        "totalFound": len(upcoming),
        "limit": limit,
        "toursSearched": tour_count,
    }
    text = _format_shows_text(
        shows,
        total_found=len(upcoming),
        limit=limit,
        days_ahead=days_ahead,
        tour_id=tour_id,
        tour_count=tour_count,
    )
    return ToolResult(data=data, text=text)
