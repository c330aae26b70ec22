"""Tour-level read tools: tour list, daily schedule, dates, hotels and crew."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.formatters import format_date, format_location, plural, separator
from mastertour_mcp.models import Day, Tour, TourDays, ToolResult

_CREW_TITLE_ORDER = [
    "Tour Manager",
    "Production Manager",
    "Musician",
    "FOH Engineer",
    "Monitor Engineer",
]


def _require_tour_id(tour_id: str | None) -> str:
    if not tour_id or not tour_id.strip():
        raise ValueError("tourId is required")
    return tour_id.strip()


def _tour_heading(tour_data: TourDays) -> str:
    return f"🎸 {tour_data.artist_name} - {tour_data.leg_name}"


# ── list_tours ──────────────────────────────────────────────────────


def _format_tours(tours: list[Tour]) -> str:
    if not tours:
        return "📋 No tours available for your account."

    by_org: dict[str, list[Tour]] = {}
    for tour in tours:
        by_org.setdefault(tour.organization_name or tour.artist_name, []).append(tour)

    lines = ["🎸 Available Tours", ""]
    for org, org_tours in by_org.items():
        lines += [f"📁 {org}", separator(40)]
        for tour in org_tours:
            access = "✏️ Edit Access" if tour.can_edit else "👁️ Read Only"
            lines += [
                f"  🎤 {tour.leg_name or 'Untitled Leg'}",
                f"     ID: {tour.tour_id}",
                f"     {access}",
                "",
            ]

    lines += [
        separator(40),
        f"Total: {len(tours)} tour(s)",
        "",
        "💡 Tip: Use a Tour ID with get_today_schedule to view a specific tour.",
    ]
    return "\n".join(lines)


async def list_tours_impl(client: MasterTourClient) -> ToolResult:
    """Every tour the credentials can see, grouped by organization."""
    tours = await client.list_tours()
    data = {
        "tours": [
            {
                "tourId": t.tour_id,
                "organizationName": t.organization_name,
                "artistName": t.artist_name,
                "legName": t.leg_name,
                "permissionLevel": t.permission_level,
                "canEdit": t.can_edit,
            }
            for t in tours
        ],
        "total": len(tours),
    }
    return ToolResult(data=data, text=_format_tours(tours))


# ── get_today_schedule ──────────────────────────────────────────────


def _clock(paul_time: str) -> str:
    """``2026-02-06 14:00:00`` -> ``2:00 PM``."""
    try:
        parsed = datetime.strptime(paul_time, "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return paul_time or "TBD"
    return parsed.strftime("%I:%M %p").lstrip("0")


def _format_schedule(day: Day) -> str:
    try:
        parsed = datetime.strptime(day.date, "%Y-%m-%d")
        heading_date = f"{parsed:%b} {parsed.day}, {parsed.year}"
    except ValueError:
        heading_date = day.day_date

    lines = [
        f"📅 {heading_date} - {day.name}",
        f"📍 {format_location(day.city, day.state)} ({day.timezone})",
    ]
    if day.day_type:
        lines.append(f"🎸 {day.day_type}")
    lines.append("")

    if not day.schedule_items:
        lines.append("No scheduled items for this day.")
    else:
        lines.append("Schedule:")
        for item in day.schedule_items:
            lines.append(f"• {_clock(item.paul_start_time)} - {item.title}")
    return "\n".join(lines)


async def get_today_schedule_impl(
    client: MasterTourClient,
    *,
    tour_id: str,
    date_str: str | None = None,
    today: date | None = None,
) -> ToolResult:
    """The full schedule for one tour day (today when no date is given).

    A date with no day on the tour is a normal answer, not an error.
    """
    tour_id = _require_tour_id(tour_id)
    target = date_str or (today or date.today()).isoformat()

    summary = await client.get_tour_summary(tour_id, target)
    if not summary:
        return ToolResult(
            data={"found": False, "tourId": tour_id, "date": target},
            text=(
                f"No schedule found for {target}. "
                "The tour may not have activity on this date."
            ),
        )

    day_id = str(summary[0].get("id", ""))
    day = await client.get_day(day_id)

    data = {
        "found": True,
        "tourId": tour_id,
        "date": target,
        "day": {
            "id": day.id,
            "syncId": day.sync_id,
            "name": day.name,
            "date": day.date,
            "timeZone": day.timezone,
            "dayType": day.day_type,
            "city": day.city,
            "state": day.state,
            "country": day.country,
            "generalNotes": day.general_notes,
            "hotelNotes": day.hotel_notes,
            "travelNotes": day.travel_notes,
            "scheduleItems": [item.to_output() for item in day.schedule_items],
        },
    }
    return ToolResult(data=data, text=_format_schedule(day))


# ── get_tour_events ─────────────────────────────────────────────────


def _day_type_emoji(day_type: str) -> str:
    kind = day_type.lower()
    if "show" in kind:
        return "🎸"
    if "off" in kind:
        return "😴"
    if "travel" in kind:
        return "✈️"
    if "rehearsal" in kind:
        return "🎵"
    if "press" in kind or "promo" in kind:
        return "📺"
    return "📅"


def _format_event_day(day: Day) -> list[str]:
    day_type = day.day_type or "Show Day"
    lines = [f"{_day_type_emoji(day_type)} {format_date(day.day_date)}", f"   {day_type}"]
    if day.name:
        lines.append(f"   🏟️ {day.name}")
    location = format_location(day.city, day.state, day.country)
    if location:
        lines.append(f"   📍 {location}")
    lines.append(f"   🆔 Day ID: {day.id}")
    return lines


async def get_tour_events_impl(
    client: MasterTourClient,
    *,
    tour_id: str,
    shows_only: bool = False,
) -> ToolResult:
    tour_id = _require_tour_id(tour_id)
    tour_data = await client.get_tour_events(tour_id)
    days = tour_data.days
    selected = [d for d in days if d.is_show_day] if shows_only else days

    lines = ["📅 Tour Dates", _tour_heading(tour_data), separator(), ""]
    if not selected:
        lines.append("ℹ️ No events found for this tour.")
    else:
        for day in selected:
            lines += _format_event_day(day)
            lines.append("")
        lines += [separator(), f"Total: {len(selected)} date(s)"]
        if not shows_only:
            show_count = sum(1 for d in days if d.is_show_day)
            if show_count != len(days):
                lines.append(f"Shows: {show_count}")

    data = {
        "tourId": tour_id,
        "artistName": tour_data.artist_name,
        "legName": tour_data.leg_name,
        "days": [
            {
                "dayId": d.id,
                "date": d.date,
                "dayType": d.day_type,
                "name": d.name,
                "city": d.city,
                "state": d.state,
                "country": d.country,
            }
            for d in selected
        ],
        "total": len(selected),
        "showCount": sum(1 for d in days if d.is_show_day),
    }
    return ToolResult(data=data, text="\n".join(lines))


# ── get_tour_hotels ─────────────────────────────────────────────────


def _has_hotel_info(day: dict[str, Any]) -> bool:
    return bool(day.get("hotels")) or bool(str(day.get("hotelNotes") or "").strip())


def _format_hotel_day(day: dict[str, Any]) -> list[str]:
    lines = [
        f"📅 {format_date(str(day.get('dayDate') or ''), with_year=False)} - {day.get('name') or ''}",
        f"   📍 {format_location(day.get('city') or '', day.get('state') or '')}",
    ]
    hotels = [h for h in day.get("hotels") or [] if isinstance(h, dict)]
    if hotels:
        for hotel in hotels:
            lines.append(f"   🏨 {hotel.get('name') or 'Hotel'}")
            if hotel.get("address"):
                lines.append(f"      {hotel['address']}, {hotel.get('city') or ''}")
            if hotel.get("checkIn") or hotel.get("checkOut"):
                lines.append(
                    f"      Check-in: {hotel.get('checkIn') or 'N/A'} | "
                    f"Check-out: {hotel.get('checkOut') or 'N/A'}"
                )
            if hotel.get("confirmationNumber"):
                lines.append(f"      Confirmation: {hotel['confirmationNumber']}")
    else:
        lines.append(f"   📝 {str(day.get('hotelNotes')).strip()}")
    return lines


async def get_tour_hotels_impl(client: MasterTourClient, *, tour_id: str) -> ToolResult:
    """Days carrying hotel bookings or hotel notes."""
    tour_id = _require_tour_id(tour_id)
    payload = await client.get_tour_hotels(tour_id)
    tour = payload.get("tour") if isinstance(payload.get("tour"), dict) else {}
    days = [d for d in payload.get("days") or [] if isinstance(d, dict)]
    with_info = [d for d in days if _has_hotel_info(d)]

    lines = [
        "🏨 Hotel Information",
        f"🎸 {tour.get('artistName') or ''} - {tour.get('legName') or ''}",
        separator(),
        "",
    ]
    if not with_info:
        lines += [
            "ℹ️ No hotel information found for this tour.",
            "",
            "💡 Hotel notes can be added to individual days in Master Tour.",
        ]
    else:
        for day in with_info:
            lines += _format_hotel_day(day)
            lines.append("")
        lines += [separator(), f"Total: {len(with_info)} day(s) with hotel info"]

    data = {
        "tourId": tour_id,
        "days": [
            {
                "dayId": str(d.get("id", "")),
                "date": str(d.get("dayDate") or "").split(" ")[0],
                "name": d.get("name") or "",
                "city": d.get("city") or "",
                "state": d.get("state") or "",
                "hotels": [h for h in d.get("hotels") or [] if isinstance(h, dict)],
                "hotelNotes": d.get("hotelNotes") or "",
            }
            for d in with_info
        ],
        "total": len(with_info),
    }
    return ToolResult(data=data, text="\n".join(lines))


# ── get_tour_crew ───────────────────────────────────────────────────


def _display_name(member: dict[str, Any]) -> str:
    preferred = str(member.get("preferredName") or "").strip()
    if preferred:
        return preferred
    return f"{member.get('firstName') or ''} {member.get('lastName') or ''}".strip()


def _title_sort_key(title: str) -> tuple[int, int, str]:
    if title in _CREW_TITLE_ORDER:
        return (0, _CREW_TITLE_ORDER.index(title), "")
    return (1, 0, title.lower())


async def get_tour_crew_impl(client: MasterTourClient, *, tour_id: str) -> ToolResult:
    """Crew grouped by title, well-known roles first."""
    tour_id = _require_tour_id(tour_id)
    crew = await client.get_tour_crew(tour_id)

    lines = ["👥 Tour Crew", separator(), ""]
    by_title: dict[str, list[dict[str, Any]]] = {}
    for member in crew:
        by_title.setdefault(member.get("title") or "Other", []).append(member)

    if not crew:
        lines.append("ℹ️ No crew members found for this tour.")
    else:
        for title in sorted(by_title, key=_title_sort_key):
            lines.append(f"🎭 {title}")
            for member in by_title[title]:
                lines.append(f"  👤 {_display_name(member)}")
                if member.get("company"):
                    lines.append(f"     🏢 {member['company']}")
                if member.get("email"):
                    lines.append(f"     ✉️ {member['email']}")
                if member.get("phone"):
                    lines.append(f"     📱 {member['phone']}")
                lines.append("")
        lines += [separator(), f"Total: {plural(len(crew), 'crew member')}"]

    data = {
        "tourId": tour_id,
        "crew": [
            {
                "name": _display_name(m),
                "title": m.get("title") or "Other",
                "company": m.get("company") or "",
                "email": m.get("email") or "",
                "phone": m.get("phone") or "",
            }
            for m in crew
        ],
        "groups": {title: len(members) for title, members in by_title.items()},
        "total": len(crew),
    }
    return ToolResult(data=data, text="\n".join(lines))
