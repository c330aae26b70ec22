"""Venue tools: search past venues and venue details.

Master Tour has no venue endpoint. Venues are rebuilt per call from the
events attached to each day, keyed by ``venueId``; nothing is cached
between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.constants import DEFAULT_RESULT_LIMIT, MIN_VENUE_QUERY_LENGTH
from mastertour_mcp.formatters import (
    format_contacts,
    format_field,
    normalize_for_search,
    parse_date,
    separator,
)
from mastertour_mcp.iteration import (
    count_accessible_tours,
    get_day_events_safe,
    iterate_tour_days,
)
from mastertour_mcp.models import DayEvent, ToolResult


@dataclass
class _VenueSummary:
    venue_id: str
    name: str
    city: str
    state: str
    country: str
    capacity: str
    venue_type: str
    last_used: str
    tours: list[str] = field(default_factory=list)

    @property
    def tour_count(self) -> int:
        return len(self.tours)


def _is_later(candidate: str, current: str) -> bool:
    new, old = parse_date(candidate), parse_date(current)
    if new is None:
        return False
    return old is None or new > old


def _upsert_venue(
    venues: dict[str, _VenueSummary],
    event: DayEvent,
    tour_label: str,
    day_date: str,
) -> None:
    if not event.venue_id or not event.venue_name:
        return

    existing = venues.get(event.venue_id)
    if existing is None:
        venues[event.venue_id] = _VenueSummary(
            venue_id=event.venue_id,
            name=event.venue_name,
            city=event.city,
            state=event.state,
            country=event.country,
            capacity=event.capacity,
            venue_type=event.venue_type,
            last_used=day_date,
            tours=[tour_label],
        )
        return

    if _is_later(day_date, existing.last_used):
        existing.last_used = day_date
    if tour_label not in existing.tours:
        existing.tours.append(tour_label)


def _matches_query(venue: _VenueSummary, query: str) -> bool:
    """Every query token must appear in the name/city/state/country text."""
    terms = normalize_for_search(query).split()
    haystack = " ".join(
        normalize_for_search(v)
        for v in (venue.name, venue.city, venue.state, venue.country)
    )
    return all(term in haystack for term in terms)


def _rank_key(venue: _VenueSummary) -> tuple[int, int, str, str]:
    parsed = parse_date(venue.last_used)
    ordinal = parsed.toordinal() if parsed else 0
    return (-venue.tour_count, -ordinal, venue.name.lower(), venue.venue_id)


def _format_venue_result(venue: _VenueSummary, index: int) -> list[str]:
    lines = [
        f"{index + 1}. 🏟️ {venue.name}",
        f"   📍 {venue.city}, {venue.state} {venue.country}",
    ]
    if venue.capacity and venue.capacity != "0":
        lines.append(f"   👥 Capacity: {venue.capacity} | Type: {venue.venue_type or 'N/A'}")
    else:
        lines.append(f"   🏷️ Type: {venue.venue_type or 'N/A'}")
    lines.append(f"   🎫 Used on: {', '.join(venue.tours)}")
    lines.append(f"   📅 Last used: {venue.last_used}")
    lines.append(f"   🔑 ID: {venue.venue_id}")
    return lines


def _format_search_text(
    data: dict[str, Any],
    results: list[_VenueSummary],
    total_venues: int,
) -> str:
    query = data["query"]
    lines = [f'🔍 Venue Search: "{query}"', separator(), ""]

    if not results:
        lines += [
            f'ℹ️ No venues found matching "{query}"',
            "",
            "Tips:",
            '• Try searching by venue name (e.g., "palladium")',
            '• Try searching by city (e.g., "los angeles")',
            '• Try searching by state (e.g., "california" or "CA")',
            "",
            f"📊 Searched {data['toursSearched']} tour(s), found {total_venues} total venues",
        ]
        return "\n".join(lines)

    showing = (
        f" (showing top {len(results)})" if data["totalFound"] > len(results) else ""
    )
    lines.append(f"Found {len(results)} venue(s){showing}:")
    lines.append("")
    for i, venue in enumerate(results):
        lines += _format_venue_result(venue, i)
        lines.append("")
    lines += [
        separator(),
        f"📊 Searched {data['toursSearched']} tour(s), found {total_venues} total unique venues",
        "",
        "💡 Use get_venue_details with a venue ID for full production specs, "
        "contacts, and facilities.",
    ]
    return "\n".join(lines)


async def search_past_venues_impl(
    client: MasterTourClient,
    *,
    query: str,
    tour_id: str | None = None,
    limit: int = DEFAULT_RESULT_LIMIT,
) -> ToolResult:
    """Search venues used on past (and current) tours by name or location."""
    if not query or len(query.strip()) < MIN_VENUE_QUERY_LENGTH:
        raise ValueError(
            f"Search query must be at least {MIN_VENUE_QUERY_LENGTH} characters"
        )
    if not normalize_for_search(query).split():
        raise ValueError("Search query must contain letters or numbers")
    if limit < 1:
        raise ValueError("limit must be a positive integer.")

    tour_count = await count_accessible_tours(client, tour_id)
    venues: dict[str, _VenueSummary] = {}

    async for ctx in iterate_tour_days(client, tour_id=tour_id, only_days_with_venues=True):
        for event in await get_day_events_safe(client, ctx.day.id):
            _upsert_venue(venues, event, ctx.tour_label, ctx.day.date)

    matching = sorted(
        (v for v in venues.values() if _matches_query(v, query)),
        key=_rank_key,
    )
    results = matching[:limit]

    data: dict[str, Any] = {
        "query": query,
        "results": [
            {
                "venueId": v.venue_id,
                "tourLabel": ", ".join(v.tours),
                "tourCount": v.tour_count,
                "date": v.last_used,
                "venueName": v.name,
                "city": v.city,
                "state": v.state,
                "country": v.country,
                "matchedOn": query,
            }
            for v in results
        ],
        "totalFound": len(matching),
        "toursSearched": tour_count,
    }
    return ToolResult(data=data, text=_format_search_text(data, results, len(venues)))


# ── Venue details ───────────────────────────────────────────────────


def _section(header: str, fields: list[str]) -> list[str]:
    present = [f for f in fields if f]
    if not present:
        return []
    return [header, *present, ""]


def _format_production(prod: dict[str, Any]) -> list[str]:
    dims = " × ".join(
        f"{axis}: {prod[key]}"
        for axis, key in (("W", "dimensionsW"), ("D", "dimensionsD"), ("H", "dimensionsH"))
        if prod.get(key)
    )
    return _section(
        "🎬 PRODUCTION",
        [
            f"  • Stage Dimensions: {dims}" if dims else "",
            format_field("Deck to Grid", prod.get("deckToGrid")),
            format_field("Trim Height", prod.get("trimHeight")),
            format_field("Load-In Access", prod.get("access")),
            format_field("Dock Type", prod.get("dockType")),
            format_field("Rigging Notes", prod.get("riggingComments")),
            format_field("Power Notes", prod.get("powerComments")),
        ],
    )


def _format_facilities(fac: dict[str, Any]) -> list[str]:
    return _section(
        "🚿 FACILITIES",
        [
            format_field("Dressing Rooms", fac.get("dressingRooms")),
            format_field("Showers", fac.get("showers")),
            format_field("Truck Parking", fac.get("truckParking")),
            format_field("Bus Parking", fac.get("busParking")),
            format_field("Guest Parking", fac.get("guestParking")),
            format_field("Parking Notes", fac.get("parkingComments")),
        ],
    )


def _format_equipment(eq: dict[str, Any]) -> list[str]:
    return _section(
        "🔊 EQUIPMENT",
        [
            format_field("Audio", eq.get("audio")),
            format_field("Lighting", eq.get("lighting")),
            format_field("Video", eq.get("video")),
            format_field("Backline", eq.get("backline")),
            format_field("Staging", eq.get("staging")),
        ],
    )


def _format_local_crew(lc: dict[str, Any]) -> list[str]:
    return _section(
        "👷 LOCAL CREW",
        [
            format_field("Union", lc.get("localUnion")),
            format_field("Minimum IN", lc.get("minimumIN")),
            format_field("Minimum OUT", lc.get("minimumOUT")),
            format_field("Penalties", lc.get("penalties")),
            format_field("Crew Notes", lc.get("crewComments")),
        ],
    )


def _format_logistics(log: dict[str, Any]) -> list[str]:
    return _section(
        "🚗 LOGISTICS",
        [
            format_field("Directions", log.get("directions")),
            format_field("Closest City", log.get("closestCity")),
            format_field("Airport Notes", log.get("airportNotes")),
            format_field("Ground Transport", log.get("groundTransport")),
            format_field("Area Hotels", log.get("areaHotels")),
            format_field("Area Restaurants", log.get("areaRestaurants")),
        ],
    )


def _has_promoter(event: DayEvent) -> bool:
    return bool(event.promoter_name) and event.promoter_name != "No Company Selected"


def _venue_details_data(event: DayEvent, tour_label: str, day_date: str) -> dict[str, Any]:
    return {
        "found": True,
        "venueId": event.venue_id,
        "venueName": event.venue_name,
        "date": day_date,
        "tourLabel": tour_label,
        "address": ", ".join(p for p in (event.address_line1, event.address_line2) if p),
        "city": event.city,
        "state": event.state,
        "zip": event.zip,
        "country": event.country,
        "timezone": event.timezone,
        "capacity": event.capacity,
        "type": event.venue_type,
        "contacts": event.contacts,
        "production": event.production,
        "facilities": event.facilities,
        "equipment": event.equipment,
        "logistics": event.logistics,
        "localCrew": event.local_crew,
        "promoter": (
            {
                "name": event.promoter_name,
                "city": event.promoter_city,
                "state": event.promoter_state,
                "contacts": event.promoter_contacts,
            }
            if _has_promoter(event)
            else None
        ),
    }


def _format_venue_details(event: DayEvent, tour_label: str, day_date: str) -> str:
    lines = [f"🏟️ {event.venue_name}", separator(), "", "📍 LOCATION"]
    if event.address_line1:
        lines.append(f"  {event.address_line1}")
    if event.address_line2:
        lines.append(f"  {event.address_line2}")
    lines.append(f"  {event.city}, {event.state} {event.zip}".rstrip())
    lines.append(f"  {event.country}")
    if event.latitude and event.longitude:
        lines.append(f"  📌 Coordinates: {event.latitude}, {event.longitude}")
    if event.timezone:
        lines.append(f"  🕐 Timezone: {event.timezone}")
    lines.append("")

    lines.append("🎭 VENUE INFO")
    if event.capacity and event.capacity != "0":
        lines.append(f"  • Capacity: {event.capacity}")
    if event.venue_type:
        lines.append(f"  • Type: {event.venue_type}")
    if event.age_requirement:
        lines.append(f"  • Age Requirement: {event.age_requirement}")
    if event.primary_url:
        lines.append(f"  • Website: {event.primary_url}")
    if event.primary_email:
        lines.append(f"  • Email: {event.primary_email}")
    lines.append(f"  • Venue ID: {event.venue_id}")
    lines.append("")

    lines.append("📞 CONTACTS")
    lines += format_contacts(event.contacts)
    lines.append("")

    lines += _format_production(event.production)
    lines += _format_facilities(event.facilities)
    lines += _format_equipment(event.equipment)
    lines += _format_local_crew(event.local_crew)
    lines += _format_logistics(event.logistics)

    if _has_promoter(event):
        lines += ["📋 PROMOTER", f"  • {event.promoter_name}"]
        if event.promoter_city and event.promoter_state:
            lines.append(f"  • Location: {event.promoter_city}, {event.promoter_state}")
        lines += format_contacts(event.promoter_contacts)
        lines.append("")

    lines += [separator(), f"📊 Data from: {tour_label} ({day_date})"]
    return "\n".join(lines)


async def get_venue_details_impl(client: MasterTourClient, *, venue_id: str) -> ToolResult:
    """Full venue record from the first tour day that used the venue."""
    if not venue_id or not venue_id.strip():
        raise ValueError("Venue ID is required")
    venue_id = venue_id.strip()

    async for ctx in iterate_tour_days(client, only_days_with_venues=True):
        events = await get_day_events_safe(client, ctx.day.id)
        match = next((e for e in events if e.venue_id == venue_id), None)
        if match is not None:
            return ToolResult(
                data=_venue_details_data(match, ctx.tour_label, ctx.day.date),
                text=_format_venue_details(match, ctx.tour_label, ctx.day.date),
            )

    text = "\n".join(
        [
            "❌ Venue Not Found",
            separator(),
            "",
            f"Could not find venue with ID: {venue_id}",
            "",
            "This venue may not exist in any of your accessible tours.",
            "Use search_past_venues to find venues you have access to.",
        ]
    )
    return ToolResult(data={"found": False, "venueId": venue_id}, text=text)
