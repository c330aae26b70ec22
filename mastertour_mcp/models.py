"""Typed views over Master Tour API payloads.

The API omits empty fields and mixes numeric and string ids, so every
``from_api`` constructor tolerates missing keys and coerces ids to ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mastertour_mcp.constants import EDIT_PERMISSION_LEVEL
from mastertour_mcp.timeconv import extract_time


def _text(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return str(value)


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _record(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Credentials:
    """OAuth consumer credentials. Never logged."""

    consumer_key: str
    consumer_secret: str = field(repr=False)


@dataclass
class Tour:
    tour_id: str
    organization_name: str = ""
    artist_name: str = ""
    leg_name: str = ""
    permission_level: str = ""

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Tour:
        return cls(
            tour_id=_text(payload, "tourId") or _text(payload, "id"),
            organization_name=_text(payload, "organizationName"),
            artist_name=_text(payload, "artistName"),
            leg_name=_text(payload, "legName"),
            permission_level=_text(payload, "organizationPermissionLevel"),
        )

    @property
    def can_edit(self) -> bool:
        try:
            return int(self.permission_level) >= EDIT_PERMISSION_LEVEL
        except ValueError:
            return False


@dataclass
class ScheduleItem:
    id: str
    title: str = ""
    sync_id: str = ""
    details: str = ""
    start_datetime: str = ""
    end_datetime: str = ""
    paul_start_time: str = ""
    paul_end_time: str = ""
    is_confirmed: bool = False
    is_complete: bool = False

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ScheduleItem:
        return cls(
            id=_text(payload, "id"),
            title=_text(payload, "title"),
            sync_id=_text(payload, "syncId"),
            details=_text(payload, "details"),
            start_datetime=_text(payload, "startDatetime"),
            end_datetime=_text(payload, "endDatetime"),
            paul_start_time=_text(payload, "paulStartTime"),
            paul_end_time=_text(payload, "paulEndTime"),
            is_confirmed=bool(payload.get("isConfirmed", False)),
            is_complete=bool(payload.get("isComplete", False)),
        )

    @property
    def start_time(self) -> str:
        """Venue-local start as ``HH:MM``."""
        return extract_time(self.paul_start_time)

    @property
    def end_time(self) -> str:
        return extract_time(self.paul_end_time)

    def to_output(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "syncId": self.sync_id,
            "title": self.title,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "details": self.details,
        }


@dataclass
class Day:
    id: str
    tour_id: str = ""
    name: str = ""
    day_date: str = ""
    timezone: str = ""
    day_type: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    schedule_items: list[ScheduleItem] = field(default_factory=list)
    general_notes: str = ""
    hotel_notes: str = ""
    travel_notes: str = ""
    sync_id: str = ""

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Day:
        return cls(
            id=_text(payload, "id"),
            tour_id=_text(payload, "tourId"),
            name=_text(payload, "name"),
            day_date=_text(payload, "dayDate"),
            timezone=_text(payload, "timeZone"),
            day_type=_text(payload, "dayType"),
            city=_text(payload, "city"),
            state=_text(payload, "state"),
            country=_text(payload, "country"),
            schedule_items=[
                ScheduleItem.from_api(item)
                for item in _dicts(payload.get("scheduleItems"))
            ],
            general_notes=_text(payload, "generalNotes"),
            hotel_notes=_text(payload, "hotelNotes"),
            travel_notes=_text(payload, "travelNotes"),
            sync_id=_text(payload, "syncId"),
        )

    @property
    def date(self) -> str:
        """``YYYY-MM-DD`` part of ``dayDate``."""
        return self.day_date.split(" ")[0] if self.day_date else ""

    @property
    def is_show_day(self) -> bool:
        return "show" in self.day_type.lower()

    @property
    def has_venue(self) -> bool:
        return bool(self.name.strip())

    def find_item(self, item_id: str) -> ScheduleItem | None:
        for item in self.schedule_items:
            if item.id == item_id:
                return item
        return None


@dataclass
class TourDays:
    """Payload of ``/tour/{id}/all`` and ``/tour/{id}/events``."""

    tour_id: str
    artist_name: str = ""
    leg_name: str = ""
    tour_name: str = ""
    days: list[Day] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> TourDays:
        tour = _record(payload.get("tour"))
        days = payload.get("days", tour.get("days"))
        return cls(
            tour_id=_text(tour, "id"),
            artist_name=_text(tour, "artistName"),
            leg_name=_text(tour, "legName"),
            tour_name=_text(tour, "tourName"),
            days=[Day.from_api(d) for d in _dicts(days)],
        )


@dataclass
class DayEvent:
    """One event on a day, carrying the full venue record it was booked at."""

    id: str
    venue_id: str = ""
    venue_name: str = ""
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    latitude: str = ""
    longitude: str = ""
    timezone: str = ""
    capacity: str = ""
    venue_type: str = ""
    age_requirement: str = ""
    primary_url: str = ""
    primary_email: str = ""
    contacts: list[dict[str, Any]] = field(default_factory=list)
    production: dict[str, Any] = field(default_factory=dict)
    facilities: dict[str, Any] = field(default_factory=dict)
    equipment: dict[str, Any] = field(default_factory=dict)
    logistics: dict[str, Any] = field(default_factory=dict)
    local_crew: dict[str, Any] = field(default_factory=dict)
    promoter_name: str = ""
    promoter_city: str = ""
    promoter_state: str = ""
    promoter_contacts: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> DayEvent:
        return cls(
            id=_text(payload, "id"),
            venue_id=_text(payload, "venueId"),
            venue_name=_text(payload, "venueName"),
            address_line1=_text(payload, "venueAddressLine1"),
            address_line2=_text(payload, "venueAddressLine2"),
            city=_text(payload, "venueCity"),
            state=_text(payload, "venueState"),
            zip=_text(payload, "venueZip"),
            country=_text(payload, "venueCountry"),
            latitude=_text(payload, "venueLatitude"),
            longitude=_text(payload, "venueLongitude"),
            timezone=_text(payload, "venueTimeZone"),
            capacity=_text(payload, "venueCapacity"),
            venue_type=_text(payload, "venueType"),
            age_requirement=_text(payload, "venueAgeRequirement"),
            primary_url=_text(payload, "venuePrimaryUrl"),
            primary_email=_text(payload, "venuePrimaryEmail"),
            contacts=_dicts(payload.get("venueContacts")),
            production=_record(payload.get("venueProduction")),
            facilities=_record(payload.get("venueFacilities")),
            equipment=_record(payload.get("venueEquipment")),
            logistics=_record(payload.get("venueLogistics")),
            local_crew=_record(payload.get("venueLocalCrew")),
            promoter_name=_text(payload, "promoterName"),
            promoter_city=_text(payload, "promoterCity"),
            promoter_state=_text(payload, "promoterState"),
            promoter_contacts=_dicts(payload.get("promoterContacts")),
        )


@dataclass
class ToolResult:
    """Structured data plus its human-readable rendering."""

    data: dict[str, Any]
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "text": self.text}
