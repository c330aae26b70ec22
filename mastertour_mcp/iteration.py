"""Best-effort traversal of every accessible tour and its days.

Master Tour has no search endpoints, so venue and show lookups walk
tours -> days (-> day events) on the client. A tour or day that fails to
load contributes nothing instead of aborting the whole walk.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from mastertour_mcp.clients.mastertour import MasterTourClient, MasterTourClientError
from mastertour_mcp.models import Day, DayEvent, Tour, TourDays

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one sub-fetch: either ``value`` or ``error`` is set."""

    value: T | None = None
    error: MasterTourClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def attempt(awaitable: Awaitable[T]) -> FetchResult[T]:
    """Await a client call, capturing classified client failures."""
    try:
        return FetchResult(value=await awaitable)
    except MasterTourClientError as exc:
        return FetchResult(error=exc)


@dataclass(frozen=True)
class TourDayContext:
    tour: Tour
    tour_data: TourDays
    tour_label: str
    day: Day


def build_tour_label(tour_data: TourDays) -> str:
    parts = [p for p in (tour_data.artist_name, tour_data.leg_name) if p]
    return " - ".join(parts) or "Unknown Tour"


async def iterate_tour_days(
    client: MasterTourClient,
    *,
    tour_id: str | None = None,
    only_days_with_venues: bool = False,
    only_show_days: bool = False,
) -> AsyncIterator[TourDayContext]:
    """Yield a context per matching day across the selected tours.

    With ``tour_id`` the tour listing call is skipped entirely. Predicates
    are applied in order: venue presence, then show day.
    """
    if tour_id:
        tours = [Tour(tour_id=tour_id)]
    else:
        tours = await client.list_tours()

    for tour in tours:
        result = await attempt(client.get_tour_all(tour.tour_id))
        if not result.ok or result.value is None:
            logger.warning(
                "Skipping tour %s: %s", tour.tour_id, getattr(result.error, "code", "")
            )
            continue
        tour_data = result.value
        tour_label = build_tour_label(tour_data)

        for day in tour_data.days:
            if only_days_with_venues and not day.has_venue:
                continue
            if only_show_days and not day.is_show_day:
                continue
            yield TourDayContext(tour=tour, tour_data=tour_data, tour_label=tour_label, day=day)


async def fetch_day_events(client: MasterTourClient, day_id: str) -> FetchResult[list[DayEvent]]:
    return await attempt(client.get_day_events(day_id))


async def get_day_events_safe(client: MasterTourClient, day_id: str) -> list[DayEvent]:
    """Day events, or an empty list when the day cannot be loaded."""
    result = await fetch_day_events(client, day_id)
    if not result.ok:
        logger.info("No events for day %s: %s", day_id, result.error)
        return []
    return result.value or []


async def count_accessible_tours(client: MasterTourClient, tour_id: str | None = None) -> int:
    if tour_id:
        return 1
    return len(await client.list_tours())
