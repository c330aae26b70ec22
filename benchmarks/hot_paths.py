#!/usr/bin/env python3
"""Performance benchmark for Master Tour MCP aggregation and signing hot paths."""

from __future__ import annotations

import argparse
import asyncio
import time
import zlib
from datetime import date, timedelta

from mastertour_mcp.clients.oauth import OAuthSigner
from mastertour_mcp.models import Credentials, DayEvent, Tour, TourDays
from mastertour_mcp.timeconv import local_to_utc
from mastertour_mcp.tools.shows import get_upcoming_shows_impl
from mastertour_mcp.tools.venues import search_past_venues_impl

CITIES = [("Denver", "CO"), ("Austin", "TX"), ("Chicago", "IL"), ("Portland", "OR"), ("Boston", "MA")]
VENUE_KINDS = ["Theatre", "Ballroom", "Arena", "Hall", "Amphitheatre"]
START = date(2025, 1, 1)


def make_day(tour: int, i: int) -> dict:
    city, state = CITIES[i % len(CITIES)]
    return {
        "id": f"T{tour:03d}-D{i:04d}",
        "name": f"{city} {VENUE_KINDS[i % len(VENUE_KINDS)]}",
        "dayDate": f"{START + timedelta(days=i)} 00:00:00",
        "dayType": "Show Day" if i % 4 else "Travel",
        "city": city,
        "state": state,
        "country": "US",
    }


def make_event(day_id: str, venue_number: int) -> DayEvent:
    city, state = CITIES[venue_number % len(CITIES)]
    return DayEvent(
        id=f"EV-{day_id}",
        venue_id=f"V{venue_number:05d}",
        venue_name=f"{city} {VENUE_KINDS[venue_number % len(VENUE_KINDS)]} {venue_number}",
        city=city,
        state=state,
        country="US",
        capacity=str(1_000 + venue_number),
    )


class FakeClient:
    """In-memory stand-in exposing the client calls the aggregation tools make."""

    def __init__(self, tours: int, days_per_tour: int, venues: int) -> None:
        self._tours = [Tour(tour_id=f"T{t:03d}") for t in range(tours)]
        self._days = {
            tour.tour_id: TourDays.from_api(
                {
                    "tour": {"id": tour.tour_id, "artistName": "Bench", "legName": tour.tour_id},
                    "days": [make_day(t, i) for i in range(days_per_tour)],
                }
            )
            for t, tour in enumerate(self._tours)
        }
        self._venues = venues

    async def list_tours(self) -> list[Tour]:
        return self._tours

    async def get_tour_all(self, tour_id: str) -> TourDays:
        return self._days[tour_id]

    async def get_day_events(self, day_id: str) -> list[DayEvent]:
        return [make_event(day_id, zlib.crc32(day_id.encode()) % self._venues)]


# ── Benchmarks ────────────────────────────────────────────────────────


def bench_signing(repeats: int) -> tuple[float, float]:
    signer = OAuthSigner(Credentials("bench-key", "bench-secret"))
    url = "https://my.eventric.com/portal/api/v5/tour/T001/all"
    start = time.perf_counter()
    for _ in range(repeats):
        signer.sign(url, "GET", {"version": "7"})
    elapsed = time.perf_counter() - start
    return elapsed, repeats / max(elapsed, 1e-9)


def bench_time_conversion(repeats: int) -> float:
    start = time.perf_counter()
    for i in range(repeats):
        local_to_utc("2026-03-08", f"{i % 24:02d}:30", "America/New_York")
    return time.perf_counter() - start


async def bench_venue_search(client: FakeClient, repeats: int) -> tuple[float, float]:
    # Warmup
    await search_past_venues_impl(client, query="denver hall")

    start = time.perf_counter()
    for _ in range(repeats):
        await search_past_venues_impl(client, query="denver hall", limit=25)
    elapsed = time.perf_counter() - start
    return elapsed, (elapsed / max(repeats, 1)) * 1000


async def bench_upcoming_shows(client: FakeClient, repeats: int) -> tuple[float, int]:
    start = time.perf_counter()
    for _ in range(repeats):
        result = await get_upcoming_shows_impl(client, limit=50, today=START + timedelta(days=30))
    elapsed = time.perf_counter() - start
    return elapsed, result.data["totalFound"]


# ── Main ──────────────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark Master Tour MCP hot paths.")
    parser.add_argument("--tours", type=int, default=40)
    parser.add_argument("--days", type=int, default=250)
    parser.add_argument("--venues", type=int, default=2_000)
    parser.add_argument("--repeats", type=int, default=20)
    args = parser.parse_args()

    print("mastertour_hot_path_benchmark")
    print(f"tours={args.tours}")
    print(f"days_per_tour={args.days}")
    print(f"repeats={args.repeats}")
    print()

    # 1. OAuth signing
    sign_elapsed, sign_rps = bench_signing(args.repeats * 1_000)
    print(f"oauth_sign_seconds={sign_elapsed:.6f}")
    print(f"oauth_sign_per_sec={sign_rps:.0f}")
    print()

    # 2. Local -> UTC conversion (DST transition day)
    tz_elapsed = bench_time_conversion(args.repeats * 1_000)
    print(f"local_to_utc_seconds={tz_elapsed:.6f}")
    print()

    client = FakeClient(args.tours, args.days, args.venues)

    # 3. Venue search across every tour day
    search_elapsed, search_avg_ms = await bench_venue_search(client, args.repeats)
    print(f"venue_search_total_seconds={search_elapsed:.6f}")
    print(f"venue_search_avg_ms={search_avg_ms:.4f}")
    print()

    # 4. Upcoming shows
    shows_elapsed, shows_found = await bench_upcoming_shows(client, args.repeats)
    print(f"upcoming_shows_seconds={shows_elapsed:.6f}")
    print(f"upcoming_shows_found={shows_found}")


if __name__ == "__main__":
    asyncio.run(main())
