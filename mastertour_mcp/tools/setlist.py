"""Event setlist tool."""

from __future__ import annotations

import re
from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.formatters import plural, separator
from mastertour_mcp.models import ToolResult

_CLOCK_RE = re.compile(r"^(\d+):(\d+)$")
_MINUTES_RE = re.compile(r"^(\d+)")


def parse_duration(duration: str | None) -> float:
    """Minutes in a ``m:ss`` or bare-minutes duration; 0 when unreadable."""
    if not duration:
        return 0.0
    match = _CLOCK_RE.match(duration)
    if match:
        return int(match.group(1)) + int(match.group(2)) / 60
    match = _MINUTES_RE.match(duration)
    if match:
        return float(match.group(1))
    return 0.0


def format_duration(minutes: float) -> str:
    hours = int(minutes // 60)
    mins = round(minutes % 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"


def _song_output(song: dict[str, Any]) -> dict[str, Any]:
    return {
        "position": song.get("position"),
        "songTitle": song.get("songTitle") or "",
        "duration": song.get("duration") or "",
        "notes": song.get("notes") or "",
        "isEncore": bool(song.get("isEncore", False)),
    }


def _song_lines(songs: list[dict[str, Any]]) -> list[str]:
    lines = []
    for song in songs:
        line = f"  {song['position']}. {song['songTitle']}"
        if song["duration"]:
            line += f" ({song['duration']})"
        lines.append(line)
        if song["notes"]:
            lines.append(f"     📝 {song['notes']}")
    return lines


def _format_setlist(data: dict[str, Any]) -> str:
    lines = ["🎵 Setlist"]
    if data["eventName"]:
        lines.append(f"📍 {data['eventName']}")
    if data["date"]:
        lines.append(f"📅 {data['date']}")
    lines += [separator(), ""]

    songs = data["songs"]
    if not songs:
        lines.append("ℹ️ No setlist available for this event.")
        return "\n".join(lines)

    main_set = [s for s in songs if not s["isEncore"]]
    encore = [s for s in songs if s["isEncore"]]
    if main_set:
        lines += ["🎸 Main Set:", *_song_lines(main_set), ""]
    if encore:
        lines += ["🌟 Encore:", *_song_lines(encore), ""]

    lines += [separator(), f"Total: {plural(data['totalSongs'], 'song')}"]
    if data["estimatedDuration"]:
        lines.append(f"Estimated duration: {data['estimatedDuration']}")
    return "\n".join(lines)


async def get_event_setlist_impl(client: MasterTourClient, *, event_id: str) -> ToolResult:
    """Setlist split into main set and encore, with a summed duration estimate."""
    if not event_id:
        raise ValueError("Event ID is required")

    response = await client.get_event_setlist(event_id)
    songs = [_song_output(s) for s in response.get("songs") or [] if isinstance(s, dict)]

    durations = [d for d in (parse_duration(s["duration"]) for s in songs) if d > 0]
    data = {
        "eventId": event_id,
        "eventName": response.get("eventName") or "",
        "date": response.get("date") or "",
        "songs": songs,
        "totalSongs": len(songs),
        "estimatedDuration": format_duration(sum(durations)) if durations else None,
    }
    return ToolResult(data=data, text=_format_setlist(data))
