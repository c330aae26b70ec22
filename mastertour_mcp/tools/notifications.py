"""Push notification history."""

from __future__ import annotations

import re
from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.formatters import format_date, plural, separator
from mastertour_mcp.models import ToolResult

_CLOCK_RE = re.compile(r"[T\s](\d{2}:\d{2})")


def _clock(timestamp: str) -> str:
    match = _CLOCK_RE.search(timestamp)
    return match.group(1) if match else timestamp


def _date_key(timestamp: str) -> str:
    return timestamp.split("T")[0].split(" ")[0] or "Unknown"


def _notification_output(item: dict[str, Any]) -> dict[str, Any]:
    read = item.get("read")
    return {
        "id": str(item.get("id", "")),
        "timestamp": str(item.get("timestamp") or ""),
        "title": item.get("title") or "",
        "message": item.get("message") or "",
        "type": item.get("type") or "",
        "tourId": str(item.get("tourId") or ""),
        "read": None if read is None else bool(read),
    }


def _format_notifications(data: dict[str, Any]) -> str:
    lines = ["🔔 Push Notifications", separator(), ""]
    notifications = data["notifications"]
    if not notifications:
        lines.append("ℹ️ No notifications found.")
        return "\n".join(lines)

    by_date: dict[str, list[dict[str, Any]]] = {}
    for item in notifications:
        by_date.setdefault(_date_key(item["timestamp"]), []).append(item)

    for day, items in by_date.items():
        lines.append(f"📅 {format_date(day)}:")
        for item in items:
            icon = "🔵" if item["read"] is False else "⚪"
            lines.append(f"  {icon} [{_clock(item['timestamp'])}] {item['title']}")
            if item["message"]:
                lines.append(f"     {item['message']}")
            if item["type"]:
                lines.append(f"     📋 Type: {item['type']}")
        lines.append("")

    lines += [separator(), f"Total: {plural(data['totalCount'], 'notification')}"]
    if data["unreadCount"] is not None:
        lines.append(f"Unread: {data['unreadCount']}")
    return "\n".join(lines)


async def get_push_notifications_impl(
    client: MasterTourClient,
    *,
    limit: int | None = None,
    since: str | None = None,
) -> ToolResult:
    """Recent notifications grouped by day; unread ones are marked."""
    if limit is not None and limit < 1:
        raise ValueError("limit must be a positive integer.")

    response = await client.get_push_notifications(limit=limit, since=since)
    notifications = [
        _notification_output(n) for n in response.get("notifications") or [] if isinstance(n, dict)
    ]
    total = response.get("totalCount")
    unread = response.get("unreadCount")
    data = {
        "notifications": notifications,
        "totalCount": int(total) if total is not None else len(notifications),
        "unreadCount": int(unread) if unread is not None else None,
    }
    return ToolResult(data=data, text=_format_notifications(data))
