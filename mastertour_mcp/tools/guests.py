"""Event guest list tools."""

from __future__ import annotations

from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.formatters import plural, separator
from mastertour_mcp.models import ToolResult


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _guest_output(guest: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(guest.get("id", "")),
        "name": guest.get("name") or "",
        "tickets": _to_int(guest.get("tickets")),
        "status": guest.get("status") or "",
        "requestedBy": guest.get("requestedBy") or "",
        "notes": guest.get("notes") or "",
        "willCall": bool(guest.get("willCall", False)),
    }


def _format_guestlist(data: dict[str, Any]) -> str:
    lines = ["🎫 Guest List"]
    if data["eventName"]:
        lines.append(f"📍 {data['eventName']}")
    if data["date"]:
        lines.append(f"📅 {data['date']}")
    lines += [separator(), ""]

    guests = data["guests"]
    if not guests:
        lines += [
            "ℹ️ No guests on the list for this event.",
            "",
            "💡 Use add_guest_request to add guests.",
        ]
        return "\n".join(lines)

    by_status: dict[str, list[dict[str, Any]]] = {}
    for guest in guests:
        by_status.setdefault(guest["status"] or "Pending", []).append(guest)

    for status, status_guests in by_status.items():
        lines.append(f"📋 {status}:")
        for guest in status_guests:
            line = f"  • {guest['name']} ({plural(guest['tickets'], 'ticket')})"
            if guest["willCall"]:
                line += " [Will Call]"
            if guest["requestedBy"]:
                line += f" - Requested by: {guest['requestedBy']}"
            lines.append(line)
            if guest["notes"]:
                lines.append(f"    📝 {guest['notes']}")
        lines.append("")

    lines += [
        separator(),
        f"Total: {plural(data['totalGuests'], 'guest')}, {plural(data['totalTickets'], 'ticket')}",
    ]
    return "\n".join(lines)


async def get_event_guestlist_impl(client: MasterTourClient, *, event_id: str) -> ToolResult:
    if not event_id:
        raise ValueError("Event ID is required")

    response = await client.get_event_guestlist(event_id)
    guests = [_guest_output(g) for g in response.get("guests") or [] if isinstance(g, dict)]
    data = {
        "eventId": event_id,
        "eventName": response.get("eventName") or "",
        "date": response.get("date") or "",
        "guests": guests,
        "totalGuests": len(guests),
        "totalTickets": sum(g["tickets"] for g in guests),
    }
    return ToolResult(data=data, text=_format_guestlist(data))


async def add_guest_request_impl(
    client: MasterTourClient,
    *,
    event_id: str,
    name: str,
    tickets: int,
    notes: str | None = None,
    will_call: bool | None = None,
) -> ToolResult:
    if not event_id:
        raise ValueError("Event ID is required")
    if not name or not name.strip():
        raise ValueError("Guest name is required")
    if tickets < 1:
        raise ValueError("Ticket count must be at least 1")

    name = name.strip()
    created = await client.create_guest_request(
        event_id=event_id,
        name=name,
        tickets=tickets,
        notes=notes,
        will_call=will_call,
    )

    data = {
        "success": True,
        "action": "created",
        "guestListId": str(created.get("id", "")),
        "name": name,
        "tickets": tickets,
    }
    lines = [
        "✅ Guest Added to List",
        "",
        f"👤 Name: {name}",
        f"🎫 Tickets: {tickets}",
        f"🆔 Guest List ID: {data['guestListId']}",
    ]
    if will_call:
        lines.append("📋 Will Call: Yes")
    if notes:
        lines.append(f"📝 Notes: {notes}")
    return ToolResult(data=data, text="\n".join(lines))


async def update_guest_request_impl(
    client: MasterTourClient,
    *,
    guest_list_id: str,
    name: str | None = None,
    tickets: int | None = None,
    status: str | None = None,
    notes: str | None = None,
    will_call: bool | None = None,
) -> ToolResult:
    """Send only the supplied fields; at least one is required."""
    if not guest_list_id:
        raise ValueError("Guest list ID is required")

    fields: dict[str, Any] = {}
    if name is not None:
        fields["name"] = name.strip()
    if tickets is not None:
        if tickets < 1:
            raise ValueError("Ticket count must be at least 1")
        fields["tickets"] = tickets
    if status is not None:
        fields["status"] = status
    if notes is not None:
        fields["notes"] = notes
    if will_call is not None:
        fields["willCall"] = will_call
    if not fields:
        raise ValueError("At least one field to update is required")

    await client.update_guest_request(guest_list_id, fields)

    data = {
        "success": True,
        "action": "updated",
        "guestListId": guest_list_id,
        "updatedFields": sorted(fields),
        "name": fields.get("name", ""),
        "tickets": fields.get("tickets", 0),
    }

    labels = []
    if name is not None:
        labels.append(f"Name: {fields['name']}")
    if tickets is not None:
        labels.append(f"Tickets: {tickets}")
    if status is not None:
        labels.append(f"Status: {status}")
    if will_call is not None:
        labels.append(f"Will Call: {'Yes' if will_call else 'No'}")
    if notes is not None:
        labels.append(f"Notes: {notes}")

    lines = [
        "✅ Guest Request Updated",
        "",
        f"🆔 Guest List ID: {guest_list_id}",
        "",
        "📝 Updated fields:",
    ]
    lines += [f"  • {label}" for label in labels]
    return ToolResult(data=data, text="\n".join(lines))
