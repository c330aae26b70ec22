"""Hotel room lists and hotel/company contact directories."""

from __future__ import annotations

from typing import Any

from mastertour_mcp.clients.mastertour import MasterTourClient
from mastertour_mcp.formatters import plural, separator
from mastertour_mcp.models import ToolResult


def _contact_output(contact: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": contact.get("name") or "",
        "title": contact.get("title") or "",
        "email": contact.get("email") or "",
        "phone": contact.get("phone") or "",
        "fax": contact.get("fax") or "",
        "department": contact.get("department") or "",
    }


def _format_directory(heading: str, owner_name: str, empty: str, contacts: list[dict[str, Any]]) -> str:
    """Contacts grouped by department, falling back to title."""
    lines = [heading]
    if owner_name:
        lines.append(f"📍 {owner_name}")
    lines += [separator(), ""]

    if not contacts:
        lines.append(empty)
        return "\n".join(lines)

    by_dept: dict[str, list[dict[str, Any]]] = {}
    for contact in contacts:
        by_dept.setdefault(contact["department"] or contact["title"] or "General", []).append(contact)

    for dept, dept_contacts in by_dept.items():
        lines.append(f"👥 {dept}:")
        for contact in dept_contacts:
            lines.append(f"  • {contact['name']}")
            if contact["title"] and contact["title"] != dept:
                lines.append(f"    📋 {contact['title']}")
            if contact["phone"]:
                lines.append(f"    📱 {contact['phone']}")
            if contact["email"]:
                lines.append(f"    ✉️ {contact['email']}")
            if contact["fax"]:
                lines.append(f"    📠 {contact['fax']}")
        lines.append("")

    lines += [separator(), f"Total: {plural(len(contacts), 'contact')}"]
    return "\n".join(lines)


async def get_hotel_contacts_impl(client: MasterTourClient, *, hotel_id: str) -> ToolResult:
    if not hotel_id:
        raise ValueError("Hotel ID is required")

    response = await client.get_hotel_contacts(hotel_id)
    contacts = [_contact_output(c) for c in response.get("contacts") or [] if isinstance(c, dict)]
    data = {
        "hotelId": hotel_id,
        "hotelName": response.get("hotelName") or "",
        "contacts": contacts,
        "totalContacts": len(contacts),
    }
    text = _format_directory(
        "🏨 Hotel Contacts",
        data["hotelName"],
        "ℹ️ No contacts on file for this hotel.",
        contacts,
    )
    return ToolResult(data=data, text=text)


async def get_company_contacts_impl(client: MasterTourClient, *, company_id: str) -> ToolResult:
    """Contacts at a promoter, agency or other company record."""
    if not company_id:
        raise ValueError("Company ID is required")

    response = await client.get_company_contacts(company_id)
    contacts = [_contact_output(c) for c in response.get("contacts") or [] if isinstance(c, dict)]
    data = {
        "companyId": company_id,
        "companyName": response.get("companyName") or "",
        "contacts": contacts,
        "totalContacts": len(contacts),
    }
    text = _format_directory(
        "🏢 Company Contacts",
        data["companyName"],
        "ℹ️ No contacts on file for this company.",
        contacts,
    )
    return ToolResult(data=data, text=text)


def _room_output(room: dict[str, Any]) -> dict[str, Any]:
    return {
        "roomNumber": room.get("roomNumber") or "",
        "roomType": room.get("roomType") or "",
        "guestName": room.get("guestName") or "",
        "checkIn": room.get("checkIn") or "",
        "checkOut": room.get("checkOut") or "",
        "confirmationNumber": room.get("confirmationNumber") or "",
        "notes": room.get("notes") or "",
    }


def _format_roomlist(data: dict[str, Any]) -> str:
    lines = ["🏨 Room List"]
    if data["hotelName"]:
        lines.append(f"📍 {data['hotelName']}")
    lines += [separator(), ""]

    rooms = data["rooms"]
    if not rooms:
        lines.append("ℹ️ No room assignments for this hotel.")
        return "\n".join(lines)

    by_type: dict[str, list[dict[str, Any]]] = {}
    for room in rooms:
        by_type.setdefault(room["roomType"] or "Standard", []).append(room)

    for room_type, type_rooms in by_type.items():
        lines.append(f"🛏️ {room_type}:")
        for room in type_rooms:
            line = f"  • {room['guestName']}"
            if room["roomNumber"]:
                line += f" - Room {room['roomNumber']}"
            lines.append(line)
            stay = []
            if room["checkIn"]:
                stay.append(f"Check-in: {room['checkIn']}")
            if room["checkOut"]:
                stay.append(f"Check-out: {room['checkOut']}")
            if stay:
                lines.append(f"    📅 {' | '.join(stay)}")
            if room["confirmationNumber"]:
                lines.append(f"    🔢 Confirmation: {room['confirmationNumber']}")
            if room["notes"]:
                lines.append(f"    📝 {room['notes']}")
        lines.append("")

    lines += [separator(), f"Total: {plural(data['totalRooms'], 'room')}"]
    return "\n".join(lines)


async def get_hotel_roomlist_impl(client: MasterTourClient, *, hotel_id: str) -> ToolResult:
    """Room assignments for a hotel, grouped by room type."""
    if not hotel_id:
        raise ValueError("Hotel ID is required")

    response = await client.get_hotel_roomlist(hotel_id)
    rooms = [_room_output(r) for r in response.get("rooms") or [] if isinstance(r, dict)]
    data = {
        "hotelId": hotel_id,
        "hotelName": response.get("hotelName") or "",
        "rooms": rooms,
        "totalRooms": len(rooms),
    }
    return ToolResult(data=data, text=_format_roomlist(data))
