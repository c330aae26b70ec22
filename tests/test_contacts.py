"""Tests for room lists, contact directories and push notifications."""

from __future__ import annotations

import pytest

from mastertour_mcp.tools.contacts import (
    get_company_contacts_impl,
    get_hotel_contacts_impl,
    get_hotel_roomlist_impl,
)
from mastertour_mcp.tools.notifications import get_push_notifications_impl


class TestRoomlist:
    async def test_grouped_by_room_type(self, mock_client):
        mock_client.get_hotel_roomlist.return_value = {
            "hotelName": "Hotel Teatro",
            "rooms": [
                {"guestName": "Ana", "roomType": "Suite", "roomNumber": "901",
                 "checkIn": "2026-01-04", "checkOut": "2026-01-05"},
                {"guestName": "Ben", "confirmationNumber": "X1"},
            ],
        }

        result = await get_hotel_roomlist_impl(mock_client, hotel_id="h-1")

        assert result.data["totalRooms"] == 2
        assert "🛏️ Suite:" in result.text
        assert "🛏️ Standard:" in result.text
        assert "• Ana - Room 901" in result.text
        assert "📅 Check-in: 2026-01-04 | Check-out: 2026-01-05" in result.text
        assert "🔢 Confirmation: X1" in result.text
        assert "Total: 2 rooms" in result.text

    async def test_requires_hotel_id(self, mock_client):
        with pytest.raises(ValueError):
            await get_hotel_roomlist_impl(mock_client, hotel_id="")


class TestContacts:
    async def test_hotel_contacts_grouped_by_department(self, mock_client):
        mock_client.get_hotel_contacts.return_value = {
            "hotelName": "Hotel Teatro",
            "contacts": [
                {"name": "Cara", "title": "Manager", "department": "Front Desk", "phone": "555"},
                {"name": "Dev", "title": "Sales"},
            ],
        }

        result = await get_hotel_contacts_impl(mock_client, hotel_id="h-1")

        assert result.data["totalContacts"] == 2
        assert "👥 Front Desk:" in result.text
        assert "📋 Manager" in result.text
        assert "👥 Sales:" in result.text
        assert "📋 Sales" not in result.text
        assert "Total: 2 contacts" in result.text

    async def test_company_contacts_empty(self, mock_client):
        mock_client.get_company_contacts.return_value = {"companyName": "Live Promo"}

        result = await get_company_contacts_impl(mock_client, company_id="co-1")

        assert result.data["contacts"] == []
        assert "🏢 Company Contacts" in result.text
        assert "No contacts on file for this company." in result.text


class TestPushNotifications:
    async def test_grouped_by_date_with_unread_marker(self, mock_client):
        mock_client.get_push_notifications.return_value = {
            "notifications": [
                {"id": 1, "timestamp": "2026-01-04T09:15:00Z", "title": "Bus call moved",
                 "read": False, "type": "schedule"},
                {"id": 2, "timestamp": "2026-01-04 18:00:00", "title": "Doors", "read": True},
                {"id": 3, "timestamp": "2026-01-03T10:00:00Z", "title": "Welcome"},
            ],
            "totalCount": 12,
            "unreadCount": 1,
        }

        result = await get_push_notifications_impl(mock_client, limit=3)

        mock_client.get_push_notifications.assert_awaited_once_with(limit=3, since=None)
        assert "📅 Sun, Jan 4, 2026:" in result.text
        assert "🔵 [09:15] Bus call moved" in result.text
        assert "⚪ [18:00] Doors" in result.text
        assert "📋 Type: schedule" in result.text
        assert "Total: 12 notifications" in result.text
        assert "Unread: 1" in result.text
        assert result.data["notifications"][2]["read"] is None

    async def test_total_defaults_to_count(self, mock_client):
        mock_client.get_push_notifications.return_value = {"notifications": []}
        result = await get_push_notifications_impl(mock_client)
        assert result.data == {"notifications": [], "totalCount": 0, "unreadCount": None}
        assert "No notifications found." in result.text

    async def test_rejects_bad_limit(self, mock_client):
        with pytest.raises(ValueError):
            await get_push_notifications_impl(mock_client, limit=0)
