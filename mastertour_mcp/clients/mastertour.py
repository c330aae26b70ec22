"""Shared async Master Tour API client.

Every request is OAuth-signed, carries the ``version`` query parameter and
returns only the ``data`` member of the ``{success, message, data}``
envelope. Failures are classified into the ``MasterTourClientError``
hierarchy below.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from mastertour_mcp.clients.oauth import OAuthSigner
from mastertour_mcp.constants import API_VERSION, BASE_URL, TOUR_PERMISSION_MARKER
from mastertour_mcp.models import Credentials, Day, DayEvent, Tour, TourDays

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=20)


class MasterTourClientError(RuntimeError):
    """Raised for Master Tour request failures with structured metadata.

    ``message`` is written for the person using the tool; ``server_message``
    keeps the untouched text the API returned for diagnostics.
    """

    code = "MASTERTOUR_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status: int = 0,
        server_message: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.server_message = server_message
        self.details = details or {}


class PermissionDeniedError(MasterTourClientError):
    code = "PERMISSION_DENIED"


class AuthenticationError(MasterTourClientError):
    code = "AUTHENTICATION_FAILED"


class NotFoundError(MasterTourClientError):
    code = "NOT_FOUND"


class ApiError(MasterTourClientError):
    code = "API_ERROR"


class TransportError(MasterTourClientError):
    code = "NETWORK_ERROR"


def classify_error(
    status: int,
    server_message: str,
    *,
    path: str = "",
) -> MasterTourClientError:
    """Map an HTTP status and API message onto the error taxonomy.

    The permission check matches Master Tour's message text, so it takes
    precedence over the status code.
    """
    text = server_message or ""
    details = {"path": path} if path else None

    if TOUR_PERMISSION_MARKER in text.lower():
        return PermissionDeniedError(
            "You do not have write access to this tour. Ask a tour administrator "
            "to grant edit permission in Master Tour.",
            status=status,
            server_message=text,
            details=details,
        )
    if status == 401 or "OAuth" in text:
        return AuthenticationError(
            "Master Tour rejected the API credentials. Check MASTERTOUR_KEY and "
            "MASTERTOUR_SECRET and that the system clock is accurate.",
            status=status,
            server_message=text,
            details=details,
        )
    if status == 404:
        return NotFoundError(
            "The requested Master Tour record was not found. Verify the id and "
            "that your account can access it.",
            status=status,
            server_message=text,
            details=details,
        )
    return ApiError(
        f"Master Tour request failed (HTTP {status}): {text or 'no message'}",
        status=status,
        server_message=text,
        details=details,
    )


def _parse_body(raw_text: str) -> Any:
    if not raw_text:
        return {}
    try:
        return json.loads(raw_text)
    except json.JSONDecodeError:
        return {"raw": raw_text}


class MasterTourClient:
    """Async client for the Master Tour v5 REST API."""

    BASE_URL = BASE_URL

    def __init__(self, credentials: Credentials) -> None:
        self._signer = OAuthSigner(credentials)
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> MasterTourClient:
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self.session:
            await self.session.close()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        if not self.session:
            raise RuntimeError("Client not entered as context manager")

        url = f"{self.BASE_URL}{path}"
        query = {"version": API_VERSION}
        if params:
            query.update(params)
        headers = self._signer.sign(url, method, query)
        data: str | None = None
        if method in ("POST", "PUT"):
            headers["Content-Type"] = "application/json"
            data = json.dumps(body or {})

        try:
            async with self.session.request(
                method,
                url,
                params=query,
                headers=headers,
                data=data,
                timeout=_REQUEST_TIMEOUT,
            ) as resp:
                try:
                    raw_text = await resp.text()
                except UnicodeDecodeError as exc:
                    logger.warning(
                        "Undecodable Master Tour response (%s %s -> %s)",
                        method,
                        path,
                        resp.status,
                    )
                    raise ApiError(
                        f"Master Tour returned an unreadable response (HTTP {resp.status}).",
                        status=resp.status,
                        server_message=str(exc),
                        details={"path": path},
                    ) from exc
                payload = _parse_body(raw_text)
                logger.debug("Master Tour %s %s -> %s", method, path, resp.status)

                envelope = payload if isinstance(payload, dict) else {}
                server_message = str(envelope.get("message") or "")
                if resp.status >= 400 or envelope.get("success") is False:
                    raise classify_error(resp.status, server_message, path=path)

                if "data" in envelope:
                    return envelope["data"]
                return payload
        except MasterTourClientError:
            raise
        except TimeoutError as exc:
            raise TransportError(
                "Master Tour request timed out. Please try again.",
                server_message=str(exc),
                details={"path": path},
            ) from exc
        except aiohttp.ClientError as exc:
            logger.error("Master Tour client error (%s %s): %s", method, path, exc)
            raise TransportError(
                "Master Tour request failed due to a network/client error.",
                server_message=str(exc),
                details={"path": path},
            ) from exc

    # ── Tours ───────────────────────────────────────────────────────

    async def list_tours(self) -> list[Tour]:
        data = await self._request("GET", "/tours")
        if isinstance(data, dict):
            data = data.get("tours", [])
        return [Tour.from_api(t) for t in data or [] if isinstance(t, dict)]

    async def get_tour_summary(self, tour_id: str, date: str) -> list[dict[str, Any]]:
        """Day summaries for ``date``; the API answers with a list or one object."""
        data = await self._request("GET", f"/tour/{tour_id}/summary/{date}")
        if isinstance(data, list):
            return [d for d in data if isinstance(d, dict)]
        if isinstance(data, dict) and data:
            return [data]
        return []

    async def get_tour_hotels(self, tour_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/tour/{tour_id}/hotels")
        return data if isinstance(data, dict) else {}

    async def get_tour_crew(self, tour_id: str) -> list[dict[str, Any]]:
        data = await self._request("GET", f"/tour/{tour_id}/crew")
        if isinstance(data, dict):
            data = data.get("crew", [])
        return [c for c in data or [] if isinstance(c, dict)]

    async def get_tour_events(self, tour_id: str) -> TourDays:
        data = await self._request("GET", f"/tour/{tour_id}/events")
        return TourDays.from_api(data if isinstance(data, dict) else {})

    async def get_tour_all(self, tour_id: str) -> TourDays:
        data = await self._request("GET", f"/tour/{tour_id}/all")
        return TourDays.from_api(data if isinstance(data, dict) else {})

    # ── Days ────────────────────────────────────────────────────────

    async def get_day(self, day_id: str) -> Day:
        data = await self._request("GET", f"/day/{day_id}")
        day = data.get("day", data) if isinstance(data, dict) else {}
        return Day.from_api(day)

    async def get_day_events(self, day_id: str) -> list[DayEvent]:
        data = await self._request("GET", f"/day/{day_id}/events")
        if isinstance(data, dict):
            data = data.get("events", [])
        return [DayEvent.from_api(e) for e in data or [] if isinstance(e, dict)]

    async def update_day_notes(
        self,
        day_id: str,
        *,
        general_notes: str,
        hotel_notes: str,
        travel_notes: str,
        sync_id: str,
    ) -> Any:
        return await self._request(
            "PUT",
            f"/day/{day_id}",
            body={
                "generalNotes": general_notes,
                "hotelNotes": hotel_notes,
                "travelNotes": travel_notes,
                "syncId": sync_id,
            },
        )

    # ── Itinerary (schedule items) ──────────────────────────────────

    async def create_schedule_item(
        self,
        *,
        parent_day_id: str,
        title: str,
        start_datetime: str,
        end_datetime: str,
        details: str = "",
        is_confirmed: bool = False,
        is_complete: bool = False,
    ) -> dict[str, Any]:
        data = await self._request(
            "POST",
            "/itinerary",
            body={
                "parentDayId": parent_day_id,
                "title": title,
                "details": details,
                "isConfirmed": is_confirmed,
                "isComplete": is_complete,
                "startDatetime": start_datetime,
                "endDatetime": end_datetime,
                "timePriority": "",
            },
        )
        return data if isinstance(data, dict) else {}

    async def update_schedule_item(
        self,
        item_id: str,
        *,
        sync_id: str,
        title: str,
        details: str,
        start_datetime: str,
        end_datetime: str,
        is_confirmed: bool = False,
        is_complete: bool = False,
    ) -> dict[str, Any]:
        data = await self._request(
            "PUT",
            f"/itinerary/{item_id}",
            body={
                "title": title,
                "details": details,
                "isConfirmed": is_confirmed,
                "isComplete": is_complete,
                "timePriority": "",
                "syncId": sync_id,
                "startDatetime": start_datetime,
                "endDatetime": end_datetime,
            },
        )
        return data if isinstance(data, dict) else {}

    async def delete_schedule_item(self, item_id: str, *, sync_id: str) -> Any:
        return await self._request(
            "DELETE",
            f"/itinerary/{item_id}",
            params={"syncId": sync_id},
        )

    # ── Events: guest lists and setlists ────────────────────────────

    async def get_event_guestlist(self, event_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/event/{event_id}/guestlist")
        if isinstance(data, list):
            return {"guests": data}
        return data if isinstance(data, dict) else {}

    async def create_guest_request(
        self,
        *,
        event_id: str,
        name: str,
        tickets: int,
        notes: str | None = None,
        will_call: bool | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"eventId": event_id, "name": name, "tickets": tickets}
        if notes is not None:
            body["notes"] = notes
        if will_call is not None:
            body["willCall"] = will_call
        data = await self._request("POST", "/guestlist", body=body)
        return data if isinstance(data, dict) else {}

    async def update_guest_request(
        self,
        guest_list_id: str,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        data = await self._request("PUT", f"/guestlist/{guest_list_id}", body=fields)
        return data if isinstance(data, dict) else {}

    async def get_event_setlist(self, event_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/event/{event_id}/setlist")
        if isinstance(data, list):
            return {"songs": data}
        return data if isinstance(data, dict) else {}

    # ── Hotels, companies, notifications ────────────────────────────

    async def get_hotel_roomlist(self, hotel_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/hotel/{hotel_id}/roomlist")
        if isinstance(data, list):
            return {"rooms": data}
        return data if isinstance(data, dict) else {}

    async def get_hotel_contacts(self, hotel_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/hotel/{hotel_id}/contacts")
        if isinstance(data, list):
            return {"contacts": data}
        return data if isinstance(data, dict) else {}

    async def get_company_contacts(self, company_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/company/{company_id}/contacts")
        if isinstance(data, list):
            return {"contacts": data}
        return data if isinstance(data, dict) else {}

    async def get_push_notifications(
        self,
        *,
        limit: int | None = None,
        since: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, str] = {}
        if limit is not None:
            params["limit"] = str(limit)
        if since:
            params["since"] = since
        data = await self._request("GET", "/push/history", params=params or None)
        if isinstance(data, list):
            return {"notifications": data}
        return data if isinstance(data, dict) else {}
