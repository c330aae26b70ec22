"""Shared text formatting helpers for tool output."""

from __future__ import annotations

import html
import re
from datetime import datetime
from typing import Any

from mastertour_mcp.constants import SEPARATOR_WIDTH

_NON_SEARCH_CHARS = re.compile(r"[^a-z0-9\s]")


def separator(width: int = SEPARATOR_WIDTH) -> str:
    return "─" * width


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def parse_date(value: str) -> datetime | None:
    """Parse the ``YYYY-MM-DD`` prefix of an API date or datetime string."""
    text = (value or "").strip().split(" ")[0].split("T")[0]
    try:
        return datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return None


def format_date(value: str, *, with_year: bool = True) -> str:
    """``2026-01-04`` -> ``Sun, Jan 4, 2026``; unparseable input is returned as-is."""
    parsed = parse_date(value)
    if parsed is None:
        return value
    text = f"{parsed:%a, %b} {parsed.day}"
    return f"{text}, {parsed.year}" if with_year else text


def format_field(label: str, value: Any, indent: int = 2) -> str:
    """Bullet line for a labelled value, or ``""`` when the value is blank."""
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    return f"{' ' * indent}• {label}: {html.unescape(text)}"


def format_location(*parts: str) -> str:
    return ", ".join(p for p in parts if p)


def format_contacts(contacts: list[dict[str, Any]] | None) -> list[str]:
    lines: list[str] = []
    for contact in contacts or []:
        name = contact.get("contactName") or contact.get("name") or ""
        phone = contact.get("phone") or ""
        fax = contact.get("fax") or ""
        if not name and not phone and not fax:
            continue
        line = f"  • {contact.get('title') or 'Contact'}"
        if name:
            line += f": {name}"
        if phone:
            line += f" 📱 {phone}"
        if fax:
            line += f" 📠 {fax}"
        lines.append(line)
    return lines or ["  ℹ️ No contacts listed"]


def normalize_for_search(value: str) -> str:
    """Lowercase and strip punctuation so queries match loosely formatted names."""
    return _NON_SEARCH_CHARS.sub("", (value or "").lower()).strip()
