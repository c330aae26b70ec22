"""Shared constants used across the client and tool modules."""

from __future__ import annotations

BASE_URL = "https://my.eventric.com/portal/api/v5"
API_VERSION = "7"

# organizationPermissionLevel: 255 = admin, 148+ = edit, below = read only.
EDIT_PERMISSION_LEVEL = 148

# Substring Master Tour puts in its message when write access is denied.
TOUR_PERMISSION_MARKER = "tour permission"

DEFAULT_RESULT_LIMIT = 10
MIN_VENUE_QUERY_LENGTH = 2
SEPARATOR_WIDTH = 50

ENV_CONSUMER_KEY = "MASTERTOUR_KEY"
ENV_CONSUMER_SECRET = "MASTERTOUR_SECRET"
ENV_DEFAULT_TOUR_ID = "MASTERTOUR_DEFAULT_TOUR_ID"
ENV_LOG_LEVEL = "MASTERTOUR_LOG_LEVEL"
