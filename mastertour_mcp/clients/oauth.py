"""Two-legged OAuth 1.0a request signing (HMAC-SHA1, no access token).

Master Tour authenticates API consumers with the consumer key/secret only,
so the signing key is ``<encoded secret>&`` with an empty token secret.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from collections.abc import Mapping
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from mastertour_mcp.models import Credentials

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: str) -> str:
    """RFC 5849 section 3.6 encoding: only unreserved characters stay literal."""
    return quote(str(value), safe="-._~")


def normalize_url(url: str) -> str:
    """Base string URI: lowercase scheme/host, no default port, no query."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if parts.port and parts.port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{parts.port}"
    return urlunsplit((scheme, host, parts.path or "/", "", ""))


def build_signature_base_string(
    method: str,
    url: str,
    params: Mapping[str, str] | list[tuple[str, str]],
) -> str:
    pairs = list(params.items()) if isinstance(params, Mapping) else list(params)
    # query parameters embedded in the URL are part of the signed set
    pairs.extend(parse_qsl(urlsplit(url).query, keep_blank_values=True))
    encoded = sorted(
        (percent_encode(k), percent_encode(v))
        for k, v in pairs
        if k != "oauth_signature"
    )
    param_string = "&".join(f"{k}={v}" for k, v in encoded)
    return "&".join(
        (
            method.upper(),
            percent_encode(normalize_url(url)),
            percent_encode(param_string),
        )
    )


def compute_signature(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    """HMAC-SHA1 over the base string, base64 encoded."""
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(
        key.encode("utf-8"),
        base_string.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


class OAuthSigner:
    """Produces ``Authorization`` headers for Master Tour requests."""

    def __init__(self, credentials: Credentials) -> None:
        if not credentials.consumer_key or not credentials.consumer_secret:
            raise ValueError("OAuth consumer key and secret are required.")
        self._credentials = credentials

    def authorize(
        self,
        url: str,
        method: str,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Return the oauth_* protocol parameters, including the signature."""
        oauth_params = {
            "oauth_consumer_key": self._credentials.consumer_key,
            "oauth_nonce": secrets.token_hex(16),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(int(time.time())),
            "oauth_version": OAUTH_VERSION,
        }
        signed = dict(params or {})
        signed.update(oauth_params)
        base_string = build_signature_base_string(method, url, signed)
        oauth_params["oauth_signature"] = compute_signature(
            base_string, self._credentials.consumer_secret
        )
        return oauth_params

    def sign(
        self,
        url: str,
        method: str,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        oauth_params = self.authorize(url, method, params)
        header = ", ".join(
            f'{percent_encode(k)}="{percent_encode(v)}"'
            for k, v in sorted(oauth_params.items())
        )
        return {"Authorization": f"OAuth {header}"}
