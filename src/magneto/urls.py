from __future__ import annotations

from urllib.parse import ParseResult, urlparse, urlunparse

from .errors import ErrorCode, ErrorKind, MagnetoError

MARKET_PLAY_STORE_URL = "https://play.google.com/store/apps/details?id="


def build_url(package_id: str | None, *, base_url: str = MARKET_PLAY_STORE_URL) -> str:
    """Return the storefront details URL for ``package_id``.

    The identifier is appended verbatim; nothing about its structure is
    interpreted.
    """

    if not package_id or not package_id.strip():
        raise MagnetoError(
            ErrorKind.INVALID_INPUT,
            "Failed to grab url: package id is empty.",
            code=ErrorCode.URL,
        )
    return base_url + package_id


def normalize_url(raw_url: str) -> str:
    """Normalize a URL before fetching.

    - Lowercases scheme + hostname.
    - Strips fragments.
    """

    parsed: ParseResult = urlparse(raw_url)
    parsed = parsed._replace(
        scheme=(parsed.scheme or "").lower(),
        netloc=(parsed.netloc or "").lower(),
        fragment="",
    )
    return urlunparse(parsed)
