"""magneto core library.

Fetches live storefront metadata for an app (version, downloads, rating,
changelog, ...) by scraping its details page, and checks whether the
locally installed version is behind the published one.
"""

from __future__ import annotations

from .client import MagnetoClient, StorePageScraper, upgrade_available
from .config import MagnetoConfig
from .errors import ErrorCode, ErrorKind, MagnetoError
from .http_client import FetchResult, HttpClient
from .models import PageField, PageInfo
from .packages import (
    DistributionVersionLookup,
    InstalledVersionLookup,
    MappingVersionLookup,
)
from .urls import MARKET_PLAY_STORE_URL, build_url

__all__ = [
    "__version__",
    "MARKET_PLAY_STORE_URL",
    "DistributionVersionLookup",
    "ErrorCode",
    "ErrorKind",
    "FetchResult",
    "HttpClient",
    "InstalledVersionLookup",
    "MagnetoClient",
    "MagnetoConfig",
    "MagnetoError",
    "MappingVersionLookup",
    "PageField",
    "PageInfo",
    "StorePageScraper",
    "build_url",
    "upgrade_available",
]

__version__ = "0.1.0"
