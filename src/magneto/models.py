from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PageField(str, Enum):
    VERSION = "version"
    DOWNLOADS = "downloads"
    PUBLISHED_DATE = "published_date"
    OS_REQUIREMENTS = "os_requirements"
    CONTENT_RATING = "content_rating"
    APP_RATING = "app_rating"
    APP_RATING_COUNT = "app_rating_count"
    CHANGELOG = "changelog"


CHANGELOG_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class PageInfo:
    """Whatever was found on one storefront page.

    A ``None`` field was either not requested or not present on the page.
    """

    url: str
    version: str | None = None
    downloads: str | None = None
    published_date: str | None = None
    os_requirements: str | None = None
    content_rating: str | None = None
    app_rating: str | None = None
    app_rating_count: str | None = None
    changelog: tuple[str, ...] = ()

    @property
    def changelog_text(self) -> str:
        return CHANGELOG_SEPARATOR.join(self.changelog)

    def get(self, field: PageField) -> str | tuple[str, ...] | None:
        return getattr(self, field.value)
