from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .models import PageField


@dataclass(frozen=True)
class ExtractionRule:
    marker: str
    open_delim: str
    close_delim: str
    # Missing value is a failure for the caller-facing API, not just None.
    required: bool = True
    # Collect every occurrence instead of the first one.
    repeated: bool = False


# Tied to the storefront's current markup; update here when it changes.
FIELD_RULES: Final[dict[PageField, ExtractionRule]] = {
    PageField.VERSION: ExtractionRule('itemprop="softwareVersion"', ">", "</div>"),
    PageField.DOWNLOADS: ExtractionRule('itemprop="numDownloads"', ">", "</div>"),
    PageField.PUBLISHED_DATE: ExtractionRule(
        'itemprop="datePublished"', ">", "</div>"
    ),
    PageField.OS_REQUIREMENTS: ExtractionRule(
        'itemprop="operatingSystems"', ">", "</div>"
    ),
    PageField.CONTENT_RATING: ExtractionRule(
        'itemprop="contentRating"', ">", "</div>"
    ),
    PageField.APP_RATING: ExtractionRule(
        'class="score"', ">", "</div>", required=False
    ),
    PageField.APP_RATING_COUNT: ExtractionRule(
        'class="reviews-num"', ">", "</span>", required=False
    ),
    PageField.CHANGELOG: ExtractionRule(
        'class="recent-change"', ">", "</div>", required=False, repeated=True
    ),
}

APP_VERSION_VARIES_WITH_DEVICE: Final = "Varies with device"
