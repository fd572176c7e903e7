from __future__ import annotations

import threading
from dataclasses import dataclass, field

from magneto.urls import MARKET_PLAY_STORE_URL

DETAILS_PAGE = """<!doctype html>
<html><head><title>Example App - Apps on Google Play</title></head>
<body>
<div class="score-container">
  <div class="score" aria-label=" Rated 4.4 stars out of five stars ">4.4</div>
  <span class="reviews-num" aria-label=" 1,234,567 ratings ">1,234,567</span>
</div>
<div class="details-section whatsnew">
  <div class="recent-change">Faster startup<br>Fixed crash on rotate<br/>New &amp; improved widgets</div>
</div>
<div class="details-section metadata">
  <div class="meta-info"><div class="title">Updated</div>
    <div class="content" itemprop="datePublished">March 3, 2017</div></div>
  <div class="meta-info"><div class="title">Installs</div>
    <div class="content" itemprop="numDownloads"> 1,000,000 - 5,000,000 </div></div>
  <div class="meta-info"><div class="title">Current Version</div>
    <div class="content" itemprop="softwareVersion"> 2.0 </div></div>
  <div class="meta-info"><div class="title">Requires Android</div>
    <div class="content" itemprop="operatingSystems"> 4.1 and up </div></div>
  <div class="meta-info"><div class="title">Content Rating</div>
    <div class="content" itemprop="contentRating">Everyone</div></div>
</div>
</body></html>
"""

BARE_PAGE = """<!doctype html>
<html><body><div class="content">Nothing useful here</div></body></html>
"""


def details_page(*, version: str = "2.0") -> str:
    return DETAILS_PAGE.replace("> 2.0 <", f"> {version} <")


@dataclass
class FakeResponse:
    url: str
    status_code: int = 200
    text: str = ""
    headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "text/html; charset=utf-8"}
    )
    encoding: str | None = "utf-8"

    @property
    def content(self) -> bytes:
        return self.text.encode("utf-8")


class FakeSession:
    """Stands in for requests.Session; routes by exact URL."""

    def __init__(self) -> None:
        self.routes: dict[str, FakeResponse | Exception] = {}
        self.calls: list[tuple[str, float | None, dict[str, str]]] = []
        self._lock = threading.Lock()

    def add_page(self, package_id: str, html: str, *, status_code: int = 200) -> str:
        url = MARKET_PLAY_STORE_URL + package_id
        self.routes[url] = FakeResponse(url=url, status_code=status_code, text=html)
        return url

    def add_error(self, package_id: str, error: Exception) -> str:
        url = MARKET_PLAY_STORE_URL + package_id
        self.routes[url] = error
        return url

    def get(self, url, timeout=None, headers=None):
        with self._lock:
            self.calls.append((url, timeout, dict(headers or {})))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(url=url, status_code=404, text="Not Found")
        if isinstance(route, Exception):
            raise route
        return route


