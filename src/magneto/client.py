from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

import requests

from .config import MagnetoConfig
from .errors import ErrorCode, ErrorKind, MagnetoError
from .extract import extract_page_info
from .http_client import HttpClient
from .models import CHANGELOG_SEPARATOR, PageField, PageInfo
from .packages import DistributionVersionLookup, InstalledVersionLookup
from .tags import APP_VERSION_VARIES_WITH_DEVICE, FIELD_RULES
from .urls import MARKET_PLAY_STORE_URL, build_url

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FIELD_CODES: dict[PageField, ErrorCode] = {
    PageField.VERSION: ErrorCode.VERSION,
    PageField.DOWNLOADS: ErrorCode.DOWNLOADS,
    PageField.PUBLISHED_DATE: ErrorCode.PUBLISHED_DATE,
    PageField.OS_REQUIREMENTS: ErrorCode.OS_REQUIREMENTS,
    PageField.CONTENT_RATING: ErrorCode.CONTENT_RATING,
    PageField.APP_RATING: ErrorCode.APP_RATING,
    PageField.APP_RATING_COUNT: ErrorCode.APP_RATING_COUNT,
    PageField.CHANGELOG: ErrorCode.CHANGELOG,
}


def upgrade_available(installed_version: str, store_version: str) -> bool:
    """Compare versions by plain string inequality.

    Raises VERSION_VARIES_BY_DEVICE when the storefront does not publish a
    single version.
    """

    if store_version == APP_VERSION_VARIES_WITH_DEVICE:
        raise MagnetoError(
            ErrorKind.VERSION_VARIES_BY_DEVICE,
            "App version varies with device.",
            code=ErrorCode.UPDATE,
        )
    return installed_version != store_version


class StorePageScraper:
    """Synchronous fetch-and-extract pipeline for one storefront."""

    def __init__(
        self,
        *,
        http: HttpClient,
        base_url: str = MARKET_PLAY_STORE_URL,
    ) -> None:
        self.http = http
        self.base_url = base_url

    def url_for(self, package_id: str | None) -> str:
        return build_url(package_id, base_url=self.base_url)

    def fetch_page(self, url: str) -> str:
        return self.http.get(url).text

    def verified_url(self, package_id: str) -> str:
        url = self.url_for(package_id)
        self.http.get(url)
        return url

    def page_info(
        self,
        package_id: str,
        fields: Iterable[PageField] | None = None,
    ) -> PageInfo:
        """Fetch the page once and extract ``fields`` (all when None).

        Missing fields are left as None; no missing-field policy is applied.
        """

        url = self.url_for(package_id)
        html = self.fetch_page(url)
        return extract_page_info(html, url=url, fields=fields)

    def field(self, package_id: str, field: PageField) -> str | list[str] | None:
        info = self.page_info(package_id, [field])
        if field is PageField.CHANGELOG:
            return list(info.changelog)

        value = info.get(field)
        if value is None and FIELD_RULES[field].required:
            logger.debug("%s not found on page for %s", field.value, package_id)
            raise MagnetoError(
                ErrorKind.FIELD_NOT_FOUND,
                f"Failed to grab {field.value.replace('_', ' ')} for {package_id}",
                code=_FIELD_CODES[field],
                package_id=package_id,
            )
        return value


class MagnetoClient:
    """Future-returning API over :class:`StorePageScraper`.

    Each operation resolves to exactly one value or one :class:`MagnetoError`.
    Invalid input yields an already-failed future rather than raising.
    """

    def __init__(
        self,
        config: MagnetoConfig | None = None,
        *,
        http: HttpClient | None = None,
        versions: InstalledVersionLookup | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.config = config or MagnetoConfig()
        if http is None:
            # One session per worker thread.
            http = HttpClient(
                session_factory=requests.Session,
                timeout_s=self.config.timeout_s,
                user_agent=self.config.user_agent,
            )
        self.scraper = StorePageScraper(http=http, base_url=self.config.base_url)
        self.versions = versions or DistributionVersionLookup()

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="magneto",
        )

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> MagnetoClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _failed(err: MagnetoError) -> Future:
        fut: Future = Future()
        fut.set_exception(err)
        return fut

    def _resolve(self, package_id: str | None, code: ErrorCode) -> str:
        # Only an omitted id falls back to the configured one.
        resolved = self.config.package_id if package_id is None else package_id
        if not resolved or not resolved.strip():
            raise MagnetoError(
                ErrorKind.INVALID_INPUT,
                "Package id is empty and no default package id applies.",
                code=code,
            )
        return resolved

    def _submit(
        self,
        code: ErrorCode,
        package_id: str | None,
        fn: Callable[[str], T],
    ) -> Future:
        try:
            resolved = self._resolve(package_id, code)
        except MagnetoError as e:
            return self._failed(e)

        def run() -> T:
            try:
                return fn(resolved)
            except MagnetoError as e:
                err = e.with_code(code)
                if err.package_id is None:
                    err.package_id = resolved
                raise err from e.__cause__
            except Exception as e:
                raise MagnetoError(
                    ErrorKind.UNKNOWN,
                    f"Unexpected failure for {resolved}: {e!r}",
                    code=code,
                    package_id=resolved,
                ) from e

        try:
            return self._executor.submit(run)
        except RuntimeError as e:
            # Executor already shut down.
            err = MagnetoError(
                ErrorKind.UNKNOWN,
                f"Cannot schedule work for {resolved}: {e}",
                code=code,
                package_id=resolved,
            )
            err.__cause__ = e
            return self._failed(err)

    def _grab_field(self, field: PageField, package_id: str | None) -> Future:
        return self._submit(
            _FIELD_CODES[field],
            package_id,
            lambda pid: self.scraper.field(pid, field),
        )

    def grab_url(self, package_id: str | None = None) -> Future:
        fut: Future = Future()
        try:
            url = self.scraper.url_for(self._resolve(package_id, ErrorCode.URL))
        except MagnetoError as e:
            fut.set_exception(e.with_code(ErrorCode.URL))
        else:
            fut.set_result(url)
        return fut

    def grab_verified_url(self, package_id: str | None = None) -> Future:
        return self._submit(
            ErrorCode.VERIFIED_URL, package_id, self.scraper.verified_url
        )

    def grab_version(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.VERSION, package_id)

    def grab_downloads(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.DOWNLOADS, package_id)

    def grab_published_date(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.PUBLISHED_DATE, package_id)

    def grab_os_requirements(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.OS_REQUIREMENTS, package_id)

    def grab_content_rating(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.CONTENT_RATING, package_id)

    def grab_app_rating(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.APP_RATING, package_id)

    def grab_app_rating_count(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.APP_RATING_COUNT, package_id)

    def grab_changelog_entries(self, package_id: str | None = None) -> Future:
        return self._grab_field(PageField.CHANGELOG, package_id)

    def grab_changelog(self, package_id: str | None = None) -> Future:
        def joined(pid: str) -> str:
            entries = self.scraper.field(pid, PageField.CHANGELOG) or []
            return CHANGELOG_SEPARATOR.join(entries)

        return self._submit(ErrorCode.CHANGELOG, package_id, joined)

    def grab_page_info(
        self,
        package_id: str | None = None,
        *,
        fields: Iterable[PageField] | None = None,
    ) -> Future:
        wanted = None if fields is None else tuple(fields)
        return self._submit(
            ErrorCode.PAGE_INFO,
            package_id,
            lambda pid: self.scraper.page_info(pid, wanted),
        )

    def is_upgrade_available(self, package_id: str | None = None) -> Future:
        return self._submit(ErrorCode.UPDATE, package_id, self._check_upgrade)

    def _check_upgrade(self, package_id: str) -> bool:
        installed = self.versions.installed_version(package_id)
        store_version = self.scraper.field(package_id, PageField.VERSION)
        available = upgrade_available(installed, str(store_version))
        logger.debug(
            "%s installed=%s store=%s upgrade=%s",
            package_id,
            installed,
            store_version,
            available,
        )
        return available
