from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

import requests
from requests import exceptions as req_exc

from .errors import ErrorKind, MagnetoError
from .urls import normalize_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    url: str
    status_code: int
    body: bytes
    encoding: str | None = None

    @property
    def text(self) -> str:
        return self.body.decode(self.encoding or "utf-8", errors="replace")


class HttpClient:
    """One blocking GET per call. No retries, no caching.

    Given a ``session``, every call shares it. Given a ``session_factory``
    instead, each calling thread gets its own session.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        timeout_s: float = 45,
        user_agent: str | None = None,
    ) -> None:
        self._session = session
        self._session_factory = session_factory
        self._local = threading.local()
        self._timeout_s = timeout_s
        self._user_agent = user_agent

    def _current_session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
        return session

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        normalized = normalize_url(url)
        request_headers = dict(headers or {})
        if self._user_agent and "User-Agent" not in request_headers:
            request_headers["User-Agent"] = self._user_agent

        logger.debug("GET %s", normalized)
        try:
            resp = self._current_session().get(
                normalized, timeout=self._timeout_s, headers=request_headers
            )
        except req_exc.RequestException as e:
            raise MagnetoError(
                ErrorKind.NETWORK_FAILURE,
                f"Failed to fetch {normalized}: {e}",
            ) from e

        status = int(resp.status_code)
        if not 200 <= status < 300:
            raise MagnetoError(
                ErrorKind.NETWORK_FAILURE,
                f"Failed to fetch {normalized}: HTTP {status}",
                status_code=status,
            )

        return FetchResult(
            url=normalized,
            status_code=status,
            body=resp.content,
            encoding=resp.encoding,
        )
