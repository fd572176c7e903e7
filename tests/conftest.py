from __future__ import annotations

import pytest
import requests

from magneto.http_client import HttpClient

from .fakes import FakeSession


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def http(session: FakeSession) -> HttpClient:
    return HttpClient(session, timeout_s=5)  # type: ignore[arg-type]


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection refused")
