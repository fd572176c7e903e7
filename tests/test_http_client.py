from __future__ import annotations

import threading

import pytest

from magneto.errors import ErrorKind, MagnetoError
from magneto.http_client import HttpClient
from magneto.urls import MARKET_PLAY_STORE_URL

from .fakes import DETAILS_PAGE, FakeSession


def test_get_returns_body_text(session, http):
    url = session.add_page("com.example.app", DETAILS_PAGE)

    result = http.get(url)

    assert result.status_code == 200
    assert result.text == DETAILS_PAGE
    assert session.calls[0][1] == 5


def test_get_issues_exactly_one_request_on_failure(session, http):
    url = session.add_page("com.example.down", "oops", status_code=503)

    with pytest.raises(MagnetoError) as info:
        http.get(url)

    assert info.value.kind is ErrorKind.NETWORK_FAILURE
    assert info.value.status_code == 503
    assert len(session.calls) == 1


def test_transport_error_is_wrapped_with_cause(session, http, connection_error):
    url = session.add_error("com.example.app", connection_error)

    with pytest.raises(MagnetoError) as info:
        http.get(url)

    assert info.value.kind is ErrorKind.NETWORK_FAILURE
    assert info.value.status_code is None
    assert info.value.__cause__ is connection_error


def test_user_agent_header_is_sent(session):
    url = session.add_page("com.example.app", DETAILS_PAGE)
    http = HttpClient(session, user_agent="magneto-test")  # type: ignore[arg-type]

    http.get(url, headers={"Accept-Language": "en"})

    _, _, headers = session.calls[0]
    assert headers == {"Accept-Language": "en", "User-Agent": "magneto-test"}


def test_no_content_status_is_success(session, http):
    url = session.add_page("com.example.app", "", status_code=204)
    assert http.get(url).status_code == 204


@pytest.mark.parametrize("status_code", [300, 304])
def test_unfollowed_redirect_status_is_network_failure(session, http, status_code):
    url = session.add_page("com.example.app", "", status_code=status_code)

    with pytest.raises(MagnetoError) as info:
        http.get(url)

    assert info.value.kind is ErrorKind.NETWORK_FAILURE
    assert info.value.status_code == status_code


def test_session_factory_gives_each_thread_its_own_session():
    created: list[FakeSession] = []

    def factory() -> FakeSession:
        s = FakeSession()
        s.add_page("com.example.app", DETAILS_PAGE)
        created.append(s)
        return s

    http = HttpClient(session_factory=factory)  # type: ignore[arg-type]
    url = MARKET_PLAY_STORE_URL + "com.example.app"

    http.get(url)
    http.get(url)
    assert len(created) == 1

    worker = threading.Thread(target=http.get, args=(url,))
    worker.start()
    worker.join(timeout=5)

    assert len(created) == 2
    assert [len(s.calls) for s in created] == [2, 1]
