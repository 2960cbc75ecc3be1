"""네이버 Local 검색 서비스 테스트."""

from __future__ import annotations

import asyncio

import pytest
import requests

from app.core.config import get_settings
from app.services import naver_local_service
from app.services.naver_local_service import NaverLocalError, NaverLocalService, strip_html


class _FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str = "") -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _install_fake_session(monkeypatch, *, response: _FakeResponse | None = None, error: Exception | None = None):
    captured: dict = {}

    class _FakeSession:
        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return False

        def get(self, url, params=None, headers=None, timeout=None):
            captured.update(url=url, params=params, headers=headers, timeout=timeout)
            if error is not None:
                raise error
            return response

    monkeypatch.setattr(naver_local_service.requests, "Session", _FakeSession)
    return captured


def _service() -> NaverLocalService:
    return NaverLocalService(client_id="client-id", client_secret="client-secret", timeout_seconds=10)


def test_search_maps_items_and_sends_credentials(monkeypatch) -> None:
    payload = {
        "items": [
            {
                "title": "<b>황남</b> 국밥 &amp; 전",
                "roadAddress": "경북 경주시 포석로 1050",
                "address": "경북 경주시 황남동 1",
                "mapx": "1292150000",
                "mapy": "358350000",
                "link": "https://example.com/hwangnam",
                "category": "한식>국밥",
            },
            {"title": "<b></b>", "address": "경북 경주시"},
            {"title": "성동 시장", "address": "경북 경주시 성동동", "mapx": 1292100000},
        ]
    }
    captured = _install_fake_session(monkeypatch, response=_FakeResponse(payload))

    places = asyncio.run(_service().search("경주 국밥"))

    assert [place.title for place in places] == ["황남 국밥 & 전", "성동 시장"]
    assert places[0].address == "경북 경주시 포석로 1050"
    assert places[0].category == "한식>국밥"
    assert places[1].address == "경북 경주시 성동동"
    assert places[1].mapx == "1292100000"
    assert places[1].mapy == "0"
    assert captured["params"] == {"query": "경주 국밥", "display": 15, "sort": "random"}
    assert captured["headers"] == {"X-Naver-Client-Id": "client-id", "X-Naver-Client-Secret": "client-secret"}
    assert captured["timeout"] == (3.0, 7.0)


def test_search_uses_explicit_display(monkeypatch) -> None:
    captured = _install_fake_session(monkeypatch, response=_FakeResponse({"items": []}))

    assert asyncio.run(_service().search("경주", display=20)) == []
    assert captured["params"]["display"] == 20


def test_http_error_returns_empty_list(monkeypatch) -> None:
    _install_fake_session(monkeypatch, response=_FakeResponse(status_code=429, text="rate limited"))

    assert asyncio.run(_service().search("경주 카페")) == []


def test_connection_error_returns_empty_list(monkeypatch) -> None:
    _install_fake_session(monkeypatch, error=requests.ConnectionError("unreachable"))

    assert asyncio.run(_service().search("경주 카페")) == []


def test_invalid_json_returns_empty_list(monkeypatch) -> None:
    _install_fake_session(monkeypatch, response=_FakeResponse(None))

    assert asyncio.run(_service().search("경주 카페")) == []


def test_blank_query_skips_request(monkeypatch) -> None:
    captured = _install_fake_session(monkeypatch, response=_FakeResponse({"items": []}))

    assert asyncio.run(_service().search("  ")) == []
    assert captured == {}


def test_missing_credentials_raise() -> None:
    with pytest.raises(NaverLocalError):
        NaverLocalService(client_id="", client_secret="secret")


def test_from_settings_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("NAVER_SEARCH_CLIENT_ID", "env-id")
    monkeypatch.setenv("NAVER_SEARCH_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("NAVER_SEARCH_DISPLAY", "500")
    get_settings.cache_clear()

    try:
        service = NaverLocalService.from_settings()
    finally:
        get_settings.cache_clear()

    assert service._display == 100
    assert service._client_id == "env-id"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("<b>경주</b> 맛집", "경주 맛집"), ("A &amp; B", "A & B"), (None, ""), ("  plain  ", "plain")],
)
def test_strip_html(raw: str | None, expected: str) -> None:
    assert strip_html(raw) == expected


@pytest.mark.parametrize("payload", [[{"title": "황남 국밥"}], {"items": "broken"}, {"items": [1, None, "x"]}])
def test_unexpected_payload_shape_returns_empty_list(monkeypatch, payload) -> None:
    _install_fake_session(monkeypatch, response=_FakeResponse(payload))

    assert asyncio.run(_service().search("경주 국밥")) == []
