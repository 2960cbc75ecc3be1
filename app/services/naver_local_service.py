"""네이버 Local 검색 API 서비스 구현."""

from __future__ import annotations

import asyncio
import html
import re
from functools import lru_cache
from typing import Any

import requests

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy, to_requests_timeout
from app.schemas.place import PlaceCandidate
from app.services.places_service import PlacesServiceProtocol

logger = get_logger(__name__)

_HTML_TAG_PATTERN = re.compile(r"<[^>]+>")


class NaverLocalError(RuntimeError):
    """네이버 Local 검색 설정 실패 시 발생하는 예외."""


def strip_html(text: str | None) -> str:
    """검색 결과 강조 태그(<b> 등)를 제거합니다."""
    return html.unescape(_HTML_TAG_PATTERN.sub("", text or "")).strip()


class NaverLocalService(PlacesServiceProtocol):
    """네이버 Local 검색 API 기반 Places 서비스."""

    _SEARCH_URL = "https://openapi.naver.com/v1/search/local.json"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout_seconds: int = 10,
        display: int = 15,
    ) -> None:
        if not client_id or not client_secret:
            raise NaverLocalError("NAVER_SEARCH_CLIENT_ID / NAVER_SEARCH_CLIENT_SECRET is not configured.")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout_seconds = timeout_seconds
        self._display = display

    @classmethod
    def from_settings(cls) -> NaverLocalService:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        if not (settings.NAVER_SEARCH_CLIENT_ID and settings.NAVER_SEARCH_CLIENT_SECRET):
            logger.error("Naver search credentials are not configured.")
        return cls(
            client_id=settings.NAVER_SEARCH_CLIENT_ID or "",
            client_secret=settings.NAVER_SEARCH_CLIENT_SECRET or "",
            timeout_seconds=timeout_policy.naver_search_timeout_seconds,
            display=settings.NAVER_SEARCH_DISPLAY,
        )

    async def search(self, query: str, display: int | None = None) -> list[PlaceCandidate]:
        """텍스트 쿼리로 장소를 검색합니다."""
        if not query.strip():
            return []

        params = {"query": query, "display": display or self._display, "sort": "random"}
        data = await self._request(params)

        items_raw = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items_raw, list):
            items_raw = []
        places = [
            place for place in (self._map_place(item) for item in items_raw if isinstance(item, dict)) if place
        ]
        logger.info("Naver local search completed: query=%s candidate_count=%d", query, len(places))
        return places

    async def _request(self, params: dict[str, Any]) -> Any:
        headers = {
            "X-Naver-Client-Id": self._client_id,
            "X-Naver-Client-Secret": self._client_secret,
        }
        request_timeout = to_requests_timeout(self._timeout_seconds)

        def _send() -> requests.Response:
            with requests.Session() as session:
                return session.get(
                    self._SEARCH_URL,
                    params=params,
                    headers=headers,
                    timeout=request_timeout,
                )

        try:
            response = await asyncio.to_thread(_send)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as exc:
            response = exc.response
            status_code = response.status_code if response is not None else None
            body = (response.text or "")[:200] if response is not None else ""
            logger.warning("Naver local API error: status=%s query=%s body=%s", status_code, params.get("query"), body)
            return None
        except requests.RequestException as exc:
            logger.warning("Naver local API request failed: %s", exc)
            return None
        except ValueError as exc:
            logger.warning("Naver local API response parse failed: %s", exc)
            return None

    def _map_place(self, raw: dict[str, Any]) -> PlaceCandidate | None:
        title = strip_html(raw.get("title"))
        if not title:
            return None

        return PlaceCandidate(
            title=title,
            address=raw.get("roadAddress") or raw.get("address") or "",
            mapx=str(raw.get("mapx") or "0"),
            mapy=str(raw.get("mapy") or "0"),
            link=raw.get("link") or "",
            category=raw.get("category") or "",
        )


@lru_cache(maxsize=1)
def get_naver_local_service() -> NaverLocalService:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return NaverLocalService.from_settings()
