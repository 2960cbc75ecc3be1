"""요청/LLM/외부 검색 API 타임아웃 정책."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.config import Settings, get_settings

_MIN_SECONDS = 1
_CONNECT_RATIO = 0.3
_CONNECT_CAP_SECONDS = 5.0


def _as_seconds(value: int | float | None, fallback: int, *, ceiling: int | None = None) -> int:
    """설정값을 1초 이상 정수로 맞추고, ceiling이 있으면 그 값을 넘지 않게 자릅니다."""
    try:
        seconds = int(value if value is not None else fallback)
    except (TypeError, ValueError):
        seconds = fallback

    seconds = max(_MIN_SECONDS, seconds)
    return min(seconds, ceiling) if ceiling is not None else seconds


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """계층형 타임아웃 정책.

    HTTP 요청 전체 > LLM 호출 / 외부 API > 네이버 검색 순으로
    하위 타임아웃이 상위 값을 넘지 않습니다.
    """

    request_timeout_seconds: int
    llm_timeout_seconds: int
    external_api_timeout_seconds: int
    naver_search_timeout_seconds: int

    @classmethod
    def from_settings(cls, settings: Settings) -> TimeoutPolicy:
        request = _as_seconds(settings.REQUEST_TIMEOUT_SECONDS, 60)
        external = _as_seconds(settings.EXTERNAL_API_TIMEOUT_SECONDS, 15, ceiling=request)
        return cls(
            request_timeout_seconds=request,
            llm_timeout_seconds=_as_seconds(settings.LLM_TIMEOUT_SECONDS, 30, ceiling=request),
            external_api_timeout_seconds=external,
            naver_search_timeout_seconds=_as_seconds(settings.NAVER_SEARCH_TIMEOUT_SECONDS, 10, ceiling=external),
        )


def build_timeout_policy(settings: Settings) -> TimeoutPolicy:
    """설정값으로 타임아웃 정책을 생성합니다."""
    return TimeoutPolicy.from_settings(settings)


def get_timeout_policy(settings: Settings | None = None) -> TimeoutPolicy:
    """현재 설정 기준 타임아웃 정책을 반환합니다."""
    return TimeoutPolicy.from_settings(settings or get_settings())


def to_requests_timeout(total_timeout_seconds: int) -> tuple[float, float]:
    """전체 예산을 requests의 (connect, read) 타임아웃으로 나눕니다."""
    total = float(max(_MIN_SECONDS, int(total_timeout_seconds)))
    connect = min(_CONNECT_CAP_SECONDS, max(1.0, total * _CONNECT_RATIO))
    if total <= connect:
        return (connect, max(0.5, total * 0.5))
    return (connect, max(1.0, total - connect))
