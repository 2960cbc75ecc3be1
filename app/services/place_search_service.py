"""슬롯 키워드로 장소를 검색하고 정렬하는 서비스."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from app.core.config import get_settings
from app.core.geo import MapPoint
from app.core.logger import get_logger
from app.schemas.place import PlaceCandidate
from app.services.place_ranker import rank_search_results, reorder_by_anchor
from app.services.places_service import PlacesServiceProtocol

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PlaceSearchLimits:
    """검색 결과 수집 기준."""

    display: int = 15
    fallback_display: int = 20
    min_results: int = 3
    target_results: int = 10
    max_results: int = 10

    @classmethod
    def from_settings(cls) -> PlaceSearchLimits:
        settings = get_settings()
        return cls(
            display=settings.NAVER_SEARCH_DISPLAY,
            fallback_display=settings.NAVER_SEARCH_FALLBACK_DISPLAY,
            min_results=settings.PLACE_SEARCH_MIN_RESULTS,
            target_results=settings.PLACE_SEARCH_TARGET_RESULTS,
            max_results=settings.PLACE_SEARCH_MAX_RESULTS,
        )


def fallback_queries(region: str, category: str | None = None) -> list[str]:
    """카테고리별 백업 검색어 목록. 마지막은 항상 지역명 단독 검색어."""
    base = (region or "").strip()
    category_text = category or ""

    if "식사" in category_text:
        suffixes = ("현지 맛집", "인기 맛집", "베스트 맛집", "한식 맛집", "해산물 맛집", "음식점")
    elif "카페" in category_text:
        suffixes = ("디저트 카페", "분위기 좋은 카페", "핫플 카페", "베이커리")
    else:
        suffixes = ("관광 명소", "랜드마크", "볼거리", "여행지")

    queries = [f"{base} {suffix}".strip() for suffix in suffixes]
    queries.append(base)
    return [query for query in dict.fromkeys(queries) if query]


def _dedupe_key(place: PlaceCandidate) -> str:
    return f"{place.link}|{place.title}"


def _collect_unique(
    collected: list[PlaceCandidate],
    seen: set[str],
    places: Iterable[PlaceCandidate],
) -> None:
    for place in places:
        key = _dedupe_key(place)
        if key in seen:
            continue
        seen.add(key)
        collected.append(place)


def filter_avoided(places: Sequence[PlaceCandidate], avoid_foods: Sequence[str]) -> list[PlaceCandidate]:
    """상호/주소/카테고리에 비선호 음식이 포함된 후보를 제외합니다."""
    lowered_avoid = [str(item).lower() for item in avoid_foods if str(item).strip()]
    if not lowered_avoid:
        return list(places)

    def _allowed(place: PlaceCandidate) -> bool:
        text = f"{place.title} {place.address} {place.category}".lower()
        return not any(item in text for item in lowered_avoid)

    return [place for place in places if _allowed(place)]


def resolve_region(query: str, region: str | None) -> str:
    """요청 지역명이 없으면 검색어의 첫 단어를 지역명으로 사용합니다."""
    if region and region.strip():
        return region.strip()
    tokens = query.split()
    return tokens[0] if tokens else ""


async def search_places(
    places_service: PlacesServiceProtocol,
    query: str,
    *,
    category: str | None = None,
    region: str | None = None,
    avoid_foods: Sequence[str] = (),
    anchor: MapPoint | None = None,
    theme_hint: str | None = None,
    limits: PlaceSearchLimits | None = None,
) -> list[PlaceCandidate]:
    """검색 → 백업 검색 → 비선호 필터 → 랭킹 → 동선 정렬 순으로 후보를 만듭니다."""
    if not query or not query.strip():
        return []

    resolved_limits = limits or PlaceSearchLimits.from_settings()
    resolved_region = resolve_region(query, region)

    collected: list[PlaceCandidate] = []
    seen: set[str] = set()
    _collect_unique(collected, seen, await places_service.search(query, display=resolved_limits.display))

    backup_used = 0
    if len(collected) < resolved_limits.min_results:
        for backup_query in fallback_queries(resolved_region, category):
            backup_used += 1
            _collect_unique(
                collected,
                seen,
                await places_service.search(backup_query, display=resolved_limits.display),
            )
            if len(collected) >= resolved_limits.target_results:
                break

    cleaned = filter_avoided(collected, avoid_foods)
    refined = reorder_by_anchor(rank_search_results(cleaned, resolved_region, theme_hint), anchor)

    last_resort_used = False
    if not refined and resolved_region:
        last_resort_used = True
        refined = await places_service.search(resolved_region, display=resolved_limits.fallback_display)

    logger.info(
        (
            "Place search completed: query=%s region=%s collected=%d after_avoid=%d "
            "backup_queries=%d anchor_used=%s last_resort_used=%s result_count=%d"
        ),
        query,
        resolved_region,
        len(collected),
        len(cleaned),
        backup_used,
        anchor is not None,
        last_resort_used,
        min(len(refined), resolved_limits.max_results),
    )
    return refined[: resolved_limits.max_results]
