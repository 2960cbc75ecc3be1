"""장소 후보 필터링/랭킹 유틸.

1차로 프랜차이즈 블랙리스트를 걸러내고 점수순으로 정렬한 뒤,
필요하면 직전 방문지(anchor) 기준 거리순으로 다시 정렬합니다.
두 단계는 서로 독립적인 순수 함수입니다.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from app.core.geo import MapPoint, centroid
from app.schemas.enums import RankMode
from app.schemas.place import PlaceCandidate, RankOptions
from app.services.brand_blacklist import matches_franchise_keyword

# 점수 가중치. 보정 전 초기값이므로 상대 크기만 의미가 있습니다.
BASE_SCORE = 10.0
DISTANCE_MAX_SCORE = 50.0
THEME_MATCH_SCORE = 40.0
SECONDARY_THEME_WEIGHT = 0.5
PRICE_MATCH_SCORE = 30.0
REGION_BOOST_SCORE = 5.0
RANK_LIMIT = 5

THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "역사·유적": ("사찰", "유적", "고분", "성곽", "서원", "향교", "역사", "박물관"),
    "자연·힐링": ("공원", "정원", "숲", "산책", "전망대", "해변", "호수", "온천", "계곡"),
    "액티비티": ("서핑", "카약", "승마", "패러글라이딩", "짚라인", "클라이밍", "레저"),
    "맛집투어": ("맛집", "시장", "먹거리", "분식", "노포", "현지"),
}

# 여행 테마 값과 표기 변형을 테마 키워드 세트로 연결합니다.
_THEME_ALIASES: dict[str, str] = {
    "역사": "역사·유적",
    "유적": "역사·유적",
    "history": "역사·유적",
    "자연": "자연·힐링",
    "힐링": "자연·힐링",
    "nature": "자연·힐링",
    "activity": "액티비티",
    "맛집": "맛집투어",
    "food": "맛집투어",
}

CHEAP_HINTS: tuple[str, ...] = ("분식", "국밥", "백반", "시장", "포장마차", "김밥", "칼국수", "버거", "치킨")
EXPENSIVE_HINTS: tuple[str, ...] = ("파인다이닝", "오마카세", "코스요리", "스테이크", "와인바", "루프탑", "프렌치", "코스")

_THEME_KEY_PATTERN = re.compile(r"[\s·・.,/_\-]+")


def _normalize_theme_key(hint: str) -> str:
    return _THEME_KEY_PATTERN.sub("", hint.strip().lower())


_THEME_LOOKUP: dict[str, tuple[str, ...]] = {
    **{_normalize_theme_key(alias): THEME_KEYWORDS[key] for alias, key in _THEME_ALIASES.items()},
    **{_normalize_theme_key(key): keywords for key, keywords in THEME_KEYWORDS.items()},
}


def theme_keywords_for(hint: str | None) -> tuple[str, ...]:
    """테마 힌트에 해당하는 키워드 세트를 반환합니다. 없으면 빈 튜플."""
    if not hint:
        return ()
    return _THEME_LOOKUP.get(_normalize_theme_key(hint), ())


def _includes_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _searchable_text(place: PlaceCandidate) -> str:
    return f"{place.title} {place.address} {place.category}"


def _point_of(place: PlaceCandidate) -> MapPoint:
    return MapPoint.from_raw(place.mapx, place.mapy)


def is_blacklisted(place: PlaceCandidate) -> bool:
    """상호명이 프랜차이즈 키워드를 포함하면 True."""
    return matches_franchise_keyword(place.title)


def distance_score(center: MapPoint | None, place: PlaceCandidate) -> float:
    """후보 중심점에 가까울수록 높은 점수 (0~50)."""
    if center is None:
        return 0.0
    score = DISTANCE_MAX_SCORE / (_point_of(place).distance_to(center) + 1.0)
    return max(0.0, min(DISTANCE_MAX_SCORE, score))


def theme_score(place: PlaceCandidate, hint: str | None) -> float:
    keywords = theme_keywords_for(hint)
    if not keywords:
        return 0.0
    return THEME_MATCH_SCORE if _includes_any(_searchable_text(place), keywords) else 0.0


def price_score(place: PlaceCandidate, mode: RankMode) -> float:
    if mode == RankMode.PRICE_LOW:
        hints = CHEAP_HINTS
    elif mode == RankMode.PRICE_HIGH:
        hints = EXPENSIVE_HINTS
    else:
        return 0.0
    return PRICE_MATCH_SCORE if _includes_any(_searchable_text(place), hints) else 0.0


def region_boost(place: PlaceCandidate, region_name: str | None) -> float:
    if not region_name:
        return 0.0
    return REGION_BOOST_SCORE if region_name in f"{place.address} {place.title}" else 0.0


def _sorted_top(scored: list[tuple[float, PlaceCandidate]], limit: int) -> list[PlaceCandidate]:
    # sorted()는 안정 정렬이므로 동점 후보는 입력 순서를 유지합니다.
    ranked = sorted(scored, key=lambda item: item[0], reverse=True)
    return [place for _, place in ranked[:limit]]


def rank_places(
    candidates: Sequence[PlaceCandidate],
    region_name: str | None = None,
    options: RankOptions | None = None,
) -> list[PlaceCandidate]:
    """프랜차이즈를 제외하고 점수순 상위 5개 후보를 반환합니다.

    Args:
        candidates: 검색 API 원본 후보 목록.
        region_name: 지역명. 주소/상호에 포함되면 소폭 가점. 없으면 options.region_name 사용.
        options: 정렬 기준과 테마 힌트.

    Returns:
        점수 내림차순으로 정렬된 최대 5개의 후보.
    """
    resolved = options or RankOptions()
    mode = resolved.mode
    region = region_name if region_name is not None else resolved.region_name

    center = centroid(_point_of(place) for place in candidates) if mode == RankMode.DISTANCE else None

    scored: list[tuple[float, PlaceCandidate]] = []
    for place in candidates:
        if is_blacklisted(place):
            continue

        theme = theme_score(place, resolved.theme_hint)
        if mode != RankMode.THEME:
            theme *= SECONDARY_THEME_WEIGHT

        score = (
            BASE_SCORE
            + distance_score(center, place)
            + theme
            + price_score(place, mode)
            + region_boost(place, region)
        )
        scored.append((score, place))

    return _sorted_top(scored, RANK_LIMIT)


def rank_search_results(
    candidates: Sequence[PlaceCandidate],
    region_name: str | None = None,
    theme_hint: str | None = None,
) -> list[PlaceCandidate]:
    """검색 API 계층용 경량 랭킹.

    블랙리스트 필터, 지역명 가점, 절반 가중치의 테마 점수만 적용합니다.
    거리 기반 재정렬은 호출 측에서 `reorder_by_anchor`로 이어서 수행합니다.
    """
    scored = [
        (
            BASE_SCORE
            + theme_score(place, theme_hint) * SECONDARY_THEME_WEIGHT
            + region_boost(place, region_name),
            place,
        )
        for place in candidates
        if not is_blacklisted(place)
    ]
    return _sorted_top(scored, RANK_LIMIT)


def reorder_by_anchor(places: Sequence[PlaceCandidate], anchor: MapPoint | None = None) -> list[PlaceCandidate]:
    """직전 방문지와 가까운 순으로 재정렬합니다. anchor가 없으면 순서를 유지합니다."""
    if anchor is None:
        return list(places)
    return sorted(places, key=lambda place: _point_of(place).squared_distance_to(anchor))
