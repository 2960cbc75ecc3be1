"""일정 슬롯마다 실제 장소를 하나씩 배정하는 서비스."""

from __future__ import annotations

from typing import Sequence

from app.core.geo import MapPoint
from app.core.logger import get_logger
from app.schemas.enums import SlotCategory
from app.schemas.place import PlaceCandidate
from app.schemas.plan import ItineraryItem
from app.schemas.trip import PlanSlot
from app.services.place_search_service import PlaceSearchLimits, search_places
from app.services.places_service import PlacesServiceProtocol

logger = get_logger(__name__)


def _category_word(category: SlotCategory, *, fallback: str) -> str:
    if category.is_meal:
        return "맛집"
    if category == SlotCategory.CAFE:
        return "카페"
    return fallback


def slot_query(slot: PlanSlot) -> str:
    """슬롯 검색어. 키워드에 업종 단어가 없으면 덧붙입니다."""
    word = _category_word(slot.category, fallback="관광")
    keyword = slot.keyword.strip()
    if word not in keyword.split():
        keyword = f"{keyword} {word}".strip()
    return f"{slot.region} {keyword}".strip()


def backup_query(slot: PlanSlot) -> str:
    """1차 검색이 비었을 때 쓰는 지역 단위 검색어."""
    return f"{slot.region} {_category_word(slot.category, fallback='명소')}".strip()


def _anchor_from(place: PlaceCandidate) -> MapPoint | None:
    point = MapPoint.from_raw(place.mapx, place.mapy)
    if not point.x and not point.y:
        return None
    return point


def _choose(places: Sequence[PlaceCandidate], used_titles: set[str]) -> PlaceCandidate | None:
    for place in places:
        if place.title not in used_titles:
            return place
    # 모두 추천된 상호라면 빈칸 대신 첫 후보를 재사용
    return places[0] if places else None


async def resolve_itinerary(
    slots: Sequence[PlanSlot],
    places_service: PlacesServiceProtocol,
    *,
    avoid_foods: Sequence[str] = (),
    limits: PlaceSearchLimits | None = None,
) -> list[ItineraryItem]:
    """슬롯을 순서대로 검색해 장소를 배정합니다.

    같은 날의 직전 선택 장소를 다음 검색의 기준점으로 넘겨 동선을 줄이고,
    이미 배정한 상호는 가능한 한 다시 고르지 않습니다.
    장소를 찾지 못한 슬롯은 결과에서 빠집니다.
    """
    resolved_limits = limits or PlaceSearchLimits.from_settings()
    day_anchors: dict[int, MapPoint] = {}
    used_titles: set[str] = set()
    items: list[ItineraryItem] = []

    for slot in slots:
        search_kwargs = {
            "category": slot.category.value,
            "region": slot.region,
            "avoid_foods": avoid_foods,
            "anchor": day_anchors.get(slot.day),
            "limits": resolved_limits,
        }
        candidates = await search_places(places_service, slot_query(slot), **search_kwargs)
        if not candidates:
            candidates = await search_places(places_service, backup_query(slot), **search_kwargs)

        chosen = _choose(candidates, used_titles)
        if chosen is None:
            logger.info("No place found for slot: day=%d time=%s keyword=%s", slot.day, slot.time, slot.keyword)
            continue

        used_titles.add(chosen.title)
        if anchor := _anchor_from(chosen):
            day_anchors[slot.day] = anchor

        items.append(
            ItineraryItem(
                day=slot.day,
                time=slot.time,
                category=slot.category,
                region=slot.region,
                place_name=chosen.title,
                address=chosen.address,
                mapx=chosen.mapx,
                mapy=chosen.mapy,
                note=slot.note,
            )
        )

    logger.info("Itinerary resolved: slot_count=%d item_count=%d", len(slots), len(items))
    return items
