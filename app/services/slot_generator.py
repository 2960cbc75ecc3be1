"""여행 정보로부터 일자별 검색 슬롯을 생성합니다.

템플릿 기반으로 시간대별 카테고리 블록을 만들고, 식사 블록에는 하루 안에서
겹치지 않는 음식 종류를 배정해 검색 키워드를 조합합니다. 같은 입력과 같은
날짜에 대해 항상 같은 결과를 반환합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Sequence

from app.core.logger import get_logger
from app.schemas.enums import Season, SlotCategory, Theme
from app.schemas.trip import PlanSlot, TripInfo

logger = get_logger(__name__)

DEFAULT_REGION = "서울"
CHEAP_BUDGET_MAX_KRW = 200_000
PREMIUM_BUDGET_MIN_KRW = 700_000
CHEAP_SUFFIX = "가성비"
PREMIUM_SUFFIX = "고급"
DUPLICATE_KEYWORD_SUFFIX = "추천"
DEFAULT_BREAKFAST = "한식 아침식사"

# 긴 접미사부터 검사합니다.
_REGION_SUFFIXES: tuple[str, ...] = ("특별자치도", "특별자치시", "특별시", "광역시", "시", "군", "구", "도")
_MIN_REGION_STEM_LENGTH = 2


@dataclass(frozen=True, slots=True)
class TemplateBlock:
    """하루 템플릿의 시간 블록."""

    time: str
    category: SlotCategory


FULL_DAY_TEMPLATE: tuple[TemplateBlock, ...] = (
    TemplateBlock("09:00", SlotCategory.BREAKFAST),
    TemplateBlock("11:00", SlotCategory.SIGHTSEEING),
    TemplateBlock("13:00", SlotCategory.LUNCH),
    TemplateBlock("15:00", SlotCategory.SIGHTSEEING),
    TemplateBlock("18:00", SlotCategory.DINNER),
    TemplateBlock("20:00", SlotCategory.NIGHT_ACTIVITY),
)

BASE_CUISINES: tuple[str, ...] = ("한식", "해산물", "일식", "중식", "양식", "분식")

CUISINE_POOLS: Mapping[Theme, tuple[str, ...]] = MappingProxyType(
    {
        Theme.FOOD: ("한식", "해산물", "일식", "중식", "양식", "분식"),
        Theme.HISTORY: ("한식", "해산물", "분식", "중식", "일식", "양식"),
        Theme.NATURE: ("해산물", "한식", "양식", "분식", "일식", "중식"),
        Theme.CAFE: ("한식", "양식", "일식", "중식", "해산물", "분식"),
        Theme.ACTIVITY: ("한식", "분식", "일식", "중식", "양식", "해산물"),
    }
)

REGION_BREAKFAST: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "전주": ("콩나물국밥", "한식 아침식사"),
        "부산": ("돼지국밥", "해장국", "한식 아침식사"),
        "경주": ("한식 아침식사", "국밥", "해장국"),
        "강릉": ("순두부 백반", "한식 아침식사"),
        "제주": ("고기국수", "한식 아침식사"),
    }
)

REGION_SEASONAL: Mapping[str, Mapping[Season, tuple[str, ...]]] = MappingProxyType(
    {
        "경주": MappingProxyType(
            {
                Season.SPRING: ("봄나물 한정식",),
                Season.SUMMER: ("냉면", "물회"),
                Season.FALL: ("버섯 전골",),
                Season.WINTER: ("국밥", "수육국밥"),
            }
        ),
        "부산": MappingProxyType(
            {
                Season.SUMMER: ("물회", "회센터"),
                Season.WINTER: ("돼지국밥",),
            }
        ),
        "강릉": MappingProxyType(
            {
                Season.SUMMER: ("물회", "생선구이"),
                Season.WINTER: ("초당순두부",),
            }
        ),
        "제주": MappingProxyType(
            {
                Season.SUMMER: ("갈치회", "해산물"),
                Season.WINTER: ("고기국수", "흑돼지"),
            }
        ),
    }
)

SIGHTSEEING_KEYWORDS: Mapping[Theme, str] = MappingProxyType(
    {
        Theme.HISTORY: "유적지 박물관 성곽 사적지",
        Theme.NATURE: "자연 명소 전망 포토스팟",
        Theme.ACTIVITY: "체험 액티비티 체험장",
        Theme.CAFE: "포토 스팟",
    }
)
DEFAULT_SIGHTSEEING_KEYWORD = "명소"
CAFE_KEYWORD = "디저트 카페"

NIGHT_ACTIVITY_KEYWORDS: Mapping[Theme, str] = MappingProxyType(
    {
        Theme.FOOD: "야시장 포장마차",
        Theme.HISTORY: "야간 명소",
    }
)
DEFAULT_NIGHT_ACTIVITY_KEYWORD = "야경 명소"

_MEAL_LABELS: Mapping[SlotCategory, str] = MappingProxyType(
    {
        SlotCategory.LUNCH: "점심",
        SlotCategory.DINNER: "저녁",
    }
)


@dataclass(slots=True)
class SlotGenerationContext:
    """한 번의 슬롯 생성 호출 동안만 유지되는 사용 기록."""

    used_cuisines_by_day: dict[int, set[str]] = field(default_factory=dict)
    used_cuisines: set[str] = field(default_factory=set)
    used_keywords: set[str] = field(default_factory=set)

    def cuisines_for_day(self, day: int) -> set[str]:
        return self.used_cuisines_by_day.setdefault(day, set())

    def mark_cuisine(self, day: int, cuisine: str) -> None:
        self.cuisines_for_day(day).add(cuisine)
        self.used_cuisines.add(cuisine)

    def claim_keyword(self, keyword: str) -> str:
        """여행 전체에서 중복되지 않는 키워드를 확정합니다."""
        claimed = keyword
        if claimed in self.used_keywords:
            claimed = f"{keyword} {DUPLICATE_KEYWORD_SUFFIX}"
            counter = 2
            while claimed in self.used_keywords:
                claimed = f"{keyword} {DUPLICATE_KEYWORD_SUFFIX} {counter}"
                counter += 1
        self.used_keywords.add(claimed)
        return claimed


def normalize_region(region: str | None, default: str = DEFAULT_REGION) -> str:
    """행정구역 접미사(시/군/구 등)를 제거합니다. 비어 있으면 기본 지역을 반환합니다."""
    text = (region or "").strip()
    for suffix in _REGION_SUFFIXES:
        if text.endswith(suffix) and len(text) - len(suffix) >= _MIN_REGION_STEM_LENGTH:
            text = text[: -len(suffix)].strip()
            break
    return text or default


def month_to_season(month: int) -> Season:
    if month in (3, 4, 5):
        return Season.SPRING
    if month in (6, 7, 8):
        return Season.SUMMER
    if month in (9, 10, 11):
        return Season.FALL
    return Season.WINTER


def resolve_season(trip_info: TripInfo, today: date | None = None) -> Season:
    """명시된 계절 힌트를 우선하고, 없으면 오늘 날짜의 월로 계절을 정합니다."""
    if trip_info.season_hint is not None:
        return trip_info.season_hint
    return month_to_season((today or date.today()).month)


def day_template(day: int, total_days: int) -> tuple[TemplateBlock, ...]:
    """첫날은 아침식사, 마지막 날은 야간활동을 제외한 템플릿."""
    is_first = day == 1
    is_last = day == total_days
    return tuple(
        block
        for block in FULL_DAY_TEMPLATE
        if not (is_first and block.category == SlotCategory.BREAKFAST)
        and not (is_last and block.category == SlotCategory.NIGHT_ACTIVITY)
    )


def cuisine_pool(theme: Theme | None) -> tuple[str, ...]:
    if theme is None:
        return BASE_CUISINES
    return CUISINE_POOLS.get(theme, BASE_CUISINES)


def is_excluded(keyword: str, avoid_foods: Sequence[str]) -> bool:
    """키워드에 비선호 음식 문자열이 포함되면 True (대소문자 무시)."""
    if not avoid_foods:
        return False
    lowered = keyword.lower()
    return any(str(item).lower() in lowered for item in avoid_foods if str(item))


def next_cuisine(
    day: int,
    context: SlotGenerationContext,
    theme: Theme | None,
    avoid_foods: Sequence[str],
) -> str:
    """오늘 사용하지 않은 음식 종류를 고르고 사용 기록에 남깁니다.

    여행 전체에서 아직 쓰지 않은 종류를 먼저 고려하고, 비선호 목록은
    가능한 범위에서만 반영합니다. 모두 제외되면 풀의 첫 항목을 사용합니다.
    """
    pool = cuisine_pool(theme)
    used_today = context.cuisines_for_day(day)

    candidates = [cuisine for cuisine in pool if cuisine not in used_today]
    ordered = [cuisine for cuisine in candidates if cuisine not in context.used_cuisines] + [
        cuisine for cuisine in candidates if cuisine in context.used_cuisines
    ]

    pick = next((cuisine for cuisine in ordered if not is_excluded(cuisine, avoid_foods)), None)
    if pick is None:
        pick = next((cuisine for cuisine in pool if not is_excluded(cuisine, avoid_foods)), pool[0])

    context.mark_cuisine(day, pick)
    return pick


def budget_suffix(budget_krw: int | None) -> str:
    if budget_krw is None:
        return ""
    if budget_krw <= CHEAP_BUDGET_MAX_KRW:
        return f" {CHEAP_SUFFIX}"
    if budget_krw >= PREMIUM_BUDGET_MIN_KRW:
        return f" {PREMIUM_SUFFIX}"
    return ""


def meal_keyword(
    region: str,
    category: SlotCategory,
    cuisine: str,
    *,
    budget_krw: int | None = None,
    season: Season | None = None,
    avoid_foods: Sequence[str] = (),
) -> str:
    """식사 블록의 검색 키워드를 조합합니다."""
    price = budget_suffix(budget_krw)

    if category == SlotCategory.BREAKFAST:
        preferred = REGION_BREAKFAST.get(region, ())
        base = next((item for item in preferred if not is_excluded(item, avoid_foods)), DEFAULT_BREAKFAST)
        return f"{base}{price}"

    label = _MEAL_LABELS.get(category, "점심")
    seasonal_menu = REGION_SEASONAL.get(region, {}).get(season, ()) if season is not None else ()
    seasonal = next((item for item in seasonal_menu if not is_excluded(item, avoid_foods)), None)
    if seasonal:
        return f"{seasonal} {label} 맛집{price}"
    return f"{cuisine} {label} 맛집{price}"


def non_meal_keyword(category: SlotCategory, theme: Theme | None) -> str:
    """관광/카페/야간활동 블록의 테마별 고정 키워드."""
    if category == SlotCategory.CAFE:
        return CAFE_KEYWORD
    if category == SlotCategory.SIGHTSEEING:
        return SIGHTSEEING_KEYWORDS.get(theme, DEFAULT_SIGHTSEEING_KEYWORD) if theme else DEFAULT_SIGHTSEEING_KEYWORD
    return NIGHT_ACTIVITY_KEYWORDS.get(theme, DEFAULT_NIGHT_ACTIVITY_KEYWORD) if theme else DEFAULT_NIGHT_ACTIVITY_KEYWORD


def generate_slots(trip_info: TripInfo, today: date | None = None) -> list[PlanSlot]:
    """여행 정보로 일자/시간순 일정 슬롯을 생성합니다.

    Args:
        trip_info: 구조화된 여행 정보.
        today: 계절 힌트가 없을 때 계절 판단에 사용할 날짜. 기본값은 오늘.

    Returns:
        일차 오름차순, 하루 안에서는 시간순으로 정렬된 슬롯 목록.
    """
    region = normalize_region(trip_info.region)
    total_days = trip_info.effective_days
    season = resolve_season(trip_info, today)
    theme = trip_info.theme
    avoid_foods = trip_info.avoid_foods

    context = SlotGenerationContext()
    slots: list[PlanSlot] = []

    for day in range(1, total_days + 1):
        for block in day_template(day, total_days):
            if block.category.is_meal:
                cuisine = next_cuisine(day, context, theme, avoid_foods)
                keyword = meal_keyword(
                    region,
                    block.category,
                    cuisine,
                    budget_krw=trip_info.budget_krw,
                    season=season,
                    avoid_foods=avoid_foods,
                )
            else:
                keyword = non_meal_keyword(block.category, theme)

            slots.append(
                PlanSlot(
                    day=day,
                    time=block.time,
                    region=region,
                    category=block.category,
                    keyword=context.claim_keyword(keyword),
                )
            )

    logger.info(
        "Slots generated: region=%s days=%d season=%s theme=%s slot_count=%d",
        region,
        total_days,
        season.value,
        theme.value if theme else None,
        len(slots),
    )
    return slots
