"""여행 계획 도메인에서 공유하는 열거형 정의."""

from enum import StrEnum


class Theme(StrEnum):
    """여행 테마."""

    HISTORY = "역사"
    FOOD = "맛집"
    NATURE = "자연"
    ACTIVITY = "액티비티"
    CAFE = "카페"


class Season(StrEnum):
    """계절."""

    SPRING = "봄"
    SUMMER = "여름"
    FALL = "가을"
    WINTER = "겨울"


class SlotCategory(StrEnum):
    """일정 슬롯 카테고리."""

    BREAKFAST = "아침식사"
    LUNCH = "점심식사"
    DINNER = "저녁식사"
    SIGHTSEEING = "관광"
    CAFE = "카페"
    NIGHT_ACTIVITY = "야간활동"

    @property
    def is_meal(self) -> bool:
        return self in _MEAL_CATEGORIES


_MEAL_CATEGORIES = frozenset({SlotCategory.BREAKFAST, SlotCategory.LUNCH, SlotCategory.DINNER})


class RankMode(StrEnum):
    """장소 후보 정렬 기준."""

    DISTANCE = "distance"
    THEME = "theme"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
