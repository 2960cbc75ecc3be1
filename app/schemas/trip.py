"""여행 정보와 일정 슬롯 스키마."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.enums import Season, SlotCategory, Theme

_THEME_ALIASES: dict[str, Theme] = {
    "history": Theme.HISTORY,
    "food": Theme.FOOD,
    "nature": Theme.NATURE,
    "activity": Theme.ACTIVITY,
    "cafe": Theme.CAFE,
}

_SEASON_ALIASES: dict[str, Season] = {
    "spring": Season.SPRING,
    "summer": Season.SUMMER,
    "fall": Season.FALL,
    "autumn": Season.FALL,
    "winter": Season.WINTER,
}


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


class TripInfo(BaseModel):
    """자유 입력에서 추출한 구조화된 여행 정보.

    잘못된 선택 필드는 검증 오류 대신 기본값(None 또는 빈 목록)으로 대체됩니다.
    """

    model_config = ConfigDict(populate_by_name=True)

    region: str = Field(default="", description="도시/지역명 (예: 경주)")
    nights: int | None = Field(default=None, description="숙박 일수 (N박)")
    days: int | None = Field(default=None, description="여행 일수 (N일)")
    companions: str | None = Field(default=None, description="동행자 (예: 친구, 가족)")
    theme: Theme | None = Field(default=None, description="여행 테마")
    budget_krw: int | None = Field(default=None, alias="budgetKRW", description="예산 (원)")
    season_hint: Season | None = Field(default=None, alias="seasonHint", description="계절 힌트")
    avoid_foods: list[str] = Field(default_factory=list, alias="avoidFoods", description="비선호/알레르기 음식")

    @field_validator("region", mode="before")
    @classmethod
    def _coerce_region(cls, value: object) -> str:
        return str(value).strip() if value is not None else ""

    @field_validator("nights", "days", "budget_krw", mode="before")
    @classmethod
    def _coerce_optional_int(cls, value: object) -> int | None:
        return _optional_int(value)

    @field_validator("companions", mode="before")
    @classmethod
    def _coerce_companions(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("theme", mode="before")
    @classmethod
    def _coerce_theme(cls, value: object) -> Theme | None:
        if value is None or isinstance(value, Theme):
            return value
        text = str(value).strip()
        try:
            return Theme(text)
        except ValueError:
            return _THEME_ALIASES.get(text.lower())

    @field_validator("season_hint", mode="before")
    @classmethod
    def _coerce_season(cls, value: object) -> Season | None:
        if value is None or isinstance(value, Season):
            return value
        text = str(value).strip()
        try:
            return Season(text)
        except ValueError:
            return _SEASON_ALIASES.get(text.lower())

    @field_validator("avoid_foods", mode="before")
    @classmethod
    def _coerce_avoid_foods(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    @property
    def effective_days(self) -> int:
        """days → nights+1 → 1 순서로 결정한 여행 일수 (최소 1)."""
        if self.days is not None:
            days = self.days
        elif self.nights is not None:
            days = self.nights + 1
        else:
            days = 1
        return max(1, days)


class PlanSlot(BaseModel):
    """하루 일정의 한 시간 블록과 그 블록의 검색 키워드."""

    model_config = ConfigDict(frozen=True)

    day: int = Field(..., ge=1, description="여행 일차 (1부터 시작)")
    time: str = Field(..., description="HH:MM 형식 시각")
    region: str = Field(..., description="정규화된 지역명")
    category: SlotCategory = Field(..., description="슬롯 카테고리")
    keyword: str = Field(..., description="장소 검색 키워드")
    note: str | None = Field(default=None, description="부가 설명")
