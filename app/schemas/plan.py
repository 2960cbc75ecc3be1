"""일정 생성 및 장소 검색 API 요청/응답 스키마."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.enums import Season, SlotCategory
from app.schemas.place import Anchor, PlaceCandidate
from app.schemas.trip import PlanSlot


class PlanRequest(BaseModel):
    """채팅 메시지 기반 일정 생성 요청."""

    message: str = Field(..., min_length=1, description="사용자의 자유 형식 여행 요청")

    @field_validator("message", mode="before")
    @classmethod
    def _strip_message(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class PlanMeta(BaseModel):
    """일정 생성에 사용된 해석 결과."""

    model_config = ConfigDict(populate_by_name=True)

    region: str = Field(..., description="정규화된 지역명")
    days: int = Field(..., ge=1, description="여행 일수")
    season: Season = Field(..., description="적용된 계절")
    avoid_foods: list[str] = Field(default_factory=list, alias="avoidFoods", description="비선호 음식")


class PlanResponse(BaseModel):
    """일정 생성 응답."""

    model_config = ConfigDict(populate_by_name=True)

    slots: list[PlanSlot] = Field(..., description="시간순 일정 슬롯")
    meta: PlanMeta = Field(..., description="해석 메타데이터")


class PlaceSearchRequest(BaseModel):
    """슬롯 키워드 기반 장소 검색 요청."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(default="", description="검색 키워드 (예: 경주 국밥 점심 맛집)")
    category: str | None = Field(default=None, description="슬롯 카테고리 (백업 쿼리 선택용)")
    region: str | None = Field(default=None, description="지역명. 없으면 query 첫 단어")
    avoid_foods: list[str] = Field(default_factory=list, alias="avoidFoods", description="비선호 음식")
    anchor: Anchor | None = Field(default=None, description="직전 방문지 좌표")
    theme: str | None = Field(default=None, description="테마 힌트")


class PlaceSearchResponse(BaseModel):
    """장소 검색 응답."""

    items: list[PlaceCandidate] = Field(default_factory=list, description="정렬된 장소 후보")


class ItineraryRequest(BaseModel):
    """생성된 슬롯을 실제 장소로 채우는 요청."""

    model_config = ConfigDict(populate_by_name=True)

    slots: list[PlanSlot] = Field(default_factory=list, description="/api/plan 응답의 슬롯 목록")
    avoid_foods: list[str] = Field(default_factory=list, alias="avoidFoods", description="비선호 음식")


class ItineraryItem(BaseModel):
    """슬롯 하나에 배정된 장소."""

    model_config = ConfigDict(populate_by_name=True)

    day: int = Field(..., ge=1, description="여행 일차")
    time: str = Field(..., description="HH:MM 형식 시각")
    category: SlotCategory = Field(..., description="슬롯 카테고리")
    region: str = Field(..., description="지역명")
    place_name: str = Field(..., alias="placeName", description="선택된 장소명")
    address: str = Field(default="", description="주소")
    mapx: str = Field(default="0", description="경도 좌표 원문")
    mapy: str = Field(default="0", description="위도 좌표 원문")
    note: str | None = Field(default=None, description="슬롯 부가 설명")


class ItineraryResponse(BaseModel):
    """장소가 배정된 타임라인. 장소를 찾지 못한 슬롯은 빠집니다."""

    items: list[ItineraryItem] = Field(default_factory=list, description="시간순 타임라인")
