"""네이버 Local 검색 결과를 표준화한 장소 후보 모델."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.enums import RankMode


class PlaceCandidate(BaseModel):
    """검색 API가 반환한 장소 후보. 랭킹 과정에서 변경되지 않습니다."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="장소 이름 (HTML 태그 제거)")
    address: str = Field(default="", description="도로명 주소 우선, 없으면 지번 주소")
    mapx: str = Field(default="0", description="지도 x 좌표 (문자열)")
    mapy: str = Field(default="0", description="지도 y 좌표 (문자열)")
    link: str = Field(default="", description="장소 상세 링크")
    category: str = Field(default="", description="업종 카테고리")


class RankOptions(BaseModel):
    """장소 랭킹 시 강조할 점수 축을 선택하는 옵션."""

    model_config = ConfigDict(frozen=True)

    region_name: str | None = Field(default=None, description="지역명 (예: 경주)")
    theme_hint: str | None = Field(default=None, description="테마 힌트 (예: 역사·유적)")
    mode: RankMode = Field(default=RankMode.THEME, description="정렬 기준")


class Anchor(BaseModel):
    """같은 날 직전 방문지의 지도 좌표."""

    x: float = Field(..., description="지도 x 좌표")
    y: float = Field(..., description="지도 y 좌표")
