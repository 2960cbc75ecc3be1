"""슬롯 키워드 기반 장소 검색 API."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.geo import MapPoint
from app.core.logger import get_logger
from app.schemas.plan import PlaceSearchRequest, PlaceSearchResponse
from app.services.naver_local_service import NaverLocalError, get_naver_local_service
from app.services.place_search_service import search_places
from app.services.places_service import PlacesServiceProtocol

router = APIRouter(prefix="/api", tags=["place"])
logger = get_logger(__name__)


def get_places_service() -> PlacesServiceProtocol:
    """장소 검색 서비스 인스턴스를 제공합니다."""
    try:
        return get_naver_local_service()
    except NaverLocalError as exc:
        logger.error("Places service unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="장소 검색 설정이 없습니다.",
        ) from exc


@router.post("/place", response_model=PlaceSearchResponse)
async def search_place(
    request: PlaceSearchRequest,
    places_service: PlacesServiceProtocol = Depends(get_places_service),  # noqa: B008
) -> PlaceSearchResponse:
    """키워드로 장소를 검색해 프랜차이즈를 걸러내고 동선 순으로 정렬합니다."""
    if not request.query.strip():
        return PlaceSearchResponse(items=[])

    anchor = MapPoint(x=request.anchor.x, y=request.anchor.y) if request.anchor else None
    items = await search_places(
        places_service,
        request.query,
        category=request.category,
        region=request.region,
        avoid_foods=request.avoid_foods,
        anchor=anchor,
        theme_hint=request.theme,
    )
    return PlaceSearchResponse(items=items)
