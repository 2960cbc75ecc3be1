"""일정 슬롯 장소 배정 API."""

from fastapi import APIRouter, Depends

from app.api.place import get_places_service
from app.core.logger import get_logger
from app.schemas.plan import ItineraryRequest, ItineraryResponse
from app.services.itinerary_service import resolve_itinerary
from app.services.places_service import PlacesServiceProtocol

router = APIRouter(prefix="/api", tags=["itinerary"])
logger = get_logger(__name__)


@router.post("/itinerary", response_model=ItineraryResponse)
async def create_itinerary(
    request: ItineraryRequest,
    places_service: PlacesServiceProtocol = Depends(get_places_service),  # noqa: B008
) -> ItineraryResponse:
    """슬롯마다 장소를 하나씩 골라 동선 순 타임라인을 만듭니다."""
    logger.info("Itinerary request received: slot_count=%d", len(request.slots))
    items = await resolve_itinerary(request.slots, places_service, avoid_foods=request.avoid_foods)
    return ItineraryResponse(items=items)
