"""일정 생성 그래프 노드."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.config import get_settings
from app.core.logger import get_logger
from app.graph.plan.state import PlanState
from app.schemas.trip import TripInfo
from app.services.slot_generator import generate_slots, normalize_region, resolve_season
from app.services.trip_info_extractor import TripInfoExtractionError, extract_trip_info

logger = get_logger(__name__)


async def extract_trip_info_node(state: PlanState, config: RunnableConfig) -> PlanState:
    """사용자 메시지에서 구조화된 여행 정보를 추출합니다."""
    message = (state.get("message") or "").strip()
    if not message:
        return {**state, "error": "message가 필요합니다."}

    llm = (config or {}).get("configurable", {}).get("llm")
    try:
        info = await extract_trip_info(message, llm=llm)
    except TripInfoExtractionError as exc:
        return {**state, "error": str(exc)}

    return {**state, "trip_info": info.model_dump()}


def build_plan_slots(state: PlanState) -> PlanState:
    """여행 정보로 일정 슬롯을 생성합니다."""
    if state.get("error"):
        return state

    raw_info = state.get("trip_info")
    if not raw_info:
        return {**state, "error": "build_plan_slots에는 trip_info가 필요합니다."}

    settings = get_settings()
    info = TripInfo.model_validate(raw_info)
    if not info.region:
        info = info.model_copy(update={"region": settings.PLAN_DEFAULT_REGION})

    if info.effective_days > settings.PLAN_MAX_DAYS:
        logger.warning("Trip days capped: requested=%d max=%d", info.effective_days, settings.PLAN_MAX_DAYS)
        info = info.model_copy(update={"days": settings.PLAN_MAX_DAYS})

    today = state.get("today")
    slots = generate_slots(info, today=today)

    return {
        **state,
        "trip_info": info.model_dump(),
        "region": normalize_region(info.region, default=settings.PLAN_DEFAULT_REGION),
        "trip_days": info.effective_days,
        "season": resolve_season(info, today).value,
        "slots": [slot.model_dump(mode="json") for slot in slots],
    }
