"""일정 생성 파이프라인 실행 서비스."""

from __future__ import annotations

from datetime import date
from typing import Any

from app.core.logger import get_logger
from app.graph.plan.workflow import compiled_plan_graph
from app.schemas.plan import PlanMeta, PlanResponse
from app.schemas.trip import PlanSlot, TripInfo

logger = get_logger(__name__)


class PlanGenerationError(RuntimeError):
    """일정 생성 그래프가 오류 상태로 끝났을 때 발생하는 예외."""


async def run_plan_pipeline(message: str, *, llm: Any | None = None, today: date | None = None) -> PlanResponse:
    """일정 생성 그래프를 실행하고 응답 모델로 변환합니다."""
    initial_state = {"message": message, "today": today}
    configurable = {"llm": llm} if llm is not None else {}
    result = await compiled_plan_graph.ainvoke(initial_state, config={"configurable": configurable})

    if error := result.get("error"):
        raise PlanGenerationError(error)

    info = TripInfo.model_validate(result.get("trip_info") or {})
    slots = [PlanSlot.model_validate(slot) for slot in result.get("slots", [])]

    logger.info(
        "Plan pipeline completed: region=%s days=%s slot_count=%d",
        result.get("region"),
        result.get("trip_days"),
        len(slots),
    )
    return PlanResponse(
        slots=slots,
        meta=PlanMeta(
            region=result["region"],
            days=result["trip_days"],
            season=result["season"],
            avoid_foods=info.avoid_foods,
        ),
    )
