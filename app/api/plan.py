"""채팅 메시지 기반 일정 생성 API."""

from fastapi import APIRouter, HTTPException, status

from app.core.logger import get_logger
from app.schemas.plan import PlanRequest, PlanResponse
from app.services.plan_service import PlanGenerationError, run_plan_pipeline

router = APIRouter(prefix="/api", tags=["plan"])
logger = get_logger(__name__)

PLAN_RESPONSE_EXAMPLES = {
    "gyeongju_history": {
        "summary": "경주 1박 2일 역사 여행",
        "value": {
            "slots": [
                {
                    "day": 1,
                    "time": "11:00",
                    "region": "경주",
                    "category": "관광",
                    "keyword": "유적지 박물관 성곽 사적지",
                    "note": None,
                },
                {
                    "day": 1,
                    "time": "13:00",
                    "region": "경주",
                    "category": "점심식사",
                    "keyword": "버섯 전골 점심 맛집",
                    "note": None,
                },
            ],
            "meta": {"region": "경주", "days": 2, "season": "가을", "avoidFoods": []},
        },
    }
}


@router.post(
    "/plan",
    response_model=PlanResponse,
    responses={
        200: {"content": {"application/json": {"examples": PLAN_RESPONSE_EXAMPLES}}},
        502: {"description": "여행 정보 분석 실패"},
    },
)
async def create_plan(request: PlanRequest) -> PlanResponse:
    """사용자 메시지를 분석해 일자별 검색 슬롯을 생성합니다."""
    logger.info("Plan request received: message_length=%d", len(request.message))

    try:
        return await run_plan_pipeline(request.message)
    except PlanGenerationError as exc:
        logger.warning("Plan generation failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
