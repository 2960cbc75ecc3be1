"""자유 입력 여행 요청을 구조화된 TripInfo로 변환하는 LLM 서비스."""

from __future__ import annotations

import asyncio
from typing import Any

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.llm import LLMConfigurationError, get_llm
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.graph.plan.utils import extract_json_object, strip_code_fence
from app.schemas.trip import TripInfo

logger = get_logger(__name__)

_SYSTEM_PROMPT = (
    "당신의 유일한 역할은 사용자의 여행 요구를 구조화하는 것입니다.\n"
    "아래 필드를 가진 단일 JSON 객체만 출력하세요.\n"
    "- region: 필수. 도시/지역명 (예: 경주)\n"
    "- nights: 선택. 'N박'이면 N\n"
    "- days: 선택. 'N일'이면 N (없으면 생략)\n"
    "- companions: 선택. 동행자 (예: 친구, 가족)\n"
    "- theme: 선택. 역사, 맛집, 자연, 액티비티, 카페 중 하나\n"
    "- budgetKRW: 선택. '50만원'이면 500000 처럼 원 단위 정수\n"
    "- seasonHint: 선택. 봄, 여름, 가을, 겨울 중 하나 (사용자가 계절이나 월을 말한 경우만)\n"
    "- avoidFoods: 선택. 알레르기/비선호 음식 키워드 배열 (예: 갑각류, 땅콩, 매운)\n"
    "금지 사항:\n"
    "- 장소, 상호, 호텔, 카페 이름을 만들지 마세요\n"
    "- 배열이 아닌 단일 JSON 객체만 출력하세요\n"
)
_USER_PROMPT = '사용자 입력: """{message}"""\n\n{format_instructions}'


class TripInfoExtractionError(RuntimeError):
    """LLM 호출 자체가 실패했을 때 발생하는 예외."""


def parse_trip_info(text: str, parser: PydanticOutputParser | None = None) -> TripInfo | None:
    """LLM 응답 텍스트를 TripInfo로 파싱합니다. region이 없거나 파싱할 수 없으면 None."""
    resolved_parser = parser or PydanticOutputParser(pydantic_object=TripInfo)
    content = strip_code_fence(text)

    info: TripInfo | None
    try:
        info = resolved_parser.parse(content)
    except OutputParserException:
        raw = extract_json_object(content)
        if raw is None:
            return None
        try:
            info = TripInfo.model_validate(raw)
        except ValidationError:
            return None

    if not info.region:
        return None
    return info


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    return content if isinstance(content, str) else str(content)


async def extract_trip_info(
    message: str,
    *,
    llm: Any | None = None,
    timeout_seconds: int | None = None,
) -> TripInfo:
    """사용자 메시지에서 TripInfo를 추출합니다.

    응답을 해석할 수 없으면 기본 지역만 채운 TripInfo를 반환하고,
    LLM 호출이 실패하면 TripInfoExtractionError를 발생시킵니다.
    """
    settings = get_settings()
    timeout = timeout_seconds or get_timeout_policy(settings).llm_timeout_seconds

    if llm is None:
        try:
            llm = get_llm()
        except LLMConfigurationError as exc:
            logger.error("Trip info extraction unavailable: %s", exc)
            raise TripInfoExtractionError("LLM 설정이 없어 여행 정보를 분석할 수 없습니다.") from exc

    parser = PydanticOutputParser(pydantic_object=TripInfo)
    prompt = ChatPromptTemplate.from_messages([("system", _SYSTEM_PROMPT), ("human", _USER_PROMPT)])
    messages = prompt.format_messages(message=message, format_instructions=parser.get_format_instructions())

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Trip info extraction timed out: timeout=%s", timeout)
        raise TripInfoExtractionError("여행 정보 분석 시간이 초과되었습니다.") from exc
    except Exception as exc:
        logger.exception("Trip info extraction call failed")
        raise TripInfoExtractionError("여행 정보 분석 호출에 실패했습니다.") from exc

    info = parse_trip_info(_response_text(response), parser)
    if info is None:
        logger.warning("Trip info parse failed. Falling back to default region: %s", settings.PLAN_DEFAULT_REGION)
        return TripInfo(region=settings.PLAN_DEFAULT_REGION)
    return info
