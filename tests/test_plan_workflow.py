"""일정 생성 LangGraph 워크플로우 테스트."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest
from langchain_core.messages import AIMessage

from app.core.config import get_settings
from app.graph.plan.nodes import build_plan_slots, extract_trip_info_node
from app.schemas.enums import Season, SlotCategory
from app.services.plan_service import PlanGenerationError, run_plan_pipeline

AUTUMN_DAY = date(2026, 10, 18)


class _FakeLLM:
    def __init__(self, content: str = "", *, error: Exception | None = None) -> None:
        self._content = content
        self._error = error

    async def ainvoke(self, _messages):
        if self._error is not None:
            raise self._error
        return AIMessage(content=self._content)


@pytest.fixture(autouse=True)
def _clear_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_run_plan_pipeline_builds_slots_and_meta() -> None:
    llm = _FakeLLM('{"region": "경주시", "nights": 2, "theme": "역사", "avoidFoods": ["땅콩"]}')

    response = asyncio.run(run_plan_pipeline("경주 2박 3일 역사 여행, 땅콩 알레르기", llm=llm, today=AUTUMN_DAY))

    assert response.meta.region == "경주"
    assert response.meta.days == 3
    assert response.meta.season == Season.FALL
    assert response.meta.avoid_foods == ["땅콩"]
    assert len(response.slots) == 16
    assert response.slots[0].category == SlotCategory.SIGHTSEEING
    assert {slot.region for slot in response.slots} == {"경주"}


def test_run_plan_pipeline_raises_when_llm_fails() -> None:
    llm = _FakeLLM(error=RuntimeError("boom"))

    with pytest.raises(PlanGenerationError):
        asyncio.run(run_plan_pipeline("경주 여행", llm=llm, today=AUTUMN_DAY))


def test_run_plan_pipeline_caps_trip_days(monkeypatch) -> None:
    monkeypatch.setenv("PLAN_MAX_DAYS", "5")
    get_settings.cache_clear()
    llm = _FakeLLM('{"region": "제주", "days": 20}')

    response = asyncio.run(run_plan_pipeline("제주 한 달 살기", llm=llm, today=AUTUMN_DAY))

    assert response.meta.days == 5
    assert len(response.slots) == 28
    assert max(slot.day for slot in response.slots) == 5


def test_unparsable_reply_uses_default_region() -> None:
    llm = _FakeLLM("잘 모르겠어요")

    response = asyncio.run(run_plan_pipeline("어디든 좋아요", llm=llm, today=AUTUMN_DAY))

    assert response.meta.region == "서울"
    assert response.meta.days == 1
    assert len(response.slots) == 4


class TestPlanNodes:
    """일정 그래프 노드 단위 테스트."""

    def test_extract_node_rejects_blank_message(self):
        result = asyncio.run(extract_trip_info_node({"message": "   "}, {}))

        assert result["error"] == "message가 필요합니다."

    def test_build_node_passes_through_error(self):
        state = {"message": "x", "error": "이미 실패"}

        assert build_plan_slots(state) == state

    def test_build_node_requires_trip_info(self):
        result = build_plan_slots({"message": "x"})

        assert "trip_info" in result["error"]

    def test_build_node_fills_default_region(self):
        result = build_plan_slots({"message": "x", "today": AUTUMN_DAY, "trip_info": {"region": "", "days": 2}})

        assert result["region"] == "서울"
        assert result["trip_days"] == 2
        assert result["season"] == "가을"
        assert len(result["slots"]) == 10
        assert result["slots"][0]["category"] == "관광"
