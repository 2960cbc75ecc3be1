"""애플리케이션 진입점 및 API 라우터 테스트."""

from __future__ import annotations

import asyncio
import importlib

from fastapi.testclient import TestClient

from app.api import place, plan
from app.core.config import get_settings
from app.schemas.enums import Season, SlotCategory
from app.schemas.plan import PlanMeta, PlanResponse
from app.schemas.trip import PlanSlot
from app.services.naver_local_service import get_naver_local_service
from app.services.plan_service import PlanGenerationError
from tests.mocks.mock_places_service import MockPlacesService, make_place


def _set_env(monkeypatch, **overrides: str) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("DOCS_MODE", "disabled")
    for key, value in overrides.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()


def _load_main_module():
    import app.main as main_module

    return importlib.reload(main_module)


def _client_with_places(monkeypatch, service, **overrides: str) -> TestClient:
    _set_env(monkeypatch, **overrides)
    main_module = _load_main_module()
    main_module.app.dependency_overrides[place.get_places_service] = lambda: service
    return TestClient(main_module.app, raise_server_exceptions=False)


def test_health_check_endpoint(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Trip Slot Planner is running"}


def test_docs_disabled_by_default(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    client = TestClient(main_module.app)

    assert client.get("/docs").status_code == 404
    assert client.get("/redoc").status_code == 404
    assert client.get("/openapi.json").status_code == 404


def test_docs_public_mode_exposes_plan_example(monkeypatch) -> None:
    _set_env(monkeypatch, DOCS_MODE="public")
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    schema = client.get("/openapi.json").json()
    examples = schema["paths"]["/api/plan"]["post"]["responses"]["200"]["content"]["application/json"]["examples"]

    assert client.get("/docs").status_code == 200
    assert examples["gyeongju_history"]["value"]["meta"]["region"] == "경주"


def test_unknown_docs_mode_falls_back_to_disabled(monkeypatch) -> None:
    _set_env(monkeypatch, DOCS_MODE="secret")
    main_module = _load_main_module()

    client = TestClient(main_module.app)

    assert client.get("/docs").status_code == 404


def test_security_headers_are_attached(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["referrer-policy"] == "no-referrer"
    assert response.headers["cache-control"] == "no-store"
    assert "strict-transport-security" not in response.headers


def test_security_headers_can_be_disabled(monkeypatch) -> None:
    _set_env(monkeypatch, SECURITY_HEADERS_ENABLED="false")
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/")

    assert "x-frame-options" not in response.headers


def test_cors_allowlist_from_env(monkeypatch) -> None:
    _set_env(
        monkeypatch,
        CORS_ALLOW_ORIGINS="https://example.com",
        CORS_ALLOW_METHODS="GET,POST,OPTIONS",
        CORS_ALLOW_HEADERS="Content-Type",
    )
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/", headers={"Origin": "https://example.com"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://example.com"


def test_plan_endpoint_returns_slots(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()
    received: list[str] = []

    async def _fake_run_plan_pipeline(message: str) -> PlanResponse:
        received.append(message)
        return PlanResponse(
            slots=[
                PlanSlot(day=1, time="11:00", region="경주", category=SlotCategory.SIGHTSEEING, keyword="유적지"),
            ],
            meta=PlanMeta(region="경주", days=1, season=Season.FALL, avoid_foods=["땅콩"]),
        )

    monkeypatch.setattr(plan, "run_plan_pipeline", _fake_run_plan_pipeline)

    client = TestClient(main_module.app)
    response = client.post("/api/plan", json={"message": "경주 당일치기"})

    assert response.status_code == 200
    body = response.json()
    assert received == ["경주 당일치기"]
    assert body["slots"][0] == {
        "day": 1,
        "time": "11:00",
        "region": "경주",
        "category": "관광",
        "keyword": "유적지",
        "note": None,
    }
    assert body["meta"] == {"region": "경주", "days": 1, "season": "가을", "avoidFoods": ["땅콩"]}


def test_plan_endpoint_maps_generation_error_to_502(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    async def _failing_run_plan_pipeline(_message: str) -> PlanResponse:
        raise PlanGenerationError("여행 정보 분석 호출에 실패했습니다.")

    monkeypatch.setattr(plan, "run_plan_pipeline", _failing_run_plan_pipeline)

    client = TestClient(main_module.app)
    response = client.post("/api/plan", json={"message": "경주"})

    assert response.status_code == 502
    assert response.json() == {"detail": "여행 정보 분석 호출에 실패했습니다."}


def test_plan_endpoint_rejects_empty_message(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    client = TestClient(main_module.app)

    assert client.post("/api/plan", json={"message": ""}).status_code == 422


def test_place_endpoint_ranks_and_filters(monkeypatch) -> None:
    service = MockPlacesService(
        {
            "경주 국밥 점심 맛집": [
                make_place("스타벅스 경주보문점", address="경북 경주시"),
                make_place("바닷가 국밥", address="경북 포항시", mapx="1", mapy="1"),
                make_place("황남 국밥", address="경북 경주시", mapx="9", mapy="9"),
                make_place("조개구이 골목", address="경북 경주시", category="해산물"),
            ]
        }
    )
    client = _client_with_places(monkeypatch, service)

    response = client.post(
        "/api/place",
        json={
            "query": "경주 국밥 점심 맛집",
            "category": "점심식사",
            "avoidFoods": ["해산물"],
            "anchor": {"x": 0, "y": 0},
        },
    )

    assert response.status_code == 200
    titles = [item["title"] for item in response.json()["items"]]
    assert titles == ["바닷가 국밥", "황남 국밥"]
    assert service.queries[0] == "경주 국밥 점심 맛집"


def test_place_endpoint_blank_query_returns_empty(monkeypatch) -> None:
    service = MockPlacesService()
    client = _client_with_places(monkeypatch, service)

    response = client.post("/api/place", json={"query": "  "})

    assert response.status_code == 200
    assert response.json() == {"items": []}
    assert service.calls == []


def test_place_endpoint_unconfigured_returns_503(monkeypatch) -> None:
    _set_env(monkeypatch, NAVER_SEARCH_CLIENT_ID="", NAVER_SEARCH_CLIENT_SECRET="")
    get_naver_local_service.cache_clear()
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.post("/api/place", json={"query": "경주 카페"})
    get_naver_local_service.cache_clear()

    assert response.status_code == 503


def test_unhandled_error_hides_internal_detail(monkeypatch) -> None:
    class _BrokenService(MockPlacesService):
        async def search(self, query, display=None):
            raise RuntimeError("sensitive: upstream detail")

    client = _client_with_places(monkeypatch, _BrokenService(), EXPOSE_INTERNAL_ERRORS="false")

    response = client.post("/api/place", json={"query": "경주 카페"})

    assert response.status_code == 500
    assert response.json() == {"detail": "내부 서버 오류가 발생했습니다."}


def test_unhandled_error_exposes_detail_when_enabled(monkeypatch) -> None:
    class _BrokenService(MockPlacesService):
        async def search(self, query, display=None):
            raise RuntimeError("sensitive: upstream detail")

    client = _client_with_places(monkeypatch, _BrokenService(), EXPOSE_INTERNAL_ERRORS="true")

    response = client.post("/api/place", json={"query": "경주 카페"})

    assert response.status_code == 500
    assert response.json() == {"detail": "sensitive: upstream detail"}


def test_request_timeout_middleware(monkeypatch) -> None:
    _set_env(monkeypatch, REQUEST_TIMEOUT_SECONDS="1")
    main_module = _load_main_module()

    @main_module.app.get("/_slow-test")
    async def _slow_test() -> dict:
        await asyncio.sleep(1.2)
        return {"ok": True}

    client = TestClient(main_module.app)
    response = client.get("/_slow-test")

    assert response.status_code == 504
    assert response.json() == {"detail": "요청 처리 시간이 초과되었습니다."}


def test_plan_endpoint_rejects_whitespace_message(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()
    called: list[str] = []

    async def _fake_run_plan_pipeline(message: str) -> PlanResponse:
        called.append(message)
        raise PlanGenerationError("unreachable")

    monkeypatch.setattr(plan, "run_plan_pipeline", _fake_run_plan_pipeline)

    client = TestClient(main_module.app)
    response = client.post("/api/plan", json={"message": "   \n "})

    assert response.status_code == 422
    assert called == []


def test_itinerary_endpoint_assigns_places(monkeypatch) -> None:
    service = MockPlacesService(
        {
            "경주 유적지 관광": [
                make_place("대릉원", address="경북 경주시 황남동", mapx="10", mapy="10"),
                make_place("첨성대", mapx="20", mapy="20"),
                make_place("월성", mapx="30", mapy="30"),
            ]
        }
    )
    client = _client_with_places(monkeypatch, service)

    response = client.post(
        "/api/itinerary",
        json={
            "slots": [{"day": 1, "time": "11:00", "region": "경주", "category": "관광", "keyword": "유적지"}],
            "avoidFoods": [],
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "items": [
            {
                "day": 1,
                "time": "11:00",
                "category": "관광",
                "region": "경주",
                "placeName": "대릉원",
                "address": "경북 경주시 황남동",
                "mapx": "10",
                "mapy": "10",
                "note": None,
            }
        ]
    }
