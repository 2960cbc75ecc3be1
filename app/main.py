"""FastAPI 애플리케이션 진입점."""

from __future__ import annotations

import asyncio
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.api import itinerary, place, plan
from app.core.config import Settings, get_settings
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.core.timeout_policy import get_timeout_policy

configure_logging()
logger = get_logger(__name__)

_DOCS_MODES = ("disabled", "public")
_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized in _DOCS_MODES:
        return normalized
    logger.warning("유효하지 않은 DOCS_MODE 값입니다. disabled로 대체합니다: %s", mode)
    return "disabled"


def _add_host_middlewares(app_: FastAPI, settings_: Settings) -> None:
    """프록시 헤더 신뢰 범위와 허용 Host를 설정합니다."""
    if settings_.PROXY_HEADERS_ENABLED:
        proxy_hosts = _split_csv(settings_.PROXY_TRUSTED_HOSTS) or ["127.0.0.1"]
        app_.add_middleware(ProxyHeadersMiddleware, trusted_hosts=proxy_hosts)

    allowed_hosts = _split_csv(settings_.TRUSTED_HOSTS)
    if allowed_hosts:
        app_.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)


def _add_cors_middleware(app_: FastAPI, settings_: Settings) -> None:
    origins = _split_csv(settings_.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    allow_credentials = settings_.CORS_ALLOW_CREDENTIALS
    if "*" in origins and allow_credentials:
        logger.warning("CORS 와일드카드 origin에는 credentials를 허용하지 않습니다. allow_credentials=false로 강제합니다.")
        allow_credentials = False

    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=_split_csv(settings_.CORS_ALLOW_METHODS) or ["GET", "POST"],
        allow_headers=_split_csv(settings_.CORS_ALLOW_HEADERS) or ["Content-Type"],
    )


def create_app(settings_: Settings | None = None) -> FastAPI:
    """설정에 맞춰 라우터와 미들웨어를 구성한 애플리케이션을 생성합니다."""
    resolved = settings_ or get_settings()
    docs_enabled = _resolve_docs_mode(resolved.DOCS_MODE) == "public"
    request_timeout = get_timeout_policy(resolved).request_timeout_seconds

    app_ = FastAPI(
        title="Trip Slot Planner",
        description="채팅 메시지로 여행 일정 슬롯을 만들고 슬롯별 로컬 장소를 검색합니다.",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    _add_host_middlewares(app_, resolved)
    _add_cors_middleware(app_, resolved)

    app_.include_router(plan.router)
    app_.include_router(place.router)
    app_.include_router(itinerary.router)

    @app_.middleware("http")
    async def enforce_request_timeout(request: Request, call_next) -> Response:
        """요청 처리 시간을 제한하고 처리 결과를 기록합니다."""
        started = time.perf_counter()
        try:
            response = await asyncio.wait_for(call_next(request), timeout=request_timeout)
        except asyncio.TimeoutError:
            logger.warning("Request timed out: %s %s timeout=%s", request.method, request.url.path, request_timeout)
            return JSONResponse(status_code=504, content={"detail": "요청 처리 시간이 초과되었습니다."})

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Request handled: %s %s status=%d elapsed_ms=%.1f",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app_.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        """기본 보안 헤더를 응답에 추가합니다."""
        response = await call_next(request)
        if not resolved.SECURITY_HEADERS_ENABLED:
            return response

        for header, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if resolved.ENABLE_HSTS and request.url.scheme == "https":
            response.headers.setdefault("Strict-Transport-Security", f"max-age={resolved.HSTS_MAX_AGE_SECONDS}")
        return response

    @app_.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """예상하지 못한 예외를 표준 형식으로 처리합니다."""
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        message = str(exc) if resolved.EXPOSE_INTERNAL_ERRORS else "내부 서버 오류가 발생했습니다."
        return JSONResponse(status_code=500, content={"detail": message})

    @app_.get("/")
    def health_check() -> dict:
        """헬스 체크 엔드포인트."""
        return {"status": "ok", "message": "Trip Slot Planner is running"}

    return app_


app = create_app()
