"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    OPENAI_API_KEY: str | None = None
    LLM_MODEL_NAME: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.0
    NAVER_SEARCH_CLIENT_ID: str | None = None
    NAVER_SEARCH_CLIENT_SECRET: str | None = None
    NAVER_SEARCH_DISPLAY: int = 15
    NAVER_SEARCH_FALLBACK_DISPLAY: int = 20
    PLACE_SEARCH_MIN_RESULTS: int = 3
    PLACE_SEARCH_TARGET_RESULTS: int = 10
    PLACE_SEARCH_MAX_RESULTS: int = 10
    PLAN_DEFAULT_REGION: str = "서울"
    PLAN_MAX_DAYS: int = 14
    REQUEST_TIMEOUT_SECONDS: int = 60
    LLM_TIMEOUT_SECONDS: int = 30
    EXTERNAL_API_TIMEOUT_SECONDS: int = 15
    NAVER_SEARCH_TIMEOUT_SECONDS: int = 10
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True
    ENABLE_HSTS: bool = False
    HSTS_MAX_AGE_SECONDS: int = 31536000
    PROXY_HEADERS_ENABLED: bool = True
    PROXY_TRUSTED_HOSTS: str = "127.0.0.1"
    TRUSTED_HOSTS: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("NAVER_SEARCH_DISPLAY", "NAVER_SEARCH_FALLBACK_DISPLAY", mode="before")
    @classmethod
    def _clamp_naver_search_display(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 15
        except (TypeError, ValueError):
            numeric = 15
        return min(100, max(1, numeric))

    @field_validator("PLAN_MAX_DAYS", mode="before")
    @classmethod
    def _clamp_plan_max_days(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 14
        except (TypeError, ValueError):
            numeric = 14
        return max(1, numeric)


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
