"""LLM 클라이언트 인스턴스 관리."""

from functools import lru_cache

from langchain_openai import ChatOpenAI

from app.core.config import get_settings
from app.core.timeout_policy import get_timeout_policy


class LLMConfigurationError(RuntimeError):
    """LLM 호출에 필요한 설정이 없을 때 발생하는 예외."""


@lru_cache
def get_llm() -> ChatOpenAI:
    """ChatOpenAI 인스턴스를 반환합니다."""
    settings = get_settings()
    if not settings.OPENAI_API_KEY:
        raise LLMConfigurationError("OPENAI_API_KEY is not configured.")

    timeout_policy = get_timeout_policy(settings)
    return ChatOpenAI(
        model=settings.LLM_MODEL_NAME,
        temperature=settings.LLM_TEMPERATURE,
        api_key=settings.OPENAI_API_KEY,
        request_timeout=timeout_policy.llm_timeout_seconds,
    )
