"""서버 로깅 설정 테스트."""

from app.core.logger import get_logger
from app.core.logging_config import build_logging_config


def test_log_level_applies_to_root_and_uvicorn(monkeypatch) -> None:
    monkeypatch.delenv("LOG_ACCESS", raising=False)

    config = build_logging_config("debug")

    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["uvicorn"]["level"] == "DEBUG"
    assert config["loggers"]["uvicorn.access"]["level"] == "DEBUG"
    assert config["disable_existing_loggers"] is False


def test_log_level_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert build_logging_config()["root"]["level"] == "WARNING"


def test_access_log_can_be_silenced(monkeypatch) -> None:
    monkeypatch.setenv("LOG_ACCESS", "false")

    config = build_logging_config("INFO")

    assert config["loggers"]["uvicorn.access"]["level"] == "WARNING"
    assert build_logging_config("INFO", access_log=True)["loggers"]["uvicorn.access"]["level"] == "INFO"


def test_get_logger_attaches_single_handler() -> None:
    first = get_logger("app.tests.single_handler")
    second = get_logger("app.tests.single_handler")

    assert first is second
    assert len(first.handlers) == 1
    assert first.propagate is False
