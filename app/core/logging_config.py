"""uvicorn 서버 로그 설정.

애플리케이션 로거(app.*)는 get_logger가 직접 핸들러를 붙이므로,
여기서는 uvicorn 로거와 루트 로거의 형식과 레벨만 맞춥니다.
"""

from __future__ import annotations

import copy
import logging.config
import os
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from app.core.logger import LOG_DATE_FORMAT

_SERVER_FORMAT = "[%(asctime)s] %(levelprefix)s [%(name)s] %(message)s"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def build_logging_config(level: str | None = None, *, access_log: bool | None = None) -> dict[str, Any]:
    """LOG_LEVEL / LOG_ACCESS 환경변수를 반영한 dictConfig를 만듭니다."""
    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    include_access = _env_flag("LOG_ACCESS", True) if access_log is None else access_log

    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)
    config["disable_existing_loggers"] = False
    config["formatters"]["default"]["fmt"] = _SERVER_FORMAT
    config["formatters"]["default"]["datefmt"] = LOG_DATE_FORMAT
    config["root"] = {"handlers": ["default"], "level": log_level}

    loggers = config["loggers"]
    loggers["uvicorn"]["level"] = log_level
    loggers["uvicorn.error"]["level"] = log_level
    loggers["uvicorn.access"]["level"] = log_level if include_access else "WARNING"
    return config


def configure_logging(level: str | None = None) -> None:
    """dictConfig로 로깅을 구성합니다."""
    logging.config.dictConfig(build_logging_config(level))
