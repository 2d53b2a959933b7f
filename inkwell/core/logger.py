import sys
import json
import logging
from contextvars import ContextVar
from typing import Any, Optional, Dict

from pydantic import BaseModel

from inkwell.core.config import settings

_user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


class LogConfig(BaseModel):
    service: str = settings.LOG_SERVICE
    level: str = settings.LOG_LEVEL


config = LogConfig()


def bind_user_id(user_id: Optional[str]) -> None:
    """ログ出力にユーザーIDを紐づける"""
    _user_id.set(user_id)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "service": config.service,
        }

        uid = _user_id.get()
        if uid:
            log["user_id"] = uid

        if hasattr(record, "extra") and isinstance(record.extra, dict):
            log.update(record.extra)

        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log, ensure_ascii=False, default=str)


class Logger:
    _instance = None

    def __init__(self):
        if Logger._instance is None:
            logger = logging.getLogger(config.service)
            logger.setLevel(config.level)

            if not logger.handlers:
                handler = logging.StreamHandler(sys.stdout)
                handler.setFormatter(JsonFormatter())
                logger.addHandler(handler)

            logger.propagate = False
            Logger._instance = logger

    @staticmethod
    def get_logger() -> logging.Logger:
        if Logger._instance is None:
            Logger()
        return Logger._instance
