"""
Logging 설정

- text: 개발용 한 줄 포맷
- json: 로그 수집기(Fluent Bit 등)용 한 줄 JSON
extra 로 넘긴 필드 중 민감 정보(password, token ...)는 마스킹한다.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

SENSITIVE_FIELD_PATTERNS = ("password", "token", "authorization", "api_key", "secret")
MASK_PLACEHOLDER = "***"
MASK_MIN_LENGTH = 8
MASK_PRESERVE_PREFIX = 4
MASK_PRESERVE_SUFFIX = 4

NOISY_LOGGERS = ("urllib3", "passlib", "multipart")

# LogRecord 기본 속성 (extra 추출 시 제외)
EXCLUDED_LOG_RECORD_ATTRS = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message", "asctime",
    }
)


def _is_sensitive_key(key: str) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in SENSITIVE_FIELD_PATTERNS)


def _mask_value(value: Any) -> str:
    if value is None:
        return MASK_PLACEHOLDER
    str_value = str(value)
    if len(str_value) <= MASK_MIN_LENGTH:
        return MASK_PLACEHOLDER
    return f"{str_value[:MASK_PRESERVE_PREFIX]}...{str_value[-MASK_PRESERVE_SUFFIX:]}"


def mask_sensitive_data(data: dict[str, Any]) -> dict[str, Any]:
    """dict 내부 민감 필드를 재귀적으로 마스킹"""
    if not isinstance(data, dict):
        return data

    masked = {}
    for key, value in data.items():
        if _is_sensitive_key(key):
            masked[key] = _mask_value(value)
        elif isinstance(value, dict):
            masked[key] = mask_sensitive_data(value)
        elif isinstance(value, list):
            masked[key] = [mask_sensitive_data(v) if isinstance(v, dict) else v for v in value]
        else:
            masked[key] = value
    return masked


def _get_extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    extra = {k: v for k, v in record.__dict__.items() if k not in EXCLUDED_LOG_RECORD_ATTRS}
    return mask_sensitive_data(extra)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        doc: dict[str, Any] = {
            "@timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "log.level": record.levelname.lower(),
            "log.logger": record.name,
            "message": record.getMessage(),
        }
        extra = _get_extra_fields(record)
        if extra:
            doc["labels"] = extra
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            doc["error.type"] = exc_type.__name__ if exc_type else None
            doc["error.message"] = str(exc_value) if exc_value else None
            doc["error.stack_trace"] = self.formatException(record.exc_info)
        return json.dumps(doc, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-7s [%(name)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = _get_extra_fields(record)
        if extra:
            line += " " + " ".join(f"{k}={v}" for k, v in extra.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """root logger에 stdout handler 하나만 설치"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
