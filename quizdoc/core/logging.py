# quizdoc/core/logging.py
"""
JSON 한 줄 로그

quizdoc 레코드는 고정 키로 올린다:
  요청:  req_id, method, path, status, latency_ms
  퀴즈:  source, questions, question_index, line, reason
MalformedQuizError.details 가 extra 로 들어오면 question_index/line 을 꺼내 같은 키로 쓴다.
나머지 extra 는 "extra" 아래에 모은다.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

# LogRecord 기본 속성 (extra 판별용)
_RECORD_ATTRS = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}

REQUEST_KEYS = ("method", "path", "status", "latency_ms")
QUIZ_KEYS = ("source", "questions", "question_index", "line", "reason")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc)
        payload: Dict[str, Any] = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}

        trace_id = extra.pop("trace_id", None)
        if trace_id:
            payload["req_id"] = trace_id

        details = extra.get("details")
        if isinstance(details, dict):
            for key in ("question_index", "line"):
                if key in details:
                    extra.setdefault(key, details[key])

        for key in REQUEST_KEYS + QUIZ_KEYS:
            if extra.get(key) is not None:
                payload[key] = extra.pop(key)
            else:
                extra.pop(key, None)

        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> None:
    """루트 로거를 stdout JSON 출력으로 교체 (uvicorn 로거도 루트로 전달)"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True
