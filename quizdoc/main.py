# quizdoc/main.py
import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from quizdoc import __version__
from quizdoc.core.constants import HTTPHeaders
from quizdoc.core.settings import settings, validate_required_settings
from quizdoc.core.logging import configure_logging
from quizdoc.middleware.error_handler import setup_exception_handlers
from quizdoc.middleware.request_context import RequestContextMiddleware
from quizdoc.routes.quiz import router as quiz_router

# ---------- 앱 초기화 ----------
configure_logging(settings.LOG_LEVEL)

_missing = validate_required_settings()
if _missing:
    logging.getLogger("quizdoc").warning("settings_missing", extra={"missing": _missing})

app = FastAPI(title=settings.SERVICE_NAME, version=__version__)

# ---------- 미들웨어 ----------
access_logger = logging.getLogger("access")

@app.middleware("http")
async def access_log_middleware(request: Request, call_next):
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
        return response
    finally:
        access_logger.info(
            "request_done",
            extra={
                "trace_id": getattr(request.state, "trace_id", None),
                "method": request.method,
                "path": request.url.path,
                "status": getattr(response, "status_code", None),
                "latency_ms": int((time.perf_counter() - start) * 1000),
            },
        )

# 마지막에 추가한 미들웨어가 가장 바깥 → trace_id 가 access log 보다 먼저 세팅됨
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=[HTTPHeaders.REQUEST_ID],
    max_age=600,
)

setup_exception_handlers(app)

# ---------- 라우터 등록 ----------
app.include_router(quiz_router, prefix="/api/quiz")

# ---------- 헬스 체크 ----------
@app.get("/api/health")
def health_check():
    return {"message": "OK"}
