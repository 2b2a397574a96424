"""
전역 에러 핸들러
퀴즈 오류를 렌더러가 읽을 수 있는 JSON 본문으로 변환

    {"code": "...", "message": "...", "trace_id": "...", "details": {...}}

details 는 DEBUG 일 때만 포함한다. MalformedQuizError 의 question_index/line 은
문서를 고치는 사람을 위한 정보라 운영에서는 로그로만 남긴다.
"""
import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from quizdoc.core.constants import ErrorCodes, ErrorMessages
from quizdoc.core.exceptions import AppException
from quizdoc.core.settings import settings

logger = logging.getLogger(__name__)


def _error_body(request: Request, code: str, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"code": code, "message": message}
    trace_id: Optional[str] = getattr(request.state, "trace_id", None)
    if trace_id:
        body["trace_id"] = trace_id
    body.update({k: v for k, v in extra.items() if v})
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """AppException / 요청 검증 오류 / 그 밖의 예외 핸들러 등록"""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        # OutOfRangeError(404)는 호출 측 실수, 문서 오류(500)는 배포 측 문제
        logger.log(
            logging.WARNING if exc.status_code < 500 else logging.ERROR,
            exc.code,
            extra={
                "trace_id": getattr(request.state, "trace_id", None),
                "path": request.url.path,
                "status": exc.status_code,
                "reason": exc.message,
                "details": exc.details,
            },
        )
        body = _error_body(
            request, exc.code, exc.message,
            details=exc.details if settings.DEBUG else None,
        )
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"field": " -> ".join(str(loc) for loc in e["loc"]), "message": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ]
        logger.warning("validation_error", extra={"path": request.url.path, "errors": errors})
        body = _error_body(request, ErrorCodes.VALIDATION_FAILED, ErrorMessages.INVALID_INPUT, errors=errors)
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", extra={"path": request.url.path}, exc_info=True)
        if settings.DEBUG:
            body = _error_body(
                request, ErrorCodes.INTERNAL_ERROR, f"{type(exc).__name__}: {exc}",
                stack_trace=traceback.format_exc(),
            )
        else:
            body = _error_body(request, ErrorCodes.INTERNAL_ERROR, ErrorMessages.INTERNAL_ERROR)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
