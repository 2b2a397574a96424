# quizdoc/middleware/request_context.py
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from quizdoc.core.constants import HTTPHeaders


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    요청마다 trace_id 를 정해 request.state 에 두고 응답 헤더로 돌려준다.
    렌더러가 보낸 X-Request-Id 가 있으면 그대로 쓴다 (CORS 노출은 main.py).
    """

    async def dispatch(self, request: Request, call_next):
        # Starlette 헤더 dict는 case-insensitive
        trace_id = request.headers.get(HTTPHeaders.REQUEST_ID) or str(uuid.uuid4())
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers[HTTPHeaders.REQUEST_ID] = trace_id
        return response
