import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from config.settings import settings

logger = logging.getLogger("school.access")


class TimingMiddleware(BaseHTTPMiddleware):
    """
    요청 처리 시간 측정
    - 응답 헤더 X-Latency-Ms 추가
    - 요청마다 한 줄 access 로그, SLOW_REQUEST_MS 를 넘으면 WARNING
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - started) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)

        level = logging.WARNING if latency_ms >= settings.SLOW_REQUEST_MS else logging.INFO
        logger.log(level, f"{request.method} {request.url.path} -> {response.status_code} ({latency_ms}ms)")
        return response
