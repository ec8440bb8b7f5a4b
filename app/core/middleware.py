from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

def action_type_for(endpoint: str) -> str:
    if endpoint.endswith("/generate"):
        return "GENERATE"
    elif endpoint.endswith("/inbox"):
        return "INBOX"
    elif endpoint.endswith("/receive"):
        return "RECEIVE"
    elif endpoint.startswith("/health"):
        return "HEALTH_CHECK"
    return "UNKNOWN"

class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        endpoint = request.url.path
        method = request.method
        action_type = action_type_for(endpoint)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(f"{method} {endpoint} action={action_type} failed after {elapsed_ms:.1f}ms")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{method} {endpoint} action={action_type} status={response.status_code} duration={elapsed_ms:.1f}ms"
        )
        return response
