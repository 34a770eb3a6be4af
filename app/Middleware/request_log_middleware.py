import logging
import time

from fastapi import Request

logger = logging.getLogger("app.requests")

# Not worth a log line per hit
_SKIP_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}


async def request_log_middleware(request: Request, call_next):
    """Log method, path, status code and duration of every HTTP request."""
    method = request.method
    path = request.url.path
    if path in _SKIP_PATHS:
        return await call_next(request)

    client_ip = request.headers.get("x-forwarded-for") or (
        request.client.host if request.client else None
    )
    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.exception("%s %s failed after %dms (client=%s)", method, path, duration_ms, client_ip)
        raise

    duration_ms = int((time.perf_counter() - start_time) * 1000)
    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(
        level,
        "%s %s -> %s in %dms (client=%s)",
        method,
        path,
        response.status_code,
        duration_ms,
        client_ip,
    )
    return response
