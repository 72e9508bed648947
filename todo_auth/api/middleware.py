import logging
import time

from fastapi import Request

logger = logging.getLogger("todo_auth.requests")


async def log_requests(request: Request, call_next):
    """Log method, path, status, duration, client IP and user agent of each request"""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    client_ip = (
        request.headers.get("x-forwarded-for")
        or request.headers.get("x-real-ip")
        or (request.client.host if request.client else "unknown")
    )
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({duration_ms:.1f}ms) ip={client_ip} "
        f"ua={request.headers.get('user-agent', 'unknown')}"
    )
    return response
