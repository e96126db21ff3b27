# middleware/request_logger.py
import logging
import time

from fastapi import Request

from core.logger import OperationLogger, new_operation_id

REQUEST_ID_HEADER = "X-Request-ID"


def status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def log_requests(request: Request, call_next):
    logger: OperationLogger = request.app.state.logger
    request_id = request.headers.get(REQUEST_ID_HEADER) or new_operation_id()
    request.state.request_id = request_id

    method, path = request.method, request.url.path
    logger.info(
        f"[{request_id}] Request received: {method} {path}",
        method=method,
        path=path,
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        query=dict(request.query_params),
    )

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        # the 500 body is rendered outside this middleware
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.log(
            logging.ERROR,
            f"[{request_id}] Request failed: {method} {path} 500 - {duration_ms}ms",
            exc_info=exc,
            status_code=500,
            duration_ms=duration_ms,
            error=type(exc).__name__,
        )
        raise
    duration_ms = round((time.perf_counter() - started) * 1000, 2)

    logger.log(
        status_level(response.status_code),
        f"[{request_id}] Response sent: {method} {path} {response.status_code} - {duration_ms}ms",
        status_code=response.status_code,
        duration_ms=duration_ms,
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
