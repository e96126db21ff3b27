# middleware/error_handlers.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import AppError, ValidationError, error_response
from middleware.request_logger import REQUEST_ID_HEADER, status_level
from schemas.validation import field_errors

ROUTE_NOT_FOUND = "route not found"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def _respond(request: Request, error: BaseException) -> JSONResponse:
    status_code, body = error_response(error)
    request_id = _request_id(request)
    request.app.state.logger.log(
        status_level(status_code),
        f"[{request_id}] {request.method} {request.url.path} failed: {body['message']}",
        status_code=status_code,
        error=type(error).__name__,
        details=body.get("details"),
        exc_info=error if status_code >= 500 else None,
    )
    # unexpected errors skip the request logger's response path
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers={REQUEST_ID_HEADER: request_id},
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    return _respond(request, exc)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed body / params that never reached a service
    fields = field_errors(exc)
    return _respond(request, ValidationError("Invalid request", fields=fields))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unknown path and unsupported method on a known path are the same miss
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"message": ROUTE_NOT_FOUND})
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
