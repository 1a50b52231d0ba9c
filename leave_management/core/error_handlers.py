"""
Maps every failure that escapes a route to the `ApiResponse` error envelope.

    RequestValidationError  -> 422, one item per invalid field
    AppException            -> its own status, code and details
    HTTPException           -> its status, headers passed through
    anything else           -> 500
"""
import logging
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from leave_management.core.exceptions import AppException
from leave_management.core.schemas import ApiResponse, ErrorItem

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        # loc is ('body', 'field') for bodies, ('query', 'name') for params
        field = error["loc"][-1] if error["loc"] else "unknown"
        errors.append(ErrorItem(field=str(field), msg=error["msg"]))

    logger.warning("Request validation failed", extra={"path": request.url.path, "fields": [e.field for e in errors]})
    return JSONResponse(status_code=422, content=ApiResponse.fail(errors).to_content())


async def app_exception_handler(request: Request, exc: AppException):
    logger.warning(
        f"{exc.error_code}: {exc.message}",
        extra={"code": exc.error_code, "path": request.url.path},
    )
    body = ApiResponse.fail(
        [ErrorItem(msg=exc.message, code=exc.error_code, details=exc.details or None)],
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=body.to_content())


async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.fail([ErrorItem(msg=message)], message=message).to_content(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    body = ApiResponse.fail([ErrorItem(msg="An unexpected server error occurred.", code="INTERNAL_ERROR")])
    return JSONResponse(status_code=500, content=body.to_content())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
