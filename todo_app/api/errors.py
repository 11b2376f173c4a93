"""
异常处理器：业务异常 / 参数校验异常 / HTTPException / 未捕获异常 → 统一错误体

错误体：{"code": "...", "detail": "..."}
- BAD_REQUEST / NOT_FOUND / UNAUTHORIZED：原文返回，前端直接提示
- INTERNAL_SERVER_ERROR：原始错误只进日志，响应统一文案
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_app.observability.metrics import ERROR_TOTAL
from todo_app.todo.errors import InternalError, TodoServiceError

log = structlog.get_logger()

GENERIC_INTERNAL_MESSAGE = "Something went wrong, please try again later"

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_SUPPORTED",
    409: "CONFLICT",
    422: "BAD_REQUEST",
}


def _error_response(status_code: int, code: str, detail: str) -> JSONResponse:
    ERROR_TOTAL.labels(error_type=code).inc()
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"code": code, "detail": detail}, headers=headers)


async def handle_service_error(_request: Request, exc: TodoServiceError) -> JSONResponse:
    if isinstance(exc, InternalError):
        log.error("内部错误", error=exc.message, cause=repr(exc.cause))
        return _error_response(exc.status_code, exc.code, GENERIC_INTERNAL_MESSAGE)
    return _error_response(exc.status_code, exc.code, exc.message)


async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    # 只取第一条，足够前端提示
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        detail = "Invalid request"
    return _error_response(422, "BAD_REQUEST", detail)


async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "INTERNAL_SERVER_ERROR")
    return _error_response(exc.status_code, code, str(exc.detail))


async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
    log.error("未捕获异常", error=str(exc), exc_info=exc)
    return _error_response(500, "INTERNAL_SERVER_ERROR", GENERIC_INTERNAL_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TodoServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
