"""领域异常与 HTTP 错误响应。

所有错误响应统一为 ``{"message": "..."}``，前端直接把 message 作为提示展示。
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """存储层异常基类。"""


class DuplicateUserError(StorageError, ValueError):
    """用户名或邮箱已被其他用户占用。"""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field.capitalize()} already exists")


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器。"""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return _message(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request body",
            errors=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = _message(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(DuplicateUserError)
    async def handle_duplicate_user(request: Request, exc: DuplicateUserError) -> JSONResponse:
        return _message(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def not_found(entity: str) -> HTTPException:
    """统一的 404 异常，message 形如 ``"Paper not found"``。"""
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
