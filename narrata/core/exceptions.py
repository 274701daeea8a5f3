"""
Exceptions

Business exceptions and the global exception handlers
"""
from typing import Optional
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from loguru import logger

from .response import error_response


class AppException(Exception):
    """Base application exception"""

    def __init__(
        self,
        message: str = "Internal server error",
        code: int = 500,
        data: Optional[dict] = None
    ):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource does not exist (or belongs to someone else)"""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message=message, code=404)


class BadRequestException(AppException):
    """Invalid request parameters"""

    def __init__(self, message: str = "Bad request", data: Optional[dict] = None):
        super().__init__(message=message, code=400, data=data)


class UnauthorizedException(AppException):
    """Missing or invalid credentials"""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message=message, code=401)


class ForbiddenException(AppException):
    """Authenticated but not allowed"""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message=message, code=403)


class ConflictException(AppException):
    """Resource already exists"""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, code=409)


class ExternalServiceException(AppException):
    """A third-party API failed"""

    def __init__(
        self,
        message: str = "External service error",
        code: int = 502,
        data: Optional[dict] = None
    ):
        super().__init__(message=message, code=code, data=data)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Application exception handler"""
    logger.warning("AppException: {} | Path: {}", exc.message, request.url.path)
    return JSONResponse(
        status_code=exc.code,
        content=error_response(message=exc.message, code=exc.code, data=exc.data)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """HTTP exception handler"""
    logger.warning("HTTPException: {} | Path: {}", exc.detail, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message=str(exc.detail), code=exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request validation handler"""
    errors = exc.errors()
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(l) for l in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")

    message = "; ".join(error_messages)
    logger.warning("ValidationError: {} | Path: {}", message, request.url.path)

    return JSONResponse(
        status_code=422,
        content=error_response(
            message="Request validation failed",
            code=422,
            data={"errors": jsonable_encoder(errors)}
        )
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler"""
    logger.exception("Unhandled Exception: {} | Path: {}", exc, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_response(message="Internal server error", code=500)
    )
