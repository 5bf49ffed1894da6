"""
Error handling utilities following FastAPI best practices
"""

import traceback
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.config import config
from app.core.logger import logger


class ErrorResponse(Exception):
    """Custom exception for application errors"""

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(ErrorResponse):
    """Request is well-formed but violates a business rule"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(ErrorResponse):
    """Requested entity does not exist"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=404, details=details)


class ConflictError(ErrorResponse):
    """Operation conflicts with the current state of stored data"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=409, details=details)


class ErrorResponseModel(BaseModel):
    """Pydantic model for error responses"""
    error: str
    details: Optional[Any] = None


def _request_metadata(request: Request, event: str, status_code: int) -> Dict[str, Any]:
    metadata = {
        "event": event,
        "status_code": status_code,
        "url": str(request.url),
        "method": request.method,
    }
    if config.environment == "development":
        # Include more detailed error info in development
        metadata["traceback"] = traceback.format_exc()
    return metadata


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for custom ErrorResponse exceptions"""
    metadata = _request_metadata(request, "error_response", exc.status_code)
    metadata.update(exc.details)

    if exc.status_code >= 500:
        logger.error(f"Error: {exc.message}", metadata=metadata)
    else:
        logger.warning(f"Error: {exc.message}", metadata=metadata)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details}
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handler for FastAPI HTTPException"""
    logger.warning(
        f"HTTPException: {exc.detail}",
        metadata=_request_metadata(request, "http_exception", exc.status_code)
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and path parameters are client errors (400)"""
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "Request validation failed",
        metadata={
            "event": "request_validation_error",
            "url": str(request.url),
            "method": request.method,
            "errors": errors,
        }
    )

    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "details": errors}
    )
