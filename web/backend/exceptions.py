#!/usr/bin/env python3
"""
Service exceptions and their JSON error responses.

Service errors answer with {"success": false, "error", "type"}, except a
fatal profile refresh which answers with {"error", "processing_time_ms"}.
"""

import logging
from typing import Dict, Optional, Type

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class RecommendationNotFoundException(ServiceException):
    """Raised when a recommendation to dismiss does not exist."""
    pass


class InvalidPartitionException(ServiceException):
    """Raised when the requested cron partition is invalid."""
    pass


class RefreshFailedException(ServiceException):
    """
    Raised when a profile refresh fails fatally.

    Carries the HTTP status and the time spent before the failure.
    """

    def __init__(self, message: str, status_code: int = 500, processing_time_ms: int = 0):
        super().__init__(message)
        self.status_code = status_code
        self.processing_time_ms = processing_time_ms


_STATUS_CODES: Dict[Type[ServiceException], int] = {
    RecommendationNotFoundException: 404,
    InvalidPartitionException: 400,
}


def _error_response(status_code: int, error: str, error_type: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "type": error_type},
        headers=headers,
    )


async def service_exception_handler(request: Request, exc: ServiceException) -> JSONResponse:
    """Map a service exception to its status code."""
    if isinstance(exc, RefreshFailedException):
        logger.error(f"Refresh failed in {request.url.path}: {exc} ({exc.processing_time_ms}ms)")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc), "processing_time_ms": exc.processing_time_ms},
        )

    status_code = _STATUS_CODES.get(type(exc), 500)
    logger.warning(f"{type(exc).__name__} in {request.url.path}: {exc}")
    return _error_response(status_code, str(exc), type(exc).__name__)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail, "HTTPException", getattr(exc, "headers", None))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, hide the details from the client."""
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
