"""
Standard Error Handlers
======================
Centralized error handling utilities for consistent API responses
"""

from typing import Dict, Any, Optional, List
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import time
import uuid

from cubesim.exceptions import (
    CorruptState,
    CubeError,
    InvalidMoveToken,
    SequencerBusy,
    SolverFailed,
    SolverUnavailable,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)


# Status code per engine error, most specific first
CUBE_ERROR_STATUS = [
    (InvalidMoveToken, 400, "invalid_move"),
    (SequencerBusy, 409, "busy"),
    (SolverUnavailable, 503, "solver_unavailable"),
    (SolverFailed, 422, "solver_failed"),
    (CorruptState, 500, "corrupt_state"),
]


class StandardErrorHandler:
    """Standard error handler for consistent API responses"""

    @staticmethod
    def create_error_response(
        status_code: int,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_id: Optional[str] = None
    ) -> JSONResponse:
        """Create a standardized error response"""
        content = {
            "detail": message,
            "error_code": error_code or f"error_{status_code}",
            "timestamp": time.time(),
            "error_id": error_id or str(uuid.uuid4())
        }

        if details:
            content["details"] = details

        return JSONResponse(
            status_code=status_code,
            content=content
        )

    @staticmethod
    def create_validation_error_response(
        errors: List[Dict[str, Any]],
        error_id: Optional[str] = None
    ) -> JSONResponse:
        """Create a standardized validation error response"""
        content = {
            "detail": errors,
            "error_code": "validation_error",
            "timestamp": time.time(),
            "error_id": error_id or str(uuid.uuid4())
        }

        return JSONResponse(
            status_code=422,
            content=content
        )

    @staticmethod
    def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTPException with standard format"""
        return StandardErrorHandler.create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            error_code=f"http_{exc.status_code}"
        )

    @staticmethod
    def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle validation errors with standard format"""
        error_details = []
        for error in exc.errors():
            error_details.append({
                "loc": list(error["loc"]),
                "msg": error["msg"],
                "type": error["type"],
                "input": error.get("input")
            })

        return StandardErrorHandler.create_validation_error_response(error_details)

    @staticmethod
    def handle_cube_error(request: Request, exc: CubeError) -> JSONResponse:
        """Map engine errors onto status codes"""
        status_code, error_code = 500, "cube_error"
        for error_type, code, name in CUBE_ERROR_STATUS:
            if isinstance(exc, error_type):
                status_code, error_code = code, name
                break

        error_id = str(uuid.uuid4())
        if status_code >= 500:
            logger.error(
                f"Cube engine error [{error_id}]: {exc.message}",
                error_type=exc.error_type,
                path=str(request.url.path),
                details=exc.details
            )

        return StandardErrorHandler.create_error_response(
            status_code=status_code,
            message=exc.message,
            error_code=error_code,
            details=exc.details or None,
            error_id=error_id
        )


def register_exception_handlers(app: FastAPI):
    """Install the standard handlers on an application"""

    @app.exception_handler(CubeError)
    async def cube_error_handler(request: Request, exc: CubeError):
        return StandardErrorHandler.handle_cube_error(request, exc)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return StandardErrorHandler.handle_http_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return StandardErrorHandler.handle_validation_error(request, exc)


def validation_error(message: str = "Validation failed") -> HTTPException:
    """Standard 422 Validation error"""
    return HTTPException(status_code=422, detail=message)
