"""
Standardized response utilities
"""

import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventdesk.core.errors import AppError
from eventdesk.schemas.common import ErrorResponse, SuccessResponse

logger = logging.getLogger(__name__)

def success_response(data: Any = None, status_code: int = 200) -> JSONResponse:
    """JSON body as given, or a bare {"success": true}"""
    content = SuccessResponse().model_dump() if data is None else jsonable_encoder(data)
    return JSONResponse(content=content, status_code=status_code)

def error_response(
    message: str,
    status_code: int = 400,
    details: Any = None,
    **extra: Any
) -> JSONResponse:
    """Create standardized error response"""
    content = ErrorResponse(message=message, details=details).model_dump(exclude_none=True)
    content.update(extra)
    return JSONResponse(content=jsonable_encoder(content), status_code=status_code)

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        message="Invalid request body",
        status_code=400,
        details=exc.errors(),
    )

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed: {exc}")
    return error_response(message="Internal server error", status_code=500)
