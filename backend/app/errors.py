"""
Error envelope for every non-2xx response.

Bodies follow the problem-details shape

    {type, title, status, detail, instance, code?, errors?}

where `code` is a stable machine-readable identifier (e.g. INVALID_DATE_RANGE)
and `errors` carries structured details.
"""

from http import HTTPStatus
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import HTTP_499_CLIENT_CLOSED_REQUEST, DomainException

logger = logging.getLogger(__name__)


def status_title(status_code: int) -> str:
    if status_code == HTTP_499_CLIENT_CLOSED_REQUEST:
        return "Client Closed Request"
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def problem_response(
    request: Request,
    status_code: int,
    detail: Any = None,
    *,
    code: Optional[str] = None,
    errors: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {
        "type": "about:blank",
        "title": status_title(status_code),
        "status": status_code,
        "detail": detail or "",
        "instance": request.url.path,
    }
    if code:
        body["code"] = code
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return JSONResponse(body, status_code=status_code, headers=dict(headers) if headers else None)


def _split_http_detail(detail: Any) -> Tuple[Optional[str], Optional[str], Any]:
    """Pull (message, code, details) out of an HTTPException detail."""
    if isinstance(detail, dict):
        # DomainException.to_dict() shape
        code = detail.get("code")
        message = detail.get("message")
        return (
            message if isinstance(message, str) else None,
            code if isinstance(code, str) else None,
            detail.get("details"),
        )
    if detail is None:
        return None, None, None
    return str(detail), None, None


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message, code, details = _split_http_detail(exc.detail)
        return problem_response(
            request, exc.status_code, message, code=code, errors=details, headers=exc.headers
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        return problem_response(
            request, exc.status_code, exc.message, code=exc.code, errors=exc.details
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return problem_response(
            request,
            422,
            "Request parameters failed validation",
            code="validation_error",
            errors=exc.errors(),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return problem_response(request, 500, "Internal Server Error", code="internal_server_error")
