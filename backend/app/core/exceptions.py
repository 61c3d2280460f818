# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the PetBnB search backend.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .constants import ERROR_INVALID_DATE_RANGE, ERROR_SITTER_NOT_FOUND

# nginx convention for "client closed request"
HTTP_499_CLIENT_CLOSED_REQUEST = 499


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }

    def to_http_exception(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=self.to_dict())


class ValidationException(DomainException):
    """Raised when a query is malformed or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class DataAccessException(DomainException):
    """
    Raised when the persistence layer fails.

    Surfaces as a single opaque failure; the engine never retries and never
    returns a partial result in its place.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class InternalInvariantException(DomainException):
    """Raised when an internal invariant is violated. Always a bug."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class SearchCancelledException(DomainException):
    """Raised when the caller abandoned a search before it finished."""

    status_code = HTTP_499_CLIENT_CLOSED_REQUEST

    def __init__(self, stage: str):
        super().__init__(
            message=f"Search cancelled before stage '{stage}'",
            code="SEARCH_CANCELLED",
            details={"stage": stage},
        )


# Specific business exceptions


class InvalidDateRangeException(ValidationException):
    """Raised when a stay range ends before it starts."""

    def __init__(self, start: str, end: str):
        super().__init__(
            message=ERROR_INVALID_DATE_RANGE,
            code="INVALID_DATE_RANGE",
            details={"start": start, "end": end},
        )


class SitterNotFoundException(NotFoundException):
    """Raised when a profile lookup names an unknown sitter."""

    def __init__(self, sitter_id: str):
        super().__init__(
            message=ERROR_SITTER_NOT_FOUND,
            code="SITTER_NOT_FOUND",
            details={"sitter_id": sitter_id},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
