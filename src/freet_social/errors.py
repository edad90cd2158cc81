"""
# Error Taxonomy

Typed errors raised by validation predicates, the relationship store and the
services. Each carries the HTTP status it maps to and a `detail` payload that is
rendered verbatim as `{"error": detail}`; `detail` is either a `{field: message}`
mapping or a plain message.
"""

from typing import Any, Dict, Union

from fastapi import status

ErrorDetail = Union[str, Dict[str, Any]]


class FreetError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: ErrorDetail):
        super().__init__(detail)
        self.detail = detail

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.detail}


class ValidationError(FreetError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(FreetError):
    """The caller is not logged in."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(FreetError):
    """A referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(FreetError):
    """A record with the requested key already exists."""

    status_code = status.HTTP_409_CONFLICT


class DuplicateKey(ConflictError):
    """The document store rejected an insert on a structural constraint."""
