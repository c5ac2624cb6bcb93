from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import status


class MockApiError(Exception):
    """Base class for errors that terminate a request with a JSON body.

    Every subclass maps onto a single HTTP status. The rendered body is
    ``{"error": ..., "details": ...}`` with ``details`` omitted when unset.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, details: Optional[str] = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(MockApiError):
    """A required field or parameter is missing."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(MockApiError):
    """The bearer token is missing or malformed."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(MockApiError):
    status_code = status.HTTP_404_NOT_FOUND


class PayloadTooLargeError(MockApiError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class StorageError(MockApiError):
    """Writing uploaded bytes to local storage failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
