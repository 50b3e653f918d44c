"""Base error types raised by the service layer and rendered by the API."""
from __future__ import annotations

from typing import Any

from fastapi import status


class ServiceError(RuntimeError):
    """A failure that maps onto a specific HTTP status and error message."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be processed"

    def __init__(
        self,
        detail: str | None = None,
        *,
        status_code: int | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)
        if status_code is not None:
            self.status_code = status_code
        self.extra = dict(extra or {})

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.detail, **self.extra}


class StoreError(ServiceError):
    """Raised when the relational store fails in a way callers cannot recover from."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Database operation failed"


__all__ = ["ServiceError", "StoreError"]
