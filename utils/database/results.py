"""
Operation results for table calls.

Every model method returns an OperationResult instead of raising, so the
dashboard and the API can surface the failure reason.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError


class ErrorKind(str, Enum):
    """Failure categories the UI and API distinguish."""
    NOT_CONFIGURED = "not_configured"
    NETWORK = "network"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    BACKEND = "backend"


# HTTP status used by the API for each kind
HTTP_STATUS = {
    ErrorKind.NOT_CONFIGURED: 503,
    ErrorKind.NETWORK: 502,
    ErrorKind.PERMISSION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 422,
    ErrorKind.BACKEND: 500,
}


@dataclass
class OperationResult:
    """Outcome of a single table round trip."""
    ok: bool
    data: Any = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, data: Any = None) -> "OperationResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, kind: ErrorKind, error: str) -> "OperationResult":
        return cls(ok=False, error=error, kind=kind)

    @classmethod
    def from_exception(cls, exc: Exception) -> "OperationResult":
        return cls.failure(classify_error(exc), describe_error(exc))

    @property
    def http_status(self) -> int:
        if self.ok:
            return 200
        return HTTP_STATUS.get(self.kind, 500)


def classify_error(exc: Exception) -> ErrorKind:
    """Map a client-side exception to an ErrorKind."""
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK

    if isinstance(exc, ValidationError):
        return ErrorKind.VALIDATION

    if isinstance(exc, APIError):
        code = str(exc.code or "")
        if code == "42501" or code in ("401", "403") or code.startswith("PGRST3"):
            return ErrorKind.PERMISSION
        if code == "PGRST116":
            return ErrorKind.NOT_FOUND
        # PostgreSQL class 22 (data exception) / 23 (integrity violation)
        if code.startswith("22") or code.startswith("23") or code.startswith("PGRST2"):
            return ErrorKind.VALIDATION
        return ErrorKind.BACKEND

    return ErrorKind.BACKEND


def describe_error(exc: Exception) -> str:
    """Short reason string for logs and the UI."""
    if isinstance(exc, APIError):
        parts = [exc.message or "Request failed"]
        if exc.details:
            parts.append(str(exc.details))
        if exc.code:
            parts.append(f"(code {exc.code})")
        return " ".join(parts)
    return str(exc) or exc.__class__.__name__
