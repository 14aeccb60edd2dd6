from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base class for failures talking to the storefront backend."""

    kind = "error"

    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}


class ProtocolMismatchError(StorefrontError):
    """The backend answered with something other than JSON."""

    kind = "protocol_mismatch"

    def __init__(self, message: str, *, snippet: str = "", content_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.snippet = snippet
        self.content_type = content_type


class ApiError(StorefrontError):
    """JSON error payload with an extractable detail message."""

    kind = "api_error"

    def __init__(self, message: str, *, status_code: int, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, payload=payload)
        self.status_code = status_code


class NetworkFailure(StorefrontError):
    """No response at all (DNS, refused connection, transport timeout)."""

    kind = "network_failure"


@dataclass
class ValidationRejection(Exception):
    """Client-side precondition failure. Never reaches the network.

    Attributes:
        message: human-readable text shown in the notification banner.
        field_errors: optional mapping of form field -> error message.
    """

    message: str
    field_errors: Dict[str, str] = field(default_factory=dict)

    kind = "validation_rejection"

    def __str__(self) -> str:
        return self.message
