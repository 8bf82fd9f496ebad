"""Excepciones tipadas del gateway Weblate.

Jerarquía:
- `WeblateError` es la raíz; la CLI solo necesita capturar esta.
- Los errores HTTP heredan de `ApiStatusError` y llevan `status_code` y `body`.
- `user_message` es el texto que se muestra al usuario final.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.domain.models import Violation


class WeblateError(Exception):
    """Base exception for every failure raised by the gateway."""

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message: str = user_message or message


class InvalidHostError(WeblateError):
    """Host URL is not an absolute http(s) URL."""

    def __init__(self, host: str, reason: str) -> None:
        super().__init__(f"Invalid host {host!r}: {reason}")
        self.host = host
        self.reason = reason


class InvalidParameterError(WeblateError):
    """One or more parameters failed validation before any request was sent."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations: list[Violation] = list(violations)
        details = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid parameters: {details}")


class TransportError(WeblateError):
    """Network-level failure (DNS, connection refused, timeout, TLS)."""


class JsonParseError(WeblateError):
    """A 2xx response that must be JSON could not be parsed."""

    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message, user_message=f"Failed to parse JSON response: {message}")
        self.body = body


class ApiStatusError(WeblateError):
    """The server answered with a non-success status code."""

    default_message = "API request failed"

    def __init__(self, status_code: int, body: Any = None, *, message: str | None = None) -> None:
        text = message or f"{self.default_message} ({status_code})"
        super().__init__(text)
        self.status_code = status_code
        self.body = body


class BadRequestError(ApiStatusError):
    default_message = "Bad request"


class AuthenticationError(ApiStatusError):
    default_message = "Authentication failed: invalid API token"


class ForbiddenError(ApiStatusError):
    default_message = "Access forbidden: check project/component permissions"


class NotFoundError(ApiStatusError):
    default_message = "Not found: project, component, or language not found"


class RateLimitedError(ApiStatusError):
    default_message = "Rate limited: too many requests"


class UnexpectedStatusError(ApiStatusError):
    default_message = "Unexpected response status"

    def __init__(self, status_code: int, body: Any = None) -> None:
        super().__init__(
            status_code,
            body,
            message=f"API request failed with status {status_code}: {body!r}"[:500],
        )
