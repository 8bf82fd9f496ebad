"""Mapeo de respuestas HTTP de Weblate a valores o excepciones tipadas.

| status   | resultado                                   |
|----------|---------------------------------------------|
| 200, 201 | JSON (tolerante: si no parsea, `{}`) o bytes |
| 400      | `BadRequestError` (JSON o texto crudo)       |
| 401      | `AuthenticationError`                        |
| 403      | `ForbiddenError`                             |
| 404      | `NotFoundError`                              |
| 429      | `RateLimitedError`                           |
| otro     | `UnexpectedStatusError`                      |
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from core.domain.models import RecordPage
from core.errors import (
    ApiStatusError,
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    JsonParseError,
    NotFoundError,
    RateLimitedError,
    UnexpectedStatusError,
)

SUCCESS_CODES = (200, 201)

_STATUS_ERRORS: dict[int, type[ApiStatusError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitedError,
}


def _body_for_error(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def error_for_status(response: httpx.Response) -> ApiStatusError:
    status = response.status_code
    body = _body_for_error(response)
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        return UnexpectedStatusError(status, body)
    return error_cls(status, body)


def map_response(
    response: httpx.Response,
    *,
    binary: bool = False,
    strict_json: bool = False,
) -> Any:
    """Devuelve el cuerpo de una respuesta 200/201 o lanza el error del status.

    - `binary=True`: bytes tal cual (descargas de ficheros).
    - `strict_json=True`: un 2xx que no es JSON lanza `JsonParseError`.
    """

    if response.status_code not in SUCCESS_CODES:
        raise error_for_status(response)

    if binary:
        return response.content

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        if strict_json:
            raise JsonParseError(str(exc), body=response.text[:500]) from exc
        return {}


def normalize_list(payload: Any) -> RecordPage:
    """Normaliza `[...]` o `{count, next, previous, results}` a `RecordPage`."""

    if isinstance(payload, list):
        records = [item for item in payload if isinstance(item, dict)]
        return RecordPage(count=len(records), results=records)

    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        records = [item for item in payload["results"] if isinstance(item, dict)]
        count = payload.get("count")
        if isinstance(count, bool) or not isinstance(count, int):
            count = len(records)
        next_url = payload.get("next")
        previous_url = payload.get("previous")
        return RecordPage(
            count=count,
            next=next_url if isinstance(next_url, str) else None,
            previous=previous_url if isinstance(previous_url, str) else None,
            results=records,
        )

    return RecordPage()
