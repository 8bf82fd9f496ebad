"""Wrapper de httpx para la API de Weblate.

- Estandariza timeout, headers de autenticación y User-Agent.
- Permite inyectar un `httpx.BaseTransport` (tests, TLS propio).
- Registra cada request/response sin exponer el token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import TransportError

logger = logging.getLogger(__name__)


def build_headers(api_token: str, settings: AppSettings) -> dict[str, str]:
    return {
        "Authorization": f"Token {api_token}",
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }


def build_client(
    settings: AppSettings | None = None,
    *,
    api_token: str,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con los headers de Weblate.

    El cliente se usa como context manager: una conexión por llamada, liberada
    al salir del bloque aunque haya error.
    """

    settings = settings or AppSettings()
    headers = build_headers(api_token, settings)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def clean_query(params: dict[str, Any] | None) -> dict[str, Any] | None:
    """Quita los parámetros `None`; devuelve `None` si no queda ninguno."""

    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None}
    return cleaned or None


def send(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Envía una request y traduce fallos de red o de URL a `TransportError`."""

    query = clean_query(params)
    logger.info("API Request: %s %s", method, url)
    try:
        response = client.request(method, url, params=query, content=content, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("API Error: %s %s -> %s", method, url, exc)
        raise TransportError(f"{type(exc).__name__}: {exc}") from exc

    logger.info("API Response: %s %s -> %s", method, url, response.status_code)
    return response
