"""Construcción de URLs de la API de Weblate.

Reglas:
- Base = `scheme://host[:port]` + path del host (o `/api` si no trae path).
- El puerto solo aparece si es explícito y distinto del default del esquema.
- Un `/` dentro de un slug de componente viaja como `%252F`: Weblate decodifica
  el path una vez antes de resolver la ruta.
"""

from __future__ import annotations

from typing import Iterable
from urllib.parse import quote, urlsplit

import httpx

from core.domain.models import Endpoint
from core.errors import InvalidHostError

DEFAULT_API_PATH = "/api"
_DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_endpoint(host_url: str) -> Endpoint:
    if not isinstance(host_url, str) or not host_url.strip():
        raise InvalidHostError(str(host_url), "host cannot be empty")

    raw = host_url.strip()
    if any(ch.isspace() or not ch.isprintable() for ch in raw):
        raise InvalidHostError(host_url, "host contains whitespace or control characters")

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as exc:
        raise InvalidHostError(host_url, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        raise InvalidHostError(host_url, "scheme must be http or https")
    if not parts.hostname:
        raise InvalidHostError(host_url, "missing host name")

    if port == _DEFAULT_PORTS[scheme]:
        port = None

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"

    base_path = parts.path.rstrip("/") or DEFAULT_API_PATH
    endpoint = Endpoint(scheme=scheme, host=host, port=port, base_path=base_path)
    try:
        httpx.URL(endpoint.base_url)
    except httpx.InvalidURL as exc:
        raise InvalidHostError(host_url, str(exc)) from exc
    return endpoint


def build_api_base(host_url: str) -> str:
    """`https://hosted.weblate.org` -> `https://hosted.weblate.org/api`."""

    return parse_endpoint(host_url).base_url


def encode_slug(slug: str) -> str:
    """`ios/localizable-strings` -> `ios%252Flocalizable-strings`."""

    return slug.replace("/", "%2F").replace("%", "%25")


def build_resource_url(base: str, *segments: str, slugs: Iterable[int] = ()) -> str:
    """Une `segments` a `base` con `/` final.

    Los índices de `slugs` se codifican con `encode_slug`; el resto se escapan
    como un segmento normal de path.
    """

    slug_positions = set(slugs)
    encoded = [
        encode_slug(segment) if index in slug_positions else quote(segment, safe="-_.~")
        for index, segment in enumerate(segments)
    ]
    return "/".join([base.rstrip("/"), *encoded]) + "/"


def projects_url(base: str) -> str:
    return build_resource_url(base, "projects")


def project_languages_url(base: str, project_slug: str) -> str:
    return build_resource_url(base, "projects", project_slug, "languages")


def component_file_url(base: str, project_slug: str, component_slug: str) -> str:
    return build_resource_url(base, "components", project_slug, component_slug, "file", slugs=(2,))


def translation_file_url(base: str, project_slug: str, component_slug: str, language: str) -> str:
    return build_resource_url(
        base,
        "translations",
        project_slug,
        component_slug,
        language,
        "file",
        slugs=(2,),
    )
