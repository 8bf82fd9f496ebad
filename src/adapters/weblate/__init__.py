"""Adaptador de la API REST de Weblate (URLs, multipart, respuestas, gateway)."""

from adapters.weblate.gateway import WeblateGateway
from adapters.weblate.responses import map_response, normalize_list
from adapters.weblate.urls import build_api_base, build_resource_url, encode_slug

__all__ = [
    "WeblateGateway",
    "build_api_base",
    "build_resource_url",
    "encode_slug",
    "map_response",
    "normalize_list",
]
