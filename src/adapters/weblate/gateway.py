"""Gateway HTTP hacia la API REST de Weblate.

Cada método abre un `httpx.Client`, envía una sola request y lo cierra al
salir, haya error o no. No hay reintentos: cualquier fallo llega al llamador.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from adapters.http_client import build_client, send
from adapters.weblate import urls
from adapters.weblate.multipart import build_multipart_body, content_type_header
from adapters.weblate.responses import map_response, normalize_list
from core.config import AppSettings
from core.domain.models import RecordPage, UploadRequest

logger = logging.getLogger(__name__)


class WeblateGateway:
    """Cliente de la API de Weblate para un host + token."""

    def __init__(
        self,
        host: str,
        api_token: str,
        *,
        settings: AppSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._api_token = api_token
        self._transport = transport
        self.host = host
        self.base_url = urls.build_api_base(host)

    def __repr__(self) -> str:
        return f"WeblateGateway(base_url={self.base_url!r})"

    def _client(self) -> httpx.Client:
        return build_client(self._settings, api_token=self._api_token, transport=self._transport)

    def get_json(self, url: str, *, params: Mapping[str, Any] | None = None, strict: bool = False) -> Any:
        with self._client() as client:
            response = send(client, "GET", url, params=dict(params or {}))
        return map_response(response, strict_json=strict)

    def get_bytes(self, url: str, *, params: Mapping[str, Any] | None = None) -> bytes:
        with self._client() as client:
            response = send(client, "GET", url, params=dict(params or {}))
        return map_response(response, binary=True)

    def post_multipart(self, url: str, upload: UploadRequest) -> Any:
        body, boundary = build_multipart_body(upload.filename, upload.file_bytes, upload.fields)
        headers = {"Content-Type": content_type_header(boundary)}
        logger.debug("Multipart body: %d bytes, boundary=%s", len(body), boundary)
        with self._client() as client:
            response = send(client, "POST", url, content=body, headers=headers)
        return map_response(response)

    # Recursos

    def projects_url(self) -> str:
        return urls.projects_url(self.base_url)

    def project_languages_url(self, project_slug: str) -> str:
        return urls.project_languages_url(self.base_url, project_slug)

    def component_file_url(self, project_slug: str, component_slug: str) -> str:
        return urls.component_file_url(self.base_url, project_slug, component_slug)

    def translation_file_url(self, project_slug: str, component_slug: str, language: str) -> str:
        return urls.translation_file_url(self.base_url, project_slug, component_slug, language)

    def list_projects(self, *, page: int | None = None, page_size: int | None = None) -> RecordPage:
        payload = self.get_json(self.projects_url(), params={"page": page, "page_size": page_size})
        return normalize_list(payload)

    def list_project_languages(self, project_slug: str) -> RecordPage:
        payload = self.get_json(self.project_languages_url(project_slug), strict=True)
        return normalize_list(payload)

    def upload_component_file(self, project_slug: str, component_slug: str, upload: UploadRequest) -> Any:
        return self.post_multipart(self.component_file_url(project_slug, component_slug), upload)

    def upload_translation_file(
        self,
        project_slug: str,
        component_slug: str,
        language: str,
        upload: UploadRequest,
    ) -> Any:
        return self.post_multipart(self.translation_file_url(project_slug, component_slug, language), upload)

    def download_component_file(
        self,
        project_slug: str,
        component_slug: str,
        *,
        file_format: str | None = None,
    ) -> bytes:
        return self.get_bytes(
            self.component_file_url(project_slug, component_slug),
            params={"format": file_format},
        )
