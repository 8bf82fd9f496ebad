"""Contrato del gateway de traducciones.

Las acciones de `core.services.actions` solo conocen este Protocol; la
implementación real es `adapters.weblate.WeblateGateway` y los tests pueden
pasar cualquier objeto con la misma forma.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import RecordPage, UploadRequest


@runtime_checkable
class TranslationGateway(Protocol):
    """Operaciones remotas que necesitan las acciones.

    Reglas:
    - Una request por llamada, sin reintentos.
    - Los fallos se lanzan como subclases de `core.errors.WeblateError`.
    """

    base_url: str

    def list_projects(self, *, page: int | None = None, page_size: int | None = None) -> RecordPage: ...

    def list_project_languages(self, project_slug: str) -> RecordPage: ...

    def project_languages_url(self, project_slug: str) -> str: ...

    def component_file_url(self, project_slug: str, component_slug: str) -> str: ...

    def translation_file_url(self, project_slug: str, component_slug: str, language: str) -> str: ...

    def upload_component_file(self, project_slug: str, component_slug: str, upload: UploadRequest) -> Any: ...

    def upload_translation_file(
        self,
        project_slug: str,
        component_slug: str,
        language: str,
        upload: UploadRequest,
    ) -> Any: ...

    def download_component_file(
        self,
        project_slug: str,
        component_slug: str,
        *,
        file_format: str | None = None,
    ) -> bytes: ...
