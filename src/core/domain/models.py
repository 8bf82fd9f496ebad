"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* devuelve o envía el gateway, no *cómo* se
obtiene. Las vistas resumidas (`ProjectSummary`, `LanguageSummary`) son
tolerantes: un campo ausente en el JSON de Weblate se rellena con un valor por
defecto en lugar de fallar.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _opt_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if isinstance(value, bool):
        return None
    return value if isinstance(value, int) else None


class Violation(BaseModel):
    """Una regla de validación incumplida por un parámetro."""

    field: str = Field(..., description="Nombre del parámetro (p.ej. 'page_size').")
    message: str = Field(..., description="Mensaje legible para el usuario.")


class Endpoint(BaseModel):
    """Endpoint de la API derivado del host en cada llamada (sin identidad persistida)."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    host: str
    port: int | None = None
    base_path: str = "/api"

    @property
    def base_url(self) -> str:
        netloc = self.host if self.port is None else f"{self.host}:{self.port}"
        return f"{self.scheme}://{netloc}{self.base_path}"


class UploadRequest(BaseModel):
    """Fichero + campos de formulario para un upload multipart.

    Los campos con valor `None` o vacío no se envían.
    """

    file_path: Path
    file_bytes: bytes
    fields: dict[str, str | None] = Field(default_factory=dict)

    @classmethod
    def from_path(cls, file_path: Path, fields: Mapping[str, str | None] | None = None) -> "UploadRequest":
        return cls(file_path=file_path, file_bytes=file_path.read_bytes(), fields=dict(fields or {}))

    @property
    def filename(self) -> str:
        return self.file_path.name


class ProjectSummary(BaseModel):
    """Vista plana de un proyecto Weblate."""

    name: str = "Unknown"
    slug: str = "unknown"
    web_url: str | None = None
    url: str | None = None
    source_language: Any = None
    languages_count: int | None = None
    components_count: int | None = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ProjectSummary":
        name = _opt_str(data, "name")
        slug = _opt_str(data, "slug")
        return cls(
            name=name if name is not None else "Unknown",
            slug=slug if slug is not None else "unknown",
            web_url=_opt_str(data, "web_url"),
            url=_opt_str(data, "url"),
            source_language=data.get("source_language"),
            languages_count=_opt_int(data, "languages_count"),
            components_count=_opt_int(data, "components_count"),
        )


class LanguageSummary(BaseModel):
    """Vista plana de un idioma de proyecto."""

    name: str = "Unknown"
    code: str = "Unknown"
    direction: str | None = None
    plural: Any = None
    web_url: str | None = None
    url: str | None = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "LanguageSummary":
        name = _opt_str(data, "name")
        if name is None:
            name = _opt_str(data, "english_name")
        code = _opt_str(data, "code")
        return cls(
            name=name if name is not None else "Unknown",
            code=code if code is not None else "Unknown",
            direction=_opt_str(data, "direction"),
            plural=data.get("plural"),
            web_url=_opt_str(data, "web_url"),
            url=_opt_str(data, "url"),
        )


class RecordPage(BaseModel):
    """Respuesta de listado normalizada (array desnudo o sobre paginado)."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[dict[str, Any]] = Field(default_factory=list)


class ProjectList(BaseModel):
    """Página de proyectos tal como la devuelve la acción `list_projects`."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[ProjectSummary] = Field(default_factory=list)


class UploadOutcome(BaseModel):
    """Resultado de `add_translations`."""

    success: bool
    message: str
    result: dict[str, Any] = Field(default_factory=dict)
