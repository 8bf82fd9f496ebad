"""Parámetros de entrada de cada acción (Pydantic v2).

Cada modelo declara los valores por defecto y las reglas de la acción. La
validación en sí se hace con `core.validation`, que convierte los errores en
una lista de `Violation` antes de tocar la red.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic.config import ConfigDict

from core.git_identity import default_author_email, default_author_name

UploadMethod = Literal["translate", "approve", "suggest", "fuzzy", "replace", "source", "add"]
ConflictsPolicy = Literal["ignore", "replace-translated", "replace-approved"]
FuzzyMode = Literal["process", "approve"]

MAX_PAGE_SIZE = 200

_LABELS = {
    "api_token": "API token",
    "project_slug": "Project slug",
    "component_slug": "Component slug",
    "src_file_path": "Source file path",
}


class ConnectionParams(BaseModel):
    """Host + token, comunes a todas las acciones."""

    model_config = ConfigDict(extra="ignore")

    host: str = Field(..., description="Weblate host URL (e.g., https://hosted.weblate.org)")
    api_token: SecretStr = Field(..., description="API token for Weblate authentication")

    @field_validator("host")
    @classmethod
    def _check_host(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Host cannot be empty")
        if not value.startswith(("http://", "https://")):
            raise ValueError("Host must start with http:// or https://")
        return value

    @field_validator("api_token")
    @classmethod
    def _check_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("API token cannot be empty")
        return value

    @property
    def token(self) -> str:
        return self.api_token.get_secret_value()


class ProjectsParams(ConnectionParams):
    page: int = Field(default=1, description="Page number for pagination")
    page_size: int = Field(default=20, description="Number of items per page")
    show_details: bool = False

    @field_validator("page")
    @classmethod
    def _check_page(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("page must be greater than 0")
        return value

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("page_size must be greater than 0")
        if value > MAX_PAGE_SIZE:
            raise ValueError(f"page_size cannot be greater than {MAX_PAGE_SIZE}")
        return value


class LanguagesParams(ConnectionParams):
    project_slug: str
    show_details: bool = False

    @field_validator("project_slug")
    @classmethod
    def _not_empty(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"{_LABELS[info.field_name]} cannot be empty")
        return value.strip()


class ComponentParams(ConnectionParams):
    project_slug: str
    component_slug: str = Field(
        ...,
        description="Component slug. Supports categorized components (e.g., 'ios/localizable-strings')",
    )

    @field_validator("project_slug", "component_slug")
    @classmethod
    def _not_empty(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"{_LABELS[info.field_name]} cannot be empty")
        return value.strip()


class DownloadParams(ComponentParams):
    format: str | None = Field(
        default=None,
        description="Server-side conversion, e.g. 'zip', 'zip:po', 'json'.",
    )
    output_path: Path | None = None


class BaseUploadParams(ComponentParams):
    src_file_path: Path

    @field_validator("src_file_path", mode="before")
    @classmethod
    def _check_source(cls, value: object) -> object:
        if value is None or not str(value).strip():
            raise ValueError("Source file path cannot be empty")
        path = Path(str(value))
        if not path.is_file():
            raise ValueError(f"Source file does not exist: {value}")
        return path


class TranslationUploadParams(BaseUploadParams):
    language: str = Field(default="en_devel", min_length=1)
    method: UploadMethod = "translate"
    conflicts: ConflictsPolicy = "ignore"
    email: str | None = Field(default_factory=default_author_email)
    author: str | None = Field(default_factory=default_author_name)
    fuzzy: FuzzyMode | None = None

    def form_fields(self) -> dict[str, str | None]:
        return {
            "method": self.method,
            "conflicts": self.conflicts,
            "email": self.email,
            "author": self.author,
            "fuzzy": self.fuzzy,
        }
