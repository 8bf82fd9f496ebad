"""Weblate actions used by the CLI and by build scripts.

Each action validates its parameters first (nothing touches the network if
validation fails), reports progress through `ActionHooks`, performs exactly
one request through a `TranslationGateway`, and returns a plain value:

- `list_projects` -> `ProjectList`
- `list_project_languages` -> `list[LanguageSummary]`
- `upload_translation_file` / `upload_base_file` -> `True`
- `add_translations` -> `UploadOutcome`
- `download_component_file` -> `bytes`

Failures are reported through the hooks and re-raised unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

from pydantic import BaseModel

from adapters.file_store import write_bytes
from adapters.weblate.gateway import WeblateGateway
from core.config import AppSettings
from core.domain.models import LanguageSummary, ProjectList, ProjectSummary, UploadOutcome, UploadRequest
from core.domain.params import (
    BaseUploadParams,
    ConnectionParams,
    DownloadParams,
    LanguagesParams,
    ProjectsParams,
    TranslationUploadParams,
)
from core.errors import WeblateError
from core.interfaces.gateway import TranslationGateway
from core.validation import parse_params

logger = logging.getLogger(__name__)

ParamsT = TypeVar("ParamsT", bound=BaseModel)
ResultT = TypeVar("ResultT")


@dataclass
class ActionHooks:
    """Optional callbacks for UI layers; without a callback the message is logged."""

    message: Callable[[str], None] | None = None
    success: Callable[[str], None] | None = None
    error: Callable[[str], None] | None = None

    def info(self, text: str) -> None:
        if self.message:
            self.message(text)
        else:
            logger.info(text)

    def ok(self, text: str) -> None:
        if self.success:
            self.success(text)
        else:
            logger.info(text)

    def fail(self, text: str) -> None:
        if self.error:
            self.error(text)
        else:
            logger.error(text)


GatewayFactory = Callable[[ConnectionParams, AppSettings | None], TranslationGateway]


def default_gateway_factory(params: ConnectionParams, settings: AppSettings | None) -> TranslationGateway:
    return WeblateGateway(params.host, params.token, settings=settings)


@dataclass
class ActionContext:
    """Collaborators shared by every action call."""

    hooks: ActionHooks
    gateway_factory: GatewayFactory = default_gateway_factory
    settings: AppSettings | None = None


def _context(
    hooks: ActionHooks | None,
    gateway_factory: GatewayFactory | None,
    settings: AppSettings | None,
) -> ActionContext:
    return ActionContext(
        hooks=hooks or ActionHooks(),
        gateway_factory=gateway_factory or default_gateway_factory,
        settings=settings,
    )


def _coerce(model_cls: type[ParamsT], params: ParamsT | Mapping[str, Any], hooks: ActionHooks) -> ParamsT:
    if isinstance(params, model_cls):
        return params
    if isinstance(params, BaseModel):
        params = params.model_dump()
    try:
        return parse_params(model_cls, params)
    except WeblateError as exc:
        hooks.fail(exc.user_message)
        raise


def _guarded(hooks: ActionHooks, prefix: str, call: Callable[[], ResultT]) -> ResultT:
    try:
        return call()
    except WeblateError as exc:
        hooks.fail(f"{prefix}: {exc.user_message}")
        raise


def list_projects(
    params: ProjectsParams | Mapping[str, Any],
    *,
    hooks: ActionHooks | None = None,
    gateway_factory: GatewayFactory | None = None,
    settings: AppSettings | None = None,
) -> ProjectList:
    """Fetch one page of projects and flatten each record."""

    ctx = _context(hooks, gateway_factory, settings)
    p = _coerce(ProjectsParams, params, ctx.hooks)

    ctx.hooks.info(f"Connecting to Weblate: {p.host}")
    ctx.hooks.info("Fetching projects list...")

    def _fetch():
        gateway = ctx.gateway_factory(p, ctx.settings)
        return gateway.list_projects(page=p.page, page_size=p.page_size)

    page = _guarded(ctx.hooks, "Failed to fetch projects", _fetch)
    ctx.hooks.ok("Successfully fetched projects list!")

    projects = [ProjectSummary.from_payload(record) for record in page.results]
    result = ProjectList(count=page.count, next=page.next, previous=page.previous, results=projects)
    ctx.hooks.info(f"Found projects: {len(projects)}")

    if p.show_details:
        if not projects:
            ctx.hooks.info("No projects found")
        for index, project in enumerate(projects, start=1):
            ctx.hooks.info(f"{index}. {project.name} ({project.slug})")
            if project.web_url:
                ctx.hooks.info(f"   URL: {project.web_url}")
            if project.languages_count is not None:
                ctx.hooks.info(f"   Languages: {project.languages_count}")
            if project.components_count is not None:
                ctx.hooks.info(f"   Components: {project.components_count}")
    return result


def list_project_languages(
    params: LanguagesParams | Mapping[str, Any],
    *,
    hooks: ActionHooks | None = None,
    gateway_factory: GatewayFactory | None = None,
    settings: AppSettings | None = None,
) -> list[LanguageSummary]:
    """Fetch the languages of a project; a 404 means the slug is unknown."""

    ctx = _context(hooks, gateway_factory, settings)
    p = _coerce(LanguagesParams, params, ctx.hooks)

    ctx.hooks.info(f"Connecting to Weblate: {p.host}")
    ctx.hooks.info(f"Fetching languages for project: {p.project_slug}")

    def _fetch():
        gateway = ctx.gateway_factory(p, ctx.settings)
        ctx.hooks.info(f"API URL: {gateway.project_languages_url(p.project_slug)}")
        return gateway.list_project_languages(p.project_slug)

    page = _guarded(ctx.hooks, "Failed to fetch project languages", _fetch)
    ctx.hooks.ok("Successfully fetched project languages!")

    languages = [LanguageSummary.from_payload(record) for record in page.results]
    ctx.hooks.info(f"Found languages: {len(languages)}")

    if p.show_details:
        if not languages:
            ctx.hooks.info("No languages found for this project")
        for index, language in enumerate(languages, start=1):
            ctx.hooks.info(f"{index}. {language.name} ({language.code})")
            if language.direction:
                ctx.hooks.info(f"   Direction: {language.direction}")
            if language.plural is not None:
                ctx.hooks.info(f"   Plural: {language.plural}")
    return languages


def _upload_translation(p: TranslationUploadParams, ctx: ActionContext) -> Any:
    ctx.hooks.info(f"Connecting to Weblate: {p.host}")
    ctx.hooks.info(
        f"Uploading file for project: {p.project_slug}, component: {p.component_slug}, language: {p.language}"
    )

    def _send():
        gateway = ctx.gateway_factory(p, ctx.settings)
        ctx.hooks.info(f"Source file: {p.src_file_path}")
        ctx.hooks.info(f"API URL: {gateway.translation_file_url(p.project_slug, p.component_slug, p.language)}")
        if p.email:
            ctx.hooks.info(f"Author email: {p.email}")
        if p.author:
            ctx.hooks.info(f"Author name: {p.author}")
        upload = UploadRequest.from_path(p.src_file_path, p.form_fields())
        ctx.hooks.info("Sending upload request...")
        return gateway.upload_translation_file(p.project_slug, p.component_slug, p.language, upload)

    result = _guarded(ctx.hooks, "Failed to upload file", _send)
    ctx.hooks.ok("File uploaded successfully!")
    ctx.hooks.info(f"Upload result: {result}")
    return result


def upload_translation_file(
    params: TranslationUploadParams | Mapping[str, Any],
    *,
    hooks: ActionHooks | None = None,
    gateway_factory: GatewayFactory | None = None,
    settings: AppSettings | None = None,
) -> bool:
    """Upload a translation file for one language of a component."""

    ctx = _context(hooks, gateway_factory, settings)
    p = _coerce(TranslationUploadParams, params, ctx.hooks)
    _upload_translation(p, ctx)
    return True


def upload_base_file(
    params: BaseUploadParams | Mapping[str, Any],
    *,
    hooks: ActionHooks | None = None,
    gateway_factory: GatewayFactory | None = None,
    settings: AppSettings | None = None,
) -> bool:
    """Upload the base (source) file of a component."""

    ctx = _context(hooks, gateway_factory, settings)
    p = _coerce(BaseUploadParams, params, ctx.hooks)

    ctx.hooks.info(f"Connecting to Weblate: {p.host}")
    ctx.hooks.info(f"Uploading file for project: {p.project_slug}, component: {p.component_slug}")

    def _send():
        gateway = ctx.gateway_factory(p, ctx.settings)
        ctx.hooks.info(f"Source file: {p.src_file_path}")
        ctx.hooks.info(f"API URL: {gateway.component_file_url(p.project_slug, p.component_slug)}")
        upload = UploadRequest.from_path(p.src_file_path)
        return gateway.upload_component_file(p.project_slug, p.component_slug, upload)

    result = _guarded(ctx.hooks, "Failed to upload file", _send)
    ctx.hooks.ok("Base file uploaded successfully!")
    ctx.hooks.info(f"Upload result: {result}")
    return True


def add_translations(
    params: TranslationUploadParams | Mapping[str, Any],
    *,
    hooks: ActionHooks | None = None,
    gateway_factory: GatewayFactory | None = None,
    settings: AppSettings | None = None,
) -> UploadOutcome:
    """Add translations to a project through the translation file upload."""

    ctx = _context(hooks, gateway_factory, settings)
    p = _coerce(TranslationUploadParams, params, ctx.hooks)

    ctx.hooks.info(f"Adding translations for project: {p.project_slug}")
    result = _upload_translation(p, ctx)
    return UploadOutcome(
        success=True,
        message="Translations added successfully",
        result=result if isinstance(result, dict) else {},
    )


def download_component_file(
    params: DownloadParams | Mapping[str, Any],
    *,
    hooks: ActionHooks | None = None,
    gateway_factory: GatewayFactory | None = None,
    settings: AppSettings | None = None,
) -> bytes:
    """Download a component file; also writes it when `output_path` is set."""

    ctx = _context(hooks, gateway_factory, settings)
    p = _coerce(DownloadParams, params, ctx.hooks)

    ctx.hooks.info(f"Connecting to Weblate: {p.host}")
    ctx.hooks.info(f"Downloading file for project: {p.project_slug}, component: {p.component_slug}")

    def _fetch():
        gateway = ctx.gateway_factory(p, ctx.settings)
        url = gateway.component_file_url(p.project_slug, p.component_slug)
        ctx.hooks.info(f"API URL: {url}" + (f"?format={p.format}" if p.format else ""))
        return gateway.download_component_file(p.project_slug, p.component_slug, file_format=p.format)

    content = _guarded(ctx.hooks, "Failed to download file", _fetch)

    if p.output_path is None:
        ctx.hooks.ok("File content retrieved successfully!")
        ctx.hooks.info(f"Content length: {len(content)} bytes")
        return content

    try:
        size = write_bytes(content=content, output_path=p.output_path)
    except OSError as exc:
        ctx.hooks.fail(f"Failed to write file {p.output_path}: {exc}")
        raise
    ctx.hooks.ok(f"File successfully downloaded to: {p.output_path}")
    ctx.hooks.info(f"File size: {size} bytes")
    return content
