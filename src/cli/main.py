"""CLI principal (Typer).

Cada subcomando es una acción de `core.services.actions`. Las opciones se leen
de flags o de las variables `WEBLATE_*`; el host y el token también del `.env`
de usuario que escribe `doctor configure`.

Códigos de salida: 0 éxito, 1 fallo de API/red, 2 parámetros inválidos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.doctor import app as doctor_app
from cli.ui_components import build_languages_table, build_projects_table, console_hooks, load_settings
from core.config import AppSettings
from core.errors import InvalidParameterError, WeblateError
from core.services import actions
from core.services.actions import ActionHooks

app = typer.Typer(
    no_args_is_help=True,
    help="Fetch and upload localization data to a Weblate server.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

ResultT = TypeVar("ResultT")


@dataclass
class CliState:
    settings: AppSettings
    host: str | None
    api_token: str | None
    quiet: bool = False

    def connection(self) -> dict[str, Any]:
        return {"host": self.host, "api_token": self.api_token}

    def hooks(self) -> ActionHooks:
        return console_hooks(_err_console, _err_console, quiet=self.quiet)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False, rich_tracebacks=False)],
        force=True,
    )


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        raise typer.BadParameter("CLI state not initialised")
    return state


def _invoke(call: Callable[[], ResultT]) -> ResultT:
    """Ejecuta una acción y traduce sus errores a códigos de salida.

    Los mensajes ya los imprimieron los hooks de la acción.
    """

    try:
        return call()
    except InvalidParameterError as exc:
        raise typer.Exit(code=2) from exc
    except WeblateError as exc:
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        _err_console.print(f"File error: {exc}", style="bold red", markup=False)
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None,
        "--host",
        envvar="WEBLATE_HOST",
        help="Weblate host URL (e.g., https://hosted.weblate.org).",
    ),
    api_token: Optional[str] = typer.Option(
        None,
        "--api-token",
        envvar="WEBLATE_API_TOKEN",
        help="API token for Weblate authentication.",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests and responses."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print results and errors."),
) -> None:
    settings = load_settings(_err_console)
    _configure_logging("INFO" if verbose else settings.log_level)

    token = api_token
    if token is None and settings.api_token is not None:
        token = settings.api_token.get_secret_value()

    ctx.obj = CliState(
        settings=settings,
        host=host or settings.host,
        api_token=token,
        quiet=quiet,
    )


@app.command()
def projects(
    ctx: typer.Context,
    page: Optional[int] = typer.Option(None, "--page", envvar="WEBLATE_PAGE", help="Page number (default 1)."),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        envvar="WEBLATE_PAGE_SIZE",
        help="Items per page, 1-200 (default 20).",
    ),
    show_details: bool = typer.Option(False, "--show-details", envvar="WEBLATE_SHOW_DETAILS"),
) -> None:
    """List projects visible to the API token."""

    state = _state(ctx)
    params = {**state.connection(), "page": page, "page_size": page_size, "show_details": show_details}
    result = _invoke(lambda: actions.list_projects(params, hooks=state.hooks(), settings=state.settings))
    _console.print(build_projects_table(result))


@app.command()
def languages(
    ctx: typer.Context,
    project_slug: str = typer.Option(..., "--project-slug", envvar="WEBLATE_PROJECT_SLUG"),
    show_details: bool = typer.Option(False, "--show-details", envvar="WEBLATE_SHOW_DETAILS"),
) -> None:
    """List the languages of a project."""

    state = _state(ctx)
    params = {**state.connection(), "project_slug": project_slug, "show_details": show_details}
    result = _invoke(lambda: actions.list_project_languages(params, hooks=state.hooks(), settings=state.settings))
    _console.print(build_languages_table(result, project_slug=project_slug))


def _translation_params(
    state: CliState,
    *,
    project_slug: str,
    component_slug: str,
    src_file_path: str,
    language: Optional[str],
    method: Optional[str],
    conflicts: Optional[str],
    email: Optional[str],
    author: Optional[str],
    fuzzy: Optional[str],
) -> dict[str, Any]:
    return {
        **state.connection(),
        "project_slug": project_slug,
        "component_slug": component_slug,
        "src_file_path": src_file_path,
        "language": language,
        "method": method,
        "conflicts": conflicts,
        "email": email,
        "author": author,
        "fuzzy": fuzzy,
    }


_PROJECT_OPT = typer.Option(..., "--project-slug", envvar="WEBLATE_PROJECT_SLUG")
_COMPONENT_OPT = typer.Option(
    ...,
    "--component-slug",
    envvar="WEBLATE_COMPONENT_SLUG",
    help="Component slug; categorized slugs such as 'ios/localizable-strings' are supported.",
)
_SRC_OPT = typer.Option(..., "--src-file-path", envvar="WEBLATE_SRC_FILE_PATH", help="File to upload.")
_LANGUAGE_OPT = typer.Option(None, "--language", envvar="WEBLATE_LANGUAGE", help="Language code (default en_devel).")
_METHOD_OPT = typer.Option(
    None,
    "--method",
    envvar="WEBLATE_UPLOAD_METHOD",
    help="translate (default), approve, suggest, fuzzy, replace, source, add.",
)
_CONFLICTS_OPT = typer.Option(
    None,
    "--conflicts",
    envvar="WEBLATE_CONFLICTS",
    help="ignore (default), replace-translated, replace-approved.",
)
_EMAIL_OPT = typer.Option(None, "--email", envvar="WEBLATE_AUTHOR_EMAIL", help="Defaults to git user.email.")
_AUTHOR_OPT = typer.Option(None, "--author", envvar="WEBLATE_AUTHOR_NAME", help="Defaults to git user.name.")
_FUZZY_OPT = typer.Option(None, "--fuzzy", envvar="WEBLATE_FUZZY", help="process or approve.")


@app.command()
def upload(
    ctx: typer.Context,
    project_slug: str = _PROJECT_OPT,
    component_slug: str = _COMPONENT_OPT,
    src_file_path: str = _SRC_OPT,
    language: Optional[str] = _LANGUAGE_OPT,
    method: Optional[str] = _METHOD_OPT,
    conflicts: Optional[str] = _CONFLICTS_OPT,
    email: Optional[str] = _EMAIL_OPT,
    author: Optional[str] = _AUTHOR_OPT,
    fuzzy: Optional[str] = _FUZZY_OPT,
) -> None:
    """Upload a translation file for one language of a component."""

    state = _state(ctx)
    params = _translation_params(
        state,
        project_slug=project_slug,
        component_slug=component_slug,
        src_file_path=src_file_path,
        language=language,
        method=method,
        conflicts=conflicts,
        email=email,
        author=author,
        fuzzy=fuzzy,
    )
    _invoke(lambda: actions.upload_translation_file(params, hooks=state.hooks(), settings=state.settings))


@app.command(name="add-translations")
def add_translations(
    ctx: typer.Context,
    project_slug: str = _PROJECT_OPT,
    component_slug: str = _COMPONENT_OPT,
    src_file_path: str = _SRC_OPT,
    language: Optional[str] = _LANGUAGE_OPT,
    method: Optional[str] = _METHOD_OPT,
    conflicts: Optional[str] = _CONFLICTS_OPT,
    email: Optional[str] = _EMAIL_OPT,
    author: Optional[str] = _AUTHOR_OPT,
    fuzzy: Optional[str] = _FUZZY_OPT,
) -> None:
    """Add translations to a project (translation file upload)."""

    state = _state(ctx)
    params = _translation_params(
        state,
        project_slug=project_slug,
        component_slug=component_slug,
        src_file_path=src_file_path,
        language=language,
        method=method,
        conflicts=conflicts,
        email=email,
        author=author,
        fuzzy=fuzzy,
    )
    outcome = _invoke(lambda: actions.add_translations(params, hooks=state.hooks(), settings=state.settings))
    _console.print(outcome.message, style="green" if outcome.success else "red", markup=False)


@app.command(name="upload-base")
def upload_base(
    ctx: typer.Context,
    project_slug: str = _PROJECT_OPT,
    component_slug: str = _COMPONENT_OPT,
    src_file_path: str = _SRC_OPT,
) -> None:
    """Upload the base (source) file of a component."""

    state = _state(ctx)
    params = {
        **state.connection(),
        "project_slug": project_slug,
        "component_slug": component_slug,
        "src_file_path": src_file_path,
    }
    _invoke(lambda: actions.upload_base_file(params, hooks=state.hooks(), settings=state.settings))


@app.command()
def download(
    ctx: typer.Context,
    project_slug: str = _PROJECT_OPT,
    component_slug: str = _COMPONENT_OPT,
    file_format: Optional[str] = typer.Option(
        None,
        "--format",
        envvar="WEBLATE_FILE_FORMAT",
        help="zip, zip:po, zip:xliff, json, po, ... (server-side conversion).",
    ),
    output_path: Optional[Path] = typer.Option(
        None,
        "--output-path",
        envvar="WEBLATE_OUTPUT_PATH",
        help="Where to save the file. Without it the bytes go to stdout.",
    ),
) -> None:
    """Download a component file."""

    state = _state(ctx)
    params = {
        **state.connection(),
        "project_slug": project_slug,
        "component_slug": component_slug,
        "format": file_format,
        "output_path": output_path,
    }
    content = _invoke(lambda: actions.download_component_file(params, hooks=state.hooks(), settings=state.settings))
    if output_path is None:
        stream = typer.get_binary_stream("stdout")
        stream.write(content)
        stream.flush()


def run() -> None:
    app()


if __name__ == "__main__":
    run()
