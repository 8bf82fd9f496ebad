"""Componentes de UI para CLI (Rich).

Separa las tablas/paneles de la lógica de comandos para reutilizarlos en
`projects`, `languages` y `doctor`.
"""

from __future__ import annotations

from typing import Iterable

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.config import AppSettings
from core.domain.models import LanguageSummary, ProjectList
from core.services.actions import ActionHooks


def console_hooks(console: Console, err_console: Console | None = None, *, quiet: bool = False) -> ActionHooks:
    """Hooks que imprimen el progreso de una acción en la consola.

    Con `quiet=True` solo se muestran los errores.
    """

    err_console = err_console or console

    def _message(text: str) -> None:
        console.print(text, markup=False, highlight=False)

    def _success(text: str) -> None:
        console.print(text, style="green", markup=False, highlight=False)

    def _error(text: str) -> None:
        err_console.print(text, style="bold red", markup=False, highlight=False)

    if quiet:
        return ActionHooks(message=lambda _text: None, success=lambda _text: None, error=_error)
    return ActionHooks(message=_message, success=_success, error=_error)


def build_projects_table(projects: ProjectList) -> Table:
    table = Table(title=f"Weblate projects ({projects.count})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Slug", style="white", no_wrap=True)
    table.add_column("Languages", justify="right")
    table.add_column("Components", justify="right")
    table.add_column("URL", style="magenta")
    for index, project in enumerate(projects.results, start=1):
        table.add_row(
            str(index),
            escape(project.name),
            project.slug,
            "" if project.languages_count is None else str(project.languages_count),
            "" if project.components_count is None else str(project.components_count),
            escape(project.web_url or ""),
        )
    return table


def build_languages_table(languages: Iterable[LanguageSummary], *, project_slug: str) -> Table:
    table = Table(title=f"Languages of {project_slug}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Direction", style="dim")
    for index, language in enumerate(languages, start=1):
        table.add_row(str(index), escape(language.code), escape(language.name), language.direction or "")
    return table


def load_settings(err_console: Console) -> AppSettings:
    """`AppSettings()` con los errores de configuración impresos y salida 2."""

    try:
        return AppSettings()
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "settings"
            err_console.print(f"Invalid configuration: {field}: {error.get('msg')}", style="bold red", markup=False)
        raise typer.Exit(code=2) from exc
