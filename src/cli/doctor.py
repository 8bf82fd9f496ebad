"""Doctor command for environment diagnostics."""

from __future__ import annotations

from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.weblate.gateway import WeblateGateway
from cli.ui_components import load_settings
from core.config import AppSettings, write_user_env_vars
from core.errors import AuthenticationError, InvalidHostError, WeblateError
from core.git_identity import default_author_email, default_author_name

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()
_err_console = Console(stderr=True)


def _check_api(
    host: str,
    token: str,
    settings: AppSettings,
    transport: httpx.BaseTransport | None = None,
) -> tuple[str, str]:
    """Fetch one project to validate connectivity and the token together."""

    try:
        gateway = WeblateGateway(host, token, settings=settings, transport=transport)
        page = gateway.list_projects(page=1, page_size=1)
    except InvalidHostError as exc:
        return "FAIL", exc.reason
    except AuthenticationError:
        return "FAIL", "HTTP 401: invalid API token"
    except WeblateError as exc:
        return "FAIL", exc.user_message
    return "OK", f"{page.count} project(s) visible"


@app.command()
def run(
    host: Optional[str] = typer.Option(None, "--host", envvar="WEBLATE_HOST"),
    api_token: Optional[str] = typer.Option(None, "--api-token", envvar="WEBLATE_API_TOKEN", show_default=False),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings(_err_console)
    host = host or settings.host
    token = api_token or (settings.api_token.get_secret_value() if settings.api_token else None)

    table = Table(title="Weblate Gateway Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Host", "OK" if host else "MISSING", host or "Set WEBLATE_HOST or run `doctor configure`")
    table.add_row("API token", "OK" if token else "MISSING", "(hidden)" if token else "Set WEBLATE_API_TOKEN")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    email = default_author_email()
    author = default_author_name()
    table.add_row("git user.email", "OK" if email else "OPTIONAL", email or "uploads will omit the author e-mail")
    table.add_row("git user.name", "OK" if author else "OPTIONAL", author or "uploads will omit the author name")

    ok_api = False
    if host and token:
        status, detail = _check_api(host, token, settings)
        ok_api = status == "OK"
        table.add_row("Weblate API", status, detail)
    else:
        table.add_row("Weblate API", "SKIPPED", "host and token are required")

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores host and token in the user config .env)."""

    settings = load_settings(_err_console)
    host = typer.prompt("Weblate host", default=settings.host or "https://hosted.weblate.org", show_default=True).strip()
    api_token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()

    if not host.startswith(("http://", "https://")):
        raise typer.BadParameter("host must start with http:// or https://")
    if not api_token:
        raise typer.BadParameter("API token cannot be empty")

    env_path = write_user_env_vars(
        {
            "WEBLATE_HOST": host,
            "WEBLATE_API_TOKEN": api_token,
        }
    )

    _console.print(f"[green]Saved Weblate config to:[/green] {env_path}")
