"""Identidad local de git (autor/email por defecto para uploads)."""

from __future__ import annotations

import subprocess


def git_config_value(key: str) -> str | None:
    """Devuelve `git config <key>` o `None` si git no está disponible o el valor está vacío."""

    try:
        process = subprocess.run(
            ["git", "config", key],
            check=False,
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return None

    if process.returncode != 0:
        return None
    value = process.stdout.strip()
    return value or None


def default_author_email() -> str | None:
    return git_config_value("user.email")


def default_author_name() -> str | None:
    return git_config_value("user.name")
