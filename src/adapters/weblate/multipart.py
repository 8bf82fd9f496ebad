"""Cuerpo multipart/form-data para los uploads de Weblate.

Formato (CRLF en todas las líneas):
- primero la parte `file` (siempre una, `application/octet-stream`);
- después `method`, `conflicts`, `email`, `author`, `fuzzy` en ese orden,
  solo si tienen valor no vacío;
- cierre con `--<boundary>--`.
"""

from __future__ import annotations

import uuid
from typing import Mapping

BOUNDARY_PREFIX = "----formdata-"
FORM_FIELDS = ("method", "conflicts", "email", "author", "fuzzy")


def new_boundary() -> str:
    return BOUNDARY_PREFIX + uuid.uuid4().hex


def quote_filename(filename: str) -> str:
    """Valor de `filename=` sin CR/LF y con `"` y `\\` escapadas."""

    cleaned = filename.replace("\r", "").replace("\n", "")
    return cleaned.replace("\\", "\\\\").replace('"', '\\"')


def build_multipart_body(
    filename: str,
    file_data: bytes,
    fields: Mapping[str, str | None] | None = None,
    *,
    boundary: str | None = None,
) -> tuple[bytes, str]:
    """Devuelve `(body_bytes, boundary)`.

    Los nombres de campo que no están en `FORM_FIELDS` se ignoran.
    """

    boundary = boundary or new_boundary()
    fields = fields or {}

    parts: list[bytes] = [
        (
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="file"; filename="{quote_filename(filename)}"\r\n'
            "Content-Type: application/octet-stream\r\n"
            "\r\n"
        ).encode("utf-8")
        + file_data
        + b"\r\n"
    ]

    for name in FORM_FIELDS:
        value = fields.get(name)
        if not value:
            continue
        parts.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n'
                "\r\n"
                f"{value}\r\n"
            ).encode("utf-8")
        )

    body = b"".join(parts) + f"--{boundary}--\r\n".encode("utf-8")
    return body, boundary


def content_type_header(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"
