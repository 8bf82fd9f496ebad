"""Escritura de ficheros descargados.

Los bytes se escriben tal cual (sin decodificar) y se crean los directorios
intermedios.
"""

from __future__ import annotations

from pathlib import Path


def write_bytes(*, content: bytes, output_path: Path) -> int:
    """Escribe `content` en `output_path` y devuelve el tamaño en disco."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(content)
    return output_path.stat().st_size
