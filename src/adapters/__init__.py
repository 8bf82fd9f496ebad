"""Adaptadores de I/O (HTTP hacia Weblate, sistema de ficheros)."""
