"""Modelos y entidades del dominio.

- Estructuras de datos puras (Pydantic v2).
- El dominio no conoce HTTP ni CLI: solo proyectos, idiomas y uploads.
"""
