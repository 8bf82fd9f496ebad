"""Validación explícita de parámetros.

`validate_params` devuelve una lista de `Violation` (vacía si todo es válido)
sin lanzar excepciones; `parse_params` es la variante que lanza
`InvalidParameterError` y devuelve el modelo construido.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from core.domain.models import Violation
from core.errors import InvalidParameterError

ParamsT = TypeVar("ParamsT", bound=BaseModel)


def _clean(values: Mapping[str, Any]) -> dict[str, Any]:
    # None = "no indicado": deja actuar al default del modelo.
    return {k: v for k, v in values.items() if v is not None}


def violations_from_error(exc: ValidationError) -> list[Violation]:
    violations: list[Violation] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = ".".join(str(part) for part in loc) or "__root__"
        if err.get("type") == "missing":
            message = f"{field} is required"
        elif err.get("type") == "value_error" and "error" in (err.get("ctx") or {}):
            message = str(err["ctx"]["error"])
        else:
            message = str(err.get("msg", "invalid value"))
        violations.append(Violation(field=field, message=message))
    return violations


def validate_params(model_cls: type[BaseModel], values: Mapping[str, Any]) -> list[Violation]:
    try:
        model_cls.model_validate(_clean(values))
    except ValidationError as exc:
        return violations_from_error(exc)
    return []


def parse_params(model_cls: type[ParamsT], values: Mapping[str, Any]) -> ParamsT:
    try:
        return model_cls.model_validate(_clean(values))
    except ValidationError as exc:
        raise InvalidParameterError(violations_from_error(exc)) from exc
