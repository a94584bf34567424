"""Tipos y utilidades comunes para el modo de detección y el ciclo de vida.

El objetivo del módulo es normalizar las etiquetas que circulan entre la
configuración, la línea de comandos y la interfaz, evitando condicionales
repetidos. Así se documenta cómo se desambiguan etiquetas libres provenientes
de archivos YAML o argumentos de usuario."""

from __future__ import annotations

from enum import Enum
from typing import Union


class SubjectMode(str, Enum):
    """Número de sujetos que debe buscar el estimador de pose."""

    SINGLE = "single"
    MULTI = "multi"

    def toggled(self) -> "SubjectMode":
        """Devuelve el modo opuesto, tal y como lo alterna el botón de la UI."""

        return SubjectMode.SINGLE if self is SubjectMode.MULTI else SubjectMode.MULTI


class LifecycleState(str, Enum):
    """Estados por los que pasa el propietario del estimador activo."""

    IDLE = "idle"
    CREATING = "creating"
    READY = "ready"
    DISPOSING = "disposing"


_MODE_ALIAS_MAP = {
    # Variantes habituales de las etiquetas de modo.
    "singlepose": SubjectMode.SINGLE.value,
    "single_pose": SubjectMode.SINGLE.value,
    "single_person": SubjectMode.SINGLE.value,
    "multipose": SubjectMode.MULTI.value,
    "multi_pose": SubjectMode.MULTI.value,
    "multiple": SubjectMode.MULTI.value,
    "multiple_people": SubjectMode.MULTI.value,
}


def _normalize_label(value: str) -> str:
    """Limpiar una etiqueta textual para compararla de forma consistente."""

    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    while "__" in normalized:
        normalized = normalized.replace("__", "_")
    return normalized


def as_mode(value: Union[str, "SubjectMode", None]) -> "SubjectMode":
    """Convertir una entrada libre en un ``SubjectMode`` reconocido.

    A diferencia de otras etiquetas, un modo desconocido no puede degradarse a
    un valor neutro: el estimador necesita una configuración concreta, así que
    se lanza ``ValueError`` con el valor original."""

    if isinstance(value, SubjectMode):
        return value
    if not value:
        return SubjectMode.SINGLE
    normalized = _normalize_label(str(value))
    mapped = _MODE_ALIAS_MAP.get(normalized, normalized)
    try:
        return SubjectMode(mapped)
    except ValueError:
        raise ValueError(f"Unknown subject-count mode: {value!r}") from None


MODE_HUMAN_LABEL = {
    SubjectMode.SINGLE: "Single Person Mode",
    SubjectMode.MULTI: "Multiple People Mode",
}
