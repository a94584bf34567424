"""Estilos de superposición para dibujar monstruos sobre cada sujeto.
Define dataclasses que documentan cómo coloreamos trazos y marcadores para
compartir un lenguaje común entre los distintos monstruos y la depuración."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Tuple

from src.config import creature_visualization as cviz

# Exportamos explícitamente los elementos principales del módulo.
__all__ = ["Color", "SubjectStyle", "hue_to_bgr", "subject_hue", "style_for_subject"]

Color = Tuple[int, int, int]


def hue_to_bgr(hue: float) -> Color:
    """Convierte ``hsl(hue, 100%, 50%)`` en una tupla BGR para OpenCV."""

    red, green, blue = colorsys.hls_to_rgb((float(hue) % 360.0) / 360.0, 0.5, 1.0)
    return int(round(blue * 255)), int(round(green * 255)), int(round(red * 255))


def subject_hue(
    index: int,
    multi: bool,
    *,
    single_hue: int = cviz.SINGLE_POSE_HUE,
    hue_step: int = cviz.MULTI_POSE_HUE_STEP,
) -> int:
    """Tono determinista por sujeto: depende sólo de su índice en el resultado."""

    if not multi:
        return int(single_hue)
    return (int(index) * int(hue_step)) % 360


@dataclass(frozen=True)
class SubjectStyle:
    """Parámetros visuales de un sujeto durante una pasada de dibujo.
    Mantenerlos agrupados permite que cada monstruo varíe sólo la forma."""

    # Tono HSL asignado al sujeto.
    hue: int = cviz.SINGLE_POSE_HUE
    # Color BGR de los trazos (extremidades) derivado del tono.
    stroke_bgr: Color = hue_to_bgr(cviz.SINGLE_POSE_HUE)
    # Opacidad de los trazos.
    stroke_alpha: float = cviz.STROKE_ALPHA
    # Grosor de las extremidades.
    limb_width: int = cviz.LIMB_WIDTH
    # Si se dibujan los nombres junto a los marcadores de depuración.
    show_labels: bool = True


def style_for_subject(
    index: int,
    multi: bool,
    *,
    single_hue: int = cviz.SINGLE_POSE_HUE,
    hue_step: int = cviz.MULTI_POSE_HUE_STEP,
    stroke_alpha: float = cviz.STROKE_ALPHA,
    show_labels: bool = True,
) -> SubjectStyle:
    hue = subject_hue(index, multi, single_hue=single_hue, hue_step=hue_step)
    return SubjectStyle(
        hue=hue,
        stroke_bgr=hue_to_bgr(hue),
        stroke_alpha=float(stroke_alpha),
        show_labels=show_labels,
    )
