"""Paquete de utilidades para dibujar monstruos sobre las poses detectadas.
Reexporta la API pública mientras los módulos internos se organizan por
responsabilidad específica (transformación, lienzo, estilos y monstruos)."""

from .canvas_surface import OpenCVCanvas, RenderSurface
from .creature_renderers import PART_ORDER, Creature, CreatureRegistry, default_registry
from .landmark_drawing import draw_keypoint_markers
from .landmark_overlay_styles import SubjectStyle, hue_to_bgr, style_for_subject, subject_hue
from .landmark_transforms import map_keypoint, map_pose, mirror_frame, validate_source

__all__ = [
    "PART_ORDER",
    "Creature",
    "CreatureRegistry",
    "OpenCVCanvas",
    "RenderSurface",
    "SubjectStyle",
    "default_registry",
    "draw_keypoint_markers",
    "hue_to_bgr",
    "map_keypoint",
    "map_pose",
    "mirror_frame",
    "style_for_subject",
    "subject_hue",
    "validate_source",
]
