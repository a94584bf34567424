"""Rutinas de dibujo para superponer marcadores de depuración.
Reúne la anotación cruda de puntos clave para reutilizarla con cualquier
monstruo y mantener un estilo consistente en el modo de depuración."""

from __future__ import annotations

from src.B_pose_estimation.types import Pose
from src.config import creature_visualization as cviz

from .canvas_surface import RenderSurface
from .landmark_overlay_styles import SubjectStyle, hue_to_bgr

# Exponemos las utilidades de dibujo más relevantes.
__all__ = ["draw_keypoint_markers"]


def draw_keypoint_markers(surface: RenderSurface, pose: Pose, style: SubjectStyle) -> None:
    """Dibuja un círculo por punto clave y, opcionalmente, su nombre.
    Se pinta siempre por encima del monstruo para poder inspeccionar la
    salida cruda del modelo."""

    marker_bgr = hue_to_bgr(style.hue)
    dx, dy = cviz.DEBUG_LABEL_OFFSET
    for kp in pose.keypoints:
        surface.begin_path()
        surface.arc(kp.x, kp.y, cviz.DEBUG_MARKER_RADIUS)
        surface.fill(marker_bgr)
        if style.show_labels:
            surface.fill_text(kp.name, kp.x + dx, kp.y + dy, cviz.DEBUG_LABEL_COLOR)
