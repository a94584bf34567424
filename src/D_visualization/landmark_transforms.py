"""Transformaciones del espacio del modelo al espacio del lienzo.

Centraliza el espejado y el escalado independiente en X/Y para que todos los
renderizadores apliquen exactamente las mismas reglas al pasar de las
coordenadas del fotograma de la cámara a las del lienzo."""

from __future__ import annotations

import cv2
import numpy as np

from src.B_pose_estimation.types import FrameDims, Keypoint, Pose
from src.core.errors import InvalidSource

# Indicamos qué elementos forman parte de la API pública del módulo.
__all__ = ["map_keypoint", "map_pose", "mirror_frame", "validate_source"]


def validate_source(source: FrameDims) -> None:
    """Rechaza fotogramas sin dimensiones (la cámara aún no entregó imagen)."""

    if source.width <= 0 or source.height <= 0:
        raise InvalidSource(f"Source frame has no usable size: {source.width}x{source.height}")


def map_keypoint(keypoint: Keypoint, source: FrameDims, target: FrameDims) -> Keypoint:
    """Lleva un punto clave del fotograma de origen al lienzo.

    La X se espeja porque la cámara entrega una vista no invertida y el
    usuario espera verse como en un espejo; la Y sólo se escala. Nombre y
    confianza pasan sin cambios."""

    validate_source(source)
    target_w = float(target.width)
    target_h = float(target.height)
    return Keypoint(
        name=keypoint.name,
        x=target_w - (float(keypoint.x) / float(source.width)) * target_w,
        y=(float(keypoint.y) / float(source.height)) * target_h,
        confidence=keypoint.confidence,
    )


def map_pose(pose: Pose, source: FrameDims, target: FrameDims) -> Pose:
    """Transforma todos los puntos de ``pose`` con las mismas dimensiones."""

    validate_source(source)
    return Pose(
        keypoints=tuple(map_keypoint(kp, source, target) for kp in pose.keypoints),
        score=pose.score,
    )


def mirror_frame(image: np.ndarray, target: FrameDims) -> np.ndarray:
    """Devuelve el fotograma espejado horizontalmente y ajustado al lienzo."""

    mirrored = cv2.flip(image, 1)
    size = target.as_tuple()
    if (mirrored.shape[1], mirrored.shape[0]) != size:
        mirrored = cv2.resize(mirrored, size, interpolation=cv2.INTER_LINEAR)
    return mirrored
