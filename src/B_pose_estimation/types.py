"""Tipos ligeros que describen puntos clave, poses y fotogramas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Vocabulario fijo de marcadores (COCO-17).
KEYPOINT_NAMES: Tuple[str, ...] = (
    "nose",
    "left_eye",
    "right_eye",
    "left_ear",
    "right_ear",
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
)


@dataclass(frozen=True)
class Keypoint:
    """Un marcador anatómico con nombre, posición 2D y confianza.

    Las coordenadas están en las unidades nativas del espacio que lo produjo
    (píxeles del fotograma de origen o del lienzo, tras la transformación)."""

    name: str
    x: float
    y: float
    confidence: float


@dataclass(frozen=True)
class Pose:
    """Conjunto ordenado de puntos clave de un único sujeto detectado.

    Se crea en cada llamada de estimación, es inmutable y se descarta tras una
    sola pasada de renderizado."""

    keypoints: Tuple[Keypoint, ...]
    score: Optional[float] = None
    _by_name: Dict[str, Keypoint] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        keypoints = tuple(self.keypoints)
        by_name: Dict[str, Keypoint] = {}
        for kp in keypoints:
            if kp.name in by_name:
                raise ValueError(f"Duplicate keypoint name in pose: {kp.name!r}")
            by_name[kp.name] = kp
        object.__setattr__(self, "keypoints", keypoints)
        object.__setattr__(self, "_by_name", by_name)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(kp.name for kp in self.keypoints)

    def get(self, name: str) -> Optional[Keypoint]:
        """Obtiene el punto clave ``name`` o ``None`` si no se detectó."""

        return self._by_name.get(name)

    def require(self, *names: str) -> Optional[Tuple[Keypoint, ...]]:
        """Devuelve los puntos pedidos sólo si están todos presentes."""

        found = tuple(self._by_name.get(name) for name in names)
        if any(kp is None for kp in found):
            return None
        return found  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self.keypoints)


@dataclass(frozen=True)
class FrameDims:
    """Instantánea de ancho y alto de un fotograma o superficie."""

    width: int
    height: int

    def as_tuple(self) -> Tuple[int, int]:
        return int(self.width), int(self.height)


@dataclass(frozen=True)
class Frame:
    """Imagen instantánea prestada por la fuente de vídeo en cada tick."""

    image: Any
    dims: FrameDims
    index: int = 0
    timestamp: float = 0.0


__all__ = ["KEYPOINT_NAMES", "Frame", "FrameDims", "Keypoint", "Pose"]
