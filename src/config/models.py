"""Modelos ``dataclass`` que describen la configuración de la aplicación en vivo."""
from __future__ import annotations
from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional

# Importa valores por defecto definidos en los módulos de configuración central.
from .constants import (
    DEFAULT_LANDMARKER_MODEL,
    DEFAULT_LANDMARKER_MODEL_URL,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)
from .settings import (
    DEFAULT_CAMERA_HEIGHT,
    DEFAULT_CAMERA_INDEX,
    DEFAULT_CAMERA_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CREATURE,
    DEFAULT_DEBUG_MODE,
    DEFAULT_FRAME_INTERVAL_MS,
    DEFAULT_KEYPOINT_MIN_SCORE,
    DEFAULT_MAX_POSES,
    DEFAULT_SUBJECT_MODE,
    MODEL_COMPLEXITY,
    POSE_SMOOTH_LANDMARKS,
)
from .creature_visualization import MULTI_POSE_HUE_STEP, SINGLE_POSE_HUE, STROKE_ALPHA


@dataclass
class PoseConfig:
    """Parámetros del estimador y del modo de detección inicial."""
    mode: str = DEFAULT_SUBJECT_MODE
    model_complexity: int = MODEL_COMPLEXITY
    min_detection_confidence: float = float(MIN_DETECTION_CONFIDENCE)
    min_tracking_confidence: float = float(MIN_TRACKING_CONFIDENCE)
    smooth_landmarks: bool = POSE_SMOOTH_LANDMARKS
    min_keypoint_score: float = DEFAULT_KEYPOINT_MIN_SCORE
    max_poses: int = DEFAULT_MAX_POSES
    landmarker_model_path: Path = DEFAULT_LANDMARKER_MODEL
    landmarker_model_url: Optional[str] = DEFAULT_LANDMARKER_MODEL_URL


@dataclass
class CameraConfig:
    """Dispositivo de captura y resolución solicitada."""
    device_index: int = DEFAULT_CAMERA_INDEX
    width: int = DEFAULT_CAMERA_WIDTH
    height: int = DEFAULT_CAMERA_HEIGHT
    fps: Optional[float] = None


@dataclass
class DisplayConfig:
    """Tamaño inicial del lienzo y ritmo del temporizador de refresco."""
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS


@dataclass
class RenderConfig:
    """Monstruo inicial y parámetros de color por sujeto."""
    creature: str = DEFAULT_CREATURE
    single_pose_hue: int = SINGLE_POSE_HUE
    hue_step: int = MULTI_POSE_HUE_STEP
    stroke_alpha: float = STROKE_ALPHA


@dataclass
class DebugConfig:
    """Ajustes de depuración visual."""
    debug_mode: bool = DEFAULT_DEBUG_MODE
    show_labels: bool = True


@dataclass
class Config:
    """Configuración de alto nivel consumida por la aplicación completa."""
    pose: PoseConfig = field(default_factory=PoseConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)

    # --- Serialisation helpers -------------------------------------------------
    def to_serializable_dict(self) -> Dict[str, Any]:
        """Genera una representación serializable en YAML/JSON."""
        return _dataclass_to_dict(self)


# --- Internal utilities -------------------------------------------------------

def _dataclass_to_dict(obj: Any) -> Any:
    """Convierte recursivamente ``dataclasses`` (y anidados) en diccionarios."""
    if is_dataclass(obj):
        return {key: _dataclass_to_dict(value) for key, value in obj.__dict__.items()}
    if isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_dataclass_to_dict(value) for value in obj]
    if isinstance(obj, Path):
        return str(obj)
    return obj


def _update_dataclass(instance: Any, updates: Dict[str, Any]) -> Any:
    """Actualiza recursivamente ``instance`` respetando los límites de cada ``dataclass``."""
    for key, value in updates.items():
        if not hasattr(instance, key):
            continue
        current = getattr(instance, key)
        if is_dataclass(current) and isinstance(value, dict):
            _update_dataclass(current, value)
        elif isinstance(current, Path) and value is not None:
            setattr(instance, key, Path(value))
        else:
            setattr(instance, key, value)
    return instance
