"""Parámetros por defecto y utilidades de configuración para el bucle en vivo."""

from __future__ import annotations

from .constants import MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE

# --- PARÁMETROS DEL ESTIMADOR ---
# Complejidad del grafo de MediaPipe (0/1/2). En vivo usamos el modelo "lite"
# (0) para mantener la latencia por debajo del periodo de refresco.
MODEL_COMPLEXITY = 0

# Sin segmentación: los monstruos sólo necesitan marcadores corporales.
POSE_ENABLE_SEGMENTATION = False
POSE_SMOOTH_SEGMENTATION = False

# Suavizado temporal de landmarks dentro del grafo para reducir temblores.
POSE_SMOOTH_LANDMARKS = True

# Las entradas son vídeo (False): habilita el seguimiento entre frames.
POSE_STATIC_IMAGE_MODE = False

# Número máximo de sujetos en modo multi-persona.
DEFAULT_MAX_POSES = 6

# Confianza mínima para considerar que un marcador fue detectado en el frame.
DEFAULT_KEYPOINT_MIN_SCORE = 0.3

# --- CÁMARA Y LIENZO ---
DEFAULT_CAMERA_INDEX = 0
DEFAULT_CAMERA_WIDTH = 640
DEFAULT_CAMERA_HEIGHT = 480
DEFAULT_CANVAS_WIDTH = 640
DEFAULT_CANVAS_HEIGHT = 480
# Intervalo del temporizador que hace de "siguiente refresco visual" (ms).
DEFAULT_FRAME_INTERVAL_MS = 16

# --- VALORES PREDETERMINADOS PARA LA UI ---
DEFAULT_CREATURE = "blob"
DEFAULT_SUBJECT_MODE = "single"
DEFAULT_DEBUG_MODE = False


def build_pose_kwargs(
    *,
    static_image_mode: bool | None = None,
    model_complexity: int | None = None,
    min_detection_confidence: float | None = None,
    min_tracking_confidence: float | None = None,
    smooth_landmarks: bool | None = None,
    enable_segmentation: bool | None = None,
) -> dict[str, object]:
    """Configuración estándar para el grafo ``Pose`` de MediaPipe.

    Centralizar estos parámetros garantiza que cada reconstrucción del
    estimador de una sola persona use los mismos ajustes."""

    return {
        "static_image_mode": POSE_STATIC_IMAGE_MODE if static_image_mode is None else static_image_mode,
        "model_complexity": MODEL_COMPLEXITY if model_complexity is None else model_complexity,
        "smooth_landmarks": POSE_SMOOTH_LANDMARKS if smooth_landmarks is None else bool(smooth_landmarks),
        "enable_segmentation": POSE_ENABLE_SEGMENTATION
        if enable_segmentation is None
        else bool(enable_segmentation),
        "smooth_segmentation": POSE_SMOOTH_SEGMENTATION,
        "min_detection_confidence": (
            MIN_DETECTION_CONFIDENCE if min_detection_confidence is None else float(min_detection_confidence)
        ),
        "min_tracking_confidence": (
            MIN_TRACKING_CONFIDENCE if min_tracking_confidence is None else float(min_tracking_confidence)
        ),
    }
