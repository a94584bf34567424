"""Parámetros de visualización: tamaños, colores y cadenas de extremidades."""

# --- OJOS ---
EYE_OUTER_RADIUS = 10
EYE_INNER_RADIUS = 5
EYE_OUTER_COLOR = (255, 255, 255)  # Blanco (BGR)
EYE_INNER_COLOR = (0, 0, 0)  # Negro (BGR)

# --- EXTREMIDADES ---
LIMB_WIDTH = 10
STROKE_ALPHA = 0.7
LIMB_CHAINS = (
    ("left_shoulder", "left_elbow", "left_wrist"),
    ("right_shoulder", "right_elbow", "right_wrist"),
    ("left_hip", "left_knee", "left_ankle"),
    ("right_hip", "right_knee", "right_ankle"),
)

# --- TONOS POR SUJETO ---
SINGLE_POSE_HUE = 120  # Verde
MULTI_POSE_HUE_STEP = 137  # Ángulo áureo aproximado: tonos bien separados

# --- MARCADORES DE DEPURACIÓN ---
DEBUG_MARKER_RADIUS = 5
DEBUG_LABEL_COLOR = (255, 255, 255)
DEBUG_LABEL_OFFSET = (5, -5)

# --- LIENZO ---
CANVAS_BACKGROUND = (0, 0, 0)

__all__ = [
    "EYE_OUTER_RADIUS",
    "EYE_INNER_RADIUS",
    "EYE_OUTER_COLOR",
    "EYE_INNER_COLOR",
    "LIMB_WIDTH",
    "STROKE_ALPHA",
    "LIMB_CHAINS",
    "SINGLE_POSE_HUE",
    "MULTI_POSE_HUE_STEP",
    "DEBUG_MARKER_RADIUS",
    "DEBUG_LABEL_COLOR",
    "DEBUG_LABEL_OFFSET",
    "CANVAS_BACKGROUND",
]
