"""Constantes globales de la aplicación y rutas de modelos."""
from pathlib import Path

# --- CONFIGURACIÓN GENERAL ---
APP_NAME = "Pose Creatures"

# --- RUTAS DE ARCHIVOS ---
# NOTA: usamos ``parents[2]`` porque este archivo vive en ``src/config/``.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_MODELS_DIR = PROJECT_ROOT / "models"
# Modelo de MediaPipe Tasks necesario para el modo multi-persona.
DEFAULT_LANDMARKER_MODEL = DEFAULT_MODELS_DIR / "pose_landmarker_lite.task"
# Si falta, se descarga la variante oficial la primera vez que se pide el modo multi.
DEFAULT_LANDMARKER_MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/pose_landmarker/"
    "pose_landmarker_lite/float16/1/pose_landmarker_lite.task"
)

# --- CONSTANTES DE DETECCIÓN ---
# Umbrales moderados: priorizamos no perder sujetos en tiempo real frente a la
# precisión fina de cada marcador.
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5
