"""Reexportaciones para mantener compatibilidad con ``from src import config``."""

from __future__ import annotations

# Dataclasses principales de configuración --------------------------------------
from .models import (
    Config,
    PoseConfig,
    CameraConfig,
    DisplayConfig,
    RenderConfig,
    DebugConfig,
)

# Funciones auxiliares de carga --------------------------------------------------
from .utils import load_default, from_yaml

# Constantes compartidas ---------------------------------------------------------
from .constants import (
    APP_NAME,
    PROJECT_ROOT,
    DEFAULT_LANDMARKER_MODEL,
    MIN_DETECTION_CONFIDENCE,
)

__all__ = [
    # Models
    "Config",
    "PoseConfig",
    "CameraConfig",
    "DisplayConfig",
    "RenderConfig",
    "DebugConfig",

    # Utilities
    "load_default",
    "from_yaml",

    # Constants
    "APP_NAME",
    "PROJECT_ROOT",
    "DEFAULT_LANDMARKER_MODEL",
    "MIN_DETECTION_CONFIDENCE",
]
