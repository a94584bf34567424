"""Utilidades para cargar configuraciones por defecto o desde archivos YAML.

El objetivo es aclarar cómo se inicializan los parámetros cuando se lanza la
aplicación y cómo se combinan con configuraciones externas."""
from pathlib import Path

import yaml

from .models import Config, _update_dataclass


def load_default() -> Config:
    """Obtener la configuración por defecto empleada por la aplicación."""
    return Config()


def from_yaml(path: str | Path) -> Config:
    """Cargar una configuración desde un YAML y mezclarla con los valores base."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping: {path}")
    cfg = load_default()
    _update_dataclass(cfg, data)
    return cfg
