"""Bucle en vivo: planificador de fotogramas, controles y ensamblado."""

from .controls import CHANGING_MODE_TEXT, ControlSnapshot, LiveControls
from .frame_scheduler import FrameScheduler, SchedulerStats, TickSource
from .pipeline import LivePipeline, build_live_pipeline

__all__ = [
    "CHANGING_MODE_TEXT",
    "ControlSnapshot",
    "FrameScheduler",
    "LiveControls",
    "LivePipeline",
    "SchedulerStats",
    "TickSource",
    "build_live_pipeline",
]
