"""Ensamblado de la canalización en vivo a partir de la configuración."""

from __future__ import annotations

import functools
import logging
from concurrent.futures import Executor
from typing import Optional

from src.A_capture.frame_source import CameraFrameSource, FrameSource
from src.B_pose_estimation.estimators.mediapipe_estimators import create_estimator
from src.B_pose_estimation.lifecycle import EstimatorFactory, EstimatorLifecycle
from src.config.models import Config
from src.core.types import as_mode
from src.D_visualization.canvas_surface import RenderSurface
from src.D_visualization.creature_renderers import CreatureRegistry, default_registry

from .controls import LiveControls
from .frame_scheduler import FrameScheduler, TickSource

logger = logging.getLogger(__name__)

__all__ = ["LivePipeline", "build_live_pipeline"]


class LivePipeline:
    """Agrupa los colaboradores y gobierna su arranque y cierre."""

    def __init__(
        self,
        cfg: Config,
        *,
        frame_source: FrameSource,
        lifecycle: EstimatorLifecycle,
        registry: CreatureRegistry,
        controls: LiveControls,
        scheduler: FrameScheduler,
    ) -> None:
        self.cfg = cfg
        self.frame_source = frame_source
        self.lifecycle = lifecycle
        self.registry = registry
        self.controls = controls
        self.scheduler = scheduler
        self._closed = False

    def start(self) -> None:
        """Pide el modo configurado y empieza a programar ticks."""

        start = getattr(self.frame_source, "start", None)
        if callable(start):
            start()
        self.controls.set_mode(self.controls.mode)
        self.scheduler.start()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.scheduler.stop()
        self.lifecycle.close()
        self.frame_source.close()
        logger.info("Live pipeline closed")

    def __enter__(self) -> "LivePipeline":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def build_live_pipeline(
    cfg: Config,
    *,
    surface: RenderSurface,
    tick_source: TickSource,
    frame_source: Optional[FrameSource] = None,
    factory: Optional[EstimatorFactory] = None,
    registry: Optional[CreatureRegistry] = None,
    executor: Optional[Executor] = None,
) -> LivePipeline:
    """Construye la canalización sin arrancarla; cada colaborador es sustituible."""

    registry = registry or default_registry()
    frame_source = frame_source or CameraFrameSource(cfg.camera)
    factory = factory or functools.partial(create_estimator, pose_cfg=cfg.pose)
    lifecycle = EstimatorLifecycle(factory, executor=executor)
    controls = LiveControls(
        lifecycle,
        registry,
        creature=cfg.render.creature,
        debug=cfg.debug.debug_mode,
        mode=as_mode(cfg.pose.mode),
    )
    scheduler = FrameScheduler(
        frame_source,
        lifecycle,
        surface,
        registry,
        controls,
        tick_source,
        render_cfg=cfg.render,
        debug_cfg=cfg.debug,
    )
    return LivePipeline(
        cfg,
        frame_source=frame_source,
        lifecycle=lifecycle,
        registry=registry,
        controls=controls,
        scheduler=scheduler,
    )
