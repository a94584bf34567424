"""Bucle de render guiado por ticks del anfitrión.

En cada tick se avanza el ciclo de vida del estimador, se procesa la inferencia
pendiente si ya terminó y, si no queda ninguna en curso, se captura el último
fotograma y se despacha una nueva. Nunca hay más de una inferencia pendiente:
un fotograma que llega mientras tanto simplemente se salta."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from src.A_capture.frame_source import FrameSource
from src.B_pose_estimation.lifecycle import EstimatorLifecycle, PendingEstimate
from src.B_pose_estimation.types import FrameDims
from src.config.models import DebugConfig, RenderConfig
from src.core.errors import EstimationFailure, InvalidSource, StaleResult
from src.core.types import SubjectMode
from src.D_visualization.canvas_surface import RenderSurface
from src.D_visualization.creature_renderers import CreatureRegistry
from src.D_visualization.landmark_overlay_styles import style_for_subject
from src.D_visualization.landmark_transforms import map_pose, mirror_frame, validate_source

from .controls import LiveControls

logger = logging.getLogger(__name__)

__all__ = ["FrameScheduler", "SchedulerStats", "TickSource"]


class TickSource(ABC):
    """Primitiva del anfitrión: una llamada por refresco visual."""

    @abstractmethod
    def request(self, callback: Callable[[], None]) -> Any:
        """Programa ``callback`` para el próximo refresco y devuelve un token."""

    @abstractmethod
    def cancel(self, token: Any) -> None:
        """Retira una petición todavía no atendida."""


@dataclass
class SchedulerStats:
    ticks: int = 0
    submitted: int = 0
    rendered: int = 0
    stale: int = 0
    failures: int = 0
    skipped_not_ready: int = 0
    skipped_busy: int = 0
    invalid_source: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class _Capture:
    """Todo lo fijado al capturar: el dibujo posterior usa sólo estos valores."""

    estimate: PendingEstimate
    source: FrameDims
    target: FrameDims
    creature: str
    debug: bool
    multi: bool
    frame_index: int
    discard: bool = False


class FrameScheduler:
    """Coordina fuente de fotogramas, estimador y superficie de dibujo."""

    def __init__(
        self,
        frame_source: FrameSource,
        lifecycle: EstimatorLifecycle,
        surface: RenderSurface,
        registry: CreatureRegistry,
        controls: LiveControls,
        tick_source: TickSource,
        *,
        render_cfg: Optional[RenderConfig] = None,
        debug_cfg: Optional[DebugConfig] = None,
    ) -> None:
        self._frame_source = frame_source
        self._lifecycle = lifecycle
        self._surface = surface
        self._registry = registry
        self._controls = controls
        self._tick_source = tick_source
        self._render_cfg = render_cfg or RenderConfig()
        self._debug_cfg = debug_cfg or DebugConfig()
        self._running = False
        self._token: Any = None
        self._pending: Optional[_Capture] = None
        self.stats = SchedulerStats()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def busy(self) -> bool:
        return self._pending is not None

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        logger.info("Frame scheduler started")
        self._schedule()

    def stop(self) -> None:
        """Deja de programar ticks; una inferencia en curso no se aborta y su
        resultado se descarta cuando llegue."""

        if not self._running:
            return
        self._running = False
        if self._token is not None:
            self._tick_source.cancel(self._token)
            self._token = None
        if self._pending is not None:
            self._pending.discard = True
        logger.info("Frame scheduler stopped (%s)", self.stats.to_dict())

    def _schedule(self) -> None:
        if self._running:
            self._token = self._tick_source.request(self._on_tick)

    def _on_tick(self) -> None:
        self._token = None
        if not self._running:
            return
        try:
            self.tick()
        except Exception:
            logger.exception("Unexpected error during render tick")
        finally:
            self._schedule()

    # --- Un tick -------------------------------------------------------------------
    def tick(self) -> None:
        self.stats.ticks += 1
        self._lifecycle.poll()

        if self._pending is not None:
            if not self._pending.estimate.done():
                self.stats.skipped_busy += 1
                return
            capture, self._pending = self._pending, None
            self._complete(capture)

        if not self._lifecycle.is_ready():
            self.stats.skipped_not_ready += 1
            return
        frame = self._frame_source.read() if self._frame_source.is_ready() else None
        if frame is None:
            self.stats.skipped_not_ready += 1
            return
        try:
            validate_source(frame.dims)
        except InvalidSource as exc:
            self.stats.invalid_source += 1
            logger.debug("Skipping frame %d: %s", frame.index, exc)
            return

        handle = self._lifecycle.handle
        controls = self._controls.snapshot()
        self._surface.clear()
        target = self._surface.dims
        if controls.debug_mode:
            self._surface.draw_image(mirror_frame(frame.image, target))

        estimate = self._lifecycle.submit_estimate(frame.image)
        self.stats.submitted += 1
        self._pending = _Capture(
            estimate=estimate,
            source=frame.dims,
            target=target,
            creature=controls.creature,
            debug=controls.debug_mode,
            multi=handle is not None and handle.mode is SubjectMode.MULTI,
            frame_index=frame.index,
        )

    def _complete(self, capture: _Capture) -> None:
        if capture.discard:
            self.stats.stale += 1
            logger.debug("Dropping result for frame %d: scheduler was stopped", capture.frame_index)
            return
        try:
            try:
                self._lifecycle.check_current(capture.estimate.generation)
                poses = capture.estimate.poses()
            except StaleResult as exc:
                self.stats.stale += 1
                logger.debug("Discarding result for frame %d: %s", capture.frame_index, exc)
                return
            except EstimationFailure as exc:
                self.stats.failures += 1
                logger.warning("Frame %d skipped: %s", capture.frame_index, exc)
                return
            self._draw(capture, poses)
            self.stats.rendered += 1
        finally:
            self._surface.present()

    def _draw(self, capture: _Capture, poses) -> None:
        cfg = self._render_cfg
        for index, pose in enumerate(poses):
            style = style_for_subject(
                index,
                capture.multi,
                single_hue=cfg.single_pose_hue,
                hue_step=cfg.hue_step,
                stroke_alpha=cfg.stroke_alpha,
                show_labels=self._debug_cfg.show_labels,
            )
            self._registry.draw(
                self._surface,
                map_pose(pose, capture.source, capture.target),
                capture.creature,
                style,
                debug=capture.debug,
            )
