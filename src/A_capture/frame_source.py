"""Adquisición de fotogramas de cámara para el bucle en vivo.

La cámara se lee en un hilo propio y sólo se conserva el fotograma más reciente:
el bucle de render nunca espera a la cámara y nunca procesa fotogramas viejos."""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import cv2

from src.B_pose_estimation.types import Frame, FrameDims
from src.config.models import CameraConfig

logger = logging.getLogger(__name__)

__all__ = ["CameraFrameSource", "FrameSource"]

CaptureFactory = Callable[[int], Any]

_READ_RETRY_DELAY_S = 0.01
_JOIN_TIMEOUT_S = 1.0


class FrameSource(ABC):
    """Proveedor de fotogramas consultado en cada tick."""

    @abstractmethod
    def is_ready(self) -> bool:
        """``True`` cuando ya existe al menos un fotograma decodificado."""

    @abstractmethod
    def read(self) -> Optional[Frame]:
        """Último fotograma disponible o ``None`` si aún no hay ninguno."""

    def close(self) -> None:
        """Libera el dispositivo (sobrescribible)."""


class CameraFrameSource(FrameSource):
    """Cámara de OpenCV leída en segundo plano con política *latest-frame-wins*."""

    def __init__(self, cfg: CameraConfig | None = None, *, capture_factory: CaptureFactory = cv2.VideoCapture) -> None:
        self.cfg = cfg or CameraConfig()
        self._capture_factory = capture_factory
        self._lock = threading.Lock()
        self._latest: Optional[Frame] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._frame_idx = 0
        self._last_error: Optional[str] = None

    @property
    def last_error(self) -> Optional[str]:
        with self._lock:
            return self._last_error

    def start(self) -> None:
        """Abre el dispositivo y lanza el hilo de lectura.

        Lanza ``IOError`` si el dispositivo no puede abrirse."""

        with self._lock:
            if self._running:
                return
        capture = self._capture_factory(int(self.cfg.device_index))
        if not capture.isOpened():
            capture.release()
            message = f"Could not open camera device {self.cfg.device_index}"
            with self._lock:
                self._last_error = message
            raise IOError(message)

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, int(self.cfg.width))
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, int(self.cfg.height))
        if self.cfg.fps:
            capture.set(cv2.CAP_PROP_FPS, float(self.cfg.fps))

        with self._lock:
            self._running = True
            self._last_error = None
        self._thread = threading.Thread(
            target=self._run_capture_loop, args=(capture,), name="camera-capture", daemon=True
        )
        self._thread.start()
        logger.info("Camera %s opened (%dx%d requested)", self.cfg.device_index, self.cfg.width, self.cfg.height)

    def _run_capture_loop(self, capture: Any) -> None:
        # El dispositivo sólo se libera aquí, nunca mientras un ``read()`` sigue en curso.
        try:
            while True:
                with self._lock:
                    if not self._running:
                        break
                ok, image = capture.read()
                if not ok or image is None:
                    with self._lock:
                        self._last_error = "Camera returned no frame"
                    time.sleep(_READ_RETRY_DELAY_S)
                    continue
                height, width = image.shape[:2]
                frame = Frame(
                    image=image,
                    dims=FrameDims(int(width), int(height)),
                    index=self._frame_idx,
                    timestamp=time.monotonic(),
                )
                self._frame_idx += 1
                with self._lock:
                    if not self._running:
                        break
                    self._latest = frame
                    self._last_error = None
        finally:
            capture.release()

    def is_ready(self) -> bool:
        with self._lock:
            return self._latest is not None

    def read(self) -> Optional[Frame]:
        with self._lock:
            return self._latest

    def close(self) -> None:
        with self._lock:
            was_running = self._running
            self._running = False
            self._latest = None
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=_JOIN_TIMEOUT_S)
            if thread.is_alive():
                logger.warning("Camera %s still busy; it will be released when the read returns", self.cfg.device_index)
                return
        if was_running:
            logger.info("Camera %s released", self.cfg.device_index)
