"""Superficies de dibujo vectorial sobre las que se pintan los monstruos.

``RenderSurface`` fija el contrato mínimo (trazados, arcos, curvas, rellenos,
texto e imagen de fondo) y ``OpenCVCanvas`` lo implementa sobre una imagen BGR
de ``numpy``: las curvas y los arcos se aproximan con polilíneas y se
rasterizan con OpenCV."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

import cv2
import numpy as np

from src.B_pose_estimation.types import FrameDims
from src.config import creature_visualization as cviz

from .landmark_overlay_styles import Color

__all__ = ["OpenCVCanvas", "RenderSurface"]

_CURVE_SEGMENTS = 16
_FULL_TURN = 2.0 * math.pi


class RenderSurface(ABC):
    """Contrato de dibujo que consumen el planificador y los monstruos."""

    @property
    @abstractmethod
    def dims(self) -> FrameDims:
        """Dimensiones actuales del lienzo."""

    @abstractmethod
    def request_resize(self, width: int, height: int) -> None:
        """Solicita un nuevo tamaño; se aplica en el siguiente ``clear()``."""

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def draw_image(self, image: np.ndarray) -> None: ...

    @abstractmethod
    def begin_path(self) -> None: ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def quadratic_curve_to(self, cx: float, cy: float, x: float, y: float) -> None: ...

    @abstractmethod
    def arc(self, cx: float, cy: float, radius: float, start: float = 0.0, end: float = _FULL_TURN) -> None: ...

    @abstractmethod
    def close_path(self) -> None: ...

    @abstractmethod
    def fill(self, color: Color, alpha: float = 1.0) -> None: ...

    @abstractmethod
    def stroke(self, color: Color, width: float, alpha: float = 1.0) -> None: ...

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float, color: Color) -> None: ...

    def present(self) -> None:
        """Entrega el fotograma compuesto al anfitrión (sobrescribible)."""


class _Subpath:
    __slots__ = ("points", "closed")

    def __init__(self, start: Tuple[float, float]) -> None:
        self.points: List[Tuple[float, float]] = [start]
        self.closed = False


class OpenCVCanvas(RenderSurface):
    """Lienzo BGR que rasteriza el trazado actual con OpenCV."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: Color = cviz.CANVAS_BACKGROUND,
        on_present: Optional[Callable[[np.ndarray], None]] = None,
    ) -> None:
        self.background = tuple(int(c) for c in background)
        self.on_present = on_present
        self.image = np.zeros((max(1, int(height)), max(1, int(width)), 3), dtype=np.uint8)
        self._pending_size: Optional[Tuple[int, int]] = None
        self._subpaths: List[_Subpath] = []
        self._fill_background()

    @property
    def dims(self) -> FrameDims:
        return FrameDims(int(self.image.shape[1]), int(self.image.shape[0]))

    def request_resize(self, width: int, height: int) -> None:
        self._pending_size = (max(1, int(width)), max(1, int(height)))

    def _fill_background(self) -> None:
        self.image[:] = self.background

    # --- Estado del lienzo -----------------------------------------------------
    def clear(self) -> None:
        if self._pending_size is not None:
            width, height = self._pending_size
            self._pending_size = None
            if (width, height) != (self.image.shape[1], self.image.shape[0]):
                self.image = np.zeros((height, width, 3), dtype=np.uint8)
        self._fill_background()
        self._subpaths = []

    def draw_image(self, image: np.ndarray) -> None:
        height, width = self.image.shape[:2]
        if image.shape[:2] != (height, width):
            image = cv2.resize(image, (width, height), interpolation=cv2.INTER_LINEAR)
        self.image[:] = image[:, :, :3]

    # --- Construcción de trazados ---------------------------------------------
    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(_Subpath((float(x), float(y))))

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths or self._subpaths[-1].closed:
            self.move_to(x, y)
            return
        self._subpaths[-1].points.append((float(x), float(y)))

    def quadratic_curve_to(self, cx: float, cy: float, x: float, y: float) -> None:
        if not self._subpaths or self._subpaths[-1].closed:
            self.move_to(cx, cy)
        current = self._subpaths[-1]
        x0, y0 = current.points[-1]
        for step in range(1, _CURVE_SEGMENTS + 1):
            t = step / _CURVE_SEGMENTS
            u = 1.0 - t
            current.points.append(
                (
                    u * u * x0 + 2.0 * u * t * float(cx) + t * t * float(x),
                    u * u * y0 + 2.0 * u * t * float(cy) + t * t * float(y),
                )
            )

    def arc(self, cx: float, cy: float, radius: float, start: float = 0.0, end: float = _FULL_TURN) -> None:
        # Cada arco abre su propio subtrazado para poder rellenar varios círculos a la vez.
        sweep = float(end) - float(start)
        segments = max(12, int(math.ceil(abs(sweep) * max(float(radius), 1.0) / 2.0)))
        points = [
            (
                float(cx) + float(radius) * math.cos(float(start) + sweep * i / segments),
                float(cy) + float(radius) * math.sin(float(start) + sweep * i / segments),
            )
            for i in range(segments + 1)
        ]
        subpath = _Subpath(points[0])
        subpath.points.extend(points[1:])
        subpath.closed = abs(sweep) >= _FULL_TURN - 1e-9
        self._subpaths.append(subpath)

    def close_path(self) -> None:
        if self._subpaths:
            self._subpaths[-1].closed = True

    # --- Rasterizado -----------------------------------------------------------
    @staticmethod
    def _as_int(subpath: _Subpath) -> np.ndarray:
        return np.round(np.asarray(subpath.points, dtype=np.float64)).astype(np.int32)

    def _blend(self, painter: Callable[[np.ndarray], None], alpha: float) -> None:
        alpha = float(np.clip(alpha, 0.0, 1.0))
        if alpha >= 1.0:
            painter(self.image)
            return
        overlay = self.image.copy()
        painter(overlay)
        cv2.addWeighted(overlay, alpha, self.image, 1.0 - alpha, 0.0, dst=self.image)

    def fill(self, color: Color, alpha: float = 1.0) -> None:
        polygons = [self._as_int(sp) for sp in self._subpaths if len(sp.points) >= 3]
        if not polygons:
            return
        bgr = tuple(int(c) for c in color)
        self._blend(lambda target: cv2.fillPoly(target, polygons, bgr, lineType=cv2.LINE_AA), alpha)

    def stroke(self, color: Color, width: float, alpha: float = 1.0) -> None:
        bgr = tuple(int(c) for c in color)
        thickness = max(1, int(round(width)))
        drawable = [sp for sp in self._subpaths if len(sp.points) >= 2]
        open_lines = [self._as_int(sp) for sp in drawable if not sp.closed]
        closed_lines = [self._as_int(sp) for sp in drawable if sp.closed]

        def _paint(target: np.ndarray) -> None:
            if open_lines:
                cv2.polylines(target, open_lines, False, bgr, thickness, lineType=cv2.LINE_AA)
            if closed_lines:
                cv2.polylines(target, closed_lines, True, bgr, thickness, lineType=cv2.LINE_AA)

        if open_lines or closed_lines:
            self._blend(_paint, alpha)

    def fill_text(self, text: str, x: float, y: float, color: Color) -> None:
        cv2.putText(
            self.image,
            str(text),
            (int(round(x)), int(round(y))),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.4,
            tuple(int(c) for c in color),
            1,
            cv2.LINE_AA,
        )

    def present(self) -> None:
        if self.on_present is not None:
            self.on_present(self.image.copy())
