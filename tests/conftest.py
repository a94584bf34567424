# tests/conftest.py
"""Dobles de prueba compartidos: ejecutor manual, estimadores falsos, ticks y superficie."""
from __future__ import annotations

import sys
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pytest

# Repo root = parent de 'tests'
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from src.A_capture.frame_source import FrameSource  # noqa: E402
from src.B_pose_estimation.estimators.base import PoseEstimatorBase  # noqa: E402
from src.B_pose_estimation.lifecycle import EstimatorLifecycle  # noqa: E402
from src.B_pose_estimation.types import Frame, FrameDims, Keypoint, Pose  # noqa: E402
from src.C_pipeline.frame_scheduler import TickSource  # noqa: E402
from src.core.types import SubjectMode  # noqa: E402
from src.D_visualization.canvas_surface import RenderSurface  # noqa: E402


class ManualExecutor(Executor):
    """Ejecutor que sólo avanza cuando la prueba lo pide (FIFO)."""

    def __init__(self) -> None:
        self.queue: List[Tuple[Future, Callable[..., Any], tuple, dict]] = []
        self.shutdown_called = False

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        self.queue.append((future, fn, args, kwargs))
        return future

    def run_next(self) -> Future:
        future, fn, args, kwargs = self.queue.pop(0)
        if not future.set_running_or_notify_cancel():
            return future
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future

    def run_all(self) -> None:
        while self.queue:
            self.run_next()

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.shutdown_called = True


class FakeEstimator(PoseEstimatorBase):
    def __init__(self, mode: SubjectMode, poses: Iterable[Pose] = (), error: Optional[Exception] = None) -> None:
        self.mode = mode
        self.poses = list(poses)
        self.error = error
        self.calls = 0
        self.closed = False

    def estimate(self, image_bgr: np.ndarray) -> List[Pose]:
        if self.closed:
            raise RuntimeError("estimate called after close")
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.poses)

    def close(self) -> None:
        self.closed = True


class FakeFactory:
    def __init__(self) -> None:
        self.built: List[FakeEstimator] = []
        self.fail_modes: set = set()
        self.poses: List[Pose] = []
        self.error: Optional[Exception] = None

    def __call__(self, mode: SubjectMode) -> FakeEstimator:
        if mode in self.fail_modes:
            raise RuntimeError(f"cannot build {mode.value}")
        estimator = FakeEstimator(mode, self.poses, self.error)
        self.built.append(estimator)
        return estimator


class ManualTickSource(TickSource):
    def __init__(self) -> None:
        self.requests: Dict[int, Callable[[], None]] = {}
        self.cancelled: List[int] = []
        self._next = 0

    def request(self, callback: Callable[[], None]) -> int:
        self._next += 1
        self.requests[self._next] = callback
        return self._next

    def cancel(self, token: int) -> None:
        self.cancelled.append(token)
        self.requests.pop(token, None)

    @property
    def pending(self) -> int:
        return len(self.requests)

    def fire(self) -> None:
        token = min(self.requests)
        self.requests.pop(token)()


class RecordingSurface(RenderSurface):
    """Superficie que anota cada llamada de dibujo como ``(nombre, args)``."""

    def __init__(self, width: int = 640, height: int = 480) -> None:
        self._dims = FrameDims(width, height)
        self._pending: Optional[FrameDims] = None
        self.calls: List[Tuple[str, tuple]] = []

    @property
    def dims(self) -> FrameDims:
        return self._dims

    def request_resize(self, width: int, height: int) -> None:
        self._pending = FrameDims(width, height)

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def reset(self) -> None:
        self.calls = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def clear(self) -> None:
        if self._pending is not None:
            self._dims, self._pending = self._pending, None
        self._record("clear")

    def draw_image(self, image: np.ndarray) -> None:
        self._record("draw_image", image.shape)

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def quadratic_curve_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self._record("quadratic_curve_to", cx, cy, x, y)

    def arc(self, cx: float, cy: float, radius: float, start: float = 0.0, end: float = 2 * np.pi) -> None:
        self._record("arc", cx, cy, radius)

    def close_path(self) -> None:
        self._record("close_path")

    def fill(self, color, alpha: float = 1.0) -> None:
        self._record("fill", tuple(color), alpha)

    def stroke(self, color, width: float, alpha: float = 1.0) -> None:
        self._record("stroke", tuple(color), width, alpha)

    def fill_text(self, text: str, x: float, y: float, color) -> None:
        self._record("fill_text", text, x, y, tuple(color))

    def present(self) -> None:
        self._record("present")


class StaticFrameSource(FrameSource):
    def __init__(self, frame: Optional[Frame] = None) -> None:
        self.frame = frame
        self.closed = False

    def is_ready(self) -> bool:
        return self.frame is not None

    def read(self) -> Optional[Frame]:
        return self.frame

    def close(self) -> None:
        self.closed = True


def _make_pose(points: Dict[str, Tuple[float, float]], confidence: float = 0.9, score: Optional[float] = None) -> Pose:
    return Pose(
        keypoints=tuple(Keypoint(name, float(x), float(y), confidence) for name, (x, y) in points.items()),
        score=score,
    )


def _make_frame(width: int = 640, height: int = 480, index: int = 0) -> Frame:
    image = np.zeros((max(height, 1), max(width, 1), 3), dtype=np.uint8)
    return Frame(image=image, dims=FrameDims(width, height), index=index)


@pytest.fixture
def make_pose() -> Callable[..., Pose]:
    return _make_pose


@pytest.fixture
def make_frame() -> Callable[..., Frame]:
    return _make_frame


@pytest.fixture
def executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def factory() -> FakeFactory:
    return FakeFactory()


@pytest.fixture
def lifecycle(factory: FakeFactory, executor: ManualExecutor) -> EstimatorLifecycle:
    return EstimatorLifecycle(factory, executor=executor)


@pytest.fixture
def tick_source() -> ManualTickSource:
    return ManualTickSource()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def frame_source() -> StaticFrameSource:
    return StaticFrameSource(_make_frame())
