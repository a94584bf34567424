from __future__ import annotations

import threading
import time

import numpy as np
import pytest

from src.A_capture import frame_source
from src.A_capture.frame_source import CameraFrameSource
from src.B_pose_estimation.types import FrameDims
from src.config.models import CameraConfig


class _FakeCapture:
    def __init__(self, opened: bool = True) -> None:
        self.opened = opened
        self.props = {}
        self.reads = 0
        self.released = False

    def isOpened(self) -> bool:
        return self.opened

    def set(self, prop, value) -> bool:
        self.props[prop] = value
        return True

    def read(self):
        self.reads += 1
        time.sleep(0.001)
        return True, np.full((48, 64, 3), self.reads % 255, dtype=np.uint8)

    def release(self) -> None:
        self.released = True


def _wait_until(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


def test_camera_source_keeps_latest_frame() -> None:
    capture = _FakeCapture()
    source = CameraFrameSource(CameraConfig(device_index=2), capture_factory=lambda index: capture)

    assert not source.is_ready()
    assert source.read() is None
    source.start()
    try:
        assert _wait_until(source.is_ready)
        assert _wait_until(lambda: source.read().index >= 2)
        frame = source.read()
        assert frame.dims == FrameDims(64, 48)
        assert frame.index <= capture.reads
    finally:
        source.close()

    assert capture.released
    assert source.read() is None


def test_camera_that_cannot_open_raises() -> None:
    capture = _FakeCapture(opened=False)
    source = CameraFrameSource(CameraConfig(), capture_factory=lambda index: capture)

    with pytest.raises(IOError, match="Could not open camera"):
        source.start()

    assert capture.released
    assert "Could not open camera" in source.last_error


class _BlockingCapture(_FakeCapture):
    def __init__(self) -> None:
        super().__init__()
        self.unblock = threading.Event()
        self.reading = threading.Event()
        self.released_during_read = False

    def read(self):
        self.reading.set()
        self.unblock.wait(timeout=5.0)
        self.reading.clear()
        return super().read()

    def release(self) -> None:
        self.released_during_read = self.reading.is_set()
        super().release()


def test_capture_is_released_only_after_blocked_read_returns(monkeypatch) -> None:
    monkeypatch.setattr(frame_source, "_JOIN_TIMEOUT_S", 0.05)
    capture = _BlockingCapture()
    source = CameraFrameSource(CameraConfig(), capture_factory=lambda index: capture)
    source.start()
    assert capture.reading.wait(timeout=2.0)

    source.close()

    assert not capture.released
    capture.unblock.set()
    assert _wait_until(lambda: capture.released)
    assert not capture.released_during_read
    assert source.read() is None
