"""Fuentes de fotogramas para la canalización en vivo."""

from .frame_source import CameraFrameSource, FrameSource

__all__ = ["CameraFrameSource", "FrameSource"]
