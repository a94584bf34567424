"""Runtime helpers for configuring the host environment."""

from __future__ import annotations

import os


def configure_environment() -> None:
    """Apply runtime tweaks required by MediaPipe and the Qt host.

    Centralise those tweaks here so the CLI and any other entry point apply
    them before importing the heavy native libraries.
    """

    _tame_noisy_logs()
    _drop_opencv_qt_plugin_path()


def _drop_opencv_qt_plugin_path() -> None:
    # opencv-python points Qt at its own bundled plugins, which breaks PyQt5.
    plugin_path = os.environ.get("QT_QPA_PLATFORM_PLUGIN_PATH", "")
    if "cv2" in plugin_path:
        os.environ.pop("QT_QPA_PLATFORM_PLUGIN_PATH", None)


def _tame_noisy_logs() -> None:
    os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")
    os.environ.setdefault("GLOG_minloglevel", "2")

    from absl import logging as absl_logging

    absl_logging.set_verbosity(absl_logging.ERROR)
