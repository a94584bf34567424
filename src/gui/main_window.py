"""Qt desktop host for the live creature overlay."""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget

from src import config
from src.A_capture.frame_source import FrameSource
from src.B_pose_estimation.lifecycle import EstimatorFactory
from src.C_pipeline.pipeline import build_live_pipeline
from src.D_visualization.canvas_surface import OpenCVCanvas

from .frame_timer import QtTickSource
from .widgets.video_display import CanvasView

logger = logging.getLogger(__name__)


class LiveWindow(QMainWindow):
    def __init__(
        self,
        cfg: config.Config,
        *,
        frame_source: Optional[FrameSource] = None,
        factory: Optional[EstimatorFactory] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.cfg = cfg
        self.setWindowTitle(config.APP_NAME)
        self.resize(cfg.display.canvas_width + 40, cfg.display.canvas_height + 120)

        self.canvas_view = CanvasView()
        self.surface = OpenCVCanvas(
            cfg.display.canvas_width,
            cfg.display.canvas_height,
            on_present=self.canvas_view.show_frame,
        )
        self.canvas_view.resized.connect(self.surface.request_resize)
        self.tick_source = QtTickSource(cfg.display.frame_interval_ms, parent=self)
        self.pipeline = build_live_pipeline(
            cfg,
            surface=self.surface,
            tick_source=self.tick_source,
            frame_source=frame_source,
            factory=factory,
        )
        self.controls = self.pipeline.controls
        self.pipeline.lifecycle.add_listener(lambda _status: self._refresh_controls())
        self._init_ui()
        self._refresh_controls()

    def _init_ui(self) -> None:
        widget = QWidget()
        layout = QVBoxLayout(widget)
        layout.addWidget(self.canvas_view, 1)

        buttons = QHBoxLayout()
        self.debug_btn = QPushButton()
        self.debug_btn.clicked.connect(self._on_debug_clicked)
        self.creature_btn = QPushButton("Change Creature")
        self.creature_btn.clicked.connect(self._on_creature_clicked)
        self.mode_btn = QPushButton()
        self.mode_btn.clicked.connect(self._on_mode_clicked)
        buttons.addStretch()
        buttons.addWidget(self.debug_btn)
        buttons.addWidget(self.creature_btn)
        buttons.addWidget(self.mode_btn)
        buttons.addStretch()
        layout.addLayout(buttons)

        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignCenter)
        font = QFont()
        font.setBold(True)
        self.status_label.setFont(font)
        layout.addWidget(self.status_label)

        self.setCentralWidget(widget)

    def start(self) -> None:
        """Open the camera, request the configured mode and start ticking.

        Raises ``IOError`` when the camera cannot be opened."""
        self.pipeline.start()
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        self.debug_btn.setText(self.controls.debug_button_text)
        self.mode_btn.setText(self.controls.mode_button_text)
        self.mode_btn.setEnabled(not self.controls.transitioning)
        self.status_label.setText(self.controls.status_text)

    def _on_debug_clicked(self) -> None:
        self.controls.toggle_debug()
        self._refresh_controls()

    def _on_creature_clicked(self) -> None:
        self.controls.next_creature()
        self._refresh_controls()

    def _on_mode_clicked(self) -> None:
        self.controls.toggle_mode()
        self._refresh_controls()

    def closeEvent(self, event):  # pragma: no cover - Qt callback
        self.pipeline.close()
        super().closeEvent(event)
