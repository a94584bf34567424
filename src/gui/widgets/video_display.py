"""Widget that shows the composed canvas and reports its size."""

from __future__ import annotations

import cv2
import numpy as np
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import QLabel, QSizePolicy


class CanvasView(QLabel):
    resized = pyqtSignal(int, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setMinimumSize(320, 240)
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setStyleSheet("background-color: #000;")

    def show_frame(self, image_bgr: np.ndarray) -> None:
        """Display a BGR frame handed over by the render surface."""
        frame_rgb = np.ascontiguousarray(cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB))
        image = QImage(
            frame_rgb.data,
            frame_rgb.shape[1],
            frame_rgb.shape[0],
            frame_rgb.strides[0],
            QImage.Format_RGB888,
        )
        self.setPixmap(QPixmap.fromImage(image))

    def resizeEvent(self, event):  # pragma: no cover - Qt callback
        super().resizeEvent(event)
        self.resized.emit(event.size().width(), event.size().height())
