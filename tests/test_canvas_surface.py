from __future__ import annotations

import numpy as np

from src.B_pose_estimation.types import FrameDims
from src.D_visualization.canvas_surface import OpenCVCanvas
from src.D_visualization.creature_renderers import default_registry
from src.D_visualization.landmark_overlay_styles import style_for_subject


def test_blob_eyes_are_rasterized_at_mirrored_positions(make_pose) -> None:
    canvas = OpenCVCanvas(640, 480)
    pose = make_pose({"left_eye": (540, 100), "right_eye": (500, 100)})

    default_registry().draw(canvas, pose, "blob", style_for_subject(0, False))

    # Centro negro (radio 5) y anillo blanco (radio 10) en cada ojo.
    assert canvas.image[100, 540].tolist() == [0, 0, 0]
    assert canvas.image[100, 548].tolist() == [255, 255, 255]
    assert canvas.image[100, 492].tolist() == [255, 255, 255]
    assert canvas.image[300, 300].tolist() == [0, 0, 0]


def test_stroke_alpha_blends_with_background() -> None:
    canvas = OpenCVCanvas(100, 100, background=(100, 100, 100))
    canvas.begin_path()
    canvas.move_to(10, 50)
    canvas.line_to(90, 50)
    canvas.stroke((200, 200, 200), 5, alpha=0.5)

    assert canvas.image[50, 50].tolist() == [150, 150, 150]
    assert canvas.image[10, 50].tolist() == [100, 100, 100]


def test_closed_path_fill() -> None:
    canvas = OpenCVCanvas(100, 100)
    canvas.begin_path()
    canvas.move_to(10, 10)
    canvas.line_to(90, 10)
    canvas.line_to(90, 90)
    canvas.line_to(10, 90)
    canvas.close_path()
    canvas.fill((0, 0, 255))

    assert canvas.image[50, 50].tolist() == [0, 0, 255]
    assert canvas.image[5, 5].tolist() == [0, 0, 0]


def test_resize_is_applied_on_clear() -> None:
    canvas = OpenCVCanvas(64, 48)
    canvas.request_resize(128, 96)

    assert canvas.dims == FrameDims(64, 48)
    canvas.clear()
    assert canvas.dims == FrameDims(128, 96)
    assert canvas.image.shape == (96, 128, 3)


def test_draw_image_and_present() -> None:
    presented = []
    canvas = OpenCVCanvas(8, 4, on_present=presented.append)
    background = np.full((2, 4, 3), 77, dtype=np.uint8)

    canvas.draw_image(background)
    canvas.present()

    assert len(presented) == 1
    assert presented[0].shape == (4, 8, 3)
    assert int(presented[0].min()) == 77
    presented[0][:] = 0
    assert int(canvas.image.min()) == 77
