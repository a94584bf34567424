from __future__ import annotations

from pathlib import Path

import pytest

from src import config
from src.config.settings import build_pose_kwargs


def test_load_default_values() -> None:
    cfg = config.load_default()

    assert cfg.pose.mode == "single"
    assert cfg.render.creature == "blob"
    assert cfg.debug.debug_mode is False
    assert cfg.display.canvas_width == 640


def test_from_yaml_merges_nested_sections(tmp_path) -> None:
    path = tmp_path / "live.yaml"
    path.write_text(
        "pose:\n  mode: multi\n  landmarker_model_path: models/custom.task\n"
        "render:\n  creature: ghost\n"
        "unknown_section:\n  foo: 1\n",
        encoding="utf-8",
    )

    cfg = config.from_yaml(path)

    assert cfg.pose.mode == "multi"
    assert cfg.pose.landmarker_model_path == Path("models/custom.task")
    assert cfg.render.creature == "ghost"
    assert cfg.camera.device_index == 0
    assert not hasattr(cfg, "unknown_section")


def test_from_yaml_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        config.from_yaml(path)


def test_config_serialization_turns_paths_into_strings() -> None:
    data = config.load_default().to_serializable_dict()

    assert isinstance(data["pose"]["landmarker_model_path"], str)
    assert data["pose"]["landmarker_model_url"].endswith("pose_landmarker_lite.task")
    assert data["render"]["creature"] == "blob"


def test_build_pose_kwargs_overrides() -> None:
    kwargs = build_pose_kwargs(model_complexity=2, min_detection_confidence=0.7)

    assert kwargs["model_complexity"] == 2
    assert kwargs["min_detection_confidence"] == pytest.approx(0.7)
    assert kwargs["static_image_mode"] is False
    assert kwargs["enable_segmentation"] is False
