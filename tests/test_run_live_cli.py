from __future__ import annotations

import logging
from pathlib import Path

import pytest

from src.run_live import build_config, build_parser


def test_cli_flags_override_defaults() -> None:
    args = build_parser().parse_args(
        ["--camera", "1", "--mode", "multiple-people", "--creature", "bug", "--debug", "--max-poses", "2", "--model-path", "m.task"]
    )

    cfg = build_config(args)

    assert cfg.camera.device_index == 1
    assert cfg.pose.mode == "multi"
    assert cfg.render.creature == "bug"
    assert cfg.debug.debug_mode is True
    assert cfg.pose.max_poses == 2
    assert cfg.pose.landmarker_model_path == Path("m.task")


def test_cli_uses_yaml_then_flags(tmp_path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("render:\n  creature: ghost\ncamera:\n  device_index: 3\n", encoding="utf-8")

    cfg = build_config(build_parser().parse_args(["--config", str(path), "--camera", "0"]))

    assert cfg.render.creature == "ghost"
    assert cfg.camera.device_index == 0


@pytest.mark.parametrize("argv", [["--mode", "crowd"], ["--camera", "-1"], ["--max-poses", "0"]])
def test_cli_rejects_invalid_values(argv) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(argv)


def test_cli_logs_effective_config(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="src.run_live"):
        build_config(build_parser().parse_args(["--model-path", "m.task"]))

    assert "Configuración efectiva" in caplog.text
    assert "'landmarker_model_path': 'm.task'" in caplog.text
