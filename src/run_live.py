"""Command-line launcher for the live creature overlay."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from src import config
from src.core.runtime import configure_environment
from src.core.types import SubjectMode, as_mode
from src.D_visualization.creature_renderers import default_registry

LOGGER = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} no es un entero válido") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("El valor debe ser un entero positivo")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} no es un entero válido") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("El valor no puede ser negativo")
    return number


def _mode(value: str) -> SubjectMode:
    try:
        return as_mode(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dibuja monstruos animados sobre las personas detectadas por la cámara.",
    )
    parser.add_argument("--config", default=None, help="Archivo YAML con ajustes que sobrescriben los valores por defecto")
    parser.add_argument("--camera", type=_non_negative_int, default=None, help="Índice del dispositivo de cámara")
    parser.add_argument(
        "--mode",
        type=_mode,
        default=None,
        help="Modo inicial de detección: 'single' (una persona) o 'multi' (varias).",
    )
    parser.add_argument(
        "--creature",
        default=None,
        help=f"Monstruo inicial ({', '.join(default_registry().names())}).",
    )
    parser.add_argument("--debug", action="store_true", help="Arranca con el modo depuración activo.")
    parser.add_argument(
        "--model-path",
        default=None,
        help="Ruta al modelo .task de PoseLandmarker usado en modo multi-persona.",
    )
    parser.add_argument("--max-poses", type=_positive_int, default=None, help="Máximo de personas en modo multi.")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Muestra mensajes de log detallados durante la ejecución.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


def build_config(args: argparse.Namespace) -> config.Config:
    """Carga la configuración base y aplica encima los argumentos de la CLI."""

    cfg = config.from_yaml(args.config) if args.config else config.load_default()
    if args.camera is not None:
        cfg.camera.device_index = int(args.camera)
    if args.mode is not None:
        cfg.pose.mode = args.mode.value
    if args.creature is not None:
        cfg.render.creature = args.creature
    if args.debug:
        cfg.debug.debug_mode = True
    if args.model_path is not None:
        cfg.pose.landmarker_model_path = Path(args.model_path).expanduser()
    if args.max_poses is not None:
        cfg.pose.max_poses = int(args.max_poses)
    LOGGER.debug("Configuración efectiva: %s", cfg.to_serializable_dict())
    return cfg


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    configure_environment()

    if args.config and not Path(args.config).expanduser().is_file():
        parser.error(f"No se encontró el archivo de configuración: {args.config}")
    try:
        cfg = build_config(args)
        as_mode(cfg.pose.mode)
    except ValueError as exc:
        parser.error(str(exc))
    if cfg.render.creature not in default_registry():
        parser.error(f"Monstruo desconocido: {cfg.render.creature!r}")

    from PyQt5.QtWidgets import QApplication

    from src.gui.main_window import LiveWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = LiveWindow(cfg)
    try:
        window.start()
    except IOError as exc:
        LOGGER.error("No se pudo iniciar la cámara: %s", exc)
        window.pipeline.close()
        return 1
    window.show()
    return int(app.exec_())


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
