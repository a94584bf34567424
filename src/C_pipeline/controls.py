"""Estado de los controles de usuario del bucle en vivo.

La interfaz (o cualquier otro anfitrión) sólo habla con ``LiveControls``; el
planificador lee una instantánea inmutable al capturar cada fotograma, así que
un cambio de monstruo o de depuración nunca afecta a un dibujo a medias."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.B_pose_estimation.lifecycle import EstimatorLifecycle
from src.core.types import MODE_HUMAN_LABEL, SubjectMode, as_mode
from src.D_visualization.creature_renderers import CreatureRegistry

logger = logging.getLogger(__name__)

__all__ = ["CHANGING_MODE_TEXT", "ControlSnapshot", "LiveControls"]

CHANGING_MODE_TEXT = "Changing Mode..."


@dataclass(frozen=True)
class ControlSnapshot:
    creature: str
    debug_mode: bool
    mode: SubjectMode


class LiveControls:
    """Depuración, monstruo activo y modo de número de sujetos."""

    def __init__(
        self,
        lifecycle: EstimatorLifecycle,
        registry: CreatureRegistry,
        *,
        creature: str,
        debug: bool = False,
        mode: SubjectMode | str = SubjectMode.SINGLE,
    ) -> None:
        if creature not in registry:
            raise KeyError(f"Unknown creature: {creature!r}")
        self._lifecycle = lifecycle
        self._registry = registry
        self._creature = creature
        self._debug = bool(debug)
        self._mode = as_mode(mode)

    # --- Depuración ---------------------------------------------------------------
    @property
    def debug_mode(self) -> bool:
        return self._debug

    def toggle_debug(self) -> bool:
        self._debug = not self._debug
        logger.debug("Debug mode %s", "enabled" if self._debug else "disabled")
        return self._debug

    @property
    def debug_button_text(self) -> str:
        return "Disable Debug Mode" if self._debug else "Enable Debug Mode"

    # --- Monstruo ------------------------------------------------------------------
    @property
    def creature(self) -> str:
        return self._creature

    def next_creature(self) -> str:
        self._creature = self._registry.next_name(self._creature)
        logger.info("Creature changed to %s", self._creature)
        return self._creature

    # --- Modo ------------------------------------------------------------------------
    @property
    def mode(self) -> SubjectMode:
        """Modo seleccionado por el usuario (puede no estar publicado todavía)."""

        return self._mode

    @property
    def transitioning(self) -> bool:
        return self._lifecycle.is_transitioning

    def set_mode(self, mode: SubjectMode | str) -> SubjectMode:
        """Selecciona ``mode``; durante una transición la petición se agrupa."""

        self._mode = as_mode(mode)
        self._lifecycle.request_mode(self._mode)
        return self._mode

    def toggle_mode(self) -> bool:
        """Alterna single/multi como el botón: se ignora mientras cambia de modo."""

        if self.transitioning:
            logger.debug("Mode toggle ignored while changing mode")
            return False
        self.set_mode(self._mode.toggled())
        return True

    def retry(self) -> bool:
        return self._lifecycle.retry()

    @property
    def mode_button_text(self) -> str:
        if self.transitioning:
            return CHANGING_MODE_TEXT
        return MODE_HUMAN_LABEL[self._mode.toggled()]

    @property
    def status_text(self) -> str:
        if self.transitioning:
            return CHANGING_MODE_TEXT
        error = self._lifecycle.last_error
        if error is not None:
            return str(error)
        return MODE_HUMAN_LABEL[self._mode]

    def snapshot(self) -> ControlSnapshot:
        return ControlSnapshot(creature=self._creature, debug_mode=self._debug, mode=self._mode)
