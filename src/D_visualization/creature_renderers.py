"""Registro de monstruos y rutinas de dibujo por parte del cuerpo.

Cada monstruo es un registro con rutinas opcionales para ``body``, ``limbs`` y
``eyes``. El registro decide el orden de pintado (cuerpo, extremidades, ojos y,
por último, marcadores de depuración) para que ningún monstruo pueda tapar sus
ojos con un trazo ni su relleno con las extremidades. Las rutinas reciben la
pose ya en espacio de lienzo, buscan los puntos por nombre y omiten en silencio
cualquier parte cuyos puntos no se hayan detectado en este fotograma."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from src.B_pose_estimation.types import Keypoint, Pose
from src.config import creature_visualization as cviz

from .canvas_surface import RenderSurface
from .landmark_drawing import draw_keypoint_markers
from .landmark_overlay_styles import SubjectStyle

logger = logging.getLogger(__name__)

__all__ = [
    "PART_ORDER",
    "Creature",
    "CreatureRegistry",
    "DrawRoutine",
    "default_registry",
]

DrawRoutine = Callable[[RenderSurface, Pose, SubjectStyle], None]

# Orden estricto de pintado dentro de la pasada de un sujeto.
PART_ORDER: Tuple[str, ...] = ("body", "limbs", "eyes")

_TORSO = ("left_shoulder", "right_shoulder", "right_hip", "left_hip")


def _noop(_surface: RenderSurface, _pose: Pose, _style: SubjectStyle) -> None:
    return None


@dataclass(frozen=True)
class Creature:
    """Variante de monstruo: implementa cualquier subconjunto de ``PART_ORDER``."""

    name: str
    body: Optional[DrawRoutine] = None
    limbs: Optional[DrawRoutine] = None
    eyes: Optional[DrawRoutine] = None

    def routine(self, part: str) -> DrawRoutine:
        """Rutina de ``part``; las capacidades ausentes son no-ops."""

        if part not in PART_ORDER:
            raise KeyError(f"Unknown creature part: {part!r}")
        return getattr(self, part) or _noop

    @property
    def capabilities(self) -> Tuple[str, ...]:
        return tuple(part for part in PART_ORDER if getattr(self, part) is not None)


class CreatureRegistry:
    """Asocia identificadores de monstruo con sus rutinas de dibujo."""

    def __init__(self, creatures: Iterable[Creature] = ()) -> None:
        self._creatures: Dict[str, Creature] = {}
        for creature in creatures:
            self.register(creature)

    def register(self, creature: Creature, *, replace: bool = False) -> Creature:
        if creature.name in self._creatures and not replace:
            raise ValueError(f"Creature already registered: {creature.name!r}")
        self._creatures[creature.name] = creature
        logger.debug("Registered creature %s with parts %s", creature.name, creature.capabilities)
        return creature

    def get(self, name: str) -> Creature:
        try:
            return self._creatures[name]
        except KeyError:
            raise KeyError(f"Unknown creature: {name!r}") from None

    def names(self) -> Tuple[str, ...]:
        return tuple(self._creatures)

    def __contains__(self, name: object) -> bool:
        return name in self._creatures

    def __len__(self) -> int:
        return len(self._creatures)

    def next_name(self, current: str) -> str:
        """Siguiente monstruo en orden de registro, volviendo al primero."""

        names = self.names()
        if not names:
            raise LookupError("No creatures registered")
        if current not in self._creatures:
            return names[0]
        return names[(names.index(current) + 1) % len(names)]

    def draw(
        self,
        surface: RenderSurface,
        pose: Pose,
        creature: Union[str, Creature],
        style: SubjectStyle,
        *,
        debug: bool = False,
    ) -> None:
        """Pinta un sujeto respetando cuerpo < extremidades < ojos < depuración."""

        selected = self.get(creature) if isinstance(creature, str) else creature
        for part in PART_ORDER:
            selected.routine(part)(surface, pose, style)
        if debug:
            draw_keypoint_markers(surface, pose, style)


# --- Utilidades geométricas ------------------------------------------------------

def _midpoint(a: Keypoint, b: Keypoint) -> Tuple[float, float]:
    return (a.x + b.x) / 2.0, (a.y + b.y) / 2.0


def _curved_limbs(width_scale: float = 1.0) -> DrawRoutine:
    """Extremidades como curvas cuadráticas hombro/cadera -> codo/rodilla -> mano/pie."""

    def _draw(surface: RenderSurface, pose: Pose, style: SubjectStyle) -> None:
        for chain in cviz.LIMB_CHAINS:
            points = pose.require(*chain)
            if points is None:
                continue
            root, joint, tip = points
            surface.begin_path()
            surface.move_to(root.x, root.y)
            surface.quadratic_curve_to(joint.x, joint.y, tip.x, tip.y)
            surface.stroke(style.stroke_bgr, style.limb_width * width_scale, style.stroke_alpha)

    return _draw


# --- Blob ----------------------------------------------------------------------

def _blob_eyes(surface: RenderSurface, pose: Pose, _style: SubjectStyle) -> None:
    eyes = pose.require("left_eye", "right_eye")
    if eyes is None:
        return
    left, right = eyes
    surface.begin_path()
    surface.arc(left.x, left.y, cviz.EYE_OUTER_RADIUS)
    surface.arc(right.x, right.y, cviz.EYE_OUTER_RADIUS)
    surface.fill(cviz.EYE_OUTER_COLOR)
    surface.begin_path()
    surface.arc(left.x, left.y, cviz.EYE_INNER_RADIUS)
    surface.arc(right.x, right.y, cviz.EYE_INNER_RADIUS)
    surface.fill(cviz.EYE_INNER_COLOR)


BLOB = Creature(name="blob", limbs=_curved_limbs(), eyes=_blob_eyes)


# --- Ghost ---------------------------------------------------------------------

_GHOST_SHEET = (245, 240, 235)
_GHOST_SHEET_ALPHA = 0.6
_GHOST_HEM_WAVES = 3


def _ghost_body(surface: RenderSurface, pose: Pose, _style: SubjectStyle) -> None:
    torso = pose.require(*_TORSO)
    if torso is None:
        return
    l_sh, r_sh, r_hip, l_hip = torso
    depth = max(abs(l_hip.y - l_sh.y), abs(r_hip.y - r_sh.y)) * 0.25
    surface.begin_path()
    surface.move_to(l_sh.x, l_sh.y)
    surface.line_to(r_sh.x, r_sh.y)
    surface.line_to(r_hip.x, r_hip.y)
    # Dobladillo ondulado entre las dos caderas.
    for wave in range(1, _GHOST_HEM_WAVES + 1):
        t_mid = (wave - 0.5) / _GHOST_HEM_WAVES
        t_end = wave / _GHOST_HEM_WAVES
        cx = r_hip.x + (l_hip.x - r_hip.x) * t_mid
        cy = r_hip.y + (l_hip.y - r_hip.y) * t_mid + depth
        ex = r_hip.x + (l_hip.x - r_hip.x) * t_end
        ey = r_hip.y + (l_hip.y - r_hip.y) * t_end
        surface.quadratic_curve_to(cx, cy, ex, ey)
    surface.close_path()
    surface.fill(_GHOST_SHEET, _GHOST_SHEET_ALPHA)


def _ghost_eyes(surface: RenderSurface, pose: Pose, _style: SubjectStyle) -> None:
    eyes = pose.require("left_eye", "right_eye")
    if eyes is None:
        return
    left, right = eyes
    radius = cviz.EYE_OUTER_RADIUS * 1.2
    surface.begin_path()
    surface.arc(left.x, left.y, radius)
    surface.arc(right.x, right.y, radius)
    surface.fill(cviz.EYE_INNER_COLOR)
    highlight = cviz.EYE_INNER_RADIUS * 0.6
    surface.begin_path()
    surface.arc(left.x - radius / 3.0, left.y - radius / 3.0, highlight)
    surface.arc(right.x - radius / 3.0, right.y - radius / 3.0, highlight)
    surface.fill(cviz.EYE_OUTER_COLOR)


GHOST = Creature(name="ghost", body=_ghost_body, limbs=_curved_limbs(0.6), eyes=_ghost_eyes)


# --- Bug -----------------------------------------------------------------------

_ANTENNA_LENGTH = 30.0
_ANTENNA_SPREAD = 12.0


def _bug_body(surface: RenderSurface, pose: Pose, style: SubjectStyle) -> None:
    torso = pose.require(*_TORSO)
    if torso is None:
        return
    l_sh, r_sh, r_hip, l_hip = torso
    sx, sy = _midpoint(l_sh, r_sh)
    hx, hy = _midpoint(l_hip, r_hip)
    radius = math.hypot(hx - sx, hy - sy) / 2.0
    if radius <= 0:
        return
    surface.begin_path()
    surface.arc((sx + hx) / 2.0, (sy + hy) / 2.0, radius)
    surface.fill(style.stroke_bgr, style.stroke_alpha)


def _bug_legs(surface: RenderSurface, pose: Pose, style: SubjectStyle) -> None:
    width = max(2.0, style.limb_width / 2.0)
    for chain in cviz.LIMB_CHAINS:
        points = pose.require(*chain)
        if points is None:
            continue
        root, joint, tip = points
        surface.begin_path()
        surface.move_to(root.x, root.y)
        surface.line_to(joint.x, joint.y)
        surface.line_to(tip.x, tip.y)
        surface.stroke(cviz.EYE_INNER_COLOR, width)


def _bug_eyes(surface: RenderSurface, pose: Pose, style: SubjectStyle) -> None:
    eyes = pose.require("left_eye", "right_eye")
    if eyes is None:
        return
    left, right = eyes
    # Las antenas salen de los ojos; se trazan antes para que los ojos queden encima.
    for eye, direction in ((left, 1.0), (right, -1.0)):
        surface.begin_path()
        surface.move_to(eye.x, eye.y)
        surface.quadratic_curve_to(
            eye.x,
            eye.y - _ANTENNA_LENGTH * 0.7,
            eye.x + direction * _ANTENNA_SPREAD,
            eye.y - _ANTENNA_LENGTH,
        )
        surface.stroke(style.stroke_bgr, 2)
    _blob_eyes(surface, pose, style)


BUG = Creature(name="bug", body=_bug_body, limbs=_bug_legs, eyes=_bug_eyes)


def default_registry() -> CreatureRegistry:
    """Registro con los monstruos incluidos de serie."""

    return CreatureRegistry((BLOB, GHOST, BUG))
