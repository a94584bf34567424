"""Estimadores de pose basados en Mediapipe listos para el bucle en vivo."""

from __future__ import annotations

import logging
import shutil
import time
import urllib.request
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import cv2
import numpy as np

from src.config.constants import MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE
from src.config.models import PoseConfig
from src.config.settings import DEFAULT_KEYPOINT_MIN_SCORE, DEFAULT_MAX_POSES, MODEL_COMPLEXITY, build_pose_kwargs
from src.core.types import SubjectMode, as_mode

from ..constants import COCO_FROM_MEDIAPIPE
from ..types import Keypoint, Pose
from .base import PoseEstimatorBase

logger = logging.getLogger(__name__)

_DOWNLOAD_TIMEOUT_S = 60.0


def ensure_landmarker_model(model_path: str | Path, url: Optional[str] = None) -> Path:
    """Garantiza que el modelo ``.task`` exista en ``model_path``.

    Si falta y hay ``url``, se descarga a un temporario junto al destino y se
    mueve al final, así un fallo a medias nunca deja un modelo truncado.
    Lanza ``FileNotFoundError`` si el modelo no existe y no pudo obtenerse."""

    path = Path(model_path).expanduser()
    if path.is_file() and path.stat().st_size > 0:
        return path
    if not url:
        raise FileNotFoundError(f"Pose landmarker model not found: {path}")

    logger.info("Downloading pose landmarker model from %s to %s", url, path)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with urllib.request.urlopen(url, timeout=_DOWNLOAD_TIMEOUT_S) as response, tmp_path.open("wb") as handle:
            shutil.copyfileobj(response, handle)
        tmp_path.replace(path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise FileNotFoundError(
            f"Pose landmarker model not found: {path} and the download from {url} failed ({exc}). "
            "Pass --model-path with a local .task file."
        ) from exc
    return path


def _landmark_score(landmark: object) -> float:
    """Confianza de un landmark: ``visibility`` y, si falta, ``presence``."""

    for attr in ("visibility", "presence"):
        value = getattr(landmark, attr, None)
        if value is None:
            continue
        score = float(value)
        return score if np.isfinite(score) else 0.0
    return 1.0


def pose_from_landmarks(
    landmarks: Sequence[object],
    width: int,
    height: int,
    *,
    min_score: float = 0.0,
) -> Optional[Pose]:
    """Convierte landmarks normalizados de Mediapipe en una ``Pose`` COCO-17.

    Las coordenadas pasan a píxeles del fotograma de origen y los puntos por
    debajo de ``min_score`` se tratan como no detectados."""

    keypoints: List[Keypoint] = []
    for name, idx in COCO_FROM_MEDIAPIPE.items():
        if idx >= len(landmarks):
            continue
        lm = landmarks[idx]
        score = _landmark_score(lm)
        if score < min_score:
            continue
        x = float(getattr(lm, "x", np.nan)) * float(width)
        y = float(getattr(lm, "y", np.nan)) * float(height)
        if not (np.isfinite(x) and np.isfinite(y)):
            continue
        keypoints.append(Keypoint(name=name, x=x, y=y, confidence=score))
    if not keypoints:
        return None
    return Pose(keypoints=tuple(keypoints), score=float(np.mean([kp.confidence for kp in keypoints])))


def poses_from_landmarks(
    landmark_lists: Iterable[Sequence[object]],
    width: int,
    height: int,
    *,
    min_score: float = 0.0,
) -> List[Pose]:
    """Aplica ``pose_from_landmarks`` a cada sujeto y descarta los vacíos."""

    poses: List[Pose] = []
    for landmarks in landmark_lists:
        pose = pose_from_landmarks(landmarks, width, height, min_score=min_score)
        if pose is not None:
            poses.append(pose)
    return poses


class SinglePoseEstimator(PoseEstimatorBase):
    """Grafo ``solutions.pose`` de Mediapipe: como mucho una persona por frame."""

    def __init__(
        self,
        *,
        model_complexity: int = MODEL_COMPLEXITY,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        smooth_landmarks: bool | None = None,
        min_keypoint_score: float = DEFAULT_KEYPOINT_MIN_SCORE,
    ) -> None:
        from mediapipe.python.solutions import pose as mp_pose

        self.min_keypoint_score = float(min_keypoint_score)
        self._pose = mp_pose.Pose(
            **build_pose_kwargs(
                model_complexity=model_complexity,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
                smooth_landmarks=smooth_landmarks,
            )
        )

    def estimate(self, image_bgr: np.ndarray) -> List[Pose]:
        if self._pose is None:
            raise RuntimeError("SinglePoseEstimator has been closed")
        height, width = image_bgr.shape[:2]
        rgb_image = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        results = self._pose.process(rgb_image)
        if not results.pose_landmarks:
            return []
        return poses_from_landmarks(
            [results.pose_landmarks.landmark], width, height, min_score=self.min_keypoint_score
        )

    def close(self) -> None:
        if self._pose is not None:
            self._pose.close()
            self._pose = None


class MultiPoseEstimator(PoseEstimatorBase):
    """``PoseLandmarker`` de Mediapipe Tasks configurado para varios sujetos."""

    def __init__(
        self,
        model_path: str | Path,
        *,
        max_poses: int = DEFAULT_MAX_POSES,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        min_keypoint_score: float = DEFAULT_KEYPOINT_MIN_SCORE,
    ) -> None:
        path = Path(model_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Pose landmarker model not found: {path}")

        import mediapipe as mp

        vision = mp.tasks.vision
        options = vision.PoseLandmarkerOptions(
            base_options=mp.tasks.BaseOptions(model_asset_path=str(path)),
            running_mode=vision.RunningMode.VIDEO,
            num_poses=max(1, int(max_poses)),
            min_pose_detection_confidence=float(min_detection_confidence),
            min_pose_presence_confidence=float(min_detection_confidence),
            min_tracking_confidence=float(min_tracking_confidence),
            output_segmentation_masks=False,
        )
        self._mp = mp
        self.min_keypoint_score = float(min_keypoint_score)
        self._landmarker = vision.PoseLandmarker.create_from_options(options)
        self._last_timestamp_ms = -1

    def _next_timestamp_ms(self) -> int:
        # El modo VIDEO exige marcas de tiempo estrictamente crecientes.
        now_ms = int(time.monotonic() * 1000)
        self._last_timestamp_ms = max(now_ms, self._last_timestamp_ms + 1)
        return self._last_timestamp_ms

    def estimate(self, image_bgr: np.ndarray) -> List[Pose]:
        if self._landmarker is None:
            raise RuntimeError("MultiPoseEstimator has been closed")
        height, width = image_bgr.shape[:2]
        rgb_image = np.ascontiguousarray(cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB))
        mp_image = self._mp.Image(image_format=self._mp.ImageFormat.SRGB, data=rgb_image)
        result = self._landmarker.detect_for_video(mp_image, self._next_timestamp_ms())
        return poses_from_landmarks(
            result.pose_landmarks or [], width, height, min_score=self.min_keypoint_score
        )

    def close(self) -> None:
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None


def create_estimator(mode: SubjectMode | str, pose_cfg: PoseConfig | None = None) -> PoseEstimatorBase:
    """Construye el estimador adecuado para ``mode`` (bloqueante, puede fallar)."""

    cfg = pose_cfg or PoseConfig()
    resolved = as_mode(mode)
    logger.info("Building %s pose estimator", resolved.value)
    if resolved is SubjectMode.MULTI:
        return MultiPoseEstimator(
            ensure_landmarker_model(cfg.landmarker_model_path, cfg.landmarker_model_url),
            max_poses=cfg.max_poses,
            min_detection_confidence=cfg.min_detection_confidence,
            min_tracking_confidence=cfg.min_tracking_confidence,
            min_keypoint_score=cfg.min_keypoint_score,
        )
    return SinglePoseEstimator(
        model_complexity=cfg.model_complexity,
        min_detection_confidence=cfg.min_detection_confidence,
        min_tracking_confidence=cfg.min_tracking_confidence,
        smooth_landmarks=cfg.smooth_landmarks,
        min_keypoint_score=cfg.min_keypoint_score,
    )
