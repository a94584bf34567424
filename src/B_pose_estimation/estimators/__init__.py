"""API pública de estimadores de pose disponibles en el paquete."""

from .base import PoseEstimatorBase
from .mediapipe_estimators import (
    MultiPoseEstimator,
    SinglePoseEstimator,
    create_estimator,
    ensure_landmarker_model,
    pose_from_landmarks,
    poses_from_landmarks,
)

__all__ = [
    "PoseEstimatorBase",
    "SinglePoseEstimator",
    "MultiPoseEstimator",
    "create_estimator",
    "ensure_landmarker_model",
    "pose_from_landmarks",
    "poses_from_landmarks",
]
