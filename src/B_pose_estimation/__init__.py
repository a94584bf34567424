"""Exportaciones principales del paquete de estimación de pose."""

from .constants import COCO_FROM_MEDIAPIPE
from .estimators import (
    MultiPoseEstimator,
    PoseEstimatorBase,
    SinglePoseEstimator,
    create_estimator,
    poses_from_landmarks,
)
from .lifecycle import EstimatorHandle, EstimatorLifecycle, LifecycleStatus, PendingEstimate
from .types import KEYPOINT_NAMES, Frame, FrameDims, Keypoint, Pose

__all__ = [
    "KEYPOINT_NAMES",
    "COCO_FROM_MEDIAPIPE",
    "Keypoint",
    "Pose",
    "Frame",
    "FrameDims",
    "PoseEstimatorBase",
    "SinglePoseEstimator",
    "MultiPoseEstimator",
    "create_estimator",
    "poses_from_landmarks",
    "EstimatorHandle",
    "EstimatorLifecycle",
    "LifecycleStatus",
    "PendingEstimate",
]
