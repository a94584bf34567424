from __future__ import annotations

import pytest

from src.B_pose_estimation.types import KEYPOINT_NAMES, Keypoint, Pose
from src.core.types import MODE_HUMAN_LABEL, SubjectMode, as_mode


def test_keypoint_vocabulary_is_coco17() -> None:
    assert len(KEYPOINT_NAMES) == 17
    assert KEYPOINT_NAMES[:3] == ("nose", "left_eye", "right_eye")
    assert len(set(KEYPOINT_NAMES)) == 17


def test_pose_rejects_duplicate_names() -> None:
    kp = Keypoint("nose", 1.0, 2.0, 0.9)
    with pytest.raises(ValueError, match="Duplicate"):
        Pose(keypoints=(kp, kp))


def test_pose_lookup_by_name(make_pose) -> None:
    pose = make_pose({"left_eye": (10, 20), "right_eye": (30, 20)})

    assert pose.get("left_eye") == Keypoint("left_eye", 10.0, 20.0, 0.9)
    assert pose.get("nose") is None
    assert len(pose) == 2
    assert pose.names == ("left_eye", "right_eye")


def test_require_returns_none_when_any_keypoint_missing(make_pose) -> None:
    pose = make_pose({"left_eye": (10, 20), "right_eye": (30, 20)})

    left, right = pose.require("left_eye", "right_eye")
    assert (left.x, right.x) == (10.0, 30.0)
    assert pose.require("left_eye", "nose") is None


@pytest.mark.parametrize(
    "label, expected",
    [
        ("single", SubjectMode.SINGLE),
        ("MULTI", SubjectMode.MULTI),
        ("multi-pose", SubjectMode.MULTI),
        ("Multiple People", SubjectMode.MULTI),
        ("singlepose", SubjectMode.SINGLE),
        ("", SubjectMode.SINGLE),
        (None, SubjectMode.SINGLE),
        (SubjectMode.MULTI, SubjectMode.MULTI),
    ],
)
def test_as_mode_normalizes_labels(label, expected) -> None:
    assert as_mode(label) is expected


def test_as_mode_rejects_unknown_label() -> None:
    with pytest.raises(ValueError, match="Unknown subject-count mode"):
        as_mode("crowd")


def test_mode_toggle_and_labels() -> None:
    assert SubjectMode.SINGLE.toggled() is SubjectMode.MULTI
    assert SubjectMode.MULTI.toggled() is SubjectMode.SINGLE
    assert MODE_HUMAN_LABEL[SubjectMode.MULTI] == "Multiple People Mode"
