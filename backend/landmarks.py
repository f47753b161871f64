from enum import IntEnum
from typing import Sequence

from models import NUM_LANDMARKS, NormalizedLandmark

# BlazePose / MediaPipe Pose landmark indices
LANDMARK_NAMES = [
    "NOSE", "LEFT_EYE_INNER", "LEFT_EYE", "LEFT_EYE_OUTER",
    "RIGHT_EYE_INNER", "RIGHT_EYE", "RIGHT_EYE_OUTER",
    "LEFT_EAR", "RIGHT_EAR", "MOUTH_LEFT", "MOUTH_RIGHT",
    "LEFT_SHOULDER", "RIGHT_SHOULDER", "LEFT_ELBOW", "RIGHT_ELBOW",
    "LEFT_WRIST", "RIGHT_WRIST", "LEFT_PINKY", "RIGHT_PINKY",
    "LEFT_INDEX", "RIGHT_INDEX", "LEFT_THUMB", "RIGHT_THUMB",
    "LEFT_HIP", "RIGHT_HIP", "LEFT_KNEE", "RIGHT_KNEE",
    "LEFT_ANKLE", "RIGHT_ANKLE", "LEFT_HEEL", "RIGHT_HEEL",
    "LEFT_FOOT_INDEX", "RIGHT_FOOT_INDEX",
]

PoseLandmarkIndex = IntEnum("PoseLandmarkIndex", [(name, i) for i, name in enumerate(LANDMARK_NAMES)])

# COCO 17 keypoint order -> BlazePose slot
COCO17_TO_BLAZEPOSE = [
    PoseLandmarkIndex.NOSE,
    PoseLandmarkIndex.LEFT_EYE,
    PoseLandmarkIndex.RIGHT_EYE,
    PoseLandmarkIndex.LEFT_EAR,
    PoseLandmarkIndex.RIGHT_EAR,
    PoseLandmarkIndex.LEFT_SHOULDER,
    PoseLandmarkIndex.RIGHT_SHOULDER,
    PoseLandmarkIndex.LEFT_ELBOW,
    PoseLandmarkIndex.RIGHT_ELBOW,
    PoseLandmarkIndex.LEFT_WRIST,
    PoseLandmarkIndex.RIGHT_WRIST,
    PoseLandmarkIndex.LEFT_HIP,
    PoseLandmarkIndex.RIGHT_HIP,
    PoseLandmarkIndex.LEFT_KNEE,
    PoseLandmarkIndex.RIGHT_KNEE,
    PoseLandmarkIndex.LEFT_ANKLE,
    PoseLandmarkIndex.RIGHT_ANKLE,
]

_MISSING = NormalizedLandmark(x=0.0, y=0.0, z=0.0, visibility=0.0)


def from_coco17(keypoints: Sequence[Sequence[float]]) -> list[NormalizedLandmark]:
    """Pad a 17-point COCO pose to the 33-slot BlazePose schema.

    Each keypoint is (x, y, confidence) in normalized coordinates. Slots COCO
    has no counterpart for are filled with a zero landmark at visibility 0.
    """
    if len(keypoints) != len(COCO17_TO_BLAZEPOSE):
        raise ValueError(f"expected 17 COCO keypoints, got {len(keypoints)}")

    landmarks = [_MISSING] * NUM_LANDMARKS
    for (x, y, confidence), slot in zip(keypoints, COCO17_TO_BLAZEPOSE):
        landmarks[slot] = NormalizedLandmark(
            x=float(x),
            y=float(y),
            z=0.0,
            visibility=min(max(float(confidence), 0.0), 1.0),
        )
    return landmarks
