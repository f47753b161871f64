import math

import pytest

from landmarks import PoseLandmarkIndex as P
from models import NUM_LANDMARKS, NormalizedLandmark, PoseLandmarkData

# A standing thrower, normalized image coordinates (y grows downwards)
SKELETON = {
    P.LEFT_SHOULDER: (0.60, 0.30),
    P.RIGHT_SHOULDER: (0.40, 0.30),
    P.LEFT_ELBOW: (0.65, 0.45),
    P.RIGHT_ELBOW: (0.35, 0.45),
    P.LEFT_WRIST: (0.68, 0.60),
    P.RIGHT_WRIST: (0.25, 0.55),
    P.LEFT_INDEX: (0.71, 0.64),
    P.RIGHT_INDEX: (0.20, 0.62),
    P.LEFT_HIP: (0.57, 0.60),
    P.RIGHT_HIP: (0.43, 0.60),
    P.LEFT_KNEE: (0.58, 0.75),
    P.RIGHT_KNEE: (0.42, 0.75),
    P.LEFT_ANKLE: (0.60, 0.90),
    P.RIGHT_ANKLE: (0.40, 0.90),
}


def build_landmarks(overrides=None):
    points = dict(SKELETON)
    points.update(overrides or {})
    landmarks = []
    for i in range(NUM_LANDMARKS):
        x, y = points.get(i, (0.5, 0.2))
        landmarks.append(NormalizedLandmark(x=x, y=y, z=0.0, visibility=1.0))
    return landmarks


def rotate_about(point, pivot, degrees):
    rad = math.radians(degrees)
    dx, dy = point[0] - pivot[0], point[1] - pivot[1]
    return (
        pivot[0] + dx * math.cos(rad) - dy * math.sin(rad),
        pivot[1] + dx * math.sin(rad) + dy * math.cos(rad),
    )


def build_frame(index, landmarks):
    return PoseLandmarkData(frame_index=index, timestamp_ms=index * 100, landmarks=landmarks)


@pytest.fixture
def skeleton():
    return build_landmarks()


@pytest.fixture
def make_frames():
    """Factory: n frames, all holding the same landmarks."""

    def make(n, landmarks=None):
        landmarks = landmarks or build_landmarks()
        return [build_frame(i, landmarks) for i in range(n)]

    return make


@pytest.fixture
def bent_right_elbow():
    """Skeleton whose right forearm and hand are swung 40 degrees about the elbow."""
    elbow = SKELETON[P.RIGHT_ELBOW]
    return build_landmarks({
        P.RIGHT_WRIST: rotate_about(SKELETON[P.RIGHT_WRIST], elbow, 40),
        P.RIGHT_INDEX: rotate_about(SKELETON[P.RIGHT_INDEX], elbow, 40),
    })
