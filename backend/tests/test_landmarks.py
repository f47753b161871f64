import pytest
from pydantic import ValidationError

from angles import calculate_joint_angles
from landmarks import LANDMARK_NAMES, PoseLandmarkIndex, from_coco17
from models import NUM_LANDMARKS, Landmark, PoseLandmarkData


def test_index_schema():
    assert len(LANDMARK_NAMES) == NUM_LANDMARKS
    assert len(PoseLandmarkIndex) == NUM_LANDMARKS
    assert PoseLandmarkIndex.NOSE == 0
    assert PoseLandmarkIndex.LEFT_SHOULDER == 11
    assert PoseLandmarkIndex.RIGHT_INDEX == 20
    assert PoseLandmarkIndex.LEFT_HIP == 23
    assert PoseLandmarkIndex.RIGHT_FOOT_INDEX == 32


def test_coco17_padding():
    keypoints = [(0.01 * i, 0.02 * i, 0.9) for i in range(17)]
    landmarks = from_coco17(keypoints)

    assert len(landmarks) == NUM_LANDMARKS
    assert landmarks[PoseLandmarkIndex.LEFT_SHOULDER].x == pytest.approx(0.05)
    assert landmarks[PoseLandmarkIndex.RIGHT_ANKLE].y == pytest.approx(0.32)
    assert landmarks[PoseLandmarkIndex.RIGHT_ANKLE].visibility == pytest.approx(0.9)
    for slot in (PoseLandmarkIndex.LEFT_INDEX, PoseLandmarkIndex.LEFT_HEEL, PoseLandmarkIndex.MOUTH_LEFT):
        assert landmarks[slot].visibility == 0.0
        assert landmarks[slot].z == 0.0

    # padded arrays are valid input for the angle calculator
    calculate_joint_angles(landmarks)


def test_coco17_wrong_count():
    with pytest.raises(ValueError):
        from_coco17([(0.0, 0.0, 1.0)] * 33)


def test_frame_rejects_short_landmarks(skeleton):
    with pytest.raises(ValidationError):
        PoseLandmarkData(frame_index=0, timestamp_ms=0, landmarks=skeleton[:17])


def test_frame_world_landmarks(skeleton):
    world = [Landmark(x=0.0, y=0.0, z=0.0)] * NUM_LANDMARKS
    frame = PoseLandmarkData(frame_index=3, timestamp_ms=300, landmarks=skeleton, world_landmarks=world)
    assert len(frame.world_landmarks) == NUM_LANDMARKS

    with pytest.raises(ValidationError):
        PoseLandmarkData(frame_index=3, timestamp_ms=300, landmarks=skeleton, world_landmarks=world[:5])
