from typing import Sequence

import numpy as np

from exceptions import LandmarkSchemaError
from landmarks import PoseLandmarkIndex as P
from models import NUM_LANDMARKS, Joint, JointAngles, NormalizedLandmark, Side, SideAngles

# (proximal, vertex, distal) per joint and side; the angle is measured at the vertex
ANGLE_TRIPLETS: dict[tuple[Joint, Side], tuple[int, int, int]] = {
    (Joint.SHOULDER, Side.LEFT): (P.LEFT_HIP, P.LEFT_SHOULDER, P.LEFT_ELBOW),
    (Joint.SHOULDER, Side.RIGHT): (P.RIGHT_HIP, P.RIGHT_SHOULDER, P.RIGHT_ELBOW),
    (Joint.ELBOW, Side.LEFT): (P.LEFT_SHOULDER, P.LEFT_ELBOW, P.LEFT_WRIST),
    (Joint.ELBOW, Side.RIGHT): (P.RIGHT_SHOULDER, P.RIGHT_ELBOW, P.RIGHT_WRIST),
    (Joint.WRIST, Side.LEFT): (P.LEFT_ELBOW, P.LEFT_WRIST, P.LEFT_INDEX),
    (Joint.WRIST, Side.RIGHT): (P.RIGHT_ELBOW, P.RIGHT_WRIST, P.RIGHT_INDEX),
    (Joint.HIP, Side.LEFT): (P.LEFT_SHOULDER, P.LEFT_HIP, P.LEFT_KNEE),
    (Joint.HIP, Side.RIGHT): (P.RIGHT_SHOULDER, P.RIGHT_HIP, P.RIGHT_KNEE),
    (Joint.KNEE, Side.LEFT): (P.LEFT_HIP, P.LEFT_KNEE, P.LEFT_ANKLE),
    (Joint.KNEE, Side.RIGHT): (P.RIGHT_HIP, P.RIGHT_KNEE, P.RIGHT_ANKLE),
}


def _xyz(lm: NormalizedLandmark) -> np.ndarray:
    return np.array([lm.x, lm.y, lm.z], dtype=np.float64)


def calculate_angle(
    proximal: NormalizedLandmark,
    vertex: NormalizedLandmark,
    distal: NormalizedLandmark,
) -> float:
    """Angle at `vertex` in degrees, in [0, 180].

    Coincident points give a zero-length vector; that case returns 0.0.
    """
    v1 = _xyz(proximal) - _xyz(vertex)
    v2 = _xyz(distal) - _xyz(vertex)
    n1 = np.linalg.norm(v1)
    n2 = np.linalg.norm(v2)
    if n1 == 0 or n2 == 0:
        return 0.0
    cos_angle = np.clip(np.dot(v1, v2) / (n1 * n2), -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))


def calculate_joint_angles(landmarks: Sequence[NormalizedLandmark]) -> JointAngles:
    """Build the five-joint angle record from one frame's 33 landmarks."""
    if len(landmarks) != NUM_LANDMARKS:
        raise LandmarkSchemaError(
            f"expected {NUM_LANDMARKS} landmarks, got {len(landmarks)}"
        )

    def side_angles(joint: Joint) -> SideAngles:
        values = {}
        for side in Side:
            a, b, c = ANGLE_TRIPLETS[(joint, side)]
            values[side.value] = calculate_angle(landmarks[a], landmarks[b], landmarks[c])
        return SideAngles(**values)

    return JointAngles(**{joint.value: side_angles(joint) for joint in Joint})


def angle_vector(landmarks: Sequence[NormalizedLandmark]) -> np.ndarray:
    """One frame's ten joint angles as a flat vector, in Segment order."""
    angles = calculate_joint_angles(landmarks)
    return np.array(
        [getattr(getattr(angles, joint.value), side.value) for joint in Joint for side in Side]
    )
