import math
from typing import Sequence

import numpy as np

from models import DeviationScore, DeviationScores, JointAngles, Segment, Severity

HIGH_THRESHOLD_DEG = 15.0  # at or above is high
MEDIUM_THRESHOLD_DEG = 10.0  # at or above is medium
ZERO_SCORE_DEVIATION_DEG = 30.0  # mean deviation that scores 0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_severity(deviation: float) -> Severity:
    if deviation >= HIGH_THRESHOLD_DEG:
        return Severity.HIGH
    if deviation >= MEDIUM_THRESHOLD_DEG:
        return Severity.MEDIUM
    return Severity.LOW


def calculate_deviations(user_angles: JointAngles, gold_angles: JointAngles) -> DeviationScores:
    """Absolute angle difference and severity for each of the ten segments."""
    deviations: DeviationScores = {}
    for segment in Segment:
        deviation = abs(user_angles.angle(segment) - gold_angles.angle(segment))
        deviations[segment] = DeviationScore(
            deviation_degrees=deviation,
            severity=classify_severity(deviation),
        )
    return deviations


def average_deviations(frame_deviations: Sequence[DeviationScores]) -> DeviationScores:
    """Mean deviation per segment, with severity re-classified on the mean."""
    if not frame_deviations:
        return {}

    averaged: DeviationScores = {}
    for segment in frame_deviations[0]:
        mean = float(np.mean([d[segment].deviation_degrees for d in frame_deviations]))
        averaged[segment] = DeviationScore(
            deviation_degrees=mean,
            severity=classify_severity(mean),
        )
    return averaged


def overall_score(deviations: DeviationScores) -> int:
    """Map the mean segment deviation to 0-100: 0 deg is 100, 30 deg or more is 0."""
    if not deviations:
        return 100

    mean = float(np.mean([d.deviation_degrees for d in deviations.values()]))
    score = 100.0 - (mean / ZERO_SCORE_DEVIATION_DEG) * 100.0
    return round_half_up(min(100.0, max(0.0, score)))
