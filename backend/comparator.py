import logging
from typing import Sequence

import numpy as np
from dtw import dtw

from angles import angle_vector, calculate_joint_angles
from config import Alignment
from models import ComparisonResult, PoseLandmarkData, Severity
from scoring import average_deviations, calculate_deviations, overall_score

logger = logging.getLogger(__name__)


def _positional_path(n_user: int, n_gold: int) -> list[tuple[int, int]]:
    """Frame i against frame i; the tail of the longer sequence is dropped."""
    return [(i, i) for i in range(min(n_user, n_gold))]


def _dtw_path(
    user_frames: Sequence[PoseLandmarkData],
    gold_frames: Sequence[PoseLandmarkData],
) -> list[tuple[int, int]]:
    """Warp the two joint-angle sequences onto each other."""
    user_angles = np.array([angle_vector(fp.landmarks) for fp in user_frames])
    gold_angles = np.array([angle_vector(fp.landmarks) for fp in gold_frames])

    alignment = dtw(user_angles, gold_angles, dist_method="euclidean")
    return list(zip(alignment.index1.tolist(), alignment.index2.tolist()))


def compare_poses(
    user_frames: Sequence[PoseLandmarkData],
    gold_frames: Sequence[PoseLandmarkData],
    alignment: Alignment = Alignment.POSITIONAL,
) -> ComparisonResult:
    """Compare a user's throw against the gold standard, joint angle by joint angle.

    Each aligned frame pair is scored on its own; a frame with any high
    severity segment becomes a key frame. The per-frame deviations are then
    averaged per segment and folded into a single 0-100 score.

    Key frame indices are positions in `user_frames`. An empty overlap is not
    an error: it scores 100 with no deviations.
    """
    if not user_frames or not gold_frames:
        logger.info(
            "Nothing to compare (user=%d frames, gold=%d frames)",
            len(user_frames), len(gold_frames),
        )
        return ComparisonResult(deviations={}, overall_score=100, key_frame_indices=[])

    if alignment == Alignment.DTW:
        path = _dtw_path(user_frames, gold_frames)
    else:
        path = _positional_path(len(user_frames), len(gold_frames))

    frame_deviations = []
    key_frames: set[int] = set()

    for ui, gi in path:
        user_angles = calculate_joint_angles(user_frames[ui].landmarks)
        gold_angles = calculate_joint_angles(gold_frames[gi].landmarks)
        deviations = calculate_deviations(user_angles, gold_angles)
        frame_deviations.append(deviations)

        high = [s.value for s, d in deviations.items() if d.severity == Severity.HIGH]
        if high:
            key_frames.add(ui)
            logger.debug("Key frame %d (gold %d): %s", ui, gi, ", ".join(high))

    averaged = average_deviations(frame_deviations)
    score = overall_score(averaged)

    logger.info(
        "Compared %d frame pairs (%s alignment): score=%d, key frames=%d",
        len(path), alignment.value, score, len(key_frames),
    )

    return ComparisonResult(
        deviations=averaged,
        overall_score=score,
        key_frame_indices=sorted(key_frames),
        frames_compared=len(path),
    )
