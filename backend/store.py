import logging
import threading
from datetime import date
from typing import Optional

from exceptions import ReportNotFoundError
from models import (
    NUM_LANDMARKS,
    AnalysisReport,
    GoldStandardData,
    GoldStandardMetadata,
    Landmark,
    NormalizedLandmark,
    PoseLandmarkData,
    StoredAnalysis,
)

logger = logging.getLogger(__name__)


def placeholder_gold_standard() -> GoldStandardData:
    """Bundled reference used until a real gold standard is configured.

    Every landmark sits at the frame centre, so all of its joint angles are 0.
    """
    frames = [
        PoseLandmarkData(
            frame_index=frame_index,
            timestamp_ms=timestamp_ms,
            landmarks=[NormalizedLandmark(x=0.5, y=0.5, z=0.0, visibility=1.0)] * NUM_LANDMARKS,
            world_landmarks=[Landmark(x=0.0, y=0.0, z=0.0, visibility=1.0)] * NUM_LANDMARKS,
        )
        for frame_index, timestamp_ms in ((0, 0), (15, 500), (30, 1000))
    ]
    return GoldStandardData(
        video_uri="placeholder://gold-standard-video",
        landmarks=frames,
        metadata=GoldStandardMetadata(
            description="Professional ultimate frisbee backhand throw",
            athlete_name="Gold Standard Athlete",
            recorded_date=date(2024, 1, 1),
        ),
    )


class AnalysisStore:
    """In-memory key-value store for reports and the gold standard."""

    def __init__(self, history_limit: int = 100):
        if history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {history_limit}")
        self.history_limit = history_limit
        self._analyses: dict[str, StoredAnalysis] = {}
        self._gold_standard: Optional[GoldStandardData] = None
        self._lock = threading.Lock()

    def save(self, report: AnalysisReport) -> str:
        stored = StoredAnalysis(
            id=report.id,
            timestamp=int(report.timestamp.timestamp() * 1000),
            video_uri=report.video_uri,
            report=report,
        )
        with self._lock:
            self._analyses[report.id] = stored
            while len(self._analyses) > self.history_limit:
                oldest = next(iter(self._analyses))
                del self._analyses[oldest]
                logger.info("History full, dropped analysis %s", oldest)
        return report.id

    def history(self) -> list[StoredAnalysis]:
        """Stored analyses, newest first (most recently saved at index 0)."""
        with self._lock:
            return list(reversed(self._analyses.values()))

    def get(self, analysis_id: str) -> StoredAnalysis:
        with self._lock:
            try:
                return self._analyses[analysis_id]
            except KeyError:
                raise ReportNotFoundError(f"Analysis not found: {analysis_id}") from None

    def delete(self, analysis_id: str) -> None:
        with self._lock:
            if self._analyses.pop(analysis_id, None) is None:
                raise ReportNotFoundError(f"Analysis not found: {analysis_id}")

    def gold_standard(self) -> GoldStandardData:
        with self._lock:
            if self._gold_standard is not None:
                return self._gold_standard
        return placeholder_gold_standard()

    def set_gold_standard(self, data: GoldStandardData) -> None:
        with self._lock:
            self._gold_standard = data
        logger.info(
            "Gold standard set: %s (%d frames)", data.video_uri, len(data.landmarks)
        )
