from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

NUM_LANDMARKS = 33


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NormalizedLandmark(_Frozen):
    x: float  # fraction of frame width
    y: float  # fraction of frame height
    z: float = 0.0  # relative depth, 0 when the estimator gives none
    visibility: Optional[float] = Field(None, ge=0.0, le=1.0)


class Landmark(_Frozen):
    x: float  # metres
    y: float
    z: float
    visibility: Optional[float] = Field(None, ge=0.0, le=1.0)


class PoseLandmarkData(_Frozen):
    frame_index: int
    timestamp_ms: int
    landmarks: list[NormalizedLandmark] = Field(
        min_length=NUM_LANDMARKS, max_length=NUM_LANDMARKS
    )
    world_landmarks: list[Landmark] = Field(default_factory=list)

    @field_validator("world_landmarks")
    @classmethod
    def _world_landmarks_schema(cls, value: list[Landmark]) -> list[Landmark]:
        if value and len(value) != NUM_LANDMARKS:
            raise ValueError(
                f"world_landmarks must be empty or hold {NUM_LANDMARKS} entries, got {len(value)}"
            )
        return value


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Joint(str, Enum):
    SHOULDER = "shoulder"
    ELBOW = "elbow"
    WRIST = "wrist"
    HIP = "hip"
    KNEE = "knee"


class BodySegment(str, Enum):
    """Segments feedback can be filed under.

    ANKLE has no angle behind it; it exists so the Lower Body grouping is complete.
    """

    SHOULDER = "shoulder"
    ELBOW = "elbow"
    WRIST = "wrist"
    HIP = "hip"
    KNEE = "knee"
    ANKLE = "ankle"


class Segment(str, Enum):
    """One (side, joint) pair. The value is the interchange key, e.g. "left_shoulder"."""

    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"

    @property
    def side(self) -> Side:
        return Side(self.value.split("_", 1)[0])

    @property
    def joint(self) -> Joint:
        return Joint(self.value.split("_", 1)[1])


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SideAngles(_Frozen):
    left: float
    right: float


class JointAngles(_Frozen):
    shoulder: SideAngles
    elbow: SideAngles
    wrist: SideAngles
    hip: SideAngles
    knee: SideAngles

    def angle(self, segment: Segment) -> float:
        return getattr(getattr(self, segment.joint.value), segment.side.value)


class DeviationScore(_Frozen):
    deviation_degrees: float
    severity: Severity


DeviationScores = dict[Segment, DeviationScore]


class ComparisonResult(_Frozen):
    deviations: DeviationScores  # averaged across all compared frames
    overall_score: int = Field(ge=0, le=100)
    key_frame_indices: list[int]
    frames_compared: int = 0


class FeedbackIssue(_Frozen):
    kind: Literal["joint"] = "joint"
    segment: BodySegment
    side: Side
    severity: Severity
    deviation_degrees: int
    description: str
    recommendation: str


class SummaryIssue(_Frozen):
    """Aggregate marker for reports with many issues. Not tied to any joint."""

    kind: Literal["summary"] = "summary"
    severity: Severity = Severity.MEDIUM
    description: str
    recommendation: str


class FeedbackCategory(_Frozen):
    name: str  # "Upper Body", "Lower Body", "Overall Form"
    issues: list[Annotated[Union[FeedbackIssue, SummaryIssue], Field(discriminator="kind")]]


class AnalysisReport(_Frozen):
    id: str
    overall_score: int = Field(ge=0, le=100)
    categories: list[FeedbackCategory]
    timestamp: datetime
    video_uri: str
    user_landmarks: list[PoseLandmarkData]


class GoldStandardMetadata(_Frozen):
    description: str
    athlete_name: str
    recorded_date: date


class GoldStandardData(_Frozen):
    video_uri: str
    landmarks: list[PoseLandmarkData]
    metadata: GoldStandardMetadata


class StoredAnalysis(_Frozen):
    id: str
    timestamp: int  # epoch ms
    video_uri: str
    report: AnalysisReport
