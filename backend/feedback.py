import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Sequence, Union

from models import (
    AnalysisReport,
    BodySegment,
    ComparisonResult,
    DeviationScores,
    FeedbackCategory,
    FeedbackIssue,
    Joint,
    PoseLandmarkData,
    Severity,
    Side,
    SummaryIssue,
)
from scoring import round_half_up

logger = logging.getLogger(__name__)

UPPER_BODY = "Upper Body"
LOWER_BODY = "Lower Body"
OVERALL_FORM = "Overall Form"

UPPER_BODY_SEGMENTS = {BodySegment.SHOULDER, BodySegment.ELBOW, BodySegment.WRIST}
LOWER_BODY_SEGMENTS = {BodySegment.HIP, BodySegment.KNEE, BodySegment.ANKLE}

OVERALL_FORM_MIN_ISSUES = 3

_SEVERITY_ORDER = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}

# (description, recommendation); description takes {side} and {degrees}
FEEDBACK_TEMPLATES: dict[Joint, tuple[str, str]] = {
    Joint.SHOULDER: (
        "{side} shoulder angle deviates by {degrees}° from ideal form",
        "Focus on keeping your shoulder aligned with your target. "
        "Practice rotating your shoulders smoothly through the throwing motion.",
    ),
    Joint.ELBOW: (
        "{side} elbow angle deviates by {degrees}° from ideal form",
        "Keep your elbow at the proper height and angle. "
        "Avoid dropping or raising your elbow too much during the throw.",
    ),
    Joint.WRIST: (
        "{side} wrist angle deviates by {degrees}° from ideal form",
        "Maintain a firm wrist position throughout the throw. "
        "Practice wrist snap drills to improve control and consistency.",
    ),
    Joint.HIP: (
        "{side} hip angle deviates by {degrees}° from ideal form",
        "Engage your hips more in the throwing motion. "
        "Rotate your hips toward the target to generate more power and accuracy.",
    ),
    Joint.KNEE: (
        "{side} knee angle deviates by {degrees}° from ideal form",
        "Check your stance and weight distribution. "
        "Maintain proper knee bend for stability and power transfer.",
    ),
}

OVERALL_FORM_ISSUE = SummaryIssue(
    severity=Severity.MEDIUM,
    description="Multiple form deviations detected across your throwing motion",
    recommendation=(
        "Focus on the high-priority issues first, then work on refining your overall technique. "
        "Consider recording multiple throws to track improvement over time."
    ),
)


def _feedback_text(joint: Joint, side: Side, degrees: int) -> tuple[str, str]:
    description, recommendation = FEEDBACK_TEMPLATES[joint]
    return description.format(side=side.value.capitalize(), degrees=degrees), recommendation


def create_feedback_issues(deviations: DeviationScores) -> list[FeedbackIssue]:
    """One issue per non-low segment, high before medium, larger deviations first."""
    issues = []
    for segment, score in deviations.items():
        if score.severity == Severity.LOW:
            continue
        degrees = round_half_up(score.deviation_degrees)
        description, recommendation = _feedback_text(segment.joint, segment.side, degrees)
        issues.append(
            FeedbackIssue(
                segment=BodySegment(segment.joint.value),
                side=segment.side,
                severity=score.severity,
                deviation_degrees=degrees,
                description=description,
                recommendation=recommendation,
            )
        )

    issues.sort(key=lambda issue: (_SEVERITY_ORDER[issue.severity], -issue.deviation_degrees))
    return issues


def categorize_issues(issues: Sequence[FeedbackIssue]) -> list[FeedbackCategory]:
    categories = []

    upper: list[Union[FeedbackIssue, SummaryIssue]] = [
        i for i in issues if i.segment in UPPER_BODY_SEGMENTS
    ]
    lower: list[Union[FeedbackIssue, SummaryIssue]] = [
        i for i in issues if i.segment in LOWER_BODY_SEGMENTS
    ]
    if upper:
        categories.append(FeedbackCategory(name=UPPER_BODY, issues=upper))
    if lower:
        categories.append(FeedbackCategory(name=LOWER_BODY, issues=lower))

    if len(issues) >= OVERALL_FORM_MIN_ISSUES:
        categories.append(FeedbackCategory(name=OVERALL_FORM, issues=[OVERALL_FORM_ISSUE]))

    return categories


def new_report_id() -> str:
    return f"analysis_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def generate_feedback(
    comparison: ComparisonResult,
    video_uri: str,
    user_frames: Sequence[PoseLandmarkData],
) -> AnalysisReport:
    """Turn a comparison into a report. Nothing is persisted here."""
    issues = create_feedback_issues(comparison.deviations)
    categories = categorize_issues(issues)

    report = AnalysisReport(
        id=new_report_id(),
        overall_score=comparison.overall_score,
        categories=categories,
        timestamp=datetime.now(timezone.utc),
        video_uri=video_uri,
        user_landmarks=list(user_frames),
    )
    logger.info(
        "Report %s: score=%d, %d issues in %d categories",
        report.id, report.overall_score, len(issues), len(categories),
    )
    return report
