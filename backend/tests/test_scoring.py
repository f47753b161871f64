import pytest

from models import DeviationScore, JointAngles, Segment, Severity, SideAngles
from scoring import (
    average_deviations,
    calculate_deviations,
    classify_severity,
    overall_score,
)


def joint_angles(**overrides):
    values = {joint: SideAngles(left=90.0, right=90.0)
              for joint in ("shoulder", "elbow", "wrist", "hip", "knee")}
    values.update(overrides)
    return JointAngles(**values)


def uniform(deviation):
    return {
        segment: DeviationScore(deviation_degrees=deviation, severity=classify_severity(deviation))
        for segment in Segment
    }


@pytest.mark.parametrize("deviation, severity", [
    (0.0, Severity.LOW),
    (9.999, Severity.LOW),
    (10.0, Severity.MEDIUM),
    (14.999, Severity.MEDIUM),
    (15.0, Severity.HIGH),
    (15.001, Severity.HIGH),
    (120.0, Severity.HIGH),
])
def test_severity_thresholds(deviation, severity):
    assert classify_severity(deviation) == severity


def test_deviations_are_absolute_differences():
    user = joint_angles(elbow=SideAngles(left=75.5, right=130.0), knee=SideAngles(left=90.0, right=78.0))
    gold = joint_angles(elbow=SideAngles(left=90.0, right=100.0))

    deviations = calculate_deviations(user, gold)

    assert list(deviations) == list(Segment)
    for segment, score in deviations.items():
        assert score.deviation_degrees >= 0
        assert score.deviation_degrees == abs(user.angle(segment) - gold.angle(segment))
    assert deviations[Segment.LEFT_ELBOW].severity == Severity.MEDIUM
    assert deviations[Segment.RIGHT_ELBOW].severity == Severity.HIGH
    assert deviations[Segment.RIGHT_KNEE].severity == Severity.MEDIUM
    assert deviations[Segment.LEFT_HIP].severity == Severity.LOW


def test_average_reclassifies_on_mean():
    # two high frames and one low frame average out to medium
    frames = [uniform(16.0), uniform(16.0), uniform(2.0)]
    averaged = average_deviations(frames)
    for score in averaged.values():
        assert score.deviation_degrees == pytest.approx(34.0 / 3)
        assert score.severity == Severity.MEDIUM


def test_average_of_nothing():
    assert average_deviations([]) == {}


@pytest.mark.parametrize("mean, score", [
    (0.0, 100),
    (4.0, 87),
    (15.0, 50),
    (30.0, 0),
    (45.0, 0),
])
def test_score_formula(mean, score):
    assert overall_score(uniform(mean)) == score


def test_score_of_no_deviations():
    assert overall_score({}) == 100


def test_score_is_monotonic():
    deviations = uniform(5.0)
    previous = overall_score(deviations)
    for bump in (1.0, 5.0, 12.0, 40.0, 400.0):
        deviations[Segment.LEFT_KNEE] = DeviationScore(
            deviation_degrees=5.0 + bump, severity=classify_severity(5.0 + bump)
        )
        current = overall_score(deviations)
        assert current <= previous
        previous = current
