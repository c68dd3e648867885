"""
Shot Analyzer Tests

The per-frame pipeline over a tracking session.
"""
import math

import pytest

from core.domain import BodyPart, Handedness, PoseFrame, ShotPhase, TrackingSession
from core.domain.session import MAX_SHOT_RECORDS
from core.services import ShotAnalyzer
from tests.test_helpers import (
    DIP_POSE,
    FOLLOW_THROUGH_POSE,
    IDLE_POSE,
    RELEASE_POSE,
    SET_POSE,
    create_landmarks,
    create_pose,
)


def full_shot_frames():
    """Idle, dip (200-500 ms), set, release with a 0.05 jump, follow-through, landing."""
    script = [
        (0, IDLE_POSE, 0.0),
        (100, IDLE_POSE, 0.0),
        (200, DIP_POSE, 0.0),
        (300, DIP_POSE, 0.0),
        (400, DIP_POSE, 0.0),
        (500, SET_POSE, 0.0),
        (600, RELEASE_POSE, -0.05),
        (633, RELEASE_POSE, -0.05),
        (666, RELEASE_POSE, -0.05),
        (700, FOLLOW_THROUGH_POSE, 0.0),
        (800, IDLE_POSE, 0.0),
    ]
    return [
        create_pose(points, timestamp_ms=ts, frame_number=i, dy=dy)
        for i, (ts, points, dy) in enumerate(script)
    ]


class TestFullShot:
    """One complete jump shot"""

    @pytest.fixture
    def results(self, analyzer):
        return analyzer.analyze_frames(full_shot_frames())

    def test_one_result_per_frame(self, results):
        assert len(results) == 11
        assert [m.frame_number for m in results] == list(range(11))

    def test_phase_sequence(self, results):
        assert [m.phase for m in results] == [
            ShotPhase.IDLE,
            ShotPhase.IDLE,
            ShotPhase.DIP,
            ShotPhase.DIP,
            ShotPhase.DIP,
            ShotPhase.SET,
            ShotPhase.RELEASE,
            ShotPhase.RELEASE,
            ShotPhase.RELEASE,
            ShotPhase.FOLLOW_THROUGH,
            ShotPhase.IDLE,
        ]

    def test_shot_detected_once_on_release(self, results):
        detected = [m.frame_number for m in results if m.shot_detected]
        assert detected == [6]
        assert results[6].previous_phase is ShotPhase.SET
        assert results[-1].shot_count == 1

    def test_explosivity_from_dip_duration(self, results):
        # 300 ms dip
        assert results[6].explosivity == 88

    def test_jump_height_while_airborne(self, results):
        assert results[6].jump_height_cm == 12
        assert results[0].jump_height_cm == 0

    def test_airtime_after_landing(self, results):
        assert results[9].airtime_ms == 0
        assert results[10].airtime_ms == 200

    def test_follow_through_counts_held_frames(self, results):
        assert results[5].follow_through_score == 0
        assert results[8].follow_through_score == 20
        assert results[10].follow_through_score == 20

    def test_shot_record_completed_on_landing(self, analyzer, results):
        shot = analyzer.session.latest_shot

        assert shot.shot_number == 1
        assert shot.timestamp_ms == 600
        assert shot.pose_score == 65
        assert shot.stability == 100
        assert shot.explosivity == 88
        assert shot.jump_height_cm == 12
        assert shot.airtime_ms == 200
        assert shot.follow_through_score == 20
        assert shot.completed

    def test_snapshot_buffered(self, analyzer, results):
        assert len(analyzer.session.snapshots) == 1
        assert analyzer.session.snapshots[0].timestamp_ms == 600

    def test_wrist_velocity(self, results):
        assert results[0].wrist_velocity == 0.0
        assert results[1].wrist_velocity == pytest.approx(0.0)
        assert results[6].wrist_velocity > 0

    def test_handedness_vote(self, results):
        assert results[-1].handedness.hand is Handedness.RIGHT
        assert results[-1].handedness.confidence == 100

    def test_summary(self, analyzer, results):
        summary = analyzer.summary()

        assert summary.shot_count == 1
        assert summary.average_pose_score == 65.0
        assert summary.average_stability == 100.0
        assert summary.average_explosivity == 88.0
        assert summary.best_jump_height_cm == 12
        assert summary.consistency == 100
        assert summary.dominant_hand is Handedness.RIGHT
        assert summary.best_shot.shot_number == 1


class TestShotDetection:

    def test_release_without_dip_has_no_explosivity(self, analyzer):
        analyzer.process_frame(create_pose(IDLE_POSE, timestamp_ms=0))
        metrics = analyzer.process_frame(create_pose(RELEASE_POSE, timestamp_ms=33))

        assert metrics.shot_detected
        assert metrics.explosivity == 0

    def test_held_release_is_one_shot(self, analyzer):
        results = analyzer.analyze_frames(
            create_pose(RELEASE_POSE, timestamp_ms=ts) for ts in (0, 33, 66, 100)
        )

        assert [m.shot_detected for m in results] == [True, False, False, False]
        assert analyzer.session.shot_count == 1

    def test_two_shots(self, analyzer):
        second = [
            create_pose(IDLE_POSE, timestamp_ms=1000),
            create_pose(DIP_POSE, timestamp_ms=1100),
            create_pose(RELEASE_POSE, timestamp_ms=1200),
            create_pose(IDLE_POSE, timestamp_ms=1500),
        ]

        analyzer.analyze_frames(full_shot_frames())
        for pose in second:
            analyzer.process_frame(pose)

        summary = analyzer.summary()
        assert summary.shot_count == 2
        assert [s.shot_number for s in summary.shots] == [1, 2]
        assert summary.shots[1].airtime_ms == 300
        assert len(analyzer.session.snapshots) == 2

    def test_snapshot_buffer_is_bounded(self, analyzer):
        ts = 0
        for _ in range(12):
            analyzer.process_frame(create_pose(IDLE_POSE, timestamp_ms=ts))
            analyzer.process_frame(create_pose(RELEASE_POSE, timestamp_ms=ts + 50))
            ts += 100

        assert analyzer.session.shot_count == 12
        assert len(analyzer.session.snapshots) == 10

    def test_shot_history_is_bounded(self, analyzer):
        total = MAX_SHOT_RECORDS + 5
        ts = 0
        for _ in range(total):
            analyzer.process_frame(create_pose(IDLE_POSE, timestamp_ms=ts))
            analyzer.process_frame(create_pose(RELEASE_POSE, timestamp_ms=ts + 50))
            ts += 100

        session = analyzer.session
        assert session.shot_count == total
        assert len(session.shots) == MAX_SHOT_RECORDS
        assert session.shots[0].shot_number == 6
        assert session.latest_shot.shot_number == total
        assert analyzer.summary().shot_count == total


class TestAbsentFrames:
    """Frames without a pose leave the session untouched"""

    @pytest.mark.parametrize("frame", [None, PoseFrame(landmarks=[], timestamp_ms=50, frame_number=3)])
    def test_neutral_metrics(self, analyzer, set_pose, frame):
        analyzer.process_frame(set_pose)
        session = analyzer.session
        smoothed = session.smoothed_pose
        votes = list(session.votes)

        metrics = analyzer.process_frame(frame)

        assert not metrics.pose_present
        assert metrics.phase is ShotPhase.IDLE
        assert metrics.previous_phase is ShotPhase.SET
        assert metrics.cue is None
        assert metrics.pose_score == 0
        assert metrics.stability == 0
        assert metrics.consistency == 100
        assert metrics.handedness is None
        assert metrics.angles is None

        assert session.smoothed_pose is smoothed
        assert session.votes == votes
        assert session.previous_phase is ShotPhase.SET

    def test_absent_frame_does_not_break_release(self, analyzer):
        analyzer.process_frame(create_pose(SET_POSE, timestamp_ms=0))
        analyzer.process_frame(None)
        metrics = analyzer.process_frame(create_pose(RELEASE_POSE, timestamp_ms=66))

        assert metrics.shot_detected

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_coordinate_is_no_pose(self, analyzer, bad):
        analyzer.process_frame(create_pose(SET_POSE, timestamp_ms=0))
        landmarks = create_landmarks(RELEASE_POSE)
        landmarks[BodyPart.LEFT_HIP]["y"] = bad
        frame = PoseFrame.from_dicts(landmarks, timestamp_ms=33, frame_number=1)

        assert not frame.is_complete
        metrics = analyzer.process_frame(frame)

        assert not metrics.pose_present
        assert metrics.pose_score == 0
        assert analyzer.session.previous_phase is ShotPhase.SET

        # The stream carries on with the next good frame
        metrics = analyzer.process_frame(create_pose(RELEASE_POSE, timestamp_ms=66))
        assert metrics.shot_detected

    def test_non_finite_depth_is_tolerated(self, analyzer):
        landmarks = create_landmarks(SET_POSE)
        landmarks[BodyPart.RIGHT_ELBOW]["z"] = math.nan

        metrics = analyzer.process_frame(PoseFrame.from_dicts(landmarks))

        assert metrics.pose_present
        assert metrics.pose_score == 100

    def test_truncated_frame_keeps_timestamp(self, analyzer):
        frame = PoseFrame(landmarks=[], timestamp_ms=50, frame_number=3)
        metrics = analyzer.process_frame(frame)

        assert metrics.timestamp_ms == 50
        assert metrics.frame_number == 3


class TestSessionState:

    def test_smoothing_applied(self):
        analyzer = ShotAnalyzer(smoothing_alpha=0.5)
        analyzer.process_frame(create_pose(SET_POSE))
        analyzer.process_frame(create_pose(SET_POSE, dy=0.1, timestamp_ms=33))

        assert analyzer.session.smoothed_pose[BodyPart.NOSE].y == pytest.approx(0.25)

    def test_hip_baseline_refreshed_on_idle(self, analyzer):
        analyzer.process_frame(create_pose(IDLE_POSE, timestamp_ms=0))
        analyzer.process_frame(create_pose(IDLE_POSE, dy=0.02, timestamp_ms=33))

        assert analyzer.session.hip_baseline_y == pytest.approx(0.57)

    def test_hip_baseline_kept_during_dip(self, analyzer):
        analyzer.process_frame(create_pose(IDLE_POSE, timestamp_ms=0))
        analyzer.process_frame(create_pose(DIP_POSE, dy=0.05, timestamp_ms=33))

        assert analyzer.session.hip_baseline_y == pytest.approx(0.55)

    def test_cue_reported(self, analyzer):
        pose = create_pose(SET_POSE, {BodyPart.LEFT_SHOULDER: (0.60, 0.42)})
        metrics = analyzer.process_frame(pose)

        assert metrics.cue == "Shoulders uneven, stay square to the rim"
        assert metrics.pose_score == 85

    def test_locale(self):
        analyzer = ShotAnalyzer(locale="fr")
        pose = create_pose(SET_POSE, {BodyPart.LEFT_SHOULDER: (0.60, 0.42)})

        assert analyzer.process_frame(pose).cue.startswith("Épaules")

    def test_reset(self, analyzer):
        analyzer.analyze_frames(full_shot_frames())
        analyzer.reset()

        assert analyzer.session.shot_count == 0
        assert analyzer.session.smoothed_pose is None
        assert analyzer.summary().shot_count == 0

    def test_analyze_frames_starts_fresh(self, analyzer):
        analyzer.analyze_frames(full_shot_frames())
        analyzer.analyze_frames(full_shot_frames())

        assert analyzer.session.shot_count == 1

    def test_caller_owned_session(self):
        session = TrackingSession()
        ShotAnalyzer(session=session, smoothing_alpha=1.0).analyze_frames(full_shot_frames())

        assert session.shot_count == 1

    def test_empty_summary(self, analyzer):
        summary = analyzer.summary()

        assert summary.shot_count == 0
        assert summary.best_shot is None
        assert summary.consistency == 100
