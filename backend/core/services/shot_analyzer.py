"""
Shot Analyzer Service

High-level service that runs the per-frame pipeline over a tracking
session to provide live basketball shot analysis.

This is the main entry point for analyzing a landmark stream.
"""

import logging
from typing import Iterable, List, Optional

from ..domain.analysis import (
    FrameMetrics,
    SessionSummary,
    ShotPhase,
    ShotRecord,
)
from ..domain.pose import PoseFrame, is_complete_pose, side_part
from ..domain.session import TrackingSession
from .angle_calculator import AngleCalculator
from .handedness import detect_shooting_hand, update_handedness_vote
from .kinematics import calculate_airtime, detect_ball_in_hand, joint_velocity, jump_height
from .landmark_smoother import SMOOTHING_ALPHA, smooth_landmarks
from .pose_scorer import get_pose_score
from .posture_evaluator import DEFAULT_LOCALE, PostureEvaluator
from .shot_metrics import (
    FOLLOW_THROUGH_TARGET_FRAMES,
    create_shot_snapshot,
    get_follow_through_score,
    get_shot_consistency_score,
    get_stability_score,
    is_follow_through_held,
)
from .shot_phase import (
    ends_airborne,
    get_explosivity_score,
    get_shot_phase,
    is_airborne_phase,
    is_release_transition,
)


logger = logging.getLogger(__name__)


class ShotAnalyzer:
    """
    Analyzes basketball shots from a stream of pose frames.

    For each frame this service:
    1. Smooths the landmarks against the previous frame
    2. Votes on the shooting hand
    3. Classifies the shot phase and reacts to transitions
    4. Evaluates posture and computes scores and estimates

    Usage:
        analyzer = ShotAnalyzer(locale="fr")

        # Live: one call per camera frame
        metrics = analyzer.process_frame(frame)
        if metrics.shot_detected:
            print(f"Shot {metrics.shot_count}: {metrics.pose_score}")

        # Or a recorded sequence
        results = analyzer.analyze_frames(frames)
        summary = analyzer.summary()
    """

    def __init__(
        self,
        session: Optional[TrackingSession] = None,
        smoothing_alpha: float = SMOOTHING_ALPHA,
        locale: str = DEFAULT_LOCALE,
        follow_through_target_frames: int = FOLLOW_THROUGH_TARGET_FRAMES,
    ):
        """Initialize the analyzer around a new or existing session."""
        self.session = session if session is not None else TrackingSession()
        self.smoothing_alpha = smoothing_alpha
        self.follow_through_target_frames = follow_through_target_frames
        self.posture_evaluator = PostureEvaluator(locale=locale)

    # -------------------------------------------------------------------------
    # Main Analysis Methods
    # -------------------------------------------------------------------------

    def process_frame(self, raw_pose: Optional[PoseFrame]) -> FrameMetrics:
        """
        Run one full pass of the pipeline.

        Args:
            raw_pose: Detector output for this frame, or None if nobody
                was detected

        Returns:
            FrameMetrics for this frame. Frames without a complete pose
            get neutral values and do not touch the session.
        """
        session = self.session

        if not is_complete_pose(raw_pose):
            return self._neutral_metrics(raw_pose)

        timestamp_ms = raw_pose.timestamp_ms
        previous_pose = session.smoothed_pose
        pose = smooth_landmarks(previous_pose, raw_pose, self.smoothing_alpha)

        handedness = update_handedness_vote(pose, session.votes)
        session.votes = list(handedness.votes)

        previous_phase = session.previous_phase
        phase = get_shot_phase(pose)

        pose_score = get_pose_score(pose)
        stability = get_stability_score(pose)

        self._track_dip(previous_phase, phase, timestamp_ms)

        shot_detected = is_release_transition(previous_phase, phase)
        if shot_detected:
            self._record_shot(pose, timestamp_ms, pose_score, stability)

        self._track_follow_through(pose)
        self._track_airborne(pose, phase, timestamp_ms)

        if phase is ShotPhase.IDLE or session.hip_baseline_y is None:
            session.hip_baseline_y = pose.hip_mid_y

        shooting_hand = detect_shooting_hand(pose)
        wrist_velocity = self._wrist_velocity(pose, previous_pose, shooting_hand, timestamp_ms)

        latest = session.latest_shot
        metrics = FrameMetrics(
            timestamp_ms=timestamp_ms,
            frame_number=raw_pose.frame_number,
            pose_present=True,
            phase=phase,
            previous_phase=previous_phase,
            shot_detected=shot_detected,
            cue=self.posture_evaluator.get_feedback(pose),
            pose_score=pose_score,
            stability=stability,
            consistency=get_shot_consistency_score(session.snapshots),
            follow_through_score=self._follow_through_score() if latest else 0,
            explosivity=latest.explosivity if latest else 0,
            jump_height_cm=jump_height(pose, session.hip_baseline_y),
            airtime_ms=session.last_airtime_ms,
            wrist_velocity=wrist_velocity,
            ball_in_hand=detect_ball_in_hand(pose),
            shot_count=session.shot_count,
            handedness=handedness,
            angles=AngleCalculator.calculate_all_angles(pose, shooting_hand),
        )

        session.smoothed_pose = pose
        session.previous_phase = phase
        session.last_timestamp_ms = timestamp_ms

        return metrics

    def analyze_frames(self, frames: Iterable[Optional[PoseFrame]]) -> List[FrameMetrics]:
        """
        Analyze a recorded sequence from a fresh session.

        Args:
            frames: PoseFrame objects in capture order (None for empty frames)

        Returns:
            One FrameMetrics per input frame
        """
        self.reset()
        return [self.process_frame(frame) for frame in frames]

    def summary(self) -> SessionSummary:
        """Aggregate the shots recorded so far."""
        session = self.session
        shots = list(session.shots)
        handedness = update_handedness_vote(None, session.votes)

        if not shots:
            return SessionSummary(
                dominant_hand=handedness.hand,
                hand_confidence=handedness.confidence,
            )

        count = len(shots)
        return SessionSummary(
            shot_count=session.shot_count,
            average_pose_score=round(sum(s.pose_score for s in shots) / count, 1),
            average_stability=round(sum(s.stability for s in shots) / count, 1),
            average_explosivity=round(sum(s.explosivity for s in shots) / count, 1),
            best_jump_height_cm=max(s.jump_height_cm for s in shots),
            consistency=get_shot_consistency_score(session.snapshots),
            dominant_hand=handedness.hand,
            hand_confidence=handedness.confidence,
            shots=shots,
        )

    def reset(self) -> None:
        """Start over with an empty session."""
        self.session.reset()

    # -------------------------------------------------------------------------
    # Phase Transitions
    # -------------------------------------------------------------------------

    def _track_dip(self, previous: ShotPhase, current: ShotPhase, timestamp_ms: int) -> None:
        session = self.session
        if current is ShotPhase.DIP and previous is not ShotPhase.DIP:
            session.dip_started_ms = timestamp_ms
            session.dip_ended_ms = None
        elif previous is ShotPhase.DIP and current is not ShotPhase.DIP:
            session.dip_ended_ms = timestamp_ms

    def _record_shot(
        self,
        pose: PoseFrame,
        timestamp_ms: int,
        pose_score: int,
        stability: int,
    ) -> ShotRecord:
        session = self.session

        snapshot = create_shot_snapshot(pose, timestamp_ms)
        session.add_snapshot(snapshot)

        dip_duration = None
        if session.dip_started_ms is not None:
            dip_end = session.dip_ended_ms if session.dip_ended_ms is not None else timestamp_ms
            dip_duration = dip_end - session.dip_started_ms
        # Each dip feeds a single shot
        session.dip_started_ms = None
        session.dip_ended_ms = None

        record = ShotRecord(
            shot_number=session.shot_count + 1,
            timestamp_ms=timestamp_ms,
            pose_score=pose_score,
            stability=stability,
            explosivity=get_explosivity_score(dip_duration),
            snapshot=snapshot,
        )
        session.add_shot(record)

        session.follow_through_frames = 0
        session.follow_through_open = True

        logger.debug(
            f"Shot {record.shot_number} at {timestamp_ms}ms: "
            f"score={pose_score} stability={stability} explosivity={record.explosivity} "
            f"dip={dip_duration}ms"
        )
        return record

    def _track_follow_through(self, pose: PoseFrame) -> None:
        session = self.session
        if not session.follow_through_open:
            return
        if is_follow_through_held(pose):
            session.follow_through_frames += 1
        else:
            session.follow_through_open = False

    def _track_airborne(self, pose: PoseFrame, phase: ShotPhase, timestamp_ms: int) -> None:
        session = self.session

        if is_airborne_phase(phase):
            if session.airborne_started_ms is None:
                session.airborne_started_ms = timestamp_ms
                session.peak_jump_cm = 0
            session.peak_jump_cm = max(
                session.peak_jump_cm, jump_height(pose, session.hip_baseline_y)
            )
            return

        if ends_airborne(phase) and session.airborne_started_ms is not None:
            airtime = calculate_airtime(session.airborne_started_ms, timestamp_ms)
            session.last_airtime_ms = airtime

            latest = session.latest_shot
            if latest is not None and not latest.completed:
                latest.jump_height_cm = session.peak_jump_cm
                latest.airtime_ms = airtime
                latest.follow_through_score = self._follow_through_score()
                latest.completed = True
                logger.debug(
                    f"Shot {latest.shot_number} landed: airtime={airtime}ms "
                    f"jump={latest.jump_height_cm}cm follow_through={latest.follow_through_score}"
                )

            session.airborne_started_ms = None
            session.peak_jump_cm = 0
            session.follow_through_open = False

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _follow_through_score(self) -> int:
        return get_follow_through_score(
            self.session.follow_through_frames,
            self.follow_through_target_frames,
        )

    def _wrist_velocity(
        self,
        pose: PoseFrame,
        previous_pose: Optional[PoseFrame],
        shooting_hand,
        timestamp_ms: int,
    ) -> float:
        last_ms = self.session.last_timestamp_ms
        if previous_pose is None or last_ms is None:
            return 0.0
        wrist_part = side_part(shooting_hand, "wrist")
        return joint_velocity(pose[wrist_part], previous_pose[wrist_part], timestamp_ms - last_ms)

    def _neutral_metrics(self, raw_pose: Optional[PoseFrame]) -> FrameMetrics:
        session = self.session
        return FrameMetrics(
            timestamp_ms=raw_pose.timestamp_ms if raw_pose is not None else 0,
            frame_number=raw_pose.frame_number if raw_pose is not None else 0,
            previous_phase=session.previous_phase,
            consistency=get_shot_consistency_score(session.snapshots),
            shot_count=session.shot_count,
        )
