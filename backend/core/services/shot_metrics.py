"""
Shot Metrics

Secondary scores: body stability, shot-to-shot consistency and
follow-through persistence, plus the snapshot captured at release.
"""

from typing import Optional, Sequence

import numpy as np

from ..domain.analysis import ShotSnapshot
from ..domain.pose import PoseFrame, is_complete_pose, side_part
from .angle_calculator import AngleCalculator
from .handedness import detect_shooting_hand


SHOULDER_TILT_WEIGHT = 800
HIP_TILT_WEIGHT = 500

CONSISTENCY_WINDOW = 5
CONSISTENCY_DEVIATION_WEIGHT = 3

FOLLOW_THROUGH_TARGET_FRAMES = 15

RELEASE_REFERENCE_OFFSET = -0.1  # point straight above the wrist


def _clamp_score(value: float) -> int:
    return int(max(0, min(100, round(value))))


# =============================================================================
# Stability
# =============================================================================

def get_stability_score(pose: Optional[PoseFrame]) -> int:
    """
    Balance from shoulder and hip levelness.

    0 = unstable, 100 = perfectly balanced.
    """
    if not is_complete_pose(pose):
        return 0

    score = (
        100
        - AngleCalculator.shoulder_tilt(pose) * SHOULDER_TILT_WEIGHT
        - AngleCalculator.hip_tilt(pose) * HIP_TILT_WEIGHT
    )
    return _clamp_score(score)


# =============================================================================
# Consistency
# =============================================================================

def create_shot_snapshot(pose: PoseFrame, timestamp_ms: Optional[int] = None) -> ShotSnapshot:
    """
    Capture the key shooting-side angles at the moment of release.

    The release angle is the forearm measured against vertical.
    """
    shooting_hand = detect_shooting_hand(pose)
    _, elbow, wrist = pose.arm(shooting_hand)

    return ShotSnapshot(
        elbow_angle=AngleCalculator.calculate_elbow_angle(pose, shooting_hand),
        knee_angle=AngleCalculator.calculate_knee_angle(pose, shooting_hand),
        release_angle=AngleCalculator.calculate_vertical_reference_angle(
            elbow, wrist, RELEASE_REFERENCE_OFFSET
        ),
        wrist_x=wrist.x,
        wrist_y=wrist.y,
        timestamp_ms=pose.timestamp_ms if timestamp_ms is None else timestamp_ms,
    )


def get_shot_consistency_score(snapshots: Sequence[ShotSnapshot]) -> int:
    """
    Compare the latest shots against each other.

    Averages the absolute shot-to-shot change of elbow, knee and release
    angle over the last five snapshots. Fewer than two shots count as
    perfectly consistent.
    """
    recent = list(snapshots)[-CONSISTENCY_WINDOW:]
    if len(recent) < 2:
        return 100

    angles = np.array([
        [s.elbow_angle, s.knee_angle, s.release_angle] for s in recent
    ])
    avg_deviation = float(np.abs(np.diff(angles, axis=0)).mean())

    return _clamp_score(100 - avg_deviation * CONSISTENCY_DEVIATION_WEIGHT)


# =============================================================================
# Follow-through
# =============================================================================

def is_follow_through_held(pose: Optional[PoseFrame]) -> bool:
    """Shooting wrist still above the same-side eye."""
    if not is_complete_pose(pose):
        return False

    shooting_hand = detect_shooting_hand(pose)
    wrist = pose[side_part(shooting_hand, "wrist")]
    eye = pose[side_part(shooting_hand, "eye")]
    return wrist.y < eye.y


def get_follow_through_score(
    frames_held: int,
    target_frames: int = FOLLOW_THROUGH_TARGET_FRAMES,
) -> int:
    """Share of the target hold duration reached, capped at 100."""
    if target_frames <= 0:
        return 100 if frames_held > 0 else 0
    return min(100, round(frames_held / target_frames * 100))
