"""
Pose Quality Scorer

Single 0-100 "form" score from fixed penalties. Used for the live HUD
and as the per-shot quality value.
"""

from typing import Optional

from ..domain.pose import PoseFrame, is_complete_pose
from .angle_calculator import AngleCalculator
from .handedness import detect_shooting_hand


# (threshold, penalty) brackets, worst first; only the first match applies
ELBOW_LOW_PENALTIES = ((70.0, 25), (80.0, 10))
ELBOW_HIGH_PENALTY = (120.0, 15)
KNEE_STRAIGHT_PENALTIES = ((170.0, 20), (165.0, 10))
SHOULDER_TILT_PENALTIES = ((0.08, 15), (0.05, 5))
NARROW_STANCE_PENALTY = (0.6, 10)


def get_pose_score(pose: Optional[PoseFrame]) -> int:
    """
    Score the shooting form on a single frame.

    Starts at 100 and subtracts:
    - shooting elbow < 70° (-25), else < 80° (-10), else > 120° (-15)
    - average knee > 170° (-20), else > 165° (-10)
    - stance narrower than 0.6x shoulder width (-10)
    - shoulder tilt > 0.08 (-15), else > 0.05 (-5)

    Returns:
        Integer score clamped to [0, 100]; 0 when there is no pose
    """
    if not is_complete_pose(pose):
        return 0

    score = 100
    shooting_hand = detect_shooting_hand(pose)

    elbow_angle = AngleCalculator.calculate_elbow_angle(pose, shooting_hand)
    knee_angle = AngleCalculator.average_knee_angle(pose)

    # Elbow (ideal: 85-95°)
    for threshold, penalty in ELBOW_LOW_PENALTIES:
        if elbow_angle < threshold:
            score -= penalty
            break
    else:
        if elbow_angle > ELBOW_HIGH_PENALTY[0]:
            score -= ELBOW_HIGH_PENALTY[1]

    # Straight legs (ideal: 130-160°)
    for threshold, penalty in KNEE_STRAIGHT_PENALTIES:
        if knee_angle > threshold:
            score -= penalty
            break

    # Narrow stance
    ratio, penalty = NARROW_STANCE_PENALTY
    if AngleCalculator.stance_width(pose) < AngleCalculator.shoulder_width(pose) * ratio:
        score -= penalty

    # Shoulder tilt
    tilt = AngleCalculator.shoulder_tilt(pose)
    for threshold, penalty in SHOULDER_TILT_PENALTIES:
        if tilt > threshold:
            score -= penalty
            break

    return max(0, min(100, score))
