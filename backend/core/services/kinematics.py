"""
Kinematic Estimators

Physical estimates derived from landmark motion: joint velocity,
jump height, airtime, and a pose-only ball-in-hand heuristic.
"""

from typing import Optional

from ..domain.pose import BodyPart, PoseFrame, PoseLandmark, is_complete_pose, side_part
from .angle_calculator import AngleCalculator
from .handedness import detect_shooting_hand


# Average adult height, used to scale normalized units to centimeters
REFERENCE_BODY_HEIGHT_CM = 175
FALLBACK_BODY_HEIGHT_UNITS = 0.5

BALL_IN_HAND_SPREAD_RATIO = 0.25
MIN_ARM_LENGTH_UNITS = 0.01


def joint_velocity(
    current: PoseLandmark,
    previous: Optional[PoseLandmark],
    dt_ms: float,
) -> float:
    """
    Speed of one landmark between two samples.

    Returns:
        Normalized screen units per millisecond; 0 without a previous
        sample or elapsed time
    """
    if previous is None or dt_ms <= 0:
        return 0.0
    return AngleCalculator.calculate_distance(current, previous) / dt_ms


def jump_height(pose: Optional[PoseFrame], initial_hip_y: Optional[float]) -> int:
    """
    Estimate jump height in centimeters from hip rise.

    Hip displacement is scaled by body height on screen (nose to ankles),
    assuming an average adult height.

    Args:
        pose: Current pose
        initial_hip_y: Standing hip height (normalized)

    Returns:
        Rounded height in cm; 0 if the hips are not above the baseline
    """
    if not is_complete_pose(pose) or initial_hip_y is None:
        return 0

    displacement = initial_hip_y - pose.hip_mid_y
    if displacement <= 0:
        return 0

    body_height = abs(pose[BodyPart.NOSE].y - pose.ankle_mid_y) or FALLBACK_BODY_HEIGHT_UNITS
    cm_per_unit = REFERENCE_BODY_HEIGHT_CM / body_height
    return round(displacement * cm_per_unit)


def calculate_airtime(start_ms: Optional[float], end_ms: Optional[float]) -> int:
    """Elapsed time between take-off and landing; never negative."""
    if start_ms is None or end_ms is None:
        return 0
    return int(max(0, end_ms - start_ms))


def detect_ball_in_hand(pose: Optional[PoseFrame]) -> bool:
    """
    Guess whether the shooter is gripping the ball.

    Spread fingers push the index fingertip away from the wrist; the ratio
    to forearm-plus-upper-arm reach separates a grip from a relaxed hand.
    No object detection involved.
    """
    if not is_complete_pose(pose):
        return False

    shooting_hand = detect_shooting_hand(pose)
    wrist = pose[side_part(shooting_hand, "wrist")]
    shoulder = pose[side_part(shooting_hand, "shoulder")]
    index = pose[side_part(shooting_hand, "index")]

    reach = AngleCalculator.calculate_distance(wrist, shoulder) or MIN_ARM_LENGTH_UNITS
    spread = AngleCalculator.calculate_distance(wrist, index)

    return spread / reach > BALL_IN_HAND_SPREAD_RATIO and wrist.y < pose.hip_mid_y
