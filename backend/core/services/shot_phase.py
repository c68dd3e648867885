"""
Shot Phase Detection

Classifies each frame into a shot phase from knee angle and wrist height.
The classifier keeps no state: callers detect transitions by comparing
consecutive results.
"""

from typing import Optional

from ..domain.analysis import ShotPhase
from ..domain.pose import BodyPart, PoseFrame, is_complete_pose
from .angle_calculator import AngleCalculator
from .handedness import detect_shooting_hand


DIP_KNEE_ANGLE = 140.0
EXTENDED_KNEE_ANGLE = 165.0
SET_BAND_BELOW_NOSE = 0.1
RELEASE_ABOVE_NOSE = 0.15

# Dip duration mapped onto explosivity: fast dips score 100, slow ones 0
FAST_DIP_MS = 200
SLOW_DIP_MS = 1000

AIRBORNE_PHASES = frozenset({ShotPhase.RELEASE, ShotPhase.FOLLOW_THROUGH})
GROUNDED_PHASES = frozenset({ShotPhase.IDLE, ShotPhase.DIP})


def get_shot_phase(pose: Optional[PoseFrame]) -> ShotPhase:
    """
    Detect the current phase of the shooting motion.

    Checked in priority order, first match wins:
    - DIP: knees bent below 140° with the wrist under the shoulder line
    - SET: wrist within 0.1 below the nose (just under eye level)
    - RELEASE: wrist more than 0.15 above the nose
    - FOLLOW_THROUGH: legs extended, wrist between shoulder and nose
    - IDLE: anything else, or no pose
    """
    if not is_complete_pose(pose):
        return ShotPhase.IDLE

    shooting_hand = detect_shooting_hand(pose)
    shoulder, _, wrist = pose.arm(shooting_hand)
    nose = pose[BodyPart.NOSE]

    knee_angle = AngleCalculator.average_knee_angle(pose)

    if knee_angle < DIP_KNEE_ANGLE and wrist.y > shoulder.y:
        return ShotPhase.DIP
    if nose.y - SET_BAND_BELOW_NOSE <= wrist.y < nose.y:
        return ShotPhase.SET
    if wrist.y < nose.y - RELEASE_ABOVE_NOSE:
        return ShotPhase.RELEASE
    if knee_angle > EXTENDED_KNEE_ANGLE and nose.y < wrist.y < shoulder.y:
        return ShotPhase.FOLLOW_THROUGH

    return ShotPhase.IDLE


def is_release_transition(previous: ShotPhase, current: ShotPhase) -> bool:
    """A shot is taken on the frame that enters RELEASE."""
    return current is ShotPhase.RELEASE and previous is not ShotPhase.RELEASE


def is_airborne_phase(phase: ShotPhase) -> bool:
    return phase in AIRBORNE_PHASES


def ends_airborne(phase: ShotPhase) -> bool:
    return phase in GROUNDED_PHASES


def get_explosivity_score(dip_duration_ms: Optional[float]) -> int:
    """
    Explosivity from the time spent in the dip before the release.

    Shorter dip means more explosive. Returns 0 when no dip was observed.
    """
    if dip_duration_ms is None or dip_duration_ms <= 0:
        return 0

    score = 100 * (SLOW_DIP_MS - dip_duration_ms) / (SLOW_DIP_MS - FAST_DIP_MS)
    return max(0, min(100, round(score)))
