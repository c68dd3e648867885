"""
Shot Analysis Domain Models

Data structures for representing basketball shot analysis results,
including phases, handedness, per-shot snapshots and per-frame metrics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ShotPhase(str, Enum):
    """
    The phases of a jump shot, recomputed every frame.

    Each phase has specific biomechanical characteristics:
    - IDLE: No shooting motion detected
    - DIP: Knees loaded, ball below the shoulder line
    - SET: Ball just below eye level, set point
    - RELEASE: Shooting wrist clearly above the eye line
    - FOLLOW_THROUGH: Legs extended, wrist between shoulder and nose
    """
    IDLE = "IDLE"
    DIP = "DIP"
    SET = "SET"
    RELEASE = "RELEASE"
    FOLLOW_THROUGH = "FOLLOW_THROUGH"


class Handedness(str, Enum):
    """Shooting hand."""
    RIGHT = "right"
    LEFT = "left"

    @property
    def opposite(self) -> "Handedness":
        return Handedness.LEFT if self is Handedness.RIGHT else Handedness.RIGHT


def score_band(score: int) -> str:
    """Map a 0-100 score to the HUD colour band."""
    if score >= 80:
        return "good"
    elif score >= 50:
        return "fair"
    else:
        return "poor"


@dataclass(frozen=True)
class HandednessResult:
    """
    Rolling-vote handedness estimate.

    Attributes:
        hand: Dominant (shooting) hand
        confidence: Share of votes for the dominant hand, 0-100
        votes: Most recent votes (bounded), owned and re-supplied by the caller
    """
    hand: Handedness
    confidence: int
    votes: tuple[Handedness, ...] = ()


@dataclass(frozen=True)
class ShotSnapshot:
    """
    Key angles captured at the moment a release is detected.

    All angles in degrees (0-180); wrist position normalized.
    """
    elbow_angle: float
    knee_angle: float
    release_angle: float
    wrist_x: float
    wrist_y: float
    timestamp_ms: int


@dataclass
class JointAngles:
    """
    Key angles measured on a single frame.

    All angles are in degrees (0-180); tilts are normalized
    vertical differences between left and right landmarks.
    """
    left_elbow: float = 0.0
    right_elbow: float = 0.0
    left_knee: float = 0.0
    right_knee: float = 0.0
    average_knee: float = 0.0
    shooting_elbow: float = 0.0
    shoulder_tilt: float = 0.0
    hip_tilt: float = 0.0


@dataclass
class ShotRecord:
    """
    One detected shot, as shown in the shot history.

    Created on the transition into RELEASE. Jump height, airtime and
    follow-through are filled in once the airborne window closes.
    """
    shot_number: int
    timestamp_ms: int
    pose_score: int
    stability: int
    explosivity: int
    snapshot: ShotSnapshot
    jump_height_cm: int = 0
    airtime_ms: int = 0
    follow_through_score: int = 0
    completed: bool = False

    @property
    def band(self) -> str:
        return score_band(self.pose_score)


@dataclass
class FrameMetrics:
    """
    Everything the engine derives from one frame.

    This is the bundle handed to the presentation / voice layer.
    A frame without a usable pose yields the neutral values.
    """
    timestamp_ms: int
    frame_number: int
    pose_present: bool = False
    phase: ShotPhase = ShotPhase.IDLE
    previous_phase: ShotPhase = ShotPhase.IDLE
    shot_detected: bool = False
    cue: Optional[str] = None
    pose_score: int = 0
    stability: int = 0
    consistency: int = 100
    follow_through_score: int = 0
    explosivity: int = 0
    jump_height_cm: int = 0
    airtime_ms: int = 0
    wrist_velocity: float = 0.0
    ball_in_hand: bool = False
    shot_count: int = 0
    handedness: Optional[HandednessResult] = None
    angles: Optional[JointAngles] = None


@dataclass
class SessionSummary:
    """Aggregate view of a tracking session, sampled from its shot records."""
    shot_count: int = 0
    average_pose_score: float = 0.0
    average_stability: float = 0.0
    average_explosivity: float = 0.0
    best_jump_height_cm: int = 0
    consistency: int = 100
    dominant_hand: Handedness = Handedness.RIGHT
    hand_confidence: int = 0
    shots: list[ShotRecord] = field(default_factory=list)

    @property
    def best_shot(self) -> Optional[ShotRecord]:
        """Highest pose-score shot, if any."""
        if not self.shots:
            return None
        return max(self.shots, key=lambda s: s.pose_score)
