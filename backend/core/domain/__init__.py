"""
Domain Models

Pure data structures representing basketball shot analysis concepts.
No external dependencies - just Python dataclasses and enums.
"""

from .analysis import (
    ShotPhase,
    Handedness,
    HandednessResult,
    ShotSnapshot,
    JointAngles,
    ShotRecord,
    FrameMetrics,
    SessionSummary,
    score_band,
)
from .pose import PoseLandmark, PoseFrame, BodyPart, POSE_LANDMARK_COUNT, is_complete_pose
from .session import TrackingSession

__all__ = [
    "PoseLandmark",
    "PoseFrame",
    "BodyPart",
    "POSE_LANDMARK_COUNT",
    "is_complete_pose",
    "ShotPhase",
    "Handedness",
    "HandednessResult",
    "ShotSnapshot",
    "JointAngles",
    "ShotRecord",
    "FrameMetrics",
    "SessionSummary",
    "score_band",
    "TrackingSession",
]
