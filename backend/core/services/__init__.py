"""
Services Layer

Business logic services for basketball shot analysis.
These services operate on domain models and never touch I/O.
"""

from .angle_calculator import AngleCalculator
from .landmark_smoother import smooth_landmarks
from .handedness import detect_shooting_hand, update_handedness_vote
from .posture_evaluator import PostureCue, PostureEvaluator, cue_text, get_posture_feedback
from .pose_scorer import get_pose_score
from .shot_phase import get_shot_phase, get_explosivity_score, is_release_transition
from .shot_metrics import (
    get_stability_score,
    create_shot_snapshot,
    get_shot_consistency_score,
    is_follow_through_held,
    get_follow_through_score,
)
from .kinematics import joint_velocity, jump_height, calculate_airtime, detect_ball_in_hand
from .shot_analyzer import ShotAnalyzer

__all__ = [
    "AngleCalculator",
    "smooth_landmarks",
    "detect_shooting_hand",
    "update_handedness_vote",
    "PostureCue",
    "PostureEvaluator",
    "cue_text",
    "get_posture_feedback",
    "get_pose_score",
    "get_shot_phase",
    "get_explosivity_score",
    "is_release_transition",
    "get_stability_score",
    "create_shot_snapshot",
    "get_shot_consistency_score",
    "is_follow_through_held",
    "get_follow_through_score",
    "joint_velocity",
    "jump_height",
    "calculate_airtime",
    "detect_ball_in_hand",
    "ShotAnalyzer",
]
