"""
Handedness Resolver

Two ways to answer "which hand is shooting":

- detect_shooting_hand: instantaneous, from the current frame only.
  Low latency, used by the per-frame evaluators.
- update_handedness_vote: rolling majority over the latest votes.
  Low noise, used for the player's dominant-hand label.
"""

from typing import Optional, Sequence

from ..domain.analysis import Handedness, HandednessResult
from ..domain.pose import BodyPart, PoseFrame, is_complete_pose
from ..domain.session import MAX_HANDEDNESS_VOTES


def detect_shooting_hand(pose: PoseFrame) -> Handedness:
    """The higher wrist on screen (smaller y) is the shooting hand."""
    if pose[BodyPart.RIGHT_WRIST].y < pose[BodyPart.LEFT_WRIST].y:
        return Handedness.RIGHT
    return Handedness.LEFT


def update_handedness_vote(
    pose: Optional[PoseFrame],
    prior_votes: Sequence[Handedness],
    max_votes: int = MAX_HANDEDNESS_VOTES,
) -> HandednessResult:
    """
    Add this frame's vote and resolve the dominant hand.

    Args:
        pose: Current pose; an absent pose casts no vote
        prior_votes: Votes returned by the previous call
        max_votes: History bound

    Returns:
        HandednessResult whose ``votes`` the caller must keep and pass back
    """
    votes = [Handedness(v) for v in prior_votes]
    if is_complete_pose(pose):
        votes.append(detect_shooting_hand(pose))
    votes = votes[-max_votes:] if max_votes > 0 else []

    if not votes:
        return HandednessResult(hand=Handedness.RIGHT, confidence=0, votes=())

    right_count = sum(1 for v in votes if v is Handedness.RIGHT)
    left_count = len(votes) - right_count

    hand = Handedness.RIGHT if right_count >= left_count else Handedness.LEFT
    confidence = round(max(right_count, left_count) / len(votes) * 100)

    return HandednessResult(hand=hand, confidence=confidence, votes=tuple(votes))
