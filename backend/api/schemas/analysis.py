"""
Analysis API Schemas

Pydantic models for shot analysis API requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from core.domain.analysis import (
    FrameMetrics,
    HandednessResult,
    JointAngles,
    SessionSummary,
    ShotRecord,
    ShotSnapshot,
    score_band,
)

from .pose import PoseFrameSchema


class ShotPhaseEnum(str, Enum):
    """Shot phases for API."""
    IDLE = "IDLE"
    DIP = "DIP"
    SET = "SET"
    RELEASE = "RELEASE"
    FOLLOW_THROUGH = "FOLLOW_THROUGH"


class HandednessEnum(str, Enum):
    """Shooting hand for API."""
    RIGHT = "right"
    LEFT = "left"


class ScoreBandEnum(str, Enum):
    """HUD colour band of a 0-100 score."""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class JointAnglesSchema(BaseModel):
    """
    Joint angles measured on one frame.

    Angles in degrees, tilts in normalized units.
    """
    left_elbow: float = Field(0.0, description="Left elbow angle")
    right_elbow: float = Field(0.0, description="Right elbow angle")
    left_knee: float = Field(0.0, description="Left knee angle")
    right_knee: float = Field(0.0, description="Right knee angle")
    average_knee: float = Field(0.0, description="Mean of both knees")
    shooting_elbow: float = Field(0.0, description="Elbow angle on the shooting side")
    shoulder_tilt: float = Field(0.0, description="Vertical offset between shoulders")
    hip_tilt: float = Field(0.0, description="Vertical offset between hips")

    class Config:
        json_schema_extra = {
            "example": {
                "right_elbow": 90.0,
                "average_knee": 150.3,
                "shooting_elbow": 90.0,
                "shoulder_tilt": 0.01,
            }
        }

    @classmethod
    def from_domain(cls, angles: JointAngles) -> "JointAnglesSchema":
        return cls(
            left_elbow=angles.left_elbow,
            right_elbow=angles.right_elbow,
            left_knee=angles.left_knee,
            right_knee=angles.right_knee,
            average_knee=angles.average_knee,
            shooting_elbow=angles.shooting_elbow,
            shoulder_tilt=angles.shoulder_tilt,
            hip_tilt=angles.hip_tilt,
        )


class HandednessSchema(BaseModel):
    """
    Rolling-vote handedness estimate.
    """
    hand: HandednessEnum = Field(..., description="Dominant shooting hand")
    confidence: int = Field(..., ge=0, le=100, description="Share of votes for that hand")
    votes: List[HandednessEnum] = Field(default_factory=list, description="Vote history to send back")

    @classmethod
    def from_domain(cls, result: HandednessResult) -> "HandednessSchema":
        return cls(
            hand=HandednessEnum(result.hand.value),
            confidence=result.confidence,
            votes=[HandednessEnum(v.value) for v in result.votes],
        )


class ShotSnapshotSchema(BaseModel):
    """
    Key angles captured at release.
    """
    elbow_angle: float = Field(..., description="Shooting elbow (degrees)")
    knee_angle: float = Field(..., description="Shooting-side knee (degrees)")
    release_angle: float = Field(..., description="Forearm against vertical (degrees)")
    wrist_x: float = Field(..., description="Wrist position at release")
    wrist_y: float = Field(..., description="Wrist height at release")
    timestamp_ms: int = Field(..., description="Release timestamp")

    @classmethod
    def from_domain(cls, snapshot: ShotSnapshot) -> "ShotSnapshotSchema":
        return cls(
            elbow_angle=snapshot.elbow_angle,
            knee_angle=snapshot.knee_angle,
            release_angle=snapshot.release_angle,
            wrist_x=snapshot.wrist_x,
            wrist_y=snapshot.wrist_y,
            timestamp_ms=snapshot.timestamp_ms,
        )


class ShotRecordSchema(BaseModel):
    """
    One entry of the shot history.
    """
    shot_number: int = Field(..., ge=1, description="1-based shot index in the session")
    timestamp_ms: int = Field(..., description="Release timestamp")
    pose_score: int = Field(..., ge=0, le=100, description="Form score at release")
    band: ScoreBandEnum = Field(..., description="HUD colour band of the form score")
    stability: int = Field(..., ge=0, le=100, description="Balance at release")
    explosivity: int = Field(..., ge=0, le=100, description="Speed of the preceding dip")
    jump_height_cm: int = Field(0, ge=0, description="Peak jump height")
    airtime_ms: int = Field(0, ge=0, description="Time between release and landing")
    follow_through_score: int = Field(0, ge=0, le=100, description="How long the follow-through was held")
    completed: bool = Field(False, description="Whether the landing was observed")
    snapshot: ShotSnapshotSchema = Field(..., description="Angles at release")

    class Config:
        json_schema_extra = {
            "example": {
                "shot_number": 3,
                "timestamp_ms": 48210,
                "pose_score": 85,
                "band": "good",
                "stability": 92,
                "explosivity": 70,
                "jump_height_cm": 21,
                "airtime_ms": 420,
                "follow_through_score": 80,
                "completed": True,
            }
        }

    @classmethod
    def from_domain(cls, record: ShotRecord) -> "ShotRecordSchema":
        return cls(
            shot_number=record.shot_number,
            timestamp_ms=record.timestamp_ms,
            pose_score=record.pose_score,
            band=ScoreBandEnum(record.band),
            stability=record.stability,
            explosivity=record.explosivity,
            jump_height_cm=record.jump_height_cm,
            airtime_ms=record.airtime_ms,
            follow_through_score=record.follow_through_score,
            completed=record.completed,
            snapshot=ShotSnapshotSchema.from_domain(record.snapshot),
        )


class FrameMetricsSchema(BaseModel):
    """
    Everything derived from one frame.

    This is the main per-frame payload for the HUD and voice layer.
    """
    timestamp_ms: int = Field(..., description="Frame timestamp")
    frame_number: int = Field(..., description="Frame number")
    pose_present: bool = Field(..., description="Whether a full pose was available")
    phase: ShotPhaseEnum = Field(..., description="Current shot phase")
    previous_phase: ShotPhaseEnum = Field(..., description="Phase of the previous frame with a pose")
    shot_detected: bool = Field(False, description="A release was detected on this frame")
    cue: Optional[str] = Field(None, description="Most critical posture cue, if any")
    pose_score: int = Field(..., ge=0, le=100, description="Form score")
    band: ScoreBandEnum = Field(..., description="HUD colour band of the form score")
    stability: int = Field(..., ge=0, le=100)
    consistency: int = Field(..., ge=0, le=100)
    follow_through_score: int = Field(..., ge=0, le=100)
    explosivity: int = Field(..., ge=0, le=100)
    jump_height_cm: int = Field(..., ge=0)
    airtime_ms: int = Field(..., ge=0)
    wrist_velocity: float = Field(..., ge=0.0, description="Shooting wrist speed (units/ms)")
    ball_in_hand: bool = Field(False, description="Grip heuristic")
    shot_count: int = Field(..., ge=0)
    handedness: Optional[HandednessSchema] = None
    angles: Optional[JointAnglesSchema] = None

    @classmethod
    def from_domain(cls, metrics: FrameMetrics) -> "FrameMetricsSchema":
        return cls(
            timestamp_ms=metrics.timestamp_ms,
            frame_number=metrics.frame_number,
            pose_present=metrics.pose_present,
            phase=ShotPhaseEnum(metrics.phase.value),
            previous_phase=ShotPhaseEnum(metrics.previous_phase.value),
            shot_detected=metrics.shot_detected,
            cue=metrics.cue,
            pose_score=metrics.pose_score,
            band=ScoreBandEnum(score_band(metrics.pose_score)),
            stability=metrics.stability,
            consistency=metrics.consistency,
            follow_through_score=metrics.follow_through_score,
            explosivity=metrics.explosivity,
            jump_height_cm=metrics.jump_height_cm,
            airtime_ms=metrics.airtime_ms,
            wrist_velocity=metrics.wrist_velocity,
            ball_in_hand=metrics.ball_in_hand,
            shot_count=metrics.shot_count,
            handedness=(
                HandednessSchema.from_domain(metrics.handedness)
                if metrics.handedness else None
            ),
            angles=JointAnglesSchema.from_domain(metrics.angles) if metrics.angles else None,
        )


class SessionSummarySchema(BaseModel):
    """
    Aggregate of a tracking session.
    """
    shot_count: int = Field(0, ge=0)
    average_pose_score: float = Field(0.0, ge=0.0, le=100.0)
    average_stability: float = Field(0.0, ge=0.0, le=100.0)
    average_explosivity: float = Field(0.0, ge=0.0, le=100.0)
    best_jump_height_cm: int = Field(0, ge=0)
    consistency: int = Field(100, ge=0, le=100)
    dominant_hand: HandednessEnum = HandednessEnum.RIGHT
    hand_confidence: int = Field(0, ge=0, le=100)
    best_shot: Optional[int] = Field(None, description="shot_number of the best-scoring shot")
    shots: List[ShotRecordSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, summary: SessionSummary) -> "SessionSummarySchema":
        best = summary.best_shot
        return cls(
            shot_count=summary.shot_count,
            average_pose_score=summary.average_pose_score,
            average_stability=summary.average_stability,
            average_explosivity=summary.average_explosivity,
            best_jump_height_cm=summary.best_jump_height_cm,
            consistency=summary.consistency,
            dominant_hand=HandednessEnum(summary.dominant_hand.value),
            hand_confidence=summary.hand_confidence,
            best_shot=best.shot_number if best else None,
            shots=[ShotRecordSchema.from_domain(s) for s in summary.shots],
        )


# =============================================================================
# Requests / Responses
# =============================================================================

class PoseAnalysisResponse(BaseModel):
    """
    Stateless analysis of a single frame.
    """
    pose_present: bool = Field(..., description="Whether a full pose was supplied")
    phase: ShotPhaseEnum = Field(..., description="Shot phase of this pose")
    cue: Optional[str] = Field(None, description="Most critical posture cue")
    pose_score: int = Field(..., ge=0, le=100)
    band: ScoreBandEnum = Field(...)
    stability: int = Field(..., ge=0, le=100)
    shooting_hand: Optional[HandednessEnum] = Field(None, description="Higher wrist on this frame")
    ball_in_hand: bool = False
    angles: Optional[JointAnglesSchema] = None

    class Config:
        json_schema_extra = {
            "example": {
                "pose_present": True,
                "phase": "SET",
                "cue": None,
                "pose_score": 100,
                "band": "good",
                "stability": 100,
                "shooting_hand": "right",
                "ball_in_hand": True,
            }
        }


class AnalyzeSessionRequest(BaseModel):
    """
    Request to analyze a recorded sequence of landmark frames.

    Used when the frontend uploads a whole clip's landmarks at once.
    """
    frames: List[PoseFrameSchema] = Field(..., description="Frames in capture order")
    locale: Optional[str] = Field(None, description="Cue language (defaults to server setting)")


class SessionAnalysisResponse(BaseModel):
    """
    Per-frame metrics plus the session summary.
    """
    frames: List[FrameMetricsSchema] = Field(default_factory=list)
    summary: SessionSummarySchema


class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
