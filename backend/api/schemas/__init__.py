"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    LandmarkSchema,
    PoseFrameSchema,
    WebSocketMessageType,
    WebSocketMessage,
    FrameMessage,
)

from .analysis import (
    ShotPhaseEnum,
    HandednessEnum,
    ScoreBandEnum,
    JointAnglesSchema,
    HandednessSchema,
    ShotSnapshotSchema,
    ShotRecordSchema,
    FrameMetricsSchema,
    SessionSummarySchema,
    PoseAnalysisResponse,
    AnalyzeSessionRequest,
    SessionAnalysisResponse,
    HealthResponse,
)

__all__ = [
    # Pose schemas
    "LandmarkSchema",
    "PoseFrameSchema",
    "WebSocketMessageType",
    "WebSocketMessage",
    "FrameMessage",
    # Analysis schemas
    "ShotPhaseEnum",
    "HandednessEnum",
    "ScoreBandEnum",
    "JointAnglesSchema",
    "HandednessSchema",
    "ShotSnapshotSchema",
    "ShotRecordSchema",
    "FrameMetricsSchema",
    "SessionSummarySchema",
    "PoseAnalysisResponse",
    "AnalyzeSessionRequest",
    "SessionAnalysisResponse",
    "HealthResponse",
]
