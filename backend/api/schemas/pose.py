"""
Pose API Schemas

Pydantic models for landmark input and WebSocket messages.
These define the JSON structure for communication with the frontend,
which runs the pose detector in the browser and streams landmarks here.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from core.domain.pose import PoseFrame


class LandmarkSchema(BaseModel):
    """
    Single body landmark as delivered by the pose detector.

    Coordinates are normalized (0.0 to 1.0) but may fall slightly outside
    the frame when a joint is off-screen.
    """
    x: float = Field(..., allow_inf_nan=False, description="Horizontal position (0=left, 1=right)")
    y: float = Field(..., allow_inf_nan=False, description="Vertical position (0=top, 1=bottom)")
    z: Optional[float] = Field(None, allow_inf_nan=False, description="Depth (negative=closer to camera)")
    visibility: Optional[float] = Field(None, ge=0.0, le=1.0, description="Detection confidence")

    class Config:
        json_schema_extra = {
            "example": {
                "x": 0.45,
                "y": 0.32,
                "z": -0.15,
                "visibility": 0.95,
            }
        }


class PoseFrameSchema(BaseModel):
    """
    Landmarks for one frame.

    A full pose has 33 landmarks in MediaPipe order; an empty or shorter
    list means nobody was detected.
    """
    landmarks: List[LandmarkSchema] = Field(default_factory=list, description="33 body landmarks")
    timestamp_ms: int = Field(0, ge=0, description="Capture timestamp in milliseconds")
    frame_number: int = Field(0, ge=0, description="Sequential frame number")

    class Config:
        json_schema_extra = {
            "example": {
                "landmarks": [
                    {"x": 0.5, "y": 0.2, "z": 0.0, "visibility": 0.99}
                ],
                "timestamp_ms": 1500,
                "frame_number": 45,
            }
        }

    def to_domain(self) -> PoseFrame:
        """Convert to the domain PoseFrame."""
        return PoseFrame.from_dicts(
            [lm.model_dump() for lm in self.landmarks],
            timestamp_ms=self.timestamp_ms,
            frame_number=self.frame_number,
        )


# =============================================================================
# WebSocket Message Schemas
# =============================================================================

class WebSocketMessageType(str, Enum):
    """Types of WebSocket messages."""
    # Client -> Server
    FRAME = "frame"                        # Landmarks for one camera frame
    RESET_SESSION = "reset_session"        # Forget shots and rolling state
    END_SESSION = "end_session"            # Request summary and close

    # Server -> Client
    SESSION_STARTED = "session_started"
    FRAME_RESULT = "frame_result"          # Per-frame metrics
    SHOT_DETECTED = "shot_detected"        # A release was detected
    COACHING_CUE = "coaching_cue"          # Throttled cue for the voice layer
    SESSION_RESET = "session_reset"
    SESSION_SUMMARY = "session_summary"
    ERROR = "error"                        # Error message


class WebSocketMessage(BaseModel):
    """
    Base WebSocket message structure.

    All WebSocket communication uses this format.
    """
    type: WebSocketMessageType = Field(..., description="Message type")
    data: dict = Field(default_factory=dict, description="Message payload")
    timestamp: int = Field(0, description="Unix timestamp in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "frame",
                "data": {"landmarks": [], "frame_number": 0},
                "timestamp": 1704067200000
            }
        }


class FrameMessage(BaseModel):
    """
    WebSocket payload containing one frame of landmarks.

    Sent from frontend to backend for every processed camera frame.
    """
    landmarks: List[LandmarkSchema] = Field(default_factory=list, description="Detected landmarks")
    frame_number: int = Field(0, ge=0, description="Frame sequence number")
