"""
Pose Domain Models

Data structures for representing human body pose landmarks
delivered by the pose source (MediaPipe Pose topology).

MediaPipe Pose returns 33 landmarks:
https://developers.google.com/mediapipe/solutions/vision/pose_landmarker
"""
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

from .analysis import Handedness


POSE_LANDMARK_COUNT = 33


class BodyPart(IntEnum):
    """
    MediaPipe Pose landmark indices.

    These map directly to MediaPipe's 33-point pose model.
    Everything in the engine addresses landmarks through this enum.
    """
    # Face
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10

    # Upper body
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16

    # Hands (grip / ball-in-hand heuristic)
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22

    # Lower body
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28

    # Feet
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


# Per-side lookup used by the shooting-hand / guide-hand helpers
_SIDE_PARTS = {
    Handedness.RIGHT: {
        "shoulder": BodyPart.RIGHT_SHOULDER,
        "elbow": BodyPart.RIGHT_ELBOW,
        "wrist": BodyPart.RIGHT_WRIST,
        "index": BodyPart.RIGHT_INDEX,
        "eye": BodyPart.RIGHT_EYE,
        "hip": BodyPart.RIGHT_HIP,
        "knee": BodyPart.RIGHT_KNEE,
        "ankle": BodyPart.RIGHT_ANKLE,
    },
    Handedness.LEFT: {
        "shoulder": BodyPart.LEFT_SHOULDER,
        "elbow": BodyPart.LEFT_ELBOW,
        "wrist": BodyPart.LEFT_WRIST,
        "index": BodyPart.LEFT_INDEX,
        "eye": BodyPart.LEFT_EYE,
        "hip": BodyPart.LEFT_HIP,
        "knee": BodyPart.LEFT_KNEE,
        "ankle": BodyPart.LEFT_ANKLE,
    },
}


def side_part(side: Handedness, name: str) -> BodyPart:
    """Resolve a side-relative body part name ("wrist", "eye", ...) to its index."""
    return _SIDE_PARTS[side][name]


@dataclass
class PoseLandmark:
    """
    A single body landmark with optional depth and visibility.

    Attributes:
        x: Horizontal position (0.0 = left edge, 1.0 = right edge)
        y: Vertical position (0.0 = top edge, 1.0 = bottom edge)
        z: Relative depth (smaller = closer to camera), None if not reported
        visibility: Confidence score (0.0 to 1.0), None if not reported
        body_part: Which body part this landmark represents

    Note:
        Coordinates are normalized to image dimensions.
        To get pixel coordinates: pixel_x = x * image_width
    """
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = None
    body_part: Optional[BodyPart] = None

    def is_visible(self, threshold: float = 0.5) -> bool:
        """Check if landmark is visible above confidence threshold."""
        if self.visibility is None:
            return True
        return self.visibility >= threshold

    def to_pixel(self, width: int, height: int) -> tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))

    def distance_to(self, other: "PoseLandmark") -> float:
        """Euclidean distance to another landmark in the image plane (z ignored)."""
        return (
            (self.x - other.x) ** 2 +
            (self.y - other.y) ** 2
        ) ** 0.5


@dataclass
class PoseFrame:
    """
    A complete pose for a single video frame.

    Attributes:
        landmarks: List of 33 body landmarks (fewer means "no pose")
        timestamp_ms: Capture timestamp in milliseconds
        frame_number: Sequential frame number
    """
    landmarks: list[PoseLandmark]
    timestamp_ms: int = 0
    frame_number: int = 0

    @classmethod
    def from_dicts(
        cls,
        landmarks: Iterable[dict],
        timestamp_ms: int = 0,
        frame_number: int = 0,
    ) -> "PoseFrame":
        """Build a frame from plain {"x", "y", "z", "visibility"} mappings."""
        converted = []
        for i, lm in enumerate(landmarks):
            try:
                body_part = BodyPart(i)
            except ValueError:
                body_part = None
            converted.append(PoseLandmark(
                x=float(lm["x"]),
                y=float(lm["y"]),
                z=lm.get("z"),
                visibility=lm.get("visibility"),
                body_part=body_part,
            ))
        return cls(landmarks=converted, timestamp_ms=timestamp_ms, frame_number=frame_number)

    @property
    def is_complete(self) -> bool:
        """True when the full 33-point topology is present with finite x/y."""
        if len(self.landmarks) < POSE_LANDMARK_COUNT:
            return False
        return all(
            math.isfinite(lm.x) and math.isfinite(lm.y)
            for lm in self.landmarks[:POSE_LANDMARK_COUNT]
        )

    @property
    def confidence(self) -> float:
        """Average visibility of the landmarks that report one."""
        values = [lm.visibility for lm in self.landmarks if lm.visibility is not None]
        if not values:
            return 0.0
        return sum(values) / len(values)

    def get_landmark(self, body_part: BodyPart) -> Optional[PoseLandmark]:
        """Get a specific landmark by body part."""
        index = body_part.value
        if 0 <= index < len(self.landmarks):
            return self.landmarks[index]
        return None

    def __getitem__(self, body_part: BodyPart) -> PoseLandmark:
        return self.landmarks[body_part]

    def get_visible_landmarks(self, threshold: float = 0.5) -> list[PoseLandmark]:
        """Get all landmarks above visibility threshold."""
        return [lm for lm in self.landmarks if lm.is_visible(threshold)]

    # -------------------------------------------------------------------------
    # Convenience methods for common landmark groups
    # -------------------------------------------------------------------------

    def arm(self, side: Handedness) -> tuple[PoseLandmark, PoseLandmark, PoseLandmark]:
        """Get arm landmarks (shoulder, elbow, wrist) for one side."""
        return (
            self[side_part(side, "shoulder")],
            self[side_part(side, "elbow")],
            self[side_part(side, "wrist")],
        )

    def leg(self, side: Handedness) -> tuple[PoseLandmark, PoseLandmark, PoseLandmark]:
        """Get leg landmarks (hip, knee, ankle) for one side."""
        return (
            self[side_part(side, "hip")],
            self[side_part(side, "knee")],
            self[side_part(side, "ankle")],
        )

    @property
    def hip_mid_y(self) -> float:
        """Vertical midpoint of the hips."""
        return (self[BodyPart.LEFT_HIP].y + self[BodyPart.RIGHT_HIP].y) / 2

    @property
    def ankle_mid_y(self) -> float:
        """Vertical midpoint of the ankles."""
        return (self[BodyPart.LEFT_ANKLE].y + self[BodyPart.RIGHT_ANKLE].y) / 2


def is_complete_pose(pose: Optional[PoseFrame]) -> bool:
    """Shared guard: None or a truncated frame counts as "no pose"."""
    return pose is not None and pose.is_complete
