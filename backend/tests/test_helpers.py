"""
Test Helper Utilities

Landmark factories for hand-built shooting poses. Coordinates are chosen
so the key angles come out exact:

- SET pose: right elbow 90°, knees 150°, right wrist just under the nose
- DIP pose: knees 120°, wrists at hip level
- RELEASE pose: right wrist well above the nose, legs straight
- IDLE pose: arms down, legs straight
"""
from typing import Dict, List, Optional, Tuple

from core.domain.pose import BodyPart, PoseFrame, POSE_LANDMARK_COUNT


Point = Tuple[float, float]


# ========================================
# Body segments
# ========================================

HEAD: Dict[BodyPart, Point] = {
    BodyPart.NOSE: (0.50, 0.20),
    BodyPart.LEFT_EYE_INNER: (0.51, 0.19),
    BodyPart.LEFT_EYE: (0.52, 0.19),
    BodyPart.LEFT_EYE_OUTER: (0.53, 0.19),
    BodyPart.RIGHT_EYE_INNER: (0.49, 0.19),
    BodyPart.RIGHT_EYE: (0.48, 0.19),
    BodyPart.RIGHT_EYE_OUTER: (0.47, 0.19),
    BodyPart.LEFT_EAR: (0.55, 0.20),
    BodyPart.RIGHT_EAR: (0.45, 0.20),
    BodyPart.MOUTH_LEFT: (0.52, 0.23),
    BodyPart.MOUTH_RIGHT: (0.48, 0.23),
}

SHOULDERS: Dict[BodyPart, Point] = {
    BodyPart.LEFT_SHOULDER: (0.60, 0.30),
    BodyPart.RIGHT_SHOULDER: (0.40, 0.30),
}

HIPS: Dict[BodyPart, Point] = {
    BodyPart.LEFT_HIP: (0.56, 0.55),
    BodyPart.RIGHT_HIP: (0.44, 0.55),
}

# Right arm at the set point (elbow exactly 90°), guide arm low
ARMS_SET: Dict[BodyPart, Point] = {
    BodyPart.RIGHT_ELBOW: (0.34, 0.22),
    BodyPart.RIGHT_WRIST: (0.42, 0.16),
    BodyPart.RIGHT_PINKY: (0.43, 0.13),
    BodyPart.RIGHT_INDEX: (0.44, 0.12),
    BodyPart.RIGHT_THUMB: (0.40, 0.14),
    BodyPart.LEFT_ELBOW: (0.64, 0.40),
    BodyPart.LEFT_WRIST: (0.60, 0.50),
    BodyPart.LEFT_PINKY: (0.60, 0.53),
    BodyPart.LEFT_INDEX: (0.60, 0.53),
    BodyPart.LEFT_THUMB: (0.60, 0.53),
}

# Right arm extended above the head
ARMS_RELEASE: Dict[BodyPart, Point] = {
    **ARMS_SET,
    BodyPart.RIGHT_ELBOW: (0.40, 0.14),
    BodyPart.RIGHT_WRIST: (0.43, 0.04),
    BodyPart.RIGHT_PINKY: (0.44, 0.01),
    BodyPart.RIGHT_INDEX: (0.44, 0.00),
    BodyPart.RIGHT_THUMB: (0.42, 0.01),
}

# Right wrist between nose and shoulder
ARMS_FOLLOW_THROUGH: Dict[BodyPart, Point] = {
    **ARMS_SET,
    BodyPart.RIGHT_ELBOW: (0.36, 0.20),
    BodyPart.RIGHT_WRIST: (0.43, 0.25),
    BodyPart.RIGHT_PINKY: (0.45, 0.28),
    BodyPart.RIGHT_INDEX: (0.45, 0.28),
    BodyPart.RIGHT_THUMB: (0.45, 0.28),
}

# Both arms hanging, right wrist marginally higher
ARMS_DOWN: Dict[BodyPart, Point] = {
    BodyPart.RIGHT_ELBOW: (0.38, 0.42),
    BodyPart.RIGHT_WRIST: (0.38, 0.52),
    BodyPart.RIGHT_PINKY: (0.38, 0.56),
    BodyPart.RIGHT_INDEX: (0.38, 0.56),
    BodyPart.RIGHT_THUMB: (0.38, 0.56),
    BodyPart.LEFT_ELBOW: (0.62, 0.42),
    BodyPart.LEFT_WRIST: (0.62, 0.53),
    BodyPart.LEFT_PINKY: (0.62, 0.57),
    BodyPart.LEFT_INDEX: (0.62, 0.57),
    BodyPart.LEFT_THUMB: (0.62, 0.57),
}

# Knees at 150°
LEGS_FLEXED: Dict[BodyPart, Point] = {
    BodyPart.LEFT_KNEE: (0.56, 0.75),
    BodyPart.RIGHT_KNEE: (0.44, 0.75),
    BodyPart.LEFT_ANKLE: (0.66, 0.9232),
    BodyPart.RIGHT_ANKLE: (0.34, 0.9232),
    BodyPart.LEFT_HEEL: (0.67, 0.94),
    BodyPart.RIGHT_HEEL: (0.33, 0.94),
    BodyPart.LEFT_FOOT_INDEX: (0.70, 0.95),
    BodyPart.RIGHT_FOOT_INDEX: (0.30, 0.95),
}

# Knees at 120°
LEGS_DIP: Dict[BodyPart, Point] = {
    BodyPart.LEFT_KNEE: (0.56, 0.75),
    BodyPart.RIGHT_KNEE: (0.44, 0.75),
    BodyPart.LEFT_ANKLE: (0.7332, 0.85),
    BodyPart.RIGHT_ANKLE: (0.2668, 0.85),
    BodyPart.LEFT_HEEL: (0.74, 0.87),
    BodyPart.RIGHT_HEEL: (0.26, 0.87),
    BodyPart.LEFT_FOOT_INDEX: (0.77, 0.88),
    BodyPart.RIGHT_FOOT_INDEX: (0.23, 0.88),
}

# Hip, knee and ankle collinear (180°), feet 0.20 apart
LEGS_STRAIGHT: Dict[BodyPart, Point] = {
    BodyPart.LEFT_KNEE: (0.58, 0.75),
    BodyPart.RIGHT_KNEE: (0.42, 0.75),
    BodyPart.LEFT_ANKLE: (0.60, 0.95),
    BodyPart.RIGHT_ANKLE: (0.40, 0.95),
    BodyPart.LEFT_HEEL: (0.60, 0.97),
    BodyPart.RIGHT_HEEL: (0.40, 0.97),
    BodyPart.LEFT_FOOT_INDEX: (0.63, 0.98),
    BodyPart.RIGHT_FOOT_INDEX: (0.37, 0.98),
}

# Knees about 166°, feet only 0.06 apart
LEGS_NARROW: Dict[BodyPart, Point] = {
    BodyPart.LEFT_KNEE: (0.52, 0.75),
    BodyPart.RIGHT_KNEE: (0.48, 0.75),
    BodyPart.LEFT_ANKLE: (0.53, 0.95),
    BodyPart.RIGHT_ANKLE: (0.47, 0.95),
    BodyPart.LEFT_HEEL: (0.53, 0.97),
    BodyPart.RIGHT_HEEL: (0.47, 0.97),
    BodyPart.LEFT_FOOT_INDEX: (0.54, 0.98),
    BodyPart.RIGHT_FOOT_INDEX: (0.46, 0.98),
}


SET_POSE = {**HEAD, **SHOULDERS, **ARMS_SET, **HIPS, **LEGS_FLEXED}
DIP_POSE = {**HEAD, **SHOULDERS, **ARMS_DOWN, **HIPS, **LEGS_DIP}
RELEASE_POSE = {**HEAD, **SHOULDERS, **ARMS_RELEASE, **HIPS, **LEGS_STRAIGHT}
FOLLOW_THROUGH_POSE = {**HEAD, **SHOULDERS, **ARMS_FOLLOW_THROUGH, **HIPS, **LEGS_STRAIGHT}
IDLE_POSE = {**HEAD, **SHOULDERS, **ARMS_DOWN, **HIPS, **LEGS_STRAIGHT}


# ========================================
# Pose Data Generators
# ========================================

def create_landmarks(
    points: Dict[BodyPart, Point],
    overrides: Optional[Dict[BodyPart, Point]] = None,
    dy: float = 0.0,
    z: Optional[float] = 0.0,
    visibility: Optional[float] = 0.99,
) -> List[Dict[str, float]]:
    """
    Build the 33 landmark dicts for a pose.

    Args:
        points: Position of every body part
        overrides: Body parts to move
        dy: Vertical shift applied to the whole body (negative = up)
        z: Depth given to every landmark (None to omit it)
        visibility: Visibility given to every landmark

    Returns:
        List[Dict]: MediaPipe-style landmark list
    """
    merged = {**points, **(overrides or {})}
    landmarks = []
    for i in range(POSE_LANDMARK_COUNT):
        x, y = merged[BodyPart(i)]
        landmarks.append({"x": x, "y": y + dy, "z": z, "visibility": visibility})
    return landmarks


def create_pose(
    points: Dict[BodyPart, Point] = SET_POSE,
    overrides: Optional[Dict[BodyPart, Point]] = None,
    timestamp_ms: int = 0,
    frame_number: int = 0,
    dy: float = 0.0,
    z: Optional[float] = 0.0,
) -> PoseFrame:
    """Build a domain PoseFrame (defaults to the right-handed set point)."""
    return PoseFrame.from_dicts(
        create_landmarks(points, overrides, dy=dy, z=z),
        timestamp_ms=timestamp_ms,
        frame_number=frame_number,
    )


def mirror_landmarks(landmarks: List[Dict[str, float]]) -> List[Dict[str, float]]:
    """Swap left and right body parts, turning a right-hander into a left-hander."""
    mirrored = [dict(lm) for lm in landmarks]
    for part in BodyPart:
        name = part.name
        if name.startswith("LEFT_"):
            other = BodyPart[name.replace("LEFT_", "RIGHT_", 1)]
            left, right = landmarks[part], landmarks[other]
            mirrored[part] = {**right, "x": 1.0 - right["x"]}
            mirrored[other] = {**left, "x": 1.0 - left["x"]}
    mirrored[BodyPart.NOSE] = {**landmarks[BodyPart.NOSE], "x": 1.0 - landmarks[BodyPart.NOSE]["x"]}
    return mirrored


def frame_message(landmarks: List[Dict[str, float]], timestamp: int, frame_number: int = 0) -> dict:
    """WebSocket frame message as sent by the frontend."""
    return {
        "type": "frame",
        "data": {"landmarks": landmarks, "frame_number": frame_number},
        "timestamp": timestamp,
    }
