"""
Landmark Smoother

Exponential moving average over consecutive poses, applied before any
metric is computed to suppress detector jitter.
"""

from typing import Optional

from ..domain.pose import PoseFrame, PoseLandmark


# Higher reacts faster, lower is steadier
SMOOTHING_ALPHA = 0.5


def _blend(previous: Optional[float], raw: Optional[float], alpha: float) -> Optional[float]:
    if previous is None or raw is None:
        return raw
    return previous + (raw - previous) * alpha


def smooth_landmarks(
    previous: Optional[PoseFrame],
    raw: PoseFrame,
    alpha: float = SMOOTHING_ALPHA,
) -> PoseFrame:
    """
    Smooth a raw pose against the previous smoothed pose.

    Each coordinate becomes ``prev + (raw - prev) * alpha``. Visibility is
    taken from the raw frame as-is. Without a usable previous pose (first
    frame, truncated frame, different landmark count) the raw pose is
    returned unchanged.
    """
    if (
        previous is None
        or not previous.is_complete
        or not raw.is_complete
        or len(previous.landmarks) != len(raw.landmarks)
    ):
        return raw

    landmarks = [
        PoseLandmark(
            x=_blend(prev.x, cur.x, alpha),
            y=_blend(prev.y, cur.y, alpha),
            z=_blend(prev.z, cur.z, alpha),
            visibility=cur.visibility,
            body_part=cur.body_part,
        )
        for prev, cur in zip(previous.landmarks, raw.landmarks)
    ]

    return PoseFrame(
        landmarks=landmarks,
        timestamp_ms=raw.timestamp_ms,
        frame_number=raw.frame_number,
    )
