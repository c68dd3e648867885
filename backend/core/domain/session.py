"""
Tracking Session

Rolling state for one live camera feed. The engine functions are pure;
everything they need across frames lives here and is owned by the caller.
Two feeds means two sessions.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from .analysis import Handedness, ShotPhase, ShotRecord, ShotSnapshot
from .pose import PoseFrame


MAX_HANDEDNESS_VOTES = 20
MAX_SHOT_SNAPSHOTS = 10
MAX_SHOT_RECORDS = 100


@dataclass
class TrackingSession:
    """
    Caller-owned state threaded through each per-frame call.

    Attributes:
        smoothed_pose: Last EMA-smoothed pose (smoother input and velocity reference)
        previous_phase: Phase of the last frame with a pose
        votes: Handedness vote history (latest MAX_HANDEDNESS_VOTES)
        snapshots: Release snapshots (latest MAX_SHOT_SNAPSHOTS)
        shots: Shot records (latest MAX_SHOT_RECORDS; older ones are dropped
            so a long-lived connection stays bounded)
        shot_count: Shots detected since the last reset, including dropped records
        dip_started_ms / dip_ended_ms: Bounds of the latest DIP phase
        airborne_started_ms: Start of the current RELEASE/FOLLOW_THROUGH window
        hip_baseline_y: Standing hip height used for jump height
        peak_jump_cm: Highest jump seen in the current airborne window
        follow_through_frames: Held frames since the latest release
        follow_through_open: Whether the follow-through counter is still running
        last_timestamp_ms: Timestamp of the last frame with a pose
        last_airtime_ms: Airtime of the last completed airborne window
    """
    smoothed_pose: Optional[PoseFrame] = None
    previous_phase: ShotPhase = ShotPhase.IDLE
    votes: list[Handedness] = field(default_factory=list)
    snapshots: deque = field(default_factory=lambda: deque(maxlen=MAX_SHOT_SNAPSHOTS))
    shots: deque = field(default_factory=lambda: deque(maxlen=MAX_SHOT_RECORDS))
    shot_count: int = 0

    dip_started_ms: Optional[int] = None
    dip_ended_ms: Optional[int] = None
    airborne_started_ms: Optional[int] = None

    hip_baseline_y: Optional[float] = None
    peak_jump_cm: int = 0

    follow_through_frames: int = 0
    follow_through_open: bool = False

    last_timestamp_ms: Optional[int] = None
    last_airtime_ms: int = 0

    @property
    def latest_shot(self) -> Optional[ShotRecord]:
        return self.shots[-1] if self.shots else None

    def add_snapshot(self, snapshot: ShotSnapshot) -> None:
        self.snapshots.append(snapshot)

    def add_shot(self, record: ShotRecord) -> None:
        self.shots.append(record)
        self.shot_count += 1

    def reset(self) -> None:
        """Forget everything, as if the session had just started."""
        self.smoothed_pose = None
        self.previous_phase = ShotPhase.IDLE
        self.votes = []
        self.snapshots = deque(maxlen=MAX_SHOT_SNAPSHOTS)
        self.shots = deque(maxlen=MAX_SHOT_RECORDS)
        self.shot_count = 0
        self.dip_started_ms = None
        self.dip_ended_ms = None
        self.airborne_started_ms = None
        self.hip_baseline_y = None
        self.peak_jump_cm = 0
        self.follow_through_frames = 0
        self.follow_through_open = False
        self.last_timestamp_ms = None
        self.last_airtime_ms = 0
