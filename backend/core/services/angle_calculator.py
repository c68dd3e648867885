"""
Angle Calculator Service

Geometry primitives for body angles used in shot analysis.
All angles are calculated in degrees (0-180).

This is pure mathematics - no external dependencies except numpy.
"""

import math
from typing import Optional, Tuple
import numpy as np

from ..domain.pose import PoseLandmark, PoseFrame, BodyPart
from ..domain.analysis import Handedness, JointAngles


class AngleCalculator:
    """
    Calculates biomechanical angles from pose landmarks.

    Shot-specific measurements include:
    - Elbow angles (shooting arm and guide arm)
    - Knee flex
    - Shoulder and hip tilt
    - Stance and shoulder width

    All methods are static - no state needed. Every method is total:
    degenerate geometry returns 0 instead of NaN.
    """

    # -------------------------------------------------------------------------
    # Core Angle Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_angle(
        a: PoseLandmark,
        b: PoseLandmark,  # Vertex point
        c: PoseLandmark
    ) -> float:
        """
        Calculate angle at b formed by a-b-c in the image plane.

        Uses the difference of the atan2 bearings of rays b->a and b->c,
        folded into [0, 180].

        Args:
            a: First point
            b: Vertex point (where angle is measured)
            c: Third point

        Returns:
            Angle in degrees (0-180); 0 if either ray has zero length

        Example:
            For elbow angle: shoulder -> elbow -> wrist
            angle = calculate_angle(shoulder, elbow, wrist)
        """
        if (a.x == b.x and a.y == b.y) or (c.x == b.x and c.y == b.y):
            return 0.0

        radians = math.atan2(c.y - b.y, c.x - b.x) - math.atan2(a.y - b.y, a.x - b.x)
        angle = abs(math.degrees(radians))

        # Reflex angle -> interior angle
        if angle > 180.0:
            angle = 360.0 - angle

        return angle

    @staticmethod
    def calculate_angle_3d(
        a: PoseLandmark,
        b: PoseLandmark,
        c: PoseLandmark
    ) -> float:
        """
        Calculate 3D angle at b formed by a-b-c.

        Same as calculate_angle but includes z for depth when all three
        points report a finite one; otherwise falls back to the 2D bearing
        formula.
        """
        depths = (a.z, b.z, c.z)
        if any(z is None or not math.isfinite(z) for z in depths):
            return AngleCalculator.calculate_angle(a, b, c)

        v1 = np.array([a.x - b.x, a.y - b.y, a.z - b.z])
        v2 = np.array([c.x - b.x, c.y - b.y, c.z - b.z])

        norm = np.linalg.norm(v1) * np.linalg.norm(v2)
        if norm == 0:
            return 0.0

        cos_angle = np.clip(np.dot(v1, v2) / norm, -1.0, 1.0)

        return float(np.degrees(np.arccos(cos_angle)))

    # -------------------------------------------------------------------------
    # Shot-Specific Angle Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_elbow_angle(
        frame: PoseFrame,
        side: Handedness = Handedness.RIGHT,
        use_depth: bool = False,
    ) -> float:
        """
        Calculate elbow bend angle.

        Args:
            frame: Pose frame with landmarks
            side: Which arm
            use_depth: Use the 3D formula when z is available

        Returns:
            Elbow angle in degrees (180 = straight arm, 90 = right angle)
        """
        shoulder, elbow, wrist = frame.arm(side)
        if use_depth:
            return AngleCalculator.calculate_angle_3d(shoulder, elbow, wrist)
        return AngleCalculator.calculate_angle(shoulder, elbow, wrist)

    @staticmethod
    def calculate_knee_angle(
        frame: PoseFrame,
        side: Handedness = Handedness.RIGHT,
        use_depth: bool = False,
    ) -> float:
        """
        Calculate knee flex angle.

        Returns:
            Knee angle in degrees (180 = straight leg, 90 = deep squat)
        """
        hip, knee, ankle = frame.leg(side)
        if use_depth:
            return AngleCalculator.calculate_angle_3d(hip, knee, ankle)
        return AngleCalculator.calculate_angle(hip, knee, ankle)

    @classmethod
    def average_knee_angle(cls, frame: PoseFrame, use_depth: bool = False) -> float:
        """Mean of left and right knee angles."""
        return (
            cls.calculate_knee_angle(frame, Handedness.LEFT, use_depth) +
            cls.calculate_knee_angle(frame, Handedness.RIGHT, use_depth)
        ) / 2

    @staticmethod
    def calculate_vertical_reference_angle(
        elbow: PoseLandmark,
        wrist: PoseLandmark,
        offset: float,
    ) -> float:
        """
        Angle at the wrist between the forearm and a point straight above
        (negative offset) or below (positive offset) the wrist.
        """
        reference = PoseLandmark(x=wrist.x, y=wrist.y + offset, z=wrist.z)
        return AngleCalculator.calculate_angle(elbow, wrist, reference)

    @staticmethod
    def shoulder_tilt(frame: PoseFrame) -> float:
        """Absolute height difference between the shoulders."""
        return abs(frame[BodyPart.LEFT_SHOULDER].y - frame[BodyPart.RIGHT_SHOULDER].y)

    @staticmethod
    def hip_tilt(frame: PoseFrame) -> float:
        """Absolute height difference between the hips."""
        return abs(frame[BodyPart.LEFT_HIP].y - frame[BodyPart.RIGHT_HIP].y)

    @classmethod
    def stance_width(cls, frame: PoseFrame) -> float:
        return cls.calculate_distance(frame[BodyPart.LEFT_ANKLE], frame[BodyPart.RIGHT_ANKLE])

    @classmethod
    def shoulder_width(cls, frame: PoseFrame) -> float:
        return cls.calculate_distance(frame[BodyPart.LEFT_SHOULDER], frame[BodyPart.RIGHT_SHOULDER])

    # -------------------------------------------------------------------------
    # Complete Frame Analysis
    # -------------------------------------------------------------------------

    @classmethod
    def calculate_all_angles(
        cls,
        frame: PoseFrame,
        shooting_hand: Handedness = Handedness.RIGHT,
    ) -> JointAngles:
        """
        Calculate all shot-relevant angles for a frame.

        Args:
            frame: Complete PoseFrame
            shooting_hand: Side whose elbow is reported as the shooting elbow

        Returns:
            JointAngles with every measurement for the HUD
        """
        left_elbow = cls.calculate_elbow_angle(frame, Handedness.LEFT)
        right_elbow = cls.calculate_elbow_angle(frame, Handedness.RIGHT)
        left_knee = cls.calculate_knee_angle(frame, Handedness.LEFT)
        right_knee = cls.calculate_knee_angle(frame, Handedness.RIGHT)

        return JointAngles(
            left_elbow=left_elbow,
            right_elbow=right_elbow,
            left_knee=left_knee,
            right_knee=right_knee,
            average_knee=(left_knee + right_knee) / 2,
            shooting_elbow=right_elbow if shooting_hand is Handedness.RIGHT else left_elbow,
            shoulder_tilt=cls.shoulder_tilt(frame),
            hip_tilt=cls.hip_tilt(frame),
        )

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_distance(p1: Optional[PoseLandmark], p2: Optional[PoseLandmark]) -> float:
        """Calculate 2D distance between two landmarks (z ignored)."""
        if p1 is None or p2 is None:
            return 0.0
        return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)

    @staticmethod
    def calculate_midpoint(
        p1: Optional[PoseLandmark],
        p2: Optional[PoseLandmark]
    ) -> Optional[Tuple[float, float]]:
        """Calculate midpoint between two landmarks."""
        if p1 is None or p2 is None:
            return None
        return ((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


# =============================================================================
# Module-level shorthands
# =============================================================================

angle = AngleCalculator.calculate_angle
angle_3d = AngleCalculator.calculate_angle_3d
distance = AngleCalculator.calculate_distance
