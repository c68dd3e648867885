"""
Posture Evaluator Service

Inspects the current pose and returns at most one coaching cue.

Checks run in severity order and the first match wins, so only one cue
can fire per frame. The shooting side is taken instantaneously from the
higher wrist.
"""

from enum import Enum
from typing import Optional

from ..domain.pose import BodyPart, PoseFrame, is_complete_pose
from .angle_calculator import AngleCalculator
from .handedness import detect_shooting_hand


class PostureCue(str, Enum):
    """Posture problems, most critical first."""
    OPEN_ELBOW = "open_elbow"
    BEND_LEGS = "bend_legs"
    GUIDE_HAND_HIGH = "guide_hand_high"
    SHOULDERS_UNBALANCED = "shoulders_unbalanced"
    RAISE_SET_POINT = "raise_set_point"
    SNAP_WRIST = "snap_wrist"
    WIDEN_STANCE = "widen_stance"


CUE_TEXT: dict[str, dict[PostureCue, str]] = {
    "en": {
        PostureCue.OPEN_ELBOW: "Open your elbow, line it up under the ball",
        PostureCue.BEND_LEGS: "Bend your knees, use your legs for power",
        PostureCue.GUIDE_HAND_HIGH: "Guide hand too high, relax it at the top",
        PostureCue.SHOULDERS_UNBALANCED: "Shoulders uneven, stay square to the rim",
        PostureCue.RAISE_SET_POINT: "Raise your set point, elbow at eye level",
        PostureCue.SNAP_WRIST: "Snap your wrist, leave your hand in the basket",
        PostureCue.WIDEN_STANCE: "Widen your stance, feet shoulder-width apart",
    },
    "fr": {
        PostureCue.OPEN_ELBOW: "Ouvre ton coude, aligne-le sous le ballon",
        PostureCue.BEND_LEGS: "Fléchis tes appuis, utilise tes jambes pour la puissance",
        PostureCue.GUIDE_HAND_HIGH: "Main guide trop haute, relâche-la au sommet",
        PostureCue.SHOULDERS_UNBALANCED: "Épaules déséquilibrées, reste carré face à l'arceau",
        PostureCue.RAISE_SET_POINT: "Monte ton point de départ, coude à hauteur des yeux",
        PostureCue.SNAP_WRIST: "Fouette ton poignet, laisse ta main dans l'arceau",
        PostureCue.WIDEN_STANCE: "Écarte tes pieds, largeur d'épaules",
    },
}

DEFAULT_LOCALE = "en"


def cue_text(cue: PostureCue, locale: str = DEFAULT_LOCALE) -> str:
    """Localized wording for a cue; unknown locales fall back to English."""
    return CUE_TEXT.get(locale, CUE_TEXT[DEFAULT_LOCALE])[cue]


class PostureEvaluator:
    """
    Ordered posture checklist.

    Usage:
        evaluator = PostureEvaluator(locale="fr")
        cue = evaluator.get_feedback(pose)   # str or None

    Thresholds are class constants and can be overridden per instance
    through keyword arguments.
    """

    # -------------------------------------------------------------------------
    # Thresholds (degrees / normalized units)
    # -------------------------------------------------------------------------

    MIN_SHOOTING_ELBOW_ANGLE = 45.0
    STRAIGHT_LEGS_KNEE_ANGLE = 172.0
    GUIDE_ELBOW_EXTENDED_ANGLE = 155.0
    MAX_SHOULDER_TILT = 0.07
    SET_POINT_BELOW_NOSE = 0.04
    WRIST_FLEX_MAX_ANGLE = 160.0
    WRIST_REFERENCE_OFFSET = 0.1
    MIN_STANCE_RATIO = 0.6

    def __init__(self, locale: str = DEFAULT_LOCALE, **thresholds: float):
        self.locale = locale
        for name, value in thresholds.items():
            if not hasattr(self, name.upper()):
                raise ValueError(f"Unknown posture threshold: {name}")
            setattr(self, name.upper(), value)

    def evaluate(self, pose: Optional[PoseFrame]) -> Optional[PostureCue]:
        """
        Run the checklist and return the first failing check.

        Returns:
            The most critical PostureCue, or None if posture is acceptable
            (or there is no pose)
        """
        if not is_complete_pose(pose):
            return None

        shooting_hand = detect_shooting_hand(pose)
        guide_hand = shooting_hand.opposite

        shoulder, elbow, wrist = pose.arm(shooting_hand)
        guide_shoulder, guide_elbow, guide_wrist = pose.arm(guide_hand)
        nose = pose[BodyPart.NOSE]

        elbow_angle = AngleCalculator.calculate_angle_3d(shoulder, elbow, wrist)
        knee_angle = AngleCalculator.average_knee_angle(pose, use_depth=True)

        is_shooting = wrist.y < shoulder.y

        # 1. Elbow collapsed during the shot
        if is_shooting and elbow_angle < self.MIN_SHOOTING_ELBOW_ANGLE:
            return PostureCue.OPEN_ELBOW

        # 2. Ball up, legs straight: no leg drive
        if (
            not is_shooting
            and knee_angle > self.STRAIGHT_LEGS_KNEE_ANGLE
            and wrist.y < pose.hip_mid_y
        ):
            return PostureCue.BEND_LEGS

        # 3. Guide hand pushing the ball
        if is_shooting and guide_wrist.y < guide_shoulder.y:
            guide_elbow_angle = AngleCalculator.calculate_angle_3d(
                guide_shoulder, guide_elbow, guide_wrist
            )
            if guide_elbow_angle > self.GUIDE_ELBOW_EXTENDED_ANGLE:
                return PostureCue.GUIDE_HAND_HIGH

        # 4. Shoulders not square
        if is_shooting and AngleCalculator.shoulder_tilt(pose) > self.MAX_SHOULDER_TILT:
            return PostureCue.SHOULDERS_UNBALANCED

        # 5. Set point too low
        if is_shooting and elbow.y > nose.y + self.SET_POINT_BELOW_NOSE:
            return PostureCue.RAISE_SET_POINT

        # 6. No wrist snap
        if is_shooting and wrist.y < elbow.y:
            wrist_angle = AngleCalculator.calculate_vertical_reference_angle(
                elbow, wrist, self.WRIST_REFERENCE_OFFSET
            )
            if wrist_angle > self.WRIST_FLEX_MAX_ANGLE:
                return PostureCue.SNAP_WRIST

        # 7. Feet too close together
        if (
            not is_shooting
            and AngleCalculator.stance_width(pose)
            < AngleCalculator.shoulder_width(pose) * self.MIN_STANCE_RATIO
        ):
            return PostureCue.WIDEN_STANCE

        return None

    def get_feedback(self, pose: Optional[PoseFrame]) -> Optional[str]:
        """Localized text of the first failing check, or None."""
        cue = self.evaluate(pose)
        if cue is None:
            return None
        return cue_text(cue, self.locale)


# =============================================================================
# Convenience function for quick usage
# =============================================================================

def get_posture_feedback(pose: Optional[PoseFrame], locale: str = DEFAULT_LOCALE) -> Optional[str]:
    """
    Quick function returning the coaching cue for one pose.

    Usage:
        cue = get_posture_feedback(pose)
        if cue:
            speak(cue)
    """
    return PostureEvaluator(locale=locale).get_feedback(pose)
