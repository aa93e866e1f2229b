"""
Default Humanoid Figure

Builds the stick figure used by the GUI and the export script.

Coordinate system (1 unit = 1 meter):
- Z is height (higher value is higher up)
- X is into/away from the screen in the front view
- Y is left/right in the front view
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, List

from .joint import Joint, Shape
from .shapes import regular_polygon
from ..config import FigureConfig


@dataclass(frozen=True)
class PoseControl:
    """Binding between a UI control and one rotation component of a joint."""
    label: str
    joint: str
    axis: str
    min_degrees: float = -180.0
    max_degrees: float = 180.0


POSE_CONTROLS: List[PoseControl] = [
    PoseControl("Spin around axis", "center", "z"),
    PoseControl("Torso sideward", "back", "x"),
    PoseControl("Torso forward", "back", "y"),
    PoseControl("Left knee", "left_lower_leg", "y"),
    PoseControl("Right knee", "right_lower_leg", "y"),
    PoseControl("Left elbow", "left_lower_arm", "y"),
    PoseControl("Right elbow", "right_lower_arm", "y"),
]


def _leg(side: str, sign: float, config: FigureConfig) -> Joint:
    hip = Joint(f"{side}_hip", config.hip_length, (sign * 2.0, 0.0, 0.0))
    upper = hip.add_child(
        Joint(f"{side}_upper_leg", config.upper_leg_length, (sign * 0.25 * np.pi, 0.0, 0.0))
    )
    upper.add_child(Joint(f"{side}_lower_leg", config.lower_leg_length))
    return hip


def _arm(side: str, sign: float, config: FigureConfig) -> Joint:
    shoulder = Joint(f"{side}_shoulder", config.shoulder_length, (sign * 0.5 * np.pi, 0.0, 0.0))
    upper = shoulder.add_child(
        Joint(f"{side}_upper_arm", config.upper_arm_length, (sign * 1.0, 0.0, 0.0))
    )
    lower = upper.add_child(
        Joint(f"{side}_lower_arm", config.lower_arm_length, (sign * 1.0, 0.0, 0.0))
    )
    lower.add_child(Joint(
        f"{side}_hand",
        0.0,
        shape=Shape.POLYGON,
        polygon=regular_polygon(config.polygon_sides, config.hand_radius),
    ))
    return shoulder


def build_humanoid(config: Optional[FigureConfig] = None) -> Joint:
    """
    Build the default humanoid skeleton.

    The root is a zero-length 'center' joint at the pelvis. The back hangs
    off the center and carries the head, and both shoulders; both hips hang
    off the center.

    Args:
        config: Figure proportions; defaults to FigureConfig()

    Returns:
        Root joint of the (not yet propagated) skeleton
    """
    if config is None:
        config = FigureConfig()

    center = Joint("center", 0.0)

    back = center.add_child(Joint("back", config.back_length, (0.1, 0.1, 0.1)))
    back.add_child(Joint(
        "head",
        config.neck_length,
        shape=Shape.POLYGON,
        polygon=regular_polygon(config.polygon_sides, config.head_radius),
    ))

    center.add_child(_leg("left", -1.0, config))
    center.add_child(_leg("right", +1.0, config))

    back.add_child(_arm("left", -1.0, config))
    back.add_child(_arm("right", +1.0, config))

    return center
